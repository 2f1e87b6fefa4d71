from dataclasses import asdict, fields, is_dataclass
from typing import Any, TypeVar

T = TypeVar("T")


class EntityMixin:
    @classmethod
    def from_dict(cls: type[T], data: dict[str, Any]) -> T:
        """
        Crea una instancia de la entidad a partir de un dict,
        ignorando llaves que no son campos de la dataclass.
        """
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in names})

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_model(cls: type[T], model: Any) -> T:
        """
        Crea una entidad a partir de un modelo Django usando
        los campos de la dataclass como atributos a leer.
        """
        if not is_dataclass(cls):
            raise TypeError(f"{cls.__name__} debe ser una dataclass")
        return cls(**{f.name: getattr(model, f.name) for f in fields(cls)})
