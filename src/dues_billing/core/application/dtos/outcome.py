"""
Resultado etiquetado de las operaciones de escritura.

Los flujos masivos (generación, conciliación) ramifican sobre `kind`
en vez de capturar excepciones; `unwrap()` existe para los llamadores
que prefieren semántica de excepción (comandos de consola, creación
manual de una sola cuota).
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from dues_billing.core.domain.events.exceptions import (
    DueAlreadyPaidError,
    DueConflictError,
    DueForbiddenError,
    DueNotFoundError,
    DuesError,
    DueValidationError,
)

T = TypeVar("T")


class OutcomeKind(str, Enum):
    OK = "ok"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    VALIDATION_ERROR = "validation_error"
    ALREADY_PAID = "already_paid"


_ERRORS: dict[OutcomeKind, type[DuesError]] = {
    OutcomeKind.CONFLICT: DueConflictError,
    OutcomeKind.NOT_FOUND: DueNotFoundError,
    OutcomeKind.FORBIDDEN: DueForbiddenError,
    OutcomeKind.VALIDATION_ERROR: DueValidationError,
    OutcomeKind.ALREADY_PAID: DueAlreadyPaidError,
}


@dataclass(frozen=True)
class Outcome(Generic[T]):
    kind: OutcomeKind
    value: T | None = None
    message: str = ""

    # ------------------------------------------------ constructores
    @classmethod
    def ok(cls, value: T) -> Outcome[T]:
        return cls(OutcomeKind.OK, value)

    @classmethod
    def conflict(cls, message: str, existing: T | None = None) -> Outcome[T]:
        return cls(OutcomeKind.CONFLICT, existing, message)

    @classmethod
    def not_found(cls, message: str) -> Outcome[T]:
        return cls(OutcomeKind.NOT_FOUND, None, message)

    @classmethod
    def forbidden(cls, message: str, value: T | None = None) -> Outcome[T]:
        return cls(OutcomeKind.FORBIDDEN, value, message)

    @classmethod
    def invalid(cls, message: str) -> Outcome[T]:
        return cls(OutcomeKind.VALIDATION_ERROR, None, message)

    @classmethod
    def already_paid(cls, message: str, value: T | None = None) -> Outcome[T]:
        return cls(OutcomeKind.ALREADY_PAID, value, message)

    # ------------------------------------------------ consulta
    @property
    def is_ok(self) -> bool:
        return self.kind is OutcomeKind.OK

    def unwrap(self) -> T:
        if self.is_ok:
            return self.value
        raise _ERRORS[self.kind](self.message)
