"""
Buses de comandos y consultas.

Cada comando o consulta es un dataclass congelado con un único handler
registrado en el contenedor DI. Los handlers de escritura devuelven un
`Outcome`; el bus registra su tipo junto con la duración.
"""
from __future__ import annotations

import math
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, Protocol, TypeVar

import structlog

from dues_billing.core.application.dtos.outcome import Outcome

C = TypeVar('C')
Q = TypeVar('Q')
R = TypeVar('R')
T = TypeVar('T')

logger = structlog.get_logger(__name__)


# ───────────────────────────────────────────────
# DTOs base
# ───────────────────────────────────────────────
@dataclass(frozen=True)
class CommandDTO:
    """Base de los comandos de escritura."""


@dataclass(frozen=True)
class QueryDTO:
    """Base de las consultas de solo lectura."""


@dataclass(frozen=True)
class PaginatedQueryDTO(Generic[Q]):
    filtros: Q
    page: int = 1
    page_size: int = 50


@dataclass(frozen=True)
class PagedResult(Generic[T]):
    items: Sequence[T]
    total: int
    page: int
    page_size: int
    total_pages: int = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, 'total_pages', math.ceil(self.total / self.page_size) if self.page_size else 0)

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1


class CommandHandler(Protocol, Generic[C]):
    def handle(self, command: C) -> Any: ...


class QueryHandler(Protocol, Generic[Q, R]):
    def handle(self, query: Q) -> R: ...


# ───────────────────────────────────────────────
# Buses
# ───────────────────────────────────────────────
class _Bus:
    kind = "message"

    def __init__(self) -> None:
        self._handlers: dict[type, Any] = {}

    def register(self, message_type: type, handler: Any) -> None:
        if message_type in self._handlers:
            raise ValueError(f"Handler duplicado para {message_type.__name__}")
        self._handlers[message_type] = handler
        logger.debug(f"{self.kind}_handler.registered", name=message_type.__name__)

    def _handler_for(self, message: Any) -> Any:
        handler = self._handlers.get(type(message))
        if handler is None:
            raise ValueError(f"Ningún handler para {self.kind}: {type(message).__name__}")
        return handler


class CommandBus(_Bus):
    kind = "command"

    def dispatch(self, command: Any) -> Any:
        handler = self._handler_for(command)
        start = time.perf_counter()
        result = handler.handle(command)
        logger.info(
            "command.executed",
            command=type(command).__name__,
            outcome=result.kind.value if isinstance(result, Outcome) else None,
            duration=f"{time.perf_counter() - start:.3f}s",
        )
        return result


class QueryBus(_Bus):
    kind = "query"

    def dispatch(self, query: Any) -> Any:
        handler = self._handler_for(query)
        start = time.perf_counter()
        result = handler.handle(query)
        logger.debug(
            "query.executed",
            query=type(query).__name__,
            duration=f"{time.perf_counter() - start:.3f}s",
        )
        return result
