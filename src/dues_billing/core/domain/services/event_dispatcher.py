from collections.abc import Callable

import structlog

from dues_billing.core.domain.events.events import DomainEvent

logger = structlog.get_logger(__name__)

EventHandler = Callable[[DomainEvent], None]


class EventDispatcher:
    """
    Dispatcher síncrono de eventos de dominio.

    Un handler suscrito a una clase base recibe también los eventos
    de sus subclases. Los errores de un handler se registran y no
    interrumpen la operación que publicó el evento, salvo que se haya
    suscrito con `propagate=True`: entonces la excepción sube al
    publicador y revierte su transacción.
    """
    def __init__(self) -> None:
        self._subs: dict[type[DomainEvent], list[tuple[EventHandler, bool]]] = {}

    def subscribe(self, event_type: type[DomainEvent], handler: EventHandler, *, propagate: bool = False) -> None:
        self._subs.setdefault(event_type, []).append((handler, propagate))
        logger.debug(
            "event.subscribed",
            event_type=event_type.__name__,
            handler_name=getattr(handler, "__name__", handler.__class__.__name__),
            propagate=propagate,
        )

    def handlers_for(self, event: DomainEvent) -> list[tuple[EventHandler, bool]]:
        found: list[tuple[EventHandler, bool]] = []
        for klass in type(event).__mro__:
            found.extend(self._subs.get(klass, []))
        return found

    def dispatch(self, event: DomainEvent) -> None:
        handlers = self.handlers_for(event)
        logger.debug(
            "event.dispatch",
            event_name=type(event).__name__,
            listeners=len(handlers),
        )
        for h, propagate in handlers:
            try:
                h(event)
            except Exception as e:
                logger.error(
                    "event.handler_error",
                    event_name=type(event).__name__,
                    handler_name=getattr(h, "__name__", h.__class__.__name__),
                    error=str(e),
                    exc_info=True,
                )
                if propagate:
                    raise
