import logging
import os
import sys

import structlog
from structlog.processors import CallsiteParameter, CallsiteParameterAdder

# Loggers de terceros que solo ensucian la consola en DEBUG
_NOISY_LOGGERS = ("django.db.backends", "django.utils.autoreload")


def configure_logging(
    level: str = os.getenv("LOG_LEVEL", "INFO"),
    json_logs: bool = bool(os.getenv("JSON_LOGS", "")),
) -> None:
    """
    Configura structlog + logging de la stdlib para el servicio de cuotas.

     - `json_logs` activa JSONRenderer (producción / recolección de logs).
     - En otro caso usa ConsoleRenderer con colores.

    Debe llamarse antes de cualquier import que cree loggers
    (ver `manage.py`).
    """
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
    )

    structlog.configure(
        processors=[
            *shared_processors,
            CallsiteParameterAdder(
                parameters=[
                    CallsiteParameter.MODULE,
                    CallsiteParameter.FUNC_NAME,
                    CallsiteParameter.LINENO,
                ]
            ),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=shared_processors,
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper())

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(logging.INFO, root.level))

    logging.captureWarnings(True)
