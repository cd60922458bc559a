"""Structured logging for the API server, the CLI and the web UI.

Console output is colored key/value lines; ``log_format="json"`` switches to
one JSON object per event stamped with the app name, version and
environment. Two kinds of context end up on events:

- ``request_id``, ``method``, ``path`` and ``client`` for API requests
  (bound by the request middleware, see ``bind_request_context``)
- ``page_client`` for a NiceGUI page and the timers and conversions it
  starts (see ``page_context``)
"""

import logging
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import structlog
from structlog.types import EventDict, Processor

from currency_converter.config import Settings, get_settings

QUIET_LOGGERS = ("httpcore", "httpx", "uvicorn.access", "nicegui", "slowapi", "asyncio")


def _app_context(settings: Settings) -> Processor:
    fields = {
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment.value,
    }

    def add_app_context(
        logger: logging.Logger, method_name: str, event_dict: EventDict
    ) -> EventDict:
        for key, value in fields.items():
            event_dict.setdefault(key, value)
        return event_dict

    return add_app_context


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def get_console_processors() -> list[Processor]:
    return [
        *_shared_processors(),
        structlog.dev.ConsoleRenderer(
            colors=sys.stdout.isatty(),
            exception_formatter=structlog.dev.plain_traceback,
        ),
    ]


def get_json_processors(settings: Settings | None = None) -> list[Processor]:
    return [
        *_shared_processors(),
        _app_context(settings or get_settings()),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog and the stdlib root logger from settings.

    Safe to call more than once (API lifespan, CLI entry, UI launcher):
    the log file handler is only attached once per path.
    """
    if settings is None:
        settings = get_settings()

    level = getattr(logging, settings.log_level.value)
    if settings.log_format == "json":
        processors = get_json_processors(settings)
    else:
        processors = get_console_processors()

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    logging.getLogger().setLevel(level)

    if settings.log_file:
        _attach_file_handler(settings.log_file, level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.INFO))


def _attach_file_handler(log_file: Path, level: int) -> None:
    root = logging.getLogger()
    target = os.path.abspath(log_file)
    for handler in root.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == target:
            handler.setLevel(level)
            return

    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    root.addHandler(handler)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.stdlib.get_logger(name)


def bind_request_context(
    *, request_id: str, method: str, path: str, client: str | None
) -> None:
    """Attach an API request's identity to every event logged while serving it."""
    structlog.contextvars.bind_contextvars(
        request_id=request_id, method=method, path=path, client=client
    )


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


@contextmanager
def page_context(client_id: str) -> Iterator[None]:
    """Tag events with the NiceGUI client that owns the page.

    Tasks and timers scheduled inside the block copy the context, so the
    initial conversion of a page logs with its ``page_client`` too.
    """
    with structlog.contextvars.bound_contextvars(page_client=client_id):
        yield
