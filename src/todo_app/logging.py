"""structlog setup for the to-do app.

Events go to stderr so they never mix with the task screen printed on
stdout. ``log_format="json"`` switches to one JSON object per line.
The app calls configure_logging() again after every settings change,
so the level and format can change while it runs.
"""

import logging
import sys
from typing import TYPE_CHECKING

import structlog
from structlog.types import Processor

if TYPE_CHECKING:
    from todo_app.config import TodoSettings

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def configure_logging(settings: "TodoSettings | None" = None) -> None:
    """Apply the log level and format from ``settings`` (warning/console if None)."""
    level = _LEVELS.get(settings.log_level, logging.WARNING) if settings else logging.WARNING
    json_output = settings is not None and settings.log_format == "json"

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if json_output:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

    # prompt_toolkit and asyncio log through the standard library
    logging.basicConfig(
        format="%(message)s",
        level=level,
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name) if name else structlog.get_logger()


def bind_context(**kwargs: object) -> None:
    """Attach key/value pairs to every event logged from this context.

    Example:
        bind_context(app_name="todo_app")
        Loggers.store().debug("task_added", task_id=1)  # also carries app_name
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


class Loggers:
    """One named logger per layer of the app."""

    @staticmethod
    def cli() -> structlog.stdlib.BoundLogger:
        return get_logger("todo_app.cli")

    @staticmethod
    def store() -> structlog.stdlib.BoundLogger:
        return get_logger("todo_app.store")

    @staticmethod
    def view() -> structlog.stdlib.BoundLogger:
        return get_logger("todo_app.view")

    @staticmethod
    def persistence() -> structlog.stdlib.BoundLogger:
        return get_logger("todo_app.persistence")

    @staticmethod
    def config() -> structlog.stdlib.BoundLogger:
        return get_logger("todo_app.config")
