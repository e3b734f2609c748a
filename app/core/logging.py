import logging
import os
from typing import Optional


DEFAULT_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s |%(context)s %(message)s"

CONTEXT_FIELDS = ("request_id", "batch_id")


class ContextFilter(logging.Filter):
    """Renders known context fields (request_id, batch_id) into ``record.context``."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        parts = [
            f" {name}={getattr(record, name)}"
            for name in CONTEXT_FIELDS
            if getattr(record, name, None)
        ]
        record.context = "".join(parts) + (" |" if parts else "")
        return True


def setup_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    """Initialize root logger with a sane formatter and context filter."""
    resolved_level = getattr(logging, (level or DEFAULT_LEVEL).upper(), logging.INFO)
    formatter = logging.Formatter(fmt or DEFAULT_FORMAT)

    root = logging.getLogger()
    root.setLevel(resolved_level)

    # Clear existing handlers to avoid duplicate logs in reloads
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    handler.addFilter(ContextFilter())
    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get a module logger; ensure root is initialized."""
    if not logging.getLogger().handlers:
        setup_logging()
    return logging.getLogger(name)


def bind_context(logger: logging.Logger, **context: str) -> logging.LoggerAdapter:
    """Logger whose records carry ``context`` (e.g. ``batch_id``) as extra fields."""
    return logging.LoggerAdapter(logger, context)
