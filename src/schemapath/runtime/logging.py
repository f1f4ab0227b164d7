from __future__ import annotations

import logging

from rich.console import Console
from rich.text import Text

from ..config import SCHEMAPATH_CONFIG

LOGGER_NAME = "schemapath"

_LEVEL_STYLES = {
    logging.DEBUG: "dim",
    logging.INFO: "cyan",
    logging.WARNING: "yellow",
    logging.ERROR: "red",
    logging.CRITICAL: "bold red",
}


def get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


class _SchemaPathRichConsoleHandler(logging.Handler):
    """Render records as ``LEVEL message [file.py:line]`` on a rich console."""

    def __init__(self, level: int = logging.NOTSET, console: Console | None = None):
        super().__init__(level)
        self.console = console if console is not None else Console(stderr=True)

    @staticmethod
    def _format_location(record: logging.LogRecord) -> str:
        return f"[{record.filename}:{record.lineno}]"

    def render(self, record: logging.LogRecord) -> Text:
        text = Text()
        text.append(f"{record.levelname:<8}", style=_LEVEL_STYLES.get(record.levelno, ""))
        text.append(" ")
        text.append(record.getMessage())
        text.append(" ")
        text.append(self._format_location(record), style="dim")
        return text

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.console.print(self.render(record), highlight=False, soft_wrap=True)
        except Exception:
            self.handleError(record)


def _is_schemapath_handler(handler: logging.Handler) -> bool:
    return getattr(handler, "_schemapath_handler", False)


def configure_logging(level: int | str | None = None) -> logging.Logger:
    """Attach the schemapath console handler once and set the logger level.

    Calling this repeatedly never stacks handlers. ``level`` defaults to
    ``SCHEMAPATH_CONFIG.log_level``.
    """

    logger = get_logger()
    if level is None:
        level = SCHEMAPATH_CONFIG.logging_level
    logger.setLevel(level)

    if any(_is_schemapath_handler(handler) for handler in logger.handlers):
        return logger

    handler: logging.Handler
    if SCHEMAPATH_CONFIG.rich_logging:
        handler = _SchemaPathRichConsoleHandler()
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(levelname)-8s %(message)s [%(filename)s:%(lineno)d]")
        )
    setattr(handler, "_schemapath_handler", True)
    logger.addHandler(handler)
    return logger


__all__ = ["LOGGER_NAME", "configure_logging", "get_logger"]
