import io
import logging

from rich.console import Console

from schemapath import configure_logging, get_logger
from schemapath.runtime.logging import LOGGER_NAME, _SchemaPathRichConsoleHandler


def _record(message: str, level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord(
        name=LOGGER_NAME,
        level=level,
        pathname="/tmp/test_logger.py",
        lineno=123,
        msg=message,
        args=(),
        exc_info=None,
    )


def _marked_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [h for h in logger.handlers if getattr(h, "_schemapath_handler", False)]


def _remove_marked_handlers(logger: logging.Logger) -> None:
    for handler in _marked_handlers(logger):
        logger.removeHandler(handler)


def test_get_logger_uses_package_name() -> None:
    assert get_logger().name == "schemapath"


def test_configure_logging_is_idempotent() -> None:
    logger = get_logger()
    _remove_marked_handlers(logger)
    try:
        configure_logging()
        configure_logging()
        configure_logging(logging.DEBUG)
        handlers = _marked_handlers(logger)
        assert len(handlers) == 1
        assert logger.level == logging.DEBUG
    finally:
        _remove_marked_handlers(logger)
        logger.setLevel(logging.NOTSET)


def test_configure_logging_defaults_to_config_level(schemapath_config) -> None:
    logger = get_logger()
    _remove_marked_handlers(logger)
    schemapath_config.log_level = "ERROR"
    try:
        configure_logging()
        assert logger.level == logging.ERROR
    finally:
        _remove_marked_handlers(logger)
        logger.setLevel(logging.NOTSET)


def test_configure_logging_picks_handler_from_config(schemapath_config) -> None:
    logger = get_logger()
    _remove_marked_handlers(logger)
    try:
        schemapath_config.rich_logging = True
        configure_logging()
        assert isinstance(_marked_handlers(logger)[0], _SchemaPathRichConsoleHandler)
        _remove_marked_handlers(logger)

        schemapath_config.rich_logging = False
        configure_logging()
        (handler,) = _marked_handlers(logger)
        assert not isinstance(handler, _SchemaPathRichConsoleHandler)
        assert isinstance(handler, logging.StreamHandler)
        assert handler.format(_record("plain")) == "INFO     plain [test_logger.py:123]"
    finally:
        _remove_marked_handlers(logger)
        logger.setLevel(logging.NOTSET)


def test_rich_console_wraps_location_in_brackets() -> None:
    record = _record("resolved")
    assert _SchemaPathRichConsoleHandler._format_location(record) == "[test_logger.py:123]"


def test_rich_console_renders_level_message_and_location() -> None:
    handler = _SchemaPathRichConsoleHandler(console=Console(file=io.StringIO()))
    text = handler.render(_record("resolved path 'a' to leaf schema", logging.WARNING))

    assert text.plain == "WARNING  resolved path 'a' to leaf schema [test_logger.py:123]"
    assert str(text.spans[0].style) == "yellow"
    assert str(text.spans[-1].style) == "dim"


def test_rich_console_emits_to_its_console() -> None:
    buffer = io.StringIO()
    handler = _SchemaPathRichConsoleHandler(console=Console(file=buffer, width=200))
    handler.emit(_record("hello"))

    assert buffer.getvalue().strip() == "INFO     hello [test_logger.py:123]"
