"""Unit tests for neobundle.logging."""

import logging
from logging.handlers import MemoryHandler

from rich.logging import RichHandler

from neobundle.logging import (
    ThirdPartyPrefixFilter,
    config_console_handler,
    config_flight_recorder,
    configure_logging,
)


def make_record(name: str) -> logging.LogRecord:
    """Build a bare log record for logger *name*."""
    return logging.LogRecord(name, logging.INFO, __file__, 1, "msg", None, None)


def test_prefix_filter_tags_third_party_records() -> None:
    """Foreign loggers get a [lib] prefix; project loggers none."""
    prefix_filter = ThirdPartyPrefixFilter()

    foreign = make_record("neo4j.pool")
    own = make_record("neobundle.service_layer.resolvers")

    assert prefix_filter.filter(foreign) is True
    assert prefix_filter.filter(own) is True
    assert foreign.prefix == "[neo4j]"  # type: ignore[attr-defined]
    assert own.prefix == ""  # type: ignore[attr-defined]


def test_console_handler_levels() -> None:
    """Debug mode forces DEBUG and drops the prefix filter."""
    handler = config_console_handler(level=logging.WARNING)
    assert isinstance(handler, RichHandler)
    assert handler.level == logging.WARNING
    assert any(isinstance(f, ThirdPartyPrefixFilter) for f in handler.filters)

    debug_handler = config_console_handler(level=logging.WARNING, debug_mode=True)
    assert debug_handler.level == logging.DEBUG
    assert not debug_handler.filters


def test_flight_recorder_flushes_on_warning(tmp_path) -> None:
    """Buffered records reach the file once a WARNING arrives."""
    path = tmp_path / "logs" / "latest.log"
    recorder = config_flight_recorder(path, capacity=10)
    logger = logging.getLogger("neobundle.test.flight")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    logger.addHandler(recorder)
    try:
        logger.debug("before the storm")
        assert path.read_text(encoding="utf-8") == ""
        logger.warning("storm")
        content = path.read_text(encoding="utf-8")
    finally:
        logger.removeHandler(recorder)
        recorder.close()
        recorder.target.close()  # type: ignore[union-attr]

    assert "before the storm" in content
    assert "storm" in content


def test_configure_logging_wires_root_and_overrides(tmp_path) -> None:
    """The root logger gets both handlers; per-logger levels are applied."""
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    driver = logging.getLogger("neo4j")
    saved_driver_level = driver.level
    try:
        handlers = configure_logging(
            logging.INFO,
            log_path=tmp_path / "latest.log",
            logger_levels={"neo4j": logging.ERROR},
        )
        assert root.handlers == handlers
        assert root.level == logging.DEBUG
        assert isinstance(handlers[0], RichHandler)
        assert handlers[0].level == logging.INFO
        assert isinstance(handlers[1], MemoryHandler)
        assert driver.level == logging.ERROR
    finally:
        for handler in root.handlers[:]:
            root.removeHandler(handler)
            handler.close()
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)
        driver.setLevel(saved_driver_level)


def test_configure_logging_without_flight_recorder() -> None:
    """Without a log path only the console handler is attached."""
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        handlers = configure_logging(logging.WARNING)
        assert len(handlers) == 1
        assert not any(isinstance(h, MemoryHandler) for h in root.handlers)
    finally:
        for handler in root.handlers[:]:
            root.removeHandler(handler)
            handler.close()
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)
