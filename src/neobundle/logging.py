"""Logging helpers used by the NEOBUNDLE CLI.

Console output goes through Rich; an optional in-memory "flight recorder"
buffers DEBUG records and dumps them to a file once something goes wrong.
Records from other libraries (the ``neo4j`` driver, ``neomodel``) are tagged
with a short ``[lib]`` prefix. `configure_logging` wires both handlers onto the
root logger; `log_startup` records the environment the resolver runs in.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TypeAlias

import sqlalchemy
import yaml
from rich.console import Console
from rich.logging import RichHandler

from neobundle.config import CACHE_DIR_ENVVAR, CONFIG_PATH_ENVVAR

if TYPE_CHECKING:
    from logging import Logger

# pylint: disable=too-few-public-methods

PROJECT_PREFIX = "neobundle"

ColorSystem: TypeAlias = Literal["auto", "standard", "256", "truecolor", "windows"]


class ThirdPartyPrefixFilter(logging.Filter):
    """Set ``record.prefix`` to ``[lib]`` for records outside NEOBUNDLE.

    Project records get an empty prefix. Never filters anything out.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not record.name.startswith(PROJECT_PREFIX):
            # e.g. "neo4j.pool" -> "[neo4j]"
            record.prefix = f"[{record.name.split('.')[0]}]"
        else:
            record.prefix = ""
        return True


def config_console_handler(
    level: int = logging.INFO, debug_mode: bool = False, color: bool = True
) -> RichHandler:
    """Build the stderr console handler.

    Args:
        level: Minimum level shown (forced to DEBUG in debug mode).
        debug_mode: Show timestamps, logger names and source paths.
        color: Enable color output when True.

    Returns:
        RichHandler: Handler to attach to the root logger.
    """
    color_system: ColorSystem | None = "auto" if color else None
    console = Console(color_system=color_system, stderr=True)

    if debug_mode:
        level = logging.DEBUG

    handler = RichHandler(
        level=level,
        console=console,
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )

    fmt = (
        "%(asctime)s %(name)s: %(message)s"
        if debug_mode
        else "%(prefix)s %(message)s"
    )
    handler.setFormatter(logging.Formatter(fmt=fmt))

    if not debug_mode:
        handler.addFilter(ThirdPartyPrefixFilter())

    return handler


def config_flight_recorder(
    path: Path,
    capacity: int = 2000,
    flush_level: int = logging.WARNING,
    flush_on_close: bool = False,
) -> MemoryHandler:
    """Build the flight recorder: a memory buffer in front of a file handler.

    Up to `capacity` records are kept; the buffer is written to `path` when a
    record at `flush_level` or above arrives (or on close if `flush_on_close`).

    Args:
        path: Destination file for flushed records.
        capacity: Number of records to buffer.
        flush_level: Level that triggers a flush.
        flush_on_close: Also flush when the handler is closed.

    Returns:
        MemoryHandler: The buffering handler.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(process)d] %(levelname)s %(name)s:%(lineno)d: %(message)s"
        )
    )

    return MemoryHandler(
        capacity=capacity,
        flushLevel=flush_level,
        target=file_handler,
        flushOnClose=flush_on_close,
    )


def configure_logging(  # pylint: disable=too-many-arguments
    level: int,
    *,
    debug_mode: bool = False,
    color: bool = True,
    log_path: Path | None = None,
    force_flush: bool = False,
    logger_levels: dict[str, int] | None = None,
) -> list[logging.Handler]:
    """Route every record through the root logger to the NEOBUNDLE handlers.

    The root logger accepts everything; the console handler filters at
    `level` and the flight recorder (enabled when `log_path` is given) keeps
    DEBUG records. `logger_levels` then raises or lowers individual loggers,
    typically the chatty ``neo4j`` driver and ``neomodel``.

    Returns:
        The handlers now attached to the root logger.
    """
    handlers: list[logging.Handler] = [
        config_console_handler(level=level, debug_mode=debug_mode, color=color)
    ]
    if log_path is not None:
        handlers.append(config_flight_recorder(log_path, flush_on_close=force_flush))

    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)

    for name, lvl in (logger_levels or {}).items():
        logging.getLogger(name).setLevel(lvl)

    return handlers


def log_startup(  # pylint: disable=too-many-arguments
    logger: Logger,
    *,
    app_version: str,
    level: int,
    handlers: list[logging.Handler],
    log_path: Path | None,
    logger_levels: dict[str, int],
    ogm_installed: bool,
) -> None:
    """Log a one-line startup summary plus DEBUG diagnostics.

    The summary names the console level, the flight recorder and whether the
    OGM is available; the DEBUG lines record the interpreter, the libraries
    the resolver depends on and the environment it reads its inputs from.
    """
    logger.info(
        "NEOBUNDLE %s (console=%s, flight-recorder=%s, ogm=%s)",
        app_version,
        logging.getLevelName(level),
        "ON" if log_path else "OFF",
        "ON" if ogm_installed else "OFF",
    )

    logger.debug("Python: %s", sys.version.split()[0])
    logger.debug("Platform: %s %s", platform.system(), platform.release())
    logger.debug("PID: %s", os.getpid())
    logger.debug("CWD: %s", Path.cwd())
    logger.debug("SQLAlchemy: %s", sqlalchemy.__version__)
    logger.debug("PyYAML: %s", yaml.__version__)
    for envvar in (CONFIG_PATH_ENVVAR, CACHE_DIR_ENVVAR):
        logger.debug("%s: %s", envvar, os.environ.get(envvar, "<unset>"))
    logger.debug("Handlers: %s", [type(h).__name__ for h in handlers])
    if log_path:
        logger.debug("Flight recorder: path=%s", log_path)
    logger.debug(
        "Per-logger overrides: %s",
        {name: logging.getLevelName(lvl) for name, lvl in logger_levels.items()}
        or "<none>",
    )
