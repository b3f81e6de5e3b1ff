"""NEOBUNDLE CLI entry point.

Defines the top-level ``neobundle`` command (via Click-Extra), configures
logging, and registers subcommands.

Currently available groups
- ``neobundle config`` — validate and inspect a bundle configuration.

Examples
    $ neobundle --version
    $ neobundle config check neo4j.yaml
    $ neobundle -v config show --json
"""

import logging
from pathlib import Path

import click
import click_extra as clickx
from platformdirs import user_log_dir

from neobundle import __version__
from neobundle.bootstrap import ogm_installed
from neobundle.logging import configure_logging, log_startup

from .config_cmds import config as config_group
from .helpers import hyperlink
from .helpers.log_level_parser import parse_log_level

logger = logging.getLogger(__name__)


HELP = """NEOBUNDLE command-line interface.

    NEOBUNDLE resolves a declarative Neo4j configuration (connections, clients and
    OGM entity managers) into validated registries, synthesizing the `default`
    entries and rejecting dangling references before an application boots.
    """


EPILOG = "\b\n" + "\n".join(
    [
        f"{click.style('See Also:', fg='blue', bold=True, underline=True)}",
        "  Neo4j : " + hyperlink("https://neo4j.com/docs/", "neo4j.com/docs"),
        "  OGM   : " + hyperlink("https://neomodel.readthedocs.io/", "neomodel docs"),
    ]
)


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
    epilog=EPILOG,
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    help="Increase the default WARNING verbosity by one level per repetition.",
    default=0,
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    help="Decrease the default WARNING verbosity by one level per repetition.",
    default=0,
)
@click.option(
    "--debug/--no-debug",
    is_flag=True,
    help="Enable debug mode (timestamps, logger names and source paths).",
    default=False,
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path of the flight-recorder log file.",
    default=Path(user_log_dir("neobundle", appauthor=False)) / "latest.log",
    envvar="NEOBUNDLE_LOG_PATH",
    show_default=True,
    show_envvar=True,
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    is_flag=True,
    help=(
        "Keep the last DEBUG records in memory and write them to --log-path when "
        "a WARNING/ERROR occurs (or on exit with --force-flush)."
    ),
    default=True,
    show_envvar=True,
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush_flight_recorder",
    is_flag=True,
    help="Write the flight-recorder buffer to --log-path on exit.",
    default=False,
    show_default=True,
    show_envvar=True,
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    help=(
        "Set the minimum LEVEL of logger NAME (NAME=LEVEL). Repeatable "
        "(e.g. -L neo4j=INFO) or via NEOBUNDLE_LOGGER_LEVELS (comma/space list)."
    ),
    default=("neo4j=WARNING", "neomodel=WARNING"),
    envvar="NEOBUNDLE_LOGGER_LEVELS",
    show_default=True,
    show_envvar=True,
)
@clickx.pass_context
def neobundle(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder: bool,
    force_flush_flight_recorder: bool,
    logger_levels: dict[str, int],
) -> None:
    """NEOBUNDLE command-line interface."""
    level = logging.WARNING - (10 * verbose_count) + (10 * quiet_count)
    level = max(logging.DEBUG, min(logging.CRITICAL, level))
    recorder_path = log_path if flight_recorder else None

    handlers = configure_logging(
        level,
        debug_mode=debug,
        color=ctx.color is not False,  # None or True => allow color
        log_path=recorder_path,
        force_flush=force_flush_flight_recorder,
        logger_levels=logger_levels,
    )
    log_startup(
        logger,
        app_version=__version__,
        level=level,
        handlers=handlers,
        log_path=recorder_path,
        logger_levels=logger_levels,
        ogm_installed=ogm_installed(),
    )

    ctx.call_on_close(logging.shutdown)


neobundle.add_command(config_group)
