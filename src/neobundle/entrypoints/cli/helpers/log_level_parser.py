"""Parse ``NAME=LEVEL`` logger-level options.

Values come either from repeated ``-L`` flags or from one comma/space separated
string (the environment variable form).
"""

import logging
import re

import click

DEFAULT_LIB_LEVELS = {"neo4j": logging.WARNING, "neomodel": logging.WARNING}


def _normalize_items(value: str | list[str] | tuple[str, ...]) -> list[str]:
    """Split *value* on commas and whitespace, dropping empty fragments."""
    chunks = value if isinstance(value, (tuple, list)) else [value]
    return [s for chunk in chunks for s in re.split(r"[,\s]+", chunk) if s]


def parse_log_level(
    ctx: click.Context,  # pylint: disable=unused-argument
    param: click.Parameter | None,  # pylint: disable=unused-argument
    value: str | list[str] | tuple[str, ...],
) -> dict[str, int]:
    """Click callback turning ``NAME=LEVEL`` items into a name -> level dict.

    Items override `DEFAULT_LIB_LEVELS`; later items win.

    Raises:
        click.BadParameter: If an item is not ``NAME=LEVEL`` or LEVEL is not a
            logging level name.
    """
    levels = dict(DEFAULT_LIB_LEVELS)
    for item in _normalize_items(value):
        try:
            name, level_str = item.split("=", 1)
        except ValueError as e:
            raise click.BadParameter(f"Expected NAME=LEVEL, got {item!r}") from e
        lvl = logging.getLevelNamesMapping().get(level_str.strip().upper())
        if lvl is None:
            raise click.BadParameter(f"Invalid log level: {level_str}")
        levels[name.strip()] = lvl
    return levels
