"""Unit tests for the CLI log level parser.

These tests exercise neobundle.entrypoints.cli.helpers.log_level_parser.parse_log_level,
covering defaults, override order, input normalization and error handling.
"""

import logging
import types

import click
import pytest

from neobundle.entrypoints.cli.helpers.log_level_parser import parse_log_level


def make_ctx():
    """Create a minimal Click context stub (the callback never uses it)."""
    return types.SimpleNamespace()


def test_empty_uses_defaults():
    """When no levels are provided, return the default library logger levels."""
    assert parse_log_level(make_ctx(), None, ()) == {
        "neo4j": logging.WARNING,
        "neomodel": logging.WARNING,
    }


def test_repeated_flags_override_order():
    """Later repeated CLI flags override earlier ones for the same logger."""
    value = ("neo4j=INFO", "neomodel=ERROR", "neo4j=DEBUG")
    out = parse_log_level(make_ctx(), None, value)
    assert out["neo4j"] == logging.DEBUG
    assert out["neomodel"] == logging.ERROR


def test_envvar_string_with_commas_and_spaces():
    """Accept a plain string (e.g. from an env var) with commas and spaces."""
    value = "neo4j=INFO,  urllib3=WARNING neobundle=ERROR"
    out = parse_log_level(make_ctx(), None, value)
    assert out["neo4j"] == logging.INFO
    assert out["urllib3"] == logging.WARNING
    assert out["neobundle"] == logging.ERROR


def test_case_insensitive_levels():
    """Level names should be parsed case-insensitively."""
    out = parse_log_level(make_ctx(), None, ("neo4j=info", "neomodel=WaRnInG"))
    assert out["neo4j"] == logging.INFO
    assert out["neomodel"] == logging.WARNING


@pytest.mark.parametrize("value", [("not-a-pair",), ("neo4j=LOUD",)])
def test_invalid_items_raise(value):
    """Malformed pairs and unknown levels raise click.BadParameter."""
    with pytest.raises(click.BadParameter):
        parse_log_level(make_ctx(), None, value)
