"""Fixtures and test helpers for end-to-end CLI tests.

Provides a test-only `log-demo` Click command that emits log messages on a
project logger and a third-party logger, plus fixtures to register it, obtain
a CliRunner, and run tests within an isolated filesystem.
"""

import logging

import click
import pytest
from click.testing import CliRunner

from neobundle.entrypoints.cli.main import neobundle

# pylint: disable=redefined-outer-name


@click.command()
def log_demo():
    """Emit one message per level on 'neobundle.demo' and 'some.thirdparty'."""
    logger = logging.getLogger("neobundle.demo")
    logger.debug("This is a debug-level test message.")
    logger.info("This is an info-level test message.")
    logger.warning("This is a warning-level test message.")
    logger.error("This is an error-level test message.")
    logger.critical("This is a critical-level test message.")
    third_party_logger = logging.getLogger("some.thirdparty")
    third_party_logger.debug("This is a debug-level third-party test message.")
    third_party_logger.info("This is an info-level third-party test message.")
    third_party_logger.warning("This is a warning-level third-party test message.")
    logger.debug("This is a final debug-level test message.")


def _remove_command_everywhere(group, name: str) -> None:
    """Remove a command from a Click group and any click-extra sections."""
    # pylint: disable=protected-access
    group.commands.pop(name, None)
    if hasattr(group, "_default_section"):
        group._default_section.commands.pop(name, None)
    for sec in getattr(group, "_sections", []):
        getattr(sec, "commands", {}).pop(name, None)


@pytest.fixture
def registered_log_demo():
    """Register the 'log-demo' command for the duration of a test."""
    neobundle.add_command(log_demo, name="log-demo")
    try:
        yield
    finally:
        _remove_command_everywhere(neobundle, "log-demo")


@pytest.fixture
def runner():
    """Return a Click CliRunner for invoking CLI commands in tests."""
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Run the test inside an isolated working directory."""
    with runner.isolated_filesystem():
        yield
