"""Global pytest fixtures and default marks for NEOBUNDLE."""

from pathlib import Path

import pytest

# pylint: disable=unused-argument

pytest_plugins = [
    "tests.fixtures.configs",
]

TESTS_ROOT = Path(__file__).parent.resolve()
SUITE_MARKERS = ("unit", "integration", "e2e")


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Mark each item with the suite (`tests/<suite>/`) it lives in."""
    for item in items:
        path = item.path.resolve()  # pytest>=8: pathlib.Path
        if TESTS_ROOT not in path.parents:
            continue
        suite = path.relative_to(TESTS_ROOT).parts[0]
        if suite in SUITE_MARKERS and not any(
            marker.name == suite for marker in item.iter_markers()
        ):
            item.add_marker(getattr(pytest.mark, suite))
