import logging

import pytest

from dfprop.tree import from_python
from dfprop.utils.logging import configure_logging as configure_dfprop_logging


@pytest.fixture(autouse=True)
def configure_logging():
    """Keep the dfprop logger quiet and plain during tests."""
    configure_dfprop_logging(False, "WARNING")
    logging.basicConfig(level=logging.WARNING, format="%(message)s", force=True)
    yield
    configure_dfprop_logging(False, "INFO")
    logging.basicConfig(level=logging.INFO, force=True)


@pytest.fixture
def make_tree():
    """Build a property document root from plain data."""

    def _make(**groups):
        return from_python(groups, subject="properties")

    return _make


@pytest.fixture
def basic_document():
    """Smallest document a handler accepts."""
    return {
        "basicInfoMap": {"project": "maihamadb", "database": "mysql"},
        "databaseInfoMap": {
            "driver": "com.mysql.jdbc.Driver",
            "url": "jdbc:mysql://localhost:3306/maihamadb",
        },
    }
