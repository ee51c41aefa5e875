"""Module to setup fixtures and other required artifacts for tests

    isort:skip_file
"""

from pathlib import Path

import pytest

from mongofix.adapters.gateway.memory import MemoryGateway
from mongofix.config import Config
from mongofix.integrations.pytest import plugin

pytest_plugins = ["pytester"]

DATA_DIR = Path(__file__).parent / "data"


def pytest_addoption(parser):
    """Additional options for running tests with pytest"""
    parser.addoption(
        "--mongodb",
        action="store_true",
        default=False,
        help="Run tests against a live MongoDB server",
    )


def pytest_configure(config):
    # The plugin is registered through its `pytest11` entry point once the
    #   package is installed. Register it here otherwise.
    if not config.pluginmanager.is_registered(plugin):
        config.pluginmanager.register(plugin, "mongofix")

    config.addinivalue_line("markers", "mongodb: tests that need a live MongoDB")


def pytest_collection_modifyitems(config, items):
    """Configure special markers on tests, so as to control execution"""
    run_mongodb = config.getoption("--mongodb")

    skip_mongodb = pytest.mark.skip(reason="need --mongodb option to run")

    for item in items:
        if item.get_closest_marker("mongodb") and not run_mongodb:
            item.add_marker(skip_mongodb)


@pytest.fixture(scope="session")
def mongofix_config():
    """Fixture files of the test suite live in `tests/data`.

    Markers reference them as `/data/<file>.json`.
    """
    return Config.load_from_dict({"fixtures_dir": str(DATA_DIR.parent)})


@pytest.fixture(scope="session")
def fixture_gateway():
    gateway = MemoryGateway()
    yield gateway
    gateway.close()


@pytest.fixture
def gateway():
    """A fresh, private in-memory gateway"""
    return MemoryGateway()


@pytest.fixture
def data_dir():
    return DATA_DIR
