"""mongofix pytest plugin, auto-registered via the ``pytest11`` entry point.

Registers the ``clear_collection``, ``init_collection`` and
``expected_collection`` markers and runs them around each marked test::

    clear_collection* -> init_collection* -> test -> expected_collection*

The order in which markers are stacked on a test does not matter.

All marked tests share one session-wide Store Gateway, provided by the
``fixture_gateway`` fixture. Override it in ``conftest.py`` to point the
tests at another store. Tests are expected to run one at a time: running
them in parallel (e.g. with ``pytest-xdist``) against the same collections
is not supported.
"""

import os

import pytest

from mongofix.config import Config
from mongofix.fixtures import FixtureLoader
from mongofix.integrations.pytest.markers import MARKERS, directives_for, has_directives
from mongofix.integrations.pytest.testbed import GatewayFixture
from mongofix.orchestrator import FixtureOrchestrator, FixturePlan

PLUGIN_FIXTURES = ("mongofix_config", "fixture_gateway")


def pytest_addoption(parser):
    """Add ``--mongofix-env`` CLI option."""
    parser.addoption(
        "--mongofix-env",
        action="store",
        default=None,
        help="mongofix environment overlay to activate (maps to MONGOFIX_ENV)",
    )


def pytest_configure(config):
    """Set MONGOFIX_ENV and register the directive markers."""
    env = config.getoption("--mongofix-env", default=None)
    if env:
        os.environ.setdefault("MONGOFIX_ENV", env)

    # Register markers so --strict-markers doesn't complain
    for description in MARKERS.values():
        config.addinivalue_line("markers", description)


def pytest_collection_modifyitems(config, items):
    """Give marked tests access to the shared gateway"""
    for item in items:
        if not isinstance(item, pytest.Function) or not has_directives(item):
            continue

        for fixture_name in PLUGIN_FIXTURES:
            if fixture_name not in item.fixturenames:
                item.fixturenames.append(fixture_name)


@pytest.fixture(scope="session")
def mongofix_config(request):
    """Configuration read from the project's rootdir"""
    return Config.load(str(request.config.rootpath))


@pytest.fixture(scope="session")
def fixture_gateway(mongofix_config):
    """Store Gateway shared by the whole session"""
    fixture = GatewayFixture(mongofix_config["gateway"])
    yield fixture.setup()
    fixture.teardown()


@pytest.hookimpl(wrapper=True)
def pytest_pyfunc_call(pyfuncitem):
    if not has_directives(pyfuncitem):
        return (yield)

    settings = pyfuncitem.funcargs["mongofix_config"]
    loader = FixtureLoader(
        [
            pyfuncitem.path.parent,
            pyfuncitem.config.rootpath / settings["fixtures_dir"],
        ]
    )
    plan = FixturePlan.from_directives(
        directives_for(pyfuncitem, loader, settings["ignored_fields"])
    )
    orchestrator = FixtureOrchestrator(pyfuncitem.funcargs["fixture_gateway"])

    orchestrator.prepare(plan)
    # Raises if the test failed, which leaves the checks out
    result = yield
    orchestrator.verify(plan)

    return result
