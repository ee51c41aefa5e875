"""GatewayFixture: session lifecycle manager for a Store Gateway."""

import logging

from mongofix.adapters.gateway import build_gateway
from mongofix.port.gateway import BaseGateway

logger = logging.getLogger(__name__)


class GatewayFixture:
    """Owns the Store Gateway shared by every test of a session.

    Usage in conftest.py::

        import pytest
        from mongofix.integrations.pytest import GatewayFixture

        @pytest.fixture(scope="session")
        def fixture_gateway():
            fixture = GatewayFixture(
                {
                    "provider": "mongodb",
                    "database_uri": "mongodb://localhost:27017",
                    "database_name": "test",
                }
            )
            yield fixture.setup()
            fixture.teardown()
    """

    def __init__(self, conn_info: dict, name: str = "default") -> None:
        self.conn_info = conn_info
        self.name = name
        self.gateway: BaseGateway | None = None

    def setup(self) -> BaseGateway:
        """Build the gateway and check that the store answers"""
        if self.gateway is None:
            self.gateway = build_gateway(self.conn_info, name=self.name)
            logger.info(f"Store Gateway {self.gateway!r} opened")

        return self.gateway

    def teardown(self) -> None:
        """Close the gateway, if it was opened"""
        if self.gateway is not None:
            self.gateway.close()
            logger.info(f"Store Gateway {self.gateway!r} closed")
            self.gateway = None
