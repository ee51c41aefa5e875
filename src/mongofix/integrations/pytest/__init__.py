"""Pytest integration for mongofix.

Provides :class:`GatewayFixture` for managing the Store Gateway lifecycle in
tests, and an auto-registered pytest plugin that turns the
``clear_collection``, ``init_collection`` and ``expected_collection`` markers
into fixture directives.
"""

from .markers import directives_for
from .testbed import GatewayFixture

__all__ = [
    "GatewayFixture",
    "directives_for",
]
