"""Execution of fixture directives around a test body.

Directives can be attached to a test in any order. They always run as::

    Clear* -> Init* -> body -> Check*

Each kind keeps the relative order in which its directives were declared.
Checks only run when the body completed without raising.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from mongofix.comparator import compare
from mongofix.directives import Check, Clear, Directive, DirectiveKind, Init
from mongofix.exceptions import (
    CollectionMismatch,
    GatewayFailure,
    IncorrectUsageError,
    MongofixException,
)
from mongofix.port.gateway import BaseGateway

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FixturePlan:
    """Directives of one test, bucketed by kind"""

    clears: tuple[Clear, ...] = ()
    inits: tuple[Init, ...] = ()
    checks: tuple[Check, ...] = ()

    @classmethod
    def from_directives(cls, directives: Iterable[Directive]) -> FixturePlan:
        buckets = {kind: [] for kind in DirectiveKind}
        for directive in directives:
            if not isinstance(directive, Directive):
                raise IncorrectUsageError(f"{directive!r} is not a fixture directive")
            buckets[directive.kind].append(directive)

        return cls(
            clears=tuple(buckets[DirectiveKind.CLEAR]),
            inits=tuple(buckets[DirectiveKind.INIT]),
            checks=tuple(buckets[DirectiveKind.CHECK]),
        )

    def __bool__(self) -> bool:
        return bool(self.clears or self.inits or self.checks)


class FixtureOrchestrator:
    """Runs directives against one Store Gateway.

    The gateway is owned by the caller, which is responsible for opening it
    before the first test and closing it after the last one.
    """

    def __init__(self, gateway: BaseGateway) -> None:
        self.gateway = gateway

    def run(self, directives: Iterable[Directive], body: Callable[[], object]) -> None:
        """Run `body` wrapped by the given directives.

        A failing Clear or Init aborts before the body runs. A failing body
        propagates and no Check is evaluated.
        """
        plan = FixturePlan.from_directives(directives)

        self.prepare(plan)
        body()
        self.verify(plan)

    def prepare(self, plan: FixturePlan) -> None:
        """Execute all Clear directives, then all Init directives"""
        for directive in plan.clears:
            logger.info(
                f"Clear directive found -> collection '{directive.collection}' will be cleared"
            )
            self._call_gateway("clear", directive.collection)

        for directive in plan.inits:
            logger.info(
                f"Init directive found -> collection '{directive.collection}' "
                f"will be initialized with {len(directive.fixture)} documents"
            )
            self._call_gateway("insert_all", directive.collection, directive.fixture)

    def verify(self, plan: FixturePlan) -> None:
        """Evaluate every Check directive and raise the first failure.

        A collection the store fails to read counts as a failed check. Failures
        of later checks are attached to the raised exception as notes.
        """
        failures: list[CollectionMismatch | GatewayFailure] = []

        for directive in plan.checks:
            logger.info(
                f"Check directive found -> collection '{directive.collection}' will be "
                f"checked with ignored fields: {sorted(directive.ignored_fields)}"
            )
            try:
                actual = self._call_gateway("read_all", directive.collection)
                compare(directive.fixture, actual, directive.ignored_fields)
            except (CollectionMismatch, GatewayFailure) as exc:
                exc.add_note(f"collection: '{directive.collection}'")
                logger.error(f"Check of collection '{directive.collection}' failed: {exc}")
                failures.append(exc)

        if failures:
            first, *others = failures
            for other in others:
                first.add_note(f"also failed, {other.__notes__[-1]}: {other}")
            raise first

    def _call_gateway(self, operation: str, collection_name: str, *args):
        try:
            return getattr(self.gateway, operation)(collection_name, *args)
        except MongofixException:
            raise
        except Exception as exc:
            logger.error(f"Store Gateway {operation} on '{collection_name}' failed: {exc}")
            raise GatewayFailure(
                f"Store Gateway {self.gateway!r} failed during {operation} "
                f"on collection '{collection_name}': {exc}"
            ) from exc
