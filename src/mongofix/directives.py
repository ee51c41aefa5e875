"""Declarative instructions attached to a test.

* `Clear` empties a collection before the test body runs.
* `Init` seeds a collection with a fixture before the test body runs.
* `Check` compares a collection against a fixture after the test body ran.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar

from mongofix.comparator import DEFAULT_IGNORED_FIELDS
from mongofix.document import DocumentCollection
from mongofix.exceptions import IncorrectUsageError


class DirectiveKind(Enum):
    CLEAR = "clear"
    INIT = "init"
    CHECK = "check"


@dataclass(frozen=True)
class Directive:
    collection: str

    kind: ClassVar[DirectiveKind]

    def __post_init__(self):
        if not isinstance(self.collection, str) or not self.collection:
            raise IncorrectUsageError(
                f"{self.__class__.__name__} needs a non-empty collection name, "
                f"got {self.collection!r}"
            )


@dataclass(frozen=True)
class Clear(Directive):
    kind: ClassVar[DirectiveKind] = DirectiveKind.CLEAR


@dataclass(frozen=True)
class Init(Directive):
    fixture: DocumentCollection = field(default_factory=DocumentCollection)

    kind: ClassVar[DirectiveKind] = DirectiveKind.INIT

    def __post_init__(self):
        super().__post_init__()
        object.__setattr__(self, "fixture", DocumentCollection.coerce(self.fixture))


@dataclass(frozen=True)
class Check(Directive):
    fixture: DocumentCollection = field(default_factory=DocumentCollection)
    ignored_fields: frozenset[str] = DEFAULT_IGNORED_FIELDS

    kind: ClassVar[DirectiveKind] = DirectiveKind.CHECK

    def __post_init__(self):
        super().__post_init__()
        object.__setattr__(self, "fixture", DocumentCollection.coerce(self.fixture))

        object.__setattr__(
            self, "ignored_fields", coerce_ignored_fields(self.ignored_fields)
        )


def coerce_ignored_fields(fields: Iterable[str] | str | None) -> frozenset[str]:
    """Normalize a user supplied list of ignored fields"""
    if fields is None:
        return DEFAULT_IGNORED_FIELDS
    if isinstance(fields, str):
        return frozenset({fields})
    return frozenset(fields)
