"""Immutable document and collection values shared by every part of mongofix.

A `Document` is an ordered mapping of field names to values. Insertion order is
kept for display, but plays no part in equality::

    >>> Document({"a": 1, "b": 2}) == Document({"b": 2, "a": 1})
    True

Nested mappings are frozen into `Document` instances and sequences into tuples,
so a document can never be mutated after construction. Use `to_dict()` to get a
plain, mutable copy when handing data to a store driver.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any


def _freeze(value: Any) -> Any:
    if isinstance(value, Document):
        return value
    if isinstance(value, Mapping):
        return Document(value)
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Document):
        return value.to_dict()
    if isinstance(value, tuple):
        return [_thaw(item) for item in value]
    return value


def _values_equal(left: Any, right: Any) -> bool:
    """Structural equality that keeps booleans apart from numbers.

    Python considers `True == 1`; a document store does not.
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    if isinstance(left, Document) and isinstance(right, Document):
        return left == right
    if isinstance(left, tuple) and isinstance(right, tuple):
        return len(left) == len(right) and all(
            _values_equal(a, b) for a, b in zip(left, right)
        )
    if isinstance(left, (Document, tuple)) or isinstance(right, (Document, tuple)):
        return False
    return left == right


def _hash_key(value: Any) -> Any:
    if isinstance(value, bool):
        return (bool, value)
    if isinstance(value, tuple):
        return tuple(_hash_key(item) for item in value)
    return value


class Document(Mapping):
    """An immutable, ordered mapping from field name to value"""

    __slots__ = ("_fields", "_hash")

    def __init__(self, fields: Mapping[str, Any] | Iterable[tuple[str, Any]] = ()):
        items = fields.items() if isinstance(fields, Mapping) else fields
        self._fields = {str(key): _freeze(value) for key, value in items}
        self._hash = None

    def __getitem__(self, key: str) -> Any:
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mapping):
            return NotImplemented
        if not isinstance(other, Document):
            other = Document(other)
        if self._fields.keys() != other._fields.keys():
            return False
        return all(
            _values_equal(value, other._fields[key])
            for key, value in self._fields.items()
        )

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(
                frozenset(
                    (key, _hash_key(value)) for key, value in self._fields.items()
                )
            )
        return self._hash

    def __repr__(self) -> str:
        return f"Document({self.to_dict()!r})"

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), default=str)

    def without(self, fields: Iterable[str]) -> Document:
        """Return a copy of this document with the named top-level fields removed.

        Names that are not present are skipped silently.
        """
        excluded = set(fields)
        return Document(
            (key, value) for key, value in self._fields.items() if key not in excluded
        )

    def to_dict(self) -> dict[str, Any]:
        """Return a plain, mutable deep copy of the document"""
        return {key: _thaw(value) for key, value in self._fields.items()}


class DocumentCollection(Sequence):
    """An immutable sequence of documents.

    Order and duplicates are kept as supplied. Whether two collections hold
    "the same" documents is decided by `mongofix.comparator.compare`, not here.
    """

    __slots__ = ("_documents",)

    def __init__(self, documents: Iterable[Mapping[str, Any]] = ()):
        self._documents = tuple(
            document if isinstance(document, Document) else Document(document)
            for document in documents
        )

    @classmethod
    def coerce(cls, documents: Iterable[Mapping[str, Any]] | None) -> DocumentCollection:
        if isinstance(documents, DocumentCollection):
            return documents
        return cls(documents or ())

    def __getitem__(self, index):
        if isinstance(index, slice):
            return DocumentCollection(self._documents[index])
        return self._documents[index]

    def __len__(self) -> int:
        return len(self._documents)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DocumentCollection):
            return NotImplemented
        return self._documents == other._documents

    def __hash__(self) -> int:
        return hash(self._documents)

    def __repr__(self) -> str:
        return f"DocumentCollection({[document.to_dict() for document in self]!r})"

    def without(self, fields: Iterable[str]) -> DocumentCollection:
        """Project every document, dropping the named fields"""
        excluded = frozenset(fields)
        return DocumentCollection(document.without(excluded) for document in self)

    def to_list(self) -> list[dict[str, Any]]:
        return [document.to_dict() for document in self]
