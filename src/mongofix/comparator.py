"""Comparison of an expected fixture against the documents of a live collection."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from mongofix.document import DocumentCollection
from mongofix.exceptions import DocumentNotFound, SizeMismatch

logger = logging.getLogger(__name__)

DEFAULT_IGNORED_FIELDS = frozenset({"_id"})


def compare(
    expected: Iterable[Mapping[str, Any]],
    actual: Iterable[Mapping[str, Any]],
    ignored_fields: Iterable[str] = DEFAULT_IGNORED_FIELDS,
) -> None:
    """Assert that `actual` holds the documents of `expected`.

    Sizes are compared first. Then every expected document, with the ignored
    fields projected out of both sides, must be equal to at least one actual
    document. A single actual document may satisfy several identical expected
    documents; matching does not consume it.

    Raises:
        SizeMismatch: if the two collections do not hold the same number of documents.
        DocumentNotFound: for the first expected document without an equal.
    """
    expected = DocumentCollection.coerce(expected)
    actual = DocumentCollection.coerce(actual)

    if len(expected) != len(actual):
        raise SizeMismatch(len(expected), len(actual))

    ignored_fields = frozenset(ignored_fields or ())
    expected_view = expected.without(ignored_fields)
    actual_view = actual.without(ignored_fields)

    for document in expected_view:
        if document not in actual_view:
            raise DocumentNotFound(document)

    logger.debug(
        f"{len(expected)} documents matched (ignored fields: {sorted(ignored_fields)})"
    )
