import pickle

import pytest

from mongofix.exceptions import (
    CollectionMismatch,
    ConfigurationError,
    DocumentNotFound,
    GatewayFailure,
    MongofixException,
    SizeMismatch,
)
from mongofix.document import Document


def test_pickling_of_exceptions():
    exc = GatewayFailure("store is down")

    unpickled_exc = pickle.loads(pickle.dumps(exc))

    assert exc.args[0] == unpickled_exc.args[0]


class TestMongofixException:
    def test_exception_initialization(self):
        exc = MongofixException("An error occurred")

        assert exc.args[0] == "An error occurred"
        assert exc.extra_info is None

    def test_exception_with_extra_info(self):
        exc = ConfigurationError("An error occurred", extra_info="Extra info")

        assert exc.extra_info == "Extra info"

    def test_exception_no_args(self):
        assert MongofixException().args == ()


class TestCollectionMismatch:
    def test_mismatches_are_assertion_errors(self):
        assert issubclass(CollectionMismatch, AssertionError)
        assert issubclass(SizeMismatch, MongofixException)

    def test_size_mismatch(self):
        exc = SizeMismatch(3, 4)

        assert (exc.expected, exc.actual) == (3, 4)
        assert str(exc) == (
            "The expected collection does not have the same number of documents "
            "as mongodb collection. expected:<3> but was:<4>"
        )

    def test_document_not_found(self):
        exc = DocumentNotFound(Document({"lastname": "WHITE", "firstname": "Walt"}))

        assert str(exc) == (
            'The expected document <{"lastname": "WHITE", "firstname": "Walt"}> '
            "was not found in the mongodb collection."
        )

    @pytest.mark.parametrize(
        "exc",
        [SizeMismatch(3, 4), DocumentNotFound(Document({"lastname": "WHITE"}))],
    )
    def test_pickling_keeps_the_details(self, exc):
        unpickled_exc = pickle.loads(pickle.dumps(exc))

        assert type(unpickled_exc) is type(exc)
        assert str(unpickled_exc) == str(exc)
