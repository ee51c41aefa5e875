import pytest

from mongofix.adapters.gateway.memory import MemoryGateway
from mongofix.utils.importlib import import_from_string


def test_that_a_class_can_be_imported_from_a_dotted_path():
    cls = import_from_string("mongofix.adapters.gateway.memory.MemoryGateway")

    assert cls is MemoryGateway


@pytest.mark.parametrize(
    "path",
    [
        "mongofix.adapters.gateway.couchdb.CouchGateway",
        "mongofix.adapters.gateway.memory.CouchGateway",
        "MemoryGateway",
    ],
)
def test_that_an_invalid_path_throws_import_error(path):
    with pytest.raises(ImportError) as exc:
        import_from_string(path)

    assert exc.value.args[0].startswith(f"Could not import {path}.")
