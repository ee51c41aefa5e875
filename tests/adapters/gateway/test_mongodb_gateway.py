"""Module to test the MongoDB Store Gateway"""

import os
from unittest import mock

import pytest
from pymongo.errors import OperationFailure, ServerSelectionTimeoutError

from mongofix.adapters.gateway import build_gateway
from mongofix.adapters.gateway.mongodb import MongoGateway
from mongofix.exceptions import ConfigurationError, GatewayFailure

CONN_INFO = {
    "provider": "mongodb",
    "database_uri": "mongodb://db.example.com:27017",
    "database_name": "mongofix_test",
}


@pytest.fixture
def mongo_client():
    with mock.patch("mongofix.adapters.gateway.mongodb.MongoClient") as client_cls:
        yield client_cls


@pytest.fixture
def collection(mongo_client):
    database = mongo_client.return_value.__getitem__.return_value
    return database.__getitem__.return_value


class TestConstruction:
    def test_client_is_built_from_connection_info(self, mongo_client):
        gateway = MongoGateway("default", CONN_INFO)

        mongo_client.assert_called_once_with(
            "mongodb://db.example.com:27017", serverSelectionTimeoutMS=5000
        )
        mongo_client.return_value.__getitem__.assert_called_once_with("mongofix_test")
        assert gateway.database_uri == "mongodb://db.example.com:27017"

    def test_defaults(self, mongo_client):
        MongoGateway("default", {"provider": "mongodb", "database_name": "test"})

        mongo_client.assert_called_once_with(
            "mongodb://localhost:27017", serverSelectionTimeoutMS=5000
        )

    def test_timeout_is_configurable(self, mongo_client):
        MongoGateway("default", {**CONN_INFO, "timeout_ms": "250"})

        mongo_client.assert_called_once_with(
            "mongodb://db.example.com:27017", serverSelectionTimeoutMS=250
        )

    def test_database_name_is_required(self, mongo_client):
        with pytest.raises(ConfigurationError) as exc:
            MongoGateway("default", {"provider": "mongodb"})

        assert exc.value.args[0] == (
            "Gateway 'default' needs a 'database_name' to use MongoDB"
        )
        mongo_client.assert_not_called()

    def test_registered_as_mongodb_provider(self, mongo_client):
        gateway = build_gateway(CONN_INFO)

        assert isinstance(gateway, MongoGateway)
        mongo_client.return_value.admin.command.assert_called_once_with("ping")

    def test_unreachable_server_is_a_configuration_error(self, mongo_client):
        mongo_client.return_value.admin.command.side_effect = (
            ServerSelectionTimeoutError("timed out")
        )

        with pytest.raises(ConfigurationError) as exc:
            build_gateway(CONN_INFO)

        assert exc.value.args[0] == (
            "Could not connect to store at mongodb://db.example.com:27017"
        )
        mongo_client.return_value.close.assert_called_once_with()


class TestOperations:
    def test_clear_drops_the_collection(self, collection):
        MongoGateway("default", CONN_INFO).clear("users")

        collection.drop.assert_called_once_with()

    def test_insert_all_keeps_the_order(self, collection):
        MongoGateway("default", CONN_INFO).insert_all(
            "users", [{"lastname": "DOE"}, {"lastname": "GATES"}]
        )

        collection.insert_many.assert_called_once_with(
            [{"lastname": "DOE"}, {"lastname": "GATES"}], ordered=True
        )

    def test_empty_insert_does_not_reach_the_server(self, collection):
        MongoGateway("default", CONN_INFO).insert_all("users", [])

        collection.insert_many.assert_not_called()

    def test_read_all(self, collection):
        collection.find.return_value = iter(
            [{"_id": 1, "lastname": "DOE"}, {"_id": 2, "lastname": "GATES"}]
        )

        users = MongoGateway("default", CONN_INFO).read_all("users")

        collection.find.assert_called_once_with({})
        assert users.to_list() == [
            {"_id": 1, "lastname": "DOE"},
            {"_id": 2, "lastname": "GATES"},
        ]

    @pytest.mark.parametrize(
        "operation, method, args",
        [
            ("clear", "drop", ()),
            ("insert_all", "insert_many", ([{"lastname": "DOE"}],)),
            ("read_all", "find", ()),
        ],
    )
    def test_driver_errors_become_gateway_failures(
        self, collection, operation, method, args
    ):
        getattr(collection, method).side_effect = OperationFailure("not authorized")
        gateway = MongoGateway("default", CONN_INFO)

        with pytest.raises(GatewayFailure) as exc:
            getattr(gateway, operation)("users", *args)

        assert "'users'" in exc.value.args[0]
        assert "not authorized" in exc.value.args[0]
        assert isinstance(exc.value.__cause__, OperationFailure)

    def test_close_closes_the_client(self, mongo_client):
        MongoGateway("default", CONN_INFO).close()

        mongo_client.return_value.close.assert_called_once_with()


@pytest.mark.mongodb
class TestLiveServer:
    @pytest.fixture
    def live_gateway(self):
        gateway = build_gateway(
            {
                "provider": "mongodb",
                "database_uri": os.environ.get(
                    "MONGODB_URI", "mongodb://localhost:27017"
                ),
                "database_name": "mongofix_test",
            }
        )
        gateway.clear("users")
        yield gateway
        gateway.clear("users")
        gateway.close()

    def test_seed_and_read_back(self, live_gateway):
        live_gateway.insert_all("users", [{"lastname": "DOE"}, {"lastname": "GATES"}])

        users = live_gateway.read_all("users")

        assert len(users) == 2
        assert {user["lastname"] for user in users} == {"DOE", "GATES"}
        assert all("_id" in user for user in users)

    def test_clear(self, live_gateway):
        live_gateway.insert_all("users", [{"lastname": "DOE"}])

        live_gateway.clear("users")

        assert len(live_gateway.read_all("users")) == 0
