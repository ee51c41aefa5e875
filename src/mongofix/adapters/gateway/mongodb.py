"""Store Gateway backed by a MongoDB server, through pymongo"""

import logging

from pymongo import MongoClient
from pymongo.errors import PyMongoError

from mongofix.document import DocumentCollection
from mongofix.exceptions import ConfigurationError, GatewayFailure
from mongofix.port.gateway import BaseGateway

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URI = "mongodb://localhost:27017"
DEFAULT_TIMEOUT_MS = 5000


class MongoGateway(BaseGateway):
    """Gateway to a running `mongod`.

    Connection details are read from `conn_info`:

    * `database_uri`: MongoDB connection string (default `mongodb://localhost:27017`)
    * `database_name`: name of the database holding the test collections (required)
    * `timeout_ms`: server selection timeout, in milliseconds (default 5000)

    The server process itself is started and stopped outside of mongofix.
    """

    def __init__(self, name, conn_info: dict):
        super().__init__(name, conn_info)

        database_name = conn_info.get("database_name")
        if not database_name:
            raise ConfigurationError(
                f"Gateway '{name}' needs a 'database_name' to use MongoDB"
            )

        self.database_uri = conn_info.get("database_uri") or DEFAULT_DATABASE_URI
        self.client = MongoClient(
            self.database_uri,
            serverSelectionTimeoutMS=int(
                conn_info.get("timeout_ms", DEFAULT_TIMEOUT_MS)
            ),
        )
        self.database = self.client[database_name]

    def clear(self, collection_name: str) -> None:
        try:
            self.database[collection_name].drop()
        except PyMongoError as exc:
            logger.error(f"Error while clearing '{collection_name}': {exc}")
            raise GatewayFailure(
                f"Could not clear collection '{collection_name}': {exc}"
            ) from exc

    def insert_all(self, collection_name: str, documents: DocumentCollection) -> None:
        records = DocumentCollection.coerce(documents).to_list()
        if not records:
            # `insert_many` refuses an empty batch
            return

        try:
            self.database[collection_name].insert_many(records, ordered=True)
        except PyMongoError as exc:
            logger.error(f"Error while seeding '{collection_name}': {exc}")
            raise GatewayFailure(
                f"Could not insert documents into collection '{collection_name}': {exc}"
            ) from exc

    def read_all(self, collection_name: str) -> DocumentCollection:
        try:
            return DocumentCollection(self.database[collection_name].find({}))
        except PyMongoError as exc:
            logger.error(f"Error while reading '{collection_name}': {exc}")
            raise GatewayFailure(
                f"Could not read collection '{collection_name}': {exc}"
            ) from exc

    def is_alive(self) -> bool:
        """Check if the connection is alive"""
        try:
            self.client.admin.command("ping")
        except PyMongoError as exc:
            logger.error(f"MongoDB at {self.database_uri} is unreachable: {exc}")
            return False
        return True

    def close(self) -> None:
        self.client.close()
