"""Implementation of a dictionary based Store Gateway"""

import copy
import logging
from collections import defaultdict
from uuid import uuid4

from mongofix.document import DocumentCollection
from mongofix.port.gateway import BaseGateway

logger = logging.getLogger(__name__)


class MemoryGateway(BaseGateway):
    """Gateway holding collections in process memory.

    Each collection is a list of plain dictionaries. Documents are copied on
    the way in and on the way out, so nothing a caller holds can change the
    stored data. Like a real store, a document inserted without an `_id`
    receives a generated one.
    """

    def __init__(self, name="default", conn_info: dict = None):
        super().__init__(name, conn_info or {"provider": "memory"})

        # Global in-memory store of collection data.
        self._collections = defaultdict(list)

    def clear(self, collection_name: str) -> None:
        self._collections.pop(collection_name, None)

    def insert_all(self, collection_name: str, documents: DocumentCollection) -> None:
        records = []
        for document in DocumentCollection.coerce(documents):
            record = document.to_dict()
            record.setdefault("_id", uuid4().hex)
            records.append(record)

        self._collections[collection_name].extend(records)

    def read_all(self, collection_name: str) -> DocumentCollection:
        records = self._collections.get(collection_name, [])
        return DocumentCollection(copy.deepcopy(records))

    def is_alive(self) -> bool:
        """Check if the connection is alive"""
        return True

    def _data_reset(self):
        """Reset data"""
        self._collections = defaultdict(list)
