"""Base class for Store Gateways"""

from abc import ABCMeta, abstractmethod

from mongofix.document import DocumentCollection


class BaseGateway(metaclass=ABCMeta):
    """Gateway to the document store that backs a test run.

    The orchestrator only ever clears, seeds and reads whole collections, so
    that is all a gateway has to offer. Calls are blocking.

    A gateway is shared by every test of a run and is not safe for concurrent
    use: tests that touch the same collections must run one after the other.
    """

    def __init__(self, name, conn_info: dict):
        """Initialize Gateway with Connection/Adapter details"""
        self.name = name
        self.conn_info = conn_info

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}: {self.name}>"

    @abstractmethod
    def clear(self, collection_name: str) -> None:
        """Remove every document from the collection"""

    @abstractmethod
    def insert_all(self, collection_name: str, documents: DocumentCollection) -> None:
        """Insert the documents into the collection, in order"""

    @abstractmethod
    def read_all(self, collection_name: str) -> DocumentCollection:
        """Return every document currently held by the collection.

        The result is a snapshot; later writes to the store do not show up in it.
        """

    @abstractmethod
    def is_alive(self) -> bool:
        """Check if the connection is alive"""

    def close(self) -> None:
        """Release connections held by the gateway"""
