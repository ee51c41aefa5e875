"""Loading of fixture files.

A fixture file is a UTF-8 encoded JSON array of JSON objects::

    [
        {"lastname": "WHITE", "firstname": "Walt"},
        {"lastname": "PINKMAN", "firstname": "Jesse"}
    ]

The order of the array carries no meaning.
"""

import json
import logging
import os
from collections.abc import Iterable

from mongofix.document import DocumentCollection
from mongofix.exceptions import FixtureUnavailable

logger = logging.getLogger(__name__)


def load_fixture(path: str | os.PathLike) -> DocumentCollection:
    """Parse the fixture file at `path` into a `DocumentCollection`"""
    path = os.fspath(path)

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as exc:
        raise FixtureUnavailable(f"Unable to load file '{path}'") from exc
    except OSError as exc:
        raise FixtureUnavailable(f"Unable to read file '{path}': {exc}") from exc
    except json.JSONDecodeError as exc:
        raise FixtureUnavailable(f"File '{path}' is not valid JSON: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise FixtureUnavailable(f"File '{path}' is not UTF-8 encoded: {exc}") from exc

    if not isinstance(data, list):
        raise FixtureUnavailable(
            f"File '{path}' must hold a JSON array of documents, "
            f"found {type(data).__name__}"
        )

    for index, document in enumerate(data):
        if not isinstance(document, dict):
            raise FixtureUnavailable(
                f"Element {index} of file '{path}' is not a JSON object"
            )

    logger.debug(f"Loaded {len(data)} documents from '{path}'")
    return DocumentCollection(data)


class FixtureLoader:
    """Resolves fixture names against an ordered list of directories.

    Absolute paths are used as they are. Other names, including those with a
    leading `/`, are looked up in each search path in turn and the first
    existing file wins.
    """

    def __init__(self, search_paths: Iterable[str | os.PathLike]):
        self.search_paths = [os.fspath(path) for path in search_paths]

    def resolve(self, name: str) -> str:
        if os.path.isabs(name) and os.path.isfile(name):
            return name

        relative_name = name.lstrip("/\\")
        for directory in self.search_paths:
            candidate = os.path.join(directory, relative_name)
            if os.path.isfile(candidate):
                return candidate

        raise FixtureUnavailable(
            f"Unable to load file '{name}' from {self.search_paths}"
        )

    def load(self, name: str) -> DocumentCollection:
        return load_fixture(self.resolve(name))
