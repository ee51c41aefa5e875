"""
Custom mongofix exception classes
"""

from typing import Any


class MongofixException(Exception):
    """Base class for all Exceptions raised within mongofix"""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args)

        self.extra_info = kwargs.get("extra_info", None)

    def __reduce__(self) -> tuple[Any, tuple[Any]]:
        return (self.__class__, (self.args[0],))


class ConfigurationError(MongofixException):
    """Improper Configuration encountered like:
    * An unknown gateway provider
    * A gateway that cannot be reached at startup
    * A missing configuration file or environment variable
    """


class IncorrectUsageError(MongofixException):
    """A directive or marker was declared with invalid arguments"""


class GatewayFailure(MongofixException):
    """The store could not be reached, or rejected an operation"""


class FixtureUnavailable(MongofixException):
    """A fixture file could not be found, read or parsed"""


class CollectionMismatch(MongofixException, AssertionError):
    """Base class for assertion failures raised by collection checks.

    Subclasses `AssertionError` so that test runners report them as
    failures rather than errors.
    """


class SizeMismatch(CollectionMismatch):
    """The expected fixture and the live collection differ in size"""

    def __init__(self, expected: int, actual: int, **kwargs: Any) -> None:
        self.expected = expected
        self.actual = actual

        super().__init__(
            "The expected collection does not have the same number of documents "
            f"as mongodb collection. expected:<{expected}> but was:<{actual}>",
            **kwargs,
        )

    def __reduce__(self) -> tuple[Any, tuple[Any, ...]]:
        return (self.__class__, (self.expected, self.actual))


class DocumentNotFound(CollectionMismatch):
    """An expected document has no equal in the live collection"""

    def __init__(self, document: Any, **kwargs: Any) -> None:
        self.document = document

        super().__init__(
            f"The expected document <{document}> was not found in the mongodb collection.",
            **kwargs,
        )

    def __reduce__(self) -> tuple[Any, tuple[Any]]:
        return (self.__class__, (self.document,))
