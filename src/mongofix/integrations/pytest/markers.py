"""Translation of pytest markers into fixture directives.

Usage::

    @pytest.mark.clear_collection("users")
    @pytest.mark.init_collection("users", "data/users_init.json")
    @pytest.mark.expected_collection(
        "users", "data/users_check.json", ignored_fields=["_id", "lastname"]
    )
    def test_rename_users():
        ...
"""

from collections.abc import Iterable

from mongofix.comparator import DEFAULT_IGNORED_FIELDS
from mongofix.directives import Check, Clear, Directive, Init, coerce_ignored_fields
from mongofix.exceptions import IncorrectUsageError
from mongofix.fixtures import FixtureLoader

MARKERS = {
    "clear_collection": (
        "clear_collection(name): clear the collection before the test runs"
    ),
    "init_collection": (
        "init_collection(name, file): seed the collection with a JSON fixture "
        "before the test runs"
    ),
    "expected_collection": (
        "expected_collection(name, file, ignored_fields=['_id']): compare the "
        "collection with a JSON fixture after the test ran"
    ),
}


_MISSING = object()


def _argument(marker, position: int, name: str, default=_MISSING):
    if len(marker.args) > position:
        return marker.args[position]
    if name in marker.kwargs:
        return marker.kwargs[name]
    if default is not _MISSING:
        return default

    raise IncorrectUsageError(f"@pytest.mark.{marker.name} needs a '{name}' argument")


def directive_from_marker(
    marker,
    loader: FixtureLoader,
    default_ignored_fields: Iterable[str] = DEFAULT_IGNORED_FIELDS,
) -> Directive:
    """Build the directive described by a mongofix marker.

    Fixture files are loaded right away, so an unavailable fixture fails the
    test before the store is touched.
    """
    name = _argument(marker, 0, "name")

    if marker.name == "clear_collection":
        return Clear(name)

    fixture = loader.load(_argument(marker, 1, "file"))

    if marker.name == "init_collection":
        return Init(name, fixture)

    if marker.name == "expected_collection":
        ignored_fields = _argument(
            marker, 2, "ignored_fields", default=default_ignored_fields
        )
        return Check(name, fixture, coerce_ignored_fields(ignored_fields))

    raise IncorrectUsageError(f"'{marker.name}' is not a mongofix marker")


def has_directives(item) -> bool:
    return any(marker.name in MARKERS for marker in item.iter_markers())


def directives_for(
    item,
    loader: FixtureLoader,
    default_ignored_fields: Iterable[str] = DEFAULT_IGNORED_FIELDS,
) -> list[Directive]:
    """Return the directives attached to a test item.

    Markers are read in `item.iter_markers()` order: the test function's own
    markers first, then those of its class and module. The orchestrator only
    relies on that order within one kind of directive.
    """
    return [
        directive_from_marker(marker, loader, default_ignored_fields)
        for marker in item.iter_markers()
        if marker.name in MARKERS
    ]
