__version__ = "0.1.0"

from .comparator import DEFAULT_IGNORED_FIELDS, compare
from .directives import Check, Clear, Directive, DirectiveKind, Init
from .document import Document, DocumentCollection
from .fixtures import FixtureLoader, load_fixture
from .orchestrator import FixtureOrchestrator, FixturePlan
from .port import BaseGateway
from .utils import get_version

__all__ = [
    "BaseGateway",
    "Check",
    "Clear",
    "compare",
    "DEFAULT_IGNORED_FIELDS",
    "Directive",
    "DirectiveKind",
    "Document",
    "DocumentCollection",
    "FixtureLoader",
    "FixtureOrchestrator",
    "FixturePlan",
    "get_version",
    "Init",
    "load_fixture",
]
