__all__ = [
    "BiDoc",
    "Corpus",
    "SourceDocument",
    "Definition",
    "DefinitionRegistry",
    "Fragment",
    "Position",
    "Reference",
    "RefKind",
    "DefRenderer",
    "RefRenderer",
    "DefIdGenerator",
    "RefIdGenerator",
    "MarkerParser",
    "BracketMarkerParser",
    "BilinkError",
    "DuplicateDefinitionError",
    "DanglingReferenceError",
    "DefinitionNotFoundError",
    "DefinitionIdError",
    "slugify",
    "default_ref_id",
]

from bilink.corpus import Corpus, SourceDocument
from bilink.doc import BiDoc
from bilink.errors import (
    BilinkError,
    DanglingReferenceError,
    DefinitionIdError,
    DefinitionNotFoundError,
    DuplicateDefinitionError,
)
from bilink.ids import default_ref_id, slugify
from bilink.model import (
    DefIdGenerator,
    Definition,
    DefRenderer,
    Fragment,
    Position,
    RefIdGenerator,
    RefKind,
    Reference,
    RefRenderer,
)
from bilink.parser import BracketMarkerParser, MarkerParser
from bilink.registry import DefinitionRegistry
