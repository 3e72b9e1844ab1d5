"""
Definitions, references, and the fragments of text they live in.

A document is processed as an ordered list of Fragments. Every rewrite stage takes the list,
splits the fragments it hasn't seen before around the markers it recognizes, and emits a new list.
Fragments produced by a match are marked `skip=True` so no later stage rescans them -
e.g. the rendered label of a definition must never be mistaken for an implicit reference to itself.
"""

import dataclasses
from enum import Enum
from typing import Callable, List, Optional, Tuple


@dataclasses.dataclass(frozen=True)
class Position:
    """The 1-based line and column of the first character of a Fragment."""

    line: int = 1
    column: int = 1

    def advanced_by(self, text: str) -> "Position":
        """The position of the character immediately after `text`, if `text` starts at this position."""
        newlines = text.count("\n")
        if newlines == 0:
            return Position(self.line, self.column + len(text))
        return Position(self.line + newlines, len(text) - text.rfind("\n"))

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclasses.dataclass(frozen=True)
class Fragment:
    content: str
    skip: bool
    position: Position


class RefKind(Enum):
    EXPLICIT = "explicit"
    ESCAPED = "escaped"
    IMPLICIT = "implicit"


@dataclasses.dataclass(eq=False)
class Definition:
    """A named concept which can be referenced from anywhere in the corpus.

    `id` may be empty straight out of the parser, in which case the engine generates one from the name.
    `fragment` is the rendered definition site, and is None until the definition has been rendered.
    `refs` holds every Reference to this definition in the order they were discovered, across all documents.

    Definitions compare by identity, so two Definitions with the same name are never "equal".
    """

    name: str
    alias: Tuple[str, ...] = ()
    id: str = ""
    path: str = ""
    position: Position = Position()
    fragment: Optional[Fragment] = None
    refs: List["Reference"] = dataclasses.field(default_factory=list)

    def names(self) -> Tuple[str, ...]:
        """The primary name followed by every alias"""
        return (self.name,) + self.alias

    def last_ref_index(self) -> int:
        """The index of the most recent reference, or -1 if there are none"""
        if not self.refs:
            return -1
        return self.refs[-1].index

    def __repr__(self) -> str:
        return f"Definition(name={self.name!r}, alias={self.alias!r}, id={self.id!r}, path={self.path!r}, refs={len(self.refs)})"


@dataclasses.dataclass(frozen=True)
class Reference:
    definition: Definition
    path: str
    fragment: Fragment
    kind: RefKind
    # Ordinal among the linking references of `definition`.
    # Escaped references reuse the ordinal of the previous reference.
    index: int
    # The text written at the site: the definition name for explicit refs, the literal text otherwise
    name: str


DefRenderer = Callable[[Definition], str]
RefRenderer = Callable[[Reference], str]
DefIdGenerator = Callable[[str], str]
RefIdGenerator = Callable[[Reference], str]
