"""
Recognizing markers in text.

The engine in `bilink.doc` doesn't know what a marker looks like - it asks a MarkerParser to find
definitions, explicit/escaped references and implicit name occurrences inside the not-yet-matched fragments of a document.
Each parse returns a refined list of fragments, where every match has become its own `skip=True` fragment,
and a list of descriptors pointing at those fragments by index.

The default grammar, BracketMarkerParser:
- `[[Name]]`, `[[Name|Alias|Other Alias]]`, `[[Name:some-id]]`, `[[Name|Alias:some-id]]` define a concept
- `[[#some-id]]` explicitly references a concept by id
- `[[!Name]]` is an escaped reference: it displays `Name` without linking and without being scanned for implicit references
- any other occurrence of a known name or alias is an implicit reference
"""

import abc
import re
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from typing_extensions import override

from bilink.model import Definition, Fragment, Position, RefKind


@dataclass
class DefinitionMatch:
    definition: Definition
    index: int  # into DefinitionParseResult.fragments


@dataclass
class DefinitionParseResult:
    defs: List[DefinitionMatch]
    fragments: List[Fragment]


@dataclass
class ReferenceMatch:
    kind: RefKind
    # An id for explicit references, a name for escaped ones, without surrounding whitespace
    target: str
    # The text between the marker delimiters exactly as written
    literal: str
    index: int  # into ReferenceParseResult.fragments


@dataclass
class ReferenceParseResult:
    refs: List[ReferenceMatch]
    fragments: List[Fragment]


@dataclass
class ImplicitParseResult:
    indices: List[int]  # into ImplicitParseResult.fragments
    fragments: List[Fragment]


class MarkerParser(abc.ABC):
    def parse_definition(
        self, text: str, path: str, position: Position
    ) -> DefinitionParseResult:
        return self.parse_definition_from_fragments(
            [Fragment(text, skip=False, position=position)], path
        )

    @abc.abstractmethod
    def parse_definition_from_fragments(
        self, fragments: Sequence[Fragment], path: str
    ) -> DefinitionParseResult: ...

    @abc.abstractmethod
    def parse_explicit_or_escaped_reference(
        self, fragments: Sequence[Fragment], path: str
    ) -> ReferenceParseResult: ...

    @abc.abstractmethod
    def parse_implicit_reference(
        self, fragments: Sequence[Fragment], name: str
    ) -> ImplicitParseResult: ...


def split_fragments(
    fragments: Sequence[Fragment], pattern: "re.Pattern[str]"
) -> Tuple[List[Fragment], List[Tuple[int, "re.Match[str]"]]]:
    """Split every non-skip fragment around the matches of `pattern`.

    Returns the new fragment list and (index into the new list, match) for every match in document order.
    Skipped fragments pass through untouched."""
    new_fragments: List[Fragment] = []
    matches: List[Tuple[int, re.Match[str]]] = []

    for f in fragments:
        if f.skip:
            new_fragments.append(f)
            continue

        pos = f.position
        consumed = 0
        for m in pattern.finditer(f.content):
            if m.start() == m.end():
                continue
            before = f.content[consumed : m.start()]
            if before:
                new_fragments.append(Fragment(before, skip=False, position=pos))
                pos = pos.advanced_by(before)
            matches.append((len(new_fragments), m))
            new_fragments.append(Fragment(m.group(0), skip=True, position=pos))
            pos = pos.advanced_by(m.group(0))
            consumed = m.end()

        rest = f.content[consumed:]
        if consumed == 0:
            new_fragments.append(f)
        elif rest:
            new_fragments.append(Fragment(rest, skip=False, position=pos))

    return new_fragments, matches


class BracketMarkerParser(MarkerParser):
    # The name must contain something other than whitespace, so `[[ ]]` in a table is left alone
    DEFINITION_REGEX = re.compile(
        r"\[\[(?![#!])([ \t]*[^\s\[\]|:][^\[\]\n|:]*)((?:\|[^\[\]\n|:]*)*)(?::([^\[\]\n|:]*))?\]\]"
    )
    REFERENCE_REGEX = re.compile(r"\[\[([#!])([^\[\]\n]+)\]\]")

    @override
    def parse_definition_from_fragments(
        self, fragments: Sequence[Fragment], path: str
    ) -> DefinitionParseResult:
        new_fragments, matches = split_fragments(fragments, self.DEFINITION_REGEX)
        defs = []
        for index, m in matches:
            name = m.group(1).strip()
            alias = tuple(
                a.strip() for a in (m.group(2) or "").split("|") if a.strip()
            )
            id = (m.group(3) or "").strip()
            defs.append(
                DefinitionMatch(
                    Definition(
                        name=name,
                        alias=alias,
                        id=id,
                        path=path,
                        position=new_fragments[index].position,
                    ),
                    index,
                )
            )
        return DefinitionParseResult(defs, new_fragments)

    @override
    def parse_explicit_or_escaped_reference(
        self, fragments: Sequence[Fragment], path: str
    ) -> ReferenceParseResult:
        new_fragments, matches = split_fragments(fragments, self.REFERENCE_REGEX)
        refs = [
            ReferenceMatch(
                kind=RefKind.EXPLICIT if m.group(1) == "#" else RefKind.ESCAPED,
                target=m.group(2).strip(),
                literal=m.group(2),
                index=index,
            )
            for index, m in matches
        ]
        return ReferenceParseResult(refs, new_fragments)

    @override
    def parse_implicit_reference(
        self, fragments: Sequence[Fragment], name: str
    ) -> ImplicitParseResult:
        if not name:
            return ImplicitParseResult([], list(fragments))
        new_fragments, matches = split_fragments(fragments, re.compile(re.escape(name)))
        return ImplicitParseResult([index for index, _ in matches], new_fragments)
