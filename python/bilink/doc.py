"""The phases of resolving cross-references in a corpus:

1. Collecting
   Every document is scanned for definitions with `BiDoc.collect_definition()`.
   This only fills in the registry. Ids are generated for definitions that don't specify one,
   and a name, alias or id defined twice anywhere in the corpus is an error.
2. Rendering
   Once every definition in the corpus is known, each document is rendered with `BiDoc.render_text()`.
   This rewrites the document as a list of fragments in three stages, strictly in order:
   - definitions are replaced with the output of the definition renderer
   - explicit `[[#id]]` references are replaced with the output of the reference renderer, and escaped references with their plain text
   - every remaining occurrence of a known name or alias is replaced with the output of the reference renderer
   Every reference found is appended to its Definition's `refs`.
3. Querying
   `BiDoc.get_reverse_refs()` maps the references of a definition to `path#anchor` strings,
   so a definition can link back to every place it was used.

Collecting must finish before rendering starts, otherwise documents can't refer to definitions that come later in the corpus.
`bilink.corpus.Corpus` enforces that.
"""

import dataclasses
from typing import List, Optional, Sequence

from bilink.errors import DefinitionIdError, DefinitionNotFoundError
from bilink.ids import default_ref_id, slugify
from bilink.model import (
    Definition,
    DefIdGenerator,
    DefRenderer,
    Fragment,
    Position,
    RefIdGenerator,
    RefKind,
    Reference,
    RefRenderer,
)
from bilink.parser import BracketMarkerParser, DefinitionParseResult, MarkerParser
from bilink.registry import DefinitionRegistry


class BiDoc:
    registry: DefinitionRegistry
    parser: MarkerParser
    def_id_generator: DefIdGenerator
    ref_id_generator: RefIdGenerator

    def __init__(
        self,
        def_id_generator: Optional[DefIdGenerator] = None,
        ref_id_generator: Optional[RefIdGenerator] = None,
        parser: Optional[MarkerParser] = None,
    ) -> None:
        self.def_id_generator = def_id_generator or slugify
        self.ref_id_generator = ref_id_generator or default_ref_id
        self.parser = parser or BracketMarkerParser()
        self.registry = DefinitionRegistry()

    def _ensure_id(self, d: Definition) -> None:
        if not d.id:
            d.id = self.def_id_generator(d.name)
            if not d.id:
                raise DefinitionIdError(d.name, d.path, str(d.position))

    def collect_definition(
        self, text: str, path: str, position: Position = Position()
    ) -> DefinitionParseResult:
        """Parse the definitions in `text` and add them to the registry.

        Raises DuplicateDefinitionError if any name, alias or id has been seen before in this corpus."""
        res = self.parser.parse_definition(text, path, position)
        for m in res.defs:
            self._ensure_id(m.definition)
            self.registry.register(m.definition)
        return res

    def _render_definitions(
        self, path: str, fragments: Sequence[Fragment], renderer: DefRenderer
    ) -> List[Fragment]:
        res = self.parser.parse_definition_from_fragments(fragments, path)
        new_fragments = list(res.fragments)
        for m in res.defs:
            # Prefer the collected Definition, so the renderer sees the same object the references are recorded against
            d = self.registry.get_by_name(m.definition.name)
            if d is None or d.path != path:
                d = m.definition
            self._ensure_id(d)

            old = new_fragments[m.index]
            rendered = Fragment(renderer(d), skip=True, position=old.position)
            new_fragments[m.index] = rendered
            d.fragment = rendered
        return new_fragments

    def _render_explicit_or_escaped_refs(
        self, path: str, fragments: Sequence[Fragment], renderer: RefRenderer
    ) -> List[Fragment]:
        res = self.parser.parse_explicit_or_escaped_reference(fragments, path)
        new_fragments = list(res.fragments)
        for m in res.refs:
            old = new_fragments[m.index]
            if m.kind == RefKind.EXPLICIT:
                d = self.registry.resolve_id(m.target, path, str(old.position))
                # Explicit references always link, so they get the next index
                index = d.last_ref_index() + 1
                name = d.name
            else:
                d = self.registry.resolve_name(m.target, path, str(old.position))
                # Escaped references are never linked to, so they share the index of the last reference
                index = d.last_ref_index()
                name = m.literal

            ref = Reference(
                definition=d,
                path=path,
                fragment=old,
                kind=m.kind,
                index=index,
                name=name,
            )
            if m.kind == RefKind.EXPLICIT:
                content = renderer(ref)
            else:
                content = ref.name
            rendered = Fragment(content, skip=True, position=old.position)
            new_fragments[m.index] = rendered
            d.refs.append(dataclasses.replace(ref, fragment=rendered))
        return new_fragments

    def _render_implicit_refs(
        self,
        path: str,
        fragments: Sequence[Fragment],
        d: Definition,
        name: str,
        renderer: RefRenderer,
    ) -> List[Fragment]:
        """Render every occurrence of `name` (which must be the name or an alias of `d`) in the non-skip fragments"""
        res = self.parser.parse_implicit_reference(fragments, name)
        new_fragments = list(res.fragments)
        for index in res.indices:
            old = new_fragments[index]
            ref = Reference(
                definition=d,
                path=path,
                fragment=old,
                kind=RefKind.IMPLICIT,
                index=d.last_ref_index() + 1,
                name=old.content,
            )
            rendered = Fragment(renderer(ref), skip=True, position=old.position)
            new_fragments[index] = rendered
            d.refs.append(dataclasses.replace(ref, fragment=rendered))
        return new_fragments

    def render_fragments(
        self,
        path: str,
        text: str,
        position: Position,
        def_renderer: DefRenderer,
        ref_renderer: RefRenderer,
    ) -> List[Fragment]:
        """Run every rendering stage over `text` and return the final list of fragments."""
        fragments = [Fragment(text, skip=False, position=position)]

        fragments = self._render_definitions(path, fragments, def_renderer)
        fragments = self._render_explicit_or_escaped_refs(path, fragments, ref_renderer)
        # Longest names first, so "Foo Bar" is never split up by a shorter name "Foo"
        for name, d in self.registry.names_longest_first():
            fragments = self._render_implicit_refs(
                path, fragments, d, name, ref_renderer
            )

        return fragments

    def render_text(
        self,
        path: str,
        text: str,
        position: Position,
        def_renderer: DefRenderer,
        ref_renderer: RefRenderer,
    ) -> str:
        """Render the definitions and references in `text`, recording every reference against its Definition.

        All the definitions referenced by `text` must have been collected already."""
        fragments = self.render_fragments(
            path, text, position, def_renderer, ref_renderer
        )
        return "".join(f.content for f in fragments)

    def lookup(
        self, *, id: Optional[str] = None, name: Optional[str] = None
    ) -> Definition:
        """Find a definition by exactly one of `id` or `name` (which may be an alias)."""
        if (id is None) == (name is None):
            raise TypeError("lookup() requires exactly one of 'id' or 'name'")
        if id is not None:
            d = self.registry.get_by_id(id)
            if d is None:
                raise DefinitionNotFoundError(id, "id")
        else:
            assert name is not None
            d = self.registry.get_by_name(name)
            if d is None:
                raise DefinitionNotFoundError(name, "name")
        return d

    def get_reverse_refs(
        self, *, id: Optional[str] = None, name: Optional[str] = None
    ) -> List[str]:
        """Return the `path#anchor` link address of every reference to a definition, in the order they were found."""
        d = self.lookup(id=id, name=name)
        return [f"{ref.path}#{self.ref_id_generator(ref)}" for ref in d.refs]
