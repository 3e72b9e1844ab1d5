from typing import Dict, Iterator, List, Optional, Tuple

from bilink.errors import DanglingReferenceError, DuplicateDefinitionError
from bilink.model import Definition


class DefinitionRegistry:
    """Responsible for keeping track of every Definition in a corpus.

    Definitions are looked up by name-or-alias through `name2def`, and by id through `id2def`.
    Every name, alias and id must be unique across the whole corpus - the first document to define one wins,
    and trying to register it again raises DuplicateDefinitionError.

    There is no way to remove a definition. A new corpus needs a new registry.
    """

    name2def: Dict[str, Definition]
    id2def: Dict[str, Definition]

    def __init__(self) -> None:
        self.name2def = {}
        self.id2def = {}

    def register(self, d: Definition) -> None:
        """Register `d` under its name, id and every alias.

        Everything is checked before anything is registered, so a failure leaves the registry unchanged.
        `d.id` must already be assigned."""
        assert d.id, f"Definition {d.name!r} must have an id before it is registered"

        if d.name in self.name2def:
            raise DuplicateDefinitionError(d.name, "name", d.path)
        if d.id in self.id2def:
            raise DuplicateDefinitionError(d.id, "id", d.path)
        seen = {d.name}
        for a in d.alias:
            if a in self.name2def or a in seen:
                raise DuplicateDefinitionError(a, "name", d.path)
            seen.add(a)

        self.name2def[d.name] = d
        self.id2def[d.id] = d
        for a in d.alias:
            self.name2def[a] = d

    def get_by_name(self, name: str) -> Optional[Definition]:
        return self.name2def.get(name)

    def get_by_id(self, id: str) -> Optional[Definition]:
        return self.id2def.get(id)

    def resolve_id(self, id: str, path: str, position: Optional[str] = None) -> Definition:
        d = self.id2def.get(id)
        if d is None:
            raise DanglingReferenceError(id, path, position)
        return d

    def resolve_name(
        self, name: str, path: str, position: Optional[str] = None
    ) -> Definition:
        d = self.name2def.get(name)
        if d is None:
            raise DanglingReferenceError(name, path, position)
        return d

    def names(self) -> Iterator[Tuple[str, Definition]]:
        """Every (name-or-alias, Definition) pair in insertion order"""
        return iter(self.name2def.items())

    def names_longest_first(self) -> List[Tuple[str, Definition]]:
        """Every (name-or-alias, Definition) pair, longest name first.

        Names of equal length stay in insertion order."""
        return sorted(self.name2def.items(), key=lambda item: -len(item[0]))

    def definitions(self) -> List[Definition]:
        """Every Definition once, in the order they were registered"""
        return list(self.id2def.values())

    def __len__(self) -> int:
        return len(self.id2def)
