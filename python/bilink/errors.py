from typing import Optional


class BilinkError(Exception):
    """Base class for every error raised while resolving cross-references."""


class DuplicateDefinitionError(BilinkError, ValueError):
    """A name, alias, or id was defined twice in the same corpus. `key` is the offending string."""

    key: str
    kind: str
    path: str

    def __init__(self, key: str, kind: str, path: str) -> None:
        super().__init__(f"Duplicate definition {kind}: {key} in file {path}")
        self.key = key
        self.kind = kind
        self.path = path


class DanglingReferenceError(BilinkError, ValueError):
    """A reference marker named an id (or, for escaped references, a name) with no definition."""

    key: str
    path: str
    position: Optional[str]

    def __init__(self, key: str, path: str, position: Optional[str] = None) -> None:
        where = f"{path}:{position}" if position else path
        super().__init__(f"Reference to undefined '{key}' in file {where}")
        self.key = key
        self.path = path
        self.position = position


class DefinitionNotFoundError(BilinkError, ValueError):
    """A reverse-reference query asked for a definition that was never collected."""

    key: str
    by: str

    def __init__(self, key: str, by: str) -> None:
        super().__init__(f"Definition not found: {by}={key!r}")
        self.key = key
        self.by = by


class DefinitionIdError(BilinkError, ValueError):
    """The id generator produced an empty id for a definition, so it has to be given one explicitly."""

    name: str
    path: str
    position: Optional[str]

    def __init__(self, name: str, path: str, position: Optional[str] = None) -> None:
        where = f"{path}:{position}" if position else path
        super().__init__(
            f"Couldn't generate an id for definition {name!r} in file {where}, give it one explicitly"
        )
        self.name = name
        self.path = path
        self.position = position
