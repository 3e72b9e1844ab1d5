"""Processing a whole corpus of documents.

A corpus is processed in two passes over the same ordered list of documents.
The first pass only collects definitions, so when the second pass renders each document
every definition in the corpus is already known - a document can implicitly reference a name defined in a later document.

The order of the documents matters: if two documents define the same name the error is reported against the later one,
and references are recorded (and thus reverse-linked) in document order.

Finding and reading the documents, and writing the results, is kept separate from the passes themselves
so the passes can run over in-memory documents in tests.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from bilink.doc import BiDoc
from bilink.model import DefRenderer, Position, RefRenderer

DEFAULT_PATTERNS = ("**/*.md",)


@dataclass(frozen=True)
class SourceDocument:
    path: str  # Used in reverse links, so usually relative to the project directory
    text: str


class Corpus:
    bidoc: BiDoc
    documents: List[SourceDocument]
    _collected: bool

    def __init__(
        self, documents: Iterable[SourceDocument], bidoc: Optional[BiDoc] = None
    ) -> None:
        self.bidoc = bidoc or BiDoc()
        self.documents = list(documents)
        self._collected = False

        paths = [doc.path for doc in self.documents]
        if len(set(paths)) != len(paths):
            raise ValueError(f"Corpus contains the same document path twice: {paths}")

    def collect(self) -> None:
        """Pass 1: register the definitions of every document."""
        if self._collected:
            raise RuntimeError("Corpus definitions have already been collected")
        for doc in self.documents:
            self.bidoc.collect_definition(doc.text, doc.path, Position())
        self._collected = True

    def render(
        self, def_renderer: DefRenderer, ref_renderer: RefRenderer
    ) -> Dict[str, str]:
        """Pass 2: render every document, in corpus order. Returns {path: rendered text}."""
        if not self._collected:
            raise RuntimeError(
                "Corpus.collect() must run before Corpus.render(), otherwise references to later documents can't resolve"
            )
        return {
            doc.path: self.bidoc.render_text(
                doc.path, doc.text, Position(), def_renderer, ref_renderer
            )
            for doc in self.documents
        }

    def reverse_refs(
        self, *, id: Optional[str] = None, name: Optional[str] = None
    ) -> List[str]:
        return self.bidoc.get_reverse_refs(id=id, name=name)


def discover_documents(
    project_dir: Path,
    patterns: Sequence[str] = DEFAULT_PATTERNS,
    encoding: str = "utf-8",
) -> List[SourceDocument]:
    """Find every file under `project_dir` matching any of `patterns`.

    Documents are sorted by their project-relative posix path, which becomes SourceDocument.path."""
    project_dir = project_dir.resolve()
    if not project_dir.is_dir():
        raise ValueError(
            f"Project dir '{project_dir}' either doesn't exist or isn't a directory"
        )

    found: Dict[str, Path] = {}
    for pattern in patterns:
        for p in project_dir.glob(pattern):
            if p.is_file():
                found[p.relative_to(project_dir).as_posix()] = p

    documents = []
    for rel_path in sorted(found):
        with open(found[rel_path], "r", encoding=encoding) as f:
            documents.append(SourceDocument(rel_path, f.read()))
    return documents


def write_documents(
    output_dir: Path, rendered: Mapping[str, str], encoding: str = "utf-8"
) -> List[Path]:
    """Write each rendered document to the same relative path under `output_dir`."""
    written = []
    for rel_path, text in rendered.items():
        out_path = output_dir / Path(rel_path)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        with open(out_path, "w", encoding=encoding) as f:
            f.write(text)
        written.append(out_path)
    return written
