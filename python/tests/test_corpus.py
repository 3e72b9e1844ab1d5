from pathlib import Path

import pytest

from bilink import *
from bilink.corpus import discover_documents, write_documents
from bilink.renderers import plain_def_renderer, plain_ref_renderer


def def_r(d: Definition) -> str:
    return f"<D:{d.id}>"


def ref_r(ref: Reference) -> str:
    return f"<R:{ref.definition.id}:{ref.index}>"


def test_two_pass_resolves_forward_references():
    corpus = Corpus(
        [
            SourceDocument("intro.md", "A Widget uses a Gadget."),
            SourceDocument("widget.md", "[[Widget]] needs a [[#gadget]]."),
            SourceDocument("gadget.md", "[[Gadget|Gizmo]] is part of a Widget."),
        ]
    )
    corpus.collect()
    rendered = corpus.render(def_r, ref_r)

    assert list(rendered) == ["intro.md", "widget.md", "gadget.md"]
    assert rendered["intro.md"] == "A <R:widget:0> uses a <R:gadget:0>."
    assert rendered["widget.md"] == "<D:widget> needs a <R:gadget:1>."
    assert rendered["gadget.md"] == "<D:gadget> is part of a <R:widget:1>."

    assert corpus.reverse_refs(name="Gizmo") == [
        "intro.md#gadget-ref-1",
        "widget.md#gadget-ref-2",
    ]
    assert corpus.reverse_refs(id="widget") == [
        "intro.md#widget-ref-1",
        "gadget.md#widget-ref-2",
    ]


def test_first_document_wins_duplicates():
    corpus = Corpus(
        [
            SourceDocument("a.md", "[[Widget]]"),
            SourceDocument("b.md", "[[Widget]]"),
        ]
    )
    with pytest.raises(DuplicateDefinitionError) as err_info:
        corpus.collect()
    assert err_info.value.path == "b.md"
    assert corpus.bidoc.registry.get_by_name("Widget").path == "a.md"


def test_render_requires_collect():
    corpus = Corpus([SourceDocument("a.md", "[[Widget]]")])
    with pytest.raises(RuntimeError):
        corpus.render(def_r, ref_r)


def test_collect_only_once():
    corpus = Corpus([SourceDocument("a.md", "[[Widget]]")])
    corpus.collect()
    with pytest.raises(RuntimeError):
        corpus.collect()


def test_duplicate_document_paths():
    with pytest.raises(ValueError):
        Corpus([SourceDocument("a.md", ""), SourceDocument("a.md", "")])


def test_custom_bidoc():
    bidoc = BiDoc(ref_id_generator=lambda ref: f"use-{ref.index}")
    corpus = Corpus([SourceDocument("a.md", "[[Widget]] Widget")], bidoc=bidoc)
    corpus.collect()
    corpus.render(plain_def_renderer, plain_ref_renderer)
    assert corpus.reverse_refs(id="widget") == ["a.md#use-0"]


def test_discover_and_write_documents(tmp_path: Path):
    project = tmp_path / "project"
    (project / "guide").mkdir(parents=True)
    (project / "widget.md").write_text("[[Widget]]", encoding="utf-8")
    (project / "guide" / "usage.md").write_text("Use a Widget.", encoding="utf-8")
    (project / "notes.txt").write_text("Widget", encoding="utf-8")

    documents = discover_documents(project)
    assert documents == [
        SourceDocument("guide/usage.md", "Use a Widget."),
        SourceDocument("widget.md", "[[Widget]]"),
    ]

    # Overlapping patterns don't produce the same document twice
    assert [d.path for d in discover_documents(project, ["**/*.md", "*.md", "*.txt"])] == [
        "guide/usage.md",
        "notes.txt",
        "widget.md",
    ]

    corpus = Corpus(documents)
    corpus.collect()
    rendered = corpus.render(plain_def_renderer, plain_ref_renderer)

    out = tmp_path / "out"
    written = write_documents(out, rendered)
    assert written == [out / "guide" / "usage.md", out / "widget.md"]
    assert (out / "guide" / "usage.md").read_text(encoding="utf-8") == "Use a Widget."


def test_discover_missing_project(tmp_path: Path):
    with pytest.raises(ValueError):
        discover_documents(tmp_path / "missing")
