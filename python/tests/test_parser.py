import re

from bilink import *
from bilink.parser import split_fragments


def test_definition_with_alias_and_id():
    res = BracketMarkerParser().parse_definition(
        "x [[ Widget | Gizmo |  | Thing : wid ]] y", "doc", Position()
    )
    assert len(res.defs) == 1
    d = res.defs[0].definition
    assert d.name == "Widget"
    assert d.alias == ("Gizmo", "Thing")
    assert d.id == "wid"
    assert d.path == "doc"
    assert d.position == Position(1, 3)
    assert [f.content for f in res.fragments] == [
        "x ",
        "[[ Widget | Gizmo |  | Thing : wid ]]",
        " y",
    ]
    assert res.fragments[res.defs[0].index].skip


def test_definition_without_id():
    res = BracketMarkerParser().parse_definition("[[Widget]]", "doc", Position())
    assert res.defs[0].definition.id == ""
    assert res.defs[0].definition.alias == ()


def test_references_are_not_definitions():
    res = BracketMarkerParser().parse_definition(
        "[[#widget]] [[!Widget]]", "doc", Position()
    )
    assert res.defs == []
    assert len(res.fragments) == 1


def test_blank_names_are_not_definitions():
    parser = BracketMarkerParser()
    for text in ["[[]]", "[[ ]]", "| [[  ]] |", "[[ :x]]", "[[\t| Gizmo]]"]:
        res = parser.parse_definition(text, "doc", Position())
        assert res.defs == [], text
        assert len(res.fragments) == 1


def test_markers_do_not_span_lines():
    parser = BracketMarkerParser()
    assert parser.parse_definition("[[Wid\nget]]", "doc", Position()).defs == []
    fragments = [Fragment("[[#wid\nget]]", skip=False, position=Position())]
    assert parser.parse_explicit_or_escaped_reference(fragments, "doc").refs == []


def test_explicit_and_escaped_references():
    fragments = [
        Fragment("see [[#widget]] or ", skip=False, position=Position()),
        Fragment("[[#skipped]]", skip=True, position=Position(1, 20)),
        Fragment("[[! Gizmo ]]", skip=False, position=Position(1, 32)),
    ]
    res = BracketMarkerParser().parse_explicit_or_escaped_reference(fragments, "doc")
    assert [(r.kind, r.target) for r in res.refs] == [
        (RefKind.EXPLICIT, "widget"),
        (RefKind.ESCAPED, "Gizmo"),
    ]
    assert [r.literal for r in res.refs] == ["widget", " Gizmo "]
    assert [res.fragments[r.index].content for r in res.refs] == [
        "[[#widget]]",
        "[[! Gizmo ]]",
    ]
    # The skipped fragment is passed through untouched
    assert res.fragments[3] is fragments[1]


def test_implicit_reference():
    fragments = [
        Fragment("a Widget, b Widget", skip=False, position=Position()),
        Fragment("Widget", skip=True, position=Position(1, 19)),
    ]
    res = BracketMarkerParser().parse_implicit_reference(fragments, "Widget")
    assert [f.content for f in res.fragments] == [
        "a ",
        "Widget",
        ", b ",
        "Widget",
        "Widget",
    ]
    assert res.indices == [1, 3]
    assert res.fragments[3].position == Position(1, 13)


def test_implicit_reference_is_literal():
    res = BracketMarkerParser().parse_implicit_reference(
        [Fragment("C++ and C", skip=False, position=Position())], "C++"
    )
    assert res.indices == [0]


def test_implicit_reference_with_empty_name():
    fragments = [Fragment("text", skip=False, position=Position())]
    res = BracketMarkerParser().parse_implicit_reference(fragments, "")
    assert res.indices == []
    assert res.fragments == fragments


def test_split_fragments_without_match_keeps_fragment():
    f = Fragment("nothing here", skip=False, position=Position(3, 4))
    new_fragments, matches = split_fragments([f], re.compile("widget"))
    assert new_fragments == [f]
    assert new_fragments[0] is f
    assert matches == []


def test_position_advanced_by():
    assert Position(1, 1).advanced_by("abc") == Position(1, 4)
    assert Position(2, 5).advanced_by("ab\ncd") == Position(3, 3)
    assert Position(2, 5).advanced_by("ab\n") == Position(3, 1)
    assert str(Position(4, 2)) == "4:2"
