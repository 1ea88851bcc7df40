"""Tests for the SVG shape tree and its serialization."""
from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

from svg_document import Node, SvgDocument, css, num, translate, write_svg

SVG_NS = "{http://www.w3.org/2000/svg}"


def _children(svg: str) -> list[ET.Element]:
    root = ET.fromstring(svg)
    return [el for el in root if el.tag != f"{SVG_NS}defs"]


def test_root_declares_size_and_namespace() -> None:
    svg = SvgDocument(400, 270).serialize()
    root = ET.fromstring(svg)

    assert root.tag == f"{SVG_NS}svg"
    assert root.get("width") == "400"
    assert root.get("height") == "270"
    assert 'xmlns="http://www.w3.org/2000/svg"' in svg


def test_shapes_keep_insertion_order() -> None:
    doc = SvgDocument(100, 100)
    doc.add_rect(None, 0, 0, 100, 100, fill="#000000")
    doc.add_text(None, "Title", x=50, y=20, text_anchor="middle")
    group = doc.add_group(None, offset=(10, 20))
    doc.add_path(group, "M0,0H10", stroke="#ffffff")

    children = _children(doc.serialize())
    assert [el.tag for el in children] == [f"{SVG_NS}rect", f"{SVG_NS}text", f"{SVG_NS}g"]
    assert children[1].text == "Title"
    assert children[1].get("text-anchor") == "middle"
    assert children[2].get("transform") == "translate(10,20)"
    assert children[2][0].get("d") == "M0,0H10"


def test_underscored_attributes_become_hyphenated() -> None:
    doc = SvgDocument(10, 10)
    node = doc.add_rect(None, 0, 0, 5, 5, stroke_width=1, class_="icon", rx=None)

    assert node.attrs["stroke-width"] == 1
    assert node.attrs["class"] == "icon"
    assert "rx" not in node.attrs
    assert 'stroke-width="1"' in doc.serialize()


def test_arc_node_serializes_as_path() -> None:
    doc = SvgDocument(200, 200)
    group = doc.add_group(None, offset=(100, 100))
    node = doc.add_arc(group, 30, 50, 0, 1.0, pad_angle=0.03, corner_radius=1, fill="#3178c6")

    assert node.kind == "arc"
    assert node.geometry.outer_radius == 50

    path = _children(doc.serialize())[0][0]
    assert path.tag == f"{SVG_NS}path"
    assert path.get("d") == node.geometry.path()
    assert path.get("fill") == "#3178c6"


def test_iter_walks_nested_nodes() -> None:
    doc = SvgDocument(10, 10)
    outer = doc.add_group(None)
    inner = doc.add_group(outer)
    doc.add_text(inner, "a", x=0, y=0)
    doc.add_text(outer, "b", x=0, y=0)

    assert [n.text for n in doc.root.iter("text")] == ["a", "b"]
    assert len(list(doc.root.iter())) == 4


def test_text_without_position() -> None:
    doc = SvgDocument(10, 10)
    doc.add_text(None, "12.5%", transform=translate(1.23456, -0.0001))

    text = _children(doc.serialize())[0]
    assert text.get("x") is None
    assert text.get("transform") == "translate(1.235,0)"


def test_unknown_kind_rejected() -> None:
    doc = SvgDocument(10, 10)
    doc.root.children.append(Node("ellipse"))
    with pytest.raises(ValueError):
        doc.serialize()


def test_helpers() -> None:
    assert num(75.0) == "75"
    assert num(-0.0004) == "0"
    assert num(2.5) == "2.5"
    assert css(font_family="sans-serif", font_size="14px") == "font-family: sans-serif; font-size: 14px;"


def test_serialize_is_deterministic() -> None:
    def build() -> str:
        doc = SvgDocument(50, 50)
        doc.add_arc(doc.add_group(None, offset=(25, 25)), 10, 20, 0, 2.0, pad_angle=0.03)
        return doc.serialize()

    assert build() == build()


def test_write_svg(tmp_path: Path) -> None:
    doc = SvgDocument(10, 10)
    doc.add_rect(None, 0, 0, 10, 10)

    path = write_svg(doc, tmp_path / "out.svg")
    assert path.read_text(encoding="utf-8") == doc.serialize()


def test_write_svg_failure_propagates(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        write_svg(SvgDocument(10, 10), tmp_path / "missing" / "out.svg")
