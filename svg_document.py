# svg_document.py
# Explicit shape tree for one chart image, serialized to SVG with svgwrite.
# The tree is plain data (kind + attribute map + children); nothing here touches the disk
# except write_svg().

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple, Union

import svgwrite

from logging_config import get_logger
from shapes import Arc

logger = get_logger(__name__)

Number = Union[int, float]


def _attr_name(key: str) -> str:
    return key.rstrip("_").replace("_", "-")


def num(v: Number) -> str:
    """Shortest fixed-point form with at most three decimals (never exponent notation)."""
    s = f"{v:.3f}".rstrip("0").rstrip(".")
    return "0" if s in ("-0", "") else s


def translate(x: Number, y: Number) -> str:
    return f"translate({num(x)},{num(y)})"


def css(**props) -> str:
    """Inline style string; underscores in property names become hyphens."""
    return " ".join(f"{k.replace('_', '-')}: {v};" for k, v in props.items())


@dataclass
class Node:
    kind: str  # "group" | "rect" | "text" | "path" | "arc"
    attrs: Dict[str, object] = field(default_factory=dict)
    children: List["Node"] = field(default_factory=list)
    text: Optional[str] = None
    geometry: Optional[Arc] = None

    def iter(self, kind: Optional[str] = None) -> Iterator["Node"]:
        """Depth-first walk over this node's descendants (self excluded)."""
        for child in self.children:
            if kind is None or child.kind == kind:
                yield child
            yield from child.iter(kind)


class SvgDocument:
    """One SVG image under construction.

    Shapes are appended to a parent node and keep the order they were added in,
    which is also their paint (z) order.
    """

    def __init__(self, width: Number, height: Number):
        self.width = width
        self.height = height
        self.root = Node("group")

    def _append(self, parent: Optional[Node], node: Node) -> Node:
        (parent or self.root).children.append(node)
        return node

    @staticmethod
    def _attrs(attrs: dict) -> Dict[str, object]:
        return {_attr_name(k): v for k, v in attrs.items() if v is not None}

    def add_rect(self, parent: Optional[Node], x: Number, y: Number,
                 width: Number, height: Number, **attrs) -> Node:
        node = Node("rect", {"x": x, "y": y, "width": width, "height": height, **self._attrs(attrs)})
        return self._append(parent, node)

    def add_text(self, parent: Optional[Node], text: str,
                 x: Optional[Number] = None, y: Optional[Number] = None, **attrs) -> Node:
        geometry = {} if x is None else {"x": x, "y": y}
        node = Node("text", {**geometry, **self._attrs(attrs)}, text=str(text))
        return self._append(parent, node)

    def add_group(self, parent: Optional[Node],
                  offset: Optional[Tuple[Number, Number]] = None, **attrs) -> Node:
        node_attrs = self._attrs(attrs)
        if offset is not None:
            node_attrs["transform"] = translate(*offset)
        return self._append(parent, Node("group", node_attrs))

    def add_path(self, parent: Optional[Node], d: str, **attrs) -> Node:
        return self._append(parent, Node("path", {"d": d, **self._attrs(attrs)}))

    def add_arc(self, parent: Optional[Node], inner_radius: Number, outer_radius: Number,
                start_angle: float, end_angle: float, pad_angle: float = 0.0,
                corner_radius: float = 0.0, **attrs) -> Node:
        arc = Arc(inner_radius, outer_radius, start_angle, end_angle, pad_angle, corner_radius)
        return self._append(parent, Node("arc", self._attrs(attrs), geometry=arc))

    # =======================
    # Serialization
    # =======================
    def _element(self, dwg: svgwrite.Drawing, node: Node):
        attrs = dict(node.attrs)
        if node.kind == "group":
            el = dwg.g(**attrs)
            for child in node.children:
                el.add(self._element(dwg, child))
            return el
        if node.kind == "rect":
            insert = (attrs.pop("x"), attrs.pop("y"))
            size = (attrs.pop("width"), attrs.pop("height"))
            return dwg.rect(insert=insert, size=size, **attrs)
        if node.kind == "text":
            insert = (attrs.pop("x"), attrs.pop("y")) if "x" in attrs else None
            return dwg.text(node.text or "", insert=insert, **attrs)
        if node.kind == "path":
            return dwg.path(**attrs)
        if node.kind == "arc":
            return dwg.path(d=node.geometry.path(), **attrs)
        raise ValueError(f"unknown node kind: {node.kind!r}")

    def serialize(self) -> str:
        dwg = svgwrite.Drawing(size=(self.width, self.height), profile="full")
        for child in self.root.children:
            dwg.add(self._element(dwg, child))
        return dwg.tostring()


def write_svg(document: SvgDocument, output_path: Union[str, Path]) -> Path:
    """Serialize and write one document; I/O errors propagate to the caller."""
    path = Path(output_path)
    path.write_text(document.serialize(), encoding="utf-8")
    logger.debug("Wrote %s", path)
    return path
