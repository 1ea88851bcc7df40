"""Tests for the donut chart layout and renderer."""
from __future__ import annotations

import math
from pathlib import Path

import pytest

from chart_data import normalize
from donut import generate_donut, pie_layout, render_donut, shows_label
from shapes import TAU
from svg_document import translate

SCENARIO = {"TypeScript": 45, "Python": 25, "Rust": 20, "C#": 7, "Dockerfile": 3}


def _parts(doc):
    """Background, title, legend group and chart group, in paint order."""
    background, title, legend, chart = doc.root.children
    return background, title, legend, chart


def _labels(doc) -> list[str]:
    return [n.text for n in _parts(doc)[3].iter("text")]


def test_pie_layout_spans_full_circle() -> None:
    slices = pie_layout(normalize({"a": 3, "b": 1}), pad_angle=0.03)

    assert slices[0].start_angle == 0
    assert slices[-1].end_angle == pytest.approx(TAU)
    assert slices[0].end_angle == slices[1].start_angle
    assert slices[0].end_angle - slices[0].start_angle == pytest.approx((TAU - 0.06) * 0.75 + 0.03)
    assert all(s.pad_angle == 0.03 for s in slices)


def test_pie_layout_zero_total_collapses_to_pad() -> None:
    slices = pie_layout(normalize({"A": 0, "B": 0}), pad_angle=0.03)
    assert [s.end_angle - s.start_angle for s in slices] == pytest.approx([0.03, 0.03])


def test_pie_layout_empty() -> None:
    assert pie_layout([]) == []


def test_render_scenario_labels_only_large_slices() -> None:
    doc = render_donut(normalize(SCENARIO), "By Total Bytes")

    assert _labels(doc) == ["45.0%", "25.0%", "20.0%"]
    assert len(list(_parts(doc)[3].iter("arc"))) == 5


def test_render_layout() -> None:
    doc = render_donut(normalize(SCENARIO), "By Total Bytes")
    background, title, legend, chart = _parts(doc)

    assert background.kind == "rect"
    assert background.attrs["width"] == 400 and background.attrs["height"] == 270
    assert background.attrs["rx"] == 10
    assert title.text == "By Total Bytes"
    assert title.attrs["x"] == 200
    assert title.attrs["text-anchor"] == "middle"

    # five 30px rows centred in the 200px content band below the 50px title band
    assert legend.attrs["transform"] == "translate(20,75)"
    assert chart.attrs["transform"] == "translate(280,150)"

    arc = next(chart.iter("arc")).geometry
    assert arc.outer_radius == 80
    assert arc.inner_radius == pytest.approx(48)
    assert arc.corner_radius == 1


def test_legend_rows() -> None:
    doc = render_donut(normalize(SCENARIO), "By Total Bytes")
    legend = _parts(doc)[2]

    assert len(legend.children) == 5
    assert [row.attrs["transform"] for row in legend.children][:2] == ["translate(0,0)", "translate(0,30)"]
    names = [n.text for n in legend.iter("text")]
    assert names == ["TypeScript", "Python", "Rust", "C#", "Dockerfile"]

    dockerfile_icon = legend.children[-1].children[0]
    assert dockerfile_icon.attrs["fill"] == "#666666"
    assert dockerfile_icon.attrs["stroke"] == "#333333"


def test_label_threshold_is_inclusive() -> None:
    exactly_ten = render_donut(normalize({"A": 90, "B": 10}), "t")
    assert _labels(exactly_ten) == ["90.0%", "10.0%"]

    just_below = render_donut(normalize({"A": 901, "B": 99}), "t")
    assert _labels(just_below) == ["90.1%"]


def test_shows_label_ignores_nan() -> None:
    entry = normalize({"A": 0})[0]
    assert math.isnan(entry.percentage)
    assert not shows_label(entry)


def test_label_sits_on_centroid() -> None:
    doc = render_donut(normalize({"A": 1, "B": 1}), "t")
    chart = _parts(doc)[3]
    first_arc = next(chart.iter("arc")).geometry
    x, y = first_arc.centroid()

    first_label = list(chart.iter("text"))[0]
    assert first_label.attrs["transform"] == translate(x, y)
    assert "text-shadow" in first_label.attrs["style"]
    assert first_label.attrs["fill"] == "#ffffff"


def test_empty_dataset_renders_frame_only() -> None:
    doc = render_donut(normalize({}), "Empty")
    background, title, legend, chart = _parts(doc)

    assert title.text == "Empty"
    assert legend.children == []
    assert chart.children == []
    assert "<path" not in doc.serialize()


def test_zero_total_renders_without_labels() -> None:
    doc = render_donut(normalize({"A": 0, "B": 0}), "Zero")

    assert _labels(doc) == []
    assert len(_parts(doc)[2].children) == 2
    assert _parts(doc)[3].children == []
    svg = doc.serialize()
    assert "nan" not in svg.lower()
    assert "<path" not in svg


def test_single_entry_is_a_full_ring() -> None:
    doc = render_donut(normalize({"Python": 10}), "One")
    arc = next(_parts(doc)[3].iter("arc")).geometry

    assert arc.end_angle - arc.start_angle == pytest.approx(TAU)
    d = arc.path()
    assert d.count("M ") == 2  # outer and inner ring
    assert d.count("A ") == 4
    assert _labels(doc) == ["100.0%"]


def test_generate_donut_is_deterministic(tmp_path: Path) -> None:
    first = generate_donut(SCENARIO, tmp_path / "a.svg", "By Total Bytes")
    second = generate_donut(SCENARIO, tmp_path / "b.svg", "By Total Bytes")

    assert first.read_bytes() == second.read_bytes()
    svg = first.read_text(encoding="utf-8")
    assert svg.startswith("<svg")
    assert "By Total Bytes" in svg
    assert svg.count("<path") == 5


def test_generate_donut_write_failure_propagates(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        generate_donut(SCENARIO, tmp_path / "no-such-dir" / "out.svg", "t")
