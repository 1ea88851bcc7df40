# donut.py
# Donut chart (SVG): title on top, legend on the left 40%, ring on the right 60%,
# percentage labels on slices that are at least min_label_threshold percent.

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Sequence, Union

from chart_data import ChartEntry, format_percentage, normalize
from chart_style import STYLE, StyleConfig
from logging_config import get_logger
from shapes import TAU
from svg_document import Node, SvgDocument, css, translate, write_svg

logger = get_logger(__name__)


# =======================
# Pie layout
# =======================
@dataclass(frozen=True)
class PieSlice:
    entry: ChartEntry
    start_angle: float
    end_angle: float
    pad_angle: float


def pie_layout(
    dataset: Sequence[ChartEntry],
    pad_angle: float = STYLE.pad_angle,
    start_angle: float = 0.0,
    end_angle: float = TAU,
) -> List[PieSlice]:
    """Assign each entry an angular span proportional to its value.

    Angles run clockwise from 12 o'clock. Every span includes the pad gap, which
    the arc generator later removes from both edges. Slices follow dataset
    order, which normalize() already sorts by value. With a zero total every
    slice shrinks to its pad gap, so nothing visible is drawn.
    """
    n = len(dataset)
    if not n:
        return []
    da = end_angle - start_angle
    total = sum(e.value for e in dataset if e.value > 0)
    p = min(abs(da) / n, pad_angle)
    pa = -p if da < 0 else p
    k = (da - n * pa) / total if total else 0.0

    slices = []
    a0 = start_angle
    for entry in dataset:
        a1 = a0 + (entry.value * k if entry.value > 0 else 0.0) + pa
        slices.append(PieSlice(entry, a0, a1, p))
        a0 = a1
    return slices


def shows_label(entry: ChartEntry, style: StyleConfig = STYLE) -> bool:
    # nan never compares >= so zero-total datasets get no labels
    return entry.percentage >= style.min_label_threshold


# =======================
# Renderers
# =======================
def _legend(doc: SvgDocument, dataset: Sequence[ChartEntry], style: StyleConfig) -> Node:
    total_legend_height = len(dataset) * style.legend_item_height
    legend_start_y = style.title_height + (style.content_height - total_legend_height) / 2
    legend = doc.add_group(None, offset=(style.content_padding, legend_start_y))

    for i, entry in enumerate(dataset):
        row = doc.add_group(legend, offset=(0, i * style.legend_item_height))
        doc.add_rect(
            row, 0, 0, style.legend_icon_size, style.legend_icon_size,
            fill=entry.fill_color,
            stroke=entry.stroke_color,
            stroke_width=style.stroke_width,
            rx=1,
            ry=1,
        )
        doc.add_text(
            row, entry.name,
            x=style.legend_icon_size + style.legend_icon_margin,
            y=style.legend_icon_size - 2,
            fill=style.legend_text,
            style=css(font_family=style.font_family, font_size=style.size_legend),
        )
    return legend


def render_donut(dataset: Sequence[ChartEntry], title: str, style: StyleConfig = STYLE) -> SvgDocument:
    width, height = style.width, style.height
    doc = SvgDocument(width, height)

    doc.add_rect(
        None, 0, 0, width, height,
        fill=style.background,
        rx=style.border_radius,
        ry=style.border_radius,
    )
    doc.add_text(
        None, title,
        x=width / 2,
        y=style.title_baseline,
        fill=style.title_color,
        text_anchor="middle",
        style=css(font_family=style.font_family, font_size=style.size_title, font_weight="600"),
    )

    _legend(doc, dataset, style)

    legend_width = width * style.legend_width_ratio
    chart_width = width * style.chart_width_ratio
    center_x = legend_width + chart_width / 2
    center_y = style.title_height + style.content_height / 2
    radius = min(chart_width, style.content_height) / 2 - style.chart_margin
    inner_radius = radius * style.inner_radius_ratio

    chart = doc.add_group(None, offset=(center_x, center_y))
    zero_total = bool(dataset) and all(math.isnan(e.percentage) for e in dataset)
    # collapsed slices would still paint their stroke as a radial line
    slices = [] if zero_total else pie_layout(dataset, style.pad_angle)

    for s in slices:
        doc.add_arc(
            chart, inner_radius, radius, s.start_angle, s.end_angle,
            pad_angle=s.pad_angle,
            corner_radius=style.corner_radius,
            fill=s.entry.fill_color,
            stroke=s.entry.stroke_color,
            stroke_width=style.stroke_width,
        )

    arcs = list(chart.iter("arc"))
    for s, arc in zip(slices, arcs):
        if not shows_label(s.entry, style):
            continue
        x, y = arc.geometry.centroid()
        doc.add_text(
            chart, format_percentage(s.entry.percentage),
            transform=translate(x, y),
            text_anchor="middle",
            fill=style.percent_text,
            style=css(
                font_family=style.font_family,
                font_size=style.size_percent,
                font_weight="600",
                text_shadow=style.percent_shadow,
            ),
        )

    if zero_total:
        logger.warning("Donut %r has a zero total; slices and labels are omitted", title)
    return doc


def generate_donut(
    data: Mapping[str, float],
    output_path: Union[str, Path],
    title: str,
    style: StyleConfig = STYLE,
) -> Path:
    """normalize -> render -> write one donut chart SVG."""
    dataset = normalize(data, style)
    path = write_svg(render_donut(dataset, title, style), output_path)
    logger.info("Chart generated: %s", path)
    return path
