# bar_chart.py
# Commits-by-hour bar chart (SVG): 24 hour bands on x, niced linear count axis on y,
# and a time-zone caption under the plot.

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Mapping, Sequence, Tuple, Union

from chart_data import HourBucket, to_hour_buckets
from chart_style import STYLE, StyleConfig
from logging_config import get_logger
from svg_document import Node, SvgDocument, css, write_svg

logger = get_logger(__name__)

E10 = math.sqrt(50)
E5 = math.sqrt(10)
E2 = math.sqrt(2)


# =======================
# Scales
# =======================
def tick_increment(start: float, stop: float, count: int) -> float:
    """Step of roughly ``count`` ticks over [start, stop], rounded to 1, 2 or 5 x 10^k.

    Steps below 1 come back negative as their inverse (-5 means 0.2) so the
    callers can stay in exact arithmetic.
    """
    step = (stop - start) / max(0, count)
    power = math.floor(math.log10(step))
    error = step / 10 ** power
    if error >= E10:
        factor = 10
    elif error >= E5:
        factor = 5
    elif error >= E2:
        factor = 2
    else:
        factor = 1
    if power >= 0:
        return factor * 10 ** power
    return -(10 ** -power) / factor


def nice_domain(start: float, stop: float, count: int = 10, max_iter: int = 10) -> Tuple[float, float]:
    """Extend [start, stop] outwards to multiples of the tick step, until the step stops changing."""
    if stop == start:
        return start, stop
    prestep = None
    for _ in range(max_iter):
        step = tick_increment(start, stop, count)
        if step == prestep:
            return start, stop
        if step > 0:
            start = math.floor(start / step) * step
            stop = math.ceil(stop / step) * step
        elif step < 0:
            inv = -step
            start = math.floor(start * inv) / inv
            stop = math.ceil(stop * inv) / inv
        else:
            break
        prestep = step
    return start, stop


def linear_ticks(start: float, stop: float, count: int) -> List[float]:
    if stop == start:
        return [start]
    step = tick_increment(start, stop, count)
    if step > 0:
        i1, i2 = round(start / step), round(stop / step)
        if i1 * step < start:
            i1 += 1
        if i2 * step > stop:
            i2 -= 1
        return [(i1 + i) * step for i in range(i2 - i1 + 1)]
    inv = -step
    i1, i2 = round(start * inv), round(stop * inv)
    if i1 / inv < start:
        i1 += 1
    if i2 / inv > stop:
        i2 -= 1
    return [(i1 + i) / inv for i in range(i2 - i1 + 1)]


@dataclass(frozen=True)
class LinearScale:
    domain: Tuple[float, float]
    range: Tuple[float, float]

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if d1 == d0:
            return r0
        return r0 + (value - d0) / (d1 - d0) * (r1 - r0)

    def nice(self, count: int = 10) -> "LinearScale":
        return LinearScale(nice_domain(*self.domain, count), self.range)

    def ticks(self, count: int = 10) -> List[float]:
        return linear_ticks(*self.domain, count)

    def tick_format(self, count: int = 10) -> Callable[[float], str]:
        """Fixed-point formatter with just enough decimals for the tick step."""
        d0, d1 = self.domain
        if d1 == d0:
            return lambda v: f"{v:,.0f}"
        step = tick_increment(d0, d1, count)
        step = step if step > 0 else 1 / -step
        decimals = max(0, -math.floor(math.log10(step)))
        return lambda v: f"{v:,.{decimals}f}"


@dataclass(frozen=True)
class BandScale:
    """Evenly spaced bands over a range; padding is a fraction of the step."""

    domain: Tuple[str, ...]
    range: Tuple[float, float]
    padding_inner: float = 0.0
    padding_outer: float = 0.0
    align: float = 0.5

    @property
    def step(self) -> float:
        r0, r1 = self.range
        n = len(self.domain)
        return (r1 - r0) / max(1, n - self.padding_inner + self.padding_outer * 2)

    @property
    def bandwidth(self) -> float:
        return self.step * (1 - self.padding_inner)

    def __call__(self, key: str) -> float:
        r0, r1 = self.range
        n = len(self.domain)
        start = r0 + (r1 - r0 - self.step * (n - self.padding_inner)) * self.align
        return start + self.step * self.domain.index(key)


# =======================
# Renderers
# =======================
def _x_axis(doc: SvgDocument, plot: Node, x: BandScale, dataset: Sequence[HourBucket],
            plot_w: float, plot_h: float, style: StyleConfig) -> Node:
    axis = doc.add_group(plot, offset=(0, plot_h), class_="x-axis")
    doc.add_path(axis, f"M0,0H{plot_w}", stroke=style.axis_color, fill="none")
    for bucket in dataset:
        if bucket.hour % style.x_label_every:
            continue
        label = str(bucket.hour)
        tick = doc.add_group(axis, offset=(x(label) + x.bandwidth / 2, 0))
        doc.add_path(tick, f"M0,0V{style.tick_size}", stroke=style.axis_color)
        doc.add_text(
            tick, label,
            x=0,
            y=style.tick_size + 12,
            fill=style.axis_color,
            text_anchor="middle",
            style=css(font_family=style.font_family, font_size=style.size_axis),
        )
    return axis


def _y_axis(doc: SvgDocument, plot: Node, y: LinearScale, plot_h: float, style: StyleConfig) -> Node:
    """Left axis. ``y_tick_count`` is a hint: ticks land on round steps, so 0..12 gets 7."""
    axis = doc.add_group(plot, offset=(0, 0), class_="y-axis")
    doc.add_path(axis, f"M0,0V{plot_h}", stroke=style.axis_color, fill="none")
    fmt = y.tick_format(style.y_tick_count)
    for value in y.ticks(style.y_tick_count):
        tick = doc.add_group(axis, offset=(0, y(value)))
        doc.add_path(tick, f"M0,0H{-style.tick_size}", stroke=style.axis_color)
        doc.add_text(
            tick, fmt(value),
            x=-(style.tick_size + 3),
            y=3,
            fill=style.axis_color,
            text_anchor="end",
            style=css(font_family=style.font_family, font_size=style.size_axis),
        )
    return axis


def hour_scales(dataset: Sequence[HourBucket], style: StyleConfig = STYLE) -> Tuple[BandScale, LinearScale]:
    top, right, bottom, left = style.bar_margins
    plot_w = style.width - left - right
    plot_h = style.height - top - bottom
    x = BandScale(
        tuple(str(b.hour) for b in dataset),
        (0, plot_w),
        padding_inner=style.band_padding,
        padding_outer=style.band_padding,
    )
    max_count = max((b.count for b in dataset), default=0)
    # an all-zero day still gets a [0, 1] axis instead of a collapsed one
    y = LinearScale((0, max_count or 1), (plot_h, 0)).nice(style.y_tick_count)
    return x, y


def render_bars(dataset: Sequence[HourBucket], title: str, style: StyleConfig = STYLE) -> SvgDocument:
    """Lay out title, axes and one bar per hour bucket.

    ``dataset`` is expected to hold all 24 hours (see to_hour_buckets); a
    shorter one simply draws fewer bands.
    """
    width, height = style.width, style.height
    top, right, bottom, left = style.bar_margins
    plot_w = width - left - right
    plot_h = height - top - bottom
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

    x, y = hour_scales(dataset, style)
    plot = doc.add_group(None, offset=(left, top))
    _x_axis(doc, plot, x, dataset, plot_w, plot_h, style)
    _y_axis(doc, plot, y, plot_h, style)

    bars = doc.add_group(plot, class_="bars")
    for bucket in dataset:
        bar_y = y(bucket.count)
        doc.add_rect(
            bars, x(str(bucket.hour)), bar_y, x.bandwidth, plot_h - bar_y,
            fill=style.bar_fill,
            stroke=style.bar_stroke,
            stroke_width=style.stroke_width,
            rx=style.bar_corner_radius,
            ry=style.bar_corner_radius,
        )

    doc.add_text(
        None, style.caption,
        x=left + plot_w / 2,
        y=height - 10,
        fill=style.axis_color,
        text_anchor="middle",
        style=css(font_family=style.font_family, font_size=style.size_caption),
    )
    return doc


def generate_bar_chart(
    data: Mapping[Union[int, str], int],
    output_path: Union[str, Path],
    title: str,
    style: StyleConfig = STYLE,
) -> Path:
    """Fill in missing hours -> render -> write one bar chart SVG."""
    dataset = to_hour_buckets(data)
    path = write_svg(render_bars(dataset, title, style), output_path)
    logger.info("Chart generated: %s", path)
    return path
