# chart_data.py
# Turns raw aggregated mappings into the ordered, annotated datasets the renderers draw.

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Mapping, Union

from chart_style import STYLE, StyleConfig

HOURS_PER_DAY = 24


@dataclass(frozen=True)
class ChartEntry:
    name: str
    value: float
    percentage: float  # one decimal; nan when the dataset total is 0
    fill_color: str
    stroke_color: str


@dataclass(frozen=True)
class HourBucket:
    hour: int
    count: int


def _round_pct(value: float, total: float) -> float:
    """value/total*100 rounded half-up to one decimal, nan when total is 0."""
    if total == 0:
        return math.nan
    raw = Decimal(value / total * 100)
    return float(raw.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def format_percentage(percentage: float) -> str:
    return f"{percentage:.1f}%"


def normalize(raw: Mapping[str, float], style: StyleConfig = STYLE) -> List[ChartEntry]:
    """Annotate each (name, value) with its share and colors, largest first.

    Equal values keep the order they had in ``raw``. A zero total yields nan
    percentages for every entry instead of raising.
    """
    total = sum(raw.values())
    entries = [
        ChartEntry(
            name=name,
            value=value,
            percentage=_round_pct(value, total),
            fill_color=style.fill_for(name),
            stroke_color=style.stroke_for(name),
        )
        for name, value in raw.items()
    ]
    # sorted() is stable with reverse=True, so ties stay in insertion order
    return sorted(entries, key=lambda e: e.value, reverse=True)


def to_hour_buckets(raw: Mapping[Union[int, str], int]) -> List[HourBucket]:
    """Expand a sparse hour -> count mapping to all 24 hours, ascending.

    Keys may be ints or numeric strings (as they come back from JSON).
    """
    counts = [0] * HOURS_PER_DAY
    for key, count in raw.items():
        hour = int(key)
        if not 0 <= hour < HOURS_PER_DAY:
            raise ValueError(f"hour out of range 0..23: {key!r}")
        if count < 0:
            raise ValueError(f"negative commit count for hour {hour}: {count}")
        if count != int(count):
            raise ValueError(f"commit count for hour {hour} is not a whole number: {count}")
        counts[hour] += int(count)
    return [HourBucket(hour=h, count=c) for h, c in enumerate(counts)]
