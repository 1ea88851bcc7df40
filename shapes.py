# shapes.py
# SVG path-data builder and annular-sector ("donut slice") geometry.
# Angles are in radians, measured clockwise from 12 o'clock, centred on (0, 0).

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

PI = math.pi
HALF_PI = PI / 2
TAU = 2 * PI
EPSILON = 1e-12
PATH_EPSILON = 1e-6


def _fmt(v: float) -> str:
    s = f"{v:.3f}"
    return "0.000" if s == "-0.000" else s


def _asin(x: float) -> float:
    if x >= 1:
        return HALF_PI
    if x <= -1:
        return -HALF_PI
    return math.asin(x)


def _acos(x: float) -> float:
    if x > 1:
        return 0.0
    if x < -1:
        return PI
    return math.acos(x)


# =======================
# Path data
# =======================
class PathData:
    """Accumulates SVG path commands; str() gives the ``d`` attribute."""

    def __init__(self):
        self._parts: List[str] = []
        self._x0: Optional[float] = None  # start of current subpath
        self._y0: Optional[float] = None
        self._x1: Optional[float] = None  # current point
        self._y1: Optional[float] = None

    def move_to(self, x: float, y: float) -> None:
        self._x0 = self._x1 = x
        self._y0 = self._y1 = y
        self._parts.append(f"M {_fmt(x)},{_fmt(y)}")

    def line_to(self, x: float, y: float) -> None:
        self._x1, self._y1 = x, y
        self._parts.append(f"L {_fmt(x)},{_fmt(y)}")

    def close(self) -> None:
        if self._x1 is not None:
            self._x1, self._y1 = self._x0, self._y0
            self._parts.append("Z")

    def arc(self, cx: float, cy: float, r: float, a0: float, a1: float, ccw: bool = False) -> None:
        """Circular arc around (cx, cy) from angle a0 to a1 (canvas angles)."""
        dx = r * math.cos(a0)
        dy = r * math.sin(a0)
        x0 = cx + dx
        y0 = cy + dy
        sweep = 0 if ccw else 1
        da = a0 - a1 if ccw else a1 - a0

        if self._x1 is None:
            self.move_to(x0, y0)
        elif abs(self._x1 - x0) > PATH_EPSILON or abs(self._y1 - y0) > PATH_EPSILON:
            self.line_to(x0, y0)

        if not r:
            return
        if da < 0:
            da = math.fmod(da, TAU) + TAU

        if da > TAU - PATH_EPSILON:
            # a single arc command cannot draw a full circle; split it in two
            self._parts.append(
                f"A {_fmt(r)},{_fmt(r)} 0 1 {sweep} {_fmt(cx - dx)},{_fmt(cy - dy)}"
            )
            self._parts.append(f"A {_fmt(r)},{_fmt(r)} 0 1 {sweep} {_fmt(x0)},{_fmt(y0)}")
            self._x1, self._y1 = x0, y0
        elif da > PATH_EPSILON:
            x1 = cx + r * math.cos(a1)
            y1 = cy + r * math.sin(a1)
            large = 1 if da >= PI else 0
            self._parts.append(f"A {_fmt(r)},{_fmt(r)} 0 {large} {sweep} {_fmt(x1)},{_fmt(y1)}")
            self._x1, self._y1 = x1, y1

    def __str__(self) -> str:
        return " ".join(self._parts)


# =======================
# Geometry helpers
# =======================
def _intersect(x0, y0, x1, y1, x2, y2, x3, y3) -> Optional[Tuple[float, float]]:
    x10, y10 = x1 - x0, y1 - y0
    x32, y32 = x3 - x2, y3 - y2
    t = y32 * x10 - x32 * y10
    if t * t < EPSILON:
        return None
    t = (x32 * (y0 - y2) - y32 * (x0 - x2)) / t
    return x0 + t * x10, y0 + t * y10


@dataclass
class _Corner:
    cx: float
    cy: float
    x01: float
    y01: float
    x11: float
    y11: float


def _corner_tangents(x0, y0, x1, y1, r1, rc, cw) -> _Corner:
    """Circle of radius rc tangent to the edge (x0,y0)-(x1,y1) and the ring of radius r1."""
    x01, y01 = x0 - x1, y0 - y1
    lo = (rc if cw else -rc) / math.sqrt(x01 * x01 + y01 * y01)
    ox, oy = lo * y01, -lo * x01
    x11, y11 = x0 + ox, y0 + oy
    x10, y10 = x1 + ox, y1 + oy
    x00, y00 = (x11 + x10) / 2, (y11 + y10) / 2
    dx, dy = x10 - x11, y10 - y11
    d2 = dx * dx + dy * dy
    r = r1 - rc
    big_d = x11 * y10 - x10 * y11
    d = (-1 if dy < 0 else 1) * math.sqrt(max(0.0, r * r * d2 - big_d * big_d))
    cx0 = (big_d * dy - dx * d) / d2
    cy0 = (-big_d * dx - dy * d) / d2
    cx1 = (big_d * dy + dx * d) / d2
    cy1 = (-big_d * dx + dy * d) / d2

    # pick the intersection closer to the edge midpoint
    if (cx0 - x00) ** 2 + (cy0 - y00) ** 2 > (cx1 - x00) ** 2 + (cy1 - y00) ** 2:
        cx0, cy0 = cx1, cy1

    return _Corner(
        cx=cx0,
        cy=cy0,
        x01=-ox,
        y01=-oy,
        x11=cx0 * (r1 / r - 1),
        y11=cy0 * (r1 / r - 1),
    )


@dataclass(frozen=True)
class Arc:
    """One annular sector.

    ``pad_angle`` is the total gap this sector gives up (half on each edge);
    the gap is applied along a pad radius of ``sqrt(inner² + outer²)`` so the
    parallel gap has constant width on both rings.
    """

    inner_radius: float
    outer_radius: float
    start_angle: float
    end_angle: float
    pad_angle: float = 0.0
    corner_radius: float = 0.0

    def centroid(self) -> Tuple[float, float]:
        r = (self.inner_radius + self.outer_radius) / 2
        a = (self.start_angle + self.end_angle) / 2 - HALF_PI
        return math.cos(a) * r, math.sin(a) * r

    def path(self) -> str:
        ctx = PathData()
        r0, r1 = self.inner_radius, self.outer_radius
        if r1 < r0:
            r0, r1 = r1, r0
        a0 = self.start_angle - HALF_PI
        a1 = self.end_angle - HALF_PI
        da = abs(a1 - a0)
        cw = a1 > a0

        if not r1 > EPSILON:
            # a point
            ctx.move_to(0, 0)
        elif da > TAU - EPSILON:
            # a circle or a full annulus
            ctx.move_to(r1 * math.cos(a0), r1 * math.sin(a0))
            ctx.arc(0, 0, r1, a0, a1, not cw)
            if r0 > EPSILON:
                ctx.move_to(r0 * math.cos(a1), r0 * math.sin(a1))
                ctx.arc(0, 0, r0, a1, a0, cw)
        else:
            self._sector(ctx, r0, r1, a0, a1, da, cw)

        ctx.close()
        return str(ctx)

    def _sector(self, ctx: PathData, r0, r1, a0, a1, da, cw) -> None:
        a01 = a00 = a0
        a11 = a10 = a1
        da0 = da1 = da
        ap = self.pad_angle / 2
        rp = math.sqrt(r0 * r0 + r1 * r1) if ap > EPSILON else 0.0
        rc = min(abs(r1 - r0) / 2, self.corner_radius)
        rc0 = rc1 = rc

        # padding: since r1 >= r0 the outer edge always keeps more angle
        if rp > EPSILON:
            p0 = _asin(rp / r0 * math.sin(ap)) if r0 > 0 else HALF_PI
            p1 = _asin(rp / r1 * math.sin(ap))
            da0 -= p0 * 2
            if da0 > EPSILON:
                p0 *= 1 if cw else -1
                a00 += p0
                a10 -= p0
            else:
                da0 = 0
                a00 = a10 = (a0 + a1) / 2
            da1 -= p1 * 2
            if da1 > EPSILON:
                p1 *= 1 if cw else -1
                a01 += p1
                a11 -= p1
            else:
                da1 = 0
                a01 = a11 = (a0 + a1) / 2

        x01, y01 = r1 * math.cos(a01), r1 * math.sin(a01)
        x10, y10 = r0 * math.cos(a10), r0 * math.sin(a10)
        x11, y11 = r1 * math.cos(a11), r1 * math.sin(a11)
        x00, y00 = r0 * math.cos(a00), r0 * math.sin(a00)

        # shrink the corner radius for thin sectors, or drop it if the edges never meet
        if rc > EPSILON and da < PI:
            oc = _intersect(x01, y01, x00, y00, x11, y11, x10, y10)
            if oc is not None:
                ax, ay = x01 - oc[0], y01 - oc[1]
                bx, by = x11 - oc[0], y11 - oc[1]
                cos_t = (ax * bx + ay * by) / (math.hypot(ax, ay) * math.hypot(bx, by))
                kc = 1 / math.sin(_acos(cos_t) / 2)
                lc = math.hypot(oc[0], oc[1])
                rc0 = min(rc, (r0 - lc) / (kc - 1)) if kc > 1 else rc
                rc1 = min(rc, (r1 - lc) / (kc + 1))
            else:
                rc0 = rc1 = 0

        # outer ring
        if not da1 > EPSILON:
            ctx.move_to(x01, y01)
        elif rc1 > EPSILON:
            t0 = _corner_tangents(x00, y00, x01, y01, r1, rc1, cw)
            t1 = _corner_tangents(x11, y11, x10, y10, r1, rc1, cw)
            ctx.move_to(t0.cx + t0.x01, t0.cy + t0.y01)
            if rc1 < rc:
                # corners merged
                ctx.arc(t0.cx, t0.cy, rc1, math.atan2(t0.y01, t0.x01), math.atan2(t1.y01, t1.x01), not cw)
            else:
                ctx.arc(t0.cx, t0.cy, rc1, math.atan2(t0.y01, t0.x01), math.atan2(t0.y11, t0.x11), not cw)
                ctx.arc(
                    0, 0, r1,
                    math.atan2(t0.cy + t0.y11, t0.cx + t0.x11),
                    math.atan2(t1.cy + t1.y11, t1.cx + t1.x11),
                    not cw,
                )
                ctx.arc(t1.cx, t1.cy, rc1, math.atan2(t1.y11, t1.x11), math.atan2(t1.y01, t1.x01), not cw)
        else:
            ctx.move_to(x01, y01)
            ctx.arc(0, 0, r1, a01, a11, not cw)

        # inner ring
        if not r0 > EPSILON or not da0 > EPSILON:
            ctx.line_to(x10, y10)
        elif rc0 > EPSILON:
            t0 = _corner_tangents(x10, y10, x11, y11, r0, -rc0, cw)
            t1 = _corner_tangents(x01, y01, x00, y00, r0, -rc0, cw)
            ctx.line_to(t0.cx + t0.x01, t0.cy + t0.y01)
            if rc0 < rc:
                ctx.arc(t0.cx, t0.cy, rc0, math.atan2(t0.y01, t0.x01), math.atan2(t1.y01, t1.x01), not cw)
            else:
                ctx.arc(t0.cx, t0.cy, rc0, math.atan2(t0.y01, t0.x01), math.atan2(t0.y11, t0.x11), not cw)
                ctx.arc(
                    0, 0, r0,
                    math.atan2(t0.cy + t0.y11, t0.cx + t0.x11),
                    math.atan2(t1.cy + t1.y11, t1.cx + t1.x11),
                    cw,
                )
                ctx.arc(t1.cx, t1.cy, rc0, math.atan2(t1.y11, t1.x11), math.atan2(t1.y01, t1.x01), not cw)
        else:
            ctx.arc(0, 0, r0, a10, a00, cw)
