"""
Riemann sum rectangles.

The baseline is split into equal sub-intervals; for each one a vertical probe
is cast from the baseline up past the curve at the interval's boundaries (and
at its midpoint for the middle rule). The hit heights give the top edge of
the rectangle according to the sampling rule:

    p2 p3
    p1 p4

p1 and p4 sit on the baseline, p2 and p3 at the sampled height.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from numbers import Integral
from typing import Iterable, Optional, Union
import logging
import math

import numpy as np

from riemannsum import config
from riemannsum.errors import InvalidArgumentError, NoIntersectionError, RiemannSumError
from riemannsum.model.curves import Curve
from riemannsum.model.geometry_primitives import Line, Point, Rectangle, Vector

logger = logging.getLogger(__name__)


class SamplingRule(StrEnum):
    """Which x-position inside a sub-interval sets the rectangle's height."""
    LEFT = "left"
    RIGHT = "right"
    MIDDLE = "middle"


def resolve_rule(rule: Union[SamplingRule, str]) -> SamplingRule:
    """Accepts a SamplingRule or its case-insensitive name."""
    if isinstance(rule, SamplingRule):
        return rule
    if isinstance(rule, str):
        try:
            return SamplingRule(rule.strip().lower())
        except ValueError:
            pass
    raise InvalidArgumentError(f"Unknown sampling rule: {rule!r}.")


@dataclass(frozen=True)
class Partition:
    """Equal sub-intervals of a baseline."""
    count: int
    width: float


def partition(
    length: float,
    intervals: Optional[int] = None,
    interval_width: Optional[float] = None
) -> Partition:
    """
    Resolve the number and width of the sub-intervals.

    An explicit, non-zero `intervals` wins: the width is length / intervals.
    Otherwise (None or 0) the width is `interval_width` and the count is
    floor(length / interval_width); the leftover tail of the baseline is not covered.
    The count must be an integral type: whole-valued floats such as 5.0 are rejected.

    Raises:
        InvalidArgumentError: zero or non-finite length, negative or non-integer
            count, negative or non-finite width, or neither parameter given.
    """
    if not math.isfinite(length) or length <= 0.0:
        raise InvalidArgumentError(f"Baseline length must be positive, got {length}.")

    if intervals:
        if isinstance(intervals, bool) or not isinstance(intervals, Integral):
            raise InvalidArgumentError(f"Interval count must be an integer, got {intervals!r}.")
        if intervals < 0:
            raise InvalidArgumentError(f"Interval count must be positive, got {intervals}.")
        if interval_width:
            logger.debug(f"Both intervals={intervals} and interval_width={interval_width} given; using the count.")
        return Partition(count=int(intervals), width=length / int(intervals))

    if not interval_width:
        raise InvalidArgumentError("Either a non-zero interval count or interval width is required.")
    if not math.isfinite(interval_width) or interval_width < 0.0:
        raise InvalidArgumentError(f"Interval width must be positive, got {interval_width}.")

    return Partition(count=math.floor(length / interval_width), width=float(interval_width))


def probe_top(curve: Curve) -> float:
    """Height the probes reach: one unit above the top of the curve."""
    return curve.bounding_extent().max_point.y + config.PROBE_HEADROOM


def sample_height(curve: Curve, x: float, baseline: Line, top: Optional[float] = None) -> Point:
    """
    The point where a vertical probe at `x` first meets the curve.

    The probe runs from the baseline up to `top` (by default one unit above
    the curve's extent) and is intersected in extended mode, so hits past
    either end of the probe are found too. When `top` coincides with the
    baseline the probe is lengthened so it keeps a vertical direction.

    Raises:
        NoIntersectionError: the curve does not cover `x`.
    """
    if top is None:
        top = probe_top(curve)
    base = baseline.start
    if abs(top - base.y) <= config.EPS:
        top = base.y + config.PROBE_HEADROOM
    probe = Line(start=Point(x, base.y, base.z), end=Point(x, top, base.z))

    hits = curve.intersect(probe, extend=True)
    if not hits:
        raise NoIntersectionError(x)
    return hits[0]


def build_rectangle(
    curve: Curve,
    baseline: Line,
    k: int,
    width: float,
    rule: SamplingRule,
    top: Optional[float] = None
) -> Rectangle:
    """
    Rectangle over the k-th sub-interval of `baseline`.

    Both boundary heights are always sampled, so a curve that does not reach
    the interval's ends fails even for the middle rule.
    """
    if top is None:
        top = probe_top(curve)
    base = baseline.start

    # p2 p3
    # p1 p4
    p1 = Point(base.x + width * k, base.y, base.z)
    p4 = Point(base.x + width * (k + 1), base.y, base.z)

    q_left = sample_height(curve, p1.x, baseline, top)   # y = f(x0)
    q_right = sample_height(curve, p4.x, baseline, top)  # y = f(x1)

    match rule:
        case SamplingRule.LEFT:
            height = q_left.y
        case SamplingRule.RIGHT:
            height = q_right.y
        case SamplingRule.MIDDLE:
            mid_x = p1.x + (p4.x - p1.x) / 2
            height = sample_height(curve, mid_x, baseline, top).y
        case _:
            raise InvalidArgumentError(f"Unknown sampling rule: {rule!r}.")

    p2 = p1.with_y(height)
    p3 = p4.with_y(height)
    return Rectangle(p2, p3, p1, p4)


def offset_curve(curve: Curve, offset: Optional[float] = None) -> Curve:
    """
    The curve shifted vertically by `offset`, or the curve itself when the
    offset is None or negligible.

    Raises:
        InvalidArgumentError: the offset is NaN or infinite.
    """
    if offset is None:
        return curve
    if not math.isfinite(offset):
        raise InvalidArgumentError(f"Vertical offset must be finite, got {offset}.")
    if abs(offset) <= config.OFFSET_EPSILON:
        return curve
    logger.debug(f"Translating curve by {offset} along y.")
    return curve.translate(Vector(0.0, offset, 0.0))


def _check_baseline(baseline: Line) -> None:
    start, end = baseline.start, baseline.end
    if abs(start.y - end.y) > config.EPS or abs(start.z - end.z) > config.EPS:
        raise InvalidArgumentError(
            f"Baseline must be horizontal, got start={start} end={end}."
        )


def riemann_sum_rectangles(
    upper_curve: Curve,
    baseline: Line,
    rule: Union[SamplingRule, str],
    intervals: Optional[int] = None,
    interval_width: Optional[float] = None,
    vertical_offset: Optional[float] = None
) -> list[Rectangle]:
    """
    Rectangles approximating the area between `baseline` and `upper_curve`.

    Args:
        upper_curve: The curve to be approximated.
        baseline: Horizontal segment defining the range under the curve. Rectangles
            advance along +x from its start point over the baseline's length.
        rule: The sampling rule (or its name).
        intervals: Number of rectangles. Takes precedence over `interval_width` when non-zero.
        interval_width: Width of each rectangle, used when `intervals` is None or 0.
        vertical_offset: Height by which the curve is shifted before sampling, e.g. to
            draw the rectangles above the original curve. None means no shift.

    Returns:
        One rectangle per sub-interval, in increasing x.

    Raises:
        InvalidArgumentError: invalid partition parameters, baseline, rule or offset.
        NoIntersectionError: a probe misses the curve. No partial result is returned.
    """
    rule = resolve_rule(rule)
    _check_baseline(baseline)
    curve = offset_curve(upper_curve, vertical_offset)
    parts = partition(baseline.length, intervals=intervals, interval_width=interval_width)
    logger.debug(f"Partitioned baseline into {parts.count} intervals of width {parts.width}.")

    if parts.count == 0:
        return []

    top = probe_top(curve)
    rectangles = [
        build_rectangle(curve, baseline, k, parts.width, rule, top)
        for k in range(parts.count)
    ]
    logger.debug(f"Built {len(rectangles)} rectangles using the {rule.value} rule.")
    return rectangles


@dataclass(frozen=True)
class RiemannSumResult:
    """Outcome of `try_riemann_sum_rectangles`: either rectangles or the error that stopped them."""
    rectangles: tuple[Rectangle, ...] = ()
    error: Optional[RiemannSumError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> tuple[Rectangle, ...]:
        if self.error is not None:
            raise self.error
        return self.rectangles


def try_riemann_sum_rectangles(
    upper_curve: Curve,
    baseline: Line,
    rule: Union[SamplingRule, str],
    intervals: Optional[int] = None,
    interval_width: Optional[float] = None,
    vertical_offset: Optional[float] = None
) -> RiemannSumResult:
    """Same as `riemann_sum_rectangles`, but reports invalid input and missed probes as a value."""
    try:
        rectangles = riemann_sum_rectangles(
            upper_curve,
            baseline,
            rule,
            intervals=intervals,
            interval_width=interval_width,
            vertical_offset=vertical_offset,
        )
    except RiemannSumError as e:
        return RiemannSumResult(error=e)
    return RiemannSumResult(rectangles=tuple(rectangles))


def riemann_sum_area(rectangles: Iterable[Rectangle]) -> float:
    """Sum of the signed rectangle areas."""
    areas = np.fromiter((r.area for r in rectangles), dtype=np.float64)
    return float(areas.sum())
