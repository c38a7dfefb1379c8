"""
Curve backends.

A curve is only ever queried through its bounding extent and through
intersection with a straight probe, so any geometry source can stand in as
long as it implements `Curve`. The backends below cover sampled data
(polyline), analytic graphs y = f(x), parametric curves and circular arcs.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from enum import StrEnum
from typing import Callable, Iterable, Optional, TYPE_CHECKING
import math

import numpy as np
from scipy.optimize import brentq

from riemannsum import config
from riemannsum.errors import InvalidArgumentError
from riemannsum.model.geometry_primitives import BoundingBox, Circle, Line, Point, Vector
from riemannsum.model.geometry_utils import (
    deg2rad,
    in_unit_range,
    line_circle_intersection,
    line_intersection_params,
)

if TYPE_CHECKING:
    import numpy.typing as npt


# ------------------------------------------------------------------------------
# Enums
# ------------------------------------------------------------------------------
class ExtendPolicy(StrEnum):
    """How a curve behaves past its own endpoints when intersected."""
    NONE = "none"
    LINEAR = "linear"


# ------------------------------------------------------------------------------
# Base
# ------------------------------------------------------------------------------
class Curve(ABC):
    """
    Abstract base class for curves.
    """

    @abstractmethod
    def bounding_extent(self) -> BoundingBox:
        """Axis-aligned bounding box of the curve."""
        pass

    @abstractmethod
    def intersect(self, line: Line, extend: bool = False) -> list[Point]:
        """
        Intersection points between the curve and a straight line.

        Args:
            line: The probe segment.
            extend: If True, the probe is treated as an infinite line; otherwise
                only hits between `line.start` and `line.end` count.

        Returns:
            Intersection points ordered by their distance along the probe,
            starting from `line.start`.
        """
        pass

    @abstractmethod
    def translate(self, vector: Vector) -> Curve:
        """Returns a new curve shifted by `vector`."""
        pass


def _ordered(hits: Iterable[tuple[float, Point]], eps: float = config.EPS) -> list[Point]:
    """
    Sort (probe parameter, point) pairs and drop repeated hits, e.g. at a shared vertex.
    Hits closer than `eps` in space count as one, whatever the probe length.
    """
    points: list[Point] = []
    for _, point in sorted(hits, key=lambda hit: hit[0]):
        if points and points[-1].distance_to(point) <= eps:
            continue
        points.append(point)
    return points


def _as_points_array(vertices: npt.ArrayLike) -> npt.NDArray[np.float64]:
    pts = np.asarray(vertices, dtype=np.float64)
    if pts.ndim != 2 or pts.shape[1] not in (2, 3):
        raise InvalidArgumentError(f"Vertices must have shape (N, 2) or (N, 3), got {pts.shape}.")
    if pts.shape[0] < 2:
        raise InvalidArgumentError("A polyline needs at least two vertices.")
    if not np.all(np.isfinite(pts)):
        raise InvalidArgumentError("Vertices must be finite.")
    if pts.shape[1] == 2:
        pts = np.c_[pts, np.zeros(len(pts))]
    return pts


# ------------------------------------------------------------------------------
# Backends
# ------------------------------------------------------------------------------
class PolylineCurve(Curve):
    """
    Piecewise linear curve through an ordered set of vertices.

    With `ExtendPolicy.LINEAR` the first and the last segment are continued
    as rays past the polyline's endpoints.
    """

    def __init__(
        self,
        vertices: npt.ArrayLike,
        extend_policy: ExtendPolicy = ExtendPolicy(config.DEFAULT_EXTEND_POLICY)
    ) -> None:
        self._vertices = _as_points_array(vertices)
        self.extend_policy = ExtendPolicy(extend_policy)

    @property
    def vertices(self) -> npt.NDArray[np.float64]:
        return self._vertices.copy()

    def bounding_extent(self) -> BoundingBox:
        return BoundingBox.from_array(self._vertices)

    def intersect(self, line: Line, extend: bool = False) -> list[Point]:
        last = len(self._vertices) - 2
        extrapolate = self.extend_policy is ExtendPolicy.LINEAR
        hits: list[tuple[float, Point]] = []

        for i, (a, b) in enumerate(zip(self._vertices[:-1], self._vertices[1:])):
            p_a = Point(*a)
            p_b = Point(*b)
            params = line_intersection_params(line.start, line.end, p_a, p_b)
            if params is None:
                # Parallel or collinear overlap: no single crossing point
                continue
            t, u = params

            lower_ok = u >= -config.EPS or (extrapolate and i == 0)
            upper_ok = u <= 1.0 + config.EPS or (extrapolate and i == last)
            if not (lower_ok and upper_ok):
                continue
            if not extend and not in_unit_range(t):
                continue

            hit = Line(p_a, p_b).point_at(u)
            hits.append((t, hit))

        return _ordered(hits)

    def translate(self, vector: Vector) -> PolylineCurve:
        return PolylineCurve(self._vertices + vector.to_array(), extend_policy=self.extend_policy)


class FunctionCurve(Curve):
    """
    Graph of an analytic function y = f(x) over [x_min, x_max], lying in the plane z = 0.

    `func` is called with plain floats. With `ExtendPolicy.LINEAR` the graph is
    extrapolated past either end along the end slope.
    """

    def __init__(
        self,
        func: Callable[[float], float],
        x_min: float,
        x_max: float,
        extend_policy: ExtendPolicy = ExtendPolicy(config.DEFAULT_EXTEND_POLICY),
        samples: int = config.FUNCTION_SAMPLES,
        shift: Vector = Vector(0.0, 0.0, 0.0)
    ) -> None:
        if not (math.isfinite(x_min) and math.isfinite(x_max)) or x_max <= x_min:
            raise InvalidArgumentError(f"Invalid function domain [{x_min}, {x_max}].")
        if samples < 2:
            raise InvalidArgumentError("At least two samples are required.")
        self.func = func
        self.x_min = x_min
        self.x_max = x_max
        self.extend_policy = ExtendPolicy(extend_policy)
        self.samples = samples
        self.shift = shift

    @property
    def domain(self) -> tuple[float, float]:
        """Domain in world coordinates (after any translation)."""
        return self.x_min + self.shift.x, self.x_max + self.shift.x

    def _f(self, x_local: float) -> float:
        return float(self.func(x_local))

    def evaluate(self, x: float) -> Optional[float]:
        """
        World y at world x, or None where the curve does not reach x.
        """
        x_local = x - self.shift.x
        eps = config.EPS * max(1.0, abs(self.x_max - self.x_min))
        if self.x_min - eps <= x_local <= self.x_max + eps:
            x_local = min(max(x_local, self.x_min), self.x_max)
            return self._f(x_local) + self.shift.y
        if self.extend_policy is not ExtendPolicy.LINEAR:
            return None

        h = (self.x_max - self.x_min) / self.samples
        if x_local < self.x_min:
            y0 = self._f(self.x_min)
            slope = (self._f(self.x_min + h) - y0) / h
            return y0 + slope * (x_local - self.x_min) + self.shift.y
        y1 = self._f(self.x_max)
        slope = (y1 - self._f(self.x_max - h)) / h
        return y1 + slope * (x_local - self.x_max) + self.shift.y

    def sample(self) -> npt.NDArray[np.float64]:
        """World coordinates of the curve on an evenly spaced grid, shape (samples, 3)."""
        xs = np.linspace(self.x_min, self.x_max, self.samples)
        ys = np.fromiter((self._f(float(x)) for x in xs), dtype=np.float64, count=len(xs))
        pts = np.c_[xs, ys, np.zeros_like(xs)]
        return pts + self.shift.to_array()

    def to_polyline(self) -> PolylineCurve:
        return PolylineCurve(self.sample(), extend_policy=self.extend_policy)

    def bounding_extent(self) -> BoundingBox:
        return BoundingBox.from_array(self.sample())

    def intersect(self, line: Line, extend: bool = False) -> list[Point]:
        direction = line.to_vector()
        if abs(direction.x) > config.EPS:
            return self.to_polyline().intersect(line, extend=extend)

        # Vertical probe: the graph has exactly one point above x
        x = line.start.x
        y = self.evaluate(x)
        if y is None:
            return []
        if abs(direction.y) <= config.EPS:
            # Degenerate probe: a single point
            return [Point(x, y, self.shift.z)] if abs(y - line.start.y) <= config.EPS else []

        t = (y - line.start.y) / direction.y
        if not extend and not in_unit_range(t):
            return []
        return [Point(x, y, self.shift.z)]

    def translate(self, vector: Vector) -> FunctionCurve:
        return FunctionCurve(
            self.func,
            self.x_min,
            self.x_max,
            extend_policy=self.extend_policy,
            samples=self.samples,
            shift=self.shift + vector,
        )


class ParametricCurve(Curve):
    """
    Planar parametric curve (x(t), y(t)) for t in [t_min, t_max].

    Intersections are bracketed on a grid of `samples` parameter values and
    refined with Brent's method, so crossings closer together than the grid
    spacing may be missed.
    """

    def __init__(
        self,
        x_func: Callable[[float], float],
        y_func: Callable[[float], float],
        t_min: float,
        t_max: float,
        samples: int = config.PARAMETRIC_SAMPLES,
        shift: Vector = Vector(0.0, 0.0, 0.0)
    ) -> None:
        if not (math.isfinite(t_min) and math.isfinite(t_max)) or t_max <= t_min:
            raise InvalidArgumentError(f"Invalid parameter range [{t_min}, {t_max}].")
        if samples < 2:
            raise InvalidArgumentError("At least two samples are required.")
        self.x_func = x_func
        self.y_func = y_func
        self.t_min = t_min
        self.t_max = t_max
        self.samples = samples
        self.shift = shift

    def point_at(self, t: float) -> Point:
        return Point(
            float(self.x_func(t)) + self.shift.x,
            float(self.y_func(t)) + self.shift.y,
            self.shift.z,
        )

    def bounding_extent(self) -> BoundingBox:
        ts = np.linspace(self.t_min, self.t_max, self.samples)
        pts = np.array([self.point_at(float(t)).to_array() for t in ts])
        return BoundingBox.from_array(pts)

    def intersect(self, line: Line, extend: bool = False) -> list[Point]:
        d = line.to_vector()
        d2 = d.x * d.x + d.y * d.y
        if d2 <= config.EPS:
            return []

        def side(t: float) -> float:
            # Signed distance (scaled) of the curve point from the probe's carrier line
            p = self.point_at(t)
            return (p.x - line.start.x) * d.y - (p.y - line.start.y) * d.x

        ts = np.linspace(self.t_min, self.t_max, self.samples)
        values = np.array([side(float(t)) for t in ts])

        roots: list[float] = []
        for i in range(len(ts) - 1):
            f0, f1 = values[i], values[i + 1]
            if f0 == 0.0:
                roots.append(float(ts[i]))
            elif f0 * f1 < 0.0:
                roots.append(float(brentq(side, ts[i], ts[i + 1], xtol=1e-12)))
        if values[-1] == 0.0:
            roots.append(float(ts[-1]))

        hits: list[tuple[float, Point]] = []
        for root in roots:
            p = self.point_at(root)
            s = ((p.x - line.start.x) * d.x + (p.y - line.start.y) * d.y) / d2
            if not extend and not in_unit_range(s):
                continue
            hits.append((s, p))
        return _ordered(hits)

    def translate(self, vector: Vector) -> ParametricCurve:
        return ParametricCurve(
            self.x_func,
            self.y_func,
            self.t_min,
            self.t_max,
            samples=self.samples,
            shift=self.shift + vector,
        )


class ArcCurve(Curve):
    """
    A circular arc swept counter-clockwise from `start_angle` to `end_angle` (degrees).
    """

    def __init__(self, center: Point, radius: float, start_angle: float, end_angle: float) -> None:
        if not radius > 0.0:
            raise InvalidArgumentError(f"Arc radius must be positive, got {radius}.")
        self.center = center
        self.radius = radius
        self.start_angle = start_angle
        self.end_angle = end_angle

    @property
    def sweep(self) -> float:
        """Counter-clockwise sweep in radians, in (0, 2*pi]."""
        sweep = deg2rad(self.end_angle - self.start_angle) % (2 * math.pi)
        return sweep if sweep > 0.0 else 2 * math.pi

    def _on_arc(self, point: Point) -> bool:
        angle = math.atan2(point.y - self.center.y, point.x - self.center.x)
        offset = (angle - deg2rad(self.start_angle)) % (2 * math.pi)
        tol = config.EPS / self.radius
        return offset <= self.sweep + tol or offset >= 2 * math.pi - tol

    def bounding_extent(self) -> BoundingBox:
        start = deg2rad(self.start_angle)
        angles = [start, start + self.sweep]
        # Axis extremes reached inside the sweep
        first_quarter = math.ceil(start / (math.pi / 2))
        for quarter in range(first_quarter, first_quarter + 4):
            candidate = quarter * math.pi / 2
            if candidate - start <= self.sweep:
                angles.append(candidate)
        angles_arr = np.array(angles)
        pts = np.c_[
            self.center.x + self.radius * np.cos(angles_arr),
            self.center.y + self.radius * np.sin(angles_arr),
            np.full(len(angles_arr), self.center.z),
        ]
        return BoundingBox.from_array(pts)

    def intersect(self, line: Line, extend: bool = False) -> list[Point]:
        hits = line_circle_intersection(
            line.start,
            line.to_vector(),
            Circle(center=self.center, radius=self.radius),
            as_segment=not extend,
        )
        return _ordered(
            (t, Point(p.x, p.y, self.center.z)) for t, p in hits if self._on_arc(p)
        )

    def translate(self, vector: Vector) -> ArcCurve:
        return ArcCurve(self.center + vector, self.radius, self.start_angle, self.end_angle)
