from __future__ import annotations

from typing import Optional

from math import sqrt, pi

from riemannsum import config
from riemannsum.model.geometry_primitives import Point, Vector, Circle


def deg2rad(degrees: float) -> float:
    return degrees * pi / 180


def in_unit_range(t: float, eps: float = config.EPS) -> bool:
    """True if parameter t lies in [0, 1] within `eps`."""
    return 0.0 - eps <= t <= 1.0 + eps


def line_intersection_params(
    p1: Point,
    p2: Point,
    p3: Point,
    p4: Point,
    eps: float = 1e-12
) -> Optional[tuple[float, float]]:
    """
    Intersection parameters of two infinite 2D lines:
      L1 through p1->p2, L2 through p3->p4.

    Returns (t, u) with the intersection at p1 + t*(p2 - p1) == p3 + u*(p4 - p3),
    or None if the lines are parallel or coincident. Only x and y are used.
    """
    x1, y1 = p1.x, p1.y
    x2, y2 = p2.x, p2.y
    x3, y3 = p3.x, p3.y
    x4, y4 = p4.x, p4.y

    # Solve using cross products
    r = (x2 - x1, y2 - y1)
    s = (x4 - x3, y4 - y3)

    def cross(a, b):
        return a[0]*b[1] - a[1]*b[0]

    rxs = cross(r, s)
    q_p = (x3 - x1, y3 - y1)

    if abs(rxs) < eps:
        # parallel (including possibly collinear)
        return None

    t = cross(q_p, s) / rxs  # parameter on L1
    u = cross(q_p, r) / rxs  # parameter on L2
    return t, u


def line_circle_intersection(
    point: Point,
    vector: Vector,
    circle: Circle,
    *,
    as_segment: bool = False,
    eps: float = config.EPS
    ) -> list[tuple[float, Point]]:
    """
    Compute intersection point(s) between a circle and a 2D line or line segment.

    The line is given in parametric form: P(t) = P0 + t * v, where
    P0 is a point on the line and v is the (nonzero) direction vector.
    If `as_segment=True`, the result is restricted to the segment from P0 to (P0 + v),
    i.e., only solutions with 0 <= t <= 1 are returned.

    Args:
        point: A point (x0, y0) on the line (or the start of the segment if `as_segment=True`).
        vector: The line direction vector (vx, vy). If its length is ~0, the function treats the
           "line" as the single point P0.
        circle: The circle with center (cx, cy), radius (must be non-negative).
        as_segment: If True, return only intersections whose parameter t lies in [0, 1] (within `eps`).
                    Default is False (infinite line).
        eps: Numerical tolerance for zero checks and inclusive interval tests.

    Returns:
        A list of (t, point) pairs, ordered by ascending t, holding 0, 1, or 2 intersections.
        For tangency (discriminant ~ 0), a single point is returned. Points carry the z of `point`.

    Notes:
        - Solves ||P0 + t*v - C||^2 = r^2, yielding a quadratic a t^2 + b t + c = 0 where:
          a = v·v
          b = 2 v·(P0 - C)
          c = ||P0 - C||^2 - r^2
        - If `a` ~ 0, the direction is degenerate; in that case it returns P0 if it lies
          on the circle (within `eps`), otherwise [].
    """
    x0, y0 = point.x, point.y
    vx, vy = vector.x, vector.y
    cx, cy = circle.center.x, circle.center.y
    r = circle.radius
    a = vx * vx + vy * vy

    # degenerate direction: treat as point-circle intersection
    if abs(a) < eps:
        on_circle = abs((x0 - cx) ** 2 + (y0 - cy) ** 2 - r ** 2) <= eps
        return [(0.0, point)] if on_circle else []

    b = 2.0 * (vx * (x0 - cx) + vy * (y0 - cy))
    c = (x0 - cx) ** 2 + (y0 - cy) ** 2 - r * r
    disc = b * b - 4.0 * a * c

    # No real intersection
    if disc < -eps:
        return []

    # One or two intersection
    if abs(disc) <= eps:
        ts = [-b / (2.0 * a)]
    else:
        sqrt_disc = sqrt(max(0.0, disc))
        ts = [(-b - sqrt_disc) / (2.0 * a), (-b + sqrt_disc) / (2.0 * a)]

    if as_segment:
        ts = [t for t in ts if in_unit_range(t, eps)]

    return [(t, Point(x=x0 + t * vx, y=y0 + t * vy, z=point.z)) for t in ts]
