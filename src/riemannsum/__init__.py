"""Riemann sum rectangles under a curve."""
from riemannsum.algorithms.riemann import (
    Partition,
    RiemannSumResult,
    SamplingRule,
    build_rectangle,
    offset_curve,
    partition,
    riemann_sum_area,
    riemann_sum_rectangles,
    sample_height,
    try_riemann_sum_rectangles,
)
from riemannsum.errors import InvalidArgumentError, NoIntersectionError, RiemannSumError
from riemannsum.logging_config import attach_null_handler, setup_logging
from riemannsum.model.curves import (
    ArcCurve,
    Curve,
    ExtendPolicy,
    FunctionCurve,
    ParametricCurve,
    PolylineCurve,
)
from riemannsum.model.geometry_primitives import BoundingBox, Line, Point, Rectangle, Vector

__all__ = [
    "ArcCurve",
    "BoundingBox",
    "Curve",
    "ExtendPolicy",
    "FunctionCurve",
    "InvalidArgumentError",
    "Line",
    "NoIntersectionError",
    "ParametricCurve",
    "Partition",
    "Point",
    "PolylineCurve",
    "Rectangle",
    "RiemannSumError",
    "RiemannSumResult",
    "SamplingRule",
    "Vector",
    "build_rectangle",
    "offset_curve",
    "partition",
    "riemann_sum_area",
    "riemann_sum_rectangles",
    "sample_height",
    "setup_logging",
    "try_riemann_sum_rectangles",
]

attach_null_handler()
