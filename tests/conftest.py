"""Shared test fixtures."""

from __future__ import annotations

import numpy as np
import pytest

from riemannsum.model.curves import FunctionCurve, PolylineCurve
from riemannsum.model.geometry_primitives import Line, Point


@pytest.fixture
def baseline() -> Line:
    """Baseline from (0, 0, 0) to (10, 0, 0)."""
    return Line(Point(0.0, 0.0, 0.0), Point(10.0, 0.0, 0.0))


@pytest.fixture
def identity_line() -> PolylineCurve:
    """The line y = x for x in [0, 10]."""
    return PolylineCurve(np.array([[0.0, 0.0, 0.0], [10.0, 10.0, 0.0]]))


@pytest.fixture
def parabola() -> FunctionCurve:
    """y = x**2 / 10 + 1 over [0, 10]."""
    return FunctionCurve(lambda x: x * x / 10.0 + 1.0, 0.0, 10.0)
