"""
Configuration & Numeric Constants
=================================
This module serves as the central registry for the global constants used by
the rectangle generation and the curve backends.

Exports:
    PROBE_HEADROOM (float): Distance the vertical probe reaches above the curve's top extent.
    OFFSET_EPSILON (float): Offsets at or below this magnitude are treated as no translation.
    EPS (float): Tolerance for parallel tests and inclusive parameter ranges.
    FUNCTION_SAMPLES (int): Grid size used to estimate the extent of analytic curves.
    PARAMETRIC_SAMPLES (int): Grid size used to bracket roots on parametric curves.
    DEFAULT_EXTEND_POLICY (str): Curve-side extension used when none is given.
"""

# Probe geometry
PROBE_HEADROOM: float = 1.0

# Tolerances
OFFSET_EPSILON: float = 1e-9
EPS: float = 1e-9

# Curve backends
FUNCTION_SAMPLES: int = 512
PARAMETRIC_SAMPLES: int = 256
DEFAULT_EXTEND_POLICY: str = "none"
