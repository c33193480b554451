"""Joint-angle and confidence helpers shared by the rep counter."""

import numpy as np

_MIN_DENOMINATOR = 1e-6


def _xy(point):
    if hasattr(point, "x") and hasattr(point, "y"):
        return np.array([point.x, point.y], dtype=float)
    return np.asarray(point, dtype=float)[:2]


def joint_angle(a, b, c) -> float:
    """Angle at vertex ``b`` in degrees, always in [0, 180].

    Points can be landmarks (anything with ``x``/``y``) or plain (x, y) pairs;
    depth is ignored. Coincident points fall back to the epsilon-floored
    denominator and non-finite coordinates give 0.0, so this never raises.
    """
    a, b, c = _xy(a), _xy(b), _xy(c)
    with np.errstate(invalid="ignore", over="ignore"):
        ba = a - b; bc = c - b
        denom = max(float(np.linalg.norm(ba) * np.linalg.norm(bc)), _MIN_DENOMINATOR)
        cosang = np.clip(np.dot(ba, bc) / denom, -1.0, 1.0)
        angle = float(np.degrees(np.arccos(cosang)))
    if not np.isfinite(angle):
        return 0.0
    return angle


def average(values) -> float:
    values = list(values)
    if not values:
        return 0.0
    return float(np.mean(values))
