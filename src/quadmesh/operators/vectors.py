"""
Small-vector helpers on top of numpy.

Every helper returns a new array; nothing is written into module-level
scratch buffers, so all operators stay re-entrant.
"""

import numpy as np

from ..spec.constants import EPS_ZERO


def lerp(a: np.ndarray, b: np.ndarray, t: float) -> np.ndarray:
    """a + t * (b - a). Same operand order everywhere so results are bit-reproducible."""
    return a + t * (b - a)


def normalize(v: np.ndarray) -> np.ndarray:
    """Unit vector along v; the zero vector (|v| < EPS_ZERO) maps to zero, never NaN."""
    norm = np.linalg.norm(v)
    if norm < EPS_ZERO:
        return np.zeros(3)
    return v / norm


def centroid(*points: np.ndarray) -> np.ndarray:
    """Arithmetic mean of the given points."""
    return np.mean(points, axis=0)
