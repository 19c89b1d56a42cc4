# animation.py
"""
Timing curves and per-particle progress evaluation.

This module holds the numeric kernels behind the fall animation. Progress
for every particle is computed in one Numba-jitted pass so the frame loop
stays cheap even with a few hundred pieces on screen.
"""
import numpy as np
from numba import jit
from typing import Sequence, Tuple

from constants import EASE_IN

# --- Data Contracts ---
#
# cubic_bezier(x, x1, y1, x2, y2) -> float:
#   - Inputs: x in any range; control points of a CSS cubic-bezier curve.
#   - Outputs: eased value. x <= 0 maps to 0, x >= 1 maps to 1.
#
# eased_progress(t_global, offsets, durations, curve) -> np.ndarray:
#   - Inputs:
#     - t_global: float, seconds since the shared clock started.
#     - offsets: (N,) float64, per-particle start delay in seconds.
#     - durations: (N,) float64, per-particle duration, all > 0.
#     - curve: (x1, y1, x2, y2) control points.
#   - Outputs: (N,) float64 array of eased progress in [0, 1].
#   - Invariants: A particle whose offset has not elapsed reports 0.

_EPSILON = 1e-7


@jit(nopython=True)
def _sample_curve(t, p1, p2):
    return ((1.0 - 3.0 * p2 + 3.0 * p1) * t + (3.0 * p2 - 6.0 * p1)) * t * t + 3.0 * p1 * t


@jit(nopython=True)
def _sample_curve_derivative(t, p1, p2):
    return (3.0 * (1.0 - 3.0 * p2 + 3.0 * p1) * t + 2.0 * (3.0 * p2 - 6.0 * p1)) * t + 3.0 * p1


@jit(nopython=True)
def cubic_bezier(x, x1, y1, x2, y2):
    """
    Evaluates a CSS-style cubic Bezier timing curve at x.

    Solves the curve's parameter for x with Newton-Raphson and falls back
    to bisection when the derivative flattens out.
    """
    if x <= 0.0:
        return 0.0
    if x >= 1.0:
        return 1.0

    t = x
    for _ in range(8):
        error = _sample_curve(t, x1, x2) - x
        if abs(error) < _EPSILON:
            return _sample_curve(t, y1, y2)
        slope = _sample_curve_derivative(t, x1, x2)
        if abs(slope) < _EPSILON:
            break
        t -= error / slope

    low, high = 0.0, 1.0
    t = x
    for _ in range(64):
        value = _sample_curve(t, x1, x2)
        if abs(value - x) < _EPSILON:
            break
        if x > value:
            low = t
        else:
            high = t
        t = (low + high) / 2.0
    return _sample_curve(t, y1, y2)


@jit(nopython=True)
def _eased_progress_numba(t_global, offsets, durations, x1, y1, x2, y2):
    count = offsets.shape[0]
    progress = np.empty(count, dtype=np.float64)
    for i in range(count):
        t_local = t_global - offsets[i]
        if t_local < 0.0:
            t_local = 0.0
        u = t_local / durations[i]
        if u > 1.0:
            u = 1.0
        progress[i] = cubic_bezier(u, x1, y1, x2, y2)
    return progress


def eased_progress(
    t_global: float,
    offsets: np.ndarray,
    durations: np.ndarray,
    curve: Tuple[float, float, float, float] = EASE_IN,
) -> np.ndarray:
    """Eased progress of every particle at t_global on the shared clock."""
    offsets = np.ascontiguousarray(offsets, dtype=np.float64)
    durations = np.ascontiguousarray(durations, dtype=np.float64)
    x1, y1, x2, y2 = (float(v) for v in curve)
    return _eased_progress_numba(float(t_global), offsets, durations, x1, y1, x2, y2)


def lerp(start: np.ndarray, end: np.ndarray, progress: Sequence[float]) -> np.ndarray:
    """
    Row-wise interpolation of (N, 2) point arrays.

    Written as a weighted sum so progress 0 and 1 land exactly on the
    endpoints.
    """
    weight = np.asarray(progress, dtype=np.float64)[:, np.newaxis]
    return start * (1.0 - weight) + end * weight
