"""Scalar helpers shared by the animation and effect code."""

from __future__ import annotations

from typing import TypeVar

import numpy as np

Scalar = TypeVar("Scalar", int, float, np.number)


def clamp(value: Scalar, lo: Scalar, hi: Scalar) -> Scalar:
    """Limit value to [lo, hi]."""
    return min(hi, max(lo, value))


def clamp01(value: float) -> float:
    """Clamp to the unit interval and return a plain float."""
    return float(clamp(value, 0.0, 1.0))


def lerp(a: Scalar, b: Scalar, t: float) -> float:
    """Unclamped linear interpolation: ``a`` at t=0, ``b`` at t=1."""
    start = float(a)
    return start + (float(b) - start) * t


def smoothstep(t: float) -> float:
    """Hermite smoothstep, 3t² - 2t³."""
    return t * t * (3.0 - 2.0 * t)
