"""Tests for scalar math helpers."""

from __future__ import annotations

import numpy as np
import pytest

from mandalagen.core.utils.math import clamp, clamp01, lerp, smoothstep


def test_clamp_inside_and_on_bounds():
    """Values inside the range (or on its bounds) are unchanged."""
    assert clamp(5, 0, 10) == 5
    assert clamp(0, 0, 10) == 0
    assert clamp(10, 0, 10) == 10


def test_clamp_outside_range():
    """Values outside the range snap to the nearest bound."""
    assert clamp(-5, 0, 10) == 0
    assert clamp(15.5, 0.0, 10.0) == 10.0
    assert clamp(-15, -10, -1) == -10


def test_clamp01_returns_float():
    """clamp01 returns a plain float, also for numpy input."""
    assert clamp01(1.7) == 1.0
    assert clamp01(-0.2) == 0.0
    result = clamp01(np.float64(0.25))
    assert type(result) is float
    assert result == 0.25


def test_lerp_endpoints_and_midpoint():
    """lerp hits both ends and the middle."""
    assert lerp(-5.0, 5.0, 0.0) == -5.0
    assert lerp(-5.0, 5.0, 1.0) == 5.0
    assert lerp(-10.0, 10.0, 0.5) == 0.0


def test_lerp_is_not_clamped():
    """t outside [0, 1] extrapolates."""
    assert lerp(0.0, 10.0, 1.5) == pytest.approx(15.0)
    assert lerp(0.0, 10.0, -0.5) == pytest.approx(-5.0)


def test_smoothstep_shape():
    """Smoothstep is flat at both ends and 0.5 in the middle."""
    assert smoothstep(0.0) == 0.0
    assert smoothstep(1.0) == 1.0
    assert smoothstep(0.5) == pytest.approx(0.5)
    assert smoothstep(0.75) == pytest.approx(0.84375)
