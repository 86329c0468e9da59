"""Tests for loop-closure helpers."""

from __future__ import annotations

import math

import numpy as np
import pytest

from mandalagen.core.animation.loop import (
    Waveform,
    frame_progress,
    frame_progress_grid,
    is_integer_speed,
    loop_closure_error,
    oscillate,
    require_integer_speed,
)
from mandalagen.core.animation.parameters import ParameterSpec, PhaseParameterTable
from mandalagen.core.animation.synthesizer import FrameSynthesizer
from mandalagen.core.animation.timeline import PhaseTimeline


class TestFrameProgress:
    """Tests for frame to progress mapping."""

    def test_last_frame_is_one(self) -> None:
        """Frame N-1 of N maps to exactly 1.0."""
        assert frame_progress(119, 120) == 1.0

    def test_middle_frame(self) -> None:
        """Frame 60 of 120 maps to 60/119."""
        assert frame_progress(60, 120) == pytest.approx(60 / 119)

    def test_single_frame_is_zero(self) -> None:
        """One (or zero) frames map to 0.0."""
        assert frame_progress(0, 1) == 0.0
        assert frame_progress(3, 0) == 0.0

    def test_out_of_range_frames_clamp(self) -> None:
        """Frames past the end clamp to 1.0."""
        assert frame_progress(500, 120) == 1.0
        assert frame_progress(-1, 120) == 0.0

    def test_grid_matches_frame_progress(self) -> None:
        """The grid is frame_progress for every frame."""
        grid = frame_progress_grid(120)
        assert grid.shape == (120,)
        assert grid[0] == 0.0
        assert grid[-1] == 1.0
        assert grid[60] == pytest.approx(frame_progress(60, 120))

    def test_grid_single_frame(self) -> None:
        """A one-frame loop has a single zero."""
        assert np.array_equal(frame_progress_grid(1), np.zeros(1))

    def test_grid_rejects_empty_loop(self) -> None:
        """Zero frames is an error."""
        with pytest.raises(ValueError, match="total_frames"):
            frame_progress_grid(0)


class TestIntegerSpeeds:
    """Tests for integer speed checks."""

    @pytest.mark.parametrize("speed", [0, 1, 3, 2.0, np.int64(4)])
    def test_whole_numbers_accepted(self, speed: object) -> None:
        """Ints and integral floats are whole cycles."""
        assert is_integer_speed(speed)

    @pytest.mark.parametrize("speed", [0.5, 1.5, True, "2", None, math.inf, math.nan])
    def test_others_rejected(self, speed: object) -> None:
        """Fractions, bools, strings and non-finite values are not speeds."""
        assert not is_integer_speed(speed)

    def test_require_returns_int(self) -> None:
        """Integral floats are returned as int."""
        assert require_integer_speed("pulseWaveSpeed", 2.0) == 2
        assert isinstance(require_integer_speed("pulseWaveSpeed", 2.0), int)

    def test_require_raises_with_name(self) -> None:
        """The error names the offending setting."""
        with pytest.raises(ValueError, match="pulseWaveSpeed must be an integer"):
            require_integer_speed("pulseWaveSpeed", 2.5)


class TestOscillate:
    """Tests for oscillate."""

    @pytest.mark.parametrize("speed", [1, 2, 3, 7])
    def test_closes_loop(self, speed: int) -> None:
        """Integer speeds give equal values at progress 0 and 1."""
        assert oscillate(0.0, speed, 0.3) == pytest.approx(oscillate(1.0, speed, 0.3), abs=1e-9)

    def test_sin_and_cos(self) -> None:
        """Waveform selects sin or cos."""
        assert oscillate(0.25, 1) == pytest.approx(1.0)
        assert oscillate(0.0, 1, wave=Waveform.COS) == pytest.approx(1.0)
        assert oscillate(0.0, 1, wave="cos") == pytest.approx(1.0)

    def test_fractional_speed_raises(self) -> None:
        """A fractional speed would leave a seam."""
        with pytest.raises(ValueError):
            oscillate(0.5, 1.5)  # type: ignore[arg-type]

    def test_unknown_wave_raises(self) -> None:
        """Only sin and cos are supported."""
        with pytest.raises(ValueError):
            oscillate(0.5, 1, wave="triangle")


class TestLoopClosureError:
    """Tests for loop_closure_error."""

    def test_closed_table_has_zero_error(self, synthesizer: FrameSynthesizer) -> None:
        """The simple table closes the loop for every parameter."""
        errors = loop_closure_error(synthesizer)
        assert set(errors) == {"nodeAlpha", "pathAnimSpeed"}
        assert all(e == pytest.approx(0.0, abs=1e-12) for e in errors.values())

    def test_open_table_reports_difference(self, default_timeline: PhaseTimeline) -> None:
        """A parameter that does not return to its start is reported."""
        table = PhaseParameterTable(
            phases={name: {"level": ParameterSpec(start=0.0, end=1.0)} for name in default_timeline.names}
        )
        errors = loop_closure_error(FrameSynthesizer(default_timeline, table))
        assert errors["level"] == pytest.approx(1.0)

    def test_one_sided_parameter_is_infinite(self, default_timeline: PhaseTimeline) -> None:
        """Present at progress 0 only: infinite error."""
        table = PhaseParameterTable(phases={"awakening": {"level": ParameterSpec(start=0.0, end=0.0)}})
        errors = loop_closure_error(FrameSynthesizer(default_timeline, table))
        assert math.isinf(errors["level"])

    def test_params_filter(self, synthesizer: FrameSynthesizer) -> None:
        """Only the requested parameters are checked."""
        assert set(loop_closure_error(synthesizer, ["nodeAlpha"])) == {"nodeAlpha"}
