"""Loop-closure helpers.

Frame 0 and frame N-1 of a looping render must be visually equivalent. Two
conventions guarantee it:

- progress is ``frame / (total - 1)`` so the last frame sits exactly at 1.0
  and the wrapped next frame is 0.0;
- every periodic oscillation runs an integer number of cycles over the
  timeline, so ``sin(2π * speed * 1.0)`` equals ``sin(0)``.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
import math
from numbers import Integral, Real
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from mandalagen.core.animation.synthesizer import FrameSynthesizer

TAU = 2.0 * math.pi


class Waveform(str, Enum):
    SIN = "sin"
    COS = "cos"


def frame_progress(current_frame: int, total_frames: int) -> float:
    """Global progress for a frame.

    Args:
        current_frame: Zero-based frame index.
        total_frames: Number of frames in the loop.

    Returns:
        ``current_frame / (total_frames - 1)`` clamped to [0, 1], or 0.0 when
        there is at most one frame.

    Example:
        >>> frame_progress(119, 120)
        1.0
        >>> frame_progress(0, 1)
        0.0
    """
    if total_frames <= 1:
        return 0.0
    progress = current_frame / (total_frames - 1)
    return max(0.0, min(1.0, progress))


def frame_progress_grid(total_frames: int) -> np.ndarray:
    """Progress of every frame in a loop, as a float array."""
    if total_frames < 1:
        raise ValueError(f"total_frames must be >= 1, got {total_frames}")
    if total_frames == 1:
        return np.zeros(1)
    return np.linspace(0.0, 1.0, total_frames)


def is_integer_speed(speed: object) -> bool:
    """True for whole-number speeds (``2`` or ``2.0``); bools are not speeds."""
    if isinstance(speed, bool):
        return False
    if isinstance(speed, Integral):
        return True
    if isinstance(speed, Real):
        value = float(speed)
        return math.isfinite(value) and value.is_integer()
    return False


def require_integer_speed(name: str, speed: object) -> int:
    """Return speed as int, or raise if it would leave a seam at the loop point.

    Raises:
        ValueError: If speed is not a whole number.
    """
    if not is_integer_speed(speed):
        raise ValueError(
            f"{name} must be an integer number of cycles per loop, got {speed!r}"
        )
    return int(speed)  # type: ignore[call-overload]


def oscillate(
    progress: float,
    speed: int,
    phase: float = 0.0,
    wave: Waveform | str = Waveform.SIN,
) -> float:
    """Periodic value ``wave(progress * speed * 2π + phase)``.

    Args:
        progress: Global progress in [0, 1].
        speed: Whole cycles per loop.
        phase: Phase offset in radians.
        wave: ``"sin"`` or ``"cos"``.

    Raises:
        ValueError: If speed is not a whole number or wave is unknown.
    """
    cycles = require_integer_speed("speed", speed)
    angle = progress * cycles * TAU + phase
    if Waveform(wave) is Waveform.COS:
        return math.cos(angle)
    return math.sin(angle)


def loop_closure_error(
    synthesizer: FrameSynthesizer,
    params: Iterable[str] | None = None,
) -> dict[str, float]:
    """Absolute difference of each parameter between progress 0 and 1.

    Parameters present at only one end of the loop are reported as ``inf``.

    Args:
        synthesizer: Synthesizer to probe.
        params: Parameter names to check; defaults to every table parameter.

    Returns:
        Mapping of parameter name to absolute difference.
    """
    first = synthesizer.synthesize(0.0)
    last = synthesizer.synthesize(1.0)
    names = synthesizer.table.parameter_names if params is None else tuple(params)

    errors: dict[str, float] = {}
    for name in names:
        a, b = first.get(name), last.get(name)
        if a is None and b is None:
            continue
        if a is None or b is None:
            errors[name] = math.inf
        else:
            errors[name] = abs(a - b)
    return errors
