"""Eased scalar interpolation and RGB color interpolation."""

from __future__ import annotations

import logging
import re

from mandalagen.core.animation.easing import EasingName, get_easing
from mandalagen.core.utils.math import clamp01
from mandalagen.core.utils.math import lerp as linear_lerp

logger = logging.getLogger(__name__)

_HEX_RE = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)


def lerp(
    start: float,
    end: float,
    progress: float,
    easing: str | EasingName = EasingName.LINEAR,
) -> float:
    """Interpolate between start and end with a named easing.

    Progress is clamped to [0, 1] before easing, so progress < 0 yields
    ``start`` and progress > 1 yields ``end``. Unknown easing names fall
    back to linear with a warning; this function never raises on a bad name.

    Args:
        start: Value at progress 0.
        end: Value at progress 1.
        progress: Normalized progress.
        easing: Easing name from the easing registry.

    Returns:
        Interpolated value.

    Example:
        >>> lerp(0.0, 10.0, 0.5, "easeInCubic")
        1.25
    """
    progress = clamp01(progress)

    easing_fn = get_easing(easing)
    if easing_fn is None:
        logger.warning(f"Unknown easing: {easing!r}, using linear")
        return linear_lerp(start, end, progress)

    return linear_lerp(start, end, easing_fn(progress))


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Decode ``#RRGGBB`` (leading # optional). Malformed input decodes as black."""
    match = _HEX_RE.match(hex_color or "")
    if match is None:
        return (0, 0, 0)
    r, g, b = (int(part, 16) for part in match.groups())
    return (r, g, b)


def rgb_to_hex(r: int, g: int, b: int) -> str:
    return "#" + "".join(f"{max(0, min(255, c)):02X}" for c in (r, g, b))


def lerp_color(from_hex: str, to_hex: str, progress: float) -> str:
    """Per-channel linear RGB interpolation (no gamma correction).

    Used for discrete color transitions only; animation parameters go
    through :func:`lerp`.

    Example:
        >>> lerp_color("#000000", "#FFFFFF", 0.5)
        '#808080'
    """
    progress = clamp01(progress)
    src = hex_to_rgb(from_hex)
    dst = hex_to_rgb(to_hex)
    r, g, b = (_round_half_up(linear_lerp(s, d, progress)) for s, d in zip(src, dst, strict=True))
    return rgb_to_hex(r, g, b)


def _round_half_up(value: float) -> int:
    # round() uses banker's rounding; channel values round half away from zero
    return int(value + 0.5)
