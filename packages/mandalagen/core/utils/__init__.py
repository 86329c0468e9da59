"""Shared utilities for mandalagen."""

from mandalagen.core.utils.logging import configure_logging, get_logger, get_render_logger
from mandalagen.core.utils.math import clamp, clamp01, lerp, smoothstep

__all__ = [
    "clamp",
    "clamp01",
    "configure_logging",
    "get_logger",
    "get_render_logger",
    "lerp",
    "smoothstep",
]
