"""Shared pytest fixtures for mandalagen tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest

from mandalagen.core.animation.parameters import BlendMode, ParameterSpec, PhaseParameterTable
from mandalagen.core.animation.synthesizer import FrameSynthesizer
from mandalagen.core.animation.timeline import PhaseTimeline
from mandalagen.core.config.presets import get_preset
from mandalagen.core.config.schema import DEFAULT_PHASE_STARTS, ResolvedConfig, resolve_config
from mandalagen.core.effects.geometry import SEPHIROTH

# ============================================================================
# Timeline Fixtures
# ============================================================================


@pytest.fixture
def default_timeline() -> PhaseTimeline:
    """Four-phase timeline: awakening/ascension/radiance/descent, w=0.05."""
    return PhaseTimeline.from_starts(DEFAULT_PHASE_STARTS, transition_zone_width=0.05)


@pytest.fixture
def simple_table() -> PhaseParameterTable:
    """Linear parameter table that closes the loop.

    nodeAlpha rises 0 -> 1 over awakening, holds at 1, and falls back to 0
    over descent. pathAnimSpeed is smoothstep-blended and missing from radiance.
    """
    return PhaseParameterTable(
        phases={
            "awakening": {
                "nodeAlpha": ParameterSpec(start=0.0, end=1.0),
                "pathAnimSpeed": ParameterSpec(start=1.0, end=1.0, blend=BlendMode.SMOOTHSTEP),
            },
            "ascension": {
                "nodeAlpha": ParameterSpec(start=1.0, end=1.0),
                "pathAnimSpeed": ParameterSpec(start=3.0, end=3.0, blend=BlendMode.SMOOTHSTEP),
            },
            "radiance": {
                "nodeAlpha": ParameterSpec(start=1.0, end=1.0),
            },
            "descent": {
                "nodeAlpha": ParameterSpec(start=1.0, end=0.0),
                "pathAnimSpeed": ParameterSpec(start=1.0, end=1.0, blend=BlendMode.SMOOTHSTEP),
            },
        }
    )


@pytest.fixture
def synthesizer(default_timeline: PhaseTimeline, simple_table: PhaseParameterTable) -> FrameSynthesizer:
    """Synthesizer over the simple table with the sephiroth as elements."""
    return FrameSynthesizer(default_timeline, simple_table, SEPHIROTH)


# ============================================================================
# Config Fixtures
# ============================================================================


@pytest.fixture
def default_preset() -> dict[str, Any]:
    """Raw copy of the built-in default preset."""
    return get_preset("default")


@pytest.fixture
def resolved_default(default_preset: dict[str, Any]) -> ResolvedConfig:
    """Default preset resolved with a fixed seed."""
    return resolve_config(default_preset, seed=42)


# ============================================================================
# Host Rendering Fakes
# ============================================================================


@dataclass
class RecordingLayer:
    """Layer that records opacity changes and composites."""

    name: str = "layer"
    opacity: float = 1.0
    composited: list[RecordingLayer] = field(default_factory=list)

    async def adjust_opacity(self, opacity: float) -> None:
        self.opacity = opacity

    async def composite_over(self, other: RecordingLayer) -> None:
        self.composited.append(other)


@dataclass
class RecordingCanvas:
    """Canvas that records every draw call as (primitive, kwargs)."""

    width: int
    height: int
    calls: list[tuple[str, dict[str, Any]]] = field(default_factory=list)

    async def draw_line(self, start, end, thickness, color, opacity) -> None:
        self.calls.append(
            ("line", {"start": start, "end": end, "thickness": thickness, "color": color, "opacity": opacity})
        )

    async def draw_polygon(self, center, radius, sides, rotation, color, opacity) -> None:
        self.calls.append(
            (
                "polygon",
                {
                    "center": center,
                    "radius": radius,
                    "sides": sides,
                    "rotation": rotation,
                    "color": color,
                    "opacity": opacity,
                },
            )
        )

    async def draw_ring(self, center, radius, thickness, color, opacity) -> None:
        self.calls.append(
            ("ring", {"center": center, "radius": radius, "thickness": thickness, "color": color, "opacity": opacity})
        )

    async def to_layer(self) -> RecordingLayer:
        return RecordingLayer(name="rendered")

    def of_kind(self, kind: str) -> list[dict[str, Any]]:
        return [kwargs for name, kwargs in self.calls if name == kind]


class RecordingCanvasFactory:
    """Canvas factory that keeps every canvas it hands out."""

    def __init__(self) -> None:
        self.canvases: list[RecordingCanvas] = []

    async def __call__(self, width: int, height: int) -> RecordingCanvas:
        canvas = RecordingCanvas(width=width, height=height)
        self.canvases.append(canvas)
        return canvas


@pytest.fixture
def canvas_factory() -> RecordingCanvasFactory:
    """Recording canvas factory."""
    return RecordingCanvasFactory()


@pytest.fixture
def host_layer() -> RecordingLayer:
    """Host layer effects composite onto."""
    return RecordingLayer(name="host")
