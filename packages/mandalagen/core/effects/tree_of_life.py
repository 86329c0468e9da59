"""Animated Kabbalistic Tree of Life."""

from __future__ import annotations

from collections.abc import Callable, Sequence
import math
from typing import Any

from mandalagen.core.animation.synthesizer import FrameParameterBundle
from mandalagen.core.effects.base import PhaseAnimatedEffect
from mandalagen.core.effects.energy import EnergyPulseEngine, PulseWeights
from mandalagen.core.effects.geometry import SEPHIROTH, TREE_PATHS, GeometryNode, sephirah_by_id
from mandalagen.core.effects.protocols import Canvas, Point
from mandalagen.core.utils.math import clamp01, lerp

ENERGY_PULSES = "enableEnergyPulses"
CROWN = "KETHER"


def _blend_weights(a: PulseWeights, b: PulseWeights, t: float) -> PulseWeights:
    return PulseWeights(
        breathing=lerp(a.breathing, b.breathing, t),
        multi_layer=lerp(a.multi_layer, b.multi_layer, t),
        aura=lerp(a.aura, b.aura, t),
        harmonic=lerp(a.harmonic, b.harmonic, t),
    )


def _along(a: Point, b: Point, t: float) -> Point:
    return (a[0] + (b[0] - a[0]) * t, a[1] + (b[1] - a[1]) * t)


class TreeOfLifeEffect(PhaseAnimatedEffect):
    """Ten sephiroth joined by the 22 paths, lit phase by phase.

    Bundle parameters read (with defaults when a phase leaves them out):
    ``nodeAlpha`` (1.0), ``pathIntensity`` (1.0), ``pathAnimSpeed`` (1.0)
    and ``ketherGlow`` (1.0).
    """

    name = "tree-of-life"
    display_name = "Animated Tree of Life"

    @classmethod
    def elements(cls) -> Sequence[GeometryNode]:
        return SEPHIROTH

    def engine_factories(self) -> dict[str, Callable[[], Any]]:
        return {ENERGY_PULSES: lambda: EnergyPulseEngine(self.config.options)}

    async def render(self, canvas: Canvas, bundle: FrameParameterBundle) -> None:
        await self.render_paths(canvas, bundle)
        await self.render_nodes(canvas, bundle)

        pulses = self.engine(ENERGY_PULSES)
        if pulses is not None:
            await self.render_energy(canvas, bundle, pulses)

    async def render_paths(self, canvas: Canvas, bundle: FrameParameterBundle) -> None:
        intensity = clamp01(bundle.get("pathIntensity", 1.0))
        speed = bundle.get("pathAnimSpeed", 1.0)
        thickness = float(self.config.option("pathThickness", 2)) * float(
            self.config.option("pathSizeScale", 1.0)
        )
        # Tracing head sweeps every path pathAnimSpeed times per loop
        head = (bundle.progress * speed) % 1.0

        for path in TREE_PATHS:
            start = self.transform(*self._xy(path.start))
            end = self.transform(*self._xy(path.end))
            await canvas.draw_line(start, end, thickness, self.colors["pathColor"], intensity)
            if head > 0:
                await canvas.draw_line(
                    start,
                    _along(start, end, head),
                    thickness * 1.5,
                    self.colors["glowColor"],
                    intensity * 0.5,
                )

    async def render_nodes(self, canvas: Canvas, bundle: FrameParameterBundle) -> None:
        alpha = clamp01(bundle.get("nodeAlpha", 1.0))
        crown_glow = bundle.get("ketherGlow", 1.0)
        size = float(self.config.option("nodeSize", 20))
        glow_size = float(self.config.option("nodeGlowSize", 25))

        # Draw in activation order so early-activating nodes sit underneath
        for node in bundle.activation_order:
            center = self.transform(node.x, node.y)
            await canvas.draw_polygon(center, size, 6, 0.0, node.color, alpha)

            glow = glow_size * (crown_glow if node.name == CROWN else 1.0)
            glow_color = node.glow_color or self.colors["glowColor"]
            await canvas.draw_ring(center, glow, 3, glow_color, alpha * 0.5)

    async def render_energy(
        self,
        canvas: Canvas,
        bundle: FrameParameterBundle,
        pulses: EnergyPulseEngine,
    ) -> None:
        progress = bundle.progress
        alpha = clamp01(bundle.get("nodeAlpha", 1.0))
        intensity = clamp01(bundle.get("pathIntensity", 1.0))
        size = float(self.config.option("nodeSize", 20))

        weights = pulses.phase_weights(bundle.current_phase)
        if bundle.in_transition:
            weights = _blend_weights(
                weights, pulses.phase_weights(bundle.next_phase), bundle.transition_blend
            )

        for index, node in enumerate(SEPHIROTH):
            distance = math.hypot(node.x - 0.5, node.y - 0.5) * 2.0
            pulse = pulses.combined_node_pulse(progress, index, distance, weights)
            x, y = self.transform(node.x, node.y)
            await canvas.draw_ring(
                (x + pulse.offset_x, y + pulse.offset_y),
                size * pulse.scale * 1.5,
                2,
                self.colors["glowColor"],
                clamp01(pulse.glow * alpha),
            )

        total = len(TREE_PATHS)
        for path in TREE_PATHS:
            wave = pulses.wave_pulse(progress, path.order, total)
            if wave.intensity <= 0:
                continue
            start = self.transform(*self._xy(path.start))
            end = self.transform(*self._xy(path.end))
            await canvas.draw_line(
                start,
                _along(start, end, wave.position),
                3,
                self.colors["glowColor"],
                clamp01(wave.intensity * intensity),
            )

    @staticmethod
    def _xy(node_id: int) -> tuple[float, float]:
        node = sephirah_by_id(node_id)
        return node.x, node.y
