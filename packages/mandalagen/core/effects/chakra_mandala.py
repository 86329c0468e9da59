"""Seven-chakra mandala along the central channel."""

from __future__ import annotations

from collections.abc import Callable, Sequence
import math
from typing import Any

from mandalagen.core.animation.loop import oscillate, require_integer_speed
from mandalagen.core.animation.synthesizer import FrameParameterBundle
from mandalagen.core.config.schema import ResolvedConfig
from mandalagen.core.effects.base import DEFAULT_SIZE, PhaseAnimatedEffect
from mandalagen.core.effects.energy import EnergyPulseEngine
from mandalagen.core.effects.geometry import CHAKRAS, Chakra, GeometryNode
from mandalagen.core.effects.protocols import Canvas, CanvasFactory, ColorSource
from mandalagen.core.utils.math import clamp01

ENERGY_FLOW = "enableEnergyFlow"

# Focus for phases that do not name one
DEFAULT_FOCUS_CHAKRA = "anahata"


class ChakraMandalaEffect(PhaseAnimatedEffect):
    """Chakras from root to crown with rotating mandala rings.

    Each phase may name a focus chakra (``{phase}ChakraFocus``), drawn with
    an enlarged glow while that phase is current. Phases without one focus
    on the heart chakra (``anahata``).
    """

    name = "chakra-mandala"
    display_name = "Chakra Mandala"

    def __init__(
        self,
        config: ResolvedConfig,
        canvas_factory: CanvasFactory,
        width: int = DEFAULT_SIZE,
        height: int = DEFAULT_SIZE,
        color_sources: dict[str, ColorSource] | None = None,
    ):
        super().__init__(config, canvas_factory, width, height, color_sources)
        self.ring_speed = require_integer_speed(
            "mandalaRingSpeed", config.option("mandalaRingSpeed", 2)
        )
        self.frequency_speed = require_integer_speed(
            "frequencyOscillationSpeed", config.option("frequencyOscillationSpeed", 3)
        )

    @classmethod
    def elements(cls) -> Sequence[GeometryNode]:
        return CHAKRAS

    def engine_factories(self) -> dict[str, Callable[[], Any]]:
        return {ENERGY_FLOW: self._build_flow_engine}

    def _build_flow_engine(self) -> EnergyPulseEngine:
        option = self.config.option
        return EnergyPulseEngine(
            {
                "pulseTracerSpeed": option("energyFlowSpeed", 2),
                "pulseTracerCount": option("energyFlowDensity", 5),
                "pulseBreathSpeed": option("breathSpeed", 1),
                "pulseBreathIntensity": option("chakraBreatheIntensity", 0.3),
            }
        )

    def focus_chakra(self, phase: str) -> str:
        return self.config.option(f"{phase}ChakraFocus") or DEFAULT_FOCUS_CHAKRA

    def chakra_color(self, chakra: Chakra) -> str:
        if self.config.option("useCustomChakraColors", False):
            return self.colors["nodeColor"]
        return chakra.color

    async def render(self, canvas: Canvas, bundle: FrameParameterBundle) -> None:
        if self.config.option("enableCentralChannel", True):
            await self.render_central_channel(canvas, bundle)
        if self.config.option("enableMandalaRings", True):
            await self.render_mandala_rings(canvas, bundle)

        flow = self.engine(ENERGY_FLOW)
        if flow is not None:
            await self.render_energy_flow(canvas, bundle, flow)

        await self.render_chakras(canvas, bundle, flow)

    async def render_central_channel(self, canvas: Canvas, bundle: FrameParameterBundle) -> None:
        alpha = clamp01(bundle.get("nodeAlpha", 1.0))
        glow = float(self.config.option("centralChannelGlow", 1.2))
        top = self.transform(CHAKRAS[-1].x, CHAKRAS[-1].y)
        bottom = self.transform(CHAKRAS[0].x, CHAKRAS[0].y)
        await canvas.draw_line(bottom, top, 4, self.colors["glowColor"], clamp01(0.3 * alpha * glow))

    async def render_mandala_rings(self, canvas: Canvas, bundle: FrameParameterBundle) -> None:
        alpha = clamp01(bundle.get("nodeAlpha", 1.0))
        layers = int(self.config.option("mandalaRingLayers", 3))
        symmetry = int(self.config.option("mandalaSymmetry", 6))
        base_opacity = float(self.config.option("mandalaRingOpacity", 0.6))
        outer = float(self.config.option("mandalaOuterRadius", 0.4)) * min(self.width, self.height)
        center = self.transform(0.5, 0.5)

        rotation = (bundle.progress * self.ring_speed * 360.0) % 360.0
        for k in range(layers):
            radius = outer * (1.0 - k * 0.2)
            if radius <= 0:
                break
            opacity = clamp01(base_opacity * (1.0 - k * 0.2) * alpha)
            await canvas.draw_ring(center, radius, 2, self.colors["pathColor"], opacity)

            # Petals alternate direction per layer
            direction = 1 if k % 2 == 0 else -1
            for i in range(symmetry):
                angle = math.radians(direction * rotation + i * 360.0 / symmetry)
                petal = (center[0] + math.cos(angle) * radius, center[1] + math.sin(angle) * radius)
                await canvas.draw_polygon(
                    petal, radius * 0.05, symmetry, direction * rotation, self.colors["glowColor"], opacity
                )

    async def render_energy_flow(
        self,
        canvas: Canvas,
        bundle: FrameParameterBundle,
        flow: EnergyPulseEngine,
    ) -> None:
        intensity = clamp01(bundle.get("pathIntensity", 1.0))
        tracers = flow.path_tracers(bundle.progress)

        for lower, upper in zip(CHAKRAS, CHAKRAS[1:], strict=False):
            a = self.transform(lower.x, lower.y)
            b = self.transform(upper.x, upper.y)
            for tracer in tracers:
                point = (a[0] + (b[0] - a[0]) * tracer.position, a[1] + (b[1] - a[1]) * tracer.position)
                await canvas.draw_polygon(
                    point, 3, 6, 0.0, self.chakra_color(lower), clamp01(tracer.brightness * intensity)
                )

    async def render_chakras(
        self,
        canvas: Canvas,
        bundle: FrameParameterBundle,
        flow: EnergyPulseEngine | None,
    ) -> None:
        alpha = clamp01(bundle.get("nodeAlpha", 1.0))
        glow_size = float(self.config.option("chakraGlowSize", 35))
        glow_intensity = float(self.config.option("chakraGlowIntensity", 0.7))
        symmetry = int(self.config.option("mandalaSymmetry", 6))
        scale = float(self.config.option("scale", 1.0))
        focus = self.focus_chakra(bundle.current_phase)

        for chakra in bundle.activation_order:
            index = CHAKRAS.index(chakra)
            center = self.transform(chakra.x, chakra.y)

            # Each chakra vibrates at its own whole-number harmonic of the loop
            vibration = oscillate(bundle.progress, self.frequency_speed * (index + 1)) * 0.1 + 1.0
            breath = flow.breathing_pulse(bundle.progress, index).scale if flow is not None else 1.0
            radius = chakra.radius * scale * vibration * breath

            glow = glow_size * (1.5 if chakra.id == focus else 1.0)
            await canvas.draw_ring(
                center,
                glow,
                3,
                chakra.glow_color or self.colors["glowColor"],
                clamp01(glow_intensity * alpha * 0.4),
            )
            await canvas.draw_polygon(center, radius, symmetry, 0.0, self.chakra_color(chakra), alpha)
