"""Energy pulse oscillators for node and path decoration.

Every oscillator here is a pure function of progress and runs a whole
number of cycles per loop, so the values at progress 0 and 1 match.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import logging
import math
from typing import Any

from mandalagen.core.animation.loop import TAU, oscillate, require_integer_speed

logger = logging.getLogger(__name__)

# Fast/medium/slow interference layers: (name, cycles per loop, amplitude, phase step)
_LAYERS: tuple[tuple[str, int, float, float], ...] = (
    ("fast", 3, 0.3, 0.3),
    ("medium", 2, 0.4, 0.4),
    ("slow", 1, 0.3, 0.5),
)

_WAVE_WIDTH = 3  # paths lit on either side of the wave front


@dataclass(frozen=True)
class WavePulse:
    intensity: float
    position: float


@dataclass(frozen=True)
class BreathingPulse:
    scale: float
    glow: float


@dataclass(frozen=True)
class PulseLayer:
    name: str
    intensity: float
    speed: int
    phase: float


@dataclass(frozen=True)
class MultiLayerPulse:
    layers: tuple[PulseLayer, ...]
    combined: float


@dataclass(frozen=True)
class AuraWave:
    intensity: float
    wave_position: float


@dataclass(frozen=True)
class Tracer:
    position: float
    brightness: float
    particle_id: int


@dataclass(frozen=True)
class HarmonicResonance:
    offset_x: float
    offset_y: float
    speed: int
    amplitude: float


@dataclass(frozen=True)
class PulseWeights:
    breathing: float
    multi_layer: float
    aura: float
    harmonic: float


@dataclass(frozen=True)
class NodePulse:
    scale: float
    glow: float
    offset_x: float
    offset_y: float


PHASE_WEIGHTS: dict[str, PulseWeights] = {
    "awakening": PulseWeights(breathing=0.5, multi_layer=0.2, aura=0.2, harmonic=0.1),
    "ascension": PulseWeights(breathing=0.3, multi_layer=0.4, aura=0.2, harmonic=0.1),
    "radiance": PulseWeights(breathing=0.2, multi_layer=0.3, aura=0.4, harmonic=0.1),
    "descent": PulseWeights(breathing=0.4, multi_layer=0.2, aura=0.2, harmonic=0.2),
}


class EnergyPulseEngine:
    """Pulse, breathing, aura and tracer oscillators.

    Args:
        options: Resolved effect options. Reads ``pulseWaveSpeed``,
            ``pulseBreathSpeed``, ``pulseBreathIntensity``, ``pulseAuraSpeed``,
            ``pulseAuraWidth``, ``pulseTracerSpeed`` and ``pulseTracerCount``.

    Raises:
        ValueError: If any speed is not a whole number of cycles per loop.
    """

    def __init__(self, options: Mapping[str, Any] | None = None):
        options = options or {}
        self.wave_speed = require_integer_speed("pulseWaveSpeed", options.get("pulseWaveSpeed", 2))
        self.breath_speed = require_integer_speed(
            "pulseBreathSpeed", options.get("pulseBreathSpeed", 1)
        )
        self.aura_speed = require_integer_speed("pulseAuraSpeed", options.get("pulseAuraSpeed", 2))
        self.tracer_speed = require_integer_speed(
            "pulseTracerSpeed", options.get("pulseTracerSpeed", 3)
        )
        self.breath_intensity = float(options.get("pulseBreathIntensity", 0.4))
        self.aura_width = float(options.get("pulseAuraWidth", 0.15))
        self.tracer_count = int(options.get("pulseTracerCount", 5))
        if self.aura_width <= 0:
            raise ValueError(f"pulseAuraWidth must be > 0, got {self.aura_width}")
        logger.debug(
            f"EnergyPulseEngine speeds: wave={self.wave_speed} breath={self.breath_speed} "
            f"aura={self.aura_speed} tracer={self.tracer_speed}"
        )

    def wave_pulse(self, progress: float, path_order: int, total_paths: int) -> WavePulse:
        """Glow of a wave travelling along the paths in order.

        The front crosses every path ``wave_speed`` times per loop; paths
        within a few steps of the front glow with a Gaussian falloff.
        """
        travel = (progress * self.wave_speed) % 1.0
        path_position = (travel * total_paths) % total_paths
        current = math.floor(path_position)
        local = path_position - current

        distance = abs(path_order - current - 1)
        if distance >= _WAVE_WIDTH:
            return WavePulse(intensity=0.0, position=0.0)

        intensity = math.exp(-(distance**2) / 2) * math.sin(local * math.pi)
        return WavePulse(intensity=max(0.0, intensity), position=local)

    def breathing_pulse(self, progress: float, node_index: int) -> BreathingPulse:
        """Rhythmic expansion and contraction, offset per node."""
        node_phase = (node_index * 0.1) % TAU
        cycle = oscillate(progress, self.breath_speed, node_phase)
        return BreathingPulse(scale=1.0 + cycle * self.breath_intensity, glow=abs(cycle) * 0.5)

    def multi_layer_pulse(self, progress: float, node_index: int) -> MultiLayerPulse:
        layers = []
        raw_total = 0.0
        for name, speed, amplitude, step in _LAYERS:
            phase = node_index * step
            value = oscillate(progress, speed, phase) * amplitude
            raw_total += value
            layers.append(PulseLayer(name=name, intensity=max(0.0, value), speed=speed, phase=phase))
        return MultiLayerPulse(layers=tuple(layers), combined=max(0.0, raw_total / len(_LAYERS)))

    def aura_wave(self, progress: float, node_distance: float) -> AuraWave:
        """Concentric wave expanding from the center.

        The front moves from 0 to 2 (past the farthest node) once per cycle.
        """
        wave_position = 2.0 * ((progress * self.aura_speed) % 1.0)
        front = abs(wave_position - node_distance)
        intensity = max(0.0, 1.0 - front / self.aura_width) * 0.6
        return AuraWave(intensity=intensity, wave_position=wave_position)

    def path_tracers(self, progress: float) -> tuple[Tracer, ...]:
        """Evenly spaced particles flowing along a path."""
        tracers = []
        for i in range(self.tracer_count):
            offset = i / self.tracer_count
            position = (progress * self.tracer_speed + offset) % 1.0
            brightness = oscillate(progress, 2, i * 0.5 * math.pi) * 0.5 + 0.5
            tracers.append(Tracer(position=position, brightness=brightness, particle_id=i))
        return tuple(tracers)

    def harmonic_resonance(self, progress: float, node_index: int) -> HarmonicResonance:
        """Small positional vibration at a per-node harmonic of the loop."""
        speed = (node_index % 10) + 1
        vibration_x = oscillate(progress, speed) * 3
        vibration_y = oscillate(progress, speed, node_index * 0.5, wave="cos") * 3
        # Builds up mid-loop and settles back at both ends
        amplitude = math.sin(progress * math.pi) * 0.6 + 0.2
        return HarmonicResonance(
            offset_x=vibration_x * amplitude,
            offset_y=vibration_y * amplitude,
            speed=speed,
            amplitude=amplitude,
        )

    def combined_node_pulse(
        self,
        progress: float,
        node_index: int,
        node_distance: float,
        weights: PulseWeights,
    ) -> NodePulse:
        breathing = self.breathing_pulse(progress, node_index)
        multi = self.multi_layer_pulse(progress, node_index)
        aura = self.aura_wave(progress, node_distance)
        harmonic = self.harmonic_resonance(progress, node_index)

        scale = (
            1.0
            + (breathing.scale - 1.0) * weights.breathing
            + multi.combined * 0.3 * weights.multi_layer
            + aura.intensity * 0.2 * weights.aura
        )
        glow = (
            breathing.glow * weights.breathing
            + multi.combined * weights.multi_layer
            + aura.intensity * weights.aura
        )
        return NodePulse(
            scale=scale,
            glow=glow,
            offset_x=harmonic.offset_x * weights.harmonic,
            offset_y=harmonic.offset_y * weights.harmonic,
        )

    @staticmethod
    def phase_weights(phase: str) -> PulseWeights:
        """Pulse mix for a phase; unknown phases use the awakening mix."""
        return PHASE_WEIGHTS.get(phase, PHASE_WEIGHTS["awakening"])
