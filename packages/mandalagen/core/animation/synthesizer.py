"""Frame config synthesis.

Turns a phase detection plus the immutable parameter table into a fully
resolved, cross-phase blended parameter bundle for one frame. The
synthesizer holds no per-frame state: the same progress always yields the
same bundle, so frames can be rendered out of order or in parallel.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from mandalagen.core.animation.activation import ActivationElement, activation_order
from mandalagen.core.animation.detection import PhaseDetection, detect_phase
from mandalagen.core.animation.parameters import BlendMode, ParameterSpec, PhaseParameterTable
from mandalagen.core.animation.timeline import PhaseTimeline
from mandalagen.core.utils.math import smoothstep


@dataclass(frozen=True)
class FrameParameterBundle(Mapping[str, float]):
    """Resolved parameters for one frame.

    Behaves as a read-only mapping of parameter name to value. Parameters
    inactive in the current phase are absent; read them with ``get`` and a
    default.
    """

    progress: float
    current_phase: str
    next_phase: str
    transition_blend: float
    phase_progress: float
    parameters: Mapping[str, float] = field(default_factory=dict)
    activation_order: tuple[ActivationElement, ...] = ()

    def __getitem__(self, key: str) -> float:
        return self.parameters[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.parameters)

    def __len__(self) -> int:
        return len(self.parameters)

    @property
    def in_transition(self) -> bool:
        return self.transition_blend > 0 and self.next_phase != self.current_phase

    def to_dict(self) -> dict[str, Any]:
        """Flat, JSON-friendly view of the bundle."""
        return {
            "progress": self.progress,
            "currentPhase": self.current_phase,
            "nextPhase": self.next_phase,
            "transitionBlend": self.transition_blend,
            "phaseProgress": self.phase_progress,
            **dict(self.parameters),
            "activationOrder": [e.name for e in self.activation_order],
        }


class FrameSynthesizer:
    """Produces a FrameParameterBundle for any progress value.

    Args:
        timeline: Phase timeline.
        table: Per-phase parameter table. Every phase it names must exist
            in the timeline.
        elements: Elements to order by per-phase activation rank.

    Raises:
        ValueError: If the table references phases missing from the timeline.
    """

    def __init__(
        self,
        timeline: PhaseTimeline,
        table: PhaseParameterTable,
        elements: Iterable[ActivationElement] = (),
    ):
        unknown = [name for name in table.phases if name not in timeline.names]
        if unknown:
            raise ValueError(f"Parameter table references unknown phases: {unknown}")

        self.timeline = timeline
        self.table = table
        self.elements: tuple[ActivationElement, ...] = tuple(elements)

        # Orders depend only on phase identity; computed once, shared by all frames
        self._orders = MappingProxyType(
            {name: activation_order(self.elements, name) for name in timeline.names}
        )

    def detect(self, progress: float) -> PhaseDetection:
        return detect_phase(progress, self.timeline)

    def synthesize(self, progress: float) -> FrameParameterBundle:
        """Detect the phase at progress and synthesize its bundle."""
        return self.synthesize_detection(self.detect(progress))

    def synthesize_detection(self, detection: PhaseDetection) -> FrameParameterBundle:
        values: dict[str, float] = {}
        for name, spec in self.table.params_for(detection.current_phase).items():
            values[name] = self._resolve(name, spec, detection)

        return FrameParameterBundle(
            progress=detection.progress,
            current_phase=detection.current_phase,
            next_phase=detection.next_phase,
            transition_blend=detection.transition_blend,
            phase_progress=detection.phase_progress,
            parameters=MappingProxyType(values),
            activation_order=self._orders[detection.current_phase],
        )

    def activation_order_for(self, phase: str) -> tuple[ActivationElement, ...]:
        return self._orders[phase]

    def _resolve(self, name: str, spec: ParameterSpec, detection: PhaseDetection) -> float:
        current = spec.value_at(detection.phase_progress)
        if not detection.in_transition:
            return current

        next_spec = self.table.spec_for(detection.next_phase, name)
        if next_spec is None:
            # Nothing to cross-fade toward; hold the current phase's value
            return current

        target = next_spec.value_at(detection.next_phase_progress)
        blend = detection.transition_blend
        if spec.blend is BlendMode.SMOOTHSTEP:
            return current + (target - current) * smoothstep(blend)
        return current * (1.0 - blend) + target * blend
