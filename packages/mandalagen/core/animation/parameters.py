"""Per-phase animation parameter table."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from mandalagen.core.animation.easing import EasingName
from mandalagen.core.animation.interpolator import lerp


class BlendMode(str, Enum):
    """How a parameter cross-fades into the next phase inside a transition zone."""

    LINEAR = "linear"  # Raw transition blend
    SMOOTHSTEP = "smoothstep"  # Smoothstep of the transition blend (speed-like params)


def blend_mode_for(parameter: str) -> BlendMode:
    """Speed-like parameters get smoothstep blending; everything else is linear."""
    return BlendMode.SMOOTHSTEP if parameter.endswith(("Speed", "speed")) else BlendMode.LINEAR


class ParameterSpec(BaseModel):
    """Start/end values of one parameter across one phase."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    start: float
    end: float
    easing: str = EasingName.LINEAR.value
    blend: BlendMode = BlendMode.LINEAR

    def value_at(self, phase_progress: float) -> float:
        return lerp(self.start, self.end, phase_progress, self.easing)


class PhaseParameterTable(BaseModel):
    """Parameter specs keyed by phase name, then parameter name.

    A parameter missing from a phase is inactive in that phase.

    Example:
        >>> table = PhaseParameterTable(
        ...     phases={"awakening": {"nodeAlpha": ParameterSpec(start=0.0, end=1.0)}}
        ... )
        >>> table.spec_for("awakening", "nodeAlpha").value_at(0.5)
        0.5
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    phases: dict[str, dict[str, ParameterSpec]] = Field(default_factory=dict)

    @property
    def parameter_names(self) -> tuple[str, ...]:
        """All parameter names, in first-declared order."""
        seen: dict[str, None] = {}
        for params in self.phases.values():
            for name in params:
                seen.setdefault(name, None)
        return tuple(seen)

    def params_for(self, phase: str) -> dict[str, ParameterSpec]:
        return self.phases.get(phase, {})

    def spec_for(self, phase: str, parameter: str) -> ParameterSpec | None:
        return self.phases.get(phase, {}).get(parameter)
