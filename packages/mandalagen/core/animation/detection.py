"""Phase detection and cross-phase transition blending.

Given global progress and a timeline, determine the current phase, whether
progress sits inside a transition zone, the blend factor, the adjacent
phase to blend toward, and progress normalized within each relevant phase.
"""

from __future__ import annotations

from dataclasses import dataclass

from mandalagen.core.animation.timeline import PhaseTimeline


@dataclass(frozen=True)
class PhaseDetection:
    """Result of phase detection for a single progress value.

    Attributes:
        progress: Global progress the detection was computed for.
        current_phase: Name of the phase containing progress.
        next_phase: Phase to blend toward; equals current_phase when not
            approaching a boundary.
        transition_blend: Blend factor in [0, 1]; 0 means fully current.
        phase_progress: Progress normalized within current_phase.
        next_phase_progress: Progress normalized within next_phase when
            blending toward a different phase, else 0.0.
    """

    progress: float
    current_phase: str
    next_phase: str
    transition_blend: float
    phase_progress: float
    next_phase_progress: float = 0.0

    @property
    def in_transition(self) -> bool:
        return self.transition_blend > 0 and self.next_phase != self.current_phase


def detect_phase(progress: float, timeline: PhaseTimeline) -> PhaseDetection:
    """Detect the current phase and transition state at progress.

    Forward check: within ``w`` before the current phase's end, blend toward
    the successor with ``1 - dist / w`` (0 at zone entry, 1 at the boundary).

    Backward check: within ``w`` after the predecessor's end, the blend is
    raised to ``dist / w`` if larger. The blend target is not changed by the
    backward check, so on its own it reports a blend without a different
    next phase. When both checks apply, the larger magnitude wins, which
    can leave a kink in the blend curve where dominance switches.

    Progress must already be clamped to [0, 1]; out-of-range input is not
    checked.

    Args:
        progress: Global progress in [0, 1].
        timeline: Phase timeline.

    Returns:
        Detection result.

    Example:
        >>> timeline = PhaseTimeline.from_starts(
        ...     {"awakening": 0.0, "ascension": 0.2, "radiance": 0.6, "descent": 0.85}
        ... )
        >>> d = detect_phase(0.18, timeline)
        >>> (d.current_phase, d.next_phase, round(d.transition_blend, 6))
        ('awakening', 'ascension', 0.6)
    """
    width = timeline.effective_transition_width
    current = timeline.phase_at(progress)
    index = timeline.index_of(current.name)

    next_name = current.name
    blend = 0.0

    if width > 0:
        successor = timeline.successor(current.name)
        if successor is not None:
            dist_to_next = current.end - progress
            if 0 <= dist_to_next <= width:
                next_name = successor.name
                blend = 1.0 - dist_to_next / width

        if index > 0:
            previous = timeline.phases[index - 1]
            dist_from_prev = progress - previous.end
            if 0 <= dist_from_prev <= width:
                blend = max(blend, dist_from_prev / width)

    phase_progress = timeline.phase_progress(progress, current.name)

    next_phase_progress = 0.0
    if blend > 0 and next_name != current.name:
        next_phase_progress = timeline.phase_progress(progress, next_name)

    return PhaseDetection(
        progress=progress,
        current_phase=current.name,
        next_phase=next_name,
        transition_blend=blend,
        phase_progress=phase_progress,
        next_phase_progress=next_phase_progress,
    )
