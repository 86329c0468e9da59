"""Phase timeline: named, ordered segments of the normalized animation timeline.

A timeline partitions [0, 1] into contiguous phases. Each phase owns the
half-open interval [start, end); the final phase is closed at 1.0 so that
progress 1.0 (the last frame) has a home. Transition zones are not stored:
they are derived on demand from phase boundaries and the effective
transition width.
"""

from __future__ import annotations

from collections.abc import Mapping
import logging

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, model_validator

logger = logging.getLogger(__name__)


class Phase(BaseModel):
    """A named segment of the timeline."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(min_length=1)
    start: float = Field(ge=0.0, le=1.0)
    end: float = Field(ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _validate_bounds(self) -> Phase:
        if self.end < self.start:
            raise ValueError(f"Phase '{self.name}': end ({self.end}) must be >= start ({self.start})")
        return self

    @property
    def length(self) -> float:
        return self.end - self.start

    @property
    def is_degenerate(self) -> bool:
        return self.end == self.start

    def contains(self, progress: float, closed: bool = False) -> bool:
        """Check membership in [start, end), or [start, end] when closed."""
        if closed:
            return self.start <= progress <= self.end
        return self.start <= progress < self.end


class PhaseTimeline(BaseModel):
    """Immutable ordered list of phases covering [0, 1].

    Invariants:
        - The first phase starts at 0.0 and the last ends at 1.0.
        - Phases are contiguous: each phase ends where the next starts.
        - Starts are non-decreasing. Zero-width phases are allowed here
          (they report phase progress 0); config validation rejects them.
        - Phase names are unique.

    The configured transition width is clamped to half the shortest
    non-degenerate phase so that zones from adjacent boundaries never
    overlap; a warning is logged when clamping happens.

    Example:
        >>> timeline = PhaseTimeline.from_starts(
        ...     {"awakening": 0.0, "ascension": 0.2, "radiance": 0.6, "descent": 0.85}
        ... )
        >>> timeline.phase_at(0.5).name
        'ascension'
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    phases: tuple[Phase, ...] = Field(min_length=1)
    transition_zone_width: float = Field(default=0.05, ge=0.0)

    _index: dict[str, int] = PrivateAttr(default_factory=dict)
    _effective_width: float = PrivateAttr(default=0.0)

    @model_validator(mode="after")
    def _validate_partition(self) -> PhaseTimeline:
        first, last = self.phases[0], self.phases[-1]
        if first.start != 0.0:
            raise ValueError(f"First phase '{first.name}' must start at 0.0, got {first.start}")
        if last.end != 1.0:
            raise ValueError(f"Last phase '{last.name}' must end at 1.0, got {last.end}")

        for prev, nxt in zip(self.phases, self.phases[1:], strict=False):
            if prev.end != nxt.start:
                raise ValueError(
                    f"Phases must be contiguous: '{prev.name}' ends at {prev.end} "
                    f"but '{nxt.name}' starts at {nxt.start}"
                )

        names = [p.name for p in self.phases]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate phase names: {duplicates}")
        return self

    def model_post_init(self, __context) -> None:
        self._index = {phase.name: i for i, phase in enumerate(self.phases)}
        self._effective_width = self._clamp_transition_width()

    def _clamp_transition_width(self) -> float:
        lengths = [p.length for p in self.phases if not p.is_degenerate]
        if not lengths:
            return 0.0

        limit = min(lengths) / 2.0
        if self.transition_zone_width > limit:
            logger.warning(
                f"transition_zone_width {self.transition_zone_width} exceeds half the "
                f"shortest phase ({limit:.4f}); clamping"
            )
            return limit
        return self.transition_zone_width

    @classmethod
    def from_starts(
        cls,
        starts: Mapping[str, float],
        transition_zone_width: float = 0.05,
    ) -> PhaseTimeline:
        """Build a timeline from phase start fractions, in timeline order.

        Each phase ends where the next one starts; the last ends at 1.0.
        Mapping order is the phase order; it is not re-sorted, so a
        decreasing start raises instead of silently reordering phases.

        Args:
            starts: Ordered mapping of phase name to start fraction.
            transition_zone_width: Width of each cross-phase blend zone.

        Returns:
            Validated timeline.

        Raises:
            ValueError: If starts are empty, out of range, or decreasing.
        """
        items = list(starts.items())
        if not items:
            raise ValueError("At least one phase is required")

        for (prev_name, prev_start), (name, start) in zip(items, items[1:], strict=False):
            if start < prev_start:
                raise ValueError(
                    f"Phase starts must be non-decreasing: '{name}' ({start}) "
                    f"starts before '{prev_name}' ({prev_start})"
                )

        phases = []
        for i, (name, start) in enumerate(items):
            end = items[i + 1][1] if i + 1 < len(items) else 1.0
            phases.append(Phase(name=name, start=float(start), end=float(end)))

        return cls(phases=tuple(phases), transition_zone_width=transition_zone_width)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(p.name for p in self.phases)

    @property
    def effective_transition_width(self) -> float:
        return self._effective_width

    def __len__(self) -> int:
        return len(self.phases)

    def index_of(self, name: str) -> int:
        try:
            return self._index[name]
        except KeyError:
            raise KeyError(f"Unknown phase: '{name}'") from None

    def get(self, name: str) -> Phase:
        return self.phases[self.index_of(name)]

    def successor(self, name: str) -> Phase | None:
        i = self.index_of(name)
        return self.phases[i + 1] if i + 1 < len(self.phases) else None

    def predecessor(self, name: str) -> Phase | None:
        i = self.index_of(name)
        return self.phases[i - 1] if i > 0 else None

    def phase_at(self, progress: float) -> Phase:
        """Return the phase whose interval contains progress.

        Intervals are half-open, so a progress exactly on a boundary belongs
        to the phase that starts there. The last phase also takes 1.0.
        """
        last = len(self.phases) - 1
        for i, phase in enumerate(self.phases):
            if i == last or progress < phase.end:
                return phase
        return self.phases[last]

    def phase_progress(self, progress: float, name: str) -> float:
        """Normalize progress to [0, 1] within a phase (0 for zero-width phases).

        Not clamped: progress outside the phase maps outside [0, 1].
        """
        phase = self.get(name)
        if phase.is_degenerate:
            return 0.0
        return (progress - phase.start) / phase.length
