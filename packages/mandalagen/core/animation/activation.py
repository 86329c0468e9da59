"""Per-phase activation ordering of discrete visual elements."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field


class ActivationElement(BaseModel):
    """A discrete element (node, chakra, ...) with a reveal rank per phase.

    Lower ranks activate first. Phases without a rank for this element
    place it after every ranked element.
    """

    model_config = ConfigDict(frozen=True)

    id: int | str
    name: str
    ranks: dict[str, int] = Field(default_factory=dict)

    def rank_for(self, phase: str) -> int | None:
        return self.ranks.get(phase)


def _rank_key(element: ActivationElement, phase: str) -> tuple[int, int]:
    rank = element.rank_for(phase)
    return (1, 0) if rank is None else (0, rank)


def activation_order(
    elements: Iterable[ActivationElement], phase: str
) -> tuple[ActivationElement, ...]:
    """Stable-sort elements by their rank for phase.

    Ties (and unranked elements) keep declaration order.

    Args:
        elements: Elements in declaration order.
        phase: Phase name whose ranks drive the order.

    Returns:
        Elements as a new tuple, in activation order.
    """
    return tuple(sorted(elements, key=lambda e: _rank_key(e, phase)))
