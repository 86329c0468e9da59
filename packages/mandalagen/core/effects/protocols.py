"""Host rendering interfaces consumed by effects.

The host framework owns canvases, layers and compositing. Effects only see
these protocols, so any surface that provides the primitives can render
them (a raster canvas in production, a recording fake in tests).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

Point = tuple[float, float]


class Layer(Protocol):
    """A rendered raster layer."""

    async def adjust_opacity(self, opacity: float) -> None:
        """Scale the whole layer's opacity to ``opacity`` in [0, 1]."""
        ...

    async def composite_over(self, other: Layer) -> None:
        """Composite ``other`` on top of this layer."""
        ...


class Canvas(Protocol):
    """Vector drawing surface for one frame."""

    async def draw_line(
        self,
        start: Point,
        end: Point,
        thickness: float,
        color: str,
        opacity: float,
    ) -> None: ...

    async def draw_polygon(
        self,
        center: Point,
        radius: float,
        sides: int,
        rotation: float,
        color: str,
        opacity: float,
    ) -> None:
        """Draw a filled regular polygon; rotation is in degrees."""
        ...

    async def draw_ring(
        self,
        center: Point,
        radius: float,
        thickness: float,
        color: str,
        opacity: float,
    ) -> None: ...

    async def to_layer(self) -> Layer:
        """Rasterize everything drawn so far into a layer."""
        ...


class CanvasFactory(Protocol):
    """Creates a blank canvas of the given pixel size."""

    async def __call__(self, width: int, height: int) -> Canvas: ...


class ColorSource(Protocol):
    """Picks a color for a render context; None means "use the default"."""

    def __call__(self, context: Mapping[str, Any]) -> str | None: ...
