"""Base class for phase-animated geometry effects.

An effect is built once from a ResolvedConfig and then asked to render any
frame, in any order, possibly from several workers each holding their own
instance. Per frame it:

1. maps the frame index to loop progress,
2. synthesizes the frame's parameter bundle,
3. draws onto a fresh canvas from the host's canvas factory,
4. applies the layer opacity and composites onto the host layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping, Sequence
from typing import Any, ClassVar

from mandalagen.core.animation.loop import frame_progress
from mandalagen.core.animation.synthesizer import FrameParameterBundle, FrameSynthesizer
from mandalagen.core.config.schema import ResolvedConfig
from mandalagen.core.effects.geometry import GeometryNode
from mandalagen.core.effects.protocols import Canvas, CanvasFactory, ColorSource, Layer, Point
from mandalagen.core.utils.logging import get_logger, get_render_logger


DEFAULT_COLORS: dict[str, str] = {
    "nodeColor": "#FFFFFF",
    "pathColor": "#FFFFFF",
    "glowColor": "#FFFF00",
}

DEFAULT_SIZE = 1024


class PhaseAnimatedEffect(ABC):
    """Shared frame pipeline for node-and-path effects.

    Subclasses provide their geometry (``elements``), optional decorative
    sub-engines (``engine_factories``) and the drawing itself (``render``).

    Args:
        config: Resolved effect configuration.
        canvas_factory: Host factory for blank canvases.
        width: Canvas width in pixels.
        height: Canvas height in pixels.
        color_sources: Optional color pickers keyed by color option name
            (``nodeColor``, ``pathColor``, ``glowColor``). Picked once here.
    """

    name: ClassVar[str] = "phase-animated"
    display_name: ClassVar[str] = "Phase Animated"

    def __init__(
        self,
        config: ResolvedConfig,
        canvas_factory: CanvasFactory,
        width: int = DEFAULT_SIZE,
        height: int = DEFAULT_SIZE,
        color_sources: Mapping[str, ColorSource] | None = None,
    ):
        self.config = config
        self.canvas_factory = canvas_factory
        self.width = width
        self.height = height

        self.log = get_logger(__name__, effect=self.name)
        self.synthesizer: FrameSynthesizer = config.build_synthesizer(self.elements())
        self.colors = self.extract_colors(color_sources or {})

        # Feature flags start from config; a failing engine turns its flag off
        self.features: dict[str, bool] = {
            flag: bool(config.option(flag, False)) for flag in self.engine_factories()
        }
        self._engines: dict[str, Any] = {}

    # ------------------------------------------------------------------
    # Subclass hooks
    # ------------------------------------------------------------------

    @classmethod
    @abstractmethod
    def elements(cls) -> Sequence[GeometryNode]:
        """Geometry nodes, in declaration order."""

    @abstractmethod
    async def render(self, canvas: Canvas, bundle: FrameParameterBundle) -> None:
        """Draw one frame."""

    def engine_factories(self) -> dict[str, Callable[[], Any]]:
        """Map of feature flag option name to sub-engine constructor."""
        return {}

    # ------------------------------------------------------------------
    # Frame pipeline
    # ------------------------------------------------------------------

    def frame_bundle(self, current_frame: int, total_frames: int) -> FrameParameterBundle:
        return self.synthesizer.synthesize(frame_progress(current_frame, total_frames))

    async def invoke(self, layer: Layer, current_frame: int, total_frames: int) -> FrameParameterBundle:
        """Render one frame and composite it over ``layer``.

        Args:
            layer: Host layer to composite onto.
            current_frame: Zero-based frame index.
            total_frames: Frames in the loop.

        Returns:
            The bundle the frame was rendered with.
        """
        bundle = self.frame_bundle(current_frame, total_frames)
        get_render_logger().debug(
            f"{self.display_name} frame {current_frame}/{total_frames}: "
            f"progress={bundle.progress:.4f} phase={bundle.current_phase} "
            f"next={bundle.next_phase} blend={bundle.transition_blend:.3f}"
        )

        self.ensure_engines()

        canvas = await self.canvas_factory(self.width, self.height)
        await self.render(canvas, bundle)

        rendered = await canvas.to_layer()
        await rendered.adjust_opacity(float(self.config.option("layerOpacity", 1.0)))
        await layer.composite_over(rendered)
        return bundle

    # ------------------------------------------------------------------
    # Sub-engines
    # ------------------------------------------------------------------

    def ensure_engines(self) -> None:
        """Build enabled sub-engines that are not built yet.

        A constructor failure disables that feature for this instance; the
        rest of the frame still renders.
        """
        for flag, factory in self.engine_factories().items():
            if not self.features.get(flag) or flag in self._engines:
                continue
            try:
                self._engines[flag] = factory()
            except Exception as e:
                self.log.warning(
                    f"{self.display_name}: disabling {flag}, engine setup failed: {e}"
                )
                self.features[flag] = False

    def engine(self, flag: str) -> Any | None:
        """The built engine for an enabled feature, else None."""
        if not self.features.get(flag):
            return None
        return self._engines.get(flag)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def transform(self, x: float, y: float) -> Point:
        """Map normalized geometry coordinates to canvas pixels.

        Scales around the canvas center by ``scale``, then moves the center
        to (``centerX``, ``centerY``).
        """
        scale = float(self.config.option("scale", 1.0))
        center_x = float(self.config.option("centerX", 0.5))
        center_y = float(self.config.option("centerY", 0.5))

        px = (x - 0.5) * scale + center_x
        py = (y - 0.5) * scale + center_y
        return (px * self.width, py * self.height)

    def extract_colors(self, color_sources: Mapping[str, ColorSource]) -> dict[str, str]:
        """Resolve named colors: color source, then config option, then default."""
        context = {"effect": self.name, "seed": self.config.seed}
        colors: dict[str, str] = {}
        for key, default in DEFAULT_COLORS.items():
            source = color_sources.get(key)
            picked = source(context) if source is not None else None
            if picked is None:
                option = self.config.option(key)
                picked = option if isinstance(option, str) else default
            colors[key] = picked
        return colors
