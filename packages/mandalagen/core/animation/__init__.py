"""Phase-driven animation synthesis."""

from mandalagen.core.animation.activation import ActivationElement, activation_order
from mandalagen.core.animation.detection import PhaseDetection, detect_phase
from mandalagen.core.animation.easing import (
    EASINGS,
    EasingFn,
    EasingName,
    get_easing,
    is_known_easing,
    list_easings,
)
from mandalagen.core.animation.interpolator import hex_to_rgb, lerp, lerp_color, rgb_to_hex
from mandalagen.core.animation.loop import (
    Waveform,
    frame_progress,
    frame_progress_grid,
    is_integer_speed,
    loop_closure_error,
    oscillate,
    require_integer_speed,
)
from mandalagen.core.animation.parameters import (
    BlendMode,
    ParameterSpec,
    PhaseParameterTable,
    blend_mode_for,
)
from mandalagen.core.animation.synthesizer import FrameParameterBundle, FrameSynthesizer
from mandalagen.core.animation.timeline import Phase, PhaseTimeline

__all__ = [
    "EASINGS",
    "ActivationElement",
    "BlendMode",
    "EasingFn",
    "EasingName",
    "FrameParameterBundle",
    "FrameSynthesizer",
    "ParameterSpec",
    "Phase",
    "PhaseDetection",
    "PhaseParameterTable",
    "PhaseTimeline",
    "Waveform",
    "activation_order",
    "blend_mode_for",
    "detect_phase",
    "frame_progress",
    "frame_progress_grid",
    "get_easing",
    "hex_to_rgb",
    "is_integer_speed",
    "is_known_easing",
    "lerp",
    "lerp_color",
    "list_easings",
    "loop_closure_error",
    "oscillate",
    "require_integer_speed",
    "rgb_to_hex",
]
