"""Easing functions backed by easing-functions.

Every easing maps normalized time t in [0, 1] to eased time, with f(0) = 0
and f(1) = 1. The overshoot variants (elastic, back) leave [0, 1] between
the endpoints. Callers clamp t upstream (see ``interpolator.lerp``).
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Protocol

from easing_functions import (
    BackEaseInOut,
    CubicEaseIn,
    CubicEaseInOut,
    CubicEaseOut,
    ElasticEaseInOut,
    ElasticEaseOut,
    ExponentialEaseIn,
    ExponentialEaseOut,
    LinearInOut,
    QuarticEaseIn,
    QuarticEaseInOut,
    QuarticEaseOut,
    QuinticEaseIn,
    QuinticEaseInOut,
    QuinticEaseOut,
)


class EasingFn(Protocol):
    def __call__(self, t: float) -> float: ...


class EasingName(str, Enum):
    """Easing names as they appear in effect configuration."""

    LINEAR = "linear"
    EASE_IN_CUBIC = "easeInCubic"
    EASE_OUT_CUBIC = "easeOutCubic"
    EASE_IN_OUT_CUBIC = "easeInOutCubic"
    EASE_IN_QUART = "easeInQuart"
    EASE_OUT_QUART = "easeOutQuart"
    EASE_IN_OUT_QUART = "easeInOutQuart"
    EASE_IN_QUINT = "easeInQuint"
    EASE_OUT_QUINT = "easeOutQuint"
    EASE_IN_OUT_QUINT = "easeInOutQuint"
    EASE_IN_EXPO = "easeInExpo"
    EASE_OUT_EXPO = "easeOutExpo"
    SMOOTHSTEP = "smoothstep"
    SMOOTHERSTEP = "smootherstep"
    EASE_OUT_ELASTIC = "easeOutElastic"
    EASE_IN_OUT_ELASTIC = "easeInOutElastic"
    EASE_IN_OUT_BACK = "easeInOutBack"


# Unit range over unit duration
_UNIT_EASING: dict[str, float] = {"start": 0.0, "end": 1.0, "duration": 1.0}


def _make_easing(easing_cls: type[Any]) -> EasingFn:
    """Wrap an easing-functions class as a plain ``t -> eased t`` callable."""
    curve = easing_cls(**_UNIT_EASING)

    def eased(t: float) -> float:
        return float(curve.ease(t))

    eased.__name__ = easing_cls.__name__
    return eased


linear = _make_easing(LinearInOut)
ease_in_cubic = _make_easing(CubicEaseIn)
ease_out_cubic = _make_easing(CubicEaseOut)
ease_in_out_cubic = _make_easing(CubicEaseInOut)
ease_in_quart = _make_easing(QuarticEaseIn)
ease_out_quart = _make_easing(QuarticEaseOut)
ease_in_out_quart = _make_easing(QuarticEaseInOut)
ease_in_quint = _make_easing(QuinticEaseIn)
ease_out_quint = _make_easing(QuinticEaseOut)
ease_in_out_quint = _make_easing(QuinticEaseInOut)
ease_in_expo = _make_easing(ExponentialEaseIn)
ease_out_expo = _make_easing(ExponentialEaseOut)
ease_out_elastic = _make_easing(ElasticEaseOut)
ease_in_out_elastic = _make_easing(ElasticEaseInOut)
ease_in_out_back = _make_easing(BackEaseInOut)


def smoothstep(t: float) -> float:
    """Hermite smoothstep: 3t² - 2t³."""
    return t * t * (3 - 2 * t)


def smootherstep(t: float) -> float:
    """Perlin's smootherstep: 6t⁵ - 15t⁴ + 10t³."""
    return t * t * t * (t * (t * 6 - 15) + 10)


EASINGS: dict[str, EasingFn] = {
    EasingName.LINEAR.value: linear,
    EasingName.EASE_IN_CUBIC.value: ease_in_cubic,
    EasingName.EASE_OUT_CUBIC.value: ease_out_cubic,
    EasingName.EASE_IN_OUT_CUBIC.value: ease_in_out_cubic,
    EasingName.EASE_IN_QUART.value: ease_in_quart,
    EasingName.EASE_OUT_QUART.value: ease_out_quart,
    EasingName.EASE_IN_OUT_QUART.value: ease_in_out_quart,
    EasingName.EASE_IN_QUINT.value: ease_in_quint,
    EasingName.EASE_OUT_QUINT.value: ease_out_quint,
    EasingName.EASE_IN_OUT_QUINT.value: ease_in_out_quint,
    EasingName.EASE_IN_EXPO.value: ease_in_expo,
    EasingName.EASE_OUT_EXPO.value: ease_out_expo,
    EasingName.SMOOTHSTEP.value: smoothstep,
    EasingName.SMOOTHERSTEP.value: smootherstep,
    EasingName.EASE_OUT_ELASTIC.value: ease_out_elastic,
    EasingName.EASE_IN_OUT_ELASTIC.value: ease_in_out_elastic,
    EasingName.EASE_IN_OUT_BACK.value: ease_in_out_back,
}


def get_easing(name: str | EasingName) -> EasingFn | None:
    """Look up an easing function by configuration name.

    Args:
        name: Easing name, e.g. "easeInCubic".

    Returns:
        The easing function, or None if the name is unknown.
    """
    key = name.value if isinstance(name, EasingName) else name
    return EASINGS.get(key)


def is_known_easing(name: object) -> bool:
    return isinstance(name, str) and name in EASINGS


def list_easings() -> list[str]:
    return list(EASINGS)
