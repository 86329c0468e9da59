"""Effect configuration schema: validation and one-time resolution.

Effect configs are flat mappings. Keys follow a naming convention:

- ``phase{Name}_start``: start fraction of phase ``name`` (first letter
  lower-cased, so ``phaseAwakening_start`` declares ``awakening``).
- ``{phase}{Param}``, ``{phase}{Param}_start``, ``{phase}{Param}_end``:
  value of ``param`` across ``phase``. The bare key is used for whichever
  end is not given explicitly.
- ``{phase}Easing``: easing name, or a list of candidates picked once.
- ``transitionZoneWidth``: width of the cross-phase blend zone.
- ``{param}``: global default used by phases that do not declare ``param``.

Everything else is an effect option passed through untouched, except that
list-valued pick-one keys (PICK_ONE_KEYS, plus per-phase keys ending in a
PHASE_PICK_ONE_SUFFIXES entry) are reduced to a single pick.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import logging
import math
from numbers import Real
import random
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from mandalagen.core.animation.activation import ActivationElement
from mandalagen.core.animation.easing import EasingName, is_known_easing
from mandalagen.core.animation.loop import is_integer_speed
from mandalagen.core.animation.parameters import (
    ParameterSpec,
    PhaseParameterTable,
    blend_mode_for,
)
from mandalagen.core.animation.synthesizer import FrameSynthesizer
from mandalagen.core.animation.timeline import PhaseTimeline

logger = logging.getLogger(__name__)

DEFAULT_PHASE_STARTS: dict[str, float] = {
    "awakening": 0.0,
    "ascension": 0.20,
    "radiance": 0.60,
    "descent": 0.85,
}
DEFAULT_TRANSITION_ZONE_WIDTH = 0.05
MAX_TRANSITION_ZONE_WIDTH = 0.5

TRANSITION_KEY = "transitionZoneWidth"
EASING_SUFFIX = "Easing"

# List-valued options resolved to one value at construction
PICK_ONE_KEYS: tuple[str, ...] = ("layerBlendMode", "explosionColorScheme", "nodeShape")
# Per-phase options (``{phase}{Suffix}``) resolved the same way
PHASE_PICK_ONE_SUFFIXES: tuple[str, ...] = ("ChakraFocus",)

_PHASE_START_RE = re.compile(r"^phase([A-Z][A-Za-z0-9]*)_start$")
_PARAM_RE = re.compile(r"^([A-Z][A-Za-z0-9]*?)(?:_(start|end))?$")


class ValidationResult(BaseModel):
    """Outcome of a configuration validation pass."""

    model_config = ConfigDict(frozen=True)

    valid: bool = Field(description="Whether validation passed")
    errors: list[str] = Field(default_factory=list, description="Validation errors")

    @classmethod
    def from_errors(cls, errors: Iterable[str]) -> ValidationResult:
        errors = list(errors)
        return cls(valid=not errors, errors=errors)


class ConfigurationError(ValueError):
    """Raised when an invalid effect configuration is resolved."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("Invalid effect configuration:\n  - " + "\n  - ".join(self.errors))


# =============================================================================
# Key parsing
# =============================================================================


def _lower_first(name: str) -> str:
    return name[:1].lower() + name[1:]


def _is_number(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def phase_starts(raw: Mapping[str, Any]) -> dict[str, Any]:
    """Phase start fractions declared by a config, in timeline order.

    Without any ``phase*_start`` keys the default four-phase layout applies.
    When every declared phase is one of the default phases, the declared
    values override the defaults and the default order is kept. Otherwise
    the declared phases are taken as-is, in declaration order.

    Values are returned unvalidated.
    """
    declared: dict[str, Any] = {}
    for key, value in raw.items():
        match = _PHASE_START_RE.match(key)
        if match:
            declared[_lower_first(match.group(1))] = value

    if not declared:
        return dict(DEFAULT_PHASE_STARTS)
    if set(declared) <= set(DEFAULT_PHASE_STARTS):
        return {**DEFAULT_PHASE_STARTS, **declared}
    return declared


def declared_phases(raw: Mapping[str, Any]) -> list[str]:
    """Phase names declared through ``phase*_start`` keys, in declaration order."""
    names = []
    for key in raw:
        match = _PHASE_START_RE.match(key)
        if match:
            names.append(_lower_first(match.group(1)))
    return names


def without_phases(raw: Mapping[str, Any], phases: Iterable[str]) -> dict[str, Any]:
    """Copy of ``raw`` minus every ``phase*_start`` key and every key of ``phases``.

    Global defaults and effect options are kept.
    """
    phases = tuple(phases)
    return {
        key: value
        for key, value in raw.items()
        if not _PHASE_START_RE.match(key) and _match_phase(key, phases) is None
    }


def _match_phase(key: str, phases: Iterable[str]) -> tuple[str, str] | None:
    """Split ``{phase}{Rest}`` on the longest matching phase name."""
    best: str | None = None
    for phase in phases:
        if key.startswith(phase) and len(key) > len(phase) and key[len(phase)].isupper():
            if best is None or len(phase) > len(best):
                best = phase
    if best is None:
        return None
    return best, key[len(best) :]


def _classify_keys(
    raw: Mapping[str, Any], phases: Iterable[str]
) -> tuple[dict[str, dict[str, dict[str, Any]]], dict[str, Any], dict[str, Any]]:
    """Split config keys into phase parameters, phase easings and options.

    Returns:
        (params, easings, options) where params maps
        phase -> parameter -> {"value"|"start"|"end": raw value}.
    """
    phases = tuple(phases)
    params: dict[str, dict[str, dict[str, Any]]] = {p: {} for p in phases}
    easings: dict[str, Any] = {}
    options: dict[str, Any] = {}

    for key, value in raw.items():
        if key == TRANSITION_KEY or _PHASE_START_RE.match(key):
            continue

        split = _match_phase(key, phases)
        if split is None:
            options[key] = value
            continue

        phase, rest = split
        if rest == EASING_SUFFIX:
            easings[phase] = value
            continue
        if rest in PHASE_PICK_ONE_SUFFIXES:
            options[key] = value
            continue

        match = _PARAM_RE.match(rest)
        if match is None:
            options[key] = value
            continue

        param = _lower_first(match.group(1))
        slot = match.group(2) or "value"
        params[phase].setdefault(param, {})[slot] = value

    return params, easings, options


# =============================================================================
# Validation
# =============================================================================


def _check_number_rules(key: str, value: Any, errors: list[str]) -> None:
    if not _is_number(value):
        errors.append(f"{key}: expected number, got {type(value).__name__}")
        return
    if not math.isfinite(value):
        errors.append(f"{key}: must be finite, got {value}")
        return
    if ("Alpha" in key or "Opacity" in key or key.startswith(("alpha", "opacity"))) and not (
        0.0 <= value <= 1.0
    ):
        errors.append(f"{key}: must be within [0, 1], got {value}")
    if ("Glow" in key or key.startswith("glow")) and value < 0:
        errors.append(f"{key}: must be >= 0, got {value}")
    if _speed_key(key) and not is_integer_speed(value):
        errors.append(
            f"{key}: speeds must be whole cycles per loop for seamless looping, got {value}"
        )


def is_pick_one_key(key: str) -> bool:
    return key in PICK_ONE_KEYS or key.endswith(PHASE_PICK_ONE_SUFFIXES)


def _speed_key(key: str) -> bool:
    base = key.removesuffix("_start").removesuffix("_end")
    return base.endswith(("Speed", "speed"))


def _check_easing(key: str, value: Any, errors: list[str]) -> None:
    if isinstance(value, str):
        if not is_known_easing(value):
            errors.append(f"{key}: unknown easing {value!r}")
        return
    if isinstance(value, (list, tuple)):
        if not value:
            errors.append(f"{key}: candidate list must not be empty")
        for candidate in value:
            if not is_known_easing(candidate):
                errors.append(f"{key}: unknown easing {candidate!r}")
        return
    errors.append(f"{key}: expected easing name or list of names, got {type(value).__name__}")


def _check_phase_starts(starts: dict[str, Any], errors: list[str]) -> list[float] | None:
    """Validate phase starts; return phase lengths when the layout is sound."""
    bad = False
    for name, start in starts.items():
        key = f"phase{name[:1].upper()}{name[1:]}_start"
        if not _is_number(start):
            errors.append(f"{key}: expected number, got {type(start).__name__}")
            bad = True
        elif not 0.0 <= start <= 1.0:
            errors.append(f"{key}: must be within [0, 1], got {start}")
            bad = True
    if bad:
        return None

    items = list(starts.items())
    first_name, first_start = items[0]
    if first_start != 0.0:
        errors.append(f"First phase '{first_name}' must start at 0.0, got {first_start}")
        bad = True

    for (prev_name, prev_start), (name, start) in zip(items, items[1:], strict=False):
        if start <= prev_start:
            errors.append(
                f"Phase starts must be strictly increasing: '{name}' ({start}) "
                f"does not start after '{prev_name}' ({prev_start})"
            )
            bad = True

    last_name, last_start = items[-1]
    if last_start >= 1.0:
        errors.append(f"Last phase '{last_name}' must start before 1.0, got {last_start}")
        bad = True

    if bad:
        return None
    ends = [start for _, start in items[1:]] + [1.0]
    return [end - start for (_, start), end in zip(items, ends, strict=True)]


def validate_config(raw: Mapping[str, Any]) -> ValidationResult:
    """Check an effect config, collecting every problem instead of raising.

    Args:
        raw: Flat effect configuration.

    Returns:
        ValidationResult listing all errors found.

    Example:
        >>> validate_config({"ascensionPathAnimSpeed": 1.5}).errors
        ['ascensionPathAnimSpeed: speeds must be whole cycles per loop for seamless looping, got 1.5']
    """
    errors: list[str] = []
    if not isinstance(raw, Mapping):
        return ValidationResult.from_errors(
            [f"config: expected a mapping, got {type(raw).__name__}"]
        )

    starts = phase_starts(raw)
    lengths = _check_phase_starts(starts, errors)

    width = raw.get(TRANSITION_KEY, DEFAULT_TRANSITION_ZONE_WIDTH)
    if not _is_number(width):
        errors.append(f"{TRANSITION_KEY}: expected number, got {type(width).__name__}")
    elif not 0.0 <= width < MAX_TRANSITION_ZONE_WIDTH:
        errors.append(
            f"{TRANSITION_KEY}: must be within [0, {MAX_TRANSITION_ZONE_WIDTH}), got {width}"
        )
    elif lengths and width >= min(lengths) / 2.0:
        errors.append(
            f"{TRANSITION_KEY}: must be below half the shortest phase "
            f"({min(lengths) / 2.0:.4f}), got {width}"
        )

    params, easings, options = _classify_keys(raw, starts)

    for phase, by_param in params.items():
        for param, slots in by_param.items():
            for slot, value in slots.items():
                suffix = "" if slot == "value" else f"_{slot}"
                key = f"{phase}{param[:1].upper()}{param[1:]}{suffix}"
                _check_number_rules(key, value, errors)

    for phase, value in easings.items():
        _check_easing(f"{phase}{EASING_SUFFIX}", value, errors)

    for key, value in options.items():
        if is_pick_one_key(key) and isinstance(value, (list, tuple)):
            if not value:
                errors.append(f"{key}: candidate list must not be empty")
        elif _is_number(value) or _speed_key(key):
            _check_number_rules(key, value, errors)

    return ValidationResult.from_errors(errors)


# =============================================================================
# Resolution
# =============================================================================


class ResolvedConfig(BaseModel):
    """Immutable effect configuration with every random choice already made.

    Built once per effect instance by ``resolve_config``; nothing downstream
    of it draws random numbers.
    """

    model_config = ConfigDict(frozen=True)

    timeline: PhaseTimeline
    table: PhaseParameterTable
    easings: dict[str, str] = Field(default_factory=dict)
    options: dict[str, Any] = Field(default_factory=dict)
    seed: int | None = None

    def option(self, name: str, default: Any = None) -> Any:
        return self.options.get(name, default)

    def build_synthesizer(self, elements: Iterable[ActivationElement] = ()) -> FrameSynthesizer:
        return FrameSynthesizer(self.timeline, self.table, elements)


def _pick(value: Any, rng: random.Random) -> Any:
    if isinstance(value, (list, tuple)):
        return rng.choice(list(value))
    return value


def _parameter_spec(param: str, slots: dict[str, Any], easing: str) -> ParameterSpec:
    base = slots.get("value")
    start = slots.get("start", base if base is not None else slots.get("end"))
    end = slots.get("end", base if base is not None else start)
    return ParameterSpec(
        start=float(start),
        end=float(end),
        easing=easing,
        blend=blend_mode_for(param),
    )


def resolve_config(raw: Mapping[str, Any], seed: int | None = None) -> ResolvedConfig:
    """Validate a raw config and freeze it into a ResolvedConfig.

    Easing candidate lists and list-valued pick-one options are
    resolved here with a single ``random.Random(seed)``, phases first in
    timeline order and then options sorted by key, so the same
    seed always gives the same picks.

    Args:
        raw: Flat effect configuration.
        seed: Seed for the one-time picks; None draws from system entropy.

    Returns:
        Resolved configuration.

    Raises:
        ConfigurationError: If the config fails validation.
    """
    result = validate_config(raw)
    if not result.valid:
        raise ConfigurationError(result.errors)

    rng = random.Random(seed)
    starts = {name: float(start) for name, start in phase_starts(raw).items()}
    params, raw_easings, options = _classify_keys(raw, starts)

    easings: dict[str, str] = {}
    for phase in starts:
        easings[phase] = _pick(raw_easings.get(phase, EasingName.LINEAR.value), rng)

    for key in sorted(k for k in options if is_pick_one_key(k)):
        options[key] = _pick(options[key], rng)

    # Globals fill in phases that do not declare a parameter some phase uses
    all_params: dict[str, None] = {}
    for by_param in params.values():
        for param in by_param:
            all_params.setdefault(param, None)

    table: dict[str, dict[str, ParameterSpec]] = {}
    for phase in starts:
        specs: dict[str, ParameterSpec] = {}
        for param in all_params:
            slots = params[phase].get(param)
            if slots is None:
                if not _is_number(options.get(param)):
                    continue
                slots = {"value": options[param]}
            specs[param] = _parameter_spec(param, slots, easings[phase])
        table[phase] = specs

    width = float(raw.get(TRANSITION_KEY, DEFAULT_TRANSITION_ZONE_WIDTH))
    timeline = PhaseTimeline.from_starts(starts, transition_zone_width=width)

    logger.debug(
        f"Resolved config: phases={list(starts)} easings={easings} "
        f"parameters={list(all_params)} seed={seed}"
    )
    return ResolvedConfig(
        timeline=timeline,
        table=PhaseParameterTable(phases=table),
        easings=easings,
        options=options,
        seed=seed,
    )
