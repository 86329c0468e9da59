"""Tests for effect config validation and resolution."""

from __future__ import annotations

from typing import Any

import pytest

from mandalagen.core.animation.parameters import BlendMode
from mandalagen.core.config.schema import (
    DEFAULT_PHASE_STARTS,
    ConfigurationError,
    ResolvedConfig,
    ValidationResult,
    is_pick_one_key,
    phase_starts,
    resolve_config,
    validate_config,
)


def _errors(raw: dict[str, Any]) -> list[str]:
    return validate_config(raw).errors


class TestPhaseStarts:
    """Tests for phase start discovery."""

    def test_defaults_without_keys(self) -> None:
        """No phase*_start keys gives the default four phases."""
        assert phase_starts({}) == DEFAULT_PHASE_STARTS

    def test_partial_override_keeps_default_order(self) -> None:
        """Overriding one default phase keeps the others."""
        starts = phase_starts({"phaseRadiance_start": 0.7})
        assert list(starts) == ["awakening", "ascension", "radiance", "descent"]
        assert starts["radiance"] == 0.7

    def test_custom_phases_replace_defaults(self) -> None:
        """Non-default phase names define the whole layout."""
        starts = phase_starts({"phaseIntro_start": 0.0, "phaseOutro_start": 0.5})
        assert starts == {"intro": 0.0, "outro": 0.5}


class TestValidateConfig:
    """Tests for validate_config."""

    def test_empty_config_is_valid(self) -> None:
        """Defaults alone are a valid config."""
        result = validate_config({})
        assert isinstance(result, ValidationResult)
        assert result.valid
        assert result.errors == []

    def test_default_preset_is_valid(self, default_preset: dict[str, Any]) -> None:
        """The shipped default preset passes validation."""
        assert validate_config(default_preset).valid

    def test_fractional_speed_rejected(self) -> None:
        """Speeds must be whole cycles per loop."""
        errors = _errors({"ascensionPathAnimSpeed": 1.5})
        assert len(errors) == 1
        assert "ascensionPathAnimSpeed" in errors[0]
        assert "whole cycles" in errors[0]

    def test_fractional_speed_in_start_slot_rejected(self) -> None:
        """_start/_end slots of speed parameters are speeds too."""
        assert any("whole cycles" in e for e in _errors({"radiancePathAnimSpeed_start": 0.5}))

    def test_fractional_option_speed_rejected(self) -> None:
        """Option speeds such as pulseWaveSpeed are checked as well."""
        assert any("pulseWaveSpeed" in e for e in _errors({"pulseWaveSpeed": 2.5}))

    def test_alpha_out_of_range(self) -> None:
        """Alpha values live in [0, 1]."""
        assert any("within [0, 1]" in e for e in _errors({"awakeningNodeAlpha_end": 1.5}))

    def test_negative_glow(self) -> None:
        """Glow values are non-negative."""
        assert any(">= 0" in e for e in _errors({"radianceKetherGlow": -1.0}))

    def test_non_numeric_parameter(self) -> None:
        """Phase parameters must be numbers."""
        assert any("expected number" in e for e in _errors({"awakeningNodeAlpha": "bright"}))

    def test_bool_is_not_a_number(self) -> None:
        """Booleans are rejected as parameter values."""
        assert any("expected number" in e for e in _errors({"awakeningNodeAlpha": True}))

    def test_unknown_easing(self) -> None:
        """Easing names must be registered."""
        assert any("unknown easing 'bounce'" in e for e in _errors({"awakeningEasing": "bounce"}))

    def test_easing_candidates(self) -> None:
        """Candidate lists must be non-empty and fully known."""
        assert _errors({"awakeningEasing": ["linear", "smoothstep"]}) == []
        assert any("must not be empty" in e for e in _errors({"awakeningEasing": []}))
        assert any("'wobble'" in e for e in _errors({"awakeningEasing": ["linear", "wobble"]}))

    def test_first_phase_must_start_at_zero(self) -> None:
        """The first phase starts at 0.0."""
        assert any("must start at 0.0" in e for e in _errors({"phaseAwakening_start": 0.1}))

    def test_starts_must_increase(self) -> None:
        """Starts are strictly increasing."""
        errors = _errors({"phaseAscension_start": 0.9, "phaseRadiance_start": 0.6})
        assert any("strictly increasing" in e for e in errors)

    def test_last_phase_before_one(self) -> None:
        """The last phase must have room before 1.0."""
        assert any("before 1.0" in e for e in _errors({"phaseDescent_start": 1.0}))

    def test_width_out_of_range(self) -> None:
        """Width lives in [0, 0.5)."""
        assert any("[0, 0.5)" in e for e in _errors({"transitionZoneWidth": 0.6}))
        assert any("[0, 0.5)" in e for e in _errors({"transitionZoneWidth": -0.1}))

    def test_width_against_shortest_phase(self) -> None:
        """Width must stay below half the shortest phase (0.15 / 2)."""
        assert any("half the shortest" in e for e in _errors({"transitionZoneWidth": 0.1}))

    def test_empty_pick_one_list(self) -> None:
        """Pick-one options need at least one candidate."""
        assert any("layerBlendMode" in e for e in _errors({"layerBlendMode": []}))

    def test_collects_every_error(self) -> None:
        """Validation reports all problems at once."""
        errors = _errors(
            {
                "ascensionPathAnimSpeed": 1.5,
                "awakeningNodeAlpha": 2.0,
                "radianceEasing": "bounce",
            }
        )
        assert len(errors) == 3

    def test_non_mapping(self) -> None:
        """A non-mapping config is reported, not raised."""
        result = validate_config(["not", "a", "mapping"])  # type: ignore[arg-type]
        assert not result.valid
        assert "expected a mapping" in result.errors[0]

    def test_pick_one_keys(self) -> None:
        """Per-phase focus keys are pick-one keys."""
        assert is_pick_one_key("layerBlendMode")
        assert is_pick_one_key("radianceChakraFocus")
        assert not is_pick_one_key("nodeSize")


class TestResolveConfig:
    """Tests for resolve_config."""

    def test_invalid_config_raises(self) -> None:
        """Resolution refuses invalid configs with the full error list."""
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_config({"ascensionPathAnimSpeed": 1.5, "awakeningNodeAlpha": 2.0})
        assert isinstance(exc_info.value, ValueError)
        assert len(exc_info.value.errors) == 2
        assert "Invalid effect configuration" in str(exc_info.value)

    def test_timeline_from_defaults(self, resolved_default: ResolvedConfig) -> None:
        """The default preset resolves onto the default phases."""
        assert resolved_default.timeline.names == tuple(DEFAULT_PHASE_STARTS)
        assert resolved_default.timeline.effective_transition_width == pytest.approx(0.05)

    def test_start_end_and_bare_values(self, resolved_default: ResolvedConfig) -> None:
        """Explicit _start/_end win over the bare key."""
        spec = resolved_default.table.spec_for("awakening", "nodeAlpha")
        assert (spec.start, spec.end) == (0.1, 0.5)

    def test_bare_value_fills_both_ends(self) -> None:
        """A bare key holds the parameter constant across the phase."""
        resolved = resolve_config({"radianceKetherGlow": 2.0}, seed=0)
        spec = resolved.table.spec_for("radiance", "ketherGlow")
        assert (spec.start, spec.end) == (2.0, 2.0)

    def test_single_slot_fills_other_end(self) -> None:
        """Only _end given: start takes the same value."""
        resolved = resolve_config({"descentNodeAlpha_end": 0.2}, seed=0)
        spec = resolved.table.spec_for("descent", "nodeAlpha")
        assert (spec.start, spec.end) == (0.2, 0.2)

    def test_global_defaults_fill_missing_phases(self, resolved_default: ResolvedConfig) -> None:
        """ketherGlow is declared for radiance only; the global 1.0 covers the rest."""
        table = resolved_default.table
        assert table.spec_for("radiance", "ketherGlow").start == 2.0
        assert table.spec_for("awakening", "ketherGlow").start == 1.0
        assert table.spec_for("descent", "ketherGlow").end == 1.0

    def test_globals_without_phase_use_stay_options(self, resolved_default: ResolvedConfig) -> None:
        """Globals never declared per phase are not parameters."""
        assert "scale" not in resolved_default.table.parameter_names
        assert resolved_default.option("scale") == 1.0

    def test_missing_parameter_without_global_is_absent(self) -> None:
        """Without a global, phases that omit a parameter leave it inactive."""
        resolved = resolve_config({"radianceKetherGlow": 2.0}, seed=0)
        assert resolved.table.spec_for("awakening", "ketherGlow") is None

    def test_speed_parameters_blend_with_smoothstep(self, resolved_default: ResolvedConfig) -> None:
        """Speed-named parameters get smoothstep blending."""
        assert resolved_default.table.spec_for("ascension", "pathAnimSpeed").blend is BlendMode.SMOOTHSTEP
        assert resolved_default.table.spec_for("ascension", "nodeAlpha").blend is BlendMode.LINEAR

    def test_phase_easing_applied_to_specs(self, resolved_default: ResolvedConfig) -> None:
        """Each spec carries its phase's easing."""
        assert resolved_default.easings["awakening"] == "easeInCubic"
        assert resolved_default.table.spec_for("awakening", "nodeAlpha").easing == "easeInCubic"

    def test_default_easing_is_linear(self) -> None:
        """Phases without an easing key are linear."""
        assert set(resolve_config({}, seed=0).easings.values()) == {"linear"}

    def test_custom_phases(self) -> None:
        """Configs may declare their own phase names."""
        raw = {
            "phaseIntro_start": 0.0,
            "phaseOutro_start": 0.5,
            "transitionZoneWidth": 0.1,
            "introLevel_start": 0.0,
            "introLevel_end": 1.0,
            "outroLevel_start": 1.0,
            "outroLevel_end": 0.0,
        }
        resolved = resolve_config(raw, seed=0)
        assert resolved.timeline.names == ("intro", "outro")
        synthesizer = resolved.build_synthesizer()
        assert synthesizer.synthesize(0.25)["level"] == pytest.approx(0.5)


class TestOneTimePicks:
    """Tests for seeded candidate picks."""

    def test_same_seed_same_picks(self) -> None:
        """A seed fixes every pick."""
        raw = {"awakeningEasing": ["linear", "smoothstep", "easeInCubic"], "layerBlendMode": ["a", "b", "c"]}
        first = resolve_config(raw, seed=11)
        second = resolve_config(raw, seed=11)
        assert first.easings == second.easings
        assert first.options == second.options

    def test_picks_come_from_candidates(self) -> None:
        """Picked values are among the candidates."""
        resolved = resolve_config({"layerBlendMode": ["screen", "lighten"]}, seed=3)
        assert resolved.option("layerBlendMode") in ("screen", "lighten")

    def test_seeds_vary_picks(self) -> None:
        """Different seeds reach different candidates."""
        raw = {"awakeningEasing": ["linear", "smoothstep", "easeInCubic"]}
        picks = {resolve_config(raw, seed=s).easings["awakening"] for s in range(30)}
        assert len(picks) > 1

    def test_phase_focus_is_picked(self) -> None:
        """{phase}ChakraFocus lists reduce to one chakra."""
        resolved = resolve_config({"radianceChakraFocus": ["ajna", "sahasrara"]}, seed=5)
        assert resolved.option("radianceChakraFocus") in ("ajna", "sahasrara")
        assert "chakraFocus" not in resolved.table.parameter_names

    def test_seed_recorded(self) -> None:
        """The resolved config remembers its seed."""
        assert resolve_config({}, seed=9).seed == 9

    def test_non_list_options_untouched(self) -> None:
        """Scalar options pass through unchanged."""
        resolved = resolve_config({"nodeColor": "#ABCDEF", "enableEnergyPulses": True}, seed=0)
        assert resolved.option("nodeColor") == "#ABCDEF"
        assert resolved.option("enableEnergyPulses") is True
        assert resolved.option("missing", "fallback") == "fallback"
