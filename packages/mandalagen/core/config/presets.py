"""Built-in effect presets.

Every preset closes the loop: each parameter's value at the end of the last
phase equals its value at the start of the first, and every speed is a
whole number of cycles per loop.
"""

from __future__ import annotations

import copy
from typing import Any

_TREE_OF_LIFE_BASE: dict[str, Any] = {
    "effect": "tree-of-life",
    "phaseAwakening_start": 0.0,
    "phaseAscension_start": 0.20,
    "phaseRadiance_start": 0.60,
    "phaseDescent_start": 0.85,
    "transitionZoneWidth": 0.05,
    # Awakening: the tree rises from Malkuth
    "awakeningNodeAlpha": 0.3,
    "awakeningNodeAlpha_start": 0.1,
    "awakeningNodeAlpha_end": 0.5,
    "awakeningPathIntensity_start": 0.0,
    "awakeningPathIntensity_end": 0.3,
    "awakeningPathAnimSpeed": 1,
    "awakeningEasing": "easeInCubic",
    # Ascension: energy climbs toward Kether
    "ascensionNodeAlpha_start": 0.5,
    "ascensionNodeAlpha_end": 0.95,
    "ascensionPathIntensity_start": 0.3,
    "ascensionPathIntensity_end": 1.0,
    "ascensionPathAnimSpeed": 2,
    "ascensionEasing": "linear",
    # Radiance: full illumination
    "radianceNodeAlpha_start": 0.95,
    "radianceNodeAlpha_end": 1.0,
    "radiancePathIntensity": 1.0,
    "radianceKetherGlow": 2.0,
    "radiancePathAnimSpeed": 2,
    "radianceEasing": "smoothstep",
    # Descent: back to the opening state
    "descentNodeAlpha_start": 1.0,
    "descentNodeAlpha_end": 0.1,
    "descentPathIntensity_start": 1.0,
    "descentPathIntensity_end": 0.0,
    "descentPathAnimSpeed": 1,
    "descentEasing": "easeOutQuart",
    # Global parameter defaults
    "ketherGlow": 1.0,
    # Geometry and layer
    "scale": 1.0,
    "centerX": 0.5,
    "centerY": 0.5,
    "nodeSize": 20,
    "nodeGlowSize": 25,
    "pathThickness": 2,
    "layerOpacity": 1.0,
    "layerBlendMode": ["screen", "lighten", "normal"],
    "nodeColor": "#FFFFFF",
    "pathColor": "#FFFFFF",
    "glowColor": "#FFFF00",
    # Energy pulses
    "enableEnergyPulses": True,
    "pulseWaveSpeed": 2,
    "pulseBreathSpeed": 1,
    "pulseBreathIntensity": 0.4,
    "pulseAuraSpeed": 2,
    "pulseAuraWidth": 0.15,
    "pulseTracerSpeed": 3,
    "pulseTracerCount": 5,
}


def _tree_variant(**overrides: Any) -> dict[str, Any]:
    preset = copy.deepcopy(_TREE_OF_LIFE_BASE)
    preset.update(overrides)
    return preset


BUILTIN_PRESETS: dict[str, dict[str, Any]] = {
    "default": _tree_variant(),
    # Extended timing for a meditative flow
    "ethereal": _tree_variant(
        phaseAscension_start=0.25,
        phaseRadiance_start=0.65,
        phaseDescent_start=0.88,
        awakeningNodeAlpha_end=0.45,
        awakeningPathIntensity_end=0.3,
        ascensionNodeAlpha_start=0.45,
        ascensionPathAnimSpeed=1,
        ascensionEasing=["easeOutCubic", "easeInOutCubic", "smootherstep"],
        radianceKetherGlow=2.2,
        radiancePathAnimSpeed=1,
        radiancePathIntensity_start=1.0,
        radiancePathIntensity_end=0.95,
        descentPathIntensity_start=0.95,
        nodeGlowSize=25,
        pulseWaveSpeed=1,
        pulseBreathSpeed=1,
        pulseBreathIntensity=0.3,
        pulseAuraSpeed=1,
        pulseTracerSpeed=2,
    ),
    # High contrast with faster path animation
    "cinematic": _tree_variant(
        awakeningNodeAlpha_end=0.5,
        awakeningPathIntensity_end=0.4,
        ascensionPathIntensity_start=0.4,
        ascensionEasing="easeInOutCubic",
        radianceKetherGlow=2.5,
        descentNodeAlpha_end=0.15,
        awakeningNodeAlpha_start=0.15,
        nodeGlowSize=28,
        pulseWaveSpeed=3,
        pulseBreathSpeed=2,
        pulseBreathIntensity=0.5,
        pulseAuraSpeed=3,
        pulseTracerSpeed=4,
    ),
    # Restrained, low-energy rendition
    "minimalist": _tree_variant(
        phaseAscension_start=0.22,
        phaseRadiance_start=0.62,
        phaseDescent_start=0.86,
        awakeningNodeAlpha_end=0.48,
        ascensionNodeAlpha_start=0.48,
        ascensionEasing="easeInOutCubic",
        radianceKetherGlow=1.8,
        radiancePathAnimSpeed=1,
        nodeGlowSize=20,
        enableEnergyPulses=False,
        pulseBreathIntensity=0.2,
        pulseWaveSpeed=1,
        pulseAuraSpeed=1,
        pulseTracerSpeed=2,
    ),
    # Compressed timing with fast, intense path traces
    "chakra-spin": _tree_variant(
        phaseAscension_start=0.15,
        phaseRadiance_start=0.50,
        phaseDescent_start=0.80,
        awakeningNodeAlpha_start=0.2,
        awakeningNodeAlpha_end=0.6,
        awakeningPathIntensity_end=0.35,
        awakeningEasing="easeInQuart",
        ascensionNodeAlpha_start=0.6,
        ascensionNodeAlpha_end=0.98,
        ascensionPathIntensity_start=0.35,
        ascensionPathAnimSpeed=3,
        ascensionEasing="easeInOutCubic",
        radianceNodeAlpha_start=0.98,
        radianceKetherGlow=3.0,
        radiancePathAnimSpeed=3,
        radianceEasing="smootherstep",
        descentNodeAlpha_end=0.2,
        descentEasing="easeOutCubic",
        nodeColor="#FFD700",
        pathColor="#FF00FF",
        glowColor="#FF1493",
        nodeSize=24,
        nodeGlowSize=32,
        pathThickness=2.2,
        pathSizeScale=1.05,
        layerBlendMode="screen",
        pulseWaveSpeed=4,
        pulseBreathSpeed=3,
        pulseBreathIntensity=0.6,
        pulseAuraSpeed=4,
        pulseAuraWidth=0.2,
        pulseTracerSpeed=5,
        pulseTracerCount=8,
    ),
    # Long awakening and ascension for extended viewing
    "alchemical-transmutation": _tree_variant(
        phaseAscension_start=0.30,
        phaseRadiance_start=0.70,
        phaseDescent_start=0.90,
        # Half the 0.10 descent phase is the upper bound
        transitionZoneWidth=0.04,
        awakeningNodeAlpha_start=0.1,
        awakeningNodeAlpha_end=0.42,
        awakeningPathIntensity_end=0.25,
        awakeningEasing="smoothstep",
        ascensionNodeAlpha_start=0.42,
        ascensionNodeAlpha_end=0.92,
        ascensionPathIntensity_start=0.25,
        ascensionPathAnimSpeed=1,
        ascensionEasing="easeOutCubic",
        radianceNodeAlpha_start=0.92,
        radiancePathIntensity_start=1.0,
        radiancePathIntensity_end=0.98,
        radianceKetherGlow=2.5,
        radiancePathAnimSpeed=1,
        descentPathIntensity_start=0.98,
        nodeColor="#B87333",
        pathColor="#50C878",
        glowColor="#228B22",
        layerBlendMode="screen",
        pulseWaveSpeed=1,
        pulseBreathSpeed=1,
        pulseBreathIntensity=0.35,
        pulseAuraSpeed=1,
        pulseAuraWidth=0.18,
        pulseTracerSpeed=2,
        pulseTracerCount=3,
    ),
    # Thin paths with rapid geometric unfolding
    "geometric": _tree_variant(
        phaseAscension_start=0.18,
        phaseRadiance_start=0.55,
        phaseDescent_start=0.82,
        awakeningNodeAlpha_start=0.2,
        awakeningNodeAlpha_end=0.55,
        awakeningPathIntensity_end=0.4,
        awakeningEasing="easeInQuart",
        ascensionNodeAlpha_start=0.55,
        ascensionNodeAlpha_end=0.98,
        ascensionPathIntensity_start=0.4,
        ascensionEasing="easeInOutCubic",
        radianceNodeAlpha_start=0.98,
        descentNodeAlpha_end=0.2,
        descentEasing="easeOutCubic",
        nodeColor="#0047AB",
        pathColor="#F0F8FF",
        glowColor="#C0C0C0",
        nodeSize=18,
        nodeGlowSize=22,
        pathThickness=1.5,
        pathSizeScale=0.95,
        layerBlendMode="overlay",
        pulseWaveSpeed=3,
        pulseBreathSpeed=2,
        pulseBreathIntensity=0.35,
        pulseAuraSpeed=3,
        pulseAuraWidth=0.12,
        pulseTracerSpeed=4,
        pulseTracerCount=7,
    ),
    # Cyan interference with a long radiance
    "quantum": _tree_variant(
        phaseAscension_start=0.16,
        phaseRadiance_start=0.52,
        phaseDescent_start=0.84,
        awakeningNodeAlpha_start=0.2,
        awakeningNodeAlpha_end=0.55,
        awakeningPathIntensity_end=0.35,
        awakeningEasing="easeInQuart",
        ascensionNodeAlpha_start=0.55,
        ascensionPathIntensity_start=0.35,
        ascensionPathAnimSpeed=3,
        ascensionEasing="easeInOutCubic",
        radianceNodeAlpha_start=0.95,
        radianceKetherGlow=2.3,
        descentNodeAlpha_end=0.2,
        descentEasing="easeOutCubic",
        nodeColor="#FFD700",
        pathColor="#00E5FF",
        glowColor="#00E5FF",
        layerBlendMode="screen",
        pulseWaveSpeed=2,
        pulseBreathSpeed=2,
        pulseAuraSpeed=2,
        pulseTracerSpeed=3,
    ),
    "chakra-default": {
        "effect": "chakra-mandala",
        "phaseAwakening_start": 0.0,
        "phaseAscension_start": 0.20,
        "phaseRadiance_start": 0.60,
        "phaseDescent_start": 0.85,
        "transitionZoneWidth": 0.05,
        "awakeningNodeAlpha_start": 0.2,
        "awakeningNodeAlpha_end": 0.6,
        "awakeningPathIntensity_start": 0.1,
        "awakeningPathIntensity_end": 0.4,
        "awakeningEasing": "easeInCubic",
        "awakeningChakraFocus": ["muladhara", "svadhisthana", "manipura"],
        "ascensionNodeAlpha_start": 0.6,
        "ascensionNodeAlpha_end": 0.9,
        "ascensionPathIntensity_start": 0.4,
        "ascensionPathIntensity_end": 1.0,
        "ascensionEasing": ["linear", "easeInOutCubic"],
        "ascensionChakraFocus": ["anahata", "vishuddha", "ajna"],
        "radianceNodeAlpha": 1.0,
        "radiancePathIntensity": 1.0,
        "radianceEasing": "smoothstep",
        "radianceChakraFocus": ["sahasrara", "ajna", "anahata"],
        "descentNodeAlpha_start": 1.0,
        "descentNodeAlpha_end": 0.2,
        "descentPathIntensity_start": 1.0,
        "descentPathIntensity_end": 0.1,
        "descentEasing": "easeOutQuart",
        "descentChakraFocus": ["muladhara", "svadhisthana", "manipura"],
        "scale": 1.0,
        "centerX": 0.5,
        "centerY": 0.5,
        "layerOpacity": 1.0,
        "layerBlendMode": ["screen", "overlay", "lighten", "color-dodge"],
        "enableMandalaRings": True,
        "mandalaRingSpeed": 2,
        "mandalaRingOpacity": 0.6,
        "mandalaRingLayers": 3,
        "mandalaSymmetry": 6,
        "mandalaOuterRadius": 0.4,
        "enableEnergyFlow": True,
        "energyFlowSpeed": 2,
        "energyFlowDensity": 5,
        "enableCentralChannel": True,
        "centralChannelGlow": 1.2,
        "chakraGlowSize": 35,
        "chakraGlowIntensity": 0.7,
        "chakraBreatheIntensity": 0.3,
        "breathSpeed": 1,
        "frequencyOscillationSpeed": 3,
    },
}


def list_presets() -> list[str]:
    return sorted(BUILTIN_PRESETS)


def get_preset(name: str) -> dict[str, Any]:
    """Return a deep copy of a built-in preset.

    Raises:
        KeyError: If no built-in preset has that name.
    """
    try:
        return copy.deepcopy(BUILTIN_PRESETS[name])
    except KeyError:
        raise KeyError(
            f"Unknown preset: '{name}'. Available: {', '.join(list_presets())}"
        ) from None
