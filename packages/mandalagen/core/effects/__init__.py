"""Phase-animated generative effects and their host interfaces."""

from mandalagen.core.effects.base import DEFAULT_COLORS, PhaseAnimatedEffect
from mandalagen.core.effects.chakra_mandala import ChakraMandalaEffect
from mandalagen.core.effects.energy import EnergyPulseEngine, PulseWeights
from mandalagen.core.effects.geometry import (
    CHAKRAS,
    SEPHIROTH,
    TREE_PATHS,
    Chakra,
    GeometryNode,
    Sephirah,
    TreePath,
)
from mandalagen.core.effects.protocols import Canvas, CanvasFactory, ColorSource, Layer, Point
from mandalagen.core.effects.tree_of_life import TreeOfLifeEffect

EFFECTS: dict[str, type[PhaseAnimatedEffect]] = {
    TreeOfLifeEffect.name: TreeOfLifeEffect,
    ChakraMandalaEffect.name: ChakraMandalaEffect,
}

__all__ = [
    "CHAKRAS",
    "DEFAULT_COLORS",
    "EFFECTS",
    "SEPHIROTH",
    "TREE_PATHS",
    "Canvas",
    "CanvasFactory",
    "Chakra",
    "ChakraMandalaEffect",
    "ColorSource",
    "EnergyPulseEngine",
    "GeometryNode",
    "Layer",
    "PhaseAnimatedEffect",
    "Point",
    "PulseWeights",
    "Sephirah",
    "TreeOfLifeEffect",
    "TreePath",
]
