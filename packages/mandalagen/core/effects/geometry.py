"""Static geometry tables: Tree of Life sephiroth and paths, chakra nodes.

Positions are normalized to [0, 1] on both axes (y grows downward).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from mandalagen.core.animation.activation import ActivationElement


class GeometryNode(ActivationElement):
    """An activation element with a position and base color."""

    x: float = Field(ge=0.0, le=1.0)
    y: float = Field(ge=0.0, le=1.0)
    color: str = "#FFFFFF"
    glow_color: str | None = None


class Sephirah(GeometryNode):
    meaning: str


class Chakra(GeometryNode):
    sanskrit: str
    radius: float = Field(gt=0)
    frequency_hz: float = Field(gt=0)


class TreePath(BaseModel):
    """One of the 22 paths, connecting two sephiroth by id."""

    model_config = ConfigDict(frozen=True)

    id: int
    start: int
    end: int
    letter: str
    order: int


# Awakening rises from Malkuth; ascension descends from Kether.
SEPHIROTH: tuple[Sephirah, ...] = (
    Sephirah(id=1, name="KETHER", meaning="Crown", x=0.5, y=0.08, color="#FFFFFF",
             ranks={"awakening": 10, "ascension": 1}),
    Sephirah(id=2, name="CHOKMAH", meaning="Wisdom", x=0.75, y=0.22, color="#0099FF",
             ranks={"awakening": 9, "ascension": 2}),
    Sephirah(id=3, name="BINAH", meaning="Understanding", x=0.25, y=0.22, color="#FF00FF",
             ranks={"awakening": 8, "ascension": 3}),
    Sephirah(id=4, name="CHESED", meaning="Mercy", x=0.75, y=0.42, color="#0000FF",
             ranks={"awakening": 6, "ascension": 5}),
    Sephirah(id=5, name="GEVURAH", meaning="Severity", x=0.25, y=0.42, color="#FF0000",
             ranks={"awakening": 7, "ascension": 4}),
    Sephirah(id=6, name="TIFERETH", meaning="Beauty", x=0.5, y=0.50, color="#FFFF00",
             ranks={"awakening": 3, "ascension": 6}),
    Sephirah(id=7, name="NETZACH", meaning="Victory", x=0.75, y=0.65, color="#00FF00",
             ranks={"awakening": 4, "ascension": 7}),
    Sephirah(id=8, name="HOD", meaning="Splendor", x=0.25, y=0.65, color="#FFFF00",
             ranks={"awakening": 5, "ascension": 8}),
    Sephirah(id=9, name="YESOD", meaning="Foundation", x=0.5, y=0.80, color="#9999FF",
             ranks={"awakening": 2, "ascension": 9}),
    Sephirah(id=10, name="MALKUTH", meaning="Kingdom", x=0.5, y=0.95, color="#FFAA00",
             ranks={"awakening": 1, "ascension": 10}),
)  # fmt: skip

_PATH_TABLE: tuple[tuple[int, int, str], ...] = (
    (1, 2, "Aleph"),
    (1, 3, "Beth"),
    (2, 3, "Gimel"),
    (2, 4, "Daleth"),
    (3, 5, "He"),
    (4, 5, "Vav"),
    (4, 6, "Zayin"),
    (5, 6, "Cheth"),
    (6, 7, "Teth"),
    (6, 8, "Yodh"),
    (4, 7, "Kaph"),
    (5, 8, "Lamed"),
    (7, 8, "Mem"),
    (7, 9, "Nun"),
    (8, 9, "Samekh"),
    (6, 9, "Ayin"),
    (9, 10, "Pe"),
    (2, 5, "Tsade"),
    (3, 4, "Qoph"),
    (4, 8, "Resh"),
    (5, 7, "Shin"),
    (1, 6, "Tav"),
)

# Hermetic order: path id doubles as its tracing order
TREE_PATHS: tuple[TreePath, ...] = tuple(
    TreePath(id=i, start=start, end=end, letter=letter, order=i)
    for i, (start, end, letter) in enumerate(_PATH_TABLE, start=1)
)

# Root to crown, the order kundalini rises in.
CHAKRAS: tuple[Chakra, ...] = (
    Chakra(id="muladhara", name="Root", sanskrit="Muladhara", x=0.5, y=0.85, radius=25,
           color="#E74C3C", glow_color="#C0392B", frequency_hz=228,
           ranks={"awakening": 1, "ascension": 1, "descent": 7}),
    Chakra(id="svadhisthana", name="Sacral", sanskrit="Svadhisthana", x=0.5, y=0.72, radius=24,
           color="#F39C12", glow_color="#D68910", frequency_hz=303,
           ranks={"awakening": 2, "ascension": 2, "descent": 6}),
    Chakra(id="manipura", name="Solar Plexus", sanskrit="Manipura", x=0.5, y=0.59, radius=24,
           color="#F1C40F", glow_color="#D4AF37", frequency_hz=384,
           ranks={"awakening": 3, "ascension": 3, "descent": 5}),
    Chakra(id="anahata", name="Heart", sanskrit="Anahata", x=0.5, y=0.50, radius=26,
           color="#2ECC71", glow_color="#27AE60", frequency_hz=341,
           ranks={"awakening": 4, "ascension": 4, "descent": 4}),
    Chakra(id="vishuddha", name="Throat", sanskrit="Vishuddha", x=0.5, y=0.41, radius=23,
           color="#3498DB", glow_color="#2980B9", frequency_hz=384,
           ranks={"awakening": 5, "ascension": 5, "descent": 3}),
    Chakra(id="ajna", name="Third Eye", sanskrit="Ajna", x=0.5, y=0.28, radius=22,
           color="#9B59B6", glow_color="#8E44AD", frequency_hz=426,
           ranks={"awakening": 6, "ascension": 6, "descent": 2}),
    Chakra(id="sahasrara", name="Crown", sanskrit="Sahasrara", x=0.5, y=0.15, radius=24,
           color="#E91E63", glow_color="#C2185B", frequency_hz=432,
           ranks={"awakening": 7, "ascension": 7, "descent": 1}),
)  # fmt: skip

_SEPHIROTH_BY_ID = {node.id: node for node in SEPHIROTH}


def sephirah_by_id(node_id: int) -> Sephirah:
    try:
        return _SEPHIROTH_BY_ID[node_id]
    except KeyError:
        raise KeyError(f"Unknown sephirah id: {node_id}") from None


def sephirah_by_name(name: str) -> Sephirah:
    """Case-insensitive lookup by name ("kether", "KETHER")."""
    for node in SEPHIROTH:
        if node.name == name.upper():
            return node
    raise KeyError(f"Unknown sephirah: '{name}'")


def chakra_by_id(chakra_id: str) -> Chakra:
    for chakra in CHAKRAS:
        if chakra.id == chakra_id:
            return chakra
    raise KeyError(f"Unknown chakra: '{chakra_id}'")
