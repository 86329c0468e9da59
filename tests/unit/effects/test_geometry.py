"""Tests for the static geometry tables."""

from __future__ import annotations

import pytest

from mandalagen.core.animation.activation import activation_order
from mandalagen.core.effects.geometry import (
    CHAKRAS,
    SEPHIROTH,
    TREE_PATHS,
    chakra_by_id,
    sephirah_by_id,
    sephirah_by_name,
)


class TestTreeOfLife:
    """Tests for sephiroth and paths."""

    def test_counts(self) -> None:
        """Ten sephiroth joined by 22 paths."""
        assert len(SEPHIROTH) == 10
        assert len(TREE_PATHS) == 22

    def test_paths_connect_known_nodes(self) -> None:
        """Every path endpoint is a sephirah."""
        ids = {node.id for node in SEPHIROTH}
        for path in TREE_PATHS:
            assert path.start in ids
            assert path.end in ids
            assert path.start != path.end

    def test_path_order_is_sequential(self) -> None:
        """Paths are traced 1..22."""
        assert [p.order for p in TREE_PATHS] == list(range(1, 23))

    def test_awakening_and_ascension_ranks_are_permutations(self) -> None:
        """Each ranked phase orders all ten nodes uniquely."""
        for phase in ("awakening", "ascension"):
            assert sorted(node.rank_for(phase) for node in SEPHIROTH) == list(range(1, 11))

    def test_awakening_order(self) -> None:
        """Awakening climbs from Malkuth through Yesod and Tiphereth."""
        names = [n.name for n in activation_order(SEPHIROTH, "awakening")]
        assert names[:3] == ["MALKUTH", "YESOD", "TIFERETH"]

    def test_lookups(self) -> None:
        """Lookups by id and (case-insensitive) name."""
        assert sephirah_by_id(1).name == "KETHER"
        assert sephirah_by_name("kether").id == 1
        with pytest.raises(KeyError):
            sephirah_by_id(11)
        with pytest.raises(KeyError):
            sephirah_by_name("daath")


class TestChakras:
    """Tests for the chakra table."""

    def test_root_to_crown(self) -> None:
        """Seven chakras, rising up the canvas."""
        assert len(CHAKRAS) == 7
        ys = [c.y for c in CHAKRAS]
        assert ys == sorted(ys, reverse=True)

    def test_descent_runs_crown_first(self) -> None:
        """Descent ranks reverse the rise."""
        order = activation_order(CHAKRAS, "descent")
        assert [c.id for c in order] == [c.id for c in reversed(CHAKRAS)]

    def test_lookup(self) -> None:
        """Lookup by id."""
        assert chakra_by_id("anahata").name == "Heart"
        with pytest.raises(KeyError):
            chakra_by_id("bindu")
