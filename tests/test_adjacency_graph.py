"""
Test the adjacency graph value type and entity removal.
"""
import pytest

from railnet.networks.adjacency import AdjacencyGraph, remove


class TestAdjacencyGraph:
    """Tests for read access and ordering."""

    def test_entities_sorted(self):
        g = AdjacencyGraph({"b": ["a"], "c": [], "a": ["b"]})
        assert g.entities == ("a", "b", "c")
        assert [g.position(e) for e in g.entities] == [0, 1, 2]
        assert list(g) == ["a", "b", "c"]

    def test_unknown_entity_has_no_neighbors(self, star):
        assert star.neighbors("Z") == ()
        assert star.degree("Z") == 0
        assert "Z" not in star

    def test_equality_ignores_construction_order(self):
        g1 = AdjacencyGraph({"A": ["B"], "B": ["A"]})
        g2 = AdjacencyGraph({"B": ["A"], "A": ["B"]})
        assert g1 == g2

    def test_symmetry_check(self, triangle):
        assert triangle.is_symmetric()
        assert not AdjacencyGraph({"A": ["B"], "B": []}).is_symmetric()

    def test_symmetry_counts_duplicates(self):
        """A doubled edge must be doubled on both sides."""
        assert AdjacencyGraph({"A": ["B", "B"], "B": ["A", "A"]}).is_symmetric()
        assert not AdjacencyGraph({"A": ["B", "B"], "B": ["A"]}).is_symmetric()

    def test_n_entries(self, star):
        assert star.n_entries() == 4


class TestRemove:
    """Tests for pure entity removal."""

    def test_removes_key_and_references(self, star):
        result = remove("A", star)
        assert "A" not in result
        for entity, neighbors in result.items():
            assert "A" not in neighbors
        assert result.to_dict() == {"B": [], "C": []}

    def test_input_untouched(self, star):
        before = star.to_dict()
        star.remove("A")
        assert star.to_dict() == before

    def test_degrees_never_grow(self, triangle):
        result = triangle.remove("B")
        for entity in result:
            assert result.degree(entity) <= triangle.degree(entity)

    def test_absent_entity_is_noop(self, triangle):
        assert triangle.remove("Z") == triangle

    def test_idempotent(self, two_components):
        once = two_components.remove("B")
        assert once.remove("B") == once

    def test_keeps_symmetry(self, two_components):
        assert two_components.remove("B").is_symmetric()

    def test_removes_all_duplicate_entries(self):
        g = AdjacencyGraph({"A": ["B", "B", "A", "A"], "B": ["A", "A"]})
        assert g.remove("A").to_dict() == {"B": []}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
