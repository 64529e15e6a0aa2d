"""
Test node and county network construction on the toy dataset.
"""
import pytest
import polars as pl

from railnet.analysis.connectivity import largest_connected_component
from railnet.networks.adjacency import AdjacencyGraph, EdgeRecord
from railnet.networks.county_network import (
    build_county_adjacency,
    build_node_to_county,
    find_county_conflicts,
    project_to_counties,
)
from railnet.networks.rail_network import (
    adjacency_from_frame,
    adjacency_to_frame,
    build_node_adjacency,
    build_rail_networks,
    load_adjacency,
)


def test_node_graph_from_toy_data(toy_records):
    """Test node graph construction keeps every record."""
    g = build_node_adjacency(toy_records)

    assert len(g) == 10
    assert g.is_symmetric()
    assert g.neighbors("2") == ("1", "3", "8")
    # 6-7 listed twice in the data
    assert g.neighbors("6") == ("5", "7", "7")
    assert g.n_entries() == 2 * len(toy_records)


def test_node_graph_two_records():
    records = [EdgeRecord("node1", "node2"), EdgeRecord("node2", "node3")]
    g = build_node_adjacency(records)

    assert "node2" in g
    assert len(g.neighbors("node2")) == 2


def test_self_loop_is_kept():
    """A record joining a node to itself lists the node as its own neighbor."""
    g = build_node_adjacency([EdgeRecord("A", "A"), EdgeRecord("A", "B")])

    assert g.neighbors("A") == ("A", "A", "B")
    assert g.neighbors("B") == ("A",)
    assert g.is_symmetric()


def test_county_projection_two_records():
    """Two linked nodes in different counties give two adjacent counties."""
    records = [
        EdgeRecord("node1", "node2", "10001"),
        EdgeRecord("node2", "node3", "10002"),
    ]
    node_graph = build_node_adjacency(records)
    county_graph = build_county_adjacency(records, node_graph)

    assert county_graph.to_dict() == {"10001": ["10002"], "10002": ["10001"]}
    assert largest_connected_component(county_graph) == 2


def test_county_graph_from_toy_data(toy_records):
    node_graph = build_node_adjacency(toy_records)
    county_graph = build_county_adjacency(toy_records, node_graph)

    assert county_graph.to_dict() == {
        "17031": ["17043", "18089"],
        "17043": ["17031", "17097"],
        "17097": ["17043"],
        "18089": ["17031"],
    }
    assert county_graph.is_symmetric()


def test_county_graph_has_no_self_loops_or_duplicates(toy_records):
    county_graph = build_county_adjacency(toy_records, build_node_adjacency(toy_records))
    for county, neighbors in county_graph.items():
        assert county not in neighbors
        assert list(neighbors) == sorted(set(neighbors))


def test_unmapped_nodes_are_skipped():
    node_graph = AdjacencyGraph({"a": ["b", "c"], "b": ["a"], "c": ["a"]})
    county_graph = project_to_counties(node_graph, {"a": "1", "b": "2"})
    assert county_graph.to_dict() == {"1": ["2"], "2": ["1"]}


def test_node_to_county_ignores_empty_and_to_side(toy_records):
    mapping = build_node_to_county(toy_records)

    assert mapping["7"] == "17097"
    assert "9" not in mapping  # only listed with an empty county
    assert "10" not in mapping
    assert "11" not in mapping  # only ever a to-node


class TestCountyPolicy:
    """Conflicting county codes for one node."""

    records = [
        EdgeRecord("n1", "n2", "100"),
        EdgeRecord("n1", "n3", "200"),
        EdgeRecord("n2", "n3", "300"),
        EdgeRecord("n3", "n1", "300"),
    ]

    def test_last_write_wins(self):
        assert build_node_to_county(self.records, policy="last")["n1"] == "200"

    def test_first_write_wins(self):
        assert build_node_to_county(self.records, policy="first")["n1"] == "100"

    def test_policy_changes_county_graph(self):
        node_graph = build_node_adjacency(self.records)
        last = build_county_adjacency(self.records, node_graph, policy="last")
        first = build_county_adjacency(self.records, node_graph, policy="first")
        assert last.entities == ("200", "300")
        assert first.entities == ("100", "300")

    def test_unknown_policy(self):
        with pytest.raises(ValueError, match="Unknown county policy"):
            build_node_to_county(self.records, policy="majority")

    def test_conflicts_reported(self):
        assert find_county_conflicts(self.records) == {"n1": ["100", "200"]}


def test_adjacency_frame_round_trip():
    g = AdjacencyGraph({"A": ["B", "B", "A", "A"], "B": ["A", "A"], "C": []})
    df = adjacency_to_frame(g)

    assert df.columns == ["entity", "neighbor"]
    assert df.filter(pl.col("entity") == "C")["neighbor"].to_list() == [None]
    assert adjacency_from_frame(df) == g


def test_adjacency_frame_missing_columns():
    with pytest.raises(ValueError, match="missing columns"):
        adjacency_from_frame(pl.DataFrame({"entity": ["A"]}))


def test_build_rail_networks_writes_outputs(toy_records, tmp_path):
    config = {"networks": {"county_policy": "last", "export_graphml": True}}
    summary = build_rail_networks(toy_records, config, tmp_path)

    networks_dir = tmp_path / "networks"
    assert (networks_dir / "node_graph.graphml").exists()
    assert (networks_dir / "county_graph.graphml").exists()
    assert (tmp_path / "logs" / "rail_network_summary.json").exists()

    assert summary["n_records"] == len(toy_records)
    assert summary["node"]["n_nodes"] == 10
    assert summary["node"]["lcc_size"] == 10
    assert summary["county"]["n_nodes"] == 4
    assert summary["county"]["n_edges"] == 3

    county_graph = load_adjacency(networks_dir / "county_adjacency.parquet")
    node_graph = load_adjacency(networks_dir / "node_adjacency.parquet")
    assert county_graph == build_county_adjacency(toy_records, build_node_adjacency(toy_records))
    assert node_graph == build_node_adjacency(toy_records)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
