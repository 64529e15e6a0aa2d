"""Shared fixtures for the railnet test suite."""
import sys
from pathlib import Path

import pytest

# Add src and tests to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).resolve().parent))

from fixtures.generate_toy_data import write_toy_csv
from railnet.io.load_data import iter_edge_records, load_rail_records
from railnet.networks.adjacency import AdjacencyGraph


@pytest.fixture
def toy_csv(tmp_path):
    """Path to the toy rail line CSV."""
    return write_toy_csv(tmp_path / "toy_rail.csv")


@pytest.fixture
def toy_records(toy_csv):
    """Edge records loaded from the toy CSV."""
    return list(iter_edge_records(load_rail_records(toy_csv)))


@pytest.fixture
def triangle():
    """3-cycle A-B-C-A."""
    return AdjacencyGraph({"A": ["B", "C"], "B": ["A", "C"], "C": ["A", "B"]})


@pytest.fixture
def star():
    """Star with hub A and leaves B, C."""
    return AdjacencyGraph({"A": ["B", "C"], "B": ["A"], "C": ["A"]})


@pytest.fixture
def two_components():
    """Path A-B-C plus separate edge D-E."""
    return AdjacencyGraph({
        "A": ["B"],
        "B": ["A", "C"],
        "C": ["B"],
        "D": ["E"],
        "E": ["D"],
    })
