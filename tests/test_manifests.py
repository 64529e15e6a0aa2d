"""
Test run manifests and graph fingerprints.
"""
import json

from railnet.networks.adjacency import AdjacencyGraph
from railnet.utils.manifests import (
    compute_schema_hash,
    create_run_manifest,
    graph_fingerprint,
    hash_file,
)


def test_graph_fingerprint_counts(triangle):
    fp = graph_fingerprint(triangle)
    assert fp["n_entities"] == 3
    assert fp["n_entries"] == 6
    assert len(fp["hash"]) == 16


def test_graph_fingerprint_matches_equal_graphs(triangle):
    same = AdjacencyGraph({"C": ["A", "B"], "B": ["A", "C"], "A": ["B", "C"]})
    assert graph_fingerprint(same)["hash"] == graph_fingerprint(triangle)["hash"]


def test_graph_fingerprint_differs_after_removal(triangle):
    assert graph_fingerprint(triangle.remove("A"))["hash"] != graph_fingerprint(triangle)["hash"]


def test_schema_hash_ignores_order():
    assert compute_schema_hash(["b", "a"]) == compute_schema_hash(["a", "b"])


def test_create_run_manifest_skips_missing_files(tmp_path):
    data = tmp_path / "data.csv"
    data.write_text("FRFRANODE,TOFRANODE\n1,2\n")
    manifest_path = tmp_path / "logs" / "manifest.json"

    manifest = create_run_manifest(
        script_name="test",
        config={"a": 1},
        input_files=[data],
        output_files=[tmp_path / "missing.csv"],
        metadata={"lcc": 4},
        manifest_path=manifest_path,
    )

    assert manifest["inputs"][0]["hash"] == hash_file(data)[:16]
    assert manifest["outputs"] == []
    saved = json.loads(manifest_path.read_text())
    assert saved["metadata"] == {"lcc": 4}
    assert saved["script"] == "test"
