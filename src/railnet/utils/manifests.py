"""
Run manifests for reproducibility tracking.

Each pipeline script records its inputs (with content hashes), outputs,
config snapshot and git commit. Graphs get their own fingerprint so two runs
can be compared without re-reading the CSV.
"""
import hashlib
import json
import logging
import subprocess
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from railnet.networks.adjacency import AdjacencyGraph


logger = logging.getLogger(__name__)


def get_git_commit() -> Optional[str]:
    """Current git commit hash, or None outside a git checkout."""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "HEAD"],
            capture_output=True,
            text=True,
            timeout=5
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug(f"git not available: {e}")
        return None
    return result.stdout.strip() if result.returncode == 0 else None


def hash_file(file_path: Path, chunk_size: int = 8192) -> str:
    """SHA256 of a file's contents."""
    sha256 = hashlib.sha256()
    with open(file_path, "rb") as f:
        for chunk in iter(lambda: f.read(chunk_size), b""):
            sha256.update(chunk)
    return sha256.hexdigest()


def compute_schema_hash(columns: List[str]) -> str:
    """Short hash of a dataset's column names (order-insensitive)."""
    schema_str = ",".join(sorted(columns))
    return hashlib.sha256(schema_str.encode()).hexdigest()[:16]


def graph_fingerprint(graph: AdjacencyGraph) -> Dict[str, Any]:
    """
    Size and content hash of an adjacency graph.

    Neighbor lists are hashed in entity order and as stored, so two graphs
    share a hash only when `==` holds between them.
    """
    sha256 = hashlib.sha256()
    for entity, neighbors in graph.items():
        sha256.update(entity.encode())
        sha256.update(b"\x00")
        sha256.update("\x1f".join(neighbors).encode())
        sha256.update(b"\x1e")
    return {
        "n_entities": len(graph),
        "n_entries": graph.n_entries(),
        "hash": sha256.hexdigest()[:16],
    }


def _input_entry(path: Path) -> Dict[str, Any]:
    return {
        "path": str(path),
        "size_bytes": path.stat().st_size,
        "hash": hash_file(path)[:16],
    }


def _output_entry(path: Path) -> Dict[str, Any]:
    return {"path": str(path), "size_bytes": path.stat().st_size}


def create_run_manifest(
    script_name: str,
    config: Dict[str, Any],
    input_files: List[Path],
    output_files: List[Path],
    metadata: Optional[Dict[str, Any]] = None,
    manifest_path: Optional[Path] = None
) -> Dict[str, Any]:
    """
    Create a run manifest capturing execution context.

    Files that do not exist (e.g. outputs skipped because overwrite is off)
    are left out.

    Args:
        script_name: Name of the script (e.g., "01_build_networks")
        config: Configuration dictionary
        input_files: Input file paths
        output_files: Output file paths
        metadata: Additional metadata (graph summaries, ASPL values)
        manifest_path: Where to save the manifest JSON, if anywhere

    Returns:
        Manifest dictionary
    """
    manifest = {
        "script": script_name,
        "timestamp": datetime.now().isoformat(),
        "git_commit": get_git_commit(),
        "config_snapshot": config,
        "inputs": [_input_entry(p) for p in input_files if p.exists()],
        "outputs": [_output_entry(p) for p in output_files if p.exists()],
        "metadata": metadata or {}
    }

    if manifest_path is not None:
        save_json(manifest, manifest_path)
        logger.info(f"Wrote manifest: {manifest_path}")

    return manifest


def save_json(data: Dict[str, Any], file_path: Path) -> None:
    """Save a dictionary as indented JSON, creating parent directories."""
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with open(file_path, "w") as f:
        json.dump(data, f, indent=2, default=str)
