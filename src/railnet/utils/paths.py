"""
Path management utilities for consistent file access across the project.
"""
from pathlib import Path
from typing import Optional


def get_project_root(start_path: Optional[Path] = None) -> Path:
    """
    Find the project root directory (contains config/ and src/ directories).

    Args:
        start_path: Starting path for search (default: current working directory)

    Returns:
        Path to project root
    """
    if start_path is None:
        start_path = Path.cwd()

    current = start_path.resolve()
    for _ in range(10):  # Limit search depth
        if (current / "config").exists() and (current / "src").exists():
            return current
        if current.parent == current:
            break
        current = current.parent

    # Fall back to the checkout this module lives in (src/railnet/utils)
    return Path(__file__).resolve().parents[3]


def get_config_path() -> Path:
    """Get path to config.yaml."""
    return get_project_root() / "config" / "config.yaml"


def get_results_dir(config: Optional[dict] = None) -> Path:
    """Get path to results directory (config.outputs.results_dir if set)."""
    root = get_project_root()
    if config is not None:
        results = Path(config.get("outputs", {}).get("results_dir", "results"))
        return results if results.is_absolute() else root / results
    return root / "results"
