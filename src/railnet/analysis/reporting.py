"""
Tables and console text for connectivity results.

Analysis functions return plain (entity, metric) lists; this module turns
them into polars tables, top-k console lines and files on disk.
"""

import logging
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

import polars as pl

from railnet.analysis.path_length import AsplResult
from railnet.utils.manifests import save_json

logger = logging.getLogger(__name__)

DEFAULT_TOP_K = 20


def ranking_to_frame(ranking: Sequence[Tuple[str, int]], metric: str) -> pl.DataFrame:
    """
    Convert a ranked list into a table, keeping its order.

    Parameters
    ----------
    ranking : sequence of (str, int)
        Ranked (entity, metric) pairs
    metric : str
        Name of the metric column

    Returns
    -------
    pl.DataFrame
        Columns: rank, entity, <metric>
    """
    return pl.DataFrame(
        {
            "rank": list(range(1, len(ranking) + 1)),
            "entity": [entity for entity, _ in ranking],
            metric: [value for _, value in ranking],
        },
        schema={"rank": pl.Int64, "entity": pl.Utf8, metric: pl.Int64},
    )


def format_ranking(
    ranking: Sequence[Tuple[str, int]],
    entity_label: str,
    metric_label: str,
    top_k: int = DEFAULT_TOP_K,
) -> List[str]:
    """Render the first `top_k` entries as 'County: X, Number of Neighbors: N' lines."""
    return [
        f"{entity_label}: {entity}, {metric_label}: {value}"
        for entity, value in ranking[:top_k]
    ]


def format_aspl(result: AsplResult, digits: int = 3) -> str:
    """ASPL with `digits` decimals, or 'undefined' when no pair is connected."""
    if not result.is_defined:
        return "undefined"
    return f"{result.value:.{digits}f}"


def aspl_to_dict(result: AsplResult) -> Dict[str, object]:
    return {
        "total_distance": result.total_distance,
        "reachable_pairs": result.reachable_pairs,
        "aspl": result.value,
        "defined": result.is_defined,
    }


def write_connectivity_outputs(
    level: str,
    degree_df: pl.DataFrame,
    impact_df: pl.DataFrame,
    degree_dist: pl.DataFrame,
    summary: dict,
    output_dir: str | Path,
    overwrite: bool = False,
) -> dict:
    """
    Write connectivity outputs to disk.

    Parameters
    ----------
    level : str
        'node' or 'county' (used in file names)
    degree_df : pl.DataFrame
        Degree ranking table
    impact_df : pl.DataFrame
        Removal impact table
    degree_dist : pl.DataFrame
        Degree distribution
    summary : dict
        Scalar results (LCC, ASPL before/after removal)
    output_dir : str or Path
        Base output directory (results/)
    overwrite : bool
        Whether to overwrite existing files

    Returns
    -------
    dict
        Paths to written files
    """
    output_dir = Path(output_dir)
    analysis_dir = output_dir / "analysis"
    tables_dir = output_dir / "tables"
    analysis_dir.mkdir(parents=True, exist_ok=True)
    tables_dir.mkdir(parents=True, exist_ok=True)

    paths = {}
    targets = [
        ("degree_ranking", tables_dir / f"{level}_degree_ranking.csv", degree_df),
        ("removal_impact", tables_dir / f"{level}_removal_impact.csv", impact_df),
        ("degree_dist", tables_dir / f"{level}_degree_dist.csv", degree_dist),
    ]
    for key, path, df in targets:
        if not path.exists() or overwrite:
            df.write_csv(path)
            logger.info(f"Wrote {path}")
            paths[key] = str(path)
        else:
            logger.warning(f"{path} exists; skipping (overwrite=False)")

    summary_path = analysis_dir / f"{level}_connectivity_summary.json"
    if not summary_path.exists() or overwrite:
        save_json(summary, summary_path)
        logger.info(f"Wrote {summary_path}")
        paths["summary"] = str(summary_path)
    else:
        logger.warning(f"{summary_path} exists; skipping (overwrite=False)")

    return paths
