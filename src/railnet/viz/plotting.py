"""
Lightweight plotting helpers for connectivity results.

These functions only draw tables written by the analysis step.
Do NOT recompute analysis here; read from results/tables outputs only.
"""

import logging
from pathlib import Path
from typing import Optional

import matplotlib.pyplot as plt
import polars as pl

logger = logging.getLogger(__name__)


def plot_degree_distribution(
    degree_dist_df: pl.DataFrame,
    output_path: str | Path,
    level: str = "county",
    log_scale: bool = False,
) -> None:
    """
    Plot degree distribution.

    Parameters
    ----------
    degree_dist_df : pl.DataFrame
        Columns: degree, count
    output_path : str or Path
        Path to save figure
    level : str
        'node' or 'county' (for title)
    log_scale : bool
        Whether to use log-log scale
    """
    degrees = degree_dist_df["degree"].to_list()
    counts = degree_dist_df["count"].to_list()

    fig, ax = plt.subplots(figsize=(8, 6))
    ax.scatter(degrees, counts, alpha=0.6, edgecolors="k", linewidth=0.5)

    if log_scale:
        ax.set_xscale("log")
        ax.set_yscale("log")

    ax.set_xlabel("Degree", fontsize=12)
    ax.set_ylabel("Count", fontsize=12)
    ax.set_title(f"{level.title()} Network Degree Distribution", fontsize=14)
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    plt.savefig(output_path, dpi=300)
    plt.close(fig)

    logger.info(f"Saved degree distribution plot: {output_path}")


def plot_ranking(
    ranking_df: pl.DataFrame,
    metric: str,
    output_path: str | Path,
    top_k: int = 20,
    level: str = "county",
    reference: Optional[int] = None,
) -> None:
    """
    Plot the first `top_k` rows of a ranking table as horizontal bars.

    Parameters
    ----------
    ranking_df : pl.DataFrame
        Columns: rank, entity, <metric>, already in ranked order
    metric : str
        'degree' or 'remaining_lcc'
    output_path : str or Path
        Path to save figure
    top_k : int
        Number of entries to show
    level : str
        'node' or 'county' (for labels)
    reference : int, optional
        Vertical reference line, e.g. the LCC before any removal
    """
    top_df = ranking_df.sort("rank").head(top_k)
    entities = top_df["entity"].to_list()
    values = top_df[metric].to_list()

    fig, ax = plt.subplots(figsize=(10, 8))
    ax.barh(range(len(entities)), values, alpha=0.7, edgecolor="k", linewidth=0.5)
    ax.set_yticks(range(len(entities)))
    ax.set_yticklabels(entities)
    ax.invert_yaxis()

    if reference is not None:
        ax.axvline(reference, color="red", linestyle="--", linewidth=1, label="No removal")
        ax.legend()

    label = metric.replace("_", " ").title()
    ax.set_xlabel(label, fontsize=12)
    ax.set_ylabel(level.title(), fontsize=12)
    ax.set_title(f"Top {len(entities)} {level.title()} Entities by {label}", fontsize=14)
    ax.grid(True, alpha=0.3, axis="x")

    plt.tight_layout()
    plt.savefig(output_path, dpi=300)
    plt.close(fig)

    logger.info(f"Saved ranking plot: {output_path}")
