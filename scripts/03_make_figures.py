#!/usr/bin/env python
"""
Script 03: Make figures from connectivity tables.

Reads results/tables written by Script 02; does not recompute analysis.
"""

import json
import sys
from pathlib import Path

import polars as pl

# Add src to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from railnet.utils.config import analysis_levels, apply_overrides, build_arg_parser, load_config
from railnet.utils.logging import get_script_logger
from railnet.utils.paths import get_results_dir
from railnet.viz.plotting import plot_degree_distribution, plot_ranking


def main():
    """Main execution."""
    args = build_arg_parser("Make connectivity figures").parse_args()
    config = apply_overrides(load_config(args.config), args)

    results_dir = get_results_dir(config)
    logger = get_script_logger("03_make_figures", results_dir, level=args.loglevel)

    if not config.get("outputs", {}).get("plots", True):
        logger.info("Plots disabled (config.outputs.plots=false)")
        return

    tables_dir = results_dir / "tables"
    analysis_dir = results_dir / "analysis"
    figures_dir = results_dir / "figures"
    figures_dir.mkdir(parents=True, exist_ok=True)
    top_k = config.get("analysis", {}).get("top_k", 20)

    for level in analysis_levels(config):
        degree_path = tables_dir / f"{level}_degree_ranking.csv"
        impact_path = tables_dir / f"{level}_removal_impact.csv"
        dist_path = tables_dir / f"{level}_degree_dist.csv"
        summary_path = analysis_dir / f"{level}_connectivity_summary.json"

        missing = [p for p in (degree_path, impact_path, dist_path, summary_path) if not p.exists()]
        if missing:
            logger.warning(f"Skipping {level}: missing {', '.join(str(p) for p in missing)}")
            continue

        with open(summary_path) as f:
            summary = json.load(f)

        read_opts = {"schema_overrides": {"entity": pl.Utf8}}
        plot_ranking(
            pl.read_csv(degree_path, **read_opts), "degree",
            figures_dir / f"fig_{level}_degree_ranking.png", top_k=top_k, level=level,
        )
        plot_ranking(
            pl.read_csv(impact_path, **read_opts), "remaining_lcc",
            figures_dir / f"fig_{level}_removal_impact.png", top_k=top_k, level=level,
            reference=summary["lcc_size"],
        )
        plot_degree_distribution(
            pl.read_csv(dist_path), figures_dir / f"fig_{level}_degree_dist.png", level=level,
        )

    logger.info(f"Figures written to {figures_dir}")


if __name__ == "__main__":
    main()
