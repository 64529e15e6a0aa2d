#!/usr/bin/env python
"""
Script 02: Run connectivity analysis on county (and optionally node) networks.

Consumes Script 01 outputs (county_adjacency.parquet, node_adjacency.parquet).
Computes degree ranking, largest connected component, removal impact and
average shortest path length before/after removing one configured entity.
Prints the top entries, writes tables under results/tables and a run manifest.

Usage:
    python scripts/02_run_connectivity.py [--config PATH] [--entity COUNTY]
"""

import sys
from pathlib import Path
from typing import Any, Dict, Optional

# Add src to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from railnet.analysis.connectivity import (
    compute_degree_distribution,
    connected_component_sizes,
    degree_ranking,
    largest_connected_component,
    removal_impact,
)
from railnet.analysis.path_length import aspl_with_removal, average_shortest_path_length
from railnet.analysis.reporting import (
    aspl_to_dict,
    format_aspl,
    format_ranking,
    ranking_to_frame,
    write_connectivity_outputs,
)
from railnet.networks.adjacency import AdjacencyGraph
from railnet.networks.igraph_helpers import articulation_points
from railnet.networks.rail_network import load_adjacency
from railnet.utils.config import analysis_levels, apply_overrides, build_arg_parser, load_config
from railnet.utils.logging import get_script_logger
from railnet.utils.manifests import create_run_manifest, graph_fingerprint
from railnet.utils.paths import get_results_dir

LABELS = {
    "county": ("County", "Counties"),
    "node": ("Node", "Nodes"),
}


def run_level(
    level: str,
    graph: AdjacencyGraph,
    removal_entity: Optional[str],
    top_k: int,
    n_jobs: int,
    logger,
) -> Dict[str, Any]:
    """Run every analysis on one graph and print the ranked results."""
    singular, plural = LABELS[level]
    logger.info(f"Analyzing {level} graph: {graph}")

    degrees = degree_ranking(graph)
    print(f"Top {top_k} Most Connected {plural} by Number of Neighbors:")
    for line in format_ranking(degrees, singular, "Number of Neighbors", top_k):
        print(line)

    initial_largest = largest_connected_component(graph)
    print(f"\nLargest Connected Component without Removal: {initial_largest}")

    impact = removal_impact(graph, n_jobs=n_jobs)
    print(f"\nTop {top_k} {plural} by Smallest Largest Connected Component Size after Removal:")
    for line in format_ranking(impact, singular, "Largest Component Size After Removal", top_k):
        print(line)

    aspl = average_shortest_path_length(graph)
    print(f"\nAverage Shortest Path Length: {format_aspl(aspl)}")

    summary: Dict[str, Any] = {
        "level": level,
        "graph": graph_fingerprint(graph),
        "n_components": len(connected_component_sizes(graph)),
        "lcc_size": initial_largest,
        "articulation_points": articulation_points(graph),
        "aspl": aspl_to_dict(aspl),
        "removal_entity": removal_entity,
        "aspl_after_removal": None,
    }

    if removal_entity is not None:
        if removal_entity not in graph:
            logger.warning(f"{singular} {removal_entity} is not in the {level} graph")
        aspl_removed = aspl_with_removal(graph, removal_entity)
        print(f"Average Shortest Path Length after removing {singular} {removal_entity}: "
              f"{format_aspl(aspl_removed)}")
        summary["aspl_after_removal"] = aspl_to_dict(aspl_removed)

    return {
        "summary": summary,
        "degree_df": ranking_to_frame(degrees, "degree"),
        "impact_df": ranking_to_frame(impact, "remaining_lcc"),
        "degree_dist": compute_degree_distribution(graph),
    }


def main():
    """Main execution."""
    args = build_arg_parser("Run connectivity analysis").parse_args()
    config = apply_overrides(load_config(args.config), args)

    results_dir = get_results_dir(config)
    logger = get_script_logger("02_run_connectivity", results_dir, level=args.loglevel)

    logger.info("=" * 80)
    logger.info("Script 02: Connectivity Analysis")
    logger.info("=" * 80)

    analysis_config = config.get("analysis", {})
    top_k = analysis_config.get("top_k", 20)
    n_jobs = analysis_config.get("n_jobs", 1)
    removal_entities = {
        "county": analysis_config.get("removal_entity"),
        "node": analysis_config.get("node_removal_entity"),
    }
    overwrite = config.get("outputs", {}).get("overwrite", False)

    networks_dir = results_dir / "networks"
    input_paths = []
    output_paths: Dict[str, Any] = {}
    summaries: Dict[str, Any] = {}

    for level in analysis_levels(config):
        graph_path = networks_dir / f"{level}_adjacency.parquet"
        if not graph_path.exists():
            logger.error(f"Network not found: {graph_path}")
            logger.error("Run scripts/01_build_networks.py first")
            sys.exit(1)
        input_paths.append(graph_path)

        graph = load_adjacency(graph_path)
        removal_entity = removal_entities[level]

        results = run_level(level, graph, removal_entity, top_k, n_jobs, logger)
        summaries[level] = results["summary"]

        output_paths[level] = write_connectivity_outputs(
            level=level,
            degree_df=results["degree_df"],
            impact_df=results["impact_df"],
            degree_dist=results["degree_dist"],
            summary=results["summary"],
            output_dir=results_dir,
            overwrite=overwrite,
        )
        print()

    create_run_manifest(
        script_name="02_run_connectivity",
        config=config,
        input_files=input_paths,
        output_files=[Path(p) for paths in output_paths.values() for p in paths.values()],
        metadata=summaries,
        manifest_path=results_dir / "logs" / "02_run_connectivity_manifest.json",
    )

    logger.info("=" * 80)
    logger.info("Script 02: Complete")
    logger.info("=" * 80)


if __name__ == "__main__":
    main()
