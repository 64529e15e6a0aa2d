"""
Script 01: Build node and county networks.

Constructs the undirected rail node graph and its county projection from the
rail line CSV, and saves adjacency tables, GraphML and a summary.
"""
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from railnet.utils.config import apply_overrides, build_arg_parser, load_config
from railnet.utils.logging import get_script_logger
from railnet.utils.paths import get_project_root, get_results_dir
from railnet.utils.manifests import create_run_manifest
from railnet.io.load_data import load_from_config
from railnet.networks.rail_network import build_rail_networks


def main():
    """Build node and county networks."""
    args = build_arg_parser("Build rail node and county networks").parse_args()
    config = apply_overrides(load_config(args.config), args)

    project_root = get_project_root()
    results_dir = get_results_dir(config)
    logger = get_script_logger("01_build_networks", results_dir, level=args.loglevel)

    logger.info("="*80)
    logger.info("SCRIPT 01: BUILD RAIL NETWORKS")
    logger.info("="*80)

    networks_dir = results_dir / "networks"
    output_nodes = networks_dir / "node_adjacency.parquet"
    output_counties = networks_dir / "county_adjacency.parquet"

    if output_nodes.exists() and not config.get("outputs", {}).get("overwrite", False):
        logger.warning(f"Output already exists: {output_nodes}")
        logger.warning("Set config.outputs.overwrite=true to regenerate")
        logger.info("Skipping (idempotent behavior)")
        sys.exit(0)

    logger.info("Loading edge records")
    try:
        records = load_from_config(config, project_root)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Could not load rail data: {e}")
        sys.exit(1)

    logger.info("Building networks")
    summary = build_rail_networks(records, config, results_dir)

    data_path = Path(config["data"]["path"])
    if not data_path.is_absolute():
        data_path = project_root / data_path

    create_run_manifest(
        script_name="01_build_networks",
        config=config,
        input_files=[data_path],
        output_files=[
            output_nodes,
            output_counties,
            networks_dir / "node_graph.graphml",
            networks_dir / "county_graph.graphml",
            results_dir / "logs" / "rail_network_summary.json"
        ],
        metadata=summary,
        manifest_path=results_dir / "logs" / "01_build_networks_manifest.json"
    )

    logger.info("="*80)
    logger.info("Network construction complete!")
    for level in ("node", "county"):
        level_summary = summary[level]
        n = level_summary["n_nodes"]
        lcc = level_summary["lcc_size"]
        pct = 100 * lcc / n if n else 0.0
        logger.info(f"{level.title()}s: {n}, edges: {level_summary['n_edges']}, LCC: {lcc} ({pct:.1f}%)")
    logger.info("="*80)


if __name__ == "__main__":
    main()
