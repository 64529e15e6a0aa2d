"""
Rail node network construction.

Builds the undirected node-level graph from edge records and persists node
and county adjacency tables for the downstream analysis scripts.
"""
import polars as pl
from pathlib import Path
from typing import Dict, Any, Iterable, List
import logging

from railnet.networks.adjacency import AdjacencyGraph, EdgeRecord
from railnet.networks.county_network import (
    build_county_adjacency,
    find_county_conflicts,
)
from railnet.networks.igraph_helpers import (
    adjacency_to_igraph,
    get_graph_summary,
    save_graph,
)


logger = logging.getLogger(__name__)


def build_node_adjacency(records: Iterable[EdgeRecord]) -> AdjacencyGraph:
    """
    Build the node graph from edge records.

    Each record appends `to_node` to `from_node`'s neighbors and `from_node`
    to `to_node`'s neighbors, in record order. Nothing is deduplicated and
    self-loops are kept, so a record with from == to lists the node twice in
    its own neighbors.

    Args:
        records: Edge records in file order

    Returns:
        Node-level AdjacencyGraph
    """
    adjacency: Dict[str, List[str]] = {}
    n_records = 0
    for record in records:
        u, v = record.from_node, record.to_node
        adjacency.setdefault(u, []).append(v)
        adjacency.setdefault(v, []).append(u)
        n_records += 1

    graph = AdjacencyGraph(adjacency)
    logger.info(f"Built node graph: {len(graph)} nodes from {n_records} records")
    return graph


def adjacency_to_frame(graph: AdjacencyGraph) -> pl.DataFrame:
    """
    Flatten a graph into one row per neighbor entry.

    Entities without neighbors get a single row with a null neighbor so that
    the table round-trips through `adjacency_from_frame`.

    Args:
        graph: Graph to flatten

    Returns:
        DataFrame with columns: entity, neighbor
    """
    entities: List[str] = []
    neighbors: List[Any] = []
    for entity, entity_neighbors in graph.items():
        if not entity_neighbors:
            entities.append(entity)
            neighbors.append(None)
            continue
        for neighbor in entity_neighbors:
            entities.append(entity)
            neighbors.append(neighbor)

    return pl.DataFrame(
        {"entity": entities, "neighbor": neighbors},
        schema={"entity": pl.Utf8, "neighbor": pl.Utf8},
    )


def adjacency_from_frame(df: pl.DataFrame) -> AdjacencyGraph:
    """
    Rebuild a graph from an (entity, neighbor) table, keeping row order.

    Args:
        df: DataFrame with columns: entity, neighbor

    Returns:
        AdjacencyGraph
    """
    missing = {"entity", "neighbor"} - set(df.columns)
    if missing:
        raise ValueError(f"Adjacency table is missing columns: {sorted(missing)}")

    adjacency: Dict[str, List[str]] = {}
    for entity, neighbor in df.select(["entity", "neighbor"]).iter_rows():
        entry = adjacency.setdefault(entity, [])
        if neighbor is not None:
            entry.append(neighbor)
    return AdjacencyGraph(adjacency)


def load_adjacency(path: Path) -> AdjacencyGraph:
    """Load a graph written by `build_rail_networks`."""
    df = pl.read_parquet(path)
    graph = adjacency_from_frame(df)
    logger.info(f"Loaded {graph} from {path}")
    return graph


def build_rail_networks(
    records: List[EdgeRecord],
    config: Dict[str, Any],
    output_dir: Path
) -> Dict[str, Any]:
    """
    Build node and county networks and save outputs.

    Args:
        records: Edge records in file order
        config: Configuration dictionary
        output_dir: Output directory for results

    Returns:
        Dictionary with network summary statistics for both levels
    """
    network_config = config.get("networks", {})
    policy = network_config.get("county_policy", "last")

    node_graph = build_node_adjacency(records)
    county_graph = build_county_adjacency(records, node_graph, policy=policy)
    conflicts = find_county_conflicts(records)
    if conflicts:
        logger.warning(
            f"{len(conflicts)} nodes carry more than one county code; "
            f"resolved with policy '{policy}'"
        )

    networks_dir = output_dir / "networks"
    networks_dir.mkdir(parents=True, exist_ok=True)

    node_path = networks_dir / "node_adjacency.parquet"
    county_path = networks_dir / "county_adjacency.parquet"
    adjacency_to_frame(node_graph).write_parquet(node_path)
    adjacency_to_frame(county_graph).write_parquet(county_path)
    logger.info(f"Saved node adjacency to {node_path}")
    logger.info(f"Saved county adjacency to {county_path}")

    summary: Dict[str, Any] = {
        "n_records": len(records),
        "county_policy": policy,
        "n_county_conflicts": len(conflicts),
    }
    for level, graph in (("node", node_graph), ("county", county_graph)):
        g = adjacency_to_igraph(graph)
        summary[level] = get_graph_summary(g)
        if network_config.get("export_graphml", True):
            save_graph(g, networks_dir / f"{level}_graph.graphml", format="graphml")

    from railnet.utils.manifests import save_json
    summary_path = output_dir / "logs" / "rail_network_summary.json"
    save_json(summary, summary_path)

    logger.info(
        f"Node network: {summary['node']['n_nodes']} nodes, "
        f"LCC {summary['node']['lcc_size']}"
    )
    logger.info(
        f"County network: {summary['county']['n_nodes']} counties, "
        f"LCC {summary['county']['lcc_size']}"
    )

    return summary
