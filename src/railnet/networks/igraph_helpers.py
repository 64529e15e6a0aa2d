"""
Helper utilities for igraph operations.

Converts adjacency-list graphs into igraph graphs for summaries, cut-vertex
detection and GraphML export.
"""
import igraph as ig
import numpy as np
from collections import Counter
from pathlib import Path
from typing import Dict, List, Tuple, Any
import logging

from railnet.networks.adjacency import AdjacencyGraph


logger = logging.getLogger(__name__)


def adjacency_to_edge_list(graph: AdjacencyGraph) -> List[Tuple[int, int]]:
    """
    Recover the undirected edge list behind an adjacency graph.

    Every edge is listed on both endpoints, so a pair (u, v) with u before v
    in the entity order is emitted once per entry in u's list. A self-loop
    contributes two entries to its own list and is emitted once per pair.

    Args:
        graph: AdjacencyGraph

    Returns:
        List of (source position, target position) tuples
    """
    edges: List[Tuple[int, int]] = []
    for entity, neighbors in graph.items():
        src = graph.position(entity)
        for neighbor, count in sorted(Counter(neighbors).items()):
            if neighbor not in graph:
                continue
            dst = graph.position(neighbor)
            if src < dst:
                edges.extend([(src, dst)] * count)
            elif src == dst:
                edges.extend([(src, dst)] * (count // 2))
    return edges


def adjacency_to_igraph(graph: AdjacencyGraph) -> ig.Graph:
    """
    Build an undirected igraph Graph from an adjacency graph.

    Vertex ids follow the graph's entity order and the entity id is stored in
    the `name` vertex attribute. Parallel edges and self-loops are kept.

    Args:
        graph: AdjacencyGraph

    Returns:
        igraph Graph object
    """
    g = ig.Graph(n=len(graph), edges=adjacency_to_edge_list(graph), directed=False)
    g.vs["name"] = list(graph.entities)

    logger.info(f"Built graph: {g.vcount()} nodes, {g.ecount()} edges, directed=False")

    return g


def get_graph_summary(g: ig.Graph) -> Dict[str, Any]:
    """
    Get summary statistics for a graph.

    Args:
        g: igraph Graph

    Returns:
        Dictionary with graph statistics
    """
    summary: Dict[str, Any] = {
        "n_nodes": g.vcount(),
        "n_edges": g.ecount(),
        "n_self_loops": sum(g.is_loop()),
        "n_multi_edges": sum(g.is_multiple()),
    }

    if g.vcount() == 0:
        summary.update({
            "density": 0.0,
            "n_components": 0,
            "lcc_size": 0,
            "mean_degree": 0.0,
            "max_degree": 0,
            "n_articulation_points": 0,
        })
        return summary

    summary["density"] = g.density()

    components = g.connected_components()
    summary["n_components"] = len(components)
    summary["lcc_size"] = max(components.sizes())

    degrees = np.array(g.degree())
    summary["mean_degree"] = float(degrees.mean())
    summary["max_degree"] = int(degrees.max())

    summary["n_articulation_points"] = len(g.articulation_points())

    return summary


def articulation_points(graph: AdjacencyGraph) -> List[str]:
    """
    Entities whose removal increases the number of connected components.

    Args:
        graph: AdjacencyGraph

    Returns:
        Sorted list of entity ids
    """
    g = adjacency_to_igraph(graph)
    return sorted(g.vs[v]["name"] for v in g.articulation_points())


def save_graph(
    g: ig.Graph,
    output_path: Path,
    format: str = "graphml"
) -> None:
    """
    Save graph to file.

    Args:
        g: igraph Graph
        output_path: Output file path
        format: Format ("graphml", "gml", "edgelist", "pajek")
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)

    if format == "graphml":
        g.write_graphml(str(output_path))
    elif format == "gml":
        g.write_gml(str(output_path))
    elif format == "edgelist":
        g.write_edgelist(str(output_path))
    elif format == "pajek":
        g.write_pajek(str(output_path))
    else:
        raise ValueError(f"Unsupported format: {format}")

    logger.info(f"Saved graph to {output_path}")
