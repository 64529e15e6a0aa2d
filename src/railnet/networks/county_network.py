"""
County network projection.

Derives a node -> county mapping from the edge records and projects the node
graph onto counties. Two counties are adjacent when at least one node edge
joins a node of one to a node of the other.
"""
import logging
from typing import Dict, Iterable, List

from railnet.networks.adjacency import AdjacencyGraph, EdgeRecord


logger = logging.getLogger(__name__)

COUNTY_POLICIES = ("last", "first")


def build_node_to_county(
    records: Iterable[EdgeRecord],
    policy: str = "last"
) -> Dict[str, str]:
    """
    Map each node to its county using the `from_node` side of each record.

    Records with an empty county field are ignored. When a node is listed
    with several counties, `policy` decides: "last" keeps the value of the
    latest record, "first" keeps the earliest one.

    Args:
        records: Edge records in file order
        policy: Conflict policy, "last" or "first"

    Returns:
        Dict mapping node id to county id
    """
    if policy not in COUNTY_POLICIES:
        raise ValueError(f"Unknown county policy: {policy} (expected one of {COUNTY_POLICIES})")

    node_to_county: Dict[str, str] = {}
    for record in records:
        if not record.county_fips:
            continue
        if policy == "first" and record.from_node in node_to_county:
            continue
        node_to_county[record.from_node] = record.county_fips

    logger.info(f"Mapped {len(node_to_county)} nodes to counties (policy={policy})")
    return node_to_county


def find_county_conflicts(records: Iterable[EdgeRecord]) -> Dict[str, List[str]]:
    """
    Find nodes that were assigned more than one distinct county.

    Returns:
        Dict mapping node id to its distinct counties, in first-seen order
    """
    seen: Dict[str, List[str]] = {}
    for record in records:
        if not record.county_fips:
            continue
        counties = seen.setdefault(record.from_node, [])
        if record.county_fips not in counties:
            counties.append(record.county_fips)
    return {node: counties for node, counties in seen.items() if len(counties) > 1}


def project_to_counties(
    node_graph: AdjacencyGraph,
    node_to_county: Dict[str, str]
) -> AdjacencyGraph:
    """
    Project a node graph onto counties.

    Nodes without a county are skipped on either side of an edge and
    same-county edges are dropped, so the result has no self-loops. Neighbor
    lists are sorted and deduplicated.

    Args:
        node_graph: Node-level graph
        node_to_county: Node -> county mapping

    Returns:
        County-level AdjacencyGraph
    """
    county_adjacency: Dict[str, set] = {}
    for node, neighbors in node_graph.items():
        county = node_to_county.get(node)
        if county is None:
            continue
        for neighbor in neighbors:
            neighbor_county = node_to_county.get(neighbor)
            if neighbor_county is None or neighbor_county == county:
                continue
            county_adjacency.setdefault(county, set()).add(neighbor_county)

    graph = AdjacencyGraph({
        county: sorted(neighbors) for county, neighbors in county_adjacency.items()
    })
    logger.info(f"Projected {len(node_graph)} nodes onto {len(graph)} counties")
    return graph


def build_county_adjacency(
    records: List[EdgeRecord],
    node_graph: AdjacencyGraph,
    policy: str = "last"
) -> AdjacencyGraph:
    """
    Build the county graph from the same records that built `node_graph`.

    Args:
        records: Edge records in file order
        node_graph: Node graph built from `records`
        policy: Node -> county conflict policy

    Returns:
        County-level AdjacencyGraph
    """
    node_to_county = build_node_to_county(records, policy=policy)
    return project_to_counties(node_graph, node_to_county)
