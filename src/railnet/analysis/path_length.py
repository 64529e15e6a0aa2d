"""
Average shortest path length (ASPL) for unweighted graphs.

Distances are edge counts found by breadth-first search from every entity.
Pairs that cannot reach each other are left out of both the distance total
and the pair count, so disconnected graphs still get a value as long as at
least one pair is connected.
"""

import logging
import math
from collections import deque
from dataclasses import dataclass
from typing import Dict, Optional

from railnet.networks.adjacency import AdjacencyGraph

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AsplResult:
    """
    ASPL together with the totals it was computed from.

    `value` is None when no ordered pair of distinct entities is connected
    (empty graph, single entity, or only isolated entities). Check
    `is_defined` before using or displaying the value.
    """
    total_distance: int
    reachable_pairs: int

    @property
    def is_defined(self) -> bool:
        return self.reachable_pairs > 0

    @property
    def value(self) -> Optional[float]:
        if not self.is_defined:
            return None
        return self.total_distance / self.reachable_pairs

    def as_float(self) -> float:
        """The ASPL, or NaN when undefined."""
        value = self.value
        return math.nan if value is None else value


def bfs_distances(graph: AdjacencyGraph, source: str) -> Dict[str, int]:
    """
    Edge-count distance from `source` to every entity it can reach.

    The source itself is included at distance 0.
    """
    distances = {source: 0}
    queue = deque([source])
    while queue:
        entity = queue.popleft()
        next_distance = distances[entity] + 1
        for neighbor in graph.neighbors(entity):
            if neighbor not in distances:
                distances[neighbor] = next_distance
                queue.append(neighbor)
    return distances


def average_shortest_path_length(graph: AdjacencyGraph) -> AsplResult:
    """
    Mean shortest-path length over all ordered pairs of connected entities.

    Parameters
    ----------
    graph : AdjacencyGraph
        Node or county graph

    Returns
    -------
    AsplResult
        Totals and the ASPL (undefined when no pair is connected)
    """
    total_distance = 0
    reachable_pairs = 0
    for source in graph.entities:
        distances = bfs_distances(graph, source)
        total_distance += sum(distances.values())
        reachable_pairs += len(distances) - 1

    result = AsplResult(total_distance=total_distance, reachable_pairs=reachable_pairs)
    if result.is_defined:
        logger.info(f"ASPL over {len(graph)} entities: {result.value:.3f} ({reachable_pairs} pairs)")
    else:
        logger.warning(f"ASPL undefined for graph with {len(graph)} entities: no connected pairs")
    return result


def aspl_with_removal(graph: AdjacencyGraph, entity: str) -> AsplResult:
    """ASPL of `graph` after removing `entity` and its edges."""
    if entity not in graph:
        logger.warning(f"Entity {entity!r} not in graph; ASPL computed on the full graph")
    return average_shortest_path_length(graph.remove(entity))
