"""
Adjacency-list graph value used by every analysis in the pipeline.

A graph maps an entity id (rail node or county FIPS code) to the list of its
neighbors. Node graphs keep one neighbor entry per incident record, so
duplicates and self-references are preserved; county graphs hold sorted,
deduplicated neighbor lists.

Graphs are treated as immutable values: `remove` returns a new graph and
leaves the original untouched, so several "graph minus one entity" views can
be analyzed independently.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Mapping, Tuple


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EdgeRecord:
    """One track segment as delivered by ingestion."""
    from_node: str
    to_node: str
    county_fips: str = ""


class AdjacencyGraph:
    """
    Undirected adjacency-list graph with a deterministic entity order.

    Entity ids are kept in a sorted index (tuple of ids plus an id -> position
    map). Loops whose result depends on iteration order walk that index
    instead of the underlying dict.
    """

    def __init__(self, adjacency: Mapping[str, Iterable[str]]):
        self._adjacency: Dict[str, Tuple[str, ...]] = {
            entity: tuple(neighbors) for entity, neighbors in adjacency.items()
        }
        self._order: Tuple[str, ...] = tuple(sorted(self._adjacency))
        self._position: Dict[str, int] = {
            entity: idx for idx, entity in enumerate(self._order)
        }

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def entities(self) -> Tuple[str, ...]:
        """Entity ids in ascending order."""
        return self._order

    def position(self, entity: str) -> int:
        """Index of `entity` in the ordered entity index."""
        return self._position[entity]

    def neighbors(self, entity: str) -> Tuple[str, ...]:
        """Neighbors of `entity`; empty for unknown ids."""
        return self._adjacency.get(entity, ())

    def degree(self, entity: str) -> int:
        return len(self.neighbors(entity))

    def items(self) -> Iterator[Tuple[str, Tuple[str, ...]]]:
        """(entity, neighbors) pairs in entity order."""
        for entity in self._order:
            yield entity, self._adjacency[entity]

    def to_dict(self) -> Dict[str, List[str]]:
        return {entity: list(neighbors) for entity, neighbors in self.items()}

    def n_entries(self) -> int:
        """Total number of neighbor entries (twice the edge count)."""
        return sum(len(neighbors) for neighbors in self._adjacency.values())

    def __contains__(self, entity: object) -> bool:
        return entity in self._adjacency

    def __len__(self) -> int:
        return len(self._order)

    def __iter__(self) -> Iterator[str]:
        return iter(self._order)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AdjacencyGraph):
            return NotImplemented
        return self._adjacency == other._adjacency

    def __repr__(self) -> str:
        return f"AdjacencyGraph(entities={len(self)}, entries={self.n_entries()})"

    # ------------------------------------------------------------------
    # Derived graphs
    # ------------------------------------------------------------------

    def remove(self, entity: str) -> "AdjacencyGraph":
        """Return a copy without `entity` as a key or as any neighbor."""
        return remove(entity, self)

    def is_symmetric(self) -> bool:
        """
        Check the undirected invariant: B in neighbors(A) iff A in neighbors(B).

        Membership is compared as multisets, so a node graph with a doubled
        edge must carry the doubled entry on both sides.
        """
        counts: Dict[Tuple[str, str], int] = {}
        for entity, neighbors in self._adjacency.items():
            for neighbor in neighbors:
                key = (entity, neighbor)
                counts[key] = counts.get(key, 0) + 1
        for (entity, neighbor), count in counts.items():
            if counts.get((neighbor, entity), 0) != count:
                return False
        return True


def remove(entity: str, graph: AdjacencyGraph) -> AdjacencyGraph:
    """
    Remove `entity` and every edge incident to it.

    Pure: `graph` is not modified. Removing an id that is not in the graph
    returns a graph equal to the input.
    """
    if entity not in graph:
        logger.debug(f"remove({entity!r}): not in graph, returning copy")
    return AdjacencyGraph({
        key: [n for n in neighbors if n != entity]
        for key, neighbors in graph.items()
        if key != entity
    })
