"""Room adjacency graph.

Two rooms are adjacent when an edge of one lies on the same grid line as the
opposite edge of the other and the spans along that line overlap by a
positive length. Every pair is compared directly; layouts hold tens of rooms
so a spatial index would not pay for itself.
"""
from __future__ import annotations
from typing import Dict, List, NamedTuple, Optional, Set

from .partition import HORIZONTAL, VERTICAL
from .rooms import Room

Graph = Dict[int, Set[int]]


class SharedEdge(NamedTuple):
    orientation: str  # VERTICAL: rooms side by side; HORIZONTAL: stacked
    line: int
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start


def shared_edge(a: Room, b: Room) -> Optional[SharedEdge]:
    if a.x2 == b.x or b.x2 == a.x:
        lo, hi = max(a.y, b.y), min(a.y2, b.y2)
        if lo < hi:
            return SharedEdge(VERTICAL, b.x if a.x2 == b.x else a.x, lo, hi)
    if a.y2 == b.y or b.y2 == a.y:
        lo, hi = max(a.x, b.x), min(a.x2, b.x2)
        if lo < hi:
            return SharedEdge(HORIZONTAL, b.y if a.y2 == b.y else a.y, lo, hi)
    return None


def build_adjacency_graph(rooms: List[Room]) -> Graph:
    graph: Graph = {r.id: set() for r in rooms}
    for i, a in enumerate(rooms):
        for b in rooms[i + 1:]:
            if shared_edge(a, b) is not None:
                graph[a.id].add(b.id)
                graph[b.id].add(a.id)
    assert is_symmetric(graph), "adjacency graph is not symmetric"
    return graph


def is_symmetric(graph: Graph) -> bool:
    return all(a in graph.get(b, ()) for a, nbrs in graph.items() for b in nbrs)


def edge_count(graph: Graph) -> int:
    return sum(len(n) for n in graph.values()) // 2


def edges(graph: Graph) -> List[tuple]:
    """Each undirected edge once as (low id, high id), sorted."""
    return sorted((a, b) for a, nbrs in graph.items() for b in nbrs if a < b)


__all__ = ["Graph", "SharedEdge", "shared_edge", "build_adjacency_graph", "is_symmetric", "edge_count", "edges"]
