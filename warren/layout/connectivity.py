"""Graph reachability checks used for pruning and final acceptance."""
from __future__ import annotations
from collections import deque
from typing import List, Optional, Set

from .adjacency import Graph


def reachable_from(graph: Graph, start: int) -> Set[int]:
    if start not in graph:
        return set()
    q = deque([start])
    visited = {start}
    while q:
        cur = q.popleft()
        for nxt in sorted(graph[cur]):
            if nxt not in visited:
                visited.add(nxt)
                q.append(nxt)
    return visited


def _start_node(graph: Graph) -> Optional[int]:
    # Room ids follow canonical order, so the lowest id is the first room
    return min(graph) if graph else None


def is_connected(graph: Graph) -> bool:
    start = _start_node(graph)
    if start is None:
        return True
    return len(reachable_from(graph, start)) == len(graph)


def unreachable(graph: Graph) -> List[int]:
    start = _start_node(graph)
    if start is None:
        return []
    seen = reachable_from(graph, start)
    return sorted(n for n in graph if n not in seen)


__all__ = ["reachable_from", "is_connected", "unreachable"]
