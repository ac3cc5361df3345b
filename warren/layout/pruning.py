"""Connectivity-preserving removal of the smallest rooms.

One candidate is tried: the N smallest rooms by area (ties keep canonical
order). The candidate is accepted only if the remaining rooms still form a
connected adjacency graph; otherwise the input is returned untouched. No
alternative subsets are searched.
"""
from __future__ import annotations
import logging
from typing import List, NamedTuple

from .adjacency import Graph, build_adjacency_graph
from .connectivity import is_connected
from .rooms import Room

logger = logging.getLogger(__name__)


class PruneResult(NamedTuple):
    rooms: List[Room]
    graph: Graph
    pruned: bool
    removed: int = 0


def removal_count(room_count: int, percent: float) -> int:
    """Number of rooms the prune budget asks for; at least one room always survives."""
    count = int(room_count * percent / 100)
    return max(0, min(count, room_count - 1))


def prune_rooms(rooms: List[Room], graph: Graph, percent: float) -> PruneResult:
    count = removal_count(len(rooms), percent)
    if count == 0:
        return PruneResult(rooms, graph, False)
    by_area = sorted(rooms, key=lambda r: r.area)  # stable: ties stay in canonical order
    dropped = {r.id for r in by_area[:count]}
    kept = [r for r in rooms if r.id not in dropped]
    kept_graph = build_adjacency_graph(kept)
    if not is_connected(kept_graph):
        logger.debug("prune rejected: removing %s of %s rooms disconnects the layout", count, len(rooms))
        return PruneResult(rooms, graph, False)
    return PruneResult(kept, kept_graph, True, count)


__all__ = ["PruneResult", "prune_rooms", "removal_count"]
