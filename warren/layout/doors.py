"""Door placement along shared room walls.

Only adjacencies with enough clearance receive a door, so the resulting door
graph can be sparser than the adjacency graph it was built from and must be
checked for connectivity again.
"""
from __future__ import annotations
import random
from dataclasses import dataclass
from typing import List, Tuple

from .adjacency import Graph, shared_edge
from .partition import VERTICAL
from .rooms import Room


@dataclass(frozen=True)
class Door:
    x: int
    y: int
    orientation: str
    rooms: Tuple[int, int]

    @property
    def edge(self) -> Tuple[str, int, int]:
        """The boundary unit edge this door replaces, as (orientation, line, offset)."""
        if self.orientation == VERTICAL:
            return (VERTICAL, self.x, self.y)
        return (self.orientation, self.y, self.x)

    @property
    def midpoint(self) -> Tuple[float, float]:
        if self.orientation == VERTICAL:
            return (float(self.x), self.y + 0.5)
        return (self.x + 0.5, float(self.y))

    def to_dict(self):
        return {'x': self.x, 'y': self.y, 'orientation': self.orientation, 'rooms': list(self.rooms)}


def door_span(a: Room, b: Room):
    """Return (edge, lo, hi): door offsets are drawn from [lo, hi); None if no adjacency."""
    edge = shared_edge(a, b)
    if edge is None:
        return None
    # Keep one cell clear of either end of the shared wall
    return edge, edge.start + 1, edge.end - 1


def materialize_doors(rooms: List[Room], graph: Graph, rng: random.Random):
    """Place at most one door per adjacent pair; returns (door_graph, doors)."""
    door_graph: Graph = {r.id: set() for r in rooms}
    doors: List[Door] = []
    for i, a in enumerate(rooms):
        for b in rooms[i + 1:]:
            if b.id not in graph.get(a.id, ()):
                continue
            span = door_span(a, b)
            if span is None:
                continue
            edge, lo, hi = span
            if hi <= lo:
                continue
            offset = rng.randrange(lo, hi)
            if edge.orientation == VERTICAL:
                door = Door(edge.line, offset, edge.orientation, (min(a.id, b.id), max(a.id, b.id)))
            else:
                door = Door(offset, edge.line, edge.orientation, (min(a.id, b.id), max(a.id, b.id)))
            doors.append(door)
            door_graph[a.id].add(b.id)
            door_graph[b.id].add(a.id)
    return door_graph, doors


__all__ = ["Door", "door_span", "materialize_doors"]
