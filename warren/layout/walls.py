"""Wall geometry derived from room outlines.

Every room boundary edge is a wall unless a door occupies it. An edge shared
by two touching rooms is one physical wall and is emitted once. Remaining
unit edges are merged into maximal runs per grid line.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, List, Set, Tuple

from .doors import Door
from .rooms import Room

Edge = Tuple[str, int, int]


@dataclass(frozen=True)
class WallSegment:
    start: int
    end: int
    fixed: int
    orientation: str

    @property
    def length(self) -> int:
        return self.end - self.start

    def covers(self, orientation: str, line: int, offset: int) -> bool:
        return orientation == self.orientation and line == self.fixed and self.start <= offset < self.end

    def to_dict(self):
        return {
            'start': self.start,
            'end': self.end,
            'fixed': self.fixed,
            'orientation': self.orientation,
            'length': self.length,
        }


def wall_edges(rooms: Iterable[Room], doors: Iterable[Door]) -> Set[Edge]:
    edges: Set[Edge] = set()
    for room in rooms:
        edges.update(room.boundary_edges())
    edges.difference_update(d.edge for d in doors)
    return edges


def synthesize_walls(rooms: List[Room], doors: List[Door]) -> List[WallSegment]:
    lines: Dict[Tuple[str, int], List[int]] = {}
    for orientation, line, offset in wall_edges(rooms, doors):
        lines.setdefault((orientation, line), []).append(offset)
    segments: List[WallSegment] = []
    for (orientation, line), offsets in sorted(lines.items()):
        offsets.sort()
        run_start = prev = offsets[0]
        for off in offsets[1:] + [None]:
            if off is not None and off == prev + 1:
                prev = off
                continue
            segments.append(WallSegment(run_start, prev + 1, line, orientation))
            if off is not None:
                run_start = prev = off
    return segments


__all__ = ["WallSegment", "synthesize_walls", "wall_edges"]
