"""Cell-level walkability lookup for grid pathfinders.

Room cells are floor. A wall unit edge blocks the cell addressed by it
((line, row) for vertical walls, (column, line) for horizontal ones), and a
door re-opens its cell even where a wall would block it. Only cells inside
the layout bounds are reported.
"""
from __future__ import annotations
from typing import TYPE_CHECKING, Dict, Tuple

from .partition import VERTICAL

if TYPE_CHECKING:
    from .pipeline import Layout

EMPTY = 'empty'
ROOM = 'room'
WALL = 'wall'
DOOR = 'door'

Coord2D = Tuple[int, int]


class GridNode:
    __slots__ = ('pos', 'world_pos', 'walkable', 'kind')

    def __init__(self, pos: Coord2D, kind: str):
        self.pos = pos
        self.world_pos = (pos[0] + 0.5, pos[1] + 0.5)
        self.kind = kind
        self.walkable = kind in (ROOM, DOOR)

    def __repr__(self):
        return f"GridNode(pos={self.pos}, kind={self.kind!r})"


def _edge_cell(orientation: str, line: int, offset: int) -> Coord2D:
    return (line, offset) if orientation == VERTICAL else (offset, line)


def build_walkability_grid(layout: "Layout") -> Dict[Coord2D, GridNode]:
    grid: Dict[Coord2D, GridNode] = {}
    for room in layout.rooms:
        for cell in room.cells():
            grid[cell] = GridNode(cell, ROOM)
    bounds = layout.bounds
    for seg in layout.walls:
        for off in range(seg.start, seg.end):
            cell = _edge_cell(seg.orientation, seg.fixed, off)
            # Far-edge walls address cells past the grid; those are dropped
            if bounds.contains(*cell):
                grid[cell] = GridNode(cell, WALL)
    for door in layout.doors:
        cell = (door.x, door.y)
        grid[cell] = GridNode(cell, DOOR)
    return grid


__all__ = ["GridNode", "build_walkability_grid", "EMPTY", "ROOM", "WALL", "DOOR"]
