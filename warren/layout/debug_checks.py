"""Structural diagnostics for generated layouts.

``analyze`` returns every violation grouped by category (empty lists when the
layout is sound); ``check_invariants`` raises on the first non-empty group.
Used by strict mode, the diagnostics script and the test-suite.
"""
from __future__ import annotations
from collections import Counter
from typing import TYPE_CHECKING, Dict, List

from .adjacency import shared_edge
from .connectivity import unreachable
from .errors import LayoutInvariantError
from .partition import VERTICAL
from .walls import wall_edges

if TYPE_CHECKING:
    from .pipeline import Layout

CATEGORIES = (
    'rooms_out_of_bounds',
    'overlapping_rooms',
    'asymmetric_adjacency',
    'asymmetric_door_graph',
    'door_edges_not_adjacent',
    'doors_outside_span',
    'unreachable_rooms',
    'wall_coverage_errors',
    'walls_over_doors',
)


def _asymmetric(graph) -> List[tuple]:
    return sorted((a, b) for a, nbrs in graph.items() for b in nbrs if a not in graph.get(b, ()))


def analyze(layout: "Layout") -> Dict[str, List]:
    res: Dict[str, List] = {k: [] for k in CATEGORIES}
    bounds = layout.bounds
    rooms = layout.rooms
    by_id = {r.id: r for r in rooms}

    for r in rooms:
        if r.width <= 0 or r.height <= 0 or r.x < 0 or r.y < 0 or r.x2 > bounds.x2 or r.y2 > bounds.y2:
            res['rooms_out_of_bounds'].append(r.id)
    for i, a in enumerate(rooms):
        for b in rooms[i + 1:]:
            w = min(a.x2, b.x2) - max(a.x, b.x)
            h = min(a.y2, b.y2) - max(a.y, b.y)
            if w > 0 and h > 0:
                res['overlapping_rooms'].append((a.id, b.id))

    res['asymmetric_adjacency'] = _asymmetric(layout.adjacency)
    res['asymmetric_door_graph'] = _asymmetric(layout.door_graph)
    for a, nbrs in layout.door_graph.items():
        for b in nbrs:
            if a < b and b not in layout.adjacency.get(a, ()):
                res['door_edges_not_adjacent'].append((a, b))

    for door in layout.doors:
        a, b = (by_id.get(i) for i in door.rooms)
        edge = shared_edge(a, b) if a and b else None
        if edge is None or edge.orientation != door.orientation:
            res['doors_outside_span'].append(door.to_dict())
            continue
        line, offset = (door.x, door.y) if edge.orientation == VERTICAL else (door.y, door.x)
        # Strictly inside: the door edge [offset, offset+1) must not touch either end
        if line != edge.line or not (edge.start < offset and offset + 1 < edge.end):
            res['doors_outside_span'].append(door.to_dict())

    res['unreachable_rooms'] = unreachable(layout.door_graph)

    coverage = Counter()
    for seg in layout.walls:
        for off in range(seg.start, seg.end):
            coverage[(seg.orientation, seg.fixed, off)] += 1
    expected = wall_edges(rooms, layout.doors)
    for edge in expected:
        if coverage[edge] != 1:
            res['wall_coverage_errors'].append((edge, coverage[edge]))
    door_edges = {d.edge for d in layout.doors}
    for edge, n in coverage.items():
        if edge in door_edges:
            res['walls_over_doors'].append(edge)
        elif edge not in expected:
            res['wall_coverage_errors'].append((edge, n))
    return res


def check_invariants(layout: "Layout") -> None:
    for category, details in analyze(layout).items():
        if details:
            raise LayoutInvariantError(category, details[:5])


__all__ = ["analyze", "check_invariants", "CATEGORIES"]
