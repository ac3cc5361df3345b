import random

from warren.layout import HORIZONTAL, VERTICAL, Room
from warren.layout.adjacency import build_adjacency_graph, edge_count, edges, is_symmetric, shared_edge
from warren.layout.partition import Region, partition
from warren.layout.rooms import canonical_key, rooms_from_tree

from tests.layout_test_utils import line_of_rooms


def test_rooms_have_sequential_ids_in_canonical_order():
    root = partition(Region(0, 0, 50, 50), 6, random.Random(1337))
    rooms = rooms_from_tree(root)
    assert [r.id for r in rooms] == list(range(len(rooms)))
    keys = [canonical_key(r) for r in rooms]
    assert keys == sorted(keys)
    # Top row first: the first room touches the top edge of the grid
    assert rooms[0].y2 == 50
    assert rooms[0].x == 0


def test_room_geometry_helpers():
    r = Room(3, 2, 4, 5, 3)
    assert (r.x2, r.y2, r.area) == (7, 7, 15)
    assert r.center == (4.5, 5.5)
    assert r.contains(2, 4) and r.contains(6, 6)
    assert not r.contains(7, 4) and not r.contains(2, 7)
    assert len(list(r.cells())) == 15
    assert r.to_dict() == {'id': 3, 'x': 2, 'y': 4, 'width': 5, 'height': 3}


def test_boundary_edges_count_is_perimeter():
    r = Room(0, 0, 0, 4, 3)
    edges_ = list(r.boundary_edges())
    assert len(edges_) == 2 * (4 + 3)
    assert (VERTICAL, 0, 0) in edges_ and (VERTICAL, 4, 2) in edges_
    assert (HORIZONTAL, 0, 3) in edges_ and (HORIZONTAL, 3, 0) in edges_


def test_side_by_side_rooms_share_vertical_edge():
    a, b = line_of_rooms(10, 10)
    edge = shared_edge(a, b)
    assert edge.orientation == VERTICAL
    assert (edge.line, edge.start, edge.end, edge.length) == (10, 0, 10, 10)
    assert shared_edge(b, a) == edge


def test_stacked_rooms_share_horizontal_edge():
    a = Room(0, 0, 0, 10, 6)
    b = Room(1, 4, 6, 10, 6)
    edge = shared_edge(a, b)
    assert edge.orientation == HORIZONTAL
    assert (edge.line, edge.start, edge.end) == (6, 4, 10)


def test_corner_touch_is_not_adjacency():
    a = Room(0, 0, 0, 10, 10)
    b = Room(1, 10, 10, 10, 10)
    assert shared_edge(a, b) is None
    graph = build_adjacency_graph([a, b])
    assert graph == {0: set(), 1: set()}


def test_separated_rooms_are_not_adjacent():
    a = Room(0, 0, 0, 5, 5)
    b = Room(1, 6, 0, 5, 5)
    assert shared_edge(a, b) is None


def test_adjacency_graph_line():
    rooms = line_of_rooms(10, 3, 3, 10)
    graph = build_adjacency_graph(rooms)
    assert graph == {0: {1}, 1: {0, 2}, 2: {1, 3}, 3: {2}}
    assert edge_count(graph) == 3
    assert edges(graph) == [(0, 1), (1, 2), (2, 3)]


def test_partition_adjacency_symmetric_and_non_overlapping():
    for seed in (11, 22, 33):
        rooms = rooms_from_tree(partition(Region(0, 0, 50, 50), 6, random.Random(seed)))
        graph = build_adjacency_graph(rooms)
        assert set(graph) == {r.id for r in rooms}
        assert is_symmetric(graph)
        for a in rooms:
            assert a.id not in graph[a.id]
            for b in rooms:
                if b.id in graph[a.id]:
                    assert shared_edge(a, b) is not None


def test_is_symmetric_detects_one_way_edge():
    assert not is_symmetric({0: {1}, 1: set()})
