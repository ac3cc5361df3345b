import random

import pytest

from warren.layout.partition import HORIZONTAL, VERTICAL, PartitionNode, Region, partition


def _regions(root):
    return [n.region for n in root.leaves()]


@pytest.mark.parametrize("seed", [0, 1, 7, 42, 1337])
def test_split_children_tile_parent(seed):
    root = partition(Region(0, 0, 50, 50), 6, random.Random(seed))
    for node in root.walk():
        if node.is_leaf:
            continue
        a, b, p = node.left.region, node.right.region, node.region
        assert a.area + b.area == p.area
        assert a.intersection_area(b) == 0
        assert p.intersection_area(a) == a.area and p.intersection_area(b) == b.area


@pytest.mark.parametrize("seed", [3, 99, 2024])
def test_leaves_cover_region_and_respect_min_size(seed):
    region = Region(0, 0, 64, 40)
    leaves = _regions(partition(region, 5, random.Random(seed)))
    assert sum(r.area for r in leaves) == region.area
    for i, a in enumerate(leaves):
        assert a.width >= 5 and a.height >= 5
        for b in leaves[i + 1:]:
            assert a.intersection_area(b) == 0


def test_leaves_are_terminal():
    leaves = _regions(partition(Region(0, 0, 50, 50), 6, random.Random(5)))
    for r in leaves:
        assert r.height <= 12
        if r.height < 12:
            assert r.width <= 12


def test_same_seed_same_tree():
    a = _regions(partition(Region(0, 0, 50, 50), 6, random.Random(1337)))
    b = _regions(partition(Region(0, 0, 50, 50), 6, random.Random(1337)))
    assert a == b


def test_region_too_small_is_single_leaf():
    root = partition(Region(0, 0, 10, 10), 6, random.Random(1))
    assert root.is_leaf
    assert _regions(root) == [Region(0, 0, 10, 10)]


def test_exact_double_min_does_not_split():
    # 12 tall with min 6: cut range [6, 6) is empty so the leaf stays whole
    node = PartitionNode(Region(0, 0, 30, 12))
    assert node.try_split(6, random.Random(0)) is False
    assert node.is_leaf


def test_prefers_horizontal_cut_when_tall_enough():
    node = PartitionNode(Region(0, 0, 40, 20))
    assert node.try_split(6, random.Random(0))
    assert node.split == HORIZONTAL
    assert node.left.region.x == node.right.region.x == 0
    assert node.left.region.width == node.right.region.width == 40
    assert 6 <= node.left.region.height < 14


def test_vertical_cut_when_too_short():
    node = PartitionNode(Region(0, 0, 40, 8))
    assert node.try_split(6, random.Random(0))
    assert node.split == VERTICAL
    assert node.left.region.height == node.right.region.height == 8
    assert node.right.region.x == node.left.region.width
