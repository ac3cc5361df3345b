"""Binary space partitioning of the layout region.

Leaves are split breadth-first so split order does not bias the size
distribution. A leaf tall enough is always cut across the y axis; only
leaves that are too short for that are considered for a cut across x.
"""
from __future__ import annotations
import random
from collections import deque
from dataclasses import dataclass
from typing import Iterator, Optional

HORIZONTAL = 'horizontal'  # cut across y: children stacked bottom/top
VERTICAL = 'vertical'      # cut across x: children side by side


@dataclass(frozen=True)
class Region:
    x: int
    y: int
    width: int
    height: int

    @property
    def x2(self) -> int:
        return self.x + self.width

    @property
    def y2(self) -> int:
        return self.y + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.x2 and self.y <= y < self.y2

    def intersection_area(self, other: "Region") -> int:
        w = min(self.x2, other.x2) - max(self.x, other.x)
        h = min(self.y2, other.y2) - max(self.y, other.y)
        if w <= 0 or h <= 0:
            return 0
        return w * h


class PartitionNode:
    __slots__ = ('region', 'left', 'right', 'split')

    def __init__(self, region: Region):
        self.region = region
        self.left: Optional[PartitionNode] = None
        self.right: Optional[PartitionNode] = None
        self.split: Optional[str] = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def try_split(self, min_size: int, rng: random.Random) -> bool:
        r = self.region
        if r.height >= min_size * 2:
            if r.height - min_size <= min_size:
                return False
            cut = rng.randrange(min_size, r.height - min_size)
            self.left = PartitionNode(Region(r.x, r.y, r.width, cut))
            self.right = PartitionNode(Region(r.x, r.y + cut, r.width, r.height - cut))
            self.split = HORIZONTAL
        elif r.width >= min_size * 2:
            if r.width - min_size <= min_size:
                return False
            cut = rng.randrange(min_size, r.width - min_size)
            self.left = PartitionNode(Region(r.x, r.y, cut, r.height))
            self.right = PartitionNode(Region(r.x + cut, r.y, r.width - cut, r.height))
            self.split = VERTICAL
        else:
            return False
        assert _tiles(self), f"split of {r} does not tile its region"
        return True

    def walk(self) -> Iterator["PartitionNode"]:
        """Breadth-first traversal of this subtree."""
        q = deque([self])
        while q:
            node = q.popleft()
            yield node
            if node.left is not None:
                q.append(node.left)
            if node.right is not None:
                q.append(node.right)

    def leaves(self) -> Iterator["PartitionNode"]:
        return (n for n in self.walk() if n.is_leaf)


def _tiles(node: PartitionNode) -> bool:
    a, b, p = node.left.region, node.right.region, node.region
    if a.area + b.area != p.area or a.intersection_area(b) != 0:
        return False
    return all(p.intersection_area(c) == c.area for c in (a, b))


def partition(region: Region, min_size: int, rng: random.Random) -> PartitionNode:
    root = PartitionNode(region)
    q = deque([root])
    while q:
        node = q.popleft()
        if node.try_split(min_size, rng):
            q.append(node.left)
            q.append(node.right)
    return root


__all__ = ["Region", "PartitionNode", "partition", "HORIZONTAL", "VERTICAL"]
