from dataclasses import dataclass
from typing import Iterator, List, Tuple

from .partition import HORIZONTAL, VERTICAL, PartitionNode


@dataclass(frozen=True)
class Room:
    id: int
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

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    def cells(self) -> Iterator[Tuple[int, int]]:
        for ix in range(self.x, self.x2):
            for iy in range(self.y, self.y2):
                yield ix, iy

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.x2 and self.y <= y < self.y2

    def boundary_edges(self) -> Iterator[Tuple[str, int, int]]:
        """Yield (orientation, fixed line, offset) for every unit edge of the outline.

        Vertical edges sit on the lines x and x2, one per row; horizontal edges
        on the lines y and y2, one per column.
        """
        for line in (self.x, self.x2):
            for iy in range(self.y, self.y2):
                yield VERTICAL, line, iy
        for line in (self.y, self.y2):
            for ix in range(self.x, self.x2):
                yield HORIZONTAL, line, ix

    def to_dict(self):
        return {'id': self.id, 'x': self.x, 'y': self.y, 'width': self.width, 'height': self.height}


def canonical_key(r) -> Tuple[int, int]:
    # Top row first (descending top edge), then left to right
    return (-(r.y + r.height), r.x)


def rooms_from_tree(root: PartitionNode) -> List[Room]:
    """Turn every leaf into a Room, ordered canonically with sequential ids."""
    leaves = sorted((n.region for n in root.leaves()), key=canonical_key)
    return [Room(i, r.x, r.y, r.width, r.height) for i, r in enumerate(leaves)]


__all__ = ["Room", "rooms_from_tree", "canonical_key"]
