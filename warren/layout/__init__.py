"""Public layout engine interface.

Generates reproducible, fully connected layouts of rectangular rooms on a
bounded grid: BSP partitioning, adjacency, pruning, door placement,
connectivity verification with retry/reseed, and wall synthesis.
"""

from .config import LayoutConfig, resolve_config
from .doors import Door
from .errors import ConfigurationError, GenerationFailedError, LayoutError, LayoutInvariantError
from .grid import DOOR, EMPTY, ROOM, WALL, GridNode
from .partition import HORIZONTAL, VERTICAL, Region
from .pipeline import AttemptOutcome, Layout, LayoutGenerator, generate_layout
from .rooms import Room
from .walls import WallSegment

__all__ = [
    "LayoutConfig",
    "resolve_config",
    "Layout",
    "LayoutGenerator",
    "AttemptOutcome",
    "generate_layout",
    "Region",
    "Room",
    "Door",
    "WallSegment",
    "GridNode",
    "LayoutError",
    "ConfigurationError",
    "GenerationFailedError",
    "LayoutInvariantError",
    "HORIZONTAL",
    "VERTICAL",
    "EMPTY",
    "ROOM",
    "WALL",
    "DOOR",
]
