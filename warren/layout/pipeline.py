"""Pipeline orchestration for layout generation.

Each attempt runs partition -> rooms -> adjacency -> prune -> doors and then
verifies that the door graph connects every room. Failed attempts retry on
the same RNG stream (so attempt 2 differs from attempt 1 but stays
reproducible); after ``max_attempts`` failures the generator draws a fresh
seed and starts counting again. ``LayoutConfig.attempt_ceiling`` bounds the whole loop.
"""
from __future__ import annotations
import logging
import random
import time
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Iterator, List, Optional

from .adjacency import Graph, build_adjacency_graph, edge_count, edges
from .config import LayoutConfig
from .connectivity import is_connected
from .doors import Door, materialize_doors
from .errors import GenerationFailedError
from .grid import EMPTY, GridNode, build_walkability_grid
from .metrics import init_metrics
from .partition import Region, partition
from .pruning import prune_rooms, removal_count
from .rooms import Room, rooms_from_tree
from .walls import WallSegment, synthesize_walls

logger = logging.getLogger(__name__)

ACCEPTED = 'accepted'
RETRYING = 'retrying'
RESEEDING = 'reseeding'


@dataclass
class Layout:
    config: LayoutConfig
    seed: int
    final_seed: int
    attempts: int
    total_attempts: int
    reseeds: int
    rooms: List[Room]
    adjacency: Graph
    door_graph: Graph
    doors: List[Door]
    walls: List[WallSegment]
    pruned: bool
    metrics: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self._grid: Optional[Dict[tuple, GridNode]] = None

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def bounds(self) -> Region:
        return Region(0, 0, self.width, self.height)

    def room(self, room_id: int) -> Room:
        for r in self.rooms:
            if r.id == room_id:
                return r
        raise KeyError(room_id)

    def room_at(self, x: int, y: int) -> Optional[Room]:
        for r in self.rooms:
            if r.contains(x, y):
                return r
        return None

    def connections(self) -> List[tuple]:
        return edges(self.door_graph)

    @property
    def grid(self) -> Dict[tuple, GridNode]:
        if self._grid is None:
            self._grid = build_walkability_grid(self)
        return self._grid

    def cell_kind(self, x: int, y: int) -> str:
        node = self.grid.get((x, y))
        return node.kind if node else EMPTY

    def is_walkable(self, x: int, y: int) -> bool:
        node = self.grid.get((x, y))
        return bool(node and node.walkable)

    def to_dict(self):
        return {
            'width': self.width,
            'height': self.height,
            'seed': self.seed,
            'final_seed': self.final_seed,
            'attempts': self.attempts,
            'total_attempts': self.total_attempts,
            'reseeds': self.reseeds,
            'pruned': self.pruned,
            'rooms': [r.to_dict() for r in self.rooms],
            'connections': [list(e) for e in self.connections()],
            'doors': [d.to_dict() for d in self.doors],
            'walls': [w.to_dict() for w in self.walls],
            'metrics': self.metrics,
        }


@dataclass
class AttemptOutcome:
    state: str
    attempt: int
    total_attempts: int
    seed: int
    rooms: int
    doors: int
    connected: bool
    pruned: bool
    layout: Optional[Layout] = None


def _default_reseed() -> int:
    return random.SystemRandom().randint(1, 1_000_000)


class LayoutGenerator:
    def __init__(self, config: Optional[LayoutConfig] = None, reseed: Optional[Callable[[], int]] = None):
        self.config = (config or LayoutConfig()).with_seed().validate()
        self.reseed = reseed or _default_reseed
        self.metrics: Dict[str, Any] = init_metrics() if self.config.enable_metrics else {}

    def _phase(self, label, fn, *a, **k):
        if not self.config.enable_metrics:
            return fn(*a, **k)
        ps = time.perf_counter(); r = fn(*a, **k); pe = time.perf_counter()
        phase_times = self.metrics['phase_ms']
        phase_times[label] = phase_times.get(label, 0.0) + round((pe - ps) * 1000, 3)
        return r

    def _count(self, key, n=1):
        if self.config.enable_metrics:
            self.metrics[key] += n

    def _attempt(self, rng: random.Random):
        cfg = self.config
        root = self._phase('partition', partition, Region(0, 0, cfg.width, cfg.height), cfg.min_room_size, rng)
        rooms = self._phase('rooms', rooms_from_tree, root)
        graph = self._phase('adjacency', build_adjacency_graph, rooms)
        result = self._phase('prune', prune_rooms, rooms, graph, cfg.percent_rooms_to_remove)
        if cfg.enable_metrics:
            self.metrics['rooms_initial'] = len(rooms)
            self.metrics['rooms_pruned'] = result.removed
        if not result.pruned and removal_count(len(rooms), cfg.percent_rooms_to_remove):
            self._count('prune_rejected')
        door_graph, doors = self._phase('doors', materialize_doors, result.rooms, result.graph, rng)
        return result, door_graph, doors

    def iter_attempts(self) -> Iterator[AttemptOutcome]:
        """Run attempts until one connects, yielding an outcome after each.

        Stopping the iteration abandons generation between attempts. The last
        outcome of a successful run is ACCEPTED and carries the Layout.
        """
        cfg = self.config
        # Each run reports into its own dict; layouts already returned keep theirs
        self.metrics = init_metrics() if cfg.enable_metrics else {}
        seed = cfg.seed
        rng = random.Random(seed)
        attempt, total, reseeds = 1, 0, 0
        started = time.perf_counter()
        while True:
            if total >= cfg.attempt_ceiling:
                logger.warning(
                    "layout generation gave up seed=%s attempts=%s reseeds=%s", cfg.seed, total, reseeds
                )
                raise GenerationFailedError(total, reseeds, seed)
            total += 1
            self._count('attempts')
            result, door_graph, doors = self._attempt(rng)
            connected = self._phase('verify', is_connected, door_graph)
            ran, ran_seed = attempt, seed
            if connected:
                walls = self._phase('walls', synthesize_walls, result.rooms, doors)
                if cfg.enable_metrics:
                    adj = edge_count(result.graph)
                    self.metrics['adjacencies'] = adj
                    self.metrics['adjacencies_without_door'] = adj - len(doors)
                    self.metrics['doors_placed'] = len(doors)
                    self.metrics['wall_segments'] = len(walls)
                    self.metrics['runtime_ms'] = round((time.perf_counter() - started) * 1000, 3)
                layout = Layout(
                    config=cfg,
                    seed=cfg.seed,
                    final_seed=seed,
                    attempts=ran,
                    total_attempts=total,
                    reseeds=reseeds,
                    rooms=result.rooms,
                    adjacency=result.graph,
                    door_graph=door_graph,
                    doors=doors,
                    walls=walls,
                    pruned=result.pruned,
                    metrics=self.metrics,
                )
                if cfg.strict:
                    from .debug_checks import check_invariants
                    check_invariants(layout)
                logger.debug(
                    "Layout accepted seed=%s final_seed=%s attempts=%s rooms=%s doors=%s pruned=%s runtime_ms=%s",
                    cfg.seed, seed, total, len(result.rooms), len(doors), result.pruned,
                    self.metrics.get('runtime_ms'),
                )
                yield AttemptOutcome(ACCEPTED, ran, total, ran_seed, len(result.rooms), len(doors), True,
                                     result.pruned, layout)
                return
            attempt += 1
            state = RETRYING
            if attempt > cfg.max_attempts:
                seed = self.reseed()
                rng = random.Random(seed)
                attempt = 1
                reseeds += 1
                self._count('reseeds')
                state = RESEEDING
                logger.info("Layout reseeded seed=%s -> %s after %s attempts", ran_seed, seed, cfg.max_attempts)
            yield AttemptOutcome(state, ran, total, ran_seed, len(result.rooms), len(doors), False, result.pruned)

    def generate(self) -> Layout:
        outcome = None
        for outcome in self.iter_attempts():
            pass
        return outcome.layout


def generate_layout(config: Optional[LayoutConfig] = None, **overrides) -> Layout:
    """Generate one connected layout; keyword overrides are applied on top of ``config``."""
    if overrides:
        config = replace(config or LayoutConfig(), **overrides)
    return LayoutGenerator(config).generate()


__all__ = [
    "Layout",
    "AttemptOutcome",
    "LayoutGenerator",
    "generate_layout",
    "ACCEPTED",
    "RETRYING",
    "RESEEDING",
]
