from typing import Dict


def init_metrics() -> Dict[str, int | float | dict]:
    return {
        'attempts': 0,
        'reseeds': 0,
        'rooms_initial': 0,
        'rooms_pruned': 0,
        'prune_rejected': 0,
        'adjacencies': 0,
        'adjacencies_without_door': 0,
        'doors_placed': 0,
        'wall_segments': 0,
        'runtime_ms': 0.0,
        'phase_ms': {},
    }
