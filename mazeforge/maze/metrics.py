from typing import Dict


def init_metrics() -> Dict[str, int | float | bool]:
    return {
        'floor_tiles': 0,
        'regions_found': 0,
        'regions_connected': 0,
        'noise_regions': 0,
        'tunnel_cells': 0,
        'pocket_cells_removed': 0,
        'rooms': 0,
        'spawns_relaxed': 0,
        'keys_short': 0,
        'doors_short': 0,
        'doors_fallback': False,
        'runtime_ms': 0.0,
    }
