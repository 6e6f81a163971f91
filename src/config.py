import os
from typing import Dict, Tuple

BASE_DIR = os.path.dirname(os.path.abspath(__file__))

DATA_DIR = os.getenv('ROADROUTE_DATA_DIR', os.path.join(BASE_DIR, 'data'))


# Mean radius used by OSM tooling for edge lengths; both units share it
EARTH_RADIUS_M = 6371009.0
METERS_PER_MILE = 1609.344
EARTH_RADIUS_MI = EARTH_RADIUS_M / METERS_PER_MILE


SEARCH_SETTINGS = {
    'epsilon': 1e-9,  # Tolerance for floating point comparisons
    'length_slack_m': 0.001,  # OSM lengths may be rounded to the millimetre
    'heuristic': 'auto',  # auto | distance | zero
    'timeout': None,  # seconds per search, None = unbounded
}

HEURISTIC_MODES = ('auto', 'distance', 'zero')

# Relative bearing limits in degrees, inclusive
NAVIGATION_SETTINGS = {
    'straight_max': 15.0,
    'slight_max': 30.0,
    'turn_max': 100.0,
}

QUERY_SETTINGS = {
    'coverage_margin_deg': 0.01,
}

VISUALIZATION_SETTINGS = {
    'dpi': 150,
    'figsize': (8, 8),
    'node_size': 6,
    'node_color': 'blue',
    'edge_color': 'gray',
    'edge_linewidth': 0.5,
    'route_node_size': 25,
    'route_node_color': 'red',
    'route_edge_color': 'red',
    'route_edge_width': 2.0,
}

DEFAULT_GRAPH_FILENAME = "graph.pkl"


def get_graph_path(filename: str = DEFAULT_GRAPH_FILENAME) -> str:
    """
    Get full path for a graph file in the data directory.

    Args:
        filename: Name of the graph file (.pkl or .graphml)

    Returns:
        Full path to the graph file
    """
    return os.path.join(DATA_DIR, filename)


def expand_bounds(bounds: Tuple[float, float, float, float],
                  margin: float) -> Dict[str, float]:
    """Grow a (west, south, east, north) box by margin degrees on each side."""
    west, south, east, north = bounds
    return {
        'west': west - margin,
        'south': south - margin,
        'east': east + margin,
        'north': north + margin,
    }


# Enable debug mode (can be overridden by environment variable)
DEBUG = os.getenv('DEBUG', 'False').lower() in ('true', '1', 'yes')

# Verbose logging
VERBOSE = os.getenv('VERBOSE', 'False').lower() in ('true', '1', 'yes')


__version__ = "1.0.0"
