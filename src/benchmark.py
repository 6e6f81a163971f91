import statistics
import time
from typing import Dict, Optional, Tuple

from graph_db import GraphDB
from router import find_route


def time_route(graph: GraphDB,
               start: Tuple[float, float],
               goal: Tuple[float, float],
               repeats: int = 30,
               heuristic: Optional[str] = None) -> Dict[str, float]:
    """Latency of repeated routing between two (lon, lat) points, in ms."""
    if repeats < 1:
        raise ValueError("repeats must be at least 1")
    times = []
    for _ in range(repeats):
        t0 = time.perf_counter()
        find_route(graph, start[0], start[1], goal[0], goal[1], heuristic=heuristic)
        t1 = time.perf_counter()
        times.append((t1 - t0) * 1000)
    times.sort()
    return {
        "mean_ms": statistics.mean(times),
        "median_ms": statistics.median(times),
        "p95_ms": times[max(0, int(0.95 * len(times)) - 1)],
        "min_ms": times[0],
        "max_ms": times[-1],
    }
