# router.py
"""
Shortest paths between two coordinates on a road graph.

The search is A* with lazy deletion: improved nodes are pushed again instead
of having their heap key decreased, and stale entries are dropped when popped
because their node is already settled. Every call builds its own
SearchContext, so one graph can serve any number of concurrent searches.
"""

import heapq
import logging
import math
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Set, Tuple

from config import HEURISTIC_MODES, SEARCH_SETTINGS
from errors import GraphInconsistencyError
from graph_db import GraphDB

logger = logging.getLogger(__name__)

NO_PARENT = -1

# timeout default: fall back to SEARCH_SETTINGS; None means unbounded
DEFAULT_TIMEOUT = object()


class RouteStatus(Enum):
    FOUND = "found"
    NO_PATH = "no_path"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class SearchNode:
    """One fringe entry. parent is an index into SearchContext.arena."""
    node_id: int
    parent: int
    priority: float


@dataclass
class SearchContext:
    """All mutable state of a single search."""
    graph: GraphDB
    end: int
    edge_cost: Callable[[int, int], float]
    heuristic: Callable[[int], float]
    best: Dict[int, float] = field(default_factory=dict)
    settled: Set[int] = field(default_factory=set)
    # (priority, arena index); the index also breaks ties in push order
    fringe: List[Tuple[float, int]] = field(default_factory=list)
    arena: List[SearchNode] = field(default_factory=list)


@dataclass
class RouteResult:
    path: List[int]
    cost: float
    status: RouteStatus
    start: int
    end: int
    expanded: int = 0

    @property
    def found(self) -> bool:
        return self.status is RouteStatus.FOUND


def edge_cost_fn(graph: GraphDB) -> Callable[[int, int], float]:
    """Edge weights come from graph.weight when offered, else graph.distance."""
    weight = getattr(graph, 'weight', None)
    return weight if callable(weight) else graph.distance


def heuristic_fn(graph: GraphDB, end: int, mode: Optional[str] = None) -> Callable[[int], float]:
    """
    Pick the remaining-cost estimate for a search towards end.

    'distance' always uses graph.distance(w, end), 'zero' never does, and
    'auto' uses it only when the graph reports that no edge is shorter than
    the straight line between its endpoints. Without that guarantee the
    estimate could overshoot and A* would lose optimality, so the search
    runs as plain Dijkstra instead.
    """
    mode = mode or SEARCH_SETTINGS['heuristic']
    if mode not in HEURISTIC_MODES:
        raise ValueError(f"unknown heuristic mode {mode!r}, expected one of {HEURISTIC_MODES}")

    admissible = bool(getattr(graph, 'heuristic_admissible', False))
    if mode == 'distance' and not admissible:
        logger.warning("distance heuristic forced on a graph not known to be admissible")
    if mode == 'zero' or (mode == 'auto' and not admissible):
        return lambda node_id: 0.0
    return lambda node_id: graph.distance(node_id, end)


def push(ctx: SearchContext, node_id: int, parent: int, priority: float) -> int:
    index = len(ctx.arena)
    ctx.arena.append(SearchNode(node_id, parent, priority))
    heapq.heappush(ctx.fringe, (priority, index))
    return index


def pop(ctx: SearchContext) -> int:
    _, index = heapq.heappop(ctx.fringe)
    return index


def relax(ctx: SearchContext, index: int) -> None:
    """Settle arena[index] and push every neighbour whose best distance improves."""
    v = ctx.arena[index].node_id
    ctx.settled.add(v)
    g = ctx.best[v]
    for w in ctx.graph.adjacent(v):
        cost = ctx.edge_cost(v, w)
        # also rejects NaN
        if not cost >= 0:
            raise GraphInconsistencyError(f"edge {v}->{w} has invalid cost {cost!r}")
        candidate = g + cost
        if candidate < ctx.best.get(w, math.inf):
            ctx.best[w] = candidate
            push(ctx, w, index, candidate + ctx.heuristic(w))


def reconstruct(ctx: SearchContext, index: int) -> List[int]:
    path = []
    while index != NO_PARENT:
        node = ctx.arena[index]
        path.append(node.node_id)
        index = node.parent
    path.reverse()
    return path


def _interrupted(deadline: Optional[float], cancel_event: Optional[threading.Event]) -> bool:
    if cancel_event is not None and cancel_event.is_set():
        return True
    return deadline is not None and time.monotonic() >= deadline


def search(graph: GraphDB,
           start: int,
           end: int,
           heuristic: Optional[str] = None,
           timeout=DEFAULT_TIMEOUT,
           cancel_event: Optional[threading.Event] = None) -> RouteResult:
    """Best-first search between two node ids."""
    if timeout is DEFAULT_TIMEOUT:
        timeout = SEARCH_SETTINGS['timeout']
    deadline = None if timeout is None else time.monotonic() + timeout

    ctx = SearchContext(graph=graph,
                        end=end,
                        edge_cost=edge_cost_fn(graph),
                        heuristic=heuristic_fn(graph, end, heuristic))
    ctx.best[start] = 0.0
    push(ctx, start, NO_PARENT, 0.0)
    logger.debug("search %s -> %s started", start, end)

    while ctx.fringe:
        if _interrupted(deadline, cancel_event):
            logger.info("search %s -> %s cancelled after %d expansions",
                        start, end, len(ctx.settled))
            return RouteResult([], math.inf, RouteStatus.CANCELLED, start, end, len(ctx.settled))

        index = pop(ctx)
        node_id = ctx.arena[index].node_id
        if node_id == end:
            path = reconstruct(ctx, index)
            logger.debug("search %s -> %s found %d nodes, cost %.6f, %d expansions",
                         start, end, len(path), ctx.best[end], len(ctx.settled))
            return RouteResult(path, ctx.best[end], RouteStatus.FOUND, start, end, len(ctx.settled))
        if node_id in ctx.settled:
            continue
        relax(ctx, index)

    logger.info("no route from %s to %s (%d nodes reachable)", start, end, len(ctx.settled))
    return RouteResult([], math.inf, RouteStatus.NO_PATH, start, end, len(ctx.settled))


def find_route(graph: GraphDB,
               start_lon: float,
               start_lat: float,
               dest_lon: float,
               dest_lat: float,
               heuristic: Optional[str] = None,
               timeout=DEFAULT_TIMEOUT,
               cancel_event: Optional[threading.Event] = None) -> RouteResult:
    """Route between the graph nodes closest to two lon/lat coordinates."""
    start = graph.closest(start_lon, start_lat)
    end = graph.closest(dest_lon, dest_lat)
    return search(graph, start, end,
                  heuristic=heuristic, timeout=timeout, cancel_event=cancel_event)


def shortest_path(graph: GraphDB,
                  start_lon: float,
                  start_lat: float,
                  dest_lon: float,
                  dest_lat: float) -> List[int]:
    """
    Return the node ids of a shortest path between the nodes closest to the
    start and destination coordinates, or an empty list when none exists.
    """
    return find_route(graph, start_lon, start_lat, dest_lon, dest_lat).path


def path_cost(graph: GraphDB, path: List[int]) -> float:
    """Sum of edge costs along path; every consecutive pair must be adjacent."""
    cost_of = edge_cost_fn(graph)
    total = 0.0
    for u, v in zip(path, path[1:]):
        if v not in graph.adjacent(u):
            raise GraphInconsistencyError(f"{u} and {v} are not adjacent")
        total += cost_of(u, v)
    return total
