# graph_db.py
"""
Read-only road network consumed by the router.

GraphDB is the contract the search depends on. AdjacencyGraph is the
in-memory implementation: it is built once from a node table and an edge
list, validated, and never mutated afterwards, so many searches may share it.
"""

import logging
import math
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Protocol, Tuple

import networkx as nx

from calcDist import haversine_mi
from config import METERS_PER_MILE, SEARCH_SETTINGS
from errors import GraphInconsistencyError

logger = logging.getLogger(__name__)


class GraphDB(Protocol):
    """What the router needs from a road graph."""

    def closest(self, lon: float, lat: float) -> int: ...

    def vertices(self) -> Iterable[int]: ...

    def adjacent(self, node_id: int) -> Iterable[int]: ...

    def distance(self, a: int, b: int) -> float: ...

    def lon(self, node_id: int) -> float: ...

    def lat(self, node_id: int) -> float: ...


@dataclass(frozen=True)
class Node:
    """A graph vertex with its WGS84 position."""
    id: int
    lon: float
    lat: float


@dataclass(frozen=True)
class Edge:
    """Input record for AdjacencyGraph; weight None means great-circle length."""
    u: int
    v: int
    weight: Optional[float] = None
    name: Optional[str] = None


class AdjacencyGraph:
    """Immutable adjacency-map graph with great-circle distances in miles."""

    def __init__(self,
                 nodes: Iterable[Node],
                 edges: Iterable[Edge] = (),
                 directed: bool = False):
        self._directed = directed
        self._nodes: Dict[int, Node] = {}
        for node in nodes:
            if math.isnan(node.lon) or math.isnan(node.lat):
                raise GraphInconsistencyError(f"node {node.id} has a NaN coordinate")
            self._nodes[node.id] = node

        # u -> {v: (weight, name)}
        self._adj: Dict[int, Dict[int, Tuple[float, Optional[str]]]] = {nid: {} for nid in self._nodes}
        self._admissible = True
        # admissible when no edge is shorter than its chord, up to rounding slack
        slack = SEARCH_SETTINGS['epsilon'] + SEARCH_SETTINGS['length_slack_m'] / METERS_PER_MILE
        for edge in edges:
            for nid in (edge.u, edge.v):
                if nid not in self._nodes:
                    raise GraphInconsistencyError(
                        f"edge {edge.u}->{edge.v} references unknown node {nid}")
            straight = self.distance(edge.u, edge.v)
            weight = straight if edge.weight is None else float(edge.weight)
            if math.isnan(weight) or weight < 0:
                raise GraphInconsistencyError(
                    f"edge {edge.u}->{edge.v} has invalid weight {edge.weight!r}")
            if weight < straight - slack:
                self._admissible = False
            self._link(edge.u, edge.v, weight, edge.name)
            if not directed:
                self._link(edge.v, edge.u, weight, edge.name)

        logger.debug("graph built: %d nodes, %d edges, admissible=%s",
                     len(self._nodes), self.edge_count(), self._admissible)

    def _link(self, u: int, v: int, weight: float, name: Optional[str]) -> None:
        # parallel edges keep the cheapest one
        old = self._adj[u].get(v)
        if old is None or weight < old[0]:
            self._adj[u][v] = (weight, name if name is not None else (old[1] if old else None))

    def _node(self, node_id: int) -> Node:
        try:
            return self._nodes[node_id]
        except KeyError:
            raise GraphInconsistencyError(f"unknown node id {node_id}") from None

    @classmethod
    def from_edges(cls,
                   nodes: Iterable[Node],
                   edges: Iterable[Edge],
                   directed: bool = False) -> "AdjacencyGraph":
        return cls(nodes, edges, directed=directed)

    @classmethod
    def from_networkx(cls, G) -> "AdjacencyGraph":
        """
        Adapt a networkx graph laid out the way OSM tooling lays it out.

        Nodes need 'x' (lon) and 'y' (lat). Edges may carry 'length' in meters
        and 'name' (a string or a list of strings).
        """
        nodes = [Node(id=nid, lon=float(data['x']), lat=float(data['y']))
                 for nid, data in G.nodes(data=True)]
        edges = []
        for u, v, data in G.edges(data=True):
            length = data.get('length')
            weight = None if length is None else float(length) / METERS_PER_MILE
            name = data.get('name')
            if isinstance(name, (list, tuple)):
                name = name[0] if name else None
            edges.append(Edge(u, v, weight, name))
        return cls(nodes, edges, directed=G.is_directed())

    def to_networkx(self) -> nx.Graph:
        """Export as a networkx graph with 'x'/'y' node and 'weight'/'name' edge attributes."""
        G = nx.DiGraph() if self._directed else nx.Graph()
        for n in self._nodes.values():
            G.add_node(n.id, x=n.lon, y=n.lat)
        for e in self.edges():
            G.add_edge(e.u, e.v, weight=e.weight, name=e.name)
        return G

    # ---- GraphDB contract ----

    def closest(self, lon: float, lat: float) -> int:
        if not self._nodes:
            raise ValueError("closest() on an empty graph")
        best = None
        best_d = float('inf')
        for nid, p in self._nodes.items():
            d = haversine_mi(lon, lat, p.lon, p.lat)
            if d < best_d:
                best_d = d
                best = nid
        return best

    def vertices(self) -> List[int]:
        return list(self._nodes)

    def adjacent(self, node_id: int) -> List[int]:
        self._node(node_id)
        return list(self._adj[node_id])

    def distance(self, a: int, b: int) -> float:
        pa, pb = self._node(a), self._node(b)
        return haversine_mi(pa.lon, pa.lat, pb.lon, pb.lat)

    def lon(self, node_id: int) -> float:
        return self._node(node_id).lon

    def lat(self, node_id: int) -> float:
        return self._node(node_id).lat

    # ---- extensions ----

    @property
    def directed(self) -> bool:
        return self._directed

    @property
    def heuristic_admissible(self) -> bool:
        """True when no edge is shorter than the straight line between its ends."""
        return self._admissible

    def weight(self, a: int, b: int) -> float:
        try:
            return self._adj[a][b][0]
        except KeyError:
            raise GraphInconsistencyError(f"no edge {a}->{b}") from None

    def way_name(self, a: int, b: int) -> Optional[str]:
        try:
            return self._adj[a][b][1]
        except KeyError:
            raise GraphInconsistencyError(f"no edge {a}->{b}") from None

    def has_edge(self, a: int, b: int) -> bool:
        return a in self._adj and b in self._adj[a]

    def nodes(self) -> List[Node]:
        return list(self._nodes.values())

    def edges(self) -> Iterator[Edge]:
        """Yield each stored edge once (undirected edges with u listed first)."""
        seen = set()
        for u, targets in self._adj.items():
            for v, (weight, name) in targets.items():
                if not self._directed:
                    if (v, u) in seen:
                        continue
                    seen.add((u, v))
                yield Edge(u, v, weight, name)

    def edge_count(self) -> int:
        total = sum(len(t) for t in self._adj.values())
        if self._directed:
            return total
        loops = sum(1 for u, t in self._adj.items() if u in t)
        return (total + loops) // 2

    def bounds(self) -> Tuple[float, float, float, float]:
        """(west, south, east, north) of all node coordinates."""
        if not self._nodes:
            raise ValueError("bounds() on an empty graph")
        lons = [p.lon for p in self._nodes.values()]
        lats = [p.lat for p in self._nodes.values()]
        return min(lons), min(lats), max(lons), max(lats)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id) -> bool:
        return node_id in self._nodes

    def __repr__(self) -> str:
        kind = "directed" if self._directed else "undirected"
        return f"AdjacencyGraph({len(self)} nodes, {self.edge_count()} edges, {kind})"
