# tests/conftest.py
import random

import matplotlib

matplotlib.use("Agg")

import pytest

from calcDist import haversine_mi
from graph_db import AdjacencyGraph, Edge, Node

# Small offsets around one campus-sized area
LON0, LAT0 = -122.2600, 37.8700
STEP = 0.001


def grid_graph(rows=5, cols=5, directed=False):
    """rows x cols lattice, ids r*cols+c, weights = great-circle length."""
    nodes = [Node(r * cols + c, LON0 + c * STEP, LAT0 + r * STEP)
             for r in range(rows) for c in range(cols)]
    edges = []
    for r in range(rows):
        for c in range(cols):
            nid = r * cols + c
            if c + 1 < cols:
                edges.append(Edge(nid, nid + 1))
            if r + 1 < rows:
                edges.append(Edge(nid, nid + cols))
    return AdjacencyGraph.from_edges(nodes, edges, directed=directed)


def random_graph(seed, n=25, extra_edges=40, admissible=True):
    rng = random.Random(seed)
    nodes = [Node(i, LON0 + rng.uniform(0, 0.02), LAT0 + rng.uniform(0, 0.02)) for i in range(n)]
    pairs = set()
    while len(pairs) < extra_edges:
        u, v = rng.sample(range(n), 2)
        pairs.add((min(u, v), max(u, v)))
    edges = []
    for u, v in sorted(pairs):
        straight = haversine_mi(nodes[u].lon, nodes[u].lat, nodes[v].lon, nodes[v].lat)
        if admissible:
            w = straight * rng.uniform(1.0, 2.0)
        else:
            w = rng.uniform(0.0001, 2.0)
        edges.append(Edge(u, v, w))
    return AdjacencyGraph.from_edges(nodes, edges)


@pytest.fixture
def diamond():
    """A-B=1, B-C=1, A-C=3, C-D=1 with A..D = 1..4."""
    nodes = [
        Node(1, LON0, LAT0),
        Node(2, LON0 + STEP, LAT0 + STEP),
        Node(3, LON0 + 2 * STEP, LAT0),
        Node(4, LON0 + 3 * STEP, LAT0),
    ]
    edges = [Edge(1, 2, 1.0), Edge(2, 3, 1.0), Edge(1, 3, 3.0), Edge(3, 4, 1.0)]
    return AdjacencyGraph.from_edges(nodes, edges)


@pytest.fixture
def grid():
    return grid_graph()


@pytest.fixture
def islands():
    """Two components: 1-2-3 and 10-11."""
    nodes = [
        Node(1, LON0, LAT0),
        Node(2, LON0 + STEP, LAT0),
        Node(3, LON0 + 2 * STEP, LAT0),
        Node(10, LON0, LAT0 + 5 * STEP),
        Node(11, LON0 + STEP, LAT0 + 5 * STEP),
    ]
    edges = [Edge(1, 2), Edge(2, 3), Edge(10, 11)]
    return AdjacencyGraph.from_edges(nodes, edges)


@pytest.fixture
def streets():
    """
    North along Oak St (1 -> 2 -> 3), then east along Elm St (3 -> 4 -> 5),
    then back south-west on an unnamed lane (5 -> 6).
    """
    nodes = [
        Node(1, LON0, LAT0),
        Node(2, LON0, LAT0 + STEP),
        Node(3, LON0, LAT0 + 2 * STEP),
        Node(4, LON0 + STEP, LAT0 + 2 * STEP),
        Node(5, LON0 + 2 * STEP, LAT0 + 2 * STEP),
        Node(6, LON0 + STEP, LAT0 + STEP),
    ]
    edges = [
        Edge(1, 2, name="Oak St"),
        Edge(2, 3, name="Oak St"),
        Edge(3, 4, name="Elm St"),
        Edge(4, 5, name="Elm St"),
        Edge(5, 6),
    ]
    return AdjacencyGraph.from_edges(nodes, edges)
