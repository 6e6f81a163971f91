"""
Load an already-built road graph from disk into an AdjacencyGraph.

Supported files:
    *.graphml          GraphML written by OSM tooling (read with osmnx)
    *.pkl / *.pickle   a pickled networkx graph, or the tables written by save_graph

Usage:
    from load_map import load_graph
    graph = load_graph("data/graph.pkl")
"""

import logging
import os
import pickle
import time

import networkx as nx

from graph_db import AdjacencyGraph, Edge, Node

logger = logging.getLogger(__name__)

PICKLE_EXTENSIONS = ('.pkl', '.pickle')
GRAPHML_EXTENSIONS = ('.graphml',)


def _load_graphml(path: str) -> AdjacencyGraph:
    import osmnx as ox

    G = ox.load_graphml(path)
    return AdjacencyGraph.from_networkx(G)


def _load_pickle(path: str) -> AdjacencyGraph:
    with open(path, 'rb') as f:
        data = pickle.load(f)

    if isinstance(data, nx.Graph):
        return AdjacencyGraph.from_networkx(data)
    if isinstance(data, dict) and 'nodes' in data and 'edges' in data:
        nodes = [Node(*row) for row in data['nodes']]
        edges = [Edge(*row) for row in data['edges']]
        return AdjacencyGraph.from_edges(nodes, edges, directed=data.get('directed', False))
    raise ValueError(f"{path}: unrecognised graph pickle of type {type(data).__name__}")


def load_graph(path: str) -> AdjacencyGraph:
    """Load a graph file, choosing the reader from its extension."""
    if not os.path.exists(path):
        raise FileNotFoundError(path)

    ext = os.path.splitext(path)[1].lower()
    start_time = time.perf_counter()
    if ext in GRAPHML_EXTENSIONS:
        graph = _load_graphml(path)
    elif ext in PICKLE_EXTENSIONS:
        graph = _load_pickle(path)
    else:
        raise ValueError(f"unsupported graph file extension {ext!r}: {path}")

    elapsed = time.perf_counter() - start_time
    logger.info("loaded %s in %.2fs: %d nodes, %d edges",
                path, elapsed, len(graph), graph.edge_count())
    return graph


def save_graph(graph: AdjacencyGraph, path: str) -> str:
    """Pickle the node and edge tables of graph so load_graph can rebuild it."""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    data = {
        'nodes': [(n.id, n.lon, n.lat) for n in graph.nodes()],
        'edges': [(e.u, e.v, e.weight, e.name) for e in graph.edges()],
        'directed': graph.directed,
    }
    with open(path, 'wb') as f:
        pickle.dump(data, f, protocol=pickle.HIGHEST_PROTOCOL)
    logger.info("saved %d nodes to %s", len(graph), path)
    return path
