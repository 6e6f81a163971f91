# visualize_map.py
from typing import List, Optional

import matplotlib.pyplot as plt
import networkx as nx

from config import VISUALIZATION_SETTINGS
from graph_db import AdjacencyGraph


def plot_route(graph: AdjacencyGraph, route: List[int], filepath: Optional[str] = None):
    """Draw the whole graph and highlight route on top of it."""
    s = VISUALIZATION_SETTINGS
    G = graph.to_networkx()
    pos = {n: (data['x'], data['y']) for n, data in G.nodes(data=True)}

    fig, ax = plt.subplots(figsize=s['figsize'])
    nx.draw_networkx_nodes(G, pos=pos, ax=ax, node_size=s['node_size'], node_color=s['node_color'])
    nx.draw_networkx_edges(G, pos=pos, ax=ax, width=s['edge_linewidth'], edge_color=s['edge_color'])
    if route:
        nx.draw_networkx_nodes(G, pos=pos, ax=ax, nodelist=route,
                               node_size=s['route_node_size'], node_color=s['route_node_color'])
    if route and len(route) >= 2:
        route_edges = list(zip(route[:-1], route[1:]))
        nx.draw_networkx_edges(G, pos=pos, ax=ax, edgelist=route_edges,
                               width=s['route_edge_width'], edge_color=s['route_edge_color'])
    ax.set_xlabel("longitude")
    ax.set_ylabel("latitude")

    if filepath:
        fig.savefig(filepath, dpi=s['dpi'])
        plt.close(fig)
    else:
        plt.show()
    return fig
