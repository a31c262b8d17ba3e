# -*- coding: utf-8 -*-
"""Drawing of an analysed network: driver nodes and edge classes."""

import matplotlib
matplotlib.use("Agg")  # no GUI, files only
import matplotlib.pyplot as plt
import networkx as nx

EDGE_COLORS = {
    "ordinary": "#999999",
    "redundant": "#1f77b4",
    "critical": "#d62728",
    "distinguished": "#2ca02c",
}
DRIVER_COLOR = "#ff7f0e"
NODE_COLOR = "#c7c7c7"


def draw_controllability(graph, driver_nodes, edge_classes, path, seed=42,
                         with_labels=None, dpi=300):
    """
    Saves a drawing of the graph to the given path.

    Driver nodes are highlighted; edges are coloured by their class when
    edge_classes is not empty.
    """
    # parallel edges are drawn once, coloured by the lowest edge id
    g = nx.DiGraph() if graph.is_directed else nx.Graph()
    g.add_nodes_from(range(graph.node_count))
    g.add_edges_from(graph.edges())
    drivers = set(driver_nodes)

    if with_labels is None:
        with_labels = graph.node_count <= 50

    node_colors = [DRIVER_COLOR if v in drivers else NODE_COLOR for v in g.nodes()]
    edge_list = list(g.edges())
    if edge_classes:
        edge_colors = [EDGE_COLORS[str(edge_classes[graph.get_eid(u, v)])]
                       for u, v in edge_list]
    else:
        edge_colors = EDGE_COLORS["ordinary"]

    pos = nx.spring_layout(g, seed=seed)
    fig = plt.figure(figsize=(10, 10))
    nx.draw_networkx_nodes(g, pos, node_color=node_colors,
                           node_size=40 if not with_labels else 300)
    nx.draw_networkx_edges(g, pos, edgelist=edge_list, edge_color=edge_colors,
                           arrows=graph.is_directed)
    if with_labels:
        labels = {v: str(graph.names[v]) for v in g.nodes()}
        nx.draw_networkx_labels(g, pos, labels=labels, font_size=8)

    plt.axis("off")
    plt.tight_layout()
    plt.savefig(path, dpi=dpi)
    plt.close(fig)
    return path
