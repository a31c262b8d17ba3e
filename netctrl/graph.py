# -*- coding: utf-8 -*-
"""
Graph substrate used by the controllability models.

A thin wrapper around a networkx multigraph that gives every node a stable
0-based index and every edge a stable 0-based id (its insertion order). The
edge id is stored as the multigraph key, so parallel edges stay apart.
"""

from enum import Enum

import networkx as nx


class Mode(Enum):
    """Direction of neighbourhood and degree queries."""

    OUT = "out"
    IN = "in"
    ALL = "all"


class Graph:
    """Directed or undirected multigraph with integer node and edge ids."""

    def __init__(self, n=0, edges=(), directed=True, names=None):
        self.is_directed = bool(directed)
        self._nx = nx.MultiDiGraph() if self.is_directed else nx.MultiGraph()
        self._nx.add_nodes_from(range(n))
        self._edges = []

        if names is None:
            self.names = list(range(n))
        else:
            self.names = list(names)
            if len(self.names) != n:
                raise ValueError(f"expected {n} node names, got {len(self.names)}")

        for u, v in edges:
            self.add_edge(u, v)

    @classmethod
    def from_networkx(cls, g, directed=None):
        """Converts a networkx graph; node labels become node names."""
        if directed is None:
            directed = g.is_directed()
        labels = list(g.nodes())
        index = {label: i for i, label in enumerate(labels)}
        edges = [(index[u], index[v]) for u, v in g.edges()]
        return cls(len(labels), edges, directed=directed, names=labels)

    # ---------------- construction ---------------- #

    def add_edge(self, u, v):
        """Adds an edge between u and v and returns its id."""
        n = self.node_count
        if not (0 <= u < n and 0 <= v < n):
            raise ValueError(f"edge ({u}, {v}) refers to a missing node")
        eid = len(self._edges)
        self._nx.add_edge(u, v, key=eid)
        self._edges.append((u, v))
        return eid

    # ---------------- basic queries ---------------- #

    @property
    def node_count(self):
        return self._nx.number_of_nodes()

    @property
    def edge_count(self):
        return len(self._edges)

    def __len__(self):
        return self.node_count

    def __repr__(self):
        kind = "directed" if self.is_directed else "undirected"
        return f"Graph({kind}, nodes={self.node_count}, edges={self.edge_count})"

    def edge(self, eid):
        """Returns the (source, target) pair of the given edge."""
        return self._edges[eid]

    def edges(self):
        return list(self._edges)

    def get_eid(self, u, v, error=True):
        """
        Returns the lowest id of an edge from u to v.

        For undirected graphs the order of u and v does not matter. When there
        is no such edge, KeyError is raised, or None is returned if error is
        False.
        """
        data = self._nx.get_edge_data(u, v)
        if not data:
            if error:
                raise KeyError(f"no edge between {u} and {v}")
            return None
        return min(data)

    # ---------------- neighbourhood ---------------- #

    def incident(self, v, mode=Mode.OUT):
        """Returns the ids of the edges incident on v, in increasing order."""
        if not self.is_directed:
            return sorted(k for _, _, k in self._nx.edges(v, keys=True))
        if mode is Mode.OUT:
            return sorted(k for _, _, k in self._nx.out_edges(v, keys=True))
        if mode is Mode.IN:
            return sorted(k for _, _, k in self._nx.in_edges(v, keys=True))
        return self.incident(v, Mode.OUT) + self.incident(v, Mode.IN)

    def other_endpoint(self, eid, v):
        u, w = self._edges[eid]
        return w if u == v else u

    def neighbors(self, v, mode=Mode.OUT):
        """
        Returns the neighbours of v along its incident edges.

        Neighbours reachable via several edges are listed several times.
        """
        if not self.is_directed:
            return [self.other_endpoint(eid, v) for eid in self.incident(v)]
        if mode is Mode.OUT:
            return [self._edges[eid][1] for eid in self.incident(v, Mode.OUT)]
        if mode is Mode.IN:
            return [self._edges[eid][0] for eid in self.incident(v, Mode.IN)]
        return self.neighbors(v, Mode.OUT) + self.neighbors(v, Mode.IN)

    def degree(self, v, mode=Mode.ALL):
        """Degree of v; self-loops count twice in Mode.ALL."""
        if not self.is_directed:
            return self._nx.degree(v)
        if mode is Mode.OUT:
            return self._nx.out_degree(v)
        if mode is Mode.IN:
            return self._nx.in_degree(v)
        return self._nx.degree(v)

    def degrees(self, mode=Mode.ALL):
        return [self.degree(v, mode) for v in range(self.node_count)]

    # ---------------- structure ---------------- #

    def weakly_connected_components(self):
        """
        Returns the component index of each node.

        Components are numbered in the order of their lowest node index.
        """
        if self.is_directed:
            components = nx.weakly_connected_components(self._nx)
        else:
            components = nx.connected_components(self._nx)

        membership = [-1] * self.node_count
        for index, component in enumerate(sorted(components, key=min)):
            for v in component:
                membership[v] = index
        return membership

    def to_networkx(self):
        """
        Returns a copy of the underlying networkx multigraph.

        Nodes carry their name in the "name" attribute; edge keys are edge ids.
        """
        g = self._nx.__class__()
        for v in range(self.node_count):
            g.add_node(v, name=self.names[v])
        for eid, (u, v) in enumerate(self._edges):
            g.add_edge(u, v, key=eid)
        return g

    def index_of_names(self):
        """Returns a mapping from node names (as strings) to node indices."""
        return {str(name): i for i, name in enumerate(self.names)}
