"""Tests for the Graph substrate."""
import networkx as nx
import pytest

from netctrl.graph import Graph, Mode


class TestConstruction:
    def test_counts(self, path_graph):
        assert path_graph.node_count == 4
        assert path_graph.edge_count == 3
        assert len(path_graph) == 4
        assert path_graph.is_directed

    def test_edge_ids_follow_insertion_order(self, path_graph):
        assert path_graph.edge(0) == (0, 1)
        assert path_graph.edge(2) == (2, 3)
        assert path_graph.add_edge(3, 0) == 3

    def test_edge_to_missing_node_rejected(self):
        with pytest.raises(ValueError):
            Graph(2, [(0, 2)])

    def test_name_count_must_match(self):
        with pytest.raises(ValueError):
            Graph(3, names=["a", "b"])

    def test_default_names_are_indices(self, path_graph):
        assert path_graph.names == [0, 1, 2, 3]
        assert path_graph.index_of_names()["2"] == 2


class TestQueries:
    def test_get_eid(self, path_graph):
        assert path_graph.get_eid(1, 2) == 1
        with pytest.raises(KeyError):
            path_graph.get_eid(2, 1)
        assert path_graph.get_eid(2, 1, error=False) is None

    def test_get_eid_parallel_edges_returns_lowest(self):
        g = Graph(2, [(0, 1), (0, 1)])
        assert g.get_eid(0, 1) == 0
        assert g.incident(0, Mode.OUT) == [0, 1]
        assert g.neighbors(0, Mode.OUT) == [1, 1]

    def test_undirected_lookup_ignores_order(self):
        g = Graph(3, [(0, 1), (1, 2)], directed=False)
        assert g.get_eid(1, 0) == 0
        assert g.incident(1) == [0, 1]
        assert sorted(g.neighbors(1)) == [0, 2]
        assert g.degree(1) == 2

    def test_directed_neighbourhood(self, star_graph):
        assert star_graph.neighbors(0, Mode.OUT) == [1, 2, 3]
        assert star_graph.neighbors(2, Mode.IN) == [0]
        assert star_graph.neighbors(2, Mode.OUT) == []
        assert star_graph.degrees(Mode.OUT) == [3, 0, 0, 0]
        assert star_graph.degrees(Mode.IN) == [0, 1, 1, 1]
        assert star_graph.degrees(Mode.ALL) == [3, 1, 1, 1]

    def test_other_endpoint(self, path_graph):
        assert path_graph.other_endpoint(1, 1) == 2
        assert path_graph.other_endpoint(1, 2) == 1

    def test_self_loop_counts_twice(self):
        g = Graph(1, [(0, 0)])
        assert g.degree(0, Mode.ALL) == 2
        assert g.degree(0, Mode.OUT) == 1


class TestStructure:
    def test_weakly_connected_components(self):
        g = Graph(5, [(3, 4), (1, 0)])
        assert g.weakly_connected_components() == [0, 0, 1, 2, 2]

    def test_to_networkx(self, star_graph):
        g = star_graph.to_networkx()
        assert isinstance(g, nx.MultiDiGraph)
        assert g.nodes[0]["name"] == "hub"
        assert sorted(g.edges(keys=True)) == [(0, 1, 0), (0, 2, 1), (0, 3, 2)]

    def test_from_networkx_uses_labels_as_names(self):
        nxg = nx.DiGraph([("x", "y"), ("y", "z")])
        g = Graph.from_networkx(nxg)
        assert g.names == ["x", "y", "z"]
        assert g.edges() == [(0, 1), (1, 2)]
        assert g.is_directed

    def test_from_networkx_undirected(self):
        g = Graph.from_networkx(nx.path_graph(3))
        assert not g.is_directed
        assert g.edge_count == 2
