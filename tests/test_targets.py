"""Tests for vertex set specifications."""
import pytest

from netctrl.errors import VertexSetSpecParseError
from netctrl.graph import Graph
from netctrl.targets import VertexSetSpecParser, parse_targets


class TestStructuralProperties:
    @pytest.mark.parametrize("spec, expected", [
        ("degree:1", [0]),
        ("outdegree:-1", [1]),
        ("indegree:-1", [0]),
        ("degree:50%", [0, 1]),
        ("degree:0", []),
    ])
    def test_star(self, star_graph, spec, expected):
        assert parse_targets(star_graph, spec) == expected

    def test_betweenness(self):
        g = Graph(3, [(0, 1), (1, 2)])
        assert parse_targets(g, "betweenness:1") == [1]

    def test_property_values(self, star_graph):
        parser = VertexSetSpecParser(star_graph)
        assert parser.property_values("outdegree").tolist() == [3.0, 0.0, 0.0, 0.0]
        with pytest.raises(ValueError):
            parser.property_values("closeness")


class TestNodeNames:
    def test_names(self, star_graph):
        assert parse_targets(star_graph, "a,c") == [1, 3]
        assert parse_targets(star_graph, " hub , b ") == [0, 2]

    def test_default_names_are_indices(self, path_graph):
        assert parse_targets(path_graph, "3,1") == [1, 3]


class TestErrors:
    @pytest.mark.parametrize("spec", ["foo:3", "degree:1.5", "a,x", ""])
    def test_unparseable(self, star_graph, spec):
        with pytest.raises(VertexSetSpecParseError):
            parse_targets(star_graph, spec)


class TestPercentages:
    @pytest.fixture
    def ten_node_path(self):
        return Graph(10, [(i, i + 1) for i in range(9)])

    @pytest.mark.parametrize("spec, expected", [
        ("degree:25%", [1, 2, 3]),
        ("degree:5%", [1]),
        ("degree:-25%", [0, 9, 1]),
    ])
    def test_halves_round_away_from_zero(self, ten_node_path, spec, expected):
        assert parse_targets(ten_node_path, spec) == sorted(expected)
