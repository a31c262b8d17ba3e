"""Shared test fixtures for the netctrl tests."""
import pytest

from netctrl.graph import Graph


@pytest.fixture
def path_graph():
    """0 -> 1 -> 2 -> 3"""
    return Graph(4, [(0, 1), (1, 2), (2, 3)])


@pytest.fixture
def cycle_graph():
    """0 -> 1 -> 2 -> 0"""
    return Graph(3, [(0, 1), (1, 2), (2, 0)])


@pytest.fixture
def star_graph():
    """Out-star: 0 -> 1, 0 -> 2, 0 -> 3."""
    return Graph(4, [(0, 1), (0, 2), (0, 3)], names=["hub", "a", "b", "c"])


@pytest.fixture
def two_cycles_graph():
    """Node 0 feeds two 2-cycles: 1 <-> 2 and 3 <-> 4."""
    return Graph(5, [(0, 1), (0, 3), (1, 2), (2, 1), (3, 4), (4, 3)])


@pytest.fixture
def edge_list_file(tmp_path):
    """Edge list file of the path graph 0 -> 1 -> 2 -> 3."""
    path = tmp_path / "path.txt"
    path.write_text("0 1\n1 2\n2 3\n")
    return path


@pytest.fixture
def cycle_file(tmp_path):
    path = tmp_path / "cycle.txt"
    path.write_text("0 1\n1 2\n2 0\n")
    return path
