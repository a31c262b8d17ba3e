# -*- coding: utf-8 -*-
"""Abstract controllability model and the edge classes it reports."""

from abc import ABC, abstractmethod
from enum import Enum

from netctrl.errors import NoGraphError


class EdgeClass(Enum):
    """Role of an edge with respect to the driver node configuration."""

    ORDINARY = "ordinary"
    REDUNDANT = "redundant"
    CRITICAL = "critical"
    DISTINGUISHED = "distinguished"

    def __str__(self):
        return self.value


class ControllabilityModel(ABC):
    """
    Superclass of controllability models.

    A model operates on a graph and, optionally, on a subset of target nodes
    that have to be controlled. ``calculate()`` finds the driver nodes and
    control paths; the remaining methods query the result of the last call.
    """

    def __init__(self, graph=None, targets=None):
        self._graph = graph
        self._targets = None if targets is None else list(targets)
        self._driver_nodes = []
        self._control_paths = []

    @property
    def graph(self):
        return self._graph

    @property
    def targets(self):
        return self._targets

    def set_graph(self, graph):
        """Attaches the model to a new graph and forgets previous results."""
        self._graph = graph
        self._clear()

    def set_targets(self, targets):
        """Restricts control to the given nodes; None means all nodes."""
        self._targets = None if targets is None else list(targets)
        self._clear()

    def _clear(self):
        self._driver_nodes = []
        self._control_paths = []

    def _require_graph(self):
        if self._graph is None:
            raise NoGraphError()
        return self._graph

    @abstractmethod
    def calculate(self):
        """Calculates the set of driver nodes and control paths."""

    @abstractmethod
    def clone(self):
        """Returns an uncomputed model with the same graph and settings."""

    def driver_nodes(self):
        """Returns the driver nodes found by the last calculation."""
        return list(self._driver_nodes)

    def control_paths(self):
        """Returns the control paths found by the last calculation."""
        return list(self._control_paths)

    def controllability(self):
        """Fraction of nodes that act as driver nodes."""
        graph = self._require_graph()
        if graph.node_count == 0:
            return 0.0
        return len(self._driver_nodes) / graph.node_count

    def edge_classes(self):
        """Returns an EdgeClass for every edge, or an empty list."""
        return []

    def changes_in_driver_nodes_after_edge_removal(self):
        """
        Returns, for every edge, the change in the number of driver nodes if
        that edge alone was removed, or an empty list if the model cannot
        tell.
        """
        return []

    def supports_edge_classes(self):
        return False
