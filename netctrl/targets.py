# -*- coding: utf-8 -*-
"""
Parser for vertex set specifications, used to select target nodes.

A specification is either

  prop:num     the |num| nodes with the highest (num > 0) or lowest
               (num < 0) value of a structural property
  prop:num%    the same, with num taken as a percentage of the node count
  a,b,c        a comma-separated list of node names

where prop is one of degree, indegree, outdegree or betweenness.
"""

import math
import re

import networkx as nx
import numpy as np

from netctrl.errors import VertexSetSpecParseError
from netctrl.graph import Mode

STRUCTURAL_PROPERTIES = ("degree", "indegree", "outdegree", "betweenness")

_PROPERTY_SPEC = re.compile(r"^(?P<prop>[a-z]+):(?P<num>[-+]?\d+(?:\.\d*)?)(?P<pct>%?)$")


def _round_half_away(x):
    return int(math.copysign(math.floor(abs(x) + 0.5), x))


class VertexSetSpecParser:
    """Interprets vertex set specifications in the context of a graph."""

    def __init__(self, graph):
        self.graph = graph
        self._name_index = None

    def parse(self, spec):
        """Returns the sorted list of node indices matching the specification."""
        spec = spec.strip()
        result = self._parse_structural_property(spec)
        if result is None:
            result = self._parse_node_names(spec)
        if result is None:
            raise VertexSetSpecParseError(spec)
        return sorted(result)

    def property_values(self, prop):
        graph = self.graph
        if prop == "degree":
            return np.array(graph.degrees(Mode.ALL), dtype=float)
        if prop == "indegree":
            return np.array(graph.degrees(Mode.IN), dtype=float)
        if prop == "outdegree":
            return np.array(graph.degrees(Mode.OUT), dtype=float)
        if prop == "betweenness":
            scores = nx.betweenness_centrality(graph.to_networkx(), normalized=False)
            return np.array([scores[v] for v in range(graph.node_count)], dtype=float)
        raise ValueError(f"unknown structural property: {prop}")

    def _parse_structural_property(self, spec):
        match = _PROPERTY_SPEC.match(spec)
        if match is None or match.group("prop") not in STRUCTURAL_PROPERTIES:
            return None

        number = float(match.group("num"))
        if match.group("pct"):
            # halves are rounded away from zero
            count = _round_half_away(number / 100.0 * self.graph.node_count)
        elif number.is_integer():
            count = int(number)
        else:
            return None

        values = self.property_values(match.group("prop"))
        # stable sort so that ties are resolved towards lower node indices
        if count >= 0:
            order = np.argsort(-values, kind="stable")
        else:
            order = np.argsort(values, kind="stable")
        return set(int(v) for v in order[:abs(count)])

    def _parse_node_names(self, spec):
        if self._name_index is None:
            self._name_index = self.graph.index_of_names()

        result = set()
        for item in spec.split(","):
            index = self._name_index.get(item.strip())
            if index is None:
                return None
            result.add(index)
        return result


def parse_targets(graph, spec):
    """Shortcut for VertexSetSpecParser(graph).parse(spec)."""
    return VertexSetSpecParser(graph).parse(spec)
