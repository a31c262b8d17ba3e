# -*- coding: utf-8 -*-
"""
Switchboard controllability model.

In the switchboard dynamics every edge carries its own signal, so control is
determined by degree balance instead of matchings. Divergent nodes (more
outgoing than incoming edges) must be driven; so must one node of every
weakly connected component consisting of balanced nodes only. The edges are
decomposed into open walks starting at divergent nodes and closed walks,
and closed walks are merged into the walks they touch.
"""

import logging
from collections import deque
from enum import Enum

from netctrl.errors import NotSupportedError
from netctrl.graph import Mode
from netctrl.model.base import ControllabilityModel, EdgeClass
from netctrl.paths import ClosedWalk, OpenWalk

logger = logging.getLogger(__name__)


class ControllabilityMeasure(Enum):
    """What the switchboard model's controllability() is measured against."""

    NODE = "node"
    EDGE = "edge"


class _WalkState:
    """Remaining degrees and used edges shared by all walks of one run."""

    def __init__(self, graph):
        self.out_degrees = graph.degrees(Mode.OUT)
        self.in_degrees = graph.degrees(Mode.IN)
        self.edge_used = [False] * graph.edge_count


class SwitchboardControllabilityModel(ControllabilityModel):
    """Switchboard controllability model; target nodes are not supported."""

    def __init__(self, graph=None, targets=None, measure=ControllabilityMeasure.NODE):
        super().__init__(graph, targets)
        self._measure = measure

    def clone(self):
        return SwitchboardControllabilityModel(self._graph, self._targets, self._measure)

    def controllability_measure(self):
        return self._measure

    def set_controllability_measure(self, measure):
        self._measure = ControllabilityMeasure(measure)

    def supports_edge_classes(self):
        return True

    def _check_parameters(self):
        if self._targets is not None:
            raise NotSupportedError("switchboard dynamics does not allow "
                                    "restrictions on the set of target nodes")

    # ---------------- calculation ---------------- #

    def calculate(self):
        graph = self._require_graph()
        self._check_parameters()
        self._clear()

        n = graph.node_count
        in_degrees = graph.degrees(Mode.IN)
        out_degrees = graph.degrees(Mode.OUT)

        def is_balanced(v):
            return out_degrees[v] == in_degrees[v] and out_degrees[v] > 0

        driver_nodes = [v for v in range(n) if out_degrees[v] > in_degrees[v]]
        divergent_count = len(driver_nodes)

        # Components consisting of balanced nodes only need one driver each
        if any(is_balanced(v) for v in range(n)):
            membership = graph.weakly_connected_components()
            balanced_component = [True] * (max(membership) + 1)
            for v in range(n):
                if not is_balanced(v):
                    balanced_component[membership[v]] = False
            for v in range(n):
                component = membership[v]
                if balanced_component[component]:
                    driver_nodes.append(v)
                    balanced_component[component] = False

        self._driver_nodes = driver_nodes
        logger.debug("%d divergent node(s), %d balanced component(s)",
                     divergent_count, len(driver_nodes) - divergent_count)

        self._control_paths = self._decompose_into_walks(driver_nodes[:divergent_count])
        logger.debug("found %d control path(s)", len(self._control_paths))

        # Edgeless graphs still need one input signal
        if not self._driver_nodes and n > 0:
            self._driver_nodes.append(0)

    def _decompose_into_walks(self, divergent_nodes):
        graph = self._graph
        state = _WalkState(graph)
        paths = []
        paths_by_node = [None] * graph.node_count
        closed_walks = []

        def store(walk):
            if isinstance(walk, ClosedWalk):
                closed_walks.append(walk)
            else:
                paths.append(walk)
                for node in walk.nodes:
                    paths_by_node[node] = walk

        # Drain the excess of every divergent node with open walks
        for v in divergent_nodes:
            while state.out_degrees[v] > state.in_degrees[v]:
                walk = self._walk_from(v, state)
                if walk is None:
                    break
                store(walk)

        # Every node is balanced with respect to its remaining edges now
        for v in range(graph.node_count):
            while state.out_degrees[v] > 0:
                walk = self._walk_from(v, state)
                if walk is None:
                    break
                store(walk)

        # Merge closed walks into open walks first, then into each other
        closed_walks = _merge_closed_walks(closed_walks, paths_by_node)
        for walk in closed_walks:
            for node in walk.nodes:
                paths_by_node[node] = walk
        closed_walks = _merge_closed_walks(closed_walks, paths_by_node)

        return paths + closed_walks

    def _walk_from(self, start, state):
        """
        Follows unused outgoing edges from start until it gets stuck.

        Returns an OpenWalk, a ClosedWalk if the walk ended where it started,
        or None if start had no unused outgoing edge.
        """
        graph = self._graph
        walk = []
        v = start

        while True:
            eid = next((e for e in graph.incident(v, Mode.OUT)
                        if not state.edge_used[e]), None)
            if eid is None:
                break

            walk.append(v)
            state.edge_used[eid] = True
            w = graph.other_endpoint(eid, v)
            state.out_degrees[v] -= 1
            state.in_degrees[w] -= 1
            if not graph.is_directed:
                # The edge is gone from both endpoints
                state.in_degrees[v] -= 1
                state.out_degrees[w] -= 1
            v = w

        if v != start:
            walk.append(v)
            return OpenWalk(walk)
        if not walk:
            return None
        return ClosedWalk(walk)

    # ---------------- measures ---------------- #

    def controllability(self):
        graph = self._require_graph()

        if self._measure is ControllabilityMeasure.NODE:
            return super().controllability()

        if graph.edge_count == 0:
            return 0.0
        # Balanced components are not counted here
        num_paths = sum(1 for path in self._control_paths if path.needs_input_signal)
        return num_paths / graph.edge_count

    def changes_in_driver_nodes_after_edge_removal(self):
        graph = self._require_graph()
        self._check_parameters()

        in_degrees = graph.degrees(Mode.IN)
        out_degrees = graph.degrees(Mode.OUT)
        diffs = [i - o for i, o in zip(in_degrees, out_degrees)]
        result = [0] * graph.edge_count

        for eid, (u, v) in enumerate(graph.edges()):
            if diffs[u] == -1:
                # u becomes balanced instead of divergent
                result[eid] -= 1
            if diffs[v] == 0:
                # v becomes divergent instead of balanced
                result[eid] += 1

            if diffs[u] == 0 and diffs[v] == 0:
                # A balanced component containing u already has its driver
                if self._is_in_balanced_component(u, diffs):
                    result[eid] -= 1

            if diffs[v] == 1:
                # v becomes balanced; it may close a new balanced component
                diffs[v] -= 1
                diffs[u] += 1
                if self._is_in_balanced_component(v, diffs, excluded=u):
                    result[eid] += 1
                diffs[v] += 1
                diffs[u] -= 1

            if diffs[u] == -1:
                # u becomes balanced; it may close a new balanced component
                diffs[v] -= 1
                diffs[u] += 1
                if self._is_in_balanced_component(u, diffs, excluded=v):
                    result[eid] += 1
                diffs[v] += 1
                diffs[u] -= 1

        return result

    def edge_classes(self):
        result = []
        for diff in self.changes_in_driver_nodes_after_edge_removal():
            if diff < 0:
                result.append(EdgeClass.DISTINGUISHED)
            elif diff == 0:
                result.append(EdgeClass.REDUNDANT)
            else:
                result.append(EdgeClass.CRITICAL)
        return result

    def _is_in_balanced_component(self, v, diffs, excluded=None):
        """
        Checks whether v is part of a non-trivial balanced component.

        When excluded is given, that node is ignored during the search, as if
        its edges to the component were gone.
        """
        graph = self._graph

        if diffs[v] != 0:
            return False

        neighbors = graph.neighbors(v, Mode.ALL)
        if not neighbors or (len(neighbors) == 1 and neighbors[0] == excluded):
            return False

        visited = {v}
        if excluded is not None:
            visited.add(excluded)
        queue = deque([v])
        while queue:
            x = queue.popleft()
            for y in graph.neighbors(x, Mode.ALL):
                if y in visited:
                    continue
                if diffs[y] != 0:
                    return False
                visited.add(y)
                queue.append(y)

        return True


def _find_adjacent_path(walk, paths_by_node):
    for node in walk.nodes:
        other = paths_by_node[node]
        if other is not None and other is not walk:
            return other
    return None


def _merge_closed_walks(closed_walks, paths_by_node):
    """
    Splices closed walks into adjacent control paths until no more merges
    are possible. Returns the closed walks that could not be merged.
    """
    pending = list(closed_walks)
    merged = True
    while merged and pending:
        merged = False
        remaining = []
        for walk in pending:
            target = _find_adjacent_path(walk, paths_by_node)
            if target is None:
                remaining.append(walk)
                continue
            target.extend_with(walk)
            for node in walk.nodes:
                paths_by_node[node] = target
            merged = True
        pending = remaining
    return pending
