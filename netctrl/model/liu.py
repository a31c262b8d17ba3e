# -*- coding: utf-8 -*-
"""
Controllability model of Liu et al.

Liu YY, Slotine JJ, Barabási AL: Controllability of complex networks.
Nature 473:167-173, 2011.

The driver nodes are the nodes left unmatched by a maximum matching of the
bipartite representation of the graph (an out-copy and an in-copy of every
node, with an edge out(u)-in(v) for every edge u->v). In targeted mode only a
subset of the nodes has to be controlled, and the matching is grown backwards
from the targets one frontier at a time.
"""

import logging
from collections import deque

import networkx as nx
from networkx.algorithms import bipartite as nx_bip

from netctrl.errors import NotSupportedError
from netctrl.graph import Mode
from netctrl.matching import DirectedMatching, Direction
from netctrl.model.base import ControllabilityModel, EdgeClass
from netctrl.paths import Bud, Stem

logger = logging.getLogger(__name__)


class LiuControllabilityModel(ControllabilityModel):
    """Controllability model of Liu et al, with optional target nodes."""

    def __init__(self, graph=None, targets=None):
        super().__init__(graph, targets)
        self._matching = self._empty_matching()

    def _empty_matching(self):
        n = self._graph.node_count if self._graph is not None else 0
        return DirectedMatching(n)

    def _clear(self):
        super()._clear()
        self._matching = self._empty_matching()

    def matching(self):
        """Returns the matching behind the current driver node configuration."""
        return self._matching

    def clone(self):
        return LiuControllabilityModel(self._graph, self._targets)

    def supports_edge_classes(self):
        return self._targets is None

    # ---------------- calculation ---------------- #

    def calculate(self):
        graph = self._require_graph()
        n = graph.node_count
        self._clear()

        if self._targets is None:
            logger.debug("calculating maximum matching on %d nodes", n)
            self._matching = self._untargeted_matching()
            driver_nodes = [v for v in range(n) if not self._matching.is_matched(v)]
        else:
            for v in self._targets:
                if not 0 <= v < n:
                    raise ValueError(f"target node {v} is not in the graph")
            logger.debug("calculating targeted matching for %d target(s)",
                         len(set(self._targets)))
            self._matching = self._targeted_matching()
            self._cleanup_targeted_matching()
            driver_nodes = self._targeted_driver_nodes()

        self._driver_nodes = driver_nodes
        self._control_paths = self._decompose_into_control_paths()

        # Every network needs at least one input signal
        if not self._driver_nodes and n > 0:
            self._driver_nodes.append(0)

        logger.debug("found %d driver node(s) and %d control path(s)",
                     len(self._driver_nodes), len(self._control_paths))

    def _untargeted_matching(self):
        graph = self._graph
        n = graph.node_count

        # Out-copies are 0..n-1, in-copies are n..2n-1
        bipartite = nx.Graph()
        bipartite.add_nodes_from(range(n), bipartite=0)
        bipartite.add_nodes_from(range(n, 2 * n), bipartite=1)
        for u, v in graph.edges():
            bipartite.add_edge(u, n + v)
            if not graph.is_directed:
                bipartite.add_edge(v, n + u)

        mate = nx_bip.maximum_matching(bipartite, top_nodes=range(n))
        mapping = [mate[u] - n if u in mate else -1 for u in range(n)]
        return DirectedMatching.from_mapping(mapping, Direction.OUT)

    def _targeted_matching(self):
        graph = self._graph
        n = graph.node_count
        matching = DirectedMatching(n)

        # Unmatched frontier nodes are matched to themselves so that they
        # are never put on the right side again; these are undone at the end.
        sentinels = []
        frontier = list(dict.fromkeys(self._targets))
        round_index = 0

        while frontier:
            right = [v for v in frontier if not matching.is_matched(v)]
            if not right:
                break

            bipartite = nx.Graph()
            bipartite.add_nodes_from(n + v for v in right)
            left = set()
            for v in right:
                for u in graph.neighbors(v, Mode.IN):
                    bipartite.add_edge(u, n + v)
                    left.add(u)
            if not left:
                break

            mate = nx_bip.maximum_matching(bipartite, top_nodes=left)

            next_frontier = []
            for v in right:
                u = mate.get(n + v)
                if u is None:
                    matching.set_match(v, v)
                    sentinels.append(v)
                else:
                    matching.set_match(u, v)
                    next_frontier.append(u)

            round_index += 1
            logger.debug("targeted matching round %d: %d matched, %d left over",
                         round_index, len(next_frontier),
                         len(right) - len(next_frontier))
            frontier = list(dict.fromkeys(next_frontier))

        for v in sentinels:
            if matching.match_in(v) == v:
                matching.unmatch(v)

        return matching

    def _cleanup_targeted_matching(self, nodes=None):
        """
        Trims matched chains that do not end in a target node.

        A non-target node that is matched but matches nothing is cut off from
        its predecessor; a non-target node that is unmatched and matches a
        single node is cut off from its successor. Both steps are repeated on
        the affected neighbour until nothing changes. The worklist starts
        with the given nodes, or with all nodes.
        """
        matching = self._matching
        targets = set(self._targets)
        if nodes is None:
            nodes = range(self._graph.node_count)
        queue = deque(nodes)

        while queue:
            v = queue.popleft()
            if v in targets:
                continue

            if matching.is_matched(v) and not matching.is_matching(v):
                u = matching.match_in(v)
                matching.unmatch(v)
                queue.append(u)
            elif not matching.is_matched(v) and matching.is_matching_exactly_one(v):
                w = matching.match_out(v)[0]
                matching.unmatch(w)
                queue.append(w)

    def _matched_chain(self, target):
        """
        Follows match_in backwards from target.

        Returns the visited nodes (target first) and the node at which the
        walk ran into itself, or None if it ended at an unmatched node.
        """
        matching = self._matching
        chain = []
        visited = set()
        v = target
        while v is not None:
            if v in visited:
                return chain, v
            visited.add(v)
            chain.append(v)
            v = matching.match_in(v)
        return chain, None

    def _targeted_driver_nodes(self):
        """
        Walks backwards from each target along the matching.

        A walk that runs into a cycle breaks the matching at the revisited
        node and trims the chain again. Trimming may shorten other chains,
        so the walks are repeated until no cycle is left; the unmatched node
        at the end of each walk is then a driver node.
        """
        matching = self._matching
        targets = list(dict.fromkeys(self._targets))

        broken = True
        while broken:
            broken = False
            for target in targets:
                chain, cut = self._matched_chain(target)
                if cut is not None:
                    matching.unmatch(cut)
                    self._cleanup_targeted_matching(chain)
                    broken = True

        result = []
        for target in targets:
            chain, _ = self._matched_chain(target)
            if chain[-1] not in result:
                result.append(chain[-1])
        return result

    def _decompose_into_control_paths(self):
        graph = self._graph
        matching = self._matching
        n = graph.node_count
        used = [False] * n
        stem_of = [None] * n
        paths = []

        # Stems from each driver node; a node matching several nodes
        # (targeted mode only) spawns one extra stem per extra branch.
        for root in self._driver_nodes:
            pending = deque([Stem([root])])
            while pending:
                stem = pending.popleft()
                while True:
                    tip = stem.tip
                    used[tip] = True
                    stem_of[tip] = stem
                    successors = [w for w in matching.match_out(tip) if not used[w]]
                    if not successors:
                        break
                    for w in successors[1:]:
                        pending.append(Stem(stem.nodes + [w]))
                    stem.append_node(successors[0])
                paths.append(stem)

        # The remaining matched nodes form buds
        for u in range(n):
            if used[u] or not matching.is_matched(u):
                continue

            bud = Bud()
            v = u
            while not used[v]:
                bud.prepend_node(v)
                used[v] = True
                v = matching.match_in(v)
                if v is None:
                    raise RuntimeError(f"matched chain through node {u} is not a cycle")
            if len(bud) > 1 and bud.nodes[0] == bud.nodes[-1]:
                bud.nodes.pop()

            # Attach the bud to a stem that feeds one of its nodes
            for node in bud.nodes:
                for w in graph.neighbors(node, Mode.IN):
                    if stem_of[w] is not None:
                        bud.stem = stem_of[w]
                        break
                if bud.stem is not None:
                    break

            paths.append(bud)

        return paths

    # ---------------- edge classification ---------------- #

    def edge_classes(self):
        """
        Classifies the edges as ordinary, redundant or critical.

        Adapted from Algorithm 2 of:

        Régin JC: A filtering algorithm for constraints of difference in CSPs.
        In: AAAI '94 Proceedings of the 12th national conference on Artificial
        intelligence (vol. 1), pp. 362-367, 1994.

        Critical edges are part of every maximum matching, redundant edges are
        part of none and ordinary edges are part of some.
        """
        graph = self._require_graph()
        if self._targets is not None:
            raise NotSupportedError("edge classes are not supported in targeted mode")

        n, m = graph.node_count, graph.edge_count
        matching = self._matching

        # (1) Initially, all the edges are redundant
        result = [EdgeClass.REDUNDANT] * m

        # (2) Residual graph: matched edges point from the out-copy to the
        #     in-copy, unmatched edges point the other way
        residual = self._residual_graph()

        # (3) Edges on alternating paths from unmatched nodes are ordinary
        free = [n + v for v in range(n) if not matching.is_matched(v)]
        free += [u for u in range(n) if not matching.is_matching(u)]

        seen = set(free)
        queue = deque(free)
        while queue:
            x = queue.popleft()
            for y, _, eid in residual.in_edges(x, keys=True):
                result[eid] = EdgeClass.ORDINARY
                if y not in seen:
                    seen.add(y)
                    queue.append(y)

        seen = set(free)
        queue = deque(free)
        while queue:
            x = queue.popleft()
            for _, y, eid in residual.out_edges(x, keys=True):
                result[eid] = EdgeClass.ORDINARY
                if y not in seen:
                    seen.add(y)
                    queue.append(y)

        # (4) Edges on alternating cycles are ordinary
        membership = {}
        for index, component in enumerate(nx.strongly_connected_components(residual)):
            for x in component:
                membership[x] = index
        for x, y, eid in residual.edges(keys=True):
            if membership[x] == membership[y]:
                result[eid] = EdgeClass.ORDINARY

        # (5) Matched edges that are still redundant are critical
        for u, v in matching.matched_pairs():
            eid = graph.get_eid(u, v)
            if result[eid] is EdgeClass.REDUNDANT:
                result[eid] = EdgeClass.CRITICAL

        return result

    def _residual_graph(self):
        graph = self._graph
        matching = self._matching
        n = graph.node_count

        residual = nx.MultiDiGraph()
        residual.add_nodes_from(range(2 * n))
        for eid, (u, v) in enumerate(graph.edges()):
            orientations = [(u, v)]
            if not graph.is_directed and u != v:
                orientations.append((v, u))
            for a, b in orientations:
                # Of a bundle of parallel edges only one carries the match
                if matching.match_in(b) == a and graph.get_eid(a, b) == eid:
                    residual.add_edge(a, n + b, key=eid)
                else:
                    residual.add_edge(n + b, a, key=eid)
        return residual
