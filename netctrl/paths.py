# -*- coding: utf-8 -*-
"""
Control paths: the routes along which a single input signal propagates.

The Liu model decomposes the network into stems (open paths starting at a
driver node) and buds (cycles); the switchboard model uses open and closed
walks instead. All variants share the node list and the edge lookup; the
class-level ``is_closed`` flag decides whether the closing edge is included.
"""


class ControlPath:
    """Ordered sequence of node indices forming a control path."""

    name = "control path"
    label = "Control path"
    is_closed = False
    needs_input_signal = False

    def __init__(self, nodes=()):
        self.nodes = list(nodes)

    def append_node(self, node):
        self.nodes.append(node)

    def prepend_node(self, node):
        self.nodes.insert(0, node)

    def __len__(self):
        return len(self.nodes)

    def __iter__(self):
        return iter(self.nodes)

    def __repr__(self):
        return f"{self.__class__.__name__}({self.nodes!r})"

    def __str__(self):
        return self.to_string()

    def edges(self, graph):
        """
        Returns the ids of the edges traversed by the path in the given graph.

        Closed paths also include the edge leading back to the first node; a
        closed path with a single node includes its self-loop if it exists.
        """
        nodes = self.nodes
        if not nodes:
            return []

        if self.is_closed and len(nodes) == 1:
            eid = graph.get_eid(nodes[0], nodes[0], error=False)
            return [] if eid is None else [eid]

        result = [graph.get_eid(u, v) for u, v in zip(nodes, nodes[1:])]
        if self.is_closed:
            result.append(graph.get_eid(nodes[-1], nodes[0]))
        return result

    def to_string(self, names=None):
        """Returns a human-readable form; names maps node indices to labels."""
        if names is None:
            parts = [str(node) for node in self.nodes]
        else:
            parts = [str(names[node]) for node in self.nodes]
        return " ".join([f"{self.label}:"] + parts)


class Stem(ControlPath):
    """Open control path whose root is a driver node."""

    name = "stem"
    label = "Stem"
    needs_input_signal = True

    @property
    def root(self):
        return self.nodes[0]

    @property
    def tip(self):
        return self.nodes[-1]


class Bud(ControlPath):
    """
    Cyclic control path.

    A bud needs no independent input signal; it may be attached to a stem
    that feeds it. ``stem`` is None when the bud is not attached.
    """

    name = "bud"
    label = "Bud"
    is_closed = True

    def __init__(self, nodes=(), stem=None):
        super().__init__(nodes)
        self.stem = stem

    def to_string(self, names=None):
        result = super().to_string(names)
        if self.stem is not None:
            result += f" (assigned to {self.stem.to_string(names)})"
        return result


class Walk(ControlPath):
    """Base class of the walks produced by the switchboard model."""

    def extend_with(self, walk):
        """
        Splices a closed walk into this walk at their first shared node.

        The closed walk is rotated so that it starts at the shared node and is
        inserted right before the occurrence of that node in this walk. Nothing
        happens if the two walks share no node.
        """
        other = walk.nodes
        other_set = set(other)
        for pos, node in enumerate(self.nodes):
            if node not in other_set:
                continue
            start = other.index(node)
            rotated = other[start:] + other[:start]
            self.nodes[pos:pos] = rotated
            return True
        return False


class OpenWalk(Walk):
    """Open walk; every open walk needs an independent input signal."""

    name = "open walk"
    label = "Open walk"
    needs_input_signal = True

    @property
    def root(self):
        return self.nodes[0]

    @property
    def tip(self):
        return self.nodes[-1]


class ClosedWalk(Walk):
    """Closed walk; it can be driven by any walk it shares a node with."""

    name = "closed walk"
    label = "Closed walk"
    is_closed = True
