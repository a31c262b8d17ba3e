# -*- coding: utf-8 -*-
"""
Directed matchings as defined by Liu et al.

A directed matching assigns to every node at most one node that "matches" it
(its controlling predecessor). In the targeted variant of the Liu model a
node may match several nodes, so the outgoing side is a list.
"""

from enum import Enum


class Direction(Enum):
    """Layout of the vector passed to DirectedMatching.from_mapping()."""

    OUT = "out"
    IN = "in"
    OUT_IN = "out_in"
    IN_OUT = "in_out"


class DirectedMatching:
    """
    Matching between the nodes of a directed graph.

    ``match_in(v)`` is the node that matches v (or None), ``match_out(u)`` is
    the list of nodes matched by u. The two sides are always kept consistent.
    """

    def __init__(self, n=0):
        self._in = [None] * n
        self._out = [[] for _ in range(n)]

    @classmethod
    def from_mapping(cls, mapping, direction):
        """
        Constructs a matching from a vector where -1 means "no match".

        With Direction.OUT, element i is the node that i is matched to; with
        Direction.IN, element i is the node that matches i. OUT_IN and IN_OUT
        expect both halves concatenated in the given order.
        """
        mapping = list(mapping)

        if direction in (Direction.OUT_IN, Direction.IN_OUT):
            if len(mapping) % 2 != 0:
                raise ValueError("concatenated mapping must have an even length")
            n = len(mapping) // 2
            if direction is Direction.OUT_IN:
                out_half = mapping[:n]
            else:
                out_half = mapping[n:]
            return cls.from_mapping(out_half, Direction.OUT)

        result = cls(len(mapping))
        for i, other in enumerate(mapping):
            if other is None or other < 0:
                continue
            if direction is Direction.OUT:
                result.set_match(i, other)
            elif direction is Direction.IN:
                result.set_match(other, i)
            else:
                raise ValueError(f"invalid direction: {direction!r}")
        return result

    def __len__(self):
        return sum(1 for u in self._in if u is not None)

    def __repr__(self):
        pairs = ", ".join(f"{u}->{v}" for u, v in self.matched_pairs())
        return f"DirectedMatching({pairs})"

    @property
    def node_count(self):
        return len(self._in)

    def is_matched(self, v):
        """Returns whether v is matched by another node."""
        return self._in[v] is not None

    def is_matching(self, u):
        """Returns whether u matches at least one node."""
        return bool(self._out[u])

    def is_matching_exactly_one(self, u):
        return len(self._out[u]) == 1

    def match_in(self, v):
        """Returns the node that matches v, or None if v is unmatched."""
        return self._in[v]

    def match_out(self, u):
        """Returns the nodes matched by u (an empty list if there are none)."""
        return list(self._out[u])

    def matched_pairs(self):
        """Yields (u, v) for every v that is matched by u."""
        for v, u in enumerate(self._in):
            if u is not None:
                yield u, v

    def set_match(self, u, v):
        """Makes u match v, dropping any node that matched v before."""
        if u is None or v is None:
            return
        if self._in[v] == u:
            return
        self.unmatch(v)
        self._in[v] = u
        self._out[u].append(v)

    def unmatch(self, v):
        """Removes the match into v, if any."""
        u = self._in[v]
        if u is None:
            return
        self._out[u].remove(v)
        self._in[v] = None
