"""Tests for DirectedMatching bookkeeping."""
import random

import pytest

from netctrl.matching import DirectedMatching, Direction


def assert_consistent(matching):
    n = matching.node_count
    for v in range(n):
        u = matching.match_in(v)
        if u is not None:
            assert v in matching.match_out(u)
    for u in range(n):
        for v in matching.match_out(u):
            assert matching.match_in(v) == u


class TestBasics:
    def test_empty(self):
        matching = DirectedMatching(3)
        assert len(matching) == 0
        assert not matching.is_matched(0)
        assert not matching.is_matching(0)
        assert matching.match_in(1) is None
        assert matching.match_out(1) == []

    def test_set_match(self):
        matching = DirectedMatching(3)
        matching.set_match(0, 1)
        assert matching.is_matched(1)
        assert matching.is_matching(0)
        assert matching.is_matching_exactly_one(0)
        assert matching.match_in(1) == 0
        assert matching.match_out(0) == [1]
        assert list(matching.matched_pairs()) == [(0, 1)]

    def test_set_match_replaces_previous_match_into_target(self):
        matching = DirectedMatching(3)
        matching.set_match(0, 2)
        matching.set_match(1, 2)
        assert matching.match_in(2) == 1
        assert matching.match_out(0) == []
        assert matching.match_out(1) == [2]

    def test_multiple_outgoing_matches(self):
        matching = DirectedMatching(3)
        matching.set_match(0, 1)
        matching.set_match(0, 2)
        assert matching.match_out(0) == [1, 2]
        assert not matching.is_matching_exactly_one(0)
        assert len(matching) == 2

    def test_unmatch(self):
        matching = DirectedMatching(3)
        matching.set_match(0, 1)
        matching.set_match(0, 2)
        matching.unmatch(1)
        assert matching.match_in(1) is None
        assert matching.match_out(0) == [2]

    def test_unmatch_unmatched_node_is_noop(self):
        matching = DirectedMatching(2)
        matching.unmatch(1)
        assert len(matching) == 0

    def test_self_match(self):
        matching = DirectedMatching(1)
        matching.set_match(0, 0)
        assert matching.match_in(0) == 0
        assert matching.match_out(0) == [0]
        matching.unmatch(0)
        assert len(matching) == 0

    def test_match_out_returns_copy(self):
        matching = DirectedMatching(2)
        matching.set_match(0, 1)
        matching.match_out(0).append(0)
        assert matching.match_out(0) == [1]


class TestConsistency:
    def test_random_operations_keep_both_sides_in_sync(self):
        rnd = random.Random(1234)
        n = 8
        matching = DirectedMatching(n)
        for _ in range(500):
            if rnd.random() < 0.7:
                matching.set_match(rnd.randrange(n), rnd.randrange(n))
            else:
                matching.unmatch(rnd.randrange(n))
            assert_consistent(matching)


class TestFromMapping:
    def test_out_direction(self):
        matching = DirectedMatching.from_mapping([1, 2, -1], Direction.OUT)
        assert list(matching.matched_pairs()) == [(0, 1), (1, 2)]

    def test_in_direction(self):
        matching = DirectedMatching.from_mapping([-1, 0, 1], Direction.IN)
        assert matching.match_in(1) == 0
        assert matching.match_in(2) == 1
        assert matching.match_in(0) is None

    def test_concatenated_directions(self):
        out_in = DirectedMatching.from_mapping([1, -1, -1, 0], Direction.OUT_IN)
        in_out = DirectedMatching.from_mapping([-1, 0, 1, -1], Direction.IN_OUT)
        assert list(out_in.matched_pairs()) == [(0, 1)]
        assert list(in_out.matched_pairs()) == [(0, 1)]

    def test_odd_length_concatenation_rejected(self):
        with pytest.raises(ValueError):
            DirectedMatching.from_mapping([1, 2, 3], Direction.IN_OUT)
