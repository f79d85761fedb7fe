"""Tests for k-subset enumeration."""

import itertools
import pytest
from shamirvote.subsets import combinations, count_subsets, index_combinations


class TestCount:

    def test_values(self):
        assert count_subsets(4, 2) == 6
        assert count_subsets(10, 7) == 120
        assert count_subsets(5, 0) == 1

    def test_out_of_range(self):
        assert count_subsets(2, 3) == 0
        assert count_subsets(2, -1) == 0


class TestIndexCombinations:

    def test_matches_itertools(self):
        for n in range(0, 8):
            for k in range(0, n + 1):
                assert list(index_combinations(n, k)) == \
                    list(itertools.combinations(range(n), k))

    def test_count(self):
        for n, k in [(6, 3), (10, 4), (12, 1), (9, 9)]:
            assert sum(1 for _ in index_combinations(n, k)) == count_subsets(n, k)

    def test_k_zero(self):
        assert list(index_combinations(4, 0)) == [()]

    def test_k_greater_than_n(self):
        assert list(index_combinations(2, 3)) == []

    def test_negative_k(self):
        with pytest.raises(ValueError):
            list(index_combinations(3, -1))

    def test_lazy(self):
        """Taking the first subset does not walk C(40, 20) subsets."""
        gen = index_combinations(40, 20)
        assert next(gen) == tuple(range(20))


class TestCombinations:

    def test_keeps_point_order(self):
        points = [(3, 30), (1, 10), (2, 20)]
        assert list(combinations(points, 2)) == [
            [(3, 30), (1, 10)],
            [(3, 30), (2, 20)],
            [(1, 10), (2, 20)],
        ]

    def test_restartable(self):
        points = [(i, i * i) for i in range(6)]
        assert list(combinations(points, 3)) == list(combinations(points, 3))

    def test_accepts_iterables(self):
        assert len(list(combinations(iter([(1, 1), (2, 2), (3, 3)]), 2))) == 3

    def test_degenerate(self):
        assert list(combinations([(1, 1)], 0)) == [[]]
        assert list(combinations([(1, 1)], 2)) == []
