"""Enumeration of size-k subsets of a point list.

Subsets are produced lazily in lexicographic order of the input
indices, each one keeping the input order of its points. The walk is an
iterative advance over an increasing index array, so deep recursion is
never needed and the same input always re-enumerates identically.
"""

from math import comb


def count_subsets(n: int, k: int) -> int:
    """C(n, k), or 0 when k is outside [0, n]."""
    if k < 0 or k > n:
        return 0
    return comb(n, k)


def index_combinations(n: int, k: int):
    """Yield every increasing k-tuple of indices into range(n)."""
    if k < 0:
        raise ValueError(f"k must be >= 0, got {k}")
    if k > n:
        return
    idx = list(range(k))
    while True:
        yield tuple(idx)
        # Rightmost position that can still move forward
        i = k - 1
        while i >= 0 and idx[i] == n - k + i:
            i -= 1
        if i < 0:
            return
        idx[i] += 1
        for j in range(i + 1, k):
            idx[j] = idx[j - 1] + 1


def combinations(points: list, k: int):
    """Yield every size-k subset of `points` as a list.

    k == 0 yields one empty subset; k > len(points) yields nothing.
    """
    points = list(points)
    for idx in index_combinations(len(points), k):
        yield [points[i] for i in idx]
