"""Majority-vote secret recovery over every size-k subset of fragments.

Each subset of k points determines one polynomial of degree k-1 and so
one candidate constant term. Candidates are tallied by exact value and
the most frequently reproduced one is returned together with its
support count; it must be a whole number.

The vote tolerates corrupted points as long as the correct subsets
outnumber every group of corrupted subsets that happen to agree on the
same wrong value. This is a heuristic, not a guarantee: an adversary
who controls enough points can make a wrong value win.

Cost is C(n, k) interpolations of O(k^2) big-integer operations each,
which grows exponentially; the max_combinations cap guards against
accidental blow-ups.
"""

import logging
from collections import deque
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from itertools import islice

from shamirvote.config import DEFAULT_MAX_COMBINATIONS, RecoveryConfig
from shamirvote.errors import (
    InsufficientShares, NoMajority, NonIntegerResult,
    RecoveryCancelled, TooManyCombinations,
)
from shamirvote.fragments import Point
from shamirvote.interpolate import check_distinct, evaluate_at
from shamirvote.subsets import count_subsets, index_combinations

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecoveryResult:
    """Winning secret plus the evidence behind it.

    tally maps each candidate value (a Rational) to the number of subsets
    that produced it, in order of first appearance. tied lists every
    candidate sharing the top count when there is more than one (ints for
    whole values, Rationals otherwise); it is empty when the winner is
    unique. witness is the first
    subset, in enumeration order, that produced the secret.
    """

    secret: int
    supporting_combinations: int
    total_combinations: int
    tally: dict = field(default_factory=dict, compare=False, repr=False)
    tied: tuple = ()
    witness: tuple = ()

    @property
    def ambiguous(self) -> bool:
        return len(self.tied) > 1

    @property
    def confidence(self) -> float:
        return self.supporting_combinations / self.total_combinations


def _vote(points: list, index_iter, should_stop=None) -> dict:
    """Tally f(0) over the subsets named by `index_iter`.

    Returns {candidate: [count, first index tuple]} in first-seen order.
    """
    votes = {}
    for idx in index_iter:
        if should_stop is not None and should_stop():
            raise RecoveryCancelled("Recovery cancelled")
        value = evaluate_at([points[i] for i in idx], 0)
        entry = votes.get(value)
        if entry is None:
            votes[value] = [1, idx]
            logger.debug("Subset %s -> new candidate %s", idx, value)
        else:
            entry[0] += 1
    return votes


def _vote_chunk(points: list, chunk: list) -> dict:
    return _vote(points, chunk)


def _chunked(iterable, size: int):
    it = iter(iterable)
    while True:
        chunk = list(islice(it, size))
        if not chunk:
            return
        yield chunk


def _merge(votes: dict, partial: dict) -> None:
    for value, (count, idx) in partial.items():
        entry = votes.get(value)
        if entry is None:
            votes[value] = [count, idx]
        else:
            entry[0] += count


def _vote_parallel(points: list, k: int, workers: int, chunk_size: int,
                   should_stop=None) -> dict:
    """Same tally as _vote, with subset chunks spread over a process pool.

    Partial tallies are merged in submission order, so first-appearance
    order and witnesses match the serial walk.
    """
    votes = {}
    chunks = _chunked(index_combinations(len(points), k), chunk_size)
    pending = deque()
    with ProcessPoolExecutor(max_workers=workers) as executor:
        while True:
            while len(pending) < workers * 2:
                chunk = next(chunks, None)
                if chunk is None:
                    break
                pending.append(executor.submit(_vote_chunk, points, chunk))
            if not pending:
                break
            if should_stop is not None and should_stop():
                for future in pending:
                    future.cancel()
                raise RecoveryCancelled("Recovery cancelled")
            _merge(votes, pending.popleft().result())
    return votes


def recover(points: list, k: int, *, strict: bool = False,
            max_combinations: int = DEFAULT_MAX_COMBINATIONS,
            workers: int = 1, chunk_size: int = 256,
            should_stop=None) -> RecoveryResult:
    """Recover the secret from n >= k points by majority vote.

    Args:
        points: (x, y) pairs with pairwise distinct x.
        k: Threshold; every subset of k points is interpolated.
        strict: Raise NoMajority instead of reporting a tie.
        max_combinations: Refuse to run more than this many subsets
            (None or 0 for no limit).
        workers: Process count; 1 runs serially.
        chunk_size: Subsets per worker task.
        should_stop: Optional callable polled between subsets (or chunks);
            returning True aborts with RecoveryCancelled.

    Returns:
        RecoveryResult for the candidate with the highest count. When a
        tie includes a whole number, the first whole candidate seen is
        reported and the result is marked ambiguous.

    Raises:
        InsufficientShares if len(points) < k, DuplicateAbscissa,
        TooManyCombinations, NonIntegerResult if every top candidate is
        fractional, NoMajority on a tie when strict.
    """
    if k < 1:
        raise ValueError(f"Threshold k must be >= 1, got {k}")
    points = [Point(x, y) for x, y in points]
    n = len(points)
    if n < k:
        raise InsufficientShares(n, k)
    check_distinct([p.x for p in points])

    total = count_subsets(n, k)
    if max_combinations and total > max_combinations:
        raise TooManyCombinations(total, max_combinations)

    logger.info("Recovering secret from %d points with k=%d over %d combinations",
                n, k, total)
    if workers > 1 and total > chunk_size:
        votes = _vote_parallel(points, k, workers, chunk_size, should_stop)
    else:
        votes = _vote(points, index_combinations(n, k), should_stop)

    best = max(count for count, _ in votes.values())
    top = [value for value, (count, _) in votes.items() if count == best]
    whole = [value for value in top if value.is_integer()]
    if not whole:
        raise NonIntegerResult(
            f"Most reproduced constant term {top[0]} ({best} of {total} "
            f"combinations) is not a whole number")

    if len(top) > 1:
        tied = tuple(v.numerator if v.is_integer() else v for v in top)
        if strict:
            raise NoMajority(tied, best, total)
        logger.warning("No unique majority: %d candidates reproduced by %d of %d "
                       "combinations; reporting the first whole one seen",
                       len(tied), best, total)
    else:
        tied = ()

    winner = whole[0]
    count, idx = votes[winner]
    logger.info("Secret %d reproduced by %d of %d combinations (%d candidates)",
                winner.numerator, count, total, len(votes))

    return RecoveryResult(
        secret=winner.numerator,
        supporting_combinations=count,
        total_combinations=total,
        tally={value: entry[0] for value, entry in votes.items()},
        tied=tied,
        witness=tuple(points[i] for i in idx),
    )


def find_suspects(points: list, result: RecoveryResult) -> list:
    """Points that do not lie on the winning polynomial.

    Evaluates the polynomial through result.witness at every input x and
    returns the points whose y disagrees, in input order.
    """
    if not result.witness:
        return []
    witness = list(result.witness)
    suspects = []
    for x, y in points:
        if evaluate_at(witness, x) != y:
            suspects.append(Point(x, y))
    return suspects


def recover_fragment_set(fragment_set, config=None, should_stop=None) -> RecoveryResult:
    """Decode a FragmentSet and recover its secret using `config` settings."""
    if config is None:
        config = RecoveryConfig()
    return recover(
        fragment_set.points, fragment_set.k,
        strict=config.strict_majority,
        max_combinations=config.max_combinations,
        workers=config.workers,
        chunk_size=config.chunk_size,
        should_stop=should_stop,
    )
