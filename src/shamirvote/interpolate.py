"""Lagrange interpolation in exact rational arithmetic.

Points are (x, y) pairs of Python ints. The unique interpolating
polynomial of degree len(points) - 1 is evaluated as

    P(t) = sum_i y_i * prod_{j!=i} (t - x_j) / (x_i - x_j)

Each basis product is accumulated as an integer numerator and
denominator and reduced once, so the result is exact and does not
depend on point order.
"""

from shamirvote import rational
from shamirvote.errors import DuplicateAbscissa, InsufficientShares, NonIntegerResult


def check_distinct(xs: list) -> None:
    """Raise DuplicateAbscissa if any x-coordinate repeats."""
    seen = set()
    for x in xs:
        if x in seen:
            raise DuplicateAbscissa(x)
        seen.add(x)


def basis_at(xs: list, i: int, target: int) -> rational.Rational:
    """Lagrange basis coefficient L_i(target).

    xs = list of distinct x-coordinates.
    Returns prod_{j!=i} (target - x_j) / (x_i - x_j).
    """
    xi = xs[i]
    num = 1
    den = 1
    for j, xj in enumerate(xs):
        if j == i:
            continue
        if xi == xj:
            raise DuplicateAbscissa(xi)
        num *= target - xj
        den *= xi - xj
    return rational.make(num, den)


def basis_at_zero(xs: list, i: int) -> rational.Rational:
    """L_i(0) = prod_{j!=i} (0 - x_j) / (x_i - x_j)."""
    return basis_at(xs, i, 0)


def evaluate_at(points: list, target: int) -> rational.Rational:
    """Value at `target` of the polynomial through `points`."""
    if not points:
        raise InsufficientShares(0, 1)
    xs = [x for x, _ in points]
    check_distinct(xs)

    total = rational.ZERO
    for i, (_, yi) in enumerate(points):
        term = rational.mul(rational.from_int(yi), basis_at(xs, i, target))
        total = rational.add(total, term)
    return total


def evaluate_at_zero(points: list) -> int:
    """Constant term f(0) of the polynomial through `points`.

    Raises DuplicateAbscissa when two points share an x, and
    NonIntegerResult when the constant term is not a whole number.
    """
    value = evaluate_at(points, 0)
    if not value.is_integer():
        raise NonIntegerResult(
            f"Constant term {value} through {len(points)} points is not an integer")
    return value.numerator
