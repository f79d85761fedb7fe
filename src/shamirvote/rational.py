"""Exact rational arithmetic for interpolation.

Every Rational is kept in canonical form: denominator > 0 and
gcd(|numerator|, denominator) == 1, with zero stored as 0/1. Values are
immutable; each operation returns a fresh, reduced Rational. Python int
gives the arbitrary precision.
"""

from math import gcd

from shamirvote.errors import DivisionByZero, NonIntegerResult


class Rational:
    """Immutable reduced fraction numerator/denominator."""

    __slots__ = ('_num', '_den')

    def __init__(self, numerator: int, denominator: int = 1):
        if denominator == 0:
            raise DivisionByZero(f"Zero denominator in {numerator}/0")
        if numerator == 0:
            numerator, denominator = 0, 1
        else:
            if denominator < 0:
                numerator, denominator = -numerator, -denominator
            g = gcd(abs(numerator), denominator)
            numerator //= g
            denominator //= g
        object.__setattr__(self, '_num', numerator)
        object.__setattr__(self, '_den', denominator)

    def __setattr__(self, name, value):
        raise AttributeError("Rational is immutable")

    def __reduce__(self):
        return (Rational, (self._num, self._den))

    @property
    def numerator(self) -> int:
        return self._num

    @property
    def denominator(self) -> int:
        return self._den

    def is_integer(self) -> bool:
        return self._den == 1

    def __eq__(self, other):
        if isinstance(other, Rational):
            return self._num == other._num and self._den == other._den
        if isinstance(other, int):
            return self._den == 1 and self._num == other
        return NotImplemented

    def __hash__(self):
        # whole values hash like the equal int
        if self._den == 1:
            return hash(self._num)
        return hash((self._num, self._den))

    def __repr__(self):
        return f"Rational({self._num}, {self._den})"

    def __str__(self):
        if self._den == 1:
            return str(self._num)
        return f"{self._num}/{self._den}"


ZERO = Rational(0)
ONE = Rational(1)


def make(n: int, d: int) -> Rational:
    """Canonical n/d. Raises DivisionByZero if d == 0."""
    return Rational(n, d)


def from_int(n: int) -> Rational:
    return Rational(n, 1)


def add(a: Rational, b: Rational) -> Rational:
    """a + b."""
    return Rational(a.numerator * b.denominator + b.numerator * a.denominator,
                    a.denominator * b.denominator)


def mul(a: Rational, b: Rational) -> Rational:
    """a * b."""
    return Rational(a.numerator * b.numerator, a.denominator * b.denominator)


def neg(a: Rational) -> Rational:
    """-a."""
    return Rational(-a.numerator, a.denominator)


def inv(a: Rational) -> Rational:
    """1/a. Raises DivisionByZero for a == 0."""
    if a.numerator == 0:
        raise DivisionByZero("Cannot invert zero")
    return Rational(a.denominator, a.numerator)


def sub(a: Rational, b: Rational) -> Rational:
    """a - b = a + (-b)."""
    return add(a, neg(b))


def div(a: Rational, b: Rational) -> Rational:
    """a / b = a * (1/b)."""
    return mul(a, inv(b))


def to_int(a: Rational) -> int:
    """Return a as an int. Raises NonIntegerResult unless a is whole."""
    if a.denominator != 1:
        raise NonIntegerResult(f"{a} is not an integer")
    return a.numerator
