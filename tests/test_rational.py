"""Tests for exact rational arithmetic."""

import pytest
from shamirvote import rational
from shamirvote.rational import Rational, make
from shamirvote.errors import DivisionByZero, ErrorKind, NonIntegerResult


def parts(r):
    return (r.numerator, r.denominator)


class TestCanonicalForm:

    def test_reduces(self):
        assert parts(make(4, 8)) == (1, 2)

    def test_negative_numerator(self):
        assert parts(make(-4, 8)) == (-1, 2)

    def test_negative_denominator(self):
        assert parts(make(4, -8)) == (-1, 2)

    def test_both_negative(self):
        assert parts(make(-4, -8)) == (1, 2)

    def test_zero(self):
        assert parts(make(0, -17)) == (0, 1)

    def test_zero_denominator(self):
        with pytest.raises(DivisionByZero) as exc:
            make(1, 0)
        assert exc.value.kind is ErrorKind.DIVISION_BY_ZERO

    def test_big_values(self):
        big = 3 ** 200
        assert parts(make(big * 7, big * 11)) == (7, 11)

    def test_equality_on_canonical_form(self):
        assert make(2, 4) == make(-3, -6)
        assert make(1, 2) != make(1, 3)
        assert make(6, 3) == 2

    def test_hash_matches_int_for_whole(self):
        assert hash(make(6, 3)) == hash(2)
        assert len({make(1, 2), make(2, 4), make(3, 6)}) == 1

    def test_immutable(self):
        r = make(1, 2)
        with pytest.raises(AttributeError):
            r._num = 5

    def test_str(self):
        assert str(make(3, 1)) == "3"
        assert str(make(-1, 3)) == "-1/3"


class TestOperations:

    def test_add(self):
        assert rational.add(make(1, 2), make(1, 3)) == make(5, 6)

    def test_add_reduces(self):
        assert parts(rational.add(make(1, 6), make(1, 3))) == (1, 2)

    def test_mul(self):
        assert rational.mul(make(2, 3), make(9, 4)) == make(3, 2)

    def test_neg(self):
        assert rational.neg(make(1, 2)) == make(-1, 2)
        assert rational.neg(rational.ZERO) == rational.ZERO

    def test_inv(self):
        assert parts(rational.inv(make(-2, 3))) == (-3, 2)

    def test_inv_zero(self):
        with pytest.raises(DivisionByZero):
            rational.inv(rational.ZERO)

    def test_sub(self):
        assert rational.sub(make(1, 2), make(1, 3)) == make(1, 6)

    def test_div(self):
        assert rational.div(make(1, 2), make(1, 4)) == 2

    def test_div_by_zero(self):
        with pytest.raises(ZeroDivisionError):
            rational.div(rational.ONE, rational.ZERO)

    def test_operands_unchanged(self):
        a, b = make(1, 2), make(1, 3)
        rational.add(a, b)
        rational.mul(a, b)
        assert parts(a) == (1, 2)
        assert parts(b) == (1, 3)

    def test_field_laws(self, rng):
        def rand():
            return make(rng.randint(-10**6, 10**6), rng.choice([1, -1]) * rng.randint(1, 10**6))
        for _ in range(30):
            a, b, c = rand(), rand(), rand()
            assert rational.add(a, b) == rational.add(b, a)
            assert rational.mul(a, rational.add(b, c)) == \
                rational.add(rational.mul(a, b), rational.mul(a, c))
            assert rational.sub(rational.add(a, b), b) == a


class TestToInt:

    def test_whole(self):
        assert rational.to_int(make(-12, 4)) == -3

    def test_not_whole(self):
        with pytest.raises(NonIntegerResult):
            rational.to_int(make(1, 2))
