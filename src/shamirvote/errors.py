"""Error kinds raised while reconstructing a secret.

Each failure mode has its own exception class and an ErrorKind tag, so
callers can dispatch on `err.kind` or on the class. All of them derive
from RecoveryError.
"""

import enum


class ErrorKind(enum.Enum):
    INVALID_DIGIT = "InvalidDigit"
    DIVISION_BY_ZERO = "DivisionByZero"
    DUPLICATE_ABSCISSA = "DuplicateAbscissa"
    INSUFFICIENT_SHARES = "InsufficientShares"
    NON_INTEGER_RESULT = "NonIntegerResult"
    NO_MAJORITY = "NoMajority"
    MALFORMED_FRAGMENT_SET = "MalformedFragmentSet"
    TOO_MANY_COMBINATIONS = "TooManyCombinations"
    CANCELLED = "RecoveryCancelled"


class RecoveryError(Exception):
    """Base class for every reconstruction failure."""

    kind: ErrorKind = None


class InvalidDigit(RecoveryError, ValueError):
    kind = ErrorKind.INVALID_DIGIT

    def __init__(self, char: str, base: int):
        super().__init__(f"Invalid digit {char!r} for base {base}")
        self.char = char
        self.base = base


class DivisionByZero(RecoveryError, ZeroDivisionError):
    kind = ErrorKind.DIVISION_BY_ZERO


class DuplicateAbscissa(RecoveryError, ValueError):
    kind = ErrorKind.DUPLICATE_ABSCISSA

    def __init__(self, x: int):
        super().__init__(f"Two points share x={x}")
        self.x = x


class InsufficientShares(RecoveryError, ValueError):
    kind = ErrorKind.INSUFFICIENT_SHARES

    def __init__(self, n: int, k: int):
        super().__init__(f"Need at least {k} shares, got {n}")
        self.n = n
        self.k = k


class NonIntegerResult(RecoveryError, ArithmeticError):
    kind = ErrorKind.NON_INTEGER_RESULT


class NoMajority(RecoveryError):
    """Two or more candidates share the highest vote count."""

    kind = ErrorKind.NO_MAJORITY

    def __init__(self, tied: tuple, count: int, total: int):
        shown = ", ".join(str(c) for c in tied)
        super().__init__(
            f"No unique majority: {shown} each reproduced by "
            f"{count} of {total} combinations")
        self.tied = tied
        self.count = count
        self.total = total


class MalformedFragmentSet(RecoveryError, ValueError):
    kind = ErrorKind.MALFORMED_FRAGMENT_SET


class TooManyCombinations(RecoveryError):
    kind = ErrorKind.TOO_MANY_COMBINATIONS

    def __init__(self, total: int, limit: int):
        super().__init__(
            f"{total} combinations exceed the limit of {limit}")
        self.total = total
        self.limit = limit


class RecoveryCancelled(RecoveryError):
    kind = ErrorKind.CANCELLED
