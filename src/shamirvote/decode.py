"""Positional decoding of fragment values into exact integers."""

from shamirvote.errors import InvalidDigit

MIN_BASE = 2
MAX_BASE = 36


def digit_value(char: str) -> int:
    """Map '0'..'9' and 'a'..'z' (any case) to 0..35, else -1."""
    if '0' <= char <= '9':
        return ord(char) - ord('0')
    lower = char.lower()
    if len(lower) == 1 and 'a' <= lower <= 'z':
        return ord(lower) - ord('a') + 10
    return -1


def decode(base: int, digits: str) -> int:
    """Decode a digit string written in `base` (2..36).

    Folds left to right: result = result * base + digit. An empty string
    decodes to 0. Raises InvalidDigit for any character that is not a
    digit of `base`, and ValueError for a base outside 2..36.
    """
    if not (MIN_BASE <= base <= MAX_BASE):
        raise ValueError(f"Base must be in [{MIN_BASE}, {MAX_BASE}], got {base}")

    result = 0
    for char in digits:
        d = digit_value(char)
        if d < 0 or d >= base:
            raise InvalidDigit(char, base)
        result = result * base + d
    return result
