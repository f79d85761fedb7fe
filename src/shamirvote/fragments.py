"""Fragment sets: decoding (x, base, value) records into points.

A fragment-set document looks like

    {
        "keys": {"n": 4, "k": 3},
        "1": {"base": "10", "value": "4"},
        "2": {"base": "2", "value": "111"},
        ...
    }

Every key other than "keys" is a fragment's x-coordinate written as a
decimal integer. n, k and base may be ints or numeric strings.
"""

import json
import logging
from dataclasses import dataclass, field
from functools import cached_property
from typing import NamedTuple

from shamirvote.decode import MAX_BASE, MIN_BASE, decode
from shamirvote.errors import DuplicateAbscissa, MalformedFragmentSet

logger = logging.getLogger(__name__)

KEYS_FIELD = "keys"


class Point(NamedTuple):
    x: int
    y: int


class Fragment(NamedTuple):
    x: int
    base: int
    value: str


@dataclass
class FragmentSet:
    """A threshold descriptor plus the fragments actually supplied."""

    n: int
    k: int
    fragments: list = field(default_factory=list)
    source: str = None

    @cached_property
    def points(self) -> list:
        """Decoded points, computed once."""
        return [decode_fragment(f) for f in self.fragments]


def decode_fragment(fragment: Fragment) -> Point:
    """Decode a fragment's value in its base into an exact Point."""
    return Point(fragment.x, decode(fragment.base, fragment.value))


def _parse_int(value, what: str) -> int:
    if isinstance(value, bool):
        raise MalformedFragmentSet(f"{what} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip(), 10)
        except ValueError:
            pass
    raise MalformedFragmentSet(f"{what} must be an integer, got {value!r}")


def _reject_repeated_keys(pairs: list) -> dict:
    """json object hook: a repeated fragment id is a duplicate x."""
    out = {}
    for key, value in pairs:
        if key in out:
            try:
                x = int(key, 10)
            except ValueError:
                raise MalformedFragmentSet(f"Repeated key {key!r}") from None
            raise DuplicateAbscissa(x)
        out[key] = value
    return out


def parse_fragment_set(document: dict, source: str = None) -> FragmentSet:
    """Validate a fragment-set document and return a FragmentSet.

    Raises MalformedFragmentSet for missing or non-integer fields and
    DuplicateAbscissa when two keys name the same x (e.g. "1" and "01").
    """
    if not isinstance(document, dict):
        raise MalformedFragmentSet("Fragment set must be a JSON object")
    keys = document.get(KEYS_FIELD)
    if not isinstance(keys, dict) or "n" not in keys or "k" not in keys:
        raise MalformedFragmentSet(f'Missing "{KEYS_FIELD}" with "n" and "k"')

    n = _parse_int(keys["n"], "keys.n")
    k = _parse_int(keys["k"], "keys.k")
    if k < 1:
        raise MalformedFragmentSet(f"keys.k must be >= 1, got {k}")

    fragments = []
    seen = set()
    for key, record in document.items():
        if key == KEYS_FIELD:
            continue
        x = _parse_int(key, "fragment id")
        if x in seen:
            raise DuplicateAbscissa(x)
        seen.add(x)
        if not isinstance(record, dict) or "base" not in record or "value" not in record:
            raise MalformedFragmentSet(f'Fragment {key} needs "base" and "value"')
        value = record["value"]
        if not isinstance(value, str):
            raise MalformedFragmentSet(f"Fragment {key} value must be a string")
        base = _parse_int(record["base"], f"fragment {key} base")
        if not (MIN_BASE <= base <= MAX_BASE):
            raise MalformedFragmentSet(
                f"Fragment {key} base must be in [{MIN_BASE}, {MAX_BASE}], got {base}")
        fragments.append(Fragment(x, base, value))

    if n != len(fragments):
        logger.warning("%s declares n=%d but holds %d fragments",
                       source or "fragment set", n, len(fragments))

    return FragmentSet(n=n, k=k, fragments=fragments, source=source)


def load_fragment_set(path) -> FragmentSet:
    """Read a fragment-set JSON file."""
    with open(path, encoding="utf-8") as f:
        try:
            document = json.load(f, object_pairs_hook=_reject_repeated_keys)
        except json.JSONDecodeError as e:
            raise MalformedFragmentSet(f"{path}: invalid JSON ({e})") from e
    return parse_fragment_set(document, source=str(path))
