"""Shared fixtures for shamirvote tests."""

import json
import random
import pytest


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: marks tests as slow (process pool)")


def poly_eval(coeffs: list, x: int) -> int:
    """a_0 + a_1*x + ... with coeffs lowest degree first."""
    result = 0
    for c in reversed(coeffs):
        result = result * x + c
    return result


@pytest.fixture
def rng():
    """Deterministic RNG for reproducible tests."""
    return random.Random(42)


@pytest.fixture
def make_points():
    """Factory: points on the polynomial `coeffs` at the given xs."""
    def _make(coeffs, xs):
        return [(x, poly_eval(coeffs, x)) for x in xs]
    return _make


@pytest.fixture
def write_fragment_set(tmp_path):
    """Factory: write a fragment-set document to a JSON file, return its path."""
    counter = iter(range(1000))

    def _write(document, name=None):
        path = tmp_path / (name or f"set{next(counter)}.json")
        path.write_text(json.dumps(document), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def sample_document():
    """Six fragments on f(x) = x^2 + 3x + 7 (k=3) with x=6 corrupted."""
    return {
        "keys": {"n": 6, "k": 3},
        "1": {"base": "10", "value": "11"},
        "2": {"base": "2", "value": "10001"},
        "3": {"base": "16", "value": "19"},
        "4": {"base": "8", "value": "43"},
        "5": {"base": "36", "value": "1b"},
        "6": {"base": "10", "value": "1000"},
    }
