"""Tests for the module-level facade and its default algorithm/generator."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from secret_split import secret
from secret_split.generators import RandomGenerator, SeededRandomGenerator
from secret_split.shamir import Algorithm, Shamir


class EchoAlgorithm(Algorithm):
    """Trivial algorithm recording its calls."""

    def __init__(self):
        self.calls = []

    def share(self, secret_bytes, shares, threshold=2):
        self.calls.append(("share", secret_bytes, shares, threshold))
        return ["x"] * shares

    def recover(self, shares):
        self.calls.append(("recover", list(shares)))
        return b"echo"


@pytest.fixture(autouse=True)
def reset_defaults():
    secret.set_random_generator(None)
    secret.set_algorithm(None)
    yield
    secret.set_random_generator(None)
    secret.set_algorithm(None)


def test_returns_default_algorithm():
    assert isinstance(secret.get_algorithm(), Shamir)
    assert secret.get_algorithm() is secret.get_algorithm()


def test_returns_default_random_generator():
    assert isinstance(secret.get_random_generator(), RandomGenerator)


def test_set_new_algorithm_returns_old():
    current = secret.get_algorithm()
    new = EchoAlgorithm()
    assert secret.set_algorithm(new) is current
    assert secret.get_algorithm() is new


def test_set_new_random_generator_returns_old():
    current = secret.get_random_generator()
    new = SeededRandomGenerator(b"facade")
    assert secret.set_random_generator(new) is current
    assert secret.get_random_generator() is new


def test_new_random_generator_reaches_algorithm():
    algorithm = secret.get_algorithm()
    new = SeededRandomGenerator(b"facade")
    secret.set_random_generator(new)
    assert algorithm.generator is new


def test_set_algorithm_passes_generator():
    generator = SeededRandomGenerator(b"facade")
    secret.set_random_generator(generator)
    algorithm = Shamir()
    secret.set_algorithm(algorithm)
    assert algorithm.generator is generator

    other = Shamir()
    secret.set_algorithm(other, pass_generator=False)
    assert other.generator is not generator


def test_facade_delegates():
    algorithm = EchoAlgorithm()
    secret.set_algorithm(algorithm)
    assert secret.share(b"abc", 3, 2) == ["x", "x", "x"]
    assert secret.recover(["a", "b"]) == b"echo"
    assert algorithm.calls == [("share", b"abc", 3, 2), ("recover", ["a", "b"])]


def test_facade_round_trip():
    shares = secret.share(b"Shamir's Shared Secret Implementation", 5, 2)
    assert secret.recover(shares[0:2]) == b"Shamir's Shared Secret Implementation"
    assert secret.recover(shares[1:4]) == b"Shamir's Shared Secret Implementation"


def test_seeded_default_generator_is_reproducible():
    secret.set_random_generator(SeededRandomGenerator(b"repeat"))
    first = secret.share(b"same", 4, 3)
    secret.set_random_generator(SeededRandomGenerator(b"repeat"))
    second = secret.share(b"same", 4, 3)
    assert first == second
