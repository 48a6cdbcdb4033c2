"""Tests for field arithmetic, parameter selection, polynomials and interpolation."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from secret_split.errors import (
    ConfigurationError,
    DuplicateShareError,
    InputError,
    NonInvertibleError,
    RandomGeneratorError,
)
from secret_split.field import PRIMES, PrimeField, required_chunk_size, select_field
from secret_split.generators import RandomGenerator
from secret_split.interpolation import join_secret, reverse_coefficients
from secret_split.polynomial import evaluate, generate_coefficients


class ScriptedGenerator(RandomGenerator):
    """Hands out a fixed sequence of integers."""

    def __init__(self, values):
        self.values = list(values)
        self.bounds = []

    def next_positive_integer(self, bound=None):
        self.bounds.append(bound)
        return self.values.pop(0)


def _is_probable_prime(n):
    d, r = n - 1, 0
    while d % 2 == 0:
        d, r = d // 2, r + 1
    for a in [2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41]:
        if a % n == 0:
            continue
        x = pow(a, d, n)
        if x in (1, n - 1):
            continue
        for _ in range(r - 1):
            x = pow(x, 2, n)
            if x == n - 1:
                break
        else:
            return False
    return True


def test_prime_table():
    for size, prime in PRIMES.items():
        assert prime > 256 ** size
        assert _is_probable_prime(prime)
        # Smallest prime above the chunk range
        assert not any(_is_probable_prime(c) for c in range(256 ** size + 1, prime))


def test_modulo_handles_negatives():
    field = PrimeField.for_chunk_size(1)
    assert field.modulo(-1) == 256
    assert field.modulo(-257) == 0
    assert field.modulo(514) == 0
    assert field.modulo(300) == 43


def test_inverse_small_field():
    field = PrimeField.for_chunk_size(1)
    for x in range(1, 257):
        assert (x * field.inverse(x)) % 257 == 1
    assert field.inverse(-1) == 256


def test_inverse_large_field():
    field = PrimeField.for_chunk_size(7)
    for x in [2, 3, 2 ** 55 + 12345, field.prime - 1]:
        assert (x * field.inverse(x)) % field.prime == 1


def test_inverse_of_zero_fails():
    field = PrimeField.for_chunk_size(2)
    with pytest.raises(NonInvertibleError):
        field.inverse(0)
    with pytest.raises(ArithmeticError):
        field.inverse(field.prime)


def test_fields_do_not_share_state():
    small = PrimeField.for_chunk_size(1)
    large = PrimeField.for_chunk_size(4)
    assert small.inverse(3) == 86
    assert large.inverse(3) == pow(3, -1, large.prime)
    assert small.inverse(3) == 86


def test_required_chunk_size():
    assert required_chunk_size(1) == 1
    assert required_chunk_size(256) == 1
    assert required_chunk_size(257) == 2
    assert required_chunk_size(65536) == 2
    assert required_chunk_size(65537) == 3
    assert required_chunk_size(PRIMES[7] - 1) == 7


def test_required_chunk_size_rejects_out_of_range():
    with pytest.raises(ConfigurationError):
        required_chunk_size(0)
    with pytest.raises(ConfigurationError):
        required_chunk_size(-5)
    with pytest.raises(ConfigurationError):
        required_chunk_size(PRIMES[7])


def test_select_field_escalates():
    assert select_field(10).chunk_size == 1
    assert select_field(300).chunk_size == 2
    assert select_field(300).prime == 65537
    assert select_field(10, chunk_size=3).chunk_size == 3


def test_explicit_chunk_size_validation():
    with pytest.raises(ConfigurationError):
        PrimeField.for_chunk_size(0)
    with pytest.raises(ConfigurationError):
        PrimeField.for_chunk_size(8)
    with pytest.raises(ConfigurationError):
        PrimeField.for_chunk_size("1")
    with pytest.raises(ConfigurationError):
        PrimeField.for_chunk_size(1, shares=300)
    with pytest.raises(ConfigurationError):
        select_field(10, chunk_size=0)
    assert PrimeField.for_chunk_size(1, shares=256).prime == 257


def test_horner_evaluation():
    field = PrimeField.for_chunk_size(1)
    # 2x^2 + 3x + 5 at x = 2
    assert evaluate(field, 2, [2, 3, 5]) == 19
    # Constant polynomial
    assert evaluate(field, 9, [42]) == 42
    # Wraps around the prime: 256x + 1 at x = 2 is 513 = 2*257 - 1
    assert evaluate(field, 2, [256, 1]) == 256


def test_generate_coefficients_rejects_zero():
    field = PrimeField.for_chunk_size(1)
    generator = ScriptedGenerator([257, 5, 514, 7])
    assert generate_coefficients(field, 3, generator) == [5, 7]
    assert generator.bounds == [257, 257, 257, 257]


def test_generate_coefficients_gives_up_on_broken_source():
    field = PrimeField.for_chunk_size(1)
    generator = ScriptedGenerator([257] * 1000)
    with pytest.raises(RandomGeneratorError):
        generate_coefficients(field, 2, generator)


def test_generate_coefficients_threshold_one():
    field = PrimeField.for_chunk_size(1)
    assert generate_coefficients(field, 1, ScriptedGenerator([])) == []


def test_reverse_coefficients_recover_constant():
    field = PrimeField.for_chunk_size(1)
    coefficients = [17, 200, 65]
    xs = [2, 5, 7]
    ys = [[evaluate(field, x, coefficients)] for x in xs]
    assert join_secret(field, xs, ys, 1, 3) == bytes([65])


def test_reverse_coefficients_duplicate_x():
    field = PrimeField.for_chunk_size(1)
    with pytest.raises(DuplicateShareError):
        reverse_coefficients(field, [3, 4, 3], 3)
    # Index 258 collides with 1 modulo 257
    with pytest.raises(DuplicateShareError):
        reverse_coefficients(field, [1, 258], 2)


def test_join_secret_little_endian_chunks():
    field = PrimeField.for_chunk_size(2)
    # Threshold 1: the y-values are the chunk values themselves
    chunks = [int.from_bytes(b"AB", "little"), int.from_bytes(b"C\x00", "little")]
    assert join_secret(field, [1], [chunks], 2, 1) == b"ABC\x00"


def test_join_secret_rejects_values_beyond_chunk_range():
    field = PrimeField.for_chunk_size(1)
    with pytest.raises(InputError):
        join_secret(field, [1], [[256]], 1, 1)
    assert join_secret(field, [1], [[255]], 1, 1) == b"\xff"
