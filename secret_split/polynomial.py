"""
Polynomial Engine
Random polynomials over a prime field and their evaluation.

Each secret chunk becomes the constant term of its own polynomial of
degree threshold - 1. Evaluating that polynomial at x = 1..n gives the
chunk's value in each of the n shares.
"""

from secret_split.errors import RandomGeneratorError
from secret_split.field import PrimeField
from secret_split.generators import RandomGenerator

# Zero coefficients are redrawn at most this many times
MAX_DRAW_ATTEMPTS = 64


def generate_coefficients(field: PrimeField, threshold: int, generator: RandomGenerator) -> list[int]:
    """
    Draw the ``threshold - 1`` random coefficients of a polynomial.

    Zero is rejected so the polynomial never loses degree by accident.

    Args:
        field: The prime field of the current operation.
        threshold: Number of shares needed for reconstruction.
        generator: Source of random integers.

    Returns:
        Nonzero field elements, highest degree first.

    Raises:
        RandomGeneratorError: If the generator keeps producing zeros.
    """
    coefficients = []
    for _ in range(threshold - 1):
        for _ in range(MAX_DRAW_ATTEMPTS):
            value = field.modulo(generator.next_positive_integer(field.prime))
            if value:
                coefficients.append(value)
                break
        else:
            raise RandomGeneratorError(
                f"No nonzero coefficient after {MAX_DRAW_ATTEMPTS} draws"
            )
    return coefficients


def evaluate(field: PrimeField, x: int, coefficients: list[int]) -> int:
    """
    Evaluate a polynomial at ``x`` with Horner's method.

    11 + 7x - 5x^2 + 2x^3 is evaluated as 11 + x(7 + x(-5 + x*2)),
    so ``coefficients`` run from the highest degree down to the constant.
    """
    y = 0
    for c in coefficients:
        y = field.modulo(x * y + c)
    return y
