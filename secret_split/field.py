"""
Prime Field Arithmetic
Modular arithmetic over the prime chosen for a sharing operation.

Secrets are processed in chunks of 1 to 7 bytes. Each chunk size has its
own prime, the smallest one above the largest value the chunk can hold,
so every chunk is a valid field element and every nonzero element has an
inverse.

A PrimeField is a frozen value owned by one share/recover call. There is
no module-level state: two operations on different primes never see each
other's parameters.
"""

import logging
from dataclasses import dataclass

from secret_split.errors import ConfigurationError, NonInvertibleError

logger = logging.getLogger(__name__)


# Smallest prime above 256**size for each supported chunk size
PRIMES = {
    1: 257,
    2: 65537,
    3: 16777259,
    4: 4294967311,
    5: 1099511627791,
    6: 281474976710677,
    7: 72057594037928017,
}

MIN_CHUNK_SIZE = min(PRIMES)
MAX_CHUNK_SIZE = max(PRIMES)


def _extended_gcd(a: int, b: int) -> tuple[int, int, int]:
    """Return ``(g, s, t)`` with ``a*s + b*t == g == gcd(a, b)``."""
    old_r, r = a, b
    old_s, s = 1, 0
    old_t, t = 0, 1
    while r:
        q = old_r // r
        old_r, r = r, old_r - q * r
        old_s, s = s, old_s - q * s
        old_t, t = t, old_t - q * t
    return old_r, old_s, old_t


@dataclass(frozen=True)
class PrimeField:
    """Arithmetic modulo ``prime`` for chunks of ``chunk_size`` bytes."""
    chunk_size: int
    prime: int

    @classmethod
    def for_chunk_size(cls, chunk_size: int, shares: int | None = None) -> "PrimeField":
        """
        Build the field for an explicit chunk size.

        Args:
            chunk_size: Bytes per chunk, 1 to 7.
            shares: If given, the number of shares the field must support.

        Raises:
            ConfigurationError: If the size is unsupported, or its prime is
                too small to give ``shares`` distinct nonzero x-coordinates.
        """
        if isinstance(chunk_size, bool) or not isinstance(chunk_size, int):
            raise ConfigurationError(f"Chunk size must be an integer, got {chunk_size!r}")
        if chunk_size not in PRIMES:
            raise ConfigurationError(
                f"Chunk size {chunk_size} not supported "
                f"(must be between {MIN_CHUNK_SIZE} and {MAX_CHUNK_SIZE})"
            )
        prime = PRIMES[chunk_size]
        if shares is not None and shares >= prime:
            raise ConfigurationError(
                f"Chunk size {chunk_size} supports fewer than {prime} shares, "
                f"{shares} requested"
            )
        return cls(chunk_size=chunk_size, prime=prime)

    @property
    def max_chunk_value(self) -> int:
        """Largest integer a chunk of this size can hold."""
        return (1 << (8 * self.chunk_size)) - 1

    def modulo(self, x: int) -> int:
        """Reduce ``x`` into ``[0, prime)``. Negative inputs included."""
        return x % self.prime

    def inverse(self, x: int) -> int:
        """
        Multiplicative inverse of ``x`` via the extended Euclidean algorithm.

        Raises:
            NonInvertibleError: If ``x`` is congruent to zero.
        """
        x = self.modulo(x)
        if x == 0:
            raise NonInvertibleError(f"0 has no inverse modulo {self.prime}")
        g, s, _ = _extended_gcd(x, self.prime)
        if g != 1:
            # Unreachable for a prime modulus
            raise NonInvertibleError(f"{x} has no inverse modulo {self.prime}")
        return self.modulo(s)


def required_chunk_size(shares: int) -> int:
    """
    Smallest chunk size whose prime exceeds ``shares``.

    Raises:
        ConfigurationError: If ``shares < 1`` or no supported size is big enough.
    """
    if isinstance(shares, bool) or not isinstance(shares, int):
        raise ConfigurationError(f"Number of shares must be an integer, got {shares!r}")
    if shares < 1:
        raise ConfigurationError(f"Number of shares must be at least 1, got {shares}")
    for size in sorted(PRIMES):
        if PRIMES[size] > shares:
            return size
    raise ConfigurationError(
        f"Number of shares has to be below {PRIMES[MAX_CHUNK_SIZE]}, got {shares}"
    )


def select_field(shares: int, chunk_size: int = MIN_CHUNK_SIZE) -> PrimeField:
    """
    Pick the field for a sharing of ``shares`` shares.

    ``chunk_size`` is a lower bound: if the share count needs a bigger prime
    the chunk size is raised to the smallest one that fits.
    """
    PrimeField.for_chunk_size(chunk_size)
    needed = required_chunk_size(shares)
    if needed > chunk_size:
        logger.debug("Raising chunk size from %d to %d for %d shares", chunk_size, needed, shares)
    return PrimeField.for_chunk_size(max(chunk_size, needed), shares=shares)
