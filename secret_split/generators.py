"""
Random Sources
Supply positive integers for polynomial coefficients.

The sharing algorithm only ever asks for ``next_positive_integer(bound)``,
so any object implementing RandomGenerator can be plugged in. Two sources
ship with the package:

  SystemRandomGenerator  — os.urandom, the default. Cryptographically strong.
  SeededRandomGenerator  — ChaCha20 keystream keyed from a seed (HKDF-SHA256).
                           Reproducible output for fixtures and tests.

Both map raw bytes onto the requested range by rejection sampling, never by
plain modulo reduction, so every value in range is equally likely.
"""

import os
import threading
from abc import ABC, abstractmethod

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from secret_split.errors import ConfigurationError, RandomGeneratorError


DEFAULT_NUM_BYTES = 8   # 64-bit draws when no bound is requested
MAX_SAMPLE_ATTEMPTS = 128

# ChaCha20 parameters
KEY_SIZE = 32
NONCE_SIZE = 16  # 4-byte counter + 12-byte nonce, as cryptography expects

_SEED_CONTEXT = b"secret-split-seeded-generator-v1"


class RandomGenerator(ABC):
    """Source of positive integers for coefficient generation."""

    @abstractmethod
    def next_positive_integer(self, bound: int | None = None) -> int:
        """
        Return a uniformly distributed integer.

        Args:
            bound: Exclusive upper limit. The result lies in ``[1, bound)``.
                Without a bound the generator picks its own native range.

        Returns:
            A positive integer.
        """


class ByteStreamGenerator(RandomGenerator):
    """
    Turns a stream of random bytes into unbiased integers.

    Subclasses only provide ``random_bytes``. The integer range is covered
    by rejection sampling: draws above the largest multiple of the range
    size are discarded and redrawn.

    Args:
        num_bytes: Width of a draw when no bound is given.
    """

    def __init__(self, num_bytes: int = DEFAULT_NUM_BYTES):
        if num_bytes < 1:
            raise ConfigurationError(f"num_bytes must be at least 1, got {num_bytes}")
        self.num_bytes = num_bytes

    @abstractmethod
    def random_bytes(self, n: int) -> bytes:
        """Return ``n`` random bytes."""

    def next_positive_integer(self, bound: int | None = None) -> int:
        if bound is None:
            bound = 1 << (8 * self.num_bytes)
        if bound < 2:
            raise ConfigurationError(f"bound must be at least 2, got {bound}")

        span = bound - 1  # number of values in [1, bound)
        width = max(1, ((span - 1).bit_length() + 7) // 8)
        space = 1 << (8 * width)
        limit = space - space % span

        for _ in range(MAX_SAMPLE_ATTEMPTS):
            raw = self.random_bytes(width)
            if len(raw) != width:
                raise RandomGeneratorError(
                    f"Random source returned {len(raw)} bytes, expected {width}"
                )
            candidate = int.from_bytes(raw, "little")
            if candidate < limit:
                return 1 + candidate % span

        raise RandomGeneratorError(
            f"No value below {limit} after {MAX_SAMPLE_ATTEMPTS} draws. "
            "The random source looks broken."
        )


class SystemRandomGenerator(ByteStreamGenerator):
    """Operating system CSPRNG (``os.urandom``). The default source."""

    def random_bytes(self, n: int) -> bytes:
        return os.urandom(n)


class SeededRandomGenerator(ByteStreamGenerator):
    """
    Deterministic generator driven by a ChaCha20 keystream.

    The same seed always produces the same sequence, which makes share
    output reproducible. The key is stretched from the seed with HKDF,
    so short or structured seeds are fine; secrecy of the shares still
    depends entirely on the secrecy of the seed.

    Args:
        seed: Seed material. Strings are UTF-8 encoded.
        num_bytes: Width of a draw when no bound is given.
    """

    def __init__(self, seed: bytes | str, num_bytes: int = DEFAULT_NUM_BYTES):
        super().__init__(num_bytes)
        if isinstance(seed, str):
            seed = seed.encode("utf-8")
        if not seed:
            raise ConfigurationError("Seed must not be empty")

        hkdf = HKDF(
            algorithm=hashes.SHA256(),
            length=KEY_SIZE,
            salt=None,
            info=_SEED_CONTEXT,
        )
        key = hkdf.derive(bytes(seed))
        cipher = Cipher(algorithms.ChaCha20(key, b"\x00" * NONCE_SIZE), mode=None)
        self._keystream = cipher.encryptor()
        self._lock = threading.Lock()

    def random_bytes(self, n: int) -> bytes:
        # Encrypting zeros yields the raw keystream
        with self._lock:
            return self._keystream.update(b"\x00" * n)
