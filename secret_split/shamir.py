"""
Shamir's Secret Sharing
Split a secret into N shares where any K can reconstruct it.

Secrets of any length are cut into chunks of 1 to 7 bytes. Every chunk
is the constant term of its own random polynomial over a prime field;
evaluating those polynomials at x = 1..N gives the N shares. Any K shares
pin each polynomial down again, and Lagrange interpolation at x = 0
returns the chunks. K - 1 shares say nothing about the secret.

The chunk size grows with the number of shares: a field must hold more
elements than there are shares, so 256 shares fit into single bytes,
257 need two-byte chunks, and so on.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable

from secret_split.encoding import Share, ShareFormat, DEFAULT_FORMAT
from secret_split.errors import ConfigurationError, DuplicateShareError, InputError
from secret_split.field import MIN_CHUNK_SIZE, PrimeField, select_field
from secret_split.generators import RandomGenerator, SystemRandomGenerator
from secret_split.interpolation import join_secret
from secret_split.polynomial import evaluate, generate_coefficients

logger = logging.getLogger(__name__)


class Algorithm(ABC):
    """A threshold sharing scheme producing string shares."""

    @abstractmethod
    def share(self, secret: bytes | str, shares: int, threshold: int = 2) -> list[str]:
        """Split ``secret`` into ``shares`` strings, any ``threshold`` of which recover it."""

    @abstractmethod
    def recover(self, shares: Iterable[str]) -> bytes:
        """Rebuild the secret from enough shares."""


def _check_count(value, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    return value


def _split_chunks(secret: bytes, chunk_size: int) -> list[int]:
    """Read ``secret`` as little-endian integers, zero-filling the last chunk."""
    return [
        int.from_bytes(secret[i:i + chunk_size], "little")
        for i in range(0, len(secret), chunk_size)
    ]


class Shamir(Algorithm):
    """
    Shamir's scheme over the prime fields of 1- to 7-byte chunks.

    The instance only carries configuration. Field parameters are worked
    out per call, so one instance can serve any number of operations,
    including concurrent ones.

    Args:
        chunk_size: Minimum bytes per chunk. Raised automatically when the
            share count needs a larger prime.
        generator: Random source for coefficients. Defaults to
            SystemRandomGenerator.
        share_format: Alphabet and pad marker for share strings.
    """

    def __init__(
        self,
        chunk_size: int = MIN_CHUNK_SIZE,
        generator: RandomGenerator | None = None,
        share_format: ShareFormat | None = None,
    ):
        PrimeField.for_chunk_size(chunk_size)
        self.chunk_size = chunk_size
        self._generator = generator
        self.share_format = share_format or DEFAULT_FORMAT

    @property
    def generator(self) -> RandomGenerator:
        """The random source, created on first use."""
        if self._generator is None:
            self._generator = SystemRandomGenerator()
        return self._generator

    @generator.setter
    def generator(self, generator: RandomGenerator):
        self._generator = generator

    def share(self, secret: bytes | str, shares: int, threshold: int = 2) -> list[str]:
        """
        Split a secret into shares.

        Args:
            secret: The secret. Strings are UTF-8 encoded. May be empty.
            shares: Total shares to generate (N).
            threshold: Minimum shares needed to reconstruct (K).

        Returns:
            List of N share strings. Any K reconstruct the secret.

        Raises:
            ConfigurationError: If the parameters are invalid.
        """
        self.share_format.validate()
        shares = _check_count(shares, "Number of shares")
        threshold = _check_count(threshold, "Threshold")
        if shares < 1:
            raise ConfigurationError(f"Number of shares has to be at least 1, got {shares}")
        if threshold < 1 or threshold > shares:
            raise ConfigurationError(f"Threshold has to be between 1 and {shares}, got {threshold}")
        if threshold == 1:
            logger.warning("Threshold 1: every share carries the secret on its own")

        if isinstance(secret, str):
            secret = secret.encode("utf-8")
        if not isinstance(secret, (bytes, bytearray, memoryview)):
            raise InputError(f"Secret must be bytes or str, got {type(secret).__name__}")
        secret = bytes(secret)

        field = select_field(shares, self.chunk_size)
        padding = -len(secret) % field.chunk_size
        logger.debug(
            "Sharing %d bytes: %d shares, threshold %d, chunk size %d",
            len(secret), shares, threshold, field.chunk_size,
        )

        # One column of y-values per chunk, one row per share
        columns = []
        for chunk in _split_chunks(secret, field.chunk_size):
            coefficients = generate_coefficients(field, threshold, self.generator)
            coefficients.append(chunk)
            columns.append([evaluate(field, x, coefficients) for x in range(1, shares + 1)])

        return [
            Share(
                chunk_size=field.chunk_size,
                threshold=threshold,
                index=i + 1,
                values=tuple(column[i] for column in columns),
                padding=padding,
            ).to_string(self.share_format)
            for i in range(shares)
        ]

    def parse(self, shares: Iterable[str]) -> list[Share]:
        """
        Parse share strings and check they belong to the same sharing.

        Raises:
            InputError: If shares are missing, malformed, too few or incompatible.
            DuplicateShareError: If two shares carry the same index.
        """
        self.share_format.validate()
        if isinstance(shares, str):
            raise InputError("Expected a collection of shares, got a single string")
        parsed = [Share.from_string(s, self.share_format) for s in shares]
        if not parsed:
            raise InputError("No shares given")

        first = parsed[0]
        if first.threshold > len(parsed):
            raise InputError(
                f"Not enough shares to disclose secret: need {first.threshold}, got {len(parsed)}"
            )

        seen = set()
        for share in parsed:
            if share.chunk_size != first.chunk_size or share.threshold != first.threshold:
                raise InputError("Given shares are incompatible")
            if len(share.values) != len(first.values) or share.padding != first.padding:
                raise InputError("Given shares vary in length")
            if share.index in seen:
                raise DuplicateShareError(f"Share index {share.index} given more than once")
            seen.add(share.index)

        return parsed

    def recover(self, shares: Iterable[str]) -> bytes:
        """
        Reconstruct a secret from K or more shares using Lagrange interpolation.

        Args:
            shares: At least K share strings from the same sharing.

        Returns:
            The reconstructed secret bytes.

        Raises:
            InputError: If shares are missing, malformed, too few or incompatible.
            DuplicateShareError: If two shares carry the same index.
        """
        parsed = self.parse(shares)
        first = parsed[0]
        field = PrimeField.for_chunk_size(first.chunk_size)

        # Any K shares will do; pick by index so input order does not matter
        used = sorted(parsed, key=lambda s: s.index)[:first.threshold]
        logger.debug(
            "Recovering from %d of %d shares, chunk size %d, %d chunks",
            len(used), len(parsed), field.chunk_size, len(first.values),
        )

        secret = join_secret(
            field,
            [s.index for s in used],
            [s.values for s in used],
            len(first.values),
            first.threshold,
        )
        if first.padding:
            secret = secret[:-first.padding]
        return secret
