"""
Secret
Module-level entry points backed by a process-wide default algorithm.

    from secret_split import secret
    shares = secret.share(b"my secret", 5, 3)
    secret.recover(shares[:3])

The default algorithm and random generator can be swapped. Setters hand
back the previous object, and passing None restores the default on next use.
Reads and swaps of the defaults are serialized by a module lock.
"""

import threading
from collections.abc import Iterable

from secret_split.generators import RandomGenerator, SystemRandomGenerator
from secret_split.shamir import Algorithm, Shamir

_algorithm: Algorithm | None = None
_random_generator: RandomGenerator | None = None
_lock = threading.RLock()


def get_random_generator() -> RandomGenerator:
    """Return the default random generator, creating it if needed."""
    global _random_generator
    with _lock:
        if _random_generator is None:
            _random_generator = SystemRandomGenerator()
        return _random_generator


def set_random_generator(generator: RandomGenerator | None) -> RandomGenerator | None:
    """
    Replace the default random generator.

    The new generator is also handed to the current algorithm, if it
    takes one.

    Returns:
        The previous generator (None if none was in use yet).
    """
    global _random_generator
    with _lock:
        old = _random_generator
        _random_generator = generator
        if _algorithm is not None and hasattr(_algorithm, "generator"):
            _algorithm.generator = get_random_generator()
        return old


def get_algorithm() -> Algorithm:
    """Return the default algorithm, creating a Shamir instance if needed."""
    global _algorithm
    with _lock:
        if _algorithm is None:
            _algorithm = Shamir(generator=get_random_generator())
        return _algorithm


def set_algorithm(algorithm: Algorithm | None, pass_generator: bool = True) -> Algorithm | None:
    """
    Replace the default algorithm.

    Args:
        algorithm: The new algorithm, or None to restore the default.
        pass_generator: Hand the current default generator to the algorithm.

    Returns:
        The previous algorithm (None if none was in use yet).
    """
    global _algorithm
    with _lock:
        old = _algorithm
        _algorithm = algorithm
        if algorithm is not None and pass_generator and hasattr(algorithm, "generator"):
            algorithm.generator = get_random_generator()
        return old


def share(secret: bytes | str, shares: int, threshold: int = 2) -> list[str]:
    """Split ``secret`` with the default algorithm."""
    return get_algorithm().share(secret, shares, threshold)


def recover(shares: Iterable[str]) -> bytes:
    """Recover a secret with the default algorithm."""
    return get_algorithm().recover(shares)
