"""
Secret Split
Threshold secret sharing: split a secret into N shares, any K of which
bring it back. Fewer than K reveal nothing.

Secrets of any length are shared chunk by chunk over small prime fields,
and every share is a compact printable string that carries everything
recovery needs: chunk size, threshold, its own index and the padding.

Usage:
    from secret_split import share, recover
    shares = share(b"correct horse battery staple", 5, 3)
    recover(shares[:3])
"""

import logging

from secret_split.errors import (
    ShamirError,
    ConfigurationError,
    InputError,
    NonInvertibleError,
    DuplicateShareError,
    RandomGeneratorError,
)
from secret_split.generators import RandomGenerator, SystemRandomGenerator, SeededRandomGenerator
from secret_split.field import PrimeField, PRIMES
from secret_split.encoding import Share, ShareFormat, convert_base, CHARS, DECIMAL, PAD_CHAR
from secret_split.shamir import Algorithm, Shamir
from secret_split.secret import share, recover

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    "share",
    "recover",
    "Shamir",
    "Algorithm",
    "Share",
    "ShareFormat",
    "convert_base",
    "CHARS",
    "DECIMAL",
    "PAD_CHAR",
    "PrimeField",
    "PRIMES",
    "RandomGenerator",
    "SystemRandomGenerator",
    "SeededRandomGenerator",
    "ShamirError",
    "ConfigurationError",
    "InputError",
    "NonInvertibleError",
    "DuplicateShareError",
    "RandomGeneratorError",
]
