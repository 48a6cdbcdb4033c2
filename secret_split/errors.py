"""
Errors
Everything the package raises derives from ShamirError, so callers can catch
the whole family or a single kind.

The kinds also derive from the matching builtin (ValueError, ArithmeticError,
RuntimeError), so code that only knows the builtins keeps working.
"""


class ShamirError(Exception):
    """Base class for all secret sharing errors."""


class ConfigurationError(ShamirError, ValueError):
    """Invalid sharing parameters: share count, threshold, chunk size or alphabet."""


class InputError(ShamirError, ValueError):
    """Shares handed to recovery are missing, malformed or incompatible."""


class NonInvertibleError(ShamirError, ArithmeticError):
    """A field element has no multiplicative inverse (it is zero mod prime)."""


class DuplicateShareError(NonInvertibleError):
    """Two submitted shares carry the same x-coordinate."""


class RandomGeneratorError(ShamirError, RuntimeError):
    """The random source failed to deliver a usable value."""
