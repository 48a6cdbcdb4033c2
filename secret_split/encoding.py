"""
Share Encoding
Arbitrary-precision base conversion and the share string grammar.

A share is a single printable string:

    <chunk size, 1 hex digit>
    <threshold, W symbols>
    <index, W symbols>
    <one value per chunk, W symbols each>
    <one pad marker per padding byte>

W is the number of alphabet symbols needed to write any element of the
chunk size's prime field. Numbers are left-padded with the alphabet's
zero symbol. The pad marker sits outside the alphabet, so the padding
tail is visible and cannot be confused with a value.
"""

from dataclasses import dataclass
from functools import lru_cache

from secret_split.errors import ConfigurationError, InputError
from secret_split.field import PRIMES

DECIMAL = "0123456789"

# Share alphabet: 47 symbols that survive copy/paste and shell quoting
CHARS = "0123456789abcdefghijklmnopqrstuvwxyz.,:;-+*#%&/"

PAD_CHAR = "="

_HEX = "0123456789abcdef"


def _check_alphabet(alphabet: str) -> None:
    if len(alphabet) < 2:
        raise ConfigurationError(f"Alphabet needs at least 2 symbols, got {alphabet!r}")
    if len(set(alphabet)) != len(alphabet):
        raise ConfigurationError(f"Alphabet repeats a symbol: {alphabet!r}")


def convert_base(number: str | int, from_alphabet: str, to_alphabet: str) -> str:
    """
    Convert a number written in one alphabet into another.

    Python integers are unbounded, so values of any size convert exactly.
    Zero comes out as the first symbol of ``to_alphabet``.

    Args:
        number: Digits in ``from_alphabet`` (an int is read as decimal).
        from_alphabet: Symbols of the source base, zero first.
        to_alphabet: Symbols of the target base, zero first.

    Returns:
        The same number written in ``to_alphabet``, without leading zeros.

    Raises:
        InputError: If ``number`` is empty or contains a foreign symbol.
    """
    _check_alphabet(from_alphabet)
    _check_alphabet(to_alphabet)
    if isinstance(number, int):
        number = str(number)
    if not number:
        raise InputError("Cannot convert an empty number")

    digits = {symbol: i for i, symbol in enumerate(from_alphabet)}
    value = 0
    for symbol in number:
        if symbol not in digits:
            raise InputError(f"Symbol {symbol!r} is not part of the source alphabet")
        value = value * len(from_alphabet) + digits[symbol]

    base = len(to_alphabet)
    if value == 0:
        return to_alphabet[0]
    out = []
    while value:
        value, digit = divmod(value, base)
        out.append(to_alphabet[digit])
    return "".join(reversed(out))


@lru_cache(maxsize=64)
def value_width(chunk_size: int, alphabet: str = CHARS) -> int:
    """Symbols needed to write any field element for ``chunk_size``."""
    # PRIMES[size] - 1 >= 256**size: the widest value a share can hold
    return len(convert_base(PRIMES[chunk_size] - 1, DECIMAL, alphabet))


@dataclass(frozen=True)
class ShareFormat:
    """Alphabet and pad marker used to write shares."""
    alphabet: str = CHARS
    pad_char: str = PAD_CHAR

    def validate(self) -> None:
        """Raise ConfigurationError if the format cannot round-trip."""
        _check_alphabet(self.alphabet)
        if len(self.pad_char) != 1:
            raise ConfigurationError(f"Pad marker must be a single character, got {self.pad_char!r}")
        if self.pad_char in self.alphabet:
            raise ConfigurationError("Padding character must not be part of the share alphabet")
        if self.pad_char in _HEX:
            raise ConfigurationError("Padding character must not be a hex digit (chunk size tag)")

    def encode_int(self, value: int, width: int) -> str:
        encoded = convert_base(value, DECIMAL, self.alphabet)
        if len(encoded) > width:
            raise InputError(f"Value {value} does not fit into {width} symbols")
        return encoded.rjust(width, self.alphabet[0])

    def decode_int(self, text: str) -> int:
        return int(convert_base(text, self.alphabet, DECIMAL))


DEFAULT_FORMAT = ShareFormat()


@dataclass(frozen=True)
class Share:
    """A single share of a split secret."""
    chunk_size: int          # Bytes per chunk (1-7)
    threshold: int           # K, shares needed to reconstruct
    index: int               # The x-coordinate (1-indexed, never 0)
    values: tuple[int, ...]  # One y-coordinate per chunk
    padding: int = 0         # Bytes to cut from the recovered secret

    def to_string(self, share_format: ShareFormat = DEFAULT_FORMAT) -> str:
        """Serialize to a portable share string."""
        width = value_width(self.chunk_size, share_format.alphabet)
        parts = [
            format(self.chunk_size, "x"),
            share_format.encode_int(self.threshold, width),
            share_format.encode_int(self.index, width),
        ]
        parts.extend(share_format.encode_int(v, width) for v in self.values)
        return "".join(parts) + share_format.pad_char * self.padding

    @classmethod
    def from_string(cls, text: str, share_format: ShareFormat = DEFAULT_FORMAT) -> "Share":
        """
        Parse a share string.

        Raises:
            InputError: If the string does not follow the share grammar.
        """
        if not isinstance(text, str):
            raise InputError(f"Share must be a string, got {type(text).__name__}")

        body = text.rstrip(share_format.pad_char)
        padding = len(text) - len(body)
        if share_format.pad_char in body:
            raise InputError("Padding characters are only allowed at the end of a share")
        if not body or body[0] not in _HEX or int(body[0], 16) not in PRIMES:
            raise InputError(f"Share does not start with a valid chunk size: {text[:1]!r}")

        chunk_size = int(body[0], 16)
        width = value_width(chunk_size, share_format.alphabet)
        rest = body[1:]
        if len(rest) < 2 * width or len(rest) % width:
            raise InputError(
                f"Share length does not match chunk size {chunk_size} "
                f"({width} symbols per field)"
            )

        fields = [share_format.decode_int(rest[i:i + width]) for i in range(0, len(rest), width)]
        threshold, index, values = fields[0], fields[1], tuple(fields[2:])

        if threshold < 1:
            raise InputError("Share encodes a threshold below 1")
        if index < 1:
            raise InputError("Share encodes an index below 1")
        if threshold >= PRIMES[chunk_size] or index >= PRIMES[chunk_size]:
            raise InputError("Share header is outside the prime field")
        if any(v >= PRIMES[chunk_size] for v in values):
            raise InputError("Share value is outside the prime field")
        if padding >= chunk_size or (padding and not values):
            raise InputError(f"Share carries {padding} padding markers for chunk size {chunk_size}")

        return cls(
            chunk_size=chunk_size,
            threshold=threshold,
            index=index,
            values=values,
            padding=padding,
        )
