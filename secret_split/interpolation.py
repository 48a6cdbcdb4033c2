"""
Interpolation Engine
Lagrange interpolation at x = 0 to recover the chunks of a secret.
"""

from secret_split.errors import DuplicateShareError, InputError, NonInvertibleError
from secret_split.field import PrimeField


def reverse_coefficients(field: PrimeField, xs: list[int], threshold: int) -> list[int]:
    """
    Compute the Lagrange basis values at x = 0 for the first ``threshold`` points.

    For point i this is the product over j != i of -x_j / (x_i - x_j).

    Raises:
        DuplicateShareError: If two of the x-coordinates are equal.
    """
    coefficients = []
    for i in range(threshold):
        temp = 1
        for j in range(threshold):
            if i == j:
                continue
            try:
                denominator = field.inverse(xs[i] - xs[j])
            except NonInvertibleError as e:
                raise DuplicateShareError(
                    f"Repeated share index {xs[i]}: cannot compute reverse coefficients"
                ) from e
            temp = field.modulo(-temp * xs[j] * denominator)
        coefficients.append(temp)
    return coefficients


def join_secret(
    field: PrimeField,
    xs: list[int],
    ys: list[list[int]],
    chunk_count: int,
    threshold: int,
) -> bytes:
    """
    Recombine share values into the (still padded) secret bytes.

    Args:
        field: The prime field the shares were made in.
        xs: Share indices (x-coordinates).
        ys: ``ys[j][chunk]`` is share j's value for that chunk.
        chunk_count: Number of chunks in every share.
        threshold: How many shares take part.

    Returns:
        ``chunk_count * field.chunk_size`` bytes.

    Raises:
        InputError: If a recombined chunk does not fit into ``chunk_size`` bytes.
    """
    coefficients = reverse_coefficients(field, xs, threshold)

    secret = bytearray()
    for chunk in range(chunk_count):
        temp = 0
        for j in range(threshold):
            temp = field.modulo(temp + ys[j][chunk] * coefficients[j])
        if temp > field.max_chunk_value:
            raise InputError("Shares do not belong to the same secret")

        # Chunks are little-endian
        for _ in range(field.chunk_size):
            temp, byte = divmod(temp, 256)
            secret.append(byte)

    return bytes(secret)
