"""Integer division helpers.

Calendar boundaries need floor semantics so that instants before 1970
bucket the same way as instants after it. Python's ``//`` and ``%``
already floor for a positive divisor; these helpers name the intent,
reject non-positive divisors, and provide the truncating forms that a
few legacy formulas depend on.

This module is not part of the public API.
"""

from __future__ import annotations

from timeshield._internal.constants import INT64_MAX, INT64_MIN, UINT64_MASK


def floor_div(a: int, b: int) -> int:
    """Return floor(a / b) for a positive divisor.

    Args:
        a: Dividend (any sign).
        b: Divisor, must be positive.

    Returns:
        The quotient rounded toward negative infinity.

    Raises:
        ValueError: If b is not positive.

    Examples:
        >>> floor_div(-1, 86400)
        -1
        >>> floor_div(86399, 86400)
        0
    """
    if b <= 0:
        raise ValueError(f"divisor must be positive, got {b}")
    return a // b


def floor_mod(a: int, b: int) -> int:
    """Return the remainder r in [0, b) with a == b * floor_div(a, b) + r.

    Examples:
        >>> floor_mod(-1, 86400)
        86399
        >>> floor_mod(7, 7)
        0
    """
    if b <= 0:
        raise ValueError(f"divisor must be positive, got {b}")
    return a % b


def trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero.

    Examples:
        >>> trunc_div(-7, 2)
        -3
        >>> trunc_div(7, -2)
        -3
    """
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def trunc_mod(a: int, b: int) -> int:
    """Remainder matching trunc_div; takes the sign of the dividend."""
    return a - b * trunc_div(a, b)


def mul_hi_u64(a: int, b: int) -> int:
    """Return the high 64 bits of the 128-bit product of two u64 values.

    Both operands are reduced modulo 2**64 first, mirroring unsigned
    64-bit register arithmetic.

    Examples:
        >>> mul_hi_u64(1 << 63, 4)
        2
        >>> mul_hi_u64(12345, 678)
        0
    """
    return ((a & UINT64_MASK) * (b & UINT64_MASK)) >> 64


def wrap_u64(value: int) -> int:
    """Reduce an integer modulo 2**64."""
    return value & UINT64_MASK


def to_signed64(value: int) -> int:
    """Reinterpret a u64 bit pattern as a signed 64-bit integer."""
    value &= UINT64_MASK
    return value - (1 << 64) if value >> 63 else value


def fits_int64(value: int) -> bool:
    """Check whether a value is representable as a signed 64-bit integer."""
    return INT64_MIN <= value <= INT64_MAX


__all__ = [
    "floor_div",
    "floor_mod",
    "trunc_div",
    "trunc_mod",
    "mul_hi_u64",
    "wrap_u64",
    "to_signed64",
    "fits_int64",
]
