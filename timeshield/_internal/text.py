"""Small text helpers shared by the formatters.

This module is not part of the public API.
"""

from __future__ import annotations


def zero_pad(value: int, width: int) -> str:
    """Zero-pad the digits of value to width, keeping the sign in front.

    Matches C's ``%.Nd``: the sign does not count towards the width.

    Examples:
        >>> zero_pad(7, 2)
        '07'
        >>> zero_pad(-1, 4)
        '-0001'
        >>> zero_pad(12345, 4)
        '12345'
    """
    sign = "-" if value < 0 else ""
    return f"{sign}{abs(value):0{width}d}"


__all__ = ["zero_pad"]
