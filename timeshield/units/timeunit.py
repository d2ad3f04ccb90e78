"""TimeUnit enumeration for fixed-length time units.

This module provides the TimeUnit enum representing the units the
library rescales between, from nanoseconds up to weeks.
"""

from __future__ import annotations

from enum import Enum


class TimeUnit(Enum):
    """Fixed-length time units.

    Each member's value is its length in nanoseconds, so any two units
    convert with exact integer arithmetic. Calendar units (month, year)
    have no fixed length and are not members.

    Examples:
        >>> TimeUnit.HOUR.to_seconds()
        3600

        >>> TimeUnit.SECOND.convert(1500, TimeUnit.MILLISECOND)
        1

        >>> TimeUnit.SECOND.convert(2.5, TimeUnit.MINUTE)
        150
    """

    NANOSECOND = 1
    MICROSECOND = 1_000
    MILLISECOND = 1_000_000
    SECOND = 1_000_000_000
    MINUTE = 60_000_000_000
    HOUR = 3_600_000_000_000
    DAY = 86_400_000_000_000
    WEEK = 604_800_000_000_000

    @property
    def nanoseconds(self) -> int:
        """Length of one unit in nanoseconds."""
        return self.value

    def to_seconds(self) -> int | float:
        """Length of one unit in seconds; a float for sub-second units."""
        if self.value >= TimeUnit.SECOND.value:
            return self.value // TimeUnit.SECOND.value
        return self.value / TimeUnit.SECOND.value

    def convert(self, value: int | float, source: TimeUnit) -> int:
        """Express ``value`` given in ``source`` units in this unit.

        Up-scaling an int is exact. Down-scaling an int floors. Float
        input is rounded half-to-even after scaling.

        Args:
            value: Amount in source units.
            source: Unit that value is expressed in.

        Returns:
            The amount in this unit.
        """
        if isinstance(value, float):
            return round(value * source.value / self.value)
        if source.value >= self.value:
            return value * (source.value // self.value)
        return value // (self.value // source.value)


__all__ = ["TimeUnit"]
