"""TimeShield exception hierarchy.

All TimeShield-specific exceptions inherit from TimeShieldError.
"""

from __future__ import annotations


class TimeShieldError(Exception):
    """Base exception for all TimeShield errors."""

    pass


class ValidationError(TimeShieldError):
    """Invalid input values.

    Raised when a calendar or clock value is out of range.
    """

    pass


class InvalidDateTime(ValidationError):
    """Date or time components are out of range.

    Examples:
        - Month value outside 1-12
        - February 29 in a non-leap year
        - Hour value outside 0-23
    """

    pass


class InvalidTimeZone(ValidationError):
    """Invalid UTC offset.

    Examples:
        - Offset hour outside 0-23 or minute outside 0-59
        - Offset outside [-12h, +14h]
        - Offset that is not a whole number of minutes
    """

    pass


class ParseError(TimeShieldError):
    """Failed to parse string representation."""

    pass


class MalformedInput(ParseError):
    """The string does not have the structure of an ISO 8601 value.

    Examples:
        - "not a date"
        - One-digit month or day ("2024-3-20")
    """

    pass


class InvalidMonthName(ParseError):
    """A month name could not be matched."""

    pass


class ArithmeticOverflow(TimeShieldError):
    """Arithmetic result does not fit in a signed 64-bit integer.

    Raised when a date/time and millisecond combination cannot be
    represented as a millisecond timestamp.
    """

    pass


class NtpError(TimeShieldError):
    """NTP exchange failed.

    Attributes:
        code: An NtpErrorCode value, or the opaque code reported by
            the transport.
    """

    def __init__(self, code: int, message: str | None = None) -> None:
        self.code = int(code)
        super().__init__(message or f"NTP query failed with code {code}")


__all__ = [
    "TimeShieldError",
    "ValidationError",
    "InvalidDateTime",
    "InvalidTimeZone",
    "ParseError",
    "MalformedInput",
    "InvalidMonthName",
    "ArithmeticOverflow",
    "NtpError",
]
