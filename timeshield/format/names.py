"""Month-name lookup for parsers.

Names are matched case-insensitively against the English abbreviations
("Jan".."Dec") and full names ("January".."December").
"""

from __future__ import annotations

from timeshield.errors import InvalidMonthName
from timeshield.units.names import Month, NameFormat

_MONTH_LOOKUP: dict[str, Month] = {
    **{month.to_str(NameFormat.SHORT_NAME).lower(): month for month in Month},
    **{month.to_str(NameFormat.FULL_NAME).lower(): month for month in Month},
}


def try_month_number(name: str) -> Month | None:
    """Return the month for a name, or None if it is not recognised.

    Examples:
        >>> try_month_number("sep")
        <Month.SEPTEMBER: 9>
        >>> try_month_number("Sept") is None
        True
    """
    return _MONTH_LOOKUP.get(name.strip().lower())


def month_number(name: str) -> Month:
    """Return the month for a name.

    Raises:
        InvalidMonthName: If the name is not a month abbreviation or full name.

    Examples:
        >>> month_number("JANUARY")
        <Month.JANUARY: 1>
    """
    month = try_month_number(name)
    if month is None:
        raise InvalidMonthName(f"invalid month name: {name!r}")
    return month


__all__ = [
    "month_number",
    "try_month_number",
]
