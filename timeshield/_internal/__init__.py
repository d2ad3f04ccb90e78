"""Internal utilities for TimeShield.

This module contains private implementation details:
    - Constants and magic numbers
    - Floor/truncating division and the u64 high-word multiply
    - The fast day-count <-> civil-date kernel and its legacy oracle
    - Raising validation helpers
    - Custom decorators (@deprecated)

Note: This module is not part of the public API.
"""

from __future__ import annotations

from timeshield._internal.decorators import deprecated
from timeshield._internal.validation import (
    validate_date,
    validate_offset,
    validate_range,
    validate_time,
)

__all__: list[str] = [
    "deprecated",
    "validate_date",
    "validate_offset",
    "validate_range",
    "validate_time",
]
