"""Astronomical helpers.

This module provides the Moon phase model: phase, illumination, age,
geometry and the instants of the four quarters.
"""

from __future__ import annotations

from timeshield.astronomy.moon import (
    DEFAULT_QUARTER_WINDOW_S,
    MoonPhaseCalculator,
    MoonPhaseResult,
    MoonPhaseSineCosine,
    MoonQuarterInstants,
    SYNODIC_MONTH,
    is_first_quarter_window,
    is_full_moon_window,
    is_last_quarter_window,
    is_new_moon_window,
    moon_age_days,
    moon_age_days_jd_approx,
    moon_illumination,
    moon_phase,
    moon_phase_jd_approx,
    moon_phase_sincos,
    moon_quarters,
)

__all__: list[str] = [
    # moon
    "DEFAULT_QUARTER_WINDOW_S",
    "SYNODIC_MONTH",
    "MoonPhaseResult",
    "MoonQuarterInstants",
    "MoonPhaseSineCosine",
    "MoonPhaseCalculator",
    "moon_phase",
    "moon_age_days",
    "moon_illumination",
    "moon_phase_sincos",
    "moon_quarters",
    "is_new_moon_window",
    "is_full_moon_window",
    "is_first_quarter_window",
    "is_last_quarter_window",
    "moon_phase_jd_approx",
    "moon_age_days_jd_approx",
]
