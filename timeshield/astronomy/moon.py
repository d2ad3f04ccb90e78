"""Geocentric Moon phase model.

This module provides a port of John Walker's moontool algorithm: the
Sun and Moon positions are computed from mean elements at the
1980 January 0.0 epoch with the classic periodic corrections, which is
accurate to a few minutes for phase events and well within a percent
for illumination over several centuries around the epoch.

The module-level functions share one MoonPhaseCalculator instance.

Examples:
    >>> 0.0 <= moon_phase(1704067200) < 1.0
    True
    >>> 0.0 <= moon_illumination(1704067200) <= 1.0
    True
"""

from __future__ import annotations

import math
from typing import ClassVar, NamedTuple

from timeshield._internal.constants import JD_UNIX_EPOCH, SEC_PER_DAY
from timeshield.convert.julian import fts_to_jd
from timeshield.core.boundaries import month_of_year, year_of

DEFAULT_QUARTER_WINDOW_S: float = 43200.0
SYNODIC_MONTH: float = 29.53058868

# Approximate model: mean synodic month from a reference new moon
# (2000-01-06 14:24 TT).
_APPROX_SYNODIC_MONTH = 29.530588853
_APPROX_NEW_MOON_JD = 2451550.1


class MoonPhaseResult(NamedTuple):
    """Moon and Sun geometry at an instant.

    Attributes:
        phase: Phase fraction in [0, 1); 0 is new moon, 0.5 full moon.
        illumination: Illuminated fraction of the disc in [0, 1].
        age_days: Days since the last new moon.
        distance_km: Earth-Moon distance.
        diameter_deg: Angular diameter of the Moon.
        age_deg: Phase angle in degrees, [0, 360).
        phase_angle_rad: Phase angle in radians, [0, 2*pi).
        phase_sin: sin(phase_angle_rad), continuous across new moon.
        phase_cos: cos(phase_angle_rad), continuous across new moon.
        sun_distance_km: Earth-Sun distance.
        sun_diameter_deg: Angular diameter of the Sun.
    """

    phase: float
    illumination: float
    age_days: float
    distance_km: float
    diameter_deg: float
    age_deg: float
    phase_angle_rad: float
    phase_sin: float
    phase_cos: float
    sun_distance_km: float
    sun_diameter_deg: float


class MoonQuarterInstants(NamedTuple):
    """Quarter instants of the lunations before and after an instant (Unix seconds)."""

    previous_new: float
    previous_first_quarter: float
    previous_full: float
    previous_last_quarter: float
    next_new: float
    next_first_quarter: float
    next_full: float
    next_last_quarter: float


class MoonPhaseSineCosine(NamedTuple):
    phase_sin: float
    phase_cos: float
    phase_angle_rad: float


def _fix_angle(degrees: float) -> float:
    degrees = math.fmod(degrees, 360.0)
    if degrees < 0.0:
        degrees += 360.0
    # A tiny negative remainder rounds up to exactly 360.0
    return degrees if degrees < 360.0 else 0.0


def _sin_deg(degrees: float) -> float:
    return math.sin(math.radians(degrees))


def _cos_deg(degrees: float) -> float:
    return math.cos(math.radians(degrees))


def _jd_to_unix(jd: float) -> float:
    return (jd - JD_UNIX_EPOCH) * SEC_PER_DAY


class MoonPhaseCalculator:
    """Computes Moon phase, geometry and quarter instants.

    The calculator holds no state; instances exist so the orbital
    elements can be read as class attributes.

    Examples:
        >>> calc = MoonPhaseCalculator()
        >>> result = calc.compute(0.0)
        >>> round(result.phase, 6)
        0.752075
    """

    __slots__ = ()

    # Elements at the 1980 January 0.0 epoch
    EPOCH_JD: ClassVar[float] = 2444238.5
    SUN_ECLIPTIC_LONGITUDE: ClassVar[float] = 278.833540
    SUN_PERIGEE_LONGITUDE: ClassVar[float] = 282.596403
    EARTH_ECCENTRICITY: ClassVar[float] = 0.016718
    SUN_SEMI_MAJOR_AXIS_KM: ClassVar[float] = 1.495985e8
    SUN_ANGULAR_SIZE_DEG: ClassVar[float] = 0.533128

    MOON_MEAN_LONGITUDE: ClassVar[float] = 64.975464
    MOON_PERIGEE_LONGITUDE: ClassVar[float] = 349.383063
    MOON_ECCENTRICITY: ClassVar[float] = 0.054900
    MOON_ANGULAR_SIZE_DEG: ClassVar[float] = 0.5181
    MOON_SEMI_MAJOR_AXIS_KM: ClassVar[float] = 384401.0

    KEPLER_TOLERANCE: ClassVar[float] = 1e-6
    KEPLER_MAX_ITERATIONS: ClassVar[int] = 50

    @classmethod
    def _kepler(cls, mean_anomaly_deg: float, eccentricity: float) -> float:
        """Solve Kepler's equation for the eccentric anomaly (radians)."""
        m = math.radians(mean_anomaly_deg)
        e = m
        for _ in range(cls.KEPLER_MAX_ITERATIONS):
            delta = e - eccentricity * math.sin(e) - m
            e -= delta / (1.0 - eccentricity * math.cos(e))
            if abs(delta) <= cls.KEPLER_TOLERANCE:
                break
        return e

    def compute(self, unix_s: float) -> MoonPhaseResult:
        """Compute the phase and geometry at a Unix instant in seconds."""
        day = fts_to_jd(unix_s) - self.EPOCH_JD

        # Sun
        n = _fix_angle((360.0 / 365.2422) * day)
        m = _fix_angle(n + self.SUN_ECLIPTIC_LONGITUDE - self.SUN_PERIGEE_LONGITUDE)
        ecc = self.EARTH_ECCENTRICITY
        ec = self._kepler(m, ecc)
        ec = math.sqrt((1.0 + ecc) / (1.0 - ecc)) * math.tan(ec / 2.0)
        ec = 2.0 * math.degrees(math.atan(ec))
        lambda_sun = _fix_angle(ec + self.SUN_PERIGEE_LONGITUDE)

        f = (1.0 + ecc * _cos_deg(ec)) / (1.0 - ecc * ecc)
        sun_distance = self.SUN_SEMI_MAJOR_AXIS_KM / f
        sun_diameter = f * self.SUN_ANGULAR_SIZE_DEG

        # Moon
        ml = _fix_angle(13.1763966 * day + self.MOON_MEAN_LONGITUDE)
        mm = _fix_angle(ml - 0.1114041 * day - self.MOON_PERIGEE_LONGITUDE)

        evection = 1.2739 * _sin_deg(2.0 * (ml - lambda_sun) - mm)
        annual_eq = 0.1858 * _sin_deg(m)
        correction3 = 0.37 * _sin_deg(m)
        mm_corrected = mm + evection - annual_eq - correction3

        centre_eq = 6.2886 * _sin_deg(mm_corrected)
        correction4 = 0.214 * _sin_deg(2.0 * mm_corrected)
        lp = ml + evection + centre_eq - annual_eq + correction4

        variation = 0.6583 * _sin_deg(2.0 * (lp - lambda_sun))
        lpp = lp + variation

        # Phase
        age_deg = _fix_angle(lpp - lambda_sun)
        age_rad = math.radians(age_deg)
        illumination = (1.0 - math.cos(age_rad)) / 2.0

        mecc = self.MOON_ECCENTRICITY
        moon_distance = (self.MOON_SEMI_MAJOR_AXIS_KM * (1.0 - mecc * mecc)) / (
            1.0 + mecc * _cos_deg(mm_corrected + centre_eq)
        )
        moon_diameter = self.MOON_ANGULAR_SIZE_DEG / (moon_distance / self.MOON_SEMI_MAJOR_AXIS_KM)

        phase = age_deg / 360.0
        return MoonPhaseResult(
            phase=phase,
            illumination=illumination,
            age_days=SYNODIC_MONTH * phase,
            distance_km=moon_distance,
            diameter_deg=moon_diameter,
            age_deg=age_deg,
            phase_angle_rad=age_rad,
            phase_sin=math.sin(age_rad),
            phase_cos=math.cos(age_rad),
            sun_distance_km=sun_distance,
            sun_diameter_deg=sun_diameter,
        )

    def compute_phase(self, unix_s: float) -> float:
        return self.compute(unix_s).phase

    @staticmethod
    def mean_phase(jd: float, lunation: float) -> float:
        """Julian Date of the mean new moon of a lunation counted from 1900."""
        jt = (jd - 2415020.0) / 36525.0
        t2 = jt * jt
        t3 = t2 * jt
        return (
            2415020.75933
            + SYNODIC_MONTH * lunation
            + 0.0001178 * t2
            - 0.000000155 * t3
            + 0.00033 * _sin_deg(166.56 + 132.87 * jt - 0.009173 * t2)
        )

    @staticmethod
    def true_phase(lunation: float, phase: float) -> float:
        """Julian Date of a corrected quarter instant.

        Args:
            lunation: Lunation index counted from January 1900.
            phase: One of 0.0, 0.25, 0.5 or 0.75.

        Returns:
            The corrected Julian Date. Other phase fractions get the mean
            estimate without periodic corrections.
        """
        k = lunation + phase
        t = k / 1236.85
        t2 = t * t
        t3 = t2 * t

        pt = (
            2415020.75933
            + SYNODIC_MONTH * k
            + 0.0001178 * t2
            - 0.000000155 * t3
            + 0.00033 * _sin_deg(166.56 + 132.87 * t - 0.009173 * t2)
        )

        m = 359.2242 + 29.10535608 * k - 0.0000333 * t2 - 0.00000347 * t3
        mprime = 306.0253 + 385.81691806 * k + 0.0107306 * t2 + 0.00001236 * t3
        f = 21.2964 + 390.67050646 * k - 0.0016528 * t2 - 0.00000239 * t3

        if phase < 0.01 or abs(phase - 0.5) < 0.01:
            # New and full moon
            pt += (
                (0.1734 - 0.000393 * t) * _sin_deg(m)
                + 0.0021 * _sin_deg(2 * m)
                - 0.4068 * _sin_deg(mprime)
                + 0.0161 * _sin_deg(2 * mprime)
                - 0.0004 * _sin_deg(3 * mprime)
                + 0.0104 * _sin_deg(2 * f)
                - 0.0051 * _sin_deg(m + mprime)
                - 0.0074 * _sin_deg(m - mprime)
                + 0.0004 * _sin_deg(2 * f + m)
                - 0.0004 * _sin_deg(2 * f - m)
                - 0.0006 * _sin_deg(2 * f + mprime)
                + 0.0010 * _sin_deg(2 * f - mprime)
                + 0.0005 * _sin_deg(m + 2 * mprime)
            )
            return pt

        if abs(phase - 0.25) < 0.01 or abs(phase - 0.75) < 0.01:
            pt += (
                (0.1721 - 0.0004 * t) * _sin_deg(m)
                + 0.0021 * _sin_deg(2 * m)
                - 0.6280 * _sin_deg(mprime)
                + 0.0089 * _sin_deg(2 * mprime)
                - 0.0004 * _sin_deg(3 * mprime)
                + 0.0079 * _sin_deg(2 * f)
                - 0.0119 * _sin_deg(m + mprime)
                - 0.0047 * _sin_deg(m - mprime)
                + 0.0003 * _sin_deg(2 * f + m)
                - 0.0004 * _sin_deg(2 * f - m)
                - 0.0006 * _sin_deg(2 * f + mprime)
                + 0.0021 * _sin_deg(2 * f - mprime)
                + 0.0003 * _sin_deg(m + 2 * mprime)
                + 0.0004 * _sin_deg(m - 2 * mprime)
                - 0.0003 * _sin_deg(2 * m + mprime)
            )
            if phase < 0.5:
                pt += 0.0028 - 0.0004 * _cos_deg(m) + 0.0003 * _cos_deg(mprime)
            else:
                pt += -0.0028 + 0.0004 * _cos_deg(m) - 0.0003 * _cos_deg(mprime)
            return pt

        return pt

    def quarter_times_unix(self, unix_s: float) -> tuple[float, ...]:
        """Quarter instants bracketing an instant, as Unix seconds.

        Returns eight values: new, first quarter, full and last quarter
        of the lunation containing unix_s, then the same four for the
        following lunation.
        """
        sdate = fts_to_jd(unix_s)
        adate = sdate - 45.0

        search_start = int(unix_s - SEC_PER_DAY * 45.0)
        year = year_of(search_start)
        month = month_of_year(search_start)

        k1 = math.floor((year + (month - 1) * (1.0 / 12.0) - 1900.0) * 12.3685)
        nt1 = self.mean_phase(adate, k1)
        adate = nt1
        while True:
            adate += SYNODIC_MONTH
            k2 = k1 + 1
            nt2 = self.mean_phase(adate, k2)
            if abs(nt2 - sdate) < 0.75:
                nt2 = self.true_phase(k2, 0.0)
            if nt1 <= sdate < nt2:
                break
            nt1 = nt2
            k1 = k2

        return tuple(
            _jd_to_unix(self.true_phase(k, phase))
            for k in (k1, k2)
            for phase in (0.0, 0.25, 0.5, 0.75)
        )

    def quarter_instants_unix(self, unix_s: float) -> MoonQuarterInstants:
        return MoonQuarterInstants(*self.quarter_times_unix(unix_s))

    @staticmethod
    def _is_within_window(unix_s: float, previous: float, following: float, window_s: float) -> bool:
        return abs(unix_s - previous) <= window_s or abs(unix_s - following) <= window_s

    def is_new_moon_window(self, unix_s: float, window_s: float = DEFAULT_QUARTER_WINDOW_S) -> bool:
        q = self.quarter_instants_unix(unix_s)
        return self._is_within_window(unix_s, q.previous_new, q.next_new, window_s)

    def is_full_moon_window(self, unix_s: float, window_s: float = DEFAULT_QUARTER_WINDOW_S) -> bool:
        q = self.quarter_instants_unix(unix_s)
        return self._is_within_window(unix_s, q.previous_full, q.next_full, window_s)

    def is_first_quarter_window(
        self, unix_s: float, window_s: float = DEFAULT_QUARTER_WINDOW_S
    ) -> bool:
        q = self.quarter_instants_unix(unix_s)
        return self._is_within_window(
            unix_s, q.previous_first_quarter, q.next_first_quarter, window_s
        )

    def is_last_quarter_window(
        self, unix_s: float, window_s: float = DEFAULT_QUARTER_WINDOW_S
    ) -> bool:
        q = self.quarter_instants_unix(unix_s)
        return self._is_within_window(
            unix_s, q.previous_last_quarter, q.next_last_quarter, window_s
        )


_calculator = MoonPhaseCalculator()


def moon_phase(fts: float) -> float:
    """Phase fraction in [0, 1) at a Unix instant; 0 is new moon, 0.5 full."""
    return _calculator.compute(fts).phase


def moon_age_days(fts: float) -> float:
    """Days since the last new moon."""
    return _calculator.compute(fts).age_days


def moon_illumination(fts: float) -> float:
    """Illuminated fraction of the lunar disc in [0, 1]."""
    return _calculator.compute(fts).illumination


def moon_phase_sincos(fts: float) -> MoonPhaseSineCosine:
    """Phase angle with its sine and cosine, for continuous features."""
    result = _calculator.compute(fts)
    return MoonPhaseSineCosine(result.phase_sin, result.phase_cos, result.phase_angle_rad)


def moon_quarters(fts: float) -> MoonQuarterInstants:
    return _calculator.quarter_instants_unix(fts)


def is_new_moon_window(fts: float, window_s: float = DEFAULT_QUARTER_WINDOW_S) -> bool:
    """True if a new moon lies within window_s seconds of fts."""
    return _calculator.is_new_moon_window(fts, window_s)


def is_full_moon_window(fts: float, window_s: float = DEFAULT_QUARTER_WINDOW_S) -> bool:
    return _calculator.is_full_moon_window(fts, window_s)


def is_first_quarter_window(fts: float, window_s: float = DEFAULT_QUARTER_WINDOW_S) -> bool:
    return _calculator.is_first_quarter_window(fts, window_s)


def is_last_quarter_window(fts: float, window_s: float = DEFAULT_QUARTER_WINDOW_S) -> bool:
    return _calculator.is_last_quarter_window(fts, window_s)


def moon_phase_jd_approx(fts: float) -> float:
    """Phase fraction from the mean synodic month alone.

    Cheaper than moon_phase and off by up to about half a day in age.
    """
    cycles = (fts_to_jd(fts) - _APPROX_NEW_MOON_JD) / _APPROX_SYNODIC_MONTH
    return cycles - math.floor(cycles)


def moon_age_days_jd_approx(fts: float) -> float:
    return moon_phase_jd_approx(fts) * _APPROX_SYNODIC_MONTH


__all__ = [
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
