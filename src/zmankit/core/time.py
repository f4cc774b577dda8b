from __future__ import annotations
from datetime import date
from typing import Tuple

JD_J2000 = 2451545.0
DAYS_PER_CENTURY = 36525.0


def to_jdn(d: date) -> int:
    """Convert Gregorian date to Julian Day Number (JDN)."""
    y, m, day = d.year, d.month, d.day
    a = (14 - m) // 12
    y2 = y + 4800 - a
    m2 = m + 12 * a - 3
    return day + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - y2 // 100 + y2 // 400 - 32045


def julian_day(d: date) -> float:
    """Julian Day at 0h UT of the given date."""
    return to_jdn(d) - 0.5


def centuries_since_j2000(jd: float) -> float:
    return (jd - JD_J2000) / DAYS_PER_CENTURY


def jd_from_centuries(t: float) -> float:
    return t * DAYS_PER_CENTURY + JD_J2000


def day_of_year(d: date) -> int:
    return (d - date(d.year, 1, 1)).days + 1


def wrap_hours(hours: float) -> float:
    """Wrap fractional hours into [0, 24)."""
    return hours % 24.0


def split_hours(hours: float) -> Tuple[int, int, int, int]:
    """
    Split non-negative fractional hours into (hour, minute, second, microsecond).

    Each component is truncated, and the sub-second part keeps millisecond
    resolution.
    """
    h = int(hours)
    rest = (hours - h) * 60.0
    m = int(rest)
    rest = (rest - m) * 60.0
    s = int(rest)
    ms = int((rest - s) * 1000.0)
    return h, m, s, ms * 1000
