"""
zmankit.engines.astro.noaa
--------------------------
Sunrise, sunset and solar noon after the NOAA solar calculator
(Meeus, "Astronomical Algorithms", low-precision solar coordinates).

All times are minutes or hours of UTC on the requested civil date. The
longitude convention inside the helpers is positive WEST, as in the NOAA
worksheets; the public calculator takes a GeoLocation (positive east) and
flips the sign once.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Dict, Optional

from ...core.time import centuries_since_j2000, jd_from_centuries, julian_day, wrap_hours
from ...core.types import GeoLocation
from .refraction import HorizonCalculator


def wrap_deg(x: float) -> float:
    return x % 360.0


# ============================================================
# Solar coordinates (T = Julian centuries since J2000.0)
# ============================================================

def mean_longitude_deg(T: float) -> float:
    return wrap_deg(280.46646 + T * (36000.76983 + 0.0003032 * T))


def mean_anomaly_deg(T: float) -> float:
    return 357.52911 + T * (35999.05029 - 0.0001537 * T)


def orbit_eccentricity(T: float) -> float:
    return 0.016708634 - T * (0.000042037 + 0.0000001267 * T)


def equation_of_center_deg(T: float) -> float:
    m = math.radians(mean_anomaly_deg(T))
    return (
        math.sin(m) * (1.914602 - T * (0.004817 + 0.000014 * T))
        + math.sin(2.0 * m) * (0.019993 - 0.000101 * T)
        + math.sin(3.0 * m) * 0.000289
    )


def _omega_deg(T: float) -> float:
    return 125.04 - 1934.136 * T


def apparent_longitude_deg(T: float) -> float:
    """True longitude corrected for aberration and the leading nutation term."""
    true_lon = mean_longitude_deg(T) + equation_of_center_deg(T)
    return true_lon - 0.00569 - 0.00478 * math.sin(math.radians(_omega_deg(T)))


def mean_obliquity_deg(T: float) -> float:
    seconds = 21.448 - T * (46.815 + T * (0.00059 - T * 0.001813))
    return 23.0 + (26.0 + seconds / 60.0) / 60.0


def obliquity_deg(T: float) -> float:
    return mean_obliquity_deg(T) + 0.00256 * math.cos(math.radians(_omega_deg(T)))


def declination_deg(T: float) -> float:
    sint = math.sin(math.radians(obliquity_deg(T))) * math.sin(math.radians(apparent_longitude_deg(T)))
    return math.degrees(math.asin(sint))


def equation_of_time_minutes(T: float) -> float:
    """Apparent minus mean solar time, in minutes."""
    eps = math.radians(obliquity_deg(T))
    l0 = math.radians(mean_longitude_deg(T))
    e = orbit_eccentricity(T)
    m = math.radians(mean_anomaly_deg(T))

    y = math.tan(eps / 2.0) ** 2
    eot = (
        y * math.sin(2.0 * l0)
        - 2.0 * e * math.sin(m)
        + 4.0 * e * y * math.sin(m) * math.cos(2.0 * l0)
        - 0.5 * y * y * math.sin(4.0 * l0)
        - 1.25 * e * e * math.sin(2.0 * m)
    )
    return math.degrees(eot) * 4.0


def hour_angle_rad(lat_deg: float, dec_deg: float, zenith: float) -> Optional[float]:
    """
    Hour angle of the morning crossing of `zenith`; the evening one is its negative.
    None when the sun never reaches that zenith.
    """
    lat = math.radians(lat_deg)
    dec = math.radians(dec_deg)
    cos_h = math.cos(math.radians(zenith)) / (math.cos(lat) * math.cos(dec)) - math.tan(lat) * math.tan(dec)
    if not -1.0 <= cos_h <= 1.0:
        return None
    return math.acos(cos_h)


# ============================================================
# Event times (minutes of UTC; lon_west positive west)
# ============================================================

def solar_noon_utc_minutes(T: float, lon_west: float) -> float:
    jd = jd_from_centuries(T)
    eqt = equation_of_time_minutes(centuries_since_j2000(jd + lon_west / 360.0))
    noon = 720.0 + lon_west * 4.0 - eqt

    eqt = equation_of_time_minutes(centuries_since_j2000(jd - 0.5 + noon / 1440.0))
    return 720.0 + lon_west * 4.0 - eqt


def _crossing_utc_minutes(jd: float, lat: float, lon_west: float, zenith: float, *, rising: bool) -> Optional[float]:
    T = centuries_since_j2000(jd)
    noon = solar_noon_utc_minutes(T, lon_west)
    # first pass uses the sun's position at local noon, the second at the first estimate
    t = centuries_since_j2000(jd + noon / 1440.0)
    minutes: Optional[float] = None
    for _ in range(2):
        ha = hour_angle_rad(lat, declination_deg(t), zenith)
        if ha is None:
            return None
        if not rising:
            ha = -ha
        minutes = 720.0 + 4.0 * (lon_west - math.degrees(ha)) - equation_of_time_minutes(t)
        t = centuries_since_j2000(jd + minutes / 1440.0)
    return minutes


def sunrise_utc_minutes(jd: float, lat: float, lon_west: float, zenith: float) -> Optional[float]:
    return _crossing_utc_minutes(jd, lat, lon_west, zenith, rising=True)


def sunset_utc_minutes(jd: float, lat: float, lon_west: float, zenith: float) -> Optional[float]:
    return _crossing_utc_minutes(jd, lat, lon_west, zenith, rising=False)


@dataclass(frozen=True)
class SolarPosition:
    """Topocentric solar position (degrees), without refraction."""
    elevation_deg: float
    azimuth_deg: float


def solar_position(moment: datetime, lat: float, lon_east: float) -> SolarPosition:
    """Elevation and azimuth (clockwise from north) of the sun at an instant."""
    utc = moment.astimezone(timezone.utc)
    day_minutes = utc.hour * 60.0 + utc.minute + utc.second / 60.0 + utc.microsecond / 6e7
    T = centuries_since_j2000(julian_day(utc.date()) + day_minutes / 1440.0)

    true_solar_minutes = day_minutes + equation_of_time_minutes(T) + 4.0 * lon_east
    ha = math.radians(true_solar_minutes / 4.0 - 180.0)
    dec = math.radians(declination_deg(T))
    phi = math.radians(lat)

    sin_el = math.sin(phi) * math.sin(dec) + math.cos(phi) * math.cos(dec) * math.cos(ha)
    elevation = math.degrees(math.asin(max(-1.0, min(1.0, sin_el))))
    azimuth = math.degrees(math.atan2(math.sin(ha), math.cos(ha) * math.sin(phi) - math.tan(dec) * math.cos(phi)))
    return SolarPosition(elevation_deg=elevation, azimuth_deg=wrap_deg(azimuth + 180.0))


# ============================================================
# Calculator
# ============================================================

@dataclass(frozen=True)
class NOAACalculator(HorizonCalculator):
    name: str = "noaa"

    def info(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "algorithm": "NOAA / Meeus low-precision solar coordinates",
            "transit": True,
            "refraction": self.params.refraction,
            "solar_radius": self.params.solar_radius,
            "earth_radius": self.params.earth_radius,
        }

    def _event(self, d: date, location: GeoLocation, zenith: float, adjust_for_elevation: bool, *, rising: bool) -> Optional[float]:
        elevation = location.elevation if adjust_for_elevation else 0.0
        z = self.adjust_zenith(zenith, elevation)
        m = _crossing_utc_minutes(julian_day(d), location.latitude, -location.longitude, z, rising=rising)
        if m is None:
            return None
        return wrap_hours(m / 60.0)

    def utc_sunrise(self, d: date, location: GeoLocation, zenith: float, adjust_for_elevation: bool) -> Optional[float]:
        return self._event(d, location, zenith, adjust_for_elevation, rising=True)

    def utc_sunset(self, d: date, location: GeoLocation, zenith: float, adjust_for_elevation: bool) -> Optional[float]:
        return self._event(d, location, zenith, adjust_for_elevation, rising=False)

    def utc_noon(self, d: date, location: GeoLocation) -> Optional[float]:
        T = centuries_since_j2000(julian_day(d))
        return wrap_hours(solar_noon_utc_minutes(T, -location.longitude) / 60.0)

    def solar_elevation(self, moment: datetime, location: GeoLocation) -> float:
        return solar_position(moment, location.latitude, location.longitude).elevation_deg

    def solar_azimuth(self, moment: datetime, location: GeoLocation) -> float:
        return solar_position(moment, location.latitude, location.longitude).azimuth_deg
