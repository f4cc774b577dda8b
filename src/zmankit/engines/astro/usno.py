"""
zmankit.engines.astro.usno
--------------------------
Sunrise and sunset after the US Naval Observatory "Almanac for Computers"
algorithm. Coarser than NOAA (about a minute), but closed-form and without
iteration. Solar noon is approximated as the midpoint of the geometric
sunrise and sunset.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional

from ...core.time import day_of_year
from ...core.types import GeoLocation
from ...core.zenith import GEOMETRIC_ZENITH
from .refraction import HorizonCalculator

DEG_PER_HOUR = 360.0 / 24.0


def _sin(deg: float) -> float:
    return math.sin(math.radians(deg))


def _cos(deg: float) -> float:
    return math.cos(math.radians(deg))


def approx_time_days(doy: int, lon_hours: float, *, rising: bool) -> float:
    return doy + ((6.0 if rising else 18.0) - lon_hours) / 24.0


def true_longitude_deg(mean_anomaly: float) -> float:
    return (mean_anomaly + 1.916 * _sin(mean_anomaly) + 0.020 * _sin(2.0 * mean_anomaly) + 282.634) % 360.0


def right_ascension_hours(true_lon: float) -> float:
    ra = math.degrees(math.atan(0.91764 * math.tan(math.radians(true_lon))))
    # put RA in the same quadrant as the longitude
    ra += math.floor(true_lon / 90.0) * 90.0 - math.floor(ra / 90.0) * 90.0
    return ra / DEG_PER_HOUR


def cos_local_hour_angle(true_lon: float, lat: float, zenith: float) -> float:
    sin_dec = 0.39782 * _sin(true_lon)
    cos_dec = math.cos(math.asin(sin_dec))
    return (_cos(zenith) - sin_dec * _sin(lat)) / (cos_dec * _cos(lat))


def crossing_utc_hours(d: date, lat: float, lon_east: float, zenith: float, *, rising: bool) -> Optional[float]:
    doy = day_of_year(d)
    lon_hours = lon_east / DEG_PER_HOUR
    # both the approximate time and the final shift use the longitude
    t = approx_time_days(doy, lon_hours, rising=rising)

    true_lon = true_longitude_deg(0.9856 * t - 3.289)
    ra = right_ascension_hours(true_lon)

    cos_h = cos_local_hour_angle(true_lon, lat, zenith)
    if not -1.0 <= cos_h <= 1.0:
        return None
    h = math.degrees(math.acos(cos_h))
    if rising:
        h = 360.0 - h

    local_mean = h / DEG_PER_HOUR + ra - 0.06571 * t - 6.622
    return (local_mean - lon_hours) % 24.0


@dataclass(frozen=True)
class USNOCalculator(HorizonCalculator):
    name: str = "usno"

    def info(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "algorithm": "US Naval Almanac",
            "transit": True,
            "refraction": self.params.refraction,
            "solar_radius": self.params.solar_radius,
            "earth_radius": self.params.earth_radius,
        }

    def _event(self, d: date, location: GeoLocation, zenith: float, adjust_for_elevation: bool, *, rising: bool) -> Optional[float]:
        elevation = location.elevation if adjust_for_elevation else 0.0
        z = self.adjust_zenith(zenith, elevation)
        return crossing_utc_hours(d, location.latitude, location.longitude, z, rising=rising)

    def utc_sunrise(self, d: date, location: GeoLocation, zenith: float, adjust_for_elevation: bool) -> Optional[float]:
        return self._event(d, location, zenith, adjust_for_elevation, rising=True)

    def utc_sunset(self, d: date, location: GeoLocation, zenith: float, adjust_for_elevation: bool) -> Optional[float]:
        return self._event(d, location, zenith, adjust_for_elevation, rising=False)

    def utc_noon(self, d: date, location: GeoLocation) -> Optional[float]:
        rise = self.utc_sunrise(d, location, GEOMETRIC_ZENITH, False)
        set_ = self.utc_sunset(d, location, GEOMETRIC_ZENITH, False)
        if rise is None or set_ is None:
            return None
        noon = rise + (set_ - rise) / 2.0
        if noon < 0:
            noon += 12.0
        if noon < rise:
            noon -= 12.0
        return noon % 24.0
