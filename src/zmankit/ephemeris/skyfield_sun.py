"""
zmankit.ephemeris.skyfield_sun
------------------------------
Solar events and lunar conjunctions from a JPL ephemeris through skyfield.

Crossings are searched over the 24 hours centred on local mean noon, so the
result belongs to the same solar day as the almanac calculators' answer.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, Optional

from ..core.types import GeoLocation
from ..engines.astro.refraction import HorizonCalculator, HorizonParams
from . import require_ephemeris


@dataclass(frozen=True)
class SkyfieldParams:
    horizon: HorizonParams = field(default_factory=HorizonParams)
    ephemeris: str = "de421.bsp"
    directory: Optional[str] = None     # skyfield's default loader cache when None


def _load(params: SkyfieldParams):
    require_ephemeris()
    from skyfield.api import Loader, load

    loader = Loader(params.directory) if params.directory else load
    return loader.timescale(), loader(params.ephemeris)


def _hours(t) -> float:
    dt = t.utc_datetime()
    return dt.hour + dt.minute / 60.0 + (dt.second + dt.microsecond / 1e6) / 3600.0


@dataclass(frozen=True)
class SkyfieldCalculator(HorizonCalculator):
    name: str = "skyfield"
    ts: Any = field(default=None, compare=False, repr=False)
    eph: Any = field(default=None, compare=False, repr=False)

    @classmethod
    def from_params(cls, params: SkyfieldParams, *, name: str = "skyfield") -> "SkyfieldCalculator":
        ts, eph = _load(params)
        return cls(params=params.horizon, name=name, ts=ts, eph=eph)

    def info(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "algorithm": "JPL ephemeris via skyfield",
            "transit": True,
            "refraction": self.params.refraction,
            "solar_radius": self.params.solar_radius,
            "earth_radius": self.params.earth_radius,
        }

    def _window(self, d: date, location: GeoLocation):
        start = datetime(d.year, d.month, d.day, tzinfo=timezone.utc) - timedelta(hours=location.longitude / 15.0)
        return self.ts.from_datetime(start), self.ts.from_datetime(start + timedelta(days=1))

    def _topos(self, location: GeoLocation):
        from skyfield.api import wgs84
        return wgs84.latlon(location.latitude, location.longitude)

    def _event(self, d: date, location: GeoLocation, zenith: float, adjust_for_elevation: bool, *, rising: bool) -> Optional[float]:
        from skyfield import almanac

        elevation = location.elevation if adjust_for_elevation else 0.0
        z = self.adjust_zenith(zenith, elevation)
        f = almanac.risings_and_settings(
            self.eph, self.eph["Sun"], self._topos(location), horizon_degrees=90.0 - z, radius_degrees=0.0
        )
        t0, t1 = self._window(d, location)
        times, kinds = almanac.find_discrete(t0, t1, f)
        wanted = 1 if rising else 0
        for t, k in zip(times, kinds):
            if int(k) == wanted:
                return _hours(t)
        return None

    def utc_sunrise(self, d: date, location: GeoLocation, zenith: float, adjust_for_elevation: bool) -> Optional[float]:
        return self._event(d, location, zenith, adjust_for_elevation, rising=True)

    def utc_sunset(self, d: date, location: GeoLocation, zenith: float, adjust_for_elevation: bool) -> Optional[float]:
        return self._event(d, location, zenith, adjust_for_elevation, rising=False)

    def utc_noon(self, d: date, location: GeoLocation) -> Optional[float]:
        from skyfield import almanac

        f = almanac.meridian_transits(self.eph, self.eph["Sun"], self._topos(location))
        t0, t1 = self._window(d, location)
        times, kinds = almanac.find_discrete(t0, t1, f)
        for t, k in zip(times, kinds):
            if int(k) == 1:
                return _hours(t)
        return None


@dataclass(frozen=True)
class SkyfieldConjunctionProvider:
    """
    MoladProvider returning the true (astronomical) new moon nearest a date.

    This is not the calendrical molad, which runs on a mean month; it is
    useful for comparing against one.
    """
    ts: Any = field(compare=False, repr=False)
    eph: Any = field(compare=False, repr=False)

    @classmethod
    def from_params(cls, params: SkyfieldParams) -> "SkyfieldConjunctionProvider":
        ts, eph = _load(params)
        return cls(ts=ts, eph=eph)

    def molad(self, d: date) -> Optional[datetime]:
        from skyfield import almanac

        noon = datetime(d.year, d.month, d.day, 12, tzinfo=timezone.utc)
        t0 = self.ts.from_datetime(noon - timedelta(days=20))
        t1 = self.ts.from_datetime(noon + timedelta(days=20))
        times, phases = almanac.find_discrete(t0, t1, almanac.moon_phases(self.eph))
        new_moons = [t.utc_datetime() for t, ph in zip(times, phases) if int(ph) == 0]
        if not new_moons:
            return None
        return min(new_moons, key=lambda m: abs(m - noon))
