"""
zmankit.engines.astronomical
----------------------------
Turns degree-based horizon crossings into local wall-clock events.

An AstronomicalCalendar binds a location, a civil date, a solar calculator and
a ZmanimConfig into one immutable value. Every event method returns an aware
datetime in the location's zone, or None when the sun does not reach the
requested zenith on that date.
"""

from __future__ import annotations
import logging
import math
from dataclasses import dataclass, field, replace
from datetime import date, datetime, timedelta, timezone
from fractions import Fraction
from typing import Callable, Optional, Union

from ..core.events import minutes as as_minutes
from ..core.events import elapsed, midpoint, time_offset
from ..core.time import split_hours
from ..core.types import Event, GeoLocation, ZmanimConfig
from ..core.zenith import ASTRONOMICAL_ZENITH, CIVIL_ZENITH, GEOMETRIC_ZENITH, NAUTICAL_ZENITH, dip
from .astro.noaa import NOAACalculator
from .interfaces import SolarEventProvider, TransitProvider

LOGGER = logging.getLogger(__name__)

StepT = Union[Fraction, str, float]

SUNRISE_DIP_STEP = Fraction(1, 10000)
SUNSET_DIP_STEP = Fraction(1, 1000)
MAX_DIP = 50.0


def _as_fraction(step: StepT) -> Fraction:
    # floats go through str() so that 0.001 stays exactly 1/1000
    if isinstance(step, float):
        return Fraction(str(step))
    return Fraction(step)


@dataclass(frozen=True)
class AstronomicalCalendar:
    location: GeoLocation
    date: date
    calculator: SolarEventProvider = field(default_factory=NOAACalculator)
    config: ZmanimConfig = field(default_factory=ZmanimConfig)

    # ============================================================
    # Context
    # ============================================================

    def with_date(self, d: date) -> "AstronomicalCalendar":
        return replace(self, date=d)

    def with_location(self, location: GeoLocation) -> "AstronomicalCalendar":
        return replace(self, location=location)

    def with_config(self, config: Optional[ZmanimConfig] = None, **kwargs) -> "AstronomicalCalendar":
        base = config if config is not None else self.config
        return replace(self, config=base.tweak(**kwargs) if kwargs else base)

    def with_calculator(self, calculator: SolarEventProvider) -> "AstronomicalCalendar":
        return replace(self, calculator=calculator)

    @property
    def provider_date(self) -> date:
        """Date handed to the calculator, shifted for zones across the 180th meridian."""
        return self.date + timedelta(days=self.location.antimeridian_adjustment(self.date))

    def _adjust_for_elevation(self, sea_level: bool) -> bool:
        return self.config.use_elevation and not sea_level

    # ============================================================
    # Raw crossings (fractional UTC hours)
    # ============================================================

    def utc_sunrise(self, zenith: float, *, sea_level: bool = False) -> Optional[float]:
        return self.calculator.utc_sunrise(
            self.provider_date, self.location, zenith, self._adjust_for_elevation(sea_level)
        )

    def utc_sunset(self, zenith: float, *, sea_level: bool = False) -> Optional[float]:
        return self.calculator.utc_sunset(
            self.provider_date, self.location, zenith, self._adjust_for_elevation(sea_level)
        )

    def hours_to_local_moment(self, hours: Optional[float]) -> Event:
        """
        Place fractional UTC hours on the calculation date, in the local zone.

        The anchor UTC date is the calculation date moved back a day when
        hours + raw offset passes 24, and forward a day when it drops below 0.
        The raw (standard) offset decides, never the daylight-adjusted one.
        """
        if hours is None or math.isnan(hours):
            return None
        anchor = self.date
        local_hours = hours + self.location.raw_offset_hours(self.date)
        if local_hours > 24:
            anchor -= timedelta(days=1)
        elif local_hours < 0:
            anchor += timedelta(days=1)

        h, m, s, us = split_hours(hours)
        utc = datetime(anchor.year, anchor.month, anchor.day, tzinfo=timezone.utc)
        utc += timedelta(hours=h, minutes=m, seconds=s, microseconds=us)
        return utc.astimezone(self.location.tzinfo)

    # ============================================================
    # Events at a zenith
    # ============================================================

    def sunrise_at(self, zenith: float, *, sea_level: bool = False) -> Event:
        moment = self.hours_to_local_moment(self.utc_sunrise(zenith, sea_level=sea_level))
        if moment is None:
            LOGGER.debug("No morning crossing of zenith %s at %s on %s", zenith, self.location, self.date)
        return moment

    def sunset_at(self, zenith: float, *, sea_level: bool = False) -> Event:
        moment = self.hours_to_local_moment(self.utc_sunset(zenith, sea_level=sea_level))
        if moment is None:
            LOGGER.debug("No evening crossing of zenith %s at %s on %s", zenith, self.location, self.date)
            return None
        sunrise = self.sunrise_at(zenith, sea_level=sea_level)
        if sunrise is not None and elapsed(sunrise, moment) <= timedelta(0):
            # aware arithmetic keeps the wall-clock time across a DST change
            moment = moment + timedelta(days=1)
        return moment

    def sunrise_offset_by_degrees(self, zenith: float) -> Event:
        return self.sunrise_at(zenith)

    def sunset_offset_by_degrees(self, zenith: float) -> Event:
        return self.sunset_at(zenith)

    def sunrise(self) -> Event:
        return self.sunrise_at(GEOMETRIC_ZENITH)

    def sea_level_sunrise(self) -> Event:
        return self.sunrise_at(GEOMETRIC_ZENITH, sea_level=True)

    def sunset(self) -> Event:
        return self.sunset_at(GEOMETRIC_ZENITH)

    def sea_level_sunset(self) -> Event:
        return self.sunset_at(GEOMETRIC_ZENITH, sea_level=True)

    def begin_civil_twilight(self) -> Event:
        return self.sunrise_at(CIVIL_ZENITH)

    def begin_nautical_twilight(self) -> Event:
        return self.sunrise_at(NAUTICAL_ZENITH)

    def begin_astronomical_twilight(self) -> Event:
        return self.sunrise_at(ASTRONOMICAL_ZENITH)

    def end_civil_twilight(self) -> Event:
        return self.sunset_at(CIVIL_ZENITH)

    def end_nautical_twilight(self) -> Event:
        return self.sunset_at(NAUTICAL_ZENITH)

    def end_astronomical_twilight(self) -> Event:
        return self.sunset_at(ASTRONOMICAL_ZENITH)

    # ============================================================
    # Transit, midnight and local mean time
    # ============================================================

    def sun_transit(self) -> Event:
        """Astronomical transit, or None if the calculator cannot compute one."""
        if not isinstance(self.calculator, TransitProvider):
            return None
        return self.hours_to_local_moment(self.calculator.utc_noon(self.provider_date, self.location))

    def sun_transit_between(self, start: Event, end: Event) -> Event:
        return midpoint(start, end)

    def midnight_last_night(self) -> datetime:
        d = self.date
        return datetime(d.year, d.month, d.day, tzinfo=self.location.tzinfo)

    def midnight_tonight(self) -> datetime:
        d = self.date + timedelta(days=1)
        return datetime(d.year, d.month, d.day, tzinfo=self.location.tzinfo)

    def local_mean_time(self, hours: float) -> datetime:
        """The moment local mean solar time reads `hours` on the calculation date."""
        if not 0 <= hours < 24:
            raise ValueError(f"Hours must be in [0, 24), got {hours}")
        d = self.provider_date
        utc = datetime(d.year, d.month, d.day, tzinfo=timezone.utc)
        utc += timedelta(milliseconds=int((hours - self.location.longitude / 15.0) * 3600000))
        return utc.astimezone(self.location.tzinfo)

    def fixed_local_chatzos(self) -> datetime:
        return self.local_mean_time(12.0)

    # ============================================================
    # Inverse: dip from a minute offset
    # ============================================================

    def dip_from_offset(
        self,
        minutes: float,
        *,
        after_sunset: bool,
        step: Optional[StepT] = None,
        max_dip: float = MAX_DIP,
        max_iterations: Optional[int] = None,
    ) -> Optional[float]:
        """
        Dip (degrees below the horizon) at which the sun stands `minutes` before
        sea-level sunrise, or `minutes` after sea-level sunset.

        Linear scan from 0 in steps of `step` degrees until the crossing passes
        the target. None if the reference event does not occur, or the scan
        runs past `max_dip` or `max_iterations` first.
        """
        if minutes is None or math.isnan(minutes):
            return None

        crossing: Callable[[float], Event]
        if after_sunset:
            reference = self.sea_level_sunset()
            target = time_offset(reference, as_minutes(minutes))
            crossing = lambda z: self.sunset_at(z, sea_level=True)  # noqa: E731
            default_step = SUNSET_DIP_STEP
        else:
            reference = self.sea_level_sunrise()
            target = time_offset(reference, -as_minutes(minutes))
            crossing = lambda z: self.sunrise_at(z, sea_level=True)  # noqa: E731
            default_step = SUNRISE_DIP_STEP
        if reference is None or target is None:
            return None
        if minutes == 0:
            return 0.0

        inc = _as_fraction(step if step is not None else default_step)
        if minutes < 0:
            inc = -inc
        # dawn moves earlier and dusk later as the dip grows
        later = after_sunset == (minutes > 0)

        zero = timedelta(0)
        degrees = Fraction(0)
        moment: Event = reference
        n = 0
        while moment is None or (elapsed(moment, target) > zero if later else elapsed(target, moment) > zero):
            degrees += inc
            n += 1
            if abs(degrees) > max_dip or (max_iterations is not None and n > max_iterations):
                LOGGER.debug(
                    "Dip search for %s minutes gave up at %s degrees after %d steps", minutes, float(degrees), n
                )
                return None
            moment = crossing(dip(degrees))
        return float(degrees)

    def sunrise_dip_from_offset(self, minutes: float, **kwargs) -> Optional[float]:
        return self.dip_from_offset(minutes, after_sunset=False, **kwargs)

    def sunset_dip_from_offset(self, minutes: float, **kwargs) -> Optional[float]:
        return self.dip_from_offset(minutes, after_sunset=True, **kwargs)

    def percent_of_temporal_hour_from_dip(self, degrees: float, *, after_sunset: bool) -> Optional[float]:
        """
        How far (in sea-level temporal hours) the twilight at `degrees` lies from
        sea-level sunrise or sunset.
        """
        rise = self.sea_level_sunrise()
        set_ = self.sea_level_sunset()
        if after_sunset:
            twilight = self.sunset_at(dip(degrees))
        else:
            twilight = self.sunrise_at(dip(degrees))
        if rise is None or set_ is None or twilight is None:
            return None
        hour = elapsed(rise, set_) / 12
        gap = elapsed(set_, twilight) if after_sunset else elapsed(twilight, rise)
        return gap / hour
