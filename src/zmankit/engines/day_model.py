"""
zmankit.engines.day_model
-------------------------
Proportional ("temporal") hours over a day window.

Every derived day-marker is `evaluate(window, hours)`: the window start plus
`hours` twelfths of the window. A missing endpoint makes the result None.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from ..core.errors import InvalidWindowError
from ..core.events import elapsed, midpoint, minutes, time_offset
from ..core.types import DayWindow, Event
from ..core.zenith import GEOMETRIC_ZENITH
from .astronomical import AstronomicalCalendar


# ============================================================
# Pure formulas
# ============================================================

def temporal_hour_length(window: DayWindow) -> Optional[timedelta]:
    if not window.is_defined:
        return None
    span = elapsed(window.start, window.end)
    if span <= timedelta(0):
        raise InvalidWindowError(f"Day window ends at {window.end}, not after its start {window.start}")
    return span / 12


def evaluate(window: DayWindow, hours: float) -> Event:
    """`hours` temporal hours after the window start."""
    length = temporal_hour_length(window)
    if length is None:
        return None
    return time_offset(window.start, length * hours)


def evaluate_half_day(start_of_half: Event, end_of_half: Event, hours: float) -> Event:
    """
    Treat a half day as six proportional hours. Non-negative hours count from
    its start, negative hours back from its end.
    """
    if start_of_half is None or end_of_half is None:
        return None
    span = elapsed(start_of_half, end_of_half)
    if span <= timedelta(0):
        raise InvalidWindowError(f"Half day ends at {end_of_half}, not after its start {start_of_half}")
    length = span / 6
    if hours >= 0:
        return time_offset(start_of_half, length * hours)
    return time_offset(end_of_half, length * hours)


def chatzos(window: DayWindow, *, astronomical_transit: bool, transit: Event = None) -> Event:
    """Transit when requested and known, else the window midpoint."""
    if astronomical_transit and transit is not None:
        return transit
    return midpoint(window.start, window.end)


# ============================================================
# Context-bound model
# ============================================================

@dataclass(frozen=True)
class DayModel:
    """Day-model evaluation bound to one AstronomicalCalendar and its config."""
    calendar: AstronomicalCalendar

    @property
    def config(self):
        return self.calendar.config

    def elevation_adjusted_sunrise(self) -> Event:
        return self.calendar.sunrise() if self.config.use_elevation else self.calendar.sea_level_sunrise()

    def elevation_adjusted_sunset(self) -> Event:
        return self.calendar.sunset() if self.config.use_elevation else self.calendar.sea_level_sunset()

    def day_window(self, start: Event = None, end: Event = None, *, synchronous: bool = True) -> DayWindow:
        """Window defaulting to the elevation-adjusted sunrise and sunset."""
        if start is None and end is None:
            start, end = self.elevation_adjusted_sunrise(), self.elevation_adjusted_sunset()
        return DayWindow.of(start, end, synchronous=synchronous)

    def sea_level_window(self) -> DayWindow:
        return DayWindow.of(self.calendar.sea_level_sunrise(), self.calendar.sea_level_sunset())

    def degree_window(self, dip_degrees: float, dusk_dip_degrees: Optional[float] = None) -> DayWindow:
        """
        Dawn and dusk at the given dips. A window whose ends use different dips
        is asynchronous.
        """
        dusk = dip_degrees if dusk_dip_degrees is None else dusk_dip_degrees
        return DayWindow.of(
            self.calendar.sunrise_offset_by_degrees(GEOMETRIC_ZENITH + dip_degrees),
            self.calendar.sunset_offset_by_degrees(GEOMETRIC_ZENITH + dusk),
            synchronous=dusk == dip_degrees,
        )

    def minute_window(self, before_sunrise: float, after_sunset: Optional[float] = None) -> DayWindow:
        """Dawn and dusk at fixed minute offsets from the elevation-adjusted sunrise and sunset."""
        after = before_sunrise if after_sunset is None else after_sunset
        return DayWindow.of(
            time_offset(self.elevation_adjusted_sunrise(), minutes(-before_sunrise)),
            time_offset(self.elevation_adjusted_sunset(), minutes(after)),
            synchronous=after == before_sunrise,
        )

    def temporal_hour(self, window: Optional[DayWindow] = None) -> Optional[timedelta]:
        return temporal_hour_length(window if window is not None else self.day_window())

    def chatzos(self) -> Event:
        transit = self.calendar.sun_transit() if self.config.use_astronomical_chatzos else None
        return chatzos(self.sea_level_window(), astronomical_transit=self.config.use_astronomical_chatzos, transit=transit)

    def chatzos_as_half_day(self) -> Event:
        return midpoint(self.calendar.sea_level_sunrise(), self.calendar.sea_level_sunset())

    def zman(self, window: DayWindow, hours: float) -> Event:
        """
        `hours` into `window`, split around chatzos when the config asks for it
        and the window is synchronous.
        """
        if not (self.config.use_astronomical_chatzos_for_other_zmanim and window.synchronous):
            return evaluate(window, hours)
        if not 0 <= hours <= 12:
            return evaluate(window, hours)
        noon = self.chatzos()
        if hours <= 6:
            return evaluate_half_day(window.start, noon, hours)
        return evaluate_half_day(noon, window.end, hours - 6)

    # ============================================================
    # Fixed-minute markers
    # ============================================================

    def candle_lighting(self) -> Event:
        return time_offset(self.calendar.sea_level_sunset(), minutes(-self.config.candle_lighting_offset))

    def tzais_ateret_torah(self) -> Event:
        return time_offset(self.elevation_adjusted_sunset(), minutes(self.config.ateret_torah_sunset_offset))
