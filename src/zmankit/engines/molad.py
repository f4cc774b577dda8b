"""
zmankit.engines.molad
---------------------
Folds an externally computed lunar moment (the molad, or a fixed offset from
it) into the calculation date.

The moment counts for today only if it falls strictly between last midnight
and tonight's midnight. Optionally, a moment in daylight is moved to a night
boundary.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from ..core.events import time_offset, to_utc
from ..core.types import Event
from .astronomical import AstronomicalCalendar
from .interfaces import MoladProvider

# Half of the mean synodic month (29d 12h 793 parts, 1080 parts to the hour)
HALF_MOLAD_INTERVAL = timedelta(days=14, hours=18, minutes=22, seconds=1, milliseconds=666)


def clamp(
    moment: Event,
    day_start: datetime,
    day_end: datetime,
    night_start: Event = None,
    night_end: Event = None,
    *,
    defer_to_start: bool,
) -> Event:
    """
    `moment` if it belongs to the (day_start, day_end) window, else None.

    With both night bounds given (night_end is this morning's end of night,
    night_start tonight's nightfall) a moment in the daylight between them is
    moved to night_start when `defer_to_start`, otherwise to night_end.
    """
    if (night_start is None) != (night_end is None):
        raise ValueError("night_start and night_end must be supplied together")
    if moment is None or not to_utc(day_start) < to_utc(moment) < to_utc(day_end):
        return None
    if night_start is not None and to_utc(night_end) < to_utc(moment) < to_utc(night_start):
        return night_start if defer_to_start else night_end
    return moment


@dataclass(frozen=True)
class MoladClamp:
    """
    Molad-based times for one calendar date.

    The provider returns the molad nearest a civil date; the lookups below ask
    for the molad whose offset could land on the calculation date.
    """
    calendar: AstronomicalCalendar
    provider: MoladProvider

    @property
    def date(self) -> date:
        return self.calendar.date

    def _clamp(self, moment: Event, night_start: Event, night_end: Event, *, defer_to_start: bool) -> Event:
        return clamp(
            moment,
            self.calendar.midnight_last_night(),
            self.calendar.midnight_tonight(),
            night_start,
            night_end,
            defer_to_start=defer_to_start,
        )

    def zman_molad(self) -> Event:
        return self._clamp(self.provider.molad(self.date), None, None, defer_to_start=True)

    def tchilas_kidush_levana(self, days: int = 3, night_start: Event = None, night_end: Event = None) -> Event:
        """Earliest kiddush levana, `days` after the molad, deferred to nightfall."""
        if days not in (3, 7):
            raise ValueError(f"days must be 3 or 7, got {days}")
        offset = timedelta(days=days)
        moment = time_offset(self.provider.molad(self.date - offset), offset)
        return self._clamp(moment, night_start, night_end, defer_to_start=True)

    def sof_kidush_levana(self, *, fifteen_days: bool = False, night_start: Event = None, night_end: Event = None) -> Event:
        """Latest kiddush levana, halfway to the next molad (or 15 days), pulled back to last night."""
        offset = timedelta(days=15) if fifteen_days else HALF_MOLAD_INTERVAL
        moment = time_offset(self.provider.molad(self.date - offset), offset)
        return self._clamp(moment, night_start, night_end, defer_to_start=False)
