from __future__ import annotations
from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from typing import Any, Literal, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import InvalidLocationError

Event = Optional[datetime]


@dataclass(frozen=True)
class CalculatorId:
    family: Literal["almanac", "ephemeris", "custom"]
    name: str
    version: str


@dataclass(frozen=True)
class CalculatorSpec:
    """Top-level wrapper for all solar calculator specifications."""
    kind: Literal["noaa", "usno", "skyfield"]
    id: CalculatorId
    payload: Any  # HorizonParams | SkyfieldParams

    @staticmethod
    def like(name: str) -> "CalculatorSpec":
        from ..engines.specs import ALL_SPECS
        if name not in ALL_SPECS:
            raise KeyError(f"Unknown base spec '{name}'. Available: {sorted(ALL_SPECS)}")
        return ALL_SPECS[name]

    def tweak(self, **kwargs) -> "CalculatorSpec":
        return replace(self, payload=replace(self.payload, **kwargs))


@dataclass(frozen=True)
class GeoLocation:
    """
    An observer on the earth's surface.

    Longitude is positive east. Elevation is meters above the local horizon
    used for the sea-level events, never negative.
    """
    latitude: float
    longitude: float
    elevation: float = 0.0
    time_zone: str = "UTC"
    name: Optional[str] = None

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise InvalidLocationError(f"Latitude must be between -90 and 90, got {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise InvalidLocationError(f"Longitude must be between -180 and 180, got {self.longitude}")
        if self.elevation < 0:
            raise InvalidLocationError(f"Elevation cannot be negative, got {self.elevation}")
        try:
            ZoneInfo(self.time_zone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise InvalidLocationError(f"Unknown time zone '{self.time_zone}'") from e

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.time_zone)

    def _local_noon(self, d: date) -> datetime:
        return datetime(d.year, d.month, d.day, 12, tzinfo=self.tzinfo)

    def raw_offset_hours(self, d: date) -> float:
        """Standard (non-daylight) UTC offset in hours on date d."""
        noon = self._local_noon(d)
        offset = noon.utcoffset() or timedelta(0)
        dst = noon.dst() or timedelta(0)
        return (offset - dst).total_seconds() / 3600.0

    def effective_offset_hours(self, d: date) -> float:
        """Daylight-adjusted UTC offset in hours on date d."""
        offset = self._local_noon(d).utcoffset() or timedelta(0)
        return offset.total_seconds() / 3600.0

    def local_mean_time_offset_hours(self, d: date) -> float:
        """Distance between local mean time and standard zone time, in hours."""
        return self.longitude / 15.0 - self.raw_offset_hours(d)

    def antimeridian_adjustment(self, d: date) -> int:
        """
        Day shift for locations whose zone sits on the far side of the 180th meridian.

        1 when the zone runs a day behind local mean time, -1 when it runs a day
        ahead, otherwise 0.
        """
        offset = self.local_mean_time_offset_hours(d)
        if offset >= 20:
            return 1
        if offset <= -20:
            return -1
        return 0


@dataclass(frozen=True)
class ZmanimConfig:
    use_elevation: bool = False
    use_astronomical_chatzos: bool = True
    use_astronomical_chatzos_for_other_zmanim: bool = False
    candle_lighting_offset: float = 18.0        # minutes before sea-level sunset
    ateret_torah_sunset_offset: float = 40.0    # minutes after sunset

    def tweak(self, **kwargs) -> "ZmanimConfig":
        return replace(self, **kwargs)


@dataclass(frozen=True)
class DayWindow:
    """
    A (start, end) pair of events bounding a proportional day.

    Either end may be None. An asynchronous window has its ends defined by
    different conventions and never takes the half-day substitution.
    """
    start: Event
    end: Event
    synchronous: bool = True

    @classmethod
    def of(cls, start: Event, end: Event, synchronous: bool = True) -> "DayWindow":
        return cls(start=start, end=end, synchronous=synchronous)

    @property
    def is_defined(self) -> bool:
        return self.start is not None and self.end is not None
