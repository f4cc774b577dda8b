"""
zmankit.engines.interfaces
--------------------------
Boundaries between the solar calculators (raw degree-based horizon crossings),
the astronomical calendar (local wall-clock events) and caller-supplied
lunar data.

Standard Reference Frame:
Calculators speak fractional UTC hours in [0, 24) on the requested civil date.
None means the sun never reaches the requested zenith on that date.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Protocol, runtime_checkable

from ..core.types import GeoLocation


class SolarEventProvider(Protocol):
    """Morning and evening crossings of a zenith, as fractional UTC hours."""
    name: str

    def info(self) -> Dict[str, Any]:
        ...

    def utc_sunrise(self, d: date, location: GeoLocation, zenith: float, adjust_for_elevation: bool) -> Optional[float]:
        ...

    def utc_sunset(self, d: date, location: GeoLocation, zenith: float, adjust_for_elevation: bool) -> Optional[float]:
        ...

    def elevation_adjustment(self, elevation: float) -> float:
        """Extra dip (degrees) of the visible horizon for an observer `elevation` meters up."""
        ...


@runtime_checkable
class TransitProvider(Protocol):
    """Optional capability: the sun's meridian transit."""

    def utc_noon(self, d: date, location: GeoLocation) -> Optional[float]:
        ...


@runtime_checkable
class MoladProvider(Protocol):
    """
    Supplies the molad (mean lunar conjunction) nearest a civil date.
    Computing it is the caller's business.
    """

    def molad(self, d: date) -> Optional[datetime]:
        ...
