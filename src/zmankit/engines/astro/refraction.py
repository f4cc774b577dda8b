"""
zmankit.engines.astro.refraction
--------------------------------
Corrections shared by every horizon-crossing calculator.

A geometric sunrise (zenith exactly 90) is observed when the sun's upper limb
clears the refracted horizon, so the zenith is pushed down by the solar
semi-diameter, the standard refraction and the dip of the horizon seen from
an elevated observer. Any other zenith is taken literally.
"""

from __future__ import annotations
import math
from dataclasses import dataclass, field

from ...core.zenith import GEOMETRIC_ZENITH


@dataclass(frozen=True)
class HorizonParams:
    refraction: float = 34.0 / 60.0         # degrees
    solar_radius: float = 16.0 / 60.0       # degrees
    earth_radius: float = 6356.9            # km


@dataclass(frozen=True)
class HorizonCalculator:
    """Base for calculators; subclasses supply the crossing algorithm."""
    params: HorizonParams = field(default_factory=HorizonParams)

    def elevation_adjustment(self, elevation: float) -> float:
        r = self.params.earth_radius
        return math.degrees(math.acos(r / (r + elevation / 1000.0)))

    def adjust_zenith(self, zenith: float, elevation: float) -> float:
        if zenith != GEOMETRIC_ZENITH:
            return zenith
        return (
            zenith
            + self.params.solar_radius
            + self.params.refraction
            + self.elevation_adjustment(elevation)
        )
