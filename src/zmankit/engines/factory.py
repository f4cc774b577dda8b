"""
zmankit.engines.factory
-----------------------
Transforms pure data specifications into live calculator objects.
"""

from __future__ import annotations
from ..core.types import CalculatorSpec
from .astro.noaa import NOAACalculator
from .astro.usno import USNOCalculator
from .interfaces import SolarEventProvider


def make_calculator(spec: CalculatorSpec) -> SolarEventProvider:
    """The universal entry point."""
    if spec.kind == "noaa":
        return NOAACalculator(params=spec.payload, name=spec.id.name)
    if spec.kind == "usno":
        return USNOCalculator(params=spec.payload, name=spec.id.name)
    if spec.kind == "skyfield":
        from ..ephemeris.skyfield_sun import SkyfieldCalculator
        return SkyfieldCalculator.from_params(spec.payload, name=spec.id.name)
    raise TypeError(f"Unknown calculator kind: {spec.kind!r}")
