from __future__ import annotations

from typing import Dict

from ..core.types import CalculatorId, CalculatorSpec
from .astro.refraction import HorizonParams
from ..ephemeris.skyfield_sun import SkyfieldParams


# ============================================================
# HORIZON CONSTANTS
# ============================================================

# Standard refraction (34'), mean solar semi-diameter (16') and the polar
# earth radius used for the elevation dip
HORIZON_STD = HorizonParams()


# ============================================================
# CALCULATOR SPECS
# ============================================================

NOAA = CalculatorSpec(
    kind="noaa",
    id=CalculatorId(family="almanac", name="noaa", version="1"),
    payload=HORIZON_STD,
)

USNO = CalculatorSpec(
    kind="usno",
    id=CalculatorId(family="almanac", name="usno", version="1"),
    payload=HORIZON_STD,
)

SKYFIELD = CalculatorSpec(
    kind="skyfield",
    id=CalculatorId(family="ephemeris", name="skyfield", version="1"),
    payload=SkyfieldParams(horizon=HORIZON_STD),
)

# Only specs buildable without optional extras belong here; the skyfield
# calculator is made on request with make_calculator(SKYFIELD).
ALL_SPECS: Dict[str, CalculatorSpec] = {
    "noaa": NOAA,
    "usno": USNO,
}

DEFAULT_CALCULATOR = "noaa"
