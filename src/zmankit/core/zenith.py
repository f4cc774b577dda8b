"""
zmankit.core.zenith
-------------------
Named zenith distances (degrees from the point overhead).

A dawn or dusk defined by the sun being `d` degrees below the geometric
horizon uses zenith 90 + d. Negative dips place the sun above the horizon.
"""

from __future__ import annotations
from fractions import Fraction
from typing import Dict, Union

GEOMETRIC_ZENITH = 90.0
CIVIL_ZENITH = 96.0
NAUTICAL_ZENITH = 102.0
ASTRONOMICAL_ZENITH = 108.0


def dip(degrees: Union[float, Fraction]) -> float:
    """Zenith for a sun `degrees` below the geometric horizon."""
    return GEOMETRIC_ZENITH + float(degrees)


# Dips (degrees below the horizon) named by how they are quoted.
DIPS: Dict[str, float] = {
    "16.1": 16.1,       # 72 minutes at the equinox in Jerusalem
    "19.8": 19.8,       # 90 minutes
    "26": 26.0,         # 120 minutes
    "18": 18.0,
    "19": 19.0,
    "11.5": 11.5,       # misheyakir, 52 minutes
    "11": 11.0,
    "10.2": 10.2,       # misheyakir, 45 minutes
    "7.65": 7.65,
    "9.5": 9.5,
    "8.5": 8.5,         # three small stars
    "7.083": 7.0 + 5.0 / 60.0,
    "6.45": 6.45,
    "6": 6.0,
    "5.95": 5.95,
    "4.61": 4.61,
    "4.37": 4.37,
    "3.8": 3.8,
    "3.7": 3.7,
    "3.65": 3.65,
    "3.676": 3.676,
    "13.24": 13.24,
    "1.583": 1.583,     # amiti sunrise and sunset
    "-2.1": -2.1,
    "-2.8": -2.8,
    "-3.05": -3.05,
}

ZENITHS: Dict[str, float] = {
    "geometric": GEOMETRIC_ZENITH,
    "civil": CIVIL_ZENITH,
    "nautical": NAUTICAL_ZENITH,
    "astronomical": ASTRONOMICAL_ZENITH,
    **{k: dip(v) for k, v in DIPS.items()},
}


def zenith_for(key: Union[str, float, int]) -> float:
    """Resolve a catalog name or a numeric zenith."""
    if isinstance(key, (int, float)):
        return float(key)
    if key not in ZENITHS:
        raise KeyError(f"Unknown zenith '{key}'. Available: {sorted(ZENITHS)}")
    return ZENITHS[key]
