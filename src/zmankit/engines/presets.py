"""
zmankit.engines.presets
-----------------------
Named day-markers as data: which event opens the day, which closes it, and how
many proportional hours in. Every row is evaluated by DayModel.zman.

Selectors name events of a DayModel. `alos_<x>` / `tzais_<x>` take either a
minute count (`alos_72`) or a zenith catalog dip (`alos_16.1`).
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, Tuple

from ..core.events import minutes, time_offset
from ..core.types import DayWindow, Event
from ..core.zenith import DIPS, dip
from .day_model import DayModel

Selector = Callable[[DayModel], Event]


@dataclass(frozen=True)
class Preset:
    name: str
    start: str
    end: str
    hours: float
    synchronous: bool = True


# ============================================================
# Selectors
# ============================================================

def _minutes_before_sunrise(n: float) -> Selector:
    return lambda m: time_offset(m.elevation_adjusted_sunrise(), minutes(-n))


def _minutes_after_sunset(n: float) -> Selector:
    return lambda m: time_offset(m.elevation_adjusted_sunset(), minutes(n))


def _dawn_at(degrees: float) -> Selector:
    return lambda m: m.calendar.sunrise_offset_by_degrees(dip(degrees))


def _dusk_at(degrees: float) -> Selector:
    return lambda m: m.calendar.sunset_offset_by_degrees(dip(degrees))


SELECTORS: Dict[str, Selector] = {
    "sunrise": lambda m: m.elevation_adjusted_sunrise(),
    "sunset": lambda m: m.elevation_adjusted_sunset(),
    "sea_level_sunrise": lambda m: m.calendar.sea_level_sunrise(),
    "sea_level_sunset": lambda m: m.calendar.sea_level_sunset(),
    "chatzos": lambda m: m.chatzos(),
    **{f"alos_{n}": _minutes_before_sunrise(n) for n in (60, 72, 90, 96, 120)},
    **{f"tzais_{n}": _minutes_after_sunset(n) for n in (50, 60, 72, 90, 96, 120)},
    **{f"alos_{k}": _dawn_at(v) for k, v in DIPS.items() if v > 9},
    **{f"tzais_{k}": _dusk_at(v) for k, v in DIPS.items() if v > 0},
}


def select(model: DayModel, selector: str) -> Event:
    if selector not in SELECTORS:
        raise KeyError(f"Unknown selector '{selector}'. Available: {sorted(SELECTORS)}")
    return SELECTORS[selector](model)


# ============================================================
# Presets
# ============================================================

PRESET_TABLE: Tuple[Preset, ...] = (
    Preset("sof_zman_shma_gra", "sunrise", "sunset", 3),
    Preset("sof_zman_shma_mga", "alos_72", "tzais_72", 3),
    Preset("sof_zman_shma_mga_16.1", "alos_16.1", "tzais_16.1", 3),
    Preset("sof_zman_shma_alos_16.1_to_tzais_7.083", "alos_16.1", "tzais_7.083", 3, synchronous=False),
    Preset("sof_zman_tfila_gra", "sunrise", "sunset", 4),
    Preset("sof_zman_tfila_mga", "alos_72", "tzais_72", 4),
    Preset("sof_zman_tfila_mga_16.1", "alos_16.1", "tzais_16.1", 4),
    Preset("mincha_gedola", "sunrise", "sunset", 6.5),
    Preset("mincha_gedola_72", "alos_72", "tzais_72", 6.5),
    Preset("mincha_ketana", "sunrise", "sunset", 9.5),
    Preset("mincha_ketana_72", "alos_72", "tzais_72", 9.5),
    Preset("plag_hamincha", "sunrise", "sunset", 10.75),
    Preset("plag_hamincha_72", "alos_72", "tzais_72", 10.75),
    Preset("plag_alos_to_sunset", "alos_16.1", "sunset", 10.75, synchronous=False),
)

PRESETS: Dict[str, Preset] = {p.name: p for p in PRESET_TABLE}


def preset_window(model: DayModel, preset: Preset) -> DayWindow:
    return DayWindow.of(select(model, preset.start), select(model, preset.end), synchronous=preset.synchronous)


def evaluate_preset(model: DayModel, name: str) -> Event:
    if name not in PRESETS:
        raise KeyError(f"Unknown preset '{name}'. Available: {sorted(PRESETS)}")
    preset = PRESETS[name]
    return model.zman(preset_window(model, preset), preset.hours)
