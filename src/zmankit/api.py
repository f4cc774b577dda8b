from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional, Union

from .core.engine import CalculatorRegistry
from .core.types import CalculatorSpec, Event, GeoLocation, ZmanimConfig
from .engines.astronomical import AstronomicalCalendar
from .engines.day_model import DayModel
from .engines.factory import make_calculator as _make_calculator
from .engines.interfaces import SolarEventProvider
from .engines.presets import PRESET_TABLE, evaluate_preset
from .engines.specs import DEFAULT_CALCULATOR

_registry: Optional[CalculatorRegistry] = None

CalculatorT = Union[str, SolarEventProvider]


def set_registry(reg: CalculatorRegistry) -> None:
    global _registry
    _registry = reg


def _reg() -> CalculatorRegistry:
    if _registry is None:
        raise RuntimeError("Calculator registry not initialized")
    return _registry


def list_calculators() -> List[str]:
    return _reg().list()


def calculator_info(name: str) -> Dict[str, Any]:
    return _reg().info(name)


def get_calculator(name: str) -> SolarEventProvider:
    return _reg().get(name)


def make_calculator(spec: CalculatorSpec) -> SolarEventProvider:
    return _make_calculator(spec)


def register_calculator(name: str, calculator: SolarEventProvider, *, overwrite: bool = False) -> None:
    _reg().register(name, calculator, overwrite=overwrite)


def _resolve(calculator: CalculatorT) -> SolarEventProvider:
    return _reg().get(calculator) if isinstance(calculator, str) else calculator


def calendar(
    location: GeoLocation,
    d: date,
    *,
    calculator: CalculatorT = DEFAULT_CALCULATOR,
    config: Optional[ZmanimConfig] = None,
) -> AstronomicalCalendar:
    return AstronomicalCalendar(
        location=location,
        date=d,
        calculator=_resolve(calculator),
        config=config if config is not None else ZmanimConfig(),
    )


def day_model(location: GeoLocation, d: date, **kwargs) -> DayModel:
    return DayModel(calendar(location, d, **kwargs))


def zman(location: GeoLocation, d: date, preset: str, **kwargs) -> Event:
    return evaluate_preset(day_model(location, d, **kwargs), preset)


def list_presets() -> List[str]:
    return [p.name for p in PRESET_TABLE]


def day_events(location: GeoLocation, d: date, **kwargs) -> Dict[str, Event]:
    """Solar events and every preset for one day, in chronological table order."""
    model = day_model(location, d, **kwargs)
    cal = model.calendar
    out: Dict[str, Event] = {
        "begin_astronomical_twilight": cal.begin_astronomical_twilight(),
        "begin_nautical_twilight": cal.begin_nautical_twilight(),
        "begin_civil_twilight": cal.begin_civil_twilight(),
        "sunrise": cal.sunrise(),
        "sea_level_sunrise": cal.sea_level_sunrise(),
        "chatzos": model.chatzos(),
        "fixed_local_chatzos": cal.fixed_local_chatzos(),
        "candle_lighting": model.candle_lighting(),
        "sea_level_sunset": cal.sea_level_sunset(),
        "sunset": cal.sunset(),
        "end_civil_twilight": cal.end_civil_twilight(),
        "end_nautical_twilight": cal.end_nautical_twilight(),
        "end_astronomical_twilight": cal.end_astronomical_twilight(),
        "tzais_ateret_torah": model.tzais_ateret_torah(),
    }
    for p in PRESET_TABLE:
        out[p.name] = evaluate_preset(model, p.name)
    return out
