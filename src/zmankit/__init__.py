"""zmankit public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

# Initialize registry on import
from . import api_init as _api_init  # noqa: F401

from .api import (
    calendar,
    day_model,
    zman,
    day_events,
    list_presets,
    list_calculators,
    calculator_info,
    get_calculator,
    make_calculator,
    register_calculator,
)
from .core.errors import ZmankitError, InvalidLocationError, InvalidWindowError, CalculatorUnavailableError
from .core.types import GeoLocation, ZmanimConfig, DayWindow
from .engines.astronomical import AstronomicalCalendar
from .engines.day_model import DayModel, temporal_hour_length, evaluate, evaluate_half_day, chatzos
from .engines.molad import MoladClamp, clamp

__all__ = [
    "calendar",
    "day_model",
    "zman",
    "day_events",
    "list_presets",
    "list_calculators",
    "calculator_info",
    "get_calculator",
    "make_calculator",
    "register_calculator",
    "ZmankitError",
    "InvalidLocationError",
    "InvalidWindowError",
    "CalculatorUnavailableError",
    "GeoLocation",
    "ZmanimConfig",
    "DayWindow",
    "AstronomicalCalendar",
    "DayModel",
    "temporal_hour_length",
    "evaluate",
    "evaluate_half_day",
    "chatzos",
    "MoladClamp",
    "clamp",
]
