from __future__ import annotations
from zmankit.core.engine import CalculatorRegistry
from zmankit.engines.specs import ALL_SPECS
from zmankit.engines.factory import make_calculator

def build_registry() -> CalculatorRegistry:
    calculators = {}
    for name, spec in ALL_SPECS.items():
        calculators[name] = make_calculator(spec)
    return CalculatorRegistry(calculators)
