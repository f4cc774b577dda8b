from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List

from ..engines.interfaces import SolarEventProvider


@dataclass
class CalculatorRegistry:
    _calculators: Dict[str, SolarEventProvider]

    def get(self, name: str) -> SolarEventProvider:
        if name not in self._calculators:
            raise KeyError(f"Unknown calculator '{name}'. Available: {sorted(self._calculators)}")
        return self._calculators[name]

    def list(self) -> List[str]:
        return sorted(self._calculators.keys())

    def info(self, name: str) -> Dict[str, Any]:
        return self.get(name).info()

    def register(self, name: str, calculator: SolarEventProvider, *, overwrite: bool = False) -> None:
        if (not overwrite) and (name in self._calculators):
            raise KeyError(f"Calculator '{name}' already exists. Use overwrite=True to replace.")
        self._calculators[name] = calculator
