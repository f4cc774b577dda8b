"""Ephemeris adapters/providers (optional).

This package provides thin wrappers around external ephemeris libraries.
Install with:
  pip install "zmankit[ephemeris]"
"""

from ..core.errors import CalculatorUnavailableError


def require_ephemeris():
    """Raise a clear error if ephemeris extras aren't installed."""
    try:
        import jplephem  # noqa: F401
        import skyfield  # noqa: F401
    except ImportError as e:
        raise CalculatorUnavailableError('Ephemeris support requires: pip install "zmankit[ephemeris]"') from e
