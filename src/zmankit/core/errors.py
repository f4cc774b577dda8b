class ZmankitError(Exception):
    """Base error."""

class InvalidLocationError(ZmankitError, ValueError):
    """Raised for out-of-range coordinates, negative elevation or an unknown time zone."""

class InvalidWindowError(ZmankitError, ValueError):
    """Raised when a day window ends at or before its start."""

class CalculatorUnavailableError(ZmankitError):
    """Raised when an optional calculator (e.g. skyfield) is not available."""
