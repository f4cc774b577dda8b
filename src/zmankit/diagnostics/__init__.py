"""Diagnostics package.

- pretty_day: plain-text table of one day's events (no extras)
- day_length, dip_search: need the diagnostics extras (numpy, matplotlib, scipy)
"""

__all__ = ["pretty_day", "day_length", "dip_search"]
