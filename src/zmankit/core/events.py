"""
zmankit.core.events
-------------------
Arithmetic over events that may not occur.

A missing event is None. Every helper here short-circuits on None so that
chains of derived events never need explicit checks.

Events are aware datetimes in the location's zone. Differences and offsets
are taken between UTC instants and the result is returned in the zone of
its first operand, so arithmetic across a daylight-saving change counts real
elapsed time.
"""

from __future__ import annotations
import functools
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, TypeVar

from .types import Event

T = TypeVar("T")


def lift(fn: Callable[..., T]) -> Callable[..., Optional[T]]:
    """Call fn only when no positional argument is None, else return None."""
    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        if any(a is None for a in args):
            return None
        return fn(*args, **kwargs)
    return wrapper


def minutes(n: float) -> timedelta:
    return timedelta(minutes=n)


def to_utc(event: datetime) -> datetime:
    return event.astimezone(timezone.utc)


@lift
def elapsed(start: datetime, end: datetime) -> timedelta:
    """Real time from start to end."""
    return to_utc(end) - to_utc(start)


@lift
def time_offset(event: datetime, delta: timedelta) -> datetime:
    return (to_utc(event) + delta).astimezone(event.tzinfo)


@lift
def midpoint(start: datetime, end: datetime) -> datetime:
    return time_offset(start, elapsed(start, end) / 2)
