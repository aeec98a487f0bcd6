"""
Expiry and availability rules for stored pastes.

``evaluate`` is a pure function of a paste snapshot and a point in time.
It never touches the store; callers evict what it reports as unavailable.
"""
import enum
from datetime import datetime

from pastebin.models import Paste
from pastebin.stores.fields import to_epoch_seconds


class Availability(str, enum.Enum):
    AVAILABLE = "available"
    TIME_EXPIRED = "time_expired"
    VIEW_EXHAUSTED = "view_exhausted"


def is_time_expired(paste: Paste, now: datetime) -> bool:
    """Compare at whole-second granularity so sub-second skew never expires a paste early."""
    if paste.expires_at is None:
        return False
    return to_epoch_seconds(now) > to_epoch_seconds(paste.expires_at)


def is_view_exhausted(paste: Paste) -> bool:
    """Uses the count before this read's increment: the Nth view is the last one served."""
    if paste.max_views is None:
        return False
    return paste.view_count >= paste.max_views


def evaluate(paste: Paste, now: datetime) -> Availability:
    """
    Decide whether a paste may be served at ``now``.

    Args:
        paste: Last-known snapshot loaded from the store
        now: Current time (wall clock or test override)

    Returns:
        AVAILABLE, or the reason the paste is gone. Time is checked first.
    """
    if is_time_expired(paste, now):
        return Availability.TIME_EXPIRED
    if is_view_exhausted(paste):
        return Availability.VIEW_EXHAUSTED
    return Availability.AVAILABLE


def is_available(verdict: Availability) -> bool:
    return verdict is Availability.AVAILABLE
