"""
Paste lifecycle: creation, retrieval with lazy eviction, and view recording.
"""
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Tuple

from pastebin.availability import Availability, evaluate, is_available
from pastebin.clock import wall_clock
from pastebin.exceptions import (
    InvalidContentError,
    InvalidMaxViewsError,
    InvalidTTLError,
    PasteNotFoundError,
)
from pastebin.models import Paste, PasteView
from pastebin.stores.base import PasteStore
from pastebin.stores.fields import deserialize_paste, format_timestamp, serialize_paste

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Retrieval:
    """Outcome of a read: the last-known snapshot and whether it may be served."""
    paste: Paste
    available: bool
    verdict: Availability


def _positive_int(value: Any, error_cls) -> Optional[int]:
    """None passes through; integral numbers >= 1 come back as int; anything else raises error_cls."""
    if value is None:
        return None
    # JSON true/false decode to bool, which is an int subclass
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise error_cls()
    if isinstance(value, float) and not value.is_integer():
        raise error_cls()
    if value < 1:
        raise error_cls()
    return int(value)


def validate_content(content: Any) -> None:
    if not isinstance(content, str) or not content.strip():
        raise InvalidContentError()


def validate_ttl(ttl_seconds: Any) -> Optional[int]:
    return _positive_int(ttl_seconds, InvalidTTLError)


def validate_max_views(max_views: Any) -> Optional[int]:
    return _positive_int(max_views, InvalidMaxViewsError)


def validate_paste_request(
    content: Any, ttl_seconds: Any = None, max_views: Any = None
) -> Tuple[Optional[int], Optional[int]]:
    """
    Check a create request.  Content errors win over ttl errors, which win over max_views.

    Returns:
        ttl_seconds and max_views normalized to int (or None)
    """
    validate_content(content)
    return validate_ttl(ttl_seconds), validate_max_views(max_views)


def format_expiry(expires_at: Optional[datetime]) -> Optional[str]:
    """ISO 8601 in UTC with millisecond precision and a ``Z`` suffix."""
    if expires_at is None:
        return None
    iso = expires_at.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return iso.replace("+00:00", "Z")


def remaining_views(paste: Paste, view_count: int) -> Optional[int]:
    if paste.max_views is None:
        return None
    return paste.max_views - view_count


class PasteService:
    """Orchestrates the paste lifecycle on top of a ``PasteStore``."""

    def __init__(self, store: PasteStore):
        self.store = store

    def create(
        self,
        content: Any,
        ttl_seconds: Any = None,
        max_views: Any = None,
        now: Optional[datetime] = None,
    ) -> Paste:
        """
        Validate and persist a new paste.

        Args:
            content: Text content, non-empty after trimming
            ttl_seconds: Optional time-to-live, integer >= 1
            max_views: Optional view ceiling, integer >= 1
            now: Creation time, wall clock when omitted

        Returns:
            The stored paste

        Raises:
            ValidationError: Content is checked first, then ttl, then max_views
            StoreUnavailableError: If the store write fails
        """
        ttl_seconds, max_views = validate_paste_request(content, ttl_seconds, max_views)

        now = now or wall_clock()
        expires_at = None
        if ttl_seconds is not None:
            try:
                expires_at = now + timedelta(seconds=ttl_seconds)
            except OverflowError as e:
                raise InvalidTTLError() from e

        paste = Paste(
            id=str(uuid.uuid4()),
            content=content,
            created_at=now,
            updated_at=now,
            expires_at=expires_at,
            max_views=max_views,
            view_count=0,
        )

        # Store TTL only backstops the lazy check in retrieve_with_clock
        self.store.put(paste.id, serialize_paste(paste), ttl_seconds)
        logger.info(f"Paste {paste.id} saved successfully")
        return paste

    def retrieve_with_clock(self, paste_id: str, now: datetime) -> Optional[Retrieval]:
        """
        Load a paste and decide whether it may be served at ``now``.

        Unavailable pastes are deleted before returning. Safe to repeat: this
        never changes the view count. Returns None when the store has no record.
        """
        fields = self.store.get(paste_id)
        if fields is None:
            logger.info(f"Paste {paste_id} not found")
            return None

        paste = deserialize_paste(paste_id, fields)
        verdict = evaluate(paste, now)

        if not is_available(verdict):
            self.store.delete(paste_id)
            logger.info(f"Paste {paste_id} evicted ({verdict.value})")
            return Retrieval(paste=paste, available=False, verdict=verdict)

        return Retrieval(paste=paste, available=True, verdict=verdict)

    def retrieve(self, paste_id: str) -> Optional[Retrieval]:
        return self.retrieve_with_clock(paste_id, wall_clock())

    def record_view(self, paste_id: str, now: Optional[datetime] = None) -> Optional[int]:
        """
        Count one served view.

        Not gated by availability; call only after ``retrieve_with_clock``
        reported the paste available. Returns the new view count, or None if
        the paste vanished in between.
        """
        count = self.store.increment_view(paste_id, format_timestamp(now or wall_clock()))
        if count is None:
            logger.info(f"Paste {paste_id} vanished before its view was recorded")
        else:
            logger.info(f"View count incremented for paste {paste_id}")
        return count

    def fetch(self, paste_id: str, now: datetime) -> PasteView:
        """
        Serve a paste: check availability, record the view, build the response.

        Raises:
            PasteNotFoundError: Missing, expired, exhausted, or lost the last view to a concurrent read
        """
        retrieval = self.retrieve_with_clock(paste_id, now)
        if retrieval is None or not retrieval.available:
            raise PasteNotFoundError()

        paste = retrieval.paste
        count = self.record_view(paste_id)
        if count is None:
            raise PasteNotFoundError()

        if paste.max_views is not None and count > paste.max_views:
            self.store.delete(paste_id)
            logger.info(f"Paste {paste_id} evicted ({Availability.VIEW_EXHAUSTED.value}, concurrent read)")
            raise PasteNotFoundError()

        return PasteView(
            content=paste.content,
            remaining_views=remaining_views(paste, count),
            expires_at=format_expiry(paste.expires_at),
        )
