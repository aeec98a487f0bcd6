"""
Flat field-map codec for pastes.

Every field is a string. Timestamps are whole epoch seconds, and optional
values use the literal ``"null"`` rather than being omitted, so a missing
field always means a damaged record.
"""
import math
from datetime import datetime, timezone
from typing import Dict, Optional

from pastebin.exceptions import CorruptPasteError
from pastebin.models import Paste

NULL = "null"

CONTENT = "content"
CREATED_AT = "createdAt"
UPDATED_AT = "updatedAt"
EXPIRES_AT = "expiresAt"
MAX_VIEWS = "maxViews"
VIEW_COUNT = "viewCount"

REQUIRED_FIELDS = (CONTENT, CREATED_AT, UPDATED_AT, EXPIRES_AT, MAX_VIEWS, VIEW_COUNT)


def to_epoch_seconds(moment: datetime) -> int:
    return math.floor(moment.timestamp())


def format_timestamp(moment: datetime) -> str:
    return str(to_epoch_seconds(moment))


def _optional(value: Optional[str]) -> str:
    return NULL if value is None else value


def serialize_paste(paste: Paste) -> Dict[str, str]:
    """Flatten a paste into the stored field map."""
    return {
        CONTENT: paste.content,
        CREATED_AT: format_timestamp(paste.created_at),
        UPDATED_AT: format_timestamp(paste.updated_at),
        EXPIRES_AT: _optional(
            format_timestamp(paste.expires_at) if paste.expires_at is not None else None
        ),
        MAX_VIEWS: _optional(str(paste.max_views) if paste.max_views is not None else None),
        VIEW_COUNT: str(paste.view_count),
    }


def _parse_timestamp(raw: str) -> datetime:
    return datetime.fromtimestamp(int(raw), tz=timezone.utc)


def deserialize_paste(paste_id: str, fields: Dict[str, str]) -> Paste:
    """
    Rebuild a paste from its stored field map.

    Raises:
        CorruptPasteError: If a field is missing or does not parse
    """
    missing = [name for name in REQUIRED_FIELDS if name not in fields]
    if missing:
        raise CorruptPasteError(f"Paste {paste_id} is missing fields: {', '.join(missing)}")

    try:
        return Paste(
            id=paste_id,
            content=fields[CONTENT],
            created_at=_parse_timestamp(fields[CREATED_AT]),
            updated_at=_parse_timestamp(fields[UPDATED_AT]),
            expires_at=(
                None if fields[EXPIRES_AT] == NULL else _parse_timestamp(fields[EXPIRES_AT])
            ),
            max_views=None if fields[MAX_VIEWS] == NULL else int(fields[MAX_VIEWS]),
            view_count=int(fields[VIEW_COUNT]),
        )
    except ValueError as e:
        # pydantic's ValidationError is a ValueError too
        raise CorruptPasteError(f"Paste {paste_id} holds an invalid value: {e}") from e
