"""
Clock source: wall-clock time with an optional request-supplied override.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from pastebin.exceptions import InvalidTestClockError

logger = logging.getLogger(__name__)

TEST_NOW_HEADER = "x-test-now-ms"


def wall_clock() -> datetime:
    """Current time in UTC."""
    return datetime.now(timezone.utc)


def from_millis(timestamp_ms: int) -> datetime:
    return datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc)


def resolve_now(
    test_now_ms: Optional[str],
    *,
    test_mode: bool,
    strict: bool = False,
) -> datetime:
    """
    Get current time, respecting TEST_MODE for deterministic testing.

    Args:
        test_now_ms: Test timestamp header (milliseconds since epoch)
        test_mode: Whether the process honors the test header at all
        strict: Raise on a malformed header instead of using wall-clock time

    Returns:
        Current datetime in UTC

    Raises:
        InvalidTestClockError: If strict and the header is not an integer
    """
    # An empty header counts as no header
    if not test_mode or not test_now_ms:
        return wall_clock()

    try:
        return from_millis(int(test_now_ms.strip()))
    except (ValueError, TypeError, OverflowError, OSError) as e:
        if strict:
            raise InvalidTestClockError() from e
        logger.warning(f"Invalid {TEST_NOW_HEADER} header {test_now_ms!r}: {e}")

    return wall_clock()
