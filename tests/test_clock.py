from datetime import datetime, timezone

import pytest
from freezegun import freeze_time

from pastebin.clock import from_millis, resolve_now, wall_clock
from pastebin.exceptions import InvalidTestClockError

from conftest import T0, T0_MS

FROZEN = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


@freeze_time("2026-03-01 12:00:00")
def test_wall_clock_is_utc():
    now = wall_clock()
    assert now == FROZEN
    assert now.tzinfo is not None


def test_from_millis_keeps_sub_second_precision():
    assert from_millis(T0_MS + 250).microsecond == 250_000


def test_header_used_in_test_mode():
    assert resolve_now(str(T0_MS), test_mode=True) == T0


@freeze_time("2026-03-01 12:00:00")
def test_header_ignored_outside_test_mode():
    assert resolve_now(str(T0_MS), test_mode=False) == FROZEN


@freeze_time("2026-03-01 12:00:00")
def test_missing_header_uses_wall_clock():
    assert resolve_now(None, test_mode=True) == FROZEN


@pytest.mark.parametrize("header", ["abc", "", "12.5", "1e12"])
@freeze_time("2026-03-01 12:00:00")
def test_malformed_header_falls_back_when_lenient(header):
    assert resolve_now(header, test_mode=True) == FROZEN


@pytest.mark.parametrize("header", ["abc", " ", "12.5"])
def test_malformed_header_raises_when_strict(header):
    with pytest.raises(InvalidTestClockError, match="Invalid x-test-now-ms header value"):
        resolve_now(header, test_mode=True, strict=True)


@freeze_time("2026-03-01 12:00:00")
def test_empty_header_is_absent_even_when_strict():
    assert resolve_now("", test_mode=True, strict=True) == FROZEN


@freeze_time("2026-03-01 12:00:00")
def test_strict_does_not_matter_outside_test_mode():
    assert resolve_now("abc", test_mode=False, strict=True) == FROZEN
