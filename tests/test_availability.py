from datetime import timedelta

import pytest

from pastebin.availability import Availability, evaluate, is_available
from pastebin.models import Paste

from conftest import T0


def make_paste(ttl=None, max_views=None, view_count=0) -> Paste:
    return Paste(
        id="abc",
        content="hello",
        created_at=T0,
        updated_at=T0,
        expires_at=T0 + timedelta(seconds=ttl) if ttl is not None else None,
        max_views=max_views,
        view_count=view_count,
    )


def test_unconstrained_paste_never_expires():
    assert evaluate(make_paste(), T0 + timedelta(days=3650)) is Availability.AVAILABLE


@pytest.mark.parametrize(
    "offset, expected",
    [
        (timedelta(seconds=599), Availability.AVAILABLE),
        (timedelta(seconds=600), Availability.AVAILABLE),
        (timedelta(seconds=600, milliseconds=999), Availability.AVAILABLE),
        (timedelta(seconds=601), Availability.TIME_EXPIRED),
        (timedelta(seconds=3600), Availability.TIME_EXPIRED),
    ],
)
def test_time_compared_at_whole_seconds(offset, expected):
    assert evaluate(make_paste(ttl=600), T0 + offset) is expected


def test_sub_second_expiry_is_truncated():
    paste = make_paste().model_copy(update={"expires_at": T0 + timedelta(milliseconds=900)})

    # 0.9s and 0.1s past T0 share the same whole second
    assert evaluate(paste, T0 + timedelta(milliseconds=100)) is Availability.AVAILABLE
    assert evaluate(paste, T0 + timedelta(seconds=1)) is Availability.TIME_EXPIRED


@pytest.mark.parametrize(
    "view_count, expected",
    [
        (0, Availability.AVAILABLE),
        (2, Availability.AVAILABLE),
        (3, Availability.VIEW_EXHAUSTED),
        (7, Availability.VIEW_EXHAUSTED),
    ],
)
def test_views_use_pre_increment_count(view_count, expected):
    assert evaluate(make_paste(max_views=3, view_count=view_count), T0) is expected


def test_time_checked_before_views():
    paste = make_paste(ttl=10, max_views=1, view_count=1)
    assert evaluate(paste, T0 + timedelta(seconds=11)) is Availability.TIME_EXPIRED


def test_evaluate_has_no_side_effects():
    paste = make_paste(max_views=1, view_count=1)
    snapshot = paste.model_copy()

    evaluate(paste, T0)

    assert paste == snapshot


def test_is_available():
    assert is_available(Availability.AVAILABLE)
    assert not is_available(Availability.TIME_EXPIRED)
    assert not is_available(Availability.VIEW_EXHAUSTED)
