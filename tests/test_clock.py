"""Tests for the offset server clock."""

from datetime import datetime, timedelta, timezone

from mock_hls.services import ServerClock

from .conftest import FIXED_NOW, FakeWallClock


def test_no_offset_tracks_wall_clock():
    clock = ServerClock(wall_clock=FakeWallClock())

    assert clock.now() == FIXED_NOW


def test_offset_is_subtracted():
    wall = FakeWallClock()
    clock = ServerClock(90.5, wall_clock=wall)

    assert clock.now() == FIXED_NOW - timedelta(seconds=90.5)
    assert clock.server_to_now_difference == 90.5


def test_offset_stays_constant_as_time_passes():
    wall = FakeWallClock()
    clock = ServerClock(3600, wall_clock=wall)
    before = clock.now()

    wall.advance(12)

    assert clock.now() - before == timedelta(seconds=12)


def test_naive_wall_clock_is_treated_as_utc():
    clock = ServerClock(wall_clock=lambda: datetime(2024, 1, 1, 12, 0, 0))

    assert clock.now() == FIXED_NOW
    assert clock.now().tzinfo is timezone.utc


def test_default_wall_clock_is_utc():
    now = ServerClock().now()

    assert now.tzinfo is not None
    assert abs((datetime.now(timezone.utc) - now).total_seconds()) < 5
