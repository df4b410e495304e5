"""Shared fixtures for the mock HLS server tests."""

import time
from datetime import datetime, timedelta, timezone

import pytest

from mock_hls import HlsServer
from mock_hls.services import PlaylistCache, PlaylistConfig, PlaylistGenerator, ServerClock


FIXED_NOW = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeWallClock:
    """Wall clock that only moves when told to."""

    def __init__(self, start=FIXED_NOW):
        self.current = start

    def __call__(self):
        return self.current

    def advance(self, seconds):
        self.current += timedelta(seconds=seconds)


def wait_for(predicate, timeout=3.0, interval=0.01):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return predicate()


@pytest.fixture
def wall_clock():
    return FakeWallClock()


@pytest.fixture
def small_config():
    """10 segments in the window, 3 of them in delta updates."""
    return PlaylistConfig(
        segment_length=2.0,
        target_segment_length=3,
        seeking_window_in_seconds=30,
        skippable_segments=2,
    )


@pytest.fixture
def make_generator(wall_clock):
    def _make(config, server_to_now_difference=0.0):
        clock = ServerClock(server_to_now_difference, wall_clock=wall_clock)
        return PlaylistGenerator(config, clock, PlaylistCache())

    return _make


@pytest.fixture
def make_server(wall_clock):
    servers = []

    def _make(**overrides):
        options = {
            "seeking_window_in_seconds": 30,
            "target_segment_length": 3,
            "skippable_segments": 2,
            "segment_length": 2.0,
            "start_updates": False,
            "wall_clock": wall_clock,
        }
        options.update(overrides)
        server = HlsServer(**options)
        servers.append(server)
        return server

    yield _make

    for server in servers:
        server.close()


@pytest.fixture
def server(make_server):
    return make_server()


@pytest.fixture
def client(server):
    return server.app.test_client()
