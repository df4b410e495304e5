"""Tests for the playlist timer state machine."""

import threading
import time

import pytest

from mock_hls.services import PlaylistScheduler, SchedulerState

from .conftest import wait_for


@pytest.fixture
def make_scheduler():
    schedulers = []

    def _make(interval, callback=lambda: None):
        scheduler = PlaylistScheduler(interval, callback)
        schedulers.append(scheduler)
        return scheduler

    yield _make

    for scheduler in schedulers:
        scheduler.cancel()


def test_starts_suspended(make_scheduler):
    scheduler = make_scheduler(10)

    assert scheduler.state is SchedulerState.SUSPENDED
    assert scheduler.is_suspended
    assert scheduler.fire_count == 0


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        PlaylistScheduler(0, lambda: None)


def test_first_fire_is_immediate(make_scheduler):
    fired = threading.Event()
    scheduler = make_scheduler(10, fired.set)

    assert scheduler.resume() is True

    assert fired.wait(1.0)
    assert scheduler.is_running
    assert scheduler.fire_count == 1


def test_fires_periodically(make_scheduler):
    scheduler = make_scheduler(0.05)
    scheduler.resume()

    assert wait_for(lambda: scheduler.fire_count >= 4)


def test_resume_is_idempotent(make_scheduler):
    scheduler = make_scheduler(10)

    assert scheduler.resume() is True
    assert scheduler.resume() is False
    time.sleep(0.2)

    assert scheduler.fire_count == 1


def test_suspend_is_idempotent(make_scheduler):
    scheduler = make_scheduler(10)

    assert scheduler.suspend() is False
    scheduler.resume()
    assert scheduler.suspend() is True
    assert scheduler.suspend() is False
    assert scheduler.is_suspended


def test_suspend_stops_firing(make_scheduler):
    scheduler = make_scheduler(0.05)
    scheduler.resume()
    assert wait_for(lambda: scheduler.fire_count >= 2)

    scheduler.suspend()
    frozen = scheduler.fire_count
    time.sleep(0.3)

    assert scheduler.fire_count == frozen


def test_resume_after_suspend_fires_immediately(make_scheduler):
    scheduler = make_scheduler(10)
    scheduler.resume()
    assert wait_for(lambda: scheduler.fire_count == 1)
    scheduler.suspend()

    scheduler.resume()

    assert wait_for(lambda: scheduler.fire_count == 2, timeout=1.0)


def test_cancel_while_suspended(make_scheduler):
    scheduler = make_scheduler(0.05)
    scheduler.resume()
    assert wait_for(lambda: scheduler.fire_count >= 1)
    scheduler.suspend()

    scheduler.cancel()

    assert scheduler.state is SchedulerState.CANCELLED
    assert not scheduler._thread.is_alive()


def test_cancel_never_started_scheduler(make_scheduler):
    scheduler = make_scheduler(1)

    scheduler.cancel()
    scheduler.cancel()

    assert scheduler.state is SchedulerState.CANCELLED


def test_resume_after_cancel_is_an_error(make_scheduler):
    scheduler = make_scheduler(1)
    scheduler.cancel()

    with pytest.raises(RuntimeError):
        scheduler.resume()


def test_cancel_detaches_callback(make_scheduler):
    calls = []
    scheduler = make_scheduler(0.05, lambda: calls.append(1))
    scheduler.resume()
    assert wait_for(lambda: len(calls) >= 1)

    scheduler.cancel()
    count = len(calls)
    time.sleep(0.2)

    assert len(calls) == count


def test_failing_callback_keeps_schedule_alive(make_scheduler):
    calls = []

    def explode():
        calls.append(1)
        raise RuntimeError("boom")

    scheduler = make_scheduler(0.05, explode)
    scheduler.resume()

    assert wait_for(lambda: len(calls) >= 3)
    assert scheduler.is_running


def test_callback_may_suspend_its_own_scheduler(make_scheduler):
    holder = {}

    def suspend_self():
        holder["scheduler"].suspend()

    scheduler = make_scheduler(0.05, suspend_self)
    holder["scheduler"] = scheduler
    scheduler.resume()

    assert wait_for(lambda: scheduler.is_suspended)
    time.sleep(0.2)
    assert scheduler.fire_count == 1


def test_state_is_readable_during_a_slow_tick(make_scheduler):
    entered = threading.Event()
    release = threading.Event()

    def slow_tick():
        entered.set()
        release.wait(2.0)

    scheduler = make_scheduler(10, slow_tick)
    scheduler.resume()
    assert entered.wait(1.0)
    try:
        started = time.monotonic()
        assert scheduler.state is SchedulerState.RUNNING
        assert scheduler.is_running
        assert scheduler.fire_count == 1
        assert time.monotonic() - started < 0.1
    finally:
        release.set()


def test_suspend_waits_for_in_flight_tick(make_scheduler):
    entered = threading.Event()
    release = threading.Event()
    finished = []

    def slow_tick():
        entered.set()
        release.wait(2.0)
        finished.append(1)

    scheduler = make_scheduler(0.05, slow_tick)
    scheduler.resume()
    assert entered.wait(1.0)

    threading.Timer(0.2, release.set).start()
    scheduler.suspend()

    assert finished == [1]
    count = scheduler.fire_count
    time.sleep(0.2)
    assert scheduler.fire_count == count
