"""
Unit tests for the countdown and the graceful timeout negotiation.
"""

import asyncio

import pytest

from trial_engine.core import ClockDriver, InvariantViolation, TimeoutState, TrialClock


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class CallbackCounter:
    def __init__(self):
        self.calls = 0

    def __call__(self):
        self.calls += 1


def run_down(clock):
    for _ in range(clock.time_left):
        clock.tick()


async def instant_sleep(_interval):
    await asyncio.sleep(0)


# ---------------------------------------------------------------------------
# Countdown
# ---------------------------------------------------------------------------

def test_display_formats_minutes_and_seconds():
    clock = TrialClock(240)
    assert clock.display() == "4:00"
    clock.tick()
    assert clock.display() == "3:59"


def test_negative_time_limit_is_rejected():
    with pytest.raises(ValueError):
        TrialClock(-1)


def test_time_up_without_extension_ends_and_fires_once():
    callback = CallbackCounter()
    clock = TrialClock(3, allow_graceful_extension=False, on_game_end=callback)
    run_down(clock)

    assert clock.state is TimeoutState.ENDED
    assert callback.calls == 1
    assert not clock.input_enabled

    clock.fire_game_end()
    clock.stop()
    assert callback.calls == 1


def test_tick_after_end_is_invariant_violation():
    clock = TrialClock(1)
    clock.tick()
    with pytest.raises(InvariantViolation):
        clock.tick()


# ---------------------------------------------------------------------------
# Graceful timeout
# ---------------------------------------------------------------------------

def test_time_up_with_extension_shows_popup():
    callback = CallbackCounter()
    clock = TrialClock(2, allow_graceful_extension=True, on_game_end=callback)
    run_down(clock)

    assert clock.show_popup
    assert not clock.input_enabled
    assert callback.calls == 0
    with pytest.raises(InvariantViolation):
        clock.tick()


def test_popup_end_fires_callback():
    callback = CallbackCounter()
    clock = TrialClock(1, allow_graceful_extension=True, on_game_end=callback)
    clock.tick()
    clock.choose_end()
    clock.choose_end()

    assert clock.is_ended
    assert callback.calls == 1


def test_grace_move_arms_end_without_firing():
    callback = CallbackCounter()
    clock = TrialClock(1, allow_graceful_extension=True, on_game_end=callback)
    clock.tick()
    clock.choose_continue()

    assert clock.is_grace_period
    assert clock.input_enabled

    clock.complete_move()
    assert clock.is_ended
    assert not clock.input_enabled
    assert callback.calls == 0

    clock.acknowledge_end()
    clock.acknowledge_end()
    assert callback.calls == 1


def test_complete_move_outside_grace_is_ignored():
    clock = TrialClock(10, allow_graceful_extension=True)
    clock.complete_move()
    assert clock.state is TimeoutState.PLAYING


def test_protocol_controls_out_of_phase_raise():
    clock = TrialClock(10, allow_graceful_extension=True)
    with pytest.raises(InvariantViolation):
        clock.choose_continue()
    with pytest.raises(InvariantViolation):
        clock.choose_end()
    with pytest.raises(InvariantViolation):
        clock.acknowledge_end()


def test_stop_ends_early():
    callback = CallbackCounter()
    clock = TrialClock(60, on_game_end=callback)
    clock.tick()
    clock.stop()

    assert clock.is_ended
    assert clock.time_left == 59
    assert callback.calls == 1


def test_teardown_ignores_later_events():
    callback = CallbackCounter()
    clock = TrialClock(1, on_game_end=callback)
    clock.teardown()
    clock.tick()
    clock.stop()

    assert clock.torn_down
    assert not clock.input_enabled
    assert clock.state is TimeoutState.PLAYING
    assert callback.calls == 0


# ---------------------------------------------------------------------------
# Asyncio driver
# ---------------------------------------------------------------------------

def test_driver_ticks_until_the_clock_ends():
    callback = CallbackCounter()

    async def scenario():
        clock = TrialClock(3, on_game_end=callback)
        driver = ClockDriver(clock, interval=1.0, sleep=instant_sleep)
        await driver.start()
        return clock, driver

    clock, driver = asyncio.run(scenario())
    assert clock.is_ended
    assert clock.time_left == 0
    assert callback.calls == 1
    assert not driver.running


def test_driver_stops_at_popup():
    async def scenario():
        clock = TrialClock(2, allow_graceful_extension=True)
        driver = ClockDriver(clock, sleep=instant_sleep)
        await driver.start()
        return clock

    clock = asyncio.run(scenario())
    assert clock.show_popup


def test_teardown_cancels_the_driver():
    async def scenario():
        clock = TrialClock(60)
        driver = ClockDriver(clock, interval=10.0)
        task = driver.start()
        await asyncio.sleep(0)
        clock.teardown()
        with pytest.raises(asyncio.CancelledError):
            await task
        return clock, task

    clock, task = asyncio.run(scenario())
    assert task.cancelled()
    assert clock.time_left == 60


def test_stop_cancels_the_driver():
    async def scenario():
        clock = TrialClock(60)
        driver = ClockDriver(clock, interval=10.0)
        task = driver.start()
        await asyncio.sleep(0)
        clock.stop()
        with pytest.raises(asyncio.CancelledError):
            await task
        return driver

    driver = asyncio.run(scenario())
    assert not driver.running
