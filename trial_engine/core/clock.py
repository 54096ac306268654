"""
Trial Clock - Countdown with Graceful Timeout

When the countdown reaches zero the participant may be offered one more
move instead of being cut off mid-input:

    PLAYING ──(time up, extension off)──────────────> ENDED
    PLAYING ──(time up, extension on)──> POPUP
    POPUP ──(end)──> ENDED
    POPUP ──(continue)──> GRACE ──(one move)──> ENDED (armed)

The transitions are linear; nothing ever returns to PLAYING. The
end-of-trial callback fires at most once. After a grace move it only fires
when the participant acknowledges the end, so the in-flight move is kept.
"""

from enum import Enum
from typing import Awaitable, Callable, Optional
import asyncio
import logging

from .entities import InvariantViolation

logger = logging.getLogger(__name__)


class TimeoutState(Enum):
    """Phase of the graceful-timeout protocol."""
    PLAYING = "playing"
    POPUP = "popup"
    GRACE = "grace"
    ENDED = "ended"


class TrialClock:
    """
    Countdown and timeout negotiation for one trial.

    Driven by discrete events: tick() once per second, plus the popup and
    end controls. A ClockDriver supplies the ticks in an asyncio loop.
    """

    def __init__(
        self,
        time_limit_seconds: int,
        allow_graceful_extension: bool = False,
        on_game_end: Optional[Callable[[], None]] = None
    ):
        if time_limit_seconds < 0:
            raise ValueError(f"time limit must be non-negative, got {time_limit_seconds}")

        self.time_limit_seconds = int(time_limit_seconds)
        self.allow_graceful_extension = allow_graceful_extension
        self._on_game_end = on_game_end

        self._state = TimeoutState.PLAYING
        self._time_left = self.time_limit_seconds
        self._callback_fired = False
        self._torn_down = False
        self._driver: Optional["ClockDriver"] = None

    # State

    @property
    def state(self) -> TimeoutState:
        return self._state

    @property
    def time_left(self) -> int:
        return self._time_left

    @property
    def show_popup(self) -> bool:
        return self._state is TimeoutState.POPUP

    @property
    def is_grace_period(self) -> bool:
        return self._state is TimeoutState.GRACE

    @property
    def is_ended(self) -> bool:
        return self._state is TimeoutState.ENDED

    @property
    def input_enabled(self) -> bool:
        """Normal play input is accepted while playing and during the grace move."""
        if self._torn_down:
            return False
        return self._state in (TimeoutState.PLAYING, TimeoutState.GRACE)

    @property
    def callback_fired(self) -> bool:
        return self._callback_fired

    @property
    def torn_down(self) -> bool:
        return self._torn_down

    def display(self) -> str:
        """Remaining time as m:ss."""
        return f"{self._time_left // 60}:{self._time_left % 60:02d}"

    # Events

    def tick(self) -> None:
        """Advance the countdown by one second."""
        if self._torn_down:
            return
        if self._state is not TimeoutState.PLAYING:
            raise InvariantViolation(f"tick() while {self._state.value}")

        self._time_left = max(0, self._time_left - 1)
        if self._time_left == 0:
            self._handle_timer_end()

    def choose_continue(self) -> None:
        """The participant asked to finish their last move."""
        if self._torn_down or self._state is TimeoutState.GRACE:
            return
        if self._state is not TimeoutState.POPUP:
            raise InvariantViolation(f"choose_continue() while {self._state.value}")
        self._transition(TimeoutState.GRACE)

    def choose_end(self) -> None:
        """The participant declined the extra move."""
        if self._torn_down or self._state is TimeoutState.ENDED:
            return
        if self._state is not TimeoutState.POPUP:
            raise InvariantViolation(f"choose_end() while {self._state.value}")
        self._transition(TimeoutState.ENDED)
        self.fire_game_end()

    def complete_move(self) -> None:
        """
        Report a finished move.

        Only meaningful during the grace period, where it arms the end
        without firing the callback. Ignored in every other phase.
        """
        if self._torn_down or self._state is not TimeoutState.GRACE:
            return
        self._transition(TimeoutState.ENDED)

    def acknowledge_end(self) -> None:
        """The participant pressed the end control after the clock ran out."""
        if self._torn_down:
            return
        if self._state is TimeoutState.GRACE:
            self._transition(TimeoutState.ENDED)
        if self._state is not TimeoutState.ENDED:
            raise InvariantViolation(f"acknowledge_end() while {self._state.value}")
        self.fire_game_end()

    def stop(self) -> None:
        """End the trial before time runs out."""
        if self._torn_down or self._state is TimeoutState.ENDED:
            return
        self._transition(TimeoutState.ENDED)
        self.fire_game_end()

    def fire_game_end(self) -> None:
        """Invoke the end-of-trial callback once; later calls are no-ops."""
        if self._callback_fired:
            return
        self._callback_fired = True
        logger.info("trial ended with %d seconds left", self._time_left)
        if self._on_game_end is not None:
            self._on_game_end()

    def teardown(self) -> None:
        """Abandon the trial in whatever phase it is in."""
        self._cancel_driver()
        self._torn_down = True
        logger.debug("clock torn down in %s", self._state.value)

    # Internals

    def bind_driver(self, driver: "ClockDriver") -> None:
        self._driver = driver

    def _handle_timer_end(self) -> None:
        if self.allow_graceful_extension:
            self._transition(TimeoutState.POPUP)
        else:
            self._transition(TimeoutState.ENDED)
            self.fire_game_end()

    def _transition(self, new_state: TimeoutState) -> None:
        old_state = self._state
        if old_state is TimeoutState.PLAYING and new_state is not TimeoutState.PLAYING:
            self._cancel_driver()
        self._state = new_state
        logger.info("clock %s -> %s", old_state.value, new_state.value)

    def _cancel_driver(self) -> None:
        if self._driver is not None:
            self._driver.cancel()


class ClockDriver:
    """
    Feeds one tick per interval into a TrialClock from an asyncio task.

    The task stops by itself when the clock leaves PLAYING, and the clock
    cancels it on every phase exit and on teardown.
    """

    def __init__(
        self,
        clock: TrialClock,
        interval: float = 1.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep
    ):
        self.clock = clock
        self.interval = interval
        self._sleep = sleep
        self._task: Optional[asyncio.Task] = None

    def start(self) -> asyncio.Task:
        """Schedule the tick loop on the running event loop."""
        if self._task is not None and not self._task.done():
            return self._task
        self.clock.bind_driver(self)
        self._task = asyncio.get_running_loop().create_task(self._run())
        return self._task

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def cancel(self) -> None:
        if self._task is None or self._task.done():
            return
        try:
            current = asyncio.current_task()
        except RuntimeError:
            current = None
        if self._task is not current:
            self._task.cancel()

    async def _run(self) -> None:
        try:
            while self._live():
                await self._sleep(self.interval)
                if not self._live():
                    break
                self.clock.tick()
        except asyncio.CancelledError:
            logger.debug("clock driver cancelled")
            raise

    def _live(self) -> bool:
        return not self.clock.torn_down and self.clock.state is TimeoutState.PLAYING
