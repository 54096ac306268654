"""
Trial Controller - Shared Orchestration

Every game wires the same pieces together:
- TrialClock: countdown and graceful timeout negotiation
- ActionRecorder / RoundLedger: the append-only action and round log
- An injected random source for all generated content

Participant input is gated by the clock. While input is locked, play
methods return an INPUT_LOCKED advisory and nothing is recorded. A move
completed during the grace period arms the end of the trial. Running out
of time or declining the extension only locks input; the result is
delivered when the participant presses END.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional
import logging
import random

from ..config import Settings, TrialConfig, get_settings
from ..core import (
    ActionRecorder,
    Advisory,
    ClockDriver,
    InvariantViolation,
    RejectionReason,
    RoundLedger,
    TimeoutState,
    TrialClock
)
from ..core.entities import export_value

logger = logging.getLogger(__name__)

GAME_END = "GAME_END"
HELP = "HELP"


@dataclass
class TrialResult:
    """
    Everything a finished trial hands to the runner, by value.

    databases holds every generated entity, records the match/couple records.
    """
    game: str
    config: dict
    rounds: list
    actions: list
    databases: dict = field(default_factory=dict)
    records: dict = field(default_factory=dict)
    time_left: int = 0
    end_state: str = TimeoutState.ENDED.value
    summary: dict = field(default_factory=dict)

    @property
    def found_items(self) -> list:
        return [item for r in self.rounds for item in r.items]

    def to_dict(self) -> dict:
        return {
            "game": self.game,
            "config": dict(self.config),
            "rounds": [r.to_dict() for r in self.rounds],
            "actions": [a.to_dict() for a in self.actions],
            "databases": {name: export_value(items) for name, items in self.databases.items()},
            "records": {name: export_value(items) for name, items in self.records.items()},
            "time_left": self.time_left,
            "end_state": self.end_state,
            "summary": export_value(self.summary)
        }


class TrialController:
    """
    Base class for the game controllers.

    Subclasses set up their puzzle state, open the first round with
    _open_round() and implement the play methods. They report entity
    databases and records through _databases() / _records().
    """

    game_name = "trial"

    def __init__(
        self,
        config: Optional[TrialConfig] = None,
        on_finish: Optional[Callable[[TrialResult], Any]] = None,
        rng: Optional[random.Random] = None,
        clock_source: Optional[Callable[[], float]] = None,
        settings: Optional[Settings] = None
    ):
        self.config = config or TrialConfig()
        self.settings = settings or get_settings()
        self.rng = rng or random.Random(self.config.seed)
        self.recorder = ActionRecorder(clock=clock_source)
        self.ledger = RoundLedger(self.recorder)
        self.clock = TrialClock(
            self.config.time_limit_seconds,
            allow_graceful_extension=self.config.allow_graceful_extension,
            on_game_end=self._on_game_end
        )
        self._on_finish = on_finish
        self._result: Optional[TrialResult] = None
        self._driver: Optional[ClockDriver] = None

    # Lifecycle

    def start_clock(self, interval: Optional[float] = None, **driver_kwargs) -> ClockDriver:
        """Start ticking on the running event loop."""
        self._driver = ClockDriver(
            self.clock,
            interval=interval or self.settings.clock.tick_interval_seconds,
            **driver_kwargs
        )
        self._driver.start()
        return self._driver

    def tick(self) -> None:
        self.clock.tick()

    def choose_continue(self) -> None:
        """Accept the extra move offered when time ran out."""
        self.clock.choose_continue()

    def choose_end(self) -> None:
        """Decline the extra move; input stays locked until end()."""
        self.clock.choose_end()

    def end(self) -> Optional[TrialResult]:
        """
        The participant's END control.

        Ends the trial first when it is still live (early stop while
        playing, declining the popup, confirming an armed grace move) and
        then delivers the result. Later calls return the same result;
        returns None after teardown.
        """
        if self._result is not None or self.clock.torn_down:
            return self._result
        if self.clock.state is TimeoutState.POPUP:
            self.clock.choose_end()
        elif self.clock.state is TimeoutState.PLAYING:
            self.clock.stop()
        else:
            self.clock.acknowledge_end()
        return self.finish()

    def finish(self) -> Optional[TrialResult]:
        """
        Record GAME_END, close the ledger and deliver the result.

        Only an ended trial is delivered; on a live trial this goes
        through end() first. Safe to call more than once.
        """
        if self._result is not None or self.clock.torn_down:
            return self._result
        if self.clock.state is not TimeoutState.ENDED:
            return self.end()

        self.recorder.record(GAME_END)
        self.ledger.close_trial()
        self._cancel_driver()

        self._result = TrialResult(
            game=self.game_name,
            config=self.config.model_dump(),
            rounds=self.ledger.rounds,
            actions=self.recorder.actions,
            databases=self._databases(),
            records=self._records(),
            time_left=self.clock.time_left,
            end_state=self.clock.state.value,
            summary=self.summary()
        )
        logger.info(
            "%s finished: %d rounds, %d actions",
            self.game_name, len(self._result.rounds), len(self._result.actions)
        )
        if self._on_finish is not None:
            self._on_finish(self._result)
        return self._result

    def _on_game_end(self) -> None:
        # clock callback: the trial is over but nothing is delivered yet
        self._cancel_driver()
        logger.info("%s ended with %d seconds left", self.game_name, self.clock.time_left)

    def teardown(self) -> None:
        """Abandon the trial; later events are ignored."""
        self._cancel_driver()
        self.clock.teardown()

    @property
    def result(self) -> Optional[TrialResult]:
        return self._result

    @property
    def finished(self) -> bool:
        return self._result is not None

    # Helpers for subclasses

    def help(self) -> Advisory:
        """Open the instructions. Allowed whenever the trial is live."""
        if self.finished or self.clock.torn_down:
            return self._locked()
        self.recorder.record(HELP)
        return Advisory.ok("Help opened")

    def _guard(self) -> Optional[Advisory]:
        """Rejection advisory when play input is not accepted, else None."""
        if self.finished or not self.clock.input_enabled:
            return self._locked()
        return None

    def _locked(self) -> Advisory:
        return Advisory.reject(RejectionReason.INPUT_LOCKED, "Input is locked")

    def _reject(self, reason: RejectionReason, message: str) -> Advisory:
        logger.debug("%s rejected: %s (%s)", self.game_name, reason.value, message)
        return Advisory.reject(reason, message)

    def _complete_move(self) -> None:
        """A move finished; during the grace period this arms the end."""
        if self.clock.is_grace_period:
            logger.info("%s grace move completed", self.game_name)
        self.clock.complete_move()

    def _open_round(self, config: dict) -> None:
        if self.finished:
            raise InvariantViolation("Trial already finished")
        self.ledger.start_new_round(config)

    def _cancel_driver(self) -> None:
        if self._driver is not None:
            self._driver.cancel()

    def _databases(self) -> dict:
        return {}

    def _records(self) -> dict:
        return {}

    def summary(self) -> dict:
        return {}
