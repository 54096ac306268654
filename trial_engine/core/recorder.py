"""
Action Recorder and Round Ledger

The recorder is the append-only event log of a single trial. The ledger
groups that log into rounds and found items:

    trial
      └── rounds (one per puzzle instance)
            └── found items (one per resolved attempt, plus a sentinel)
                  └── actions (the slice of the log that led to the item)

Every action lands in exactly one found item, so the item slices of all
rounds, concatenated in order, replay the complete trial log.
"""

from typing import Any, Callable, Iterator, Optional
import logging
import time

from .entities import Action, FoundItem, InvariantViolation, Round

logger = logging.getLogger(__name__)


class MillisecondClock:
    """Milliseconds elapsed since the trial epoch."""

    def __init__(self, source: Callable[[], float] = time.perf_counter):
        self._source = source
        self._epoch = source()

    def now(self) -> float:
        return (self._source() - self._epoch) * 1000.0

    def __call__(self) -> float:
        return self.now()


class ActionRecorder:
    """
    Append-only, per-trial action log.

    Keeps two views of the same stream:
    - the full log, indexed from 0 for the whole trial
    - the pending slice, indexed from 0 since the last reset
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        self._clock = clock or MillisecondClock()
        self._log: list[Action] = []
        self._pending: list[Action] = []

    def record(self, label: str, **details: Any) -> Action:
        """Append an action with the next contiguous index."""
        action = Action(
            action_index=len(self._log),
            local_index=len(self._pending),
            label=label,
            timestamp=self._clock(),
            details={k: v for k, v in details.items() if v is not None}
        )
        self._log.append(action)
        self._pending.append(action)
        logger.debug("action %d %s %s", action.action_index, label, action.details)
        return action

    def take_pending(self) -> tuple:
        """Return the pending slice and start a new one."""
        taken = tuple(self._pending)
        self._pending = []
        return taken

    def now(self) -> float:
        return self._clock()

    @property
    def pending(self) -> tuple:
        return tuple(self._pending)

    @property
    def actions(self) -> list[Action]:
        return list(self._log)

    def replay(self) -> Iterator[Action]:
        """Iterate over the full log in insertion order."""
        return iter(list(self._log))

    def __len__(self) -> int:
        return len(self._log)

    def to_dict(self) -> dict:
        return {"actions": [a.to_dict() for a in self._log]}


class RoundLedger:
    """
    Ordered rounds of a trial, each with its found items.

    Mutations are append-only. Once the trial is closed no further rounds
    or items can be added.
    """

    def __init__(self, recorder: ActionRecorder):
        self._recorder = recorder
        self._rounds: list[Round] = []
        self._closed = False

    @property
    def rounds(self) -> list[Round]:
        return list(self._rounds)

    @property
    def current_round(self) -> Optional[Round]:
        if not self._rounds or self._rounds[-1].closed:
            return None
        return self._rounds[-1]

    @property
    def is_closed(self) -> bool:
        return self._closed

    def start_new_round(self, config: Optional[dict] = None) -> Round:
        """Close the current round (if any) and open the next one."""
        if self._closed:
            raise InvariantViolation("Cannot start a round after the trial was closed")

        previous = self.current_round
        if previous is not None:
            # uncommitted actions stay with the round that produced them
            if self._recorder.pending:
                self._append_sentinel(previous)
            previous.close(self._recorder.now())

        new_round = Round(
            round_index=len(self._rounds),
            config=dict(config or {}),
            start_time=self._recorder.now()
        )
        self._rounds.append(new_round)
        logger.debug("opened round %d %s", new_round.round_index, new_round.config)
        return new_round

    def commit_item(self, payload: Any) -> FoundItem:
        """Record a resolved attempt together with the actions that led to it."""
        if payload is None:
            raise InvariantViolation("Use close_trial() to record a null-payload item")
        current = self._require_open_round()

        item = FoundItem(
            item_index=len(current.items),
            payload=payload,
            submit_time=self._recorder.now(),
            actions=self._recorder.take_pending()
        )
        current.append(item)
        return item

    def close_trial(self) -> FoundItem:
        """Append the sentinel with all uncommitted actions and seal the ledger."""
        current = self._require_open_round()

        sentinel = self._append_sentinel(current)
        current.close(self._recorder.now())
        self._closed = True
        logger.debug(
            "closed trial with %d rounds, %d actions",
            len(self._rounds), len(self._recorder)
        )
        return sentinel

    def _append_sentinel(self, target: Round) -> FoundItem:
        sentinel = FoundItem(
            item_index=len(target.items),
            payload=None,
            submit_time=None,
            actions=self._recorder.take_pending()
        )
        target.append(sentinel)
        return sentinel

    def _require_open_round(self) -> Round:
        if self._closed:
            raise InvariantViolation("Trial already closed")
        current = self.current_round
        if current is None:
            raise InvariantViolation("No open round")
        return current

    def items(self) -> list[FoundItem]:
        """All found items across rounds in commit order."""
        return [item for r in self._rounds for item in r.items]

    def to_dict(self) -> dict:
        return {"rounds": [r.to_dict() for r in self._rounds]}
