"""
Trial Data Model

Defines the records a trial produces:
- Actions: atomic, timestamped participant or system events
- Found items: one resolved (or abandoned) attempt within a round
- Rounds: one puzzle instance (a letter set, a number/target pair, a match setup)

Records are append-only. Downstream statistical code assumes that action
indices are contiguous and that the action slices of a round's items
reconstruct the round's full action stream.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class InvariantViolation(RuntimeError):
    """Raised when the engine is driven in a way that breaks a data invariant."""


class RejectionReason(Enum):
    """Why a participant action was turned away."""
    OFF_TARGET = "off_target"
    DUPLICATE = "duplicate"
    TOO_LONG = "too_long"
    TOO_SHORT = "too_short"
    TRAILING_OPERATOR = "trailing_operator"
    INVALID_TOKEN = "invalid_token"
    INVALID_LETTERS = "invalid_letters"
    NO_SLOT = "no_slot"
    HAND_FULL = "hand_full"
    UNKNOWN_ENTITY = "unknown_entity"
    NOT_READY = "not_ready"
    INPUT_LOCKED = "input_locked"


@dataclass(frozen=True)
class Advisory:
    """
    Transient feedback for a participant action.

    A rejected action leaves the model and the action log untouched.
    """
    accepted: bool
    reason: Optional[RejectionReason] = None
    message: str = ""
    payload: Any = None

    @classmethod
    def ok(cls, message: str = "", payload: Any = None) -> "Advisory":
        return cls(accepted=True, message=message, payload=payload)

    @classmethod
    def reject(cls, reason: RejectionReason, message: str = "") -> "Advisory":
        return cls(accepted=False, reason=reason, message=message)

    def __bool__(self) -> bool:
        return self.accepted


def export_value(value: Any) -> Any:
    """Convert nested records to plain Python values."""
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Enum):
        return value.value
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, dict):
        return {str(k): export_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [export_value(v) for v in value]
    return value


@dataclass(frozen=True)
class Action:
    """
    One atomic event within a trial.

    - action_index: position in the trial-scope log
    - local_index: position in the found-item slice that carries it
    - timestamp: milliseconds since the trial epoch
    """
    action_index: int
    local_index: int
    label: str
    timestamp: float
    details: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "action_index": self.action_index,
            "local_index": self.local_index,
            "label": self.label,
            "timestamp": self.timestamp,
            "details": export_value(self.details)
        }


@dataclass(frozen=True)
class FoundItem:
    """
    One resolved attempt within a round.

    A payload of None marks the sentinel that carries actions which did
    not lead to a successful resolution.
    """
    item_index: int
    payload: Any
    submit_time: Optional[float]
    actions: tuple = ()

    @property
    def is_sentinel(self) -> bool:
        return self.payload is None

    def to_dict(self) -> dict:
        return {
            "item_index": self.item_index,
            "payload": export_value(self.payload),
            "submit_time": self.submit_time,
            "actions": [a.to_dict() for a in self.actions]
        }


@dataclass
class Round:
    """
    One puzzle instance within a trial.

    Items are only ever appended while the round is open.
    """
    round_index: int
    config: dict = field(default_factory=dict)
    start_time: float = 0.0
    end_time: Optional[float] = None
    items: list = field(default_factory=list)
    closed: bool = False

    def append(self, item: FoundItem) -> None:
        if self.closed:
            raise InvariantViolation(
                f"Round {self.round_index} is closed; cannot append item {item.item_index}"
            )
        self.items.append(item)

    def close(self, timestamp: float) -> None:
        self.closed = True
        self.end_time = timestamp

    @property
    def resolved_items(self) -> list:
        """Items with a real payload."""
        return [i for i in self.items if not i.is_sentinel]

    @property
    def actions(self) -> list:
        """The round's action stream, rebuilt from its item slices."""
        stream = []
        for item in self.items:
            stream.extend(item.actions)
        return stream

    def to_dict(self) -> dict:
        return {
            "round_index": self.round_index,
            "config": export_value(self.config),
            "start_time": self.start_time,
            "end_time": self.end_time,
            "closed": self.closed,
            "items": [i.to_dict() for i in self.items]
        }
