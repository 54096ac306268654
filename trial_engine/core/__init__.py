"""
Core trial machinery.

- Action log and round ledger (recorder)
- Countdown with graceful timeout negotiation (clock)
- Left-to-right arithmetic evaluation (expressions)
"""

from .entities import (
    Action,
    Advisory,
    FoundItem,
    InvariantViolation,
    RejectionReason,
    Round
)
from .recorder import ActionRecorder, RoundLedger, MillisecondClock
from .clock import TrialClock, TimeoutState, ClockDriver
from .expressions import ExpressionEvaluator, evaluate, round_half_away

__all__ = [
    "Action",
    "Advisory",
    "FoundItem",
    "InvariantViolation",
    "RejectionReason",
    "Round",
    "ActionRecorder",
    "RoundLedger",
    "MillisecondClock",
    "TrialClock",
    "TimeoutState",
    "ClockDriver",
    "ExpressionEvaluator",
    "evaluate",
    "round_half_away"
]
