"""
Number Game

Participants combine the four numbers of a set with + - × ÷ into terms
that hit the target. Terms are evaluated strictly from left to right.

Play:
- NUMBER / OPERATOR: append a token (each number tile at most once per term)
- DELETE: undo the last token
- CLEAR: abandon the current term
- NEW_SET: move on to another number set (opens a new round)
- ENTER: submit the term; accepted terms are committed as found items
"""

from dataclasses import dataclass
from typing import Optional
import logging

from ..core import Advisory, ExpressionEvaluator, RejectionReason
from ..core.expressions import DISPLAY_SYMBOLS, OPERATORS
from .base import TrialController

logger = logging.getLogger(__name__)

# (numbers, target)
NUMBER_SETS = (
    ((3, 4, 1, 7), 21),
    ((2, 5, 8, 1), 15),
    ((6, 3, 9, 2), 18),
    ((4, 7, 1, 5), 24),
    ((8, 3, 2, 6), 14),
    ((1, 9, 4, 3), 27),
    ((5, 2, 7, 8), 35),
    ((3, 6, 1, 4), 12),
    ((9, 2, 5, 7), 42),
    ((4, 8, 3, 1), 16),
    ((6, 1, 9, 2), 48),
    ((7, 4, 2, 5), 33),
    ((3, 8, 6, 1), 25),
    ((2, 7, 4, 9), 56),
    ((5, 1, 8, 3), 19),
    ((9, 6, 2, 4), 36),
    ((1, 5, 7, 8), 40),
    ((4, 3, 9, 2), 30),
    ((8, 1, 6, 5), 45),
    ((2, 9, 3, 7), 63),
    ((1, 4, 6, 8), 32),
    ((5, 2, 9, 1), 46),
    ((3, 7, 4, 6), 41),
    ((8, 1, 3, 5), 37),
    ((2, 6, 7, 9), 58),
    ((4, 1, 8, 3), 29),
    ((9, 5, 2, 4), 38),
    ((6, 3, 1, 7), 22),
    ((1, 8, 4, 2), 26),
    ((7, 3, 9, 5), 59),
    ((2, 4, 6, 1), 13),
    ((8, 7, 3, 9), 75),
    ((5, 1, 2, 6), 17),
    ((4, 9, 7, 8), 64),
    ((3, 2, 5, 1), 11),
    ((6, 8, 4, 7), 52),
    ((1, 3, 9, 2), 28),
    ((5, 7, 6, 4), 47),
    ((8, 2, 1, 9), 73),
    ((3, 6, 5, 8), 44),
    ((7, 4, 2, 3), 31),
    ((1, 9, 6, 5), 49),
    ((4, 8, 7, 1), 39),
    ((2, 3, 9, 6), 51),
    ((5, 1, 8, 7), 43),
    ((9, 4, 3, 2), 34),
    ((6, 7, 1, 8), 55),
    ((3, 5, 4, 9), 67),
    ((2, 8, 6, 1), 23),
    ((7, 9, 5, 3), 61),
    ((4, 1, 2, 8), 20),
    ((6, 3, 7, 4), 46),
    ((9, 8, 1, 5), 72),
    ((2, 5, 3, 7), 32),
    ((1, 6, 9, 4), 57),
    ((8, 3, 5, 2), 35),
    ((7, 1, 4, 6), 29),
    ((5, 9, 8, 3), 69),
    ((4, 2, 7, 1), 15),
    ((6, 5, 3, 9), 53),
    ((8, 7, 2, 4), 50),
)


class NumberAction:
    NUMBER = "NUMBER"
    OPERATOR = "OPERATOR"
    DELETE = "DELETE"
    CLEAR = "CLEAR"
    NEW_SET = "NEW_SET"
    ENTER = "ENTER"


@dataclass(frozen=True)
class NumberSet:
    index: int
    numbers: tuple
    target: int

    def to_dict(self) -> dict:
        return {"set_index": self.index, "numbers": list(self.numbers), "target": self.target}


@dataclass(frozen=True)
class FoundExpression:
    """Payload of an accepted term."""
    expression: str
    display: str
    result: float
    target: int

    def to_dict(self) -> dict:
        return {
            "expression": self.expression,
            "display": self.display,
            "result": self.result,
            "target": self.target
        }


class NumberGame(TrialController):
    """Controller for the number game."""

    game_name = "number_game"

    def __init__(self, *args, number_sets: Optional[tuple] = None, **kwargs):
        super().__init__(*args, **kwargs)
        game = self.settings.game
        self.evaluator = ExpressionEvaluator(
            max_tokens=game.max_expression_tokens,
            places=game.result_decimal_places
        )
        self.number_sets = number_sets or NUMBER_SETS
        if not self.number_sets:
            raise ValueError("At least one number set is required")

        self.tokens: list = []
        self._used_tiles: list[Optional[int]] = []
        self.found: list[FoundExpression] = []
        self.current_set = self._draw_set()
        self._open_round(self.current_set.to_dict())

    # Puzzle state

    def _draw_set(self, exclude: Optional[int] = None) -> NumberSet:
        candidates = [i for i in range(len(self.number_sets)) if i != exclude] or [0]
        index = self.rng.choice(candidates)
        numbers, target = self.number_sets[index]
        return NumberSet(index=index, numbers=tuple(numbers), target=target)

    @property
    def expression(self) -> str:
        return self.evaluator.to_string(self.tokens)

    @property
    def display(self) -> str:
        return self.evaluator.to_display(self.tokens)

    @property
    def preview(self) -> float:
        """Running value of the term typed so far."""
        return self.evaluator.evaluate(self.tokens)

    def found_in_round(self) -> list[str]:
        current = self.ledger.current_round
        if current is None:
            return []
        return [item.payload.expression for item in current.resolved_items]

    def _reset_input(self) -> None:
        self.tokens = []
        self._used_tiles = []

    # Play

    def press_number(self, tile: int) -> Advisory:
        """Append the number on the given tile (0-3)."""
        blocked = self._guard()
        if blocked is not None:
            return blocked
        if not 0 <= tile < len(self.current_set.numbers):
            return self._reject(RejectionReason.INVALID_TOKEN, f"No tile {tile}")
        if tile in self._used_tiles:
            return self._reject(RejectionReason.INVALID_TOKEN, "Each number can only be used once")
        if self.tokens and not isinstance(self.tokens[-1], str):
            return self._reject(RejectionReason.INVALID_TOKEN, "Choose an operator first")
        if len(self.tokens) >= self.evaluator.max_tokens:
            return self._reject(RejectionReason.TOO_LONG, "That term is too long")

        value = self.current_set.numbers[tile]
        self.tokens.append(value)
        self._used_tiles.append(tile)
        self.recorder.record(NumberAction.NUMBER, token=value, tile=tile)
        return Advisory.ok(self.display)

    def press_operator(self, operator: str) -> Advisory:
        blocked = self._guard()
        if blocked is not None:
            return blocked
        if operator not in OPERATORS:
            return self._reject(RejectionReason.INVALID_TOKEN, f"Unknown operator {operator!r}")
        if not self.tokens or isinstance(self.tokens[-1], str):
            return self._reject(RejectionReason.INVALID_TOKEN, "Choose a number first")
        if len(self.tokens) >= self.evaluator.max_tokens:
            return self._reject(RejectionReason.TOO_LONG, "That term is too long")

        canonical = OPERATORS[operator]
        self.tokens.append(canonical)
        self._used_tiles.append(None)
        self.recorder.record(NumberAction.OPERATOR, token=DISPLAY_SYMBOLS[canonical])
        return Advisory.ok(self.display)

    def delete(self) -> Advisory:
        blocked = self._guard()
        if blocked is not None:
            return blocked
        if not self.tokens:
            return self._reject(RejectionReason.NOT_READY, "Nothing to delete")

        token = self.tokens.pop()
        self._used_tiles.pop()
        self.recorder.record(NumberAction.DELETE, token=token)
        return Advisory.ok(self.display)

    def clear(self) -> Advisory:
        """Abandon the current term."""
        blocked = self._guard()
        if blocked is not None:
            return blocked
        if not self.tokens:
            return self._reject(RejectionReason.NOT_READY, "Nothing to clear")

        self.recorder.record(NumberAction.CLEAR, expression=self.expression)
        self._reset_input()
        self._complete_move()
        return Advisory.ok("Cleared")

    def new_set(self) -> Advisory:
        blocked = self._guard()
        if blocked is not None:
            return blocked

        self.recorder.record(NumberAction.NEW_SET, expression=self.expression or None)
        self._reset_input()
        self.current_set = self._draw_set(exclude=self.current_set.index)
        self._open_round(self.current_set.to_dict())
        self._complete_move()
        return Advisory.ok(f"New target: {self.current_set.target}")

    def submit(self) -> Advisory:
        """ENTER: judge the term and commit it when it hits the target."""
        blocked = self._guard()
        if blocked is not None:
            return blocked

        advisory = self.evaluator.check_submission(
            self.tokens, self.current_set.target, self.found_in_round()
        )
        if not advisory:
            logger.debug("term rejected: %s", advisory.message)
            return advisory

        found = FoundExpression(
            expression=advisory.payload["expression"],
            display=self.display,
            result=advisory.payload["result"],
            target=self.current_set.target
        )
        self.recorder.record(NumberAction.ENTER, expression=found.expression, result=found.result)
        self.ledger.commit_item(found)
        self.found.append(found)
        self._reset_input()
        self._complete_move()
        return advisory

    # Result

    def summary(self) -> dict:
        return {
            "found_count": len(self.found),
            "rounds_played": len(self.ledger.rounds)
        }
