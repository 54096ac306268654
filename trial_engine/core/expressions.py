"""
Left-to-right Expression Evaluation

Terms in the number game are evaluated strictly from left to right with
no operator precedence:

    5 + 5 × 7  ->  (5 + 5) × 7 = 70

A trailing operator is legal while the participant is still typing and is
simply not applied.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, Union
import math
import re

from .entities import Advisory, RejectionReason

OPERATORS = {
    "+": "+",
    "-": "-",
    "*": "*",
    "/": "/",
    "×": "*",
    "x": "*",
    "÷": "/",
    "−": "-",
}

DISPLAY_SYMBOLS = {"+": "+", "-": "-", "*": "×", "/": "÷"}

_TOKEN_RE = re.compile(r"\s*(\d+(?:\.\d+)?|[+\-*/×x÷−])")

Token = Union[float, int, str]


def round_half_away(value: float, places: int = 2) -> float:
    """Round to the given number of decimals, halves away from zero."""
    # floats this large have no fractional digits left
    if not math.isfinite(value) or abs(value) >= 1e15:
        return value
    # rounds the shortest decimal form, so 1.005 stays 1.005 and not 1.00499...
    quantum = Decimal(1).scaleb(-places)
    rounded = float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))
    return rounded if rounded else 0.0


def _divide(left: float, right: float) -> float:
    if right != 0:
        return left / right
    if left == 0 or math.isnan(left):
        return math.nan
    return math.copysign(math.inf, left) * math.copysign(1.0, right)


def _apply(left: float, operator: str, right: float) -> float:
    if operator == "+":
        return left + right
    if operator == "-":
        return left - right
    if operator == "*":
        return left * right
    if operator == "/":
        return _divide(left, right)
    raise ValueError(f"Unknown operator: {operator}")


def is_operator(token: Token) -> bool:
    return isinstance(token, str) and token in OPERATORS


class ExpressionEvaluator:
    """
    Evaluates number/operator token streams and judges submissions.

    A submission is accepted when it ends on a number, hits the target
    exactly, fits the length bound and has not been found before in the
    same round. Duplicate values reached by different expressions are fine.
    """

    def __init__(self, max_tokens: int = 15, places: int = 2):
        self.max_tokens = max_tokens
        self.places = places

    def tokenize(self, expression: str) -> list:
        """Split an expression string into numbers and canonical operators."""
        tokens = []
        position = 0
        text = expression.strip()
        while position < len(text):
            match = _TOKEN_RE.match(text, position)
            if not match:
                raise ValueError(f"Invalid character in expression {expression!r} at {position}")
            raw = match.group(1)
            if raw in OPERATORS:
                tokens.append(OPERATORS[raw])
            else:
                number = float(raw)
                tokens.append(int(number) if number.is_integer() else number)
            position = match.end()
            while position < len(text) and text[position].isspace():
                position += 1
        return tokens

    def evaluate(self, expression: Union[str, Iterable[Token]]) -> float:
        """Evaluate left to right and round the result."""
        tokens = self.tokenize(expression) if isinstance(expression, str) else list(expression)
        if not tokens:
            return 0
        if is_operator(tokens[0]):
            raise ValueError("Expression must start with a number")

        value = float(tokens[0])
        pending: Optional[str] = None
        for token in tokens[1:]:
            if is_operator(token):
                if pending is not None:
                    raise ValueError("Two operators in a row")
                pending = OPERATORS[token]
            else:
                if pending is None:
                    raise ValueError("Two numbers in a row")
                value = _apply(value, pending, float(token))
                pending = None

        result = round_half_away(value, self.places)
        if math.isfinite(result) and float(result).is_integer():
            return int(result)
        return result

    @staticmethod
    def to_string(tokens: Iterable[Token]) -> str:
        """Canonical ASCII form used for duplicate detection."""
        parts = []
        for token in tokens:
            if is_operator(token):
                parts.append(OPERATORS[token])
            elif isinstance(token, float) and token.is_integer():
                parts.append(str(int(token)))
            else:
                parts.append(str(token))
        return "".join(parts)

    @staticmethod
    def to_display(tokens: Iterable[Token]) -> str:
        parts = []
        for token in tokens:
            parts.append(DISPLAY_SYMBOLS[OPERATORS[token]] if is_operator(token) else str(token))
        return " ".join(parts)

    def check_submission(
        self,
        tokens: list,
        target: float,
        found_expressions: Iterable[str] = ()
    ) -> Advisory:
        """Judge a submission without touching any state."""
        if not tokens:
            return Advisory.reject(RejectionReason.NOT_READY, "Build a term first")
        if len(tokens) > self.max_tokens:
            return Advisory.reject(RejectionReason.TOO_LONG, "That term is too long")
        if is_operator(tokens[-1]):
            return Advisory.reject(
                RejectionReason.TRAILING_OPERATOR, "A term must end with a number"
            )

        expression = self.to_string(tokens)
        result = self.evaluate(tokens)
        if result != target:
            return Advisory.reject(
                RejectionReason.OFF_TARGET, f"{expression} = {result}, not {target}"
            )
        if expression in set(found_expressions):
            return Advisory.reject(RejectionReason.DUPLICATE, f"{expression} was already found")

        return Advisory.ok(f"{expression} = {result}", payload={
            "expression": expression,
            "result": result
        })


_default_evaluator = ExpressionEvaluator()


def evaluate(expression: Union[str, Iterable[Token]]) -> float:
    """Evaluate with the default evaluator."""
    return _default_evaluator.evaluate(expression)
