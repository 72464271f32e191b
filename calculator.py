"""
Calculator Engine for TapCalc
Turns keypad presses into display updates, evaluating left to right
"""
import math
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional, Union

import config


class BinaryOperator(Enum):
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "×"
    DIVIDE = "÷"


class LastAction(Enum):
    NONE = "none"
    DIGIT = "digit"
    DECIMAL_POINT = "decimal_point"
    OPERATOR = "operator"
    EQUALS = "equals"
    PERCENT = "percent"


DIGITS = ("0", "1", "2", "3", "4", "5", "6", "7", "8", "9", "00")


# ── Events ─────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Digit:
    value: str

    def __post_init__(self):
        if self.value not in DIGITS:
            raise ValueError(f"Not a digit key: {self.value!r}")


@dataclass(frozen=True)
class DecimalPoint:
    pass


@dataclass(frozen=True)
class Operator:
    op: BinaryOperator


@dataclass(frozen=True)
class Equals:
    pass


@dataclass(frozen=True)
class Clear:
    pass


@dataclass(frozen=True)
class Percent:
    pass


Event = Union[Digit, DecimalPoint, Operator, Equals, Clear, Percent]

# Keypad label -> event. "*", "/" and "C" are ASCII aliases.
_KEY_EVENTS = {
    ".": DecimalPoint(),
    "=": Equals(),
    "AC": Clear(),
    "C": Clear(),
    "%": Percent(),
    "*": Operator(BinaryOperator.MULTIPLY),
    "/": Operator(BinaryOperator.DIVIDE),
}
_KEY_EVENTS.update({d: Digit(d) for d in DIGITS})
_KEY_EVENTS.update({op.value: Operator(op) for op in BinaryOperator})


def event_from_key(label):
    """Translate a keypad label into an engine event"""
    try:
        return _KEY_EVENTS[label]
    except (KeyError, TypeError):
        raise ValueError(f"Unknown key: {label!r}") from None


# ── Formatting ─────────────────────────────────────────────────────────────

def format_result(value: float) -> str:
    """Render a computed number for the display.

    Whole numbers below EXACT_INTEGER_LIMIT lose their decimal point.
    Anything else is rounded to DISPLAY_PRECISION significant digits and
    written in the shortest positional form that reads back as the rounded
    value, so 0.1 + 0.2 shows "0.3" and a 17-digit product shows its 12
    reliable digits padded with zeros.
    """
    value = float(value)
    if not math.isfinite(value):
        return config.ERROR_TEXT
    if value.is_integer() and abs(value) < config.EXACT_INTEGER_LIMIT:
        return str(int(value))

    rounded = float(f"{value:.{config.DISPLAY_PRECISION}g}")
    if rounded.is_integer() and abs(rounded) < config.EXACT_INTEGER_LIMIT:
        return str(int(rounded))
    # repr() is the shortest round-trip form; Decimal drops the exponent
    return format(Decimal(repr(rounded)).normalize(), "f")


def parse_display(text) -> float:
    """Read display text as a number; anything unreadable counts as zero"""
    try:
        value = float(text)
    except (TypeError, ValueError):
        return 0.0
    return value if math.isfinite(value) else 0.0


# ── State ──────────────────────────────────────────────────────────────────

@dataclass
class CalculatorState:
    display: str = "0"
    first_operand: Optional[float] = None
    pending_operator: Optional[BinaryOperator] = None
    last_action: LastAction = LastAction.NONE
    armed_for_replace: bool = False


@dataclass(frozen=True)
class DisplayState:
    """Read-only snapshot handed to whoever renders the calculator"""
    display: str
    first_operand: Optional[float] = None
    pending_operator: Optional[BinaryOperator] = None
    last_action: LastAction = LastAction.NONE
    armed_for_replace: bool = False

    @property
    def is_error(self):
        return self.display == config.ERROR_TEXT

    @property
    def expression(self):
        """Pending left operand and operator, e.g. "12 +" """
        if self.pending_operator is None or self.first_operand is None:
            return ""
        return f"{format_result(self.first_operand)} {self.pending_operator.value}"

    def to_dict(self):
        return {
            "display": self.display,
            "expression": self.expression,
            "first_operand": self.first_operand,
            "pending_operator": self.pending_operator.value if self.pending_operator else None,
            "last_action": self.last_action.value,
            "armed_for_replace": self.armed_for_replace,
            "is_error": self.is_error,
        }


# ── Engine ─────────────────────────────────────────────────────────────────

class CalculatorEngine:
    def __init__(self):
        self._state = CalculatorState()
        self._handlers = {
            Digit: self._on_digit,
            DecimalPoint: self._on_decimal_point,
            Operator: self._on_operator,
            Equals: self._on_equals,
            Clear: self._on_clear,
            Percent: self._on_percent,
        }

    @property
    def state(self) -> DisplayState:
        """Snapshot of the current state"""
        s = self._state
        return DisplayState(
            display=s.display,
            first_operand=s.first_operand,
            pending_operator=s.pending_operator,
            last_action=s.last_action,
            armed_for_replace=s.armed_for_replace,
        )

    def apply(self, event: Event) -> DisplayState:
        """Apply one keypad event and return the resulting display state"""
        handler = self._handlers.get(type(event))
        if handler is None:
            raise TypeError(f"Not a calculator event: {event!r}")
        handler(event)
        return self.state

    def press(self, label) -> DisplayState:
        """Apply the event behind a keypad label"""
        return self.apply(event_from_key(label))

    def reset(self) -> DisplayState:
        return self.apply(Clear())

    # ── Transitions ────────────────────────────────────────────────────────

    def _on_digit(self, event):
        s = self._state
        if s.armed_for_replace or s.display == "0":
            # "00" on an empty display is still a single zero
            s.display = "0" if event.value == "00" else event.value
            s.armed_for_replace = False
        else:
            s.display += event.value
        s.last_action = LastAction.DIGIT

    def _on_decimal_point(self, event):
        s = self._state
        if s.armed_for_replace:
            s.display = "0."
            s.armed_for_replace = False
        elif "." not in s.display:
            s.display += "."
        s.last_action = LastAction.DECIMAL_POINT

    def _on_clear(self, event):
        self._state = CalculatorState()

    def _on_operator(self, event):
        s = self._state
        if s.last_action is LastAction.OPERATOR:
            # Second operator in a row only corrects the choice
            s.pending_operator = event.op
            return

        if s.pending_operator is not None and s.first_operand is not None:
            self._compute()
        else:
            s.first_operand = parse_display(s.display)

        s.pending_operator = event.op
        s.armed_for_replace = True
        s.last_action = LastAction.OPERATOR

    def _on_equals(self, event):
        s = self._state
        if s.pending_operator is None or s.first_operand is None:
            return
        self._compute()
        s.pending_operator = None
        s.first_operand = None
        s.armed_for_replace = True
        s.last_action = LastAction.EQUALS

    def _on_percent(self, event):
        s = self._state
        s.display = format_result(parse_display(s.display) / 100)
        s.armed_for_replace = True
        s.last_action = LastAction.PERCENT

    def _compute(self):
        """Fold the pending operation into the display"""
        s = self._state
        second = parse_display(s.display)
        first = s.first_operand if s.first_operand is not None else 0.0

        op = s.pending_operator
        if op is BinaryOperator.ADD:
            result = first + second
        elif op is BinaryOperator.SUBTRACT:
            result = first - second
        elif op is BinaryOperator.MULTIPLY:
            result = first * second
        elif op is BinaryOperator.DIVIDE:
            result = first / second if second != 0 else math.inf
        else:
            return

        if not math.isfinite(result):
            self._fail()
            return

        s.display = format_result(result)
        s.first_operand = parse_display(s.display)

    def _fail(self):
        s = self._state
        s.display = config.ERROR_TEXT
        s.first_operand = None
        s.pending_operator = None
        s.armed_for_replace = True
