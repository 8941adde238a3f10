"""
Core value types for the Turing machine.

States and symbols are two-variant unions: a concrete value (RealState,
RealSymbol) or the wildcard sentinel (WildcardState, WildcardSymbol). The
wildcard never compares equal to a concrete value, whatever character the
program text used to spell it.

In a trigger the wildcard symbol means "any symbol"; in an action the wildcard
symbol means "keep the symbol just read" and the wildcard state means "keep
the current state". Rule.replace_wildcard performs that substitution.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Union

# ── Enums ──────────────────────────────────────────────────────────────────────


class Direction(Enum):
    """Head movement after a step. The value is the head offset."""

    LEFT = -1
    STAY = 0
    RIGHT = 1

    @property
    def offset(self) -> int:
        return self.value


# ── States and symbols ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class RealState:
    """A concrete, named machine state."""

    name: str

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("state name must be non-empty")

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class WildcardState:
    """Sentinel state: "unchanged" when used as the new state of an action."""

    def __str__(self) -> str:
        return "*"


@dataclass(frozen=True)
class RealSymbol:
    """A concrete tape symbol: exactly one character."""

    value: str

    def __post_init__(self) -> None:
        if len(self.value) != 1:
            raise ValueError(f"symbol must be a single character, got {self.value!r}")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class WildcardSymbol:
    """Sentinel symbol: matches any symbol in a trigger, keeps it in an action."""

    def __str__(self) -> str:
        return "*"


State = Union[RealState, WildcardState]
Symbol = Union[RealSymbol, WildcardSymbol]

WILDCARD_STATE = WildcardState()
WILDCARD_SYMBOL = WildcardSymbol()


# ── Rules ──────────────────────────────────────────────────────────────────────


class Trigger(NamedTuple):
    """(state, symbol) lookup key selecting a rule."""

    state: State
    symbol: Symbol


class Action(NamedTuple):
    """What the machine does when a trigger matches."""

    state: State
    symbol: Symbol
    direction: Direction


@dataclass(frozen=True)
class Rule:
    """A single transition: trigger → action."""

    trigger: Trigger
    action: Action

    @classmethod
    def of(
        cls,
        current_state: State,
        current_symbol: Symbol,
        new_symbol: Symbol,
        direction: Direction,
        new_state: State,
    ) -> Rule:
        """Build a rule from its five fields, in program-text order."""
        return cls(
            Trigger(current_state, current_symbol),
            Action(new_state, new_symbol, direction),
        )

    def replace_wildcard(self, symbol: RealSymbol) -> Rule:
        """
        Return a fully concrete copy of this rule for *symbol* read under the head.

        A wildcard trigger symbol becomes *symbol*; a wildcard new state becomes
        the trigger state; a wildcard new symbol becomes the (resolved) trigger
        symbol.
        """
        current_state, current_symbol = self.trigger
        new_state, new_symbol, direction = self.action

        if isinstance(current_symbol, WildcardSymbol):
            current_symbol = symbol
        if isinstance(new_state, WildcardState):
            new_state = current_state
        if isinstance(new_symbol, WildcardSymbol):
            new_symbol = current_symbol

        return Rule.of(current_state, current_symbol, new_symbol, direction, new_state)

    def __str__(self) -> str:
        state, symbol = self.trigger
        new_state, new_symbol, direction = self.action
        return f"{state} {symbol} {new_symbol} {_DIRECTION_LETTERS[direction]} {new_state}"


_DIRECTION_LETTERS = {Direction.LEFT: "l", Direction.STAY: "*", Direction.RIGHT: "r"}
