"""
The executor of the Turing machine.

Machine owns its Tape and a fixed rule table. step() is the only primitive
that mutates state; run() is a do-while loop over step() that stops at an end
state or a break state. Break states are not checked before the first step of
a run, so calling run() while sitting at a break state still advances the
machine by one step.

A trigger with neither an exact nor a wildcard rule raises RuleNotFoundError.
The engine does not recover from it: it means the program is incomplete.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable
from types import MappingProxyType
from typing import cast

from .tape import Tape
from .types import WILDCARD_SYMBOL, RealState, RealSymbol, Rule, Trigger

logger = logging.getLogger(__name__)


class RuleNotFoundError(Exception):
    """Raised when no rule matches the current state and the symbol under the head.

    Attributes:
        state: Current state of the machine.
        symbol: Symbol under the head.
    """

    def __init__(self, state: RealState, symbol: RealSymbol) -> None:
        super().__init__(f"no rule for state {state} and symbol {str(symbol)!r}")
        self.state = state
        self.symbol = symbol


class Machine:
    """
    A single-tape Turing machine.

    Build instances with tms.machine.builder.build_machine() rather than
    calling the constructor directly; the builder fills in defaults.

    Attributes:
        tape: The tape, owned exclusively by this machine.
        break_states: States at which run() pauses. Freely mutable by callers.
        all_possible_states: Every concrete state appearing in any rule.
    """

    def __init__(
        self,
        rules: Iterable[Rule],
        initial_state: RealState,
        end_states: Iterable[RealState],
        whitespace: RealSymbol,
        head_position: int = 0,
        initial_tape: str = "",
    ) -> None:
        self.tape = Tape(whitespace, head_position, initial_tape)

        table: dict[Trigger, Rule] = {}
        for rule in rules:
            table[rule.trigger] = rule
        self._rules = MappingProxyType(table)

        self._state = initial_state
        self._step_count = 0
        self._end_states = frozenset(end_states)
        self._whitespace = whitespace
        self.break_states: set[RealState] = set()

        states: set[RealState] = set()
        for rule in self._rules.values():
            for state in (rule.trigger.state, rule.action.state):
                if isinstance(state, RealState):
                    states.add(state)
        self.all_possible_states = frozenset(states)

    # ── Read-only accessors ────────────────────────────────────────────────────

    @property
    def state(self) -> RealState:
        return self._state

    @property
    def step_count(self) -> int:
        return self._step_count

    @property
    def end_states(self) -> frozenset[RealState]:
        return self._end_states

    @property
    def whitespace(self) -> RealSymbol:
        return self._whitespace

    @property
    def rules(self) -> MappingProxyType[Trigger, Rule]:
        """The rule table, keyed by trigger."""
        return self._rules

    def is_halted(self) -> bool:
        """Has the machine reached one of its end states."""
        return self._state in self._end_states

    def is_interrupted(self) -> bool:
        """Is the machine sitting at one of its break states."""
        return self._state in self.break_states

    # ── Execution ──────────────────────────────────────────────────────────────

    def next_rule(self) -> Rule:
        """
        Return the concrete rule the next step would apply.

        Looks up the exact trigger first, then the wildcard trigger for the
        current state. Raises RuleNotFoundError if neither exists.
        """
        symbol = self.tape.read()
        rule = self._rules.get(Trigger(self._state, symbol))
        if rule is None:
            rule = self._rules.get(Trigger(self._state, WILDCARD_SYMBOL))
        if rule is None:
            raise RuleNotFoundError(self._state, symbol)
        return rule.replace_wildcard(symbol)

    def step(self) -> None:
        """Perform one step. Does nothing if the machine is halted."""
        if self.is_halted():
            return

        rule = self.next_rule()
        new_state, new_symbol, direction = rule.action

        self.tape.write(cast(RealSymbol, new_symbol))
        self.tape.move(direction)
        self._state = cast(RealState, new_state)
        self._step_count += 1

        logger.debug("step %d: %s -> head %d", self._step_count, rule, self.tape.position)

    def run(self) -> None:
        """
        Step until an end state or a break state is reached.

        The first step is always performed, even when the machine already sits
        at a break state. Nothing happens if the machine is halted.
        """
        self.step()
        while not self.is_halted() and not self.is_interrupted():
            self.step()

        logger.debug(
            "run stopped at step %d in state %s (halted=%s)",
            self._step_count,
            self._state,
            self.is_halted(),
        )

    # ── Inspection ─────────────────────────────────────────────────────────────

    def symbol_counts(self) -> dict[RealSymbol, int]:
        """Count each non-whitespace symbol on the tape."""
        return dict(Counter(symbol for _, symbol in self.tape.written_cells()))
