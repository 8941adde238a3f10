"""
Machine configuration and construction.

MachineConfig holds optional overrides; every field left as None falls back
to the named default constant below. build_machine() is a pure function from
configuration to a fresh Machine and never fails.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, TypeVar

from .machine import Machine
from .types import RealState, RealSymbol, Rule

DEFAULT_TAPE: str = ""
DEFAULT_HEAD_POSITION: int = 0
DEFAULT_STATE: RealState = RealState("0")
DEFAULT_END_STATES: frozenset[RealState] = frozenset({RealState("halt"), RealState("H")})
DEFAULT_WHITESPACE: RealSymbol = RealSymbol("_")

_T = TypeVar("_T")


@dataclass(frozen=True)
class MachineConfig:
    """
    Optional overrides for a new Machine.

    Attributes:
        tape: Initial tape content, laid out from position 0.
        head_position: Initial head position.
        rules: The program. Later rules replace earlier rules with the same trigger.
        initial_state: State the machine starts in.
        end_states: States at which the machine halts.
        whitespace: Symbol of never-written cells.
    """

    tape: Optional[str] = None
    head_position: Optional[int] = None
    rules: tuple[Rule, ...] = ()
    initial_state: Optional[RealState] = None
    end_states: Optional[frozenset[RealState]] = None
    whitespace: Optional[RealSymbol] = None

    def build(self) -> Machine:
        return build_machine(self)


def _pick(value: Optional[_T], default: _T) -> _T:
    return default if value is None else value


def build_machine(config: Optional[MachineConfig] = None) -> Machine:
    """Construct a Machine from *config*, applying defaults for absent fields."""
    if config is None:
        config = MachineConfig()

    return Machine(
        rules=config.rules,
        initial_state=_pick(config.initial_state, DEFAULT_STATE),
        end_states=_pick(config.end_states, DEFAULT_END_STATES),
        whitespace=_pick(config.whitespace, DEFAULT_WHITESPACE),
        head_position=_pick(config.head_position, DEFAULT_HEAD_POSITION),
        initial_tape=_pick(config.tape, DEFAULT_TAPE),
    )
