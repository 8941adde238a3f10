from .builder import (
    DEFAULT_END_STATES,
    DEFAULT_HEAD_POSITION,
    DEFAULT_STATE,
    DEFAULT_TAPE,
    DEFAULT_WHITESPACE,
    MachineConfig,
    build_machine,
)
from .machine import Machine, RuleNotFoundError
from .tape import Tape
from .types import (
    WILDCARD_STATE,
    WILDCARD_SYMBOL,
    Action,
    Direction,
    RealState,
    RealSymbol,
    Rule,
    State,
    Symbol,
    Trigger,
    WildcardState,
    WildcardSymbol,
)

__all__ = [
    # Value types
    "Direction",
    "RealState",
    "RealSymbol",
    "WildcardState",
    "WildcardSymbol",
    "State",
    "Symbol",
    "WILDCARD_STATE",
    "WILDCARD_SYMBOL",
    "Trigger",
    "Action",
    "Rule",
    # Execution
    "Tape",
    "Machine",
    "RuleNotFoundError",
    # Construction
    "MachineConfig",
    "build_machine",
    "DEFAULT_TAPE",
    "DEFAULT_HEAD_POSITION",
    "DEFAULT_STATE",
    "DEFAULT_END_STATES",
    "DEFAULT_WHITESPACE",
]
