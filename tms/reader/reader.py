"""
Reader for the textual program format.

A program is read line by line. Everything from the first unescaped ``;`` to
the end of the line is a comment. Each remaining non-empty line is dispatched
on its first token:

    TAPE        <content...>      initial tape (verbatim remainder of the line)
    HEAD        <integer>         initial head position
    STATE       <state>           initial state
    HALT        <state> [...]     end states (accumulated)
    WILDCARD    <char>            wildcard character (default "*")
    WHITESPACE  <char>            whitespace character
    [RULE] CURRENT_STATE CURRENT_SYMBOL NEW_SYMBOL DIRECTION NEW_STATE

Problems never stop the read: every line is processed and every problem is
collected as a Diagnostic, ordered by position. Rules are resolved against
the wildcard character only after the whole file has been read, so WILDCARD
may appear anywhere in the file.

ProgramReader.build_machine() returns the default Machine when any
diagnostic was produced.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from tms.machine.builder import MachineConfig, build_machine
from tms.machine.machine import Machine
from tms.machine.types import (
    WILDCARD_STATE,
    WILDCARD_SYMBOL,
    Direction,
    RealState,
    RealSymbol,
    Rule,
    State,
    Symbol,
    Trigger,
)

from .diagnostic import Diagnostic
from .tokens import Token, strip_comment, tokenize, unescape

logger = logging.getLogger(__name__)

DEFAULT_WILDCARD = "*"

DIRECTIONS: dict[str, Direction] = {
    "l": Direction.LEFT,
    "r": Direction.RIGHT,
    "*": Direction.STAY,
}

RULE_FIELDS = ("CURRENT_STATE", "CURRENT_SYMBOL", "NEW_SYMBOL", "DIRECTION", "NEW_STATE")

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class _Located:
    """A token together with the line it came from."""

    line: str
    line_no: int
    token: Token


@dataclass(frozen=True)
class _PendingRule:
    """A syntactically valid rule line awaiting wildcard resolution."""

    line: str
    line_no: int
    fields: tuple[Token, ...]  # exactly five, in RULE_FIELDS order
    direction: Direction


class ProgramReader:
    """
    Reads one program and accumulates its configuration and diagnostics.

    Usage::

        reader = ProgramReader("busy_beaver.tm").read()
        if reader.success:
            machine = reader.build_machine()
        else:
            for diagnostic in reader.diagnostics:
                print(diagnostic)
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = str(path)

        self._tape: Optional[str] = None
        self._head_position: Optional[int] = None
        self._initial_state: Optional[str] = None
        self._end_states: list[str] = []
        self._wildcard: Optional[_Located] = None
        self._whitespace: Optional[_Located] = None
        self._pending: list[_PendingRule] = []
        self._rules: list[Rule] = []
        self._diagnostics: list[Diagnostic] = []

        # Context of the line being processed
        self._line = ""
        self._line_no = 0
        self._tokens: list[Token] = []

    # ── Results ────────────────────────────────────────────────────────────────

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        """Every problem found, ordered by line and column."""
        return tuple(sorted(self._diagnostics, key=lambda d: (d.line_no, d.start)))

    @property
    def success(self) -> bool:
        """True if the program was read without any diagnostic."""
        return not self._diagnostics

    def config(self) -> MachineConfig:
        """The configuration accumulated from the program text."""
        return MachineConfig(
            tape=self._tape,
            head_position=self._head_position,
            rules=tuple(self._rules),
            initial_state=RealState(self._initial_state) if self._initial_state else None,
            end_states=(
                frozenset(RealState(name) for name in self._end_states)
                if self._end_states
                else None
            ),
            whitespace=RealSymbol(self._whitespace.token.value) if self._whitespace else None,
        )

    def build_machine(self) -> Machine:
        """Build the machine described by the program, or the default machine on failure."""
        if not self.success:
            return build_machine()
        return build_machine(self.config())

    # ── Reading ────────────────────────────────────────────────────────────────

    def read(self) -> ProgramReader:
        """Read and process the file at ``self.path``."""
        try:
            with open(self.path, encoding="utf-8") as f:
                text = f.read()
        except FileNotFoundError:
            self._diagnostics.append(
                Diagnostic.for_file(self.path, f'No such file or directory: "{self.path}"')
            )
            return self
        except UnicodeDecodeError as exc:
            self._diagnostics.append(
                Diagnostic.for_file(self.path, f"file is not valid UTF-8: {exc.reason}")
            )
            return self
        except OSError as exc:
            self._diagnostics.append(
                Diagnostic.for_file(self.path, f"cannot read file: {exc.strerror or exc}")
            )
            return self

        logger.debug("reading program from %s", self.path)
        return self.read_text(text)

    def read_text(self, text: str) -> ProgramReader:
        """Process already-loaded program *text*, labelled with ``self.path``."""
        # Lines end only at \n, \r\n and \r.
        text = text.replace("\r\n", "\n").replace("\r", "\n")
        for line_no, line in enumerate(text.split("\n"), start=1):
            self._parse_line(line, line_no)
        self._warn_wildcard_whitespace()
        self._resolve_rules()

        logger.info(
            "%s: %d rule(s), %d diagnostic(s)",
            self.path,
            len(self._rules),
            len(self._diagnostics),
        )
        return self

    def _parse_line(self, line: str, line_no: int) -> None:
        self._line = line
        self._line_no = line_no
        self._tokens = tokenize(strip_comment(line))

        if not self._tokens:
            return

        keyword = self._tokens[0].value
        handler = _KEYWORDS.get(keyword)
        if handler is not None:
            handler(self)
        elif keyword == "RULE":
            self._process_rule(1)
        else:
            self._process_rule(0)

    # ── Diagnostics helpers ────────────────────────────────────────────────────

    def _error(self, start: int, end: int, message: str, note: Optional[str] = None) -> None:
        self._diagnostics.append(
            Diagnostic(self.path, self._line, self._line_no, start, end, message, note)
        )

    def _check_missing(self, arg_name: str, note: Optional[str] = None) -> bool:
        if len(self._tokens) == 1:
            anchor = self._tokens[0].end
            self._error(anchor, anchor, f"missing {arg_name}", note)
            return False
        return True

    def _check_single(self, arg_name: str, note: Optional[str] = None) -> bool:
        if not self._check_missing(arg_name, note):
            return False
        if len(self._tokens) > 2:
            self._error(self._tokens[2].start, self._tokens[-1].end, "extra arguments", note)
            return False
        return True

    def _check_single_character(self, token: Token, what: str) -> bool:
        if len(token.value) != 1:
            self._error(token.start, token.end, f"{what} should be a single character")
            return False
        return True

    # ── Keyword handlers ───────────────────────────────────────────────────────

    def _process_tape(self) -> None:
        if not self._check_missing(
            "tape", "to specify an empty tape, just don't use the TAPE keyword"
        ):
            return
        start = self._tokens[1].start
        end = self._tokens[-1].end
        self._tape = unescape(self._line[start:end])

    def _process_head(self) -> None:
        if not self._check_single("head position"):
            return
        token = self._tokens[1]
        if not _INTEGER_RE.fullmatch(token.value):
            self._error(token.start, token.end, "the position of the head must be an integer")
            return
        self._head_position = int(token.value)

    def _process_state(self) -> None:
        if not self._check_single("state"):
            return
        self._initial_state = self._tokens[1].value

    def _process_halt(self) -> None:
        if not self._check_missing("halt states"):
            return
        self._end_states.extend(token.value for token in self._tokens[1:])

    def _process_wildcard(self) -> None:
        if not self._check_single("wildcard"):
            return
        token = self._tokens[1]
        if self._check_single_character(token, "wildcard"):
            self._wildcard = _Located(self._line, self._line_no, token)

    def _process_whitespace(self) -> None:
        if not self._check_single("whitespace"):
            return
        token = self._tokens[1]
        if self._check_single_character(token, "whitespace"):
            self._whitespace = _Located(self._line, self._line_no, token)

    def _process_rule(self, first: int) -> None:
        fields = self._tokens[first:]
        ok = True

        if len(fields) < len(RULE_FIELDS):
            anchor = self._tokens[-1].end
            missing = ", ".join(RULE_FIELDS[len(fields) :])
            self._error(anchor, anchor, f"missing {missing}")
            ok = False
        elif len(fields) > len(RULE_FIELDS):
            surplus = fields[len(RULE_FIELDS)]
            message = f"too many entries, require: {len(RULE_FIELDS)}, actual: {len(fields)}"
            self._error(surplus.start, self._tokens[-1].end, message)
            ok = False

        direction: Optional[Direction] = None
        for name, token in zip(RULE_FIELDS, fields):
            if name in ("CURRENT_SYMBOL", "NEW_SYMBOL"):
                ok = self._check_single_character(token, name) and ok
            elif name == "DIRECTION":
                direction = DIRECTIONS.get(token.value.lower())
                if direction is None:
                    valid = ", ".join(repr(key) for key in DIRECTIONS)
                    self._error(token.start, token.end, f"DIRECTION should be one of {valid}")
                    ok = False

        if ok and direction is not None:
            self._pending.append(
                _PendingRule(self._line, self._line_no, tuple(fields), direction)
            )

    # ── Post-processing ────────────────────────────────────────────────────────

    def _wildcard_char(self) -> str:
        return self._wildcard.token.value if self._wildcard else DEFAULT_WILDCARD

    def _warn_wildcard_whitespace(self) -> None:
        whitespace = self._whitespace
        if whitespace is None or whitespace.token.value != self._wildcard_char():
            return
        located = self._wildcard or whitespace
        logger.warning(
            "%s:%d: whitespace and wildcard are both %r; rules cannot name the whitespace symbol",
            self.path,
            located.line_no,
            whitespace.token.value,
        )

    def _resolve_rules(self) -> None:
        wildcard = self._wildcard_char()

        def as_symbol(token: Token) -> Symbol:
            return WILDCARD_SYMBOL if token.value == wildcard else RealSymbol(token.value)

        def as_state(token: Token) -> State:
            return WILDCARD_STATE if token.value == wildcard else RealState(token.value)

        defined_at: dict[Trigger, int] = {}
        for pending in self._pending:
            current_state, current_symbol, new_symbol, _, new_state = pending.fields

            if current_state.value == wildcard:
                self._diagnostics.append(
                    Diagnostic(
                        self.path,
                        pending.line,
                        pending.line_no,
                        current_state.start,
                        current_state.end,
                        "CURRENT_STATE cannot be the wildcard",
                        note=f"{wildcard!r} may only be used as NEW_STATE, meaning 'unchanged'",
                    )
                )
                continue

            rule = Rule.of(
                RealState(current_state.value),
                as_symbol(current_symbol),
                as_symbol(new_symbol),
                pending.direction,
                as_state(new_state),
            )
            if rule.trigger in defined_at:
                logger.warning(
                    "%s:%d: rule for (%s, %s) replaces the one from line %d",
                    self.path,
                    pending.line_no,
                    current_state.value,
                    current_symbol.value,
                    defined_at[rule.trigger],
                )
            defined_at[rule.trigger] = pending.line_no
            self._rules.append(rule)


_KEYWORDS = {
    "TAPE": ProgramReader._process_tape,
    "HEAD": ProgramReader._process_head,
    "STATE": ProgramReader._process_state,
    "HALT": ProgramReader._process_halt,
    "WILDCARD": ProgramReader._process_wildcard,
    "WHITESPACE": ProgramReader._process_whitespace,
}


def read_program(path: Union[str, Path]) -> ProgramReader:
    """Read the program at *path* and return the reader holding the result."""
    return ProgramReader(path).read()
