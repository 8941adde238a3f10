"""
Interactive shell around a single Machine.

The shell drives execution one step() at a time so that Ctrl-C during ``run``
stops the machine between steps, never in the middle of one. Input and output
are injectable callables so the shell can be scripted in tests.
"""

from __future__ import annotations

import logging
import signal
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import NamedTuple, Optional

from tms.catalog.registry import get_catalog
from tms.console.display import render_info, render_machine, render_status
from tms.machine.builder import build_machine
from tms.machine.machine import Machine, RuleNotFoundError
from tms.machine.types import RealState
from tms.reader.reader import read_program

logger = logging.getLogger(__name__)

PROMPT = "tms> "
BANNER = "TMS: Turing machine simulator. Type 'help' for a list of commands."


class _Command(NamedTuple):
    usage: str
    description: str
    handler: Callable[["Shell", list[str]], None]


class _StopShell(Exception):
    """Raised by the quit command to leave the read loop."""


class _Interrupt:
    """SIGINT flag checked between steps."""

    def __init__(self) -> None:
        self.requested = False

    def __call__(self, signum, frame) -> None:
        self.requested = True


@contextmanager
def _catch_sigint() -> Iterator[_Interrupt]:
    interrupt = _Interrupt()
    if threading.current_thread() is not threading.main_thread():
        yield interrupt
        return
    previous = signal.signal(signal.SIGINT, interrupt)
    try:
        yield interrupt
    finally:
        signal.signal(signal.SIGINT, previous)


class Shell:
    """
    Line-oriented command interpreter.

    Attributes:
        machine: The machine commands act on. ``load`` and ``catalog NAME``
            replace it.
        verbose: Print the tape window after ``step`` and ``run``.
    """

    def __init__(
        self,
        machine: Optional[Machine] = None,
        input_provider: Callable[[str], str] = input,
        output_sink: Callable[[str], None] = print,
    ) -> None:
        self.machine = machine if machine is not None else build_machine()
        self.verbose = True
        self._input = input_provider
        self._output = output_sink

    # ── Loop ───────────────────────────────────────────────────────────────────

    def run(self) -> int:
        """Read and execute commands until ``quit`` or end of input."""
        self._output(BANNER)
        while True:
            try:
                line = self._input(PROMPT)
            except (EOFError, KeyboardInterrupt):
                self._output("")
                return 0
            try:
                self.execute(line)
            except _StopShell:
                return 0

    def execute(self, line: str) -> None:
        """Execute one command line."""
        words = line.split()
        if not words:
            return
        command = _COMMANDS.get(words[0])
        if command is None:
            self._output(f"unknown command: {words[0]} (try 'help')")
            return
        command.handler(self, words[1:])

    # ── Commands ───────────────────────────────────────────────────────────────

    def _help(self, args: list[str]) -> None:
        width = max(len(command.usage) for command in _COMMANDS.values())
        for command in _COMMANDS.values():
            self._output(f"  {command.usage.ljust(width)}  {command.description}")

    def _info(self, args: list[str]) -> None:
        self._output(render_info(self.machine).rstrip("\n"))

    def _step(self, args: list[str]) -> None:
        count = 1
        if args:
            try:
                count = int(args[0]) if len(args) == 1 else 0
            except ValueError:
                count = 0
            if count <= 0:
                self._output("usage: step [N], N a positive integer")
                return

        try:
            for _ in range(count):
                if self.machine.is_halted():
                    break
                self.machine.step()
        except RuleNotFoundError as exc:
            self._output(f"error: {exc}")
        self._show()

    def _run(self, args: list[str]) -> None:
        machine = self.machine
        with _catch_sigint() as interrupt:
            try:
                machine.step()
                while not (machine.is_halted() or machine.is_interrupted() or interrupt.requested):
                    machine.step()
            except RuleNotFoundError as exc:
                self._output(f"error: {exc}")
        if interrupt.requested:
            self._output(f"interrupted at step {machine.step_count}")
        self._show()

    def _break(self, args: list[str]) -> None:
        if not args:
            names = sorted(str(state) for state in self.machine.break_states)
            self._output("break states: " + (", ".join(names) if names else "none"))
            return
        for name in args:
            state = RealState(name)
            if state not in self.machine.all_possible_states:
                self._output(f"warning: state {name} does not appear in any rule")
            self.machine.break_states.add(state)

    def _unbreak(self, args: list[str]) -> None:
        if not args:
            self.machine.break_states.clear()
            return
        for name in args:
            self.machine.break_states.discard(RealState(name))

    def _load(self, args: list[str]) -> None:
        if len(args) != 1:
            self._output("usage: load PATH")
            return
        reader = read_program(args[0])
        if not reader.success:
            for diagnostic in reader.diagnostics:
                self._output(diagnostic.format().rstrip("\n"))
            return
        self.machine = reader.build_machine()
        logger.info("loaded %s", args[0])
        self._show()

    def _catalog(self, args: list[str]) -> None:
        catalog = get_catalog()
        if not args:
            for entry_id in catalog.ids():
                entry = catalog.get(entry_id)
                self._output(f"  {entry_id}: {entry.description}")
            return
        try:
            self.machine = catalog.build(args[0])
        except KeyError as exc:
            self._output(f"error: {exc.args[0]}")
            return
        self._show()

    def _verbose(self, args: list[str]) -> None:
        if len(args) != 1 or args[0].upper() not in ("ON", "OFF"):
            self._output("usage: verbose on|off")
            return
        self.verbose = args[0].upper() == "ON"

    def _quit(self, args: list[str]) -> None:
        raise _StopShell

    def _show(self) -> None:
        if self.verbose:
            self._output(render_machine(self.machine).rstrip("\n"))
        else:
            self._output(render_status(self.machine).rstrip("\n"))


_COMMANDS: dict[str, _Command] = {
    "help": _Command("help", "print this list of commands", Shell._help),
    "info": _Command("info", "print detailed information about the machine", Shell._info),
    "step": _Command("step [N]", "perform N steps (default 1)", Shell._step),
    "run": _Command("run", "run until an end or break state, Ctrl-C to stop", Shell._run),
    "break": _Command("break [STATE...]", "add break states, or list them", Shell._break),
    "unbreak": _Command("unbreak [STATE...]", "remove break states, or all of them", Shell._unbreak),
    "load": _Command("load PATH", "load a machine from a program file", Shell._load),
    "catalog": _Command("catalog [NAME]", "list bundled programs, or load one", Shell._catalog),
    "verbose": _Command("verbose on|off", "print the tape after each command", Shell._verbose),
    "quit": _Command("quit", "leave the shell", Shell._quit),
}
