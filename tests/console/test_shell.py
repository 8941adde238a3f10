"""
Tests for tms.console.shell — the interactive shell, driven with scripted input.
"""

from __future__ import annotations

import pytest

from tms.console.shell import BANNER, Shell
from tms.machine.builder import MachineConfig, build_machine
from tms.machine.types import Direction, RealState, RealSymbol, Rule


def counter_machine():
    """a → b → c → H, writing a 1 at each step."""
    rules = tuple(
        Rule.of(RealState(s), RealSymbol("_"), RealSymbol("1"), Direction.RIGHT, RealState(t))
        for s, t in (("a", "b"), ("b", "c"), ("c", "H"))
    )
    return build_machine(MachineConfig(rules=rules, initial_state=RealState("a")))


class Script:
    """Feeds lines to the shell and records everything it prints."""

    def __init__(self, *lines: str) -> None:
        self._lines = list(lines)
        self.output: list[str] = []

    def input(self, prompt: str) -> str:
        if not self._lines:
            raise EOFError
        return self._lines.pop(0)

    def print(self, text: str) -> None:
        self.output.append(text)

    @property
    def text(self) -> str:
        return "\n".join(self.output)


def make_shell(*lines: str, machine=None) -> tuple[Shell, Script]:
    script = Script(*lines)
    shell = Shell(machine or counter_machine(), input_provider=script.input, output_sink=script.print)
    return shell, script


class TestLoop:
    def test_banner_and_eof(self):
        shell, script = make_shell()
        assert shell.run() == 0
        assert script.output[0] == BANNER

    def test_quit_stops_reading(self):
        shell, script = make_shell("quit", "step")
        shell.run()
        assert shell.machine.step_count == 0

    def test_blank_line_ignored(self):
        shell, script = make_shell("   ")
        shell.run()
        assert script.output == [BANNER, ""]

    def test_unknown_command(self):
        shell, script = make_shell("jump")
        shell.run()
        assert "unknown command: jump" in script.text

    def test_help_lists_commands(self):
        shell, script = make_shell("help")
        shell.run()
        for name in ("info", "step [N]", "run", "break [STATE...]", "load PATH", "quit"):
            assert name in script.text

    def test_default_machine(self):
        assert Shell().machine.state == RealState("0")


class TestExecution:
    def test_step(self):
        shell, script = make_shell()
        shell.execute("step")
        assert shell.machine.step_count == 1
        assert "Step: 1" in script.text

    def test_step_n_stops_at_halt(self):
        shell, _ = make_shell()
        shell.execute("step 10")
        assert shell.machine.step_count == 3
        assert shell.machine.is_halted()

    @pytest.mark.parametrize("args", ["0", "-2", "x", "1 2"])
    def test_step_rejects_bad_count(self, args):
        shell, script = make_shell()
        shell.execute(f"step {args}")
        assert shell.machine.step_count == 0
        assert "usage: step" in script.text

    def test_run_to_halt(self):
        shell, _ = make_shell()
        shell.execute("run")
        assert shell.machine.is_halted()
        assert shell.machine.step_count == 3

    def test_run_stops_at_break_and_resumes(self):
        shell, _ = make_shell()
        shell.execute("break b")
        shell.execute("run")
        assert shell.machine.state == RealState("b")
        shell.execute("run")
        assert shell.machine.state == RealState("H")

    def test_rule_not_found_is_reported(self):
        shell, script = make_shell(machine=build_machine())
        shell.execute("run")
        assert "error: no rule for state 0" in script.text

    def test_verbose_off_prints_status_only(self):
        shell, script = make_shell()
        shell.execute("verbose off")
        shell.execute("step")
        assert script.output[-1].startswith("Step: 1")

    def test_verbose_usage(self):
        shell, script = make_shell()
        shell.execute("verbose maybe")
        assert "usage: verbose" in script.text
        assert shell.verbose

    def test_info(self):
        shell, script = make_shell()
        shell.execute("info")
        assert "Next rule: a _ 1 r b" in script.text


class TestBreakStates:
    def test_list_empty(self):
        shell, script = make_shell()
        shell.execute("break")
        assert script.output[-1] == "break states: none"

    def test_add_and_list(self):
        shell, script = make_shell()
        shell.execute("break c b")
        shell.execute("break")
        assert script.output[-1] == "break states: b, c"

    def test_unknown_state_warns(self):
        shell, script = make_shell()
        shell.execute("break zzz")
        assert "does not appear in any rule" in script.text
        assert RealState("zzz") in shell.machine.break_states

    def test_unbreak(self):
        shell, _ = make_shell()
        shell.execute("break b c")
        shell.execute("unbreak b")
        assert shell.machine.break_states == {RealState("c")}
        shell.execute("unbreak")
        assert shell.machine.break_states == set()


class TestLoading:
    def test_load_program(self, tmp_path):
        path = tmp_path / "p.tm"
        path.write_text("STATE go\ngo _ x r halt\n", encoding="utf-8")
        shell, _ = make_shell()
        shell.execute(f"load {path}")
        assert shell.machine.state == RealState("go")

    def test_load_reports_diagnostics(self, tmp_path):
        path = tmp_path / "bad.tm"
        path.write_text("STATE\n", encoding="utf-8")
        shell, script = make_shell()
        before = shell.machine
        shell.execute(f"load {path}")
        assert shell.machine is before
        assert "missing state" in script.text

    def test_load_usage(self):
        shell, script = make_shell()
        shell.execute("load")
        assert "usage: load PATH" in script.text

    def test_catalog_list_and_load(self):
        shell, script = make_shell()
        shell.execute("catalog")
        assert "busy_beaver_4" in script.text
        shell.execute("catalog busy_beaver_4")
        shell.execute("run")
        assert shell.machine.step_count == 107

    def test_catalog_unknown(self):
        shell, script = make_shell()
        shell.execute("catalog nope")
        assert "No catalog program named 'nope'" in script.text
