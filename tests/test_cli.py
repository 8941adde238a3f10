"""Tests for tms.cli — running programs from the command line."""

import io

import pytest

from tms.cli import main


def write_program(tmp_path, text, name="prog.tm"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return str(path)


class TestRunFile:
    def test_prints_final_tape(self, tmp_path, capsys):
        path = write_program(tmp_path, "TAPE 1011\nHEAD 3\nSTATE c\nHALT done\nc 1 0 l c\nc 0 1 * done\n")
        assert main([path]) == 0
        assert capsys.readouterr().out == "1100\n"

    def test_info_flag(self, tmp_path, capsys):
        path = write_program(tmp_path, "STATE a\na _ 1 r H\n")
        assert main([path, "--info"]) == 0
        out = capsys.readouterr().out
        assert "Step: 1" in out
        assert "Halted: True" in out

    def test_diagnostics_go_to_stderr(self, tmp_path, capsys):
        path = write_program(tmp_path, "STATE\nHEAD x\n")
        assert main([path]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert f"{path}:1:6: missing state" in captured.err
        assert f"{path}:2:6: the position of the head must be an integer" in captured.err

    def test_missing_file(self, tmp_path, capsys):
        path = str(tmp_path / "nope.tm")
        assert main([path]) == 1
        assert "No such file or directory" in capsys.readouterr().err

    def test_missing_rule_exits_with_error(self, tmp_path, capsys):
        path = write_program(tmp_path, "STATE a\na _ 1 r b\n")
        assert main([path]) == 1
        assert "error: no rule for state b" in capsys.readouterr().err

    def test_runs_through_intermediate_states(self, tmp_path, capsys):
        path = write_program(tmp_path, "STATE a\na _ 1 r b\nb _ 1 r H\n")
        assert main([path]) == 0
        assert capsys.readouterr().out == "11\n"


class TestCatalog:
    def test_list(self, capsys):
        assert main(["--list"]) == 0
        assert "busy_beaver_4:" in capsys.readouterr().out

    def test_run_bundled_program(self, capsys):
        assert main(["--catalog", "binary_increment"]) == 0
        assert capsys.readouterr().out == "1100\n"

    def test_unknown_name(self, capsys):
        assert main(["--catalog", "nope"]) == 1
        assert "No catalog program named 'nope'" in capsys.readouterr().err

    def test_program_and_catalog_conflict(self, tmp_path):
        path = write_program(tmp_path, "")
        with pytest.raises(SystemExit) as info:
            main([path, "--catalog", "binary_increment"])
        assert info.value.code == 2


class TestShellEntry:
    def test_no_arguments_starts_shell(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO(""))
        assert main([]) == 0
        assert "Turing machine simulator" in capsys.readouterr().out
