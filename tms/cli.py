"""TMS entry point: run a program file to halt, or start the interactive shell."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from tms.catalog.registry import get_catalog
from tms.console.display import render_info, tape_content
from tms.console.shell import Shell
from tms.machine.machine import Machine, RuleNotFoundError
from tms.reader.reader import read_program

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _run_to_halt(machine: Machine, show_info: bool) -> int:
    machine.break_states.clear()
    try:
        machine.run()
    except RuleNotFoundError as exc:
        print(f"error: {exc} (step {machine.step_count})", file=sys.stderr)
        return 1
    if show_info:
        print(render_info(machine), end="")
    else:
        print(tape_content(machine.tape))
    return 0


def run_file(path: str, show_info: bool = False) -> int:
    """Read the program at *path* and run it to halt. Returns the exit status."""
    reader = read_program(path)
    if not reader.success:
        for diagnostic in reader.diagnostics:
            print(diagnostic.format(), end="", file=sys.stderr)
        return 1
    return _run_to_halt(reader.build_machine(), show_info)


def run_catalog(name: str, show_info: bool = False) -> int:
    """Run the bundled program *name* to halt. Returns the exit status."""
    try:
        machine = get_catalog().build(name)
    except KeyError as exc:
        print(f"error: {exc.args[0]}", file=sys.stderr)
        return 1
    return _run_to_halt(machine, show_info)


def list_catalog() -> int:
    catalog = get_catalog()
    for entry_id in catalog.ids():
        print(f"{entry_id}: {catalog.get(entry_id).description}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="tms", description="Turing machine simulator")
    parser.add_argument("program", nargs="?", help="program file to run to halt; omit for the shell")
    parser.add_argument("--catalog", metavar="NAME", help="run a bundled program instead of a file")
    parser.add_argument("--list", action="store_true", help="list bundled programs and exit")
    parser.add_argument("--info", action="store_true", help="print machine details after the run")
    parser.add_argument("--log-level", default="WARNING", choices=LOG_LEVELS, help="logging level")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format=LOG_FORMAT)

    if args.list:
        return list_catalog()
    if args.program is not None and args.catalog is not None:
        parser.error("give either a program file or --catalog, not both")
    if args.catalog is not None:
        return run_catalog(args.catalog, args.info)
    if args.program is not None:
        return run_file(args.program, args.info)
    return Shell().run()


if __name__ == "__main__":
    raise SystemExit(main())
