"""
Text rendering of machines and tapes for the terminal.

render_tape() draws a window of the tape centred on the head:

         0                   10                  20
         |                   |                   |
     _ _ 1 0 1 1 _ _ _ _ _ _ _ _ _ _ _ _ _ _ _ _ _ _
               |
               3

The first two lines mark every LEGEND_STEP-th position, the last two mark the
head. Each cell takes two columns, so a window of ``width`` columns shows
``width // 2`` cells.
"""

from __future__ import annotations

from tms.machine.machine import Machine, RuleNotFoundError
from tms.machine.tape import Tape

SCREEN_WIDTH = 80
LEGEND_STEP = 10


def tape_content(tape: Tape) -> str:
    """The content span of *tape* as a plain string."""
    return "".join(str(symbol) for _, symbol in tape.content_cells())


def render_tape(tape: Tape, width: int = SCREEN_WIDTH) -> str:
    # legend numbers, legend marks, cells, head mark, head position
    rows = ["", "", "", "", ""]
    anchor = 0

    # LEGEND_STEP extra cells on the left keep long position numbers from
    # being cut off at the left border.
    leftmost = tape.position - width // 4 - LEGEND_STEP
    rightmost = tape.position + width // 4

    for position in range(leftmost, rightmost + 1):
        if position % LEGEND_STEP == 0:
            rows[0] += str(position)
            rows[1] += "|"
        if position == tape.position:
            rows[3] += "|"
            rows[4] += str(position)
            anchor = len(rows[2])

        rows[2] += f"{tape.read(position)} "

        n = len(rows[2])
        for i in (0, 1, 3, 4):
            rows[i] = rows[i].ljust(n)

    mid = width // 2
    return "".join(row[anchor - mid : anchor + width - mid] + "\n" for row in rows)


def render_status(machine: Machine, width: int = SCREEN_WIDTH) -> str:
    """``Step: N`` on the left and ``State: s`` on the right of one line."""
    step = f"Step: {machine.step_count}"
    state = f"State: {machine.state}"
    return step + " " * max(width - len(step) - len(state), 1) + state + "\n"


def render_machine(machine: Machine, width: int = SCREEN_WIDTH) -> str:
    return render_tape(machine.tape, width) + render_status(machine, width)


def render_info(machine: Machine, width: int = SCREEN_WIDTH) -> str:
    """Detailed, multi-line description of the machine's current situation."""
    lines = [render_tape(machine.tape, width).rstrip("\n")]

    try:
        lines.append(f"Next rule: {machine.next_rule()}")
    except RuleNotFoundError:
        lines.append("Next rule: none")

    counts = ", ".join(f"{symbol}: {count}" for symbol, count in machine.symbol_counts().items())
    lines.append(f"Symbols count: {{{counts}}}")
    lines.append(f"Step: {machine.step_count}")
    lines.append(f"State: {machine.state}")
    lines.append(f"Symbol: '{machine.tape.read()}'")
    lines.append(f"Break states: {_state_set(machine.break_states)}")
    lines.append(f"End states: {_state_set(machine.end_states)}")
    lines.append(f"Whitespace: '{machine.whitespace}'")
    lines.append(f"Interrupted: {machine.is_interrupted()}")
    lines.append(f"Halted: {machine.is_halted()}")
    return "\n".join(lines) + "\n"


def _state_set(states) -> str:
    return "{" + ", ".join(sorted(str(state) for state in states)) + "}"
