"""
Compiler-style diagnostics for program text.

A Diagnostic carries enough context to render a gcc-like message:

    machine.txt:12:6: CURRENT_SYMBOL should be a single character
      12 | left 0042 _ * *
         |      ^~~~

Columns are stored 0-based; the rendered ``LINE:COL`` prefix is 1-based.
File-level diagnostics (line 0, e.g. a missing file) render as a single
``path: message`` line.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Diagnostic:
    """
    A single problem found while reading a program.

    Attributes:
        path: Source label (file path, or "<string>").
        line: Full text of the offending source line.
        line_no: 1-based line number; 0 for file-level problems.
        start: 0-based column of the first offending character.
        end: 0-based column just past the offending span.
        message: Human-readable description.
        note: Optional hint printed under the message.
    """

    path: str
    line: str
    line_no: int
    start: int
    end: int
    message: str
    note: Optional[str] = None

    @classmethod
    def for_file(cls, path: str, message: str) -> Diagnostic:
        return cls(path=path, line="", line_no=0, start=0, end=0, message=message)

    @property
    def column(self) -> int:
        """1-based column of the start of the span."""
        return self.start + 1

    def format(self) -> str:
        if self.line_no == 0:
            return f"{self.path}: {self.message}\n"

        parts = [f"{self.path}:{self.line_no}:{self.column}: {self.message}\n"]
        if self.note is not None:
            parts.append(f"note: {self.note}\n")
        parts.append(f"{self.line_no:4d} | {self.line}\n")

        tildes = max(self.end - self.start - 1, 0)
        parts.append("     | " + " " * self.start + "^" + "~" * tildes + "\n")
        return "".join(parts)

    def __str__(self) -> str:
        return self.format()
