"""
Program reader — public API.

Exposed names
-------------
ProgramReader  -- reads a program file or text, collecting diagnostics
read_program   -- convenience: ProgramReader(path).read()
Diagnostic     -- a single located problem, renderable gcc-style
"""

from tms.reader.diagnostic import Diagnostic
from tms.reader.reader import DEFAULT_WILDCARD, DIRECTIONS, ProgramReader, read_program

__all__ = ["ProgramReader", "read_program", "Diagnostic", "DEFAULT_WILDCARD", "DIRECTIONS"]
