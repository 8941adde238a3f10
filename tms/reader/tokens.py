"""
Line-level tokenization for program text.

strip_comment() cuts a line at the first ``;`` not preceded by a backslash.
tokenize() splits the remainder on whitespace and keeps the 0-based column of
every token so diagnostics can point at exact spans. ``\\;`` inside a token is
unescaped to a literal ``;`` in Token.value; the columns still refer to the
raw source text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

COMMENT_DELIMITER = ";"
_ESCAPED_DELIMITER = "\\" + COMMENT_DELIMITER

_TOKEN_RE = re.compile(r"\S+")


@dataclass(frozen=True)
class Token:
    """A whitespace-delimited word of a source line."""

    value: str
    start: int
    end: int


def strip_comment(line: str) -> str:
    """Return *line* without its trailing comment."""
    index = 0
    while True:
        index = line.find(COMMENT_DELIMITER, index)
        if index == -1:
            return line
        if index > 0 and line[index - 1] == "\\":
            index += 1
            continue
        return line[:index]


def unescape(text: str) -> str:
    return text.replace(_ESCAPED_DELIMITER, COMMENT_DELIMITER)


def tokenize(line: str) -> list[Token]:
    """Split *line* (already stripped of comments) into positioned tokens."""
    return [
        Token(unescape(match.group()), match.start(), match.end())
        for match in _TOKEN_RE.finditer(line)
    ]
