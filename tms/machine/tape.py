"""
Tape of the Turing machine: infinite in both directions, plus the head position.

Only non-whitespace cells are stored, in a dict keyed by absolute position.
``_lo`` and ``_hi`` bound the content span (the smallest range holding every
non-whitespace cell) and are kept tight after every write. Memory depends on
the number of written cells only, never on how far the head has travelled.

An empty span is represented by ``_lo == _hi + 1``.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Optional

from .types import Direction, RealSymbol


class Tape:
    """
    Bidirectional infinite tape with a head.

    Attributes:
        whitespace: Symbol read from every cell that was never written.
        position: Current head position; any integer is valid.
    """

    def __init__(self, whitespace: RealSymbol, head_position: int = 0, content: str = "") -> None:
        self.whitespace = whitespace
        self.position = head_position

        self._cells: dict[int, RealSymbol] = {}
        for offset, ch in enumerate(content):
            symbol = RealSymbol(ch)
            if symbol != whitespace:
                self._cells[offset] = symbol
        self._lo = 0
        self._hi = -1
        if self._cells:
            self._lo = min(self._cells)
            self._hi = max(self._cells)

    # ── Content span ───────────────────────────────────────────────────────────

    @property
    def leftmost(self) -> int:
        """Left border of the content span (inclusive)."""
        return self._lo

    @property
    def rightmost(self) -> int:
        """Right border of the content span (inclusive)."""
        return self._hi

    @property
    def is_blank(self) -> bool:
        """True when every cell holds the whitespace symbol."""
        return not self._cells

    def content_cells(self) -> Iterator[tuple[int, RealSymbol]]:
        """Yield ``(position, symbol)`` over the content span, left to right."""
        for position in range(self._lo, self._hi + 1):
            yield position, self.read(position)

    def written_cells(self) -> Iterator[tuple[int, RealSymbol]]:
        """Yield ``(position, symbol)`` for non-whitespace cells only, left to right."""
        for position in sorted(self._cells):
            yield position, self._cells[position]

    # ── Head operations ────────────────────────────────────────────────────────

    def read(self, position: Optional[int] = None) -> RealSymbol:
        """Return the symbol at *position* (the head by default)."""
        if position is None:
            position = self.position
        return self._cells.get(position, self.whitespace)

    def write(self, symbol: RealSymbol, position: Optional[int] = None) -> None:
        """Write *symbol* at *position* (the head by default)."""
        if position is None:
            position = self.position

        if symbol == self.whitespace:
            self._erase(position)
            return

        if self.is_blank:
            self._lo = self._hi = position
        elif position < self._lo:
            self._lo = position
        elif position > self._hi:
            self._hi = position
        self._cells[position] = symbol

    def move(self, direction: Direction) -> None:
        """Move the head one cell in *direction* (or not at all for STAY)."""
        self.position += direction.offset

    # ── Internals ──────────────────────────────────────────────────────────────

    def _erase(self, position: int) -> None:
        if self._cells.pop(position, None) is None:
            return
        if not self._cells:
            self._lo, self._hi = position + 1, position
        elif position == self._lo:
            self._lo = self._next_written(position, 1)
        elif position == self._hi:
            self._hi = self._next_written(position, -1)

    def _next_written(self, position: int, step: int) -> int:
        """Nearest written position from *position* in direction *step*."""
        # Walk at most len(_cells) positions, then fall back to the keys.
        for _ in range(len(self._cells)):
            position += step
            if position in self._cells:
                return position
        return min(self._cells) if step > 0 else max(self._cells)

    def __repr__(self) -> str:
        content = "".join(str(symbol) for _, symbol in self.content_cells())
        return (
            f"Tape(position={self.position}, leftmost={self.leftmost}, "
            f"rightmost={self.rightmost}, content={content!r})"
        )
