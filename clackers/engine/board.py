"""
Clackers - Board

The board is a row of cells numbered 1..N, where N is the total number of
sides of every die in play. Each cell is either clear or marked. The board
keeps a running count of marked cells so the win check never has to scan.
"""

from typing import Iterable, Sequence

from clackers.engine.base import Die, MarkingMode
from clackers.engine.validators import validate_board_index, validate_board_indices

SHADE = "▚"


class Board:
    """
    Row of togglable cells with an incrementally maintained marked count.

    Cells are only ever changed through :meth:`apply`, which keeps the
    cell list and ``toggled_count`` in step.
    """

    def __init__(self, size: int) -> None:
        if isinstance(size, bool) or not isinstance(size, int) or size < 1:
            raise ValueError(f"Board size must be a positive integer, got {size!r}.")
        # Slot 0 is never used so cell numbers match list positions.
        self._cells: list[bool] = [False] * (size + 1)
        self._toggled_count = 0

    @classmethod
    def for_dice(cls, dice: Iterable[Die]) -> "Board":
        """Create a board sized for the given dice."""
        return cls(sum(die.sides for die in dice))

    @property
    def size(self) -> int:
        """Number of cells."""
        return len(self._cells) - 1

    @property
    def goal(self) -> int:
        """Marked cells needed to win."""
        return self.size

    @property
    def toggled_count(self) -> int:
        """Number of marked cells."""
        return self._toggled_count

    @property
    def remaining(self) -> int:
        """Number of cells still to mark."""
        return self.goal - self._toggled_count

    def is_clear(self, index: int) -> bool:
        """Return True if the cell is not marked."""
        return not self._cells[validate_board_index(index, self.size)]

    def is_marked(self, index: int) -> bool:
        return not self.is_clear(index)

    def any_clear(self, indices: Iterable[int]) -> bool:
        """Return True if at least one of the cells is clear."""
        return any(self.is_clear(index) for index in indices)

    def apply(self, indices: Sequence[int], mode: MarkingMode) -> None:
        """
        Mark cells according to the marking mode.

        Each index is applied on its own, in order, so repeats are allowed:
        under REMOVE a repeat is a no-op, under TOGGLE it flips back. Every
        index is checked before any cell changes.

        Args:
            indices: Cell indices to mark
            mode: REMOVE or TOGGLE

        Raises:
            IndexError: If an index is outside 1..size
        """
        for index in validate_board_indices(indices, self.size):
            if mode is MarkingMode.REMOVE:
                if not self._cells[index]:
                    self._cells[index] = True
                    self._toggled_count += 1
            elif mode is MarkingMode.TOGGLE:
                if self._cells[index]:
                    self._toggled_count -= 1
                else:
                    self._toggled_count += 1
                self._cells[index] = not self._cells[index]
            else:
                raise ValueError(f"Unknown marking mode {mode!r}")

    def won(self) -> bool:
        """Return True once every cell is marked."""
        return self._toggled_count >= self.goal

    def snapshot(self) -> tuple[tuple[int, bool], ...]:
        """
        Board state for display.

        Returns:
            ``(index, marked)`` for every cell, in order
        """
        return tuple((index, self._cells[index]) for index in range(1, len(self._cells)))

    def render(self, glyph: str = SHADE) -> str:
        """Board as a single line: marked cells as ``glyph``, clear cells as their number."""
        return " ".join(
            glyph if marked else str(index) for index, marked in self.snapshot()
        )

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Board(size={self.size}, toggled_count={self._toggled_count})"
