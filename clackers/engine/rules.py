"""
Clackers - Move Derivation Rules

Turns a roll into the cell indices a player may mark, under the two rule
axes of the game:

Marking mode:
    - REMOVE: cells go from clear to marked and stay marked
    - TOGGLE: cells flip every time they are selected

Combination mode:
    - ALL_OR_ONE: mark the total of all dice, or every die's face on its own
    - SELECTION: stack the dice into slots; each slot's sum is one index

A single die is never combined: its face is the move.

Under REMOVE, moves that could only hit marked cells are pointless, so
they are filtered out and a roll with nothing left is skipped. Under
TOGGLE every move changes the board, so nothing is filtered.

All methods of ClackersRules are stateless class methods; the board is
read, never written.
"""

from dataclasses import dataclass, field

from clackers.engine.base import AllOrOne, CombinationMode, MarkingMode, Roll
from clackers.engine.board import Board
from clackers.engine.validators import validate_slot


@dataclass(frozen=True)
class ChoiceOptions:
    """
    What a roll allows the player to do.

    Attributes:
        combination_mode: Combination mode the options were derived under
        legal: False when no move is possible and the roll is skipped
        auto_indices: Indices to apply without asking, when the move is decided
        strategies: ALL_OR_ONE strategies offered to the player
        dice_count: Number of dice in the roll
    """
    combination_mode: CombinationMode
    legal: bool = True
    auto_indices: tuple[int, ...] | None = None
    strategies: tuple[AllOrOne, ...] = field(default_factory=tuple)
    dice_count: int = 1

    @property
    def is_skip(self) -> bool:
        """True if the roll yields no move."""
        return not self.legal

    @property
    def needs_external_pick(self) -> bool:
        """True if the player must choose between TOTAL and INDIVIDUAL."""
        return self.auto_indices is None and len(self.strategies) > 1

    @property
    def needs_stack(self) -> bool:
        """True if the player must place every die on a stack."""
        return (
            self.legal
            and self.auto_indices is None
            and self.combination_mode is CombinationMode.SELECTION
            and self.dice_count > 1
        )


class StackBuilder:
    """
    Builds the SELECTION-mode stack one die at a time.

    Dice are placed in roll order. Placing into slot ``len(stack)`` opens
    a new slot; placing into a lower slot adds the face to that slot.
    """

    def __init__(self, roll: Roll) -> None:
        self._roll = roll
        self._stack: list[int] = []
        self._placed = 0

    @property
    def roll(self) -> Roll:
        return self._roll

    @property
    def stack(self) -> tuple[int, ...]:
        """Current slot totals."""
        return tuple(self._stack)

    @property
    def next_die(self) -> int | None:
        """Zero-based position of the next die to place, or None when done."""
        return None if self.is_complete else self._placed

    @property
    def is_complete(self) -> bool:
        return self._placed == len(self._roll)

    def place(self, slot: int) -> tuple[int, ...]:
        """
        Place the next die into a slot.

        Args:
            slot: Zero-based slot, at most the current stack length

        Returns:
            The stack after placement

        Raises:
            ValueError: If every die is already placed or the slot is out of bounds
        """
        if self.is_complete:
            raise ValueError(f"All {len(self._roll)} dice are already placed.")
        validate_slot(slot, len(self._stack))

        face = self._roll[self._placed].value
        if slot < len(self._stack):
            self._stack[slot] += face
        else:
            self._stack.append(face)
        self._placed += 1
        return self.stack

    def indices(self) -> tuple[int, ...]:
        """
        Final indices to mark.

        Raises:
            ValueError: If some dice are not placed yet
        """
        if not self.is_complete:
            raise ValueError(
                f"Only {self._placed} of {len(self._roll)} dice have been placed."
            )
        return self.stack


class ClackersRules:
    """Stateless move derivation for every rule combination."""

    @classmethod
    def is_worthwhile(cls, strategy: AllOrOne, board: Board, roll: Roll) -> bool:
        """
        Check whether a strategy would mark at least one clear cell.

        Args:
            strategy: TOTAL or INDIVIDUAL
            board: Current board
            roll: The roll being played

        Returns:
            True if the strategy hits a clear cell
        """
        if strategy is AllOrOne.TOTAL:
            return board.is_clear(roll.total)
        elif strategy is AllOrOne.INDIVIDUAL:
            return board.any_clear(roll.faces)
        raise ValueError(f"Unknown strategy {strategy!r}")

    @classmethod
    def available_strategies(
        cls,
        board: Board,
        roll: Roll,
        marking_mode: MarkingMode,
    ) -> tuple[AllOrOne, ...]:
        """
        Strategies worth offering for this roll.

        Under REMOVE only worthwhile strategies are kept; under TOGGLE
        both are always offered.
        """
        if marking_mode is MarkingMode.TOGGLE:
            return tuple(AllOrOne)
        return tuple(s for s in AllOrOne if cls.is_worthwhile(s, board, roll))

    @classmethod
    def resolve_strategy(cls, strategy: AllOrOne, roll: Roll) -> tuple[int, ...]:
        """
        Indices selected by a strategy.

        TOTAL gives the single index ``sum(faces)``; INDIVIDUAL gives every
        face, in roll order, repeats included.
        """
        if strategy is AllOrOne.TOTAL:
            return (roll.total,)
        elif strategy is AllOrOne.INDIVIDUAL:
            return roll.faces
        raise ValueError(f"Unknown strategy {strategy!r}")

    @classmethod
    def check_overlap(cls, board: Board, roll: Roll) -> bool:
        """
        Check whether any stack could reach a clear cell.

        Every stack slot lies between the lowest face and the total, so
        the roll is playable iff some cell in that range is clear.
        """
        return board.any_clear(range(roll.lowest, roll.total + 1))

    @classmethod
    def selection_is_legal(
        cls,
        board: Board,
        roll: Roll,
        marking_mode: MarkingMode,
    ) -> bool:
        """SELECTION legality: overlap under REMOVE, always under TOGGLE."""
        if marking_mode is MarkingMode.TOGGLE:
            return True
        return cls.check_overlap(board, roll)

    @classmethod
    def derive_choice_options(
        cls,
        board: Board,
        roll: Roll,
        marking_mode: MarkingMode,
        combination_mode: CombinationMode,
    ) -> ChoiceOptions:
        """
        Work out what the player may do with a roll.

        Args:
            board: Current board
            roll: The roll being played
            marking_mode: REMOVE or TOGGLE
            combination_mode: ALL_OR_ONE or SELECTION

        Returns:
            ChoiceOptions; ``auto_indices`` is set whenever no decision is
            left to the player (an empty tuple means the roll is skipped)
        """
        dice_count = len(roll)
        if dice_count == 1:
            return ChoiceOptions(
                combination_mode=combination_mode,
                auto_indices=roll.faces,
                dice_count=dice_count,
            )

        if combination_mode is CombinationMode.ALL_OR_ONE:
            strategies = cls.available_strategies(board, roll, marking_mode)
            if not strategies:
                return ChoiceOptions(
                    combination_mode=combination_mode,
                    legal=False,
                    auto_indices=(),
                    dice_count=dice_count,
                )
            if len(strategies) == 1:
                return ChoiceOptions(
                    combination_mode=combination_mode,
                    auto_indices=cls.resolve_strategy(strategies[0], roll),
                    strategies=strategies,
                    dice_count=dice_count,
                )
            return ChoiceOptions(
                combination_mode=combination_mode,
                strategies=strategies,
                dice_count=dice_count,
            )

        elif combination_mode is CombinationMode.SELECTION:
            if not cls.selection_is_legal(board, roll, marking_mode):
                return ChoiceOptions(
                    combination_mode=combination_mode,
                    legal=False,
                    auto_indices=(),
                    dice_count=dice_count,
                )
            return ChoiceOptions(
                combination_mode=combination_mode,
                dice_count=dice_count,
            )

        raise ValueError(f"Unknown combination mode {combination_mode!r}")
