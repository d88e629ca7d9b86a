"""
Clackers - Game Orchestration

Runs one game from an empty board to a cleared one. Each turn:

    ROLLING -> DERIVING_CHOICES -> APPLYING_MOVE -> CHECKING_WIN

and back to ROLLING, until the board is cleared and the game moves to
TERMINATED.

The game never asks for input itself. Callers either drive the turn step
by step (roll, derive_choice_options, choose_strategy/start_stack,
apply_move) or hand play_turn two callbacks that make the player's
decisions.
"""

import logging
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Sequence

from clackers.engine.base import (
    AllOrOne,
    CombinationMode,
    DieThrow,
    GameConfig,
    MarkingMode,
    RandomSource,
    Roll,
    TurnPhase,
)
from clackers.engine.board import Board
from clackers.engine.rules import ChoiceOptions, ClackersRules, StackBuilder
from clackers.engine.validators import validate_board_indices

if TYPE_CHECKING:
    from clackers.config.settings import Settings

logger = logging.getLogger(__name__)

# (roll, offered strategies) -> chosen strategy
StrategyPicker = Callable[[Roll, tuple[AllOrOne, ...]], AllOrOne]
# (roll, zero-based die position, current stack) -> zero-based slot
SlotPicker = Callable[[Roll, int, tuple[int, ...]], int]


@dataclass(frozen=True)
class MoveResult:
    """
    Outcome of applying a move.

    Attributes:
        indices: Indices that were applied (empty for a skipped roll)
        won: Whether the board is now cleared
        throw_count: Throws taken so far, this one included
    """
    indices: tuple[int, ...]
    won: bool
    throw_count: int

    @property
    def skipped(self) -> bool:
        return not self.indices


@dataclass(frozen=True)
class TurnResult:
    """
    Full record of one turn.

    Attributes:
        roll: The roll that was played
        options: What the roll allowed
        move: The move that was applied
        strategy: ALL_OR_ONE strategy used, if any
    """
    roll: Roll
    options: ChoiceOptions
    move: MoveResult
    strategy: AllOrOne | None = None

    @property
    def won(self) -> bool:
        return self.move.won


class ClackersGame:
    """
    A single game of Clackers.

    Owns the board, the dice and the random source. Not thread-safe; one
    game has one owner.
    """

    def __init__(self, config: GameConfig, rng: RandomSource | None = None) -> None:
        self.config = config
        self.dice = config.dice
        self.board = Board.for_dice(self.dice)
        self.rng = rng if rng is not None else random.Random()
        self.throw_count = 0
        self.phase = TurnPhase.ROLLING
        self._finished = False

    @classmethod
    def from_config(cls, config: GameConfig, rng: RandomSource | None = None) -> "ClackersGame":
        return cls(config, rng=rng)

    @classmethod
    def from_settings(
        cls,
        settings: "Settings | None" = None,
        rng: RandomSource | None = None,
    ) -> "ClackersGame":
        """
        Create a game from application settings.

        Args:
            settings: Settings to use (cached settings if omitted)
            rng: Random source; a Random seeded from ``settings.seed`` if omitted

        Returns:
            A new game
        """
        if settings is None:
            from clackers.config.settings import get_settings

            settings = get_settings()
        if rng is None and settings.seed is not None:
            rng = random.Random(settings.seed)
        return cls(settings.to_game_config(), rng=rng)

    @property
    def marking_mode(self) -> MarkingMode:
        return self.config.marking_mode

    @property
    def combination_mode(self) -> CombinationMode:
        return self.config.combination_mode

    @property
    def is_over(self) -> bool:
        """True once the board has been cleared; never resets."""
        return self._finished

    def roll(self) -> Roll:
        """Roll every die with the game's random source."""
        if self.is_over:
            raise RuntimeError("The game is over; no more rolls.")
        self.phase = TurnPhase.ROLLING
        roll = Roll(
            throws=tuple(DieThrow(die.roll(self.rng), die.sides) for die in self.dice)
        )
        logger.debug("Throw %d rolled %s", self.throw_count + 1, roll)
        return roll

    def derive_choice_options(self, roll: Roll) -> ChoiceOptions:
        """What the current board allows for this roll."""
        if self.is_over:
            raise RuntimeError(
                f"The game is already won in {self.throw_count} throw(s)."
            )
        self.phase = TurnPhase.DERIVING_CHOICES
        options = ClackersRules.derive_choice_options(
            self.board, roll, self.marking_mode, self.combination_mode
        )
        logger.debug("Options for %s: %s", roll, options)
        return options

    def choose_strategy(self, roll: Roll, strategy: AllOrOne | str) -> tuple[int, ...]:
        """
        Resolve the player's ALL_OR_ONE pick into indices.

        Raises:
            ValueError: If the strategy is not one of those offered
        """
        strategy = AllOrOne.parse(strategy)
        offered = self.derive_choice_options(roll).strategies
        if strategy not in offered:
            names = " | ".join(s.name for s in offered) or "none"
            raise ValueError(
                f"{strategy.name} is not one of the possible choices ({names})."
            )
        return ClackersRules.resolve_strategy(strategy, roll)

    def start_stack(self, roll: Roll) -> StackBuilder:
        """
        Begin building a SELECTION-mode stack for a roll.

        Raises:
            ValueError: If the roll does not call for a stack
        """
        if not self.derive_choice_options(roll).needs_stack:
            raise ValueError(f"Roll {roll} does not need a stack.")
        return StackBuilder(roll)

    def apply_move(self, indices: Sequence[int]) -> MoveResult:
        """
        Apply a move to the board and count the throw.

        An empty move is a skipped roll; it still counts as a throw.

        Args:
            indices: Cell indices to mark

        Returns:
            MoveResult with the win status and throw count
        """
        if self.is_over:
            raise RuntimeError(
                f"The game is already won in {self.throw_count} throw(s)."
            )
        indices = validate_board_indices(indices, self.board.size)

        self.phase = TurnPhase.APPLYING_MOVE
        self.board.apply(indices, self.marking_mode)
        self.throw_count += 1
        if indices:
            logger.debug("Applied %s, board: %s", list(indices), self.board)
        else:
            logger.info("No possible move on throw %d, skipped", self.throw_count)

        self.phase = TurnPhase.CHECKING_WIN
        won = self.board.won()
        if won:
            self._finished = True
            self.phase = TurnPhase.TERMINATED
            logger.info("Board cleared in %d throw(s)", self.throw_count)
        else:
            self.phase = TurnPhase.ROLLING
        return MoveResult(indices=indices, won=won, throw_count=self.throw_count)

    def board_snapshot(self) -> tuple[tuple[int, bool], ...]:
        return self.board.snapshot()

    def play_turn(
        self,
        pick_strategy: StrategyPicker,
        pick_slot: SlotPicker,
        roll: Roll | None = None,
    ) -> TurnResult:
        """
        Play one full turn.

        Args:
            pick_strategy: Called when both ALL_OR_ONE strategies are offered
            pick_slot: Called once per die when a SELECTION stack is built
            roll: Optional pre-determined roll (for replays and testing)

        Returns:
            TurnResult describing the turn
        """
        if roll is None:
            roll = self.roll()
        options = self.derive_choice_options(roll)

        strategy = None
        if options.auto_indices is not None:
            indices = options.auto_indices
            if len(options.strategies) == 1:
                strategy = options.strategies[0]
        elif options.needs_external_pick:
            strategy = AllOrOne.parse(pick_strategy(roll, options.strategies))
            indices = self.choose_strategy(roll, strategy)
        else:
            builder = StackBuilder(roll)
            while not builder.is_complete:
                builder.place(pick_slot(roll, builder.next_die, builder.stack))
            indices = builder.indices()

        move = self.apply_move(indices)
        return TurnResult(roll=roll, options=options, move=move, strategy=strategy)

    def play(
        self,
        pick_strategy: StrategyPicker,
        pick_slot: SlotPicker,
        max_turns: int | None = None,
    ) -> int:
        """
        Play until the board is cleared.

        Args:
            pick_strategy: Strategy callback, see play_turn
            pick_slot: Slot callback, see play_turn
            max_turns: Give up after this many turns (None = no limit)

        Returns:
            Number of throws it took to win

        Raises:
            RuntimeError: If max_turns is reached before winning
        """
        turns = 0
        while not self.is_over:
            if max_turns is not None and turns >= max_turns:
                raise RuntimeError(f"Board not cleared after {max_turns} turn(s).")
            self.play_turn(pick_strategy, pick_slot)
            turns += 1
        return self.throw_count


def new_game(
    die_side_counts: Sequence[int],
    marking_mode: MarkingMode | str = MarkingMode.REMOVE,
    combination_mode: CombinationMode | str = CombinationMode.ALL_OR_ONE,
    rng: RandomSource | None = None,
) -> ClackersGame:
    """
    Create a new game.

    Args:
        die_side_counts: Side count of every die, each at least 2
        marking_mode: REMOVE or TOGGLE (member or name)
        combination_mode: ALL_OR_ONE or SELECTION (member or name)
        rng: Random source for rolls

    Raises:
        InvalidConfigurationError: If the dice or modes are invalid
    """
    config = GameConfig(
        die_sides=tuple(die_side_counts),
        marking_mode=marking_mode,
        combination_mode=combination_mode,
    )
    return ClackersGame(config, rng=rng)
