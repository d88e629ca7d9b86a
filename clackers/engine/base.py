"""
Clackers - Game Engine Base Classes

This module defines the foundational data structures and enums used throughout
the game engine. Dice, throws and rolls are immutable (frozen dataclasses);
the only mutable state in the engine lives in the board and the game.
"""

import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import Protocol, Sequence


class InvalidConfigurationError(ValueError):
    """Raised when a game cannot be built from the requested dice or modes."""


class RandomSource(Protocol):
    """Anything that can draw a uniform integer, such as ``random.Random``."""

    def randint(self, a: int, b: int) -> int: ...


class _NamedEnum(Enum):
    """Enum that can be looked up by a case-insensitive member name."""

    @classmethod
    def parse(cls, value: "str | _NamedEnum"):
        """Resolve a member from itself, its value, or its name.

        Underscores are optional so ``"ALLORONE"`` and ``"all_or_one"``
        both resolve to the same member.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            wanted = value.strip().lower().replace("_", "")
            for member in cls:
                if wanted == member.value.replace("_", ""):
                    return member
        choices = " | ".join(member.name for member in cls)
        raise InvalidConfigurationError(
            f"Unknown {cls.__name__} {value!r}. Choose one of: {choices}."
        )


class MarkingMode(_NamedEnum):
    """How a selected cell changes state."""
    REMOVE = "remove"  # unmarked -> marked, permanently
    TOGGLE = "toggle"  # flips on every selection


class CombinationMode(_NamedEnum):
    """How a multi-die roll is turned into cell indices."""
    ALL_OR_ONE = "all_or_one"  # total of all dice, or every die on its own
    SELECTION = "selection"    # dice freely stacked into slots


class AllOrOne(_NamedEnum):
    """Strategies offered in ALL_OR_ONE mode."""
    TOTAL = "total"
    INDIVIDUAL = "individual"


class TurnPhase(Enum):
    """Phases of the turn state machine."""
    ROLLING = auto()
    DERIVING_CHOICES = auto()
    APPLYING_MOVE = auto()
    CHECKING_WIN = auto()
    TERMINATED = auto()


@dataclass(frozen=True)
class Die:
    """
    A single n-sided die.

    Attributes:
        sides: Number of faces, at least 2
    """
    sides: int

    def __post_init__(self) -> None:
        """Validate the side count."""
        if isinstance(self.sides, bool) or not isinstance(self.sides, int):
            raise InvalidConfigurationError(
                f"Die sides must be an integer, got {type(self.sides).__name__}."
            )
        if self.sides < 2:
            raise InvalidConfigurationError(
                f"A die needs at least 2 sides, got {self.sides}."
            )

    def roll(self, rng: RandomSource | None = None) -> int:
        """Roll the die.

        Args:
            rng: Random source to draw from (module ``random`` if omitted)

        Returns:
            A face value between 1 and ``sides`` inclusive
        """
        source = rng if rng is not None else random
        return source.randint(1, self.sides)


@dataclass(frozen=True)
class DieThrow:
    """
    The result of rolling one die.

    Attributes:
        value: Face that came up
        sides: Number of faces of the die that was rolled
    """
    value: int
    sides: int

    def __post_init__(self) -> None:
        if not (1 <= self.value <= self.sides):
            raise ValueError(
                f"Invalid die value {self.value} for a {self.sides}-sided die. "
                f"Must be between 1 and {self.sides}."
            )

    def __str__(self) -> str:
        return f"{self.value}d{self.sides}"


@dataclass(frozen=True)
class Roll:
    """
    Immutable representation of one turn's roll, one throw per die.

    Attributes:
        throws: Throws in dice order
    """
    throws: tuple[DieThrow, ...]

    def __post_init__(self) -> None:
        if not self.throws:
            raise ValueError("A roll needs at least one die.")

    def __len__(self) -> int:
        return len(self.throws)

    def __getitem__(self, index: int) -> DieThrow:
        return self.throws[index]

    def __str__(self) -> str:
        return " | ".join(str(throw) for throw in self.throws)

    @property
    def faces(self) -> tuple[int, ...]:
        """Face values in dice order."""
        return tuple(throw.value for throw in self.throws)

    @property
    def total(self) -> int:
        """Sum of all faces."""
        return sum(self.faces)

    @property
    def lowest(self) -> int:
        """Smallest face."""
        return min(self.faces)

    @classmethod
    def from_values(cls, values: Sequence[int], sides: Sequence[int] | int = 6) -> "Roll":
        """Build a roll from face values.

        Args:
            values: Face values in dice order
            sides: Side count per die, or one count shared by every die

        Returns:
            A validated Roll
        """
        if isinstance(sides, int):
            sides = [sides] * len(values)
        if len(sides) != len(values):
            raise ValueError(
                f"Got {len(values)} values for {len(sides)} dice."
            )
        return cls(throws=tuple(DieThrow(v, s) for v, s in zip(values, sides)))


@dataclass(frozen=True)
class GameConfig:
    """
    Configuration for a game session.

    Attributes:
        die_sides: Side count of every die in play
        marking_mode: REMOVE or TOGGLE
        combination_mode: ALL_OR_ONE or SELECTION
    """
    die_sides: tuple[int, ...]
    marking_mode: MarkingMode = MarkingMode.REMOVE
    combination_mode: CombinationMode = CombinationMode.ALL_OR_ONE

    def __post_init__(self) -> None:
        """Validate configuration and normalize mode names."""
        if not self.die_sides:
            raise InvalidConfigurationError("You can't play with no dice.")
        # Die checks every side count.
        object.__setattr__(
            self, "die_sides", tuple(Die(sides).sides for sides in self.die_sides)
        )
        object.__setattr__(self, "marking_mode", MarkingMode.parse(self.marking_mode))
        object.__setattr__(
            self, "combination_mode", CombinationMode.parse(self.combination_mode)
        )

    @property
    def board_size(self) -> int:
        """Number of cells on the board (sum of all die sides)."""
        return sum(self.die_sides)

    @property
    def dice(self) -> tuple[Die, ...]:
        """One Die per configured side count."""
        return tuple(Die(sides) for sides in self.die_sides)
