"""
Clackers - Input Validation Utilities

Provides validation functions for game engine inputs. All validators
either return validated data or raise descriptive exceptions. The
interactive layer uses them to reject bad input before it reaches the
engine; the engine uses them to guard its preconditions.
"""

from typing import Sequence

from clackers.engine.base import Die, InvalidConfigurationError


def validate_die_sides(sides: Sequence[int]) -> tuple[int, ...]:
    """
    Validate and normalize the side counts of the dice in play.

    Args:
        sides: Side count for each die

    Returns:
        Validated side counts as a tuple

    Raises:
        InvalidConfigurationError: If there are no dice or a die has fewer than 2 sides
    """
    if not sides:
        raise InvalidConfigurationError("You can't play with no dice.")

    return tuple(Die(count).sides for count in sides)


def validate_board_index(index: int, board_size: int) -> int:
    """
    Validate a single cell index.

    Args:
        index: Cell index to validate
        board_size: Number of cells on the board

    Returns:
        Validated index

    Raises:
        IndexError: If the index is not an integer in 1..board_size
    """
    if isinstance(index, bool) or not isinstance(index, int):
        raise IndexError(f"Board index must be an integer, got {type(index).__name__}.")
    if not (1 <= index <= board_size):
        raise IndexError(
            f"Board index {index} is out of range. Must be between 1 and {board_size}."
        )
    return index


def validate_board_indices(indices: Sequence[int], board_size: int) -> tuple[int, ...]:
    """
    Validate a sequence of cell indices.

    Args:
        indices: Cell indices, repeats allowed
        board_size: Number of cells on the board

    Returns:
        Validated indices as a tuple, order preserved
    """
    return tuple(validate_board_index(index, board_size) for index in indices)


def validate_slot(slot: int, stack_length: int) -> int:
    """
    Validate a stack slot chosen for the next die.

    A slot equal to the current stack length opens a new slot; anything
    lower adds to an existing one.

    Args:
        slot: Zero-based slot index
        stack_length: Number of slots currently on the stack

    Returns:
        Validated slot

    Raises:
        ValueError: If the slot is outside 0..stack_length
    """
    if isinstance(slot, bool) or not isinstance(slot, int):
        raise ValueError(f"Slot must be an integer, got {type(slot).__name__}.")
    if not (0 <= slot <= stack_length):
        raise ValueError(
            f"Slot {slot} is out of bounds. Must be between 0 and {stack_length}."
        )
    return slot
