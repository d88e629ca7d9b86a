"""
Clackers - Test Configuration and Fixtures

Common fixtures and test data for all test modules.
"""

import random
from typing import Callable, Iterable

import pytest

from clackers.engine.base import AllOrOne, MarkingMode
from clackers.engine.board import Board


class ScriptedRandom:
    """Random source that returns predetermined faces in order."""

    def __init__(self, faces: Iterable[int]) -> None:
        self._faces = list(faces)
        self.calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        return self._faces.pop(0)


# =============================================================================
# RANDOM SOURCES
# =============================================================================

@pytest.fixture
def rng() -> random.Random:
    """Seeded random source so randomized tests are repeatable."""
    return random.Random(1234)


@pytest.fixture
def scripted_rng() -> Callable[..., ScriptedRandom]:
    """Factory for a random source returning the given faces."""
    def _make(*faces: int) -> ScriptedRandom:
        return ScriptedRandom(faces)
    return _make


# =============================================================================
# BOARD FIXTURES
# =============================================================================

@pytest.fixture
def empty_board() -> Board:
    """Board for two six-sided dice (cells 1-12), nothing marked."""
    return Board(12)


@pytest.fixture
def marked_board() -> Callable[..., Board]:
    """Factory for a 12-cell board with the given cells marked."""
    def _make(*marked: int, size: int = 12) -> Board:
        board = Board(size)
        board.apply(marked, MarkingMode.REMOVE)
        return board
    return _make


# =============================================================================
# PLAYER CALLBACKS
# =============================================================================

@pytest.fixture
def always_total() -> Callable:
    """Strategy picker that always takes the total."""
    return lambda roll, strategies: AllOrOne.TOTAL


@pytest.fixture
def always_individual() -> Callable:
    """Strategy picker that always takes the individual faces."""
    return lambda roll, strategies: AllOrOne.INDIVIDUAL


@pytest.fixture
def new_slot_each_die() -> Callable:
    """Slot picker that gives every die its own slot."""
    return lambda roll, die_index, stack: len(stack)


@pytest.fixture
def stack_everything() -> Callable:
    """Slot picker that piles every die into the first slot."""
    return lambda roll, die_index, stack: 0


@pytest.fixture
def no_picks() -> Callable:
    """Callback that must never be called."""
    def _fail(*args):
        raise AssertionError(f"Unexpected pick request: {args}")
    return _fail
