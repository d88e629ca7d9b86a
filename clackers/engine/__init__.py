"""
Clackers Game Engine.

Pure Python game logic with zero UI dependencies.
Handles dice rolling, move derivation, board marking and the win check.
"""

from clackers.engine.base import (
    AllOrOne,
    CombinationMode,
    Die,
    DieThrow,
    GameConfig,
    InvalidConfigurationError,
    MarkingMode,
    Roll,
    TurnPhase,
)
from clackers.engine.board import Board
from clackers.engine.rules import ChoiceOptions, ClackersRules, StackBuilder
from clackers.engine.game import ClackersGame, MoveResult, TurnResult, new_game

__all__ = [
    # Data Classes
    "Die",
    "DieThrow",
    "Roll",
    "GameConfig",
    "ChoiceOptions",
    "MoveResult",
    "TurnResult",
    # Enums
    "AllOrOne",
    "CombinationMode",
    "MarkingMode",
    "TurnPhase",
    # Errors
    "InvalidConfigurationError",
    # Engine
    "Board",
    "ClackersRules",
    "StackBuilder",
    "ClackersGame",
    "new_game",
]
