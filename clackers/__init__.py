"""
Clackers - a board-clearing dice game.

Roll the dice, combine them under the chosen rules, and mark cells on a
numbered board until every cell is marked.
"""

__version__ = "0.1.0"
