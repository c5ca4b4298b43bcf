"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import CellKind, GameMode, GameRecord, GameState, Guess, KeyStatus, LetterVerdict
from .keyboard import KeyboardStatus
from .history import GameHistory

__all__ = [
    'CellKind', 'GameMode', 'GameRecord', 'GameState', 'Guess', 'KeyStatus', 'LetterVerdict',
    'KeyboardStatus', 'GameHistory'
]
