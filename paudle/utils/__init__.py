"""
Utilities Package

Contains utility functions and logging helpers.
"""

from .helpers import todays_key, day_key_for, date_for_key, days_between, get_user_identity
from .game_logger import GameLogger, configure_game_logger, get_game_logger

__all__ = [
    'todays_key', 'day_key_for', 'date_for_key', 'days_between', 'get_user_identity',
    'GameLogger', 'configure_game_logger', 'get_game_logger'
]
