"""
Services Package

Contains all business logic and service classes.
"""

from .evaluator import evaluate_guess
from .word_source import WordSource
from .storage import KeyValueStore, MemoryStore, FileStore, MongoStore, create_store
from .save_service import SaveService
from .scoreboard_service import Scoreboard, build_scoreboard, share_text
from .game_service import GameService, GameSession, get_game_service, initialize_game_service

__all__ = [
    'evaluate_guess', 'WordSource',
    'KeyValueStore', 'MemoryStore', 'FileStore', 'MongoStore', 'create_store',
    'SaveService', 'Scoreboard', 'build_scoreboard', 'share_text',
    'GameService', 'GameSession', 'get_game_service', 'initialize_game_service'
]
