"""
Save Service

Persists the in-progress game and the daily game history into a key-value
store. Unreadable saves are discarded and treated as missing; failed writes
are logged and never disturb the in-memory game.
"""

import json
from typing import Any, Dict, Optional

from ..exceptions import StorageError
from ..models.game import GameRecord
from ..models.history import GameHistory
from ..utils.game_logger import get_game_logger
from .storage import KeyValueStore

SAVE_KEY = "paudle_save_v1"
HISTORY_KEY = "paudle_history_v1"

_DECODE_ERRORS = (ValueError, KeyError, TypeError, AttributeError)


class SaveService:
    """Reads and writes the current game and the game history."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def save_game(self, game: GameRecord) -> bool:
        return self._write(SAVE_KEY, game.to_dict())

    def delete_saved_game(self) -> bool:
        try:
            self.store.delete(SAVE_KEY)
            return True
        except StorageError as e:
            get_game_logger().log_storage_issue('delete', SAVE_KEY, e)
            return False

    def update_saved_state(self, game: GameRecord, in_progress: bool) -> bool:
        """Save ``game`` while it is being played, drop the save once it is over."""
        if in_progress:
            return self.save_game(game)
        return self.delete_saved_game()

    def load_saved_state(self) -> Optional[GameRecord]:
        data = self._read(SAVE_KEY)
        if data is None:
            return None
        try:
            return GameRecord.from_dict(data)
        except _DECODE_ERRORS as e:
            self._discard(SAVE_KEY, e)
            return None

    def load_game_history(self, strict: bool = False) -> GameHistory:
        """
        Load the game history, starting fresh when it is missing or corrupt.

        With ``strict`` a failed store read raises ``StorageError`` instead of
        looking like an empty history, so callers about to write it back can
        tell the two apart.
        """
        data = self._read(HISTORY_KEY, strict=strict)
        if data is None:
            return GameHistory()
        try:
            return GameHistory.from_dict(data)
        except _DECODE_ERRORS as e:
            self._discard(HISTORY_KEY, e)
            return GameHistory()

    def save_game_history(self, history: GameHistory) -> bool:
        return self._write(HISTORY_KEY, history.to_dict())

    def _read(self, key: str, strict: bool = False) -> Optional[Dict[str, Any]]:
        try:
            raw = self.store.get(key)
        except StorageError as e:
            get_game_logger().log_storage_issue('load', key, e)
            if strict:
                raise
            return None
        if raw is None:
            return None

        try:
            data = json.loads(raw.decode('utf-8'))
        except ValueError as e:
            self._discard(key, e)
            return None
        if not isinstance(data, dict):
            self._discard(key, TypeError(f"Expected a JSON object, got {type(data).__name__}"))
            return None
        return data

    def _write(self, key: str, payload: Dict[str, Any]) -> bool:
        try:
            self.store.set(key, json.dumps(payload).encode('utf-8'))
            return True
        except StorageError as e:
            get_game_logger().log_storage_issue('save', key, e)
            return False

    def _discard(self, key: str, error: Exception) -> None:
        """Log a corrupt entry and remove it so the next start is clean."""
        get_game_logger().log_storage_issue('load', key, error)
        try:
            self.store.delete(key)
        except StorageError as e:
            get_game_logger().log_storage_issue('delete', key, e)
