"""
Game Logger Module for Paudle

This module provides structured logging for player actions, API responses,
game events and storage problems.
"""

import logging
import json
from datetime import datetime
from typing import Dict, Any, Optional
from pathlib import Path

from .helpers import get_user_identity


class GameLogger:
    """
    Centralized logging system for the Paudle game.

    Features:
    - Player action tracking with request identification
    - Server response logging
    - Game event logging (wins, losses, restored games)
    - Storage warnings for corrupt or unwritable saves
    - JSON structured logs for easy parsing
    """

    def __init__(self, log_dir: str = "logs", level: str = "INFO"):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.level = logging.getLevelName(level.upper()) if isinstance(level, str) else level
        self.log_file = self.log_dir / f"game_log_{datetime.now().strftime('%Y-%m-%d')}.log"

        # Setup main game logger
        self.logger = self._setup_logger()

    def _setup_logger(self) -> logging.Logger:
        """Setup the main game logger with file handler."""
        logger = logging.getLogger('paudle_game')
        logger.setLevel(self.level)

        # Prevent duplicate handlers
        if logger.handlers:
            for handler in list(logger.handlers):
                handler.close()
            logger.handlers.clear()

        # File handler for detailed logs
        file_handler = logging.FileHandler(self.log_file, encoding='utf-8')
        file_handler.setLevel(self.level)

        # Console handler for only important messages (WARNING and above)
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)

        file_formatter = logging.Formatter(
            '%(asctime)s | %(levelname)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        console_formatter = logging.Formatter(
            '%(levelname)s: %(message)s'
        )

        file_handler.setFormatter(file_formatter)
        console_handler.setFormatter(console_formatter)

        logger.addHandler(file_handler)
        logger.addHandler(console_handler)

        return logger

    def _create_log_entry(self,
                          event_type: str,
                          action: str,
                          user_info: Optional[Dict[str, Any]],
                          details: Dict[str, Any]) -> str:
        """Create a structured log entry."""
        log_entry = {
            'timestamp': datetime.now().isoformat(),
            'event_type': event_type,
            'action': action,
            'user': user_info,
            'details': details
        }
        return json.dumps(log_entry, ensure_ascii=False, default=str)

    def log_user_action(self, request, action: str, **kwargs):
        """
        Log player actions with request context.

        Args:
            request: Flask request object
            action: Type of action (e.g., 'press_keys', 'submit_guess', 'get_state')
            **kwargs: Additional details to log
        """
        details = {
            'endpoint': request.endpoint,
            'method': request.method,
            'url': request.url,
            **kwargs
        }

        log_message = self._create_log_entry('USER_ACTION', action, get_user_identity(request), details)
        self.logger.info(log_message)

    def log_server_response(self,
                            request,
                            action: str,
                            success: bool,
                            response_data: Dict[str, Any],
                            **kwargs):
        """
        Log server responses with request context.

        Args:
            request: Flask request object
            action: Action that was performed
            success: Whether the action succeeded
            response_data: Data being returned to client
            **kwargs: Additional details to log
        """
        details = {
            'success': success,
            'response_size': len(str(response_data)),
            'response_data': self._sanitize_response_data(response_data),
            **kwargs
        }

        event_type = 'SERVER_RESPONSE_SUCCESS' if success else 'SERVER_RESPONSE_ERROR'
        log_message = self._create_log_entry(event_type, action, get_user_identity(request), details)

        if success:
            self.logger.info(log_message)
        else:
            self.logger.warning(log_message)

    def log_game_event(self, event: str, mode: str, **kwargs):
        """
        Log game-specific events (wins, losses, restores).

        Args:
            event: Type of game event (e.g., 'game_won', 'game_lost', 'game_restored')
            mode: Game mode label, ``daily:<day_key>`` or ``random``
            **kwargs: Additional game details
        """
        details = {'mode': mode, **kwargs}
        log_message = self._create_log_entry('GAME_EVENT', event, None, details)
        self.logger.info(log_message)

    def log_storage_issue(self, action: str, key: str, error: Exception):
        """
        Log a persistence problem that was recovered from locally.

        Args:
            action: What was attempted ('load', 'save', 'delete')
            key: Store key involved
            error: Exception that occurred
        """
        details = {
            'key': key,
            'error_type': type(error).__name__,
            'error_message': str(error)
        }
        log_message = self._create_log_entry('STORAGE', action, None, details)
        self.logger.warning(log_message)

    def log_error(self, request, error: Exception, action: str):
        """
        Log errors with full context.

        Args:
            request: Flask request object
            error: Exception that occurred
            action: Action that was being performed
        """
        details = {
            'error_type': type(error).__name__,
            'error_message': str(error),
            'action': action
        }

        log_message = self._create_log_entry('ERROR', action, get_user_identity(request), details)
        self.logger.error(log_message)

    def _sanitize_response_data(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Trim large payloads before they reach the log file."""
        if not isinstance(data, dict):
            return {'data_type': type(data).__name__}

        sanitized = data.copy()

        if 'state' in sanitized and isinstance(sanitized['state'], dict):
            # The secret word stays out of logs while the game is running
            state = sanitized['state']
            sanitized['state'] = {
                'status': state.get('status'),
                'mode': state.get('mode'),
                'guesses_count': len(state.get('guesses', [])),
                'max_guesses': state.get('max_guesses'),
                'answer_revealed': state.get('answer') is not None
            }

        return sanitized

    def get_log_stats(self) -> Dict[str, Any]:
        """Get statistics about the events in the file this logger writes to."""
        log_file = self.log_file
        if not log_file.exists():
            return {'error': 'No log file found'}

        stats = {
            'log_file': str(log_file),
            'file_size_mb': round(log_file.stat().st_size / (1024 * 1024), 2),
            'total_entries': 0,
            'user_actions': 0,
            'server_responses': 0,
            'game_events': 0,
            'storage_warnings': 0,
            'errors': 0
        }

        try:
            with open(log_file, 'r', encoding='utf-8') as f:
                for line in f:
                    if not line.strip():
                        continue
                    stats['total_entries'] += 1
                    if 'USER_ACTION' in line:
                        stats['user_actions'] += 1
                    elif 'SERVER_RESPONSE' in line:
                        stats['server_responses'] += 1
                    elif 'GAME_EVENT' in line:
                        stats['game_events'] += 1
                    elif '"STORAGE"' in line:
                        stats['storage_warnings'] += 1
                    elif 'ERROR' in line:
                        stats['errors'] += 1
        except OSError as e:
            return {'error': f'Failed to get stats: {e}'}

        return stats


_game_logger: Optional[GameLogger] = None


def configure_game_logger(log_dir: str = "logs", level: str = "INFO") -> GameLogger:
    """Create (or replace) the shared game logger writing under ``log_dir``."""
    global _game_logger
    _game_logger = GameLogger(log_dir, level)
    return _game_logger


def get_game_logger() -> GameLogger:
    """Get the shared game logger, creating it with defaults on first use."""
    if _game_logger is None:
        return configure_game_logger()
    return _game_logger
