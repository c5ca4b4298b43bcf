import os
from datetime import datetime

from paudle.utils import game_logger as game_logger_module


class _LaterDatetime(datetime):
    @classmethod
    def now(cls, tz=None):
        return datetime(2099, 1, 2, 0, 5)


def _flush(logger):
    for handler in logger.logger.handlers:
        handler.flush()


def test_log_file_is_the_file_being_written(game_logger):
    file_handler = next(h for h in game_logger.logger.handlers if hasattr(h, 'baseFilename'))
    assert file_handler.baseFilename == os.path.abspath(game_logger.log_file)


def test_stats_keep_reading_the_same_file_after_midnight(game_logger, monkeypatch):
    game_logger.log_game_event('game_won', 'daily:1700000000')
    monkeypatch.setattr(game_logger_module, 'datetime', _LaterDatetime)
    game_logger.log_game_event('game_lost', 'random')
    _flush(game_logger)

    stats = game_logger.get_log_stats()
    assert stats['game_events'] == 2
    assert stats['log_file'] == str(game_logger.log_file)
