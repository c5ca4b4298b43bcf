"""
Game History Models

Persisted record of finished daily games, keyed by day-key, and the
statistics derived from it: win rate, streaks and guess distribution.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from .game import GameRecord
from ..utils.helpers import days_between


@dataclass
class GameHistory:
    """Finished daily games by day-key. Entries are never edited in place."""
    scores: Dict[int, GameRecord] = field(default_factory=dict)

    def get(self, day_key: int) -> Optional[GameRecord]:
        return self.scores.get(day_key)

    def wins(self) -> int:
        return sum(1 for game in self.scores.values() if was_won(game))

    def day_keys(self) -> List[int]:
        """Day-keys, most recent first."""
        return sorted(self.scores, reverse=True)

    def __len__(self) -> int:
        return len(self.scores)

    def __contains__(self, day_key) -> bool:
        return day_key in self.scores

    def __iter__(self) -> Iterator[int]:
        return iter(self.scores)

    def to_dict(self) -> Dict[str, Any]:
        return {'scores': {str(key): game.to_dict() for key, game in self.scores.items()}}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameHistory":
        return cls({int(key): GameRecord.from_dict(game) for key, game in data['scores'].items()})


def record(history: GameHistory, day_key: int, game: GameRecord) -> GameHistory:
    """Return a new history with ``game`` stored at ``day_key``."""
    scores = dict(history.scores)
    scores[int(day_key)] = game
    return GameHistory(scores)


def was_won(game: GameRecord) -> bool:
    """True if the last guess of the game is all correct."""
    if not game.guesses:
        return False
    return all(cell.is_correct for cell in game.guesses[-1])


def win_rate(history: GameHistory) -> float:
    if not len(history):
        return 0.0
    return history.wins() / len(history)


def streak_runs(history: GameHistory) -> List[int]:
    """
    Split the history into winning runs, most recent run first.

    Walks day-keys from newest to oldest. A run ends at a lost game or when
    the previous (newer) game is more than one calendar day away. Lost games
    do not start the next run.

    Returns:
        List[int]: Lengths of every non-empty run
    """
    runs: List[int] = []
    count = 0
    newer_key = None

    for day_key in history.day_keys():
        if newer_key is not None and days_between(newer_key, day_key) > 1:
            if count > 0:
                runs.append(count)
            count = 0

        if was_won(history.scores[day_key]):
            count += 1
        else:
            if count > 0:
                runs.append(count)
            count = 0

        newer_key = day_key

    if count > 0:
        runs.append(count)
    return runs


def current_streak(history: GameHistory) -> int:
    """Length of the latest run, or 0 if the most recent game was lost."""
    day_keys = history.day_keys()
    if not day_keys or not was_won(history.scores[day_keys[0]]):
        return 0
    return streak_runs(history)[0]


def max_streak(history: GameHistory) -> int:
    return max(streak_runs(history), default=0)


def guess_distribution(history: GameHistory, max_guesses: int) -> Dict[int, int]:
    """Number of won games by guesses used, for buckets 1..max_guesses."""
    distribution = {num: 0 for num in range(1, max_guesses + 1)}
    for game in history.scores.values():
        if was_won(game) and len(game.guesses) in distribution:
            distribution[len(game.guesses)] += 1
    return distribution
