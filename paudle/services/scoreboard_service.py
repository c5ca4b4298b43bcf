"""
Scoreboard Service

Statistics shown after a game ends and the text copied when sharing a score.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from ..models.game import Guess
from ..models.history import (
    GameHistory, current_streak, guess_distribution, max_streak
)


@dataclass
class DistributionBar:
    """One row of the guess distribution chart."""
    guesses: int
    count: int
    proportion: int  # bar width, 0-100, relative to the most frequent row


@dataclass
class Scoreboard:
    played: int
    win_percentage: int
    current_streak: int
    max_streak: int
    distribution: List[DistributionBar] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            'played': self.played,
            'win_percentage': self.win_percentage,
            'current_streak': self.current_streak,
            'max_streak': self.max_streak,
            'distribution': [
                {'guesses': bar.guesses, 'count': bar.count, 'proportion': bar.proportion}
                for bar in self.distribution
            ]
        }


def build_scoreboard(history: GameHistory, max_guesses: int) -> Scoreboard:
    distribution = guess_distribution(history, max_guesses)
    most_frequent = max(distribution.values(), default=0)

    bars = [
        DistributionBar(
            guesses=num,
            count=count,
            proportion=count * 100 // most_frequent if most_frequent else 0
        )
        for num, count in sorted(distribution.items())
    ]

    return Scoreboard(
        played=len(history),
        win_percentage=history.wins() * 100 // len(history) if len(history) else 0,
        current_streak=current_streak(history),
        max_streak=max_streak(history),
        distribution=bars
    )


def generate_unicode_block(guesses: Sequence[Guess]) -> str:
    return "\n".join("".join(cell.score_char() for cell in guess) for guess in guesses)


def share_text(game_name: str, guesses: Sequence[Guess], won: bool, max_guesses: int,
               random_mode: bool = False) -> str:
    """
    Text copied to the clipboard when sharing a result.

    Format: ``"<name> <N|X>/<max>[r]"``, a blank line, then one row of
    glyphs per guess. ``X`` marks a lost game and ``r`` a random game.
    """
    score = str(len(guesses)) if won else "X"
    modifiers = "r" if random_mode else ""
    return f"{game_name} {score}/{max_guesses}{modifiers}\n\n{generate_unicode_block(guesses)}"
