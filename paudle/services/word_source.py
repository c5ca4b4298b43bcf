"""
Word Source

Chooses secret words and answers whether a guess is an accepted word.
"""

import random
from typing import Iterable, Optional


class WordSource:
    """Secret word provider backed by a fixed word list."""

    def __init__(self, words: Iterable[str]):
        self.words = [word.lower() for word in words]
        if not self.words:
            raise ValueError("Word list cannot be empty")
        self._accepted = frozenset(self.words)

    def choose_secret_word(self, seed: Optional[int] = None) -> str:
        """
        Pick a secret word.

        Args:
            seed: Day-key for the daily word. The same seed always yields the same word.
                  Without a seed the choice is random.
        """
        rng = random.Random(seed) if seed is not None else random
        return rng.choice(self.words)

    def is_accepted(self, word: str) -> bool:
        return word.lower() in self._accepted

    def __len__(self) -> int:
        return len(self.words)
