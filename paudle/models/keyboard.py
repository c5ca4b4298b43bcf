"""
Keyboard Status Model

Tracks the best-known status of every letter across the guesses of a game.
"""

import string
from typing import Dict, Iterable, Optional

from .game import CellKind, Guess, KeyStatus, LetterVerdict


class KeyboardStatus:
    """
    Letter -> KeyStatus map, updated once per evaluated guess.

    Status only moves up the ``Unused < Absent < Present < Correct`` order:
    Correct always wins, Present never replaces Correct, and Absent is only
    written for a letter with no entry yet (first write wins). A later
    Present or Correct for that letter still upgrades it.
    """

    ABSENT_POLICY = "first-write"

    def __init__(self, keys: Optional[Dict[str, KeyStatus]] = None):
        self.keys: Dict[str, KeyStatus] = dict(keys or {})

    @classmethod
    def from_guesses(cls, guesses: Iterable[Guess]) -> "KeyboardStatus":
        status = cls()
        for guess in guesses:
            status.update_status(guess)
        return status

    def get_status(self, letter: str) -> KeyStatus:
        return self.keys.get(letter.lower(), KeyStatus.UNUSED)

    def update_status(self, guess: Iterable[LetterVerdict]) -> None:
        for cell in guess:
            if cell.kind == CellKind.CORRECT:
                self.keys[cell.letter] = KeyStatus.CORRECT
            elif cell.kind == CellKind.PRESENT:
                if self.keys.get(cell.letter) != KeyStatus.CORRECT:
                    self.keys[cell.letter] = KeyStatus.PRESENT
            elif cell.kind == CellKind.ABSENT:
                self.keys.setdefault(cell.letter, KeyStatus.ABSENT)

    def updated(self, guess: Iterable[LetterVerdict]) -> "KeyboardStatus":
        """Return a new status map with ``guess`` folded in, leaving this one unchanged."""
        new_status = KeyboardStatus(self.keys)
        new_status.update_status(guess)
        return new_status

    def as_dict(self) -> Dict[str, str]:
        return {letter: self.get_status(letter).label for letter in string.ascii_lowercase}

    def __eq__(self, other):
        if not isinstance(other, KeyboardStatus):
            return NotImplemented
        return self.keys == other.keys

    def __repr__(self):
        return f"KeyboardStatus({self.keys!r})"
