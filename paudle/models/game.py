"""
Game Data Models

Contains the board cell, keyboard and game record data structures.
"""

from dataclasses import dataclass, replace
from enum import Enum, IntEnum
from typing import Any, Dict, Optional, Tuple, Union


def is_letter(value: Any) -> bool:
    """True for a single lowercase ASCII letter."""
    return isinstance(value, str) and len(value) == 1 and 'a' <= value <= 'z'


class CellKind(Enum):
    """Board cell classification."""
    EMPTY = "empty"
    TYPING = "typing"
    ABSENT = "absent"
    PRESENT = "present"
    CORRECT = "correct"


SCORED_KINDS = (CellKind.ABSENT, CellKind.PRESENT, CellKind.CORRECT)

SHARE_GLYPHS: Dict[CellKind, str] = {
    CellKind.EMPTY: "\u2b1c",
    CellKind.TYPING: "\u2b1c",
    CellKind.ABSENT: "\u2b1c",
    CellKind.PRESENT: "\U0001f7e8",
    CellKind.CORRECT: "\U0001f7e9",
}


@dataclass(frozen=True)
class LetterVerdict:
    """
    One board cell: an empty slot, a typed letter or a scored letter.

    Every kind except EMPTY carries exactly one lowercase letter.
    """
    kind: CellKind
    letter: Optional[str] = None

    def __post_init__(self):
        if self.kind == CellKind.EMPTY:
            if self.letter is not None:
                raise ValueError("Empty cells carry no letter")
        elif not is_letter(self.letter):
            raise ValueError(f"Invalid letter for {self.kind.value} cell: {self.letter!r}")

    @classmethod
    def empty(cls) -> "LetterVerdict":
        return cls(CellKind.EMPTY)

    @classmethod
    def typing(cls, letter: str) -> "LetterVerdict":
        return cls(CellKind.TYPING, letter)

    @classmethod
    def absent(cls, letter: str) -> "LetterVerdict":
        return cls(CellKind.ABSENT, letter)

    @classmethod
    def present(cls, letter: str) -> "LetterVerdict":
        return cls(CellKind.PRESENT, letter)

    @classmethod
    def correct(cls, letter: str) -> "LetterVerdict":
        return cls(CellKind.CORRECT, letter)

    @property
    def is_scored(self) -> bool:
        return self.kind in SCORED_KINDS

    @property
    def is_correct(self) -> bool:
        return self.kind == CellKind.CORRECT

    def score_char(self) -> str:
        """Glyph used in the shared score grid."""
        return SHARE_GLYPHS[self.kind]

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {'status': self.kind.value, 'letter': self.letter}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LetterVerdict":
        return cls(CellKind(data['status']), data.get('letter'))


Guess = Tuple[LetterVerdict, ...]


class KeyStatus(IntEnum):
    """On-screen key status, ordered by strength."""
    UNUSED = 0
    ABSENT = 1
    PRESENT = 2
    CORRECT = 3

    @property
    def label(self) -> str:
        return self.name.lower()


class GameState(Enum):
    """Session lifecycle."""
    IN_PROGRESS = "in_progress"
    WON = "won"
    LOST = "lost"


@dataclass(frozen=True)
class GameMode:
    """Daily game for a given day-key, or a random game when ``day_key`` is None."""
    day_key: Optional[int] = None

    @classmethod
    def daily(cls, day_key: int) -> "GameMode":
        return cls(int(day_key))

    @classmethod
    def random(cls) -> "GameMode":
        return cls()

    @property
    def is_daily(self) -> bool:
        return self.day_key is not None

    @property
    def is_random(self) -> bool:
        return self.day_key is None

    def to_json(self) -> Union[str, Dict[str, int]]:
        if self.is_daily:
            return {'daily': self.day_key}
        return 'random'

    @classmethod
    def from_json(cls, data: Union[str, Dict[str, Any]]) -> "GameMode":
        if data == 'random':
            return cls.random()
        if isinstance(data, dict) and isinstance(data.get('daily'), int):
            return cls.daily(data['daily'])
        raise ValueError(f"Unknown game mode: {data!r}")


def guess_from_json(cells: Any) -> Guess:
    if not isinstance(cells, list):
        raise TypeError("A guess must be a list of cells")
    guess = tuple(LetterVerdict.from_dict(cell) for cell in cells)
    if not all(cell.is_scored for cell in guess):
        raise ValueError("Saved guesses may only contain scored cells")
    return guess


@dataclass(frozen=True)
class GameRecord:
    """Secret word, evaluated guesses and mode of one game."""
    word: str
    guesses: Tuple[Guess, ...] = ()
    mode: GameMode = GameMode()

    def with_guess(self, guess: Guess) -> "GameRecord":
        return replace(self, guesses=self.guesses + (tuple(guess),))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'word': self.word,
            'guesses': [[cell.to_dict() for cell in guess] for guess in self.guesses],
            'mode': self.mode.to_json(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameRecord":
        word = data['word']
        if not isinstance(word, str) or not word or not all(is_letter(c) for c in word):
            raise ValueError(f"Invalid saved word: {word!r}")
        guesses = tuple(guess_from_json(cells) for cells in data['guesses'])
        for guess in guesses:
            if len(guess) != len(word):
                raise ValueError("Saved guess length does not match the word")
        return cls(word=word, guesses=guesses, mode=GameMode.from_json(data.get('mode', 'random')))
