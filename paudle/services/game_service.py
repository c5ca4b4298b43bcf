"""
Game Service

Session controller for Paudle. A ``GameSession`` holds one game; player input
arrives as message objects and is applied by ``update``. ``GameService`` owns
the current session together with its store and word source, and persists
every guess.
"""

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from flask import current_app

from ..config.game_settings import MAX_GUESSES
from ..exceptions import GameInProgressError, GameOverError, InvalidGuessError, StorageError
from ..models.game import GameMode, GameRecord, GameState, Guess, LetterVerdict, is_letter
from ..models.history import record
from ..models.keyboard import KeyboardStatus
from ..utils.game_logger import get_game_logger
from ..utils.helpers import todays_key
from .evaluator import evaluate_guess
from .save_service import SAVE_KEY, SaveService
from .scoreboard_service import Scoreboard, build_scoreboard, share_text
from .storage import KeyValueStore
from .word_source import WordSource

ENTER = "Enter"
BACKSPACE = "Backspace"
ESCAPE = "Escape"

WORD_NOT_IN_LIST = "Word not in word list"


@dataclass(frozen=True)
class TypeLetter:
    letter: str


@dataclass(frozen=True)
class Backspace:
    pass


@dataclass(frozen=True)
class Submit:
    pass


@dataclass(frozen=True)
class StartRandom:
    pass


@dataclass(frozen=True)
class Escape:
    pass


Message = Union[TypeLetter, Backspace, Submit, StartRandom, Escape]


def key_to_message(key: str, ctrl: bool = False, alt: bool = False,
                   meta: bool = False, shift: bool = False) -> Optional[Message]:
    """Translate a keyboard key name into a message. Unhandled keys give None."""
    if key == ESCAPE:
        return Escape()
    if key == BACKSPACE:
        return Backspace()
    if key == ENTER:
        return Submit()
    if len(key) != 1:
        return None
    if ctrl or alt or meta or shift:
        return None
    if is_letter(key.lower()):
        return TypeLetter(key.lower())
    return None


@dataclass
class GameSession:
    """State of the game being played."""
    word: str
    mode: GameMode = field(default_factory=GameMode.random)
    max_guesses: int = MAX_GUESSES
    guesses: List[Guess] = field(default_factory=list)
    keyboard_status: KeyboardStatus = field(default_factory=KeyboardStatus)
    current_guess: str = ""
    state: GameState = GameState.IN_PROGRESS
    scoreboard_open: bool = False

    @classmethod
    def from_record(cls, game: GameRecord, max_guesses: int = MAX_GUESSES) -> "GameSession":
        """
        Rebuild a session by replaying the guesses of a saved game.

        Raises:
            ValueError: If the record holds guesses past the end of the game
        """
        session = cls(word=game.word, mode=game.mode, max_guesses=max_guesses)
        for guess in game.guesses:
            if session.is_over:
                raise ValueError("Saved game has guesses after it ended")
            session.add_guess(guess)
        session.scoreboard_open = session.is_over
        return session

    @property
    def word_length(self) -> int:
        return len(self.word)

    @property
    def is_over(self) -> bool:
        return self.state != GameState.IN_PROGRESS

    @property
    def won(self) -> bool:
        return self.state == GameState.WON

    @property
    def mode_label(self) -> str:
        return f"daily:{self.mode.day_key}" if self.mode.is_daily else "random"

    def add_guess(self, guess: Guess) -> None:
        guess = tuple(guess)
        self.keyboard_status.update_status(guess)
        self.guesses.append(guess)
        if all(cell.is_correct for cell in guess):
            self.state = GameState.WON
        elif len(self.guesses) >= self.max_guesses:
            self.state = GameState.LOST

    def eval_and_add_guess(self, text: str) -> Guess:
        guess = evaluate_guess(self.word, text.lower())
        self.add_guess(guess)
        return guess

    def to_record(self) -> GameRecord:
        return GameRecord(word=self.word, guesses=tuple(self.guesses), mode=self.mode)

    def board(self) -> List[List[LetterVerdict]]:
        """All board rows: scored guesses, the row being typed, then empty rows."""
        rows = [list(guess) for guess in self.guesses]
        if not self.is_over:
            typed = [LetterVerdict.typing(c) for c in self.current_guess]
            rows.append(typed + [LetterVerdict.empty()] * (self.word_length - len(typed)))
        while len(rows) < self.max_guesses:
            rows.append([LetterVerdict.empty()] * self.word_length)
        return rows

    def to_view(self) -> Dict[str, Any]:
        """JSON-friendly view of the session. The word is only revealed once the game is over."""
        return {
            'status': self.state.value,
            'mode': self.mode.to_json(),
            'word_length': self.word_length,
            'max_guesses': self.max_guesses,
            'guesses': [[cell.to_dict() for cell in guess] for guess in self.guesses],
            'current_guess': self.current_guess,
            'board': [[cell.to_dict() for cell in row] for row in self.board()],
            'keyboard': self.keyboard_status.as_dict(),
            'scoreboard_open': self.scoreboard_open,
            'answer': self.word if self.is_over else None
        }


@dataclass
class UpdateResult:
    """Outcome of applying one message."""
    session: GameSession
    changed: bool = False
    notice: Optional[str] = None
    guess: Optional[Guess] = None
    started_new_game: bool = False

    @property
    def game_finished(self) -> bool:
        return self.guess is not None and self.session.is_over


def new_random_session(word_source: WordSource, max_guesses: int = MAX_GUESSES) -> GameSession:
    return GameSession(word=word_source.choose_secret_word(), mode=GameMode.random(), max_guesses=max_guesses)


def new_daily_session(word_source: WordSource, day_key: int, max_guesses: int = MAX_GUESSES) -> GameSession:
    return GameSession(
        word=word_source.choose_secret_word(seed=day_key),
        mode=GameMode.daily(day_key),
        max_guesses=max_guesses
    )


def update(session: GameSession, message: Message, word_source: WordSource) -> UpdateResult:
    """
    Apply one player message to ``session``.

    Typing, deleting and submitting only act on a game in progress; a new
    random game can only be started once the current one is over. A guess
    that is not in the word list leaves the session untouched and comes
    back as a notice.

    Returns:
        UpdateResult: The session to keep (a new one after StartRandom) and what changed
    """
    in_progress = not session.is_over

    if isinstance(message, TypeLetter):
        letter = message.letter.lower()
        if in_progress and is_letter(letter) and len(session.current_guess) < session.word_length:
            session.current_guess += letter
            return UpdateResult(session, changed=True)
        return UpdateResult(session)

    if isinstance(message, Backspace):
        if in_progress and session.current_guess:
            session.current_guess = session.current_guess[:-1]
            return UpdateResult(session, changed=True)
        return UpdateResult(session)

    if isinstance(message, Submit):
        if not in_progress or len(session.current_guess) != session.word_length:
            return UpdateResult(session)
        if not word_source.is_accepted(session.current_guess):
            return UpdateResult(session, notice=WORD_NOT_IN_LIST)
        text, session.current_guess = session.current_guess, ""
        guess = session.eval_and_add_guess(text)
        if session.is_over:
            session.scoreboard_open = True
        return UpdateResult(session, changed=True, guess=guess)

    if isinstance(message, StartRandom):
        if in_progress:
            return UpdateResult(session)
        return UpdateResult(new_random_session(word_source, session.max_guesses), changed=True,
                            started_new_game=True)

    if isinstance(message, Escape):
        changed = session.scoreboard_open
        session.scoreboard_open = False
        return UpdateResult(session, changed=changed)

    return UpdateResult(session)


class GameService:
    """
    Owns the current game session.

    This class handles:
    - Restoring the saved game, today's finished game, or a new daily game
    - Applying player messages one at a time
    - Saving in-progress games and recording finished daily games into history
    - Scoreboard statistics and share text
    """

    def __init__(self, store: KeyValueStore, word_source: WordSource, game_name: str = "Paudle",
                 max_guesses: int = MAX_GUESSES, clock: Callable[[], int] = todays_key):
        self.saves = SaveService(store)
        self.word_source = word_source
        self.game_name = game_name
        self.max_guesses = max_guesses
        self.clock = clock
        self._lock = threading.RLock()
        self.session_day = self.clock()
        self.session = self._restore_session()

    def _restore_session(self) -> GameSession:
        logger = get_game_logger()

        saved = self.saves.load_saved_state()
        if saved is not None:
            try:
                session = GameSession.from_record(saved, self.max_guesses)
                logger.log_game_event('game_restored', session.mode_label, guesses_used=len(session.guesses))
                return session
            except ValueError as e:
                logger.log_storage_issue('restore', SAVE_KEY, e)
                self.saves.delete_saved_game()

        return self._session_for_day(self.session_day)

    def _session_for_day(self, today: int) -> GameSession:
        finished = self.saves.load_game_history().get(today)
        if finished is not None:
            try:
                return GameSession.from_record(finished, self.max_guesses)
            except ValueError as e:
                get_game_logger().log_storage_issue('restore', f"history:{today}", e)

        return new_daily_session(self.word_source, today, self.max_guesses)

    def current_session(self) -> GameSession:
        """Return the session, moving on to today's daily game once a finished game is from an earlier day."""
        with self._lock:
            self._roll_over()
            return self.session

    def _roll_over(self) -> None:
        today = self.clock()
        if not self.session.is_over:
            return
        mode = self.session.mode
        if today == self.session_day and not (mode.is_daily and mode.day_key != today):
            return
        self.session_day = today
        self.session = self._session_for_day(today)
        get_game_logger().log_game_event('day_rolled_over', self.session.mode_label, day_key=today)

    def dispatch(self, message: Message) -> UpdateResult:
        """Apply one message to the current session and persist any new guess."""
        with self._lock:
            self._roll_over()
            result = update(self.session, message, self.word_source)
            self.session = result.session
            if result.guess is not None:
                self._after_guess(result.session)
            if result.started_new_game:
                get_game_logger().log_game_event('game_started', result.session.mode_label)
            return result

    def _after_guess(self, session: GameSession) -> None:
        self.saves.update_saved_state(session.to_record(), in_progress=not session.is_over)
        if not session.is_over:
            return

        get_game_logger().log_game_event(
            'game_won' if session.won else 'game_lost', session.mode_label,
            word=session.word, guesses_used=len(session.guesses)
        )
        if session.mode.is_daily:
            try:
                history = self.saves.load_game_history(strict=True)
            except StorageError:
                # Writing back would replace the stored history with this one game
                return
            self.saves.save_game_history(record(history, session.mode.day_key, session.to_record()))

    def press_keys(self, keys: Iterable[Union[str, Dict[str, Any]]]) -> List[UpdateResult]:
        """
        Feed keyboard keys to the session.

        Args:
            keys: Key names (``"a"``, ``"Enter"``, ``"Backspace"``, ``"Escape"``) or
                  dicts with ``key`` and optional ``ctrl``/``alt``/``meta``/``shift`` flags

        Returns:
            List[UpdateResult]: One result per key that mapped to a message
        """
        results = []
        with self._lock:
            for key in keys:
                if isinstance(key, dict):
                    message = key_to_message(
                        str(key.get('key', '')),
                        ctrl=bool(key.get('ctrl')), alt=bool(key.get('alt')),
                        meta=bool(key.get('meta')), shift=bool(key.get('shift'))
                    )
                else:
                    message = key_to_message(str(key))
                if message is not None:
                    results.append(self.dispatch(message))
        return results

    def submit_word(self, word: str) -> UpdateResult:
        """
        Type ``word`` and submit it as a guess.

        Raises:
            GameOverError: If the game has already ended
            InvalidGuessError: If the word has the wrong length, contains non-letters,
                               or is not in the word list
        """
        with self._lock:
            self._roll_over()
            session = self.session
            if session.is_over:
                raise GameOverError("Game is already over")

            normalized = word.strip().lower() if isinstance(word, str) else ""
            if len(normalized) != session.word_length:
                raise InvalidGuessError(f"Guess must be exactly {session.word_length} letters")
            if not all(is_letter(c) for c in normalized):
                raise InvalidGuessError("Guess must contain only letters")

            typed = session.current_guess
            session.current_guess = normalized
            result = self.dispatch(Submit())
            if result.notice:
                session.current_guess = typed
                raise InvalidGuessError(result.notice)
            return result

    def start_random(self) -> UpdateResult:
        with self._lock:
            self._roll_over()
            if not self.session.is_over:
                raise GameInProgressError("Finish the current game before starting a random one")
            return self.dispatch(StartRandom())

    def get_scoreboard(self) -> Scoreboard:
        with self._lock:
            return build_scoreboard(self.saves.load_game_history(), self.max_guesses)

    def get_share_text(self) -> str:
        with self._lock:
            session = self.session
            if not session.is_over:
                raise GameInProgressError("The score can only be shared once the game is over")
            return share_text(self.game_name, session.guesses, session.won, session.max_guesses,
                              random_mode=session.mode.is_random)


def get_game_service() -> Optional[GameService]:
    """Get the game service of the current Flask app."""
    return current_app.extensions.get('paudle')


def initialize_game_service(app, store: KeyValueStore, word_source: WordSource) -> GameService:
    """Create the game service for ``app`` and register it under ``app.extensions``."""
    game_service = GameService(
        store,
        word_source,
        game_name=app.config.get('GAME_NAME', 'Paudle'),
        max_guesses=app.config.get('MAX_GUESSES', MAX_GUESSES)
    )
    app.extensions['paudle'] = game_service
    return game_service
