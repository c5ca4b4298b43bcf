from datetime import date, timedelta

import pytest

from paudle.models.game import GameMode, GameRecord, LetterVerdict
from paudle.models.history import (
    GameHistory, current_streak, guess_distribution, max_streak, record,
    streak_runs, was_won, win_rate
)
from paudle.utils.helpers import date_for_key, day_key_for, days_between

DAY0 = date(1987, 11, 11)

WIN_ROW = tuple(LetterVerdict.correct(c) for c in "pause")
MISS_ROW = (
    LetterVerdict.absent("c"), LetterVerdict.absent("r"), LetterVerdict.present("a"),
    LetterVerdict.absent("n"), LetterVerdict.correct("e"),
)


def key(offset):
    return day_key_for(DAY0 + timedelta(days=offset))


def won(offset, guesses_used=1):
    rows = (MISS_ROW,) * (guesses_used - 1) + (WIN_ROW,)
    return GameRecord("pause", rows, GameMode.daily(key(offset)))


def lost(offset):
    return GameRecord("pause", (MISS_ROW,) * 6, GameMode.daily(key(offset)))


def add(history, offset, game):
    return record(history, key(offset), game)


def test_day_keys_round_trip_to_dates():
    assert date_for_key(key(0)) == DAY0
    assert days_between(key(9), key(7)) == 2


def test_was_won():
    assert was_won(won(0))
    assert not was_won(lost(0))
    assert not was_won(GameRecord("pause"))


def test_record_returns_new_history():
    history = GameHistory()
    updated = record(history, key(0), won(0))
    assert len(history) == 0
    assert len(updated) == 1
    assert updated.get(key(0)) == won(0)


def test_record_overwrites_same_day():
    history = add(add(GameHistory(), 0, lost(0)), 0, won(0))
    assert len(history) == 1
    assert was_won(history.get(key(0)))


def test_win_rate():
    assert win_rate(GameHistory()) == 0
    history = add(add(GameHistory(), 0, won(0)), 1, lost(1))
    assert win_rate(history) == pytest.approx(0.5)


def test_streak_scenario():
    history = add(GameHistory(), 0, won(0))
    assert current_streak(history) == 1

    history = add(history, 1, lost(1))
    for offset in (2, 3, 4):
        history = add(history, offset, won(offset))
    assert current_streak(history) == 3

    history = add(history, 5, lost(5))
    assert current_streak(history) == 0

    history = add(history, 6, lost(6))
    assert current_streak(history) == 0

    history = add(history, 7, won(7))
    history = add(history, 9, won(9))
    assert current_streak(history) == 1
    assert max_streak(history) == 3
    assert streak_runs(history) == [1, 1, 3, 1]


def test_missing_day_breaks_streak():
    history = GameHistory()
    for offset in (0, 1, 3, 4, 5):
        history = add(history, offset, won(offset))
    assert current_streak(history) == 3
    assert max_streak(history) == 3


def test_streaks_of_empty_history():
    assert current_streak(GameHistory()) == 0
    assert max_streak(GameHistory()) == 0
    assert streak_runs(GameHistory()) == []


def test_all_losses_have_no_streak():
    history = add(add(GameHistory(), 0, lost(0)), 1, lost(1))
    assert max_streak(history) == 0
    assert current_streak(history) == 0


def test_insertion_order_does_not_matter():
    forward = GameHistory()
    backward = GameHistory()
    offsets = [0, 1, 2, 4, 5]
    for offset in offsets:
        forward = add(forward, offset, won(offset))
    for offset in reversed(offsets):
        backward = add(backward, offset, won(offset))
    assert streak_runs(forward) == streak_runs(backward) == [2, 3]


def test_guess_distribution_counts_only_wins():
    history = GameHistory()
    history = add(history, 0, won(0, guesses_used=3))
    history = add(history, 1, won(1, guesses_used=3))
    history = add(history, 2, won(2, guesses_used=1))
    history = add(history, 3, lost(3))

    assert guess_distribution(history, 6) == {1: 1, 2: 0, 3: 2, 4: 0, 5: 0, 6: 0}


def test_history_dict_round_trip():
    history = add(add(GameHistory(), 0, won(0, guesses_used=2)), 1, lost(1))
    assert GameHistory.from_dict(history.to_dict()) == history
