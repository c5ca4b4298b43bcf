"""
Guess Evaluator

Scores a guess against the secret word under Wordle rules.
"""

from collections import Counter
from typing import List, Optional

from ..exceptions import EvaluationContractError
from ..models.game import Guess, LetterVerdict, is_letter


def evaluate_guess(secret: str, guess: str) -> Guess:
    """
    Implements the authentic Wordle letter evaluation algorithm.

    Exact matches are marked first and consume one occurrence of their letter.
    Remaining positions are then scored left to right: a letter is Present
    while unmatched occurrences of it remain in the secret, otherwise Absent.
    No letter is ever marked Correct or Present more often than it occurs
    in the secret.

    Args:
        secret: The hidden word, lowercase
        guess: The player's word, lowercase, same length as ``secret``

    Returns:
        Guess: One scored verdict per position

    Raises:
        EvaluationContractError: If the inputs differ in length or contain non-letters
    """
    if len(secret) != len(guess):
        raise EvaluationContractError(f"Guess length {len(guess)} does not match word length {len(secret)}")
    if not all(is_letter(c) for c in secret + guess):
        raise EvaluationContractError("Secret and guess must be lowercase letters")

    remaining = Counter(secret)
    verdicts: List[Optional[LetterVerdict]] = [None] * len(guess)

    # First pass: exact position matches
    for i, (s, g) in enumerate(zip(secret, guess)):
        if s == g:
            verdicts[i] = LetterVerdict.correct(g)
            remaining[g] -= 1

    # Second pass: present letters and misses
    for i, g in enumerate(guess):
        if verdicts[i] is not None:
            continue
        if remaining[g] > 0:
            verdicts[i] = LetterVerdict.present(g)
            remaining[g] -= 1
        else:
            verdicts[i] = LetterVerdict.absent(g)

    return tuple(verdicts)
