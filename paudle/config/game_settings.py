"""
Game Configuration Constants Module

Defines the board dimensions and loads the word list the daily and random
secret words are drawn from. Guesses are only accepted if they appear in it.
"""

import json
import os
from collections import Counter
from typing import Final, List, Optional

# Core Game Configuration Constants
WORD_LENGTH: Final[int] = 5
"""Letters per word and per board row."""

MAX_GUESSES: Final[int] = 6
"""
Maximum number of guess attempts allowed per game.
Type: Final[int] - Immutable to prevent accidental modification
"""

WORD_LIST_FILE: Final[str] = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'words.json')


def load_word_list(path: Optional[str] = None, word_length: int = WORD_LENGTH) -> List[str]:
    """
    Load and validate a word list from a JSON array file.

    Args:
        path: JSON file to read, defaults to the bundled ``words.json``
        word_length: Required length of every word

    Returns:
        List[str]: Lowercase words in file order

    Raises:
        FileNotFoundError: If the file is not found
        ValueError: If the JSON is malformed, the list is empty, or a word is invalid
    """
    json_file_path = path or WORD_LIST_FILE

    try:
        with open(json_file_path, 'r', encoding='utf-8') as f:
            word_list = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Word list file not found: {json_file_path}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {json_file_path}: {e}") from e

    if not isinstance(word_list, list):
        raise ValueError("JSON file must contain an array of words")

    words = [str(word).lower() for word in word_list]
    validate_word_list_integrity(words, word_length)
    return words


def validate_word_list_integrity(words: List[str], word_length: int = WORD_LENGTH) -> bool:
    """
    Validates the integrity and consistency of a word list.

    This function performs validation to ensure:
    1. Length validation: All words must be exactly ``word_length`` characters
    2. Character validation: Only lowercase ASCII letters allowed
    3. Uniqueness validation: No duplicate entries

    Returns:
        bool: True if word list passes all validation checks

    Raises:
        ValueError: If any validation check fails with detailed error message
    """
    if not words:
        raise ValueError("Word list cannot be empty")

    for index, word in enumerate(words):
        if len(word) != word_length:
            raise ValueError(f"Word at index {index} '{word}' is not {word_length} characters long")

        if not (word.isascii() and word.isalpha() and word.islower()):
            raise ValueError(f"Word at index {index} '{word}' contains characters other than a-z")

    if len(words) != len(set(words)):
        duplicates = sorted(word for word, count in Counter(words).items() if count > 1)
        raise ValueError(f"Duplicate words found in word list: {duplicates}")

    return True


# Curated Word Database loaded from JSON file
WORD_LIST: Final[List[str]] = load_word_list()


if __name__ == "__main__":
    print(f" Word list validation passed ({len(WORD_LIST)} words)")
