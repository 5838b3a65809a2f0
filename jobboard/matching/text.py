"""Substring helpers shared by the matching stages.

Callers pass lower-cased text; nothing here changes case.
"""

from typing import Iterable


def mutual_substring(left: str, right: str) -> bool:
    """True if either string contains the other.

    An empty string is contained in everything, so an empty side always
    matches.
    """
    return left in right or right in left


def words_overlap(left: str, right: str) -> bool:
    """True if any whitespace-delimited word of ``left`` and any word of
    ``right`` contain one another."""
    right_words = right.split()
    return any(
        mutual_substring(left_word, right_word)
        for left_word in left.split()
        for right_word in right_words
    )


def lowered(values: Iterable[str]) -> list:
    return [value.lower() for value in values]
