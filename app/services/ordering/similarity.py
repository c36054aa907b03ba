"""Edit-distance helpers shared by item and modifier matching."""
from typing import FrozenSet

from rapidfuzz import fuzz
from rapidfuzz.distance import Levenshtein


def levenshtein(a: str, b: str) -> int:
    """Plain edit distance: insertions, deletions and substitutions all cost 1."""
    return Levenshtein.distance(a, b)


def tolerance_for(length: int) -> int:
    """Edits allowed for a comparison whose longer string has ``length`` chars."""
    if length <= 3:
        return 0
    if length <= 5:
        return 1
    if length <= 8:
        return 2
    return 3


def is_close_match(a: str, b: str) -> bool:
    """Whether two strings are within the length-scaled edit tolerance."""
    if a == b:
        return True
    return levenshtein(a, b) <= tolerance_for(max(len(a), len(b)))


def similarity(a: str, b: str) -> float:
    """Normalized similarity in [0, 1]; 1.0 means identical."""
    if not a and not b:
        return 1.0
    return Levenshtein.normalized_similarity(a, b)


def best_window(query: str, text: str) -> str:
    """
    Slice of ``text`` that ``query`` lines up with best.

    Text around the window is free, so "chicken parm" finds
    "chicken parm" inside "chicken parmesan". A query at least as
    long as the text is compared against all of it. The window is
    never longer than the query.
    """
    if len(query) >= len(text):
        return text
    alignment = fuzz.partial_ratio_alignment(query, text)
    return text[alignment.dest_start:alignment.dest_end]


def bigrams(text: str) -> FrozenSet[str]:
    """Every two-character substring of ``text``."""
    return frozenset(text[i:i + 2] for i in range(len(text) - 1))
