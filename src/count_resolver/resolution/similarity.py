"""
Bigram similarity scoring.

Dice coefficient over sets of adjacent character pairs. Symmetric, bounded
to [0, 1] and tolerant of small transpositions without edit distance.
"""
from typing import Set


def _prepare(text) -> str:
    if not isinstance(text, str):
        return ""
    return text.strip().lower()


def bigrams(text: str) -> Set[str]:
    """Set of overlapping two-character substrings of text."""
    return {text[i:i + 2] for i in range(len(text) - 1)}


def similarity(a: str, b: str) -> float:
    """
    Dice similarity of two strings after lowercasing and trimming.
    
    :return: 1.0 for equal strings, 0.0 when either is shorter than two characters
    """
    first = _prepare(a)
    second = _prepare(b)

    if first == second:
        return 1.0

    if len(first) < 2 or len(second) < 2:
        return 0.0

    first_bigrams = bigrams(first)
    second_bigrams = bigrams(second)
    overlap = len(first_bigrams & second_bigrams)

    return (2.0 * overlap) / (len(first_bigrams) + len(second_bigrams))
