"""
Item phrase extraction.

Strips command vocabulary, numbers and filler from a transcript so that
what remains is the spoken name of the item ("rebs at twelve" -> "rebs").
"""
import re
from typing import List

from ..models import normalize_text
from .operation_classifier import OperationClassifier
from .quantity_extractor import NUMBER_WORDS

_TOKEN = re.compile(r"[\w'&]+")

FILLER_WORDS = frozenset({
    "a", "an", "the", "to", "of", "for", "by", "from", "with",
    "please", "um", "uh", "okay", "ok", "now", "more",
})

_COMMAND_WORDS = frozenset(
    keyword
    for _, keywords in OperationClassifier.VOCABULARY
    for keyword in keywords
    if " " not in keyword
)

_COMMAND_PHRASES = tuple(
    keyword.split()
    for _, keywords in OperationClassifier.VOCABULARY
    for keyword in keywords
    if " " in keyword
)


def tokenize(text: str) -> List[str]:
    """Lowercased word tokens; punctuation and hyphens separate words."""
    return _TOKEN.findall(normalize_text(text or ""))


def _drop_phrases(tokens: List[str]) -> List[str]:
    kept = []
    index = 0
    while index < len(tokens):
        for phrase in _COMMAND_PHRASES:
            if tokens[index:index + len(phrase)] == phrase:
                index += len(phrase)
                break
        else:
            kept.append(tokens[index])
            index += 1
    return kept


def extract_item_phrase(transcript: str) -> str:
    """
    Reduce a transcript to its item phrase.
    
    :param transcript: Raw transcript
    :return: Normalized item phrase, possibly empty
    """
    tokens = _drop_phrases(tokenize(transcript))
    kept = [
        token for token in tokens
        if token not in _COMMAND_WORDS
        and token not in NUMBER_WORDS
        and token not in FILLER_WORDS
        and not token.isdigit()
    ]
    return " ".join(kept)
