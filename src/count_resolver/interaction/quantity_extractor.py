"""
Quantity extraction from spoken count commands.

Digits always win over spelled-out words. Supported word forms are single
magnitudes ("twelve", "hundred"), tens followed by a unit ("twenty five")
and "X plus Y" where both operands are numeric. Longer compound phrases
("one hundred and twenty three") are not parsed.
"""
import re
from typing import List, Optional

from ..models import Operation

NUMBER_WORDS = {
    "zero": 0, "one": 1, "two": 2, "three": 3, "four": 4,
    "five": 5, "six": 6, "seven": 7, "eight": 8, "nine": 9,
    "ten": 10, "eleven": 11, "twelve": 12, "thirteen": 13, "fourteen": 14,
    "fifteen": 15, "sixteen": 16, "seventeen": 17, "eighteen": 18, "nineteen": 19,
    "twenty": 20, "thirty": 30, "forty": 40, "fifty": 50,
    "sixty": 60, "seventy": 70, "eighty": 80, "ninety": 90,
    "hundred": 100,
}

_TENS = {20, 30, 40, 50, 60, 70, 80, 90}

_DIGITS = re.compile(r"\d+")
_TOKEN = re.compile(r"[a-z0-9]+")
_OPERAND = r"(\d+|[a-z]+(?:-[a-z]+)?)"
_PLUS = re.compile(rf"\b{_OPERAND}\s+plus\s+{_OPERAND}\b")


def _word_tokens(text: str) -> List[str]:
    return _TOKEN.findall(text.lower())


def _words_value(tokens: List[str]) -> Optional[int]:
    """Value of the first number word, combining tens with a following unit."""
    for index, token in enumerate(tokens):
        if token not in NUMBER_WORDS:
            continue
        value = NUMBER_WORDS[token]
        if value in _TENS and index + 1 < len(tokens):
            unit = NUMBER_WORDS.get(tokens[index + 1])
            if unit is not None and 1 <= unit <= 9:
                return value + unit
        return value
    return None


def _operand_value(operand: str) -> Optional[int]:
    if operand.isdigit():
        return int(operand)
    tokens = operand.split("-")
    value = _words_value(tokens)
    # The operand must be numeric in full, e.g. "five" or "twenty-five".
    if value is None or any(token not in NUMBER_WORDS for token in tokens):
        return None
    return value


def extract_number(transcript: str) -> Optional[int]:
    """
    Extract the quantity spoken in a transcript.
    
    :param transcript: Raw or normalized transcript
    :return: Non-negative integer, or None when no number is present
    """
    text = (transcript or "").lower()

    addition = _PLUS.search(text)
    if addition:
        left = _operand_value(addition.group(1))
        right = _operand_value(addition.group(2))
        if left is not None and right is not None:
            return left + right

    digits = _DIGITS.search(text)
    if digits:
        return int(digits.group(0))

    return _words_value(_word_tokens(text))


def extract_quantity(transcript: str, operation: Optional[Operation]) -> Optional[int]:
    """
    Quantity for an operation; ERASE always zeroes regardless of the words.
    
    :return: Quantity, or None when unresolved
    """
    if operation is Operation.ERASE:
        return 0
    return extract_number(transcript)
