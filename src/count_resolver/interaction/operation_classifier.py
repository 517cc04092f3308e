"""
Deterministic operation classifier for spoken count commands.

Maps verb phrases to an inventory Operation using fixed vocabularies.
"""
import re
from dataclasses import dataclass
from typing import Optional

from ..models import Operation


@dataclass(frozen=True)
class OperationMatch:
    """
    Classified operation.

    explicit is False when no vocabulary word matched and the operation is
    only the fallback default; callers must not treat that as a heard verb.
    """
    operation: Operation
    explicit: bool
    keyword: Optional[str] = None


class OperationClassifier:
    """
    Classifies a transcript into ADD, SUBTRACT, SET or ERASE.

    Vocabularies are checked in priority order and the first match wins,
    so "erase" pre-empts any number language in the same utterance.
    Matching is case-insensitive and on whole words only.
    """

    VOCABULARY = (
        (Operation.ERASE, ("erase", "clear", "delete", "zero")),
        (Operation.ADD, ("add", "plus", "and")),
        (Operation.SUBTRACT, ("subtract", "minus", "take away", "remove")),
        (Operation.SET, ("at", "equals", "is", "set")),
    )

    DEFAULT = Operation.SET

    def __init__(self):
        self._patterns = [
            (operation, self._compile(keywords))
            for operation, keywords in self.VOCABULARY
        ]

    @staticmethod
    def _compile(keywords):
        alternatives = "|".join(
            r"\s+".join(re.escape(word) for word in keyword.split())
            for keyword in keywords
        )
        return re.compile(rf"\b(?:{alternatives})\b", re.IGNORECASE)

    def classify(self, transcript: str) -> OperationMatch:
        """
        Classify the operation named in a transcript.
        
        :param transcript: Raw or normalized transcript
        :return: OperationMatch; explicit=False when falling back to SET
        """
        text = transcript or ""

        for operation, pattern in self._patterns:
            found = pattern.search(text)
            if found:
                keyword = " ".join(found.group(0).lower().split())
                return OperationMatch(operation=operation, explicit=True, keyword=keyword)

        return OperationMatch(operation=self.DEFAULT, explicit=False)


_classifier = OperationClassifier()


def classify_operation(transcript: str) -> Operation:
    """Classify a transcript, returning only the operation (default SET)."""
    return _classifier.classify(transcript).operation
