"""
Core abstractions for item matching.

Defines the matcher protocol and the result type shared by the alias,
exact and fuzzy strategies.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from ..models import MatchTier


@dataclass(frozen=True)
class ItemMatch:
    """
    Immutable result of matching one transcript variant.
    
    Attributes:
        canonical_value: The matched canonical item, or None
        confidence: Score between 0.0 and 1.0
        tier: Strategy that produced the match (alias, exact, fuzzy)
        query: The text that was matched
        competitors: Other plausible (item, score) pairs from the same strategy
    """
    canonical_value: Optional[str]
    confidence: float
    tier: Optional[MatchTier]
    query: str
    competitors: Tuple[Tuple[str, float], ...] = ()

    def __post_init__(self):
        """Validate confidence score."""
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"Confidence must be between 0.0 and 1.0, got {self.confidence}")

    @property
    def matched(self) -> bool:
        return self.canonical_value is not None

    @classmethod
    def no_match(cls, query: str, tier: Optional[MatchTier] = None) -> "ItemMatch":
        return cls(canonical_value=None, confidence=0.0, tier=tier, query=query)


class ItemMatcher(ABC):
    """
    Protocol for item matching strategies.
    
    Maps one transcript variant onto the caller's canonical item list.
    A matcher only ever returns members of that list.
    """

    tier: MatchTier

    @abstractmethod
    def match(
        self,
        text: str,
        canonical_items: Sequence[str],
    ) -> ItemMatch:
        """
        Match a transcript variant against canonical items.
        
        :param text: Transcript variant
        :param canonical_items: Authoritative item names
        :return: ItemMatch with canonical value and confidence
        """
        pass
