"""
Candidate set construction across transcript variants.

Runs the resolution policy over the primary transcript and each
alternative, then merges the results into one ranked, de-duplicated set.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..models import TOP_CHOICES_SIZE, UNMAPPED, MatchTier
from .resolution_policy import ResolutionPolicy

logger = logging.getLogger(__name__)


@dataclass
class Candidate:
    """A canonical item implied by some transcript variant."""
    item: str
    tier: MatchTier
    confidence: float
    variant_index: int
    order: int


@dataclass
class CandidateSet:
    """
    De-duplicated candidates, ranked by tier (alias > exact > fuzzy) then by
    first appearance. Earlier variants appear first, so ties at equal
    strength go to the lower variant index.
    """
    candidates: List[Candidate] = field(default_factory=list)

    def add(self, item: str, tier: MatchTier, confidence: float, variant_index: int) -> None:
        for existing in self.candidates:
            if existing.item == item:
                # Same item seen again: keep first position, keep strongest evidence
                if tier.rank < existing.tier.rank or (
                    tier is existing.tier and confidence > existing.confidence
                ):
                    existing.tier = tier
                    existing.confidence = confidence
                return
        self.candidates.append(
            Candidate(
                item=item,
                tier=tier,
                confidence=confidence,
                variant_index=variant_index,
                order=len(self.candidates),
            )
        )

    def ranked(self) -> List[Candidate]:
        return sorted(self.candidates, key=lambda c: (c.tier.rank, c.order))

    @property
    def is_empty(self) -> bool:
        return not self.candidates

    @property
    def is_ambiguous(self) -> bool:
        return len(self.candidates) > 1

    @property
    def best(self) -> Optional[Candidate]:
        ranked = self.ranked()
        return ranked[0] if ranked else None

    def top_choices(self, size: int = TOP_CHOICES_SIZE) -> List[str]:
        """Ranked item names padded with UNMAPPED to exactly size entries."""
        choices = [candidate.item for candidate in self.ranked()][:size]
        return choices + [UNMAPPED] * (size - len(choices))


class CandidateBuilder:
    """
    Builds the candidate set for one utterance.
    
    Usage:
        builder = CandidateBuilder(policy)
        candidates = builder.build(["rebs at twelve", "ribs at twelve"], items)
    """

    def __init__(self, policy: ResolutionPolicy):
        self._policy = policy

    def build(
        self,
        variants: Sequence[str],
        canonical_items: Sequence[str],
    ) -> CandidateSet:
        """
        Resolve every variant and merge the results.
        
        :param variants: Primary transcript first, then alternatives by confidence
        :param canonical_items: Authoritative item names
        :return: CandidateSet restricted to canonical items
        """
        allowed = set(canonical_items)
        candidates = CandidateSet()

        for index, text in enumerate(variants):
            if not isinstance(text, str) or not text.strip():
                continue

            result = self._policy.resolve(text, canonical_items)
            if not result.matched:
                continue

            logger.debug(
                f"[Candidates] variant {index} '{text}' -> {result.canonical_value} "
                f"({result.tier.value}, {result.confidence:.2f})"
            )

            for item, confidence in ((result.canonical_value, result.confidence),) + result.competitors:
                if item in allowed:
                    candidates.add(item, result.tier, confidence, index)

        return candidates
