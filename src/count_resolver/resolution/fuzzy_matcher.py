"""
Fuzzy matching strategy for item resolution.

Scores the spoken item phrase against every canonical name. Handles
mis-hearings ("rebs" -> "RIBS") and small typos.
"""
import logging
from typing import Callable, Dict, Sequence

from rapidfuzz import fuzz

from ..interaction import extract_item_phrase
from ..models import MatchTier, normalize_text
from .item_matcher import ItemMatch, ItemMatcher
from .similarity import similarity

logger = logging.getLogger(__name__)


def _rapidfuzz(scorer) -> Callable[[str, str], float]:
    # rapidfuzz scores are 0-100
    return lambda query, name: scorer(query, name) / 100.0


def _max_score(query: str, name: str) -> float:
    return max(similarity(query, name), fuzz.ratio(query, name) / 100.0)


SCORERS: Dict[str, Callable[[str, str], float]] = {
    "dice": similarity,
    "ratio": _rapidfuzz(fuzz.ratio),
    "partial_ratio": _rapidfuzz(fuzz.partial_ratio),
    "token_sort_ratio": _rapidfuzz(fuzz.token_sort_ratio),
    "max": _max_score,
}


class FuzzyItemMatcher(ItemMatcher):
    """
    Fuzzy match strategy over the transcript's item phrase.
    
    Scorers:
    - "dice": bigram Dice coefficient
    - "ratio" / "partial_ratio" / "token_sort_ratio": rapidfuzz scorers
    - "max": the higher of Dice and rapidfuzz ratio; Dice alone undervalues
      single-vowel mis-hearings in short words
    
    The best-scoring name is the match; every other name at or above the
    threshold is returned as a competitor. Equal scores keep the earlier
    canonical item.
    """

    tier = MatchTier.FUZZY

    def __init__(
        self,
        threshold: float = 0.60,
        scorer: str = "max",
    ):
        """
        Initialize fuzzy matcher.
        
        :param threshold: Minimum score for a name to be plausible (0.0-1.0)
        :param scorer: Scorer name, see SCORERS
        """
        if not 0.0 <= threshold <= 1.0:
            raise ValueError(f"Threshold must be between 0.0 and 1.0, got {threshold}")

        if scorer not in SCORERS:
            raise ValueError(
                f"Unknown scorer '{scorer}'. "
                f"Must be one of: {list(SCORERS.keys())}"
            )

        self.threshold = threshold
        self.scorer = scorer
        self._score = SCORERS[scorer]

    def match(
        self,
        text: str,
        canonical_items: Sequence[str],
    ) -> ItemMatch:
        """
        Find the best fuzzy match for the item phrase of text.
        
        :param text: Transcript variant
        :param canonical_items: Authoritative item names
        :return: ItemMatch with best match if above threshold
        """
        phrase = extract_item_phrase(text or "")
        if len(phrase) < 2 or not canonical_items:
            return ItemMatch.no_match(text, self.tier)

        scored = []
        for candidate in canonical_items:
            name = normalize_text(candidate)
            if not name:
                continue
            scored.append((candidate, min(1.0, max(0.0, self._score(phrase, name)))))

        best, best_score = None, 0.0
        for candidate, score in scored:
            if score > best_score:
                best, best_score = candidate, score

        if best is None or best_score < self.threshold:
            logger.debug(
                f"[Fuzzy] '{phrase}' below threshold (best: {best!r} at {best_score:.2f})"
            )
            return ItemMatch.no_match(text, self.tier)

        competitors = sorted(
            (
                (candidate, score)
                for candidate, score in scored
                if candidate != best and score >= self.threshold
            ),
            key=lambda pair: -pair[1],
        )

        return ItemMatch(
            canonical_value=best,
            confidence=best_score,
            tier=self.tier,
            query=text,
            competitors=tuple(competitors),
        )
