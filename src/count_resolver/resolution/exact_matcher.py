"""
Exact matching strategy for item resolution.

Fast, deterministic matching of canonical names spoken inside a transcript.
"""
from typing import Sequence

from ..models import MatchTier, contains_words, normalize_text
from .item_matcher import ItemMatch, ItemMatcher


class ExactItemMatcher(ItemMatcher):
    """
    Exact match strategy for item resolution.
    
    A canonical item matches when its name (case-insensitive) equals the
    transcript or occurs inside it as whole words. The longest name wins, so
    "chicken breast" beats "chicken"; other names found in the transcript
    that are not part of the winner are reported as competitors.
    """

    tier = MatchTier.EXACT

    def match(
        self,
        text: str,
        canonical_items: Sequence[str],
    ) -> ItemMatch:
        """
        Find canonical names contained in the text.
        
        :param text: Transcript variant
        :param canonical_items: Authoritative item names
        :return: ItemMatch with the most specific contained name
        """
        query_normalized = normalize_text(text or "")
        if not query_normalized:
            return ItemMatch.no_match(text, self.tier)

        hits = []
        for candidate in canonical_items:
            name = normalize_text(candidate)
            if contains_words(name, query_normalized):
                hits.append((candidate, name))

        if not hits:
            return ItemMatch.no_match(text, self.tier)

        best, best_name = hits[0]
        for candidate, name in hits[1:]:
            if len(name) > len(best_name):
                best, best_name = candidate, name

        competitors = tuple(
            (candidate, 1.0)
            for candidate, name in hits
            if candidate != best and not contains_words(name, best_name)
        )

        return ItemMatch(
            canonical_value=best,
            confidence=1.0,
            tier=self.tier,
            query=text,
            competitors=competitors,
        )
