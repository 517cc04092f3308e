"""
Resolution policy for matcher escalation.

Implements the per-variant escalation: alias -> exact -> fuzzy.
"""
from typing import List, Sequence

from .item_matcher import ItemMatch, ItemMatcher


class ResolutionPolicy:
    """
    Policy for escalating through multiple matching strategies.
    
    Tries matchers in order and returns the first match. Each variant
    therefore yields at most one primary candidate, from the strongest
    strategy that found anything.
    """

    def __init__(self, matchers: List[ItemMatcher]):
        """
        Initialize resolution policy.
        
        :param matchers: Matchers to try in order (e.g., [AliasMatcher, ExactItemMatcher, FuzzyItemMatcher])
        """
        if not matchers:
            raise ValueError("At least one matcher must be provided")

        self._matchers = matchers

    def resolve(
        self,
        text: str,
        canonical_items: Sequence[str],
    ) -> ItemMatch:
        """
        Resolve one transcript variant by trying matchers in order.
        
        :param text: Transcript variant
        :param canonical_items: Authoritative item names
        :return: First matching ItemMatch, or a no-match result
        """
        for matcher in self._matchers:
            result = matcher.match(text, canonical_items)
            if result.matched:
                return result

        return ItemMatch.no_match(text)
