"""
Item resolution layer.

Maps noisy transcript variants onto the caller's canonical item list.

Key components:
- similarity: bigram Dice coefficient
- Matchers: Alias, Exact and Fuzzy strategies
- ResolutionPolicy: per-variant escalation alias -> exact -> fuzzy
- CandidateBuilder: merges variants into one ranked candidate set
"""
from .similarity import similarity, bigrams
from .item_matcher import ItemMatcher, ItemMatch
from .alias_matcher import (
    AliasMatcher,
    resolve_alias,
    iter_alias_hits,
    has_alias,
    learn_alias,
)
from .exact_matcher import ExactItemMatcher
from .fuzzy_matcher import FuzzyItemMatcher, SCORERS
from .resolution_policy import ResolutionPolicy
from .candidate_builder import Candidate, CandidateSet, CandidateBuilder

__all__ = [
    "similarity",
    "bigrams",
    "ItemMatcher",
    "ItemMatch",
    "AliasMatcher",
    "resolve_alias",
    "iter_alias_hits",
    "has_alias",
    "learn_alias",
    "ExactItemMatcher",
    "FuzzyItemMatcher",
    "SCORERS",
    "ResolutionPolicy",
    "Candidate",
    "CandidateSet",
    "CandidateBuilder",
]
