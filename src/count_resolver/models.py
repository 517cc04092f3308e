"""
Domain types for intent resolution.

The engine consumes a ResolutionRequest and produces exactly one
ResolutionDecision per utterance. Both are plain values; nothing here
holds state between calls.
"""
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence

UNMAPPED = "UNMAPPED"

TOP_CHOICES_SIZE = 3

AliasTable = Dict[str, List[str]]


class Operation(str, Enum):
    """Inventory mutation requested by a spoken command."""
    ADD = "ADD"
    SUBTRACT = "SUBTRACT"
    SET = "SET"
    ERASE = "ERASE"


class DecisionState(str, Enum):
    """Terminal verdict of one resolution."""
    AUTO_COMMIT = "AUTO_COMMIT"
    NEEDS_CONFIRMATION = "NEEDS_CONFIRMATION"
    UNMAPPED = "UNMAPPED"


class MatchTier(str, Enum):
    """Strength of the evidence behind a candidate, strongest first."""
    ALIAS = "alias"
    EXACT = "exact"
    FUZZY = "fuzzy"

    @property
    def rank(self) -> int:
        return _TIER_RANK[self]


_TIER_RANK = {MatchTier.ALIAS: 0, MatchTier.EXACT: 1, MatchTier.FUZZY: 2}


def normalize_text(value: str) -> str:
    """Lowercase, trim and collapse internal whitespace."""
    return " ".join(value.lower().split())


def contains_words(phrase: str, text: str) -> bool:
    """Whether phrase occurs in text as whole words ("tea" is not in "steak")."""
    if not phrase:
        return False
    return re.search(rf"(?<!\w){re.escape(phrase)}(?!\w)", text) is not None


@dataclass(frozen=True)
class ResolutionRequest:
    """
    One utterance to resolve.

    Attributes:
        transcript: Primary speech-to-text hypothesis (may be empty)
        canonical_items: Authoritative item names; must be non-empty
        alternatives: Up to three secondary hypotheses, most confident first
        alias_table: canonical item -> learned spoken aliases
        recent_context: Opaque caller context, carried for logging only
        allow_alias_auto_save: Whether the caller accepts alias recommendations
    """
    transcript: str
    canonical_items: Sequence[str]
    alternatives: Sequence[str] = ()
    alias_table: AliasTable = field(default_factory=dict)
    recent_context: Optional[str] = None
    allow_alias_auto_save: bool = False


@dataclass(frozen=True)
class ResolutionDecision:
    """
    The engine's sole output.

    alias_to_save is only ever set on an AUTO_COMMIT of a real item;
    construction fails otherwise so no code path can leak a recommendation.
    """
    canonical_item: str
    operation: Optional[Operation]
    value: Optional[int]
    decision_state: DecisionState
    top_choices: List[str]
    alias_to_save: Optional[str] = None

    def __post_init__(self):
        if len(self.top_choices) != TOP_CHOICES_SIZE:
            raise ValueError(
                f"top_choices must have exactly {TOP_CHOICES_SIZE} entries, got {len(self.top_choices)}"
            )
        if self.alias_to_save is not None and (
            self.decision_state is not DecisionState.AUTO_COMMIT
            or self.canonical_item == UNMAPPED
        ):
            raise ValueError("alias_to_save is only allowed on an AUTO_COMMIT of a mapped item")
        if self.decision_state is DecisionState.UNMAPPED and self.canonical_item != UNMAPPED:
            raise ValueError("UNMAPPED decisions must not name a canonical item")

    @property
    def is_committable(self) -> bool:
        return self.decision_state is DecisionState.AUTO_COMMIT

    def to_dict(self) -> dict:
        """Convert to the camelCase response shape of the HTTP contract."""
        return {
            "canonicalItem": self.canonical_item,
            "operation": self.operation.value if self.operation else None,
            "value": self.value,
            "decisionState": self.decision_state.value,
            "topChoices": list(self.top_choices),
            "aliasToSave": self.alias_to_save,
        }
