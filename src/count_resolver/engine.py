"""
Constrained intent-resolution engine.

Turns one spoken command into a ResolutionDecision. The engine is stateless:
the canonical item list and alias table arrive with every request and
nothing is mutated, so a single instance is safe to share across threads.

Resolution order:
1. Alias match on the primary transcript (short-circuits item resolution)
2. Alias / exact / fuzzy match per variant: primary first, then alternatives
3. Arbitration: zero candidates -> UNMAPPED, several -> NEEDS_CONFIRMATION
4. Operation and quantity parsed from the primary transcript
5. Escalation to NEEDS_CONFIRMATION on an implicit verb or a missing quantity
6. Alias recommendation, only for auto-committed items
"""
import logging
from typing import List, Optional, Sequence

from .config import ResolverConfig
from .exceptions import InvalidRequestError
from .interaction import OperationClassifier, extract_item_phrase, extract_quantity
from .models import (
    TOP_CHOICES_SIZE,
    UNMAPPED,
    AliasTable,
    DecisionState,
    MatchTier,
    ResolutionDecision,
    ResolutionRequest,
    normalize_text,
)
from .resolution import (
    AliasMatcher,
    CandidateBuilder,
    CandidateSet,
    ExactItemMatcher,
    FuzzyItemMatcher,
    ResolutionPolicy,
    has_alias,
)

logger = logging.getLogger(__name__)


class ResolutionEngine:
    """
    Resolves transcripts into inventory mutations without inventing items
    or numbers.
    
    Usage:
        engine = ResolutionEngine(ResolverConfig())
        decision = engine.resolve(ResolutionRequest(
            transcript="add 5 shrimp",
            canonical_items=["SHRIMP SKEWER"],
            alias_table={"SHRIMP SKEWER": ["shrimp"]},
        ))
        if decision.is_committable:
            ledger.apply_decision(decision)
    """

    def __init__(self, config: Optional[ResolverConfig] = None):
        """
        Initialize the engine.
        
        :param config: ResolverConfig with thresholds; defaults when omitted
        """
        self._config = config or ResolverConfig()
        self._classifier = OperationClassifier()
        self._exact = ExactItemMatcher()
        self._fuzzy = FuzzyItemMatcher(
            threshold=self._config.candidate_floor,
            scorer=self._config.fuzzy_scorer,
        )

    @property
    def config(self) -> ResolverConfig:
        return self._config

    def resolve(self, request: ResolutionRequest) -> ResolutionDecision:
        """
        Resolve one utterance.
        
        :param request: ResolutionRequest for the utterance
        :return: ResolutionDecision; ambiguity is reported, never raised
        :raises InvalidRequestError: If the request violates its preconditions
        """
        canonical_items = self._validate(request)
        transcript = request.transcript or ""
        alias_table = request.alias_table or {}

        if request.recent_context:
            logger.debug(f"[Resolve] recent context: {request.recent_context!r}")

        candidates = self._build_candidates(
            transcript,
            self._alternatives(request),
            canonical_items,
            alias_table,
        )

        if candidates.is_empty:
            logger.info(f"[Resolve] '{transcript}' -> UNMAPPED (no candidates)")
            return ResolutionDecision(
                canonical_item=UNMAPPED,
                operation=None,
                value=None,
                decision_state=DecisionState.UNMAPPED,
                top_choices=[UNMAPPED] * TOP_CHOICES_SIZE,
            )

        best = candidates.best
        operation_match = self._classifier.classify(transcript)
        operation = operation_match.operation
        value = extract_quantity(transcript, operation)

        reasons = self._confirmation_reasons(candidates, operation_match.explicit, value)
        state = DecisionState.NEEDS_CONFIRMATION if reasons else DecisionState.AUTO_COMMIT

        alias_to_save = None
        if state is DecisionState.AUTO_COMMIT and request.allow_alias_auto_save:
            alias_to_save = self._alias_to_learn(transcript, best.item, alias_table)

        # Only an auto-committed, mapped item may carry an alias recommendation
        if state is not DecisionState.AUTO_COMMIT or best.item == UNMAPPED:
            alias_to_save = None

        if reasons:
            logger.info(
                f"[Resolve] '{transcript}' -> NEEDS_CONFIRMATION "
                f"({', '.join(reasons)}) best={best.item} op={operation.value} value={value}"
            )
        else:
            logger.info(
                f"[Resolve] '{transcript}' -> AUTO_COMMIT "
                f"{operation.value} {value} {best.item} ({best.tier.value})"
            )

        return ResolutionDecision(
            canonical_item=best.item,
            operation=operation,
            value=value,
            decision_state=state,
            top_choices=candidates.top_choices(),
            alias_to_save=alias_to_save,
        )

    def _validate(self, request: ResolutionRequest) -> List[str]:
        """Check preconditions and return the de-duplicated canonical items."""
        if not isinstance(request, ResolutionRequest):
            raise InvalidRequestError("request must be a ResolutionRequest")

        if request.transcript is not None and not isinstance(request.transcript, str):
            raise InvalidRequestError("transcript must be a string")

        limit = self._config.max_transcript_length
        if request.transcript is not None and len(request.transcript) > limit:
            logger.warning(f"[Resolve] Rejected transcript of {len(request.transcript)} characters")
            raise InvalidRequestError(f"transcript exceeds maximum length of {limit} characters")

        if request.alternatives is not None and (
            isinstance(request.alternatives, str)
            or not isinstance(request.alternatives, (list, tuple))
        ):
            raise InvalidRequestError("alternatives must be a list of strings")

        for alternative in request.alternatives or ():
            if isinstance(alternative, str) and len(alternative) > limit:
                raise InvalidRequestError(f"alternative exceeds maximum length of {limit} characters")

        if request.alias_table is not None and not isinstance(request.alias_table, dict):
            raise InvalidRequestError("alias_table must be a mapping of item -> aliases")

        items = request.canonical_items
        if isinstance(items, str) or not isinstance(items, (list, tuple, set, frozenset)):
            raise InvalidRequestError("canonical_items must be a list of item names")

        seen = set()
        canonical_items = []
        for item in items:
            if not isinstance(item, str):
                raise InvalidRequestError(f"canonical item must be a string, got {type(item).__name__}")
            key = normalize_text(item)
            if key and key not in seen:
                seen.add(key)
                canonical_items.append(item)

        if not canonical_items:
            logger.warning("[Resolve] Rejected request with empty canonical item set")
            raise InvalidRequestError("canonical_items must contain at least one item")

        return canonical_items

    def _alternatives(self, request: ResolutionRequest) -> List[str]:
        alternatives = [
            alt for alt in (request.alternatives or ())
            if isinstance(alt, str)
        ]
        limit = self._config.max_alternatives
        if len(alternatives) > limit:
            logger.debug(f"[Resolve] Using first {limit} of {len(alternatives)} alternatives")
        return alternatives[:limit]

    def _build_candidates(
        self,
        transcript: str,
        alternatives: Sequence[str],
        canonical_items: Sequence[str],
        alias_table: AliasTable,
    ) -> CandidateSet:
        alias_matcher = AliasMatcher(alias_table)

        primary_alias = alias_matcher.match(transcript, canonical_items)
        if primary_alias.matched:
            candidates = CandidateSet()
            candidates.add(primary_alias.canonical_value, MatchTier.ALIAS, 1.0, 0)
            return candidates

        policy = ResolutionPolicy([alias_matcher, self._exact, self._fuzzy])
        builder = CandidateBuilder(policy)
        return builder.build([transcript, *alternatives], canonical_items)

    def _confirmation_reasons(
        self,
        candidates: CandidateSet,
        explicit_operation: bool,
        value: Optional[int],
    ) -> List[str]:
        reasons = []

        if candidates.is_ambiguous:
            reasons.append(f"{len(candidates.candidates)} candidate items")

        best = candidates.best
        commit_threshold = self._config.fuzzy_commit_threshold
        if (
            commit_threshold is not None
            and not candidates.is_ambiguous
            and best.tier is MatchTier.FUZZY
            and best.confidence < commit_threshold
        ):
            reasons.append(f"fuzzy match at {best.confidence:.2f}")

        if not explicit_operation:
            reasons.append("no explicit operation")

        if value is None:
            reasons.append("no quantity")

        return reasons

    def _alias_to_learn(
        self,
        transcript: str,
        canonical_item: str,
        alias_table: AliasTable,
    ) -> Optional[str]:
        """
        Spoken form worth remembering as a new alias, or None.

        The normalized primary transcript is recommended unless it is the
        canonical name itself or already an alias of that item. With
        alias_from_item_phrase set, only the item words are recommended.
        """
        if self._config.alias_from_item_phrase:
            phrase = extract_item_phrase(transcript)
        else:
            phrase = normalize_text(transcript)

        if not phrase or phrase == normalize_text(canonical_item):
            return None

        if has_alias(alias_table, canonical_item, phrase):
            return None

        return phrase
