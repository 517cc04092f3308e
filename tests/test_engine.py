"""
Tests for the resolution engine.

Covers the documented scenarios, decision-state escalation, alias learning
and the invariants every decision must satisfy.
"""
import pytest
from count_resolver import (
    UNMAPPED,
    DecisionState,
    InvalidRequestError,
    Operation,
    ResolutionDecision,
    ResolutionEngine,
    ResolutionRequest,
    ResolverConfig,
    learn_alias,
)


@pytest.fixture
def engine():
    """Engine with default thresholds."""
    return ResolutionEngine(ResolverConfig())


def resolve(engine, transcript, items, aliases=None, alternatives=(), allow=False):
    return engine.resolve(ResolutionRequest(
        transcript=transcript,
        canonical_items=items,
        alternatives=alternatives,
        alias_table=aliases or {},
        allow_alias_auto_save=allow,
    ))


class TestScenarios:
    """End-to-end resolution scenarios."""

    def test_alias_add_auto_commits(self, engine):
        """Test 'add 5 shrimp' via alias resolves and commits."""
        decision = resolve(
            engine, "add 5 shrimp", ["SHRIMP SKEWER"], {"SHRIMP SKEWER": ["shrimp"]}
        )

        assert decision.canonical_item == "SHRIMP SKEWER"
        assert decision.operation == Operation.ADD
        assert decision.value == 5
        assert decision.decision_state == DecisionState.AUTO_COMMIT
        assert decision.top_choices == ["SHRIMP SKEWER", UNMAPPED, UNMAPPED]

    def test_two_plausible_fuzzy_items_need_confirmation(self, engine):
        """Test 'rebs at twelve' is ambiguous between RIBS and CRABS."""
        decision = resolve(engine, "rebs at twelve", ["RIBS", "CRABS"])

        assert decision.decision_state == DecisionState.NEEDS_CONFIRMATION
        assert decision.canonical_item == "RIBS"
        assert decision.top_choices == ["RIBS", "CRABS", UNMAPPED]
        assert decision.operation == Operation.SET
        assert decision.value == 12
        assert decision.alias_to_save is None

    def test_unknown_item_is_unmapped(self, engine):
        """Test 'banana seventeen' maps to nothing."""
        decision = resolve(engine, "banana seventeen", ["CHICKEN", "BEEF"])

        assert decision.canonical_item == UNMAPPED
        assert decision.decision_state == DecisionState.UNMAPPED
        assert decision.operation is None
        assert decision.value is None
        assert decision.top_choices == [UNMAPPED] * 3

    def test_item_name_inside_another_word_is_not_heard(self, engine):
        """Test that 'tea' inside 'steamed' does not resolve TEA."""
        decision = resolve(engine, "add 5 steamed broccoli", ["TEA"])

        assert decision.canonical_item == UNMAPPED
        assert decision.decision_state == DecisionState.UNMAPPED

    def test_alias_inside_another_word_is_not_heard(self, engine):
        """Test that alias hits need whole words."""
        decision = resolve(engine, "add 2 caribou", ["RIBS", "CARIBOU"], {"RIBS": ["rib"]})

        assert decision.canonical_item == "CARIBOU"
        assert decision.decision_state == DecisionState.AUTO_COMMIT

    def test_erase_zeroes_and_commits(self, engine):
        """Test 'erase chicken' commits ERASE with value 0."""
        decision = resolve(engine, "erase chicken", ["CHICKEN"])

        assert decision.canonical_item == "CHICKEN"
        assert decision.operation == Operation.ERASE
        assert decision.value == 0
        assert decision.decision_state == DecisionState.AUTO_COMMIT

    def test_erase_ignores_number_language(self, engine):
        """Test that ERASE stays 0 even when a number is spoken."""
        decision = resolve(engine, "erase 12 chicken", ["CHICKEN"])

        assert decision.value == 0
        assert decision.decision_state == DecisionState.AUTO_COMMIT

    def test_bare_item_needs_confirmation(self, engine):
        """Test that 'chicken' alone resolves the item but not the command."""
        decision = resolve(engine, "chicken", ["CHICKEN"])

        assert decision.canonical_item == "CHICKEN"
        assert decision.operation == Operation.SET
        assert decision.value is None
        assert decision.decision_state == DecisionState.NEEDS_CONFIRMATION

    def test_resubmitting_with_alias_present_learns_nothing(self, engine):
        """Test no duplicate alias learning on a repeated command."""
        aliases = {"SHRIMP SKEWER": ["shrimp"]}

        first = resolve(engine, "add 5 shrimp", ["SHRIMP SKEWER"], aliases, allow=True)
        assert first.alias_to_save == "add 5 shrimp"

        aliases = learn_alias(aliases, first.canonical_item, first.alias_to_save)
        second = resolve(engine, "add 5 shrimp", ["SHRIMP SKEWER"], aliases, allow=True)

        assert second.decision_state == DecisionState.AUTO_COMMIT
        assert second.alias_to_save is None


class TestEscalation:
    """Tests for decision-state escalation."""

    def test_number_without_verb_needs_confirmation(self, engine):
        """Test that the SET default never auto-commits."""
        decision = resolve(engine, "chicken 12", ["CHICKEN"])

        assert decision.operation == Operation.SET
        assert decision.value == 12
        assert decision.decision_state == DecisionState.NEEDS_CONFIRMATION

    def test_verb_without_number_needs_confirmation(self, engine):
        """Test that a missing quantity is never guessed."""
        decision = resolve(engine, "add chicken", ["CHICKEN"])

        assert decision.operation == Operation.ADD
        assert decision.value is None
        assert decision.decision_state == DecisionState.NEEDS_CONFIRMATION

    def test_explicit_set_commits(self, engine):
        """Test 'set chicken at 4' commits a SET."""
        decision = resolve(engine, "set chicken at 4", ["CHICKEN"])

        assert decision.operation == Operation.SET
        assert decision.value == 4
        assert decision.decision_state == DecisionState.AUTO_COMMIT

    def test_confident_fuzzy_match_commits(self, engine):
        """Test that a close mis-hearing commits."""
        decision = resolve(engine, "add 5 chiken", ["CHICKEN", "BEEF"])

        assert decision.canonical_item == "CHICKEN"
        assert decision.decision_state == DecisionState.AUTO_COMMIT

    def test_lone_weak_fuzzy_match_commits(self, engine):
        """Test that one plausible item with a verb and a number commits."""
        decision = resolve(engine, "add 5 rubs", ["RIBS"])

        assert decision.canonical_item == "RIBS"
        assert decision.operation == Operation.ADD
        assert decision.value == 5
        assert decision.decision_state == DecisionState.AUTO_COMMIT

    def test_plus_phrasing_commits(self, engine):
        """Test that 'rebs plus five' is an explicit ADD of 5."""
        decision = resolve(engine, "rebs plus five", ["RIBS"])

        assert decision.operation == Operation.ADD
        assert decision.value == 5
        assert decision.decision_state == DecisionState.AUTO_COMMIT

    def test_fuzzy_commit_threshold_is_opt_in(self):
        """Test that a configured commit threshold makes weak fuzzy matches ask."""
        engine = ResolutionEngine(ResolverConfig(fuzzy_commit_threshold=0.85))

        weak = resolve(engine, "add 5 rubs", ["RIBS"])
        strong = resolve(engine, "add 5 chiken", ["CHICKEN", "BEEF"])

        assert weak.canonical_item == "RIBS"
        assert weak.decision_state == DecisionState.NEEDS_CONFIRMATION
        assert strong.decision_state == DecisionState.AUTO_COMMIT

    def test_alignment_threshold_does_not_gate_commits(self):
        """Test that fuzzy_accept_threshold only applies to sheet alignment."""
        engine = ResolutionEngine(ResolverConfig(fuzzy_accept_threshold=0.99))

        decision = resolve(engine, "add 5 rubs", ["RIBS"])

        assert decision.decision_state == DecisionState.AUTO_COMMIT

    def test_two_items_in_one_command_need_confirmation(self, engine):
        """Test that naming two items is ambiguous."""
        decision = resolve(engine, "add 2 ribs and crabs", ["RIBS", "CRABS"])

        assert decision.decision_state == DecisionState.NEEDS_CONFIRMATION
        assert set(decision.top_choices[:2]) == {"RIBS", "CRABS"}


class TestAlternatives:
    """Tests for alternatives-assisted resolution."""

    def test_alternative_confirms_fuzzy_primary(self):
        """Test that an exact alternative upgrades a weak primary match."""
        engine = ResolutionEngine(ResolverConfig(fuzzy_commit_threshold=0.85))

        decision = resolve(engine, "add 5 rips", ["RIBS", "CHICKEN"], alternatives=["add 5 ribs"])

        assert decision.canonical_item == "RIBS"
        assert decision.decision_state == DecisionState.AUTO_COMMIT

    def test_without_alternative_the_same_primary_asks(self):
        """Test the contrast case with no alternatives."""
        engine = ResolutionEngine(ResolverConfig(fuzzy_commit_threshold=0.85))

        decision = resolve(engine, "add 5 rips", ["RIBS", "CHICKEN"])

        assert decision.decision_state == DecisionState.NEEDS_CONFIRMATION

    def test_alternative_alias_resolves(self, engine):
        """Test that an alias heard only in an alternative resolves the item."""
        decision = resolve(
            engine,
            "add 2 srimp",
            ["SHRIMP SKEWER"],
            {"SHRIMP SKEWER": ["shrimp"]},
            alternatives=["add 2 shrimp"],
        )

        assert decision.canonical_item == "SHRIMP SKEWER"
        assert decision.decision_state == DecisionState.AUTO_COMMIT

    def test_conflicting_alternative_creates_ambiguity(self, engine):
        """Test that alternatives naming a different item block auto-commit."""
        decision = resolve(engine, "add 3 beef", ["BEEF", "CHICKEN"], alternatives=["add 3 chicken"])

        assert decision.decision_state == DecisionState.NEEDS_CONFIRMATION
        assert decision.top_choices == ["BEEF", "CHICKEN", UNMAPPED]

    def test_primary_alias_short_circuits_alternatives(self, engine):
        """Test that a primary alias hit ignores alternatives for the item."""
        decision = resolve(
            engine,
            "add 3 bones",
            ["RIBS", "CHICKEN"],
            {"RIBS": ["bones"]},
            alternatives=["add 3 chicken"],
        )

        assert decision.canonical_item == "RIBS"
        assert decision.decision_state == DecisionState.AUTO_COMMIT

    def test_only_first_three_alternatives_used(self, engine):
        """Test that extra alternatives are ignored."""
        decision = resolve(
            engine,
            "add 1 zzzz",
            ["RIBS", "CHICKEN"],
            alternatives=["qqqq", "wwww", "xxxx", "add 1 chicken"],
        )

        assert decision.decision_state == DecisionState.UNMAPPED


class TestAliasLearning:
    """Tests for alias recommendations."""

    def test_new_transcript_recommended(self, engine):
        """Test that the normalized transcript is recommended on auto-commit."""
        decision = resolve(
            engine, "Add 4  Jumbo Shrimp", ["SHRIMP SKEWER"], {"SHRIMP SKEWER": ["shrimp"]}, allow=True
        )

        assert decision.decision_state == DecisionState.AUTO_COMMIT
        assert decision.alias_to_save == "add 4 jumbo shrimp"

    def test_fuzzy_commit_recommends_heard_transcript(self, engine):
        """Test that a confident fuzzy match learns what was heard."""
        decision = resolve(engine, "add 5 chiken", ["CHICKEN", "BEEF"], allow=True)

        assert decision.alias_to_save == "add 5 chiken"

    def test_not_recommended_without_permission(self, engine):
        """Test that auto-save must be allowed by the caller."""
        decision = resolve(
            engine, "add 4 jumbo shrimp", ["SHRIMP SKEWER"], {"SHRIMP SKEWER": ["shrimp"]}
        )

        assert decision.alias_to_save is None

    def test_not_recommended_when_confirmation_needed(self, engine):
        """Test that only auto-commits learn."""
        decision = resolve(engine, "rebs at twelve", ["RIBS", "CRABS"], allow=True)

        assert decision.alias_to_save is None

    def test_alias_of_another_key_still_recommended(self, engine):
        """Test that only the resolved item's own aliases suppress learning."""
        aliases = {"OLD CHICKEN": ["add 5 chiken"]}

        decision = resolve(engine, "add 5 chiken", ["CHICKEN"], aliases, allow=True)

        assert decision.canonical_item == "CHICKEN"
        assert decision.alias_to_save == "add 5 chiken"


class TestItemPhraseAliasLearning:
    """Tests for alias_from_item_phrase."""

    @pytest.fixture
    def engine(self):
        return ResolutionEngine(ResolverConfig(alias_from_item_phrase=True))

    def test_item_words_recommended(self, engine):
        """Test that verbs and numbers are stripped from the recommendation."""
        decision = resolve(
            engine, "add 4 jumbo shrimp", ["SHRIMP SKEWER"], {"SHRIMP SKEWER": ["shrimp"]}, allow=True
        )

        assert decision.alias_to_save == "jumbo shrimp"

    def test_canonical_name_not_recommended(self, engine):
        """Test that an item is never aliased to itself."""
        decision = resolve(engine, "add 2 chicken breast please", ["CHICKEN BREAST"], allow=True)

        assert decision.decision_state == DecisionState.AUTO_COMMIT
        assert decision.alias_to_save is None

    def test_existing_alias_not_recommended(self, engine):
        """Test that an alias already stored for the item is not repeated."""
        aliases = {"CHICKEN": ["chiken"]}

        decision = resolve(engine, "add 5 chiken", ["CHICKEN"], aliases, allow=True)

        assert decision.decision_state == DecisionState.AUTO_COMMIT
        assert decision.alias_to_save is None


class TestPreconditions:
    """Tests for caller misuse."""

    def test_empty_canonical_items_rejected(self, engine):
        """Test that an empty canonical set fails fast."""
        with pytest.raises(InvalidRequestError):
            resolve(engine, "add 5 ribs", [])

    def test_blank_canonical_items_rejected(self, engine):
        """Test that only blank names count as empty."""
        with pytest.raises(InvalidRequestError):
            resolve(engine, "add 5 ribs", ["  ", ""])

    def test_precondition_error_is_value_error(self, engine):
        """Test that callers can catch ValueError."""
        with pytest.raises(ValueError):
            resolve(engine, "add 5 ribs", [])

    @pytest.mark.parametrize("request_kwargs", [
        {"transcript": 5, "canonical_items": ["RIBS"]},
        {"transcript": "ribs", "canonical_items": "RIBS"},
        {"transcript": "ribs", "canonical_items": ["RIBS", 3]},
        {"transcript": "ribs", "canonical_items": ["RIBS"], "alternatives": "ribs"},
        {"transcript": "ribs", "canonical_items": ["RIBS"], "alias_table": ["ribs"]},
    ])
    def test_malformed_requests_rejected(self, engine, request_kwargs):
        """Test that malformed request shapes are rejected."""
        with pytest.raises(InvalidRequestError):
            engine.resolve(ResolutionRequest(**request_kwargs))

    def test_over_long_transcript_rejected(self, engine):
        """Test that transcripts beyond max_transcript_length fail fast."""
        with pytest.raises(InvalidRequestError):
            resolve(engine, "add 5 ribs " * 1000, ["RIBS"])

    def test_over_long_alternative_rejected(self, engine):
        """Test that alternatives are held to the same length limit."""
        with pytest.raises(InvalidRequestError):
            resolve(engine, "add 5 ribs", ["RIBS"], alternatives=["ribs " * 200])

    def test_length_limit_is_configurable(self):
        """Test that a transcript exactly at the limit is accepted."""
        engine = ResolutionEngine(ResolverConfig(max_transcript_length=10))

        decision = resolve(engine, "add 5 ribs", ["RIBS"])

        assert decision.decision_state == DecisionState.AUTO_COMMIT
        with pytest.raises(InvalidRequestError):
            resolve(engine, "add 15 ribs", ["RIBS"])

    def test_empty_and_gibberish_transcripts_do_not_raise(self, engine):
        """Test that bad transcripts route to UNMAPPED."""
        for transcript in ["", "   ", "!!!", "zzzz qqqq"]:
            decision = resolve(engine, transcript, ["RIBS"])
            assert decision.decision_state == DecisionState.UNMAPPED

    def test_malformed_alias_entries_do_not_raise(self, engine):
        """Test that non-string alias entries are simply not matches."""
        aliases = {"RIBS": [None, 4, ""], "CHICKEN": "chicken", 7: ["ribs"]}

        decision = resolve(engine, "add 2 ribs", ["RIBS", "CHICKEN"], aliases)

        assert decision.canonical_item == "RIBS"
        assert decision.decision_state == DecisionState.AUTO_COMMIT


INVARIANT_CASES = [
    ("add 5 shrimp", ["SHRIMP SKEWER"], {"SHRIMP SKEWER": ["shrimp"]}, []),
    ("rebs at twelve", ["RIBS", "CRABS"], {}, []),
    ("banana seventeen", ["CHICKEN", "BEEF"], {}, []),
    ("erase chicken", ["CHICKEN"], {}, []),
    ("chicken", ["CHICKEN"], {}, []),
    ("add 4 jumbo shrimp", ["SHRIMP SKEWER", "RIBS"], {"SHRIMP SKEWER": ["shrimp"]}, []),
    ("add 3 beef", ["BEEF", "CHICKEN", "RIBS"], {}, ["add 3 chicken", "add 3 ribs", "add 3 crabs"]),
    ("add 2 ribs crabs beef chicken", ["RIBS", "CRABS", "BEEF", "CHICKEN"], {}, []),
    ("", ["RIBS"], {}, ["ribs"]),
    ("take away 2 salmon", ["SALMON FILLET", "SALMON"], {}, []),
]


class TestInvariants:
    """Properties that hold for every decision."""

    @pytest.mark.parametrize("transcript,items,aliases,alternatives", INVARIANT_CASES)
    @pytest.mark.parametrize("allow", [True, False])
    def test_decision_invariants(self, engine, transcript, items, aliases, alternatives, allow):
        """Test membership, top-choice size and the alias postcondition."""
        decision = resolve(engine, transcript, items, aliases, alternatives, allow)
        allowed = set(items) | {UNMAPPED}

        assert decision.canonical_item in allowed
        assert len(decision.top_choices) == 3
        assert all(choice in allowed for choice in decision.top_choices)
        if decision.decision_state != DecisionState.AUTO_COMMIT:
            assert decision.alias_to_save is None
        if not allow:
            assert decision.alias_to_save is None

    def test_engine_does_not_mutate_inputs(self, engine):
        """Test that requests are read-only to the engine."""
        items = ["SHRIMP SKEWER"]
        aliases = {"SHRIMP SKEWER": ["shrimp"]}

        resolve(engine, "add 4 jumbo shrimp", items, aliases, allow=True)

        assert items == ["SHRIMP SKEWER"]
        assert aliases == {"SHRIMP SKEWER": ["shrimp"]}


class TestResolutionDecision:
    """Tests for ResolutionDecision."""

    def test_alias_requires_auto_commit(self):
        """Test that the alias postcondition is enforced on construction."""
        with pytest.raises(ValueError):
            ResolutionDecision(
                canonical_item="RIBS",
                operation=Operation.SET,
                value=None,
                decision_state=DecisionState.NEEDS_CONFIRMATION,
                top_choices=["RIBS", UNMAPPED, UNMAPPED],
                alias_to_save="rebs",
            )

    def test_top_choices_size_enforced(self):
        """Test that top choices must have three entries."""
        with pytest.raises(ValueError):
            ResolutionDecision(
                canonical_item=UNMAPPED,
                operation=None,
                value=None,
                decision_state=DecisionState.UNMAPPED,
                top_choices=[UNMAPPED],
            )

    def test_to_dict_shape(self, engine):
        """Test the camelCase response shape."""
        decision = resolve(engine, "add 5 shrimp", ["SHRIMP SKEWER"], {"SHRIMP SKEWER": ["shrimp"]})

        assert decision.to_dict() == {
            "canonicalItem": "SHRIMP SKEWER",
            "operation": "ADD",
            "value": 5,
            "decisionState": "AUTO_COMMIT",
            "topChoices": ["SHRIMP SKEWER", "UNMAPPED", "UNMAPPED"],
            "aliasToSave": None,
        }
