# DEPENDENCIES
import pytest

from config.risk_rules import Severity
from config.risk_rules import Confidence
from services.data_models import MatchResult
from services.similarity_scorer import SimilarityScorer


@pytest.fixture
def scorer():
    return SimilarityScorer()


class TestScore:
    def test_exact_example_scores_fifteen(self, scorer, make_rule):
        rule = make_rule("late-fees", text = "x", violation_examples = ["daily late fee"])

        assert scorer._violation_example_score("a daily late fee applies", rule) == 15

    def test_partial_example_needs_most_long_words(self, scorer, make_rule):
        rule = make_rule("entry-notice", text = "x", violation_examples = ["enter at any time"])

        assert scorer._violation_example_score("landlord can enter the unit any time", rule) == 8
        assert scorer._violation_example_score("landlord can enter the unit", rule) == 0

    def test_example_of_short_words_never_partial(self, scorer, make_rule):
        rule = make_rule("entry-notice", text = "x", violation_examples = ["at any"])

        assert scorer._violation_example_score("nothing here", rule) == 0

    def test_ambiguous_keyword_needs_context(self, scorer, make_rule):
        rule = make_rule("security-deposit", text = "x", keywords = ["fee", "refund"])

        assert scorer.score("The monthly fee is due on the first.", rule) == 0
        assert scorer._keyword_score("the deposit fee is due", rule) == 2

    def test_phrase_keywords_outweigh_words(self, scorer, make_rule):
        rule = make_rule("late-fees", text = "x", keywords = ["late fee", "grace"])

        assert scorer._keyword_score("a late fee applies", rule) == 4
        assert scorer._keyword_score("no grace allowed", rule) == 2

    def test_density_bonus(self, scorer, make_rule):
        rule = make_rule("late-fees", text = "x", keywords = ["late", "fee", "daily", "grace"])

        assert scorer._density_bonus("late fee", rule) == 0
        assert scorer._density_bonus("late fee daily", rule) == 1
        assert scorer._density_bonus("late fee daily grace", rule) == 2

    def test_non_refundable_deposit_boost(self, scorer, make_rule):
        rule = make_rule("security-deposit", text = "x")

        assert scorer._semantic_boost("security deposit: $500 (non-refundable)", rule) == 12
        assert scorer._semantic_boost("deposit withheld at landlord's discretion for administrative costs", rule) == 20

    def test_shared_terms_match_whole_tokens(self, scorer, make_rule):
        rule = make_rule("late-fees", text = "Tenant must pay. A refund is required.")

        assert scorer._shared_term_score("you must ask for a refund", rule) == 2
        assert scorer._shared_term_score("refunds are mustered", rule) == 0

    def test_notice_shared_only_near_entry(self, scorer, make_rule):
        rule = make_rule("entry-notice", text = "Landlord must give notice before entry")

        assert scorer._shared_term_score("tenant will receive notice of rent changes", rule) == 0
        assert scorer._shared_term_score("landlord will enter after notice", rule) == 1

    def test_quoted_renewal_law_earns_no_example_score(self, scorer, make_rule):
        rule = make_rule("automatic-renewal", text = "x", violation_examples = ["an automatic renewal term"])

        assert scorer._violation_example_score("state law requires an automatic renewal term to be separately signed", rule) == 0


class TestClassification:
    @pytest.mark.parametrize("score, relevant, expected", [(18, True, Confidence.HIGH),
                                                           (40, True, Confidence.HIGH),
                                                           (12, True, Confidence.MEDIUM),
                                                           (11.9, True, Confidence.LOW),
                                                           (40, False, Confidence.LOW),
                                                          ])
    def test_confidence_tiers(self, scorer, score, relevant, expected):
        assert scorer.classify_confidence(score, relevant) == expected

    def test_severity(self, scorer, make_rule):
        rule   = make_rule()
        high   = MatchResult(rule, rule.jurisdiction, 25, Confidence.HIGH, [], "text", True)
        medium = MatchResult(rule, rule.jurisdiction, 15, Confidence.MEDIUM, [], "text", True)

        assert scorer.severity_for(high) == Severity.HIGH
        assert scorer.severity_for(medium) == Severity.WARNING


class TestFindRelevantRules:
    def test_sorted_best_first(self, scorer, make_rule):
        weak   = make_rule("late-fees", text = "x", violation_examples = ["daily late fee"], jurisdiction = "A")
        strong = make_rule("late-fees", text = "x", violation_examples = ["daily late fee", "no grace period"], jurisdiction = "B")

        matches = scorer.find_relevant_rules("A daily late fee applies with no grace period.", [weak, strong])

        assert [match.jurisdiction for match in matches] == ["B", "A"]
        assert matches[0].score > matches[1].score

    def test_ties_keep_rule_order(self, scorer, make_rule):
        first  = make_rule("late-fees", text = "x", violation_examples = ["daily late fee"], keywords = ["late fee"], jurisdiction = "A")
        second = make_rule("late-fees", text = "x", violation_examples = ["daily late fee"], keywords = ["late fee"], jurisdiction = "B")

        matches = scorer.find_relevant_rules("A daily late fee applies.", [first, second])

        assert [match.jurisdiction for match in matches] == ["A", "B"]

    def test_below_threshold_skipped(self, scorer, make_rule):
        rule = make_rule("late-fees", text = "x", keywords = ["late fee"])

        assert scorer.find_relevant_rules("A late fee applies.", [rule]) == []

    def test_irrelevant_match_dropped(self, scorer, make_rule):
        # 15 + 4 clears the gate but the relevance heuristic rejects the pet clause
        rule = make_rule("security-deposit", text = "x", violation_examples = ["pet deposit of"], keywords = ["pet deposit"])

        assert scorer.find_relevant_rules("A pet deposit of $300 applies.", [rule]) == []

    def test_matched_keywords_reported(self, scorer, make_rule):
        rule    = make_rule("late-fees", text = "x", keywords = ["late fee", "grace"], violation_examples = ["daily late fee"])
        matches = scorer.find_relevant_rules("A daily late fee applies.", [rule])

        assert matches[0].matched_keywords == ["late fee", "daily late fee"]
