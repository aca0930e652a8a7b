# DEPENDENCIES
import pytest

from config.risk_rules import Severity
from config.risk_rules import LeaseRiskRules
from services.data_models import RiskFlag


def _types(result):
    return [flag.type for flag in result.flags]


class TestScenarios:
    def test_entry_without_notice_in_san_francisco(self, analyzer):
        text   = ("RESIDENTIAL LEASE AGREEMENT\n\n"
                  "The premises are located at 100 Market Street, San Francisco, CA.\n\n"
                  "Landlord may enter the premises at any time without notice.")
        result = analyzer.analyze(text)
        flags  = [flag for flag in result.flags if flag.type == "entry-notice"]

        assert result.jurisdiction == "San Francisco, California"
        assert len(flags) == 1
        assert flags[0].severity in (Severity.HIGH, Severity.WARNING)
        assert "Landlord may enter the premises at any time without notice" in flags[0].excerpt
        assert flags[0].legal_reference.jurisdiction == "California"

    def test_automatic_renewal_flagged_once(self, analyzer):
        result = analyzer.analyze("This lease shall automatically renew for successive one-year terms unless terminated.")

        assert _types(result).count("automatic-renewal") == 1

    def test_quoted_renewal_law_not_flagged(self, analyzer):
        result = analyzer.analyze("State law requires an automatic renewal term to be separately signed.")

        assert "automatic-renewal" not in _types(result)

    def test_non_refundable_deposit(self, analyzer):
        result = analyzer.analyze("Security deposit: $500 (non-refundable)")

        assert _types(result) == ["security-deposit"]
        assert result.flags[0].severity == Severity.HIGH
        assert result.flags[0].explanation.endswith("mandatory itemized deductions, and required disclosures.")

    def test_no_matches(self, analyzer):
        result = analyzer.analyze("The quick brown fox jumps over the lazy dog near the riverbank.")

        assert result.flags == []
        assert result.summary == "No obvious risky clauses detected."
        assert result.jurisdiction is None

    def test_deterministic(self, analyzer, sample_lease):
        first  = analyzer.analyze(sample_lease)
        second = analyzer.analyze(sample_lease)

        assert [flag.to_dict() for flag in first.flags] == [flag.to_dict() for flag in second.flags]

    def test_austin_anywhere(self, analyzer):
        result = analyzer.analyze("This apartment is located in Austin.")

        assert result.jurisdiction == "Austin, Texas"


class TestAggregation:
    def test_one_flag_per_type(self, analyzer):
        text   = ("Landlord may enter the premises at any time without notice.\n\n"
                  "Landlord may also enter at any time for inspection without prior notice.")
        result = analyzer.analyze(text, "California")
        flags  = [flag for flag in result.flags if flag.type == "entry-notice"]

        assert len(flags) == 1
        assert flags[0].excerpt.startswith("Landlord may enter the premises")

    def test_types_unique(self, analyzer, sample_lease):
        types = _types(analyzer.analyze(sample_lease))

        assert len(types) == len(set(types))

    def test_sample_lease_under_seattle_rules(self, analyzer, sample_lease):
        result = analyzer.analyze(sample_lease)

        assert result.jurisdiction == "Seattle, Washington"
        assert {"security-deposit", "entry-notice", "habitability"} <= set(_types(result))
        assert all(flag.legal_reference.jurisdiction == "Seattle, Washington" for flag in result.flags)

    def test_higher_threshold_never_adds_types(self, analyzer, sample_lease):
        low    = set(_types(analyzer.analyze(sample_lease, min_score = 10)))
        middle = set(_types(analyzer.analyze(sample_lease, min_score = 20)))
        high   = set(_types(analyzer.analyze(sample_lease, min_score = 30)))

        assert high <= middle <= low

    def test_excerpts_bounded(self, analyzer, sample_lease):
        result = analyzer.analyze(sample_lease)

        assert all(len(flag.excerpt) <= LeaseRiskRules.MAX_EXCERPT_LENGTH + 3 for flag in result.flags)


class TestJurisdictionHandling:
    def test_override_beats_detection(self, analyzer):
        text   = "The unit is in Austin.\n\nLandlord may enter the premises at any time without notice."
        result = analyzer.analyze(text, "Boston, Massachusetts")

        assert result.jurisdiction == "Boston, Massachusetts"
        assert result.flags
        assert all(flag.legal_reference.jurisdiction == "Boston, Massachusetts" for flag in result.flags)

    def test_auto_override_detects(self, analyzer):
        assert analyzer.analyze("The unit is in Chicago.", "auto").jurisdiction == "Chicago, Illinois"

    def test_unknown_override_yields_no_flags(self, analyzer):
        result = analyzer.analyze("Landlord may enter the premises at any time without notice.", "Atlantis")

        assert result.jurisdiction == "Atlantis"
        assert result.flags == []
        assert result.summary == LeaseRiskRules.NO_RISK_SUMMARY


class TestResult:
    def test_result_dict(self, analyzer):
        text   = "Security deposit: $500 (non-refundable)"
        result = analyzer.analyze(text).to_dict()

        assert set(result) == {"summary", "flags", "disclaimer", "jurisdiction", "extracted_text"}
        assert result["extracted_text"] == text
        assert result["disclaimer"] == LeaseRiskRules.DISCLAIMER
        assert result["flags"][0]["severity"] == "high"
        assert set(result["flags"][0]["legal_reference"]) == {"title", "text", "jurisdiction"}

    def test_summary_forms(self, analyzer):
        high    = RiskFlag("entry-notice", "x", "y", Severity.HIGH)
        warning = RiskFlag("late-fees", "x", "y", Severity.WARNING)

        assert analyzer.build_summary([high, high]) == "This lease contains 2 high-risk clauses that may violate tenant protection laws."
        assert analyzer.build_summary([high, warning]) == "This lease contains 1 high-risk clause that may violate tenant protection laws."
        assert analyzer.build_summary([warning]) == "This lease contains 1 clause that may be problematic for tenants."
        assert analyzer.build_summary([]) == "No obvious risky clauses detected."

    def test_empty_text(self, analyzer):
        result = analyzer.analyze("")

        assert result.flags == []


class TestPatternFallback:
    TEXT = "State law requires an automatic renewal term to be separately signed."

    def test_disabled_by_default(self, analyzer):
        assert analyzer.analyze(self.TEXT).flags == []

    def test_enabled_adds_pattern_flags(self, rule_library):
        from services.lease_risk_analyzer import LeaseRiskAnalyzer

        analyzer = LeaseRiskAnalyzer(rule_library = rule_library, enable_pattern_fallback = True)

        assert _types(analyzer.analyze(self.TEXT)) == ["auto_renewal"]

    def test_enabled_skips_covered_clauses(self, rule_library):
        from services.lease_risk_analyzer import LeaseRiskAnalyzer

        analyzer = LeaseRiskAnalyzer(rule_library = rule_library, enable_pattern_fallback = True)
        result   = analyzer.analyze("Landlord may enter at any time to inspect the unit.", "California")

        assert "entry-notice" in _types(result)
        assert "illegal_entry" not in _types(result)


class TestExcerpts:
    BOILERPLATE = "The parties acknowledge these general provisions. " * 6
    CLAUSE      = "A late fee of 15% applies with no grace period."

    def test_long_chunk_cut_to_leading_text(self, analyzer):
        text   = self.BOILERPLATE + self.CLAUSE
        flags  = [flag for flag in analyzer.analyze(text, "Washington, DC").flags if flag.type == "late-fees"]

        assert len(flags) == 1
        assert flags[0].severity == Severity.HIGH
        assert flags[0].excerpt == text[:LeaseRiskRules.MAX_EXCERPT_LENGTH] + "..."

    def test_cut_can_drop_the_matching_clause(self, analyzer):
        text    = self.BOILERPLATE + self.CLAUSE
        excerpt = [flag for flag in analyzer.analyze(text, "Washington, DC").flags if flag.type == "late-fees"][0].excerpt

        assert "grace period" not in excerpt
        assert "late fee" not in excerpt

    def test_short_chunk_kept_whole(self, analyzer):
        flags = [flag for flag in analyzer.analyze(self.CLAUSE, "Washington, DC").flags if flag.type == "late-fees"]

        assert flags[0].excerpt == self.CLAUSE
