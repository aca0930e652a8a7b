# DEPENDENCIES
import pytest

from config.risk_rules import Severity
from services.data_models import RiskFlag
from services.pattern_detector import PatternRiskDetector


@pytest.fixture
def detector():
    return PatternRiskDetector()


class TestDetect:
    def test_excerpt_takes_next_line(self, detector):
        flags = detector.detect("Landlord may enter at any time.\nNo notice will be given.\n")

        assert len(flags) == 1
        assert flags[0].type == "illegal_entry"
        assert flags[0].excerpt == "Landlord may enter at any time. No notice will be given."
        assert flags[0].severity == Severity.HIGH
        assert flags[0].legal_reference is None

    def test_blank_next_line_not_appended(self, detector):
        flags = detector.detect("Landlord may enter at any time.\n\nRent is due monthly.")

        assert flags[0].excerpt == "Landlord may enter at any time."

    def test_one_flag_per_pattern(self, detector):
        flags = detector.detect("Automatic renewal applies.\n\nAutomatic renewal again.")

        assert [flag.type for flag in flags] == ["auto_renewal"]
        assert flags[0].severity == Severity.WARNING

    def test_case_insensitive_in_pattern_order(self, detector):
        flags = detector.detect("A NON-REFUNDABLE DEPOSIT is due.\nLandlord may ENTER AT ANY TIME.")

        assert [flag.type for flag in flags] == ["illegal_entry", "deposit_risk"]

    def test_long_excerpt_truncated(self, detector):
        flags = detector.detect("Landlord may enter at any time " + "x" * 300)

        assert len(flags[0].excerpt) == 203
        assert flags[0].excerpt.endswith("...")

    def test_no_patterns(self, detector):
        assert detector.detect("Rent is due on the first.") == []


class TestMerge:
    def test_covered_excerpt_skipped(self, detector):
        existing = RiskFlag("entry-notice", "3. ENTRY. Landlord may enter at any time. No notice will be given.", "x", Severity.HIGH)
        pattern  = detector.detect("Landlord may enter at any time.\nNo notice will be given.")

        assert detector.merge([existing], pattern) == [existing]

    def test_new_excerpt_appended(self, detector):
        existing = RiskFlag("habitability", "Tenant is responsible for all repairs.", "x", Severity.HIGH)
        pattern  = detector.detect("Landlord may enter at any time.")
        merged   = detector.merge([existing], pattern)

        assert [flag.type for flag in merged] == ["habitability", "illegal_entry"]
