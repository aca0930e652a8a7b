# DEPENDENCIES
import sys
import pytest
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from services.rule_library import RuleLibrary
from services.data_models import RuleDescriptor
from services.lease_risk_analyzer import LeaseRiskAnalyzer


@pytest.fixture(scope = "session")
def rule_library():
    return RuleLibrary.load()


@pytest.fixture
def analyzer(rule_library):
    return LeaseRiskAnalyzer(rule_library = rule_library, enable_pattern_fallback = False)


@pytest.fixture
def make_rule():
    def _make_rule(rule_id = "entry-notice", text = "Landlord must give notice before entry.", keywords = (), violation_examples = (), jurisdiction = "Testland"):
        return RuleDescriptor(id                 = rule_id,
                              title              = f"{rule_id} rule",
                              text               = text,
                              keywords           = tuple(keywords),
                              violation_examples = tuple(violation_examples),
                              jurisdiction       = jurisdiction,
                             )

    return _make_rule


@pytest.fixture
def client():
    from fastapi.testclient import TestClient
    from app import app

    with TestClient(app) as test_client:
        yield test_client


SAMPLE_LEASE = """RESIDENTIAL LEASE AGREEMENT

This lease is made between Landlord and Tenant for the apartment at 42 Pike Street, Seattle, WA.

1. RENT. Tenant shall pay rent of $2,000 per month. A late fee of 15% applies and there is no grace period.

2. SECURITY DEPOSIT. Tenant shall pay a security deposit of $4,000. The deposit is non-refundable and may be withheld at landlord's discretion.

3. ENTRY. Landlord may enter the premises at any time without notice.

4. REPAIRS. Tenant is responsible for all repairs, including heat and plumbing.

5. RENEWAL. This lease shall automatically renew for successive one-year terms unless terminated.
"""


@pytest.fixture
def sample_lease():
    return SAMPLE_LEASE
