# DEPENDENCIES
import sys
from typing import List
from typing import Tuple
from pathlib import Path
from typing import Optional

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent))

from utils.logger import log_info
from config.jurisdictions import Jurisdiction
from config.jurisdictions import JurisdictionRules


class JurisdictionResolver:
    """
    Resolve the jurisdiction a lease falls under

    An explicit choice always wins. Otherwise the lease text is scanned against a fixed
    priority list and the first entry that matches is used; there is no voting between
    candidates, so a lease that mentions Austin anywhere resolves to Austin, Texas.
    """
    def __init__(self, priority: Optional[List[Tuple[Jurisdiction, List[str], Optional[List[str]]]]] = None):
        self.priority = priority or JurisdictionRules.DETECTION_PRIORITY


    @staticmethod
    def is_explicit(jurisdiction_override: Optional[str]) -> bool:
        """
        Whether an override names a jurisdiction rather than asking for detection
        """
        if not jurisdiction_override or not jurisdiction_override.strip():
            return False

        return jurisdiction_override.strip().lower() != JurisdictionRules.AUTO_DETECT


    def detect(self, document_text: str) -> Optional[Jurisdiction]:
        """
        First jurisdiction in priority order whose terms occur in the text

        Arguments:
        ----------
            document_text { str } : Raw lease text

        Returns:
        --------
             { Jurisdiction }     : Detected jurisdiction, or None when nothing matches
        """
        text_lower = (document_text or "").lower()

        for jurisdiction, terms, context_terms in self.priority:
            if not any(term in text_lower for term in terms):
                continue

            if context_terms and not any(term in text_lower for term in context_terms):
                continue

            return jurisdiction

        return None


    def resolve(self, document_text: str, jurisdiction_override: Optional[str] = None) -> Optional[str]:
        """
        Jurisdiction to analyse a lease under

        Arguments:
        ----------
            document_text         { str } : Raw lease text

            jurisdiction_override { str } : Caller's choice; empty or "auto" requests detection

        Returns:
        --------
                       { str }            : Override verbatim, detected jurisdiction name, or None when unresolved
        """
        if self.is_explicit(jurisdiction_override):
            log_info("Jurisdiction resolved", method = "override", jurisdiction = jurisdiction_override)
            return jurisdiction_override

        detected = self.detect(document_text)

        if detected is None:
            log_info("Jurisdiction unresolved, all rule documents apply", method = "unresolved")
            return None

        log_info("Jurisdiction resolved", method = "detected", jurisdiction = detected.value)

        return detected.value
