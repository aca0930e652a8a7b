# DEPENDENCIES
import sys
from typing import Any
from typing import Dict
from typing import List
from typing import Tuple
from pathlib import Path
from typing import Optional
from dataclasses import field
from dataclasses import dataclass

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent))

from config.risk_rules import Severity
from config.risk_rules import Confidence


@dataclass(frozen = True)
class RuleDescriptor:
    """
    One jurisdiction-specific legal concern with its matching metadata
    """
    id                 : str
    title              : str
    text               : str
    keywords           : Tuple[str, ...]
    violation_examples : Tuple[str, ...]
    jurisdiction       : str   # Owning document's jurisdiction, attached at load time


@dataclass
class MatchResult:
    """
    Score of one chunk against one rule, with the relevance verdict and confidence tier
    """
    rule             : RuleDescriptor
    jurisdiction     : str
    score            : float
    confidence       : Confidence
    matched_keywords : List[str]
    matched_text     : str
    excerpt_relevant : bool


@dataclass(frozen = True)
class LegalReference:
    """
    Citation attached to a flag: the rule's title and text under its own jurisdiction
    """
    title        : str
    text         : str
    jurisdiction : str

    def to_dict(self) -> Dict[str, str]:
        return {"title"        : self.title,
                "text"         : self.text,
                "jurisdiction" : self.jurisdiction,
               }


@dataclass(frozen = True)
class RiskFlag:
    """
    A flagged lease clause as shown to the tenant
    """
    type            : str        # Rule id, or a pattern type for fallback flags
    excerpt         : str
    explanation     : str
    severity        : Severity
    legal_reference : Optional[LegalReference] = None

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary
        """
        return {"type"            : self.type,
                "excerpt"         : self.excerpt,
                "explanation"     : self.explanation,
                "legal_reference" : self.legal_reference.to_dict() if self.legal_reference else None,
                "severity"        : self.severity.value,
               }


@dataclass
class AnalysisResult:
    """
    Outcome of analysing one lease document
    """
    summary        : str
    disclaimer     : str
    flags          : List[RiskFlag] = field(default_factory = list)
    jurisdiction   : Optional[str]  = None
    extracted_text : Optional[str]  = None

    @property
    def high_risk_count(self) -> int:
        return sum(1 for flag in self.flags if flag.severity == Severity.HIGH)


    @property
    def warning_count(self) -> int:
        return sum(1 for flag in self.flags if flag.severity == Severity.WARNING)


    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary for serialization
        """
        return {"summary"        : self.summary,
                "flags"          : [flag.to_dict() for flag in self.flags],
                "disclaimer"     : self.disclaimer,
                "jurisdiction"   : self.jurisdiction,
                "extracted_text" : self.extracted_text,
               }
