# DEPENDENCIES
import sys
from typing import Set
from typing import Dict
from typing import List
from pathlib import Path
from typing import Optional
from typing import Callable

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent))

from utils.logger import log_info
from config.settings import settings
from config.risk_rules import Severity
from utils.logger import LeaseAnalyzerLogger
from config.risk_rules import LeaseRiskRules
from utils.text_processor import TextProcessor
from services.data_models import RiskFlag
from services.data_models import MatchResult
from services.data_models import AnalysisResult
from services.data_models import LegalReference
from services.rule_library import RuleLibrary
from services.rule_library import get_rule_library
from services.pattern_detector import PatternRiskDetector
from services.similarity_scorer import SimilarityScorer
from services.jurisdiction_resolver import JurisdictionResolver


class LeaseRiskAnalyzer:
    """
    Flags lease clauses that may violate tenant protection law

    Analysis Pipeline:
    1. Resolve the jurisdiction (explicit choice, else first text match, else all rules)
    2. Select the rules for that jurisdiction
    3. Chunk the lease into overlapping windows
    4. Score, relevance-check and classify every chunk against every rule
    5. Keep the first accepted match per rule id, in document order
    6. Build flags, summary and disclaimer
    """
    DEPOSIT_AMOUNT_EXPLANATION     = ("The lease requires a security deposit that exceeds one month's rent. {text} Language allowing withholding "
                                      "at the landlord's discretion for broad categories may conflict with tenant protection rules.")
    DEPOSIT_DISCRETION_EXPLANATION = ("The lease allows withholding of the security deposit at the landlord's discretion for broad categories such as "
                                      "\"administrative costs\" or \"other expenses.\" {text} This may conflict with requirements for itemized deductions "
                                      "and tenant protection rules.")
    DEPOSIT_GENERIC_EXPLANATION    = ("{text} This clause may conflict with security deposit requirements including limits on withholding, mandatory "
                                      "itemized deductions, and required disclosures.")
    HABITABILITY_EXPLANATION       = ("While tenants may be responsible for routine maintenance, landlords cannot shift responsibility for essential "
                                      "habitability conditions such as heat, plumbing, and code compliance. {text}")
    DEFAULT_EXPLANATION            = "{text} This clause may violate: {title}."


    def __init__(self, rule_library: Optional[RuleLibrary] = None, resolver: Optional[JurisdictionResolver] = None, scorer: Optional[SimilarityScorer] = None,
                 enable_pattern_fallback: Optional[bool] = None):
        """
        Initialize the analyzer

        Arguments:
        ----------
            rule_library            { RuleLibrary }          : Loaded rules (default: process-wide library)

            resolver                { JurisdictionResolver } : Jurisdiction resolver

            scorer                  { SimilarityScorer }     : Chunk / rule scorer

            enable_pattern_fallback { bool }                 : Merge regex fallback flags (default: settings.ENABLE_PATTERN_FALLBACK)
        """
        self.rules                   = LeaseRiskRules()
        self.rule_library            = rule_library or get_rule_library()
        self.resolver                = resolver or JurisdictionResolver()
        self.scorer                  = scorer or SimilarityScorer()
        self.enable_pattern_fallback = settings.ENABLE_PATTERN_FALLBACK if enable_pattern_fallback is None else enable_pattern_fallback
        self.pattern_detector        = PatternRiskDetector()
        self.explanations            : Dict[str, Callable[[MatchResult, str], str]] = {"security-deposit" : self._explain_security_deposit,
                                                                                        "habitability"     : self._explain_habitability,
                                                                                       }

        log_info("LeaseRiskAnalyzer initialized",
                 jurisdictions    = len(self.rule_library.jurisdictions),
                 pattern_fallback = self.enable_pattern_fallback,
                )


    @LeaseAnalyzerLogger.log_execution_time("analyze_lease")
    def analyze(self, document_text: str, jurisdiction_override: Optional[str] = None, min_score: Optional[float] = None) -> AnalysisResult:
        """
        Analyse one lease document

        Arguments:
        ----------
            document_text         { str }   : Extracted lease text

            jurisdiction_override { str }   : Explicit jurisdiction; empty or "auto" requests detection

            min_score             { float } : Candidate score threshold (default: settings.MIN_MATCH_SCORE)

        Returns:
        --------
               { AnalysisResult }           : Summary, flags, disclaimer, jurisdiction and the input text
        """
        threshold    = settings.MIN_MATCH_SCORE if min_score is None else min_score
        jurisdiction = self.resolver.resolve(document_text, jurisdiction_override)
        rules        = self.rule_library.get_rules_for_jurisdiction(jurisdiction)
        chunks       = TextProcessor.chunk_lease_text(text           = document_text or "",
                                                      max_chunk_size = settings.CHUNK_MAX_SIZE,
                                                      overlap        = settings.CHUNK_OVERLAP,
                                                     )

        log_info("Lease analysis started",
                 text_length  = len(document_text or ""),
                 jurisdiction = jurisdiction,
                 rules        = len(rules),
                 chunks       = len(chunks),
                 threshold    = threshold,
                )

        flags = self.collect_flags(chunks, rules, threshold)

        if self.enable_pattern_fallback:
            flags = self.pattern_detector.merge(flags, self.pattern_detector.detect(document_text or ""))

        result = AnalysisResult(summary        = self.build_summary(flags),
                                disclaimer     = self.rules.DISCLAIMER,
                                flags          = flags,
                                jurisdiction   = jurisdiction,
                                extracted_text = document_text,
                               )

        log_info("Lease analysis complete",
                 jurisdiction = jurisdiction,
                 flags        = len(flags),
                 high_risk    = result.high_risk_count,
                 warnings     = result.warning_count,
                )

        return result


    def collect_flags(self, chunks: List[str], rules: list, threshold: float) -> List[RiskFlag]:
        """
        Earliest accepted match per rule id across chunks in document order

        Within one chunk, matches come best-first, so a rule id defined by several
        jurisdictions is flagged under the strongest of them.
        """
        flags       = list()
        flagged_ids : Set[str] = set()

        for chunk in chunks:
            for match in self.scorer.find_relevant_rules(chunk, rules, threshold):
                if match.rule.id in flagged_ids:
                    continue

                flags.append(self._build_flag(match))
                flagged_ids.add(match.rule.id)

        return flags


    def _build_flag(self, match: MatchResult) -> RiskFlag:
        excerpt     = TextProcessor.truncate_excerpt(match.matched_text, self.rules.MAX_EXCERPT_LENGTH)
        explanation = self.explanations.get(match.rule.id, self._explain_default)(match, excerpt)

        return RiskFlag(type            = match.rule.id,
                        excerpt         = excerpt,
                        explanation     = explanation,
                        severity        = self.scorer.severity_for(match),
                        legal_reference = LegalReference(title        = match.rule.title,
                                                         text         = match.rule.text,
                                                         jurisdiction = match.jurisdiction,
                                                        ),
                       )


    def _explain_security_deposit(self, match: MatchResult, excerpt: str) -> str:
        excerpt_lower = excerpt.lower()

        if TextProcessor.contains_any(excerpt_lower, self.rules.DEPOSIT_AMOUNT_MARKERS):
            return self.DEPOSIT_AMOUNT_EXPLANATION.format(text = match.rule.text)

        if TextProcessor.contains_any(excerpt_lower, self.rules.DEPOSIT_DISCRETION_MARKERS):
            return self.DEPOSIT_DISCRETION_EXPLANATION.format(text = match.rule.text)

        return self.DEPOSIT_GENERIC_EXPLANATION.format(text = match.rule.text)


    def _explain_habitability(self, match: MatchResult, excerpt: str) -> str:
        return self.HABITABILITY_EXPLANATION.format(text = match.rule.text)


    def _explain_default(self, match: MatchResult, excerpt: str) -> str:
        return self.DEFAULT_EXPLANATION.format(text = match.rule.text, title = match.rule.title)


    def build_summary(self, flags: List[RiskFlag]) -> str:
        """
        One-sentence summary led by the high-risk count, then the warning count
        """
        high_count    = sum(1 for flag in flags if flag.severity == Severity.HIGH)
        warning_count = sum(1 for flag in flags if flag.severity == Severity.WARNING)

        if (high_count > 0):
            return f"This lease contains {high_count} high-risk clause{'s' if high_count > 1 else ''} that may violate tenant protection laws."

        if (warning_count > 0):
            return f"This lease contains {warning_count} clause{'s' if warning_count > 1 else ''} that may be problematic for tenants."

        return self.rules.NO_RISK_SUMMARY
