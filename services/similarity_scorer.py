# DEPENDENCIES
import sys
import math
from typing import List
from pathlib import Path

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent))

from utils.logger import log_debug
from config.risk_rules import Severity
from config.risk_rules import Confidence
from config.risk_rules import LeaseRiskRules
from utils.text_processor import TextProcessor
from services.data_models import MatchResult
from services.data_models import RuleDescriptor
from services.relevance_filter import RelevanceFilter


class SimilarityScorer:
    """
    Lexical similarity between a lease chunk and a legal rule

    The score is the sum of five signals, strongest first:
    1. Violation examples found verbatim, or with at least 80% of their longer words
    2. Rule keywords, phrases weighted above single words
    3. Rule-specific boosts (security-deposit discretion, amount and non-refundable wording)
    4. Legally loaded terms shared by the chunk and the rule text
    5. A density bonus when three or more keywords appear together
    """
    CONFIDENCE_RANK = {Confidence.HIGH   : 3,
                       Confidence.MEDIUM : 2,
                       Confidence.LOW    : 1,
                      }


    def __init__(self, relevance_filter: RelevanceFilter = None):
        self.rules            = LeaseRiskRules()
        self.relevance_filter = relevance_filter or RelevanceFilter()


    def score(self, chunk: str, rule: RuleDescriptor) -> float:
        """
        Arguments:
        ----------
            chunk { str }            : Lease text chunk

            rule  { RuleDescriptor } : Rule to score against

        Returns:
        --------
                  { float }          : Non-negative evidence score
        """
        chunk_lower = chunk.lower()

        return (self._violation_example_score(chunk_lower, rule) +
                self._keyword_score(chunk_lower, rule) +
                self._semantic_boost(chunk_lower, rule) +
                self._shared_term_score(chunk_lower, rule) +
                self._density_bonus(chunk_lower, rule))


    def _describes_renewal_law(self, chunk_lower: str) -> bool:
        """
        Whether the chunk quotes automatic-renewal requirements instead of renewing the lease
        """
        if TextProcessor.contains_any(chunk_lower, self.rules.RENEWAL_REQUIREMENT_PHRASES):
            return True

        if (("automatic renewal" in chunk_lower) and not TextProcessor.contains_any(chunk_lower, self.rules.RENEWAL_SCORER_IMPLEMENTATION)):
            return TextProcessor.contains_any(chunk_lower, self.rules.RENEWAL_REQUIREMENT_CONTEXT)

        return False


    def _violation_example_score(self, chunk_lower: str, rule: RuleDescriptor) -> float:
        if ((rule.id == "automatic-renewal") and self._describes_renewal_law(chunk_lower)):
            return 0.0

        score = 0.0

        for example in rule.violation_examples:
            example_lower = example.lower()

            if example_lower in chunk_lower:
                score += self.rules.EXACT_PHRASE_SCORE
                continue

            # Short words ("at", "any", "the") carry no signal on their own
            words = [word for word in example_lower.split() if len(word) >= self.rules.PARTIAL_PHRASE_MIN_WORD_LENGTH]

            if not words:
                continue

            found = sum(1 for word in words if word in chunk_lower)

            if (found >= math.ceil(len(words) * self.rules.PARTIAL_PHRASE_RATIO)):
                score += self.rules.PARTIAL_PHRASE_SCORE

        return score


    def _keyword_score(self, chunk_lower: str, rule: RuleDescriptor) -> float:
        ambiguous = self.rules.AMBIGUOUS_KEYWORDS.get(rule.id, {})
        score     = 0.0

        for keyword in rule.keywords:
            keyword_lower = keyword.lower()
            contexts      = ambiguous.get(keyword_lower)

            if (contexts and not TextProcessor.contains_any(chunk_lower, contexts)):
                continue

            if keyword_lower not in chunk_lower:
                continue

            if (len(keyword_lower.split()) > 1):
                score += self.rules.KEYWORD_PHRASE_SCORE

            else:
                score += self.rules.KEYWORD_WORD_SCORE

        return score


    def _semantic_boost(self, chunk_lower: str, rule: RuleDescriptor) -> float:
        if (rule.id != "security-deposit"):
            return 0.0

        score  = self.rules.DEPOSIT_DISCRETION_SCORE * sum(1 for indicator in self.rules.DEPOSIT_DISCRETION_INDICATORS if indicator in chunk_lower)
        score += self.rules.DEPOSIT_AMOUNT_SCORE * sum(1 for indicator in self.rules.DEPOSIT_AMOUNT_INDICATORS if indicator in chunk_lower)

        if TextProcessor.contains_any(chunk_lower, self.rules.NON_REFUNDABLE_INDICATORS):
            score += self.rules.DEPOSIT_NON_REFUNDABLE_SCORE

        return float(score)


    def _shared_term_score(self, chunk_lower: str, rule: RuleDescriptor) -> float:
        terms = list(self.rules.SHARED_LEGAL_TERMS)

        if rule.id in self.rules.CONDITIONAL_SHARED_TERMS:
            term, contexts = self.rules.CONDITIONAL_SHARED_TERMS[rule.id]

            if TextProcessor.contains_any(chunk_lower, contexts):
                terms.append(term)

        # Whole whitespace-delimited tokens on both sides
        rule_words  = set(rule.text.lower().split())
        chunk_words = set(chunk_lower.split())

        return float(self.rules.SHARED_TERM_SCORE * sum(1 for term in terms if term in rule_words and term in chunk_words))


    def _density_bonus(self, chunk_lower: str, rule: RuleDescriptor) -> float:
        found = sum(1 for keyword in rule.keywords if keyword.lower() in chunk_lower)

        if (found < self.rules.KEYWORD_DENSITY_MIN_COUNT):
            return 0.0

        return float((found - (self.rules.KEYWORD_DENSITY_MIN_COUNT - 1)) * self.rules.KEYWORD_DENSITY_SCORE)


    def classify_confidence(self, score: float, excerpt_relevant: bool) -> Confidence:
        """
        Confidence tier for a score; an irrelevant excerpt is always low
        """
        if not excerpt_relevant:
            return Confidence.LOW

        if (score >= self.rules.get_confidence_threshold(Confidence.HIGH)):
            return Confidence.HIGH

        if (score >= self.rules.get_confidence_threshold(Confidence.MEDIUM)):
            return Confidence.MEDIUM

        return Confidence.LOW


    def severity_for(self, match: MatchResult) -> Severity:
        """
        User-facing severity of a retained match
        """
        if ((match.confidence == Confidence.HIGH) and (match.score >= self.rules.HIGH_SEVERITY_MIN_SCORE)):
            return Severity.HIGH

        return Severity.WARNING


    def find_relevant_rules(self, chunk: str, rules: List[RuleDescriptor], threshold: float = LeaseRiskRules.DEFAULT_MIN_MATCH_SCORE) -> List[MatchResult]:
        """
        Score one chunk against candidate rules and keep relevant medium / high matches

        Arguments:
        ----------
            chunk     { str }   : Lease text chunk

            rules     { list }  : Candidate RuleDescriptors

            threshold { float } : Minimum score for a pair to be considered at all

        Returns:
        --------
                  { list }      : MatchResults sorted by score, then confidence (both descending);
                                  equal matches keep rule order
        """
        chunk_lower = chunk.lower()
        matches     = list()

        for rule in rules:
            score = self.score(chunk, rule)

            if (score < threshold):
                continue

            excerpt_relevant = self.relevance_filter.is_relevant(chunk, rule)
            confidence       = self.classify_confidence(score, excerpt_relevant)

            if (not excerpt_relevant or (confidence not in self.rules.RETAINED_CONFIDENCE)):
                log_debug("Candidate match dropped",
                          rule_id    = rule.id,
                          score      = score,
                          relevant   = excerpt_relevant,
                          confidence = confidence.value,
                         )
                continue

            matched_keywords  = [keyword for keyword in rule.keywords if keyword.lower() in chunk_lower]
            matched_keywords += [example for example in rule.violation_examples if example.lower() in chunk_lower]

            matches.append(MatchResult(rule             = rule,
                                       jurisdiction     = rule.jurisdiction,
                                       score            = score,
                                       confidence       = confidence,
                                       matched_keywords = matched_keywords,
                                       matched_text     = chunk,
                                       excerpt_relevant = excerpt_relevant,
                                      ))

        matches.sort(key = lambda match: (-match.score, -self.CONFIDENCE_RANK[match.confidence]))

        return matches
