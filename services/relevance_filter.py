# DEPENDENCIES
import sys
from typing import Dict
from pathlib import Path
from typing import Callable

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent))

from utils.text_processor import TextProcessor
from config.risk_rules import LeaseRiskRules
from services.data_models import RuleDescriptor


class RelevanceFilter:
    """
    Decide whether a chunk actually supports a violation of a rule

    The scorer only measures lexical overlap; this filter rejects chunks that are on the
    rule's topic but about something else (a termination clause scored against entry
    notice, a pet fee scored against security deposits, a lease quoting renewal law).
    """
    def __init__(self):
        self.rules      = LeaseRiskRules()
        self.strategies : Dict[str, Callable[[str, RuleDescriptor], bool]] = {"habitability"      : self._habitability,
                                                                              "entry-notice"      : self._entry_notice,
                                                                              "security-deposit"  : self._security_deposit,
                                                                              "automatic-renewal" : self._automatic_renewal,
                                                                             }


    def is_relevant(self, chunk: str, rule: RuleDescriptor) -> bool:
        """
        Arguments:
        ----------
            chunk { str }            : Lease text chunk

            rule  { RuleDescriptor } : Rule being matched

        Returns:
        --------
                  { bool }           : True when the chunk genuinely bears on the rule
        """
        strategy = self.strategies.get(rule.id, self._default)

        return strategy(chunk.lower(), rule)


    def _habitability(self, chunk_lower: str, rule: RuleDescriptor) -> bool:
        terms = self.rules.get_relevance_rule("habitability")

        return (TextProcessor.contains_any(chunk_lower, terms["required"]) or
                TextProcessor.contains_any(chunk_lower, terms["responsibility"]))


    def _entry_notice(self, chunk_lower: str, rule: RuleDescriptor) -> bool:
        terms = self.rules.get_relevance_rule("entry-notice")

        # "enter" / "entry" settle it even next to rent or fee wording
        if TextProcessor.contains_any(chunk_lower, terms["definitive"]):
            return True

        return (TextProcessor.contains_any(chunk_lower, terms["required"]) and
                not TextProcessor.contains_any(chunk_lower, terms["excluded"]))


    def _security_deposit(self, chunk_lower: str, rule: RuleDescriptor) -> bool:
        terms                  = self.rules.get_relevance_rule("security-deposit")
        fee_term, fee_contexts = terms["ambiguous"]

        if ((fee_term in chunk_lower) and not TextProcessor.contains_any(chunk_lower, fee_contexts)):
            return False

        return (TextProcessor.contains_any(chunk_lower, terms["required"]) and
                not TextProcessor.contains_any(chunk_lower, terms["excluded"]))


    def _automatic_renewal(self, chunk_lower: str, rule: RuleDescriptor) -> bool:
        terms = self.rules.get_relevance_rule("automatic-renewal")

        if not TextProcessor.contains_any(chunk_lower, terms["required"]):
            return False

        # Wording that describes the law rather than renewing this lease
        if TextProcessor.contains_any(chunk_lower, terms["excluded"]):
            return False

        if TextProcessor.contains_any(chunk_lower, terms["implementation"]):
            return True

        # Bare "automatic renewal" next to legal-requirement wording
        if (("automatic renewal" in chunk_lower) and TextProcessor.contains_any(chunk_lower, terms["law_context"])):
            return False

        return True


    def _default(self, chunk_lower: str, rule: RuleDescriptor) -> bool:
        return (any(example.lower() in chunk_lower for example in rule.violation_examples) or
                any(keyword.lower() in chunk_lower for keyword in rule.keywords))
