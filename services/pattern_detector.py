# DEPENDENCIES
import re
import sys
from typing import List
from typing import Tuple
from pathlib import Path

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent))

from config.risk_rules import Severity
from config.risk_rules import LeaseRiskRules
from utils.text_processor import TextProcessor
from services.data_models import RiskFlag


class PatternRiskDetector:
    """
    Regex screen for a few well-known risky phrases

    Independent of jurisdiction and of the rule library. It does not apply the
    law-quoting exclusions of the similarity scorer, so the analyzer only merges its
    flags when the pattern fallback is enabled.
    """
    def __init__(self, patterns: List[Tuple[str, str, str]] = None):
        self.rules    = LeaseRiskRules()
        self.patterns = [(flag_type, re.compile(pattern, re.IGNORECASE), explanation) for flag_type, pattern, explanation in (patterns or self.rules.FALLBACK_PATTERNS)]


    def detect(self, text: str) -> List[RiskFlag]:
        """
        At most one flag per pattern, taken from the first line where it matches

        Arguments:
        ----------
            text { str } : Raw lease text

        Returns:
        --------
               { list }  : RiskFlags without legal references
        """
        lines = text.split('\n')
        flags = list()

        for flag_type, pattern, explanation in self.patterns:
            for index, line in enumerate(lines):
                if not pattern.search(line):
                    continue

                excerpt = line.strip()

                # Next line gives the clause some context
                if ((index + 1 < len(lines)) and lines[index + 1]):
                    excerpt += ' ' + lines[index + 1].strip()

                flags.append(RiskFlag(type        = flag_type,
                                      excerpt     = TextProcessor.truncate_excerpt(excerpt, self.rules.FALLBACK_MAX_EXCERPT_LENGTH),
                                      explanation = explanation,
                                      severity    = self._severity(flag_type),
                                     ))
                break

        return flags


    def _severity(self, flag_type: str) -> Severity:
        if flag_type in self.rules.FALLBACK_HIGH_SEVERITY_TYPES:
            return Severity.HIGH

        return Severity.WARNING


    def merge(self, flags: List[RiskFlag], pattern_flags: List[RiskFlag]) -> List[RiskFlag]:
        """
        Append pattern flags whose excerpt is not already covered by an existing flag

        A pattern flag is a duplicate when the first 50 characters of its excerpt occur,
        case-insensitively, inside an existing flag's excerpt.
        """
        merged = list(flags)

        for pattern_flag in pattern_flags:
            prefix = pattern_flag.excerpt.lower()[:self.rules.FALLBACK_DUPLICATE_PREFIX]

            if any(prefix in flag.excerpt.lower() for flag in merged):
                continue

            merged.append(pattern_flag)

        return merged
