# DEPENDENCIES
from enum import Enum
from typing import Dict
from typing import List
from typing import Tuple


class Confidence(Enum):
    HIGH   = "high"
    MEDIUM = "medium"
    LOW    = "low"


class Severity(Enum):
    HIGH    = "high"
    WARNING = "warning"
    INFO    = "info"


class LeaseRiskRules:
    """
    Empirically tuned scoring weights, thresholds and term tables for lease risk matching

    Relative ordering must hold: exact phrase > semantic boost > keyword phrase > single keyword > shared term
    """
    # Violation-phrase signal
    EXACT_PHRASE_SCORE             = 15
    PARTIAL_PHRASE_SCORE           = 8
    PARTIAL_PHRASE_RATIO           = 0.8
    PARTIAL_PHRASE_MIN_WORD_LENGTH = 4

    # Keyword signal
    KEYWORD_PHRASE_SCORE           = 4
    KEYWORD_WORD_SCORE             = 2

    # Rule-specific semantic boosts
    DEPOSIT_DISCRETION_SCORE       = 10
    DEPOSIT_AMOUNT_SCORE           = 8
    DEPOSIT_NON_REFUNDABLE_SCORE   = 12

    # Shared legal-term overlap
    SHARED_TERM_SCORE              = 1

    # Keyword density bonus
    KEYWORD_DENSITY_MIN_COUNT      = 3
    KEYWORD_DENSITY_SCORE          = 1

    # Confidence / severity tiers
    CONFIDENCE_THRESHOLDS          = {Confidence.HIGH   : 18,
                                      Confidence.MEDIUM : 12,
                                     }
    HIGH_SEVERITY_MIN_SCORE        = 18
    RETAINED_CONFIDENCE            = (Confidence.HIGH, Confidence.MEDIUM)

    # Candidate gate and excerpt shaping
    DEFAULT_MIN_MATCH_SCORE        = 10
    MAX_EXCERPT_LENGTH             = 300

    SHARED_LEGAL_TERMS             = ['required', 'must', 'shall', 'prohibited', 'illegal', 'violation', 'refund', 'deposit', 'entry', 'renewal']

    # Rule id -> (term only added to the shared vocabulary, context terms that must appear in the chunk)
    CONDITIONAL_SHARED_TERMS       = {"entry-notice" : ("notice", ['enter', 'entry', 'access'])}

    # Rule id -> {ambiguous single keyword : terms required elsewhere in the chunk}
    AMBIGUOUS_KEYWORDS             = {"security-deposit" : {"refund" : ['deposit', 'security'],
                                                            "fee"    : ['deposit', 'security'],
                                                           },
                                     }

    DEPOSIT_DISCRETION_INDICATORS  = ['at discretion', 'landlord may withhold', 'withheld at', 'administrative costs', 'other expenses', 'unilateral', 'without itemization', 'no itemized']
    DEPOSIT_AMOUNT_INDICATORS      = ['exceeds one month', 'exceeds rent', 'more than one month']
    NON_REFUNDABLE_INDICATORS      = ['non-refundable', 'not refundable']

    # Wording that quotes the automatic-renewal law rather than implementing an automatic renewal
    RENEWAL_REQUIREMENT_PHRASES    = ['must be separate', 'must be signed', 'must be acknowledged', 'prohibited by law', 'required by law', 'an automatic renewal term',
                                      'automatic renewal term in a lease must', 'must:', 'ending tenancy']
    RENEWAL_SCORER_IMPLEMENTATION  = ['shall automatically', 'will automatically', 'renews automatically', 'lease will renew']
    RENEWAL_REQUIREMENT_CONTEXT    = ['must', 'required', 'prohibited']

    # Per-rule relevance heuristics
    RELEVANCE_RULES                = {"habitability"      : {"required"       : ['repair', 'maintenance', 'habitability', 'heat', 'plumbing', 'electricity', 'code', 'condition',
                                                                                 'tenant responsible', 'landlord disclaims', 'waive', 'essential'],
                                                             "responsibility" : ['tenant responsible', 'tenant shall', 'tenant pays'],
                                                            },
                                      "entry-notice"      : {"required"       : ['enter', 'entry', 'access', 'premises', 'unit', 'inspection', 'repair', 'showing'],
                                                             "definitive"     : ['enter', 'entry'],
                                                             "excluded"       : ['termination', 'renewal', 'early termination', 'lease termination', 'default', 'fee', 'payment', 'rent', 'deposit'],
                                                            },
                                      "security-deposit"  : {"required"       : ['security deposit', 'deposit', 'withhold', 'discretion', 'administrative', 'itemized', 'deduction', 'escrow',
                                                                                 'exceeds', 'one month', 'refund'],
                                                             "excluded"       : ['application fee', 'pet fee', 'pet policy', 'application', 'pet', 'breed restriction', 'weight restriction', 'number of pets'],
                                                             "ambiguous"      : ('fee', ['deposit', 'security']),
                                                            },
                                      "automatic-renewal" : {"required"       : ['renewal', 'renew', 'automatic', 'extend', 'extension'],
                                                             "excluded"       : ['must be separate', 'must be signed', 'must be acknowledged', 'prohibited by law', 'required by law',
                                                                                 'maryland code', 'dc code', 'tenant bill of rights', 'legal requirement', 'an automatic renewal term',
                                                                                 'automatic renewal term in a lease must', 'must:', 'must be', 'required to', 'shall be', 'prohibited',
                                                                                 'ending tenancy', 'for the landlord to end'],
                                                             "implementation" : ['shall automatically renew', 'will automatically renew', 'automatically renews', 'lease will renew',
                                                                                 'agreement will renew', 'renews automatically', 'automatic renewal of this lease', 'this lease shall renew',
                                                                                 'tenant agrees to automatic renewal', 'landlord may renew'],
                                                             "law_context"    : ['must', 'required', 'prohibited', 'code'],
                                                            },
                                     }

    # Security-deposit explanation sub-conditions
    DEPOSIT_AMOUNT_MARKERS         = ['exceeds', 'one month', 'more than']
    DEPOSIT_DISCRETION_MARKERS     = ['discretion', 'withhold', 'administrative']

    # Regex fallback patterns: (flag type, pattern, explanation)
    FALLBACK_PATTERNS              : List[Tuple[str, str, str]] = [('illegal_entry', r'enter at any time', 'Landlords are usually required to give notice before entering a unit.'),
                                                                    ('auto_renewal', r'automatic renewal', 'Automatic renewal clauses can lock you into a lease without your explicit consent.'),
                                                                    ('deposit_risk', r'non-refundable deposit', 'Non-refundable deposits may not be legally enforceable in many jurisdictions.'),
                                                                   ]
    FALLBACK_HIGH_SEVERITY_TYPES   = ['illegal_entry', 'deposit_risk']
    FALLBACK_MAX_EXCERPT_LENGTH    = 200
    FALLBACK_DUPLICATE_PREFIX      = 50

    DISCLAIMER                     = "This analysis is for informational purposes only and does not constitute legal advice. Consult with a qualified attorney for legal guidance."
    NO_RISK_SUMMARY                = "No obvious risky clauses detected."


    @classmethod
    def get_confidence_threshold(cls, confidence: Confidence) -> float:
        """
        Minimum score for a confidence tier
        """
        return cls.CONFIDENCE_THRESHOLDS[confidence]


    @classmethod
    def get_relevance_rule(cls, rule_id: str) -> Dict:
        """
        Term tables for a rule id, empty when the rule uses the default heuristic
        """
        return cls.RELEVANCE_RULES.get(rule_id, {})
