# DEPENDENCIES
import re
from typing import Any
from typing import Dict
from typing import Tuple

from config.settings import settings


class LeaseTextValidator:
    """
    Gate extracted text before it reaches the lease analyzer

    Empty text is a caller error; the analyzer itself never rejects input. Lease
    indicators are reported, not enforced, since short clause excerpts are valid input.
    """
    # Residential lease vocabulary (term: weight)
    LEASE_INDICATORS = {'lease'            : 3,
                        'landlord'         : 3,
                        'tenant'           : 3,
                        'lessor'           : 3,
                        'lessee'           : 3,
                        'premises'         : 2,
                        'rent'             : 2,
                        'security deposit' : 3,
                        'term of'          : 1,
                        'occupancy'        : 1,
                        'utilities'        : 1,
                        'sublet'           : 2,
                        'renewal'          : 1,
                        'move-in'          : 1,
                        'apartment'        : 1,
                        'unit'             : 1,
                       }

    LIKELY_LEASE_SCORE = 8


    @staticmethod
    def validate(text: str, max_length: int = None) -> Tuple[bool, str, str]:
        """
        Check extracted text can be analysed

        Arguments:
        ----------
            text       { str } : Extracted lease text

            max_length { int } : Maximum length override (default: settings.MAX_LEASE_LENGTH)

        Returns:
        --------
               { tuple }       : (is_valid, validation_type, message)
        """
        max_length = max_length or settings.MAX_LEASE_LENGTH

        if not text or not text.strip():
            return (False, "empty", "No text could be extracted from the document. The file may be image-based or corrupted.")

        if (len(text) > max_length):
            return (False, "too_long", f"Text too long ({len(text)} chars, maximum {max_length}).")

        return (True, "ok", "Text accepted for analysis.")


    @staticmethod
    def lease_indicator_score(text: str) -> int:
        text_lower = text.lower()

        return sum(weight for term, weight in LeaseTextValidator.LEASE_INDICATORS.items() if re.search(r'\b' + re.escape(term) + r'\b', text_lower))


    @staticmethod
    def get_validation_report(text: str) -> Dict[str, Any]:
        """
        Validation verdict plus lease-likeness indicators
        """
        is_valid, validation_type, message = LeaseTextValidator.validate(text)
        text                               = text or ""
        text_lower                         = text.lower()
        score                              = LeaseTextValidator.lease_indicator_score(text)

        return {"is_valid"         : is_valid,
                "validation_type"  : validation_type,
                "message"          : message,
                "lease_score"      : score,
                "likely_lease"     : score >= LeaseTextValidator.LIKELY_LEASE_SCORE,
                "found_indicators" : [term for term in LeaseTextValidator.LEASE_INDICATORS if term in text_lower],
                "text_statistics"  : {"length"     : len(text),
                                      "word_count" : len(text.split()),
                                      "line_count" : len(text.split('\n')),
                                     },
               }
