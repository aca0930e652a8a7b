# DEPENDENCIES
import sys
from typing import Any
from typing import Dict
from typing import List
from pathlib import Path
from typing import Optional

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent))

from utils.logger import log_info
from services.rule_library import RuleLibrary
from services.data_models import RuleDescriptor
from services.rule_library import get_rule_library


class LegalReferenceLookup:
    """
    Answer tenant questions with the matching sections of the legal reference documents
    """
    # Question topic -> section id, used when nothing matches directly
    TOPIC_TO_SECTION = {"security deposit" : "security-deposit",
                        "pet"              : "security-deposit",
                        "fees"             : "late-fees",
                        "eviction"         : "retaliation",
                        "notice"           : "entry-notice",
                        "repair"           : "habitability",
                        "maintenance"      : "habitability",
                        "habitability"     : "habitability",
                        "retaliation"      : "retaliation",
                        "privacy"          : "entry-notice",
                        "entry"            : "entry-notice",
                        "rent increase"    : "rent-increase",
                        "lock"             : "lockout",
                       }

    AVAILABLE_TOPICS = ["Security deposits",
                        "Entry and privacy rights",
                        "Habitability and repairs",
                        "Late fees",
                        "Automatic renewal",
                        "Rent increases",
                        "Retaliation protections",
                       ]

    DISCLAIMER       = "This information is for educational purposes only and does not constitute legal advice. Consult with a qualified attorney for specific legal guidance."


    def __init__(self, rule_library: Optional[RuleLibrary] = None):
        self.rule_library = rule_library or get_rule_library()


    def search(self, query: str, jurisdiction: Optional[str] = None, limit: int = 3) -> Dict[str, Any]:
        """
        Find legal sections relevant to a question

        Sections match when one of their keywords, their id (dashes read as spaces) or
        their title appears in the query. With no direct match, known topic words in the
        query select a section by id.

        Arguments:
        ----------
            query        { str } : Tenant's question

            jurisdiction { str } : Optional jurisdiction to restrict the search to

            limit        { int } : Maximum number of sections returned

        Returns:
        --------
                   { dict }      : success flag, message, jurisdiction, sections and disclaimer;
                                   unsuccessful responses list the available topics
        """
        query_lower = (query or "").lower()
        sections    = self.rule_library.get_rules_for_jurisdiction(jurisdiction)
        relevant    = [section for section in sections if self._matches(query_lower, section)]

        if not relevant:
            relevant = self._topic_matches(query_lower, sections)

        log_info("Legal reference lookup", query = query, jurisdiction = jurisdiction, matches = len(relevant))

        if not relevant:
            hint = f"Legal references for {jurisdiction} are available." if jurisdiction else "Try specifying a jurisdiction for more specific guidance."

            return {"success"          : False,
                    "message"          : f"No specific legal information found for \"{query}\". {hint}",
                    "query"            : query,
                    "jurisdiction"     : jurisdiction or "General",
                    "sections"         : [],
                    "available_topics" : self.AVAILABLE_TOPICS,
                    "disclaimer"       : self.DISCLAIMER,
                   }

        return {"success"      : True,
                "message"      : f"Found {len(relevant)} relevant legal reference(s) for \"{query}\"" + (f" in {jurisdiction}" if jurisdiction else ""),
                "query"        : query,
                "jurisdiction" : jurisdiction or "General",
                "sections"     : [self._section_dict(section) for section in relevant[:limit]],
                "disclaimer"   : self.DISCLAIMER,
               }


    @staticmethod
    def _matches(query_lower: str, section: RuleDescriptor) -> bool:
        if any(keyword.lower() in query_lower for keyword in section.keywords):
            return True

        return ((section.id.replace('-', ' ') in query_lower) or (section.title.lower() in query_lower))


    def _topic_matches(self, query_lower: str, sections: List[RuleDescriptor]) -> List[RuleDescriptor]:
        found = list()

        for topic, section_id in self.TOPIC_TO_SECTION.items():
            if topic not in query_lower:
                continue

            section = next((section for section in sections if section.id == section_id), None)

            if section and section not in found:
                found.append(section)

        return found


    @staticmethod
    def _section_dict(section: RuleDescriptor) -> Dict[str, Any]:
        return {"id"                 : section.id,
                "title"              : section.title,
                "text"               : section.text,
                "jurisdiction"       : section.jurisdiction,
                "violation_examples" : list(section.violation_examples),
               }
