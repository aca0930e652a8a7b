# DEPENDENCIES
import re
import sys
import json
from typing import Set
from typing import Dict
from typing import List
from pathlib import Path
from typing import Optional
from pydantic import Field
from pydantic import BaseModel
from pydantic import ValidationError
from pydantic import field_validator

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent))

from utils.logger import log_info
from config.settings import settings
from utils.logger import log_warning
from config.jurisdictions import JurisdictionRules
from services.data_models import RuleDescriptor


class RuleLibraryError(RuntimeError):
    """
    Raised when the legal reference documents cannot be loaded into a usable library
    """
    pass


class LegalSection(BaseModel):
    id                 : str       = Field(..., min_length = 1)
    title              : str       = Field(..., min_length = 1)
    text               : str       = Field(..., min_length = 1)
    keywords           : List[str] = Field(default_factory = list)
    violation_examples : List[str] = Field(default_factory = list)


class LegalDocument(BaseModel):
    jurisdiction : str                = Field(..., min_length = 1)
    title        : str                = Field(..., min_length = 1)
    sections     : List[LegalSection] = Field(..., min_length = 1)

    @field_validator("sections")
    @classmethod
    def section_ids_unique(cls, sections: List[LegalSection]) -> List[LegalSection]:
        seen = set()

        for section in sections:
            if section.id in seen:
                raise ValueError(f"duplicate section id '{section.id}'")

            seen.add(section.id)

        return sections


class RuleLibrary:
    """
    Immutable collection of jurisdiction-tagged rule descriptors

    Documents keep their load order; every descriptor carries the jurisdiction of the
    document it came from, so rules with the same id in different jurisdictions stay distinct.
    """
    def __init__(self, documents: List[LegalDocument]):
        """
        Build the library from validated documents

        Arguments:
        ----------
            documents { list } : LegalDocument models in load order
        """
        if not documents:
            raise RuleLibraryError("Rule library has no legal reference documents")

        self._titles : Dict[str, str]                  = dict()
        self._rules  : Dict[str, List[RuleDescriptor]] = dict()

        for document in documents:
            key = document.jurisdiction.strip().lower()

            if key in self._rules:
                raise RuleLibraryError(f"Duplicate legal reference document for '{document.jurisdiction}'")

            self._titles[document.jurisdiction] = document.title
            self._rules[key]                    = [RuleDescriptor(id                 = section.id,
                                                                  title              = section.title,
                                                                  text               = section.text,
                                                                  keywords           = tuple(section.keywords),
                                                                  violation_examples = tuple(section.violation_examples),
                                                                  jurisdiction       = document.jurisdiction,
                                                                 ) for section in document.sections]

        log_info("Rule library built",
                 documents = len(self._rules),
                 rules     = sum(len(rules) for rules in self._rules.values()),
                )


    @classmethod
    def load(cls, directory: Optional[Path] = None) -> "RuleLibrary":
        """
        Load and validate every *.json document in a directory

        Arguments:
        ----------
            directory { Path } : Folder of legal reference documents (default: settings.LEGAL_REFERENCES_DIR)

        Raises:
        -------
            RuleLibraryError   : Missing folder, unreadable or malformed file, or no documents at all

        Returns:
        --------
            { RuleLibrary }    : Loaded library
        """
        directory = Path(directory or settings.LEGAL_REFERENCES_DIR)

        if not directory.is_dir():
            raise RuleLibraryError(f"Legal reference directory not found: {directory}")

        documents = list()

        for path in sorted(directory.glob("*.json")):
            try:
                with open(path, "r", encoding = "utf-8") as fh:
                    documents.append(LegalDocument(**json.load(fh)))

            except (OSError, json.JSONDecodeError, ValidationError, TypeError) as e:
                raise RuleLibraryError(f"Invalid legal reference document {path.name}: {e}") from e

        documents.sort(key = cls._load_order)

        log_info("Legal reference documents loaded", directory = str(directory), files = len(documents))

        return cls(documents)


    @staticmethod
    def _load_order(document: LegalDocument):
        # Known documents in their fixed order, any others after them by name
        key = document.jurisdiction.strip().lower()

        if key in JurisdictionRules.DOCUMENT_ORDER:
            return (0, JurisdictionRules.DOCUMENT_ORDER.index(key), key)

        return (1, 0, key)


    @property
    def jurisdictions(self) -> List[str]:
        return list(self._titles.keys())


    @property
    def documents(self) -> Dict[str, str]:
        """
        Document title per jurisdiction
        """
        return dict(self._titles)


    def get_rules_for_jurisdiction(self, jurisdiction: Optional[str] = None) -> List[RuleDescriptor]:
        """
        Rules applicable to a jurisdiction, or every rule when none is given

        Arguments:
        ----------
            jurisdiction { str } : Free-form jurisdiction ("Austin, Texas", "DC", "Seattle, WA" ...)

        Returns:
        --------
                 { list }        : Matching descriptors in document load order; empty when nothing matches
        """
        if not jurisdiction or not jurisdiction.strip():
            return [rule for rules in self._rules.values() for rule in rules]

        keys = self._match_documents(jurisdiction)

        if not keys:
            log_warning("No legal reference document for jurisdiction", jurisdiction = jurisdiction)
            return []

        return [rule for key, rules in self._rules.items() if key in keys for rule in rules]


    def get_rule(self, rule_id: str, jurisdiction: Optional[str] = None) -> Optional[RuleDescriptor]:
        """
        First rule with the given id, optionally restricted to one jurisdiction
        """
        for rule in self.get_rules_for_jurisdiction(jurisdiction):
            if rule.id == rule_id:
                return rule

        return None


    def _match_documents(self, jurisdiction: str) -> Set[str]:
        """
        Map a jurisdiction string to document keys

        Checks, in this order: exact document name, full-input aliases, the city part and
        the state part of "City, State", then whole-token state abbreviations
        """
        query   = re.sub(r'\s+', ' ', jurisdiction.strip().lower())
        matches = set()

        if query in self._rules:
            matches.add(query)

        alias = JurisdictionRules.EXACT_ALIASES.get(query)

        if alias:
            matches.add(alias)

        parts = [part.strip() for part in query.split(',') if part.strip()]

        if parts:
            city = JurisdictionRules.CITY_TO_DOCUMENT.get(parts[0])

            if city:
                matches.add(city)

            if (len(parts) > 1):
                state = JurisdictionRules.STATE_TO_DOCUMENT.get(parts[-1])

                if state:
                    matches.add(state)

            # A bare state name ("Texas", "Illinois") or a known document stem
            elif (parts[0] != "washington"):
                state = JurisdictionRules.STATE_TO_DOCUMENT.get(parts[0])

                if state:
                    matches.add(state)

        for token in re.findall(r'[a-z]+', query):
            abbreviation = JurisdictionRules.ABBREVIATIONS.get(token)

            if abbreviation:
                matches.add(abbreviation)

        return {key for key in matches if key in self._rules}



_rule_library : Optional[RuleLibrary] = None


def get_rule_library() -> RuleLibrary:
    """
    Process-wide rule library, loaded on first use from settings.LEGAL_REFERENCES_DIR
    """
    global _rule_library

    if _rule_library is None:
        _rule_library = RuleLibrary.load(settings.LEGAL_REFERENCES_DIR)

    return _rule_library
