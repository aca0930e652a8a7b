# DEPENDENCIES
from .data_models import RiskFlag
from .data_models import MatchResult
from .rule_library import RuleLibrary
from .data_models import AnalysisResult
from .data_models import RuleDescriptor
from .data_models import LegalReference
from .rule_library import RuleLibraryError
from .rule_library import get_rule_library
from .relevance_filter import RelevanceFilter
from .similarity_scorer import SimilarityScorer
from .legal_lookup import LegalReferenceLookup
from .pattern_detector import PatternRiskDetector
from .lease_risk_analyzer import LeaseRiskAnalyzer
from .jurisdiction_resolver import JurisdictionResolver



__all__ = ['RiskFlag',
           'MatchResult',
           'RuleLibrary',
           'AnalysisResult',
           'RuleDescriptor',
           'LegalReference',
           'RuleLibraryError',
           'get_rule_library',
           'RelevanceFilter',
           'SimilarityScorer',
           'LeaseRiskAnalyzer',
           'PatternRiskDetector',
           'LegalReferenceLookup',
           'JurisdictionResolver',
          ]
