# DEPENDENCIES
from enum import Enum
from typing import Dict
from typing import List
from typing import Tuple
from typing import Optional


class Jurisdiction(Enum):
    WASHINGTON_DC = "Washington, DC"
    SAN_FRANCISCO = "San Francisco, California"
    LOS_ANGELES   = "Los Angeles, California"
    SAN_DIEGO     = "San Diego, California"
    NEW_YORK_CITY = "New York City, New York"
    AUSTIN        = "Austin, Texas"
    CHICAGO       = "Chicago, Illinois"
    SEATTLE       = "Seattle, Washington"
    BOSTON        = "Boston, Massachusetts"


class JurisdictionRules:
    """
    Lookup tables used to resolve a lease to a jurisdiction and a jurisdiction to its rule documents
    """
    AUTO_DETECT           = "auto"

    # Ordered detection rules: (jurisdiction, any-of terms, optional second any-of terms). First hit wins.
    DETECTION_PRIORITY    : List[Tuple[Jurisdiction, List[str], Optional[List[str]]]] = [(Jurisdiction.AUSTIN, ['austin'], None),
                                                                                          (Jurisdiction.CHICAGO, ['chicago'], None),
                                                                                          (Jurisdiction.SEATTLE, ['seattle'], None),
                                                                                          (Jurisdiction.BOSTON, ['boston'], None),
                                                                                          (Jurisdiction.NEW_YORK_CITY, ['nyc', 'new york city', 'manhattan', 'brooklyn', 'queens', 'bronx'], None),
                                                                                          (Jurisdiction.SAN_FRANCISCO, ['san francisco'], None),
                                                                                          (Jurisdiction.LOS_ANGELES, ['los angeles'], None),
                                                                                          (Jurisdiction.SAN_DIEGO, ['san diego'], None),
                                                                                          (Jurisdiction.WASHINGTON_DC, ['district of columbia'], None),
                                                                                          (Jurisdiction.WASHINGTON_DC, ['washington'], [' dc ', ', dc', ' d.c.']),
                                                                                          (Jurisdiction.NEW_YORK_CITY, ['new york'], [' ny ', ', ny', 'new york state']),
                                                                                         ]

    # Rule document keys (lower-cased document jurisdiction strings)
    DC_DOCUMENT           = "washington, dc"
    CALIFORNIA_DOCUMENT   = "california"
    NEW_YORK_DOCUMENT     = "new york"
    TEXAS_DOCUMENT        = "texas"
    CHICAGO_DOCUMENT      = "chicago, illinois"
    SEATTLE_DOCUMENT      = "seattle, washington"
    BOSTON_DOCUMENT       = "boston, massachusetts"

    # Load order of the rule documents; earlier documents win ties when all rules are searched
    DOCUMENT_ORDER        : List[str] = [DC_DOCUMENT, CALIFORNIA_DOCUMENT, NEW_YORK_DOCUMENT, TEXAS_DOCUMENT, CHICAGO_DOCUMENT, SEATTLE_DOCUMENT, BOSTON_DOCUMENT]

    # Full-input aliases checked before splitting "City, State"
    EXACT_ALIASES         : Dict[str, str] = {"washington"           : DC_DOCUMENT,
                                              "washington dc"        : DC_DOCUMENT,
                                              "washington, d.c."     : DC_DOCUMENT,
                                              "district of columbia" : DC_DOCUMENT,
                                             }

    CITY_TO_DOCUMENT      : Dict[str, str] = {"washington"    : DC_DOCUMENT,
                                              "san francisco" : CALIFORNIA_DOCUMENT,
                                              "los angeles"   : CALIFORNIA_DOCUMENT,
                                              "san diego"     : CALIFORNIA_DOCUMENT,
                                              "new york city" : NEW_YORK_DOCUMENT,
                                              "new york"      : NEW_YORK_DOCUMENT,
                                              "manhattan"     : NEW_YORK_DOCUMENT,
                                              "brooklyn"      : NEW_YORK_DOCUMENT,
                                              "queens"        : NEW_YORK_DOCUMENT,
                                              "bronx"         : NEW_YORK_DOCUMENT,
                                              "austin"        : TEXAS_DOCUMENT,
                                              "chicago"       : CHICAGO_DOCUMENT,
                                              "seattle"       : SEATTLE_DOCUMENT,
                                              "boston"        : BOSTON_DOCUMENT,
                                             }

    # Only consulted for the state part of a "City, State" input
    STATE_TO_DOCUMENT     : Dict[str, str] = {"california"           : CALIFORNIA_DOCUMENT,
                                              "new york"             : NEW_YORK_DOCUMENT,
                                              "texas"                : TEXAS_DOCUMENT,
                                              "illinois"             : CHICAGO_DOCUMENT,
                                              "washington"           : SEATTLE_DOCUMENT,
                                              "massachusetts"        : BOSTON_DOCUMENT,
                                              "dc"                   : DC_DOCUMENT,
                                              "d.c."                 : DC_DOCUMENT,
                                              "district of columbia" : DC_DOCUMENT,
                                             }

    ABBREVIATIONS         : Dict[str, str] = {"dc"  : DC_DOCUMENT,
                                              "ca"  : CALIFORNIA_DOCUMENT,
                                              "ny"  : NEW_YORK_DOCUMENT,
                                              "nyc" : NEW_YORK_DOCUMENT,
                                              "tx"  : TEXAS_DOCUMENT,
                                              "il"  : CHICAGO_DOCUMENT,
                                              "wa"  : SEATTLE_DOCUMENT,
                                              "ma"  : BOSTON_DOCUMENT,
                                             }


    @classmethod
    def supported_jurisdictions(cls) -> List[str]:
        """
        Jurisdictions the resolver can produce, in enum order
        """
        return [jurisdiction.value for jurisdiction in Jurisdiction]
