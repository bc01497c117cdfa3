# ============================================================================
# src/clinical_structuring/constants/patterns.py
# ============================================================================
"""
Pattern Tables
- Date shapes used in clinical note exports
- Encounter anchors and context fields
- Boilerplate (header/footer) lines
- Institution names for note locations

Every table is an ordered tuple of TaggedPattern. Order is priority:
callers test patterns front to back and stop at the first match.
"""

import re
from typing import NamedTuple, Pattern, Tuple


class TaggedPattern(NamedTuple):
    """A compiled pattern labelled with the field or shape it detects."""
    tag: str
    pattern: Pattern


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------
_MONTH = (
    r'(?:Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|June?|July?|'
    r'Aug(?:ust)?|Sep(?:t(?:ember)?)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)'
)
_MONTH_DAY_YEAR = _MONTH + r'\.?\s+\d{1,2},?\s+\d{4}'    # Jan 5, 2024 / January 5, 2024
_NUMERIC_MDY = r'\d{1,2}[/-]\d{1,2}[/-]\d{4}'            # 01/05/2024 / 01-05-2024
_NUMERIC_YMD = r'\d{4}[/-]\d{1,2}[/-]\d{1,2}'            # 2024-01-05 / 2024/01/05

NOTE_DATE_PATTERNS: Tuple[TaggedPattern, ...] = (
    TaggedPattern("month_day_year", re.compile(r'\b' + _MONTH_DAY_YEAR + r'\b', re.IGNORECASE)),
    TaggedPattern("numeric_mdy", re.compile(r'\b' + _NUMERIC_MDY + r'\b')),
    TaggedPattern("numeric_ymd", re.compile(r'\b' + _NUMERIC_YMD + r'\b')),
)

# A line that is nothing but a date, optionally with weekday and time
BARE_DATE_LINE = re.compile(
    r'(?:(?:Mon|Tue|Wed|Thu|Fri|Sat|Sun)[a-z]*\.?,?\s+)?'
    r'(?:' + _MONTH_DAY_YEAR + '|' + _NUMERIC_MDY + '|' + _NUMERIC_YMD + r')'
    r'(?:,?\s+(?:at\s+)?\d{1,2}:\d{2}(?::\d{2})?\s*(?:[AaPp]\.?[Mm]\.?)?)?',
    re.IGNORECASE
)
BARE_DATE_MAX_LENGTH = 30

# A line that is nothing but a page number
BARE_PAGE_LINE = re.compile(r'(?:Page\s+\d+(?:\s+of\s+\d+)?|\d+)', re.IGNORECASE)

# ---------------------------------------------------------------------------
# Encounters
# ---------------------------------------------------------------------------
_ENCOUNTER_DATE = r'([0-9]{1,2}[/-][0-9]{1,2}[/-][0-9]{2,4})'
_ENCOUNTER_KEYWORD = r'(?:encounter|visit|appointment|consultation)'

ENCOUNTER_PATTERNS: Tuple[TaggedPattern, ...] = (
    TaggedPattern(
        "keyword_then_date",
        re.compile(_ENCOUNTER_KEYWORD + r'[\s:]+(?:date|on)[\s:]*' + _ENCOUNTER_DATE, re.IGNORECASE)
    ),
    TaggedPattern(
        "date_then_keyword",
        re.compile(_ENCOUNTER_DATE + r'[\s:]+' + _ENCOUNTER_KEYWORD, re.IGNORECASE)
    ),
    TaggedPattern(
        "generic_date",
        re.compile(r'(?:date|on)[\s:]+' + _ENCOUNTER_DATE, re.IGNORECASE)
    ),
)

# Context fields around an encounter: (detector, prefix stripped from the value)
_PROVIDER_KEYWORDS = r'(?:provider|physician|doctor|dr\.|md)'
_LOCATION_KEYWORDS = r'(?:location|facility|clinic|hospital)'
_DIAGNOSIS_KEYWORDS = r'(?:diagnosis|dx|condition|problem)'

ENCOUNTER_CONTEXT_FIELDS: Tuple[TaggedPattern, ...] = (
    TaggedPattern("provider", re.compile(_PROVIDER_KEYWORDS + r'[\s:]+(.+)', re.IGNORECASE)),
    TaggedPattern("location", re.compile(_LOCATION_KEYWORDS + r'[\s:]+(.+)', re.IGNORECASE)),
    TaggedPattern("diagnosis", re.compile(_DIAGNOSIS_KEYWORDS + r'[\s:]+(.+)', re.IGNORECASE)),
)

ENCOUNTER_CONTEXT_PREFIXES = {
    "provider": re.compile(r'^' + _PROVIDER_KEYWORDS + r'[\s:]+', re.IGNORECASE),
    "location": re.compile(r'^' + _LOCATION_KEYWORDS + r'[\s:]+', re.IGNORECASE),
    "diagnosis": re.compile(r'^' + _DIAGNOSIS_KEYWORDS + r'[\s:]+', re.IGNORECASE),
}

# Lines that open another structured field end the free-text notes
STRUCTURED_FIELD_HEADER = re.compile(
    r'^(?:provider|location|diagnosis|date|encounter)[\s:]', re.IGNORECASE
)

# ---------------------------------------------------------------------------
# Header / footer boilerplate
# ---------------------------------------------------------------------------
_HEADING_PREFIX = r'^(?:#{1,6}\s*)?'

BOILERPLATE_PATTERNS: Tuple[TaggedPattern, ...] = (
    TaggedPattern("page_number", re.compile(_HEADING_PREFIX + r'Page\s+\d+(?:\s+of\s+\d+)?$', re.IGNORECASE)),
    TaggedPattern("numeric", re.compile(_HEADING_PREFIX + r'\d+$')),
    TaggedPattern("iso_date", re.compile(_HEADING_PREFIX + r'\d{4}-\d{2}-\d{2}$')),
    TaggedPattern("generated_on", re.compile(_HEADING_PREFIX + r'Generated on\b', re.IGNORECASE)),
    TaggedPattern("exported_on", re.compile(_HEADING_PREFIX + r'Exported on\b', re.IGNORECASE)),
)


def header_prefix_pattern(prefix: str) -> Pattern:
    """Compile a running-header prefix into a boilerplate line pattern."""
    return re.compile(_HEADING_PREFIX + re.escape(prefix.strip()), re.IGNORECASE)

# ---------------------------------------------------------------------------
# Clinical notes
# ---------------------------------------------------------------------------
CLINICAL_NOTES_HEADING = re.compile(r'^#{1,3}\s+Clinical\s+Notes\b.*$', re.IGNORECASE | re.MULTILINE)
SECTION_END_HEADING = re.compile(r'^#{1,2}(?!#)\s+\S.*$', re.MULTILINE)
CREATED_ANCHOR = re.compile(r'^\s*Created\s*:', re.IGNORECASE)

# Most specific institution first; generic names keep up to four
# capitalized words in front of the keyword ("Newton Wellesley Hospital")
_INSTITUTION_LEAD = r"\b(?:[A-Z][\w'&.-]*\s+){0,4}"

INSTITUTION_PATTERNS: Tuple[TaggedPattern, ...] = (
    TaggedPattern("mass_general_brigham", re.compile(r'\bmass\s+general\s+brigham\b', re.IGNORECASE)),
    TaggedPattern("brigham", re.compile(r'\bbrigham\b', re.IGNORECASE)),
    TaggedPattern("mass_general", re.compile(r'\bmass(?:achusetts)?\s+general\b', re.IGNORECASE)),
    TaggedPattern("hospital", re.compile(_INSTITUTION_LEAD + r'(?i:hospital)\b')),
    TaggedPattern("medical_center", re.compile(_INSTITUTION_LEAD + r'(?i:medical\s+center)\b')),
    TaggedPattern("clinic", re.compile(_INSTITUTION_LEAD + r'(?i:clinic)\b')),
)
