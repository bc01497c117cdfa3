# ============================================================================
# src/clinical_structuring/constants/__init__.py
# ============================================================================
"""
Convenient imports for all constants
"""

from .patterns import (
    TaggedPattern,
    NOTE_DATE_PATTERNS,
    BARE_DATE_LINE,
    BARE_DATE_MAX_LENGTH,
    BARE_PAGE_LINE,
    ENCOUNTER_PATTERNS,
    ENCOUNTER_CONTEXT_FIELDS,
    ENCOUNTER_CONTEXT_PREFIXES,
    STRUCTURED_FIELD_HEADER,
    BOILERPLATE_PATTERNS,
    header_prefix_pattern,
    CLINICAL_NOTES_HEADING,
    SECTION_END_HEADING,
    CREATED_ANCHOR,
    INSTITUTION_PATTERNS,
)
