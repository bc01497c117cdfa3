# ============================================================================
# src/clinical_structuring/core/__init__.py
# ============================================================================
"""
Core data model for the structuring pipeline.

The pipeline itself lives in core.pipeline; it is not imported here because
the extractors depend on this package.
"""

from .document import (
    TextToken,
    Line,
    Page,
    Document,
    PAGE_MARKER_TEMPLATE,
    PAGE_PADDING,
    page_segment,
    build_full_markdown,
    resolve_page_number,
)
from .records import Encounter, ClinicalNote, CLINICAL_NOTES_CATEGORY

__all__ = [
    "TextToken",
    "Line",
    "Page",
    "Document",
    "PAGE_MARKER_TEMPLATE",
    "PAGE_PADDING",
    "page_segment",
    "build_full_markdown",
    "resolve_page_number",
    "Encounter",
    "ClinicalNote",
    "CLINICAL_NOTES_CATEGORY",
]
