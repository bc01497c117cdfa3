# ============================================================================
# src/clinical_structuring/config/structuring_config.py
# ============================================================================
"""
Structuring Thresholds
- Line grouping tolerance
- Heading classification
- Encounter context windows
- Header/footer suppression
- Clinical note segmentation
"""

from typing import List
from pydantic import Field
from pydantic_settings import BaseSettings

class StructuringSettings(BaseSettings):
    LINE_Y_TOLERANCE: float = Field(
        default=2.0,
        gt=0.0,
        description="Tokens whose y differs from the line anchor by less than this share a line"
    )
    DEFAULT_FONT_SIZE: float = Field(
        default=12.0,
        gt=0.0,
        description="Size assumed for tokens that report no glyph height"
    )
    HEADING_FONT_SIZE: float = Field(
        default=14.0,
        description="Average font size above which a line is a heading (level 3)"
    )
    H2_FONT_SIZE: float = Field(
        default=16.0,
        description="Average font size above which a heading is level 2"
    )
    H1_FONT_SIZE: float = Field(
        default=18.0,
        description="Average font size above which a heading is level 1"
    )
    ALL_CAPS_MIN_LENGTH: int = Field(
        default=3,
        ge=0,
        description="All-caps lines must be longer than this to count as headings"
    )
    ALL_CAPS_MAX_LENGTH: int = Field(
        default=100,
        ge=1,
        description="All-caps lines must be shorter than this to count as headings"
    )
    ENCOUNTER_LINES_BEFORE: int = Field(
        default=5,
        ge=0,
        description="Context lines searched above an encounter line"
    )
    ENCOUNTER_LINES_AFTER: int = Field(
        default=10,
        ge=0,
        description="Context lines searched below an encounter line"
    )
    ENCOUNTER_NOTES_MAX_LINES: int = Field(
        default=15,
        ge=0,
        description="Maximum free-text lines collected as encounter notes"
    )
    HEADER_FOOTER_MAX_REPEATS: int = Field(
        default=5,
        ge=1,
        description="Lines recurring more often than this within a section are boilerplate"
    )
    HEADER_PREFIXES: List[str] = Field(
        default=["Patient Name:", "MRN:", "DOB:", "Printed by", "Printed on"],
        description="Line prefixes of running page headers in record exports"
    )
    CREATED_LOOKBACK_LINES: int = Field(
        default=20,
        ge=0,
        description="Lines scanned upward from a Created: anchor for the note's date header"
    )
    MIN_NOTE_CONTENT_LENGTH: int = Field(
        default=30,
        ge=0,
        description="Notes with less plain-text content are treated as false boundaries"
    )
    MAX_PAGE_WORKERS: int = Field(
        default=4,
        ge=1,
        description="Maximum pages structured concurrently"
    )

structuring_settings = StructuringSettings()
