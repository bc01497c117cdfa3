# ============================================================================
# src/clinical_structuring/core/records.py
# ============================================================================
"""
Extracted records
- Encounter: date-anchored visit mention with nearby context fields
- ClinicalNote: one narrative entry from a Clinical Notes section

Fields that could not be found are empty strings, never None.
"""

from dataclasses import dataclass
from typing import Any, Dict

CLINICAL_NOTES_CATEGORY = "Clinical Notes"


@dataclass(frozen=True)
class Encounter:
    page: int
    date: str
    provider: str = ""
    location: str = ""
    diagnosis: str = ""
    notes: str = ""
    raw_text: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "page": self.page,
            "date": self.date,
            "provider": self.provider,
            "location": self.location,
            "diagnosis": self.diagnosis,
            "notes": self.notes,
            "rawText": self.raw_text,
        }


@dataclass(frozen=True)
class ClinicalNote:
    file_name: str
    page: int
    content: str  # plain text
    markdown: str  # cleaned segment as it appeared in the document
    note_index: int  # 1-based, sequential across the whole document
    date: str = ""
    location: str = ""
    category: str = CLINICAL_NOTES_CATEGORY

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fileName": self.file_name,
            "page": self.page,
            "category": self.category,
            "content": self.content,
            "markdown": self.markdown,
            "noteIndex": self.note_index,
            "date": self.date,
            "location": self.location,
        }
