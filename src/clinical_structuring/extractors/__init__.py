# src/clinical_structuring/extractors/__init__.py
"""
Structuring Extractors

- PDF token extraction (pdfplumber)
- Line reconstruction from positioned tokens
- Markdown structuring (headings vs paragraphs)
- Encounter extraction
- Header/footer suppression
- Clinical note segmentation
"""

from .pdf_token_extractor import PdfTokenExtractor
from .line_reconstructor import TokenLineReconstructor, group_text_into_lines
from .markdown_structurer import MarkdownStructurer
from .encounter_extractor import EncounterExtractor, extract_encounters
from .header_footer_filter import HeaderFooterFilter
from .clinical_note_segmenter import (
    ClinicalNoteSegmenter,
    NoteSection,
    extract_clinical_notes
)

__all__ = [
    "PdfTokenExtractor",
    "TokenLineReconstructor",
    "group_text_into_lines",
    "MarkdownStructurer",
    "EncounterExtractor",
    "extract_encounters",
    "HeaderFooterFilter",
    "ClinicalNoteSegmenter",
    "NoteSection",
    "extract_clinical_notes",
]
