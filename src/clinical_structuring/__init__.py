"""
Clinical record structuring: positioned PDF text → reading-order lines,
markdown pages, encounters and segmented clinical notes.
"""

from .core import TextToken, Page, Document, Encounter, ClinicalNote
from .core.pipeline import DocumentStructuringPipeline, StructuringResult, structure_document

__version__ = "1.0.0"

__all__ = [
    "TextToken",
    "Page",
    "Document",
    "Encounter",
    "ClinicalNote",
    "DocumentStructuringPipeline",
    "StructuringResult",
    "structure_document",
]
