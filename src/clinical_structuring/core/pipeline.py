# ============================================================================
# src/clinical_structuring/core/pipeline.py
# ============================================================================
"""
Document Structuring Pipeline

Pipeline Flow:
    PDF bytes → Tokens per page → Lines → Markdown pages → Document
              → Encounters + Clinical notes

Page structuring is independent per page and can be fanned out
(structure_pages_async). Encounter and note extraction need the complete,
ordered Document, so they always run after every page is structured.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence
import logging

from ..config import StructuringSettings, structuring_settings
from ..extractors.pdf_token_extractor import PdfTokenExtractor
from ..extractors.line_reconstructor import TokenLineReconstructor
from ..extractors.markdown_structurer import MarkdownStructurer
from ..extractors.encounter_extractor import EncounterExtractor
from ..extractors.clinical_note_segmenter import ClinicalNoteSegmenter
from ..utils.logging import log_performance
from .document import Document, Page, TextToken
from .records import ClinicalNote, Encounter

logger = logging.getLogger(__name__)


@dataclass
class StructuringResult:
    """Everything produced for one document."""
    document: Document
    encounters: List[Encounter] = field(default_factory=list)
    clinical_notes: List[ClinicalNote] = field(default_factory=list)
    file_name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": True,
            "fileName": self.file_name,
            "totalPages": self.document.page_count,
            "pages": [page.to_dict() for page in self.document.pages],
            "encounters": [encounter.to_dict() for encounter in self.encounters],
            "clinicalNotes": [note.to_dict() for note in self.clinical_notes],
        }


class DocumentStructuringPipeline:
    """
    Runs the structuring components in order.

    Usage:
        pipeline = DocumentStructuringPipeline()
        result = pipeline.process_pdf(pdf_bytes, file_name="records.pdf")
        for note in result.clinical_notes:
            print(note.note_index, note.date, note.location)
    """

    def __init__(
        self,
        settings: Optional[StructuringSettings] = None,
        token_extractor: Optional[PdfTokenExtractor] = None
    ):
        self.settings = settings or structuring_settings
        self.token_extractor = token_extractor or PdfTokenExtractor()
        self.line_reconstructor = TokenLineReconstructor(self.settings)
        self.markdown_structurer = MarkdownStructurer(self.settings)
        self.encounter_extractor = EncounterExtractor(self.settings)
        self.note_segmenter = ClinicalNoteSegmenter(self.settings)

    def structure_page(self, page_number: int, tokens: Sequence[TextToken]) -> Page:
        lines = self.line_reconstructor.group_lines(tokens)
        return self.markdown_structurer.structure_page(page_number, tokens, lines)

    def structure_pages(self, token_pages: Sequence[Sequence[TextToken]]) -> Document:
        """Structure every page sequentially, page numbers starting at 1."""
        pages = [
            self.structure_page(page_number, tokens)
            for page_number, tokens in enumerate(token_pages, start=1)
        ]
        return Document(pages=tuple(pages))

    async def structure_pages_async(self, token_pages: Sequence[Sequence[TextToken]]) -> Document:
        """
        Structure pages concurrently in worker threads.

        At most MAX_PAGE_WORKERS pages run at once. Results are put back in
        page-number order before the Document is built, since full-markdown
        offsets depend on it.
        """
        semaphore = asyncio.Semaphore(self.settings.MAX_PAGE_WORKERS)

        async def bounded_structure(page_number: int, tokens: Sequence[TextToken]) -> Page:
            async with semaphore:
                return await asyncio.to_thread(self.structure_page, page_number, tokens)

        tasks = [
            bounded_structure(page_number, tokens)
            for page_number, tokens in enumerate(token_pages, start=1)
        ]
        pages = await asyncio.gather(*tasks)

        return Document(pages=tuple(sorted(pages, key=lambda page: page.page_number)))

    def extract_encounters(self, document: Document) -> List[Encounter]:
        return self.encounter_extractor.extract(document.pages)

    def extract_clinical_notes(self, document: Document, file_name: str = "") -> List[ClinicalNote]:
        return self.note_segmenter.segment(document.full_markdown, document.pages, file_name)

    def process_tokens(
        self,
        token_pages: Sequence[Sequence[TextToken]],
        file_name: str = ""
    ) -> StructuringResult:
        """Structure already-decoded pages and extract records."""
        document = self.structure_pages(token_pages)
        return self._build_result(document, file_name)

    @log_performance(logger, "PDF structuring")
    def process_pdf(self, pdf_bytes: bytes, file_name: str = "") -> StructuringResult:
        """
        Decode, structure and extract records from a PDF.

        Raises:
            PDFExtractionError: If the PDF cannot be decoded
        """
        token_pages = self.token_extractor.extract_tokens(pdf_bytes)
        return self.process_tokens(token_pages, file_name)

    @log_performance(logger, "PDF structuring (async)")
    async def process_pdf_async(self, pdf_bytes: bytes, file_name: str = "") -> StructuringResult:
        """Async variant of process_pdf() with page fan-out."""
        token_pages = await asyncio.to_thread(self.token_extractor.extract_tokens, pdf_bytes)
        document = await self.structure_pages_async(token_pages)
        return self._build_result(document, file_name)

    def _build_result(self, document: Document, file_name: str) -> StructuringResult:
        encounters = self.extract_encounters(document)
        notes = self.extract_clinical_notes(document, file_name)

        logger.info(
            f"Structured {file_name or 'document'}: {document.page_count} pages, "
            f"{len(encounters)} encounters, {len(notes)} clinical notes",
            extra={
                "file_name": file_name,
                "page_count": document.page_count,
                "encounter_count": len(encounters),
                "note_count": len(notes),
            }
        )

        return StructuringResult(
            document=document,
            encounters=encounters,
            clinical_notes=notes,
            file_name=file_name
        )


# Convenience function
def structure_document(pdf_bytes: bytes, file_name: str = "") -> StructuringResult:
    """
    Convenience function to structure a PDF with default settings.

    Args:
        pdf_bytes: Raw PDF content
        file_name: Source file identifier for the clinical notes

    Returns:
        StructuringResult with pages, encounters and clinical notes
    """
    return DocumentStructuringPipeline().process_pdf(pdf_bytes, file_name)
