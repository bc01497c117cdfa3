# ============================================================================
# src/clinical_structuring/extractors/clinical_note_segmenter.py
# ============================================================================
"""
Clinical Note Segmentation

Splits the "Clinical Notes" sections of a structured record export into
individual notes.

Flow per section:
    Section text → Header/footer filter → Created: anchors → Note ranges
    → Metadata (date, location) → Artifact cleanup → Length check

A `Created:` line anchors exactly one note. The note begins at the nearest
date line above the anchor (within CREATED_LOOKBACK_LINES, never crossing
another anchor), or at the anchor itself, and runs to the next note's start.

Metadata quirk, kept on purpose: the note date is the FIRST date found in
the note, the location is the LAST institution found.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple
import logging

from ..config import StructuringSettings, structuring_settings
from ..constants import (
    BARE_DATE_LINE,
    BARE_DATE_MAX_LENGTH,
    BARE_PAGE_LINE,
    CLINICAL_NOTES_HEADING,
    CREATED_ANCHOR,
    INSTITUTION_PATTERNS,
    NOTE_DATE_PATTERNS,
    SECTION_END_HEADING,
)
from ..core.document import PAGE_MARKER_PATTERN, Page, resolve_page_number
from ..core.records import ClinicalNote
from ..utils.text_normalizer import markdown_to_plain_text
from .header_footer_filter import HeaderFooterFilter


@dataclass(frozen=True)
class NoteSection:
    """Character range of one Clinical Notes section in the full markdown."""
    start: int  # end of the section heading line
    end: int


@dataclass(frozen=True)
class _NoteDraft:
    offset: int
    markdown: str
    content: str
    date: str
    location: str


class ClinicalNoteSegmenter:
    """
    Segments Clinical Notes sections into ClinicalNote records.

    note_index runs from 1 across every section of the document.
    """

    def __init__(
        self,
        settings: Optional[StructuringSettings] = None,
        header_footer_filter: Optional[HeaderFooterFilter] = None
    ):
        self.settings = settings or structuring_settings
        self.header_footer_filter = header_footer_filter or HeaderFooterFilter(self.settings)
        self.logger = logging.getLogger(__name__)

    def segment(
        self,
        full_markdown: str,
        pages: Sequence[Page],
        file_name: str = ""
    ) -> List[ClinicalNote]:
        """
        Extract clinical notes from the full document markdown.

        Args:
            full_markdown: Concatenated markdown with page markers
            pages: Pages the markdown was built from (for page attribution)
            file_name: Source file identifier copied onto every note

        Returns:
            Notes in document order; empty when no section exists
        """
        sections = self.find_sections(full_markdown)
        created_markers = sum(
            1 for line in full_markdown.split("\n") if CREATED_ANCHOR.match(line)
        )

        self.logger.info(
            f"Clinical Notes sections found: {len(sections)}, "
            f"Created: markers in document: {created_markers}"
        )

        if not sections:
            self.logger.info("No Clinical Notes section found; nothing to extract")
            return []

        notes = []
        for section in sections:
            for draft in self._segment_section(full_markdown, section):
                notes.append(ClinicalNote(
                    file_name=file_name,
                    page=resolve_page_number(pages, draft.offset),
                    content=draft.content,
                    markdown=draft.markdown,
                    note_index=len(notes) + 1,
                    date=draft.date,
                    location=draft.location
                ))

        self.logger.info(f"Extracted {len(notes)} clinical notes from {len(sections)} sections")
        return notes

    def find_sections(self, full_markdown: str) -> List[NoteSection]:
        """
        Locate every Clinical Notes section.

        A section ends where the next Clinical Notes heading begins. The last
        one ends at the next level 1/2 heading other than a page marker, or at
        the end of the document.
        """
        headings = list(CLINICAL_NOTES_HEADING.finditer(full_markdown))
        sections = []

        for position, heading in enumerate(headings):
            start = heading.end()
            if position + 1 < len(headings):
                end = headings[position + 1].start()
            else:
                end = self._find_section_end(full_markdown, start)
            sections.append(NoteSection(start=start, end=end))

        return sections

    def _find_section_end(self, full_markdown: str, start: int) -> int:
        for heading in SECTION_END_HEADING.finditer(full_markdown, start):
            if PAGE_MARKER_PATTERN.match(heading.group(0)):
                continue
            return heading.start()
        return len(full_markdown)

    def _segment_section(self, full_markdown: str, section: NoteSection) -> List[_NoteDraft]:
        raw_lines = full_markdown[section.start:section.end].split("\n")

        line_offsets = []
        offset = section.start
        for line in raw_lines:
            line_offsets.append(offset)
            offset += len(line) + 1

        kept = self.header_footer_filter.filter_lines(raw_lines)
        lines = [line for _, line in kept]

        starts = self.find_note_starts(lines)
        if not starts:
            self.logger.debug("Clinical Notes section has no Created: anchors")
            return []

        drafts = []
        for position, start in enumerate(starts):
            end = starts[position + 1] if position + 1 < len(starts) else len(lines)
            note_lines = lines[start:end]

            date, location = self.extract_metadata(note_lines)
            body = [line for line in note_lines if not self.is_artifact_line(line)]
            markdown = "\n".join(body).strip()
            content = markdown_to_plain_text(markdown)

            if len(content) < self.settings.MIN_NOTE_CONTENT_LENGTH:
                self.logger.debug(f"Discarding short note candidate ({len(content)} chars)")
                continue

            drafts.append(_NoteDraft(
                offset=line_offsets[kept[start][0]],
                markdown=markdown,
                content=content,
                date=date,
                location=location
            ))

        return drafts

    def find_note_starts(self, lines: Sequence[str]) -> List[int]:
        """Start line index of every note, ascending."""
        starts = set()
        lookback = self.settings.CREATED_LOOKBACK_LINES

        for index, line in enumerate(lines):
            if not CREATED_ANCHOR.match(line):
                continue

            start = index
            for candidate in range(index - 1, max(index - lookback, 0) - 1, -1):
                if CREATED_ANCHOR.match(lines[candidate]):
                    break
                if self.find_date(lines[candidate]):
                    start = candidate
                    break

            starts.add(start)

        return sorted(starts)

    def extract_metadata(self, note_lines: Sequence[str]) -> Tuple[str, str]:
        """(date, location): first date in the note, last institution in the note."""
        date = ""
        location = ""

        for line in note_lines:
            if not date:
                date = self.find_date(line)
            found = self.find_location(line)
            if found:
                location = found

        return date, location

    @staticmethod
    def find_date(line: str) -> str:
        for tagged in NOTE_DATE_PATTERNS:
            match = tagged.pattern.search(line)
            if match:
                return match.group(0)
        return ""

    @staticmethod
    def find_location(line: str) -> str:
        for tagged in INSTITUTION_PATTERNS:
            match = tagged.pattern.search(line)
            if match:
                return match.group(0).strip()
        return ""

    @staticmethod
    def is_artifact_line(line: str) -> bool:
        """Bare date or bare page number left over from the export layout."""
        text = markdown_to_plain_text(line)
        if not text:
            return False
        if len(text) < BARE_DATE_MAX_LENGTH and BARE_DATE_LINE.fullmatch(text):
            return True
        return bool(BARE_PAGE_LINE.fullmatch(text))


def extract_clinical_notes(
    full_markdown: str,
    pages: Sequence[Page],
    file_name: str = "",
    settings: Optional[StructuringSettings] = None
) -> List[ClinicalNote]:
    """Convenience wrapper around ClinicalNoteSegmenter.segment()."""
    return ClinicalNoteSegmenter(settings).segment(full_markdown, pages, file_name)
