# ============================================================================
# src/clinical_structuring/extractors/encounter_extractor.py
# ============================================================================
"""
Encounter Extraction

Scans each page's markdown for date-anchored visit mentions:
- "Visit date: 03/14/2023"     (keyword, then date)
- "03/14/2023 Appointment"     (date, then keyword)
- "Date: 03/14/2023"           (generic date)

For every matching line, nearby lines are searched for provider, location
and diagnosis fields, and the free text following the line is collected as
notes. A line yields at most one encounter.
"""

from typing import Dict, List, Optional, Sequence
import logging

from ..config import StructuringSettings, structuring_settings
from ..constants import (
    ENCOUNTER_PATTERNS,
    ENCOUNTER_CONTEXT_FIELDS,
    ENCOUNTER_CONTEXT_PREFIXES,
    STRUCTURED_FIELD_HEADER,
)
from ..core.document import Page
from ..core.records import Encounter


class EncounterExtractor:
    """
    Regex-based encounter detection with a bounded context window.

    Missing context fields degrade to empty strings; they never suppress
    the encounter itself.
    """

    def __init__(self, settings: Optional[StructuringSettings] = None):
        self.settings = settings or structuring_settings
        self.logger = logging.getLogger(__name__)

    def extract(self, pages: Sequence[Page]) -> List[Encounter]:
        """
        Extract encounters from all pages, in discovery order.

        Args:
            pages: Structured pages (their markdown is scanned line by line)

        Returns:
            List of Encounter records
        """
        encounters = []

        for page in pages:
            lines = page.markdown.split("\n")

            for index, line in enumerate(lines):
                date = self._match_encounter_date(line)
                if date is None:
                    continue

                context = self._extract_context(lines, index)
                encounters.append(Encounter(
                    page=page.page_number,
                    date=date,
                    provider=context["provider"],
                    location=context["location"],
                    diagnosis=context["diagnosis"],
                    notes=context["notes"],
                    raw_text=line
                ))

        self.logger.info(f"Found {len(encounters)} encounters across {len(pages)} pages")
        return encounters

    def _match_encounter_date(self, line: str) -> Optional[str]:
        """Date captured by the first encounter pattern that matches, if any."""
        for tagged in ENCOUNTER_PATTERNS:
            match = tagged.pattern.search(line)
            if match:
                self.logger.debug(f"Encounter line matched {tagged.tag}: {line!r}")
                return match.group(1)
        return None

    def _extract_context(self, lines: List[str], index: int) -> Dict[str, str]:
        """
        Pull provider/location/diagnosis and notes around an encounter line.

        Fields: first match per field from ENCOUNTER_LINES_BEFORE lines above
        through ENCOUNTER_LINES_AFTER lines below the encounter line.
        Notes: following lines up to the first blank line, structured field
        header, or ENCOUNTER_NOTES_MAX_LINES lines.
        """
        context = {"provider": "", "location": "", "diagnosis": "", "notes": ""}

        start = max(0, index - self.settings.ENCOUNTER_LINES_BEFORE)
        end = min(len(lines), index + self.settings.ENCOUNTER_LINES_AFTER + 1)

        for line in lines[start:end]:
            for tagged in ENCOUNTER_CONTEXT_FIELDS:
                if context[tagged.tag] or not tagged.pattern.search(line):
                    continue
                context[tagged.tag] = ENCOUNTER_CONTEXT_PREFIXES[tagged.tag].sub("", line).strip()

        notes_lines = []
        notes_end = min(len(lines), index + 1 + self.settings.ENCOUNTER_NOTES_MAX_LINES)
        for line in lines[index + 1:notes_end]:
            line = line.strip()
            if not line or STRUCTURED_FIELD_HEADER.match(line):
                break
            notes_lines.append(line)

        context["notes"] = " ".join(notes_lines).strip()
        return context


def extract_encounters(
    pages: Sequence[Page],
    settings: Optional[StructuringSettings] = None
) -> List[Encounter]:
    """Convenience wrapper around EncounterExtractor.extract()."""
    return EncounterExtractor(settings).extract(pages)
