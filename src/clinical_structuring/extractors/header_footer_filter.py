# src/clinical_structuring/extractors/header_footer_filter.py
"""
Header/footer suppression for one Clinical Notes section.

Two independent checks flag a line as boilerplate:
1. Pattern: page numbers, standalone numbers, running header prefixes,
   bare ISO dates, "Generated on" / "Exported on" stamps.
2. Frequency: the line's normalized form (lowercase, collapsed whitespace)
   occurs more than HEADER_FOOTER_MAX_REPEATS times in the section.

Blank lines are never removed; note splitting relies on them.
"""

from collections import Counter
from typing import List, Optional, Sequence, Set, Tuple
import logging

from ..config import StructuringSettings, structuring_settings
from ..constants import BOILERPLATE_PATTERNS, TaggedPattern, header_prefix_pattern
from ..utils.text_normalizer import normalize_line


class HeaderFooterFilter:
    """
    Flags running headers, footers and page stamps inside one section.

    Works on line lists so callers can keep each surviving line's original
    index; filter() is the text-in, text-out form.
    """

    def __init__(self, settings: Optional[StructuringSettings] = None):
        self.settings = settings or structuring_settings
        self.logger = logging.getLogger(__name__)
        self.patterns = BOILERPLATE_PATTERNS + tuple(
            TaggedPattern("header_prefix", header_prefix_pattern(prefix))
            for prefix in self.settings.HEADER_PREFIXES
            if prefix.strip()
        )

    def filter(self, text: str) -> str:
        """Return the region with boilerplate lines removed."""
        lines = text.split("\n")
        return "\n".join(line for _, line in self.filter_lines(lines))

    def filter_lines(self, lines: Sequence[str]) -> List[Tuple[int, str]]:
        """Kept lines paired with their index in the input."""
        removable = self.removable_indexes(lines)
        return [(index, line) for index, line in enumerate(lines) if index not in removable]

    def removable_indexes(self, lines: Sequence[str]) -> Set[int]:
        frequencies = Counter(normalize_line(line) for line in lines if line.strip())
        removable = set()

        for index, line in enumerate(lines):
            if not line.strip():
                continue

            if self.is_boilerplate(line):
                removable.add(index)
            elif frequencies[normalize_line(line)] > self.settings.HEADER_FOOTER_MAX_REPEATS:
                removable.add(index)

        if removable:
            repeated = sorted(
                form for form, count in frequencies.items()
                if count > self.settings.HEADER_FOOTER_MAX_REPEATS
            )
            self.logger.debug(
                f"Removing {len(removable)} boilerplate lines "
                f"({len(repeated)} repeated forms: {repeated[:5]})"
            )

        return removable

    def is_boilerplate(self, line: str) -> bool:
        stripped = line.strip()
        return any(tagged.pattern.search(stripped) for tagged in self.patterns)
