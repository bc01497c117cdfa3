# src/clinical_structuring/extractors/markdown_structurer.py
"""
Markdown structuring of reconstructed lines.

Each line becomes either a heading (large average font size, or a short
all-caps line) or a plain paragraph line. Empty lines are kept as blank
markdown lines so paragraph breaks survive.
"""

from statistics import mean
from typing import Optional, Sequence
import logging

from ..config import StructuringSettings, structuring_settings
from ..core.document import Line, Page, TextToken
from ..utils.exceptions import ConfigurationError


class MarkdownStructurer:
    """Converts a page's lines into markdown and builds the Page record."""

    def __init__(self, settings: Optional[StructuringSettings] = None):
        self.settings = settings or structuring_settings
        self.logger = logging.getLogger(__name__)
        self._check_thresholds()

    def structure_page(
        self,
        page_number: int,
        tokens: Sequence[TextToken],
        lines: Sequence[Line]
    ) -> Page:
        """
        Build the Page for one decoded page.

        Args:
            page_number: 1-based page number
            tokens: Tokens in extraction order (used for the plain text)
            lines: Reading-order lines built from the same tokens

        Returns:
            Page with markdown, plain text and counts
        """
        markdown = self.to_markdown(lines)

        return Page(
            page_number=page_number,
            raw_text=self.to_plain_text(tokens),
            markdown=markdown,
            line_count=len(lines),
            item_count=len(tokens)
        )

    def _check_thresholds(self):
        s = self.settings
        if not s.HEADING_FONT_SIZE < s.H2_FONT_SIZE < s.H1_FONT_SIZE:
            raise ConfigurationError(
                f"Heading font sizes must increase: HEADING_FONT_SIZE={s.HEADING_FONT_SIZE}, "
                f"H2_FONT_SIZE={s.H2_FONT_SIZE}, H1_FONT_SIZE={s.H1_FONT_SIZE}"
            )
        if s.ALL_CAPS_MAX_LENGTH - s.ALL_CAPS_MIN_LENGTH < 2:
            raise ConfigurationError(
                f"No line length fits ALL_CAPS_MIN_LENGTH={s.ALL_CAPS_MIN_LENGTH} "
                f"and ALL_CAPS_MAX_LENGTH={s.ALL_CAPS_MAX_LENGTH}"
            )

    def to_markdown(self, lines: Sequence[Line]) -> str:
        return "\n".join(self.line_to_markdown(line) for line in lines)

    @staticmethod
    def to_plain_text(tokens: Sequence[TextToken]) -> str:
        """Token texts in extraction order, ignoring line structure."""
        return " ".join(token.text for token in tokens)

    def line_to_markdown(self, line: Line) -> str:
        if not line:
            return ""

        text = " ".join(token.text for token in line).strip()
        if not text:
            return ""

        avg_font_size = self.average_font_size(line)
        if self.is_heading(text, avg_font_size):
            return f"{'#' * self.heading_level(avg_font_size)} {text}"

        return text

    def average_font_size(self, line: Line) -> float:
        """Mean glyph height, the font-size proxy; zero heights count as DEFAULT_FONT_SIZE."""
        return mean(token.height or self.settings.DEFAULT_FONT_SIZE for token in line)

    def is_heading(self, text: str, avg_font_size: float) -> bool:
        if avg_font_size > self.settings.HEADING_FONT_SIZE:
            return True

        # Lines without letters count as all caps too
        is_all_caps = text == text.upper() and len(text) > self.settings.ALL_CAPS_MIN_LENGTH
        return is_all_caps and len(text) < self.settings.ALL_CAPS_MAX_LENGTH

    def heading_level(self, avg_font_size: float) -> int:
        if avg_font_size > self.settings.H1_FONT_SIZE:
            return 1
        if avg_font_size > self.settings.H2_FONT_SIZE:
            return 2
        if avg_font_size > self.settings.HEADING_FONT_SIZE:
            return 3
        return 2
