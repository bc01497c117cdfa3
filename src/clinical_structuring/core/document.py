# ============================================================================
# src/clinical_structuring/core/document.py
# ============================================================================
"""
Document model
- TextToken: positioned text run from the PDF decoder
- Line: reading-order group of tokens
- Page: structured output for one page
- Document: ordered pages plus the concatenated full markdown

The page marker written into the full markdown and the offset walk that maps
full-markdown offsets back to page numbers share page_segment(); change the
marker only there.
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, Sequence, Tuple

PAGE_MARKER_TEMPLATE = "## Page {page_number}\n\n"
PAGE_PADDING = "\n\n"

# Recognizes the marker heading line inside the full markdown
PAGE_MARKER_PATTERN = re.compile(r'^#{1,6}\s*Page\s+\d+\s*$', re.IGNORECASE)


@dataclass(frozen=True)
class TextToken:
    """A positioned run of text. y grows upward (PDF user space)."""
    text: str
    x: float
    y: float
    width: float = 0.0
    height: float = 0.0
    font_name: str = ""
    font_size: float = 0.0


# Tokens sharing an approximate baseline, left to right
Line = Tuple[TextToken, ...]


@dataclass(frozen=True)
class Page:
    page_number: int  # 1-based
    raw_text: str
    markdown: str
    line_count: int
    item_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "page": self.page_number,
            "text": self.raw_text,
            "markdown": self.markdown,
            "lineCount": self.line_count,
            "itemCount": self.item_count,
        }


def page_segment(page: Page) -> str:
    """Marker + markdown + padding for one page of the full markdown."""
    return PAGE_MARKER_TEMPLATE.format(page_number=page.page_number) + page.markdown + PAGE_PADDING


def build_full_markdown(pages: Sequence[Page]) -> str:
    return "".join(page_segment(page) for page in pages)


def resolve_page_number(pages: Sequence[Page], offset: int) -> int:
    """
    Map an offset in the full markdown to a page number.

    Walks the pages accumulating segment lengths and returns the first page
    whose cumulative end is >= offset. Offsets past the end resolve to the
    last page.
    """
    if not pages:
        return 1

    cumulative = 0
    for page in pages:
        cumulative += len(page_segment(page))
        if cumulative >= offset:
            return page.page_number

    return pages[-1].page_number


@dataclass(frozen=True)
class Document:
    pages: Tuple[Page, ...] = ()

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def full_markdown(self) -> str:
        return build_full_markdown(self.pages)

    def page_for_offset(self, offset: int) -> int:
        return resolve_page_number(self.pages, offset)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalPages": self.page_count,
            "pages": [page.to_dict() for page in self.pages],
        }
