# src/clinical_structuring/extractors/pdf_token_extractor.py
"""
Positioned token extraction from PDFs.

Decodes PDF bytes with pdfplumber and returns, for every page, the words in
extraction (text-flow) order as TextTokens. Coordinates are converted to
PDF user space (origin bottom-left, y growing upward) so that sorting by
descending y reads the page top to bottom.
"""

from io import BytesIO
from typing import Any, Dict, List
import logging

import pdfplumber

from ..core.document import TextToken
from ..utils.exceptions import PDFExtractionError


class PdfTokenExtractor:
    """
    Decodes PDF bytes into per-page token lists.

    Any decoder failure surfaces as PDFExtractionError chained to the
    original exception; no retries are attempted.
    """

    WORD_ATTRS = ["fontname", "size"]

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def extract_tokens(self, pdf_bytes: bytes) -> List[List[TextToken]]:
        """
        Extract tokens for every page.

        Args:
            pdf_bytes: Raw PDF file content

        Returns:
            One token list per page, in page order
        """
        if not pdf_bytes:
            raise PDFExtractionError("Failed to extract PDF: empty document")

        try:
            with pdfplumber.open(BytesIO(pdf_bytes)) as pdf:
                token_pages = [self._extract_page_tokens(page) for page in pdf.pages]
        except Exception as e:
            self.logger.error(f"PDF extraction error: {e}")
            raise PDFExtractionError(f"Failed to extract PDF: {e}") from e

        self.logger.info(
            f"Decoded {len(token_pages)} pages, "
            f"{sum(len(tokens) for tokens in token_pages)} tokens"
        )
        return token_pages

    def _extract_page_tokens(self, page) -> List[TextToken]:
        words = page.extract_words(extra_attrs=self.WORD_ATTRS, use_text_flow=True) or []
        return [self._word_to_token(word, page.height) for word in words]

    @staticmethod
    def _word_to_token(word: Dict[str, Any], page_height: float) -> TextToken:
        height = float(word['bottom']) - float(word['top'])
        return TextToken(
            text=word.get('text', ''),
            x=float(word['x0']),
            y=float(page_height) - float(word['bottom']),
            width=float(word['x1']) - float(word['x0']),
            height=height,
            font_name=word.get('fontname', '') or '',
            font_size=float(word.get('size') or height)
        )
