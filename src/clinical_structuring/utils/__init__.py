# src/clinical_structuring/utils/__init__.py

from .exceptions import (
    StructuringError,
    DocumentProcessingError,
    PDFExtractionError,
    ConfigurationError,
)
from .text_normalizer import normalize_line, markdown_to_plain_text

__all__ = [
    "StructuringError",
    "DocumentProcessingError",
    "PDFExtractionError",
    "ConfigurationError",
    "normalize_line",
    "markdown_to_plain_text",
]
