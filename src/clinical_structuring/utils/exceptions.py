# ============================================================================
# src/clinical_structuring/utils/exceptions.py
# ============================================================================
"""
Custom exceptions for the clinical structuring pipeline.
"""


class StructuringError(Exception):
    """Base exception for all structuring errors."""
    pass


class DocumentProcessingError(StructuringError):
    """Error during document processing."""
    pass


class PDFExtractionError(DocumentProcessingError):
    """Error decoding positioned text from a PDF."""
    pass


class ConfigurationError(StructuringError):
    """Invalid configuration."""
    pass
