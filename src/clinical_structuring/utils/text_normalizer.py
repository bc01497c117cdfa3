# ============================================================================
# src/clinical_structuring/utils/text_normalizer.py
# ============================================================================
"""
Text Normalization Utilities

- Normalizes lines for frequency comparison (case, whitespace)
- Strips markdown syntax to produce plain text for indexing
"""

import re

_WHITESPACE = re.compile(r'\s+')

# Markdown syntax, applied in order
_HEADING_MARKERS = re.compile(r'^\s{0,3}#{1,6}\s*', re.MULTILINE)
_IMAGES = re.compile(r'!\[([^\]]*)\]\([^)]*\)')
_LINKS = re.compile(r'\[([^\]]+)\]\([^)]*\)')
_INLINE_CODE = re.compile(r'`([^`]*)`')
_BOLD = re.compile(r'(\*\*|__)(.+?)\1')
_ITALIC_STAR = re.compile(r'\*(?!\s)(.+?)(?<!\s)\*')
_ITALIC_UNDERSCORE = re.compile(r'(?<!\w)_(?!\s)(.+?)(?<!\s)_(?!\w)')


def normalize_line(line: str) -> str:
    """Lowercase and collapse internal whitespace."""
    return _WHITESPACE.sub(' ', line.strip().lower())


def markdown_to_plain_text(markdown: str) -> str:
    """
    Convert markdown to plain text.

    Removes heading markers, bold/italic emphasis, link syntax (keeping
    the link text) and inline code markers. Lossy: the markdown cannot
    be recovered from the result.
    """
    if not markdown:
        return ""

    text = _HEADING_MARKERS.sub('', markdown)
    text = _IMAGES.sub(r'\1', text)
    text = _LINKS.sub(r'\1', text)
    text = _INLINE_CODE.sub(r'\1', text)
    text = _BOLD.sub(r'\2', text)
    text = _ITALIC_STAR.sub(r'\1', text)
    text = _ITALIC_UNDERSCORE.sub(r'\1', text)

    return text.strip()
