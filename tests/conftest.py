# ============================================================================
# FILE: tests/conftest.py
# ============================================================================
"""
Pytest configuration and shared fixtures for testing.
"""

import pytest

from clinical_structuring.core.document import Document, Page, TextToken


@pytest.fixture
def make_token():
    """Factory for TextTokens; glyph height defaults to the font size."""
    def _make(text, x, y, size=12.0, font_name="Helvetica", height=None):
        return TextToken(
            text=text,
            x=x,
            y=y,
            width=len(text) * size * 0.5,
            height=size if height is None else height,
            font_name=font_name,
            font_size=size
        )
    return _make


@pytest.fixture
def make_line_tokens(make_token):
    """Factory for the tokens of one visual line, one token per word."""
    def _make(text, y, size=12.0, x_start=72.0):
        tokens = []
        x = x_start
        for word in text.split():
            token = make_token(word, x, y, size=size)
            tokens.append(token)
            x += token.width + size * 0.25
        return tokens
    return _make


@pytest.fixture
def make_page():
    def _make(page_number, markdown, raw_text=""):
        return Page(
            page_number=page_number,
            raw_text=raw_text,
            markdown=markdown,
            line_count=len(markdown.split("\n")) if markdown else 0,
            item_count=0
        )
    return _make


@pytest.fixture
def make_document(make_page):
    """Document from page markdown strings, numbered from 1."""
    def _make(*markdowns):
        return Document(pages=tuple(
            make_page(page_number, markdown)
            for page_number, markdown in enumerate(markdowns, start=1)
        ))
    return _make


@pytest.fixture
def sample_clinical_notes_markdown():
    """One Clinical Notes section with three notes, as the structurer emits it."""
    return "\n".join([
        "# PATIENT RECORD EXPORT",
        "Patient Name: Jane Doe",
        "## Clinical Notes",
        "Jan 5, 2024",
        "Mass General Hospital",
        "Created: Dr. Smith, Internal Medicine",
        "Patient seen for annual physical. Blood pressure well controlled on lisinopril.",
        "",
        "02/12/2024",
        "Brigham and Women's Hospital",
        "Created: Dr. Patel, Cardiology",
        "Echocardiogram reviewed. Ejection fraction preserved, no wall motion abnormality.",
        "",
        "2024-03-20",
        "Created: Nurse Jones",
        "Telephone follow-up. Patient reports no chest pain and is tolerating medications.",
        "",
        "## Medications",
        "Lisinopril 10 mg daily",
    ])


@pytest.fixture
def scenario_token_pages(make_line_tokens):
    """Two pages: a dated Clinical Notes entry on page 1, its prose on page 2."""
    page_one = (
        make_line_tokens("Clinical Notes", y=740, size=16.0)
        + make_line_tokens("Jan 5, 2024", y=710)
        + make_line_tokens("Mass General Hospital", y=690)
        + make_line_tokens("Created: Dr. Smith", y=670)
    )
    page_two = make_line_tokens(
        "Patient presents for follow-up of hypertension and reports good adherence.",
        y=740
    )
    return [page_one, page_two]


@pytest.fixture
def encounter_page_lines():
    """Markdown lines of a page with one visit and its context fields."""
    return [
        "Patient Summary",
        "Visit date: 03/14/2023",
        "Seen for routine follow up.",
        "Blood pressure elevated at home.",
        "Diagnosis: Hypertension",
        "Provider: Dr. Jane Doe",
    ]
