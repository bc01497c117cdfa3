# ============================================================================
# FILE: tests/unit/test_encounter_extractor.py
# ============================================================================
"""
Unit tests for encounter extraction
"""

from clinical_structuring.config import StructuringSettings
from clinical_structuring.extractors.encounter_extractor import (
    EncounterExtractor,
    extract_encounters,
)


def test_visit_with_diagnosis_in_forward_window(make_page, encounter_page_lines):
    """Visit date line with a diagnosis three lines below"""
    page = make_page(1, "\n".join(encounter_page_lines))

    encounters = extract_encounters([page])

    assert len(encounters) == 1
    encounter = encounters[0]
    assert encounter.page == 1
    assert encounter.date == "03/14/2023"
    assert "Hypertension" in encounter.diagnosis
    assert encounter.provider == "Dr. Jane Doe"
    assert encounter.location == ""
    assert encounter.notes == "Seen for routine follow up. Blood pressure elevated at home."
    assert encounter.raw_text == "Visit date: 03/14/2023"


def test_first_pattern_wins_and_one_encounter_per_line(make_page):
    page = make_page(1, "03/01/2023 visit on 04/02/2023")

    encounters = extract_encounters([page])

    assert len(encounters) == 1
    assert encounters[0].date == "04/02/2023"


def test_date_then_keyword_pattern(make_page):
    page = make_page(1, "11/02/2022 Consultation - cardiology")

    encounters = extract_encounters([page])

    assert [e.date for e in encounters] == ["11/02/2022"]


def test_generic_date_pattern(make_page):
    page = make_page(1, "Date: 1/2/23")

    encounters = extract_encounters([page])

    assert [e.date for e in encounters] == ["1/2/23"]


def test_lines_without_dates_yield_nothing(make_page):
    page = make_page(1, "Visit summary\nNo dates recorded here")
    assert extract_encounters([page]) == []


def test_encounters_keep_page_numbers(make_page):
    pages = [
        make_page(1, "Appointment on 05/06/2021"),
        make_page(2, "Intro\nEncounter date: 07/08/2021"),
    ]

    encounters = extract_encounters(pages)

    assert [(e.page, e.date) for e in encounters] == [(1, "05/06/2021"), (2, "07/08/2021")]


def test_context_window_reaches_ten_lines_below(make_page):
    inside = ["Visit date: 03/14/2023"] + [f"Observation {n}" for n in range(9)] + ["Diagnosis: Asthma"]
    outside = ["Visit date: 03/14/2023"] + [f"Observation {n}" for n in range(10)] + ["Diagnosis: Asthma"]

    assert extract_encounters([make_page(1, "\n".join(inside))])[0].diagnosis == "Asthma"
    assert extract_encounters([make_page(1, "\n".join(outside))])[0].diagnosis == ""


def test_context_window_reaches_five_lines_above(make_page):
    inside = ["Facility: North Clinic"] + [f"Observation {n}" for n in range(4)] + ["Visit date: 03/14/2023"]
    outside = ["Facility: North Clinic"] + [f"Observation {n}" for n in range(5)] + ["Visit date: 03/14/2023"]

    assert extract_encounters([make_page(1, "\n".join(inside))])[0].location == "North Clinic"
    assert extract_encounters([make_page(1, "\n".join(outside))])[0].location == ""


def test_first_field_match_in_window_wins(make_page):
    lines = [
        "Physician: Dr. Early",
        "Visit date: 03/14/2023",
        "Physician: Dr. Late",
    ]

    encounter = extract_encounters([make_page(1, "\n".join(lines))])[0]

    assert encounter.provider == "Dr. Early"


def test_keyword_inside_line_keeps_whole_line(make_page):
    """Only a leading keyword is stripped from the value"""
    lines = ["Visit date: 03/14/2023", "Seen by provider: Dr. Who"]

    encounter = extract_encounters([make_page(1, "\n".join(lines))])[0]

    assert encounter.provider == "Seen by provider: Dr. Who"


def test_notes_stop_at_blank_line(make_page):
    lines = ["Visit date: 03/14/2023", "First remark.", "", "Unrelated paragraph."]

    encounter = extract_encounters([make_page(1, "\n".join(lines))])[0]

    assert encounter.notes == "First remark."


def test_notes_are_capped(make_page):
    lines = ["Visit date: 03/14/2023"] + [f"line {n}" for n in range(1, 21)]

    encounter = extract_encounters([make_page(1, "\n".join(lines))])[0]

    assert encounter.notes == " ".join(f"line {n}" for n in range(1, 16))


def test_window_sizes_follow_settings(make_page):
    settings = StructuringSettings(ENCOUNTER_LINES_AFTER=2, ENCOUNTER_NOTES_MAX_LINES=1)
    lines = ["Visit date: 03/14/2023", "Remark one.", "Remark two.", "Diagnosis: Asthma"]

    encounter = EncounterExtractor(settings).extract([make_page(1, "\n".join(lines))])[0]

    assert encounter.diagnosis == ""
    assert encounter.notes == "Remark one."


def test_to_dict_shape(make_page, encounter_page_lines):
    encounter = extract_encounters([make_page(1, "\n".join(encounter_page_lines))])[0]

    assert set(encounter.to_dict()) == {
        "page", "date", "provider", "location", "diagnosis", "notes", "rawText"
    }
