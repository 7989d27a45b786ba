"""Tests for name, email, phone, location and profile link extraction.

Each extractor walks a chain of strategies; the tests below pin the
order of that chain and the sentinel returned when nothing matches.
"""

from __future__ import annotations

from hireflow.resume.contact import (
    EMAIL_NOT_PROVIDED,
    LOCATION_NOT_PROVIDED,
    NAME_NOT_FOUND,
    NOT_PROVIDED,
    PHONE_NOT_PROVIDED,
    extract_email,
    extract_github,
    extract_linkedin,
    extract_location,
    extract_name,
    extract_phone,
)
from hireflow.resume.parse_resume import parse_resume_text


def test_name_from_key_value_line() -> None:
    """A "Name:" line wins over everything else."""
    assert extract_name("Curriculum Vitae\nName: Maria Garcia Lopez\n") == "Maria Garcia Lopez"


def test_name_from_file_name_beats_text() -> None:
    """A descriptive file name is preferred over the text."""
    assert extract_name("Some Heading Here\n", file_name="maria_garcia.pdf") == "Maria Garcia"


def test_generic_file_name_is_ignored(sample_resume_text: str) -> None:
    """Generic or single-word file names are not used as names."""
    assert extract_name(sample_resume_text, file_name="resume_final.pdf") == "Jane Doe"
    assert extract_name(sample_resume_text, file_name="jane.pdf") == "Jane Doe"


def test_name_from_capitalised_line(sample_resume_text: str) -> None:
    """A line of capitalised words near the top is taken as the name."""
    assert extract_name(sample_resume_text) == "Jane Doe"


def test_name_falls_back_to_first_line() -> None:
    """The first line is used when it only holds name characters."""
    assert extract_name("o'brien\nsoftware developer") == "o'brien"


def test_name_not_found() -> None:
    """No usable line yields the sentinel."""
    assert extract_name("") == NAME_NOT_FOUND
    assert extract_name("12345 @@@\nmore text") == NAME_NOT_FOUND


def test_email_prefers_labelled_line() -> None:
    """An "Email:" line wins over other addresses."""
    text = "Contact recruiter@agency.com\nEmail: jane@example.com"
    assert extract_email(text) == "jane@example.com"


def test_email_anywhere_in_text() -> None:
    """Any address in the text is found when no label exists."""
    assert extract_email("reach me at jane.doe+jobs@mail.example.co.uk today") == (
        "jane.doe+jobs@mail.example.co.uk"
    )
    assert extract_email("no address here") == EMAIL_NOT_PROVIDED


def test_phone_from_labelled_line_is_reduced_to_digits() -> None:
    """Labelled phone numbers keep only digits and "+"."""
    assert extract_phone("Phone: +1 (555) 123-4567") == "+15551234567"


def test_phone_labelled_line_needs_seven_digits() -> None:
    """A label without enough digits is skipped."""
    assert extract_phone("Contact: see LinkedIn\n555-123-4567") == "555-123-4567"


def test_phone_indian_mobile_format() -> None:
    """+91 mobile numbers are matched first."""
    assert extract_phone("Call +91 9876543210 anytime") == "+91 9876543210"


def test_phone_not_taken_from_date_ranges() -> None:
    """Year ranges are never reported as phone numbers."""
    assert extract_phone("Engineer 2015 - 2019") == PHONE_NOT_PROVIDED


def test_location_from_labelled_line() -> None:
    """A "Location:" line wins."""
    assert extract_location("Jane Doe\nLocation: Berlin, Germany") == "Berlin, Germany"


def test_location_prefers_multi_word_city() -> None:
    """Multi-word cities with a state code are matched whole."""
    assert extract_location("Jane Doe\nSan Francisco, CA\n") == "San Francisco, CA"


def test_location_city_and_state_code(sample_resume_text: str) -> None:
    """"City, ST" lines are found."""
    assert extract_location(sample_resume_text) == "Austin, TX"


def test_location_city_and_country() -> None:
    """"City, Country" lines are found."""
    assert extract_location("Jane Doe\nLisbon, Portugal") == "Lisbon, Portugal"


def test_location_from_state_name() -> None:
    """A US state name is used as the location."""
    assert extract_location("Jane Doe\nWilling to work anywhere in Colorado") == "Colorado"


def test_location_from_street_address() -> None:
    """Street addresses are returned, long ones truncated."""
    text = "Jane Doe\n1200 Main St apartment number twelve near the old riverside park"
    assert extract_location("Jane Doe\n42 Elm St") == "42 Elm St"
    assert extract_location(text) == text.splitlines()[1][:50] + "..."


def test_location_not_provided() -> None:
    """No location yields the sentinel."""
    assert extract_location("Jane Doe\nPython developer") == LOCATION_NOT_PROVIDED


def test_location_skips_skill_lines() -> None:
    """Comma-separated skill lists are not mistaken for "City, Region"."""
    assert extract_location("John Smith\nSkills\nJavaScript, React, HTML, CSS") == LOCATION_NOT_PROVIDED
    assert extract_location("John Smith\nSkills\nPython, Django, Flask") == LOCATION_NOT_PROVIDED
    assert extract_location("Jane Doe\nPython, Kubernetes\nLisbon, Portugal") == "Lisbon, Portugal"


def test_profile_links(sample_resume_text: str) -> None:
    """LinkedIn and GitHub links are found and normalised."""
    assert extract_linkedin("https://www.linkedin.com/in/jane-doe/") == "https://www.linkedin.com/in/jane-doe"
    assert extract_linkedin(sample_resume_text) == "linkedin.com/in/janedoe"
    assert extract_github(sample_resume_text) == "github.com/janedoe"
    assert extract_linkedin("no links") == NOT_PROVIDED
    assert extract_github("no links") == NOT_PROVIDED


def test_contact_block_with_pdf_punctuation() -> None:
    """Curly apostrophes, en dashes and bullets in a contact block parse like ASCII."""
    candidate = parse_resume_text(
        "Siobhan O’Brien\n"
        "555–123–4567 • siobhan@example.ie\n"
        "Dublin, Ireland\n"
    )
    assert candidate.name == "Siobhan O'Brien"
    assert candidate.phone == "555-123-4567"
    assert candidate.email == "siobhan@example.ie"
    assert candidate.location == "Dublin, Ireland"
