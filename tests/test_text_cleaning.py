"""Tests for résumé text cleaning and section detection."""

from __future__ import annotations

from hireflow.resume.sections import extract_value_for_key, find_section
from hireflow.resume.text import clean_text, extract_lines, extract_sentences, readable_words


def test_clean_text_removes_pdf_and_html_noise() -> None:
    """PDF markers and HTML fragments are stripped."""
    raw = "%PDF-1.4\n<< /Type /Page >>\nJane   Doe\n<b>Engineer</b> &amp; lead\n%%EOF"
    cleaned = clean_text(raw)
    assert "PDF" not in cleaned
    assert "/Type" not in cleaned
    assert "<b>" not in cleaned
    assert "&amp;" not in cleaned
    assert "Jane Doe" in cleaned
    assert "Engineer" in cleaned


def test_clean_text_keeps_line_breaks_and_collapses_blank_runs() -> None:
    """Line breaks survive while whitespace runs collapse."""
    cleaned = clean_text("Skills\r\n\r\n\r\n\r\nPython,\t Go  ")
    assert cleaned == "Skills\n\nPython, Go"


def test_clean_text_handles_empty_input() -> None:
    """Empty or non-string input yields an empty string."""
    assert clean_text("") == ""
    assert clean_text(None) == ""  # type: ignore[arg-type]


def test_clean_text_keeps_accented_letters() -> None:
    """Accented letters are kept."""
    assert clean_text("José Müller") == "José Müller"


def test_extract_lines_drops_blank_lines() -> None:
    """Lines are stripped and blank ones dropped."""
    assert extract_lines("  a \n\n b\r\nc ") == ["a", "b", "c"]


def test_readable_words_filters_noise_tokens() -> None:
    """Short tokens, symbols and small numbers are dropped."""
    words = readable_words("Jane 42 5551234567 x ###")
    assert words == ["Jane", "5551234567"]


def test_extract_sentences_keeps_reasonable_fragments() -> None:
    """Only sentences of a reasonable length starting with a letter are kept."""
    sentences = extract_sentences("Short. This sentence is long enough to keep! 123 starts with digits.")
    assert sentences == ["This sentence is long enough to keep"]


def test_find_section_stops_at_next_known_header(sample_resume_text: str) -> None:
    """A section ends at the next known heading."""
    section = find_section(sample_resume_text, ["skills"])
    assert section == "Python, Docker, Kubernetes, PostgreSQL, AWS, Leadership, Communication"


def test_find_section_returns_none_without_header() -> None:
    """No heading means no section."""
    assert find_section("Jane Doe\nPython developer", ["education"]) is None


def test_find_section_ignores_long_lines_as_headers() -> None:
    """Long lines are never treated as headings."""
    text = (
        "I have plenty of experience shipping production systems in regulated industries\n"
        "Skills\nPython"
    )
    assert find_section(text, ["experience"]) is None


def test_extract_value_for_key_is_case_insensitive() -> None:
    """Key lookup ignores case and accepts several separators."""
    lines = ["NAME: Jane Doe", "e-mail - jane@example.com"]
    assert extract_value_for_key(lines, ["name"]) == "Jane Doe"
    assert extract_value_for_key(lines, ["email", "e-mail"]) == "jane@example.com"
    assert extract_value_for_key(lines, ["phone"]) is None


def test_clean_text_keeps_bullets_and_normalises_dashes() -> None:
    """Bullets survive cleaning while dash and quote variants become ASCII."""
    assert clean_text("• Led – O’Brien") == "• Led - O'Brien"
    assert clean_text("2019 — 2023 remote") == "2019 - 2023 remote"


def test_clean_text_replaces_control_and_format_characters() -> None:
    """Control, zero-width and private-use characters become spaces."""
    assert clean_text("Jane\x00Doe\u200b\nPython\uf0b7Go\x07") == "Jane Doe\nPython Go"
