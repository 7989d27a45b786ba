"""Tests for résumé intake.

These tests exercise `parse_resume` in both heuristic and LLM modes.
Real providers are never contacted: the LLM path is driven by the
scripted `FakeProvider` from ``conftest.py``, and provider failures are
simulated to check that the heuristic result is used instead.
"""

from __future__ import annotations

from pathlib import Path
from typing import List

import docx
import pytest  # type: ignore
from conftest import LLM_ANSWER, FakeProvider

from hireflow.llm.providers import PlaceholderProvider
from hireflow.resume.parse_resume import (
    UnsupportedResumeFormat,
    extract_text_from_file,
    load_candidate_json,
    parse_resume,
    parse_resume_text,
    save_candidate_json,
)


def test_parse_resume_text_heuristic(sample_resume_text: str) -> None:
    """The heuristic chain extracts the sample résumé's fields."""
    candidate = parse_resume_text(sample_resume_text, "jane_doe.txt")
    assert candidate.name == "Jane Doe"
    assert candidate.email == "jane.doe@example.com"
    assert candidate.phone == "5551234567"
    assert candidate.location == "Austin, TX"
    assert candidate.technical_skills == ["Python", "PostgreSQL", "AWS", "Docker", "Kubernetes"]
    assert candidate.soft_skills == ["Leadership", "Communication"]
    assert candidate.keywords == candidate.technical_skills + candidate.soft_skills
    assert candidate.experience_years == 4
    assert candidate.education_level == "Bachelors"
    assert [role.company for role in candidate.roles] == ["Acme Corp", "Initech"]
    assert candidate.languages == ["English", "Spanish"]
    assert candidate.certifications == ["AWS Certified Solutions Architect"]
    assert candidate.parsing_method == "regex"
    assert candidate.file_name == "jane_doe.txt"


def test_parse_resume_without_llm(resume_file: Path) -> None:
    """Disabling the LLM returns the heuristic result."""
    candidate = parse_resume(str(resume_file), use_llm=False)
    assert candidate.name == "Jane Doe"
    assert candidate.parsing_method == "regex"


def test_parse_resume_placeholder_provider_skips_llm(resume_file: Path) -> None:
    """The placeholder provider is never prompted."""
    candidate = parse_resume(str(resume_file), use_llm=True, provider=PlaceholderProvider())
    assert candidate.parsing_method == "regex"


def test_parse_resume_with_llm_fills_gaps_from_heuristics(resume_file: Path) -> None:
    """Fields the model left empty are filled from the heuristics."""
    provider = FakeProvider([LLM_ANSWER])
    candidate = parse_resume(str(resume_file), use_llm=True, provider=provider)
    assert candidate.parsing_method == "llm"
    assert candidate.experience_years == 7
    assert candidate.technical_skills == ["Python", "Go", "Kubernetes"]
    assert candidate.keywords == ["Python", "Go", "Kubernetes", "Leadership", "Mentoring"]
    # "Not provided" in the answer keeps the heuristic value.
    assert candidate.github == "github.com/janedoe"
    assert candidate.summary.startswith("Backend engineer")
    assert provider.temperatures == [0.1]
    assert "Jane Doe" in provider.prompts[0]


def test_parse_resume_llm_failure_falls_back(resume_file: Path) -> None:
    """A provider failure returns the heuristic result."""
    candidate = parse_resume(str(resume_file), use_llm=True, provider=FakeProvider(fail=True))
    assert candidate.parsing_method == "regex"
    assert candidate.name == "Jane Doe"


def test_parse_resume_uses_upload_name_hint(junior_resume_file: Path) -> None:
    """The original upload name is used as a name hint."""
    candidate = parse_resume(str(junior_resume_file), use_llm=False, file_name="ada_lovelace.txt")
    assert candidate.name == "Ada Lovelace"
    assert candidate.file_name == "ada_lovelace.txt"


def test_extract_text_from_docx(tmp_path: Path) -> None:
    """Word paragraphs are joined line by line."""
    document = docx.Document()
    document.add_paragraph("Jane Doe")
    document.add_paragraph("Email: jane@example.com")
    path = tmp_path / "cv.docx"
    document.save(str(path))
    text = extract_text_from_file(str(path))
    assert "Jane Doe\nEmail: jane@example.com" in text
    assert parse_resume(str(path), use_llm=False).email == "jane@example.com"


def _write_pdf(path: Path, lines: List[str]) -> None:
    """Write a one-page PDF that shows ``lines`` in Helvetica."""
    stream = "BT /F1 12 Tf 14 TL 72 720 Td " + " ".join(f"({line}) Tj T*" for line in lines) + " ET"
    objects = [
        "<< /Type /Catalog /Pages 2 0 R >>",
        "<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] /Contents 4 0 R "
        "/Resources << /Font << /F1 5 0 R >> >> >>",
        f"<< /Length {len(stream)} >>\nstream\n{stream}\nendstream",
        "<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    data = b"%PDF-1.4\n"
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(data))
        data += f"{number} 0 obj\n{body}\nendobj\n".encode("latin-1")
    xref_offset = len(data)
    data += f"xref\n0 {len(objects) + 1}\n0000000000 65535 f \n".encode("latin-1")
    for offset in offsets:
        data += f"{offset:010d} 00000 n \n".encode("latin-1")
    data += (
        f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\n"
        f"startxref\n{xref_offset}\n%%EOF\n"
    ).encode("latin-1")
    path.write_bytes(data)


def test_extract_text_from_pdf(tmp_path: Path) -> None:
    """PDF pages are read with pdfplumber and feed the heuristic parser."""
    path = tmp_path / "cv.pdf"
    _write_pdf(path, ["Jane Doe", "Email: jane.doe@example.com", "Skills", "Python, Docker"])
    text = extract_text_from_file(str(path))
    assert "jane.doe@example.com" in text
    assert "Python" in text
    candidate = parse_resume(str(path), use_llm=False)
    assert candidate.email == "jane.doe@example.com"
    assert "Docker" in candidate.skills


def test_extract_text_rejects_unknown_extension(tmp_path: Path) -> None:
    """Unknown extensions raise UnsupportedResumeFormat."""
    path = tmp_path / "resume.rtf"
    path.write_text("Jane", encoding="utf-8")
    with pytest.raises(UnsupportedResumeFormat):
        extract_text_from_file(str(path))


def test_extract_text_missing_file(tmp_path: Path) -> None:
    """A missing file raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        extract_text_from_file(str(tmp_path / "missing.pdf"))


def test_candidate_json_round_trip(tmp_path: Path, sample_resume_text: str) -> None:
    """Candidates survive a JSON round trip unchanged."""
    candidate = parse_resume_text(sample_resume_text)
    out = tmp_path / "candidate.json"
    save_candidate_json(candidate, str(out))
    assert load_candidate_json(str(out)) == candidate
