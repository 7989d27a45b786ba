"""Tests for the text, CSV and JSON downloads."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import List

import pytest  # type: ignore

from hireflow.jobs.schema import JobRequirements
from hireflow.llm.providers import PlaceholderProvider
from hireflow.pipeline.orchestrator import CandidateAnalysis
from hireflow.pipeline.screening import ResumeUpload, screen_candidates
from hireflow.report.export import (
    CSV_FIELDS,
    DETAILED_FILENAME,
    SEPARATOR,
    format_candidate_profile,
    format_detailed_report,
    format_top_summary,
    profile_filename,
    results_from_json,
    results_to_json,
    summary_filename,
    write_results_csv,
)


@pytest.fixture
def analyses(resume_file: Path, junior_resume_file: Path, job: JobRequirements) -> List[CandidateAnalysis]:
    uploads = [
        ResumeUpload(file_name="jane_doe.txt", path=str(resume_file)),
        ResumeUpload(file_name="resume.txt", path=str(junior_resume_file)),
    ]
    return screen_candidates(uploads, job, provider=PlaceholderProvider())


def test_top_summary(analyses: List[CandidateAnalysis]) -> None:
    """The summary lists rank, name, score and email per candidate."""
    summary = format_top_summary(analyses)
    lines = summary.splitlines()
    assert lines[0] == "TOP 2 CANDIDATE RECOMMENDATIONS"
    assert lines[2] == "RANK 1: Jane Doe"
    assert lines[3] == "Score: 84%"
    assert lines[4] == "Email: jane.doe@example.com"
    assert lines[5].startswith("Recommendation: HIRE")
    assert "RANK 2: John Smith" in lines
    assert summary_filename(analyses) == "top-2-candidates-summary.txt"


def test_candidate_profile(analyses: List[CandidateAnalysis]) -> None:
    """The profile covers one candidate's contact details and scores."""
    profile = format_candidate_profile(analyses[0])
    assert profile.startswith("CANDIDATE PROFILE: Jane Doe\n\nRANK: 1\nOVERALL SCORE: 84%")
    assert "Phone: 5551234567" in profile
    assert "Technical: 82%" in profile
    assert "Cultural Fit: 77%" in profile
    assert "- Complete contact information" in profile
    assert "SKILLS:\nPython, PostgreSQL, AWS, Docker, Kubernetes, Leadership, Communication" in profile


def test_detailed_report_separates_candidates(analyses: List[CandidateAnalysis]) -> None:
    """Candidates in the detailed report are separated by rules."""
    report = format_detailed_report(analyses)
    assert report.startswith("DETAILED CANDIDATE ANALYSIS REPORT")
    assert report.count(SEPARATOR) == 2
    assert report.index("CANDIDATE: Jane Doe") < report.index("CANDIDATE: John Smith")
    assert DETAILED_FILENAME == "detailed-analysis-report.txt"


def test_profile_filename() -> None:
    """Profile file names are slugs of the candidate name."""
    assert profile_filename("Jane  Doe") == "jane-doe-profile.txt"
    assert profile_filename("José O'Neil") == "jos-oneil-profile.txt"
    assert profile_filename("") == "candidate-profile.txt"


def test_write_results_csv(tmp_path: Path, analyses: List[CandidateAnalysis]) -> None:
    """The CSV has one row per candidate with every score."""
    out = tmp_path / "results.csv"
    write_results_csv(analyses, str(out))
    with out.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        rows = list(reader)
        assert reader.fieldnames == CSV_FIELDS
    assert rows[0]["rank"] == "1"
    assert rows[0]["name"] == "Jane Doe"
    assert rows[0]["overall"] == "84"
    assert rows[0]["overall_fit"] == "Good"
    assert rows[1]["name"] == "John Smith"


def test_results_json_round_trip(analyses: List[CandidateAnalysis]) -> None:
    """Results survive a JSON round trip unchanged."""
    restored = results_from_json(results_to_json(analyses))
    assert restored == analyses
    assert restored[0].candidate.roles[0].company == "Acme Corp"
    assert restored[0].agent_feedbacks[0].agent == "HR Agent"
