"""Tests for the on-disk session store."""

from __future__ import annotations

import os
import time
from pathlib import Path

import pytest  # type: ignore

from hireflow.jobs.schema import JobRequirements
from hireflow.llm.providers import PlaceholderProvider
from hireflow.pipeline.screening import screen_candidates
from hireflow.store.session import SessionNotFound, SessionStore, sanitize_file_name


@pytest.fixture
def store(tmp_path: Path) -> SessionStore:
    return SessionStore(str(tmp_path / "sessions"))


def test_create_session_makes_unique_directories(store: SessionStore) -> None:
    """Each session gets its own directory."""
    first = store.create_session()
    second = store.create_session()
    assert first != second
    assert os.path.isdir(os.path.join(store.session_path(first), "resumes"))


def test_unknown_or_malformed_session_ids(store: SessionStore) -> None:
    """Unknown ids and path tricks raise SessionNotFound."""
    for session_id in ("missing", "../etc", "", "a/b"):
        with pytest.raises(SessionNotFound):
            store.session_path(session_id)


def test_job_round_trip(store: SessionStore, job: JobRequirements) -> None:
    """The stored job description reads back unchanged."""
    session_id = store.create_session()
    assert store.load_job(session_id) is None
    store.save_job(session_id, job)
    assert store.load_job(session_id) == job


def test_save_resume_keeps_original_name(store: SessionStore) -> None:
    """Stored résumés keep the original name in the manifest."""
    session_id = store.create_session()
    first = store.save_resume(session_id, "../Jane Doe.PDF", b"%PDF-1.4")
    second = store.save_resume(session_id, "cv.docx", b"PK")
    assert first.file_name == "Jane Doe.PDF"
    assert os.path.basename(first.path) == "001_Jane_Doe.pdf"
    assert os.path.basename(second.path) == "002_cv.docx"
    assert Path(first.path).read_bytes() == b"%PDF-1.4"
    assert store.list_resumes(session_id) == [first, second]


def test_sanitize_file_name() -> None:
    """Upload names are made safe while keeping the extension."""
    assert sanitize_file_name("my résumé (final).DOCX") == "my_resume_final.docx"
    assert sanitize_file_name("../../") == "resume"
    assert len(sanitize_file_name("a" * 200 + ".pdf")) == 80


def test_results_round_trip(store: SessionStore, resume_file: Path, job: JobRequirements) -> None:
    """Stored results read back unchanged."""
    session_id = store.create_session()
    assert store.load_results(session_id) is None
    upload = store.save_resume(session_id, "jane_doe.txt", resume_file.read_bytes())
    analyses = screen_candidates([upload], job, provider=PlaceholderProvider())
    store.save_results(session_id, analyses)
    assert store.load_results(session_id) == analyses


def test_cleanup_old_sessions(store: SessionStore) -> None:
    """Sessions older than the retention period are removed."""
    old = store.create_session()
    recent = store.create_session()
    stale = time.time() - 40 * 24 * 3600
    os.utime(store.session_path(old), (stale, stale))
    assert store.cleanup_old_sessions(30) == [old]
    assert os.path.isdir(store.session_path(recent))
    with pytest.raises(SessionNotFound):
        store.session_path(old)


def test_cleanup_without_base_dir(tmp_path: Path) -> None:
    """Cleanup on a missing base directory removes nothing."""
    assert SessionStore(str(tmp_path / "nothing")).cleanup_old_sessions() == []
