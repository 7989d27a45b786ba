"""
On-disk screening sessions.

A session is one upload → screening → results cycle.  Each session
owns a directory under the store's base directory holding the job
description, the uploaded résumés and, once screening ran, the
results, all as plain files::

    <base_dir>/<session_id>/
        job.json
        resumes.json        # [{"file_name": ..., "path": ...}]
        resumes/001_jane_doe.pdf
        results.json
"""

from __future__ import annotations

import json
import logging
import os
import re
import shutil
from datetime import datetime, timedelta
from typing import List, Optional

from werkzeug.utils import secure_filename

from ..jobs.schema import JobRequirements, job_from_dict
from ..pipeline.orchestrator import CandidateAnalysis
from ..pipeline.screening import ResumeUpload
from ..report.export import results_from_json, results_to_json

logger = logging.getLogger(__name__)

JOB_FILE = "job.json"
RESUMES_FILE = "resumes.json"
RESUMES_DIR = "resumes"
RESULTS_FILE = "results.json"

_SESSION_ID = re.compile(r"^[A-Za-z0-9_-]+$")


class SessionNotFound(KeyError):
    """Raised for unknown or malformed session ids."""


def sanitize_file_name(name: str, max_len: int = 80) -> str:
    """Sanitize an uploaded file name for storage, keeping its extension."""
    stem, ext = os.path.splitext(secure_filename(name or ""))
    ext = ext.lower()
    return (stem or "resume")[: max_len - len(ext)] + ext


class SessionStore:
    """Persist screening sessions as JSON files under ``base_dir``."""

    def __init__(self, base_dir: str) -> None:
        self.base_dir = os.path.abspath(base_dir)

    def create_session(self) -> str:
        """Create a new, uniquely named session directory and return its id."""
        datestamp = datetime.now().strftime("%y%m%d%H%M%S")
        session_id = f"{datestamp}_{os.urandom(4).hex()}"
        os.makedirs(os.path.join(self.base_dir, session_id, RESUMES_DIR), exist_ok=True)
        logger.info("Session directory created: %s", session_id)
        return session_id

    def session_path(self, session_id: str) -> str:
        """Return the directory of an existing session.

        Raises:
            SessionNotFound: If the id is malformed, would escape the base
                directory, or does not exist.
        """
        if not session_id or not _SESSION_ID.match(session_id):
            raise SessionNotFound(session_id)
        path = os.path.abspath(os.path.join(self.base_dir, session_id))
        if os.path.dirname(path) != self.base_dir or not os.path.isdir(path):
            raise SessionNotFound(session_id)
        return path

    def _read_json(self, session_id: str, name: str) -> Optional[str]:
        path = os.path.join(self.session_path(session_id), name)
        if not os.path.exists(path):
            return None
        with open(path, "r", encoding="utf-8") as f:
            return f.read()

    def _write_json(self, session_id: str, name: str, payload: str) -> None:
        path = os.path.join(self.session_path(session_id), name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(payload)

    def save_job(self, session_id: str, job: JobRequirements) -> None:
        self._write_json(session_id, JOB_FILE, json.dumps(job.to_dict(), indent=2, ensure_ascii=False))

    def load_job(self, session_id: str) -> Optional[JobRequirements]:
        payload = self._read_json(session_id, JOB_FILE)
        return job_from_dict(json.loads(payload)) if payload is not None else None

    def list_resumes(self, session_id: str) -> List[ResumeUpload]:
        payload = self._read_json(session_id, RESUMES_FILE)
        if payload is None:
            return []
        return [ResumeUpload(**item) for item in json.loads(payload)]

    def save_resume(self, session_id: str, file_name: str, data: bytes) -> ResumeUpload:
        """Store an uploaded résumé and record it in the session manifest.

        The original ``file_name`` is kept in the manifest because the
        name extractor uses it as a hint; the stored copy gets a
        sanitised, numbered name.
        """
        uploads = self.list_resumes(session_id)
        stored_name = f"{len(uploads) + 1:03d}_{sanitize_file_name(file_name)}"
        path = os.path.join(self.session_path(session_id), RESUMES_DIR, stored_name)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "wb") as f:
            f.write(data)
        upload = ResumeUpload(file_name=os.path.basename(file_name), path=path)
        uploads.append(upload)
        self._write_json(
            session_id,
            RESUMES_FILE,
            json.dumps([upload.__dict__ for upload in uploads], indent=2, ensure_ascii=False),
        )
        logger.debug("Stored %s as %s", file_name, stored_name)
        return upload

    def save_results(self, session_id: str, analyses: List[CandidateAnalysis]) -> None:
        self._write_json(session_id, RESULTS_FILE, results_to_json(analyses))

    def load_results(self, session_id: str) -> Optional[List[CandidateAnalysis]]:
        payload = self._read_json(session_id, RESULTS_FILE)
        return results_from_json(payload) if payload is not None else None

    def cleanup_old_sessions(self, days: int = 30) -> List[str]:
        """Remove sessions last modified more than ``days`` days ago.

        Returns:
            The ids of the removed sessions.
        """
        if not os.path.isdir(self.base_dir):
            return []
        cutoff = datetime.now() - timedelta(days=days)
        removed = []
        for item in sorted(os.listdir(self.base_dir)):
            item_path = os.path.join(self.base_dir, item)
            if not os.path.isdir(item_path):
                continue
            if datetime.fromtimestamp(os.path.getmtime(item_path)) < cutoff:
                try:
                    shutil.rmtree(item_path)
                except OSError as exc:
                    logger.warning("Could not remove session %s: %s", item, exc)
                    continue
                logger.info("Cleaned up old session: %s", item)
                removed.append(item)
        return removed
