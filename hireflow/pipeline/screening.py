"""
Batch screening and ranking.

`screen_candidates` takes the résumés uploaded for one job, parses
each of them, sends every candidate through the orchestrator and
returns the top candidates ranked by their overall score.  A résumé
that cannot be read does not abort the batch; it is replaced by a
placeholder candidate that is still screened and flagged for manual
review.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from ..jobs.schema import DEFAULT_TOP_N, JobRequirements
from ..llm.providers import LLMProvider, get_default_provider
from ..resume.parse_resume import Candidate, parse_resume
from .orchestrator import CandidateAnalysis, ScreeningOrchestrator

logger = logging.getLogger(__name__)

PARSE_ERROR_EMAIL = "Error parsing resume"
PARSE_ERROR_SUMMARY = "Resume parsing failed - please review manually"

ProgressCallback = Callable[[int, int, str], None]


@dataclass
class ResumeUpload:
    file_name: str
    path: str


def fallback_candidate(upload: ResumeUpload, index: int) -> Candidate:
    """Candidate used when ``upload`` cannot be parsed."""
    stem = os.path.splitext(os.path.basename(upload.file_name or ""))[0]
    name = " ".join(re.sub(r"[_-]", " ", stem).split()) or f"Candidate {index}"
    return Candidate(
        name=name,
        email=PARSE_ERROR_EMAIL,
        phone="Phone not provided",
        location="Location not provided",
        summary=PARSE_ERROR_SUMMARY,
        file_name=upload.file_name,
        parsing_method="failed",
    )


def rank_candidates(analyses: Iterable[CandidateAnalysis], top_n: int) -> List[CandidateAnalysis]:
    """Sort by overall score, assign ranks and keep the first ``top_n``.

    The sort is stable, so candidates with equal scores keep their
    upload order.  A ``top_n`` below one falls back to the default of
    three.
    """
    if top_n < 1:
        top_n = DEFAULT_TOP_N
    ranked = sorted(analyses, key=lambda a: a.scores["overall"], reverse=True)
    for position, analysis in enumerate(ranked, start=1):
        analysis.rank = position
    return ranked[:top_n]


def screen_candidates(
    uploads: List[ResumeUpload],
    job: JobRequirements,
    provider: Optional[LLMProvider] = None,
    use_llm_parsing: bool = True,
    progress: Optional[ProgressCallback] = None,
) -> List[CandidateAnalysis]:
    """Screen every uploaded résumé against ``job``.

    Args:
        uploads: Résumés to screen, in upload order.
        job: Job requirements; validated before any résumé is read.
        provider: LLM provider shared by parsing and the agents.
        use_llm_parsing: Whether résumés are parsed by the model.
        progress: Optional callback ``(index, total, name)`` invoked
            before each candidate is screened; ``index`` starts at 1.

    Returns:
        The ranked top ``job.top_n_candidates`` analyses.

    Raises:
        InvalidJobDescription: If required job fields are missing.
    """
    job.validate()
    provider = provider or get_default_provider()
    orchestrator = ScreeningOrchestrator(provider)
    total = len(uploads)
    logger.info("Screening %d résumés for %s", total, job.job_title)

    analyses: List[CandidateAnalysis] = []
    for index, upload in enumerate(uploads, start=1):
        try:
            candidate = parse_resume(
                upload.path,
                use_llm=use_llm_parsing,
                provider=provider,
                file_name=upload.file_name,
            )
        except Exception as exc:  # noqa: BLE001
            logger.warning("Failed to parse %s: %s", upload.file_name, exc)
            candidate = fallback_candidate(upload, index)
        if progress is not None:
            progress(index, total, candidate.name)
        analyses.append(orchestrator.process_candidate(candidate, job))

    return rank_candidates(analyses, job.top_n_candidates)
