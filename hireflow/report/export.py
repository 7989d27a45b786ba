"""
Report formatting and export.

Provides the plain-text downloads offered on the results page (top
candidate summary, detailed report, single candidate profile), a CSV
writer using a fixed column order, and JSON round-tripping for stored
results.  Unicode is written in UTF‑8 encoding.
"""

from __future__ import annotations

import csv
import json
import re
from typing import Dict, Iterable, List

from ..agents.base import AgentFeedback
from ..pipeline.orchestrator import SCORE_KEYS, CandidateAnalysis, DetailedAnalysis
from ..resume.parse_resume import candidate_from_dict

SEPARATOR = "=" * 80

CSV_FIELDS = (
    ["rank", "name", "email", "phone", "location"]
    + SCORE_KEYS
    + ["overall_fit", "recommendation"]
)


def summary_filename(analyses: List[CandidateAnalysis]) -> str:
    return f"top-{len(analyses)}-candidates-summary.txt"


DETAILED_FILENAME = "detailed-analysis-report.txt"


def profile_filename(name: str) -> str:
    """File name for a single candidate profile: ``jane-doe-profile.txt``."""
    slug = re.sub(r"[^a-z0-9-]", "", re.sub(r"\s+", "-", (name or "").strip().lower()))
    return f"{slug or 'candidate'}-profile.txt"


def format_top_summary(analyses: List[CandidateAnalysis]) -> str:
    lines = [f"TOP {len(analyses)} CANDIDATE RECOMMENDATIONS", ""]
    for analysis in analyses:
        lines.extend(
            [
                f"RANK {analysis.rank}: {analysis.candidate.name}",
                f"Score: {analysis.scores['overall']}%",
                f"Email: {analysis.candidate.email}",
                f"Recommendation: {analysis.recommendation}",
                "",
            ]
        )
    return "\n".join(lines)


def _profile_body(analysis: CandidateAnalysis) -> List[str]:
    candidate = analysis.candidate
    scores = analysis.scores
    return [
        f"RANK: {analysis.rank}",
        f"OVERALL SCORE: {scores['overall']}%",
        "",
        "CONTACT INFO:",
        f"Email: {candidate.email}",
        f"Phone: {candidate.phone}",
        f"Location: {candidate.location}",
        "",
        "PROFESSIONAL SUMMARY:",
        f"Experience: {candidate.experience}",
        f"Education: {candidate.education}",
        "",
        "SKILLS:",
        ", ".join(candidate.skills),
        "",
        "KEY STRENGTHS:",
        *[f"- {strength}" for strength in analysis.strengths],
        "",
        "SCORE BREAKDOWN:",
        f"Technical: {scores['technical']}%",
        f"Experience: {scores['experience']}%",
        f"Education: {scores['education']}%",
        f"Communication: {scores['communication']}%",
        f"Cultural Fit: {scores['cultural_fit']}%",
        "",
        f"RECOMMENDATION: {analysis.recommendation}",
    ]


def format_detailed_report(analyses: List[CandidateAnalysis]) -> str:
    lines = ["DETAILED CANDIDATE ANALYSIS REPORT", ""]
    for analysis in analyses:
        lines.append(f"CANDIDATE: {analysis.candidate.name}")
        lines.extend(_profile_body(analysis))
        lines.extend(["", SEPARATOR, ""])
    return "\n".join(lines)


def format_candidate_profile(analysis: CandidateAnalysis) -> str:
    return "\n".join([f"CANDIDATE PROFILE: {analysis.candidate.name}", ""] + _profile_body(analysis))


def write_results_csv(analyses: Iterable[CandidateAnalysis], path: str) -> None:
    """Write ranked analyses to a CSV file.

    Args:
        analyses: Ranked `CandidateAnalysis` objects.
        path: Destination path for the CSV.
    """
    with open(path, "w", newline="", encoding="utf-8") as csvfile:
        writer = csv.DictWriter(csvfile, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for analysis in analyses:
            candidate = analysis.candidate
            row: Dict[str, object] = {
                "rank": analysis.rank,
                "name": candidate.name,
                "email": candidate.email,
                "phone": candidate.phone,
                "location": candidate.location,
                "overall_fit": analysis.overall_fit,
                "recommendation": analysis.recommendation,
            }
            row.update({key: analysis.scores.get(key, "") for key in SCORE_KEYS})
            writer.writerow(row)


def analysis_from_dict(data: Dict[str, object]) -> CandidateAnalysis:
    return CandidateAnalysis(
        candidate=candidate_from_dict(data["candidate"]),
        scores={key: int(value) for key, value in (data.get("scores") or {}).items()},
        strengths=list(data.get("strengths") or []),
        red_flags=list(data.get("red_flags") or []),
        recommendation=data.get("recommendation") or "",
        agent_feedbacks=[AgentFeedback(**f) for f in data.get("agent_feedbacks") or []],
        detailed_analysis=DetailedAnalysis(**(data.get("detailed_analysis") or {})),
        overall_fit=data.get("overall_fit") or "",
        rank=int(data.get("rank") or 0),
    )


def results_to_json(analyses: Iterable[CandidateAnalysis]) -> str:
    return json.dumps([analysis.to_dict() for analysis in analyses], indent=2, ensure_ascii=False)


def results_from_json(payload: str) -> List[CandidateAnalysis]:
    return [analysis_from_dict(item) for item in json.loads(payload)]
