"""HR screening agent: contact completeness, location and languages."""

from __future__ import annotations

from typing import List, Optional

from ..jobs.schema import JobRequirements
from ..resume.parse_resume import Candidate
from .base import HEURISTIC_CONFIDENCE, AgentFeedback, AgentResult, ScreeningAgent, clamp_score, join_or

PROMPT = """You are an HR Agent specializing in initial candidate screening. Analyze this candidate for the position.

CANDIDATE:
Name: {name}
Email: {email}
Phone: {phone}
Location: {location}
Languages: {languages}
Experience Years: {years}

JOB REQUIREMENTS:
Position: {job_title}
Location: {job_location}
Experience Required: {experience_level}

Provide a comprehensive HR screening analysis focusing on:
1. Contact information completeness
2. Location compatibility
3. Communication potential based on languages
4. Initial suitability assessment

Return your analysis in this exact format:
ANALYSIS: [Your detailed analysis]
SCORE: [Number 0-100]
CONFIDENCE: [Number 0-100]
RECOMMENDATIONS: [Bullet point list]
CONCERNS: [Bullet point list]
STRENGTHS: [Bullet point list]
"""


_SENTINEL_MARKERS = ("not provided", "not found", "error parsing")


def has_value(value: str) -> bool:
    """Return False for empty values and extractor sentinels."""
    lowered = (value or "").strip().lower()
    return bool(lowered) and not any(marker in lowered for marker in _SENTINEL_MARKERS)


class HRAgent(ScreeningAgent):
    name = "HR Agent"
    temperature = 0.3
    default_score = 75
    default_confidence = 80
    default_analysis = "HR screening completed"

    def build_prompt(
        self,
        candidate: Candidate,
        job: JobRequirements,
        feedbacks: Optional[List[AgentFeedback]] = None,
    ) -> str:
        return PROMPT.format(
            name=candidate.name,
            email=candidate.email,
            phone=candidate.phone,
            location=candidate.location,
            languages=join_or(candidate.languages),
            years=candidate.experience_years,
            job_title=job.job_title,
            job_location=job.location or "Not specified",
            experience_level=job.experience_level,
        )

    def heuristic(
        self,
        candidate: Candidate,
        job: JobRequirements,
        feedbacks: Optional[List[AgentFeedback]] = None,
    ) -> AgentResult:
        strengths: List[str] = []
        concerns: List[str] = []
        recommendations: List[str] = []
        score = 50

        contact = {"email": candidate.email, "phone": candidate.phone, "location": candidate.location}
        present = [label for label, value in contact.items() if has_value(value)]
        missing = [label for label in contact if label not in present]
        score += 10 * len(present)
        if not missing:
            strengths.append("Complete contact information")
        else:
            concerns.append("Missing contact details: " + ", ".join(missing))
            recommendations.append("Request missing contact details before scheduling")

        if has_value(candidate.linkedin):
            score += 5
            strengths.append("LinkedIn profile provided")

        if candidate.languages:
            score += 5
            strengths.append("Languages: " + ", ".join(candidate.languages))

        job_location = (job.location or "").strip()
        if job_location and has_value(candidate.location):
            if job_location.lower() in candidate.location.lower() or candidate.location.lower() in job_location.lower():
                strengths.append(f"Based in {candidate.location}")
            elif "remote" not in job_location.lower():
                score -= 10
                concerns.append(f"Location {candidate.location} differs from {job_location}")
                recommendations.append("Confirm relocation or remote work arrangement")

        recommendations.append("Schedule an initial phone screen")
        score = clamp_score(score)
        analysis = (
            f"{candidate.name} provided {len(present)} of 3 core contact details"
            f" and reports {candidate.experience_years} years of experience"
            f" for the {job.job_title} position."
        )
        return AgentResult(
            agent=self.name,
            analysis=analysis,
            score=score,
            confidence=HEURISTIC_CONFIDENCE,
            recommendations=recommendations,
            concerns=concerns,
            strengths=strengths,
            source="heuristic",
        )
