"""Experience analyzer agent: years against the job's bounds and career history."""

from __future__ import annotations

from typing import List, Optional

from ..jobs.schema import JobRequirements
from ..resume.parse_resume import Candidate
from .base import HEURISTIC_CONFIDENCE, AgentFeedback, AgentResult, ScreeningAgent, clamp_score

PROMPT = """You are an Experience Analyzer Agent specializing in evaluating career progression and experience relevance. Analyze this candidate's professional journey.

CANDIDATE EXPERIENCE:
Total Years: {years}
Work History: {history}
Achievements: {achievements}

JOB REQUIREMENTS:
Position: {job_title}
Required Experience: {experience_level}
Minimum Years: {min_years}
Maximum Years: {max_years}
Industry: {industry}

Provide a comprehensive experience assessment focusing on:
1. Years of experience alignment
2. Role progression and career growth
3. Industry relevance
4. Leadership and impact demonstration

Return your analysis in this exact format:
ANALYSIS: [Your detailed experience analysis]
SCORE: [Number 0-100]
CONFIDENCE: [Number 0-100]
RECOMMENDATIONS: [Bullet point list]
CONCERNS: [Bullet point list]
STRENGTHS: [Bullet point list]
"""

# Years beyond the maximum before a candidate is flagged as overqualified.
OVERQUALIFIED_MARGIN = 2


class ExperienceAnalyzerAgent(ScreeningAgent):
    name = "Experience Analyzer"
    temperature = 0.3
    default_score = 75
    default_confidence = 80
    default_analysis = "Experience analysis completed"

    def build_prompt(
        self,
        candidate: Candidate,
        job: JobRequirements,
        feedbacks: Optional[List[AgentFeedback]] = None,
    ) -> str:
        history = "; ".join(
            f"{r.title} at {r.company} ({r.duration}): {' '.join(r.responsibilities)}"
            for r in candidate.roles
        )
        return PROMPT.format(
            years=candidate.experience_years,
            history=history or candidate.experience or "Not provided",
            achievements="; ".join(candidate.achievements) or "Not provided",
            job_title=job.job_title,
            experience_level=job.experience_level,
            min_years=job.min_years,
            max_years=job.max_years if job.max_years is not None else "No limit",
            industry=job.industry or "Not specified",
        )

    def heuristic(
        self,
        candidate: Candidate,
        job: JobRequirements,
        feedbacks: Optional[List[AgentFeedback]] = None,
    ) -> AgentResult:
        years = candidate.experience_years
        min_years, max_years = job.min_years, job.max_years
        strengths: List[str] = []
        concerns: List[str] = []
        recommendations: List[str] = []

        if years < min_years:
            score = 85 - 10 * (min_years - years)
            concerns.append(f"{years} years of experience is below the {min_years} year minimum")
            recommendations.append("Assess whether project work compensates for fewer years")
        elif max_years is not None and years > max_years + OVERQUALIFIED_MARGIN:
            score = 75
            concerns.append(f"{years} years of experience may be more than the role requires")
            recommendations.append("Discuss role scope and growth expectations")
        else:
            score = 85
            strengths.append(f"{years} years of experience fits the {job.experience_level} level")

        if candidate.roles:
            score += min(5, len(candidate.roles))
            latest = candidate.roles[0]
            strengths.append(f"Most recent role: {latest.title} at {latest.company}")
        else:
            concerns.append("Work history could not be itemised")
        if candidate.achievements:
            strengths.append(f"{len(candidate.achievements)} documented achievements")
        recommendations.append("Verify employment history with references")

        return AgentResult(
            agent=self.name,
            analysis=(
                f"{years} years of experience against a requirement of"
                f" {min_years}" + (f"-{max_years}" if max_years is not None else "+") + " years"
                f" across {len(candidate.roles)} listed roles."
            ),
            score=clamp_score(max(score, 40)),
            confidence=HEURISTIC_CONFIDENCE,
            recommendations=recommendations,
            concerns=concerns,
            strengths=strengths,
            source="heuristic",
        )
