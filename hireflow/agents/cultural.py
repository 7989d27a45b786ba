"""Cultural fit assessor agent: soft skills and team compatibility."""

from __future__ import annotations

import re
from typing import List, Optional

from ..jobs.schema import JobRequirements
from ..resume.parse_resume import Candidate
from .base import HEURISTIC_CONFIDENCE, AgentFeedback, AgentResult, ScreeningAgent, clamp_score, join_or

DEFAULT_COMPANY_CULTURE = "Collaborative, innovative, results-driven"
DEFAULT_TEAM_ENVIRONMENT = "Cross-functional teams"
DEFAULT_COMMUNICATION_STYLE = "Open and direct"

PROMPT = """You are a Cultural Fit Assessor Agent specializing in evaluating soft skills and team compatibility. Analyze this candidate's cultural alignment.

CANDIDATE PROFILE:
Soft Skills: {soft_skills}
Languages: {languages}
Summary: {summary}
Achievements: {achievements}

COMPANY CULTURE & JOB:
Position: {job_title}
Company Culture: {culture}
Team Environment: {team}
Communication Style: {communication}

Provide a comprehensive cultural fit assessment focusing on:
1. Soft skills alignment with company values
2. Communication compatibility
3. Team collaboration potential
4. Cultural adaptability

Return your analysis in this exact format:
ANALYSIS: [Your detailed cultural fit analysis]
SCORE: [Number 0-100]
CONFIDENCE: [Number 0-100]
RECOMMENDATIONS: [Bullet point list]
CONCERNS: [Bullet point list]
STRENGTHS: [Bullet point list]
"""


def culture_values(job: JobRequirements) -> List[str]:
    culture = job.company_culture or DEFAULT_COMPANY_CULTURE
    return [value.strip() for value in re.split(r"[,;/]+", culture) if value.strip()]


class CulturalFitAgent(ScreeningAgent):
    name = "Cultural Fit Assessor"
    temperature = 0.4
    default_score = 78
    default_confidence = 75
    default_analysis = "Cultural fit assessment completed"

    def build_prompt(
        self,
        candidate: Candidate,
        job: JobRequirements,
        feedbacks: Optional[List[AgentFeedback]] = None,
    ) -> str:
        return PROMPT.format(
            soft_skills=join_or(candidate.soft_skills),
            languages=join_or(candidate.languages),
            summary=candidate.summary or "Not provided",
            achievements="; ".join(candidate.achievements) or "Not provided",
            job_title=job.job_title,
            culture=job.company_culture or DEFAULT_COMPANY_CULTURE,
            team=job.team_environment or DEFAULT_TEAM_ENVIRONMENT,
            communication=job.communication_style or DEFAULT_COMMUNICATION_STYLE,
        )

    def heuristic(
        self,
        candidate: Candidate,
        job: JobRequirements,
        feedbacks: Optional[List[AgentFeedback]] = None,
    ) -> AgentResult:
        strengths: List[str] = []
        concerns: List[str] = []
        recommendations = ["Include a team-fit conversation in the interview loop"]

        score = 60 + min(30, 6 * len(candidate.soft_skills))
        if candidate.soft_skills:
            strengths.append("Soft skills: " + ", ".join(candidate.soft_skills))
        else:
            concerns.append("No soft skills stated on the résumé")
            recommendations.append("Probe collaboration and communication with behavioural questions")

        if len(candidate.languages) > 1:
            score += 5
            strengths.append("Multilingual: " + ", ".join(candidate.languages))

        profile = " ".join(
            [candidate.summary] + list(candidate.soft_skills) + list(candidate.achievements)
        ).lower()
        shared = [value for value in culture_values(job) if value.lower() in profile]
        if shared:
            score += 3 * len(shared)
            strengths.append("Profile reflects company values: " + ", ".join(shared))

        return AgentResult(
            agent=self.name,
            analysis=(
                f"{len(candidate.soft_skills)} soft skills identified;"
                f" {len(shared)} company values reflected in the profile."
            ),
            score=clamp_score(score),
            confidence=HEURISTIC_CONFIDENCE,
            recommendations=recommendations,
            concerns=concerns,
            strengths=strengths,
            source="heuristic",
        )
