"""Technical evaluator agent: skill coverage and project relevance."""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from ..jobs.schema import JobRequirements
from ..resume.parse_resume import Candidate
from .base import HEURISTIC_CONFIDENCE, AgentFeedback, AgentResult, ScreeningAgent, clamp_score, join_or

PROMPT = """You are a Technical Evaluator Agent specializing in assessing technical competency. Analyze this candidate's technical profile.

CANDIDATE TECHNICAL PROFILE:
Technical Skills: {technical_skills}
Projects: {projects}
Experience: {years} years
Certifications: {certifications}

JOB REQUIREMENTS:
Position: {job_title}
Required Skills: {required}
Preferred Skills: {preferred}
Project Types: {project_types}

Provide a comprehensive technical assessment focusing on:
1. Coverage of required and preferred skills
2. Technical depth for the experience level
3. Relevance of projects to the role
4. Skill gaps to validate in interviews

Return your analysis in this exact format:
ANALYSIS: [Your detailed technical analysis]
SCORE: [Number 0-100]
CONFIDENCE: [Number 0-100]
RECOMMENDATIONS: [Bullet point list]
CONCERNS: [Bullet point list]
STRENGTHS: [Bullet point list]
"""


def _candidate_corpus(candidate: Candidate) -> str:
    parts = list(candidate.skills) + list(candidate.technical_skills) + list(candidate.certifications)
    for project in candidate.projects:
        parts.extend([project.name, project.description] + list(project.technologies))
    for role in candidate.roles:
        parts.extend([role.title] + list(role.responsibilities))
    return "\n".join(parts)


def skill_overlap(candidate: Candidate, skills: List[str]) -> Tuple[List[str], List[str]]:
    """Split ``skills`` into ``(matched, missing)`` for ``candidate``.

    A skill matches when it appears as a whole word in the candidate's
    skills, certifications, projects or role descriptions.
    """
    corpus = _candidate_corpus(candidate)
    matched: List[str] = []
    missing: List[str] = []
    for skill in skills:
        if re.search(rf"(?<!\w){re.escape(skill)}(?!\w)", corpus, re.I):
            matched.append(skill)
        else:
            missing.append(skill)
    return matched, missing


class TechnicalEvaluatorAgent(ScreeningAgent):
    name = "Technical Evaluator"
    temperature = 0.3
    default_score = 75
    default_confidence = 80
    default_analysis = "Technical evaluation completed"

    def build_prompt(
        self,
        candidate: Candidate,
        job: JobRequirements,
        feedbacks: Optional[List[AgentFeedback]] = None,
    ) -> str:
        projects = "; ".join(
            f"{p.name}: {p.description} ({', '.join(p.technologies)})" for p in candidate.projects
        )
        return PROMPT.format(
            technical_skills=join_or(candidate.technical_skills or candidate.skills),
            projects=projects or "Not provided",
            years=candidate.experience_years,
            certifications=join_or(candidate.certifications),
            job_title=job.job_title,
            required=job.required_skills,
            preferred=job.preferred_skills or "Not specified",
            project_types=job.project_types or "Not specified",
        )

    def heuristic(
        self,
        candidate: Candidate,
        job: JobRequirements,
        feedbacks: Optional[List[AgentFeedback]] = None,
    ) -> AgentResult:
        required = job.required_skill_list
        matched, missing = skill_overlap(candidate, required)
        preferred_matched, _ = skill_overlap(candidate, job.preferred_skill_list)

        coverage = len(matched) / len(required) if required else 1.0
        score = clamp_score(40 + 50 * coverage + min(10, 5 * len(preferred_matched)))

        strengths: List[str] = []
        concerns: List[str] = []
        recommendations = ["Technical interview recommended"]
        if matched:
            strengths.append("Matches required skills: " + ", ".join(matched))
        if preferred_matched:
            strengths.append("Brings preferred skills: " + ", ".join(preferred_matched))
        if candidate.certifications:
            strengths.append("Certifications: " + ", ".join(candidate.certifications[:3]))
        if missing:
            concerns.append("Missing required skills: " + ", ".join(missing))
            recommendations.append("Validate " + ", ".join(missing[:3]) + " in a practical assessment")
        if not candidate.projects:
            concerns.append("No projects listed to demonstrate technical depth")

        analysis = (
            f"Covers {len(matched)} of {len(required)} required skills"
            f" and {len(preferred_matched)} preferred skills"
            f" with {len(candidate.projects)} listed projects."
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
