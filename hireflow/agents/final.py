"""Final reviewer agent: synthesises the four earlier assessments."""

from __future__ import annotations

from typing import Dict, List, Optional

from ..jobs.schema import JobRequirements
from ..resume.parse_resume import Candidate
from .base import (
    HEURISTIC_CONFIDENCE,
    AgentFeedback,
    AgentResult,
    ScreeningAgent,
    clamp_score,
    extract_section,
)

DEFAULT_FINAL_RECOMMENDATION = "Further evaluation required"

PROMPT = """You are the Final Reviewer Agent responsible for making the ultimate hiring decision. Synthesize all agent feedback and provide a comprehensive final assessment.

CANDIDATE: {name}
JOB: {job_title}

AGENT FEEDBACK SUMMARY:
{summary}

OVERALL SCORES:
HR: {hr}%
Technical: {technical}%
Experience: {experience}%
Cultural Fit: {cultural}%

Provide your final comprehensive review focusing on:
1. Overall candidate suitability
2. Risk assessment
3. Growth potential
4. Final hiring recommendation

Return your analysis in this exact format:
ANALYSIS: [Your comprehensive final analysis]
SCORE: [Number 0-100 - overall weighted score]
CONFIDENCE: [Number 0-100 - your confidence in this assessment]
FINAL_RECOMMENDATION: [HIRE/CONDITIONAL_HIRE/REJECT with reasoning]
RECOMMENDATIONS: [Bullet point list]
CONCERNS: [Bullet point list]
STRENGTHS: [Bullet point list]
"""

# Weights of the earlier agents in the heuristic overall score.
AGENT_WEIGHTS: Dict[str, float] = {
    "HR Agent": 0.2,
    "Technical Evaluator": 0.35,
    "Experience Analyzer": 0.25,
    "Cultural Fit Assessor": 0.2,
}
DEFAULT_AGENT_SCORE = 75


def _score_of(feedbacks: List[AgentFeedback], agent: str) -> int:
    for feedback in feedbacks:
        if feedback.agent == agent:
            return feedback.score
    return DEFAULT_AGENT_SCORE


class FinalReviewerAgent(ScreeningAgent):
    name = "Final Reviewer"
    temperature = 0.2
    default_score = 75
    default_confidence = 85
    default_analysis = "Final comprehensive review completed"

    def build_prompt(
        self,
        candidate: Candidate,
        job: JobRequirements,
        feedbacks: Optional[List[AgentFeedback]] = None,
    ) -> str:
        feedbacks = feedbacks or []
        summary = "\n".join(
            f"{f.agent}: Score {f.score}% - {f.analysis[:200]}..." for f in feedbacks
        )
        return PROMPT.format(
            name=candidate.name,
            job_title=job.job_title,
            summary=summary or "No earlier feedback",
            hr=_score_of(feedbacks, "HR Agent"),
            technical=_score_of(feedbacks, "Technical Evaluator"),
            experience=_score_of(feedbacks, "Experience Analyzer"),
            cultural=_score_of(feedbacks, "Cultural Fit Assessor"),
        )

    def parse_response(self, response: str) -> AgentResult:
        result = super().parse_response(response)
        result.final_recommendation = (
            extract_section(response, "FINAL_RECOMMENDATION:") or DEFAULT_FINAL_RECOMMENDATION
        )
        return result

    def heuristic(
        self,
        candidate: Candidate,
        job: JobRequirements,
        feedbacks: Optional[List[AgentFeedback]] = None,
    ) -> AgentResult:
        feedbacks = feedbacks or []
        score = clamp_score(
            round(sum(_score_of(feedbacks, agent) * w for agent, w in AGENT_WEIGHTS.items()))
        )
        if score >= 80:
            decision = "HIRE - strong match across all screening stages"
        elif score >= 65:
            decision = "CONDITIONAL_HIRE - proceed to interview and validate the listed concerns"
        else:
            decision = "REJECT - significant gaps against the role requirements"

        ordered = sorted(feedbacks, key=lambda f: f.score, reverse=True)
        strengths = list(ordered[0].strengths[:2]) if ordered else []
        concerns = list(ordered[-1].concerns[:2]) if ordered else []
        recommendations = []
        for feedback in feedbacks:
            recommendations.extend(feedback.recommendations[:1])

        analysis = f"Weighted score {score} from {len(feedbacks)} agent assessments"
        if ordered:
            analysis += (
                f"; strongest area: {ordered[0].agent} ({ordered[0].score}),"
                f" weakest area: {ordered[-1].agent} ({ordered[-1].score})."
            )
        return AgentResult(
            agent=self.name,
            analysis=analysis,
            score=score,
            confidence=HEURISTIC_CONFIDENCE,
            recommendations=recommendations,
            concerns=concerns,
            strengths=strengths,
            final_recommendation=decision,
            source="heuristic",
        )
