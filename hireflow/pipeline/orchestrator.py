"""
Per-candidate screening sequence.

`ScreeningOrchestrator` runs the five agents in a fixed order: HR,
Technical Evaluator, Experience Analyzer, Cultural Fit Assessor and
Final Reviewer.  There is no branching and no retry; an agent whose
model call fails has already fallen back to its heuristic, so the
sequence always produces a `CandidateAnalysis`.  The intermediate
results are kept on a `ScreeningState` so callers and tests can inspect
each step.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional

from ..agents import (
    AgentFeedback,
    AgentResult,
    CulturalFitAgent,
    ExperienceAnalyzerAgent,
    FinalReviewerAgent,
    HRAgent,
    TechnicalEvaluatorAgent,
    skill_overlap,
)
from ..agents.final import DEFAULT_FINAL_RECOMMENDATION
from ..jobs.schema import JobRequirements
from ..llm.providers import LLMProvider, get_default_provider
from ..resume.parse_resume import Candidate

logger = logging.getLogger(__name__)

SCORE_KEYS = [
    "technical",
    "experience",
    "education",
    "communication",
    "cultural_fit",
    "project_relevance",
    "skill_match",
    "overall",
]


@dataclass
class ScreeningState:
    candidate: Candidate
    job: JobRequirements
    hr: Optional[AgentResult] = None
    technical: Optional[AgentResult] = None
    experience: Optional[AgentResult] = None
    cultural: Optional[AgentResult] = None
    final: Optional[AgentResult] = None
    analysis: Optional["CandidateAnalysis"] = None

    def feedbacks(self) -> List[AgentFeedback]:
        results = [self.hr, self.technical, self.experience, self.cultural, self.final]
        return [result.feedback() for result in results if result is not None]


@dataclass
class DetailedAnalysis:
    skill_gaps: List[str] = field(default_factory=list)
    experience_match: str = ""
    education_fit: str = ""
    project_relevance: str = ""
    growth_potential: str = ""


@dataclass
class CandidateAnalysis:
    candidate: Candidate
    scores: Dict[str, int]
    strengths: List[str] = field(default_factory=list)
    red_flags: List[str] = field(default_factory=list)
    recommendation: str = DEFAULT_FINAL_RECOMMENDATION
    agent_feedbacks: List[AgentFeedback] = field(default_factory=list)
    detailed_analysis: DetailedAnalysis = field(default_factory=DetailedAnalysis)
    overall_fit: str = "Poor"
    rank: int = 0

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


def overall_fit(score: int) -> str:
    if score >= 90:
        return "Excellent"
    if score >= 80:
        return "Good"
    if score >= 70:
        return "Fair"
    if score >= 60:
        return "Below Average"
    return "Poor"


def growth_potential(score: int) -> str:
    if score >= 80:
        return "High growth potential"
    if score >= 70:
        return "Good growth potential"
    return "Moderate growth potential"


def compile_scores(state: ScreeningState) -> Dict[str, int]:
    """Derive the score breakdown from the agent results.

    Education and project relevance are not scored by any agent; they
    grow with the number of listed degrees and projects, capped at 85
    and 90.
    """
    candidate = state.candidate
    return {
        "technical": state.technical.score,
        "experience": state.experience.score,
        "education": min(85, 60 + 10 * len(candidate.education_entries)),
        "communication": state.hr.score,
        "cultural_fit": state.cultural.score,
        "project_relevance": min(90, 65 + 8 * len(candidate.projects)),
        "skill_match": state.technical.score,
        "overall": state.final.score,
    }


class ScreeningOrchestrator:
    """Run the five screening agents for one candidate at a time."""

    def __init__(self, provider: Optional[LLMProvider] = None) -> None:
        self.provider = provider or get_default_provider()
        self.hr_agent = HRAgent(self.provider)
        self.technical_agent = TechnicalEvaluatorAgent(self.provider)
        self.experience_agent = ExperienceAnalyzerAgent(self.provider)
        self.cultural_agent = CulturalFitAgent(self.provider)
        self.final_agent = FinalReviewerAgent(self.provider)

    def run(self, candidate: Candidate, job: JobRequirements) -> ScreeningState:
        """Run every agent in order and return the completed state."""
        state = ScreeningState(candidate=candidate, job=job)
        logger.info("Screening %s", candidate.name)
        state.hr = self.hr_agent.analyze(candidate, job)
        state.technical = self.technical_agent.analyze(candidate, job)
        state.experience = self.experience_agent.analyze(candidate, job)
        state.cultural = self.cultural_agent.analyze(candidate, job)
        state.final = self.final_agent.analyze(candidate, job, state.feedbacks())
        state.analysis = self._compile(state)
        logger.debug("%s scored %d overall", candidate.name, state.final.score)
        return state

    def process_candidate(self, candidate: Candidate, job: JobRequirements) -> CandidateAnalysis:
        return self.run(candidate, job).analysis

    def _compile(self, state: ScreeningState) -> CandidateAnalysis:
        candidate = state.candidate
        earlier = [state.hr, state.technical, state.experience, state.cultural]
        scores = compile_scores(state)
        _, missing = skill_overlap(candidate, state.job.required_skill_list)
        detailed = DetailedAnalysis(
            skill_gaps=missing or list(state.technical.concerns),
            experience_match=state.experience.analysis or "Experience evaluated",
            education_fit=(
                "Education requirements satisfied"
                if candidate.education_entries
                else "Education background needs clarification"
            ),
            project_relevance=(
                "Relevant project experience demonstrated"
                if candidate.projects
                else "Project portfolio needs development"
            ),
            growth_potential=growth_potential(state.final.score),
        )
        return CandidateAnalysis(
            candidate=candidate,
            scores=scores,
            strengths=[item for result in earlier for item in result.strengths],
            red_flags=[item for result in earlier for item in result.concerns],
            recommendation=state.final.final_recommendation or DEFAULT_FINAL_RECOMMENDATION,
            agent_feedbacks=state.feedbacks(),
            detailed_analysis=detailed,
            overall_fit=overall_fit(state.final.score),
        )
