"""
Screening agent base class.

An agent is a prompt template plus a parser for the model's answer.
Every agent asks for the same line oriented answer format::

    ANALYSIS: <free text>
    SCORE: <0-100>
    CONFIDENCE: <0-100>
    RECOMMENDATIONS:
    - item
    CONCERNS:
    - item
    STRENGTHS:
    - item

When no hosted model is configured, or the call fails, the agent falls
back to a deterministic `heuristic` assessment computed from the
candidate and job fields so that a screening run always completes.
"""

from __future__ import annotations

import logging
import re
from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional

from ..jobs.schema import JobRequirements
from ..llm.providers import LLMProvider, LLMProviderError
from ..resume.parse_resume import Candidate

logger = logging.getLogger(__name__)

HEURISTIC_CONFIDENCE = 60

_LIST_ITEM = re.compile(r"^[-•]\s*")
_NUMBER = re.compile(r"-?\d+")


@dataclass
class AgentResult:
    agent: str
    analysis: str
    score: int
    confidence: int
    recommendations: List[str] = field(default_factory=list)
    concerns: List[str] = field(default_factory=list)
    strengths: List[str] = field(default_factory=list)
    final_recommendation: Optional[str] = None
    source: str = "llm"

    def feedback(self) -> "AgentFeedback":
        return AgentFeedback(
            agent=self.agent,
            analysis=self.analysis,
            score=self.score,
            confidence=self.confidence,
            recommendations=list(self.recommendations),
            concerns=list(self.concerns),
            strengths=list(self.strengths),
            source=self.source,
        )


@dataclass
class AgentFeedback:
    """Serialisable per-agent feedback stored in a candidate analysis."""
    agent: str
    analysis: str
    score: int
    confidence: int
    recommendations: List[str] = field(default_factory=list)
    concerns: List[str] = field(default_factory=list)
    strengths: List[str] = field(default_factory=list)
    source: str = "llm"

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


def clamp_score(value: float) -> int:
    return int(min(max(value, 0), 100))


def extract_section(text: str, marker: str) -> str:
    """Return the rest of the first line containing ``marker``."""
    for line in text.splitlines():
        if marker in line:
            return line.replace(marker, "", 1).strip()
    return ""


def extract_list(text: str, marker: str) -> List[str]:
    """Return the bullet items following the line containing ``marker``.

    Collection stops at the next non-bullet line that looks like a
    ``KEY:`` line.
    """
    lines = text.splitlines()
    start = next((i for i, line in enumerate(lines) if marker in line), None)
    if start is None:
        return []
    items = []
    for raw in lines[start + 1:]:
        line = raw.strip()
        if line.startswith("-") or line.startswith("•"):
            item = _LIST_ITEM.sub("", line).strip()
            if item:
                items.append(item)
        elif ":" in line and not raw.startswith(" "):
            break
    return items


def _parse_number(value: str, default: int) -> int:
    match = _NUMBER.search(value or "")
    if not match:
        return default
    return clamp_score(int(match.group(0)))


def join_or(items: List[str], default: str = "Not provided") -> str:
    return ", ".join(items) if items else default


class ScreeningAgent:
    """Base class for the five screening agents.

    Subclasses set the class attributes and implement `build_prompt` and
    `heuristic`.
    """

    name = "Agent"
    temperature = 0.3
    default_score = 75
    default_confidence = 80
    default_analysis = "Analysis completed"

    def __init__(self, provider: LLMProvider) -> None:
        self.provider = provider

    def build_prompt(
        self,
        candidate: Candidate,
        job: JobRequirements,
        feedbacks: Optional[List[AgentFeedback]] = None,
    ) -> str:
        raise NotImplementedError

    def heuristic(
        self,
        candidate: Candidate,
        job: JobRequirements,
        feedbacks: Optional[List[AgentFeedback]] = None,
    ) -> AgentResult:
        raise NotImplementedError

    def parse_response(self, response: str) -> AgentResult:
        return AgentResult(
            agent=self.name,
            analysis=extract_section(response, "ANALYSIS:") or self.default_analysis,
            score=_parse_number(extract_section(response, "SCORE:"), self.default_score),
            confidence=_parse_number(
                extract_section(response, "CONFIDENCE:"), self.default_confidence
            ),
            recommendations=extract_list(response, "RECOMMENDATIONS:"),
            concerns=extract_list(response, "CONCERNS:"),
            strengths=extract_list(response, "STRENGTHS:"),
        )

    def analyze(
        self,
        candidate: Candidate,
        job: JobRequirements,
        feedbacks: Optional[List[AgentFeedback]] = None,
    ) -> AgentResult:
        """Assess ``candidate`` against ``job``.

        Args:
            candidate: Parsed résumé.
            job: Validated job requirements.
            feedbacks: Feedback of the agents that ran earlier, used by
                the final reviewer.

        Returns:
            The agent's `AgentResult`; ``source`` tells whether it came
            from the model or from the heuristic.
        """
        if self.provider.is_placeholder:
            logger.debug("%s: no LLM configured, using heuristic assessment", self.name)
            return self.heuristic(candidate, job, feedbacks)
        prompt = self.build_prompt(candidate, job, feedbacks)
        try:
            response = self.provider.generate(prompt, temperature=self.temperature)
        except LLMProviderError as exc:
            logger.warning("%s failed for %s: %s; using heuristic", self.name, candidate.name, exc)
            return self.heuristic(candidate, job, feedbacks)
        return self.parse_response(response)
