"""
Screening agents.

Each agent is a prompt template plus the parsing of the model's answer,
with a deterministic heuristic used when no model is available.  The
agents run in a fixed order:

* `hr` – contact completeness, location and languages.
* `technical` – required and preferred skill coverage, projects.
* `experience` – years against the job's bounds, career history.
* `cultural` – soft skills against the company culture.
* `final` – synthesis of the four earlier assessments.
"""

from .base import AgentFeedback, AgentResult, ScreeningAgent  # noqa: F401
from .cultural import CulturalFitAgent  # noqa: F401
from .experience import ExperienceAnalyzerAgent  # noqa: F401
from .final import FinalReviewerAgent  # noqa: F401
from .hr import HRAgent  # noqa: F401
from .technical import TechnicalEvaluatorAgent, skill_overlap  # noqa: F401
