"""
Screening pipeline.

* `orchestrator` – runs the five agents for one candidate and compiles
  the score breakdown into a `CandidateAnalysis`.
* `screening` – parses a batch of résumés, screens each candidate and
  ranks the batch.
"""

from .orchestrator import CandidateAnalysis, ScreeningOrchestrator, ScreeningState  # noqa: F401
from .screening import ResumeUpload, rank_candidates, screen_candidates  # noqa: F401
