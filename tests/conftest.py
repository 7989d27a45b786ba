"""Shared fixtures for the HireFlow test suite.

No test talks to a hosted model: `FakeProvider` replays scripted
answers (or raises `LLMProviderError`) and records every prompt it was
sent, so tests can assert both on the parsed results and on what would
have been sent to the model.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import pytest  # type: ignore

from hireflow.jobs.schema import JobRequirements
from hireflow.llm.providers import LLMProvider, LLMProviderError

SAMPLE_RESUME = """Jane Doe
Email: jane.doe@example.com
Phone: (555) 123-4567
Austin, TX
linkedin.com/in/janedoe
github.com/janedoe

Summary
Backend engineer who enjoys building reliable data platforms for growing teams.

Experience
Senior Software Engineer | Acme Corp | 2019 - present
- Led the migration of billing services to Kubernetes
- Improved API latency by 40 percent
Software Engineer at Initech (2016 - 2019)
- Built REST services in Python and PostgreSQL

Education
BS Computer Science, University of Texas, 2012 - 2016

Skills
Python, Docker, Kubernetes, PostgreSQL, AWS, Leadership, Communication

Projects
- Ledger: double-entry accounting service built with Python and PostgreSQL

Certifications
AWS Certified Solutions Architect

Languages
English (Native), Spanish (Intermediate)
"""

JUNIOR_RESUME = """John Smith
Email: john.smith@example.org

Skills
JavaScript, React, HTML, CSS
"""

LLM_ANSWER = """**Name**
JANE DOE

**Email**
mailto:jane.doe@example.com

**Phone**
+1 555 123 4567

**Location**
Austin, TX

**LinkedIn**
https://linkedin.com/in/janedoe

**GitHub**
Not provided

**Experience Years**
7 years

**Education**
- BS Computer Science, University of Texas (2012 - 2016)
- MBA from Rice University (2020)

**Experience**
- Senior Software Engineer at Acme Corp (2019 - Present)
  Led the billing platform migration.
  Mentored four engineers.
- Software Engineer at Initech (2016 - 2019)

**Technical Skills**
Python, Go, Kubernetes

**Soft Skills**
Leadership, Mentoring

**Certifications**
AWS Certified Solutions Architect, CKA

**Languages**
English (Native), Spanish (B2)

**Projects**
- Ledger: double-entry accounting service (Python, PostgreSQL)

**Achievements**
- Reduced cloud spend by 30 percent
- Not provided
"""


class FakeProvider(LLMProvider):
    """Provider that returns scripted answers in order."""

    name = "fake"

    def __init__(self, answers: Optional[List[str]] = None, fail: bool = False) -> None:
        self.answers = list(answers or [])
        self.fail = fail
        self.prompts: List[str] = []
        self.temperatures: List[Optional[float]] = []

    def generate(self, prompt: str, temperature: Optional[float] = None) -> str:
        self.prompts.append(prompt)
        self.temperatures.append(temperature)
        if self.fail:
            raise LLMProviderError("scripted failure")
        if not self.answers:
            raise LLMProviderError("no scripted answer left")
        return self.answers.pop(0)


@pytest.fixture
def sample_resume_text() -> str:
    return SAMPLE_RESUME


@pytest.fixture
def resume_file(tmp_path: Path) -> Path:
    path = tmp_path / "jane_doe.txt"
    path.write_text(SAMPLE_RESUME, encoding="utf-8")
    return path


@pytest.fixture
def junior_resume_file(tmp_path: Path) -> Path:
    path = tmp_path / "resume.txt"
    path.write_text(JUNIOR_RESUME, encoding="utf-8")
    return path


@pytest.fixture
def job() -> JobRequirements:
    return JobRequirements(
        job_title="Backend Engineer",
        experience_level="Mid Level (2-5 years)",
        required_skills="Python, Docker, Kubernetes, Go",
        preferred_skills="AWS, Terraform",
        job_description="Build and operate the services behind our billing platform.",
        location="Austin, TX",
        top_n_candidates=3,
    )


@pytest.fixture
def clean_llm_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove every environment variable that selects an LLM provider."""
    for variable in (
        "LLM_PROVIDER",
        "GEMINI_API_KEY",
        "GOOGLE_API_KEY",
        "OPENAI_API_KEY",
        "GEMINI_MODEL",
        "OPENAI_MODEL",
    ):
        monkeypatch.delenv(variable, raising=False)
