"""
Job description schema.

The recruiter describes the opening once per screening session, either
through the web form or a YAML/JSON file.  All fields are free text as
typed by the recruiter; the helper properties below derive the lists
and numbers the agents need.
"""

from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import asdict, dataclass, fields
from typing import Dict, List, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

# Label shown in the UI -> (minimum years, maximum years or None)
EXPERIENCE_LEVELS: Dict[str, Tuple[int, Optional[int]]] = {
    "Entry Level (0-2 years)": (0, 2),
    "Mid Level (2-5 years)": (2, 5),
    "Senior Level (5-8 years)": (5, 8),
    "Lead Level (8+ years)": (8, None),
}

REQUIRED_FIELDS = ["job_title", "experience_level", "required_skills", "job_description"]

DEFAULT_TOP_N = 3

# UI form keys that differ from the dataclass field names.
_CAMEL_CASE_KEYS = {
    "jobTitle": "job_title",
    "experienceLevel": "experience_level",
    "minimumExperience": "minimum_experience",
    "maximumExperience": "maximum_experience",
    "requiredSkills": "required_skills",
    "preferredSkills": "preferred_skills",
    "jobDescription": "job_description",
    "projectTypes": "project_types",
    "topNCandidates": "top_n_candidates",
    "companyCulture": "company_culture",
    "teamEnvironment": "team_environment",
    "communicationStyle": "communication_style",
}


class InvalidJobDescription(ValueError):
    """Raised when required job description fields are empty."""

    def __init__(self, missing_fields: List[str]) -> None:
        self.missing_fields = list(missing_fields)
        super().__init__("Missing required fields: " + ", ".join(self.missing_fields))


def split_list(value: str) -> List[str]:
    """Split a comma, semicolon or newline separated field."""
    return [item.strip() for item in re.split(r"[,;\n]+", value or "") if item.strip()]


def _parse_years(value: str) -> Optional[int]:
    match = re.search(r"\d+", str(value or ""))
    return int(match.group(0)) if match else None


@dataclass
class JobRequirements:
    job_title: str = ""
    department: str = ""
    experience_level: str = ""
    minimum_experience: str = ""
    maximum_experience: str = ""
    required_skills: str = ""
    preferred_skills: str = ""
    education: str = ""
    job_description: str = ""
    responsibilities: str = ""
    project_types: str = ""
    top_n_candidates: int = DEFAULT_TOP_N
    location: str = ""
    industry: str = ""
    company_culture: str = ""
    team_environment: str = ""
    communication_style: str = ""

    def missing_fields(self) -> List[str]:
        return [name for name in REQUIRED_FIELDS if not str(getattr(self, name) or "").strip()]

    def validate(self) -> None:
        """Raise `InvalidJobDescription` naming every empty required field."""
        missing = self.missing_fields()
        if missing:
            raise InvalidJobDescription(missing)

    @property
    def required_skill_list(self) -> List[str]:
        return split_list(self.required_skills)

    @property
    def preferred_skill_list(self) -> List[str]:
        return split_list(self.preferred_skills)

    def _level_range(self) -> Tuple[int, Optional[int]]:
        if self.experience_level in EXPERIENCE_LEVELS:
            return EXPERIENCE_LEVELS[self.experience_level]
        first_word = (self.experience_level or "").split(" ")[0].lower()
        for label, bounds in EXPERIENCE_LEVELS.items():
            if first_word and label.lower().startswith(first_word):
                return bounds
        return 0, None

    @property
    def min_years(self) -> int:
        parsed = _parse_years(self.minimum_experience)
        return parsed if parsed is not None else self._level_range()[0]

    @property
    def max_years(self) -> Optional[int]:
        parsed = _parse_years(self.maximum_experience)
        return parsed if parsed is not None else self._level_range()[1]

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


def job_from_dict(data: Dict[str, object]) -> JobRequirements:
    """Build `JobRequirements` from a form or file mapping.

    Both snake_case keys and the camelCase keys of the web form are
    accepted.  Unknown keys are ignored and ``None`` values become empty
    strings.
    """
    known = {f.name for f in fields(JobRequirements)}
    values: Dict[str, object] = {}
    for key, value in (data or {}).items():
        name = _CAMEL_CASE_KEYS.get(key, key)
        if name not in known or value is None:
            continue
        if name == "top_n_candidates":
            try:
                value = int(value)
            except (TypeError, ValueError):
                logger.warning("Invalid top_n_candidates %r; using %d", value, DEFAULT_TOP_N)
                value = DEFAULT_TOP_N
        elif isinstance(value, (list, tuple)):
            value = ", ".join(str(item) for item in value)
        else:
            value = str(value).strip()
        values[name] = value
    return JobRequirements(**values)


def load_job_requirements(path: str) -> JobRequirements:
    """Read a job description from a YAML or JSON file."""
    ext = os.path.splitext(path)[1].lower()
    with open(path, "r", encoding="utf-8") as f:
        if ext == ".json":
            data = json.load(f)
        else:
            data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise InvalidJobDescription(REQUIRED_FIELDS)
    return job_from_dict(data)
