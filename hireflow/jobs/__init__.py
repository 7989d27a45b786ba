"""
Job description handling: the `JobRequirements` dataclass, its
validation and loading from the web form or YAML/JSON files.
"""

from .schema import (  # noqa: F401
    EXPERIENCE_LEVELS,
    REQUIRED_FIELDS,
    InvalidJobDescription,
    JobRequirements,
    job_from_dict,
    load_job_requirements,
)
