"""
Résumé intake.

This package converts an uploaded résumé into a structured `Candidate`.
Text extraction and cleaning live in `text`; `sections` finds section
boundaries; `contact`, `background` and `skills` hold the per-field
heuristics with their fallback chains; `llm_output` defines the prompt
and answer format used when a model does the parsing.
"""

from .parse_resume import (  # noqa: F401
    Candidate,
    UnsupportedResumeFormat,
    candidate_from_dict,
    extract_text_from_file,
    load_candidate_json,
    parse_resume,
    parse_resume_text,
    save_candidate_json,
)
