"""
Resume parser.

This module turns an uploaded résumé into a structured `Candidate`.
Text is first pulled out of the document (PDF, Word or plain text) and
cleaned.  The heuristic extractors in the sibling modules then fill
every field; when an LLM provider is configured the model is asked for
the same fields in a fixed layout, and any field the model left empty
is taken from the heuristic result instead.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional

import docx
import pdfplumber

from ..llm.providers import LLMProvider, LLMProviderError, get_default_provider
from .background import (
    EducationEntry,
    Project,
    Role,
    extract_achievements,
    extract_education,
    extract_education_entries,
    extract_experience,
    extract_projects,
    extract_roles,
    extract_summary,
)
from .contact import (
    NOT_PROVIDED,
    extract_email,
    extract_github,
    extract_linkedin,
    extract_location,
    extract_name,
    extract_phone,
)
from .llm_output import build_parsing_prompt, parse_llm_output
from .skills import categorize_skills, extract_certifications, extract_languages, extract_skills
from .text import clean_text

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".pdf", ".docx", ".txt", ".md")


class UnsupportedResumeFormat(ValueError):
    """Raised for résumé files whose extension cannot be read."""


@dataclass
class Candidate:
    """Structured résumé.

    Scalar fields hold a sentinel such as ``"Not provided"`` rather than
    ``None`` when nothing was found, so that reports can print them
    directly.
    """
    name: str
    email: str
    phone: str
    location: str
    linkedin: str = NOT_PROVIDED
    github: str = NOT_PROVIDED
    skills: List[str] = field(default_factory=list)
    technical_skills: List[str] = field(default_factory=list)
    soft_skills: List[str] = field(default_factory=list)
    experience: str = ""
    experience_years: int = 0
    education: str = ""
    education_level: str = "Not specified"
    education_entries: List[EducationEntry] = field(default_factory=list)
    roles: List[Role] = field(default_factory=list)
    certifications: List[str] = field(default_factory=list)
    languages: List[str] = field(default_factory=list)
    projects: List[Project] = field(default_factory=list)
    achievements: List[str] = field(default_factory=list)
    summary: str = ""
    keywords: List[str] = field(default_factory=list)
    file_name: Optional[str] = None
    parsing_method: str = "regex"


def parse_resume_text(text: str, file_name: Optional[str] = None) -> Candidate:
    """Parse résumé text into a structured `Candidate` using heuristics only.

    Args:
        text: Raw résumé text.
        file_name: Original upload name, used as a hint for the name.

    Returns:
        The populated `Candidate` with ``parsing_method="regex"``.
    """
    cleaned = clean_text(text)
    skills = extract_skills(cleaned)
    technical, soft = categorize_skills(skills)
    education = extract_education(cleaned)
    experience = extract_experience(cleaned)
    candidate = Candidate(
        name=extract_name(cleaned, file_name),
        email=extract_email(cleaned),
        phone=extract_phone(cleaned),
        location=extract_location(cleaned),
        linkedin=extract_linkedin(cleaned),
        github=extract_github(cleaned),
        skills=skills,
        technical_skills=technical,
        soft_skills=soft,
        experience=experience.text,
        experience_years=experience.years,
        education=education.text,
        education_level=education.level,
        education_entries=extract_education_entries(cleaned),
        roles=extract_roles(cleaned),
        certifications=extract_certifications(cleaned),
        languages=extract_languages(cleaned),
        projects=extract_projects(cleaned),
        achievements=extract_achievements(cleaned),
        summary=extract_summary(cleaned),
        keywords=(technical + soft)[:10],
        file_name=file_name,
    )
    logger.debug("Parsed résumé: %s", candidate)
    return candidate


def extract_text_from_file(file_path: str) -> str:
    """Extract text from a résumé file.

    Plain text and Markdown files are read as UTF‑8.  PDF files are read
    page by page with ``pdfplumber`` and Word files paragraph by
    paragraph with ``python‑docx``.

    Args:
        file_path: Path to the résumé file.

    Returns:
        A single string containing the extracted text.

    Raises:
        FileNotFoundError: If the file does not exist.
        UnsupportedResumeFormat: If the extension is not supported.
    """
    ext = os.path.splitext(file_path)[1].lower()
    if ext not in SUPPORTED_EXTENSIONS:
        raise UnsupportedResumeFormat(
            f"Unsupported résumé format '{ext or file_path}'; expected one of "
            + ", ".join(SUPPORTED_EXTENSIONS)
        )
    if not os.path.exists(file_path):
        raise FileNotFoundError(file_path)
    if ext == ".pdf":
        pages = []
        with pdfplumber.open(file_path) as pdf:
            for page in pdf.pages:
                pages.append(page.extract_text() or "")
        return "\n".join(pages)
    if ext == ".docx":
        document = docx.Document(file_path)
        return "\n".join(p.text for p in document.paragraphs)
    with open(file_path, "r", encoding="utf-8", errors="replace") as f:
        return f.read()


def _is_missing(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() in ("", NOT_PROVIDED, "Candidate")
    if isinstance(value, (list, int)):
        return not value
    return False


def _llm_parse_resume(text: str, provider: LLMProvider, heuristic: Candidate) -> Candidate:
    """Parse résumé text with ``provider``, filling gaps from ``heuristic``.

    Raises:
        LLMProviderError: If the provider call fails.
    """
    answer = provider.generate(build_parsing_prompt(text), temperature=0.1)
    parsed = parse_llm_output(answer)
    merged: Dict[str, object] = asdict(heuristic)
    merged.update(
        {
            "education_entries": heuristic.education_entries,
            "roles": heuristic.roles,
            "projects": heuristic.projects,
        }
    )
    for key, value in parsed.items():
        if not _is_missing(value):
            merged[key] = value
    if not _is_missing(parsed.get("technical_skills")) or not _is_missing(parsed.get("soft_skills")):
        merged["skills"] = parsed.get("skills") or heuristic.skills
        merged["keywords"] = (
            list(merged["technical_skills"]) + list(merged["soft_skills"])
        )[:10]
    merged["parsing_method"] = "llm"
    return Candidate(**merged)


def parse_resume(
    file_path: str,
    use_llm: bool = True,
    provider: Optional[LLMProvider] = None,
    file_name: Optional[str] = None,
) -> Candidate:
    """Read a résumé file and parse it into a `Candidate`.

    If ``use_llm`` is true and a real provider is configured, the résumé
    is parsed by the model first.  On failure, or when only the
    placeholder provider is available, the heuristic result is returned.

    Args:
        file_path: Path to the résumé file.  Supported extensions are
            ``.pdf``, ``.docx``, ``.txt`` and ``.md``.
        use_llm: Whether to attempt LLM parsing (default: True).
        provider: Provider to use; resolved from the environment when
            omitted.
        file_name: Original upload name when ``file_path`` is a stored
            copy; defaults to the base name of ``file_path``.

    Returns:
        A `Candidate` instance populated with extracted fields.

    Raises:
        FileNotFoundError: If the file cannot be read.
        UnsupportedResumeFormat: If the extension is not supported.
    """
    file_name = file_name or os.path.basename(file_path)
    text = extract_text_from_file(file_path)
    heuristic = parse_resume_text(text, file_name)
    if not use_llm:
        return heuristic

    if provider is None:
        provider = get_default_provider()
    if provider.is_placeholder:
        logger.debug("Placeholder provider configured; skipping LLM parsing of %s", file_name)
        return heuristic
    try:
        candidate = _llm_parse_resume(clean_text(text), provider, heuristic)
    except LLMProviderError as exc:
        logger.warning("LLM résumé parsing failed for %s: %s", file_name, exc)
        return heuristic
    logger.info("Parsed %s with %s", file_name, provider.name)
    return candidate


def candidate_from_dict(data: Dict[str, object]) -> Candidate:
    """Rebuild a `Candidate` from its JSON representation.

    Unknown keys are ignored so that files written by newer versions
    still load.
    """
    known = set(Candidate.__dataclass_fields__)
    values = {key: value for key, value in data.items() if key in known}
    values["education_entries"] = [
        EducationEntry(**entry) for entry in values.get("education_entries") or []
    ]
    values["roles"] = [Role(**role) for role in values.get("roles") or []]
    values["projects"] = [Project(**project) for project in values.get("projects") or []]
    values.setdefault("name", "Name not found")
    values.setdefault("email", "Email not provided")
    values.setdefault("phone", "Phone not provided")
    values.setdefault("location", "Location not provided")
    return Candidate(**values)


def save_candidate_json(candidate: Candidate, out_path: str) -> None:
    """Serialize a `Candidate` dataclass to JSON.

    Args:
        candidate: The structured résumé to save.
        out_path: Path where the JSON file will be written.
    """
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(asdict(candidate), f, indent=2, ensure_ascii=False)
    logger.info("Wrote candidate JSON to %s", out_path)


def load_candidate_json(path: str) -> Candidate:
    with open(path, "r", encoding="utf-8") as f:
        return candidate_from_dict(json.load(f))
