"""
LLM based résumé parsing: prompt and answer format.

Rather than asking the model for JSON, which smaller hosted models
often wrap in prose or truncate, the prompt asks for a fixed layout of
``**Section**`` headings followed by plain lines.  The parser below
walks that layout line by line and is tolerant of missing sections.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional

from .background import EducationEntry, Project, Role
from .contact import NOT_PROVIDED
from .skills import KNOWN_LANGUAGES, parse_languages

logger = logging.getLogger(__name__)

OUTPUT_SECTIONS = [
    "Name",
    "Email",
    "Phone",
    "Location",
    "LinkedIn",
    "GitHub",
    "Experience Years",
    "Education",
    "Experience",
    "Technical Skills",
    "Soft Skills",
    "Certifications",
    "Languages",
    "Projects",
    "Achievements",
]

_PROMPT_TEMPLATE = """You are an expert resume parsing agent that understands all major resume formats.
Extract information from the resume below regardless of its layout.

Rules:
1. Never use document filenames, headers or footers as the candidate name.
   Patterns like "John_Doe_Resume.pdf" or "Resume_2024_Final" are NOT names.
2. Names have 2-4 words and only contain letters, spaces, apostrophes or hyphens.
   If no clear human name is found, answer "Candidate".
3. Email addresses must have the form xxx@xxx.xxx; otherwise answer "Not provided".
4. Extract skills from job descriptions even without a dedicated skills section
   and separate technical skills from soft skills.
5. Detect spoken languages from this list and add proficiency levels
   (Native, Fluent, Advanced, Intermediate, Basic, Beginner, A1-C2) when stated:
{languages}

Answer ONLY in this exact format:

**Name**
[Full name]

**Email**
[email@domain.com or "Not provided"]

**Phone**
[Phone number or "Not provided"]

**Location**
[City, State/Country or "Not provided"]

**LinkedIn**
[LinkedIn URL or "Not provided"]

**GitHub**
[GitHub URL or "Not provided"]

**Experience Years**
[Total years of professional experience as a number]

**Education**
- [Degree], [Institution] ([Year or Year Range])

**Experience**
- [Job Title] at [Company] ([Date Range])
  [Brief description of the role and key achievements]

**Technical Skills**
[Comma-separated list]

**Soft Skills**
[Comma-separated list]

**Certifications**
[Comma-separated list]

**Languages**
[Language (Level), Language (Level)]

**Projects**
- [Project Name]: [Brief description] ([Technologies used])

**Achievements**
- [Notable accomplishment]

--- RESUME TEXT ---
{resume_text}
--- END RESUME TEXT ---
"""

_EDUCATION_COMMA = re.compile(r"^-?\s*(.*?),\s*(.*?)\s*\(([^)]+)\)")
_EDUCATION_FROM = re.compile(r"^-?\s*(.*?)\s+from\s+(.*?)\s*\(([^)]+)\)", re.I)
_EXPERIENCE_AT = re.compile(r"^-?\s*(.*?)\s+at\s+(.*?)\s*\(([^)]+)\)")
_PROJECT_LINE = re.compile(r"^-?\s*(.*?):\s*(.*?)\s*\(([^)]+)\)")
_EMAIL = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")


def build_parsing_prompt(resume_text: str) -> str:
    return _PROMPT_TEMPLATE.format(
        languages=", ".join(KNOWN_LANGUAGES), resume_text=resume_text
    )


def clean_name(raw: str) -> str:
    """Normalise a name returned by the model.

    File extensions, the words "resume"/"cv", digits and punctuation
    other than apostrophes and hyphens are removed.  The result must be
    one to four words and 2 to 50 characters long.
    """
    if not raw or raw.strip() == NOT_PROVIDED:
        return NOT_PROVIDED
    name = re.sub(r"\.(?:pdf|docx?|txt|md)\b", " ", raw, flags=re.I)
    name = re.sub(r"\b(?:resume|cv)\b", " ", name.replace("_", " "), flags=re.I)
    name = re.sub(r"[^A-Za-zÀ-ɏ\s'-]", " ", name)
    words = [word.strip("-'") for word in name.split()]
    words = [word for word in words if word]
    words = [w.capitalize() if w.islower() or w.isupper() else w for w in words]
    name = " ".join(words)
    if not 1 <= len(words) <= 4 or not 2 <= len(name) <= 50:
        return NOT_PROVIDED
    return name


def validate_email(raw: str) -> str:
    candidate = (raw or "").strip().strip("<>[]()")
    if candidate.lower().startswith("mailto:"):
        candidate = candidate[len("mailto:"):]
    return candidate if _EMAIL.fullmatch(candidate) else NOT_PROVIDED


def _parse_int(value: str) -> int:
    match = re.search(r"\d+", value)
    return int(match.group(0)) if match else 0


def _comma_list(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _list_items(line: str) -> List[str]:
    return [item for item in _comma_list(re.sub(r"^[-•]\s*", "", line)) if item != NOT_PROVIDED]


def _education_entry(content: str) -> Optional[EducationEntry]:
    for pattern in (_EDUCATION_COMMA, _EDUCATION_FROM):
        match = pattern.match(content)
        if match:
            return EducationEntry(
                degree=match.group(1).strip(),
                institution=match.group(2).strip(),
                years=match.group(3).strip(),
            )
    parts = [part.strip() for part in re.split(r"[,()]", re.sub(r"^-\s*", "", content))]
    parts = [part for part in parts if part]
    if len(parts) >= 2:
        return EducationEntry(
            degree=parts[0],
            institution=parts[1],
            years=parts[2] if len(parts) > 2 else "Not specified",
        )
    return None


def parse_llm_output(output: str) -> Dict[str, object]:
    """Parse the ``**Section**`` formatted answer into candidate fields.

    Args:
        output: Raw model answer.

    Returns:
        A dict keyed like :class:`~hireflow.resume.parse_resume.Candidate`
        fields.  List fields are always present; scalar fields are only
        present when the answer contained the section.
    """
    parsed: Dict[str, object] = {
        "education_entries": [],
        "roles": [],
        "skills": [],
        "technical_skills": [],
        "soft_skills": [],
        "certifications": [],
        "languages": [],
        "projects": [],
        "achievements": [],
    }
    section = ""
    for raw_line in (output or "").splitlines():
        line = raw_line.strip()
        if not line:
            continue
        if line.startswith("**") and line.endswith("**") and len(line) > 4:
            section = re.sub(r"\s+", "_", line.strip("*").strip().lower())
            continue

        if section == "name":
            parsed["name"] = clean_name(line)
        elif section == "email":
            parsed["email"] = validate_email(line)
        elif section in ("phone", "location", "linkedin", "github"):
            parsed[section] = line
        elif section == "experience_years":
            parsed["experience_years"] = _parse_int(line)
        elif section == "education":
            entry = _education_entry(line)
            if entry is not None:
                parsed["education_entries"].append(entry)
        elif section == "experience":
            match = _EXPERIENCE_AT.match(line)
            if match:
                parsed["roles"].append(
                    Role(
                        title=match.group(1).strip(),
                        company=match.group(2).strip(),
                        duration=match.group(3).strip(),
                    )
                )
            elif parsed["roles"] and not line.startswith("-"):
                parsed["roles"][-1].responsibilities.append(line)
        elif section == "technical_skills":
            # Answers list skills either on one line or one per line.
            items = _list_items(line)
            parsed["technical_skills"].extend(items)
            parsed["skills"].extend(items)
        elif section in ("soft_skills", "certifications"):
            parsed[section].extend(_list_items(line))
        elif section == "languages":
            parsed["languages"].extend(parse_languages(line))
        elif section == "projects":
            match = _PROJECT_LINE.match(line)
            if match:
                parsed["projects"].append(
                    Project(
                        name=match.group(1).strip(),
                        description=match.group(2).strip(),
                        technologies=_comma_list(match.group(3)),
                    )
                )
        elif section == "achievements":
            achievement = re.sub(r"^[-•]\s*", "", line).strip()
            if achievement and achievement != NOT_PROVIDED:
                parsed["achievements"].append(achievement)

    logger.debug("Parsed LLM answer into %d fields", len(parsed))
    return parsed
