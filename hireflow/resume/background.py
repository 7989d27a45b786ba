"""
Education and work history extraction.

The summaries returned here are deliberately coarse: a short excerpt of
the relevant section plus one derived number or label.  The entry
extractors (`extract_education_entries`, `extract_roles`) provide the
finer grained view that reports and the screening agents consume.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional

from .sections import find_section
from .skills import find_known_skills
from .text import extract_lines, extract_sentences

logger = logging.getLogger(__name__)

EDUCATION_SECTIONS = ["education", "academic background", "qualifications"]
EXPERIENCE_SECTIONS = ["experience", "work history", "employment", "work experience"]
PROJECT_SECTIONS = ["projects"]
ACHIEVEMENT_SECTIONS = ["achievements", "awards"]
SUMMARY_SECTIONS = ["summary", "profile", "objective"]

EDUCATION_NOT_FOUND = "Education details not found"
LEVEL_NOT_SPECIFIED = "Not specified"

# Priority order: the first level whose pattern matches wins.  Two letter
# abbreviations are matched case-sensitively so that words such as "as"
# do not count as a degree.
DEGREE_LEVELS = [
    ("Doctorate", re.compile(r"(?i:\b(?:PhD|Ph\.D|Doctorate))")),
    ("Masters", re.compile(r"(?i:\b(?:Masters?|M\.S|M\.A|MBA)\b)|\b(?:MS|MA)\b")),
    ("Bachelors", re.compile(r"(?i:\b(?:Bachelors?|B\.S|B\.A)\b)|\b(?:BS|BA)\b")),
    ("Associates", re.compile(r"(?i:\b(?:Associates?|A\.S|A\.A)\b)|\b(?:AS|AA)\b")),
    ("High School", re.compile(r"(?i:\b(?:High School|Diploma|GED)\b)")),
]

_INSTITUTION = re.compile(r"\b(?:University|College|Institute|School)\b", re.I)
_YEARS = re.compile(r"\b\d{4}(?:\s*[-–]\s*(?:\d{4}|present|current))?\b", re.I)
_ENTRY_SPLIT = re.compile(r"\s*(?:,|\||\bfrom\b|\bat\b)\s*")

_YEARS_OF_EXPERIENCE = [
    re.compile(r"(\d+)\+?\s*years?\s*(?:of\s*)?experience", re.I),
    re.compile(r"(\d+)\+?\s*years?\s*in", re.I),
    re.compile(r"experience\s*:\s*(\d+)\+?\s*years?", re.I),
]
_DATE_RANGE = re.compile(r"\d{4}\s*-\s*(?:\d{4}|present|current)", re.I)
YEARS_PER_ROLE = 2
MAX_ESTIMATED_YEARS = 15

_BULLET = re.compile(r"^[-•*▪◦]\s*(.+)$")
_ROLE_AT = re.compile(r"^(?P<title>.+?)\s+at\s+(?P<company>[^(]+?)\s*(?:\((?P<duration>[^)]*)\))?$")
_ROLE_COMMAS = re.compile(r"^(?P<title>[^,]+),\s*(?P<company>[^,]+),\s*(?P<duration>.*\d{4}.*)$")
_PROJECT_ITEM = re.compile(r"^(?P<name>[^:–]+?)\s*(?::|\s-\s|–)\s*(?P<description>.+)$")
_PROJECT_INDICATORS = ["project", "built", "developed", "created", "implemented"]
_ACHIEVEMENT_WORDS = [
    "achieved", "accomplished", "award", "recognition", "improved", "increased", "reduced",
]


@dataclass
class EducationSummary:
    text: str
    level: str


@dataclass
class EducationEntry:
    degree: str
    institution: str
    years: str = ""


@dataclass
class ExperienceSummary:
    text: str
    years: int


@dataclass
class Role:
    title: str
    company: str
    duration: str = ""
    responsibilities: List[str] = field(default_factory=list)


@dataclass
class Project:
    name: str
    description: str = ""
    technologies: List[str] = field(default_factory=list)


def _truncate(text: str, limit: int) -> str:
    return text[:limit] + "..." if len(text) > limit else text


def degree_level(text: str) -> str:
    """Return the highest degree level mentioned in ``text``."""
    for level, pattern in DEGREE_LEVELS:
        if pattern.search(text):
            return level
    return LEVEL_NOT_SPECIFIED


def extract_education(text: str) -> EducationSummary:
    section = find_section(text, EDUCATION_SECTIONS)
    level = degree_level(section or text)
    summary = _truncate(section, 150) if section else EDUCATION_NOT_FOUND
    return EducationSummary(text=summary, level=level)


def extract_education_entries(text: str) -> List[EducationEntry]:
    """Read individual degrees from lines naming a degree and an institution.

    A line such as ``BS Computer Science, Stanford University, 2014 - 2018``
    is split on commas, pipes and the words "from"/"at"; the part that
    names the institution becomes ``institution``, the first part carrying
    a degree keyword becomes ``degree`` and any year or year range is kept
    as ``years``.
    """
    section = find_section(text, EDUCATION_SECTIONS)
    entries: List[EducationEntry] = []
    for line in extract_lines(section or text):
        line = _BULLET.sub(r"\1", line)
        if not _INSTITUTION.search(line) or degree_level(line) == LEVEL_NOT_SPECIFIED:
            continue
        years_match = _YEARS.search(line)
        bare = re.sub(r"\([^)]*\)", " ", _YEARS.sub(" ", line))
        parts = [part.strip(" -–") for part in _ENTRY_SPLIT.split(bare)]
        parts = [part for part in parts if part]
        institution = next((part for part in parts if _INSTITUTION.search(part)), "")
        degree = next(
            (
                part
                for part in parts
                if part != institution and degree_level(part) != LEVEL_NOT_SPECIFIED
            ),
            "",
        )
        if not degree:
            # "Bachelor of Science, University of X": the keyword sits in the
            # institution-free remainder of the line.
            degree = parts[0] if parts and parts[0] != institution else institution
        entries.append(
            EducationEntry(
                degree=degree,
                institution=institution,
                years=years_match.group(0) if years_match else "",
            )
        )
    logger.debug("Found %d education entries", len(entries))
    return entries


def extract_experience(text: str) -> ExperienceSummary:
    """Estimate total years of experience.

    Explicit statements ("8+ years of experience") are trusted first.
    Without one, every ``YYYY - YYYY|present`` range in the experience
    section counts as a role of two years, capped at fifteen.
    """
    section = find_section(text, EXPERIENCE_SECTIONS)
    search_text = section or text or ""

    years = 0
    for pattern in _YEARS_OF_EXPERIENCE:
        match = pattern.search(search_text)
        if match:
            years = int(match.group(1))
            break

    if years == 0:
        ranges = _DATE_RANGE.findall(search_text)
        years = min(len(ranges) * YEARS_PER_ROLE, MAX_ESTIMATED_YEARS)

    if section:
        summary = _truncate(section, 200)
    else:
        summary = f"{years} years of professional experience"
    return ExperienceSummary(text=summary, years=years)


def _role_from_line(line: str) -> Optional[Role]:
    if "|" in line:
        parts = [part.strip() for part in line.split("|")]
        if len(parts) >= 2 and parts[0] and parts[1]:
            duration = parts[2] if len(parts) > 2 else ""
            return Role(title=parts[0], company=parts[1], duration=duration)
    match = _ROLE_AT.match(line)
    if match:
        return Role(
            title=match.group("title").strip(),
            company=match.group("company").strip(),
            duration=(match.group("duration") or "").strip(),
        )
    match = _ROLE_COMMAS.match(line)
    if match:
        return Role(
            title=match.group("title").strip(),
            company=match.group("company").strip(),
            duration=match.group("duration").strip(),
        )
    return None


def extract_roles(text: str) -> List[Role]:
    """Return the roles listed in the experience section.

    A role starts on a ``Title | Company | dates``, ``Title at Company
    (dates)`` or ``Title, Company, dates`` line.  Bullet lines that follow
    are collected as its responsibilities; bullets before the first role
    are ignored.
    """
    section = find_section(text, EXPERIENCE_SECTIONS)
    if not section:
        return []
    roles: List[Role] = []
    for line in extract_lines(section):
        bullet = _BULLET.match(line)
        if bullet:
            if roles:
                roles[-1].responsibilities.append(bullet.group(1).strip())
            continue
        role = _role_from_line(line)
        if role is not None:
            roles.append(role)
    return roles


def _section_items(text: str, names: List[str], limit: int = 10) -> List[str]:
    section = find_section(text, names)
    if not section:
        return []
    lines = extract_lines(section)
    bullets = [m.group(1).strip() for m in map(_BULLET.match, lines) if m]
    return (bullets or lines)[:limit]


def extract_projects(text: str) -> List[Project]:
    """Return projects from the projects section.

    Items written as ``Name: description`` or ``Name - description`` are
    split accordingly.  Without a projects section the first sentence
    describing something built is used as an anonymous project.
    """
    projects = []
    for item in _section_items(text, PROJECT_SECTIONS):
        match = _PROJECT_ITEM.match(item)
        if match:
            name, description = match.group("name"), match.group("description")
        else:
            name, description = item, ""
        projects.append(
            Project(
                name=name.strip(),
                description=description.strip(),
                technologies=find_known_skills(item),
            )
        )
    if projects:
        return projects

    for sentence in extract_sentences(text)[:10]:
        lowered = sentence.lower()
        if any(indicator in lowered for indicator in _PROJECT_INDICATORS):
            return [
                Project(
                    name="Project mentioned in resume",
                    description=_truncate(sentence, 100),
                    technologies=find_known_skills(text)[:3],
                )
            ]
    return []


def extract_achievements(text: str) -> List[str]:
    achievements = _section_items(text, ACHIEVEMENT_SECTIONS)
    if achievements:
        return achievements
    for sentence in extract_sentences(text)[:10]:
        lowered = sentence.lower()
        if any(word in lowered for word in _ACHIEVEMENT_WORDS):
            achievements.append(_truncate(sentence, 80))
            if len(achievements) >= 2:
                break
    return achievements


def extract_summary(text: str) -> str:
    section = find_section(text, SUMMARY_SECTIONS)
    if section:
        summary = " ".join(extract_lines(section))
    else:
        sentences = extract_sentences(text)
        summary = sentences[0] if sentences else ""
    return summary[:150]
