"""
Skill, spoken language and certification extraction.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Tuple

from .sections import find_section
from .text import extract_lines

logger = logging.getLogger(__name__)

SKILL_SECTIONS = ["skills", "technical skills", "technologies", "proficiencies"]
LANGUAGE_SECTIONS = ["languages", "language skills"]
CERTIFICATION_SECTIONS = ["certifications", "certificates", "licenses"]

MAX_SKILLS = 15
MAX_LANGUAGES = 5

COMMON_SKILLS = [
    "JavaScript", "Python", "Java", "React", "Angular", "Vue", "Node.js", "Express",
    "HTML", "CSS", "TypeScript", "SQL", "MongoDB", "PostgreSQL", "MySQL",
    "AWS", "Azure", "Docker", "Kubernetes", "Git", "REST", "GraphQL",
    "Machine Learning", "Data Science", "AI", "TensorFlow", "PyTorch",
    "Leadership", "Communication", "Project Management", "Agile", "Scrum",
]

TECHNICAL_KEYWORDS = [
    "javascript", "python", "java", "react", "angular", "vue", "node", "html",
    "css", "sql", "aws", "docker", "git",
]
SOFT_KEYWORDS = [
    "leadership", "communication", "management", "teamwork", "problem",
    "analysis", "project", "planning", "organization", "collaboration",
]

# Headings inside a skills block ("Languages: Python, Go") are not skills.
_CATEGORY_LABELS = {
    "languages", "frameworks", "tools", "technologies", "databases", "cloud",
    "skills", "technical", "soft", "other", "platforms", "libraries",
    "proficiencies", "and",
}
_SKILL_TOKEN = re.compile(r"\b[A-Z][a-z]+(?:\.[a-z]+)*\b")

SPOKEN_LANGUAGES = [
    "English", "Spanish", "French", "German", "Italian", "Portuguese", "Russian",
    "Chinese", "Japanese", "Korean", "Arabic", "Hindi", "Dutch", "Swedish",
]

# Wider list used for LLM answers, which tend to name less common languages.
KNOWN_LANGUAGES = [
    "English", "Spanish", "French", "German", "Italian", "Portuguese", "Russian", "Chinese",
    "Mandarin", "Cantonese", "Japanese", "Korean", "Arabic", "Hindi", "Bengali", "Urdu",
    "Telugu", "Tamil", "Marathi", "Gujarati", "Punjabi", "Thai", "Vietnamese", "Indonesian",
    "Malay", "Tagalog", "Dutch", "Swedish", "Norwegian", "Danish", "Finnish", "Polish",
    "Czech", "Hungarian", "Romanian", "Bulgarian", "Croatian", "Serbian", "Greek", "Turkish",
    "Hebrew", "Persian", "Farsi", "Swahili", "Amharic", "Yoruba", "Igbo", "Hausa", "Zulu",
    "Afrikaans", "Sinhala", "Nepali", "Burmese", "Khmer", "Lao", "Mongolian", "Kazakh",
    "Uzbek", "Kyrgyz", "Tajik", "Georgian", "Armenian", "Azerbaijani", "Estonian", "Latvian",
    "Lithuanian", "Slovenian", "Slovak", "Maltese", "Irish", "Welsh", "Scottish Gaelic",
    "Basque", "Catalan", "Galician", "Albanian", "Macedonian", "Bosnian", "Montenegrin",
    "Icelandic", "Luxembourgish", "Romansh",
]
PROFICIENCY_LEVELS = [
    "Native", "Fluent", "Advanced", "Intermediate", "Basic", "Beginner", "Conversational",
    "Professional", "Business", "A1", "A2", "B1", "B2", "C1", "C2",
]

_CERTIFICATION_LINE = re.compile(r"certifi|\b(?:PMP|CISSP|CompTIA|CSM|CKA)\b", re.I)
_BULLET = re.compile(r"^[-•*▪◦]\s*")


def _word_pattern(term: str) -> re.Pattern:
    return re.compile(rf"(?<!\w){re.escape(term)}(?!\w)", re.I)


def find_known_skills(text: str) -> List[str]:
    """Return the entries of COMMON_SKILLS that occur as whole words in ``text``."""
    return [skill for skill in COMMON_SKILLS if _word_pattern(skill).search(text or "")]


def _dedupe(items: Iterable[str]) -> List[str]:
    seen = set()
    result = []
    for item in items:
        key = item.lower()
        if key not in seen:
            seen.add(key)
            result.append(item)
    return result


def extract_skills(text: str) -> List[str]:
    """Collect skills from the skills section, or the whole text without one.

    Known skills are matched first.  Inside a skills section any other
    capitalised token of 3 to 19 characters is taken as a skill too,
    except the usual category labels.  At most ``MAX_SKILLS`` are kept.
    """
    section = find_section(text, SKILL_SECTIONS)
    found = find_known_skills(section or text)
    if section:
        for token in _SKILL_TOKEN.findall(section):
            if 2 < len(token) < 20 and token.lower() not in _CATEGORY_LABELS:
                found.append(token)
    skills = _dedupe(found)[:MAX_SKILLS]
    logger.debug("Extracted %d skills", len(skills))
    return skills


def categorize_skills(skills: Iterable[str]) -> Tuple[List[str], List[str]]:
    """Split skills into ``(technical, soft)``.

    A skill naming a soft keyword ("Leadership", "Project Management") is
    soft; everything else counts as technical.
    """
    technical: List[str] = []
    soft: List[str] = []
    for skill in skills:
        lowered = skill.lower()
        if any(keyword in lowered for keyword in SOFT_KEYWORDS):
            soft.append(skill)
        else:
            technical.append(skill)
    return technical, soft


def extract_languages(text: str) -> List[str]:
    section = find_section(text, LANGUAGE_SECTIONS)
    search_text = section or text or ""
    found = [lang for lang in SPOKEN_LANGUAGES if _word_pattern(lang).search(search_text)]
    return found[:MAX_LANGUAGES]


def parse_languages(language_text: str) -> List[str]:
    """Parse a free-form languages answer into ``"Language (Level)"`` entries.

    >>> parse_languages("English (Native), Spanish - B2")
    ['English (Native)', 'Spanish (B2)']

    When no known language is recognised, short parts (one or two words
    of at least three characters) are returned verbatim.
    """
    if not language_text or language_text.strip() in ("", "Not provided"):
        return []
    parts = [part.strip() for part in re.split(r"[,;|&\n]+", language_text)]
    parts = [part for part in parts if part]

    languages: List[str] = []
    for part in parts:
        for language in KNOWN_LANGUAGES:
            if not _word_pattern(language).search(part):
                continue
            level = next(
                (lvl for lvl in PROFICIENCY_LEVELS if _word_pattern(lvl).search(part)),
                None,
            )
            entry = f"{language} ({level})" if level else language
            if entry not in languages:
                languages.append(entry)
            break

    if not languages:
        languages = [part for part in parts if len(part.split(" ")) <= 2 and len(part) >= 3]
    return languages


def extract_certifications(text: str) -> List[str]:
    """Return certification lines.

    The certifications section is used verbatim when present.  Otherwise
    lines that mention a certification ("AWS Certified ...", "PMP") are
    collected from the whole text.
    """
    section = find_section(text, CERTIFICATION_SECTIONS)
    if section:
        lines = [_BULLET.sub("", line) for line in extract_lines(section)]
    else:
        lines = [
            _BULLET.sub("", line)
            for line in extract_lines(text)
            if _CERTIFICATION_LINE.search(line) and len(line) <= 100
        ]
    return _dedupe(line for line in lines if line)[:10]
