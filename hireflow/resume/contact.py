"""
Identity and contact field extraction.

Every extractor walks a fixed chain of strategies from the most to the
least reliable one and returns a sentinel string when nothing matched.
The sentinels are part of the output contract: reports and agent
prompts print them verbatim.
"""

from __future__ import annotations

import logging
import os
import re
from typing import List, Optional

from .sections import extract_value_for_key, find_section
from .skills import SKILL_SECTIONS, find_known_skills
from .text import extract_lines

logger = logging.getLogger(__name__)

NAME_NOT_FOUND = "Name not found"
EMAIL_NOT_PROVIDED = "Email not provided"
PHONE_NOT_PROVIDED = "Phone not provided"
LOCATION_NOT_PROVIDED = "Location not provided"
NOT_PROVIDED = "Not provided"

EMAIL_PATTERN = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")

_NAME_LINE = re.compile(r"^\s*([A-Z][a-z]+(?:\s[A-Z][a-z]+){1,2})\s*$")
_NAME_CHARS = re.compile(r"^[A-Za-z\s.'-]+$")
_DOCUMENT_WORDS = re.compile(r"resume|cv", re.I)

# Tried in order; Indian mobile formats first, then generic ones.
_PHONE_PATTERNS = [
    re.compile(r"\+91[ -]?\d{10}"),
    re.compile(r"\+91[ -]?\d{5}[ -]?\d{5}"),
    re.compile(r"(?<!\d)\d{10}(?!\d)"),
    re.compile(r"(?<!\d)(?:\+?\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}(?!\d)"),
]
_YEAR_RANGE = re.compile(r"\d{4}\s*-\s*\d{4}")

_LOCATION_PATTERNS = [
    re.compile(r"\b([A-Z][a-z]+(?:\s+[A-Z][a-z]+)+,\s*[A-Z]{2})\b"),
    re.compile(r"\b([A-Z][a-z]+,\s*[A-Z]{2})\b"),
    re.compile(r"\b([A-Z][a-z]+(?:\s+[A-Z][a-z]+)*,\s*[A-Z][a-z]+)"),
]
_STREET_ADDRESS = re.compile(r"\b\d+\s+[A-Z][a-z]+\s+(?:St|Ave|Rd|Dr|Blvd|Lane|Way)\b", re.I)

US_STATES = [
    "Alabama", "Alaska", "Arizona", "Arkansas", "California", "Colorado",
    "Connecticut", "Delaware", "Florida", "Georgia", "Hawaii", "Idaho",
    "Illinois", "Indiana", "Iowa", "Kansas", "Kentucky", "Louisiana", "Maine",
    "Maryland", "Massachusetts", "Michigan", "Minnesota", "Mississippi",
    "Missouri", "Montana", "Nebraska", "Nevada", "New Hampshire", "New Jersey",
    "New Mexico", "New York", "North Carolina", "North Dakota", "Ohio",
    "Oklahoma", "Oregon", "Pennsylvania", "Rhode Island", "South Carolina",
    "South Dakota", "Tennessee", "Texas", "Utah", "Vermont", "Virginia",
    "Washington", "West Virginia", "Wisconsin", "Wyoming",
]

_LINKEDIN = re.compile(r"(?:https?://)?(?:www\.)?linkedin\.com/in/[\w-]+/?", re.I)
_GITHUB = re.compile(r"(?:https?://)?(?:www\.)?github\.com/[\w-]+", re.I)


def _name_from_filename(file_name: str) -> Optional[str]:
    stem = os.path.splitext(os.path.basename(file_name))[0]
    cleaned = " ".join(re.sub(r"[_-]", " ", stem).split())
    if not 2 < len(cleaned) < 50:
        return None
    if not _NAME_CHARS.match(cleaned) or _DOCUMENT_WORDS.search(cleaned):
        return None
    words = cleaned.split(" ")
    if len(words) < 2:
        return None
    return " ".join(word[:1].upper() + word[1:] for word in words)


def extract_name(text: str, file_name: Optional[str] = None) -> str:
    """Extract the candidate's name.

    Strategies, in order: an explicit ``Name:`` line, the uploaded
    file name (unless it is a generic "resume"/"cv" name), a line of two
    or three capitalised words among the first five lines, and finally
    the first line if it only contains name characters.
    """
    lines = extract_lines(text)

    from_key = extract_value_for_key(lines, ["name", "candidate name"])
    if from_key:
        return from_key

    if file_name:
        from_file = _name_from_filename(file_name)
        if from_file:
            logger.debug("Using file name %r as candidate name", file_name)
            return from_file

    for line in lines[:5]:
        match = _NAME_LINE.match(line)
        if match and len(match.group(1)) < 50:
            return match.group(1)

    first_line = lines[0] if lines else ""
    if 2 < len(first_line) < 50 and _NAME_CHARS.match(first_line):
        return first_line

    return NAME_NOT_FOUND


def extract_email(text: str) -> str:
    lines = extract_lines(text)
    from_key = extract_value_for_key(lines, ["email", "e-mail"])
    if from_key:
        match = EMAIL_PATTERN.search(from_key)
        if match:
            return match.group(0)
    match = EMAIL_PATTERN.search(text or "")
    return match.group(0) if match else EMAIL_NOT_PROVIDED


def extract_phone(text: str) -> str:
    """Extract a phone number.

    A labelled line (``Phone:``, ``Mobile:``, ``Contact:`` ...) wins when
    it carries at least seven digits; its value is reduced to digits and
    ``+``.  Otherwise the patterns are tried in order and anything that
    looks like a ``YYYY - YYYY`` date range is skipped.
    """
    lines = extract_lines(text)
    from_key = extract_value_for_key(
        lines, ["phone", "mobile", "contact", "contact no", "contact number"]
    )
    if from_key:
        digits = re.sub(r"[^\d+]", "", from_key)
        if sum(ch.isdigit() for ch in digits) >= 7:
            return digits

    for pattern in _PHONE_PATTERNS:
        match = pattern.search(text or "")
        if match:
            if _YEAR_RANGE.search(match.group(0)):
                continue
            return match.group(0).strip()
    return PHONE_NOT_PROVIDED


def _place_lines(text: str, lines: List[str]) -> List[str]:
    # "Python, Django, Flask" has the same shape as "Lisbon, Portugal".
    skill_lines = set(extract_lines(find_section(text, SKILL_SECTIONS) or ""))
    return [line for line in lines if line not in skill_lines and not find_known_skills(line)]


def extract_location(text: str) -> str:
    lines = extract_lines(text)

    from_key = extract_value_for_key(lines, ["location", "address"])
    if from_key:
        return from_key

    place_lines = _place_lines(text, lines[:10])
    for pattern in _LOCATION_PATTERNS:
        for line in place_lines:
            match = pattern.search(line)
            if match:
                return match.group(1)

    for line in lines[:10]:
        for state in US_STATES:
            if re.search(rf"\b{state}\b", line):
                return state

    for line in lines[:15]:
        if _STREET_ADDRESS.search(line):
            return line[:50] + "..." if len(line) > 50 else line

    return LOCATION_NOT_PROVIDED


def extract_linkedin(text: str) -> str:
    match = _LINKEDIN.search(text or "")
    return match.group(0).rstrip("/") if match else NOT_PROVIDED


def extract_github(text: str) -> str:
    match = _GITHUB.search(text or "")
    return match.group(0) if match else NOT_PROVIDED
