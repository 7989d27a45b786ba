"""
Section boundary detection.

Most résumés are organised under short headings such as "Experience"
or "Technical Skills".  The helpers below locate the body of a named
section and read ``key: value`` style lines, which the per-field
extractors use before falling back to whole-text pattern matching.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

from .text import extract_lines

SECTION_HEADERS = [
    "experience",
    "education",
    "skills",
    "projects",
    "certifications",
    "languages",
    "summary",
    "achievements",
    "awards",
]

# Lines at least this long are treated as content, never as headings.
MAX_HEADER_LENGTH = 50


def extract_value_for_key(lines: Iterable[str], keys: List[str]) -> Optional[str]:
    """Return the value of the first ``key: value`` line matching ``keys``.

    The key must start the line; the separator may be ``:`` or ``-`` or
    just whitespace.  Matching is case-insensitive.
    """
    alternatives = "|".join(re.escape(key) for key in keys)
    pattern = re.compile(rf"^\s*(?:{alternatives})\b\s*[:\-]?\s*(.+)", re.I)
    for line in lines:
        match = pattern.match(line)
        if match and match.group(1).strip():
            return match.group(1).strip()
    return None


def _is_header(line: str, names: Iterable[str]) -> bool:
    lowered = line.lower()
    return len(line) < MAX_HEADER_LENGTH and any(name.lower() in lowered for name in names)


def find_section(text: str, section_names: List[str]) -> Optional[str]:
    """Return the body of the first section whose heading matches.

    Args:
        text: Résumé text.
        section_names: Heading variants for the wanted section, e.g.
            ``["skills", "technical skills"]``.

    Returns:
        The lines between the heading and the next known section
        heading joined with newlines, ``""`` if the section is empty,
        or ``None`` when no heading was found.
    """
    lines = extract_lines(text)
    start = None
    for index, line in enumerate(lines):
        if _is_header(line, section_names):
            start = index + 1
            break
    if start is None:
        return None

    wanted = {name.lower() for name in section_names}
    other_headers = [header for header in SECTION_HEADERS if header not in wanted]
    end = len(lines)
    for index in range(start, len(lines)):
        if _is_header(lines[index], other_headers):
            end = index
            break
    return "\n".join(lines[start:end])
