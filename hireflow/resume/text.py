"""
Résumé text cleaning.

Text pulled out of uploaded documents is rarely clean.  Naive PDF
extraction leaves object markers, dictionary delimiters and font
commands behind, and copy/pasted résumés carry HTML fragments.  The
helpers in this module strip that noise while keeping line breaks
intact, because section detection works on a line-by-line basis.
"""

from __future__ import annotations

import logging
import re
import unicodedata
from typing import List

logger = logging.getLogger(__name__)

# Ordered: block removals must run before the token removals below them.
_PDF_ARTEFACTS = [
    re.compile(r"%PDF-[\d.]+"),
    re.compile(r"%%EOF"),
    re.compile(r"\d+\s+\d+\s+obj\b.*?\bendobj", re.S),
    re.compile(r"\bstream\b.*?\bendstream\b", re.S),
    re.compile(r"\bxref\b[\d\s fn]*"),
    re.compile(r"\btrailer\b"),
    re.compile(r"\bstartxref\s*\d+"),
    re.compile(r"<<|>>"),
    re.compile(r"\b\d+\s+\d+\s+R\b"),
    re.compile(r"(?<!\w)/[A-Z][A-Za-z]+"),
]
_HTML_TAG = re.compile(r"<[^>\n]*>")
_HTML_ENTITY = re.compile(r"&[a-zA-Z]+;")
_KEPT_CONTROLS = "\n\t"
# Dash and quote variants common in PDF output, mapped to ASCII.
_PUNCTUATION = str.maketrans({
    "\u2010": "-", "\u2011": "-", "\u2012": "-", "\u2013": "-",
    "\u2014": "-", "\u2015": "-", "\u2212": "-",
    "\u2018": "'", "\u2019": "'", "\u201c": "\"", "\u201d": "\"",
    "\u00a0": " ",
})
_HSPACE = re.compile(r"[ \t\f\v]+")
_BLANK_LINES = re.compile(r"\n{3,}")

_WORD_CHARS = re.compile(r"^[a-zA-Z0-9@.\-+()]+$")
_SENTENCE_SPLIT = re.compile(r"[.!?]+")


def _strip_control_characters(text: str) -> str:
    return "".join(
        " " if unicodedata.category(ch).startswith("C") and ch not in _KEPT_CONTROLS else ch
        for ch in text
    )


def clean_text(text: str) -> str:
    """Remove document artefacts from extracted résumé text.

    Args:
        text: Raw text as returned by the document extractor.

    Returns:
        The cleaned text.  Horizontal whitespace is collapsed within
        each line and runs of blank lines are reduced to one, but line
        breaks themselves are preserved.
    """
    if not text or not isinstance(text, str):
        return ""
    cleaned = text.replace("\r\n", "\n").replace("\r", "\n")
    for pattern in _PDF_ARTEFACTS:
        cleaned = pattern.sub(" ", cleaned)
    cleaned = _HTML_TAG.sub(" ", cleaned)
    cleaned = _HTML_ENTITY.sub(" ", cleaned)
    cleaned = _strip_control_characters(cleaned.translate(_PUNCTUATION))
    lines = [_HSPACE.sub(" ", line).strip() for line in cleaned.split("\n")]
    cleaned = _BLANK_LINES.sub("\n\n", "\n".join(lines)).strip()
    logger.debug("Cleaned text: %d -> %d characters", len(text), len(cleaned))
    return cleaned


def extract_lines(text: str) -> List[str]:
    """Split text into stripped, non-empty lines."""
    return [line.strip() for line in re.split(r"[\n\r]+", text or "") if line.strip()]


def readable_words(text: str) -> List[str]:
    """Return the tokens of ``text`` that look like real words.

    Purely numeric tokens are dropped unless they are long enough to be
    a phone number (10 digits or more).
    """
    words: List[str] = []
    for word in clean_text(text).split():
        if not 2 <= len(word) <= 30:
            continue
        if not _WORD_CHARS.match(word):
            continue
        if word.isdigit() and len(word) < 10:
            continue
        words.append(word)
    return words


def extract_sentences(text: str) -> List[str]:
    """Split cleaned text into sentence-like fragments starting with a letter."""
    sentences = []
    for fragment in _SENTENCE_SPLIT.split(clean_text(text)):
        fragment = " ".join(fragment.split())
        if 10 < len(fragment) < 200 and fragment[0].isalpha():
            sentences.append(fragment)
    return sentences
