"""
Field Parser: one resume chunk -> CandidateFacts.

Deterministic regex/keyword heuristics. Missing fields come back as "" / 0 / []
and never raise; deciding whether a result is good enough is the orchestrator's
job.

Known limitations:
- education entries only carry `degree` (the raw matched line); institution
  and year stay empty
- education is only read from an explicit "Education:" section, there is no
  whole-chunk fallback
"""

from typing import List, Optional
import logging
import re

from app.core.schemas import CandidateFacts, EducationEntry
from app.core.vocabulary import DEFAULT_VOCABULARY, Vocabulary


logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
PHONE_RE = re.compile(r"(?:\+?\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}")
NAME_LABEL_RE = re.compile(r"\bName[ \t]*:[ \t]*(.+)$", re.IGNORECASE | re.MULTILINE)
NAME_LINE_RE = re.compile(r"[A-Za-z ]{2,50}")

# Labeled sections run until the next blank line or the end of the chunk
KEY_SKILLS_SECTION_RE = re.compile(r"Key\s+Skills\s*:[ \t]*(.*?)(?:\n[ \t]*\n|\Z)", re.IGNORECASE | re.DOTALL)
EDUCATION_SECTION_RE = re.compile(r"Education\s*:[ \t]*(.*?)(?:\n[ \t]*\n|\Z)", re.IGNORECASE | re.DOTALL)

YEARS_OF_EXPERIENCE_RE = re.compile(
    r"(\d+)\s*\+?\s*(?:years?|yrs?)\.?\s*(?:of\s*)?(?:experience|exp)\b",
    re.IGNORECASE,
)
EXPERIENCE_LABEL_RE = re.compile(
    r"experience\s*:\s*(\d+)\s*\+?\s*(?:years?|yrs?)\b",
    re.IGNORECASE,
)

NAME_SCAN_LINES = 5


def extract_email(text: str) -> str:
    m = EMAIL_RE.search(text)
    return m.group(0) if m else ""


def extract_phone(text: str) -> str:
    m = PHONE_RE.search(text)
    return m.group(0).strip() if m else ""


def extract_name(text: str) -> str:
    """'Name: ...' label first, then the first plausible name among the top lines."""
    m = NAME_LABEL_RE.search(text)
    if m and m.group(1).strip():
        return m.group(1).strip()

    lines = [ln.strip() for ln in text.split("\n") if ln.strip()]
    for line in lines[:NAME_SCAN_LINES]:
        if "@" not in line and NAME_LINE_RE.fullmatch(line):
            return line
    return ""


def _labeled_section(pattern: re.Pattern, text: str) -> Optional[str]:
    m = pattern.search(text)
    return m.group(1) if m else None


def extract_skills(text: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> List[str]:
    """
    Vocabulary terms found in the 'Key Skills:' section, or the whole chunk when
    there is no such section. Substring containment, case-insensitive.
    """
    section = _labeled_section(KEY_SKILLS_SECTION_RE, text)
    haystack = (section if section is not None else text).lower()

    found: List[str] = []
    for skill in vocabulary.skills:
        term = skill.lower()
        if term in haystack and term not in found:
            found.append(term)
    return found


def extract_experience_years(text: str, max_plausible: int = 50) -> int:
    """Largest 'N years of experience' / 'Experience: N years' value, 0 if none."""
    values = [
        int(m.group(1))
        for pattern in (YEARS_OF_EXPERIENCE_RE, EXPERIENCE_LABEL_RE)
        for m in pattern.finditer(text)
    ]
    plausible = [v for v in values if v <= max_plausible]
    if len(plausible) < len(values):
        logger.debug("ignored implausible experience mentions: %s", sorted(set(values) - set(plausible)))
    return max(plausible, default=0)


def extract_education(text: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> List[EducationEntry]:
    section = _labeled_section(EDUCATION_SECTION_RE, text)
    if section is None:
        return []

    entries = []
    for line in section.split("\n"):
        lowered = line.lower()
        if any(kw in lowered for kw in vocabulary.education_keywords):
            entries.append(EducationEntry(degree=line.strip()))
    return entries


def parse(chunk_text: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY, max_plausible_years: int = 50) -> CandidateFacts:
    text = chunk_text or ""
    return CandidateFacts(
        name=extract_name(text),
        email=extract_email(text),
        phone=extract_phone(text),
        skills=extract_skills(text, vocabulary),
        experience_years=extract_experience_years(text, max_plausible_years),
        education=extract_education(text, vocabulary),
        raw_text=text,
    )
