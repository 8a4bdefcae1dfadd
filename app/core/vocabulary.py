"""
Controlled vocabularies shared by the field parser, segmenter and scoring engine.

These are read-only tables. Components take a Vocabulary argument (defaulting to
DEFAULT_VOCABULARY) so tests can pass a smaller one.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, Pattern, Tuple


SKILL_KEYWORDS: Tuple[str, ...] = (
    "javascript", "python", "java", "react", "node.js", "angular", "vue",
    "html", "css", "sql", "mongodb", "postgresql", "mysql", "git",
    "docker", "kubernetes", "aws", "azure", "gcp", "tensorflow",
    "machine learning", "data analysis", "excel", "powerbi", "tableau",
    "photoshop", "illustrator", "figma", "sketch", "ui/ux", "design",
    "marketing", "seo", "content writing", "social media", "analytics",
    "project management", "agile", "scrum", "leadership", "communication",
)

EDUCATION_KEYWORDS: Tuple[str, ...] = (
    "bachelor", "master", "phd", "degree", "university", "college",
    "institute", "mba", "b.tech", "m.tech",
)

# Degree subjects that earn the full education bonus
RELEVANT_EDUCATION_TERMS: Tuple[str, ...] = (
    "computer", "engineering", "science", "technology", "business", "management",
)

# Marker kind -> line pattern. A repeated kind starts a new resume.
LABELED_HEADER_MARKERS: Dict[str, Pattern[str]] = {
    "name": re.compile(r"\bname\s*:", re.IGNORECASE),
    "role": re.compile(r"\brole\s*:", re.IGNORECASE),
    "contact": re.compile(r"\bcontact\s*:", re.IGNORECASE),
}

DOCUMENT_TITLE_MARKERS: Dict[str, Pattern[str]] = {
    "title": re.compile(r"curriculum\s+vitae|\bresume\b|\bbio-?data\b|\bcv\b", re.IGNORECASE),
}

HEADER_MARKER_SETS: Dict[str, Dict[str, Pattern[str]]] = {
    "labeled": LABELED_HEADER_MARKERS,
    "document-title": DOCUMENT_TITLE_MARKERS,
}


@dataclass(frozen=True)
class Vocabulary:
    skills: Tuple[str, ...] = SKILL_KEYWORDS
    education_keywords: Tuple[str, ...] = EDUCATION_KEYWORDS
    relevant_education_terms: Tuple[str, ...] = RELEVANT_EDUCATION_TERMS
    header_markers: Dict[str, Pattern[str]] = field(default_factory=lambda: dict(LABELED_HEADER_MARKERS))

    def header_kind(self, line: str) -> str | None:
        """Return the marker kind a line carries, or None for an ordinary line."""
        for kind, pattern in self.header_markers.items():
            if pattern.search(line):
                return kind
        return None

    def has_header_marker(self, text: str) -> bool:
        return any(self.header_kind(line) for line in text.split("\n"))


DEFAULT_VOCABULARY = Vocabulary()


def vocabulary_for_marker_set(marker_set: str) -> Vocabulary:
    """Default vocabularies with the named header marker set swapped in."""
    try:
        markers = HEADER_MARKER_SETS[marker_set]
    except KeyError:
        raise ValueError(f"Unknown header marker set: {marker_set!r}") from None
    return Vocabulary(header_markers=dict(markers))
