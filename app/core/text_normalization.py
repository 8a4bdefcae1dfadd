"""
Text normalization utilities for cleaning up PDF/DOCX extraction artifacts.

Everything downstream (segmenter, field parser) assumes text produced here:
- newlines are '\n' only
- no NUL / form-feed control characters
- lines carry no trailing whitespace
- runs of blank lines are collapsed to a single blank line (one paragraph break)
"""

import re


CONTROL_CHARS_RE = re.compile(r"[\x00\x0b\x0c\u200b\ufeff]")
TRAILING_WS_RE = re.compile(r"[ \t]+\n")
BLANK_RUN_RE = re.compile(r"\n[ \t]*(?:\n[ \t]*){2,}")
SPACED_CHARS_RE = re.compile(r"^(?:[A-Za-z0-9@.()\-\+]\s+){2,}[A-Za-z0-9@.()\-\+]+$")


def normalize_newlines(text: str) -> str:
    """Convert '\r\n' and lone '\r' to '\n'."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def despace_line(line: str) -> str:
    """
    Fix PDF lines that extract with spaces between every character.

    Examples:
      'E X P E R I E N C E' -> 'EXPERIENCE'
      'J O H N   D O E' -> 'JOHN DOE'   (2+ spaces are a word boundary)
      'Python developer' -> unchanged
    """
    t = line.strip()
    if not t or not SPACED_CHARS_RE.match(t):
        return line
    parts = re.split(r"\s{2,}", t)
    return " ".join("".join(p.split()) for p in parts if p)


def normalize_extracted_text(text: str) -> str:
    """Apply the full clean-up pass to raw extractor output."""
    if not text:
        return ""
    t = normalize_newlines(text)
    t = CONTROL_CHARS_RE.sub("", t)
    t = t.replace("\t", " ")
    t = TRAILING_WS_RE.sub("\n", t)
    t = BLANK_RUN_RE.sub("\n\n", t)
    return t.strip("\n")


def normalize_email(email: str) -> str:
    """Identity form of an email address used for storage and duplicate checks."""
    return (email or "").strip().lower()
