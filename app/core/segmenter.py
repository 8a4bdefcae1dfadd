"""
Resume Segmenter: split one extracted text blob into one chunk per candidate.

Bulk scans and merged PDFs often hold several resumes back to back. Splitting is
an ordered cascade of strategies; each returns None when its precondition does
not hold, and the first non-empty result wins:

1. split_on_emails   - more than one email address in the text
2. split_on_headers  - more than one resume header line (Name:/Role:/Contact:,
                       or Curriculum Vitae/Resume/CV depending on the marker set)
3. whole_text        - total-failure fallback, the document is never lost

Pure and deterministic; never raises.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple
import logging
import re

from app.core.config import Settings
from app.core.text_normalization import normalize_newlines
from app.core.vocabulary import DEFAULT_VOCABULARY, Vocabulary, vocabulary_for_marker_set


logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
PARAGRAPH_BREAK = "\n\n"


@dataclass(frozen=True)
class SegmenterConfig:
    min_chunk_chars: int = 100
    boundary_min_gap: int = 50
    vocabulary: Vocabulary = DEFAULT_VOCABULARY

    @classmethod
    def from_settings(cls, settings: Settings) -> "SegmenterConfig":
        return cls(
            min_chunk_chars=settings.MIN_CHUNK_CHARS,
            boundary_min_gap=settings.BOUNDARY_MIN_GAP,
            vocabulary=vocabulary_for_marker_set(settings.HEADER_MARKER_SET),
        )


ChunkStrategy = Callable[[str, SegmenterConfig], Optional[List[str]]]


def find_email_offsets(text: str) -> List[int]:
    return [m.start() for m in EMAIL_RE.finditer(text)]


def find_header_markers(text: str, vocabulary: Vocabulary) -> List[Tuple[int, str]]:
    """Return (line start offset, marker kind) for every header line, in order."""
    markers: List[Tuple[int, str]] = []
    offset = 0
    for line in text.split("\n"):
        kind = vocabulary.header_kind(line)
        if kind:
            markers.append((offset, kind))
        offset += len(line) + 1
    return markers


def _slice_at(text: str, boundaries: Sequence[int]) -> List[str]:
    """Cut text at the given increasing offsets; each piece is trimmed."""
    ends = list(boundaries[1:]) + [len(text)]
    return [text[start:end].strip() for start, end in zip(boundaries, ends)]


def split_on_emails(text: str, config: SegmenterConfig) -> Optional[List[str]]:
    """
    Split before every email address after the first.

    For each later email the split point is the nearest paragraph break before
    it, provided that break lies more than boundary_min_gap characters past the
    previous split point. Otherwise the email offset itself is used, so tightly
    packed resumes are not cut into fragments.
    """
    offsets = find_email_offsets(text)
    if len(offsets) <= 1:
        return None

    boundaries = [0]
    for pos in offsets[1:]:
        prev = boundaries[-1]
        para = text.rfind(PARAGRAPH_BREAK, 0, pos)
        if para != -1 and para > prev + config.boundary_min_gap:
            boundaries.append(para)
        else:
            boundaries.append(pos)

    chunks = []
    for piece in _slice_at(text, boundaries):
        if len(piece) < config.min_chunk_chars:
            continue
        # Leading/trailing junk with neither an email nor a header is not a resume
        if not EMAIL_RE.search(piece) and not config.vocabulary.has_header_marker(piece):
            continue
        chunks.append(piece)
    return chunks


def split_on_headers(text: str, config: SegmenterConfig) -> Optional[List[str]]:
    """
    Split at resume header lines.

    A header line opens a new span only when its marker kind was already seen
    in the current span: 'Name:' ... 'Role:' ... 'Contact:' belong to one
    resume, the next 'Name:' starts another. The first span starts at offset 0.
    """
    markers = find_header_markers(text, config.vocabulary)
    if len(markers) <= 1:
        return None

    boundaries = [0]
    seen: set = set()
    for offset, kind in markers:
        if kind in seen and offset > boundaries[-1]:
            boundaries.append(offset)
            seen = {kind}
        else:
            seen.add(kind)

    return [piece for piece in _slice_at(text, boundaries) if len(piece) >= config.min_chunk_chars]


def whole_text(text: str, config: SegmenterConfig) -> Optional[List[str]]:
    stripped = text.strip()
    return [stripped] if stripped else None


STRATEGIES: Tuple[Tuple[str, ChunkStrategy], ...] = (
    ("emails", split_on_emails),
    ("headers", split_on_headers),
    ("whole_text", whole_text),
)


def segment(text: str, config: Optional[SegmenterConfig] = None) -> List[str]:
    """Split text into resume chunks in document order. Empty input gives []."""
    config = config or SegmenterConfig()
    normalized = normalize_newlines(text or "")
    if not normalized.strip():
        return []

    for name, strategy in STRATEGIES:
        chunks = strategy(normalized, config)
        if chunks:
            logger.debug("segmenter: %d chunk(s) via %s", len(chunks), name)
            return chunks
    return []
