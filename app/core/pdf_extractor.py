from io import BytesIO
from typing import Any, List, Optional, Tuple
import logging
import re

import pdfplumber

from app.core.text_normalization import despace_line


logger = logging.getLogger(__name__)


def _words_to_text(page: Any, x_tolerance: float = 2, line_y_tolerance: float = 3) -> str:
    """
    Rebuild page text from pdfplumber word objects.

    Words are bucketed into lines by their 'top' coordinate and joined with single
    spaces. Working at word level sidesteps the glued/over-spaced text that
    layout-based extraction produces for many resume templates.
    """
    words = page.extract_words(
        x_tolerance=x_tolerance,
        y_tolerance=2,
        keep_blank_chars=False,
        use_text_flow=True,
    )
    if not words:
        return ""

    words.sort(key=lambda w: (round(w["top"] / line_y_tolerance), w["x0"]))
    lines: List[str] = []
    current_key = None
    current_words: List[str] = []
    for w in words:
        key = round(w["top"] / line_y_tolerance)
        if current_key is None or key == current_key:
            current_words.append(w["text"])
        else:
            lines.append(" ".join(current_words))
            current_words = [w["text"]]
        current_key = key
    if current_words:
        lines.append(" ".join(current_words))

    return "\n".join(lines)


def _score_text(s: str) -> float:
    """
    Score extracted text quality (lower is better).

    Penalizes 18+ character alphabetic tokens (glued words) and more than ten
    single-letter tokens (fragmentation).
    """
    tokens = re.findall(r"[A-Za-z]+", s)
    if not tokens:
        return 1e9
    long_glued = sum(1 for t in tokens if len(t) >= 18)
    excessive_singles = max(0, sum(1 for t in tokens if len(t) == 1) - 10)
    return long_glued * 10 + excessive_singles * 3


def _extract_best(page: Any, x_tolerance_range: Optional[List[float]] = None) -> Tuple[str, float]:
    """Try several x_tolerance values and keep the best scoring page text."""
    if x_tolerance_range is None:
        x_tolerance_range = [1.5, 2, 2.5, 3]

    candidates = []
    for xt in x_tolerance_range:
        txt = _words_to_text(page, x_tolerance=xt)
        candidates.append((_score_text(txt), xt, txt))

    candidates.sort(key=lambda c: c[0])
    _, best_xt, best_txt = candidates[0]
    return best_txt, best_xt


def extract_pdf_text(pdf_bytes: bytes) -> str:
    """
    Extract the text layer of a PDF, pages concatenated in reading order.

    Pages are joined with a blank line, but callers must not treat that as a
    reliable page-break marker. OCR is not attempted; image-only PDFs yield "".
    """
    pages: List[str] = []
    with pdfplumber.open(BytesIO(pdf_bytes)) as pdf:
        for page_i, page in enumerate(pdf.pages, start=1):
            text, used_xt = _extract_best(page)
            logger.debug("pdf page %d: %d chars (x_tolerance=%s)", page_i, len(text), used_xt)
            if text:
                pages.append("\n".join(despace_line(ln) for ln in text.splitlines()))
    return "\n\n".join(pages)
