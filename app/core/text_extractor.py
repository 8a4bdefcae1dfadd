"""
Text Extractor: raw document bytes + declared format -> one UTF-8 text blob.

Pure transform over an in-memory buffer. Reading the file from disk is the
caller's job.
"""

import logging

from app.core.docx_extractor import extract_docx_text
from app.core.errors import ExtractionError, UnsupportedFormatError
from app.core.pdf_extractor import extract_pdf_text
from app.core.schemas import DocumentFormat
from app.core.text_normalization import normalize_extracted_text, normalize_newlines


logger = logging.getLogger(__name__)

EXTENSION_FORMATS: dict[str, DocumentFormat] = {
    "txt": "text",
    "pdf": "pdf",
    "docx": "docx-like",
    "doc": "legacy-doc",
}


def format_for_extension(extension: str) -> DocumentFormat:
    """Map a declared file extension ('pdf', '.DOCX', ...) to a document format."""
    ext = (extension or "").lower().lstrip(".")
    try:
        return EXTENSION_FORMATS[ext]
    except KeyError:
        raise UnsupportedFormatError(f"Unsupported file format: {extension or '(none)'}") from None


def extract(data: bytes, fmt: str) -> str:
    """
    Extract newline-normalized text from a document.

    Raises:
        UnsupportedFormatError: fmt is not a known document format
        ExtractionError: the backend failed, or the document has no text
    """
    if fmt == "text":
        text = normalize_newlines(data.decode("utf-8", errors="replace"))
    elif fmt == "pdf":
        try:
            text = extract_pdf_text(data)
        except Exception as exc:
            raise ExtractionError(f"Failed to extract text: {exc}") from exc
        text = normalize_extracted_text(text)
    elif fmt == "docx-like":
        try:
            text = extract_docx_text(data)
        except Exception as exc:
            raise ExtractionError(f"Failed to extract text: {exc}") from exc
        text = normalize_extracted_text(text)
    elif fmt == "legacy-doc":
        text = _extract_legacy_doc(data)
    else:
        raise UnsupportedFormatError(f"Unsupported file format: {fmt}")

    if not text.strip():
        raise ExtractionError("Could not extract text from resume")
    logger.debug("extracted %d chars from %s document", len(text), fmt)
    return text


def _extract_legacy_doc(data: bytes) -> str:
    """
    Best effort for .doc uploads.

    Many '.doc' files in the wild are really OOXML packages saved with the old
    extension; those open fine. True binary Word 97-2003 files do not, and
    get a descriptive error instead of garbage.
    """
    if not _looks_like_zip(data):
        raise ExtractionError("DOC file format not fully supported. Please convert to DOCX or PDF.")
    try:
        return normalize_extracted_text(extract_docx_text(data))
    except Exception as exc:
        raise ExtractionError("DOC file format not fully supported. Please convert to DOCX or PDF.") from exc


def _looks_like_zip(data: bytes) -> bool:
    return data[:4] == b"PK\x03\x04"
