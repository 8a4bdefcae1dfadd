from io import BytesIO
from typing import List

from docx import Document


def extract_docx_paragraphs(docx_bytes: bytes) -> List[str]:
    """
    Deterministically extract paragraph text from a DOCX, in document order.

    Blank paragraphs are kept as "" so paragraph breaks survive into the joined
    text. Table cells are appended after the body paragraphs, one per line.
    """
    doc = Document(BytesIO(docx_bytes))
    out: List[str] = [(p.text or "").strip() for p in doc.paragraphs]
    for table in doc.tables:
        for row in table.rows:
            cells = [(c.text or "").strip() for c in row.cells]
            line = " | ".join(c for c in cells if c)
            if line:
                out.append(line)
    return out


def extract_docx_text(docx_bytes: bytes) -> str:
    return "\n".join(extract_docx_paragraphs(docx_bytes))
