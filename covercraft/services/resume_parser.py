"""
Resume text extraction.

Chooses an extractor from the file extension; byte-level parsing is left to
PyMuPDF (PDF) and python-docx (DOCX).
"""
import io
import logging
import os

import fitz  # pymupdf
from docx import Document as DocxDocument

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".txt", ".pdf", ".docx")


class ResumeExtractionError(Exception):
    """The underlying parser failed on the uploaded file."""


class UnsupportedResumeType(ValueError):
    """The uploaded file's extension has no extractor."""


def _extract_txt(data: bytes) -> str:
    return data.decode("utf-8")


def _extract_pdf(data: bytes) -> str:
    pages = []
    with fitz.open(stream=data, filetype="pdf") as doc:
        for page in doc:
            # words: (x0, y0, x1, y1, word, block_no, line_no, word_no)
            words = [w[4] for w in page.get_text("words")]
            pages.append(" ".join(words))
    return "\n".join(pages)


def _extract_docx(data: bytes) -> str:
    doc = DocxDocument(io.BytesIO(data))
    return "\n\n".join(paragraph.text for paragraph in doc.paragraphs)


_EXTRACTORS = {
    ".txt": _extract_txt,
    ".pdf": _extract_pdf,
    ".docx": _extract_docx,
}


def resume_extension(filename: str) -> str:
    return os.path.splitext(filename or "")[1].lower()


def extract_resume_text(filename: str, data: bytes) -> str:
    """
    Extract plain text from an uploaded resume.

    Args:
        filename: Original filename (used to determine file type)
        data: Raw file bytes

    Returns:
        Extracted text. Plain-text files are returned unchanged.

    Raises:
        UnsupportedResumeType: Extension is not .txt, .pdf or .docx
        ResumeExtractionError: The parser failed on the file
    """
    ext = resume_extension(filename)
    extractor = _EXTRACTORS.get(ext)
    if extractor is None:
        raise UnsupportedResumeType(
            f"Unsupported file type: {ext or 'none'}. Supported types: {', '.join(SUPPORTED_EXTENSIONS)}"
        )

    try:
        text = extractor(data)
    except Exception as e:
        logger.warning(f"Resume extraction failed for {ext} file: {type(e).__name__}: {e}")
        raise ResumeExtractionError(f"Failed to extract text from {ext} file") from e

    logger.debug(f"Extracted {len(text)} chars from {ext} resume")
    return text
