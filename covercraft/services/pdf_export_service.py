"""
Cover letter PDF export.

A4 page, title on top, body paragraphs wrapped to a fixed column width.
Content running past the bottom of the page is not paginated.
"""
import io
import re

from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

MARGIN = 40
TITLE_FONT_SIZE = 18
TITLE_ADVANCE = 30
BODY_FONT_SIZE = 12
LINE_HEIGHT = 18
PARAGRAPH_GAP = 10
COLUMN_WIDTH = 500
FONT_NAME = "Helvetica"

DEFAULT_TITLE = "Cover Letter"
DEFAULT_FILENAME = "cover-letter"

_PARAGRAPH_BREAK = re.compile(r"\n{2,}")
_UNSAFE_FILENAME_CHARS = re.compile(r'[\\/"\r\n]')


def split_paragraphs(content: str) -> list[str]:
    return [para.strip() for para in _PARAGRAPH_BREAK.split(content or "")]


def pdf_filename(title: str) -> str:
    base = _UNSAFE_FILENAME_CHARS.sub("_", (title or "").strip()) or DEFAULT_FILENAME
    return f"{base}.pdf"


def render_cover_letter_pdf(title: str, content: str) -> bytes:
    """
    Render a cover letter to PDF bytes.

    ReportLab's origin is bottom-left, so the downward cursor ``y`` is
    converted to page coordinates when drawing.
    """
    buffer = io.BytesIO()
    _, page_height = A4
    pdf = canvas.Canvas(buffer, pagesize=A4)
    pdf.setTitle(title or DEFAULT_TITLE)

    y = MARGIN
    pdf.setFont(FONT_NAME, TITLE_FONT_SIZE)
    pdf.drawString(MARGIN, page_height - y, title or DEFAULT_TITLE)
    y += TITLE_ADVANCE

    pdf.setFont(FONT_NAME, BODY_FONT_SIZE)
    for paragraph in split_paragraphs(content):
        # Single newlines inside a paragraph are hard breaks, as in the editor
        lines = []
        for raw_line in paragraph.split("\n"):
            lines.extend(simpleSplit(raw_line, FONT_NAME, BODY_FONT_SIZE, COLUMN_WIDTH) or [""])

        for index, line in enumerate(lines):
            pdf.drawString(MARGIN, page_height - (y + index * LINE_HEIGHT), line)
        y += len(lines) * LINE_HEIGHT + PARAGRAPH_GAP

    pdf.showPage()
    pdf.save()
    return buffer.getvalue()
