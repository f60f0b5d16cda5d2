# File: hrcontracts/services/pdf_renderer.py
"""
Fixed-layout (PDF) rendering of template text.

Layout is deliberately approximate: line width is estimated from the
character count and an average glyph width, no font metrics are read.
"""

from dataclasses import dataclass, field
from io import BytesIO
from typing import List, Optional
import logging

from reportlab.pdfgen import canvas

from hrcontracts.core.config import settings
from hrcontracts.core.exceptions import RenderFailure
from hrcontracts.services.text_extractor import collapse_whitespace

logger = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"


@dataclass
class LayoutResult:
    content: bytes
    lines_total: int
    lines_drawn: int
    pages: int
    truncated: bool
    lines: List[str] = field(default_factory=list, repr=False)
    lines_per_page: int = 0


def chars_per_line(page_width: float, font_size: float,
                   margin: Optional[float] = None,
                   glyph_ratio: Optional[float] = None) -> int:
    """Character budget of one line, from the printable width and an average glyph width"""
    margin = settings.PDF_MARGIN if margin is None else margin
    glyph_ratio = settings.PDF_AVG_GLYPH_RATIO if glyph_ratio is None else glyph_ratio
    usable = page_width - 2 * margin
    return max(1, int(usable // (font_size * glyph_ratio)))


def wrap_words(text: str, max_chars: int) -> List[str]:
    """Greedy word wrap; words longer than a line are hard-split"""
    lines: List[str] = []
    current = ""

    for word in text.split():
        while len(word) > max_chars:
            if current:
                lines.append(current)
                current = ""
            lines.append(word[:max_chars])
            word = word[max_chars:]
        if not word:
            continue

        if not current:
            current = word
        elif len(current) + 1 + len(word) <= max_chars:
            current = f"{current} {word}"
        else:
            lines.append(current)
            current = word

    if current:
        lines.append(current)
    return lines


class FixedLayoutRenderer:
    """Draws wrapped lines at a fixed pitch, top to bottom, on a bounded number of pages"""

    def __init__(self,
                 page_height: Optional[float] = None,
                 margin: Optional[float] = None,
                 max_lines_per_page: Optional[int] = None,
                 max_pages: Optional[int] = None,
                 font_name: Optional[str] = None):
        self.page_height = page_height or settings.PDF_PAGE_HEIGHT
        self.margin = settings.PDF_MARGIN if margin is None else margin
        self.max_lines_per_page = max_lines_per_page or settings.PDF_MAX_LINES_PER_PAGE
        self.max_pages = max_pages or settings.PDF_MAX_PAGES
        self.font_name = font_name or settings.PDF_FONT_NAME
        self.truncation_marker = settings.PDF_TRUNCATION_MARKER

    def lines_per_page(self, pitch: float) -> int:
        """Configured line count, capped to what fits between the margins at this pitch"""
        fits = int((self.page_height - 2 * self.margin) // pitch)
        return max(1, min(self.max_lines_per_page, fits))

    def layout(self, text: str,
               page_width_units: Optional[float] = None,
               font_size_units: Optional[float] = None) -> LayoutResult:
        """
        Render text to PDF bytes.

        Once the line budget of the last allowed page is used up, drawing
        stops and the truncation marker is written as the final line.

        Raises:
            RenderFailure: reportlab failed to produce the document
        """
        page_width = page_width_units or settings.PDF_PAGE_WIDTH
        font_size = font_size_units or settings.PDF_FONT_SIZE

        try:
            max_chars = chars_per_line(page_width, font_size, self.margin)
            lines = wrap_words(collapse_whitespace(text), max_chars)
            pitch = font_size * settings.PDF_LINE_PITCH_RATIO
            per_page = self.lines_per_page(pitch)

            budget = per_page * self.max_pages
            truncated = len(lines) > budget
            if truncated:
                # keep a slot on the last page for the marker
                drawn = lines[:budget - 1]
                drawn.append(self.truncation_marker)
            else:
                drawn = lines

            buffer = BytesIO()
            pdf = canvas.Canvas(buffer, pagesize=(page_width, self.page_height))
            pdf.setTitle("Contract preview")

            pages = 0
            for start in range(0, max(len(drawn), 1), per_page):
                if pages:
                    pdf.showPage()
                pdf.setFont(self.font_name, font_size)
                y = self.page_height - self.margin
                for line in drawn[start:start + per_page]:
                    pdf.drawString(self.margin, y, line)
                    y -= pitch
                pages += 1

            pdf.showPage()
            pdf.save()

            if truncated:
                logger.warning(
                    f"✂️ Fixed-layout output truncated: {len(lines)} lines, "
                    f"budget {budget} ({self.max_pages} page(s) x {per_page})"
                )
            logger.info(f"🖨️ Rendered {len(drawn)} lines on {pages} page(s)")

            return LayoutResult(
                content=buffer.getvalue(),
                lines_total=len(lines),
                lines_drawn=len(drawn),
                pages=pages,
                truncated=truncated,
                lines=drawn,
                lines_per_page=per_page,
            )

        except Exception as e:
            logger.error(f"❌ Error generating PDF: {str(e)}")
            raise RenderFailure(f"Failed to generate PDF: {str(e)}", artifact="pdf") from e


def layout(text: str, page_width_units: Optional[float] = None,
           font_size_units: Optional[float] = None) -> bytes:
    """Render text with the configured page settings and return the PDF bytes"""
    return FixedLayoutRenderer().layout(text, page_width_units, font_size_units).content
