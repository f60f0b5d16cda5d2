# =====================================================
# FILE: hrcontracts/services/text_extractor.py
# Format detection and text extraction for uploaded templates
# =====================================================

from dataclasses import dataclass
from html import escape
from io import BytesIO
from typing import Optional, List
import logging
import re

import docx
import pdfplumber
from docx.oxml.table import CT_Tbl
from docx.oxml.text.paragraph import CT_P
from docx.table import Table
from docx.text.paragraph import Paragraph

logger = logging.getLogger(__name__)

ZIP_SIGNATURE = b"PK"
PDF_SIGNATURE = b"%PDF-"

SOURCE_DOCX = "docx"
SOURCE_PDF = "pdf"
SOURCE_TEXT = "text"

_TAG_RE = re.compile(r"<[^>]*>")
_INLINE_WS_RE = re.compile(r"[ \t\r\f\v]+")
_ANY_WS_RE = re.compile(r"\s+")

# &amp; goes last so "&amp;lt;" decodes to "&lt;" and not "<"
_ENTITIES = (
    ("&nbsp;", " "),
    ("&#160;", " "),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&amp;", "&"),
)


@dataclass
class ExtractionResult:
    """Intermediate markup for a template, plus how it was obtained"""
    text: str
    source_format: str
    degraded: bool = False
    degradation_reason: Optional[str] = None


def detect_format(content: bytes) -> str:
    """Classify a payload from its leading signature bytes"""
    if len(content) > 2 and content[:2] == ZIP_SIGNATURE:
        return SOURCE_DOCX
    if content[:len(PDF_SIGNATURE)] == PDF_SIGNATURE:
        return SOURCE_PDF
    return SOURCE_TEXT


def extract_text(content: bytes) -> ExtractionResult:
    """
    Extract a best-effort markup representation of a template.

    Office containers and PDFs go through structured extraction; anything
    else, and any container that fails to parse, is decoded as raw text.
    Never raises for a non-empty payload.
    """
    if not content:
        return ExtractionResult(text="", source_format=SOURCE_TEXT)

    source_format = detect_format(content)

    if source_format == SOURCE_TEXT:
        return ExtractionResult(text=_decode_raw(content), source_format=SOURCE_TEXT)

    try:
        if source_format == SOURCE_DOCX:
            text = _extract_docx(content)
        else:
            text = _extract_pdf(content)
        logger.info(f"📄 Extracted {len(text)} characters from {source_format.upper()} template")
        return ExtractionResult(text=text, source_format=source_format)
    except Exception as e:
        logger.warning(
            f"⚠️ Structured {source_format.upper()} extraction failed, "
            f"falling back to raw text: {str(e)}"
        )
        return ExtractionResult(
            text=_decode_raw(content),
            source_format=source_format,
            degraded=True,
            degradation_reason=str(e),
        )


def _decode_raw(content: bytes) -> str:
    return content.decode("utf-8", errors="replace")


# =====================================================
# DOCX
# =====================================================

def _extract_docx(content: bytes) -> str:
    """Walk the document body in order and emit one markup line per block"""
    document = docx.Document(BytesIO(content))
    parts: List[str] = []

    for element in document.element.body:
        if isinstance(element, CT_P):
            html = _paragraph_to_markup(Paragraph(element, document))
            if html:
                parts.append(html)
        elif isinstance(element, CT_Tbl):
            parts.extend(_table_to_markup(Table(element, document)))

    return "\n".join(parts)


def _paragraph_to_markup(paragraph: Paragraph) -> str:
    # paragraph.text joins runs, so a placeholder split across runs survives intact
    text = paragraph.text
    if not text.strip():
        return ""

    style_name = paragraph.style.name if paragraph.style is not None else ""
    if style_name.startswith("Heading"):
        level = style_name.replace("Heading", "").strip()
        level_num = min(int(level), 6) if level.isdigit() else 3
        return f"<h{level_num}>{escape(text, quote=False)}</h{level_num}>"

    return f"<p>{escape(text, quote=False)}</p>"


def _table_to_markup(table: Table) -> List[str]:
    """Flatten a table to one markup line per row"""
    rows = []
    for row in table.rows:
        cells = [escape(cell.text.strip(), quote=False) for cell in row.cells]
        if any(cells):
            rows.append("<tr>" + " ".join(f"<td>{c}</td>" for c in cells) + "</tr>")
    return rows


# =====================================================
# PDF
# =====================================================

def _extract_pdf(content: bytes) -> str:
    lines: List[str] = []
    with pdfplumber.open(BytesIO(content)) as pdf:
        if not pdf.pages:
            raise ValueError("PDF contains no pages")
        for page_num, page in enumerate(pdf.pages, 1):
            text = page.extract_text() or ""
            lines.append(f'<div class="page" data-page="{page_num}">')
            for line in text.split("\n"):
                if line.strip():
                    lines.append(f"<p>{escape(line.strip(), quote=False)}</p>")
            lines.append("</div>")
    return "\n".join(lines)


# =====================================================
# MARKUP -> PLAIN TEXT
# =====================================================

def strip_markup(text: str) -> str:
    """Drop tags and decode the common entities, keeping line structure"""
    text = _TAG_RE.sub("", text)
    for entity, replacement in _ENTITIES:
        text = text.replace(entity, replacement)
    return text


def to_paragraphs(text: str) -> List[str]:
    """Plain paragraphs: the non-empty lines of the markup-stripped text"""
    paragraphs = []
    for line in strip_markup(text).split("\n"):
        line = _INLINE_WS_RE.sub(" ", line).strip()
        if line:
            paragraphs.append(line)
    return paragraphs


def collapse_whitespace(text: str) -> str:
    """Markup-stripped text as a single run of space-separated words"""
    return _ANY_WS_RE.sub(" ", strip_markup(text)).strip()
