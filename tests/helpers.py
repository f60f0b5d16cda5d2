"""
Test helpers for building template payloads
"""

import base64
from io import BytesIO

from docx import Document


def make_docx(*paragraphs, heading=None, table=None) -> bytes:
    """Build a small Word document in memory"""
    doc = Document()
    if heading:
        doc.add_heading(heading, level=1)
    for text in paragraphs:
        doc.add_paragraph(text)
    if table:
        t = doc.add_table(rows=len(table), cols=len(table[0]))
        for r, row in enumerate(table):
            for c, value in enumerate(row):
                t.cell(r, c).text = value
    buffer = BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


def read_docx_paragraphs(content: bytes):
    return [p.text for p in Document(BytesIO(content)).paragraphs]


def b64(content: bytes) -> str:
    return base64.b64encode(content).decode("ascii")
