# File: hrcontracts/services/document_generator.py
"""
Document Generator Service
Rebuilds an editable Word document from substituted template text
"""

from docx import Document
from docx.shared import Inches, Pt
from io import BytesIO
import logging
import re

from hrcontracts.core.exceptions import RenderFailure
from hrcontracts.services.text_extractor import to_paragraphs

logger = logging.getLogger(__name__)

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

# Characters XML 1.0 cannot carry; raw-text fallbacks of binary payloads contain them
_XML_ILLEGAL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f￾￿]")


class DocumentGenerator:
    """Service for generating Word documents"""

    @staticmethod
    def render(text: str) -> bytes:
        """
        Serialize text as a DOCX with one plain paragraph per non-empty line.
        Template styling, tables and images are not carried over.

        Raises:
            RenderFailure: python-docx could not build or save the document
        """
        try:
            paragraphs = to_paragraphs(text)
            logger.info(f"📝 Generating Word document with {len(paragraphs)} paragraphs")

            doc = Document()

            for section in doc.sections:
                section.top_margin = Inches(1)
                section.bottom_margin = Inches(1)
                section.left_margin = Inches(1)
                section.right_margin = Inches(1)

            for line in paragraphs:
                para = doc.add_paragraph()
                run = para.add_run(_XML_ILLEGAL_RE.sub("", line))
                run.font.size = Pt(11)
                run.font.name = 'Calibri'

            docx_buffer = BytesIO()
            doc.save(docx_buffer)

            logger.info(" Word document generated successfully")
            return docx_buffer.getvalue()

        except Exception as e:
            logger.error(f"❌ Error generating Word document: {str(e)}")
            raise RenderFailure(f"Failed to generate Word document: {str(e)}", artifact="docx") from e

    @staticmethod
    def contract_file_name(first_name: str, last_name: str) -> str:
        """Attachment name for an employee's contract"""
        first = _safe_file_part(first_name) or "Employee"
        last = _safe_file_part(last_name)
        return f"{first}_{last}_Contract.docx" if last else f"{first}_Contract.docx"


def _safe_file_part(value: str) -> str:
    return re.sub(r'[\\/:*?"<>|\r\n]+', "", (value or "").strip()).replace(" ", "_")
