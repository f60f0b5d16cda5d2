# =====================================================
# FILE: hrcontracts/services/template_store.py
# Contract template persistence and activation
# =====================================================

from sqlalchemy.orm import Session
from sqlalchemy import case, desc, func
from typing import List, Optional
from datetime import datetime
import logging

from hrcontracts.core.config import settings
from hrcontracts.core.exceptions import NotFoundError, ValidationError
from hrcontracts.models.contract import Contract
from hrcontracts.models.contract_template import ContractTemplate

logger = logging.getLogger(__name__)


class TemplateStore:
    """Persists uploaded templates; at most one active template per company"""

    def __init__(self, db: Session):
        self.db = db

    # =====================================================
    # UPLOAD
    # =====================================================

    def upload(
        self,
        company_id: str,
        name: str,
        file_name: str,
        content: bytes,
        uploaded_by: str,
        size_bytes: Optional[int] = None,
        description: Optional[str] = None,
        activate: bool = False
    ) -> ContractTemplate:
        """
        Store a new template. Every upload is a new row at version 1;
        see replace_content() for in-place versioning.
        """
        if not name or not name.strip():
            raise ValidationError("Template name is required")
        self._validate_content(content)

        template = ContractTemplate(
            company_id=company_id,
            name=name.strip(),
            file_name=(file_name or f"{name.strip()}.docx").strip(),
            content=content,
            size_bytes=size_bytes if size_bytes is not None else len(content),
            description=description,
            version=1,
            is_active=False,
            uploaded_by=uploaded_by,
        )

        try:
            self.db.add(template)
            self.db.flush()
            if activate:
                self._activate_in_transaction(company_id, template.id)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(template)
        logger.info(
            f"📁 Template uploaded: {template.name} ({template.size_bytes} bytes) "
            f"for company {company_id}{' [active]' if template.is_active else ''}"
        )
        return template

    # =====================================================
    # ACTIVATION
    # =====================================================

    def activate(self, company_id: str, template_id: str) -> None:
        """Make template_id the only active template of the company"""
        self.get(company_id, template_id)

        try:
            self._activate_in_transaction(company_id, template_id)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f" Template {template_id} activated for company {company_id}")

    def _activate_in_transaction(self, company_id: str, template_id: str) -> None:
        # One UPDATE flips every row of the company, so no reader sees zero or two actives
        self.db.query(ContractTemplate).filter(
            ContractTemplate.company_id == company_id
        ).update(
            {
                ContractTemplate.is_active: case(
                    (ContractTemplate.id == template_id, True),
                    else_=False
                ),
                ContractTemplate.updated_at: datetime.utcnow(),
            },
            synchronize_session=False
        )
        # Loaded templates still hold their old flags
        self.db.expire_all()

    # =====================================================
    # READS
    # =====================================================

    def get(self, company_id: str, template_id: str) -> ContractTemplate:
        template = self.db.query(ContractTemplate).filter(
            ContractTemplate.id == template_id,
            ContractTemplate.company_id == company_id
        ).first()

        if not template:
            raise NotFoundError("Template not found")
        return template

    def find(self, template_id: str) -> ContractTemplate:
        """Look a template up by id alone; callers check company access"""
        template = self.db.query(ContractTemplate).filter(
            ContractTemplate.id == template_id
        ).first()

        if not template:
            raise NotFoundError("Template not found")
        return template

    def get_active(self, company_id: str) -> Optional[ContractTemplate]:
        return self.db.query(ContractTemplate).filter(
            ContractTemplate.company_id == company_id,
            ContractTemplate.is_active.is_(True)
        ).first()

    def list(self, company_id: str) -> List[ContractTemplate]:
        """Templates of a company, newest first"""
        return self.db.query(ContractTemplate).filter(
            ContractTemplate.company_id == company_id
        ).order_by(
            desc(ContractTemplate.created_at),
            desc(ContractTemplate.version)
        ).all()

    # =====================================================
    # VERSIONING / DELETE
    # =====================================================

    def replace_content(
        self,
        company_id: str,
        template_id: str,
        content: bytes,
        uploaded_by: str,
        file_name: Optional[str] = None,
        size_bytes: Optional[int] = None
    ) -> ContractTemplate:
        """Overwrite the stored binary in place and bump the version"""
        self._validate_content(content)
        template = self.get(company_id, template_id)

        template.content = content
        template.size_bytes = size_bytes if size_bytes is not None else len(content)
        if file_name and file_name.strip():
            template.file_name = file_name.strip()
        template.uploaded_by = uploaded_by
        template.version = (template.version or 1) + 1
        template.updated_at = datetime.utcnow()

        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(template)
        logger.info(f"📁 Template {template.id} replaced, now version {template.version}")
        return template

    def delete(self, company_id: str, template_id: str) -> None:
        """Remove a template no contract refers to"""
        template = self.get(company_id, template_id)

        references = self.db.query(func.count(Contract.id)).filter(
            Contract.template_id == template.id
        ).scalar()
        if references:
            raise ValidationError(
                f"Template is referenced by {references} contract(s) and cannot be deleted"
            )

        try:
            self.db.delete(template)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"🗑️ Template {template_id} deleted for company {company_id}")

    @staticmethod
    def _validate_content(content: Optional[bytes]) -> None:
        if not content:
            raise ValidationError("Template file content is required")
        if len(content) > settings.MAX_TEMPLATE_SIZE:
            raise ValidationError(
                f"Template exceeds the maximum size of {settings.MAX_TEMPLATE_SIZE // (1024 * 1024)}MB"
            )
