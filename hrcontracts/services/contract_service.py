# =====================================================
# FILE: hrcontracts/services/contract_service.py
# Contract generation: template -> text -> substitution -> DOCX -> Contract
# =====================================================

from dataclasses import dataclass
from sqlalchemy.orm import Session
from sqlalchemy import desc
from typing import List, Optional
from datetime import date, datetime
import logging

from hrcontracts.core.config import settings
from hrcontracts.core.exceptions import NotFoundError, ValidationError
from hrcontracts.models.company import Company
from hrcontracts.models.contract import Contract, ContractStatus
from hrcontracts.models.contract_template import ContractTemplate
from hrcontracts.models.employee import Employee
from hrcontracts.services.document_generator import DocumentGenerator
from hrcontracts.services.pdf_renderer import FixedLayoutRenderer, LayoutResult
from hrcontracts.services.template_store import TemplateStore
from hrcontracts.services.text_extractor import extract_text
from hrcontracts.services.variable_resolver import build_dictionary, substitute

logger = logging.getLogger(__name__)

NO_TEMPLATE_MESSAGE = "No active contract template found. Please upload a template first."


@dataclass
class GeneratedContract:
    contract: Contract
    content: bytes
    degraded_extraction: bool
    unresolved_placeholders: List[str]


class ContractService:
    """Contract business logic service"""

    def __init__(self, db: Session):
        self.db = db
        self.templates = TemplateStore(db)

    # =====================================================
    # RECORD LOOKUPS
    # =====================================================

    def get_employee(self, employee_id: str) -> Employee:
        employee = self.db.query(Employee).filter(Employee.id == employee_id).first()
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def dictionary_for(self, employee: Employee, today: Optional[date] = None) -> dict:
        company = employee.company or self.db.query(Company).filter(
            Company.id == employee.company_id
        ).first()
        return build_dictionary(employee, employee.employment, company, today=today)

    # =====================================================
    # GENERATE CONTRACT
    # =====================================================

    def generate_contract(
        self,
        employee: Employee,
        template_id: Optional[str] = None,
        template_content: Optional[bytes] = None,
        template_name: Optional[str] = None,
        today: Optional[date] = None
    ) -> GeneratedContract:
        """
        Produce and persist a contract for an employee.

        Template bytes come from the request when supplied, otherwise from
        template_id, otherwise from the company's active template. The
        Contract row is written only after the DOCX rendered successfully.
        """
        template = None
        if template_id:
            template = self.templates.get(employee.company_id, template_id)

        if template_content:
            content = template_content
        elif template is not None:
            content = template.content
        else:
            template = self.templates.get_active(employee.company_id)
            content = template.content if template is not None else None

        if not content:
            raise ValidationError(NO_TEMPLATE_MESSAGE)

        name = template_name or (template.name if template is not None else settings.DEFAULT_TEMPLATE_NAME)
        logger.info(f"📄 Generating contract for employee {employee.id} from template '{name}'")

        extraction = extract_text(content)
        # Both renderers strip markup, so inserted values are escaped
        substitution = substitute(extraction.text, self.dictionary_for(employee, today=today),
                                  escape_values=True)

        # RenderFailure propagates before anything is persisted
        rendered = DocumentGenerator.render(substitution.text)

        now = datetime.utcnow()
        contract = Contract(
            employee_id=employee.id,
            company_id=employee.company_id,
            template_id=template.id if template is not None else None,
            template_name=name,
            file_name=DocumentGenerator.contract_file_name(employee.first_name, employee.last_name),
            content=rendered,
            status=ContractStatus.ACTIVE.value,
            generated_at=now,
        )

        try:
            self.db.add(contract)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(contract)
        logger.info(f" Contract {contract.id} generated ({len(rendered)} bytes)")

        return GeneratedContract(
            contract=contract,
            content=rendered,
            degraded_extraction=extraction.degraded,
            unresolved_placeholders=substitution.unresolved,
        )

    # =====================================================
    # FIXED-LAYOUT PREVIEW
    # =====================================================

    def render_template_pdf(
        self,
        template: ContractTemplate,
        employee: Optional[Employee] = None,
        page_width: Optional[float] = None,
        font_size: Optional[float] = None
    ) -> LayoutResult:
        """Fixed-layout rendering of a stored template, substituted for an employee when given"""
        if not template.content:
            raise ValidationError("Template has no content")

        text = extract_text(template.content).text
        if employee is not None:
            text = substitute(text, self.dictionary_for(employee), escape_values=True).text

        return FixedLayoutRenderer().layout(text, page_width, font_size)

    # =====================================================
    # CONTRACT READS / STATUS
    # =====================================================

    def get_contract(self, contract_id: str) -> Contract:
        contract = self.db.query(Contract).filter(Contract.id == contract_id).first()
        if not contract:
            raise NotFoundError("Contract not found")
        return contract

    def list_company_contracts(self, company_id: str) -> List[Contract]:
        return self.db.query(Contract).filter(
            Contract.company_id == company_id
        ).order_by(desc(Contract.generated_at)).all()

    def list_employee_contracts(self, employee_id: str) -> List[Contract]:
        return self.db.query(Contract).filter(
            Contract.employee_id == employee_id
        ).order_by(desc(Contract.generated_at)).all()

    def update_status(self, contract: Contract, new_status: str) -> Contract:
        """Change lifecycle status; content is never touched"""
        valid = {s.value for s in ContractStatus}
        if new_status not in valid:
            raise ValidationError(f"Invalid status '{new_status}'. Allowed: {', '.join(sorted(valid))}")

        contract.status = new_status
        contract.updated_at = datetime.utcnow()
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(contract)
        logger.info(f"Contract {contract.id} status set to {new_status}")
        return contract
