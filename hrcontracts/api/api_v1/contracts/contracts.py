# =====================================================
# FILE: hrcontracts/api/api_v1/contracts/contracts.py
# Contract generation and download API Router
# =====================================================

from fastapi import APIRouter, Depends, HTTPException, status, Response
from sqlalchemy.orm import Session
from typing import List
import logging

from hrcontracts.core.database import get_db
from hrcontracts.core.dependencies import CurrentUser, get_current_user, require_company_access
from hrcontracts.core.exceptions import ContractEngineError, RenderFailure
from hrcontracts.services.contract_service import ContractService
from hrcontracts.services.document_generator import DOCX_MEDIA_TYPE
from hrcontracts.utils.file_helpers import decode_base64_content, attachment_headers, header_list
from hrcontracts.api.api_v1.contracts.schemas import (
    ContractGenerateRequest,
    ContractResponse,
    ContractStatusUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["contracts"])


def _load_contract(service: ContractService, contract_id: str, current_user: CurrentUser):
    contract = service.get_contract(contract_id)
    require_company_access(current_user, contract.company_id, "Contract")
    return contract


# =====================================================
# GENERATE CONTRACT
# =====================================================

@router.post("/api/employees/{employee_id}/contract")
async def generate_contract(
    employee_id: str,
    request: ContractGenerateRequest,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """
    Generate a contract for an employee from a template and return the
    Word document. The contract is stored only if rendering succeeded.
    """
    service = ContractService(db)
    employee = service.get_employee(employee_id)
    require_company_access(current_user, employee.company_id, "Employee")

    try:
        template_content = None
        if request.template_content:
            template_content = decode_base64_content(request.template_content, "template content")

        generated = service.generate_contract(
            employee,
            template_id=request.template_id,
            template_content=template_content,
            template_name=request.template_name,
        )

        contract = generated.contract
        headers = attachment_headers(contract.file_name)
        headers["X-Contract-Id"] = contract.id
        headers["Access-Control-Expose-Headers"] = (
            "Content-Disposition, X-Contract-Id, X-Unresolved-Placeholders, X-Extraction-Degraded"
        )
        if generated.unresolved_placeholders:
            headers["X-Unresolved-Placeholders"] = header_list(generated.unresolved_placeholders)
        if generated.degraded_extraction:
            logger.warning(
                f"⚠️ Contract {contract.id} built from raw template text; "
                f"structured extraction failed"
            )
            headers["X-Extraction-Degraded"] = "true"

        return Response(content=generated.content, media_type=DOCX_MEDIA_TYPE, headers=headers)

    except RenderFailure as e:
        logger.error(f"Contract generation error: {e.message}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"message": "Failed to generate contract", "error": e.message}
        )
    except (HTTPException, ContractEngineError):
        raise
    except Exception as e:
        logger.error(f"Contract generation error: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"message": "Failed to generate contract", "error": str(e)}
        )


# =====================================================
# CONTRACT READS
# =====================================================

@router.get("/api/companies/{company_id}/contracts", response_model=List[ContractResponse])
async def list_company_contracts(
    company_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    require_company_access(current_user, company_id, "Company")

    try:
        return ContractService(db).list_company_contracts(company_id)
    except Exception as e:
        logger.error(f"Error fetching contracts: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch contracts"
        )


@router.get("/api/employees/{employee_id}/contracts", response_model=List[ContractResponse])
async def list_employee_contracts(
    employee_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    service = ContractService(db)
    employee = service.get_employee(employee_id)
    require_company_access(current_user, employee.company_id, "Employee")

    return service.list_employee_contracts(employee.id)


@router.get("/api/contracts/{contract_id}", response_model=ContractResponse)
async def get_contract(
    contract_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    return _load_contract(ContractService(db), contract_id, current_user)


@router.get("/api/contracts/{contract_id}/download")
async def download_contract(
    contract_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Stored contract document with its original file name"""
    contract = _load_contract(ContractService(db), contract_id, current_user)

    logger.info(f"⬇️ Downloading contract: {contract.file_name} (ID: {contract_id})")
    return Response(
        content=contract.content,
        media_type=DOCX_MEDIA_TYPE,
        headers=attachment_headers(contract.file_name)
    )


@router.patch("/api/contracts/{contract_id}/status", response_model=ContractResponse)
async def update_contract_status(
    contract_id: str,
    request: ContractStatusUpdateRequest,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Archive or expire a contract; its document is left untouched"""
    service = ContractService(db)
    contract = _load_contract(service, contract_id, current_user)
    return service.update_status(contract, request.status)
