# =====================================================
# FILE: hrcontracts/api/api_v1/templates/templates.py
# Contract Template API Router
# =====================================================

from fastapi import APIRouter, Depends, HTTPException, status, Query, Response
from sqlalchemy.orm import Session
from typing import Optional, List
from pathlib import Path
import logging

from hrcontracts.core.database import get_db
from hrcontracts.core.dependencies import CurrentUser, get_current_user, require_company_access
from hrcontracts.core.exceptions import ContractEngineError
from hrcontracts.services.contract_service import ContractService
from hrcontracts.services.document_generator import DOCX_MEDIA_TYPE
from hrcontracts.services.pdf_renderer import PDF_MEDIA_TYPE
from hrcontracts.services.template_store import TemplateStore
from hrcontracts.services.text_extractor import detect_format, SOURCE_PDF, SOURCE_TEXT
from hrcontracts.utils.file_helpers import decode_base64_content, attachment_headers
from hrcontracts.api.api_v1.templates.schemas import (
    TemplateUploadRequest,
    TemplateContentUpdateRequest,
    TemplateResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["templates"])

_MEDIA_TYPES = {
    SOURCE_PDF: PDF_MEDIA_TYPE,
    SOURCE_TEXT: "text/plain; charset=utf-8",
}


def _load_template(db: Session, template_id: str, current_user: CurrentUser):
    template = TemplateStore(db).find(template_id)
    require_company_access(current_user, template.company_id, "Template")
    return template


# =====================================================
# UPLOAD / LIST
# =====================================================

@router.post(
    "/api/companies/{company_id}/templates",
    response_model=TemplateResponse,
    status_code=status.HTTP_201_CREATED
)
async def upload_template(
    company_id: str,
    request: TemplateUploadRequest,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Upload a contract template for a company"""
    require_company_access(current_user, company_id, "Company")

    try:
        logger.info(f"📤 Uploading template '{request.name}' for company {company_id}")

        content = decode_base64_content(request.content)
        template = TemplateStore(db).upload(
            company_id=company_id,
            name=request.name,
            file_name=request.file_name or f"{request.name.strip()}.docx",
            content=content,
            size_bytes=request.size_bytes,
            description=request.description,
            uploaded_by=current_user.id,
            activate=request.activate,
        )
        return template

    except (HTTPException, ContractEngineError):
        raise
    except Exception as e:
        logger.error(f" Error uploading template: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to upload template: {str(e)}"
        )


@router.get("/api/companies/{company_id}/templates", response_model=List[TemplateResponse])
async def list_templates(
    company_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Templates of a company, newest first"""
    require_company_access(current_user, company_id, "Company")

    try:
        templates = TemplateStore(db).list(company_id)
        logger.info(f" Found {len(templates)} templates for company {company_id}")
        return templates

    except (HTTPException, ContractEngineError):
        raise
    except Exception as e:
        logger.error(f" Error fetching templates: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to fetch templates: {str(e)}"
        )


@router.get("/api/companies/{company_id}/templates/active", response_model=TemplateResponse)
async def get_active_template(
    company_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    require_company_access(current_user, company_id, "Company")

    template = TemplateStore(db).get_active(company_id)
    if not template:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No active contract template"
        )
    return template


# =====================================================
# SINGLE TEMPLATE
# =====================================================

@router.get("/api/templates/{template_id}", response_model=TemplateResponse)
async def get_template(
    template_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    return _load_template(db, template_id, current_user)


@router.post("/api/templates/{template_id}/activate")
async def activate_template(
    template_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Make a template the active one for the company that owns it"""
    template = _load_template(db, template_id, current_user)

    try:
        TemplateStore(db).activate(template.company_id, template.id)
        return {"success": True, "template_id": template_id}

    except (HTTPException, ContractEngineError):
        raise
    except Exception as e:
        logger.error(f" Error activating template {template_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to activate template: {str(e)}"
        )


@router.put("/api/templates/{template_id}/content", response_model=TemplateResponse)
async def replace_template_content(
    template_id: str,
    request: TemplateContentUpdateRequest,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Upload a new file for an existing template (new version)"""
    template = _load_template(db, template_id, current_user)

    try:
        content = decode_base64_content(request.content)
        return TemplateStore(db).replace_content(
            company_id=template.company_id,
            template_id=template.id,
            content=content,
            uploaded_by=current_user.id,
            file_name=request.file_name,
            size_bytes=request.size_bytes,
        )

    except (HTTPException, ContractEngineError):
        raise
    except Exception as e:
        logger.error(f" Error replacing template {template_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update template: {str(e)}"
        )


@router.delete("/api/templates/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_template(
    template_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    template = _load_template(db, template_id, current_user)
    TemplateStore(db).delete(template.company_id, template.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =====================================================
# DOWNLOADS
# =====================================================

@router.get("/api/templates/{template_id}/download")
async def download_template(
    template_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Return the uploaded file exactly as stored"""
    template = _load_template(db, template_id, current_user)

    logger.info(f"⬇️ Downloading template: {template.file_name} (ID: {template_id})")
    media_type = _MEDIA_TYPES.get(detect_format(template.content), DOCX_MEDIA_TYPE)

    return Response(
        content=template.content,
        media_type=media_type,
        headers=attachment_headers(template.file_name)
    )


@router.get("/api/templates/{template_id}/pdf")
async def download_template_pdf(
    template_id: str,
    employee_id: Optional[str] = Query(None, description="Fill placeholders for this employee"),
    page_width: Optional[float] = Query(None, gt=0, description="Page width in points"),
    font_size: Optional[float] = Query(None, gt=0, description="Font size in points"),
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Fixed-layout PDF rendering of a template; generated on demand, not stored"""
    template = _load_template(db, template_id, current_user)
    service = ContractService(db)

    employee = None
    if employee_id:
        employee = service.get_employee(employee_id)
        require_company_access(current_user, employee.company_id, "Employee")

    result = service.render_template_pdf(template, employee, page_width, font_size)

    filename = f"{Path(template.file_name).stem or template.name}.pdf"
    headers = attachment_headers(filename)
    headers["X-Content-Truncated"] = "true" if result.truncated else "false"

    return Response(content=result.content, media_type=PDF_MEDIA_TYPE, headers=headers)
