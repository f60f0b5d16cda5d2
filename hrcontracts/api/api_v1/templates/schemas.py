# =====================================================
# FILE: hrcontracts/api/api_v1/templates/schemas.py
# Contract Template API Schemas
# =====================================================

from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime


class TemplateUploadRequest(BaseModel):
    """Template upload; file content travels base64-encoded"""
    name: str = Field(..., max_length=255, description="Template name")
    file_name: Optional[str] = Field(None, max_length=255, description="Original file name")
    description: Optional[str] = Field(None, description="Short description")
    content: str = Field(..., description="Base64 encoded file content")
    size_bytes: Optional[int] = Field(None, ge=0, description="Declared file size in bytes")
    activate: bool = Field(False, description="Make this the company's active template")

    @field_validator('description', 'file_name', mode='before')
    @classmethod
    def empty_string_to_none(cls, v):
        if v == '' or v == 'null' or v == 'undefined':
            return None
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Standard Employment Contract",
                "file_name": "standard_contract.docx",
                "description": "Standard employment contract with all required clauses",
                "content": "UEsDBBQABgAIAAAAIQ...",
                "size_bytes": 46080,
                "activate": True
            }
        }


class TemplateContentUpdateRequest(BaseModel):
    """Replace a template's file; bumps its version"""
    content: str = Field(..., description="Base64 encoded file content")
    file_name: Optional[str] = Field(None, max_length=255)
    size_bytes: Optional[int] = Field(None, ge=0)


class TemplateResponse(BaseModel):
    """Template metadata (content is served by the download endpoint)"""
    id: str
    company_id: str
    name: str
    file_name: str
    size_bytes: int
    description: Optional[str] = None
    version: int
    is_active: bool
    uploaded_by: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
