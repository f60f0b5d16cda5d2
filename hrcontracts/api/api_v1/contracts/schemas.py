# =====================================================
# FILE: hrcontracts/api/api_v1/contracts/schemas.py
# Contract API Schemas
# =====================================================

from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime
from enum import Enum


class ContractStatus(str, Enum):
    ACTIVE = "active"
    ARCHIVED = "archived"
    EXPIRED = "expired"


class ContractGenerateRequest(BaseModel):
    """
    Generate a contract for an employee.
    Without template_content the stored template (or the active one) is used.
    """
    template_id: Optional[str] = Field(None, description="Template used")
    template_content: Optional[str] = Field(None, description="Base64 encoded template file")
    template_name: Optional[str] = Field(None, max_length=255)

    @field_validator('template_id', 'template_content', 'template_name', mode='before')
    @classmethod
    def empty_string_to_none(cls, v):
        if v == '' or v == 'null' or v == 'undefined':
            return None
        return v


class ContractStatusUpdateRequest(BaseModel):
    status: ContractStatus

    class Config:
        use_enum_values = True


class ContractResponse(BaseModel):
    """Contract metadata (content is served by the download endpoint)"""
    id: str
    employee_id: str
    company_id: str
    template_id: Optional[str] = None
    template_name: str
    file_name: str
    status: str
    generated_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
