# =====================================================
# FILE: hrcontracts/core/dependencies.py
# Caller identity and company access checks
# =====================================================

from dataclasses import dataclass
from typing import Optional
from fastapi import Header, HTTPException, status
import logging

logger = logging.getLogger(__name__)


@dataclass
class CurrentUser:
    """Identity forwarded by the upstream authentication middleware"""
    id: str
    company_id: str
    is_super_admin: bool = False


async def get_current_user(
    x_user_id: Optional[str] = Header(None),
    x_company_id: Optional[str] = Header(None),
    x_user_role: Optional[str] = Header(None),
) -> CurrentUser:
    """
    Resolve the caller from the headers set by the auth middleware.
    Requests that reach the API without them are rejected.
    """
    if not x_user_id or not x_company_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required"
        )

    return CurrentUser(
        id=x_user_id,
        company_id=x_company_id,
        is_super_admin=(x_user_role or "").strip().lower() == "super admin",
    )


def require_company_access(current_user: CurrentUser, company_id: str, resource: str = "Resource"):
    """
    Ensure the caller belongs to the company that owns a resource.
    Foreign resources are reported as missing rather than forbidden.
    """
    if current_user.is_super_admin:
        return

    if str(company_id) != str(current_user.company_id):
        logger.warning(
            f"Access denied for user {current_user.id} "
            f"to {resource.lower()} of company {company_id}"
        )
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{resource} not found"
        )
