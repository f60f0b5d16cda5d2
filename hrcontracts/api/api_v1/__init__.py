"""
API v1 router
File: hrcontracts/api/api_v1/__init__.py
"""

from fastapi import APIRouter

from .templates import router as templates_router
from .contracts import router as contracts_router

router = APIRouter()

router.include_router(templates_router)
router.include_router(contracts_router)
