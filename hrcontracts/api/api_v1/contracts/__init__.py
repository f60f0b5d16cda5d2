"""
Contracts Module Init
File: hrcontracts/api/api_v1/contracts/__init__.py
"""

from .contracts import router

__all__ = ["router"]
