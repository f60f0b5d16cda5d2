"""
Templates Module Init
File: hrcontracts/api/api_v1/templates/__init__.py
"""

from .templates import router

__all__ = ["router"]
