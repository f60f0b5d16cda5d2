"""
HR Contracts - contract document generation service
"""

__version__ = "1.0.0"
