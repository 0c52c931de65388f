"""
Routers package for FastAPI endpoints.

Organized by domain:
- pdf: Asking questions about PDF documents
"""

from . import pdf

__all__ = ["pdf"]
