"""
PDF Ask Backend Application.

A FastAPI service that relays questions about PDF documents to OpenAI
and returns the model's structured JSON answer unchanged.
"""

__version__ = "1.0.0"
