"""
Services package for the PDF ask application.

Contains:
- ai: OpenAI integration (upload, ask, cleanup)
- ask_pipeline: Orchestration of the three steps with guaranteed cleanup
"""

from .ai import AIService
from .ask_pipeline import AskPipeline

__all__ = ["AIService", "AskPipeline"]
