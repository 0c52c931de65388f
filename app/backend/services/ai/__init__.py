"""
AI service package for asking questions about PDF documents.

This package provides the three provider steps, split into:
- upload: Send the document to OpenAI file storage
- ask: Answer the caller's query from the uploaded file
- cleanup: Delete the uploaded file

The AIService class owns the OpenAI client and delegates to these modules.
"""

import logging

import httpx
from openai import AsyncOpenAI

from ...config import Settings, get_settings
from .ask import EXTRACTION_TEMPERATURE, ask_document as _ask_document
from .cleanup import delete_document as _delete_document
from .exceptions import AIServiceError, ProviderTransportError, UpstreamRejectionError
from .upload import UPLOAD_PURPOSE, upload_document as _upload_document

logger = logging.getLogger(__name__)

__all__ = [
    "AIService",
    "AIServiceError",
    "ProviderTransportError",
    "UpstreamRejectionError",
    "EXTRACTION_TEMPERATURE",
    "UPLOAD_PURPOSE",
    "get_ai_service",
]

# Constructor defaults are the settings defaults
_SETTINGS_FIELDS = Settings.model_fields


class AIService:
    """
    Service for the OpenAI file and chat endpoints used by the ask pipeline.

    The credential and transport settings are injected at construction so the
    service can be built with fake credentials and a fake HTTP transport.
    """

    def __init__(
        self,
        api_key: str | None,
        model: str = _SETTINGS_FIELDS["openai_model"].default,
        base_url: str = _SETTINGS_FIELDS["openai_base_url"].default,
        timeout: float = _SETTINGS_FIELDS["openai_timeout_seconds"].default,
        http_client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize the AI service.

        Args:
            api_key: OpenAI API key, sent as a bearer token.
            model: Chat model used to answer queries.
            base_url: OpenAI API root.
            timeout: Per-request timeout in seconds.
            http_client: Optional pre-built HTTP client (used by tests).
        """
        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        self.timeout = timeout
        self._http_client = http_client
        self._client: AsyncOpenAI | None = None

    @property
    def client(self) -> AsyncOpenAI:
        """Lazy-load the OpenAI client."""
        if self._client is None:
            if not self.api_key:
                raise AIServiceError(
                    "OpenAI API key not provided. Set OPENAI_API_KEY environment variable."
                )
            self._client = AsyncOpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.timeout,
                max_retries=0,
                http_client=self._http_client,
            )
        return self._client

    async def upload(self, filename: str, content: bytes) -> str | None:
        """Upload a document; returns its file ID or None if rejected."""
        return await _upload_document(self.client, filename, content)

    async def ask(self, file_id: str, query: str) -> str:
        """Ask the configured model to answer a query from an uploaded file."""
        return await _ask_document(self.client, file_id, query, model=self.model)

    async def delete(self, file_id: str) -> bool:
        """Delete an uploaded file. Never raises."""
        return await _delete_document(self.client, file_id)


# =============================================================================
# Singleton Factory
# =============================================================================

_ai_service: AIService | None = None


def get_ai_service() -> AIService:
    """Get or create the AI service singleton."""
    global _ai_service
    if _ai_service is None:
        settings = get_settings()
        _ai_service = AIService(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            base_url=settings.openai_base_url,
            timeout=settings.openai_timeout_seconds,
        )
        if not settings.openai_api_key:
            logger.warning("OPENAI_API_KEY is not set; requests to /api/pdf/ask will fail.")
    return _ai_service
