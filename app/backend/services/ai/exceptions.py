"""
Shared exceptions for AI service modules.
"""


class AIServiceError(Exception):
    """Raised when AI service operations fail."""

    pass


class ProviderTransportError(AIServiceError):
    """Raised when OpenAI could not be reached (connection failure, timeout)."""

    pass


class UpstreamRejectionError(AIServiceError):
    """Raised when OpenAI answered with a non-success status."""

    pass
