"""
Pydantic models for the PDF ask pipeline.

Defines the inbound request, the remote file handle, and the tagged
outcome (answer or fault) the pipeline hands back to the router.
"""

from enum import Enum

from pydantic import BaseModel, Field


class FaultKind(str, Enum):
    """Caller-visible failure categories of the ask pipeline."""

    VALIDATION = "validation"
    UPSTREAM_REJECTION = "upstream_rejection"
    TRANSPORT = "transport"
    UNEXPECTED = "unexpected"


class AskPdfRequest(BaseModel):
    """
    A document and a question about it, as received from the caller.

    Attributes:
        filename: Original name of the uploaded document.
        content: Raw document bytes, read once from the upload stream.
        query: Natural-language question to answer from the document.
    """

    filename: str | None = Field(default=None, description="Original filename")
    content: bytes | None = Field(default=None, description="Document bytes")
    query: str | None = Field(default=None, description="Question about the document")

    @property
    def has_document(self) -> bool:
        return bool(self.content)

    @property
    def has_query(self) -> bool:
        return bool(self.query and self.query.strip())


class RemoteFileHandle(BaseModel):
    """Opaque reference to a document stored by OpenAI."""

    file_id: str = Field(..., min_length=1, description="Provider-assigned file ID")


class StructuredAnswer(BaseModel):
    """The provider's answer, relayed to the caller without parsing."""

    content: str = Field(..., description="Raw message content from the provider")


class PipelineFault(BaseModel):
    """
    A failed pipeline run.

    The message is safe to show to the caller; provider error bodies are
    only ever logged.
    """

    kind: FaultKind
    message: str


AskOutcome = StructuredAnswer | PipelineFault


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(default="healthy")
    version: str = Field(default="1.0.0")
