"""
Ask pipeline: upload a document, ask a question about it, always clean up.

The pipeline never raises. Every run ends in an AskOutcome: either the
provider's answer or a PipelineFault tagged with the kind of failure.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from ..models import (
    AskOutcome,
    AskPdfRequest,
    FaultKind,
    PipelineFault,
    RemoteFileHandle,
    StructuredAnswer,
)
from .ai import AIService, ProviderTransportError, UpstreamRejectionError

logger = logging.getLogger(__name__)

NO_FILE_MESSAGE = "No file provided."
NO_QUERY_MESSAGE = "No query provided."
UPLOAD_REJECTED_MESSAGE = "File upload to OpenAI failed."
ASK_REJECTED_MESSAGE = "OpenAI returned a failure response."
TRANSPORT_MESSAGE = "Could not reach OpenAI."
UNEXPECTED_MESSAGE = "An unexpected error occurred."


def validate_request(request: AskPdfRequest) -> PipelineFault | None:
    """Return a validation fault if the request lacks a document or a query."""
    if not request.has_document:
        return PipelineFault(kind=FaultKind.VALIDATION, message=NO_FILE_MESSAGE)
    if not request.has_query:
        return PipelineFault(kind=FaultKind.VALIDATION, message=NO_QUERY_MESSAGE)
    return None


def fault_from_exception(exc: Exception) -> PipelineFault:
    """Map an exception onto a fault whose message is safe to show the caller."""
    if isinstance(exc, UpstreamRejectionError):
        return PipelineFault(kind=FaultKind.UPSTREAM_REJECTION, message=ASK_REJECTED_MESSAGE)
    if isinstance(exc, ProviderTransportError):
        return PipelineFault(kind=FaultKind.TRANSPORT, message=TRANSPORT_MESSAGE)
    return PipelineFault(kind=FaultKind.UNEXPECTED, message=UNEXPECTED_MESSAGE)


@asynccontextmanager
async def uploaded_document(
    ai_service: AIService,
    filename: str,
    content: bytes,
) -> AsyncIterator[RemoteFileHandle | None]:
    """
    Upload a document for the duration of the block.

    Yields the handle, or None if the upload was rejected. When a handle was
    obtained it is deleted exactly once on exit, however the block ends.
    """
    file_id = await ai_service.upload(filename, content)
    try:
        yield RemoteFileHandle(file_id=file_id) if file_id else None
    finally:
        if file_id:
            await ai_service.delete(file_id)


class AskPipeline:
    """Runs one ask request against OpenAI: Uploading → Asking → Responding."""

    def __init__(self, ai_service: AIService):
        self.ai_service = ai_service

    async def run(self, request: AskPdfRequest) -> AskOutcome:
        """
        Execute the pipeline for a single request.

        Args:
            request: The caller's document and query.

        Returns:
            StructuredAnswer on success, otherwise a PipelineFault.
        """
        fault = validate_request(request)
        if fault is not None:
            logger.info("Rejected ask request: %s", fault.message)
            return fault

        try:
            async with uploaded_document(
                self.ai_service,
                request.filename or "document.pdf",
                request.content,
            ) as handle:
                if handle is None:
                    logger.error("File upload to OpenAI failed.")
                    return PipelineFault(
                        kind=FaultKind.UPSTREAM_REJECTION,
                        message=UPLOAD_REJECTED_MESSAGE,
                    )

                answer = await self.ai_service.ask(handle.file_id, request.query)

        except UpstreamRejectionError as e:
            logger.error("OpenAI rejected the request: %s", e)
            return fault_from_exception(e)
        except ProviderTransportError as e:
            logger.error("HTTP request to OpenAI failed: %s", e)
            return fault_from_exception(e)
        except Exception as e:
            logger.exception("Unexpected server error.")
            return fault_from_exception(e)

        logger.info("OpenAI JSON response returned successfully.")
        return StructuredAnswer(content=answer)
