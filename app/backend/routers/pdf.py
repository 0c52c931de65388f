"""
Router for PDF question endpoints.

Handles:
- Asking a question about an uploaded PDF
"""

import logging

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import PlainTextResponse
from starlette.datastructures import UploadFile

from ..models import AskOutcome, AskPdfRequest, FaultKind, PipelineFault
from ..services.ai import AIService, get_ai_service
from ..services.ask_pipeline import AskPipeline

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/pdf", tags=["pdf"])

FAULT_STATUS_CODES: dict[FaultKind, int] = {
    FaultKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    FaultKind.UPSTREAM_REJECTION: status.HTTP_500_INTERNAL_SERVER_ERROR,
    FaultKind.TRANSPORT: status.HTTP_503_SERVICE_UNAVAILABLE,
    FaultKind.UNEXPECTED: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def outcome_to_response(outcome: AskOutcome) -> Response:
    """Render a pipeline outcome as the HTTP response the caller sees."""
    if isinstance(outcome, PipelineFault):
        return PlainTextResponse(
            content=outcome.message,
            status_code=FAULT_STATUS_CODES[outcome.kind],
        )
    return Response(content=outcome.content, media_type="application/json")


ASK_REQUEST_BODY = {
    "required": True,
    "content": {
        "multipart/form-data": {
            "schema": {
                "type": "object",
                "required": ["File", "Query"],
                "properties": {
                    "File": {"type": "string", "format": "binary", "description": "PDF file to query"},
                    "Query": {"type": "string", "description": "Question about the PDF"},
                },
            }
        }
    },
}


@router.post(
    "/ask",
    responses={
        200: {"content": {"application/json": {}}, "description": "Structured answer"},
        400: {"content": {"text/plain": {}}, "description": "Missing file or query"},
        500: {"content": {"text/plain": {}}, "description": "OpenAI rejected the request"},
        503: {"content": {"text/plain": {}}, "description": "OpenAI unreachable"},
    },
    openapi_extra={"requestBody": ASK_REQUEST_BODY},
)
async def ask_question(
    http_request: Request,
    ai_service: AIService = Depends(get_ai_service),
) -> Response:
    """
    Upload a PDF and ask a semantic question.

    OpenAI extracts structured data from the document and the JSON answer is
    returned exactly as the model produced it.
    """
    # Form is read by hand so malformed fields become 400s, not 422s
    async with http_request.form() as form:
        file = form.get("File")
        query = form.get("Query")
        if not isinstance(file, UploadFile):
            file = None
        if not isinstance(query, str):
            query = None

        content = await file.read() if file is not None else None
        request = AskPdfRequest(
            filename=file.filename if file is not None else None,
            content=content,
            query=query,
        )
        if content:
            logger.info("Processing PDF: %s (%d bytes)", request.filename, len(content))

    outcome = await AskPipeline(ai_service).run(request)
    return outcome_to_response(outcome)
