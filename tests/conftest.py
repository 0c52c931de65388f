"""Pytest configuration and fixtures."""

import asyncio
import json
from typing import Callable, Generator

import httpx
import pytest
from fastapi.testclient import TestClient

from app.backend.main import app
from app.backend.services.ai import AIService, get_ai_service

FAKE_API_KEY = "sk-test-key"
FAKE_BASE_URL = "https://openai.test/v1"


class FakeOpenAI:
    """
    In-memory stand-in for the OpenAI HTTP API.

    Records every request it receives. Each endpoint answers with a
    configurable status and body, or raises a transport error.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.file_id = "file-abc"
        self.answer = '{"total": "$42.00"}'
        self.upload_status = 200
        self.ask_status = 200
        self.delete_status = 200
        self.upload_error: Exception | None = None
        self.ask_error: Exception | None = None
        self.delete_error: Exception | None = None

    def calls(self, method: str, path_prefix: str) -> list[httpx.Request]:
        return [
            r for r in self.requests
            if r.method == method and r.url.path.startswith(path_prefix)
        ]

    @property
    def upload_calls(self) -> list[httpx.Request]:
        return self.calls("POST", "/v1/files")

    @property
    def ask_calls(self) -> list[httpx.Request]:
        return self.calls("POST", "/v1/chat/completions")

    @property
    def delete_calls(self) -> list[httpx.Request]:
        return self.calls("DELETE", "/v1/files/")

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if request.method == "POST" and path == "/v1/files":
            if self.upload_error is not None:
                raise self.upload_error
            if self.upload_status != 200:
                return _error(self.upload_status, "upload rejected")
            return httpx.Response(
                200,
                json={
                    "id": self.file_id,
                    "object": "file",
                    "bytes": 10240,
                    "created_at": 1700000000,
                    "filename": "invoice.pdf",
                    "purpose": "assistants",
                    "status": "processed",
                },
            )

        if request.method == "POST" and path == "/v1/chat/completions":
            if self.ask_error is not None:
                raise self.ask_error
            if self.ask_status != 200:
                return _error(self.ask_status, "completion rejected")
            return httpx.Response(
                200,
                json={
                    "id": "chatcmpl-1",
                    "object": "chat.completion",
                    "created": 1700000000,
                    "model": "gpt-4-turbo",
                    "choices": [
                        {
                            "index": 0,
                            "finish_reason": "stop",
                            "message": {"role": "assistant", "content": self.answer},
                        }
                    ],
                },
            )

        if request.method == "DELETE" and path.startswith("/v1/files/"):
            if self.delete_error is not None:
                raise self.delete_error
            if self.delete_status != 200:
                return _error(self.delete_status, "delete rejected")
            return httpx.Response(
                200,
                json={"id": path.rsplit("/", 1)[-1], "object": "file", "deleted": True},
            )

        return _error(404, f"unknown route {request.method} {path}")

    def json_body(self, request: httpx.Request) -> dict:
        return json.loads(request.content)


def _error(status_code: int, message: str) -> httpx.Response:
    return httpx.Response(
        status_code,
        json={"error": {"message": message, "type": "invalid_request_error"}},
    )


@pytest.fixture
def fake_openai() -> FakeOpenAI:
    """A fresh fake OpenAI API for each test."""
    return FakeOpenAI()


async def close_http_clients(http_clients: list[httpx.AsyncClient]) -> None:
    """Close every HTTP client handed out to an AIService."""
    for http_client in http_clients:
        await http_client.aclose()


@pytest.fixture
def make_ai_service(
    fake_openai: FakeOpenAI,
) -> Generator[Callable[[], AIService], None, None]:
    """Factory for AIService instances wired to the fake OpenAI API."""
    http_clients: list[httpx.AsyncClient] = []

    def factory() -> AIService:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(fake_openai.handler))
        http_clients.append(http_client)
        return AIService(
            api_key=FAKE_API_KEY,
            base_url=FAKE_BASE_URL,
            timeout=5.0,
            http_client=http_client,
        )

    yield factory
    asyncio.run(close_http_clients(http_clients))


@pytest.fixture
def ai_service(make_ai_service: Callable[[], AIService]) -> AIService:
    """AIService wired to the fake OpenAI API."""
    return make_ai_service()


@pytest.fixture
def client(
    make_ai_service: Callable[[], AIService],
) -> Generator[TestClient, None, None]:
    """Create a test client whose AI service talks to the fake OpenAI API."""
    # A fresh service per request keeps the async HTTP client on the request's event loop
    app.dependency_overrides[get_ai_service] = make_ai_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def sample_pdf_bytes() -> bytes:
    """
    Create a minimal valid PDF for testing, padded to roughly 10KB.
    """
    pdf_content = b"""%PDF-1.4
1 0 obj
<< /Type /Catalog /Pages 2 0 R >>
endobj
2 0 obj
<< /Type /Pages /Kids [3 0 R] /Count 1 >>
endobj
3 0 obj
<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] /Contents 4 0 R >>
endobj
4 0 obj
<< /Length 44 >>
stream
BT
/F1 12 Tf
100 700 Td
(Total: $42.00) Tj
ET
endstream
endobj
trailer
<< /Size 5 /Root 1 0 R >>
%%EOF
"""
    return pdf_content + b"%" + b"0" * (10240 - len(pdf_content) - 1)
