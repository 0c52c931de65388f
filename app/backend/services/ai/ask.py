"""
Question answering over an uploaded document.

Sends a single chat completion that references the uploaded file by ID and
asks the model to answer the caller's query as bare JSON.
"""

import logging
from typing import Any

import openai
from openai import AsyncOpenAI

from .exceptions import ProviderTransportError, UpstreamRejectionError

logger = logging.getLogger(__name__)

# Kept low for extraction-style answers; do not change without re-baselining
EXTRACTION_TEMPERATURE = 0.2


def build_instruction(query: str) -> str:
    """Build the instruction text that accompanies the file reference."""
    return (
        "You are an AI that extracts structured information from PDF documents. "
        "Carefully read the attached file and answer the following query:\n\n"
        f'"{query}"\n\n'
        "Return your response as valid JSON with no extra commentary or formatting."
    )


def build_messages(file_id: str, query: str) -> list[dict[str, Any]]:
    """Build the single user message: instruction text plus file reference."""
    return [
        {
            "role": "user",
            "content": [
                {"type": "text", "text": build_instruction(query)},
                {"type": "file", "file": {"file_id": file_id}},
            ],
        }
    ]


async def ask_document(
    client: AsyncOpenAI,
    file_id: str,
    query: str,
    model: str,
) -> str:
    """
    Ask OpenAI to answer a query from an uploaded document.

    Args:
        client: Authenticated OpenAI client.
        file_id: ID returned by the upload step.
        query: The caller's question.
        model: Chat model to use.

    Returns:
        The first choice's message content, unparsed.

    Raises:
        UpstreamRejectionError: If OpenAI rejected the request or returned no content.
        ProviderTransportError: If OpenAI could not be reached.
    """
    try:
        response = await client.chat.completions.create(
            model=model,
            messages=build_messages(file_id, query),
            temperature=EXTRACTION_TEMPERATURE,
        )
    except openai.APIStatusError as e:
        logger.error("OpenAI chat completion error (%d): %s", e.status_code, e.response.text)
        raise UpstreamRejectionError("OpenAI returned a failure response.") from e
    except openai.APIConnectionError as e:
        raise ProviderTransportError(f"Could not reach OpenAI during completion: {e}") from e

    content = response.choices[0].message.content
    if content is None:
        logger.error("OpenAI chat completion returned no content for file %s", file_id)
        raise UpstreamRejectionError("OpenAI returned an empty response.")

    logger.info("Received structured response from GPT.")
    return content
