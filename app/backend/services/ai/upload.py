"""
Document upload to OpenAI file storage.
"""

import logging

import openai
from openai import AsyncOpenAI

from .exceptions import ProviderTransportError

logger = logging.getLogger(__name__)

# Purpose OpenAI requires for files referenced from chat requests
UPLOAD_PURPOSE = "assistants"


async def upload_document(
    client: AsyncOpenAI,
    filename: str,
    content: bytes,
) -> str | None:
    """
    Upload a document and return the file ID OpenAI assigned to it.

    Args:
        client: Authenticated OpenAI client.
        filename: Name sent along with the file content.
        content: Raw document bytes.

    Returns:
        The file ID, or None if OpenAI rejected the upload.

    Raises:
        ProviderTransportError: If OpenAI could not be reached.
    """
    try:
        uploaded = await client.files.create(
            file=(filename, content),
            purpose=UPLOAD_PURPOSE,
        )
    except openai.APIStatusError as e:
        logger.error("Upload failed (%d): %s", e.status_code, e.response.text)
        return None
    except openai.APIConnectionError as e:
        raise ProviderTransportError(f"Could not reach OpenAI during upload: {e}") from e

    logger.info("Uploaded file to OpenAI with ID: %s", uploaded.id)
    return uploaded.id
