"""
Removal of uploaded documents from OpenAI file storage.
"""

import logging

import openai
from openai import AsyncOpenAI

logger = logging.getLogger(__name__)


async def delete_document(client: AsyncOpenAI, file_id: str) -> bool:
    """
    Delete an uploaded document. Never raises.

    Returns:
        True if OpenAI confirmed the deletion, False otherwise.
    """
    try:
        await client.files.delete(file_id)
    except openai.APIStatusError as e:
        logger.warning("Failed to delete OpenAI file %s: %s", file_id, e.response.text)
        return False
    except Exception as e:
        logger.warning("Failed to delete OpenAI file %s. Exception: %s", file_id, e)
        return False

    logger.info("Deleted OpenAI file: %s", file_id)
    return True
