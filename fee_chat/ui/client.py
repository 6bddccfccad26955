"""HTTP client for the chat endpoint."""

import logging
import os
from dataclasses import dataclass

import httpx

logger = logging.getLogger(__name__)

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:5001")
REQUEST_TIMEOUT = 120.0


@dataclass(frozen=True)
class Attachment:
    """A file picked in the UI, waiting to be sent."""

    name: str
    content: bytes
    content_type: str = "application/pdf"


class ChatClientError(Exception):
    """Raised when the chat endpoint could not produce a usable reply."""

    pass


async def post_chat_message(
    message: str,
    attachment: Attachment | None = None,
    *,
    base_url: str = API_BASE_URL,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """Send a message (and optional file) to ``POST /api/chat``.

    The body is always ``multipart/form-data``.

    Args:
        message: The user's text.
        attachment: Optional file to send as the ``file`` field.
        base_url: Server root URL.
        transport: Optional transport override.

    Returns:
        The ``message`` field of the server's reply.

    Raises:
        ChatClientError: On connection failure, error status or malformed reply.
    """
    files: dict[str, tuple] = {"message": (None, message.encode("utf-8"))}
    if attachment is not None:
        files["file"] = (attachment.name, attachment.content, attachment.content_type)

    async with httpx.AsyncClient(
        base_url=base_url, timeout=REQUEST_TIMEOUT, transport=transport
    ) as client:
        try:
            response = await client.post("/api/chat", files=files)
            response.raise_for_status()
            reply = response.json()["message"]
        except httpx.HTTPStatusError as e:
            raise ChatClientError(f"HTTP {e.response.status_code}") from e
        except httpx.RequestError as e:
            raise ChatClientError(f"Connection failed: {e}") from e
        except (ValueError, KeyError, TypeError) as e:
            raise ChatClientError("Malformed reply from server") from e

    if not isinstance(reply, str):
        raise ChatClientError("Malformed reply from server")
    return reply
