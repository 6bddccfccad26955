"""Chat endpoint: one inbound request, one provider call, one reply.

The optional PDF is stored for the duration of the request, its text is
appended to the user's message, and the combined text is sent to the
completion provider together with the fixed system prompt.
"""

import logging
from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from fee_chat.agent.completion import CompletionService, ProviderError
from fee_chat.api.uploads import UploadTooLargeError, stored_upload
from fee_chat.models.schemas import ChatResponse, ErrorResponse
from fee_chat.parsing.pdf_parser import extract_text

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])

DOCUMENT_HEADER = "\n\nHere is a document for your review:\n"
GENERIC_ERROR = "An error occurred while processing your request."


def compose_user_text(message: str, document_text: str) -> str:
    """Append extracted document text to the user's message, if any."""
    if not document_text:
        return message
    return f"{message}{DOCUMENT_HEADER}{document_text}"


def build_messages(system_prompt: str, user_text: str) -> list[dict[str, str]]:
    """Build the two-turn exchange sent to the provider."""
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_text},
    ]


def _extract_from_file(path: Path, max_bytes: int) -> str:
    return extract_text(path.read_bytes(), max_size=max_bytes)


class ChatOrchestrator:
    """Turns one chat request into one provider reply.

    Holds no per-request state; the system prompt is fixed at construction.

    Args:
        system_prompt: Prompt prefixed to every conversation.
        completion_service: Client for the completion provider.
        upload_dir: Directory for uploads in flight.
        max_upload_bytes: Largest accepted upload.
    """

    def __init__(
        self,
        system_prompt: str,
        completion_service: CompletionService,
        upload_dir: Path,
        max_upload_bytes: int,
    ) -> None:
        self._system_prompt = system_prompt
        self._completion_service = completion_service
        self._upload_dir = upload_dir
        self._max_upload_bytes = max_upload_bytes

    @property
    def system_prompt(self) -> str:
        return self._system_prompt

    async def extract_document(self, upload: UploadFile) -> str:
        """Extract text from an upload, removing the stored copy afterwards.

        Raises:
            UploadTooLargeError: If the upload exceeds the byte limit.
        """
        async with stored_upload(upload, self._upload_dir, self._max_upload_bytes) as path:
            return await run_in_threadpool(_extract_from_file, path, self._max_upload_bytes)

    async def handle(self, message: str, upload: UploadFile | None = None) -> str:
        """Produce the assistant's reply for one request.

        Args:
            message: The user's text (may be empty).
            upload: Optional uploaded document.

        Returns:
            The reply text.

        Raises:
            ProviderError: If the provider rejected the call.
            UploadTooLargeError: If the upload exceeds the byte limit.
        """
        document_text = ""
        if upload is not None:
            document_text = await self.extract_document(upload)

        user_text = compose_user_text(message, document_text)
        messages = build_messages(self._system_prompt, user_text)
        return await self._completion_service.complete(messages)


def get_orchestrator(request: Request) -> ChatOrchestrator:
    """Resolve the orchestrator built by the application factory."""
    return request.app.state.chat_orchestrator


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={
        413: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def chat(
    orchestrator: Annotated[ChatOrchestrator, Depends(get_orchestrator)],
    message: Annotated[str, Form()] = "",
    file: Annotated[UploadFile | None, File()] = None,
) -> ChatResponse | JSONResponse:
    """Answer a chat message, optionally with an attached PDF.

    Args:
        message: The user's text (multipart field ``message``).
        file: Optional PDF (multipart field ``file``).

    Returns:
        ChatResponse with the assistant's reply.

    Raises:
        4xx/5xx: Provider status echoed with its message.
        413: Upload exceeds the configured limit.
        500: Any other failure, with a generic message.
    """
    try:
        reply = await orchestrator.handle(message, file)
    except ProviderError as e:
        code = e.status_code if 400 <= e.status_code < 600 else 500
        return _error(code, e.message)
    except UploadTooLargeError as e:
        logger.warning(f"Rejected upload over {e.max_bytes} bytes")
        return _error(status.HTTP_413_CONTENT_TOO_LARGE, str(e))
    except Exception:
        logger.exception("Unexpected error while handling chat request")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR)

    return ChatResponse(message=reply)
