from enum import Enum

from pydantic import BaseModel, Field


class Sender(str, Enum):
    """Who wrote a transcript message."""

    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """A single message in the client-side transcript.

    Attributes:
        sender: The speaker, user or assistant.
        content: The message text.
    """

    sender: Sender
    content: str


class ChatResponse(BaseModel):
    """Successful reply from the chat endpoint."""

    message: str = Field(..., description="The assistant's reply")


class ErrorResponse(BaseModel):
    """Failure reply from the chat endpoint."""

    error: str = Field(..., description="What went wrong")


class HealthResponse(BaseModel):
    status: str
    service: str
