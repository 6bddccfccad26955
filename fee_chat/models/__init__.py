"""Pydantic models for API responses and the client transcript.

Models:
    - Sender: Message author (user or assistant)
    - Message: Individual message in the transcript
    - ChatResponse: Successful chat reply
    - ErrorResponse: Failed chat reply
    - HealthResponse: Service health payload
"""

from fee_chat.models.schemas import ChatResponse, ErrorResponse, HealthResponse, Message, Sender

__all__ = ["ChatResponse", "ErrorResponse", "HealthResponse", "Message", "Sender"]
