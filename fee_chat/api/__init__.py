"""FastAPI endpoints for the Fee chat service.

Endpoints:
    - GET /health: Service health status
    - POST /api/chat: Chat message with optional PDF attachment

Every route is wrapped in open CORS, security headers and a per-IP
rate limit.
"""

from fee_chat.api.app import create_app

__all__ = ["create_app"]
