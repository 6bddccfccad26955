"""FastAPI application factory and configuration.

The system prompt is assembled before the application object exists, so a
server that cannot ground its answers never binds a port.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fee_chat import __version__
from fee_chat.agent.completion import CompletionService
from fee_chat.agent.config import ChatConfig, get_chat_config
from fee_chat.agent.prompt import build_system_prompt
from fee_chat.api.chat import ChatOrchestrator
from fee_chat.api.chat import router as chat_router
from fee_chat.api.middleware import RateLimitMiddleware, SecurityHeadersMiddleware
from fee_chat.models.schemas import HealthResponse

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    logger.info("Starting Fee chat API...")
    yield
    logger.info("Shutting down Fee chat API...")
    await app.state.completion_service.aclose()


def create_app(
    config: ChatConfig | None = None,
    system_prompt: str | None = None,
    completion_service: CompletionService | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Chat configuration. Loads from environment if not provided.
        system_prompt: Prebuilt system prompt. Built from the configured
            persona and context files if not provided.
        completion_service: Provider client. Created from ``config`` if not
            provided.

    Returns:
        Configured FastAPI application instance.

    Raises:
        PromptInitializationError: If no prompt context could be loaded.
        pydantic.ValidationError: If the configuration is invalid.
    """
    config = config or get_chat_config()
    if system_prompt is None:
        system_prompt = build_system_prompt(config)
    completion_service = completion_service or CompletionService(config)

    application = FastAPI(
        title="Fee Chat API",
        description=(
            "Chat with Fee, an SESMag reviewer persona. Accepts a message and an "
            "optional PDF, and answers with a single LLM completion grounded by a "
            "fixed system prompt."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.state.completion_service = completion_service
    application.state.chat_orchestrator = ChatOrchestrator(
        system_prompt=system_prompt,
        completion_service=completion_service,
        upload_dir=config.upload_dir,
        max_upload_bytes=config.max_upload_bytes,
    )

    # Last added runs first: CORS, then security headers, then the limiter
    application.add_middleware(
        RateLimitMiddleware,
        max_requests=config.rate_limit_requests,
        window_seconds=config.rate_limit_window_seconds,
    )
    application.add_middleware(SecurityHeadersMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(chat_router)

    @application.get("/health", response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        """Check service health status."""
        return HealthResponse(status="healthy", service="fee-chat")

    return application
