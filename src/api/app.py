"""FastAPI application factory and configuration.

Main application entry point with lifespan management, middleware,
error serialization and router registration.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.chat import router as chat_router
from src.api.extract import router as extract_router
from src.models.errors import ConfigurationError, SafeChatError
from src.relay.proxy import close_relay_proxy, get_relay_proxy

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    A missing relay credential is logged at startup; /chat then answers 500
    instead of the process failing to start.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    # Startup
    logger.info("Starting SafePipe Chat API...")
    try:
        get_relay_proxy()
    except ConfigurationError as e:
        logger.error(f"Chat relay unavailable: {e.message}")
    yield
    # Shutdown
    logger.info("Shutting down SafePipe Chat API...")
    await close_relay_proxy()


async def handle_safechat_error(request: Request, exc: SafeChatError) -> JSONResponse:
    """Serialize a SafeChatError as ``{error, kind[, details]}``."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="SafePipe Chat API",
        description=(
            "Chat front-end API. Extracts text from uploaded PDF, text, markdown "
            "and CSV documents, and relays conversations to the SafePipe "
            "completion service as a streamed response."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    application.add_exception_handler(SafeChatError, handle_safechat_error)
    application.include_router(extract_router)
    application.include_router(chat_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "safepipe-chat"}

    return application


app = create_app()
