"""
FastAPI application entry point for Financial Analysis Pro.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .agent.agent_client import AgentClient
from .agent.session import AgentSession
from .api.session import router as session_router
from .core.config import get_settings
from .core.exceptions import AppError

# Set the root logger level to INFO so we can see detailed logs
logging.basicConfig(level=logging.INFO)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Create the agent client and the single user session."""
    settings = get_settings()

    logger.info("Starting Financial Analysis Pro", environment=settings.environment)

    agent_client = AgentClient(settings)
    app.state.session = AgentSession(
        agent_client,
        agent_id=settings.agent_id,
        page_size=settings.rankings_page_size,
    )

    try:
        yield
    finally:
        await agent_client.close()
        logger.info("Agent client closed")


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Financial Analysis Pro API",
        description="AI-Powered Four-Pillar Investment Analysis",
        version="0.1.0",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        """Map AppError subclasses to their HTTP status codes."""
        error_dict = exc.to_dict()

        logger.warning(
            "Application error occurred",
            path=request.url.path,
            method=request.method,
            **error_dict,
        )

        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.message, "error_type": exc.error_type},
        )

    app.include_router(session_router)

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint for basic connectivity check."""
        return {
            "message": "Financial Analysis Pro API",
            "version": "0.1.0",
            "environment": settings.environment,
        }

    return app


# Create app instance
app = create_app()

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "analysis_pro.main:app",
        host="0.0.0.0",  # nosec B104 - Required for Docker container
        port=8000,
        reload=settings.is_development,
        log_config=None,
    )
