"""FastAPI application for the Smart Notes backend."""

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
load_dotenv()  # Load .env file for OPENAI_API_KEY

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.api.routes import API_VERSION, router
from backend.config.settings import get_settings
from backend.services.pipeline import ContentPipeline

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Global services (initialized on startup)
_services: dict = {}


def get_services() -> dict:
    """Get the global services dictionary."""
    return _services


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle - startup and shutdown."""
    logger.info("Starting up Smart Notes API...")

    settings = get_settings()
    _services["pipeline"] = ContentPipeline(settings=settings)

    logger.info(
        f"Pipeline ready (model={settings.openai_model}, "
        f"retries={settings.retry_attempts}, candidates={settings.candidate_count})"
    )

    yield

    logger.info("Shutting down Smart Notes API...")
    _services.clear()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Smart Notes API",
        description="""
        Turn text, web pages, videos, images and voice recordings into
        organized notes, and draft ready-to-send replies to messages.

        ## Endpoints
        - **POST /api/notes** generate notes from one piece of content
        - **POST /api/reply** generate three candidate replies
        - **GET /api/health** health check
        """,
        version=API_VERSION,
        lifespan=lifespan,
    )

    # Mobile and web clients call the API cross-origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_settings().cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include API routes
    app.include_router(router, prefix="/api")

    return app


# Create the app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "backend.api.app:app",
        host="0.0.0.0",
        port=3000,
        reload=True,
    )
