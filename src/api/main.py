"""
FastAPI application: logging, error handlers, health and embed routes.
The model loads in a background task at startup so the app serves /health immediately.
"""

import asyncio
import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.api.errors import register_error_handlers
from src.api.routes import router as api_router
from src.config.settings import DEVICE, LOG_LEVEL, NORMALIZE_EMBEDDINGS, POOLING_MODE, get_model_dir
from src.services.backend import SentenceTransformerBackend
from src.services.embedding import EmbeddingService
from src.services.errors import InitError

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(levelname)s %(name)s %(message)s",
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)


async def _initialize_service(service: EmbeddingService, model_dir: str) -> None:
    """Load the model; a failure is logged and left on the service for /health."""
    try:
        await service.initialize(model_dir)
    except InitError as e:
        logger.warning("Embedding model not available: %s", e)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Create the embedding service and start loading the model; wait for the load on shutdown."""
    service = EmbeddingService(
        SentenceTransformerBackend(
            pooling=POOLING_MODE,
            normalize=NORMALIZE_EMBEDDINGS,
            device=DEVICE,
        )
    )
    app.state.service = service
    init_task: asyncio.Task[None] | None = None
    model_dir = get_model_dir()
    if model_dir:
        init_task = asyncio.create_task(_initialize_service(service, model_dir))
    else:
        logger.warning("EMBEDDING_MODEL_DIR not set; embedding will be unavailable")
    yield
    # Backend work cannot be interrupted; let an in-flight load finish.
    if init_task is not None and not init_task.done():
        await init_task


def create_app() -> FastAPI:
    """Create and configure the FastAPI app."""
    app = FastAPI(
        title="Text Embedding API",
        description="Embed text with a locally stored pretrained transformer model.",
        version="0.1.0",
        lifespan=lifespan,
    )
    register_error_handlers(app)
    app.include_router(api_router, tags=["health", "embedding"])
    logger.info("Application configured")
    return app


app = create_app()
