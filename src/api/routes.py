"""
API routes: health (model state), POST /embed.
Small, stable API surface; JSON-only; typed errors mapped by the registered handlers.
"""

import logging
from typing import Any

from fastapi import APIRouter, Request

from src.api.schemas import EmbedRequest, EmbedResponse
from src.config.settings import PREVIEW_SIZE
from src.services.embedding import EmbeddingService, ServiceState
from src.services.errors import NotInitializedError

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_service(request: Request) -> EmbeddingService | None:
    return getattr(request.app.state, "service", None)


@router.get("/health")
async def health(request: Request) -> dict[str, Any]:
    """
    Liveness plus model state (uninitialized/initializing/ready/failed).
    The process is healthy even while the model is still loading.
    """
    service = _get_service(request)
    if service is None:
        return {"status": "ok", "model": ServiceState.UNINITIALIZED.value}
    body: dict[str, Any] = {"status": "ok", "model": service.state.value}
    if service.failure is not None:
        body["detail"] = str(service.failure)
    return body


@router.post("/embed", response_model=EmbedResponse)
async def embed_text(request: Request, body: EmbedRequest) -> EmbedResponse:
    """
    Embed text with the loaded model.
    Returns the full vector, its dimension, and the first few values as a preview.
    """
    service = _get_service(request)
    if service is None:
        raise NotInitializedError()
    embedding = await service.embed(body.text)
    return EmbedResponse(
        embedding=embedding,
        dimension=len(embedding),
        preview=embedding[:PREVIEW_SIZE],
    )
