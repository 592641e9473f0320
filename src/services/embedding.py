"""
Embedding service: load a local model directory once, then embed text on demand.
One explicitly owned instance per caller (no module-level model); blocking work runs in a
worker thread and at most one backend call is in flight per service.
"""

import asyncio
import logging
import threading
from collections.abc import Iterable
from enum import Enum
from os import PathLike
from pathlib import Path

import numpy as np

from src.services.assets import REQUIRED_ASSET_FILES, verify_assets
from src.services.backend import ModelBackend, ModelHandle
from src.services.errors import (
    BackendInferenceError,
    BackendLoadError,
    InitError,
    NotInitializedError,
)

logger = logging.getLogger(__name__)


class ServiceState(str, Enum):
    """Lifecycle of an EmbeddingService. Only READY accepts embed calls."""

    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    FAILED = "failed"


class EmbeddingService:
    """
    Owns one ModelHandle for its lifetime.

    initialize() is a no-op once READY; after FAILED a caller may call it again.
    embed() never changes the state, so errors there leave the service usable.
    """

    def __init__(
        self,
        backend: ModelBackend,
        required_files: Iterable[str] = REQUIRED_ASSET_FILES,
    ) -> None:
        self._backend = backend
        self._required_files = tuple(required_files)
        self._handle: ModelHandle | None = None
        self._state = ServiceState.UNINITIALIZED
        self._failure: InitError | None = None
        # One inference in flight; held by the worker thread, so it holds even if an awaiting
        # caller is cancelled.
        self._lock = threading.Lock()
        # Serializes load attempts.
        self._load_lock = threading.Lock()
        # State transitions only; never held across backend work.
        self._state_lock = threading.Lock()

    @property
    def state(self) -> ServiceState:
        return self._state

    @property
    def failure(self) -> InitError | None:
        """Reason for the last failed initialization, None unless FAILED."""
        return self._failure

    @property
    def is_ready(self) -> bool:
        return self._state is ServiceState.READY

    @property
    def dimension(self) -> int | None:
        """Output dimension of the loaded model; None before a successful load."""
        handle = self._handle
        return handle.dimension if handle is not None else None

    async def initialize(self, asset_directory: str | PathLike[str]) -> None:
        """
        Verify the asset files and load the model off the event loop.
        Raises MissingAssetError (backend not called) or BackendLoadError.
        """
        directory = Path(asset_directory)
        with self._state_lock:
            if self._state is ServiceState.READY:
                logger.debug("Embedding model already loaded; ignoring initialize(%s)", directory)
                return
            self._state = ServiceState.INITIALIZING
            self._failure = None
        await asyncio.to_thread(self._initialize_blocking, directory)

    async def embed(self, text: str) -> list[float]:
        """
        Return a fresh embedding vector for text (empty text is passed to the tokenizer as-is).
        Raises NotInitializedError unless READY, BackendInferenceError on backend failure.
        """
        handle = self._handle
        if self._state is not ServiceState.READY or handle is None:
            raise NotInitializedError(f"Model not initialized (state: {self._state.value})")
        return await asyncio.to_thread(self._embed_blocking, handle, text)

    def _initialize_blocking(self, directory: Path) -> None:
        with self._load_lock:
            with self._state_lock:
                if self._handle is not None:
                    # Loaded by an overlapping call while this one waited.
                    self._state = ServiceState.READY
                    return
                self._state = ServiceState.INITIALIZING
                self._failure = None
            try:
                verify_assets(directory, self._required_files)
                handle = self._load(directory)
            except InitError as e:
                with self._state_lock:
                    self._state = ServiceState.FAILED
                    self._failure = e
                logger.error("Failed to initialize embedding model from %s: %s", directory, e)
                raise
            with self._state_lock:
                self._handle = handle
                self._state = ServiceState.READY
            logger.info(
                "Loaded embedding model from %s (dimension=%d)", directory, handle.dimension
            )

    def _load(self, directory: Path) -> ModelHandle:
        try:
            return self._backend.load_model(directory)
        except Exception as e:
            logger.debug("Model loading error details: %r", e)
            raise BackendLoadError(str(e)) from e

    def _embed_blocking(self, handle: ModelHandle, text: str) -> list[float]:
        with self._lock:
            try:
                output = handle.encode(text)
                vector = np.asarray(output, dtype=np.float32).reshape(-1)
            except Exception as e:
                logger.debug("Inference error details: %r", e)
                raise BackendInferenceError(str(e)) from e
        if vector.shape[0] != handle.dimension:
            raise BackendInferenceError(
                f"Expected {handle.dimension} values from model, got {vector.shape[0]}"
            )
        if not np.isfinite(vector).all():
            raise BackendInferenceError("Model produced non-finite values")
        return vector.tolist()
