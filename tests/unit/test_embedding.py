"""
Unit tests for embedding generation: output length matches the model, deterministic for same input.
Uses the stub backend so no model weights are needed.
"""

import asyncio
import math
from pathlib import Path

import pytest

from src.services.embedding import EmbeddingService
from tests.stubs import STUB_DIM, StubBackend


@pytest.fixture
def service(asset_dir: Path, stub_backend: StubBackend) -> EmbeddingService:
    svc = EmbeddingService(stub_backend)
    asyncio.run(svc.initialize(asset_dir))
    return svc


def test_embedding_shape_matches_dimension(service: EmbeddingService) -> None:
    """embed returns a list of Python floats of the model's dimension."""
    out = asyncio.run(service.embed("The cat is black"))
    assert isinstance(out, list)
    assert len(out) == STUB_DIM == service.dimension
    assert all(isinstance(x, float) for x in out)
    assert all(math.isfinite(x) for x in out)


def test_embedding_deterministic(service: EmbeddingService) -> None:
    """Same input -> same embedding (no randomness)."""
    a = asyncio.run(service.embed("We should ban AI from schools."))
    b = asyncio.run(service.embed("We should ban AI from schools."))
    assert a == b


def test_embedding_different_input_different_output(service: EmbeddingService) -> None:
    """Different input -> different embedding."""
    a = asyncio.run(service.embed("Hello world"))
    b = asyncio.run(service.embed("Different text"))
    assert a != b


def test_length_independent_of_text_length(service: EmbeddingService) -> None:
    """Short and long texts give vectors of the same length."""
    short = asyncio.run(service.embed("a"))
    long = asyncio.run(service.embed("word " * 2000))
    assert len(short) == len(long) == STUB_DIM


def test_empty_text_accepted(service: EmbeddingService) -> None:
    """Empty string is passed to the backend; a valid vector comes back."""
    out = asyncio.run(service.embed(""))
    assert len(out) == STUB_DIM


def test_result_is_fresh_list(service: EmbeddingService) -> None:
    """Mutating a returned vector does not affect later results."""
    first = asyncio.run(service.embed("same"))
    first[0] = 12345.0
    second = asyncio.run(service.embed("same"))
    assert second[0] != 12345.0
