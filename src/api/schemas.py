"""
Pydantic schemas for API request/response.
JSON-only; consistent structure.
"""

from pydantic import BaseModel, Field

from src.config.settings import MAX_TEXT_LENGTH


class EmbedRequest(BaseModel):
    """POST /embed body: text to embed."""

    text: str = Field(..., min_length=1, max_length=MAX_TEXT_LENGTH, description="Text to embed")


class EmbedResponse(BaseModel):
    """POST /embed response: full vector, its length, and the leading values for display."""

    embedding: list[float]
    dimension: int
    preview: list[float] = Field(default_factory=list)
