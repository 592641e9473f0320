"""
Configuration from environment. No inline config; model directory and pooling from env.
Unset or invalid values fall back to the documented defaults.
"""

import os

POOLING_MODES = ("cls", "mean")


def _float_env(name: str, default: float) -> float:
    """Read float from environment; return default if unset or invalid."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    """Read int from environment; return default if unset, invalid, or not finite."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(float(raw))
    except (ValueError, OverflowError):
        return default


def _bool_env(name: str, default: bool) -> bool:
    """Read a true/false flag from environment; return default if unset or unrecognized."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    return default


def _choice_env(name: str, default: str, choices: tuple[str, ...]) -> str:
    """Read one of a fixed set of values from environment; return default otherwise."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    return value if value in choices else default


def get_model_dir() -> str | None:
    """EMBEDDING_MODEL_DIR: directory holding the model asset files."""
    return os.environ.get("EMBEDDING_MODEL_DIR") or None


# Pooling is fixed for the process lifetime so equal text gives equal vectors.
# "cls" uses the first token's output, "mean" averages all token outputs.
POOLING_MODE: str = _choice_env("EMBEDDING_POOLING", "cls", POOLING_MODES)
NORMALIZE_EMBEDDINGS: bool = _bool_env("EMBEDDING_NORMALIZE", False)
DEVICE: str = os.environ.get("EMBEDDING_DEVICE", "cpu")

# Leading values echoed back as a short preview for display.
PREVIEW_SIZE: int = max(0, _int_env("EMBEDDING_PREVIEW_SIZE", 5))

# Upper bound on POST /embed text length (characters).
MAX_TEXT_LENGTH: int = max(1, _int_env("EMBEDDING_MAX_TEXT_LENGTH", 10000))

LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()
