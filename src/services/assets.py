"""
Model asset check: every required file must exist under the asset directory before loading.
Names are fixed and case-sensitive; extra files are ignored.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from src.services.errors import MissingAssetError

logger = logging.getLogger(__name__)

# Config, weights, tokenizer definition, vocabulary, tokenizer config, special tokens map.
REQUIRED_ASSET_FILES: tuple[str, ...] = (
    "config.json",
    "pytorch_model.bin",
    "tokenizer.json",
    "vocab.txt",
    "tokenizer_config.json",
    "special_tokens_map.json",
)


def find_missing_asset(
    directory: Path,
    required: Iterable[str] = REQUIRED_ASSET_FILES,
) -> str | None:
    """Return the first required file name not present under directory, or None if all exist."""
    logger.debug("Using asset directory: %s", directory)
    for name in required:
        exists = (directory / name).is_file()
        logger.debug("Checking %s: %s", name, exists)
        if not exists:
            return name
    return None


def verify_assets(
    directory: Path,
    required: Iterable[str] = REQUIRED_ASSET_FILES,
) -> None:
    """Raise MissingAssetError naming the first required file absent from directory."""
    missing = find_missing_asset(directory, required)
    if missing is not None:
        raise MissingAssetError(missing)
