"""
Shared fixtures: stub backend and asset directories on disk.
"""

from pathlib import Path

import pytest

from tests.stubs import StubBackend, make_asset_dir


@pytest.fixture
def asset_dir(tmp_path: Path) -> Path:
    """Directory with all six required model files present."""
    return make_asset_dir(tmp_path / "model")


@pytest.fixture
def stub_backend() -> StubBackend:
    return StubBackend()
