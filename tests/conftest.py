"""Shared pytest fixtures"""

import pytest

from core.config import Settings
from core.library import ReelLibrary


@pytest.fixture
def settings(tmp_path):
    """Settings rooted in a temporary directory"""
    return Settings(
        _env_file=None,
        base_dir=str(tmp_path),
        gemini_api_key="test-gemini-key",
        elevenlabs_api_key="test-eleven-key",
    )


@pytest.fixture
def library(settings):
    """Initialized reel library"""
    library = ReelLibrary(settings)
    library.initialize()
    return library
