import pytest

from core.config import Settings


@pytest.fixture
def offline_settings():
    return Settings(ANTHROPIC_API_KEY="", _env_file=None)


@pytest.fixture
def online_settings():
    return Settings(ANTHROPIC_API_KEY="test-key", _env_file=None)
