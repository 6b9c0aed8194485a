"""Shared fixtures: isolated config, stores, and a mocked LLM client.

Tests are grouped by feature:
- f1: JSON store and configuration
- f2: lessons
- f3: practice history and statistics
- f4: LLM client, prompts and feedback
- f5: app wiring, pages, health and CLI
"""

from unittest.mock import MagicMock

import pytest
import structlog
from fastapi.testclient import TestClient

from tonetrainer.config.app_config import AppConfig, StorageConfig
from tonetrainer.db.json_store import JsonListStore
from tonetrainer.llm.client import LLMConnectionError
from tonetrainer.web.api import create_app


@pytest.fixture(autouse=True)
def quiet_logs():
    """Keep structlog output out of test results."""
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(40))
    yield
    structlog.reset_defaults()


@pytest.fixture
def app_config(tmp_path) -> AppConfig:
    """Config pointing all storage at a temporary directory."""
    return AppConfig(storage=StorageConfig(data_dir=str(tmp_path / "data")))


@pytest.fixture
def lessons_store(tmp_path) -> JsonListStore:
    store = JsonListStore(tmp_path / "lessons.json", name="lessons")
    store.initialize()
    return store


@pytest.fixture
def history_store(tmp_path) -> JsonListStore:
    store = JsonListStore(tmp_path / "practice_history.json", name="practice_history")
    store.initialize()
    return store


@pytest.fixture
def mock_llm_client():
    """LLM client that answers with fixed text without calling any API."""
    client = MagicMock()
    client.config = MagicMock()
    client.config.provider = "anthropic"
    client.config.model = "test-model"
    client.user_chat.return_value = "Great tones! Watch the third tone in 你好."
    return client


@pytest.fixture
def failing_llm_client():
    """LLM client whose every call fails as if the network were down."""
    client = MagicMock()
    client.user_chat.side_effect = LLMConnectionError("Connection refused")
    return client


@pytest.fixture
def client(app_config, mock_llm_client):
    """Test client with isolated stores; lifespan runs so files exist."""
    app = create_app(app_config, llm_client=mock_llm_client)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def sample_lesson() -> dict:
    return {
        "title": "Greetings",
        "type": "sentence",
        "text": "你好，我叫小明。",
        "audioData": "data:audio/webm;base64,GkXfo59ChoEBQveBAULygQRC84EIQoKEd2Vib",
    }
