"""Tests for app-wide behaviour: startup, body limit, error shape, CORS."""

import json

from fastapi.testclient import TestClient

from tonetrainer.web.api import create_app


class TestStartup:
    """Store files are created when the app starts."""

    def test_stores_created_on_startup(self, app_config, mock_llm_client):
        lessons_path = app_config.storage.lessons_path
        history_path = app_config.storage.history_path
        assert not lessons_path.exists()

        with TestClient(create_app(app_config, llm_client=mock_llm_client)):
            assert json.loads(lessons_path.read_text(encoding="utf-8")) == []
            assert json.loads(history_path.read_text(encoding="utf-8")) == []

    def test_existing_data_kept(self, app_config, mock_llm_client):
        lessons_path = app_config.storage.lessons_path
        lessons_path.parent.mkdir(parents=True)
        lessons_path.write_text(
            json.dumps([{"id": 1, "title": "Old", "type": "word", "text": "老", "audioData": "x"}]),
            encoding="utf-8",
        )

        with TestClient(create_app(app_config, llm_client=mock_llm_client)) as client:
            assert client.get("/api/lessons").json()[0]["title"] == "Old"


class TestBodyLimit:
    """Bodies over the configured size are rejected."""

    def test_large_body_rejected(self, app_config, mock_llm_client, sample_lesson):
        app_config.server.max_body_bytes = 1024

        with TestClient(create_app(app_config, llm_client=mock_llm_client)) as client:
            response = client.post(
                "/api/lessons", json={**sample_lesson, "audioData": "A" * 4096}
            )

        assert response.status_code == 413
        assert response.json() == {"error": "Request body too large"}

    def test_audio_payload_under_default_limit(self, client, sample_lesson):
        audio = "data:audio/webm;base64," + "A" * (2 * 1024 * 1024)

        response = client.post("/api/lessons", json={**sample_lesson, "audioData": audio})

        assert response.status_code == 201


class TestErrorShape:
    """Errors always carry a single "error" string."""

    def test_unknown_route(self, client):
        response = client.get("/api/nope")

        assert response.status_code == 404
        assert set(response.json()) == {"error"}


class TestCors:
    """Browsers on other origins may call the API."""

    def test_cors_header(self, client):
        response = client.get("/api/lessons", headers={"Origin": "http://example.com"})

        assert response.headers["access-control-allow-origin"] in ("*", "http://example.com")
