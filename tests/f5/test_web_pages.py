"""Tests for HTML page routes."""

import pytest
from fastapi.testclient import TestClient

from tonetrainer.web.api import create_app


class TestBundledPages:
    """Routes serve the pages shipped with the package."""

    @pytest.mark.parametrize("path", ["/", "/student", "/mandarin-tool"])
    def test_student_pages(self, client, path):
        response = client.get(path)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")

    @pytest.mark.parametrize("path", ["/teacher", "/teachers", "/teacher-portal"])
    def test_teacher_pages(self, client, path):
        response = client.get(path)

        assert response.status_code == 200
        assert "Teacher Portal" in response.text

    def test_student_alias_serves_same_page(self, client):
        assert client.get("/student").text == client.get("/mandarin-tool").text


class TestCustomPagesDir:
    """A configured pages directory replaces the bundled pages."""

    def test_custom_pages(self, app_config, mock_llm_client, tmp_path):
        pages = tmp_path / "pages"
        pages.mkdir()
        (pages / "student.html").write_text("<h1>custom student</h1>", encoding="utf-8")
        (pages / "app.js").write_text("console.log('hi');", encoding="utf-8")
        app_config.server.pages_dir = str(pages)

        with TestClient(create_app(app_config, llm_client=mock_llm_client)) as client:
            assert "custom student" in client.get("/student").text
            assert client.get("/static/app.js").status_code == 200

            missing = client.get("/teacher")
            assert missing.status_code == 404
            assert missing.json() == {"error": "Page not found"}
