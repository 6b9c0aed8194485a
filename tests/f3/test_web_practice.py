"""Tests for practice endpoints."""


def _submit(client, score, title="Greetings", lesson_id=1700000000000):
    return client.post(
        "/api/practice",
        json={"lessonId": lesson_id, "lessonTitle": title, "score": score},
    )


class TestSubmitPractice:
    """Tests for POST /api/practice."""

    def test_submit(self, client):
        response = _submit(client, 88)

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Practice session saved"
        assert body["session"]["score"] == 88
        assert body["session"]["lessonTitle"] == "Greetings"
        assert body["session"]["studentAudio"] is None

    def test_zero_score_accepted(self, client):
        response = _submit(client, 0)

        assert response.status_code == 201
        assert client.get("/api/practice/history").json()[0]["score"] == 0

    def test_missing_score(self, client):
        response = client.post("/api/practice", json={"lessonId": 1, "lessonTitle": "T"})

        assert response.status_code == 400
        assert response.json() == {"error": "Missing required fields"}

    def test_missing_title(self, client):
        response = client.post("/api/practice", json={"lessonId": 1, "score": 50})

        assert response.status_code == 400

    def test_null_score_accepted(self, client):
        response = client.post(
            "/api/practice", json={"lessonId": 1, "lessonTitle": "T", "score": None}
        )

        assert response.status_code == 201
        assert response.json()["session"]["score"] is None
        assert client.get("/api/practice/stats").json()["bestScore"] == 0

    def test_fractional_lesson_id_accepted(self, client):
        response = _submit(client, 70, lesson_id=1.5)

        assert response.status_code == 201
        assert response.json()["session"]["lessonId"] == 1.5

    def test_reference_to_deleted_lesson_allowed(self, client):
        """lessonId is not checked against existing lessons."""
        assert _submit(client, 50, lesson_id=42).status_code == 201


class TestHistory:
    """Tests for GET /api/practice/history."""

    def test_history_oldest_first(self, client):
        _submit(client, 10, title="First")
        _submit(client, 20, title="Second")

        data = client.get("/api/practice/history").json()

        assert [s["lessonTitle"] for s in data] == ["First", "Second"]


class TestStats:
    """Tests for GET /api/practice/stats."""

    def test_stats_empty(self, client):
        response = client.get("/api/practice/stats")

        assert response.status_code == 200
        assert response.json() == {
            "totalAttempts": 0,
            "avgScore": 0,
            "bestScore": 0,
            "recentSessions": [],
        }

    def test_stats(self, client):
        for score in [0, 60, 75, 90]:
            _submit(client, score)

        data = client.get("/api/practice/stats").json()

        assert data["totalAttempts"] == 4
        assert data["avgScore"] == 56  # 56.25
        assert data["bestScore"] == 90
        assert [s["score"] for s in data["recentSessions"]] == [90, 75, 60, 0]

    def test_stats_recent_limited_to_ten(self, client):
        for score in range(12):
            _submit(client, score)

        recent = client.get("/api/practice/stats").json()["recentSessions"]

        assert [s["score"] for s in recent] == list(range(11, 1, -1))

    def test_stats_store_failure(self, client, app_config):
        app_config.storage.history_path.write_text("nope", encoding="utf-8")

        response = client.get("/api/practice/stats")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to retrieve statistics"}
