"""Tests for the practice service and statistics."""

import pytest

from tonetrainer.core.errors import InvalidInputError
from tonetrainer.core.practice import MISSING, PracticeService, PracticeStats, compute_stats


@pytest.fixture
def service(history_store) -> PracticeService:
    return PracticeService(history_store)


def _sessions(scores):
    return [
        {"id": i + 1, "lessonId": 1, "lessonTitle": "T", "score": s, "timestamp": "t"}
        for i, s in enumerate(scores)
    ]


class TestSubmitSession:
    """Tests for submit_session."""

    def test_submit_persists_session(self, service, history_store):
        session = service.submit_session(1700000000000, "Greetings", 88)

        assert session["lessonId"] == 1700000000000
        assert session["lessonTitle"] == "Greetings"
        assert session["score"] == 88
        assert session["studentAudio"] is None
        assert "timestamp" in session
        assert history_store.read_all() == [session]

    def test_zero_score_accepted(self, service):
        """A score of 0 is a real score, not a missing one."""
        session = service.submit_session(1, "Greetings", 0)

        assert session["score"] == 0
        assert service.list_history() == [session]

    def test_student_audio_kept(self, service):
        session = service.submit_session(1, "Greetings", 50, "data:audio/webm;base64,BBBB")

        assert session["studentAudio"] == "data:audio/webm;base64,BBBB"

    @pytest.mark.parametrize(
        "lesson_id,title,score",
        [(None, "Greetings", 50), (1, "", 50), (1, "Greetings", MISSING), (0, "Greetings", 50)],
    )
    def test_missing_fields_rejected(self, service, history_store, lesson_id, title, score):
        with pytest.raises(InvalidInputError):
            service.submit_session(lesson_id, title, score)

        assert history_store.read_all() == []

    def test_null_score_is_kept(self, service):
        """Only a score that was never given counts as missing."""
        session = service.submit_session(1, "Greetings", None)

        assert session["score"] is None
        assert service.list_history() == [session]

    def test_history_is_oldest_first(self, service):
        first = service.submit_session(1, "A", 10)
        second = service.submit_session(1, "B", 20)

        assert service.list_history() == [first, second]


class TestStats:
    """Tests for statistics."""

    def test_empty_history(self, service):
        stats = service.get_stats()

        assert stats == PracticeStats()
        assert stats.to_dict() == {
            "totalAttempts": 0,
            "avgScore": 0,
            "bestScore": 0,
            "recentSessions": [],
        }

    def test_average_and_best(self):
        stats = compute_stats(_sessions([70, 85, 90]))

        assert stats.total_attempts == 3
        assert stats.avg_score == 82  # 81.67
        assert stats.best_score == 90

    def test_average_rounds_half_up(self):
        """Halves round up (80.5 -> 81), not to even."""
        assert compute_stats(_sessions([80, 81])).avg_score == 81
        assert compute_stats(_sessions([0, 1])).avg_score == 1

    def test_zero_score_counts(self, service):
        service.submit_session(1, "A", 0)
        service.submit_session(1, "A", 100)

        stats = service.get_stats()

        assert stats.total_attempts == 2
        assert stats.avg_score == 50

    def test_recent_sessions_last_ten_reversed(self):
        history = _sessions(list(range(15)))

        recent = compute_stats(history).recent_sessions

        assert [s["id"] for s in recent] == list(range(15, 5, -1))

    def test_recent_sessions_fewer_than_ten(self):
        history = _sessions([10, 20, 30])

        recent = compute_stats(history).recent_sessions

        assert [s["score"] for s in recent] == [30, 20, 10]

    def test_null_and_non_numeric_scores_count_as_zero(self):
        stats = compute_stats(_sessions([None, "n/a", 90]))

        assert stats.total_attempts == 3
        assert stats.avg_score == 30
        assert stats.best_score == 90
