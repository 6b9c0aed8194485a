"""Practice service.

Responsibilities:
- Append practice sessions to the history store (never edited or deleted)
- Compute aggregate statistics over the whole history

Session record (JSON):
    {id, lessonId, lessonTitle, score, timestamp, studentAudio}
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

import structlog

from tonetrainer.core.errors import InvalidInputError
from tonetrainer.db.json_store import JsonListStore
from tonetrainer.utils.validators import utc_timestamp

logger = structlog.get_logger(__name__)

RECENT_SESSIONS_LIMIT = 10

# Marks a score the caller never supplied (null is a supplied value)
MISSING: Any = object()


@dataclass
class PracticeStats:
    """Aggregate statistics over the practice history."""

    total_attempts: int = 0
    avg_score: int = 0
    best_score: float = 0
    recent_sessions: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the camelCase shape returned by the API."""
        return {
            "totalAttempts": self.total_attempts,
            "avgScore": self.avg_score,
            "bestScore": self.best_score,
            "recentSessions": self.recent_sessions,
        }


def _round_half_up(value: float) -> int:
    # Halves round towards +infinity, unlike round()
    return math.floor(value + 0.5)


def _numeric_score(session: dict[str, Any]) -> float:
    """Score as a number; null or non-numeric scores count as 0."""
    score = session.get("score")
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        return 0
    return score


def compute_stats(history: list[dict[str, Any]]) -> PracticeStats:
    """Compute statistics for a list of sessions in storage order."""
    if not history:
        return PracticeStats()

    scores = [_numeric_score(session) for session in history]
    return PracticeStats(
        total_attempts=len(history),
        avg_score=_round_half_up(sum(scores) / len(scores)),
        best_score=max(scores),
        recent_sessions=list(reversed(history[-RECENT_SESSIONS_LIMIT:])),
    )


class PracticeService:
    """Practice history operations backed by a JsonListStore."""

    def __init__(self, store: JsonListStore):
        self.store = store

    def submit_session(
        self,
        lesson_id: Any,
        lesson_title: Any,
        score: Any = MISSING,
        student_audio: Any = None,
    ) -> dict[str, Any]:
        """Record one practice attempt.

        A score of 0 (or null) is kept; only a score never given is rejected.

        Raises:
            InvalidInputError: If lesson_id or lesson_title is empty, or score is MISSING
        """
        if not lesson_id or not lesson_title or score is MISSING:
            logger.info(
                "practice_submit_rejected",
                has_lesson_id=bool(lesson_id),
                has_lesson_title=bool(lesson_title),
                has_score=score is not MISSING,
            )
            raise InvalidInputError("Missing required fields")

        with self.store.transaction() as history:
            session = {
                "id": self.store.next_id(),
                "lessonId": lesson_id,
                "lessonTitle": lesson_title,
                "score": score,
                "timestamp": utc_timestamp(),
                "studentAudio": student_audio or None,
            }
            history.append(session)

        logger.info(
            "practice_session_saved",
            session_id=session["id"],
            lesson_id=lesson_id,
            score=score,
        )
        return session

    def list_history(self) -> list[dict[str, Any]]:
        """Every session, oldest first."""
        return self.store.read_all()

    def get_stats(self) -> PracticeStats:
        """Statistics over the full history."""
        return compute_stats(self.store.read_all())
