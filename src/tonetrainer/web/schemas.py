"""Pydantic schemas for the Web API.

Field names are camelCase to match the JSON stored on disk and consumed
by the browser pages. Request fields are optional at the schema level;
the services decide what is missing so the API answers 400, not 422.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# LESSON SCHEMAS
# =============================================================================


class LessonCreate(BaseModel):
    """Request body for creating a lesson. Only emptiness is checked."""

    title: Any = None
    type: Any = None
    text: Any = None
    audioData: Any = None


class LessonSummary(BaseModel):
    """Lesson metadata as listed for browsing (no audio).

    Updates store whatever JSON they are given, so values are not narrowed.
    """

    id: Any = None
    title: Any = None
    type: Any = None
    text: Any = None
    createdAt: Any = None


class Lesson(BaseModel):
    """A full lesson record. Extra keys set through updates are kept."""

    model_config = ConfigDict(extra="allow")

    id: int
    title: Any = None
    type: Any = None
    text: Any = None
    audioData: Any = None
    createdAt: str | None = None
    updatedAt: str | None = None


class LessonMutationResponse(BaseModel):
    """Response for lesson create/update."""

    message: str
    lesson: Lesson


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str


# =============================================================================
# PRACTICE SCHEMAS
# =============================================================================


class PracticeSubmit(BaseModel):
    """Request body for submitting a practice session.

    An explicit ``"score": null`` is a value; only an absent score is missing.
    """

    lessonId: Any = None
    lessonTitle: Any = None
    score: Any = None
    studentAudio: Any = None


class PracticeSession(BaseModel):
    """A stored practice session."""

    id: int
    lessonId: Any = None
    lessonTitle: Any = None
    score: Any = None
    timestamp: str | None = None
    studentAudio: Any = None


class PracticeSubmitResponse(BaseModel):
    """Response for a saved practice session."""

    message: str
    session: PracticeSession


class PracticeStatsResponse(BaseModel):
    """Aggregate practice statistics."""

    totalAttempts: int
    avgScore: int
    bestScore: int | float
    recentSessions: list[PracticeSession]


# =============================================================================
# FEEDBACK SCHEMAS
# =============================================================================


class AnalyzeRequest(BaseModel):
    """Request body for AI feedback. Nothing is required."""

    lessonTitle: Any = None
    lessonText: Any = None
    lessonType: Any = None
    score: Any = None


class AnalyzeResponse(BaseModel):
    """Feedback text (AI-generated or fallback)."""

    feedback: str


# =============================================================================
# HEALTH SCHEMAS
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str = "0.1.0"
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
