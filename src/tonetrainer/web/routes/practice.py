"""Practice endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, status

from tonetrainer.core.practice import MISSING, PracticeService
from tonetrainer.web.deps import get_practice_service
from tonetrainer.web.errors import store_failure
from tonetrainer.web.schemas import (
    PracticeSession,
    PracticeStatsResponse,
    PracticeSubmit,
    PracticeSubmitResponse,
)

router = APIRouter(prefix="/api/practice", tags=["practice"])


@router.post("", response_model=PracticeSubmitResponse, status_code=status.HTTP_201_CREATED)
async def submit_practice(
    submission: PracticeSubmit,
    service: PracticeService = Depends(get_practice_service),
) -> dict[str, Any]:
    """Record a practice attempt."""
    with store_failure("Failed to save practice session"):
        session = service.submit_session(
            lesson_id=submission.lessonId,
            lesson_title=submission.lessonTitle,
            score=submission.score if "score" in submission.model_fields_set else MISSING,
            student_audio=submission.studentAudio,
        )
    return {"message": "Practice session saved", "session": session}


@router.get("/history", response_model=list[PracticeSession])
async def practice_history(
    service: PracticeService = Depends(get_practice_service),
) -> list[dict[str, Any]]:
    """Every practice session, oldest first."""
    with store_failure("Failed to retrieve practice history"):
        return service.list_history()


@router.get("/stats", response_model=PracticeStatsResponse)
async def practice_stats(
    service: PracticeService = Depends(get_practice_service),
) -> dict[str, Any]:
    """Attempts, average and best score, and the ten latest sessions."""
    with store_failure("Failed to retrieve statistics"):
        return service.get_stats().to_dict()
