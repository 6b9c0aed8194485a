"""Lesson endpoints."""

from typing import Any

from fastapi import APIRouter, Body, Depends, status

from tonetrainer.core.lessons import LessonService
from tonetrainer.web.deps import get_lesson_service
from tonetrainer.web.errors import store_failure
from tonetrainer.web.schemas import (
    Lesson,
    LessonCreate,
    LessonMutationResponse,
    LessonSummary,
    MessageResponse,
)

router = APIRouter(prefix="/api/lessons", tags=["lessons"])


@router.get("", response_model=list[LessonSummary])
async def list_lessons(
    service: LessonService = Depends(get_lesson_service),
) -> list[dict[str, Any]]:
    """List all lessons without their audio."""
    with store_failure("Failed to retrieve lessons"):
        return service.list_lessons()


@router.get("/{lesson_id}", response_model=Lesson, response_model_exclude_unset=True)
async def get_lesson(
    lesson_id: str,
    service: LessonService = Depends(get_lesson_service),
) -> dict[str, Any]:
    """Get one lesson including its audio."""
    with store_failure("Failed to retrieve lesson"):
        return service.get_lesson(lesson_id)


@router.post(
    "",
    response_model=LessonMutationResponse,
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_lesson(
    lesson_data: LessonCreate,
    service: LessonService = Depends(get_lesson_service),
) -> dict[str, Any]:
    """Create a lesson (teacher)."""
    with store_failure("Failed to create lesson"):
        lesson = service.create_lesson(
            title=lesson_data.title,
            type=lesson_data.type,
            text=lesson_data.text,
            audio_data=lesson_data.audioData,
        )
    return {"message": "Lesson created successfully", "lesson": lesson}


@router.put("/{lesson_id}", response_model=LessonMutationResponse, response_model_exclude_unset=True)
async def update_lesson(
    lesson_id: str,
    changes: dict[str, Any] | None = Body(default=None),
    service: LessonService = Depends(get_lesson_service),
) -> dict[str, Any]:
    """Merge the given fields into a lesson (teacher)."""
    with store_failure("Failed to update lesson"):
        lesson = service.update_lesson(lesson_id, changes or {})
    return {"message": "Lesson updated successfully", "lesson": lesson}


@router.delete("/{lesson_id}", response_model=MessageResponse)
async def delete_lesson(
    lesson_id: str,
    service: LessonService = Depends(get_lesson_service),
) -> MessageResponse:
    """Delete a lesson (teacher)."""
    with store_failure("Failed to delete lesson"):
        service.delete_lesson(lesson_id)
    return MessageResponse(message="Lesson deleted successfully")
