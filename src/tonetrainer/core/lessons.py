"""Lesson service.

Responsibilities:
- CRUD over the lesson store (one JSON array of lesson records)
- Strip audio payloads from list views

Lesson record (JSON):
    {id, title, type, text, audioData, createdAt, updatedAt?}
"""

from __future__ import annotations

from typing import Any

import structlog

from tonetrainer.core.errors import InvalidInputError, NotFoundError
from tonetrainer.db.json_store import JsonListStore
from tonetrainer.utils.validators import missing_fields, parse_record_id, utc_timestamp

logger = structlog.get_logger(__name__)

REQUIRED_FIELDS = ("title", "type", "text", "audioData")
SUMMARY_FIELDS = ("id", "title", "type", "text", "createdAt")
# Keys an update can never overwrite
PROTECTED_FIELDS = ("id", "createdAt")


def lesson_summary(lesson: dict[str, Any]) -> dict[str, Any]:
    """Lesson metadata without the audio payload."""
    return {key: lesson.get(key) for key in SUMMARY_FIELDS}


def _find_index(lessons: list[dict[str, Any]], lesson_id: int | None) -> int:
    if lesson_id is None:
        return -1
    for i, lesson in enumerate(lessons):
        if lesson.get("id") == lesson_id:
            return i
    return -1


class LessonService:
    """Lesson operations backed by a JsonListStore."""

    def __init__(self, store: JsonListStore):
        self.store = store

    def list_lessons(self) -> list[dict[str, Any]]:
        """All lessons in storage order, without audio."""
        return [lesson_summary(lesson) for lesson in self.store.read_all()]

    def get_lesson(self, lesson_id: int | str) -> dict[str, Any]:
        """Full lesson including audio.

        Raises:
            NotFoundError: If no lesson has this id
        """
        lessons = self.store.read_all()
        index = _find_index(lessons, parse_record_id(lesson_id))
        if index == -1:
            raise NotFoundError("Lesson not found")
        return lessons[index]

    def create_lesson(
        self,
        title: str | None,
        type: str | None,
        text: str | None,
        audio_data: str | None,
    ) -> dict[str, Any]:
        """Create and persist a new lesson.

        Raises:
            InvalidInputError: If any of the four fields is missing or empty
        """
        fields = {"title": title, "type": type, "text": text, "audioData": audio_data}
        missing = missing_fields(fields, REQUIRED_FIELDS)
        if missing:
            logger.info("lesson_create_rejected", missing=missing)
            raise InvalidInputError("Missing required fields")

        with self.store.transaction() as lessons:
            lesson = {
                "id": self.store.next_id(),
                "title": title,
                "type": type,
                "text": text,
                "audioData": audio_data,
                "createdAt": utc_timestamp(),
            }
            lessons.append(lesson)

        logger.info("lesson_created", lesson_id=lesson["id"], title=title, type=type)
        return lesson

    def update_lesson(self, lesson_id: int | str, changes: dict[str, Any]) -> dict[str, Any]:
        """Shallow-merge ``changes`` onto a lesson.

        Any key is accepted except ``id`` and ``createdAt``, which keep their
        original values. ``updatedAt`` is always stamped.

        Raises:
            NotFoundError: If no lesson has this id
        """
        with self.store.transaction() as lessons:
            index = _find_index(lessons, parse_record_id(lesson_id))
            if index == -1:
                raise NotFoundError("Lesson not found")

            original = lessons[index]
            merged = {**original, **changes}
            for key in PROTECTED_FIELDS:
                if key in original:
                    merged[key] = original[key]
                else:
                    merged.pop(key, None)
            merged["updatedAt"] = utc_timestamp()
            lessons[index] = merged

        logger.info("lesson_updated", lesson_id=merged["id"], fields=sorted(changes))
        return merged

    def delete_lesson(self, lesson_id: int | str) -> None:
        """Remove a lesson.

        Raises:
            NotFoundError: If no lesson has this id
        """
        with self.store.transaction() as lessons:
            index = _find_index(lessons, parse_record_id(lesson_id))
            if index == -1:
                raise NotFoundError("Lesson not found")
            removed = lessons.pop(index)

        logger.info("lesson_deleted", lesson_id=removed.get("id"))
