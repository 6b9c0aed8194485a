"""Core services.

- lessons: lesson CRUD over the lesson store
- practice: practice submissions and statistics
- feedback: AI feedback with deterministic fallback
"""

from tonetrainer.core.errors import InvalidInputError, NotFoundError, TrainerError
from tonetrainer.core.feedback import FeedbackService, fallback_feedback
from tonetrainer.core.lessons import LessonService
from tonetrainer.core.practice import PracticeService, PracticeStats

__all__ = [
    "FeedbackService",
    "InvalidInputError",
    "LessonService",
    "NotFoundError",
    "PracticeService",
    "PracticeStats",
    "TrainerError",
    "fallback_feedback",
]
