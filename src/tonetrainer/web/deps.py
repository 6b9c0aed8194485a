"""Request dependencies.

Services are built once per app by ``create_app`` and stored on
``app.state``; routes receive them through these dependencies.
"""

from fastapi import Request

from tonetrainer.config.app_config import AppConfig
from tonetrainer.core.feedback import FeedbackService
from tonetrainer.core.lessons import LessonService
from tonetrainer.core.practice import PracticeService


def get_config(request: Request) -> AppConfig:
    return request.app.state.config


def get_lesson_service(request: Request) -> LessonService:
    return request.app.state.lesson_service


def get_practice_service(request: Request) -> PracticeService:
    return request.app.state.practice_service


def get_feedback_service(request: Request) -> FeedbackService:
    return request.app.state.feedback_service
