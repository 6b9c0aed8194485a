"""FastAPI application factory.

Main entry point for the Tone Trainer Web API.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from tonetrainer import __version__
from tonetrainer.config.app_config import AppConfig, load_app_config
from tonetrainer.core.feedback import FeedbackService
from tonetrainer.core.lessons import LessonService
from tonetrainer.core.practice import PracticeService
from tonetrainer.db.json_store import JsonListStore
from tonetrainer.llm.client import LLMClient, LLMConfig
from tonetrainer.web.errors import add_body_size_limit, register_error_handlers
from tonetrainer.web.routes import (
    analyze_router,
    health_router,
    lessons_router,
    pages_router,
    practice_router,
)
from tonetrainer.web.routes.pages import get_pages_dir

logger = structlog.get_logger(__name__)


def build_stores(config: AppConfig) -> tuple[JsonListStore, JsonListStore]:
    """Create the lesson and history store handles (no disk access)."""
    lessons = JsonListStore(config.storage.lessons_path, name="lessons")
    history = JsonListStore(config.storage.history_path, name="practice_history")
    return lessons, history


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Create missing store files, then log where everything lives."""
    config: AppConfig = app.state.config
    for store in (app.state.lesson_service.store, app.state.practice_service.store):
        store.initialize()

    base_url = f"http://localhost:{config.server.port}"
    logger.info(
        "api_startup",
        student_url=f"{base_url}/student",
        teacher_url=f"{base_url}/teacher",
        lessons_file=str(config.storage.lessons_path.absolute()),
        history_file=str(config.storage.history_path.absolute()),
        feedback_provider=config.feedback.provider,
    )
    yield


def create_app(
    config: AppConfig | None = None,
    llm_client: LLMClient | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Application config (loaded from YAML/env if not provided)
        llm_client: Client used for feedback (built from config if not provided)

    Returns:
        Configured FastAPI app instance
    """
    if config is None:
        config = load_app_config()
    if llm_client is None:
        llm_client = LLMClient(LLMConfig.from_app_config(config))

    app = FastAPI(
        title="Tone Trainer API",
        description="Lesson management and pronunciation practice API",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    lessons_store, history_store = build_stores(config)
    app.state.config = config
    app.state.lesson_service = LessonService(lessons_store)
    app.state.practice_service = PracticeService(history_store)
    app.state.feedback_service = FeedbackService(
        llm_client, max_tokens=config.feedback.max_tokens
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    add_body_size_limit(app, config.server.max_body_bytes)
    register_error_handlers(app)

    app.include_router(health_router)
    app.include_router(lessons_router)
    app.include_router(practice_router)
    app.include_router(analyze_router)
    app.include_router(pages_router)

    app.mount(
        "/static",
        StaticFiles(directory=get_pages_dir(config), check_dir=False),
        name="static",
    )

    return app
