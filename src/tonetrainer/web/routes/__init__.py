"""Route handlers for the Web API."""

from tonetrainer.web.routes.analyze import router as analyze_router
from tonetrainer.web.routes.health import router as health_router
from tonetrainer.web.routes.lessons import router as lessons_router
from tonetrainer.web.routes.pages import router as pages_router
from tonetrainer.web.routes.practice import router as practice_router

__all__ = [
    "analyze_router",
    "health_router",
    "lessons_router",
    "pages_router",
    "practice_router",
]
