"""HTML page delivery for the student and teacher interfaces."""

from pathlib import Path

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import FileResponse

from tonetrainer.config.app_config import AppConfig
from tonetrainer.web.deps import get_config

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["pages"], include_in_schema=False)

BUNDLED_PAGES_DIR = Path(__file__).resolve().parent.parent / "pages"

INDEX_PAGE = "index.html"
STUDENT_PAGE = "student.html"
TEACHER_PAGE = "teacher_portal.html"


def get_pages_dir(config: AppConfig) -> Path:
    """Configured pages directory, or the pages bundled with the package."""
    if config.server.pages_dir:
        return Path(config.server.pages_dir)
    return BUNDLED_PAGES_DIR


def _page(config: AppConfig, name: str) -> FileResponse:
    path = get_pages_dir(config) / name
    if not path.is_file():
        logger.warning("page_missing", page=name, path=str(path))
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Page not found")
    return FileResponse(path, media_type="text/html")


@router.get("/")
async def index_page(config: AppConfig = Depends(get_config)) -> FileResponse:
    """Landing page (student interface)."""
    return _page(config, INDEX_PAGE)


@router.get("/student")
@router.get("/mandarin-tool")
async def student_page(config: AppConfig = Depends(get_config)) -> FileResponse:
    """Student practice interface. /mandarin-tool is the legacy path."""
    return _page(config, STUDENT_PAGE)


@router.get("/teacher")
@router.get("/teachers")
@router.get("/teacher-portal")
async def teacher_page(config: AppConfig = Depends(get_config)) -> FileResponse:
    """Teacher lesson management interface."""
    return _page(config, TEACHER_PAGE)
