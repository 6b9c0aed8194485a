"""AI feedback endpoint.

Always answers 200: upstream failures are replaced by fallback text.
"""

from fastapi import APIRouter, Body, Depends
from starlette.concurrency import run_in_threadpool

from tonetrainer.core.feedback import FeedbackService
from tonetrainer.web.deps import get_feedback_service
from tonetrainer.web.schemas import AnalyzeRequest, AnalyzeResponse

router = APIRouter(prefix="/api", tags=["feedback"])


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze(
    request: AnalyzeRequest | None = Body(default=None),
    service: FeedbackService = Depends(get_feedback_service),
) -> AnalyzeResponse:
    """Generate feedback for a practice result."""
    if request is None:
        request = AnalyzeRequest()
    # The LLM client is blocking; keep it off the event loop
    feedback = await run_in_threadpool(
        service.analyze,
        request.lessonTitle,
        request.lessonText,
        request.lessonType,
        request.score,
    )
    return AnalyzeResponse(feedback=feedback)
