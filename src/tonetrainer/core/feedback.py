"""Feedback service.

Builds the pronunciation-feedback prompt from a practice result, sends it
to the configured LLM as a single user message and returns the generated
text unchanged. Any failure on the way (prompt loading, connection,
non-2xx status, empty or malformed response) falls back to a fixed
message chosen by score band:

- score >= 85: excellent
- 70 <= score < 85: good effort
- score < 70: keep practicing
"""

from __future__ import annotations

from typing import Any

import structlog

from tonetrainer.llm.client import LLMClient
from tonetrainer.prompts.registry import get_prompt

logger = structlog.get_logger(__name__)

PROMPT_KEY = "feedback/analyze"
EXCELLENT_THRESHOLD = 85
GOOD_THRESHOLD = 70

EXCELLENT_FEEDBACK = """**Overall Assessment:**
Excellent work! Your pronunciation demonstrates strong command of Mandarin tones and sounds.

**Strengths:**
- Clear articulation
- Good tone accuracy
- Natural rhythm

**Areas for Improvement:**
- Continue practicing to maintain this high level
- Work on subtle tone transitions

**Practice Recommendations:**
Keep up the consistent practice. Try more challenging material to further improve."""

GOOD_FEEDBACK = """**Overall Assessment:**
Good effort! You're making solid progress with room for improvement.

**Strengths:**
- Decent pronunciation clarity
- Understanding of basic tones

**Areas for Improvement:**
- Focus on tone accuracy and consistency
- Work on challenging sound combinations
- Practice rhythm and pacing

**Practice Recommendations:**
Regular daily practice focusing on difficult tones and sounds will help you improve significantly."""

KEEP_PRACTICING_FEEDBACK = """**Overall Assessment:**
Keep practicing! Building good pronunciation takes time and consistent effort.

**Strengths:**
- You're making an effort to learn
- Starting to understand the basics

**Areas for Improvement:**
- Focus on mastering the four tones
- Listen carefully to the master recording
- Practice individual sounds before full sentences

**Practice Recommendations:**
Start with simpler exercises. Practice each tone separately, then combine. Listen to native speakers frequently."""


def _as_number(score: Any) -> float | None:
    if isinstance(score, bool):
        return None
    try:
        return float(score)
    except (TypeError, ValueError):
        return None


def fallback_feedback(score: Any) -> str:
    """Deterministic feedback from the score alone. Never raises.

    Scores that are missing or not numeric land in the lowest band.
    """
    value = _as_number(score)
    if value is not None and value >= EXCELLENT_THRESHOLD:
        return EXCELLENT_FEEDBACK
    if value is not None and value >= GOOD_THRESHOLD:
        return GOOD_FEEDBACK
    return KEEP_PRACTICING_FEEDBACK


def build_prompt(lesson_title: Any, lesson_text: Any, lesson_type: Any, score: Any) -> str:
    """Render the analysis prompt for one practice result."""
    return get_prompt(
        PROMPT_KEY,
        lesson_title=lesson_title,
        lesson_text=lesson_text,
        lesson_type=lesson_type,
        score=score,
    )


class FeedbackService:
    """Best-effort AI feedback with a guaranteed fallback."""

    def __init__(self, client: LLMClient | None, max_tokens: int = 1500):
        """
        Args:
            client: LLM client, or None to always use the fallback
            max_tokens: Upper bound on generated tokens
        """
        self.client = client
        self.max_tokens = max_tokens

    def analyze(
        self,
        lesson_title: Any,
        lesson_text: Any,
        lesson_type: Any,
        score: Any,
    ) -> str:
        """Feedback text for a practice result. Never raises."""
        if self.client is None:
            logger.info("feedback_fallback_used", reason="no_client", score=score)
            return fallback_feedback(score)

        try:
            prompt = build_prompt(lesson_title, lesson_text, lesson_type, score)
            feedback = self.client.user_chat(prompt, max_tokens=self.max_tokens)
        except Exception as e:
            logger.warning(
                "feedback_fallback_used",
                reason=type(e).__name__,
                error=str(e),
                score=score,
            )
            return fallback_feedback(score)

        logger.info("feedback_generated", lesson_title=lesson_title, chars=len(feedback))
        return feedback
