"""Prompt templates stored as Markdown next to this module.

A template is addressed by ``<group>/<name>`` (``feedback/analyze`` is
``prompts/feedback/analyze.md``) and may contain ``{variable}``
placeholders. All placeholders are filled in one pass, so text supplied
as a value is never expanded again.

Usage:
    from tonetrainer.prompts.registry import get_prompt

    prompt = get_prompt("feedback/analyze", lesson_title="Greetings", score=82)
"""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)

PROMPTS_DIR = Path(__file__).parent

PLACEHOLDER = re.compile(r"\{(\w+)\}")


@lru_cache(maxsize=16)
def load_template(key: str) -> str:
    """Raw template text for ``key``.

    Raises:
        FileNotFoundError: If there is no template file for the key
    """
    file_path = PROMPTS_DIR / f"{key}.md"
    if not file_path.is_file():
        raise FileNotFoundError(f"Prompt not found: {key} (looked at {file_path})")
    logger.debug("prompt_loaded", key=key)
    return file_path.read_text(encoding="utf-8")


def render(template: str, variables: dict[str, object]) -> str:
    """Fill ``{name}`` placeholders; unknown names are left untouched."""

    def substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in variables:
            return match.group(0)
        return str(variables[name])

    return PLACEHOLDER.sub(substitute, template)


def get_prompt(key: str, **variables: object) -> str:
    """Load the template for ``key`` and fill in ``variables``."""
    return render(load_template(key), variables)
