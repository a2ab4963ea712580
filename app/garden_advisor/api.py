"""
Request handling for the questionnaire, independent of any web framework.

Body shape:   {"state": {answers, asked, completed} | missing, "ask": "next" | "summary"}
Next reply:   {"nextQuestion": {...} | None, "state": {...}, "reason": "..."}
Summary reply:{"state": {... "completed": True}, "summaryMarkdown": "..."}
"""

from __future__ import annotations
import logging
from typing import Any, Mapping, Optional

from .interfaces import NarrativeGenerator
from .models import SessionState
from .services.narrative import render_with_fallback
from .services.selection import SelectionEngine
from .services.summary import SummaryGenerator

logger = logging.getLogger(__name__)

ASK_NEXT = "next"
ASK_SUMMARY = "summary"


def handle_request(
    body: Optional[Mapping[str, Any]],
    *,
    engine: SelectionEngine,
    renderer: SummaryGenerator,
    generator: Optional[NarrativeGenerator] = None,
    timeout_s: float = 20.0,
) -> dict:
    """Map one request body to its response payload. Raises ValueError on bad input."""
    body = body or {}
    if not isinstance(body, Mapping):
        raise ValueError("Request body must be an object")

    state = SessionState.from_dict(body.get("state"))
    ask = body.get("ask") or ASK_NEXT

    if ask == ASK_SUMMARY:
        markdown, source = render_with_fallback(
            state, renderer=renderer, generator=generator, timeout_s=timeout_s
        )
        logger.info("Summary requested (%s)", source)
        done = state.copy()
        done.completed = True
        return {"state": done.to_dict(), "summaryMarkdown": markdown}

    if ask == ASK_NEXT:
        return engine.next(state).to_dict()

    raise ValueError(f"Unknown ask: {ask!r}")
