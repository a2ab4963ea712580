"""
Purpose: Optional LLM-written garden concept with a deterministic fallback.

The LLM narrative is cosmetic. Any failure (no key, disabled, timeout,
exception, empty reply) means "no result", and the deterministic
SummaryGenerator output is used verbatim. The LLM output is not checked
against the section layout.

Testing: Fake LLMClient; assert fallback on exceptions, empty text and
timeouts.
"""

from __future__ import annotations
import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from typing import Any, Mapping, Optional

from ..interfaces import LLMClient, NarrativeGenerator, PromptFactory, SummaryRenderer
from ..models import LLMSettings, SessionState
from ..prompts import DefaultPromptFactory
from ..utils.llm_text import strip_code_fences

logger = logging.getLogger(__name__)

SOURCE_LLM = "llm"
SOURCE_DETERMINISTIC = "deterministic"


class LLMNarrativeGenerator:
    def __init__(
        self,
        llm: Optional[LLMClient],
        settings: LLMSettings,
        *,
        prompts: Optional[PromptFactory] = None,
        enabled: bool = True,
    ):
        self.llm = llm
        self.settings = settings
        self.prompts: PromptFactory = prompts or DefaultPromptFactory()
        self.enabled = enabled
        self.last_meta: dict = {}

    def generate(self, answers: Mapping[str, Any]) -> Optional[str]:
        """Return the LLM narrative, or None when it is unavailable."""
        self.last_meta = {}
        if not self.enabled or self.llm is None:
            return None

        messages = [
            {"role": "system", "content": self.prompts.build_summary_system()},
            {"role": "user", "content": self.prompts.summary_instruction(answers=answers)},
        ]
        try:
            reply, meta = self.llm.chat(messages, self.settings)
        except Exception as e:
            logger.warning("LLM narrative failed: %s", e)
            return None

        self.last_meta = dict(meta or {})
        text = strip_code_fences(reply) if isinstance(reply, str) else ""
        if not text:
            logger.warning("LLM narrative was empty; using deterministic summary")
            return None
        return text


def render_with_fallback(
    state: SessionState,
    *,
    renderer: SummaryRenderer,
    generator: Optional[NarrativeGenerator] = None,
    timeout_s: float = 20.0,
) -> tuple[str, str]:
    """
    Try the generator within timeout_s, else render deterministically.
    Returns (markdown, source).
    """
    if generator is not None:
        text = _generate_bounded(generator, dict(state.answers), timeout_s)
        if text:
            return text, SOURCE_LLM
    return renderer.render(state), SOURCE_DETERMINISTIC


def _generate_bounded(
    generator: NarrativeGenerator, answers: dict, timeout_s: float
) -> Optional[str]:
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="narrative")
    future = executor.submit(generator.generate, answers)
    try:
        result = future.result(timeout=timeout_s)
    except FutureTimeout:
        logger.warning("LLM narrative timed out after %.1fs", timeout_s)
        future.cancel()
        return None
    except Exception as e:
        logger.warning("LLM narrative raised: %s", e)
        return None
    finally:
        # Never wait on a stuck call; the worker thread finishes on its own.
        executor.shutdown(wait=False)

    if not isinstance(result, str) or not result.strip():
        return None
    return result
