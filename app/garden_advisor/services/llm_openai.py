"""
Purpose: OpenAI chat client used for the optional garden-concept narrative.
Owns auth, a short retry loop for transient API failures, and usage
normalization into {model, tokens_in, tokens_out}.

The narrative path has its own overall timeout (render_with_fallback), so the
SDK's built-in retries are off and the per-request timeout is the same budget.

Testing: Inject a stub `client` with chat.completions.create; no network.
"""

from __future__ import annotations
import logging
import time
from typing import Any, Optional

from openai import APIError, APITimeoutError, OpenAI, RateLimitError

from ..models import LLMSettings

logger = logging.getLogger(__name__)

# Seconds to wait before each retry; the final attempt is not retried.
RETRY_DELAYS = (0.5, 1.0, 2.0)
TRANSIENT_ERRORS = (RateLimitError, APITimeoutError, APIError)


class OpenAILLMClient:
    def __init__(self, api_key: Optional[str], *, timeout_s: float = 20.0, client: Any = None):
        if not api_key:
            raise RuntimeError("Missing OPENAI_API_KEY")
        self.api_key = api_key
        if client is None:
            try:
                client = OpenAI(api_key=api_key, timeout=timeout_s, max_retries=0)
            except Exception as e:
                raise RuntimeError(f"Failed to initialize OpenAI client: {e}") from e
        self.client = client

    def _retrying(self, call):
        for attempt, delay in enumerate(RETRY_DELAYS, start=1):
            try:
                return call()
            except TRANSIENT_ERRORS as e:
                logger.debug("OpenAI attempt %d failed (%s); sleeping %.1fs", attempt, e, delay)
                time.sleep(delay)
        return call()

    def chat(
        self,
        messages: list[dict[str, str]],
        settings: LLMSettings,
        system: Optional[str] = None,
    ) -> tuple[str, dict]:
        """Send one chat completion. Returns (text, usage meta)."""
        conversation = ([{"role": "system", "content": system}] if system else []) + list(messages)
        request = {
            "model": settings.model,
            "messages": conversation,
            "temperature": settings.temperature,
            "top_p": settings.top_p,
            "max_tokens": settings.max_tokens,
            "frequency_penalty": settings.frequency_penalty,
            "presence_penalty": settings.presence_penalty,
        }
        completion = self._retrying(lambda: self.client.chat.completions.create(**request))
        return _reply_text(completion), _usage_meta(completion, settings.model)


def _reply_text(completion) -> str:
    choices = getattr(completion, "choices", None) or []
    if not choices:
        return ""
    return choices[0].message.content or ""


def _usage_meta(completion, requested_model: str) -> dict:
    usage = getattr(completion, "usage", None)
    return {
        "model": getattr(completion, "model", None) or requested_model,
        "tokens_in": getattr(usage, "prompt_tokens", 0) or 0,
        "tokens_out": getattr(usage, "completion_tokens", 0) or 0,
    }
