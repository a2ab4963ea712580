"""Utilities for cleaning up free-text LLM responses."""

from __future__ import annotations
import re

_FENCE_OPEN = re.compile(r"^```[A-Za-z0-9_-]*\s*")
_FENCE_CLOSE = re.compile(r"\s*```$")


def strip_code_fences(text: str) -> str:
    """Remove surrounding ```...``` fences (with or without 'markdown') if present."""
    t = (text or "").strip()
    if t.startswith("```") and t.endswith("```") and len(t) >= 6:
        t = _FENCE_OPEN.sub("", t)
        t = _FENCE_CLOSE.sub("", t)
    return t.strip()
