"""Prompts for the optional LLM garden-concept narrative."""

from __future__ import annotations
import json
from textwrap import dedent
from typing import Any, Mapping


def build_summary_system() -> str:
    return dedent(
        """
        You are a skilled garden designer. Given structured answers, produce a
        concise Markdown concept with these sections, in this order:
        Top Styles (3), Desired Feelings, Intended Uses, Site & Care,
        Planting Palette (12-20 suggested plants suited to the sun and water
        answers), Zoning Ideas (3-4), and Next Steps.
        Use a level-2 heading (##) for each section. Keep it pragmatic.
        """
    ).strip()


def summary_instruction(*, answers: Mapping[str, Any]) -> str:
    # sort_keys keeps the prompt stable across sessions with the same answers.
    return json.dumps(dict(answers), ensure_ascii=False, sort_keys=True, default=list)
