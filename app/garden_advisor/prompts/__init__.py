"""Facade that exposes the prompt modules as a DefaultPromptFactory."""

from __future__ import annotations
from typing import Any, Mapping

from . import summary as _summary


class DefaultPromptFactory:
    # SUMMARY / NARRATIVE
    def build_summary_system(self) -> str:
        return _summary.build_summary_system()

    def summary_instruction(self, *, answers: Mapping[str, Any]) -> str:
        return _summary.summary_instruction(answers=answers)
