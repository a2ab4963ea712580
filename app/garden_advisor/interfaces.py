"""
Abstractions for pluggable services. Inversion of control: the controller
depends on interfaces, not concrete services. Enables fakes/mocks and future
swaps.
Protocols define what services or components can do,
without saying how they do it.

Common protocols:
- LLMClient.chat(messages, settings) -> (reply, meta)
- PromptFactory.build_summary_system() / summary_instruction(answers)
- NarrativeGenerator.generate(answers) -> str | None
- SessionStore.load() / save(state) / clear()

Testing: Use simple fake implementations to test the controller without
network calls.
"""

from __future__ import annotations
from typing import Any, Mapping, Optional, Protocol

from .models import LLMSettings, SessionState


class LLMClient(Protocol):
    def chat(
        self,
        messages: list[dict[str, str]],
        settings: LLMSettings,
        system: Optional[str] = None,
    ) -> tuple[str, dict]: ...


class PromptFactory(Protocol):
    def build_summary_system(self) -> str: ...

    def summary_instruction(self, *, answers: Mapping[str, Any]) -> str: ...


class NarrativeGenerator(Protocol):
    """Best-effort alternative to the deterministic summary."""

    def generate(self, answers: Mapping[str, Any]) -> Optional[str]: ...


class SummaryRenderer(Protocol):
    def render(self, state: SessionState) -> str: ...


class SessionStore(Protocol):
    def load(self) -> Optional[SessionState]: ...

    def save(self, state: SessionState) -> None: ...

    def clear(self) -> None: ...
