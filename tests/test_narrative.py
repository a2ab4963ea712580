"""Tests for garden_advisor.services.narrative and the summary prompts."""

import json
import threading

from conftest import FakeLLM
from garden_advisor.models import LLMSettings, SessionState
from garden_advisor.prompts import DefaultPromptFactory
from garden_advisor.services.narrative import (
    SOURCE_DETERMINISTIC,
    SOURCE_LLM,
    LLMNarrativeGenerator,
    render_with_fallback,
)
from garden_advisor.utils.llm_text import strip_code_fences

SETTINGS = LLMSettings(model="fake-model")


class BlockingGenerator:
    """Hangs until released, to exercise the timeout path."""

    def __init__(self):
        self.release = threading.Event()

    def generate(self, answers):
        self.release.wait(timeout=5)
        return "too late"


class TestGenerator:
    """LLMNarrativeGenerator.generate."""

    def test_returns_reply_and_meta(self, fake_llm):
        """A non-empty reply is returned and usage is kept."""
        gen = LLMNarrativeGenerator(fake_llm, SETTINGS)
        assert gen.generate({"sun": "full"}) == "## Top Styles\n- Cottage"
        assert gen.last_meta["tokens_out"] == 22

    def test_prompt_carries_sorted_answers(self, fake_llm):
        """The user message is the answers as sorted JSON."""
        gen = LLMNarrativeGenerator(fake_llm, SETTINGS)
        gen.generate({"water": "low", "style": ["modern"]})
        system, user = fake_llm.calls[0]
        assert system["role"] == "system"
        assert "garden designer" in system["content"]
        assert json.loads(user["content"]) == {"style": ["modern"], "water": "low"}
        assert user["content"].index('"style"') < user["content"].index('"water"')

    def test_exception_means_none(self):
        """Client errors are swallowed into 'no narrative'."""
        gen = LLMNarrativeGenerator(FakeLLM(error=RuntimeError("boom")), SETTINGS)
        assert gen.generate({}) is None

    def test_empty_reply_means_none(self):
        """Blank replies do not count."""
        gen = LLMNarrativeGenerator(FakeLLM(reply="   "), SETTINGS)
        assert gen.generate({}) is None

    def test_disabled_never_calls(self, fake_llm):
        """A disabled generator does not touch the client."""
        gen = LLMNarrativeGenerator(fake_llm, SETTINGS, enabled=False)
        assert gen.generate({}) is None
        assert fake_llm.calls == []

    def test_fences_are_stripped(self):
        """Markdown fences around the reply are removed."""
        gen = LLMNarrativeGenerator(FakeLLM(reply="```markdown\n## Top Styles\n```"), SETTINGS)
        assert gen.generate({}) == "## Top Styles"


class TestRenderWithFallback:
    """LLM first, deterministic otherwise."""

    def test_llm_source(self, renderer, fake_llm):
        """A working generator wins."""
        gen = LLMNarrativeGenerator(fake_llm, SETTINGS)
        text, source = render_with_fallback(SessionState(), renderer=renderer, generator=gen)
        assert source == SOURCE_LLM
        assert text.startswith("## Top Styles")

    def test_no_generator(self, renderer, full_state):
        """Without a generator the deterministic summary is used verbatim."""
        text, source = render_with_fallback(full_state, renderer=renderer)
        assert source == SOURCE_DETERMINISTIC
        assert text == renderer.render(full_state)

    def test_failing_generator(self, renderer, full_state):
        """A failing client falls back to the same deterministic text."""
        gen = LLMNarrativeGenerator(FakeLLM(error=TimeoutError("slow")), SETTINGS)
        text, source = render_with_fallback(full_state, renderer=renderer, generator=gen)
        assert source == SOURCE_DETERMINISTIC
        assert text == renderer.render(full_state)

    def test_timeout(self, renderer, full_state):
        """A hung generator is abandoned after the timeout."""
        gen = BlockingGenerator()
        try:
            text, source = render_with_fallback(
                full_state, renderer=renderer, generator=gen, timeout_s=0.05
            )
        finally:
            gen.release.set()
        assert source == SOURCE_DETERMINISTIC
        assert text == renderer.render(full_state)


class TestPromptsAndText:
    """Prompt facade and reply cleanup."""

    def test_system_prompt_names_sections(self):
        """The system prompt asks for the fixed section list."""
        system = DefaultPromptFactory().build_summary_system()
        for title in ("Top Styles", "Planting Palette", "Zoning Ideas", "Next Steps"):
            assert title in system

    def test_strip_code_fences(self):
        """Only surrounding fences are removed."""
        assert strip_code_fences("```\nhello\n```") == "hello"
        assert strip_code_fences("plain `code` text") == "plain `code` text"
        assert strip_code_fences(None) == ""
