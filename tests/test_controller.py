"""Tests for garden_advisor.controller."""

import pytest

from conftest import FakeLLM
from garden_advisor.config import Settings
from garden_advisor.controller import QuestionnaireController
from garden_advisor.errors import MalformedAnswerError, QuestionNotFoundError
from garden_advisor.models import LLMSettings
from garden_advisor.persistence.session_store import InMemorySessionStore
from garden_advisor.services.narrative import LLMNarrativeGenerator


@pytest.fixture
def controller():
    return QuestionnaireController()


class TestFlow:
    """Asking, answering and moving on."""

    def test_first_question(self, controller):
        """A new controller starts at the style question."""
        assert controller.next_question().question.id == "style"
        assert controller.state.asked == []

    def test_advance_marks_asked(self, controller):
        """advance() records the question and returns the next one."""
        controller.record_answer("style", ["modern"])
        result = controller.advance("style")
        assert controller.state.asked == ["style"]
        assert result.question.id == "feelings"

    def test_mark_asked_is_idempotent(self, controller):
        """Marking twice keeps a single entry."""
        controller.mark_asked("sun")
        controller.mark_asked("sun")
        assert controller.state.asked == ["sun"]

    def test_unknown_question(self, controller):
        """Unknown ids raise QuestionNotFoundError."""
        with pytest.raises(QuestionNotFoundError):
            controller.mark_asked("moat")
        with pytest.raises(QuestionNotFoundError):
            controller.record_answer("moat", "yes")

    def test_malformed_answer(self, controller):
        """Bad answers are rejected and not stored."""
        with pytest.raises(MalformedAnswerError):
            controller.record_answer("sun", "moonlight")
        assert "sun" not in controller.state.answers

    def test_clear_answer(self, controller):
        """A cleared answer no longer steers selection."""
        controller.record_answer("uses", ["pets"])
        controller.clear_answer("uses")
        controller.clear_answer("uses")
        assert controller.answer_for("uses") is None

    def test_completion_adopts_state(self, controller):
        """When the engine completes, the controller holds the completed state."""
        for q in controller.bank:
            controller.mark_asked(q.id)
        result = controller.next_question()
        assert result.is_complete
        assert controller.state.completed
        assert controller.progress() == 1.0


class TestBack:
    """Stepping back keeps answers."""

    def test_back_returns_previous(self, controller):
        """The last asked question is reopened with its answer intact."""
        controller.record_answer("style", ["cottage"])
        controller.advance("style")
        previous = controller.back()
        assert previous.id == "style"
        assert controller.state.asked == []
        assert controller.answer_for("style") == ["cottage"]
        assert controller.next_question().question.id == "style"

    def test_back_reopens_completed_session(self, controller):
        """Going back after completion un-completes the session."""
        controller.finish()
        controller.mark_asked("style")
        controller.back()
        assert controller.state.completed is False

    def test_back_on_empty(self, controller):
        """Nothing to go back to."""
        assert controller.back() is None


class TestFinish:
    """Concept rendering and counters."""

    def test_deterministic_finish(self, controller):
        """Without a narrator the deterministic concept is returned."""
        markdown = controller.finish()
        assert markdown.startswith("# Garden Concept")
        assert controller.last_summary_source == "deterministic"
        assert controller.state.completed
        assert controller.tokens_in == 0

    def test_llm_finish_counts_tokens(self):
        """A narrator's usage is added to the counters."""
        narrator = LLMNarrativeGenerator(FakeLLM(), LLMSettings(model="fake-model"))
        controller = QuestionnaireController(narrator=narrator)
        assert controller.finish().startswith("## Top Styles")
        assert (controller.tokens_in, controller.tokens_out) == (11, 22)
        assert controller.model_used == "fake-model"

    def test_use_llm_false_skips_narrator(self):
        """finish(use_llm=False) never calls the client."""
        llm = FakeLLM()
        narrator = LLMNarrativeGenerator(llm, LLMSettings(model="fake-model"))
        controller = QuestionnaireController(narrator=narrator)
        controller.finish(use_llm=False)
        assert llm.calls == []
        assert controller.last_summary_source == "deterministic"

    def test_failed_narrator_falls_back(self):
        """Client errors still produce a concept."""
        narrator = LLMNarrativeGenerator(
            FakeLLM(error=RuntimeError("down")), LLMSettings(model="fake-model")
        )
        controller = QuestionnaireController(narrator=narrator)
        assert controller.finish().startswith("# Garden Concept")
        assert controller.tokens_in == 0


class TestPersistence:
    """Session stores and reset."""

    def test_resume_from_store(self):
        """A second controller on the same store resumes the session."""
        store = InMemorySessionStore()
        first = QuestionnaireController(store=store)
        first.record_answer("style", ["japanese"])
        first.advance("style")

        second = QuestionnaireController(store=store)
        assert second.state.asked == ["style"]
        assert second.answer_for("style") == ["japanese"]
        assert second.next_question().question.id == "feelings"

    def test_reset_clears_store(self):
        """reset() wipes state, counters and the store."""
        store = InMemorySessionStore()
        controller = QuestionnaireController(store=store)
        controller.record_answer("sun", "full")
        controller.reset()
        assert controller.state.answers == {}
        assert store.load() is None


class TestFromSettings:
    """Wiring from configuration."""

    def test_no_key_no_narrator(self):
        """Without a key the narrative is off."""
        controller = QuestionnaireController.from_settings(Settings(max_questions=4))
        assert controller.narrator is None
        assert controller.engine.max_questions == 4

    def test_disabled_switch(self):
        """The switch wins over a present key."""
        settings = Settings(openai_api_key="sk-test", llm_summary_enabled=False)
        assert QuestionnaireController.from_settings(settings).narrator is None
