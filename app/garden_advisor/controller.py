"""
Purpose: The single orchestration point for a questionnaire session. Owns the
SessionState and performs the caller-side transitions the engine deliberately
does not: marking questions asked, storing answers, going back, finishing.
Prevents UI from knowing how selection/summary/LLM services work.

Key responsibilities:
- Hold the session state (answers, asked ids, completed flag).
- Ask the SelectionEngine for the next question.
- Validate and store answers.
- Build the final concept: LLM narrative when available, deterministic
  summary otherwise.
- Track token usage of the narrative call.
- reset() clears internal state and counters.

Testing: Pure unit tests with fakes: fake NarrativeGenerator / LLMClient.
Verify state transitions and fallback.
"""

from __future__ import annotations
import logging
from typing import Any, Optional

from .config import Settings
from .interfaces import NarrativeGenerator, SessionStore
from .models import LLMSettings, Question, SelectionResult, SessionState
from .services.answers import validate_answer
from .services.llm_openai import OpenAILLMClient
from .services.narrative import SOURCE_LLM, LLMNarrativeGenerator, render_with_fallback
from .services.question_bank import DEFAULT_BANK, QuestionBank
from .services.selection import SelectionEngine
from .services.summary import SummaryGenerator

logger = logging.getLogger(__name__)


class QuestionnaireController:
    def __init__(
        self,
        *,
        bank: Optional[QuestionBank] = None,
        engine: Optional[SelectionEngine] = None,
        renderer: Optional[SummaryGenerator] = None,
        narrator: Optional[NarrativeGenerator] = None,
        store: Optional[SessionStore] = None,
        summary_timeout_s: float = 20.0,
    ):
        self.bank: QuestionBank = bank if bank is not None else DEFAULT_BANK
        self.engine: SelectionEngine = engine or SelectionEngine(self.bank)
        self.renderer: SummaryGenerator = renderer or SummaryGenerator(self.bank)
        self.narrator: Optional[NarrativeGenerator] = narrator
        self.store: Optional[SessionStore] = store
        self.summary_timeout_s = summary_timeout_s

        self.state = (store.load() if store is not None else None) or SessionState()

        self.tokens_in: int = 0
        self.tokens_out: int = 0
        self.model_used: Optional[str] = None
        self.last_summary_source: Optional[str] = None

    @classmethod
    def from_settings(
        cls, settings: Settings, *, store: Optional[SessionStore] = None
    ) -> "QuestionnaireController":
        """Wire the default services from configuration."""
        narrator = None
        if settings.use_llm_summary:
            try:
                llm = OpenAILLMClient(
                    settings.openai_api_key, timeout_s=settings.summary_timeout_s
                )
            except RuntimeError as e:
                logger.warning("LLM narrative disabled: %s", e)
            else:
                narrator = LLMNarrativeGenerator(
                    llm,
                    LLMSettings(model=settings.model, temperature=settings.temperature),
                )
        return cls(
            bank=DEFAULT_BANK,
            engine=SelectionEngine(DEFAULT_BANK, max_questions=settings.max_questions),
            narrator=narrator,
            store=store,
            summary_timeout_s=settings.summary_timeout_s,
        )

    # -------------------------------------------------
    # Selection
    # -------------------------------------------------
    def next_question(self) -> SelectionResult:
        """Ask the engine; adopt the completed state when the session ends."""
        result = self.engine.next(self.state)
        if result.is_complete and result.state is not self.state:
            self.state = result.state
            self._persist()
        return result

    def mark_asked(self, question_id: str) -> None:
        """Record that a question was shown. Idempotent."""
        self.bank.by_id(question_id)
        if question_id not in self.state.asked:
            self.state.asked.append(question_id)
            self._persist()

    def advance(self, question_id: str) -> SelectionResult:
        """The user pressed Next on `question_id`."""
        self.mark_asked(question_id)
        return self.next_question()

    def back(self) -> Optional[Question]:
        """
        Step back to the last asked question so its answer can be revised.
        The answer is kept; only the 'asked' mark is removed.
        """
        if not self.state.asked:
            return None
        previous = self.state.asked.pop()
        self.state.completed = False
        self._persist()
        return self.bank.get(previous)

    # -------------------------------------------------
    # Answers
    # -------------------------------------------------
    def record_answer(self, question_id: str, value: Any) -> None:
        """Validate and store an answer. Raises MalformedAnswerError."""
        question = self.bank.by_id(question_id)
        self.state.answers[question_id] = validate_answer(question, value)
        self._persist()

    def clear_answer(self, question_id: str) -> None:
        if self.state.answers.pop(question_id, None) is not None:
            self._persist()

    def answer_for(self, question_id: str) -> Any:
        return self.state.answers.get(question_id)

    # -------------------------------------------------
    # Lifecycle
    # -------------------------------------------------
    def finish(self, *, use_llm: bool = True) -> str:
        """Complete the session and return the garden concept Markdown."""
        generator = self.narrator if use_llm else None
        markdown, source = render_with_fallback(
            self.state,
            renderer=self.renderer,
            generator=generator,
            timeout_s=self.summary_timeout_s,
        )
        self.last_summary_source = source

        meta = getattr(generator, "last_meta", None) or {}
        if source == SOURCE_LLM and meta:
            self.tokens_in += int(meta.get("tokens_in", 0))
            self.tokens_out += int(meta.get("tokens_out", 0))
            self.model_used = meta.get("model")

        self.state.completed = True
        self._persist()
        logger.info("Garden concept rendered (%s)", source)
        return markdown

    def reset(self) -> None:
        """Clear answers, asked ids and token counters."""
        self.state = SessionState()
        self.tokens_in = self.tokens_out = 0
        self.model_used = None
        self.last_summary_source = None
        if self.store is not None:
            self.store.clear()

    def progress(self) -> float:
        """Share of the question ceiling used so far, 0..1."""
        ceiling = max(1, min(self.engine.max_questions, len(self.bank)))
        return min(1.0, len(self.state.asked) / ceiling)

    def _persist(self) -> None:
        if self.store is not None:
            self.store.save(self.state)
