"""
Purpose: Decide the next question to present, or that the session is done.

next(state) -> SelectionResult

Policy:
- Candidates are catalog questions not yet asked whose relevance rule holds
  against the (sanitized) answers.
- The candidate with the lowest catalog index wins, so the flow is
  deterministic and front-loaded with broad questions.
- A configurable ceiling on asked questions forces completion.

The engine is read-only with respect to the caller's state: marking a question
"asked" happens when the caller actually shows it. Completion returns a copy
of the state with completed=True.

Testing: Pure unit tests; no fakes needed.
"""

from __future__ import annotations
import logging
from typing import Optional

from ..models import Question, SelectionResult, SessionState
from .answers import sanitize_answers
from .question_bank import DEFAULT_BANK, QuestionBank

logger = logging.getLogger(__name__)

DEFAULT_MAX_QUESTIONS = 10

REASON_ALL_ANSWERED = "all relevant questions answered"
REASON_ALREADY_COMPLETED = "session already completed"


class SelectionEngine:
    def __init__(
        self,
        bank: Optional[QuestionBank] = None,
        *,
        max_questions: int = DEFAULT_MAX_QUESTIONS,
    ):
        if int(max_questions) < 1:
            raise ValueError("max_questions must be at least 1")
        self.bank: QuestionBank = bank if bank is not None else DEFAULT_BANK
        self.max_questions: int = int(max_questions)

    def candidates(self, state: SessionState) -> list[Question]:
        """Questions still eligible, in catalog order."""
        answers = sanitize_answers(state.answers, self.bank)
        asked = set(state.asked)
        out = []
        for q in self.bank.all_questions():
            if q.id in asked:
                continue
            if q.relevant_when is not None and not q.relevant_when.evaluate(answers):
                continue
            out.append(q)
        return out

    def next(self, state: SessionState) -> SelectionResult:
        if state.completed:
            return SelectionResult(None, REASON_ALREADY_COMPLETED, state)

        if len(state.asked) >= self.max_questions:
            logger.debug("Forced completion after %d questions", len(state.asked))
            return self._complete(
                state, f"question limit reached ({self.max_questions})"
            )

        candidates = self.candidates(state)
        if not candidates:
            logger.debug("No candidates left; completing session")
            return self._complete(state, REASON_ALL_ANSWERED)

        chosen = candidates[0]
        reason = self._explain(chosen, state)
        logger.debug(
            "Next question %r (%d candidates): %s", chosen.id, len(candidates), reason
        )
        return SelectionResult(chosen, reason, state)

    def _complete(self, state: SessionState, reason: str) -> SelectionResult:
        done = state.copy()
        done.completed = True
        return SelectionResult(None, reason, done)

    def _explain(self, question: Question, state: SessionState) -> str:
        """Short advisory text; never parsed by callers."""
        if not state.asked:
            detail = question.rationale or question.title
            return f"Opening question: {detail}"
        if question.relevant_when is not None:
            return f"Follow-up because {question.relevant_when.describe()}"
        if question.rationale:
            return question.rationale[0].upper() + question.rationale[1:]
        return f"Next up: {question.title}"
