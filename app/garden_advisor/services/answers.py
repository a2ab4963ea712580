"""
Purpose: Check that an answer's runtime shape matches its question type.

Long-lived sessions can carry answers from an older catalog or a buggy
client. The engine and the summary call `sanitize_answers` and simply skip
bad entries; only the controller surfaces MalformedAnswerError, because
there the user can fix the input.
"""

from __future__ import annotations
import logging
import math
from typing import Any, Mapping

from ..errors import MalformedAnswerError
from ..models import AnswerValue, Question, QuestionType

logger = logging.getLogger(__name__)

_STEP_TOLERANCE = 1e-9


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_answer(question: Question, value: Any) -> AnswerValue:
    """Return the normalized answer or raise MalformedAnswerError."""
    qt = question.type

    if qt == QuestionType.SINGLE:
        if not isinstance(value, str):
            raise MalformedAnswerError(question.id, "expected a single option id")
        if value not in question.option_ids():
            raise MalformedAnswerError(question.id, f"unknown option {value!r}")
        return value

    if qt == QuestionType.MULTI:
        if not isinstance(value, (list, tuple, set, frozenset)):
            raise MalformedAnswerError(question.id, "expected a list of option ids")
        allowed = question.option_ids()
        for item in value:
            if not isinstance(item, str) or item not in allowed:
                raise MalformedAnswerError(question.id, f"unknown option {item!r}")
        # Set semantics: drop duplicates, keep catalog order.
        return [opt for opt in allowed if opt in value]

    if qt == QuestionType.SCALE:
        if not _is_number(value):
            raise MalformedAnswerError(question.id, "expected a number")
        if isinstance(value, float) and not math.isfinite(value):
            raise MalformedAnswerError(question.id, "expected a finite number")
        # Range first: ints of any size compare exactly, float() on them may overflow.
        if value < question.min or value > question.max:
            raise MalformedAnswerError(
                question.id,
                f"outside {question.min:g}..{question.max:g}",
            )
        step = question.step or 0
        if step > 0:
            offset = (value - question.min) / step
            if abs(offset - round(offset)) > _STEP_TOLERANCE:
                raise MalformedAnswerError(question.id, f"{value:g} is off the {step:g} step")
        return value

    if qt == QuestionType.TEXT:
        if not isinstance(value, str):
            raise MalformedAnswerError(question.id, "expected text")
        return value

    raise MalformedAnswerError(question.id, f"unsupported question type {qt!r}")


def sanitize_answers(answers: Mapping[str, Any], bank) -> dict[str, AnswerValue]:
    """
    Keep only answers that belong to a known question and have the right
    shape. Never raises.
    """
    clean: dict[str, AnswerValue] = {}
    for qid, value in (answers or {}).items():
        question = bank.get(qid)
        if question is None:
            logger.debug("Ignoring answer for unknown question %r", qid)
            continue
        try:
            clean[qid] = validate_answer(question, value)
        except MalformedAnswerError as e:
            logger.debug("Ignoring malformed answer: %s", e.message)
    return clean
