"""
Canonical data shapes, shared truth for typing/validation between layers.

Typical contents:
- Question / QuestionOption / QuestionType (catalog definitions).
- SessionState (answers, asked ids, completed flag) and its wire shape.
- SelectionResult (next question or completion, with a reason).
- LLMSettings (model, temperature, top_p, max_tokens).

Testing: Mostly types; the to_dict/from_dict pairs must round-trip exactly.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

from .rules import Rule

AnswerValue = Union[str, int, float, list[str]]


class QuestionType(str, Enum):
    MULTI = "multi"
    SINGLE = "single"
    SCALE = "scale"
    TEXT = "text"


@dataclass(frozen=True)
class QuestionOption:
    id: str
    label: str
    hint: Optional[str] = None

    def to_dict(self) -> dict:
        data = {"id": self.id, "label": self.label}
        if self.hint:
            data["hint"] = self.hint
        return data


@dataclass(frozen=True)
class Question:
    id: str
    title: str
    type: QuestionType
    description: Optional[str] = None
    options: tuple[QuestionOption, ...] = ()
    min: Optional[float] = None
    max: Optional[float] = None
    step: Optional[float] = None
    relevant_when: Optional[Rule] = None
    rationale: Optional[str] = None

    def __post_init__(self):
        if self.type in (QuestionType.MULTI, QuestionType.SINGLE) and not self.options:
            raise ValueError(f"Question {self.id!r} needs options")
        if self.type == QuestionType.SCALE:
            if self.min is None or self.max is None or self.min > self.max:
                raise ValueError(f"Question {self.id!r} needs a min <= max range")
        ids = [o.id for o in self.options]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Question {self.id!r} has duplicate option ids")

    def option_ids(self) -> list[str]:
        return [o.id for o in self.options]

    def option(self, option_id: str) -> Optional[QuestionOption]:
        return next((o for o in self.options if o.id == option_id), None)

    def label_for(self, option_id: str) -> str:
        """Option label, or the raw id when the option is unknown."""
        opt = self.option(option_id)
        return opt.label if opt else option_id

    def to_dict(self) -> dict:
        """Wire shape consumed by the UI: branching metadata stays server-side."""
        data: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "type": self.type.value,
        }
        if self.description:
            data["description"] = self.description
        if self.options:
            data["options"] = [o.to_dict() for o in self.options]
        if self.type == QuestionType.SCALE:
            data["min"] = self.min
            data["max"] = self.max
            data["step"] = self.step if self.step is not None else 1
        return data


@dataclass
class SessionState:
    answers: dict[str, AnswerValue] = field(default_factory=dict)
    asked: list[str] = field(default_factory=list)
    completed: bool = False

    def copy(self) -> "SessionState":
        return SessionState(
            answers={
                k: (list(v) if isinstance(v, (list, tuple, set, frozenset)) else v)
                for k, v in self.answers.items()
            },
            asked=list(self.asked),
            completed=self.completed,
        )

    def to_dict(self) -> dict:
        answers: dict[str, Any] = {}
        for key, value in self.answers.items():
            if isinstance(value, (set, frozenset)):
                answers[key] = sorted(value)
            elif isinstance(value, tuple):
                answers[key] = list(value)
            else:
                answers[key] = value
        return {
            "answers": answers,
            "asked": list(self.asked),
            "completed": bool(self.completed),
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "SessionState":
        """Build a state from its wire shape. Missing keys mean a fresh session."""
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError(f"Unsupported state type: {type(data)!r}")

        answers = data.get("answers") or {}
        if not isinstance(answers, dict):
            raise ValueError("state.answers must be an object")
        asked_raw = data.get("asked") or []
        if not isinstance(asked_raw, list):
            raise ValueError("state.asked must be a list")

        completed = data.get("completed")
        if completed is None:
            completed = False
        if not isinstance(completed, bool):
            raise ValueError("state.completed must be a boolean")

        asked: list[str] = []
        for qid in asked_raw:
            if isinstance(qid, str) and qid not in asked:
                asked.append(qid)

        return cls(
            answers={str(k): v for k, v in answers.items()},
            asked=asked,
            completed=completed,
        )


@dataclass(frozen=True)
class SelectionResult:
    question: Optional[Question]
    reason: str
    state: SessionState

    @property
    def is_complete(self) -> bool:
        return self.question is None

    def to_dict(self) -> dict:
        return {
            "nextQuestion": self.question.to_dict() if self.question else None,
            "state": self.state.to_dict(),
            "reason": self.reason,
        }


@dataclass
class LLMSettings:
    model: str
    temperature: float = 0.5
    top_p: float = 1.0
    max_tokens: int = 1200
    frequency_penalty: float = 0.0
    presence_penalty: float = 0.0
