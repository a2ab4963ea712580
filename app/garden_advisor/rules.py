"""
Relevance rules: small, serializable predicates over the answer mapping.

A question carries an optional rule; the selection engine only offers the
question while the rule holds. Rules are plain frozen dataclasses so they can
be compared, hashed, logged and round-tripped through dicts:

    {"includes": ["uses", ["pets"]]}
    {"all": [{"answered": "sun"}, {"not": {"eq": ["sun", "shade"]}}]}

Semantics:
- A missing answer makes every leaf rule false.
- Empty "all" is true (vacuous truth), empty "any" is false.
- Unknown tags raise ValueError when parsing.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Mapping


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _has_value(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple, set, frozenset)):
        return len(value) > 0
    return True


class Rule:
    """Base class. Subclasses implement evaluate/describe/to_dict."""

    def evaluate(self, answers: Mapping[str, Any]) -> bool:
        raise NotImplementedError

    def describe(self) -> str:
        raise NotImplementedError

    def to_dict(self) -> dict:
        raise NotImplementedError

    def __call__(self, answers: Mapping[str, Any]) -> bool:
        return self.evaluate(answers)


@dataclass(frozen=True)
class Answered(Rule):
    question_id: str

    def evaluate(self, answers):
        return _has_value(answers.get(self.question_id))

    def describe(self) -> str:
        return f"{self.question_id} was answered"

    def to_dict(self) -> dict:
        return {"answered": self.question_id}


@dataclass(frozen=True)
class Equals(Rule):
    question_id: str
    value: Any

    def evaluate(self, answers):
        if self.question_id not in answers:
            return False
        return answers[self.question_id] == self.value

    def describe(self) -> str:
        return f"{self.question_id} is {self.value}"

    def to_dict(self) -> dict:
        return {"eq": [self.question_id, self.value]}


@dataclass(frozen=True)
class Includes(Rule):
    """True when the answer selects any of the given option ids."""

    question_id: str
    options: tuple[str, ...]

    def evaluate(self, answers):
        value = answers.get(self.question_id)
        if isinstance(value, str):
            return value in self.options
        if isinstance(value, (list, tuple, set, frozenset)):
            return any(v in self.options for v in value)
        return False

    def describe(self) -> str:
        return f"{self.question_id} includes {' or '.join(self.options)}"

    def to_dict(self) -> dict:
        return {"includes": [self.question_id, list(self.options)]}


@dataclass(frozen=True)
class AtLeast(Rule):
    question_id: str
    threshold: float

    def evaluate(self, answers):
        value = answers.get(self.question_id)
        return _is_number(value) and value >= self.threshold

    def describe(self) -> str:
        return f"{self.question_id} is at least {self.threshold:g}"

    def to_dict(self) -> dict:
        return {"gte": [self.question_id, self.threshold]}


@dataclass(frozen=True)
class AtMost(Rule):
    question_id: str
    threshold: float

    def evaluate(self, answers):
        value = answers.get(self.question_id)
        return _is_number(value) and value <= self.threshold

    def describe(self) -> str:
        return f"{self.question_id} is at most {self.threshold:g}"

    def to_dict(self) -> dict:
        return {"lte": [self.question_id, self.threshold]}


@dataclass(frozen=True)
class AllOf(Rule):
    rules: tuple[Rule, ...]

    def evaluate(self, answers):
        return all(r.evaluate(answers) for r in self.rules)

    def describe(self) -> str:
        return " and ".join(r.describe() for r in self.rules) or "always"

    def to_dict(self) -> dict:
        return {"all": [r.to_dict() for r in self.rules]}


@dataclass(frozen=True)
class AnyOf(Rule):
    rules: tuple[Rule, ...]

    def evaluate(self, answers):
        return any(r.evaluate(answers) for r in self.rules)

    def describe(self) -> str:
        return " or ".join(r.describe() for r in self.rules) or "never"

    def to_dict(self) -> dict:
        return {"any": [r.to_dict() for r in self.rules]}


@dataclass(frozen=True)
class Not(Rule):
    rule: Rule

    def evaluate(self, answers):
        return not self.rule.evaluate(answers)

    def describe(self) -> str:
        return f"not ({self.rule.describe()})"

    def to_dict(self) -> dict:
        return {"not": self.rule.to_dict()}


def _pair(tag: str, args: Any) -> tuple[str, Any]:
    if not isinstance(args, (list, tuple)) or len(args) != 2:
        raise ValueError(f"Rule {tag!r} expects [question_id, value]")
    qid, value = args
    if not isinstance(qid, str):
        raise ValueError(f"Rule {tag!r} expects a question id string")
    return qid, value


def rule_from_dict(data: Mapping[str, Any]) -> Rule:
    """Parse the dict form produced by Rule.to_dict()."""
    if not isinstance(data, Mapping) or len(data) != 1:
        raise ValueError(f"Rule must be a single-key object, got {data!r}")

    (tag, args), = data.items()

    if tag == "answered":
        if not isinstance(args, str):
            raise ValueError("Rule 'answered' expects a question id string")
        return Answered(args)
    if tag == "eq":
        return Equals(*_pair(tag, args))
    if tag == "includes":
        qid, options = _pair(tag, args)
        if isinstance(options, str):
            options = [options]
        return Includes(qid, tuple(options))
    if tag == "gte":
        qid, n = _pair(tag, args)
        return AtLeast(qid, float(n))
    if tag == "lte":
        qid, n = _pair(tag, args)
        return AtMost(qid, float(n))
    if tag in ("all", "any"):
        if not isinstance(args, (list, tuple)):
            raise ValueError(f"Rule {tag!r} expects a list of rules")
        children = tuple(rule_from_dict(r) for r in args)
        return AllOf(children) if tag == "all" else AnyOf(children)
    if tag == "not":
        return Not(rule_from_dict(args))

    raise ValueError(f"Unknown rule operator: {tag!r}")
