"""
Shared fixtures: question banks, engines, answer sets and a fake LLM client.
No test touches the network.
"""
import pytest

from garden_advisor.models import SessionState
from garden_advisor.services.question_bank import DEFAULT_BANK, QuestionBank
from garden_advisor.services.selection import SelectionEngine
from garden_advisor.services.summary import SummaryGenerator

SIX_IDS = ["style", "feelings", "uses", "sun", "water", "maintenance"]


class FakeLLM:
    """Records calls; returns a canned reply or raises."""

    def __init__(self, reply="## Top Styles\n- Cottage", meta=None, error=None):
        self.reply = reply
        self.meta = meta if meta is not None else {
            "model": "fake-model", "tokens_in": 11, "tokens_out": 22,
        }
        self.error = error
        self.calls = []

    def chat(self, messages, settings, system=None):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return self.reply, self.meta


@pytest.fixture
def bank():
    return DEFAULT_BANK


@pytest.fixture
def six_bank():
    """The six-question flow: style, feelings, uses, sun, water, maintenance."""
    return QuestionBank([DEFAULT_BANK.by_id(qid) for qid in SIX_IDS])


@pytest.fixture
def engine(bank):
    return SelectionEngine(bank)


@pytest.fixture
def renderer(bank):
    return SummaryGenerator(bank)


@pytest.fixture
def full_answers():
    return {
        "style": ["cottage", "naturalistic"],
        "feelings": ["wild", "romantic"],
        "uses": ["dining", "pets", "grow_food"],
        "size": "medium",
        "sun": "full",
        "water": "low",
        "maintenance": 2,
        "upkeep_budget": "minimal",
        "pet_safety": "strict",
        "notes": "Big oak tree in the north corner.",
    }


@pytest.fixture
def full_state(full_answers, bank):
    return SessionState(
        answers=dict(full_answers),
        asked=[q.id for q in bank.all_questions() if q.id != "play_surface"],
        completed=True,
    )


@pytest.fixture
def fake_llm():
    return FakeLLM()


def walk(engine, state, answer_for=None, limit=50):
    """
    Drive the engine like a caller: take the question, optionally answer it,
    append it to asked, ask again. Returns (asked ids, final result).
    """
    seen = []
    for _ in range(limit):
        result = engine.next(state)
        if result.question is None:
            return seen, result
        qid = result.question.id
        seen.append(qid)
        if answer_for and qid in answer_for:
            state.answers[qid] = answer_for[qid]
        state.asked.append(qid)
    raise AssertionError("engine did not terminate")


def section(markdown, title):
    """Lines of one '## title' section, without the heading and blank lines."""
    lines = markdown.splitlines()
    start = lines.index(f"## {title}") + 1
    out = []
    for line in lines[start:]:
        if line.startswith("## "):
            break
        if line.strip():
            out.append(line)
    return out
