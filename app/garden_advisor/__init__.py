"""
garden_advisor

Adaptive garden-style questionnaire.

Callers usually need only:

- SelectionEngine.next(state): next question, or completion, with a reason.
- SummaryGenerator.render(state): deterministic garden concept Markdown.
- QuestionnaireController: session transitions plus optional LLM narrative.

Modules:

- models        : Question, SessionState, SelectionResult, LLMSettings
- rules         : serializable relevance rules for branching questions
- services      : question bank, answer validation, selection, summary,
                  plant table, OpenAI client, narrative fallback
- persistence   : in-memory and JSON session stores
- api           : {state, ask} request handling
- config / log  : environment settings and logging setup
"""

from .controller import QuestionnaireController
from .models import Question, QuestionOption, QuestionType, SelectionResult, SessionState
from .services.question_bank import DEFAULT_BANK, QuestionBank
from .services.selection import SelectionEngine
from .services.summary import SummaryGenerator

__all__ = [
    "DEFAULT_BANK",
    "Question",
    "QuestionBank",
    "QuestionOption",
    "QuestionType",
    "QuestionnaireController",
    "SelectionEngine",
    "SelectionResult",
    "SessionState",
    "SummaryGenerator",
]
