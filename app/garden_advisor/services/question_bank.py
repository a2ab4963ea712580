"""
Purpose: The fixed question catalog. Order matters: it is the default
linear fallback order, so broad style/feeling questions come before
site and care details.

Branching lives on the questions themselves (`relevant_when`), never in
the engine, so the catalog stays the single place to read the flow.

Testing: Lookups, duplicate ids, and that every rule only references
questions that exist earlier in the catalog.
"""

from __future__ import annotations
from typing import Iterable, Iterator, Optional

from ..errors import QuestionNotFoundError
from ..models import Question, QuestionOption, QuestionType
from ..rules import Includes

STYLE_OPTIONS = (
    QuestionOption("cottage", "Cottage", "Abundant, informal, flowering borders"),
    QuestionOption("modern", "Modern", "Clean lines, restrained palette"),
    QuestionOption("mediterranean", "Mediterranean", "Gravel, herbs, silver foliage"),
    QuestionOption("japanese", "Japanese", "Moss, stone, clipped forms"),
    QuestionOption("naturalistic", "Naturalistic", "Meadow and prairie planting"),
    QuestionOption("tropical", "Tropical", "Bold leaves, lush layers"),
    QuestionOption("formal", "Formal", "Symmetry, hedges, parterres"),
    QuestionOption("woodland", "Woodland", "Dappled shade, ferns, bulbs"),
)

# Styles whose character depends on regular clipping, feeding or tidying.
HIGH_UPKEEP_STYLES = ("formal", "cottage", "japanese", "tropical")

DEFAULT_QUESTIONS: tuple[Question, ...] = (
    Question(
        id="style",
        title="Which garden styles draw you in?",
        description="Pick as many as you like; we will narrow them down.",
        type=QuestionType.MULTI,
        options=STYLE_OPTIONS,
        rationale="starting broad with the overall look before any details",
    ),
    Question(
        id="feelings",
        title="How should the garden feel?",
        type=QuestionType.MULTI,
        options=(
            QuestionOption("calm", "Calm"),
            QuestionOption("vibrant", "Vibrant"),
            QuestionOption("romantic", "Romantic"),
            QuestionOption("wild", "Wild"),
            QuestionOption("private", "Private"),
            QuestionOption("playful", "Playful"),
        ),
        rationale="capturing the mood to refine the style themes",
    ),
    Question(
        id="uses",
        title="How will you use the space?",
        type=QuestionType.MULTI,
        options=(
            QuestionOption("dining", "Outdoor dining"),
            QuestionOption("relax", "Relaxing and reading"),
            QuestionOption("play", "Children's play"),
            QuestionOption("grow_food", "Growing food"),
            QuestionOption("pets", "Space for pets"),
            QuestionOption("entertaining", "Entertaining guests"),
            QuestionOption("wildlife", "Attracting wildlife"),
        ),
        rationale="exploring usage before diving into the plant palette",
    ),
    Question(
        id="size",
        title="Roughly how big is the garden?",
        type=QuestionType.SINGLE,
        options=(
            QuestionOption("small", "Small", "Balcony, courtyard or under 50 m²"),
            QuestionOption("medium", "Medium", "A typical back garden"),
            QuestionOption("large", "Large", "Over 500 m² or several areas"),
        ),
        rationale="sizing the space so zoning ideas fit",
    ),
    Question(
        id="sun",
        title="How much sun does the main area get?",
        type=QuestionType.SINGLE,
        options=(
            QuestionOption("full", "Full sun", "6+ hours of direct sun"),
            QuestionOption("partial", "Partial sun", "3-6 hours"),
            QuestionOption("shade", "Mostly shade", "Under 3 hours"),
        ),
        rationale="checking light levels to filter plants",
    ),
    Question(
        id="water",
        title="How much watering can the garden count on?",
        type=QuestionType.SINGLE,
        options=(
            QuestionOption("low", "Low", "Dry summers, little irrigation"),
            QuestionOption("medium", "Medium", "Occasional watering"),
            QuestionOption("high", "High", "Moist soil or regular irrigation"),
        ),
        rationale="checking water availability to filter plants",
    ),
    Question(
        id="maintenance",
        title="How much time do you want to spend maintaining it?",
        description="1 = almost none, 5 = gardening is my hobby",
        type=QuestionType.SCALE,
        min=1,
        max=5,
        step=1,
        rationale="matching the design to the care you can give",
    ),
    Question(
        id="upkeep_budget",
        title="What budget do you have for ongoing upkeep?",
        description="Some of the styles you chose need regular clipping or feeding.",
        type=QuestionType.SINGLE,
        options=(
            QuestionOption("minimal", "Minimal", "DIY only"),
            QuestionOption("moderate", "Moderate", "Occasional help"),
            QuestionOption("generous", "Generous", "Regular professional care"),
        ),
        relevant_when=Includes("style", HIGH_UPKEEP_STYLES),
    ),
    Question(
        id="pet_safety",
        title="Should every plant be safe for pets?",
        type=QuestionType.SINGLE,
        options=(
            QuestionOption("strict", "Yes, only pet-safe plants"),
            QuestionOption("prefer", "Prefer pet-safe, but flexible"),
            QuestionOption("no", "Not a concern"),
        ),
        relevant_when=Includes("uses", ("pets",)),
    ),
    Question(
        id="play_surface",
        title="What surface should the play area have?",
        type=QuestionType.SINGLE,
        options=(
            QuestionOption("lawn", "Hard-wearing lawn"),
            QuestionOption("bark", "Bark or wood chip"),
            QuestionOption("artificial", "Artificial turf"),
        ),
        relevant_when=Includes("uses", ("play",)),
    ),
    Question(
        id="notes",
        title="Anything else we should know?",
        description="Existing trees, slopes, views to hide, favourite plants...",
        type=QuestionType.TEXT,
        rationale="leaving room for anything the questions missed",
    ),
)


class QuestionBank:
    """Read-only, ordered question catalog."""

    def __init__(self, questions: Optional[Iterable[Question]] = None):
        items = tuple(DEFAULT_QUESTIONS if questions is None else questions)
        index: dict[str, int] = {}
        for i, q in enumerate(items):
            if q.id in index:
                raise ValueError(f"Duplicate question id: {q.id!r}")
            index[q.id] = i
        self._questions = items
        self._index = index

    def all_questions(self) -> tuple[Question, ...]:
        return self._questions

    def by_id(self, question_id: str) -> Question:
        try:
            return self._questions[self._index[question_id]]
        except KeyError:
            raise QuestionNotFoundError(question_id) from None

    def index_of(self, question_id: str) -> int:
        if question_id not in self._index:
            raise QuestionNotFoundError(question_id)
        return self._index[question_id]

    def get(self, question_id: str) -> Optional[Question]:
        idx = self._index.get(question_id)
        return None if idx is None else self._questions[idx]

    def __contains__(self, question_id: object) -> bool:
        return question_id in self._index

    def __iter__(self) -> Iterator[Question]:
        return iter(self._questions)

    def __len__(self) -> int:
        return len(self._questions)


DEFAULT_BANK = QuestionBank()
