"""
Purpose: Deterministic garden-concept renderer.

render(state) -> Markdown with fixed sections in fixed order:
Top Styles, Desired Feelings, Intended Uses, Site & Care, Planting Palette,
Zoning Ideas, Next Steps.

This is the guaranteed fallback behind the optional LLM narrative, so it must
be pure and total: same answers in, same text out, every section present even
for an empty session.

Testing: Snapshot-like assertions on section order, placeholder text, and
palette size bounds.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Mapping, Optional

from ..models import AnswerValue, SessionState
from .answers import sanitize_answers
from .plants import FEELING_STYLE_AFFINITY, PLANTS, Plant
from .question_bank import DEFAULT_BANK, STYLE_OPTIONS, QuestionBank

PLACEHOLDER = "Not specified — consider revisiting this question"

SECTION_TITLES = (
    "Top Styles",
    "Desired Feelings",
    "Intended Uses",
    "Site & Care",
    "Planting Palette",
    "Zoning Ideas",
    "Next Steps",
)

MAX_STYLES = 3
PALETTE_MIN = 12
PALETTE_MAX = 20

EXPLICIT_STYLE_WEIGHT = 2
FEELING_STYLE_WEIGHT = 1

# Relaxation order when the palette is short: water, then sun, then style.
RELAX_ORDER = ("water", "sun", "style")

SUN_TEXT = {"full": "full sun", "partial": "part sun", "shade": "shade"}

MAINTENANCE_LEVELS = ("almost none", "light", "moderate", "regular", "hobby-level")

SIZE_WORDS = {"small": "compact", "medium": "medium-sized", "large": "generous"}

ZONE_IDEAS = {
    "dining": "Dining terrace: a {size} paved area near the house with room for a table and evening light.",
    "relax": "Quiet retreat: a {size} seating nook wrapped in soft planting, away from the main path.",
    "play": "Play zone: a {size} open area in view of the house, edged with tough, forgiving plants.",
    "grow_food": "Kitchen garden: {size} raised beds in the sunniest spot, close to a water source.",
    "pets": "Pet run: a {size} durable strip along the boundary, following the routes pets already use.",
    "entertaining": "Gathering space: a {size} lawn or deck that links the house to the garden.",
    "wildlife": "Wildlife corner: a {size} patch of native planting with a log pile and shallow water.",
}

DEFAULT_ZONE_IDEAS = (
    "Planting borders: layered beds along the boundaries to frame the space and soften fences.",
    "Connecting path: a simple path that links each area and invites a stroll.",
    "Focal point: a specimen tree, large pot or sculpture where the eye lands from the house.",
)

MIN_ZONES = 3
MAX_ZONES = 4


@dataclass(frozen=True)
class PaletteEntry:
    plant: Plant
    relaxed: tuple[str, ...] = ()


def _as_list(value: Optional[AnswerValue]) -> list[str]:
    if isinstance(value, list):
        return value
    return []


def _as_text(value: Optional[AnswerValue]) -> str:
    return value.strip() if isinstance(value, str) else ""


class SummaryGenerator:
    def __init__(self, bank: Optional[QuestionBank] = None):
        self.bank: QuestionBank = bank if bank is not None else DEFAULT_BANK

    # -------------------------------------------------
    # Public API
    # -------------------------------------------------
    def render(self, state: SessionState) -> str:
        answers = sanitize_answers(state.answers, self.bank)
        styles = self.rank_styles(answers)

        sections = {
            "Top Styles": self._styles_section(styles),
            "Desired Feelings": self._choices_section(answers, "feelings"),
            "Intended Uses": self._choices_section(answers, "uses"),
            "Site & Care": self._site_section(answers),
            "Planting Palette": self._palette_section(answers, styles),
            "Zoning Ideas": self._zoning_section(answers),
            "Next Steps": self._next_steps_section(answers),
        }

        lines = ["# Garden Concept", ""]
        for title in SECTION_TITLES:
            lines.append(f"## {title}")
            lines.extend(sections[title])
            lines.append("")
        return "\n".join(lines).rstrip() + "\n"

    def rank_styles(self, answers: Mapping[str, AnswerValue]) -> list[tuple[str, int]]:
        """
        Score styles: explicit picks weigh more than styles implied by
        feelings. Ties fall back to catalog order.
        """
        order = self._style_order()
        scores = {sid: 0 for sid in order}
        for sid in _as_list(answers.get("style")):
            if sid in scores:
                scores[sid] += EXPLICIT_STYLE_WEIGHT
        for feeling in _as_list(answers.get("feelings")):
            for sid in FEELING_STYLE_AFFINITY.get(feeling, ()):
                if sid in scores:
                    scores[sid] += FEELING_STYLE_WEIGHT

        ranked = sorted(
            (item for item in scores.items() if item[1] > 0),
            key=lambda item: (-item[1], order.index(item[0])),
        )
        return ranked[:MAX_STYLES]

    def build_palette(
        self,
        answers: Mapping[str, AnswerValue],
        styles: Optional[list[str]] = None,
    ) -> list[PaletteEntry]:
        """
        Filter the plant table by sun, water and style affinity. When fewer
        than PALETTE_MIN plants match, drop constraints in RELAX_ORDER until
        the floor is met or the table runs out. Pet safety is never relaxed.
        """
        if styles is None:
            styles = [sid for sid, _ in self.rank_styles(answers)]
        wanted = {
            "sun": answers.get("sun") if isinstance(answers.get("sun"), str) else None,
            "water": answers.get("water") if isinstance(answers.get("water"), str) else None,
            "style": frozenset(styles),
        }
        pets_only = answers.get("pet_safety") == "strict"
        pool = [p for p in PLANTS if p.pet_safe or not pets_only]

        chosen: list[PaletteEntry] = []
        seen: set[str] = set()
        for tier in range(len(RELAX_ORDER) + 1):
            dropped = RELAX_ORDER[:tier]
            matches = [
                p
                for p in pool
                if p.name not in seen and self._matches(p, wanted, dropped)
            ]
            matches.sort(
                key=lambda p: (-len(p.styles & wanted["style"]), PLANTS.index(p))
            )
            for p in matches:
                chosen.append(PaletteEntry(p, self._effective_relaxed(wanted, dropped)))
                seen.add(p.name)
            if len(chosen) >= PALETTE_MIN:
                break

        return chosen[:PALETTE_MAX]

    # -------------------------------------------------
    # Palette helpers
    # -------------------------------------------------
    @staticmethod
    def _matches(plant: Plant, wanted: dict, dropped: tuple[str, ...]) -> bool:
        if "sun" not in dropped and wanted["sun"] and wanted["sun"] not in plant.sun:
            return False
        if "water" not in dropped and wanted["water"] and wanted["water"] not in plant.water:
            return False
        if "style" not in dropped and wanted["style"] and not (plant.styles & wanted["style"]):
            return False
        return True

    @staticmethod
    def _effective_relaxed(wanted: dict, dropped: tuple[str, ...]) -> tuple[str, ...]:
        # Dropping a constraint the user never set is not a relaxation.
        return tuple(name for name in dropped if wanted[name])

    def _style_order(self) -> list[str]:
        q = self.bank.get("style")
        options = q.options if q is not None else STYLE_OPTIONS
        return [o.id for o in options]

    # -------------------------------------------------
    # Sections
    # -------------------------------------------------
    def _label(self, question_id: str, option_id: str) -> str:
        q = self.bank.get(question_id)
        if q is not None:
            return q.label_for(option_id)
        if question_id == "style":
            return next((o.label for o in STYLE_OPTIONS if o.id == option_id), option_id)
        return option_id

    def _styles_section(self, styles: list[tuple[str, int]]) -> list[str]:
        if not styles:
            return [f"- {PLACEHOLDER}"]
        out = []
        for rank, (sid, _score) in enumerate(styles, start=1):
            q = self.bank.get("style")
            opt = q.option(sid) if q is not None else None
            hint = f": {opt.hint}" if opt is not None and opt.hint else ""
            out.append(f"{rank}. **{self._label('style', sid)}**{hint}")
        return out

    def _choices_section(self, answers, question_id: str) -> list[str]:
        picked = _as_list(answers.get(question_id))
        if not picked:
            return [f"- {PLACEHOLDER}"]
        return [f"- {self._label(question_id, oid)}" for oid in picked]

    def _maintenance_text(self, value) -> str:
        q = self.bank.get("maintenance")
        lo = q.min if q is not None else 1
        hi = q.max if q is not None else 5
        frac = 0.5 if hi == lo else (value - lo) / (hi - lo)
        level = MAINTENANCE_LEVELS[int(round(frac * (len(MAINTENANCE_LEVELS) - 1)))]
        return f"{value:g} of {hi:g} ({level})"

    def _site_section(self, answers) -> list[str]:
        core = [
            ("Garden size", "size"),
            ("Sun", "sun"),
            ("Water", "water"),
        ]
        extras = [
            ("Upkeep budget", "upkeep_budget"),
            ("Pet safety", "pet_safety"),
            ("Play surface", "play_surface"),
        ]
        site_keys = [qid for _, qid in core + extras] + ["maintenance"]
        notes = _as_text(answers.get("notes"))
        if not notes and not any(qid in answers for qid in site_keys):
            return [f"- {PLACEHOLDER}"]

        out = []
        for label, qid in core:
            value = answers.get(qid)
            text = self._label(qid, value) if isinstance(value, str) else "Not specified"
            out.append(f"- {label}: {text}")

        maintenance = answers.get("maintenance")
        if maintenance is None:
            out.append("- Maintenance: Not specified")
        else:
            out.append(f"- Maintenance: {self._maintenance_text(maintenance)}")

        for label, qid in extras:
            value = answers.get(qid)
            if isinstance(value, str):
                out.append(f"- {label}: {self._label(qid, value)}")

        if notes:
            out.append(f"- Notes: {' '.join(notes.split())}")
        return out

    def _palette_section(self, answers, styles: list[tuple[str, int]]) -> list[str]:
        style_ids = [sid for sid, _ in styles]
        filters = []
        if isinstance(answers.get("sun"), str):
            filters.append(SUN_TEXT.get(answers["sun"], answers["sun"]))
        if isinstance(answers.get("water"), str):
            filters.append(f"{answers['water']} water")
        if style_ids:
            filters.append(
                " / ".join(self._label("style", sid) for sid in style_ids) + " style"
            )
        if answers.get("pet_safety") == "strict":
            filters.append("pet-safe only")

        if filters:
            lead = f"Filtered for {', '.join(filters)}."
        else:
            lead = f"Sun and water: {PLACEHOLDER}. General-purpose suggestions below."

        out = [lead, ""]
        for entry in self.build_palette(answers, style_ids):
            p = entry.plant
            sun = "/".join(SUN_TEXT[s] for s in ("full", "partial", "shade") if s in p.sun)
            water = "/".join(w for w in ("low", "medium", "high") if w in p.water)
            line = f"- {p.name} ({p.kind}): {sun}; {water} water"
            if entry.relaxed:
                line += f" _(broader match: relaxed {', '.join(entry.relaxed)})_"
            out.append(line)
        return out

    def _zoning_section(self, answers) -> list[str]:
        size = answers.get("size")
        size_word = SIZE_WORDS.get(size, "well-proportioned")

        ideas = [
            ZONE_IDEAS[use].format(size=size_word)
            for use in _as_list(answers.get("uses"))
            if use in ZONE_IDEAS
        ][:MAX_ZONES]
        for default in DEFAULT_ZONE_IDEAS:
            if len(ideas) >= MIN_ZONES:
                break
            ideas.append(default)

        out = []
        if not _as_list(answers.get("uses")):
            out.extend([f"Intended uses: {PLACEHOLDER}. General ideas below.", ""])
        out.extend(f"- {idea}" for idea in ideas)
        return out

    def _next_steps_section(self, answers) -> list[str]:
        steps = [
            "Measure the garden and sketch the zones on a simple plan.",
            "Test your soil (pH and drainage) before buying plants.",
            "Visit a local nursery to see the palette plants in person and confirm they suit your region.",
        ]

        uses = _as_list(answers.get("uses"))
        if "pets" in uses and answers.get("pet_safety") != "no":
            steps.append(
                "Double-check every plant against a pet toxicity list (e.g. ASPCA) before planting."
            )

        maintenance = answers.get("maintenance")
        q = self.bank.get("maintenance")
        low_care = False
        if maintenance is not None and q is not None and q.max != q.min:
            low_care = (maintenance - q.min) / (q.max - q.min) <= 0.25
        if low_care or answers.get("water") == "low":
            steps.append(
                "Plan drip irrigation and a thick mulch layer to keep watering and weeding down."
            )

        if answers.get("upkeep_budget") == "generous":
            steps.append(
                "Get quotes from a garden maintenance service for clipping and seasonal care."
            )

        steps.append(
            "Start with hard landscaping and trees, then fill in perennials and groundcover over the first season."
        )
        return [f"{i}. {step}" for i, step in enumerate(steps, start=1)]
