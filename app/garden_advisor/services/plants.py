"""
Static plant-attribute table used to build the planting palette.

Each plant lists the sun and water conditions it tolerates, the garden
styles it suits, and whether it is considered safe around cats and dogs.
Table order is the final tie-break when ranking, so keep additions at the end.
"""

from __future__ import annotations
from dataclasses import dataclass

FULL, PARTIAL, SHADE = "full", "partial", "shade"
LOW, MEDIUM, HIGH = "low", "medium", "high"


@dataclass(frozen=True)
class Plant:
    name: str
    kind: str
    sun: frozenset[str]
    water: frozenset[str]
    styles: frozenset[str]
    pet_safe: bool


def _p(name, kind, sun, water, styles, pet_safe=True) -> Plant:
    return Plant(name, kind, frozenset(sun), frozenset(water), frozenset(styles), pet_safe)


PLANTS: tuple[Plant, ...] = (
    _p("Lavender", "shrub", [FULL], [LOW], ["mediterranean", "cottage", "formal"], False),
    _p("Rosemary", "shrub", [FULL], [LOW], ["mediterranean", "formal"]),
    _p("Creeping thyme", "groundcover", [FULL], [LOW], ["mediterranean", "cottage"]),
    _p("Russian sage", "perennial", [FULL], [LOW], ["naturalistic", "modern", "mediterranean"]),
    _p("Olive tree", "tree", [FULL], [LOW], ["mediterranean", "modern"]),
    _p("Blue fescue", "grass", [FULL, PARTIAL], [LOW], ["modern", "mediterranean"]),
    _p("Sedum 'Autumn Joy'", "perennial", [FULL, PARTIAL], [LOW], ["modern", "naturalistic", "cottage"]),
    _p("Yarrow", "perennial", [FULL], [LOW, MEDIUM], ["naturalistic", "cottage"], False),
    _p("Purple coneflower", "perennial", [FULL, PARTIAL], [LOW, MEDIUM], ["naturalistic", "cottage"]),
    _p("Black-eyed Susan", "perennial", [FULL, PARTIAL], [MEDIUM], ["naturalistic", "cottage"], False),
    _p("Little bluestem", "grass", [FULL], [LOW], ["naturalistic", "modern"]),
    _p("Catmint", "perennial", [FULL, PARTIAL], [LOW, MEDIUM], ["cottage", "naturalistic", "formal"]),
    _p("Agave", "succulent", [FULL], [LOW], ["modern", "mediterranean", "tropical"], False),
    _p("Shrub rose", "shrub", [FULL], [MEDIUM], ["cottage", "formal"]),
    _p("Boxwood", "shrub", [FULL, PARTIAL, SHADE], [MEDIUM], ["formal", "japanese", "modern"], False),
    _p("Yew", "tree", [FULL, PARTIAL, SHADE], [MEDIUM], ["formal"], False),
    _p("Hydrangea", "shrub", [PARTIAL, SHADE], [MEDIUM, HIGH], ["cottage", "woodland"], False),
    _p("Japanese maple", "tree", [PARTIAL], [MEDIUM], ["japanese", "woodland", "modern"]),
    _p("Hakone grass", "grass", [PARTIAL, SHADE], [MEDIUM, HIGH], ["japanese", "modern", "woodland"]),
    _p("Hosta", "perennial", [PARTIAL, SHADE], [MEDIUM, HIGH], ["woodland", "japanese"], False),
    _p("Lady fern", "fern", [PARTIAL, SHADE], [MEDIUM, HIGH], ["woodland", "japanese", "tropical"]),
    _p("Foxglove", "biennial", [PARTIAL, SHADE], [MEDIUM], ["cottage", "woodland"], False),
    _p("Hellebore", "perennial", [PARTIAL, SHADE], [MEDIUM], ["woodland", "cottage"], False),
    _p("Astilbe", "perennial", [PARTIAL, SHADE], [HIGH], ["woodland", "cottage"]),
    _p("Coral bells", "perennial", [PARTIAL, SHADE], [MEDIUM], ["woodland", "modern", "cottage"]),
    _p("Irish moss", "groundcover", [PARTIAL, SHADE], [MEDIUM, HIGH], ["japanese"]),
    _p("Hardy banana", "perennial", [FULL, PARTIAL], [HIGH], ["tropical"]),
    _p("Canna", "perennial", [FULL], [MEDIUM, HIGH], ["tropical", "cottage"]),
    _p("Elephant ears", "perennial", [PARTIAL], [HIGH], ["tropical"], False),
    _p("Clumping bamboo", "grass", [FULL, PARTIAL], [MEDIUM, HIGH], ["japanese", "tropical", "modern"]),
    _p("Strawberry", "edible", [FULL], [MEDIUM], ["cottage"]),
    _p("Blueberry", "edible", [FULL, PARTIAL], [MEDIUM, HIGH], ["cottage", "woodland", "naturalistic"]),
    _p("Sunflower", "annual", [FULL], [MEDIUM], ["cottage", "naturalistic"]),
    _p("Pot marigold", "annual", [FULL, PARTIAL], [MEDIUM], ["cottage"]),
    _p("Serviceberry", "tree", [FULL, PARTIAL], [MEDIUM], ["naturalistic", "woodland"]),
    _p("Switchgrass", "grass", [FULL], [LOW, MEDIUM], ["naturalistic", "modern"]),
    _p("Snapdragon", "annual", [FULL], [MEDIUM], ["cottage", "formal"]),
    _p("Camellia", "shrub", [PARTIAL, SHADE], [MEDIUM], ["japanese", "formal", "woodland"]),
    _p("Swamp milkweed", "perennial", [FULL], [HIGH], ["naturalistic"], False),
    _p("Bugleweed", "groundcover", [PARTIAL, SHADE], [MEDIUM], ["woodland"]),
    _p("Rockrose", "shrub", [FULL], [LOW], ["mediterranean"]),
    _p("Fatsia", "shrub", [PARTIAL, SHADE], [MEDIUM], ["tropical", "japanese", "modern"], False),
    _p("Bee balm", "perennial", [FULL, PARTIAL], [MEDIUM, HIGH], ["cottage", "naturalistic"]),
)

# Feelings nudge the style ranking towards styles that evoke them.
FEELING_STYLE_AFFINITY: dict[str, tuple[str, ...]] = {
    "calm": ("japanese", "woodland", "modern"),
    "vibrant": ("tropical", "cottage"),
    "romantic": ("cottage", "formal"),
    "wild": ("naturalistic", "woodland"),
    "private": ("woodland", "tropical"),
    "playful": ("cottage", "tropical"),
}
