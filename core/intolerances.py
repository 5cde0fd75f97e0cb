"""Canonical intolerance tags and the single normalization step for them.

Every tag that enters the system (ingredient records, cultural rules, request
payloads) goes through `normalize_intolerance`, so downstream set operations
never see "eggs" on one side and "egg" on the other.
"""

import unicodedata
from enum import Enum
from typing import FrozenSet, Iterable, Optional

from core.exceptions import ValidationError


class IntoleranceTag(str, Enum):
    GLUTEN = "gluten"
    LACTOSE = "lactose"
    FRUCTOSE = "fructose"
    SORBITOL = "sorbitol"
    FODMAP = "fodmap"
    EGG = "egg"
    PEANUT = "peanut"
    TREE_NUTS = "tree_nuts"
    SEAFOOD = "seafood"
    FISH = "fish"
    SOY = "soy"
    SESAME = "sesame"
    HISTAMINE = "histamine"
    CAFFEINE = "caffeine"
    SULFITE = "sulfite"
    CORN = "corn"


CANONICAL_TAGS: FrozenSet[str] = frozenset(tag.value for tag in IntoleranceTag)

# Aliases seen in onboarding answers, imported datasets and Portuguese UI labels.
TAG_ALIASES = {
    "eggs": "egg",
    "ovo": "egg",
    "ovos": "egg",
    "nut": "tree_nuts",
    "nuts": "tree_nuts",
    "tree_nut": "tree_nuts",
    "oleaginosas": "tree_nuts",
    "castanhas": "tree_nuts",
    "peanuts": "peanut",
    "amendoim": "peanut",
    "milk": "lactose",
    "dairy": "lactose",
    "leite": "lactose",
    "lactose_intolerance": "lactose",
    "lactose_free": "lactose",
    "wheat": "gluten",
    "trigo": "gluten",
    "gluten_free": "gluten",
    "celiac": "gluten",
    "shellfish": "seafood",
    "frutos_do_mar": "seafood",
    "crustaceans": "seafood",
    "peixe": "fish",
    "soja": "soy",
    "soya": "soy",
    "gergelim": "sesame",
    "milho": "corn",
    "cafeina": "caffeine",
    "histamina": "histamine",
    "frutose": "fructose",
    "sulfites": "sulfite",
}

EMPTY_MARKERS = {"", "none", "nenhuma", "nenhum", "null"}


def _clean(raw: str) -> str:
    text = unicodedata.normalize("NFD", raw.strip().lower())
    text = "".join(ch for ch in text if unicodedata.category(ch) != "Mn")
    return text.replace("-", "_").replace(" ", "_")


def normalize_intolerance(raw: str) -> Optional[str]:
    """Map a raw tag onto the canonical set.

    Returns None for empty markers such as "none". Raises ValidationError for
    tags that are neither canonical nor a known alias.
    """
    if raw is None:
        return None
    cleaned = _clean(str(raw))
    if cleaned in EMPTY_MARKERS:
        return None
    if cleaned in CANONICAL_TAGS:
        return cleaned
    alias = TAG_ALIASES.get(cleaned)
    if alias:
        return alias
    raise ValidationError(f"Unknown intolerance tag '{raw}'", field="intolerance")


def normalize_intolerances(raw_tags: Optional[Iterable[str]]) -> FrozenSet[str]:
    """Normalize a collection of tags, dropping empty markers and duplicates."""
    if not raw_tags:
        return frozenset()
    if isinstance(raw_tags, str):
        raw_tags = [raw_tags]
    out = set()
    for raw in raw_tags:
        tag = normalize_intolerance(raw)
        if tag:
            out.add(tag)
    return frozenset(out)
