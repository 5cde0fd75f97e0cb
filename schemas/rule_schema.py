"""Schemas for cultural rule resolution responses."""

from pydantic import BaseModel
from typing import List, Optional

from core.domain import CulturalRule


class PairingOut(BaseModel):
    if_key: str
    then_key: str
    probability: float


class ResolvedRuleResponse(BaseModel):
    """The rule applied to a (country, meal type) request and how it was found."""

    requested_country: str
    rule_id: str
    country_code: str
    meal_type: str
    chain: List[str]
    required_components: List[str]
    optional_components: List[str]
    forbidden_components: List[str]
    typical_beverages: List[str]
    forbidden_beverages: List[str]
    max_prep_time: Optional[int] = None
    structure: str
    required_pairings: List[PairingOut]
    forbidden_pairs: List[List[str]]

    @classmethod
    def from_domain(cls, requested_country: str, rule: CulturalRule, chain: List[str]) -> "ResolvedRuleResponse":
        return cls(
            requested_country=requested_country,
            rule_id=rule.rule_id,
            country_code=rule.country_code,
            meal_type=rule.meal_type.value,
            chain=chain,
            required_components=[c.value for c in rule.required_components],
            optional_components=[c.value for c in rule.optional_components],
            forbidden_components=sorted(c.value for c in rule.forbidden_components),
            typical_beverages=list(rule.typical_beverages),
            forbidden_beverages=sorted(rule.forbidden_beverages),
            max_prep_time=rule.max_prep_time,
            structure=rule.structure,
            required_pairings=[PairingOut(**p.model_dump()) for p in rule.required_pairings],
            forbidden_pairs=[sorted(group) for group in rule.forbidden_pairs],
        )
