"""Cultural rule resolution with bounded fallback chains.

A country without a rule for the requested meal type defers to its
`fallback_country`, hop by hop, and finally to the global default rule
(country "*"). Chains are bounded in length and must be acyclic.
"""

from typing import List, Mapping, Optional, Tuple

from core.config import GLOBAL_DEFAULT_COUNTRY, MAX_FALLBACK_DEPTH
from core.domain import CulturalRule, normalize_meal_type
from core.exceptions import NoRuleFoundError, RuleValidationError, ValidationError
from core.logger import get_logger

logger = get_logger("services.rule_resolver")


def normalize_country_code(raw: Optional[str]) -> str:
    code = (raw or "").strip().upper()
    if not code:
        raise ValidationError("country_code must not be empty", field="country_code")
    return code


def find_fallback_cycles(fallbacks: Mapping[str, str]) -> List[List[str]]:
    """Return every cycle in the country fallback graph.

    Each cycle is reported once, rotated to start at its smallest code and
    closed by repeating that code, e.g. ["AA", "BB", "AA"].
    """
    cycles = []
    seen = set()
    for start in sorted(fallbacks):
        path = []
        node = start
        while node in fallbacks and node not in path:
            path.append(node)
            node = fallbacks[node]
        if node in path:
            loop = path[path.index(node):]
            pivot = loop.index(min(loop))
            loop = loop[pivot:] + loop[:pivot]
            if tuple(loop) not in seen:
                seen.add(tuple(loop))
                cycles.append(loop + [loop[0]])
    return cycles


def validate_fallback_chains(fallbacks: Mapping[str, str]) -> None:
    """Authoring-time check that no fallback chain loops.

    Raises:
        RuleValidationError: listing every cyclic chain.
    """
    cycles = find_fallback_cycles(fallbacks)
    if cycles:
        described = "; ".join(" -> ".join(c) for c in cycles)
        logger.error("Cyclic fallback chains: %s", described)
        raise RuleValidationError(f"Cyclic fallback chains: {described}", cycles=cycles)


class RuleResolver:
    """Resolve the applicable cultural rule against a pool context."""

    def __init__(self, ctx, max_depth: int = MAX_FALLBACK_DEPTH):
        self.ctx = ctx
        self.max_depth = max_depth

    def resolve_with_chain(self, country_code: str, meal_type) -> Tuple[CulturalRule, List[str]]:
        """Resolve a rule and report the countries visited to find it.

        Args:
            country_code: Requested country (case-insensitive).
            meal_type: Canonical or aliased meal type.

        Returns:
            The rule and the chain of country codes visited, ending with the
            country whose rule was used.

        Raises:
            NoRuleFoundError: on a cycle, an over-long chain, or when no
                global default exists for the meal type.
        """
        country = normalize_country_code(country_code)
        mt = normalize_meal_type(meal_type)
        chain = [country]
        current = country
        while True:
            rule = self.ctx.rule(current, mt)
            if rule is not None:
                return rule, chain
            nxt = self.ctx.fallback_for(current)
            if not nxt:
                break
            if nxt in chain:
                logger.warning("Fallback cycle for %s/%s: %s", country, mt.value, chain + [nxt])
                raise NoRuleFoundError(country, mt.value, chain + [nxt], reason="cycle")
            if len(chain) > self.max_depth:
                logger.warning("Fallback depth exceeded for %s/%s: %s", country, mt.value, chain)
                raise NoRuleFoundError(country, mt.value, chain, reason="max_depth")
            chain.append(nxt)
            current = nxt

        if current != GLOBAL_DEFAULT_COUNTRY:
            rule = self.ctx.rule(GLOBAL_DEFAULT_COUNTRY, mt)
            if rule is not None:
                chain.append(GLOBAL_DEFAULT_COUNTRY)
                logger.debug("Using global default rule for %s/%s via %s", country, mt.value, chain)
                return rule, chain
        raise NoRuleFoundError(country, mt.value, chain, reason="exhausted")

    def resolve_rule(self, country_code: str, meal_type) -> CulturalRule:
        rule, _ = self.resolve_with_chain(country_code, meal_type)
        return rule
