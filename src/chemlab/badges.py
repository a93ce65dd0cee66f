"""Badge rules evaluated after every compound production."""

from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, Callable, Iterable, List, Sequence

from chemlab.models import Compound

BadgePredicate = Callable[[Compound, Sequence[Compound], AbstractSet[str]], bool]


@dataclass(frozen=True)
class BadgeRule:
    name: str
    description: str
    predicate: BadgePredicate


def formula_count(formula: str, minimum: int) -> BadgePredicate:
    """Unlocks once ``formula`` appears at least ``minimum`` times in the history."""

    def predicate(compound, history, discovered):
        return sum(1 for c in history if c.formula == formula) >= minimum

    return predicate


def name_count(fragment: str, minimum: int) -> BadgePredicate:
    """Unlocks once ``minimum`` history entries have ``fragment`` in their common name."""
    fragment = fragment.lower()

    def predicate(compound, history, discovered):
        return sum(1 for c in history if fragment in c.common_name.lower()) >= minimum

    return predicate


def distinct_discoveries(minimum: int) -> BadgePredicate:
    def predicate(compound, history, discovered):
        return len(discovered) >= minimum

    return predicate


DEFAULT_BADGE_RULES = (
    BadgeRule("Salt Master", "Make salt three times.", name_count("salt", 3)),
    BadgeRule("Water Wizard", "Make water three times.", formula_count("H₂O", 3)),
    BadgeRule("Oxidation Expert", "Make oxygen gas twice.", formula_count("O₂", 2)),
    BadgeRule("Hydrogen Hero", "Make hydrogen gas twice.", formula_count("H₂", 2)),
    BadgeRule(
        "Compound Collector", "Discover five different compounds.", distinct_discoveries(5)
    ),
)


def evaluate_badges(
    compound: Compound,
    history: Sequence[Compound],
    discovered: AbstractSet[str],
    unlocked: Iterable[str],
    rules: Sequence[BadgeRule] = DEFAULT_BADGE_RULES,
) -> List[str]:
    """Return the names of badges newly unlocked, in rule order."""
    already = set(unlocked)
    return [
        rule.name
        for rule in rules
        if rule.name not in already and rule.predicate(compound, history, discovered)
    ]
