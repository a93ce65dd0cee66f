"""Matching of cluster stoichiometry against balanced reactions."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Mapping, Optional, Sequence

from chemlab.models import BalancedReaction


@dataclass(frozen=True)
class Match:
    """A reaction that fits a multiset, and how many times it fits."""

    reaction: BalancedReaction
    factor: int

    def consumed(self) -> Dict[str, int]:
        return {s: n * self.factor for s, n in self.reaction.reactants.items()}

    def produced(self) -> Dict[str, int]:
        return {s: n * self.factor for s, n in self.reaction.products.items()}


def stoichiometry(symbols: Iterable[str]) -> Dict[str, int]:
    """Count symbols into a multiset."""
    return dict(Counter(symbols))


def reaction_factor(reaction: BalancedReaction, stoich: Mapping[str, int]) -> int:
    """Number of times ``reaction`` can fire on ``stoich`` (0 if it cannot)."""
    factor = None
    for symbol, required in reaction.reactants.items():
        available = stoich.get(symbol, 0)
        if available <= 0:
            return 0
        fits = available // required
        factor = fits if factor is None else min(factor, fits)
    return factor or 0


def find_match(
    stoich: Mapping[str, int], reactions: Sequence[BalancedReaction]
) -> Optional[Match]:
    """Pick the best applicable reaction for ``stoich``.

    Among reactions whose every reactant is available with factor >= 1, the
    one consuming the most units per firing wins; ties go to the reaction
    registered first. Returns ``None`` when nothing applies.
    """
    best: Optional[Match] = None
    for reaction in reactions:
        factor = reaction_factor(reaction, stoich)
        if factor < 1:
            continue
        # Strict comparison keeps the earliest reaction on ties.
        if best is None or reaction.total_reactants > best.reaction.total_reactants:
            best = Match(reaction=reaction, factor=factor)
    return best


def consume(stoich: Mapping[str, int], match: Match) -> Dict[str, int]:
    """Return ``stoich`` minus the reactants used by ``match``.

    Symbols whose count drops to zero are removed.
    """
    remaining = dict(stoich)
    for symbol, used in match.consumed().items():
        left = remaining.get(symbol, 0) - used
        if left > 0:
            remaining[symbol] = left
        else:
            remaining.pop(symbol, None)
    return remaining


def resolve(
    stoich: Mapping[str, int], reactions: Sequence[BalancedReaction]
) -> Iterator[Match]:
    """Yield successive matches on a shrinking multiset until none applies.

    Products are not fed back into the multiset; they react in a later pass.
    """
    remaining = dict(stoich)
    while True:
        match = find_match(remaining, reactions)
        if match is None:
            return
        yield match
        remaining = consume(remaining, match)
