"""Read-only catalog of elements, compounds and balanced reactions."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple

from chemlab.models import BalancedReaction, Compound, Element

logger = logging.getLogger(__name__)


class CatalogError(ValueError):
    """Raised when a catalog is built from inconsistent entries."""


class ReactionCatalog:
    """Static lookup table built once and never mutated.

    Reactant symbols must resolve to a registered element symbol or compound
    formula. Product formulas without a compound definition are accepted; the
    workspace skips producing them.
    """

    def __init__(
        self,
        elements: Iterable[Element],
        compounds: Iterable[Compound],
        reactions: Iterable[BalancedReaction],
    ):
        element_map = {}
        for element in elements:
            if element.symbol in element_map:
                raise CatalogError(f"Duplicate element symbol: {element.symbol}")
            element_map[element.symbol] = element

        compound_map = {}
        for compound in compounds:
            if compound.formula in compound_map:
                raise CatalogError(f"Duplicate compound formula: {compound.formula}")
            compound_map[compound.formula] = compound

        reaction_list = tuple(reactions)
        for reaction in reaction_list:
            for symbol in reaction.reactants:
                if symbol not in element_map and symbol not in compound_map:
                    raise CatalogError(
                        f"Reaction {reaction.equation!r} uses unknown reactant {symbol!r}"
                    )
            for formula in reaction.products:
                if formula not in compound_map:
                    logger.warning(
                        "Reaction %r produces %r, which has no compound definition",
                        reaction.equation,
                        formula,
                    )

        self._elements: Mapping[str, Element] = MappingProxyType(element_map)
        self._compounds: Mapping[str, Compound] = MappingProxyType(compound_map)
        self._reactions: Tuple[BalancedReaction, ...] = reaction_list

    @property
    def elements(self) -> Mapping[str, Element]:
        return self._elements

    @property
    def compounds(self) -> Mapping[str, Compound]:
        return self._compounds

    def element_by_symbol(self, symbol: str) -> Optional[Element]:
        return self._elements.get(symbol)

    def compound_by_formula(self, formula: str) -> Optional[Compound]:
        return self._compounds.get(formula)

    def all_reactions(self) -> Tuple[BalancedReaction, ...]:
        """Reactions in registration order."""
        return self._reactions

    def reactions_with_reactant(self, symbol: str) -> Tuple[BalancedReaction, ...]:
        return tuple(r for r in self._reactions if symbol in r.reactants)

    def __len__(self) -> int:
        return len(self._reactions)


STOCK_ELEMENTS = (
    Element(symbol="H", name="Hydrogen"),
    Element(symbol="O", name="Oxygen"),
    Element(symbol="Na", name="Sodium"),
    Element(symbol="Cl", name="Chlorine"),
)

STOCK_COMPOUNDS = (
    Compound(
        formula="H₂",
        iupac_name="Dihydrogen",
        common_name="Hydrogen Gas",
        reaction_equation="2H → H₂",
        common_uses="Used in fuel cells and rocket propulsion.",
        fun_fact="Hydrogen is the most abundant element in the universe.",
    ),
    Compound(
        formula="O₂",
        iupac_name="Dioxygen",
        common_name="Oxygen Gas",
        reaction_equation="2O → O₂",
        common_uses="Essential for respiration, steel-making, etc.",
        fun_fact="Earth's atmosphere is about 21% oxygen.",
    ),
    Compound(
        formula="H₂O",
        iupac_name="Dihydrogen monoxide",
        common_name="Water",
        reaction_equation="2H + O → H₂O",
        common_uses="Universal solvent, essential for life.",
        fun_fact="About 60% of the human body is water.",
    ),
    Compound(
        formula="NaCl",
        iupac_name="Sodium chloride",
        common_name="Salt",
        reaction_equation="Na + Cl → NaCl",
        common_uses="Food seasoning, preservation.",
        fun_fact="Salt was once so valuable it was used as currency!",
    ),
    Compound(
        formula="OH",
        iupac_name="Hydroxyl",
        common_name="Hydroxyl Radical",
        reaction_equation="H + O → OH",
        common_uses="Extremely reactive intermediate.",
        fun_fact="Crucial for removing pollutants in the atmosphere.",
    ),
    Compound(
        formula="NaOH",
        iupac_name="Sodium Hydroxide",
        common_name="Caustic Soda (Lye)",
        reaction_equation="NaCl + OH → NaOH + Cl",
        common_uses="Paper production, soap making, etc.",
        fun_fact="NaOH is a strong base that can saponify fats.",
    ),
    Compound(
        formula="HCl",
        iupac_name="Hydrogen Chloride",
        common_name="Hydrochloric Acid (aqueous form)",
        reaction_equation="H + Cl → HCl",
        common_uses="Digestive acid in stomach, many industrial uses.",
        fun_fact="The stomach secretes HCl to help break down food.",
    ),
    Compound(
        formula="Cl",
        iupac_name="Chlorine",
        common_name="Chlorine Atom",
        common_uses="Used in disinfectants and various chemical processes.",
        fun_fact="Chlorine is a yellow-green gas at room temperature.",
    ),
)

# Order matters: equal-sized matches resolve to the earlier entry.
STOCK_REACTIONS = (
    BalancedReaction({"H": 2}, {"H₂": 1}, "2H → H₂"),
    BalancedReaction({"O": 2}, {"O₂": 1}, "2O → O₂"),
    BalancedReaction({"H": 2, "O": 1}, {"H₂O": 1}, "2H + O → H₂O"),
    BalancedReaction({"Na": 1, "Cl": 1}, {"NaCl": 1}, "Na + Cl → NaCl"),
    BalancedReaction({"H": 1, "O": 1}, {"OH": 1}, "H + O → OH"),
    BalancedReaction({"NaCl": 1, "OH": 1}, {"NaOH": 1, "Cl": 1}, "NaCl + OH → NaOH + Cl"),
    BalancedReaction({"NaCl": 1, "H₂O": 1}, {"NaOH": 1, "HCl": 1}, "NaCl + H₂O → NaOH + HCl"),
    BalancedReaction({"H₂": 2, "O₂": 1}, {"H₂O": 2}, "2H₂ + O₂ → 2H₂O"),
    BalancedReaction({"OH": 1, "H": 1}, {"H₂O": 1}, "OH + H → H₂O"),
    BalancedReaction({"H": 1, "Cl": 1}, {"HCl": 1}, "H + Cl → HCl"),
    BalancedReaction({"HCl": 1, "NaOH": 1}, {"NaCl": 1, "H₂O": 1}, "HCl + NaOH → NaCl + H₂O"),
    BalancedReaction({"Na": 2, "H₂O": 2}, {"NaOH": 2, "H₂": 1}, "2Na + 2H₂O → 2NaOH + H₂"),
)


def default_catalog() -> ReactionCatalog:
    """Build the stock catalog used by the playground."""
    return ReactionCatalog(STOCK_ELEMENTS, STOCK_COMPOUNDS, STOCK_REACTIONS)
