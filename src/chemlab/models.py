"""Data structures for elements, compounds, reactions and placed items."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple, Union

Position = Tuple[float, float]


@dataclass(frozen=True)
class Element:
    symbol: str
    name: str
    # Catalog metadata only: marks elements registered as new finds. The engine
    # never reads it; discovery is tracked per compound formula by the workspace.
    discovered: bool = False


@dataclass(frozen=True)
class Compound:
    """A named reaction product.

    Attributes:
        formula: Formula used as the matching symbol, e.g. "H₂O".
        iupac_name: Systematic name.
        common_name: Everyday name, used by the badge rules.
        reaction_equation: Equation shown alongside the compound.
        common_uses: Short educational blurb.
        fun_fact: Short educational blurb.
    """

    formula: str
    iupac_name: str
    common_name: str
    reaction_equation: Optional[str] = None
    common_uses: Optional[str] = None
    fun_fact: Optional[str] = None

    @property
    def symbol(self) -> str:
        return self.formula


Definition = Union[Element, Compound]


@dataclass(frozen=True, eq=False)
class BalancedReaction:
    """A balanced reaction: reactant multiset -> product multiset.

    Counts must be positive integers and the reactant map must not be empty;
    violations raise ``ValueError`` so that a bad catalog fails at startup.
    """

    reactants: Mapping[str, int]
    products: Mapping[str, int]
    equation: str

    def __post_init__(self) -> None:
        if not self.reactants:
            raise ValueError(f"Reaction {self.equation!r} has no reactants")
        for label, side in (("reactant", self.reactants), ("product", self.products)):
            for symbol, count in side.items():
                if not isinstance(count, int) or isinstance(count, bool) or count < 1:
                    raise ValueError(
                        f"Reaction {self.equation!r}: {label} {symbol!r} "
                        f"needs a positive integer count, got {count!r}"
                    )
        object.__setattr__(self, "reactants", MappingProxyType(dict(self.reactants)))
        object.__setattr__(self, "products", MappingProxyType(dict(self.products)))

    @property
    def total_reactants(self) -> int:
        return sum(self.reactants.values())


@dataclass(eq=False)
class PlacedItem:
    """An occurrence of an element or compound on the canvas.

    Only ``position`` changes over the item's lifetime. ``constituents`` holds
    the consumed items a compound was made from, so it can be broken apart.
    """

    id: int
    definition: Definition
    position: Position
    constituents: Tuple["PlacedItem", ...] = field(default_factory=tuple)

    @property
    def symbol(self) -> str:
        return self.definition.symbol

    @property
    def is_compound(self) -> bool:
        return isinstance(self.definition, Compound)
