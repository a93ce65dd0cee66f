"""Workspace settings and JSON configuration parsing."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from chemlab.catalog import ReactionCatalog, default_catalog
from chemlab.constants import BREAK_JITTER, CLUSTER_THRESHOLD, PRODUCT_SPREAD
from chemlab.models import BalancedReaction, Compound, Element, Position


@dataclass(frozen=True)
class WorkspaceSettings:
    """Tunable canvas behaviour.

    Attributes:
        cluster_threshold: Max distance (inclusive) at which two items react.
        break_jitter: Max per-axis offset for items restored from a compound.
        product_spread: Radius of the ring co-produced compounds sit on.
        seed: Seed for the jitter generator; ``None`` for fresh entropy.
    """

    cluster_threshold: float = CLUSTER_THRESHOLD
    break_jitter: float = BREAK_JITTER
    product_spread: float = PRODUCT_SPREAD
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.cluster_threshold <= 0:
            raise ValueError(
                f"cluster_threshold must be positive, got {self.cluster_threshold}"
            )
        if self.break_jitter < 0:
            raise ValueError(f"break_jitter must be non-negative, got {self.break_jitter}")
        if self.product_spread <= 0:
            raise ValueError(f"product_spread must be positive, got {self.product_spread}")


@dataclass(frozen=True)
class Placement:
    symbol: str
    position: Position


@dataclass(frozen=True)
class PlaygroundConfig:
    settings: WorkspaceSettings
    catalog: ReactionCatalog
    placements: Tuple[Placement, ...]


def parse_settings(data: Dict[str, Any]) -> WorkspaceSettings:
    seed = data.get("seed")
    return WorkspaceSettings(
        cluster_threshold=float(data.get("cluster_threshold", CLUSTER_THRESHOLD)),
        break_jitter=float(data.get("break_jitter", BREAK_JITTER)),
        product_spread=float(data.get("product_spread", PRODUCT_SPREAD)),
        seed=int(seed) if seed is not None else None,
    )


def parse_catalog(data: Dict[str, Any]) -> ReactionCatalog:
    """Build a catalog from ``{"elements": [...], "compounds": [...], "reactions": [...]}``."""
    elements = [
        Element(
            symbol=e["symbol"],
            name=e.get("name", e["symbol"]),
            discovered=bool(e.get("discovered", False)),
        )
        for e in data.get("elements", [])
    ]
    compounds = [
        Compound(
            formula=c["formula"],
            iupac_name=c.get("iupac_name", c["formula"]),
            common_name=c.get("common_name", c["formula"]),
            reaction_equation=c.get("reaction_equation"),
            common_uses=c.get("common_uses"),
            fun_fact=c.get("fun_fact"),
        )
        for c in data.get("compounds", [])
    ]
    reactions = []
    for r in data.get("reactions", []):
        reactants = {s: int(n) for s, n in r["reactants"].items()}
        products = {s: int(n) for s, n in r["products"].items()}
        equation = r.get("equation") or _format_equation(reactants, products)
        reactions.append(BalancedReaction(reactants, products, equation))
    return ReactionCatalog(elements, compounds, reactions)


def parse_placements(data: List[Dict[str, Any]]) -> Tuple[Placement, ...]:
    return tuple(
        Placement(symbol=p["symbol"], position=(float(p["x"]), float(p["y"])))
        for p in data
    )


def parse_config(data: Dict[str, Any]) -> PlaygroundConfig:
    catalog_data = data.get("catalog")
    return PlaygroundConfig(
        settings=parse_settings(data.get("settings", {})),
        catalog=parse_catalog(catalog_data) if catalog_data else default_catalog(),
        placements=parse_placements(data.get("placements", [])),
    )


def load_config(path: str | Path) -> PlaygroundConfig:
    with open(path, "r", encoding="utf-8") as f:
        return parse_config(json.load(f))


def _format_equation(reactants: Dict[str, int], products: Dict[str, int]) -> str:
    def side(terms: Dict[str, int]) -> str:
        return " + ".join(f"{n if n > 1 else ''}{s}" for s, n in terms.items())

    return f"{side(reactants)} → {side(products)}"
