"""chemlab core package."""

from chemlab.catalog import CatalogError, ReactionCatalog, default_catalog
from chemlab.config import WorkspaceSettings
from chemlab.models import BalancedReaction, Compound, Element, PlacedItem
from chemlab.resolver import Match, find_match
from chemlab.workspace import Workspace

__all__ = [
    "BalancedReaction",
    "CatalogError",
    "Compound",
    "Element",
    "Match",
    "PlacedItem",
    "ReactionCatalog",
    "Workspace",
    "WorkspaceSettings",
    "default_catalog",
    "find_match",
]
