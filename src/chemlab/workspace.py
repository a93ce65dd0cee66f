"""The workspace engine: placed items, reaction passes and session tallies.

A workspace owns every item on the canvas. Each mutation that can bring items
together (placing or moving an item) runs a reaction pass:

1. cluster all live items, elements and compounds alike;
2. for every cluster of two or more items, repeatedly match its symbol
   multiset against the catalog and fire the best reaction as many times as
   it fits, consuming specific member items;
3. remove consumed items, place the products at the cluster centroid;
4. record discoveries and history, evaluate badge rules.

Among members sharing a symbol, the earliest placed item is consumed first.
Events raised during a pass are queued and delivered once the pass is over.
"""

from __future__ import annotations

import itertools
import logging
import math
from collections import defaultdict, deque
from dataclasses import replace
from typing import (
    Deque,
    Dict,
    FrozenSet,
    Iterable,
    List,
    Optional,
    Sequence,
    Set,
    Tuple,
    Type,
    Union,
)

import numpy as np

from chemlab.badges import DEFAULT_BADGE_RULES, BadgeRule, evaluate_badges
from chemlab.catalog import ReactionCatalog
from chemlab.clustering import build_clusters, centroid
from chemlab.config import WorkspaceSettings
from chemlab.events import (
    BadgeUnlocked,
    CompoundBroken,
    CompoundDiscovered,
    Event,
    EventDispatcher,
    ItemRemoved,
    ItemsConsumed,
    ItemsProduced,
    ReactionFired,
    Subscriber,
)
from chemlab.models import Compound, Definition, Element, PlacedItem, Position
from chemlab.resolver import resolve, stoichiometry

logger = logging.getLogger(__name__)


class Workspace:
    def __init__(
        self,
        catalog: ReactionCatalog,
        settings: Optional[WorkspaceSettings] = None,
        rng: Optional[np.random.Generator] = None,
        badge_rules: Sequence[BadgeRule] = DEFAULT_BADGE_RULES,
    ):
        self.catalog = catalog
        self.settings = settings or WorkspaceSettings()
        self.badge_rules = tuple(badge_rules)
        self._rng = rng if rng is not None else np.random.default_rng(self.settings.seed)
        self._dispatcher = EventDispatcher()
        self._ids = itertools.count(1)

        self._items: Dict[int, PlacedItem] = {}  # insertion order is placement order
        self._discovered: Dict[str, Compound] = {}
        self._history: List[Compound] = []
        self._badges: List[str] = []
        self._recent_discovery: Optional[Compound] = None

        self._resolving = False
        self._pending: List[Event] = []

    # Read-only state

    @property
    def items(self) -> Tuple[PlacedItem, ...]:
        return tuple(self._items.values())

    @property
    def placed_elements(self) -> Tuple[PlacedItem, ...]:
        return tuple(item for item in self._items.values() if not item.is_compound)

    @property
    def placed_compounds(self) -> Tuple[PlacedItem, ...]:
        return tuple(item for item in self._items.values() if item.is_compound)

    @property
    def discovered(self) -> FrozenSet[str]:
        return frozenset(self._discovered)

    @property
    def history(self) -> Tuple[Compound, ...]:
        return tuple(self._history)

    @property
    def badges(self) -> Tuple[str, ...]:
        return tuple(self._badges)

    @property
    def most_recent_discovery(self) -> Optional[Compound]:
        return self._recent_discovery

    def get(self, item_id: int) -> PlacedItem:
        try:
            return self._items[item_id]
        except KeyError:
            raise KeyError(f"No placed item with id {item_id}") from None

    def __contains__(self, item_id: int) -> bool:
        return item_id in self._items

    def __len__(self) -> int:
        return len(self._items)

    # Subscriptions

    def subscribe(self, event_type: Type[Event], callback: Subscriber) -> None:
        self._dispatcher.subscribe(event_type, callback)

    def unsubscribe(self, event_type: Type[Event], callback: Subscriber) -> None:
        self._dispatcher.unsubscribe(event_type, callback)

    # Mutations

    def add_item(self, element: Union[Element, str], position: Position) -> PlacedItem:
        """Place a base element and run a reaction pass.

        The returned item may already have been consumed by the pass.
        """
        self._ensure_idle()
        item = self._new_item(self._element_for(element), position)
        self._items[item.id] = item
        logger.debug("Placed %s #%d at %s", item.symbol, item.id, item.position)
        self.resolve_all()
        return item

    def add_items(
        self, placements: Iterable[Tuple[Union[Element, str], Position]]
    ) -> List[PlacedItem]:
        """Place several elements, then run a single reaction pass.

        Nothing is placed if any element is invalid.
        """
        self._ensure_idle()
        definitions = [(self._element_for(element), position) for element, position in placements]
        items = []
        for element, position in definitions:
            item = self._new_item(element, position)
            self._items[item.id] = item
            items.append(item)
        logger.debug("Placed %d items", len(items))
        self.resolve_all()
        return items

    def move_item(self, item_id: int, position: Position) -> None:
        """Drag an item to ``position`` and run a reaction pass."""
        self._ensure_idle()
        item = self.get(item_id)
        item.position = (float(position[0]), float(position[1]))
        self.resolve_all()

    def remove_item(self, item_id: int) -> PlacedItem:
        """Take an item off the canvas without reacting (trash zone)."""
        self._ensure_idle()
        item = self.get(item_id)
        del self._items[item_id]
        self._pending.append(ItemRemoved(item))
        self._flush_events()
        return item

    def clear(self) -> None:
        """Remove every live item; discoveries, history and badges are kept."""
        self._ensure_idle()
        self._items.clear()

    def break_compound(self, item_id: int) -> List[PlacedItem]:
        """Split a compound back into the items it was made from.

        Constituents come back with their original ids at positions jittered
        around the compound. History and discoveries are left untouched and no
        reaction pass runs, so the parts do not immediately recombine. A
        compound with no recorded parts is left in place and nothing is returned.
        """
        self._ensure_idle()
        compound = self.get(item_id)
        if not compound.is_compound:
            raise ValueError(f"Item #{item_id} ({compound.symbol}) is not a compound")
        if not compound.constituents:
            logger.debug("%s #%d has no recorded parts, not breaking", compound.symbol, item_id)
            return []

        jitter = self.settings.break_jitter
        offsets = self._rng.uniform(-jitter, jitter, size=(len(compound.constituents), 2))
        x, y = compound.position

        del self._items[item_id]
        restored = []
        for part, (dx, dy) in zip(compound.constituents, offsets):
            item = replace(part, position=(float(x + dx), float(y + dy)))
            self._items[item.id] = item
            restored.append(item)

        logger.info(
            "Broke %s #%d into %s",
            compound.symbol,
            item_id,
            ", ".join(item.symbol for item in restored),
        )
        self._pending.append(CompoundBroken(compound, tuple(restored)))
        self._flush_events()
        return restored

    def acknowledge_discovery(self) -> Optional[Compound]:
        """Clear and return the one-shot most recent discovery."""
        compound, self._recent_discovery = self._recent_discovery, None
        return compound

    # Queries

    def possible_products_starting_with(
        self, element: Union[Definition, str]
    ) -> List[Compound]:
        """Products of every reaction that uses ``element`` as a reactant.

        Catalog order, each compound once, unknown formulas left out.
        """
        symbol = element if isinstance(element, str) else element.symbol
        products: Dict[str, Compound] = {}
        for reaction in self.catalog.reactions_with_reactant(symbol):
            for formula in reaction.products:
                compound = self.catalog.compound_by_formula(formula)
                if compound is not None and formula not in products:
                    products[formula] = compound
        return list(products.values())

    # Reaction pass

    def resolve_all(self) -> List[PlacedItem]:
        """Run one reaction pass over every live item.

        Returns the items produced. Raises ``RuntimeError`` if called while a
        pass is already running.
        """
        if self._resolving:
            raise RuntimeError("A reaction pass is already running")
        self._resolving = True
        try:
            produced = self._resolve_pass()
        finally:
            self._resolving = False
        self._flush_events()
        return produced

    def _resolve_pass(self) -> List[PlacedItem]:
        items = list(self._items.values())
        if len(items) < 2:
            return []

        placement_order = {item.id: index for index, item in enumerate(items)}
        clusters = build_clusters(items, self.settings.cluster_threshold)
        logger.debug(
            "Reaction pass over %d items in %d clusters", len(items), len(clusters)
        )

        consumed_ids: Set[int] = set()
        produced: List[PlacedItem] = []
        for cluster in clusters:
            if len(cluster) < 2:
                continue
            members = sorted(cluster, key=lambda item: placement_order[item.id])
            produced.extend(self._react_cluster(members, consumed_ids))
        return produced

    def _react_cluster(
        self, members: Sequence[PlacedItem], consumed_ids: Set[int]
    ) -> List[PlacedItem]:
        reactions = self.catalog.all_reactions()
        stoich = stoichiometry(item.symbol for item in members)
        pools: Dict[str, Deque[PlacedItem]] = defaultdict(deque)
        for item in members:
            pools[item.symbol].append(item)

        consumed: List[PlacedItem] = []
        outputs: List[Tuple[Compound, Tuple[PlacedItem, ...]]] = []

        for match in resolve(stoich, reactions):
            logger.info("%s fired x%d", match.reaction.equation, match.factor)
            self._pending.append(ReactionFired(match.reaction, match.factor))

            for _ in range(match.factor):
                used = []
                for symbol, required in match.reaction.reactants.items():
                    for _ in range(required):
                        item = pools[symbol].popleft()
                        if item.id in consumed_ids:
                            raise RuntimeError(f"Item #{item.id} consumed twice in one pass")
                        consumed_ids.add(item.id)
                        used.append(item)
                consumed.extend(used)
                outputs.extend(self._products_of(match.reaction.products, tuple(used)))

        if not consumed:
            return []

        for item in consumed:
            del self._items[item.id]

        positions = self._product_positions(centroid(members), len(outputs))
        produced = []
        for (compound, parts), position in zip(outputs, positions):
            item = self._new_item(compound, position, parts)
            self._items[item.id] = item
            produced.append(item)

        self._pending.append(ItemsConsumed(tuple(consumed)))
        if produced:
            self._pending.append(ItemsProduced(tuple(produced)))
        else:
            logger.warning(
                "Consumed %d items without producing a known compound", len(consumed)
            )

        for item in produced:
            self._record_production(item.definition)
        return produced

    def _products_of(
        self, products, used: Tuple[PlacedItem, ...]
    ) -> List[Tuple[Compound, Tuple[PlacedItem, ...]]]:
        """One entry per product unit of a single firing.

        The consumed items are recorded on the first unit only so that
        breaking every product never restores more items than were used.
        """
        outputs = []
        for formula, count in products.items():
            compound = self.catalog.compound_by_formula(formula)
            if compound is None:
                logger.warning("No compound registered for %r; product skipped", formula)
                continue
            for _ in range(count):
                outputs.append((compound, () if outputs else used))
        return outputs

    def _product_positions(self, center: Position, count: int) -> List[Position]:
        if count == 1:
            return [center]
        radius = self.settings.product_spread
        cx, cy = center
        return [
            (
                cx + radius * math.cos(2.0 * math.pi * k / count),
                cy + radius * math.sin(2.0 * math.pi * k / count),
            )
            for k in range(count)
        ]

    def _record_production(self, compound: Compound) -> None:
        if compound.formula not in self._discovered:
            self._discovered[compound.formula] = compound
            self._recent_discovery = compound
            logger.info("Discovered %s (%s)", compound.formula, compound.common_name)
            self._pending.append(CompoundDiscovered(compound))

        self._history.append(compound)

        for badge in evaluate_badges(
            compound, self._history, self.discovered, self._badges, self.badge_rules
        ):
            self._badges.append(badge)
            logger.info("Badge unlocked: %s", badge)
            self._pending.append(BadgeUnlocked(badge))

    # Helpers

    def _element_for(self, element: Union[Element, str]) -> Element:
        if isinstance(element, Compound):
            raise ValueError(
                f"Compounds are only made by reactions; cannot place {element.formula}"
            )
        if isinstance(element, str):
            definition = self.catalog.element_by_symbol(element)
            if definition is None:
                raise KeyError(f"Unknown element symbol: {element}")
            return definition
        return element

    def _new_item(
        self,
        definition: Definition,
        position: Position,
        constituents: Tuple[PlacedItem, ...] = (),
    ) -> PlacedItem:
        return PlacedItem(
            id=next(self._ids),
            definition=definition,
            position=(float(position[0]), float(position[1])),
            constituents=constituents,
        )

    def _ensure_idle(self) -> None:
        if self._resolving:
            raise RuntimeError("The workspace cannot be changed during a reaction pass")

    def _flush_events(self) -> None:
        pending, self._pending = self._pending, []
        for event in pending:
            self._dispatcher.publish(event)
