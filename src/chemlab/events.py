"""Workspace events and a small synchronous dispatcher."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Callable, DefaultDict, List, Tuple, Type

from chemlab.models import BalancedReaction, Compound, PlacedItem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Event:
    pass


@dataclass(frozen=True)
class ReactionFired(Event):
    reaction: BalancedReaction
    factor: int


@dataclass(frozen=True)
class ItemsConsumed(Event):
    items: Tuple[PlacedItem, ...]


@dataclass(frozen=True)
class ItemsProduced(Event):
    items: Tuple[PlacedItem, ...]


@dataclass(frozen=True)
class CompoundDiscovered(Event):
    compound: Compound


@dataclass(frozen=True)
class BadgeUnlocked(Event):
    badge: str


@dataclass(frozen=True)
class ItemRemoved(Event):
    item: PlacedItem


@dataclass(frozen=True)
class CompoundBroken(Event):
    compound: PlacedItem
    restored: Tuple[PlacedItem, ...]


Subscriber = Callable[[Event], None]


class EventDispatcher:
    """Delivers events to subscribers registered per event type.

    Subscribing to :class:`Event` receives every event. Delivery is
    best-effort: a subscriber that raises is logged and skipped so
    notifications never feed back into the engine.

    Delivery is synchronous. The workspace queues events during a reaction
    pass and publishes them once its state is final, so subscribers never
    see a half-applied pass, but a slow subscriber does delay the call that
    triggered it. Subscribers that do heavy work should hand it off
    themselves.
    """

    def __init__(self) -> None:
        self._subscribers: DefaultDict[Type[Event], List[Subscriber]] = defaultdict(list)

    def subscribe(self, event_type: Type[Event], callback: Subscriber) -> None:
        self._subscribers[event_type].append(callback)

    def unsubscribe(self, event_type: Type[Event], callback: Subscriber) -> None:
        try:
            self._subscribers[event_type].remove(callback)
        except ValueError:
            raise KeyError(f"{callback!r} is not subscribed to {event_type.__name__}") from None

    def publish(self, event: Event) -> None:
        for event_type in type(event).__mro__:
            for callback in list(self._subscribers.get(event_type, ())):
                try:
                    callback(event)
                except Exception:
                    logger.exception(
                        "Subscriber %r failed on %s", callback, type(event).__name__
                    )
