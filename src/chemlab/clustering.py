"""Spatial clustering of placed items.

Items are grouped into connected components of the proximity graph in which
two items share an edge when their Euclidean distance is at most the
threshold (the boundary is inclusive).

The proximity graph is built from an all-pairs distance matrix, so a pass is
O(n²) in time and memory. That is fine for an interactive canvas holding tens
of items; it is the scaling limit of this module and should not be used for
bulk data.
"""

from __future__ import annotations

from collections import deque
from typing import List, Protocol, Sequence, Tuple, TypeVar

import numpy as np
from scipy.spatial.distance import pdist, squareform


class Positioned(Protocol):
    @property
    def position(self) -> Tuple[float, float]:
        ...


T = TypeVar("T", bound=Positioned)


def adjacency_matrix(items: Sequence[Positioned], threshold: float) -> np.ndarray:
    """Boolean matrix with ``True`` where two distinct items are within ``threshold``."""
    if threshold <= 0:
        raise ValueError(f"Cluster threshold must be positive, got {threshold}")
    if len(items) < 2:
        return np.zeros((len(items), len(items)), dtype=bool)

    coordinates = np.array([item.position for item in items], dtype=float)
    distances = squareform(pdist(coordinates))
    adjacency = distances <= threshold
    np.fill_diagonal(adjacency, False)
    return adjacency


def build_clusters(items: Sequence[T], threshold: float) -> List[Tuple[T, ...]]:
    """Partition ``items`` into connected components.

    Traversal is breadth-first, seeded from the input in order and enqueuing
    neighbours in input order, so the result is deterministic for a fixed
    input sequence. Every item lands in exactly one cluster; isolated items
    form singleton clusters.
    """
    adjacency = adjacency_matrix(items, threshold)
    visited = np.zeros(len(items), dtype=bool)
    clusters: List[Tuple[T, ...]] = []

    for seed in range(len(items)):
        if visited[seed]:
            continue
        visited[seed] = True
        queue = deque([seed])
        group = []
        while queue:
            current = queue.popleft()
            group.append(items[current])
            for neighbour in np.flatnonzero(adjacency[current] & ~visited):
                visited[neighbour] = True
                queue.append(int(neighbour))
        clusters.append(tuple(group))

    return clusters


def centroid(items: Sequence[Positioned]) -> Tuple[float, float]:
    if not items:
        raise ValueError("Cannot take the centroid of an empty cluster")
    x, y = np.mean(np.array([item.position for item in items], dtype=float), axis=0)
    return float(x), float(y)
