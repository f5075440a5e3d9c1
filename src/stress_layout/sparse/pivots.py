"""
Max-min random shortest-path pivot sampling.

Pivots are picked one at a time: the first is given, every further pivot is
drawn with probability proportional to its current distance to the nearest
pivot chosen so far. Each pick is followed by a traversal that lowers those
distances. The result is the nearest-pivot assignment of every vertex, which
defines the regions used to weight sparse stress terms.

Reference:
    Ortmann, Klimenta, Brandes. "A Sparse Stress Model." Graph Drawing 2016.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from ..types import Graph
from ..validation import ConnectivityError, SamplingError, ValidationError
from .shortestpaths import dijkstra

UNASSIGNED = -1


def select_pivots(
    graph: Graph,
    n_pivots: int,
    initial_pivot: int = 0,
    rng: Optional[np.random.Generator] = None,
) -> list[int]:
    """
    Choose pivots and assign every vertex to its nearest one.

    Args:
        graph: Weighted adjacency list
        n_pivots: Number of pivots to choose (at most the vertex count)
        initial_pivot: Fixed first pivot
        rng: Random generator for the weighted draws. A fresh unseeded
            generator is used when omitted.

    Returns:
        List of length n mapping each vertex to its nearest pivot.

    Raises:
        ValidationError: If the initial pivot is not a vertex.
        ConnectivityError: If some vertex is unreachable from the initial pivot.
        SamplingError: If a weighted draw cannot select a vertex.
    """
    n = len(graph)
    if not 0 <= initial_pivot < n:
        raise ValidationError(f"initial pivot {initial_pivot} out of bounds [0, {n})")
    if rng is None:
        rng = np.random.default_rng()

    mins = np.full(n, np.inf)
    nearest = [UNASSIGNED] * n

    mins[initial_pivot] = 0.0
    nearest[initial_pivot] = initial_pivot
    _relax_from_pivot(graph, initial_pivot, mins, nearest)

    unassigned = [v for v in range(n) if nearest[v] == UNASSIGNED]
    if unassigned:
        raise ConnectivityError(
            f"graph has multiple connected components: {len(unassigned)} of {n} "
            f"vertices unreachable from vertex {initial_pivot}"
        )

    for _ in range(1, n_pivots):
        pivot = _sample_proportional(mins, rng)
        mins[pivot] = 0.0
        nearest[pivot] = pivot
        _relax_from_pivot(graph, pivot, mins, nearest)

    return nearest


def _sample_proportional(weights: np.ndarray, rng: np.random.Generator) -> int:
    """Draw an index with probability proportional to its weight."""
    cumulative = np.cumsum(weights)
    total = float(cumulative[-1]) if len(cumulative) else 0.0
    if not np.isfinite(total) or total <= 0:
        raise SamplingError(f"weighted pivot sampling failed: cumulative total is {total}")

    sample = rng.random() * total
    index = int(np.searchsorted(cumulative, sample, side="right"))
    if index >= len(weights):
        raise SamplingError(
            f"weighted pivot sampling failed: draw {sample} outside cumulative range {total}"
        )
    return index


def _relax_from_pivot(graph: Graph, pivot: int, mins: np.ndarray, nearest: list[int]) -> None:
    """Lower ``mins``/``nearest`` wherever ``pivot`` is strictly closer."""
    for v, dist in dijkstra(graph, pivot):
        if dist < mins[v]:
            mins[v] = dist
            nearest[v] = pivot


def pivots_of(nearest: list[int]) -> list[int]:
    """Distinct pivots in an assignment, in order of first appearance."""
    return list(dict.fromkeys(nearest))


__all__ = ["select_pivots", "pivots_of", "UNASSIGNED"]
