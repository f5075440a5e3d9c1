"""
Sparse stress term construction.

Instead of one term per vertex pair, every vertex only gets terms towards
the pivots (weighted by how many region members a pivot stands in for) and
towards its direct neighbors. The term count is O(n*p + m).
"""

from __future__ import annotations

from collections import deque

from ..types import Graph, Term
from .graph import iter_edges
from .shortestpaths import dijkstra


def regions(nearest_pivot: list[int]) -> dict[int, set[int]]:
    """
    Group vertices by their nearest pivot.

    Returns:
        Mapping pivot -> member vertices, pivots in order of first appearance.
    """
    result: dict[int, set[int]] = {}
    for v, pivot in enumerate(nearest_pivot):
        result.setdefault(pivot, set()).add(v)
    return result


def build_terms(graph: Graph, nearest_pivot: list[int]) -> list[Term]:
    """
    Build the deduplicated sparse term set.

    For each pivot a traversal over the whole graph produces a term per
    reached vertex. Its weight in the direction of the non-pivot endpoint is
    ``s / d**2``, where ``s`` counts the region members lying closer to the
    pivot than half the current traversal distance. Direct edges are then
    overlaid with exact terms of weight ``1 / length**2`` both ways.

    Args:
        graph: Weighted adjacency list
        nearest_pivot: Nearest-pivot assignment from ``select_pivots``

    Returns:
        One Term per vertex pair that received a constraint.
    """
    store: dict[tuple[int, int], Term] = {}

    for pivot, members in regions(nearest_pivot).items():
        _add_pivot_terms(graph, pivot, members, store)

    for i, j, length in iter_edges(graph):
        term = store.get((i, j))
        if term is None:
            term = store[(i, j)] = Term(i, j, length)
        else:
            term.d = length
        term.w_ij = term.w_ji = 1.0 / (length * length)

    return list(store.values())


def _add_pivot_terms(
    graph: Graph,
    pivot: int,
    members: set[int],
    store: dict[tuple[int, int], Term],
) -> None:
    # Distances of region members reached so far, not yet counted in s
    pending: deque[float] = deque()
    s = 1

    for i, d_pi in dijkstra(graph, pivot):
        if i == pivot:
            continue

        while pending and pending[0] <= d_pi / 2:
            pending.popleft()
            s += 1
        if i in members:
            pending.append(d_pi)

        weight = s / (d_pi * d_pi)
        if i < pivot:
            term = store.get((i, pivot))
            if term is None:
                term = store[(i, pivot)] = Term(i, pivot, d_pi)
            term.w_ij = weight
        else:
            term = store.get((pivot, i))
            if term is None:
                term = store[(pivot, i)] = Term(pivot, i, d_pi)
            term.w_ji = weight


__all__ = ["build_terms", "regions"]
