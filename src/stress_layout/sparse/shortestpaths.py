"""
Weighted shortest paths over an adjacency list.

Dijkstra's algorithm with a binary heap. Instead of decreasing keys, an
improved tentative distance pushes a new heap entry; entries for vertices
that are already settled are discarded when popped.
"""

from __future__ import annotations

import heapq
from typing import Iterator

import numpy as np

from ..types import Graph


def dijkstra(graph: Graph, source: int) -> Iterator[tuple[int, float]]:
    """
    Traverse the graph from ``source`` in order of increasing distance.

    Args:
        graph: Weighted adjacency list
        source: Start vertex

    Yields:
        ``(vertex, distance)`` once per reachable vertex, source first.
    """
    n = len(graph)
    visited = [False] * n
    tentative = [float("inf")] * n
    tentative[source] = 0.0
    pq: list[tuple[float, int]] = [(0.0, source)]

    while pq:
        dist, current = heapq.heappop(pq)
        if visited[current]:
            continue
        visited[current] = True
        yield current, dist

        for e in graph[current]:
            nd = dist + e.length
            if nd < tentative[e.target]:
                tentative[e.target] = nd
                heapq.heappush(pq, (nd, e.target))


def distances_from(graph: Graph, source: int) -> list[float]:
    """
    Shortest distances from ``source`` to every vertex.

    Unreachable vertices get ``inf``.
    """
    dist = [float("inf")] * len(graph)
    for v, d in dijkstra(graph, source):
        dist[v] = d
    return dist


def all_pairs_distances(graph: Graph) -> np.ndarray:
    """
    Compute the all-pairs shortest path matrix.

    One traversal per vertex, so only meant for small graphs
    (metrics, tests).

    Returns:
        n x n matrix with ``inf`` for unreachable pairs.
    """
    n = len(graph)
    result = np.full((n, n), np.inf)
    for s in range(n):
        result[s] = distances_from(graph, s)
    return result


__all__ = ["dijkstra", "distances_from", "all_pairs_distances"]
