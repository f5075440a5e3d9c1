"""
Weighted graph construction from parallel edge arrays.

The engine works on an undirected adjacency list where every edge appears
once in each endpoint's list with the same length.
"""

from __future__ import annotations

import math
from typing import Iterator, Optional, Sequence

from ..types import Edge, Graph
from ..validation import (
    AsymmetricEdgeError,
    InvalidEdgeError,
    InvalidEdgeIndexError,
    InvalidEdgeLengthError,
    SelfLoopError,
    ValidationError,
)


def build_graph(
    n: int,
    I: Sequence[int],
    J: Sequence[int],
    V: Sequence[float],
    m: Optional[int] = None,
) -> Graph:
    """
    Build a weighted undirected adjacency list.

    Args:
        n: Number of vertices
        I: Edge source indices
        J: Edge target indices
        V: Edge lengths
        m: Number of edges. Defaults to ``len(I)``.

    Returns:
        Adjacency list where ``graph[v]`` holds an Edge per neighbor of v.

    Raises:
        ValidationError: If n is negative.
        InvalidEdgeError: If the edge arrays do not all have length m.
        InvalidEdgeIndexError: If an endpoint is outside [0, n).
        InvalidEdgeLengthError: If a length is not strictly positive.
        SelfLoopError: If an edge connects a vertex to itself.
        AsymmetricEdgeError: If a vertex pair is repeated with a different length.

    Example:
        >>> graph = build_graph(3, [0, 1], [1, 2], [1.0, 2.0])
        >>> graph[1]
        [Edge(target=0, length=1.0), Edge(target=2, length=2.0)]
    """
    if n < 0:
        raise ValidationError(f"n must be >= 0, got {n}")
    if m is None:
        m = len(I)
    if len(I) != m or len(J) != m or len(V) != m:
        raise InvalidEdgeError(
            f"Edge arrays must all have length m={m}, got I={len(I)}, J={len(J)}, V={len(V)}"
        )

    graph: Graph = [[] for _ in range(n)]
    # Known lengths per unordered pair, for repeated-edge checks
    seen: dict[tuple[int, int], float] = {}

    for k in range(m):
        i, j = int(I[k]), int(J[k])
        if i < 0 or i >= n or j < 0 or j >= n:
            raise InvalidEdgeIndexError(
                f"Edge {k}: endpoint ({i}, {j}) out of bounds [0, {n})"
            )

        length = float(V[k])
        if not math.isfinite(length) or length <= 0:
            raise InvalidEdgeLengthError(
                f"Edge {k}: length must be positive and finite, got {V[k]}"
            )

        if i == j:
            raise SelfLoopError(f"Edge {k}: self loop on vertex {i}")

        key = (i, j) if i < j else (j, i)
        known = seen.get(key)
        if known is None:
            seen[key] = length
            graph[i].append(Edge(j, length))
            graph[j].append(Edge(i, length))
        elif known != length:
            raise AsymmetricEdgeError(
                f"Edge {k}: lengths between {key[0]} and {key[1]} not symmetric "
                f"({known} != {length})"
            )

    return graph


def edge_count(graph: Graph) -> int:
    """Number of undirected edges in the graph."""
    return sum(len(edges) for edges in graph) // 2


def iter_edges(graph: Graph) -> Iterator[tuple[int, int, float]]:
    """Yield every undirected edge once as ``(i, j, length)`` with ``i < j``."""
    for i, edges in enumerate(graph):
        for e in edges:
            if i < e.target:
                yield i, e.target, e.length


__all__ = ["build_graph", "edge_count", "iter_edges"]
