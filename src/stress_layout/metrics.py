"""
Layout quality metrics.

Provides quantitative measures of how well a coordinate matrix realizes
graph distances:
- Term stress: Weighted stress over the sparse term set
- Full stress: Weighted stress against exact all-pairs shortest paths
- Edge length ratios: Drawn length over target length per edge

All metrics take an n x D position matrix (any array-like).
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from .sparse.graph import iter_edges
from .sparse.shortestpaths import all_pairs_distances
from .types import Graph, Term


def term_arrays(terms: Sequence[Term]) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Split terms into ``(I, J, d)`` arrays for the vectorized stress functions."""
    count = len(terms)
    I = np.fromiter((t.i for t in terms), dtype=np.intp, count=count)
    J = np.fromiter((t.j for t in terms), dtype=np.intp, count=count)
    d = np.fromiter((t.d for t in terms), dtype=float, count=count)
    return I, J, d


def pair_stress(positions: np.ndarray, I: np.ndarray, J: np.ndarray, d: np.ndarray) -> float:
    """
    Normalized stress of the vertex pairs ``(I[k], J[k])`` with targets ``d[k]``.

    stress = sum_k (w_k * (|x_i - x_j| - d_k)^2) / sum_k (w_k * d_k^2)

    with w_k = 1/d_k^2, so every pair contributes its relative error.
    Pairs whose target is not positive and finite are ignored.

    Returns:
        Normalized stress value (0 = perfect, higher = worse)
    """
    X = np.asarray(positions, dtype=float)
    mask = np.isfinite(d) & (d > 0)
    if not mask.any():
        return 0.0

    target = d[mask]
    actual = np.linalg.norm(X[I[mask]] - X[J[mask]], axis=1)
    weights = 1.0 / (target * target)

    numerator = float(np.sum(weights * (actual - target) ** 2))
    denominator = float(np.sum(weights * target * target))
    return numerator / denominator


def term_stress(positions: np.ndarray, terms: Sequence[Term]) -> float:
    """
    Compute the normalized stress of a layout over a set of terms.

    Args:
        positions: n x D coordinates
        terms: Terms to evaluate

    Returns:
        Normalized stress value, see ``pair_stress``.
    """
    if not terms:
        return 0.0
    return pair_stress(positions, *term_arrays(terms))


def full_stress(positions: np.ndarray, graph: Graph) -> float:
    """
    Compute the normalized stress against exact graph distances.

    Runs a shortest-path traversal from every vertex, so this is
    O(n * (n + m) log n) and meant for evaluation on small graphs.
    Unreachable pairs are ignored.

    Args:
        positions: n x D coordinates
        graph: Weighted adjacency list

    Returns:
        Normalized stress value (0 = perfect, higher = worse)
    """
    n = len(graph)
    if n < 2:
        return 0.0

    ideal = all_pairs_distances(graph)
    iu, ju = np.triu_indices(n, k=1)
    return pair_stress(positions, iu, ju, ideal[iu, ju])


def edge_length_ratios(positions: np.ndarray, graph: Graph) -> list[float]:
    """
    Ratio of drawn length to target length for every edge.

    A perfect layout yields 1.0 for every edge.

    Args:
        positions: n x D coordinates
        graph: Weighted adjacency list

    Returns:
        One ratio per undirected edge, in adjacency order.
    """
    X = np.asarray(positions, dtype=float)
    ratios = []
    for i, j, length in iter_edges(graph):
        drawn = float(np.linalg.norm(X[i] - X[j]))
        ratios.append(drawn / length)
    return ratios


def max_edge_length_error(positions: np.ndarray, graph: Graph) -> float:
    """Largest relative deviation ``|ratio - 1|`` over all edges (0.0 if none)."""
    ratios = edge_length_ratios(positions, graph)
    if not ratios:
        return 0.0
    return max(math.fabs(r - 1.0) for r in ratios)


__all__ = [
    "term_arrays",
    "pair_stress",
    "term_stress",
    "full_stress",
    "edge_length_ratios",
    "max_edge_length_error",
]
