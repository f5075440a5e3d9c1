"""
Sparse stress layout engine.

Pipeline stages, each usable on its own:
- build_graph: Weighted undirected adjacency list from edge arrays
- select_pivots: Max-min random shortest-path pivot sampling
- build_terms: Pivot-region and direct-edge stress terms
- build_schedule: Annealed step sizes
- sgd: Stochastic gradient descent on the terms

project() runs the whole pipeline; SparseStressLayout wraps it for
Node/Link graphs.
"""

from .graph import build_graph, edge_count, iter_edges
from .shortestpaths import all_pairs_distances, dijkstra, distances_from
from .pivots import pivots_of, select_pivots
from .terms import build_terms, regions
from .schedule import build_schedule, weight_range
from .sgd import MIN_DISTANCE, random_embedding, sgd, sgd_pass
from .project import (
    DEFAULT_EPSILON,
    DEFAULT_ITERATIONS,
    DEFAULT_PIVOTS,
    clamp_pivots,
    project,
)
from .layout import SparseStressLayout

__all__ = [
    "build_graph",
    "edge_count",
    "iter_edges",
    "dijkstra",
    "distances_from",
    "all_pairs_distances",
    "select_pivots",
    "pivots_of",
    "build_terms",
    "regions",
    "build_schedule",
    "weight_range",
    "MIN_DISTANCE",
    "random_embedding",
    "sgd_pass",
    "sgd",
    "project",
    "clamp_pivots",
    "DEFAULT_PIVOTS",
    "DEFAULT_ITERATIONS",
    "DEFAULT_EPSILON",
    "SparseStressLayout",
]
