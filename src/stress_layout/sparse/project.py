"""
Sparse stress layout of a weighted graph given as parallel edge arrays.

Pipeline: graph -> pivots -> terms -> schedule -> SGD. One random generator,
seeded once, drives every random draw so a fixed seed reproduces the result
exactly.
"""

from __future__ import annotations

import warnings
from typing import Optional, Sequence

import numpy as np

from ..validation import (
    ParameterWarning,
    validate_dimension,
    validate_epsilon,
    validate_iterations,
)
from .graph import build_graph
from .pivots import select_pivots
from .schedule import build_schedule
from .sgd import random_embedding, sgd
from .terms import build_terms

DEFAULT_PIVOTS = 50
DEFAULT_ITERATIONS = 30
DEFAULT_EPSILON = 0.1


def project(
    n: int,
    m: Optional[int],
    I: Sequence[int],
    J: Sequence[int],
    V: Sequence[float],
    D: int = 2,
    p: int = DEFAULT_PIVOTS,
    seed: Optional[int] = None,
    t_max: int = DEFAULT_ITERATIONS,
    eps: float = DEFAULT_EPSILON,
) -> np.ndarray:
    """
    Project a weighted graph into ``D`` dimensions.

    Args:
        n: Number of vertices
        m: Number of edges (``None`` to use ``len(I)``)
        I: Edge source indices
        J: Edge target indices
        V: Edge lengths (strictly positive)
        D: Output dimensionality
        p: Number of pivots, clamped to [1, n]
        seed: Seed for the random generator. ``None`` draws fresh entropy.
        t_max: Number of SGD passes
        eps: Final step size fraction of the annealing schedule

    Returns:
        n x D coordinate matrix.

    Raises:
        ValidationError: On invalid edges or parameters.
        ConnectivityError: If the graph is not connected.
        SamplingError: If pivot sampling degenerates.

    Example:
        >>> X = project(3, 2, [0, 1], [1, 2], [1.0, 1.0], p=2, seed=7)
        >>> X.shape
        (3, 2)
    """
    D = validate_dimension(D)
    t_max = validate_iterations(t_max)
    eps = validate_epsilon(eps)

    graph = build_graph(n, I, J, V, m)
    if n == 0:
        return np.empty((0, D))

    n_pivots = clamp_pivots(p, n)
    rng = np.random.default_rng(seed)

    nearest = select_pivots(graph, n_pivots, 0, rng)
    terms = build_terms(graph, nearest)
    X = random_embedding(n, D, rng)
    if not terms:
        return X

    schedule = build_schedule(terms, t_max, eps)
    return sgd(X, terms, schedule, rng)


def clamp_pivots(p: int, n: int) -> int:
    """Clamp a requested pivot count to [1, n], warning when it changes."""
    if p > n:
        warnings.warn(
            f"requested {p} pivots for a graph with {n} vertices, using {n}",
            ParameterWarning,
            stacklevel=3,
        )
        return n
    if p < 1:
        warnings.warn(f"requested {p} pivots, using 1", ParameterWarning, stacklevel=3)
        return 1
    return int(p)


__all__ = [
    "project",
    "clamp_pivots",
    "DEFAULT_PIVOTS",
    "DEFAULT_ITERATIONS",
    "DEFAULT_EPSILON",
]
