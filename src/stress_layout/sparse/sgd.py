"""
Stochastic gradient descent on pairwise stress terms.

Each pass visits every term once in a fresh random order and moves both
endpoints towards the term's target distance, each by its own capped step.
"""

from __future__ import annotations

import math
from typing import Optional, Sequence

import numpy as np

from ..types import Term

MIN_DISTANCE = 1e-9
"""Distances below this are treated as coincident points."""


def random_embedding(
    n: int,
    dimension: int,
    rng: np.random.Generator,
    low: float = 0.0,
    high: float = 1.0,
) -> np.ndarray:
    """Draw an n x dimension matrix of independent uniform coordinates."""
    return rng.uniform(low, high, size=(n, dimension))


def sgd_pass(
    X: np.ndarray,
    terms: Sequence[Term],
    eta: float,
    rng: np.random.Generator,
    fixed: Optional[Sequence[bool]] = None,
) -> None:
    """
    Apply one pass of term updates to ``X`` in place.

    For a term (i, j, d, w_ij, w_ji) with ``delta = X[i] - X[j]``:
    ``r = (|delta| - d) / (2 |delta|)``,
    ``X[i] -= min(eta * w_ij, 1) * r * delta`` and
    ``X[j] += min(eta * w_ji, 1) * r * delta``.

    Coincident endpoints are pulled apart along a random direction of length
    ``MIN_DISTANCE`` drawn from ``rng``.

    Args:
        X: n x D coordinate matrix (modified)
        terms: Term set
        eta: Step size of this pass
        rng: Random generator for the visiting order
        fixed: Optional per-vertex flags; flagged vertices never move.
    """
    dimension = X.shape[1]
    pinned = None if fixed is None else [bool(f) for f in fixed]
    # Row updates on plain floats, written back once per pass
    coords = X.tolist()

    for k in rng.permutation(len(terms)).tolist():
        t = terms[k]
        i, j = t.i, t.j

        mu_i = 0.0 if pinned is not None and pinned[i] else min(eta * t.w_ij, 1.0)
        mu_j = 0.0 if pinned is not None and pinned[j] else min(eta * t.w_ji, 1.0)

        xi = coords[i]
        xj = coords[j]

        if dimension == 2:
            dx = xi[0] - xj[0]
            dy = xi[1] - xj[1]
            mag = math.sqrt(dx * dx + dy * dy)
            if mag < MIN_DISTANCE:
                dx, dy = (_random_direction(2, rng) * MIN_DISTANCE).tolist()
                mag = MIN_DISTANCE

            r = (mag - t.d) / (2.0 * mag)
            sx = r * dx
            sy = r * dy
            xi[0] -= mu_i * sx
            xi[1] -= mu_i * sy
            xj[0] += mu_j * sx
            xj[1] += mu_j * sy
        else:
            delta = [a - b for a, b in zip(xi, xj)]
            mag = math.sqrt(sum(c * c for c in delta))
            if mag < MIN_DISTANCE:
                delta = (_random_direction(dimension, rng) * MIN_DISTANCE).tolist()
                mag = MIN_DISTANCE

            r = (mag - t.d) / (2.0 * mag)
            for c in range(dimension):
                step = r * delta[c]
                xi[c] -= mu_i * step
                xj[c] += mu_j * step

    if coords:
        X[:] = coords


def sgd(
    X: np.ndarray,
    terms: Sequence[Term],
    schedule: Sequence[float],
    rng: np.random.Generator,
    fixed: Optional[Sequence[bool]] = None,
) -> np.ndarray:
    """
    Run one ``sgd_pass`` per step size of the schedule.

    There is no convergence check: exactly ``len(schedule)`` passes are made.
    ``fixed`` is forwarded to every pass.

    Returns:
        ``X``, modified in place.
    """
    for eta in schedule:
        sgd_pass(X, terms, eta, rng, fixed)
    return X


def _random_direction(dimension: int, rng: np.random.Generator) -> np.ndarray:
    while True:
        v = rng.standard_normal(dimension)
        norm = float(np.linalg.norm(v))
        if norm > 0:
            return v / norm


__all__ = ["MIN_DISTANCE", "random_embedding", "sgd_pass", "sgd"]
