"""
Annealed step-size schedule for stress SGD.

Step sizes decay exponentially from ``1 / w_min`` (every term can move its
endpoints all the way) to ``eps / w_max`` (even the strongest term only moves
by the fraction eps).

Reference:
    Zheng, Pawar, Goodman. "Graph drawing by stochastic gradient descent."
    IEEE TVCG 25.9 (2018).
"""

from __future__ import annotations

import math
from typing import Sequence

from ..types import Term
from ..validation import ValidationError, validate_epsilon, validate_iterations


def weight_range(terms: Sequence[Term]) -> tuple[float, float]:
    """
    Smallest and largest strictly positive term weight.

    Both directions of every term are considered.

    Raises:
        ValidationError: If no term carries a positive weight.
    """
    w_min = math.inf
    w_max = 0.0
    for t in terms:
        for w in (t.w_ij, t.w_ji):
            if w > 0:
                w_min = min(w_min, w)
                w_max = max(w_max, w)
    if w_max <= 0:
        raise ValidationError("cannot build a schedule: no term has a positive weight")
    return w_min, w_max


def build_schedule(terms: Sequence[Term], t_max: int, eps: float) -> list[float]:
    """
    Compute ``t_max`` exponentially decaying step sizes.

    ``eta_t = eta_max * exp(-lambda * t)`` with ``eta_max = 1 / w_min``,
    ``eta_min = eps / w_max`` and ``lambda = ln(eta_max / eta_min) / (t_max - 1)``.

    With ``t_max == 1`` the schedule is the single step ``[eta_max]``. When
    ``eta_max == eta_min`` (all weights equal and ``eps == 1``) it is constant.

    Args:
        terms: Term set
        t_max: Number of step sizes (SGD passes)
        eps: Final step size relative to ``1 / w_max``

    Returns:
        Step sizes, strictly decreasing for eps < 1 and t_max > 1.

    Raises:
        ValidationError: If t_max < 1, eps <= 0 or no term has a positive weight.
    """
    t_max = validate_iterations(t_max)
    eps = validate_epsilon(eps)
    w_min, w_max = weight_range(terms)

    eta_max = 1.0 / w_min
    eta_min = eps / w_max
    if t_max == 1:
        return [eta_max]

    decay = math.log(eta_max / eta_min) / (t_max - 1)
    return [eta_max * math.exp(-decay * t) for t in range(t_max)]


__all__ = ["build_schedule", "weight_range"]
