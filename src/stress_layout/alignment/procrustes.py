"""
Registration of matched 2D point sets.

Two ways of mapping a point set A onto a matched point set B (the i-th point
of A corresponds to the i-th point of B), typically used to keep a new
layout visually stable against the previous one:

- similarity_align: Closed-form least-squares translation, uniform scale
  and rotation (Chang et al. 1997).
- procrustes_align: Normalized Procrustes fit that additionally considers
  the mirror image of A and keeps the best of the candidate orientations
  (Ross 2004).
"""

from __future__ import annotations

import math
from typing import NamedTuple, Sequence

import numpy as np

from ..validation import AlignmentError


class Registration(NamedTuple):
    """
    Parameters of a similarity transform.

    A point (x, y) maps to
    ``(tx + x * sct - y * sst, ty + y * sct + x * sst)``,
    where ``sct = s * cos(theta)`` and ``sst = s * sin(theta)``.
    """

    tx: float
    ty: float
    sct: float
    sst: float

    @property
    def scale(self) -> float:
        """Uniform scale factor s."""
        return math.hypot(self.sct, self.sst)

    @property
    def rotation(self) -> float:
        """Rotation angle theta in degrees."""
        return math.degrees(math.atan2(self.sst, self.sct))

    def apply(self, points: np.ndarray) -> np.ndarray:
        """Transform an n x 2 array of points."""
        P = np.asarray(points, dtype=float)
        x, y = P[:, 0], P[:, 1]
        return np.column_stack(
            (
                self.tx + x * self.sct - y * self.sst,
                self.ty + y * self.sct + x * self.sst,
            )
        )


def _as_point_sets(
    A: Sequence[Sequence[float]], B: Sequence[Sequence[float]]
) -> tuple[np.ndarray, np.ndarray]:
    PA = np.asarray(A, dtype=float)
    PB = np.asarray(B, dtype=float)
    for name, P in (("A", PA), ("B", PB)):
        if P.ndim != 2 or P.shape[1] != 2:
            raise AlignmentError(f"{name} must be a list of 2D points, got shape {P.shape}")
    if len(PA) != len(PB):
        raise AlignmentError(f"point sets must have equal length, got {len(PA)} and {len(PB)}")
    if len(PA) == 0:
        raise AlignmentError("point sets must not be empty")
    return PA, PB


def similarity_registration(
    A: Sequence[Sequence[float]], B: Sequence[Sequence[float]]
) -> Registration:
    """
    Compute the similarity transform mapping A onto B with least squared error.

    Args:
        A: Points to be moved
        B: Matched target points

    Returns:
        Registration parameters.

    Raises:
        AlignmentError: If the inputs are not matched 2D point lists or all
            points of A coincide.
    """
    PA, PB = _as_point_sets(A, B)
    k = len(PA)
    xa, ya = PA[:, 0], PA[:, 1]
    xb, yb = PB[:, 0], PB[:, 1]

    m_xa, m_ya = xa.sum(), ya.sum()
    m_xb, m_yb = xb.sum(), yb.sum()
    l_plus = float(np.sum(xa * xb + ya * yb))
    l_minus = float(np.sum(xa * yb - ya * xb))
    l_a = float(np.sum(xa * xa + ya * ya))

    det = k * l_a - m_xa * m_xa - m_ya * m_ya
    if abs(det) < 1e-12:
        raise AlignmentError("cannot register a point set whose points all coincide")

    return Registration(
        tx=float((l_a * m_xb - m_xa * l_plus + m_ya * l_minus) / det),
        ty=float((l_a * m_yb - m_ya * l_plus - m_xa * l_minus) / det),
        sct=float((-m_xa * m_xb - m_ya * m_yb + k * l_plus) / det),
        sst=float((m_ya * m_xb - m_xa * m_yb + k * l_minus) / det),
    )


def similarity_align(A: Sequence[Sequence[float]], B: Sequence[Sequence[float]]) -> np.ndarray:
    """
    Translate, scale and rotate A to best match B.

    Returns:
        Transformed copy of A as an n x 2 array.
    """
    return similarity_registration(A, B).apply(np.asarray(A, dtype=float))


def procrustes_distance(A: Sequence[Sequence[float]], B: Sequence[Sequence[float]]) -> float:
    """Sum of Euclidean distances between matched points."""
    PA, PB = _as_point_sets(A, B)
    return float(np.sum(np.linalg.norm(PA - PB, axis=1)))


def _normalize(P: np.ndarray) -> tuple[np.ndarray, np.ndarray, float]:
    """Center on the centroid and scale to unit RMS radius."""
    mean = P.mean(axis=0)
    centered = P - mean
    scale = math.sqrt(float(np.sum(centered * centered)) / len(P))
    if scale == 0:
        raise AlignmentError("cannot normalize a point set whose points all coincide")
    return centered / scale, mean, scale


def _rotate(P: np.ndarray, theta: float) -> np.ndarray:
    c, s = math.cos(theta), math.sin(theta)
    return np.column_stack((c * P[:, 0] - s * P[:, 1], s * P[:, 0] + c * P[:, 1]))


def _best_angle(P: np.ndarray, Q: np.ndarray) -> float:
    num = float(np.sum(P[:, 0] * Q[:, 1] - P[:, 1] * Q[:, 0]))
    den = float(np.sum(P[:, 0] * Q[:, 0] + P[:, 1] * Q[:, 1]))
    return math.atan2(num, den)


def procrustes_align(A: Sequence[Sequence[float]], B: Sequence[Sequence[float]]) -> np.ndarray:
    """
    Rigidly align A to B, allowing reflection.

    Both sets are centered and scaled to unit RMS radius. A and its mirror
    image (y negated) are each rotated by the optimal angle and by that angle
    plus 180 degrees; the candidate with the smallest summed point distance
    to B wins and is mapped into B's frame (B's centroid and scale).

    Args:
        A: Points to be moved
        B: Matched target points

    Returns:
        Aligned copy of A as an n x 2 array.

    Raises:
        AlignmentError: If the inputs are not matched 2D point lists or a set
            has all points coincident.
    """
    PA, PB = _as_point_sets(A, B)
    target, mean_b, scale_b = _normalize(PB)

    best = None
    best_distance = math.inf
    for mirror in (False, True):
        source = PA * np.array([1.0, -1.0]) if mirror else PA
        source, _, _ = _normalize(source)
        theta = _best_angle(source, target)
        for angle in (theta, theta + math.pi):
            candidate = _rotate(source, angle)
            distance = procrustes_distance(candidate, target)
            if distance < best_distance:
                best, best_distance = candidate, distance

    assert best is not None
    return best * scale_b + mean_b


__all__ = [
    "Registration",
    "similarity_registration",
    "similarity_align",
    "procrustes_align",
    "procrustes_distance",
]
