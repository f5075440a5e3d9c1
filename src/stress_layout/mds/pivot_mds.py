"""
Pivot MDS projection of feature vectors.

Classical multidimensional scaling approximated through a small set of pivot
rows: the squared distances from k pivots to all points are double centered
and the leading singular vectors give the coordinates.

Reference:
    Brandes, Pich. "Eigensolver Methods for Progressive Multidimensional
    Scaling of Large Data." Graph Drawing 2006.
"""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np
from scipy.spatial.distance import cdist

from ..validation import ValidationError, validate_dimension


def pivot_mds(
    feature_vectors: Optional[Sequence[Sequence[float]]],
    k: int,
    dimension: int = 2,
) -> Optional[np.ndarray]:
    """
    Project feature vectors into ``dimension`` dimensions.

    The first ``min(k, N)`` vectors serve as pivots.

    Args:
        feature_vectors: N feature vectors of equal length
        k: Number of pivots
        dimension: Output dimensionality

    Returns:
        N x dimension coordinates, an empty (0, dimension) array for empty
        input, or None if ``feature_vectors`` is None. Dimensions beyond the
        rank of the pivot matrix are zero.

    Raises:
        ValidationError: If k < 1, dimension < 1 or vectors are ragged.

    Example:
        >>> coords = pivot_mds([[1, 0, 0], [0, 1, 1], [0, 0, 1]], k=3, dimension=2)
        >>> coords.shape
        (3, 2)
    """
    if feature_vectors is None:
        return None
    dimension = validate_dimension(dimension)
    if k < 1:
        raise ValidationError(f"k must be >= 1, got {k}")

    n = len(feature_vectors)
    if n == 0:
        return np.empty((0, dimension))

    try:
        X = np.asarray(feature_vectors, dtype=float)
    except ValueError as e:
        raise ValidationError(f"feature vectors must have equal length: {e}") from e
    if X.ndim == 1:
        X = X.reshape(n, 1)
    elif X.ndim != 2:
        raise ValidationError(f"feature vectors must form a 2D array, got shape {X.shape}")

    k = min(n, k)
    C = cdist(X[:k], X, metric="sqeuclidean")

    # Double centering
    row_means = C.mean(axis=1, keepdims=True)
    col_means = C.mean(axis=0, keepdims=True)
    C = -0.5 * (C - row_means - col_means + C.mean())

    _, values, vectors = np.linalg.svd(C, full_matrices=False)

    result = np.zeros((n, dimension))
    r = min(dimension, len(values))
    # Degenerate intrinsic dimensionality can produce non-finite scales
    scale = np.nan_to_num(np.sqrt(values[:r]))
    result[:, :r] = np.nan_to_num(vectors[:r].T) * scale
    return result


__all__ = ["pivot_mds"]
