"""
Point-set alignment.

Maps a new layout onto a previous one so that re-runs stay visually stable.
"""

from .procrustes import (
    Registration,
    procrustes_align,
    procrustes_distance,
    similarity_align,
    similarity_registration,
)

__all__ = [
    "Registration",
    "similarity_registration",
    "similarity_align",
    "procrustes_align",
    "procrustes_distance",
]
