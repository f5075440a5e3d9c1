"""
Dense projection of feature vectors.

This module provides Pivot MDS, a fast approximation of classical
multidimensional scaling for small dense inputs.
"""

from .pivot_mds import pivot_mds

__all__ = [
    "pivot_mds",
]
