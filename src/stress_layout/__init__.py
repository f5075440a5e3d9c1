"""
stress-layout: Sparse stress graph layout in Python.

This package computes low-dimensional layouts of weighted graphs with a
sparse approximation of stress majorization, optimized by stochastic
gradient descent under an annealed step size.

Available modules:
- sparse: Sparse stress engine (project(), SparseStressLayout)
- mds: Pivot MDS projection of dense feature vectors
- alignment: Similarity and Procrustes alignment of matched point sets
- metrics: Stress and edge length quality measures
"""

__version__ = "0.1.0"

# Base classes for building layouts
from .base import BaseLayout, IterativeLayout

# Point-set alignment
from .alignment import (
    Registration,
    procrustes_align,
    procrustes_distance,
    similarity_align,
    similarity_registration,
)

# Dense projection
from .mds import pivot_mds

# Sparse stress engine
from .sparse import (
    SparseStressLayout,
    build_graph,
    build_schedule,
    build_terms,
    project,
    select_pivots,
    sgd,
)

# Metrics for layout quality evaluation
from .metrics import edge_length_ratios, full_stress, max_edge_length_error, term_stress
from .types import Edge, Event, EventType, Graph, Link, LinkLike, Node, NodeLike, SizeType, Term

# Validation and errors
from .validation import (
    AlignmentError,
    AsymmetricEdgeError,
    ConnectivityError,
    InvalidCanvasSizeError,
    InvalidEdgeError,
    InvalidEdgeIndexError,
    InvalidEdgeLengthError,
    InvalidLinkError,
    LayoutError,
    ParameterWarning,
    SamplingError,
    SelfLoopError,
    ValidationError,
)

__all__ = [
    # Version
    "__version__",
    # Shared types
    "Edge",
    "Graph",
    "Term",
    "Node",
    "Link",
    "EventType",
    "Event",
    "NodeLike",
    "LinkLike",
    "SizeType",
    # Base classes
    "BaseLayout",
    "IterativeLayout",
    # Sparse stress
    "project",
    "build_graph",
    "select_pivots",
    "build_terms",
    "build_schedule",
    "sgd",
    "SparseStressLayout",
    # Dense projection
    "pivot_mds",
    # Alignment
    "Registration",
    "similarity_registration",
    "similarity_align",
    "procrustes_align",
    "procrustes_distance",
    # Metrics
    "term_stress",
    "full_stress",
    "edge_length_ratios",
    "max_edge_length_error",
    # Validation
    "ValidationError",
    "InvalidCanvasSizeError",
    "InvalidLinkError",
    "InvalidEdgeError",
    "InvalidEdgeIndexError",
    "InvalidEdgeLengthError",
    "AsymmetricEdgeError",
    "SelfLoopError",
    "AlignmentError",
    "LayoutError",
    "ConnectivityError",
    "SamplingError",
    "ParameterWarning",
]
