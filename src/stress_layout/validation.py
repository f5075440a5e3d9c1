"""
Input validation utilities for the stress layout engine.

Provides the exception hierarchy and centralized validation functions for
edge lists, links, canvas size and solver parameters. Raises descriptive
exceptions on invalid input.
"""

from __future__ import annotations

import math
from typing import Any, Optional, Sequence


class ValidationError(ValueError):
    """Base exception for layout validation errors."""

    pass


class InvalidCanvasSizeError(ValidationError):
    """Raised when canvas dimensions are invalid."""

    pass


class InvalidLinkError(ValidationError):
    """Raised when a link references invalid nodes."""

    pass


class InvalidEdgeError(ValidationError):
    """Raised when an edge list cannot be turned into a graph."""

    pass


class InvalidEdgeIndexError(InvalidEdgeError):
    """Raised when an edge endpoint is outside [0, n)."""

    pass


class InvalidEdgeLengthError(InvalidEdgeError):
    """Raised when an edge length is not strictly positive."""

    pass


class AsymmetricEdgeError(InvalidEdgeError):
    """Raised when the same vertex pair is given two different lengths."""

    pass


class SelfLoopError(InvalidEdgeError):
    """Raised when an edge connects a vertex to itself."""

    pass


class AlignmentError(ValidationError):
    """Raised when two point sets cannot be aligned."""

    pass


class LayoutError(RuntimeError):
    """Base exception for failures while computing a layout."""

    pass


class ConnectivityError(LayoutError):
    """Raised when the graph has more than one connected component."""

    pass


class SamplingError(LayoutError):
    """Raised when weighted pivot sampling cannot select a vertex."""

    pass


class ParameterWarning(UserWarning):
    """Warning about a parameter that was adjusted to a usable value."""

    pass


def validate_canvas_size(size: Sequence[float]) -> tuple[float, float]:
    """
    Validate canvas size dimensions.

    Args:
        size: [width, height] sequence

    Returns:
        Validated (width, height) tuple

    Raises:
        InvalidCanvasSizeError: If dimensions are invalid
    """
    if len(size) < 2:
        raise InvalidCanvasSizeError(
            f"Canvas size must have 2 elements [width, height], got {len(size)}"
        )

    width, height = float(size[0]), float(size[1])

    if width <= 0:
        raise InvalidCanvasSizeError(f"Canvas width must be positive, got {width}")
    if height <= 0:
        raise InvalidCanvasSizeError(f"Canvas height must be positive, got {height}")

    return width, height


def validate_link_indices(
    links: Sequence[Any],
    node_count: int,
    strict: bool = True,
) -> list[tuple[int, str]]:
    """
    Validate that all link source/target indices are within bounds.

    Args:
        links: Sequence of Link objects or dicts with source/target
        node_count: Number of nodes in the graph
        strict: If True, raises on invalid. If False, returns list of issues.

    Returns:
        List of (link_index, issue_description) tuples

    Raises:
        InvalidLinkError: If strict=True and invalid links found
    """
    issues: list[tuple[int, str]] = []

    for i, link in enumerate(links):
        src = _get_index(link, "source")
        tgt = _get_index(link, "target")

        if src is None:
            issues.append((i, f"Link {i}: source is None"))
        elif src < 0 or src >= node_count:
            issues.append((i, f"Link {i}: source index {src} out of bounds [0, {node_count})"))

        if tgt is None:
            issues.append((i, f"Link {i}: target is None"))
        elif tgt < 0 or tgt >= node_count:
            issues.append((i, f"Link {i}: target index {tgt} out of bounds [0, {node_count})"))

    if strict and issues:
        msg = "Invalid link indices:\n" + "\n".join(issue[1] for issue in issues)
        raise InvalidLinkError(msg)

    return issues


def validate_iterations(iterations: int) -> int:
    """
    Validate iteration count is positive.

    Args:
        iterations: Number of iterations

    Returns:
        Validated iteration count

    Raises:
        ValidationError: If iterations < 1
    """
    if iterations < 1:
        raise ValidationError(f"iterations must be >= 1, got {iterations}")
    return int(iterations)


def validate_epsilon(eps: float) -> float:
    """
    Validate the final step-size fraction of an annealing schedule.

    Args:
        eps: Ratio between the last and the first step size scale

    Returns:
        Validated epsilon as float

    Raises:
        ValidationError: If eps is not a positive finite number
    """
    eps = float(eps)
    if not math.isfinite(eps) or eps <= 0:
        raise ValidationError(f"eps must be a positive finite number, got {eps}")
    return eps


def validate_dimension(dimension: int) -> int:
    """
    Validate output dimensionality.

    Raises:
        ValidationError: If dimension < 1
    """
    if dimension < 1:
        raise ValidationError(f"dimension must be >= 1, got {dimension}")
    return int(dimension)


def _get_index(obj: Any, attr: str) -> Optional[int]:
    """Extract index from int, Node, or object with index attribute."""
    if hasattr(obj, attr):
        val = getattr(obj, attr, None)
    elif isinstance(obj, dict):
        val = obj.get(attr)
    else:
        val = None

    if val is None:
        return None
    if isinstance(val, int):
        return val
    if hasattr(val, "index") and val.index is not None:
        return int(val.index)
    return None


__all__ = [
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
    "validate_canvas_size",
    "validate_link_indices",
    "validate_iterations",
    "validate_epsilon",
    "validate_dimension",
]
