"""
Common types for the stress layout engine.

This module provides the fundamental types shared by the engine and the
layout classes:
- Edge: Weighted adjacency entry (neighbor, length)
- Graph: Weighted undirected adjacency list
- Term: One pairwise target-distance constraint consumed by SGD
- Node: Graph vertex with position and properties
- Link: Edge connecting two nodes
- EventType: Layout lifecycle events
- Event: Event payload for callbacks
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, NamedTuple, Optional, Sequence, TypedDict, Union


class EventType(IntEnum):
    """
    Layout lifecycle events.

    - start: Layout iterations have begun
    - tick: Fired once per SGD pass (for animation)
    - end: Layout has run through its schedule or was stopped
    """

    start = 0
    tick = 1
    end = 2


class Event(TypedDict, total=False):
    """Event payload passed to event listeners."""

    type: EventType
    alpha: float
    stress: Optional[float]


class Edge(NamedTuple):
    """Adjacency entry: the neighbor index and the length of the edge to it."""

    target: int
    length: float


Graph = list[list[Edge]]
"""Weighted undirected adjacency list indexed by vertex."""


class Term:
    """
    Pairwise stress term between vertices ``i < j``.

    Attributes:
        i: Smaller vertex index
        j: Larger vertex index
        d: Target distance between the two vertices
        w_ij: Weight used when moving ``i``
        w_ji: Weight used when moving ``j``
    """

    __slots__ = ("i", "j", "d", "w_ij", "w_ji")

    def __init__(self, i: int, j: int, d: float, w_ij: float = 0.0, w_ji: float = 0.0) -> None:
        self.i = i
        self.j = j
        self.d = d
        self.w_ij = w_ij
        self.w_ji = w_ji

    @property
    def key(self) -> tuple[int, int]:
        """Unordered pair key ``(i, j)``."""
        return (self.i, self.j)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Term):
            return NotImplemented
        return (self.i, self.j, self.d, self.w_ij, self.w_ji) == (
            other.i,
            other.j,
            other.d,
            other.w_ij,
            other.w_ji,
        )

    def __repr__(self) -> str:
        return f"Term({self.i}, {self.j}, d={self.d:g}, w_ij={self.w_ij:g}, w_ji={self.w_ji:g})"


class Node:
    """
    Graph node with position and properties.

    Attributes:
        index: Index in nodes array (set by layout)
        x: X coordinate
        y: Y coordinate
        fixed: Nonzero pins the node at its given x/y during layout
    """

    def __init__(self, **kwargs: Any) -> None:
        """Initialize node with optional properties."""
        self.index: Optional[int] = kwargs.get("index")
        self.x: float = kwargs.get("x", 0.0)
        self.y: float = kwargs.get("y", 0.0)
        self.fixed: int = kwargs.get("fixed", 0)

        # Copy any additional custom properties
        for key, value in kwargs.items():
            if not hasattr(self, key):
                setattr(self, key, value)

    def __repr__(self) -> str:
        return f"Node(index={self.index}, x={self.x:.2f}, y={self.y:.2f})"


class Link:
    """
    Edge connecting two nodes.

    Attributes:
        source: Source node or node index
        target: Target node or node index
        length: Ideal edge length (optional)
    """

    def __init__(
        self,
        source: Union[Node, int],
        target: Union[Node, int],
        length: Optional[float] = None,
        **kwargs: Any,
    ) -> None:
        """
        Initialize link between two nodes.

        Args:
            source: Source node or node index (required)
            target: Target node or node index (required)
            length: Ideal edge length (optional)

        Raises:
            ValueError: If source or target is None
        """
        if source is None:
            raise ValueError("Link source cannot be None")
        if target is None:
            raise ValueError("Link target cannot be None")

        self.source = source
        self.target = target
        self.length = length

        for key, value in kwargs.items():
            if not hasattr(self, key):
                setattr(self, key, value)

    def __repr__(self) -> str:
        if isinstance(self.source, int):
            src: Any = self.source
        else:
            src = getattr(self.source, "index", None)
        if isinstance(self.target, int):
            tgt: Any = self.target
        else:
            tgt = getattr(self.target, "index", None)
        return f"Link({src} -> {tgt})"


# Type aliases for Pythonic API
NodeLike = Union[Node, dict[str, Any], Any]
"""Input type for nodes: Node objects, dicts, or objects with node attributes."""

LinkLike = Union[Link, dict[str, Any], Any]
"""Input type for links: Link objects, dicts, or objects with source/target."""

SizeType = Union[tuple[float, float], list[float], Sequence[float]]
"""Canvas size: (width, height) tuple, list, or sequence."""


__all__ = [
    "EventType",
    "Event",
    "Edge",
    "Graph",
    "Term",
    "Node",
    "Link",
    "NodeLike",
    "LinkLike",
    "SizeType",
]
