"""
Base classes for the object layout API.

The functional engine (``stress_layout.sparse.project``) works on edge arrays
and coordinate matrices. The classes here wrap it for callers that hold a
list of nodes and links:

- BaseLayout: Node/link normalization, canvas, seed and event callbacks
- IterativeLayout: A layout advanced by repeated tick() calls
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Optional, Sequence

import numpy as np

if TYPE_CHECKING:
    from typing_extensions import Self

from .types import (
    Event,
    EventType,
    Link,
    LinkLike,
    Node,
    NodeLike,
    SizeType,
)
from .validation import (
    validate_canvas_size,
    validate_iterations,
    validate_link_indices,
)

Listener = Callable[[Optional[Event]], None]

_NODE_ATTRS = ("index", "x", "y", "fixed")
_LINK_ATTRS = ("length",)


class BaseLayout(ABC):
    """
    Abstract base class for layouts driven by a node and link list.

    Nodes may be given as Node objects, dicts or arbitrary objects carrying
    ``x``/``y`` attributes; links as Link objects, dicts or objects with
    ``source``/``target``. Both are normalized on assignment, so
    ``layout.nodes`` always holds Node instances whose coordinates are
    written back by run().
    """

    def __init__(
        self,
        *,
        nodes: Optional[Sequence[NodeLike]] = None,
        links: Optional[Sequence[LinkLike]] = None,
        size: SizeType = (1.0, 1.0),
        random_seed: Optional[int] = None,
        on_start: Optional[Listener] = None,
        on_tick: Optional[Listener] = None,
        on_end: Optional[Listener] = None,
    ) -> None:
        """
        Args:
            nodes: Graph vertices
            links: Graph edges, referencing nodes by index or by Node object
            size: Canvas size as (width, height); the drawing is centered in it
            random_seed: Seed of the layout's random generator
            on_start: Listener for the start event
            on_tick: Listener for tick events
            on_end: Listener for the end event
        """
        self._nodes: list[Node] = []
        self._links: list[Link] = []
        self._canvas_size: tuple[float, float] = (1.0, 1.0)
        self._events: dict[EventType, Listener] = {}
        self._random_seed: Optional[int] = random_seed

        if nodes is not None:
            self.nodes = nodes
        if links is not None:
            self.links = links
        self.size = size

        for event_type, listener in (
            (EventType.start, on_start),
            (EventType.tick, on_tick),
            (EventType.end, on_end),
        ):
            if listener:
                self._events[event_type] = listener

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def nodes(self) -> list[Node]:
        """Get the normalized list of nodes."""
        return self._nodes

    @nodes.setter
    def nodes(self, value: Sequence[NodeLike]) -> None:
        """Set nodes from Node objects, dicts, or objects with node attributes."""
        self._nodes = [self._as_node(item) for item in value]

    @property
    def links(self) -> list[Link]:
        """Get the normalized list of links."""
        return self._links

    @links.setter
    def links(self, value: Sequence[LinkLike]) -> None:
        """Set links from Link objects, dicts, or objects with source/target."""
        self._links = [self._as_link(item) for item in value]

    @property
    def size(self) -> tuple[float, float]:
        """Canvas size as (width, height)."""
        return self._canvas_size

    @size.setter
    def size(self, value: SizeType) -> None:
        """Set canvas size; raises InvalidCanvasSizeError unless both sides are positive."""
        self._canvas_size = validate_canvas_size(value)

    @property
    def random_seed(self) -> Optional[int]:
        """Seed for the random generator created by run(); None for fresh entropy."""
        return self._random_seed

    @random_seed.setter
    def random_seed(self, value: Optional[int]) -> None:
        """Set the random seed used by the next run()."""
        self._random_seed = value

    @staticmethod
    def _as_node(item: NodeLike) -> Node:
        if isinstance(item, Node):
            return item
        if isinstance(item, dict):
            return Node(**item)
        return Node(**{a: getattr(item, a) for a in _NODE_ATTRS if hasattr(item, a)})

    @staticmethod
    def _as_link(item: LinkLike) -> Link:
        if isinstance(item, Link):
            return item
        if isinstance(item, dict):
            return Link(**item)
        extra = {a: getattr(item, a) for a in _LINK_ATTRS if hasattr(item, a)}
        return Link(getattr(item, "source", 0), getattr(item, "target", 0), **extra)

    # -------------------------------------------------------------------------
    # Event System
    # -------------------------------------------------------------------------

    def on(self, event: EventType | str, callback: Listener) -> Self:
        """
        Register ``callback`` for an event, replacing any previous listener.

        Args:
            event: EventType member or its name ("start", "tick", "end")
            callback: Called with the event payload

        Returns:
            self (for chaining)
        """
        if isinstance(event, str):
            event = EventType[event]
        self._events[event] = callback
        return self

    def trigger(self, event: Event) -> None:
        """Deliver ``event`` to the listener registered for its type, if any."""
        listener = self._events.get(event.get("type"))  # type: ignore[arg-type]
        if listener is not None:
            listener(event)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def validate(self) -> Self:
        """
        Check that every link references an existing node.

        run() calls this; call it directly to fail before doing any work.

        Raises:
            InvalidLinkError: If a link endpoint is out of range.
        """
        if self._links:
            validate_link_indices(self._links, len(self._nodes), strict=True)
        return self

    @abstractmethod
    def run(self, **kwargs: Any) -> Self:
        """Compute the layout and write coordinates into the nodes."""

    def stop(self) -> Self:
        return self

    # -------------------------------------------------------------------------
    # Helpers for subclasses
    # -------------------------------------------------------------------------

    def _initialize_indices(self) -> None:
        for i, node in enumerate(self._nodes):
            if node.index is None:
                node.index = i

    @staticmethod
    def _endpoint(end: Any) -> int:
        if isinstance(end, int):
            return end
        return end.index if end.index is not None else 0

    def _edge_list(self, default_length: float) -> tuple[list[int], list[int], list[float]]:
        """
        Flatten the links into parallel ``(I, J, V)`` edge arrays.

        Links without a ``length`` get ``default_length``.
        """
        I: list[int] = []
        J: list[int] = []
        V: list[float] = []
        for link in self._links:
            I.append(self._endpoint(link.source))
            J.append(self._endpoint(link.target))
            V.append(default_length if link.length is None else float(link.length))
        return I, J, V

    def _center_positions(self, positions: np.ndarray) -> None:
        """Translate ``positions`` in place so its bounding box is centered in the canvas."""
        if len(positions) == 0:
            return
        middle = (positions.min(axis=0) + positions.max(axis=0)) / 2
        positions += np.asarray(self._canvas_size) / 2 - middle

    def _write_positions(self, positions: np.ndarray) -> None:
        for node, (x, y) in zip(self._nodes, positions):
            node.x = float(x)
            node.y = float(y)


class IterativeLayout(BaseLayout):
    """
    A layout advanced one tick() at a time.

    kick() calls tick() up to ``iterations`` times and stops early when a
    tick reports completion or when stop() is called, e.g. from a tick
    listener. ``alpha`` reports progress: 1.0 at the start, 0.0 once stopped.
    """

    def __init__(
        self,
        *,
        nodes: Optional[Sequence[NodeLike]] = None,
        links: Optional[Sequence[LinkLike]] = None,
        size: SizeType = (1.0, 1.0),
        random_seed: Optional[int] = None,
        on_start: Optional[Listener] = None,
        on_tick: Optional[Listener] = None,
        on_end: Optional[Listener] = None,
        iterations: int = 300,
    ) -> None:
        """
        Args:
            iterations: Maximum number of ticks per run

        Raises:
            ValidationError: If iterations < 1
        """
        super().__init__(
            nodes=nodes,
            links=links,
            size=size,
            random_seed=random_seed,
            on_start=on_start,
            on_tick=on_tick,
            on_end=on_end,
        )
        self._alpha: float = 1.0
        self._running: bool = False
        self._iterations: int = validate_iterations(iterations)

    @property
    def alpha(self) -> float:
        return self._alpha

    @property
    def iterations(self) -> int:
        return self._iterations

    @iterations.setter
    def iterations(self, value: int) -> None:
        self._iterations = validate_iterations(value)

    @property
    def running(self) -> bool:
        """True while kick() is looping."""
        return self._running

    @abstractmethod
    def tick(self) -> bool:
        """Advance the layout by one step; return True when finished."""

    def kick(self) -> None:
        self._running = True
        for _ in range(self._iterations):
            if not self._running or self.tick():
                break
        self._running = False

    def stop(self) -> Self:
        """Halt the tick loop after the current tick."""
        self._alpha = 0.0
        self._running = False
        return self


__all__ = [
    "BaseLayout",
    "IterativeLayout",
]
