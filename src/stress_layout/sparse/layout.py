"""
Sparse stress layout.

Based on the papers:
"A Sparse Stress Model" by Ortmann, Klimenta and Brandes (2016)
"Graph drawing by stochastic gradient descent" by Zheng, Pawar and Goodman (2018)

Stress terms are restricted to pivot-vertex pairs (weighted by the size of
the pivot's region) and to direct edges, and are satisfied one at a time by
stochastic gradient descent under an annealed step size.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Sequence

import numpy as np

from ..base import IterativeLayout
from ..metrics import pair_stress, term_arrays
from ..types import (
    Event,
    EventType,
    Graph,
    LinkLike,
    NodeLike,
    SizeType,
    Term,
)
from ..validation import ValidationError, validate_epsilon
from .graph import build_graph
from .pivots import select_pivots
from .project import DEFAULT_EPSILON, DEFAULT_ITERATIONS, DEFAULT_PIVOTS, clamp_pivots
from .schedule import build_schedule
from .sgd import random_embedding, sgd_pass
from .terms import build_terms


class SparseStressLayout(IterativeLayout):
    """
    Sparse stress-majorization layout solved by SGD.

    Ideal distances are weighted shortest-path lengths, with each link
    contributing its ``length`` (or ``edge_length`` if it has none). Each
    tick performs one full pass over all terms with the next step size of
    the schedule, so ``iterations`` is the schedule length.

    Nodes with a truthy ``fixed`` keep their given ``x``/``y``: terms only
    move their free endpoint, and the drawing is not re-centered.

    Example:
        layout = SparseStressLayout(
            nodes=[{}, {}, {}, {}],
            links=[
                {'source': 0, 'target': 1},
                {'source': 1, 'target': 2},
                {'source': 2, 'target': 3, 'length': 200},
            ],
            size=(800, 600),
            pivots=2,
            random_seed=42,
        )
        layout.run()
    """

    def __init__(
        self,
        *,
        nodes: Optional[Sequence[NodeLike]] = None,
        links: Optional[Sequence[LinkLike]] = None,
        size: SizeType = (1.0, 1.0),
        random_seed: Optional[int] = None,
        on_start: Optional[Callable[[Optional[Event]], None]] = None,
        on_tick: Optional[Callable[[Optional[Event]], None]] = None,
        on_end: Optional[Callable[[Optional[Event]], None]] = None,
        # IterativeLayout parameters
        iterations: int = DEFAULT_ITERATIONS,
        # SparseStress-specific parameters
        pivots: int = DEFAULT_PIVOTS,
        epsilon: float = DEFAULT_EPSILON,
        edge_length: float = 100.0,
    ) -> None:
        """
        Initialize sparse stress layout.

        Args:
            nodes: List of nodes
            links: List of links
            size: Canvas size as (width, height)
            random_seed: Random seed for reproducible layouts
            on_start: Callback for start event
            on_tick: Callback for tick event
            on_end: Callback for end event
            iterations: Number of SGD passes (schedule length)
            pivots: Number of pivots. Clamped to the node count at run time.
            epsilon: Final step size relative to the strongest term.
            edge_length: Length used for links without an explicit length.

        Raises:
            ValidationError: If a parameter is out of range.
        """
        super().__init__(
            nodes=nodes,
            links=links,
            size=size,
            random_seed=random_seed,
            on_start=on_start,
            on_tick=on_tick,
            on_end=on_end,
            iterations=iterations,
        )

        self._pivots: int = self._check_pivots(pivots)
        self._epsilon: float = validate_epsilon(epsilon)
        self._edge_length: float = self._check_edge_length(edge_length)

        # Internal state
        self._graph: Optional[Graph] = None
        self._terms: list[Term] = []
        self._schedule: list[float] = []
        self._positions: Optional[np.ndarray] = None
        self._rng: Optional[np.random.Generator] = None
        self._iteration: int = 0
        self._fixed: Optional[list[bool]] = None
        self._term_index: Optional[tuple[np.ndarray, np.ndarray, np.ndarray]] = None

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def pivots(self) -> int:
        """Get the requested number of pivots."""
        return self._pivots

    @pivots.setter
    def pivots(self, value: int) -> None:
        """Set the number of pivots (minimum 1)."""
        self._pivots = self._check_pivots(value)

    @property
    def epsilon(self) -> float:
        """Get the final step size fraction."""
        return self._epsilon

    @epsilon.setter
    def epsilon(self, value: float) -> None:
        """Set the final step size fraction."""
        self._epsilon = validate_epsilon(value)

    @property
    def edge_length(self) -> float:
        """Get default length for links without one."""
        return self._edge_length

    @edge_length.setter
    def edge_length(self, value: float) -> None:
        """Set default length for links without one."""
        self._edge_length = self._check_edge_length(value)

    @property
    def terms(self) -> list[Term]:
        """Stress terms of the last run."""
        return self._terms

    @property
    def schedule(self) -> list[float]:
        """Step sizes of the last run."""
        return self._schedule

    @property
    def positions(self) -> Optional[np.ndarray]:
        """Current n x 2 coordinate matrix, or None before run()."""
        return self._positions

    @staticmethod
    def _check_pivots(value: int) -> int:
        if value < 1:
            raise ValidationError(f"pivots must be >= 1, got {value}")
        return int(value)

    @staticmethod
    def _check_edge_length(value: float) -> float:
        value = float(value)
        if value <= 0:
            raise ValidationError(f"edge_length must be positive, got {value}")
        return value

    # -------------------------------------------------------------------------
    # Layout Implementation
    # -------------------------------------------------------------------------

    def run(self, **kwargs: Any) -> "SparseStressLayout":
        """
        Run the layout algorithm.

        Keyword Args:
            center_graph: Center graph in the canvas after completion (default: True).
                Ignored when any node is fixed.

        Returns:
            self for chaining

        Raises:
            InvalidLinkError: If a link references a missing node.
            ValidationError: If the links do not form a valid weighted graph.
            ConnectivityError: If the graph is not connected.
        """
        self._initialize_indices()
        self.validate()

        center = kwargs.get("center_graph", True)

        n = len(self._nodes)
        if n == 0:
            return self

        self._rng = np.random.default_rng(self._random_seed)
        self._graph = build_graph(n, *self._edge_list(self._edge_length))
        nearest = select_pivots(self._graph, clamp_pivots(self._pivots, n), 0, self._rng)
        self._terms = build_terms(self._graph, nearest)

        w, h = self._canvas_size
        self._positions = random_embedding(n, 2, self._rng) * np.array([w, h])
        self._fixed = [bool(node.fixed) for node in self._nodes]
        for k, node in enumerate(self._nodes):
            if self._fixed[k]:
                self._positions[k] = (node.x, node.y)
        self._term_index = term_arrays(self._terms)
        self._iteration = 0
        self._schedule = (
            build_schedule(self._terms, self._iterations, self._epsilon) if self._terms else []
        )
        self._alpha = 1.0

        self.trigger({"type": EventType.start, "alpha": self._alpha})

        self.kick()

        if center and not any(self._fixed):
            self._center_positions(self._positions)
        self._write_positions(self._positions)

        self.trigger({"type": EventType.end, "alpha": 0.0})

        return self

    def tick(self) -> bool:
        """
        Perform one SGD pass with the next step size.

        Returns:
            True once the schedule is exhausted, False otherwise.
        """
        # These are set in run() before tick() is called
        assert self._positions is not None
        assert self._rng is not None
        assert self._term_index is not None

        if self._iteration >= len(self._schedule):
            return True

        eta = self._schedule[self._iteration]
        sgd_pass(self._positions, self._terms, eta, self._rng, self._fixed)

        self._iteration += 1
        self._alpha = eta / self._schedule[0]

        self.trigger(
            {
                "type": EventType.tick,
                "alpha": self._alpha,
                "stress": pair_stress(self._positions, *self._term_index),
            }
        )

        return self._iteration >= len(self._schedule)


__all__ = ["SparseStressLayout"]
