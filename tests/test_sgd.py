"""
Tests for the stress SGD solver.
"""

import numpy as np
import pytest

from stress_layout.sparse import (
    build_graph,
    build_schedule,
    build_terms,
    random_embedding,
    sgd,
    sgd_pass,
)
from stress_layout.types import Term


def distance(X, i, j):
    return float(np.linalg.norm(X[i] - X[j]))


class TestRandomEmbedding:
    """Tests for random_embedding."""

    def test_shape_and_bounds(self):
        X = random_embedding(10, 3, np.random.default_rng(0), low=-2.0, high=2.0)
        assert X.shape == (10, 3)
        assert np.all(X >= -2.0)
        assert np.all(X < 2.0)

    def test_reproducible(self):
        a = random_embedding(5, 2, np.random.default_rng(9))
        b = random_embedding(5, 2, np.random.default_rng(9))
        np.testing.assert_array_equal(a, b)


class TestSgdPass:
    """Tests for a single pass of term updates."""

    def test_full_step_satisfies_term(self):
        """With both steps capped at 1 a single term is met exactly."""
        X = np.array([[0.0, 0.0], [3.0, 0.0]])
        sgd_pass(X, [Term(0, 1, 1.0, 1.0, 1.0)], 1.0, np.random.default_rng(0))

        np.testing.assert_allclose(X, [[1.0, 0.0], [2.0, 0.0]])

    def test_one_sided_step(self):
        """A zero weight keeps that endpoint in place."""
        X = np.array([[0.0, 0.0], [3.0, 0.0]])
        sgd_pass(X, [Term(0, 1, 1.0, 1.0, 0.0)], 1.0, np.random.default_rng(0))

        np.testing.assert_allclose(X[1], [3.0, 0.0])
        np.testing.assert_allclose(X[0], [1.0, 0.0])

    def test_step_is_capped(self):
        """Huge step sizes never overshoot past the target."""
        X = np.array([[0.0, 0.0], [0.0, 4.0]])
        sgd_pass(X, [Term(0, 1, 2.0, 1.0, 1.0)], 1e6, np.random.default_rng(0))

        assert distance(X, 0, 1) == pytest.approx(2.0)

    def test_pushes_apart(self):
        """Points closer than the target move apart."""
        X = np.array([[0.0, 0.0], [0.5, 0.0]])
        sgd_pass(X, [Term(0, 1, 2.0, 0.5, 0.5)], 1.0, np.random.default_rng(0))

        assert distance(X, 0, 1) > 0.5

    def test_coincident_points_stay_finite(self):
        """Coincident endpoints are separated instead of producing NaN."""
        X = np.array([[0.5, 0.5], [0.5, 0.5]])
        sgd_pass(X, [Term(0, 1, 1.0, 1.0, 1.0)], 1.0, np.random.default_rng(0))

        assert np.all(np.isfinite(X))
        assert distance(X, 0, 1) == pytest.approx(1.0, abs=1e-6)

    def test_general_dimension(self):
        X = np.array([[0.0, 0.0, 0.0], [0.0, 0.0, 3.0]])
        sgd_pass(X, [Term(0, 1, 1.0, 1.0, 1.0)], 1.0, np.random.default_rng(0))

        np.testing.assert_allclose(X, [[0.0, 0.0, 1.0], [0.0, 0.0, 2.0]])

    def test_fixed_vertex_does_not_move(self):
        """A pinned endpoint stays put while the free one takes its own step."""
        X = np.array([[0.0, 0.0], [3.0, 0.0]])
        terms = [Term(0, 1, 1.0, 1.0, 1.0)]
        sgd_pass(X, terms, 1.0, np.random.default_rng(0), fixed=[True, False])

        np.testing.assert_allclose(X, [[0.0, 0.0], [2.0, 0.0]])

    def test_one_dimension(self):
        X = np.array([[0.0], [4.0]])
        sgd_pass(X, [Term(0, 1, 2.0, 1.0, 1.0)], 1.0, np.random.default_rng(0))

        np.testing.assert_allclose(X, [[1.0], [3.0]])

    def test_terms_not_reordered(self):
        """The caller's term list is left as given."""
        terms = [Term(0, 1, 1.0, 1.0, 1.0), Term(1, 2, 1.0, 1.0, 1.0), Term(0, 2, 2.0, 1.0, 1.0)]
        before = list(terms)
        sgd_pass(np.random.default_rng(1).random((3, 2)), terms, 1.0, np.random.default_rng(2))
        assert terms == before


class TestSgd:
    """Tests for the full annealed run."""

    def test_empty_schedule_leaves_positions(self):
        X = np.array([[0.0, 0.0], [3.0, 0.0]])
        sgd(X, [Term(0, 1, 1.0, 1.0, 1.0)], [], np.random.default_rng(0))
        np.testing.assert_array_equal(X, [[0.0, 0.0], [3.0, 0.0]])

    def test_returns_same_array(self):
        X = np.zeros((2, 2))
        X[1, 0] = 1.0
        result = sgd(X, [Term(0, 1, 1.0, 1.0, 1.0)], [1.0], np.random.default_rng(0))
        assert result is X

    def test_path_converges(self):
        """A 3-vertex path ends up straight with unit edges."""
        graph = build_graph(3, [0, 1], [1, 2], [1.0, 1.0])
        terms = build_terms(graph, [0, 0, 0])
        rng = np.random.default_rng(4)
        X = random_embedding(3, 2, rng)

        sgd(X, terms, build_schedule(terms, 50, 0.1), rng)

        assert distance(X, 0, 1) == pytest.approx(1.0, abs=0.05)
        assert distance(X, 1, 2) == pytest.approx(1.0, abs=0.05)
        assert distance(X, 0, 2) == pytest.approx(2.0, abs=0.05)

    def test_reproducible(self):
        graph = build_graph(4, [0, 1, 2, 3], [1, 2, 3, 0], [1.0] * 4)
        terms = build_terms(graph, [0, 1, 2, 3])
        schedule = build_schedule(terms, 20, 0.1)

        results = []
        for _ in range(2):
            rng = np.random.default_rng(123)
            results.append(sgd(random_embedding(4, 2, rng), terms, schedule, rng))

        np.testing.assert_array_equal(results[0], results[1])

    def test_fixed_mask_forwarded(self):
        graph = build_graph(3, [0, 1], [1, 2], [1.0, 1.0])
        terms = build_terms(graph, [0, 0, 0])
        rng = np.random.default_rng(5)
        X = random_embedding(3, 2, rng)
        start = X[2].copy()

        sgd(X, terms, build_schedule(terms, 30, 0.1), rng, fixed=[False, False, True])

        np.testing.assert_array_equal(X[2], start)
        assert distance(X, 1, 2) == pytest.approx(1.0, abs=0.05)
