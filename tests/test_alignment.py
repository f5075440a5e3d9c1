"""
Tests for point-set alignment.
"""

import math

import numpy as np
import pytest

from stress_layout.alignment import (
    Registration,
    procrustes_align,
    procrustes_distance,
    similarity_align,
    similarity_registration,
)
from stress_layout.validation import AlignmentError

# =============================================================================
# Test Fixtures
# =============================================================================


def rotation(degrees):
    t = math.radians(degrees)
    return np.array([[math.cos(t), -math.sin(t)], [math.sin(t), math.cos(t)]])


def rms_radius(P):
    """Root mean square distance from the centroid."""
    return float(np.sqrt(np.mean(np.sum((P - P.mean(axis=0)) ** 2, axis=1))))


def create_asymmetric_points():
    """Five points without any rotational or mirror symmetry."""
    return np.array([[0.0, 0.0], [2.0, 0.0], [2.5, 1.0], [0.5, 3.0], [-1.0, 1.5]])


# =============================================================================
# Similarity Alignment Tests
# =============================================================================


class TestSimilarityAlignment:
    """Tests for closed-form similarity registration."""

    def test_two_point_registration(self):
        """Rotation by 90 degrees and scale 2 are recovered."""
        r = similarity_registration([[0, 0], [1, 0]], [[0, 0], [0, 2]])

        assert r.tx == pytest.approx(0.0)
        assert r.ty == pytest.approx(0.0)
        assert r.scale == pytest.approx(2.0)
        assert r.rotation == pytest.approx(90.0)

    def test_recovers_similarity_transform(self):
        A = create_asymmetric_points()
        B = 1.7 * A @ rotation(35).T + np.array([4.0, -2.0])

        np.testing.assert_allclose(similarity_align(A, B), B, atol=1e-9)

    def test_half_turn(self):
        result = similarity_align([[-1, 0], [1, 0], [1, 1]], [[1, 0], [-1, 0], [-1, -1]])
        np.testing.assert_allclose(result, [[1, 0], [-1, 0], [-1, -1]], atol=1e-9)

    def test_identity(self):
        A = create_asymmetric_points()
        r = similarity_registration(A, A)

        assert r.scale == pytest.approx(1.0)
        assert r.rotation == pytest.approx(0.0, abs=1e-9)
        np.testing.assert_allclose(r.apply(A), A, atol=1e-9)

    def test_registration_apply(self):
        r = Registration(tx=1.0, ty=2.0, sct=0.0, sst=1.0)
        np.testing.assert_allclose(r.apply([[1.0, 0.0]]), [[1.0, 3.0]])

    def test_coincident_points_raise(self):
        with pytest.raises(AlignmentError, match="coincide"):
            similarity_align([[1, 1], [1, 1]], [[0, 0], [1, 0]])


# =============================================================================
# Procrustes Alignment Tests
# =============================================================================


class TestProcrustesAlignment:
    """Tests for normalized Procrustes alignment with reflection search."""

    def test_rotation(self):
        A = create_asymmetric_points()
        B = A @ rotation(30).T

        np.testing.assert_allclose(procrustes_align(A, B), B, atol=1e-9)

    def test_reflection(self):
        """A mirrored, scaled and translated copy is matched exactly."""
        A = create_asymmetric_points()
        B = 2.0 * (A * np.array([-1.0, 1.0])) + np.array([5.0, 5.0])

        np.testing.assert_allclose(procrustes_align(A, B), B, atol=1e-9)

    def test_half_turn(self):
        A = create_asymmetric_points()
        B = A @ rotation(180).T

        np.testing.assert_allclose(procrustes_align(A, B), B, atol=1e-9)

    def test_result_in_target_frame(self):
        """The aligned set shares the target's centroid and RMS radius."""
        rng = np.random.default_rng(0)
        A = rng.random((10, 2))
        B = rng.random((10, 2)) * 50 + 100
        result = procrustes_align(A, B)

        np.testing.assert_allclose(result.mean(axis=0), B.mean(axis=0))
        assert rms_radius(result) == pytest.approx(rms_radius(B))

    def test_length_mismatch_raises(self):
        with pytest.raises(AlignmentError, match="equal length"):
            procrustes_align([[0, 0], [1, 0]], [[0, 0]])

    def test_non_planar_raises(self):
        with pytest.raises(AlignmentError, match="2D points"):
            procrustes_align([[0, 0, 0], [1, 0, 0]], [[0, 0, 0], [1, 0, 0]])

    def test_empty_raises(self):
        with pytest.raises(AlignmentError):
            procrustes_align([], [])

    def test_coincident_target_raises(self):
        with pytest.raises(AlignmentError, match="coincide"):
            procrustes_align([[0, 0], [1, 0]], [[2, 2], [2, 2]])


class TestProcrustesDistance:
    """Tests for procrustes_distance."""

    def test_sum_of_point_distances(self):
        assert procrustes_distance([[0, 0], [1, 1]], [[3, 4], [1, 1]]) == pytest.approx(5.0)

    def test_zero_for_identical(self):
        A = create_asymmetric_points()
        assert procrustes_distance(A, A) == 0.0
