"""Tests for input validation module."""

import math

import pytest

from stress_layout import Link, Node
from stress_layout.validation import (
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
    validate_canvas_size,
    validate_dimension,
    validate_epsilon,
    validate_iterations,
    validate_link_indices,
)


class TestCanvasSizeValidation:
    """Tests for canvas size validation."""

    def test_valid_size(self):
        """Valid canvas size returns tuple."""
        w, h = validate_canvas_size([800, 600])
        assert w == 800.0
        assert h == 600.0

    def test_negative_width_raises(self):
        """Negative width raises InvalidCanvasSizeError."""
        with pytest.raises(InvalidCanvasSizeError, match="width must be positive"):
            validate_canvas_size([-100, 600])

    def test_zero_height_raises(self):
        """Zero height raises InvalidCanvasSizeError."""
        with pytest.raises(InvalidCanvasSizeError, match="height must be positive"):
            validate_canvas_size([800, 0])

    def test_single_element_raises(self):
        """Single element raises InvalidCanvasSizeError."""
        with pytest.raises(InvalidCanvasSizeError, match="must have 2 elements"):
            validate_canvas_size([800])


class TestLinkValidation:
    """Tests for link index validation."""

    def test_valid_links(self):
        """Valid links return empty issues list."""
        links = [Link(0, 1), Link(1, 2)]
        assert validate_link_indices(links, node_count=3) == []

    def test_valid_links_with_node_objects(self):
        """Links with Node objects validate correctly."""
        n0 = Node(index=0)
        n1 = Node(index=1)
        assert validate_link_indices([Link(n0, n1)], node_count=2) == []

    def test_dict_links(self):
        links = [{"source": 0, "target": 1}]
        assert validate_link_indices(links, node_count=2) == []

    def test_out_of_bounds_raises(self):
        with pytest.raises(InvalidLinkError, match="target index 5 out of bounds"):
            validate_link_indices([Link(0, 5)], node_count=3)

    def test_non_strict_returns_issues(self):
        issues = validate_link_indices([Link(-1, 0), Link(0, 1)], node_count=2, strict=False)
        assert len(issues) == 1
        assert issues[0][0] == 0


class TestParameterValidation:
    """Tests for solver parameter validation."""

    def test_iterations(self):
        assert validate_iterations(5) == 5
        with pytest.raises(ValidationError, match="iterations must be >= 1"):
            validate_iterations(0)

    def test_epsilon(self):
        assert validate_epsilon(0.1) == 0.1
        assert validate_epsilon(2) == 2.0
        for bad in (0, -0.1, math.inf, math.nan):
            with pytest.raises(ValidationError, match="eps must be"):
                validate_epsilon(bad)

    def test_dimension(self):
        assert validate_dimension(3) == 3
        with pytest.raises(ValidationError, match="dimension must be >= 1"):
            validate_dimension(0)


class TestExceptionHierarchy:
    """Tests for the error taxonomy."""

    @pytest.mark.parametrize(
        "error",
        [InvalidEdgeIndexError, InvalidEdgeLengthError, AsymmetricEdgeError, SelfLoopError],
    )
    def test_edge_errors(self, error):
        assert issubclass(error, InvalidEdgeError)
        assert issubclass(error, ValidationError)
        assert issubclass(error, ValueError)

    @pytest.mark.parametrize("error", [ConnectivityError, SamplingError])
    def test_layout_errors(self, error):
        assert issubclass(error, LayoutError)
        assert not issubclass(error, ValidationError)

    def test_alignment_error(self):
        assert issubclass(AlignmentError, ValidationError)

    def test_parameter_warning(self):
        assert issubclass(ParameterWarning, UserWarning)
