"""Tests for ring validation, auto-closing, and repair."""

import pytest
from shapely.geometry import GeometryCollection, LineString, MultiPolygon, Polygon

from setback_engine.core.geometry.validation import (
    ValidationSeverity,
    auto_close_ring,
    distinct_ring_vertices,
    largest_polygon,
    parse_ring,
    validate_coordinates,
    validate_ring,
)


class TestParseRing:
    def test_numeric_pairs(self):
        coords, issues = parse_ring([[7.5, 6.0], [7.6, 6.0], [7.6, 6.1]])
        assert coords == [(7.5, 6.0), (7.6, 6.0), (7.6, 6.1)]
        assert issues == []

    def test_altitude_is_ignored(self):
        coords, _ = parse_ring([[0, 0, 12.5], [10, 0, 12.5], [10, 10, 13.0]])
        assert coords == [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0)]

    def test_non_numeric_position(self):
        _, issues = parse_ring([[0, 0], ["east", 1], [10, 10]])
        assert any(i.code == "NON_NUMERIC_COORD" for i in issues)

    def test_short_position(self):
        _, issues = parse_ring([[0, 0], [1], [10, 10]])
        assert any(i.code == "NON_NUMERIC_COORD" for i in issues)

    def test_not_a_list(self):
        _, issues = parse_ring("0,0 10,0 10,10")
        assert any(i.code == "NOT_A_RING" for i in issues)


class TestValidateCoordinates:
    def test_valid_triangle(self):
        issues = validate_coordinates([(0, 0), (10, 0), (5, 10)])
        errors = [i for i in issues if i.severity == ValidationSeverity.ERROR]
        assert len(errors) == 0

    def test_empty(self):
        issues = validate_coordinates([])
        assert any(i.code == "EMPTY_RING" for i in issues)

    def test_too_few_points(self):
        issues = validate_coordinates([(0, 0), (10, 0)])
        assert any(i.code == "TOO_FEW_POINTS" for i in issues)

    def test_closed_triangle_of_two_vertices(self):
        # a -> b -> a is closed but has only two distinct vertices
        issues = validate_coordinates([(0, 0), (10, 0), (0, 0)])
        assert any(i.code == "TOO_FEW_POINTS" for i in issues)

    def test_nan_coordinate(self):
        issues = validate_coordinates([(0, 0), (float("nan"), 1), (5, 10)])
        assert any(i.code == "NON_FINITE_COORD" for i in issues)

    def test_inf_coordinate(self):
        issues = validate_coordinates([(0, 0), (float("inf"), 1), (5, 10)])
        assert any(i.code == "NON_FINITE_COORD" for i in issues)

    def test_consecutive_duplicates(self):
        issues = validate_coordinates([(0, 0), (0, 0), (10, 0), (5, 10)])
        assert any(i.code == "CONSECUTIVE_DUPLICATE" for i in issues)

    def test_all_collinear_is_a_warning(self):
        issues = validate_coordinates([(0, 0), (1, 0), (2, 0), (3, 0)])
        collinear = [i for i in issues if i.code == "ALL_COLLINEAR"]
        assert collinear and collinear[0].severity == ValidationSeverity.WARNING


class TestAutoCloseRing:
    def test_already_closed(self):
        coords = [(0, 0), (10, 0), (5, 10), (0, 0)]
        closed, issues = auto_close_ring(coords)
        assert closed == coords
        assert issues == []

    def test_appends_first_vertex(self):
        closed, issues = auto_close_ring([(0, 0), (10, 0), (5, 10)])
        assert closed[-1] == (0, 0)
        assert len(closed) == 4
        assert any(i.code == "AUTO_CLOSED" for i in issues)

    def test_too_few_points_unchanged(self):
        coords = [(0, 0), (10, 0)]
        closed, _ = auto_close_ring(coords)
        assert closed == coords


class TestValidateRing:
    def test_valid_square(self):
        result = validate_ring([[0, 0], [10, 0], [10, 10], [0, 10], [0, 0]])
        assert result.valid
        assert result.polygon.area == pytest.approx(100)

    def test_clockwise_is_rewound(self):
        result = validate_ring([[0, 0], [0, 10], [10, 10], [10, 0], [0, 0]])
        assert result.polygon.exterior.is_ccw
        assert any(i.code == "CW_ORIENTATION" for i in result.issues)

    def test_self_intersecting_bowtie_is_repaired(self):
        result = validate_ring([[0, 0], [10, 10], [10, 0], [0, 10], [0, 0]])
        assert result.valid
        assert result.polygon.is_valid
        assert any(i.code == "AUTO_REPAIRED" for i in result.issues)

    def test_self_intersecting_without_fix(self):
        result = validate_ring([[0, 0], [10, 10], [10, 0], [0, 10], [0, 0]], auto_fix=False)
        assert not result.valid
        assert result.polygon is None

    def test_zero_area_passes_through(self):
        result = validate_ring([[0, 0], [1, 0], [2, 0], [0, 0]])
        assert result.valid
        assert result.polygon.area == 0
        assert any(i.code == "ZERO_AREA" for i in result.issues)

    def test_revisited_positions_are_not_distinct(self):
        result = validate_ring([[0, 0], [10, 0], [0, 0], [10, 0], [0, 0]])
        assert not result.valid
        assert result.errors[0].code == "TOO_FEW_POINTS"

    def test_rejects_nan(self):
        result = validate_ring([[0, 0], [float("nan"), 1], [5, 10]])
        assert not result.valid


class TestHelpers:
    def test_distinct_vertices_drop_closing_vertex(self):
        assert distinct_ring_vertices([(0, 0), (1, 0), (1, 0), (1, 1), (0, 0)]) == [
            (0, 0), (1, 0), (1, 1),
        ]

    def test_largest_polygon_of_multipolygon(self):
        small = Polygon([(0, 0), (1, 0), (1, 1), (0, 1)])
        big = Polygon([(5, 5), (9, 5), (9, 9), (5, 9)])
        assert largest_polygon(MultiPolygon([small, big])).equals(big)

    def test_largest_polygon_ignores_lines(self):
        square = Polygon([(0, 0), (1, 0), (1, 1), (0, 1)])
        mixed = GeometryCollection([LineString([(0, 0), (5, 5)]), square])
        assert largest_polygon(mixed).equals(square)

    def test_largest_polygon_none_without_polygons(self):
        assert largest_polygon(GeometryCollection([LineString([(0, 0), (5, 5)])])) is None
