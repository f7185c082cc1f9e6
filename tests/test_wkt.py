"""Tests for WKT polygon encoding and decoding."""

import pytest

from therethen.models.geo import GeoPoint, GeoRectangle
from therethen.utils.wkt import decode_polygon, encode_polygon, polygon_center, rectangle_ring

EPSILON = 1e-6

MISSION = GeoRectangle(
    top_left=GeoPoint(latitude=37.8, longitude=-122.5),
    bottom_right=GeoPoint(latitude=37.7, longitude=-122.3),
)


def assert_points_close(actual, expected):
    assert len(actual) == len(expected)
    for a, e in zip(actual, expected):
        assert a.latitude == pytest.approx(e.latitude, abs=EPSILON)
        assert a.longitude == pytest.approx(e.longitude, abs=EPSILON)


def test_encode_writes_longitude_first_closed_ring():
    """Test the exact WKT produced for a rectangle."""
    assert encode_polygon(MISSION) == (
        "POLYGON((-122.5 37.8, -122.3 37.8, -122.3 37.7, -122.5 37.7, -122.5 37.8))"
    )


def test_encode_normalizes_corner_order():
    """Test that corners given in the wrong order produce the same ring."""
    swapped = GeoRectangle(top_left=MISSION.bottom_right, bottom_right=MISSION.top_left)
    south_west_first = GeoRectangle(
        top_left=GeoPoint(latitude=37.7, longitude=-122.5),
        bottom_right=GeoPoint(latitude=37.8, longitude=-122.3),
    )

    assert encode_polygon(swapped) == encode_polygon(MISSION)
    assert encode_polygon(south_west_first) == encode_polygon(MISSION)


def test_decode_recovers_encoded_ring():
    """Test that decoding an encoded rectangle yields the same five points."""
    rectangles = [
        MISSION,
        GeoRectangle(GeoPoint(-33.85, 151.20), GeoPoint(-33.90, 151.25)),
        GeoRectangle(GeoPoint(0.0, 0.0), GeoPoint(0.0, 0.0)),
        GeoRectangle(GeoPoint(64.123456789, -21.987654321), GeoPoint(63.5, -20.25)),
    ]

    for rectangle in rectangles:
        points = decode_polygon(encode_polygon(rectangle))

        assert len(points) == 5
        assert_points_close(points, rectangle_ring(rectangle))
        assert points[0] == points[-1]


def test_decode_reads_longitude_before_latitude():
    """Test that the first number of each pair is the longitude."""
    points = decode_polygon("POLYGON((10 20, 30 40))")

    assert points == [GeoPoint(latitude=20.0, longitude=10.0), GeoPoint(latitude=40.0, longitude=30.0)]


def test_decode_not_a_polygon():
    """Test that text without a ring decodes to nothing."""
    assert decode_polygon("not a polygon") == []


def test_decode_empty_interior():
    """Test that an empty ring decodes to nothing."""
    assert decode_polygon("POLYGON(())") == []


def test_decode_missing_closing_delimiter():
    """Test that an unterminated ring decodes to nothing."""
    assert decode_polygon("POLYGON((1 2, 3 4") == []


def test_decode_skips_malformed_pairs():
    """Test that unparseable or non-finite pairs are skipped and order is kept."""
    points = decode_polygon("POLYGON((1 2, abc def, 5, nan 3, 7 inf, 3 4))")

    assert points == [GeoPoint(latitude=2.0, longitude=1.0), GeoPoint(latitude=4.0, longitude=3.0)]


def test_decode_tolerates_extra_whitespace_and_ordinates():
    """Test pairs with tabs, padding and a third ordinate."""
    points = decode_polygon("POLYGON((  1\t2 , 3   4 99 ))")

    assert points == [GeoPoint(latitude=2.0, longitude=1.0), GeoPoint(latitude=4.0, longitude=3.0)]


def test_polygon_center():
    """Test centroid of decoded points."""
    center = polygon_center([GeoPoint(0.0, 0.0), GeoPoint(2.0, 4.0)])

    assert center == GeoPoint(latitude=1.0, longitude=2.0)
    assert polygon_center([]) is None
