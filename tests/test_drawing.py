"""Tests for the rectangle drawing state machine."""

import pytest

from therethen.core.drawing import DrawingState, RectangleDrawing
from therethen.models.geo import GeoPoint, ScreenPoint, ScreenRect, ScreenSize, Viewport
from therethen.utils.wkt import decode_polygon, encode_polygon

VIEWPORT = Viewport(center=GeoPoint(latitude=37.0, longitude=-122.0), latitude_delta=2.0, longitude_delta=4.0)
SIZE = ScreenSize(width=100, height=200)


def test_zero_movement_gesture_still_completes():
    """Test that touch-down and touch-up at the same point emit a degenerate rectangle."""
    completed = []
    drawing = RectangleDrawing(on_completed=completed.append)

    drawing.touch_moved(ScreenPoint(10, 10))
    rectangle = drawing.touch_ended(ScreenPoint(10, 10), VIEWPORT, SIZE)

    assert rectangle is not None
    assert completed == [rectangle]
    assert rectangle.top_left == rectangle.bottom_right
    assert rectangle.top_left.latitude == pytest.approx(37.9)
    assert rectangle.top_left.longitude == pytest.approx(-123.6)
    assert drawing.state is DrawingState.IDLE


def test_first_move_starts_drag_and_later_moves_update_current_point():
    """Test the idle -> dragging transition and live preview updates."""
    previews = []
    drawing = RectangleDrawing(on_changed=previews.append)
    assert drawing.state is DrawingState.IDLE
    assert drawing.preview_rect is None

    drawing.touch_moved(ScreenPoint(60, 20))
    assert drawing.state is DrawingState.DRAGGING
    assert drawing.start_point == ScreenPoint(60, 20)

    drawing.touch_moved(ScreenPoint(20, 80))
    drawing.touch_moved(ScreenPoint(30, 90))

    assert drawing.is_drawing
    assert drawing.start_point == ScreenPoint(60, 20)
    assert drawing.current_point == ScreenPoint(30, 90)
    assert previews[-1] == ScreenRect(x=30, y=20, width=30, height=70)
    assert len(previews) == 3


def test_start_location_from_event_source_is_used():
    """Test that an explicit gesture start location wins over the first move location."""
    drawing = RectangleDrawing()

    drawing.touch_moved(ScreenPoint(15, 15), start_location=ScreenPoint(10, 10))

    assert drawing.start_point == ScreenPoint(10, 10)


def test_drag_in_any_direction_uses_min_corner_as_top_left():
    """Test that dragging up-left yields the same rectangle as dragging down-right."""
    forward = RectangleDrawing()
    forward.touch_moved(ScreenPoint(25, 50))
    a = forward.touch_ended(ScreenPoint(75, 150), VIEWPORT, SIZE)

    backward = RectangleDrawing()
    backward.touch_moved(ScreenPoint(75, 150))
    b = backward.touch_ended(ScreenPoint(25, 50), VIEWPORT, SIZE)

    assert a == b
    assert a.top_left.latitude == pytest.approx(37.5)
    assert a.top_left.longitude == pytest.approx(-123.0)
    assert a.bottom_right.latitude == pytest.approx(36.5)
    assert a.bottom_right.longitude == pytest.approx(-121.0)


def test_end_without_drag_emits_nothing():
    """Test that a release with no preceding move does not complete."""
    completed = []
    drawing = RectangleDrawing(on_completed=completed.append)

    assert drawing.touch_ended(ScreenPoint(10, 10), VIEWPORT, SIZE) is None
    assert completed == []


def test_state_resets_between_gestures():
    """Test that each gesture records its own start point."""
    drawing = RectangleDrawing()
    drawing.touch_moved(ScreenPoint(0, 0))
    drawing.touch_ended(ScreenPoint(10, 10), VIEWPORT, SIZE)

    drawing.touch_moved(ScreenPoint(50, 50))

    assert drawing.start_point == ScreenPoint(50, 50)


def test_completed_rectangle_encodes_to_wkt():
    """Test the full path from gesture to WKT."""
    drawing = RectangleDrawing()
    drawing.touch_moved(ScreenPoint(0, 0))
    rectangle = drawing.touch_ended(ScreenPoint(100, 200), VIEWPORT, SIZE)

    points = decode_polygon(encode_polygon(rectangle))

    assert len(points) == 5
    assert points[0].latitude == pytest.approx(38.0)
    assert points[0].longitude == pytest.approx(-124.0)
    assert points[2].latitude == pytest.approx(36.0)
    assert points[2].longitude == pytest.approx(-120.0)
