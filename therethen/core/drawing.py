"""Rectangle drawing gesture tracking."""

import logging
from enum import Enum
from typing import Callable, Optional

from therethen.core.projection import MapProjection
from therethen.models.geo import GeoRectangle, ScreenPoint, ScreenRect, ScreenSize, Viewport

logger = logging.getLogger(__name__)


class DrawingState(Enum):
    """State of an in-progress drag gesture."""

    IDLE = "idle"
    DRAGGING = "dragging"


class RectangleDrawing:
    """Turns a drag gesture on the map surface into a GeoRectangle.

    The owning view feeds touch events in; there is no cancel call. A view
    that goes away mid-drag simply drops the instance.
    """

    def __init__(
        self,
        on_changed: Optional[Callable[[ScreenRect], None]] = None,
        on_completed: Optional[Callable[[GeoRectangle], None]] = None,
    ):
        """
        Initialize the drawing state machine.

        Args:
            on_changed: Optional callback receiving the live preview rectangle
            on_completed: Optional callback receiving each finished rectangle
        """
        self.on_changed = on_changed
        self.on_completed = on_completed
        self.state = DrawingState.IDLE
        self.start_point: Optional[ScreenPoint] = None
        self.current_point: Optional[ScreenPoint] = None

    @property
    def is_drawing(self) -> bool:
        return self.state is DrawingState.DRAGGING

    @property
    def preview_rect(self) -> Optional[ScreenRect]:
        """Rectangle between the start and current points while dragging."""
        if self.start_point is None or self.current_point is None:
            return None
        return ScreenRect.from_points(self.start_point, self.current_point)

    def touch_moved(self, location: ScreenPoint, start_location: Optional[ScreenPoint] = None):
        """
        Handle a gesture change event.

        The first event of a gesture records the start point; later events
        only move the current point.

        Args:
            location: Current touch location
            start_location: Where the gesture began, if the event source tracks it
        """
        if self.state is DrawingState.IDLE:
            self.state = DrawingState.DRAGGING
            self.start_point = start_location or location
            logger.debug(f"Drag started at ({self.start_point.x}, {self.start_point.y})")

        self.current_point = location

        if self.on_changed:
            self.on_changed(self.preview_rect)

    def touch_ended(self, location: ScreenPoint, viewport: Viewport, size: ScreenSize) -> Optional[GeoRectangle]:
        """
        Handle the end of a gesture.

        Zero-area gestures still produce a rectangle.

        Args:
            location: Final touch location
            viewport: Visible map region at the time of release
            size: Pixel size of the surface

        Returns:
            The completed rectangle, or None if no drag was in progress
        """
        rectangle = None

        if self.start_point is not None:
            rect = ScreenRect.from_points(self.start_point, location)
            rectangle = GeoRectangle(
                top_left=MapProjection.point_to_coordinate(viewport, size, rect.min_point),
                bottom_right=MapProjection.point_to_coordinate(viewport, size, rect.max_point),
            )
            logger.debug(f"Drag completed: {rect}")

            if self.on_completed:
                self.on_completed(rectangle)

        self.reset()
        return rectangle

    def reset(self):
        """Return to the idle state."""
        self.state = DrawingState.IDLE
        self.start_point = None
        self.current_point = None
