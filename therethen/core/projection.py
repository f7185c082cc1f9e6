"""Screen to geographic coordinate conversion utilities.

Uses a flat equirectangular approximation of the visible viewport, which is
accurate enough for the small spans a user draws on.
"""

from therethen.models.geo import GeoPoint, GeoRectangle, ScreenPoint, ScreenRect, ScreenSize, Viewport


class MapProjection:
    """Utilities for mapping between a map surface and geographic coordinates.

    All methods require non-zero viewport spans and a non-zero surface size.
    """

    @staticmethod
    def point_to_coordinate(viewport: Viewport, size: ScreenSize, point: ScreenPoint) -> GeoPoint:
        """
        Convert a surface point to a geographic coordinate.

        Args:
            viewport: Visible map region
            size: Pixel size of the surface
            point: Point on the surface

        Returns:
            Geographic coordinate under the point
        """
        # Screen y grows downward while latitude grows northward
        lat = viewport.center.latitude - viewport.latitude_delta * (point.y / size.height - 0.5)
        lon = viewport.center.longitude + viewport.longitude_delta * (point.x / size.width - 0.5)
        return GeoPoint(latitude=lat, longitude=lon)

    @staticmethod
    def coordinate_to_point(viewport: Viewport, size: ScreenSize, coordinate: GeoPoint) -> ScreenPoint:
        """
        Convert a geographic coordinate to a surface point.

        Inverse of point_to_coordinate for the same viewport and size.

        Args:
            viewport: Visible map region
            size: Pixel size of the surface
            coordinate: Geographic coordinate

        Returns:
            Surface point, possibly outside the surface bounds
        """
        x = (
            (coordinate.longitude - viewport.center.longitude + viewport.longitude_delta * 0.5)
            / viewport.longitude_delta
            * size.width
        )
        y = (
            (viewport.center.latitude - coordinate.latitude + viewport.latitude_delta * 0.5)
            / viewport.latitude_delta
            * size.height
        )
        return ScreenPoint(x=x, y=y)

    @staticmethod
    def coordinate_to_screen_rect(viewport: Viewport, size: ScreenSize, rectangle: GeoRectangle) -> ScreenRect:
        """
        Project a geographic rectangle onto the surface.

        Args:
            viewport: Visible map region
            size: Pixel size of the surface
            rectangle: Geographic rectangle (corners in any order)

        Returns:
            Axis-aligned bounding rectangle of both projected corners
        """
        top_left = MapProjection.coordinate_to_point(viewport, size, rectangle.top_left)
        bottom_right = MapProjection.coordinate_to_point(viewport, size, rectangle.bottom_right)

        # Corners may swap order after projection
        return ScreenRect.from_points(top_left, bottom_right)
