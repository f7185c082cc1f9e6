"""Data models for geographic and screen-space geometry."""

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class GeoPoint:
    """Geographic coordinate in degrees. Range is not validated."""

    latitude: float
    longitude: float

    def to_dict(self) -> Dict[str, float]:
        return {"latitude": self.latitude, "longitude": self.longitude}

    @classmethod
    def from_dict(cls, data: Dict[str, float]) -> "GeoPoint":
        return cls(latitude=float(data["latitude"]), longitude=float(data["longitude"]))


@dataclass(frozen=True)
class Viewport:
    """Visible map region defined by a center coordinate and an angular span.

    Both span components must be non-zero; the projection functions divide
    by them and do not guard against zero.
    """

    center: GeoPoint
    latitude_delta: float
    longitude_delta: float


@dataclass(frozen=True)
class ScreenPoint:
    """Pixel-space point. Screen y grows downward."""

    x: float
    y: float


@dataclass(frozen=True)
class ScreenSize:
    """Pixel-space size of the drawing surface."""

    width: float
    height: float


@dataclass(frozen=True)
class ScreenRect:
    """Axis-aligned pixel-space rectangle (origin + size)."""

    x: float
    y: float
    width: float
    height: float

    @property
    def min_point(self) -> ScreenPoint:
        return ScreenPoint(self.x, self.y)

    @property
    def max_point(self) -> ScreenPoint:
        return ScreenPoint(self.x + self.width, self.y + self.height)

    @property
    def mid_x(self) -> float:
        return self.x + self.width / 2

    @property
    def mid_y(self) -> float:
        return self.y + self.height / 2

    @classmethod
    def from_points(cls, a: ScreenPoint, b: ScreenPoint) -> "ScreenRect":
        """
        Build the bounding rectangle of two points in any order.

        Args:
            a: First corner
            b: Opposite corner

        Returns:
            ScreenRect with non-negative width and height
        """
        return cls(
            x=min(a.x, b.x),
            y=min(a.y, b.y),
            width=abs(b.x - a.x),
            height=abs(b.y - a.y),
        )


@dataclass(frozen=True)
class GeoRectangle:
    """A drawn area candidate defined by two opposite geographic corners.

    The corners are stored as produced; call normalized() before treating
    them as the true north-west / south-east corners.
    """

    top_left: GeoPoint
    bottom_right: GeoPoint

    @property
    def center(self) -> GeoPoint:
        return GeoPoint(
            latitude=(self.top_left.latitude + self.bottom_right.latitude) / 2,
            longitude=(self.top_left.longitude + self.bottom_right.longitude) / 2,
        )

    @property
    def span(self) -> tuple[float, float]:
        """Absolute (latitude_delta, longitude_delta) covered by the rectangle."""
        return (
            abs(self.top_left.latitude - self.bottom_right.latitude),
            abs(self.top_left.longitude - self.bottom_right.longitude),
        )

    def normalized(self) -> "GeoRectangle":
        """
        Return the rectangle with top_left at the north-west corner.

        Returns:
            GeoRectangle with top_left = (max lat, min lon) and
            bottom_right = (min lat, max lon)
        """
        lats = (self.top_left.latitude, self.bottom_right.latitude)
        lons = (self.top_left.longitude, self.bottom_right.longitude)
        return GeoRectangle(
            top_left=GeoPoint(latitude=max(lats), longitude=min(lons)),
            bottom_right=GeoPoint(latitude=min(lats), longitude=max(lons)),
        )

    def to_dict(self) -> Dict[str, Dict[str, float]]:
        return {
            "top_left": self.top_left.to_dict(),
            "bottom_right": self.bottom_right.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Dict[str, float]]) -> "GeoRectangle":
        return cls(
            top_left=GeoPoint.from_dict(data["top_left"]),
            bottom_right=GeoPoint.from_dict(data["bottom_right"]),
        )


@dataclass(frozen=True)
class TimePeriod:
    """Year range with optional months, embedded in area requests."""

    start_year: int
    end_year: int
    start_month: int | None = None
    end_month: int | None = None

    @property
    def display_text(self) -> str:
        """Human-readable label, e.g. '3/2020 - 7/2024' or '2020 - 2024'."""
        if self.start_month is not None and self.end_month is not None:
            return f"{self.start_month}/{self.start_year} - {self.end_month}/{self.end_year}"
        return f"{self.start_year} - {self.end_year}"
