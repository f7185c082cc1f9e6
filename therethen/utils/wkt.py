"""Utility functions for encoding and decoding WKT polygons."""

import logging
import math

from therethen.models.geo import GeoPoint, GeoRectangle

logger = logging.getLogger(__name__)

RING_START = "(("
RING_END = "))"


def rectangle_ring(rectangle: GeoRectangle) -> list[GeoPoint]:
    """
    Build the closed ring for a rectangle.

    The rectangle is normalized first so the ring always starts at the
    north-west corner and runs east, south, west and back.

    Args:
        rectangle: Rectangle with corners in any order

    Returns:
        Five points, the last equal to the first
    """
    rect = rectangle.normalized()
    top_left = rect.top_left
    bottom_right = rect.bottom_right
    return [
        top_left,
        GeoPoint(latitude=top_left.latitude, longitude=bottom_right.longitude),
        bottom_right,
        GeoPoint(latitude=bottom_right.latitude, longitude=top_left.longitude),
        top_left,
    ]


def encode_polygon(rectangle: GeoRectangle) -> str:
    """
    Encode a rectangle as a WKT POLYGON string.

    Args:
        rectangle: Rectangle to encode

    Returns:
        String of the form 'POLYGON((lon lat, lon lat, lon lat, lon lat, lon lat))'
    """
    pairs = ", ".join(f"{point.longitude!r} {point.latitude!r}" for point in rectangle_ring(rectangle))
    return f"POLYGON{RING_START}{pairs}{RING_END}"


def decode_polygon(wkt: str) -> list[GeoPoint]:
    """
    Decode the coordinate ring of a WKT polygon.

    Pairs are read in WKT order (longitude first). Pairs that are not two
    finite numbers are skipped. Never raises on malformed input.

    Args:
        wkt: WKT text

    Returns:
        Successfully parsed points in input order, empty if the text has no ring
    """
    start = wkt.find(RING_START)
    if start == -1:
        return []
    start += len(RING_START)

    end = wkt.find(RING_END, start)
    if end == -1:
        return []

    points = []
    for pair in wkt[start:end].split(","):
        tokens = pair.split()
        if len(tokens) < 2:
            continue
        try:
            lon, lat = float(tokens[0]), float(tokens[1])
        except ValueError:
            logger.debug(f"Skipping unparseable WKT pair: {pair!r}")
            continue
        if not (math.isfinite(lon) and math.isfinite(lat)):
            continue
        points.append(GeoPoint(latitude=lat, longitude=lon))

    return points


def polygon_center(points: list[GeoPoint]) -> GeoPoint | None:
    """
    Arithmetic mean of a list of points.

    Args:
        points: Decoded ring points

    Returns:
        Mean point, or None for an empty list
    """
    if not points:
        return None

    return GeoPoint(
        latitude=sum(p.latitude for p in points) / len(points),
        longitude=sum(p.longitude for p in points) / len(points),
    )
