"""Helpers for working with geographic areas on the client."""

from therethen.core.config import DEFAULT_AREA_CENTER, DEFAULT_AREA_NAME
from therethen.models.entities import GeographicArea
from therethen.models.geo import GeoPoint, GeoRectangle, TimePeriod
from therethen.models.requests import CreateAreaRequest
from therethen.utils.wkt import decode_polygon, encode_polygon, polygon_center


def build_area_request(
    rectangle: GeoRectangle,
    period: TimePeriod,
    name: str | None = DEFAULT_AREA_NAME,
    created_by: str | None = None,
) -> CreateAreaRequest:
    """
    Build the create-area payload for a drawn rectangle.

    Args:
        rectangle: Drawn rectangle, corners in any order
        period: Time period to attach
        name: Area name
        created_by: Optional creator id

    Returns:
        CreateAreaRequest with the rectangle encoded as WKT
    """
    return CreateAreaRequest.for_period(encode_polygon(rectangle), period, name=name, created_by=created_by)


def merge_new_areas(existing: list[GeographicArea], fetched: list[GeographicArea]) -> list[GeographicArea]:
    """
    Append fetched areas that are not already loaded.

    Identifiers are assumed stable and never reused.

    Args:
        existing: Areas already loaded
        fetched: Newly fetched areas

    Returns:
        New list: existing areas followed by the unseen fetched ones, in order
    """
    seen = {area.id for area in existing}
    merged = list(existing)
    for area in fetched:
        if area.id not in seen:
            seen.add(area.id)
            merged.append(area)
    return merged


def area_center(area: GeographicArea) -> GeoPoint:
    """
    Representative point for placing an area marker.

    Args:
        area: Area to locate

    Returns:
        Mean of the area's polygon points, or the default center when the
        area has no usable geometry
    """
    if area.geometry_wkt:
        center = polygon_center(decode_polygon(area.geometry_wkt))
        if center is not None:
            return center

    lat, lon = DEFAULT_AREA_CENTER
    return GeoPoint(latitude=lat, longitude=lon)
