"""Typed request payloads, one per API operation.

Field names match the wire. encode_payload() is the only serializer; it
drops optional fields that are unset instead of sending null.
"""

from dataclasses import asdict, dataclass, field, fields, is_dataclass
from typing import Any

from therethen.core.config import DEFAULT_SEARCH_RADIUS_KM
from therethen.models.geo import TimePeriod


def encode_payload(payload: Any) -> dict[str, Any]:
    """
    Serialize a request payload to a JSON-ready dictionary.

    Args:
        payload: Dataclass instance from this module

    Returns:
        Dictionary of wire fields, without fields whose value is None

    Raises:
        TypeError: If payload is not a dataclass instance
    """
    if not is_dataclass(payload) or isinstance(payload, type):
        raise TypeError(f"Request payload must be a dataclass instance, got {type(payload).__name__}")

    return {key: value for key, value in asdict(payload).items() if value is not None}


@dataclass
class LoginRequest:
    email: str
    password: str


@dataclass
class RefreshRequest:
    refresh: str


@dataclass
class CreateUserRequest:
    email: str
    username: str
    password: str
    first_name: str = ""
    last_name: str = ""
    password_confirm: str = field(init=False)

    def __post_init__(self):
        self.password_confirm = self.password


@dataclass
class UpdateProfileRequest:
    first_name: str = ""
    last_name: str = ""


@dataclass
class CreateAreaRequest:
    geometry_wkt: str
    start_year: int
    end_year: int
    name: str = ""
    start_month: int | None = None
    end_month: int | None = None
    created_by: str | None = None

    @classmethod
    def for_period(
        cls, geometry_wkt: str, period: TimePeriod, name: str | None = None, created_by: str | None = None
    ) -> "CreateAreaRequest":
        """
        Build an area request from a WKT geometry and a time period.

        Args:
            geometry_wkt: Area geometry as WKT
            period: Time period attached to the area
            name: Optional display name
            created_by: Optional creator id

        Returns:
            CreateAreaRequest instance
        """
        return cls(
            geometry_wkt=geometry_wkt,
            start_year=period.start_year,
            end_year=period.end_year,
            name=name or "",
            start_month=period.start_month,
            end_month=period.end_month,
            created_by=created_by,
        )


@dataclass
class LocationSearchRequest:
    latitude: float
    longitude: float
    radius_km: float = DEFAULT_SEARCH_RADIUS_KM


@dataclass
class TimeSearchRequest:
    start_year: int | None = None
    end_year: int | None = None
    start_month: int | None = None
    end_month: int | None = None

    @classmethod
    def from_period(cls, period: TimePeriod) -> "TimeSearchRequest":
        return cls(**{f.name: getattr(period, f.name) for f in fields(cls)})


@dataclass
class IntersectionSearchRequest:
    geometry: str


@dataclass
class CreateChannelRequest:
    name: str
    area: str
    is_private: bool = False


@dataclass
class CreateMessageRequest:
    channel: str
    content: str
    is_anonymous: bool = True
    contains_pii: bool = False
    restricted_to_names: list[str] = field(default_factory=list)


@dataclass
class ReactionRequest:
    message: str
    reaction_type: str


@dataclass
class DirectMessageRequest:
    recipient: str
    content: str


@dataclass
class CreateLocationRequest:
    area: str
    visited_year: int
    visited_month: int | None = None
