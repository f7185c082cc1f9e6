"""Registry of backend endpoints.

Every API operation is one Endpoint: an HTTP method, a path template
relative to the base address and a decoder for the response body.
"""

from dataclasses import dataclass
from typing import Any, Callable

from therethen.models.entities import (
    Channel,
    ChannelMembership,
    DirectMessage,
    GeographicArea,
    LoginResponse,
    Message,
    MessageReaction,
    User,
    UserLocation,
    list_of,
    mapping_of,
)


@dataclass(frozen=True)
class Endpoint:
    """Description of a single API operation."""

    name: str
    method: str
    path: str
    response: Callable[[Any], Any]
    query: tuple[str, ...] = ()

    def format_path(self, **params: str) -> str:
        """
        Fill the path template.

        Args:
            **params: Values for the placeholders in the template

        Returns:
            Path relative to the base address
        """
        return self.path.format(**params)


ENDPOINTS: dict[str, Endpoint] = {
    # Authentication
    "login": Endpoint("login", "POST", "/token/", LoginResponse.from_dict),
    "refresh_token": Endpoint("refresh_token", "POST", "/token/refresh/", LoginResponse.from_dict),
    # Users
    "create_user": Endpoint("create_user", "POST", "/users/", LoginResponse.from_dict),
    "get_current_user": Endpoint("get_current_user", "GET", "/users/me/", User.from_dict),
    "update_profile": Endpoint("update_profile", "PATCH", "/users/update_profile/", User.from_dict),
    # Geographic areas
    "create_area": Endpoint("create_area", "POST", "/areas/", GeographicArea.from_dict),
    "search_areas_by_location": Endpoint(
        "search_areas_by_location", "POST", "/areas/search_by_location/", list_of(GeographicArea.from_dict)
    ),
    "search_areas_by_time": Endpoint(
        "search_areas_by_time", "POST", "/areas/search_by_time/", list_of(GeographicArea.from_dict)
    ),
    "search_areas_by_intersection": Endpoint(
        "search_areas_by_intersection", "POST", "/areas/search_by_intersection/", list_of(GeographicArea.from_dict)
    ),
    "list_areas": Endpoint("list_areas", "GET", "/areas/", list_of(GeographicArea.from_dict)),
    # Channels
    "create_channel": Endpoint("create_channel", "POST", "/channels/", Channel.from_dict),
    "list_my_channels": Endpoint("list_my_channels", "GET", "/channels/my_channels/", list_of(Channel.from_dict)),
    "join_channel": Endpoint("join_channel", "POST", "/channels/{channel_id}/join/", ChannelMembership.from_dict),
    "leave_channel": Endpoint("leave_channel", "POST", "/channels/{channel_id}/leave/", mapping_of(str)),
    "list_channel_members": Endpoint(
        "list_channel_members", "GET", "/channels/{channel_id}/members/", list_of(ChannelMembership.from_dict)
    ),
    # Messages
    "create_message": Endpoint("create_message", "POST", "/messages/", Message.from_dict),
    "list_messages_by_channel": Endpoint(
        "list_messages_by_channel", "GET", "/messages/by_channel/", list_of(Message.from_dict), query=("channel_id",)
    ),
    "react_to_message": Endpoint("react_to_message", "POST", "/reactions/", MessageReaction.from_dict),
    # Direct messages
    "send_direct_message": Endpoint("send_direct_message", "POST", "/direct-messages/", DirectMessage.from_dict),
    "get_conversation": Endpoint(
        "get_conversation",
        "GET",
        "/direct-messages/conversation/",
        list_of(DirectMessage.from_dict),
        query=("user_id",),
    ),
    "mark_message_read": Endpoint(
        "mark_message_read", "POST", "/direct-messages/{message_id}/mark_read/", DirectMessage.from_dict
    ),
    "get_unread_count": Endpoint("get_unread_count", "GET", "/direct-messages/unread_count/", mapping_of(int)),
    # User locations
    "create_location": Endpoint("create_location", "POST", "/locations/", UserLocation.from_dict),
    "list_locations": Endpoint("list_locations", "GET", "/locations/", list_of(UserLocation.from_dict)),
    "list_locations_by_area": Endpoint(
        "list_locations_by_area", "GET", "/locations/by_area/", list_of(UserLocation.from_dict), query=("area_id",)
    ),
}


def get_endpoint(name: str) -> Endpoint:
    """Get an endpoint by operation name.

    Args:
        name: Operation name (e.g., "list_areas")

    Returns:
        The endpoint descriptor

    Raises:
        ValueError: If no such operation exists
    """
    if name not in ENDPOINTS:
        raise ValueError(f"Unknown operation: {name}. Known operations: {', '.join(ENDPOINTS.keys())}")
    return ENDPOINTS[name]
