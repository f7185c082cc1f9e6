"""Typed client for the JSON backend API."""

import asyncio
import json
import logging
from dataclasses import is_dataclass
from typing import Any, Callable, Optional

import aiohttp
from yarl import URL

from therethen.core.config import DEFAULT_SEARCH_RADIUS_KM, ClientConfig
from therethen.core.endpoints import get_endpoint
from therethen.core.errors import InvalidEndpoint, NetworkFailure, ServerFailure
from therethen.core.session import AuthSession
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
)
from therethen.models.geo import TimePeriod
from therethen.models.requests import (
    CreateAreaRequest,
    CreateChannelRequest,
    CreateLocationRequest,
    CreateMessageRequest,
    CreateUserRequest,
    DirectMessageRequest,
    IntersectionSearchRequest,
    LocationSearchRequest,
    LoginRequest,
    ReactionRequest,
    RefreshRequest,
    TimeSearchRequest,
    UpdateProfileRequest,
    encode_payload,
)

logger = logging.getLogger(__name__)


class APIClient:
    """Client for the backend REST API.

    Each call is attempted exactly once and either returns the decoded
    response or raises InvalidEndpoint, NetworkFailure or ServerFailure.
    """

    def __init__(self, config: ClientConfig, auth: Optional[AuthSession] = None):
        """
        Initialize API client.

        Args:
            config: Backend connection settings
            auth: Session holding the bearer token; a new one is created if omitted
        """
        self.config = config
        self.auth = auth or AuthSession(config.token)
        self.session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self):
        """Async context manager entry."""
        self.session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.config.request_timeout))
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        if self.session:
            await self.session.close()
            self.session = None

    def build_url(self, path: str, query: Optional[dict[str, str]] = None) -> URL:
        """
        Compose the target URL from the base address and a route.

        Args:
            path: Backend-relative route
            query: Optional query parameters

        Returns:
            Absolute URL

        Raises:
            InvalidEndpoint: If the result is not an absolute http(s) URL
        """
        raw = f"{self.config.base_url}{path}"
        try:
            url = URL(raw)
        except (TypeError, ValueError) as e:
            raise InvalidEndpoint(raw) from e

        if not url.is_absolute() or url.scheme not in ("http", "https") or not url.host:
            raise InvalidEndpoint(raw)

        if query:
            url = url.update_query(query)
        return url

    def build_headers(self) -> dict[str, str]:
        """Request headers, with Authorization only when a token is set."""
        headers = {"Content-Type": "application/json"}
        headers.update(self.auth.authorization_header())
        return headers

    async def request(
        self,
        path: str,
        method: str = "GET",
        body: Any = None,
        response: Optional[Callable[[Any], Any]] = None,
        query: Optional[dict[str, str]] = None,
    ) -> Any:
        """
        Send a request and decode the response.

        Args:
            path: Backend-relative route
            method: HTTP method
            body: Request payload dataclass or JSON-serializable mapping
            response: Decoder applied to the parsed JSON body; raw JSON if omitted
            query: Optional query parameters

        Returns:
            Decoded response

        Raises:
            InvalidEndpoint: If the URL cannot be composed
            NetworkFailure: On transport errors
            ServerFailure: On non-2xx responses and undecodable bodies
        """
        if self.session is None:
            raise RuntimeError("APIClient must be used as an async context manager")

        url = self.build_url(path, query)
        payload = encode_payload(body) if is_dataclass(body) else body

        logger.debug(f"{method} {url}")
        try:
            async with self.session.request(method, url, headers=self.build_headers(), json=payload) as resp:
                status = resp.status
                content = await resp.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"{method} {url} failed: {e!r}")
            raise NetworkFailure(e) from e

        logger.debug(f"{method} {url} -> HTTP {status} ({len(content)} bytes)")

        if not 200 <= status <= 299:
            message = self._error_message(status, content)
            logger.warning(f"{method} {url} rejected: {message}")
            raise ServerFailure(message, status=status)

        try:
            data = json.loads(content)
            return response(data) if response else data
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise ServerFailure(f"Decoding error: {e!r}", status=status) from e

    @staticmethod
    def _error_message(status: int, content: bytes) -> str:
        """Best available description of a rejected request."""
        try:
            data = json.loads(content)
            if isinstance(data, dict) and isinstance(data.get("error"), str):
                return data["error"]
        except ValueError:
            pass

        try:
            text = content.decode("utf-8")
        except UnicodeDecodeError:
            return f"HTTP {status}"
        return f"HTTP {status}: {text}"

    async def call(self, operation: str, body: Any = None, **params: str) -> Any:
        """
        Invoke a registered operation.

        Args:
            operation: Operation name from the endpoint registry
            body: Optional request payload
            **params: Path placeholders and query parameters of the endpoint

        Returns:
            Decoded response
        """
        endpoint = get_endpoint(operation)
        query = {key: str(params.pop(key)) for key in endpoint.query if key in params}
        return await self.request(
            endpoint.format_path(**params),
            method=endpoint.method,
            body=body,
            response=endpoint.response,
            query=query or None,
        )

    # Authentication

    async def login(self, email: str, password: str) -> LoginResponse:
        tokens = await self.call("login", LoginRequest(email=email, password=password))
        self.auth.set_token(tokens.access)
        return tokens

    async def refresh_token(self, refresh: str) -> LoginResponse:
        tokens = await self.call("refresh_token", RefreshRequest(refresh=refresh))
        self.auth.set_token(tokens.access)
        return tokens

    def sign_out(self):
        """Clear the session token."""
        self.auth.clear()

    # Users

    async def create_user(
        self,
        email: str,
        username: str,
        password: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
    ) -> LoginResponse:
        tokens = await self.call(
            "create_user",
            CreateUserRequest(
                email=email,
                username=username,
                password=password,
                first_name=first_name or "",
                last_name=last_name or "",
            ),
        )
        self.auth.set_token(tokens.access)
        return tokens

    async def get_current_user(self) -> User:
        return await self.call("get_current_user")

    async def update_profile(self, first_name: Optional[str] = None, last_name: Optional[str] = None) -> User:
        return await self.call(
            "update_profile", UpdateProfileRequest(first_name=first_name or "", last_name=last_name or "")
        )

    # Geographic areas

    async def create_geographic_area(self, request: CreateAreaRequest) -> GeographicArea:
        return await self.call("create_area", request)

    async def search_areas_by_location(
        self, latitude: float, longitude: float, radius_km: float = DEFAULT_SEARCH_RADIUS_KM
    ) -> list[GeographicArea]:
        return await self.call(
            "search_areas_by_location",
            LocationSearchRequest(latitude=latitude, longitude=longitude, radius_km=radius_km),
        )

    async def search_areas_by_time(self, period: TimePeriod | TimeSearchRequest) -> list[GeographicArea]:
        if isinstance(period, TimePeriod):
            period = TimeSearchRequest.from_period(period)
        return await self.call("search_areas_by_time", period)

    async def search_areas_by_intersection(self, geometry_wkt: str) -> list[GeographicArea]:
        return await self.call("search_areas_by_intersection", IntersectionSearchRequest(geometry=geometry_wkt))

    async def get_all_areas(self) -> list[GeographicArea]:
        return await self.call("list_areas")

    # Channels

    async def create_channel(self, name: str, area_id: str, is_private: bool = False) -> Channel:
        return await self.call("create_channel", CreateChannelRequest(name=name, area=area_id, is_private=is_private))

    async def get_my_channels(self) -> list[Channel]:
        return await self.call("list_my_channels")

    async def join_channel(self, channel_id: str) -> ChannelMembership:
        return await self.call("join_channel", channel_id=channel_id)

    async def leave_channel(self, channel_id: str) -> dict[str, str]:
        return await self.call("leave_channel", channel_id=channel_id)

    async def get_channel_members(self, channel_id: str) -> list[ChannelMembership]:
        return await self.call("list_channel_members", channel_id=channel_id)

    # Messages

    async def create_message(
        self,
        channel_id: str,
        content: str,
        is_anonymous: bool = True,
        contains_pii: bool = False,
        restricted_to_names: Optional[list[str]] = None,
    ) -> Message:
        return await self.call(
            "create_message",
            CreateMessageRequest(
                channel=channel_id,
                content=content,
                is_anonymous=is_anonymous,
                contains_pii=contains_pii,
                restricted_to_names=list(restricted_to_names or []),
            ),
        )

    async def get_messages_by_channel(self, channel_id: str) -> list[Message]:
        return await self.call("list_messages_by_channel", channel_id=channel_id)

    async def react_to_message(self, message_id: str, reaction_type: str) -> MessageReaction:
        return await self.call("react_to_message", ReactionRequest(message=message_id, reaction_type=reaction_type))

    # Direct messages

    async def send_direct_message(self, recipient_id: str, content: str) -> DirectMessage:
        return await self.call("send_direct_message", DirectMessageRequest(recipient=recipient_id, content=content))

    async def get_conversation(self, user_id: str) -> list[DirectMessage]:
        return await self.call("get_conversation", user_id=user_id)

    async def mark_message_as_read(self, message_id: str) -> DirectMessage:
        return await self.call("mark_message_read", message_id=message_id)

    async def get_unread_count(self) -> dict[str, int]:
        return await self.call("get_unread_count")

    # User locations

    async def create_user_location(
        self, area_id: str, visited_year: int, visited_month: Optional[int] = None
    ) -> UserLocation:
        return await self.call(
            "create_location",
            CreateLocationRequest(area=area_id, visited_year=visited_year, visited_month=visited_month),
        )

    async def get_user_locations(self) -> list[UserLocation]:
        return await self.call("list_locations")

    async def get_user_locations_by_area(self, area_id: str) -> list[UserLocation]:
        return await self.call("list_locations_by_area", area_id=area_id)
