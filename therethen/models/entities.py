"""Server-owned records decoded from the JSON API.

Wire names are snake_case. Optional fields missing from a payload decode to
None and are omitted again by to_dict(). A missing required field raises
KeyError and a wrongly typed one raises TypeError; the API client reports
both as decoding errors.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Optional, TypeVar

T = TypeVar("T")


def _check(key: str, value: Any, kind: type) -> Any:
    # bool is an int subclass but never a valid int field
    if not isinstance(value, kind) or (kind is not bool and isinstance(value, bool)):
        raise TypeError(f"Field {key!r} is not {kind.__name__}: {value!r}")
    return value


def _required(data: dict, key: str, kind: type) -> Any:
    return _check(key, data[key], kind)


def _optional(data: dict, key: str, decode: Callable[[Any], T] | type | None = None) -> Optional[T]:
    value = data.get(key)
    if value is None or decode is None:
        return value
    if isinstance(decode, type):
        return _check(key, value, decode)
    return decode(value)


def _put(result: dict, key: str, value: Any):
    if value is not None:
        result[key] = value


@dataclass
class LoginResponse:
    """Token pair returned by login, signup and refresh."""

    access: str
    refresh: str

    def to_dict(self) -> dict:
        return {"access": self.access, "refresh": self.refresh}

    @classmethod
    def from_dict(cls, data: dict) -> "LoginResponse":
        return cls(access=_required(data, "access", str), refresh=_required(data, "refresh", str))


@dataclass
class User:
    id: str
    email: str
    username: str
    is_verified: bool
    created_at: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    verification_date: Optional[str] = None

    def to_dict(self) -> dict:
        result = {
            "id": self.id,
            "email": self.email,
            "username": self.username,
            "is_verified": self.is_verified,
            "created_at": self.created_at,
        }
        _put(result, "first_name", self.first_name)
        _put(result, "last_name", self.last_name)
        _put(result, "verification_date", self.verification_date)
        return result

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        return cls(
            id=_required(data, "id", str),
            email=_required(data, "email", str),
            username=_required(data, "username", str),
            is_verified=_required(data, "is_verified", bool),
            created_at=_required(data, "created_at", str),
            first_name=_optional(data, "first_name", str),
            last_name=_optional(data, "last_name", str),
            verification_date=_optional(data, "verification_date", str),
        )


@dataclass
class GeographicArea:
    """A persisted area with its time range.

    start_year <= end_year by convention; not enforced client-side.
    """

    id: str
    start_year: int
    end_year: int
    name: Optional[str] = None
    geometry_wkt: Optional[str] = None
    start_month: Optional[int] = None
    end_month: Optional[int] = None
    created_by: Optional[User] = None
    created_at: Optional[str] = None

    def to_dict(self) -> dict:
        result = {"id": self.id, "start_year": self.start_year, "end_year": self.end_year}
        _put(result, "name", self.name)
        _put(result, "geometry_wkt", self.geometry_wkt)
        _put(result, "start_month", self.start_month)
        _put(result, "end_month", self.end_month)
        if self.created_by is not None:
            result["created_by"] = self.created_by.to_dict()
        _put(result, "created_at", self.created_at)
        return result

    @classmethod
    def from_dict(cls, data: dict) -> "GeographicArea":
        return cls(
            id=_required(data, "id", str),
            start_year=_required(data, "start_year", int),
            end_year=_required(data, "end_year", int),
            name=_optional(data, "name", str),
            geometry_wkt=_optional(data, "geometry_wkt", str),
            start_month=_optional(data, "start_month", int),
            end_month=_optional(data, "end_month", int),
            created_by=_optional(data, "created_by", User.from_dict),
            created_at=_optional(data, "created_at", str),
        )


@dataclass
class Channel:
    id: str
    name: str
    area: GeographicArea
    is_private: bool
    member_count: int
    created_by: Optional[User] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def to_dict(self) -> dict:
        result = {
            "id": self.id,
            "name": self.name,
            "area": self.area.to_dict(),
            "is_private": self.is_private,
            "member_count": self.member_count,
        }
        if self.created_by is not None:
            result["created_by"] = self.created_by.to_dict()
        _put(result, "created_at", self.created_at)
        _put(result, "updated_at", self.updated_at)
        return result

    @classmethod
    def from_dict(cls, data: dict) -> "Channel":
        return cls(
            id=_required(data, "id", str),
            name=_required(data, "name", str),
            area=GeographicArea.from_dict(data["area"]),
            is_private=_required(data, "is_private", bool),
            member_count=_required(data, "member_count", int),
            created_by=_optional(data, "created_by", User.from_dict),
            created_at=_optional(data, "created_at", str),
            updated_at=_optional(data, "updated_at", str),
        )


@dataclass
class Message:
    id: str
    channel: Channel
    author: User
    content: str
    is_anonymous: bool
    contains_pii: bool
    restricted_to_names: list[str] = field(default_factory=list)
    reactions: dict[str, int] = field(default_factory=dict)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def to_dict(self) -> dict:
        result = {
            "id": self.id,
            "channel": self.channel.to_dict(),
            "author": self.author.to_dict(),
            "content": self.content,
            "is_anonymous": self.is_anonymous,
            "contains_pii": self.contains_pii,
            "restricted_to_names": list(self.restricted_to_names),
            "reactions": dict(self.reactions),
        }
        _put(result, "created_at", self.created_at)
        _put(result, "updated_at", self.updated_at)
        return result

    @classmethod
    def from_dict(cls, data: dict) -> "Message":
        return cls(
            id=_required(data, "id", str),
            channel=Channel.from_dict(data["channel"]),
            author=User.from_dict(data["author"]),
            content=_required(data, "content", str),
            is_anonymous=_required(data, "is_anonymous", bool),
            contains_pii=_required(data, "contains_pii", bool),
            restricted_to_names=list(_required(data, "restricted_to_names", list)),
            reactions=mapping_of(int)(data["reactions"]),
            created_at=_optional(data, "created_at", str),
            updated_at=_optional(data, "updated_at", str),
        )


@dataclass
class DirectMessage:
    id: str
    sender: User
    recipient: User
    content: str
    is_read: bool
    created_at: str
    created_by: Optional[User] = None

    def to_dict(self) -> dict:
        result = {
            "id": self.id,
            "sender": self.sender.to_dict(),
            "recipient": self.recipient.to_dict(),
            "content": self.content,
            "is_read": self.is_read,
            "created_at": self.created_at,
        }
        if self.created_by is not None:
            result["created_by"] = self.created_by.to_dict()
        return result

    @classmethod
    def from_dict(cls, data: dict) -> "DirectMessage":
        return cls(
            id=_required(data, "id", str),
            sender=User.from_dict(data["sender"]),
            recipient=User.from_dict(data["recipient"]),
            content=_required(data, "content", str),
            is_read=_required(data, "is_read", bool),
            created_at=_required(data, "created_at", str),
            created_by=_optional(data, "created_by", User.from_dict),
        )


@dataclass
class ChannelMembership:
    id: str
    channel: Channel
    user: User
    joined_at: str
    is_admin: bool
    created_at: str
    created_by: Optional[User] = None

    def to_dict(self) -> dict:
        result = {
            "id": self.id,
            "channel": self.channel.to_dict(),
            "user": self.user.to_dict(),
            "joined_at": self.joined_at,
            "is_admin": self.is_admin,
            "created_at": self.created_at,
        }
        if self.created_by is not None:
            result["created_by"] = self.created_by.to_dict()
        return result

    @classmethod
    def from_dict(cls, data: dict) -> "ChannelMembership":
        return cls(
            id=_required(data, "id", str),
            channel=Channel.from_dict(data["channel"]),
            user=User.from_dict(data["user"]),
            joined_at=_required(data, "joined_at", str),
            is_admin=_required(data, "is_admin", bool),
            created_at=_required(data, "created_at", str),
            created_by=_optional(data, "created_by", User.from_dict),
        )


@dataclass
class UserLocation:
    """Record that a user was in an area at a given year (and month)."""

    id: str
    user: User
    area: GeographicArea
    visited_year: int
    created_at: str
    visited_month: Optional[int] = None
    created_by: Optional[User] = None

    def to_dict(self) -> dict:
        result = {
            "id": self.id,
            "user": self.user.to_dict(),
            "area": self.area.to_dict(),
            "visited_year": self.visited_year,
            "created_at": self.created_at,
        }
        _put(result, "visited_month", self.visited_month)
        if self.created_by is not None:
            result["created_by"] = self.created_by.to_dict()
        return result

    @classmethod
    def from_dict(cls, data: dict) -> "UserLocation":
        return cls(
            id=_required(data, "id", str),
            user=User.from_dict(data["user"]),
            area=GeographicArea.from_dict(data["area"]),
            visited_year=_required(data, "visited_year", int),
            created_at=_required(data, "created_at", str),
            visited_month=_optional(data, "visited_month", int),
            created_by=_optional(data, "created_by", User.from_dict),
        )


@dataclass
class MessageReaction:
    id: str
    message: Message
    user: User
    reaction_type: str
    created_at: str
    created_by: Optional[User] = None

    def to_dict(self) -> dict:
        result = {
            "id": self.id,
            "message": self.message.to_dict(),
            "user": self.user.to_dict(),
            "reaction_type": self.reaction_type,
            "created_at": self.created_at,
        }
        if self.created_by is not None:
            result["created_by"] = self.created_by.to_dict()
        return result

    @classmethod
    def from_dict(cls, data: dict) -> "MessageReaction":
        return cls(
            id=_required(data, "id", str),
            message=Message.from_dict(data["message"]),
            user=User.from_dict(data["user"]),
            reaction_type=_required(data, "reaction_type", str),
            created_at=_required(data, "created_at", str),
            created_by=_optional(data, "created_by", User.from_dict),
        )


@dataclass
class Page(Generic[T]):
    """Paginated list envelope. Cursors are passed through untouched."""

    count: int
    results: list[T]
    next: Optional[str] = None
    previous: Optional[str] = None

    @classmethod
    def decoder(cls, item: Callable[[dict], T]) -> Callable[[dict], "Page[T]"]:
        """
        Build a decoder for pages of the given record type.

        Args:
            item: Decoder for a single result

        Returns:
            Function turning a page payload into a Page
        """

        def decode(data: dict) -> "Page[T]":
            return cls(
                count=_required(data, "count", int),
                results=[item(entry) for entry in data["results"]],
                next=_optional(data, "next", str),
                previous=_optional(data, "previous", str),
            )

        return decode


def list_of(item: Callable[[dict], T]) -> Callable[[list], list[T]]:
    """
    Build a decoder for a JSON array of records.

    Args:
        item: Decoder for a single element

    Returns:
        Function turning a JSON array into a list of records
    """

    def decode(data: list) -> list[T]:
        if not isinstance(data, list):
            raise TypeError(f"Expected a JSON array, got {type(data).__name__}")
        return [item(entry) for entry in data]

    return decode


def mapping_of(value_type: type) -> Callable[[dict], dict]:
    """
    Build a decoder for a flat JSON object with values of one type.

    Args:
        value_type: Expected type of every value (str or int)

    Returns:
        Function validating and copying the object
    """

    def decode(data: dict) -> dict:
        if not isinstance(data, dict):
            raise TypeError(f"Expected a JSON object, got {type(data).__name__}")
        for key, value in data.items():
            if not isinstance(value, value_type) or isinstance(value, bool):
                raise TypeError(f"Value for {key!r} is not {value_type.__name__}")
        return dict(data)

    return decode
