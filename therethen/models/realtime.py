"""JSON envelope exchanged over the realtime stream."""

import json
import logging
import uuid
from dataclasses import dataclass, field
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class RealtimeMessage:
    """A chat message pushed over the stream.

    Keys are camelCase on the wire. Decoding is lenient: missing fields
    take defaults instead of failing.
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    channel: Optional[str] = None
    channel_id: Optional[str] = None
    author: str = "Unknown"
    content: str = ""
    is_anonymous: bool = False
    contains_pii: bool = False
    restricted_to_names: list[str] = field(default_factory=list)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def to_dict(self) -> dict:
        result = {
            "id": self.id,
            "author": self.author,
            "content": self.content,
            "isAnonymous": self.is_anonymous,
            "containsPii": self.contains_pii,
            "restrictedToNames": list(self.restricted_to_names),
        }
        optional = {
            "channel": self.channel,
            "channelId": self.channel_id,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
        result.update({key: value for key, value in optional.items() if value is not None})
        return result

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: dict) -> "RealtimeMessage":
        message = cls(
            channel=data.get("channel"),
            channel_id=data.get("channelId"),
            author=data.get("author") or "Unknown",
            content=data.get("content") or "",
            is_anonymous=bool(data.get("isAnonymous", False)),
            contains_pii=bool(data.get("containsPii", False)),
            restricted_to_names=list(data.get("restrictedToNames") or []),
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
        )
        if data.get("id"):
            message.id = str(data["id"])
        return message

    @classmethod
    def from_json(cls, text: str) -> Optional["RealtimeMessage"]:
        """
        Decode a text frame.

        Args:
            text: Raw frame text

        Returns:
            RealtimeMessage, or None if the text is not a JSON object
        """
        try:
            data = json.loads(text)
        except ValueError:
            logger.debug(f"Ignoring non-JSON frame: {text[:80]!r}")
            return None

        if not isinstance(data, dict):
            return None
        return cls.from_dict(data)
