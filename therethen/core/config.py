"""Configuration for the backend connection and application defaults."""

from dataclasses import dataclass

# Backend settings
DEFAULT_BASE_URL = "http://localhost:8000/api"
DEFAULT_STREAM_URL = "ws://localhost:8000/ws/chat/"
REQUEST_TIMEOUT = 30  # seconds
STREAM_BACKLOG_SIZE = 256  # frames kept until the first reader attaches

# Area settings
DEFAULT_SEARCH_RADIUS_KM = 10
DEFAULT_AREA_NAME = "Drawn Area"
DEFAULT_AREA_CENTER = (37.7749, -122.4194)  # San Francisco
DEFAULT_TIME_PERIOD = (2020, 2024)


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings shared by the API and stream clients."""

    base_url: str = DEFAULT_BASE_URL
    stream_url: str = DEFAULT_STREAM_URL
    request_timeout: float = REQUEST_TIMEOUT
    token: str | None = None

    def to_dict(self) -> dict:
        """
        Serialize for YAML config.

        Returns:
            Dictionary representation for YAML serialization
        """
        result = {
            "base_url": self.base_url,
            "stream_url": self.stream_url,
            "request_timeout": self.request_timeout,
        }
        if self.token is not None:
            result["token"] = self.token
        return result

    @classmethod
    def from_dict(cls, data: dict | None) -> "ClientConfig":
        """
        Deserialize from YAML config.

        Args:
            data: Configuration dictionary, missing keys take defaults

        Returns:
            ClientConfig instance
        """
        data = data or {}
        return cls(
            base_url=data.get("base_url", DEFAULT_BASE_URL),
            stream_url=data.get("stream_url", DEFAULT_STREAM_URL),
            request_timeout=data.get("request_timeout", REQUEST_TIMEOUT),
            token=data.get("token"),
        )
