"""Error taxonomy shared by every API operation."""


class APIError(Exception):
    """Base class for failures raised by the API client."""


class InvalidEndpoint(APIError):
    """The configured base address and path do not form a usable URL."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Invalid URL: {url}")


class NetworkFailure(APIError):
    """Transport-level failure (DNS, timeout, connection reset).

    Potentially transient; retrying is left to the caller.
    """

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"Network error: {cause}")


class ServerFailure(APIError):
    """The server rejected the request or sent a response that could not be decoded."""

    def __init__(self, message: str, status: int | None = None):
        self.message = message
        self.status = status
        super().__init__(message)
