"""Authentication session holding the current bearer token."""

import logging
import threading
from typing import Optional

logger = logging.getLogger(__name__)


class AuthSession:
    """Holder of at most one bearer token.

    Safe to read from any number of concurrent request builders while login,
    refresh or sign-out replace the token.
    """

    def __init__(self, token: Optional[str] = None):
        self._lock = threading.Lock()
        self._token = token

    @property
    def token(self) -> Optional[str]:
        with self._lock:
            return self._token

    @property
    def has_token(self) -> bool:
        return bool(self.token)

    def set_token(self, token: str):
        """
        Replace the current token.

        Args:
            token: Bearer token returned by login, signup or refresh
        """
        with self._lock:
            self._token = token
        logger.debug("Auth token updated")

    def clear(self):
        """Forget the current token (sign-out)."""
        with self._lock:
            self._token = None
        logger.debug("Auth token cleared")

    def authorization_header(self) -> dict[str, str]:
        """
        Build the Authorization header for the current token.

        Returns:
            {'Authorization': 'Bearer <token>'}, or an empty dict without a token
        """
        token = self.token
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}
