"""In-memory admin session registry.

Holds the opaque bearer tokens issued by ``POST /admin/login``. Token set
membership is the only authorization check: there are no roles, scopes or
expiry. Sessions live until explicit logout or process shutdown; the registry
is created by the app lifespan and cleared when it ends.

The map is unbounded. Repeated logins without logout grow it for the life of
the process.
"""

from __future__ import annotations

import logging
import secrets
import time
from dataclasses import dataclass
from threading import RLock
from typing import Dict, Optional

from feedback_service.lib.exceptions import AuthError, ValidationError

logger = logging.getLogger(__name__)

TOKEN_BYTES = 32


@dataclass(frozen=True)
class Session:
    """An authenticated admin session."""

    token: str
    username: str
    created_at: int  # epoch millis


class SessionRegistry:
    """Thread-safe token -> Session map gating admin reads."""

    def __init__(self, admin_user: str, admin_password: str) -> None:
        self._lock = RLock()
        self._sessions: Dict[str, Session] = {}
        self._admin_user = admin_user
        self._admin_password = admin_password

    def login(self, username: Optional[str], password: Optional[str]) -> str:
        """Check the admin credential pair and mint a new session token.

        Args:
            username: Submitted username
            password: Submitted password

        Returns:
            A 64-character hex token (256 bits of entropy)

        Raises:
            ValidationError: If username or password is missing
            AuthError: If the credentials do not match
        """
        if not username or not password:
            raise ValidationError("username and password required")

        user_ok = secrets.compare_digest(username.encode("utf-8"), self._admin_user.encode("utf-8"))
        pass_ok = secrets.compare_digest(password.encode("utf-8"), self._admin_password.encode("utf-8"))
        if not (user_ok and pass_ok):
            logger.warning('Rejected admin login for %s', username)
            raise AuthError("invalid credentials")

        token = secrets.token_hex(TOKEN_BYTES)
        session = Session(token=token, username=username, created_at=int(time.time() * 1000))
        with self._lock:
            self._sessions[token] = session

        logger.info('Admin %s logged in (token %s...)', username, token[:8])
        return token

    def logout(self, token: Optional[str]) -> None:
        """Remove the session for a token. Unknown or missing tokens are ignored."""
        if not token:
            return
        with self._lock:
            session = self._sessions.pop(token, None)
        if session is not None:
            logger.info('Admin %s logged out (token %s...)', session.username, token[:8])

    def get(self, token: Optional[str]) -> Optional[Session]:
        """Return the live session for a token, or None if there is none."""
        if not token:
            return None
        with self._lock:
            return self._sessions.get(token)

    def authorize(self, token: Optional[str]) -> bool:
        """Return True iff the token belongs to a live session."""
        return self.get(token) is not None

    def clear(self) -> None:
        """Drop every session (used at shutdown)."""
        with self._lock:
            count = len(self._sessions)
            self._sessions.clear()
        if count:
            logger.info('Cleared %d admin session(s)', count)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


__all__ = ["Session", "SessionRegistry"]
