"""Signed-in session — bearer token in the system keychain, profile on disk.

The session is created explicitly on sign-in and torn down explicitly on
sign-out. It is handed to the API client; analytics code never sees it.
"""

from __future__ import annotations

import json
from pathlib import Path

import keyring
import keyring.errors

from subdash.core.config import get_config_dir
from subdash.core.exceptions import AuthError
from subdash.core.logging import get_logger
from subdash.models.base import SubDashModel
from subdash.models.user import User

KEYRING_SERVICE = "subdash"
_TOKEN_KEY = "auth_token"

log = get_logger(__name__)


class Session(SubDashModel):
    token: str
    user: User


class SessionStore:
    """Persists the current Session across CLI invocations."""

    def __init__(self, config_dir: Path | None = None) -> None:
        self.config_dir = config_dir or get_config_dir()

    @property
    def user_path(self) -> Path:
        return self.config_dir / "user.json"

    def save(self, session: Session) -> None:
        """Store a freshly signed-in session."""
        keyring.set_password(KEYRING_SERVICE, _TOKEN_KEY, session.token)
        self.user_path.write_text(json.dumps(session.user.to_wire(), indent=2))
        log.info("session_saved", user_id=session.user.id)

    def load(self) -> Session | None:
        """Return the stored session, or None when signed out."""
        token = keyring.get_password(KEYRING_SERVICE, _TOKEN_KEY)
        if not token or not self.user_path.exists():
            return None
        try:
            user = User.model_validate(json.loads(self.user_path.read_text()))
        except (ValueError, OSError) as e:
            log.warning("session_profile_unreadable", path=str(self.user_path), error=str(e))
            return None
        return Session(token=token, user=user)

    def require(self) -> Session:
        """Return the stored session or raise AuthError."""
        session = self.load()
        if session is None:
            raise AuthError("Not signed in. Run `subdash signin` first.", status_code=401)
        return session

    def clear(self) -> None:
        """Forget the token and the cached profile."""
        try:
            keyring.delete_password(KEYRING_SERVICE, _TOKEN_KEY)
        except keyring.errors.PasswordDeleteError:
            pass
        if self.user_path.exists():
            self.user_path.unlink()
        log.info("session_cleared")
