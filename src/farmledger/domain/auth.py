"""Login session and permission checks."""

import json
import logging
from typing import Optional

from farmledger.database.base import Database
from farmledger.database.session_store import SessionStore
from farmledger.domain.entities import Role, User
from farmledger.domain.errors import (
    InvalidCredentialsError,
    PermissionDeniedError,
    invalid_credentials,
    not_logged_in,
    permission_denied,
)
from farmledger.domain.validation import MIN_PASSWORD_LENGTH

logger = logging.getLogger(__name__)

# Fixed key under which the current user is persisted
SESSION_KEY = "farmledger_user"


def serialize_user(user: User) -> str:
    """Serialize a user to the JSON blob kept in the session store."""
    return json.dumps(
        {
            "id": user.id,
            "name": user.name,
            "email": user.email,
            "farm_name": user.farm_name,
            "role": user.role.value,
            "permissions": sorted(user.permissions),
        }
    )


def deserialize_user(blob: str) -> User:
    """Rebuild a user from a session blob.

    Raises:
        ValueError: If the blob is not a valid serialized user
    """
    try:
        data = json.loads(blob)
        return User(
            id=int(data["id"]),
            name=data["name"],
            email=data["email"],
            farm_name=data.get("farm_name", ""),
            role=Role(data.get("role", Role.USER.value)),
            permissions=frozenset(data.get("permissions") or ()),
        )
    except (TypeError, KeyError, ValueError) as e:
        raise ValueError(f"Malformed session data: {e}")


class AuthService:
    """Service for logging users in and out and checking permissions.

    The current user lives in memory and is mirrored to the session store, so
    a new process can pick up an existing session.
    """

    def __init__(self, db: Database, session_store: SessionStore):
        """Initialize auth service.

        Args:
            db: Database instance holding the users
            session_store: Where the current user is persisted
        """
        self.db = db
        self.session_store = session_store
        self._current_user: Optional[User] = None

    def login(self, email: str, password: str) -> User:
        """Log a user in.

        There is no credential storage: any password of at least six
        characters is accepted for an existing email.

        Returns:
            The logged-in user

        Raises:
            InvalidCredentialsError: If the email is unknown or the password too short
        """
        user = self.db.get_user_by_email(email)
        if user is None or not password or len(password) < MIN_PASSWORD_LENGTH:
            logger.info("Rejected login for %s", email)
            raise InvalidCredentialsError(invalid_credentials())

        self._current_user = user
        self.session_store.set(SESSION_KEY, serialize_user(user))
        logger.info("User %s logged in", user.email)
        return user

    def logout(self) -> None:
        """Clear the session in memory and in the session store."""
        self._current_user = None
        self.session_store.remove(SESSION_KEY)
        logger.info("Logged out")

    def get_current_user(self) -> Optional[User]:
        """Return the logged-in user, recovering it from the session store if needed."""
        if self._current_user is not None:
            return self._current_user

        blob = self.session_store.get(SESSION_KEY)
        if blob is None:
            return None
        try:
            self._current_user = deserialize_user(blob)
        except ValueError as e:
            logger.warning("Ignoring stored session: %s", e)
            return None
        return self._current_user

    def is_logged_in(self) -> bool:
        return self.get_current_user() is not None

    def has_permission(self, permission: str) -> bool:
        """True if the current user holds the permission; False when logged out."""
        user = self.get_current_user()
        if user is None:
            return False
        return user.has_permission(permission)

    def require_permission(self, permission: str) -> User:
        """Return the current user if it holds the permission.

        Raises:
            PermissionDeniedError: If nobody is logged in or the permission is missing
        """
        user = self.get_current_user()
        if user is None:
            raise PermissionDeniedError(not_logged_in())
        if not user.has_permission(permission):
            raise PermissionDeniedError(permission_denied(permission))
        return user

    def remember(self, user: User) -> None:
        """Refresh the stored session if user is the one logged in."""
        current = self.get_current_user()
        if current is None or current.id != user.id:
            return
        self._current_user = user
        self.session_store.set(SESSION_KEY, serialize_user(user))
