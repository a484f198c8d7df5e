"""User administration domain service."""

import logging
from typing import Iterable, Optional

from farmledger.database.base import Database
from farmledger.domain.auth import AuthService
from farmledger.domain.entities import Role, User
from farmledger.domain.errors import ConflictError, duplicate_user_email

logger = logging.getLogger(__name__)


class UserService:
    """Service for managing users."""

    def __init__(self, db: Database, auth: Optional[AuthService] = None):
        """Initialize user service.

        Args:
            db: Database instance
            auth: Optional auth service; when given, edits to the logged-in
                user are written through to the stored session
        """
        self.db = db
        self.auth = auth

    def user_exists(self, email: str) -> bool:
        return self.db.get_user_by_email(email) is not None

    def create_user(
        self,
        name: str,
        email: str,
        farm_name: str = "",
        role: Role = Role.USER,
        permissions: Iterable[str] = (),
    ) -> User:
        """Create a user.

        Returns:
            The new user

        Raises:
            ConflictError: If a user with this email already exists
        """
        if self.user_exists(email):
            raise ConflictError(duplicate_user_email(email))

        user_id = self.db.create_user(
            name=name,
            email=email,
            farm_name=farm_name,
            role=Role(role),
            permissions=frozenset(permissions),
        )
        logger.info("Created user %s (%s)", user_id, email)
        return self.db.get_user(user_id)

    def get_user(self, user_id: int) -> Optional[User]:
        return self.db.get_user(user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.db.get_user_by_email(email)

    def list_users(self) -> list[User]:
        return self.db.list_users()

    def update_user(
        self,
        user_id: int,
        name: Optional[str] = None,
        email: Optional[str] = None,
        farm_name: Optional[str] = None,
        role: Optional[Role] = None,
        permissions: Optional[Iterable[str]] = None,
    ) -> Optional[User]:
        """Update a user.

        Returns:
            The updated user, or None if no user has this ID

        Raises:
            ConflictError: If email is taken by another user
        """
        if self.db.get_user(user_id) is None:
            return None

        self.db.update_user(
            user_id=user_id,
            name=name,
            email=email,
            farm_name=farm_name,
            role=Role(role) if role is not None else None,
            permissions=frozenset(permissions) if permissions is not None else None,
        )
        user = self.db.get_user(user_id)
        if self.auth is not None:
            self.auth.remember(user)
        logger.info("Updated user %s", user_id)
        return user

    def delete_user(self, user_id: int) -> bool:
        """Delete a user.

        Returns:
            True if the user was deleted, False if it didn't exist
        """
        if self.db.get_user(user_id) is None:
            return False
        self.db.delete_user(user_id)
        logger.info("Deleted user %s", user_id)
        return True
