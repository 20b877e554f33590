"""Signup and login against the users store.

Passwords are stored and compared in plain text and the login token is an
opaque ``token-<user id>`` string; neither is meant to be secure.
"""

import logging
from typing import Any, Dict, Optional, Tuple

from storefront.api.exceptions import ConflictError, UnauthorizedError, ValidationError
from storefront.services.records import new_record_id, utc_timestamp
from storefront.storage.json_store import Record, Repository

# Configure module logger
logger = logging.getLogger(__name__)

TOKEN_PREFIX = "token-"


def public_user(user: Record) -> Dict[str, Any]:
    """Return a copy of ``user`` without its password."""
    return {key: value for key, value in user.items() if key != "password"}


def issue_token(user_id: str) -> str:
    """Derive the opaque session token for a user id."""
    return f"{TOKEN_PREFIX}{user_id}"


class AuthService:
    """Registers users and checks their credentials."""

    def __init__(self, users: Repository):
        self.users = users

    def signup(
        self,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str],
    ) -> Dict[str, Any]:
        """Register a new user.

        Args:
            name: Display name.
            email: Email address; must not be registered yet (exact match).
            password: Plain-text password.

        Returns:
            The created user without its password.

        Raises:
            ValidationError: If any field is missing or empty.
            ConflictError: If the email is already registered.
        """
        if not name or not email or not password:
            raise ValidationError("Name, email, and password required")

        with self.users.transaction() as users:
            if any(user.get("email") == email for user in users):
                logger.warning("Signup rejected, email already registered")
                raise ConflictError(
                    "Email already registered", details={"email": email}
                )

            user = {
                "id": new_record_id(),
                "name": name,
                "email": email,
                "password": password,
                "createdAt": utc_timestamp(),
            }
            users.append(user)

        logger.info("User registered", extra={"user_id": user["id"]})
        return public_user(user)

    def login(
        self,
        email: Optional[str],
        password: Optional[str],
    ) -> Tuple[str, Dict[str, Any]]:
        """Check credentials and issue a token.

        Returns:
            Tuple of (token, user without password).

        Raises:
            ValidationError: If email or password is missing.
            UnauthorizedError: If no user matches both email and password.
        """
        if not email or not password:
            raise ValidationError("Email and password required")

        user = next(
            (
                u
                for u in self.users.load()
                if u.get("email") == email and u.get("password") == password
            ),
            None,
        )
        if user is None:
            logger.warning("Login rejected, invalid credentials")
            raise UnauthorizedError()

        logger.info("User logged in", extra={"user_id": user["id"]})
        return issue_token(user["id"]), public_user(user)
