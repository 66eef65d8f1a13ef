"""Authentication service for business logic."""

import sqlite3
from datetime import datetime, timezone
from typing import Optional

from common.logging_config import get_logger
from fileserver.auth import (
    MAX_PASSWORD_BYTES,
    generate_api_key,
    hash_password,
    password_too_long,
    verify_password,
)
from fileserver.exceptions import (
    InvalidInputError,
    UserAlreadyExistsError,
    UserNotFoundError,
    WrongSecretError,
)
from fileserver.repositories.user_repository import User, UserRepository
from fileserver.storage.namespace import NamespaceManager, is_valid_username

logger = get_logger(__name__)


class AuthService:
    def __init__(self, namespaces: Optional[NamespaceManager] = None):
        self.user_repo = UserRepository()
        self.namespaces = namespaces or NamespaceManager()

    def register_user(self, username: str, password: str) -> str:
        """
        Create an identity, its namespace and a first session token.

        Returns:
            The new session token; the caller is authenticated from here on.
        """
        if not username or not password:
            raise InvalidInputError("Username and password are required")
        if not is_valid_username(username):
            raise InvalidInputError(
                "Username may only contain letters, digits, '_', '-' and '.', "
                "must not start with '.' and is limited to 64 characters"
            )
        if password_too_long(password):
            raise InvalidInputError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")

        logger.info(f"Attempting to register user: {username}")
        if self.user_repo.get_by_username(username) is not None:
            logger.warning(f"Registration failed: username '{username}' already exists")
            raise UserAlreadyExistsError(f"Username '{username}' already exists")

        password_hash = hash_password(password)
        api_key = generate_api_key()

        try:
            self.user_repo.create_user(
                username=username,
                password_hash=password_hash,
                api_key=api_key,
                created_at=datetime.now(timezone.utc),
            )
        except sqlite3.IntegrityError:
            logger.warning(f"Registration failed due to integrity error: username '{username}'")
            raise UserAlreadyExistsError(f"Username '{username}' already exists")

        self.namespaces.ensure_namespace(username)
        logger.info(f"Successfully registered user: {username}")
        return api_key

    def verify_user(self, username: str, password: str) -> User:
        """
        Check a username/password pair against the stored verifier.

        Raises:
            UserNotFoundError: no such username
            WrongSecretError: password does not match
        """
        user = self.user_repo.get_by_username(username) if username else None
        if user is None:
            logger.warning(f"Verification failed: username '{username}' not found")
            raise UserNotFoundError(f"User '{username}' not found")

        if not verify_password(password or "", user.password_hash):
            logger.warning(f"Verification failed: wrong password for username '{username}'")
            raise WrongSecretError("Incorrect password")

        return user

    def login_user(self, username: str, password: str) -> str:
        user = self.verify_user(username, password)

        new_api_key = generate_api_key()
        self.user_repo.update_api_key(user.username, new_api_key, datetime.now(timezone.utc))
        self.namespaces.ensure_namespace(user.username)

        logger.info(f"Successfully logged in user: {username}")
        return new_api_key

    def logout_user(self, username: str) -> None:
        self.user_repo.update_api_key(username, None, datetime.now(timezone.utc))
        logger.info(f"Logged out user: {username}")

    def validate_api_key(self, api_key: str) -> Optional[str]:
        logger.debug("Validating API key")
        user = self.user_repo.get_by_api_key(api_key)
        if user is None:
            logger.warning("API key validation failed: invalid key")
            return None
        return user.username
