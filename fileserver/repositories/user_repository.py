"""User repository for database operations."""

import sqlite3
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from common.logging_config import get_logger
from fileserver.database import get_db_connection

logger = get_logger(__name__)


@dataclass
class User:
    username: str
    password_hash: str
    api_key: Optional[str]
    created_at: datetime
    key_updated_at: Optional[datetime]


def _row_to_user(row: sqlite3.Row) -> User:
    return User(
        username=row["username"],
        password_hash=row["password_hash"],
        api_key=row["api_key"],
        created_at=datetime.fromisoformat(row["created_at"]),
        key_updated_at=datetime.fromisoformat(row["key_updated_at"]) if row["key_updated_at"] else None,
    )


class UserRepository:
    @staticmethod
    def create_user(
        username: str,
        password_hash: str,
        api_key: Optional[str],
        created_at: datetime,
    ) -> User:
        """
        Insert a new user row.

        The username primary key makes this an atomic create-if-absent:
        a concurrent insert of the same name raises sqlite3.IntegrityError.
        """
        logger.debug(f"Creating user: {username}")

        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO users (username, password_hash, api_key, created_at, key_updated_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (username, password_hash, api_key, created_at.isoformat(),
                 created_at.isoformat() if api_key else None)
            )
            conn.commit()
            logger.info(f"User created successfully: {username}")

        return User(
            username=username,
            password_hash=password_hash,
            api_key=api_key,
            created_at=created_at,
            key_updated_at=created_at if api_key else None,
        )

    @staticmethod
    def get_by_username(username: str) -> Optional[User]:
        logger.debug(f"Fetching user by username: {username}")
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """SELECT username, password_hash, api_key, created_at, key_updated_at
                   FROM users WHERE username = ?""",
                (username,)
            )
            row = cursor.fetchone()

        if row is None:
            logger.debug(f"User not found: {username}")
            return None
        return _row_to_user(row)

    @staticmethod
    def get_by_api_key(api_key: str) -> Optional[User]:
        logger.debug("Fetching user by API key")
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """SELECT username, password_hash, api_key, created_at, key_updated_at
                   FROM users WHERE api_key = ?""",
                (api_key,)
            )
            row = cursor.fetchone()

        if row is None:
            logger.debug("User not found for provided API key")
            return None
        return _row_to_user(row)

    @staticmethod
    def update_api_key(username: str, new_api_key: Optional[str], updated_at: datetime) -> None:
        """Replace (or clear, with None) the session token of a user."""
        logger.debug(f"Updating API key for user: {username}")
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "UPDATE users SET api_key = ?, key_updated_at = ? WHERE username = ?",
                (new_api_key, updated_at.isoformat(), username)
            )
            conn.commit()

    @staticmethod
    def count_users() -> int:
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT COUNT(*) FROM users")
            return cursor.fetchone()[0]
