"""Repository layer for data access."""

from fileserver.repositories.user_repository import User, UserRepository

__all__ = [
    "User",
    "UserRepository",
]
