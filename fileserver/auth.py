"""Authentication and security utilities."""

import asyncio
import uuid
from typing import Optional

import bcrypt
from fastapi import Header, Request

from common.constants import API_KEY_PREFIX
from fileserver import config
from fileserver.exceptions import InvalidAPIKeyError

# bcrypt only looks at the first 72 bytes and newer releases refuse longer input.
MAX_PASSWORD_BYTES = 72


def password_too_long(password: str) -> bool:
    return len(password.encode('utf-8')) > MAX_PASSWORD_BYTES


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password to hash

    Returns:
        Bcrypt hash of the password
    """
    salt = bcrypt.gensalt(rounds=config.BCRYPT_ROUNDS)
    hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
    return hashed.decode('utf-8')


def verify_password(password: str, password_hash: str) -> bool:
    """
    Verify a password against a bcrypt hash.

    Args:
        password: Plain text password to verify
        password_hash: Bcrypt hash to verify against

    Returns:
        True if password matches hash, False otherwise
    """
    if password_too_long(password):
        return False
    return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))


def generate_api_key() -> str:
    """
    Generate a new session token with the configured prefix.

    Returns:
        Token string in format: {prefix}{uuid4}
    """
    return f"{API_KEY_PREFIX}{uuid.uuid4()}"


def extract_api_key(request: Request, authorization: Optional[str]) -> Optional[str]:
    """
    Pull the session token from the Authorization header or the session cookie.

    The header wins when both are present.
    """
    if authorization:
        if not authorization.startswith("Bearer "):
            raise InvalidAPIKeyError("Invalid authorization header format")
        return authorization[len("Bearer "):].strip() or None
    return request.cookies.get(config.SESSION_COOKIE_NAME)


async def get_current_user(
    request: Request,
    authorization: Optional[str] = Header(None),
) -> str:
    """
    FastAPI dependency resolving the caller's username from its session token.

    Returns:
        username of the authenticated user

    Raises:
        InvalidAPIKeyError: if the token is missing or unknown
    """
    from fileserver.services.auth_service import AuthService

    api_key = extract_api_key(request, authorization)
    if not api_key:
        raise InvalidAPIKeyError("Not authenticated")

    username = await asyncio.to_thread(AuthService().validate_api_key, api_key)
    if username is None:
        raise InvalidAPIKeyError("Invalid or expired session")

    request.state.user_id = username
    return username
