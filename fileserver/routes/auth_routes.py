"""Authentication API routes."""

import asyncio

from fastapi import APIRouter, Depends, Response, status

from fileserver import config
from fileserver.auth import get_current_user
from fileserver.schemas.auth import (
    RegisterRequest,
    RegisterResponse,
    LoginRequest,
    LoginResponse
)
from fileserver.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _set_session_cookie(response: Response, api_key: str) -> None:
    response.set_cookie(
        key=config.SESSION_COOKIE_NAME,
        value=api_key,
        httponly=True,
        samesite="lax",
    )


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest, response: Response):
    """
    Register a new user account and log it in.

    Parameters:
        - username: Unique username, also the name of the user's storage folder
        - password: User password (will be hashed before storage)

    Returns:
        - username: The registered username
        - api_key: Session token, also set as a cookie

    Raises:
        - 400: Empty or invalid username/password
        - 409: Username already exists
    """
    auth_service = AuthService()
    api_key = await asyncio.to_thread(auth_service.register_user, request.username, request.password)

    _set_session_cookie(response, api_key)
    return RegisterResponse(username=request.username, api_key=api_key)


@router.post("/login", response_model=LoginResponse)
async def login(request: LoginRequest, response: Response):
    """
    Authenticate user and issue a new session token.

    Raises:
        - 401: Incorrect password
        - 404: Unknown username
    """
    auth_service = AuthService()
    api_key = await asyncio.to_thread(auth_service.login_user, request.username, request.password)

    _set_session_cookie(response, api_key)
    return LoginResponse(username=request.username, api_key=api_key)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(response: Response, current_user: str = Depends(get_current_user)):
    """
    Invalidate the caller's session token and clear the cookie.
    """
    auth_service = AuthService()
    await asyncio.to_thread(auth_service.logout_user, current_user)

    response.delete_cookie(config.SESSION_COOKIE_NAME)
    return None
