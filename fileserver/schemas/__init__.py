"""Pydantic schemas for API requests and responses."""

from fileserver.schemas.auth import (
    RegisterRequest,
    RegisterResponse,
    LoginRequest,
    LoginResponse
)
from fileserver.schemas.files import TreeNodeResponse, UploadResponse
from fileserver.schemas.common import ErrorResponse

__all__ = [
    "RegisterRequest",
    "RegisterResponse",
    "LoginRequest",
    "LoginResponse",
    "TreeNodeResponse",
    "UploadResponse",
    "ErrorResponse"
]
