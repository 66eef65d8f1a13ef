"""Service layer for business logic."""

from fileserver.services.auth_service import AuthService
from fileserver.services.download_service import DownloadService
from fileserver.services.upload_service import UploadService

__all__ = [
    "AuthService",
    "DownloadService",
    "UploadService",
]
