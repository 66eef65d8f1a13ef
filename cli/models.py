"""Command request data types for CLI."""

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class RegisterCommand:
    """Register a new user account."""

    username: str
    password: str
    command: Literal["register"] = "register"


@dataclass(frozen=True)
class LoginCommand:
    """Login with username and password."""

    username: str
    password: str
    command: Literal["login"] = "login"


@dataclass(frozen=True)
class LogoutCommand:
    """End the current session."""

    command: Literal["logout"] = "logout"


@dataclass(frozen=True)
class UploadCommand:
    """Upload files as one batch."""

    file_list: tuple[str, ...]
    command: Literal["upload"] = "upload"


@dataclass(frozen=True)
class ListCommand:
    """Show the caller's namespace."""

    command: Literal["list"] = "list"


@dataclass(frozen=True)
class DownloadCommand:
    """Download one file from a share folder."""

    owner: str
    folder_id: str
    filename: str
    output_path: str | None = None
    command: Literal["download"] = "download"


CommandRequest = (
    RegisterCommand
    | LoginCommand
    | LogoutCommand
    | UploadCommand
    | ListCommand
    | DownloadCommand
)
