"""Command handler functions for CLI operations."""

from pathlib import Path
from typing import Optional

from common.logging_config import get_logger
from cli.config import Config
from cli.models import (
    DownloadCommand,
    ListCommand,
    LoginCommand,
    LogoutCommand,
    RegisterCommand,
    UploadCommand,
)
from cli.server_client import ServerClient

logger = get_logger(__name__)


_client: Optional[ServerClient] = None


def get_client() -> ServerClient:
    """
    Get or create the global ServerClient instance.
    """
    global _client
    if _client is None:
        logger.debug("Creating new ServerClient instance")
        config = Config(Path.home() / '.upzload' / 'config.json')
        _client = ServerClient(config)
    return _client


def handle_register(cmd: RegisterCommand, client: Optional[ServerClient] = None) -> str:
    """
    Handle 'register' command.

    Args:
        cmd: RegisterCommand with username and password
        client: Optional ServerClient for dependency injection (testing)

    Returns:
        Success or error message
    """
    if client is None:
        client = get_client()
    return client.register(cmd.username, cmd.password)


def handle_login(cmd: LoginCommand, client: Optional[ServerClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.login(cmd.username, cmd.password)


def handle_logout(cmd: LogoutCommand, client: Optional[ServerClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.logout()


def handle_upload(cmd: UploadCommand, client: Optional[ServerClient] = None) -> str:
    """
    Handle 'upload' command.

    Args:
        cmd: UploadCommand with file_list
        client: Optional ServerClient for dependency injection (testing)

    Returns:
        Folder id and links, or an error message
    """
    logger.info(f"Executing upload command: {len(cmd.file_list)} files")
    if client is None:
        client = get_client()
    return client.upload_files(list(cmd.file_list))


def handle_list(cmd: ListCommand, client: Optional[ServerClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.list_files()


def handle_download(cmd: DownloadCommand, client: Optional[ServerClient] = None) -> str:
    """
    Handle 'download' command.

    Args:
        cmd: DownloadCommand with owner, folder_id, filename and optional output_path
        client: Optional ServerClient for dependency injection (testing)

    Returns:
        Success or error message
    """
    logger.info(f"Executing download command: {cmd.owner}/{cmd.folder_id}/{cmd.filename}")
    if client is None:
        client = get_client()
    return client.download(cmd.owner, cmd.folder_id, cmd.filename, cmd.output_path)
