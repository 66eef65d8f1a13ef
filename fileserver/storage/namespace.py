"""Per-user namespace directories under the storage root."""

import re
from pathlib import Path
from typing import Optional, Union

from common.constants import STAGING_DIRNAME, USERNAME_PATTERN
from common.logging_config import get_logger
from fileserver import config
from fileserver.exceptions import InvalidInputError, StorageError

logger = get_logger(__name__)

_USERNAME_RE = re.compile(USERNAME_PATTERN)


def is_valid_username(username: Optional[str]) -> bool:
    """
    Check that a username can safely name a directory.

    Leading dots are rejected so that no namespace can shadow the
    staging area or the '.'/'..' entries.
    """
    return bool(username) and _USERNAME_RE.match(username) is not None


class NamespaceManager:
    """Owns the `<storage_root>/<username>/` layout."""

    def __init__(self, storage_root: Optional[Union[str, Path]] = None):
        self.storage_root = Path(storage_root if storage_root is not None else config.STORAGE_ROOT)

    def namespace_path(self, username: str) -> Path:
        """
        Resolve the namespace directory of a user without creating it.

        Raises:
            InvalidInputError: if the username is not a valid directory name
        """
        if not is_valid_username(username):
            raise InvalidInputError(f"Invalid username: {username!r}")
        return self.storage_root / username

    def ensure_namespace(self, username: str) -> Path:
        """
        Return the namespace directory of a user, creating it if missing.

        Creating an existing namespace is a no-op.

        Raises:
            InvalidInputError: if the username is not a valid directory name
            StorageError: if the directory cannot be created
        """
        path = self.namespace_path(username)
        if path.is_dir():
            return path

        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Failed to create namespace for {username} at {path}: {e}", exc_info=True)
            raise StorageError(f"Cannot create namespace for '{username}'") from e

        logger.info(f"Created namespace for {username} at {path}")
        return path

    def staging_root(self) -> Path:
        """Directory holding in-flight uploads, outside every namespace."""
        path = self.storage_root / STAGING_DIRNAME
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Failed to create staging directory at {path}: {e}", exc_info=True)
            raise StorageError("Cannot create staging directory") from e
        return path
