"""Share folder id generation and materialization."""

import re
import secrets
from typing import Callable, Optional

from common.constants import SHARE_ID_BYTES, SHARE_ID_PATTERN
from common.logging_config import get_logger
from common.types import ShareFolder
from fileserver import config
from fileserver.exceptions import AllocationExhaustedError, StorageError
from fileserver.storage.namespace import NamespaceManager

logger = get_logger(__name__)

_SHARE_ID_RE = re.compile(SHARE_ID_PATTERN)


def generate_share_id() -> str:
    """
    Draw a random share folder id.

    Ids are 24 bits wide, so collisions inside one namespace are possible
    and are handled by ShareFolderAllocator.allocate.
    """
    return secrets.token_hex(SHARE_ID_BYTES)


def is_valid_share_id(folder_id: str) -> bool:
    return bool(folder_id) and _SHARE_ID_RE.match(folder_id) is not None


class ShareFolderAllocator:
    """
    Allocates a fresh share folder inside a user's namespace.

    The directory is created with an exclusive mkdir, so the existence
    check and the creation are a single atomic step.
    """

    def __init__(
        self,
        namespaces: Optional[NamespaceManager] = None,
        token_factory: Callable[[], str] = generate_share_id,
        max_attempts: Optional[int] = None,
    ):
        self.namespaces = namespaces or NamespaceManager()
        self.token_factory = token_factory
        self.max_attempts = max_attempts if max_attempts is not None else config.MAX_ALLOCATION_ATTEMPTS

    def allocate(self, owner: str) -> ShareFolder:
        """
        Create a new, empty share folder for ``owner``.

        Args:
            owner: Username whose namespace receives the folder

        Returns:
            ShareFolder whose directory already exists

        Raises:
            AllocationExhaustedError: if every attempt hit an existing folder
            StorageError: if the filesystem refuses the mkdir
        """
        namespace = self.namespaces.ensure_namespace(owner)

        for attempt in range(1, self.max_attempts + 1):
            folder_id = self.token_factory()
            path = namespace / folder_id
            try:
                path.mkdir()
            except FileExistsError:
                logger.warning(
                    f"Share folder id collision for {owner}: {folder_id} "
                    f"(attempt {attempt}/{self.max_attempts})"
                )
                continue
            except OSError as e:
                logger.error(f"Failed to create share folder {path}: {e}", exc_info=True)
                raise StorageError(f"Cannot create share folder for '{owner}'") from e

            logger.info(f"Allocated share folder {folder_id} for {owner}")
            return ShareFolder(owner=owner, folder_id=folder_id, path=path)

        logger.error(f"Share folder allocation exhausted for {owner} after {self.max_attempts} attempts")
        raise AllocationExhaustedError(
            f"Could not allocate a unique share folder after {self.max_attempts} attempts"
        )
