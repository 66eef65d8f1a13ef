"""Download authorization and path resolution."""

from pathlib import Path
from typing import Optional

from common.logging_config import get_logger
from fileserver.exceptions import ForbiddenError, ResourceNotFoundError
from fileserver.storage.allocator import is_valid_share_id
from fileserver.storage.namespace import NamespaceManager, is_valid_username

logger = get_logger(__name__)


class DownloadService:
    """
    Gates every retrieval against the caller's identity.

    Only the owner of a namespace may download from it, even when
    holding a share link.
    """

    def __init__(self, namespaces: Optional[NamespaceManager] = None):
        self.namespaces = namespaces or NamespaceManager()

    def authorize_and_resolve(self, caller: str, owner: str, folder_id: str, filename: str) -> Path:
        """
        Resolve a (owner, folder_id, filename) triple to a file on disk.

        Args:
            caller: Authenticated username
            owner: Namespace owner named in the link
            folder_id: Share folder id
            filename: File inside the share folder

        Returns:
            Path of the file to stream back

        Raises:
            ForbiddenError: caller is not the owner
            ResourceNotFoundError: malformed link or no such file
        """
        if caller != owner:
            logger.warning(f"Download denied: {caller} requested a file owned by {owner}")
            raise ForbiddenError("You may only download files from your own namespace")

        if not is_valid_username(owner) or not is_valid_share_id(folder_id) or not self._is_plain_name(filename):
            logger.warning(f"Rejected malformed download link [user={caller}] folder={folder_id!r} file={filename!r}")
            raise ResourceNotFoundError("File not found")

        namespace = self.namespaces.namespace_path(owner).resolve()
        path = (namespace / folder_id / filename).resolve()

        if path.parent.parent != namespace or not path.is_file():
            logger.info(f"Download target missing: {owner}/{folder_id}/{filename}")
            raise ResourceNotFoundError("File not found")

        return path

    @staticmethod
    def _is_plain_name(filename: str) -> bool:
        return (
            bool(filename)
            and filename not in (".", "..")
            and "/" not in filename
            and "\\" not in filename
            and "\x00" not in filename
        )
