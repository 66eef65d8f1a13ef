"""Recursive directory listing of a namespace."""

import os
from pathlib import Path
from typing import Optional

from common.logging_config import get_logger
from common.types import TreeNode
from fileserver import config
from fileserver.exceptions import StorageError

logger = get_logger(__name__)


class TreeLister:
    """
    Builds a fully materialized TreeNode for a directory.

    Symbolic links are never followed, which rules out cycles.
    """

    def __init__(self, max_depth: Optional[int] = None):
        self.max_depth = max_depth if max_depth is not None else config.MAX_TREE_DEPTH

    def list_tree(self, root_path: Path) -> TreeNode:
        """
        Walk ``root_path`` and describe its contents.

        Args:
            root_path: Existing directory to list

        Returns:
            Directory node for root_path with sorted children

        Raises:
            StorageError: if root_path is missing or cannot be read
        """
        root_path = Path(root_path)
        if not root_path.is_dir():
            logger.error(f"Listing root does not exist or is not a directory: {root_path}")
            raise StorageError(f"Listing root does not exist: {root_path.name}")

        return self._walk(root_path, depth=0)

    def _walk(self, directory: Path, depth: int) -> TreeNode:
        node = TreeNode(name=directory.name, type="directory", path=directory.resolve())

        if depth >= self.max_depth:
            logger.warning(f"Maximum listing depth {self.max_depth} reached at {directory}")
            return node

        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            logger.error(f"Failed to read directory {directory}: {e}", exc_info=True)
            raise StorageError(f"Cannot list directory: {directory.name}") from e

        for entry in entries:
            if entry.is_symlink():
                logger.debug(f"Skipping symbolic link {entry.path}")
                continue

            if entry.is_dir(follow_symlinks=False):
                node.children.append(self._walk(Path(entry.path), depth + 1))
            elif entry.is_file(follow_symlinks=False):
                node.children.append(TreeNode(
                    name=entry.name,
                    type="file",
                    path=Path(entry.path).resolve(),
                    size=entry.stat(follow_symlinks=False).st_size,
                ))

        return node
