"""Filesystem layout: namespaces, share folders and listings."""

from fileserver.storage.allocator import ShareFolderAllocator, generate_share_id, is_valid_share_id
from fileserver.storage.namespace import NamespaceManager, is_valid_username
from fileserver.storage.tree import TreeLister

__all__ = [
    "NamespaceManager",
    "ShareFolderAllocator",
    "TreeLister",
    "generate_share_id",
    "is_valid_share_id",
    "is_valid_username",
]
