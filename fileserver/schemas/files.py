"""Pydantic schemas for listing and upload endpoints."""

from pathlib import Path
from typing import List, Literal, Optional

from pydantic import BaseModel

from common.types import TreeNode
from fileserver.utils import build_download_link


class TreeNodeResponse(BaseModel):
    """One file or directory of a namespace listing."""
    name: str
    type: Literal["file", "directory"]
    path: str
    size: Optional[int] = None
    link: Optional[str] = None
    children: Optional[List["TreeNodeResponse"]] = None

    @classmethod
    def from_node(cls, node: TreeNode, owner: str, namespace_root: Path) -> "TreeNodeResponse":
        """
        Convert a TreeNode, expressing paths relative to the namespace root.

        Files sitting directly inside a share folder get a download link.
        """
        relative = node.path.relative_to(namespace_root)
        if node.is_directory:
            return cls(
                name=node.name,
                type="directory",
                path=relative.as_posix(),
                children=[cls.from_node(child, owner, namespace_root) for child in node.children],
            )

        link = None
        if len(relative.parts) == 2:
            link = build_download_link(owner, relative.parts[0], relative.parts[1])
        return cls(name=node.name, type="file", path=relative.as_posix(), size=node.size, link=link)


class UploadResponse(BaseModel):
    """Response model for a batch upload."""
    folder_id: str
    files: List[str]
    links: List[str]
    index_link: str


TreeNodeResponse.model_rebuild()
