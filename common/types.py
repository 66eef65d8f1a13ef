"""Shared data types used across server components."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Literal, Optional


@dataclass
class TreeNode:
    """
    In-memory description of a file or directory inside a namespace.

    Directory nodes carry ordered children; file nodes carry their size.
    """
    name: str
    type: Literal["file", "directory"]
    path: Path
    size: Optional[int] = None
    children: List["TreeNode"] = field(default_factory=list)

    @property
    def is_directory(self) -> bool:
        return self.type == "directory"

    def find(self, name: str) -> Optional["TreeNode"]:
        """Return the direct child called ``name``, if any."""
        for child in self.children:
            if child.name == name:
                return child
        return None


@dataclass(frozen=True)
class ShareFolder:
    owner: str
    folder_id: str
    path: Path
