"""Upload ingestion: staging, share folder allocation and index generation."""

import html
import os
import shutil
import uuid
from dataclasses import dataclass, field
from typing import BinaryIO, Iterable, List, Optional

from common.constants import INDEX_FILENAME
from common.logging_config import get_logger
from common.types import ShareFolder
from fileserver.exceptions import EmptyBatchError, StorageError
from fileserver.storage.allocator import ShareFolderAllocator
from fileserver.storage.namespace import NamespaceManager
from fileserver.utils import build_download_link

logger = get_logger(__name__)

COPY_BUFFER_SIZE = 64 * 1024

INDEX_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head><meta charset="UTF-8"><title>upzload - download files</title></head>
<body>
  <h1>download this shared file</h1>
{items}
</body>
</html>
"""


@dataclass
class IncomingFile:
    """One part of a multipart upload: client filename plus a readable stream."""
    filename: Optional[str]
    stream: BinaryIO


@dataclass
class UploadResult:
    owner: str
    folder_id: str
    files: List[str] = field(default_factory=list)
    links: List[str] = field(default_factory=list)
    index_link: str = ""


def clean_filename(filename: Optional[str]) -> Optional[str]:
    """
    Reduce a client-supplied filename to a bare name usable inside a share folder.

    Returns None when nothing usable is left: empty names, '.', '..',
    names with NUL bytes and the reserved index filename.
    """
    if not filename:
        return None
    name = filename.replace("\\", "/").rsplit("/", 1)[-1].strip()
    if name in ("", ".", "..") or "\x00" in name:
        return None
    if name == INDEX_FILENAME:
        return None
    return name


def render_index_page(owner: str, folder_id: str, filenames: Iterable[str]) -> str:
    """Render the download page stored next to the files of a share folder."""
    items = []
    for name in filenames:
        link = html.escape(build_download_link(owner, folder_id, name), quote=True)
        items.append(f'  <p><a href="{link}">download {html.escape(name)}</a></p>')
    return INDEX_TEMPLATE.format(items="\n".join(items))


class UploadService:
    def __init__(
        self,
        namespaces: Optional[NamespaceManager] = None,
        allocator: Optional[ShareFolderAllocator] = None,
    ):
        self.namespaces = namespaces or NamespaceManager()
        self.allocator = allocator or ShareFolderAllocator(self.namespaces)

    def ingest(self, owner: str, files: List[IncomingFile]) -> UploadResult:
        """
        Store one upload batch in a freshly allocated share folder.

        Streams are first written to a private staging directory. The share
        folder is allocated only once every stream has been read, then the
        files are moved in and the index page is written last. On any
        failure, including cancellation, nothing is left behind.

        Args:
            owner: Authenticated username
            files: Parts of the upload in client order

        Returns:
            UploadResult with the folder id and one link per stored file

        Raises:
            EmptyBatchError: no part carried a usable filename
            AllocationExhaustedError: no free folder id was found
            StorageError: the filesystem failed
        """
        usable = []
        for incoming in files:
            name = clean_filename(incoming.filename)
            if name is None:
                logger.warning(f"Skipping upload part with unusable filename {incoming.filename!r} [user={owner}]")
                continue
            usable.append((name, incoming.stream))

        if not usable:
            raise EmptyBatchError("No files uploaded")

        # Same-batch duplicates collapse to one entry; the last stream wins on disk.
        names = list(dict.fromkeys(name for name, _ in usable))

        self.namespaces.ensure_namespace(owner)
        staging = self.namespaces.staging_root() / uuid.uuid4().hex
        folder: Optional[ShareFolder] = None

        try:
            staging.mkdir()
            for name, stream in usable:
                with open(staging / name, "wb") as out:
                    shutil.copyfileobj(stream, out, COPY_BUFFER_SIZE)

            folder = self.allocator.allocate(owner)
            for name in names:
                os.replace(staging / name, folder.path / name)

            index_path = folder.path / INDEX_FILENAME
            index_path.write_text(render_index_page(owner, folder.folder_id, names), encoding="utf-8")
        except OSError as e:
            self._discard(folder)
            logger.error(f"Upload failed for {owner}: {e}", exc_info=True)
            raise StorageError("Upload failed while writing files") from e
        except BaseException:
            self._discard(folder)
            raise
        finally:
            shutil.rmtree(staging, ignore_errors=True)

        logger.info(f"Stored {len(names)} file(s) in share folder {folder.folder_id} [user={owner}]")
        return UploadResult(
            owner=owner,
            folder_id=folder.folder_id,
            files=names,
            links=[build_download_link(owner, folder.folder_id, name) for name in names],
            index_link=build_download_link(owner, folder.folder_id, INDEX_FILENAME),
        )

    @staticmethod
    def _discard(folder: Optional[ShareFolder]) -> None:
        if folder is None:
            return
        logger.warning(f"Removing incomplete share folder {folder.folder_id} [user={folder.owner}]")
        shutil.rmtree(folder.path, ignore_errors=True)
