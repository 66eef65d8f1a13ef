"""Namespace listing, upload and download routes."""

import asyncio
from typing import List, Optional

from fastapi import APIRouter, Depends, File, UploadFile, status
from fastapi.responses import FileResponse

from common.constants import INDEX_FILENAME
from common.logging_config import get_logger
from fileserver.auth import get_current_user
from fileserver.schemas.common import ErrorResponse
from fileserver.schemas.files import TreeNodeResponse, UploadResponse
from fileserver.services.download_service import DownloadService
from fileserver.services.upload_service import IncomingFile, UploadService
from fileserver.storage.namespace import NamespaceManager
from fileserver.storage.tree import TreeLister

logger = get_logger(__name__)

router = APIRouter(
    tags=["Files"],
    responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)


def _list_namespace(username: str) -> TreeNodeResponse:
    namespace = NamespaceManager().ensure_namespace(username)
    tree = TreeLister().list_tree(namespace)
    return TreeNodeResponse.from_node(tree, username, namespace.resolve())


@router.get("/api/files", response_model=TreeNodeResponse, response_model_exclude_none=True)
async def list_files(current_user: str = Depends(get_current_user)):
    """
    List the caller's namespace as a tree.

    Returns:
        - Root directory node; one child directory per share folder,
          each holding the uploaded files and index.html

    Raises:
        - 401: Not authenticated
    """
    return await asyncio.to_thread(_list_namespace, current_user)


@router.post(
    "/api/upload",
    response_model=UploadResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def upload_files(
    files: Optional[List[UploadFile]] = File(None),
    current_user: str = Depends(get_current_user)
):
    """
    Upload a batch of files into a new share folder.

    Parameters:
        - files: One or more file parts (multipart/form-data, field name 'files')

    Returns:
        - folder_id: Id of the new share folder
        - files: Stored filenames
        - links: Download link per file
        - index_link: Link to the generated download page

    Raises:
        - 400: No usable files in the request
        - 401: Not authenticated
        - 500: Storage failure or folder id space exhausted
    """
    uploads = files or []
    batch = [IncomingFile(filename=upload.filename, stream=upload.file) for upload in uploads]

    upload_service = UploadService()
    try:
        result = await asyncio.to_thread(upload_service.ingest, current_user, batch)
    finally:
        for upload in uploads:
            await upload.close()

    return UploadResponse(
        folder_id=result.folder_id,
        files=result.files,
        links=result.links,
        index_link=result.index_link,
    )


@router.get(
    "/download/{owner}/{folder_id}/{filename}",
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def download_file(
    owner: str,
    folder_id: str,
    filename: str,
    current_user: str = Depends(get_current_user)
):
    """
    Download one file of a share folder.

    Raises:
        - 401: Not authenticated
        - 403: Caller is not the owner of the namespace
        - 404: No such folder or file
    """
    download_service = DownloadService()
    path = await asyncio.to_thread(
        download_service.authorize_and_resolve, current_user, owner, folder_id, filename
    )

    logger.info(f"Serving {owner}/{folder_id}/{filename} [user={current_user}]")
    if filename == INDEX_FILENAME:
        return FileResponse(path, media_type="text/html")
    return FileResponse(path, filename=filename)
