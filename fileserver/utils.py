"""Utility helper functions for the file server."""

from urllib.parse import quote


def build_download_link(owner: str, folder_id: str, filename: str) -> str:
    """
    Build the download URL for a file inside a share folder.

    Args:
        owner: Username owning the namespace
        folder_id: Share folder id
        filename: Stored file name

    Returns:
        Relative URL of the form /download/<owner>/<folder_id>/<filename>
    """
    return f"/download/{quote(owner, safe='')}/{quote(folder_id, safe='')}/{quote(filename, safe='')}"
