"""Utility functions for CLI output."""

from cli.constants import BLUE, RESET


def format_file_size(size_bytes: int) -> str:
    """
    Format file size in bytes to human-readable format with appropriate unit.

    Uses binary units (1024-based) and automatically selects the most
    appropriate unit (B, KiB, MiB, GiB, TiB).

    Args:
        size_bytes: File size in bytes

    Returns:
        Formatted string with size and unit (e.g., "1.50 MiB", "512 B")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"

    units = ['KiB', 'MiB', 'GiB', 'TiB']
    size = size_bytes / 1024.0

    for unit in units:
        if size < 1024.0:
            return f"{size:.2f} {unit}"
        size /= 1024.0

    return f"{size:.2f} PiB"


def format_tree(node: dict, color: bool = True) -> str:
    """
    Render a namespace listing as an indented tree.

    Args:
        node: Root directory node as returned by GET /api/files
        color: Highlight directory names with ANSI colors

    Returns:
        Multi-line string, one entry per line
    """
    lines: list[str] = []

    def _render(children: list[dict], prefix: str) -> None:
        for i, child in enumerate(children):
            last = i == len(children) - 1
            branch = "└── " if last else "├── "
            if child.get('type') == 'directory':
                name = f"{BLUE}{child['name']}/{RESET}" if color else f"{child['name']}/"
                lines.append(f"{prefix}{branch}{name}")
                _render(child.get('children', []), prefix + ("    " if last else "│   "))
            else:
                size = format_file_size(child.get('size') or 0)
                lines.append(f"{prefix}{branch}{child['name']} ({size})")

    children = node.get('children', [])
    if not children:
        return "(no uploads yet)"
    _render(children, "")
    return "\n".join(lines)
