"""Project-wide constants shared by the server and the CLI."""

SHARE_ID_BYTES: int = 3  # 6 hex characters per share folder id
SHARE_ID_PATTERN: str = r"^[0-9a-f]{6}$"

INDEX_FILENAME: str = "index.html"
STAGING_DIRNAME: str = ".staging"

USERNAME_PATTERN: str = r"^[A-Za-z0-9_][A-Za-z0-9_.-]{0,63}$"

API_KEY_PREFIX: str = "upz_"
