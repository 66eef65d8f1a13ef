"""Configuration management for the upzload CLI."""

import json
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional

from common.logging_config import get_logger

logger = get_logger(__name__)


class Config:
    """Manages CLI configuration stored in a JSON file."""

    DEFAULT_CONFIG = {
        "server_host": os.environ.get("UPZ_SERVER_HOST", "localhost"),
        "server_port": int(os.environ.get("UPZ_SERVER_PORT", "3000")),
        "timeout": 30,
        "max_retries": 3,
        "retry_backoff_multiplier": 2,
    }

    def __init__(self, config_path: Path):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to config JSON file (typically ~/.upzload/config.json)
        """
        self.config_path = config_path
        self.data = self._load()

    def _load(self) -> dict:
        """
        Load configuration from file, creating defaults if necessary.

        A corrupt file is backed up to config.json.bak and replaced by defaults.
        """
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
        except PermissionError:
            self.config_path = Path(tempfile.gettempdir()) / '.upzload' / 'config.json'
            self.config_path.parent.mkdir(parents=True, exist_ok=True)

        config = self.DEFAULT_CONFIG.copy()

        if not self.config_path.exists():
            self._write(config)
            return config

        try:
            with open(self.config_path, 'r') as f:
                config.update(json.load(f))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Unreadable config file {self.config_path}: {e}")
            try:
                shutil.copy(self.config_path, self.config_path.with_suffix('.json.bak'))
            except OSError:
                logger.warning("Could not back up unreadable config file")
        return config

    def _write(self, data: dict) -> None:
        try:
            with open(self.config_path, 'w') as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            logger.warning(f"Could not write config file {self.config_path}: {e}")

    def save(self) -> None:
        """Save current configuration to file."""
        self._write(self.data)

    def get_api_key(self) -> Optional[str]:
        return self.data.get('api_key')

    def set_api_key(self, key: Optional[str]) -> None:
        """
        Store (or clear, with None) the session token and save.
        """
        if key is None:
            self.data.pop('api_key', None)
        else:
            self.data['api_key'] = key
        self.save()

    def get_username(self) -> Optional[str]:
        return self.data.get('username')

    def set_username(self, username: Optional[str]) -> None:
        if username is None:
            self.data.pop('username', None)
        else:
            self.data['username'] = username
        self.save()

    def get_base_url(self) -> str:
        """
        Get server base URL.

        Returns:
            Base URL string (e.g., "http://localhost:3000")
        """
        host = self.data.get('server_host', 'localhost')
        port = self.data.get('server_port', 3000)
        return f"http://{host}:{port}"

    def get_timeout(self) -> int:
        return self.data.get('timeout', 30)

    def get_retry_config(self) -> dict:
        """
        Get retry configuration.

        Returns:
            Dictionary with 'max_retries' and 'retry_backoff_multiplier'
        """
        return {
            'max_retries': self.data.get('max_retries', 3),
            'retry_backoff_multiplier': self.data.get('retry_backoff_multiplier', 2),
        }
