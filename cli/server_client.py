"""HTTP client for communicating with the upzload server."""

import os
import time
import uuid
from contextlib import ExitStack
from pathlib import Path
from typing import Optional
from urllib.parse import quote

import httpx

from common.logging_config import get_logger
from cli.config import Config
from cli.constants import GREEN, RESET
from cli.utils import format_file_size, format_tree

logger = get_logger(__name__)


class ServerClient:
    """HTTP client for the server API with retry logic and error handling."""

    def __init__(self, config: Config):
        """
        Initialize server client.

        Args:
            config: Configuration instance
        """
        self.config = config
        self.session = httpx.Client(
            base_url=config.get_base_url(),
            timeout=config.get_timeout()
        )
        self.request_id = None
        logger.info(f"Initialized ServerClient [base_url={config.get_base_url()}]")

    def _request_with_retry(
        self,
        method: str,
        endpoint: str,
        max_retries: Optional[int] = None,
        **kwargs
    ) -> httpx.Response:
        """
        Make HTTP request with retry logic on 5xx errors and network failures.

        Args:
            method: HTTP method (GET, POST, DELETE, etc.)
            endpoint: API endpoint path
            max_retries: Max retry attempts (uses config default if None)
            **kwargs: Additional arguments to pass to httpx request

        Returns:
            HTTP response object

        Raises:
            ConnectionError: If max retries exceeded or connection fails
        """
        retry_config = self.config.get_retry_config()
        max_retries = max_retries if max_retries is not None else retry_config['max_retries']
        backoff = retry_config['retry_backoff_multiplier']

        last_exception = None

        self.request_id = str(uuid.uuid4())
        kwargs.setdefault('headers', {})['X-Request-ID'] = self.request_id

        logger.debug(f"Making request: {method} {endpoint} [request_id={self.request_id}]")

        for attempt in range(max_retries + 1):
            try:
                response = self.session.request(method, endpoint, **kwargs)
            except (httpx.ConnectError, httpx.TimeoutException) as e:
                last_exception = e
                if attempt < max_retries:
                    delay = backoff ** attempt
                    logger.warning(
                        f"Network error (attempt {attempt + 1}/{max_retries + 1}): "
                        f"{method} {endpoint} error={type(e).__name__}, retrying in {delay}s"
                    )
                    time.sleep(delay)
                    continue
                logger.error(f"Network error (max retries exceeded): {method} {endpoint} error={e}")
                break

            logger.debug(f"Response received: {method} {endpoint} status={response.status_code}")

            if response.status_code >= 500 and attempt < max_retries:
                delay = backoff ** attempt
                logger.warning(
                    f"Server error (attempt {attempt + 1}/{max_retries + 1}): "
                    f"{method} {endpoint} status={response.status_code}, retrying in {delay}s"
                )
                time.sleep(delay)
                continue

            return response

        if isinstance(last_exception, httpx.TimeoutException):
            raise ConnectionError("Request timed out. Server may be overloaded.")
        raise ConnectionError("Cannot connect to the upzload server. Is it running?")

    def _format_error(self, response: httpx.Response) -> str:
        """
        Map HTTP errors to user-friendly messages.
        """
        try:
            error_data = response.json()
            detail = error_data.get('detail', 'Unknown error')
            code = error_data.get('code', 'UNKNOWN')
        except ValueError:
            detail = response.text or 'Unknown error'
            code = 'UNKNOWN'

        error_messages = {
            'INVALID_INPUT': f'Invalid input: {detail}',
            'USER_ALREADY_EXISTS': 'Username already taken. Try logging in or choose a different username.',
            'USER_NOT_FOUND': 'User not found.',
            'WRONG_SECRET': 'Incorrect password.',
            'INVALID_API_KEY': 'Not authenticated. Please run: login <username> <password>',
            'FORBIDDEN': 'You may only download files from your own namespace.',
            'RESOURCE_NOT_FOUND': 'File not found on server.',
            'EMPTY_BATCH': 'No files were uploaded.',
            'ALLOCATION_EXHAUSTED': 'Server could not allocate a share folder. Please try again.',
            'STORAGE_ERROR': 'Server storage failure. Please try again later.',
        }

        if code in error_messages:
            return error_messages[code]

        status_messages = {
            400: 'Bad request',
            401: 'Not authenticated',
            403: 'Access forbidden',
            404: 'Not found',
            413: 'File too large',
            500: 'Server error',
            503: 'Service unavailable',
        }

        message = status_messages.get(response.status_code, detail)
        return f"{message} (Code: {code})" if code != 'UNKNOWN' else message

    def _get_auth_header(self) -> dict:
        """
        Raises:
            ValueError: If no session token is stored
        """
        api_key = self.config.get_api_key()
        if not api_key:
            raise ValueError("Not logged in. Please run: login <username> <password>")
        return {'Authorization': f'Bearer {api_key}'}

    def _authenticate(self, endpoint: str, username: str, password: str, expected_status: int, verb: str) -> str:
        logger.info(f"Attempting to {verb} user: {username}")
        try:
            response = self._request_with_retry(
                'POST',
                endpoint,
                json={'username': username, 'password': password}
            )
        except ConnectionError as e:
            logger.error(f"Connection error during {verb}: {e}")
            return f"Error: {e}"

        if response.status_code != expected_status:
            logger.warning(f"{verb.capitalize()} failed for user: {username} status={response.status_code}")
            return f"{verb.capitalize()} failed: {self._format_error(response)}"

        self.config.set_api_key(response.json()['api_key'])
        self.config.set_username(username)
        logger.info(f"{verb.capitalize()} successful for user: {username}")
        return f"{verb.capitalize()} successful! Logged in as {username}."

    def register(self, username: str, password: str) -> str:
        return self._authenticate('/auth/register', username, password, 201, 'register')

    def login(self, username: str, password: str) -> str:
        return self._authenticate('/auth/login', username, password, 200, 'login')

    def logout(self) -> str:
        try:
            headers = self._get_auth_header()
            response = self._request_with_retry('POST', '/auth/logout', headers=headers)
        except (ValueError, ConnectionError) as e:
            return f"Error: {e}"

        self.config.set_api_key(None)
        self.config.set_username(None)
        if response.status_code == 204:
            return "Logged out."
        return f"Session cleared locally; server said: {self._format_error(response)}"

    def upload_files(self, file_paths: list[str]) -> str:
        """
        Upload local files as one batch into a new share folder.

        Args:
            file_paths: Local paths of the files to upload

        Returns:
            Formatted result with the folder id and one link per file
        """
        try:
            headers = self._get_auth_header()
        except ValueError as e:
            return f"Error: {e}"

        errors = []
        existing = []
        for file_path in file_paths:
            path = Path(file_path).expanduser()
            if not path.is_file():
                errors.append(f"Error: Not a file: {file_path}")
                continue
            existing.append(path)

        if not existing:
            return "\n".join(errors) or "Error: No files to upload"

        total_size = sum(os.path.getsize(p) for p in existing)
        timeout = 30.0 + (total_size / (1024 * 1024)) * 0.1

        try:
            with ExitStack() as stack:
                parts = [
                    ('files', (path.name, stack.enter_context(open(path, 'rb'))))
                    for path in existing
                ]
                response = self._request_with_retry(
                    'POST', '/api/upload', max_retries=0, files=parts, headers=headers, timeout=timeout
                )
        except ConnectionError as e:
            logger.error(f"Connection error during upload: {e}")
            return f"Error: {e}"

        if response.status_code != 201:
            return "\n".join(errors + [f"Upload failed: {self._format_error(response)}"])

        data = response.json()
        base_url = self.config.get_base_url()
        lines = errors + [
            f"Uploaded {len(data['files'])} file(s), {format_file_size(total_size)} "
            f"into folder {GREEN}{data['folder_id']}{RESET}"
        ]
        for name, link in zip(data['files'], data['links']):
            lines.append(f"  {name}: {base_url}{link}")
        lines.append(f"Share page: {base_url}{data['index_link']}")
        return "\n".join(lines)

    def list_files(self) -> str:
        try:
            headers = self._get_auth_header()
            response = self._request_with_retry('GET', '/api/files', headers=headers)
        except (ValueError, ConnectionError) as e:
            return f"Error: {e}"

        if response.status_code != 200:
            return f"List failed: {self._format_error(response)}"
        return format_tree(response.json())

    def download(self, owner: str, folder_id: str, filename: str, output_path: Optional[str] = None) -> str:
        """
        Download one file of a share folder.

        Args:
            owner: Namespace owner
            folder_id: Share folder id
            filename: File to fetch
            output_path: Destination file or directory (defaults to ./<filename>)

        Returns:
            Success or error message
        """
        try:
            headers = self._get_auth_header()
        except ValueError as e:
            return f"Error: {e}"

        destination = Path(output_path).expanduser() if output_path else Path.cwd() / filename
        if destination.is_dir():
            destination = destination / filename
        destination.parent.mkdir(parents=True, exist_ok=True)
        partial = destination.with_name(destination.name + '.part')

        endpoint = f"/download/{quote(owner, safe='')}/{quote(folder_id, safe='')}/{quote(filename, safe='')}"
        try:
            with self.session.stream('GET', endpoint, headers=headers) as response:
                if response.status_code != 200:
                    response.read()
                    return f"Download failed: {self._format_error(response)}"
                written = 0
                with open(partial, 'wb') as f:
                    for chunk in response.iter_bytes():
                        f.write(chunk)
                        written += len(chunk)
            os.replace(partial, destination)
        except httpx.TransportError as e:
            partial.unlink(missing_ok=True)
            logger.error(f"Network error during download: {e}")
            if isinstance(e, httpx.ConnectError):
                return "Error: Cannot connect to the upzload server. Is it running?"
            return f"Error: Download of {filename} was interrupted; nothing was saved."
        except BaseException:
            partial.unlink(missing_ok=True)
            raise

        logger.info(f"Downloaded {endpoint} to {destination} ({written} bytes)")
        return f"Downloaded {filename} ({format_file_size(written)}) to {destination}"
