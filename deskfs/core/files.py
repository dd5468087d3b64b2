"""File reading and content hashing for the deskfs backend."""

import os
import hashlib
import logging
from pathlib import Path
from typing import Optional, Union

from .config import AppConfig
from .exceptions import FileReadError, FileTooLargeError, PathNotFoundError
from .error_handler import safe_path_operation


HASH_ALGORITHM = "sha256"


class FileService:
    """Reads text files for preview and hashes file content."""

    def __init__(self, config: Optional[AppConfig] = None):
        self.config = config or AppConfig()
        self.logger = logging.getLogger(__name__)

    @property
    def max_text_bytes(self) -> int:
        return self.config.files.max_text_bytes

    @safe_path_operation(default=FileReadError)
    def read_text_file(self, path: Union[str, Path]) -> str:
        """
        Read a UTF-8 text file.

        Args:
            path: File to read

        Returns:
            The decoded file content

        Raises:
            PathNotFoundError: If the file doesn't exist
            FileTooLargeError: If the file size reaches the configured cap
            FileReadError: If the file cannot be read or is not valid UTF-8
        """
        file_path = Path(path)
        if not file_path.exists():
            raise PathNotFoundError(f"File not found: {path}", path)
        if file_path.is_dir():
            raise FileReadError(f"Is a directory: {path}", path)

        size = file_path.stat().st_size
        if size >= self.max_text_bytes:
            raise self._too_large(path, size)

        # Bounded read; the file may have grown since stat
        with open(file_path, 'rb') as f:
            data = f.read(self.max_text_bytes)
        if len(data) >= self.max_text_bytes:
            raise self._too_large(path, len(data))

        try:
            content = data.decode('utf-8')
        except UnicodeDecodeError as e:
            raise FileReadError(f"File is not valid UTF-8: {path}", path) from e

        self.logger.debug(f"Read {len(data)} bytes from {file_path}")
        return content

    @safe_path_operation(default=FileReadError)
    def hash_file(self, path: Union[str, Path]) -> str:
        """
        Compute the SHA-256 digest of a file's content.

        The file is streamed in chunks; there is no size cap.

        Args:
            path: File to hash

        Returns:
            Lowercase hex digest

        Raises:
            PathNotFoundError: If the file doesn't exist
            FileReadError: If the file cannot be read
        """
        if not os.path.exists(path):
            raise PathNotFoundError(f"File not found: {path}", path)
        if os.path.isdir(path):
            raise FileReadError(f"Is a directory: {path}", path)

        digest = hashlib.new(HASH_ALGORITHM)
        with open(path, 'rb') as f:
            for chunk in iter(lambda: f.read(self.config.files.hash_chunk_size), b''):
                digest.update(chunk)

        return digest.hexdigest()

    def _too_large(self, path, size: int) -> FileTooLargeError:
        return FileTooLargeError(
            f"File too large ({size} bytes, limit is {self.max_text_bytes} bytes)",
            path, size=size, limit=self.max_text_bytes
        )
