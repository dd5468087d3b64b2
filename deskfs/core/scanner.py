"""Directory scanning for the deskfs backend."""

import os
import stat
import logging
from pathlib import Path
from typing import List, Optional, Union

from .config import AppConfig, DiscoveryConfig
from .models import ContentType, FileEntry, format_timestamp
from .exceptions import (
    AccessDeniedError, NotDirectoryError, PathNotFoundError, ValidationError
)
from .error_handler import ErrorHandler


HIDDEN_PREFIX = "."


def is_hidden(name: str) -> bool:
    """Check whether a file name is hidden by the leading-dot convention."""
    return name.startswith(HIDDEN_PREFIX)


class DirectoryScanner:
    """Lists directories and searches them for note vaults."""

    def __init__(self, config: Optional[AppConfig] = None):
        """
        Initialize the directory scanner.

        Args:
            config: Application configuration. Defaults are used if None.
        """
        self.config = config or AppConfig()
        self.error_handler = ErrorHandler()
        self.logger = logging.getLogger(__name__)

    @property
    def discovery(self) -> DiscoveryConfig:
        return self.config.discovery

    def list_directory(self, path: Union[str, Path], errors: Optional[List[str]] = None) -> List[FileEntry]:
        """
        List the immediate, non-hidden children of a directory.

        Args:
            path: Directory to list
            errors: Optional list collecting entries skipped because their
                    metadata could not be read

        Returns:
            FileEntry objects, directories first, then by case-insensitive name

        Raises:
            PathNotFoundError: If path doesn't exist
            NotDirectoryError: If path is not a directory
            AccessDeniedError: If the directory cannot be read
        """
        directory = Path(os.path.abspath(path))
        self._validate_directory(directory)

        try:
            with os.scandir(directory) as iterator:
                children = list(iterator)
        except OSError as e:
            raise self.error_handler.translate_os_error(e, directory, AccessDeniedError) from e

        entries = []
        for child in children:
            if is_hidden(child.name):
                continue

            try:
                child_stat = child.stat(follow_symlinks=False)
            except OSError as e:
                self.error_handler.soft_failure(errors, e, child.path)
                continue

            entries.append(FileEntry(
                path=str(directory / child.name),
                name=child.name,
                is_directory=stat.S_ISDIR(child_stat.st_mode),
                size_bytes=child_stat.st_size,
                modified_at=format_timestamp(child_stat.st_mtime),
                content_type=ContentType.classify(child.name),
            ))

        entries.sort(key=lambda entry: entry.sort_key)
        self.logger.debug(f"Listed {len(entries)} entries in {directory}")
        return entries

    def find_vaults(
        self,
        root: Union[str, Path],
        max_depth: int,
        errors: Optional[List[str]] = None
    ) -> List[Path]:
        """
        Search a directory tree for vaults, up to max_depth levels below root.

        A vault is a directory holding the marker directory. Vaults are not
        searched for nested vaults. Pruned child directories are skipped
        before their marker is checked; the root itself is always inspected.

        Args:
            root: Directory to start from (depth 0)
            max_depth: Deepest level whose directories are inspected
            errors: Optional list collecting unreadable directories

        Returns:
            Absolute vault paths in depth-first order. Empty if root is missing.

        Raises:
            ValidationError: If max_depth is not a non-negative integer
        """
        if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 0:
            raise ValidationError(f"max_depth must be a non-negative integer, got {max_depth!r}")

        root_path = Path(os.path.abspath(root))
        if not self._is_directory(root_path):
            self.logger.debug(f"Vault search root does not exist: {root_path}")
            return []

        vaults = []
        pending = [(root_path, 0)]
        while pending:
            directory, depth = pending.pop()

            if self.is_vault(directory):
                self.logger.debug(f"Found vault at {directory}")
                vaults.append(directory)
                continue

            if depth >= max_depth:
                continue

            children = self._child_directories(directory, errors)
            pending.extend((child, depth + 1) for child in reversed(children))

        return vaults

    def is_vault(self, directory: Path) -> bool:
        """Check whether a directory directly contains the vault marker directory."""
        return self._is_directory(directory / self.discovery.marker_name)

    def is_pruned(self, name: str) -> bool:
        """Check whether a directory name is excluded from vault search."""
        return is_hidden(name) or name in self.discovery.pruned_names

    def count_notes(self, vault_root: Union[str, Path], errors: Optional[List[str]] = None) -> int:
        """
        Count note files under a vault, skipping hidden subdirectories.

        Args:
            vault_root: Vault directory
            errors: Optional list collecting unreadable directories

        Returns:
            Number of files with the note extension
        """
        suffix = HIDDEN_PREFIX + self.discovery.note_extension
        count = 0
        pending = [Path(vault_root)]
        while pending:
            directory = pending.pop()
            try:
                with os.scandir(directory) as iterator:
                    children = list(iterator)
            except OSError as e:
                self.error_handler.soft_failure(errors, e, directory)
                continue

            for child in children:
                try:
                    if child.is_dir(follow_symlinks=False):
                        if not is_hidden(child.name):
                            pending.append(Path(child.path))
                    elif child.is_file() and os.path.splitext(child.name)[1] == suffix:
                        count += 1
                except OSError as e:
                    self.error_handler.soft_failure(errors, e, child.path)

        return count

    def _child_directories(self, directory: Path, errors: Optional[List[str]]) -> List[Path]:
        """Return the non-pruned subdirectories of a directory, sorted by name."""
        try:
            with os.scandir(directory) as iterator:
                children = list(iterator)
        except OSError as e:
            self.error_handler.soft_failure(errors, e, directory)
            return []

        subdirectories = []
        for child in children:
            if self.is_pruned(child.name):
                continue
            try:
                if child.is_dir(follow_symlinks=False):
                    subdirectories.append(Path(child.path))
            except OSError as e:
                self.error_handler.soft_failure(errors, e, child.path)

        subdirectories.sort(key=lambda child: child.name)
        return subdirectories

    @staticmethod
    def _is_directory(path: Path) -> bool:
        try:
            return path.is_dir()
        except OSError:
            return False

    def _validate_directory(self, path: Path):
        """
        Validate that the path exists and is a directory.

        Raises:
            PathNotFoundError: If path doesn't exist
            NotDirectoryError: If path is not a directory
        """
        if not os.path.exists(path):
            raise PathNotFoundError(f"Directory not found: {path}", path)
        if not os.path.isdir(path):
            raise NotDirectoryError(f"Not a directory: {path}", path)
