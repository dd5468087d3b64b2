"""Error handling utilities for the deskfs backend."""

import errno
import logging
from pathlib import Path
from typing import Callable, List, Optional, Type, Union
from functools import wraps

from .exceptions import (
    DeskFSError, FileSystemError, PathNotFoundError, NotDirectoryError,
    AccessDeniedError
)


logger = logging.getLogger(__name__)


class ErrorHandler:
    """Centralized translation and reporting of file system errors."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize error handler.

        Args:
            logger: Logger instance to use for error reporting
        """
        self.logger = logger or logging.getLogger(__name__)

    def translate_os_error(
        self,
        error: OSError,
        file_path: Union[str, Path],
        default: Type[FileSystemError] = FileSystemError
    ) -> FileSystemError:
        """
        Map an OSError to the matching deskfs exception.

        A missing path always maps to PathNotFoundError. Any other errno maps
        to `default` when one is given, otherwise it is classified by errno.

        Args:
            error: The exception that occurred
            file_path: Path where the error occurred
            default: Exception type for everything except a missing path

        Returns:
            The typed exception, ready to be raised by the caller
        """
        if isinstance(error, FileNotFoundError) or error.errno == errno.ENOENT:
            return PathNotFoundError(f"Path not found: {file_path}", file_path)

        reason = error.strerror or str(error)
        if default is not FileSystemError:
            self.logger.warning(f"Cannot access {file_path}: {reason}")
            return default(f"Cannot access {file_path}: {reason}", file_path)

        if isinstance(error, NotADirectoryError) or error.errno == errno.ENOTDIR:
            return NotDirectoryError(f"Not a directory: {file_path}", file_path)
        if isinstance(error, PermissionError) or error.errno in (errno.EACCES, errno.EPERM):
            self.logger.warning(f"Permission denied accessing {file_path}: {error}")
            return AccessDeniedError(f"Permission denied: {file_path}", file_path)

        self.logger.error(f"File system error accessing {file_path}: {error}")
        return FileSystemError(f"Cannot access {file_path}: {reason}", file_path)

    def soft_failure(self, errors: Optional[List[str]], error: OSError, file_path: Union[str, Path]) -> None:
        """
        Record an error that is skipped instead of raised.

        Args:
            errors: List collecting soft failures, or None to only log
            error: The exception that occurred
            file_path: Path that was skipped
        """
        message = f"Skipped {file_path}: {error.strerror or error}"
        self.logger.debug(message)
        if errors is not None:
            errors.append(message)

    def log_error_summary(self, errors: List[str], operation: str = "operation"):
        """
        Log a summary of soft failures that occurred during an operation.

        Args:
            errors: Messages collected during the operation
            operation: Description of the operation
        """
        if not errors:
            return

        self.logger.warning(f"{operation} skipped {len(errors)} unreadable paths")
        for message in errors[:10]:
            self.logger.warning(f"  {message}")
        if len(errors) > 10:
            self.logger.warning(f"  ... and {len(errors) - 10} more")


def safe_path_operation(default: Type[FileSystemError] = FileSystemError):
    """
    Decorator translating OSError raised by a path operation into deskfs errors.

    The path is taken from the first str or Path positional argument.

    Args:
        default: Exception type for errno values without a specific mapping
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except DeskFSError:
                raise
            except OSError as e:
                file_path = None
                for arg in args:
                    if isinstance(arg, (str, Path)):
                        file_path = arg
                        break
                raise ErrorHandler().translate_os_error(e, file_path or "unknown", default) from e

        return wrapper
    return decorator
