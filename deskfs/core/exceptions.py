"""Custom exceptions for the deskfs backend."""


class DeskFSError(Exception):
    """Base exception for deskfs errors."""

    def __init__(self, message, path=None):
        super().__init__(message)
        self.path = str(path) if path is not None else None


class FileSystemError(DeskFSError):
    """Exception for file system related errors."""
    pass


class PathNotFoundError(FileSystemError):
    """Exception for path not found errors."""
    pass


class NotDirectoryError(FileSystemError):
    """Exception raised when a directory was expected but a file was found."""
    pass


class AccessDeniedError(FileSystemError):
    """Exception raised when a directory or file cannot be read."""
    pass


class FileReadError(FileSystemError):
    """Exception for failures while reading file content."""
    pass


class FileTooLargeError(FileReadError):
    """Exception raised when a file exceeds the text read cap."""

    def __init__(self, message, path=None, size=None, limit=None):
        super().__init__(message, path)
        self.size = size
        self.limit = limit


class ValidationError(DeskFSError):
    """Exception for invalid arguments."""
    pass


class ConfigurationError(DeskFSError):
    """Exception for configuration related errors."""
    pass
