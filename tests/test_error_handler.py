"""Tests for OS error translation."""

import errno
import logging

import pytest

from deskfs.core.error_handler import ErrorHandler, safe_path_operation
from deskfs.core.exceptions import (
    AccessDeniedError, FileReadError, FileSystemError, NotDirectoryError,
    PathNotFoundError
)


class TestErrorHandler:

    def setup_method(self):
        self.handler = ErrorHandler()

    def test_missing_path(self):
        error = self.handler.translate_os_error(FileNotFoundError(errno.ENOENT, "No such file"), "/x")

        assert isinstance(error, PathNotFoundError)
        assert error.path == "/x"

    def test_not_a_directory(self):
        error = self.handler.translate_os_error(NotADirectoryError(errno.ENOTDIR, "Not a directory"), "/x")

        assert isinstance(error, NotDirectoryError)

    def test_permission_denied(self):
        error = self.handler.translate_os_error(PermissionError(errno.EACCES, "Permission denied"), "/x")

        assert isinstance(error, AccessDeniedError)

    def test_other_errno_is_generic(self):
        error = self.handler.translate_os_error(OSError(errno.EIO, "Input/output error"), "/x")

        assert type(error) is FileSystemError
        assert "Input/output error" in str(error)

    def test_explicit_default_wins_except_for_missing_path(self):
        denied = self.handler.translate_os_error(
            PermissionError(errno.EACCES, "Permission denied"), "/x", FileReadError
        )
        missing = self.handler.translate_os_error(
            FileNotFoundError(errno.ENOENT, "No such file"), "/x", FileReadError
        )

        assert type(denied) is FileReadError
        assert isinstance(missing, PathNotFoundError)

    def test_soft_failure_collects_message(self):
        errors = []

        self.handler.soft_failure(errors, PermissionError(errno.EACCES, "Permission denied"), "/locked")

        assert errors == ["Skipped /locked: Permission denied"]

    def test_soft_failure_without_list_only_logs(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="deskfs.core.error_handler"):
            self.handler.soft_failure(None, OSError(errno.EIO, "Input/output error"), "/bad")

        assert "Skipped /bad" in caplog.text

    def test_error_summary_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="deskfs.core.error_handler"):
            self.handler.log_error_summary([f"Skipped /d{i}: Permission denied" for i in range(12)], "Scan")

        assert "Scan skipped 12 unreadable paths" in caplog.text
        assert "... and 2 more" in caplog.text


class TestSafePathOperation:

    def test_translates_os_error_using_path_argument(self):
        @safe_path_operation(default=FileReadError)
        def read(path):
            raise PermissionError(errno.EACCES, "Permission denied")

        with pytest.raises(FileReadError) as exc_info:
            read("/secret.md")

        assert exc_info.value.path == "/secret.md"

    def test_deskfs_errors_pass_through(self):
        @safe_path_operation()
        def read(path):
            raise PathNotFoundError("gone", path)

        with pytest.raises(PathNotFoundError):
            read("/gone")
