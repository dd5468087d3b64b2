"""Tests for content type inference and data models."""

import pytest

from deskfs.core.models import (
    ContentType, DiscoveryResult, FileEntry, Vault, format_timestamp
)


class TestContentType:
    """Test file name classification."""

    @pytest.mark.parametrize("filename,expected", [
        ("report.md", "text/markdown"),
        ("report.MD", "text/markdown"),
        ("notes.txt", "text/plain"),
        ("data.json", "application/json"),
        ("config.yml", "text/yaml"),
        ("config.YAML", "text/yaml"),
        ("photo.JPEG", "image/jpeg"),
        ("diagram.svg", "image/svg+xml"),
        ("slides.pptx", "application/vnd.ms-powerpoint"),
        ("sheet.xlsx", "application/vnd.ms-excel"),
        ("main.rs", "text/x-rust"),
        ("archive.tar.gz", "application/octet-stream"),
        ("song.mp3", "audio/mpeg"),
    ])
    def test_known_extensions(self, filename, expected):
        assert ContentType.classify(filename) == expected

    def test_uses_last_extension(self):
        assert ContentType.classify("backup.md.json") == "application/json"
        assert ContentType.classify("script.json.py") == "text/x-python"

    @pytest.mark.parametrize("filename", ["", "README", "Makefile", "md", "trailing.", "weird.xyz"])
    def test_unknown_or_missing_extension(self, filename):
        assert ContentType.classify(filename) == ContentType.UNKNOWN.value

    def test_hidden_file_uses_extension_after_dot(self):
        assert ContentType.classify(".md") == "text/markdown"

    def test_from_filename_returns_enum_member(self):
        assert ContentType.from_filename("a.PNG") is ContentType.PNG


class TestFormatTimestamp:
    """Test ISO-8601 timestamp formatting."""

    def test_epoch(self):
        assert format_timestamp(0) == "1970-01-01T00:00:00+00:00"

    def test_fractional_seconds_are_dropped(self):
        assert format_timestamp(1700000000.987) == "2023-11-14T22:13:20+00:00"

    def test_missing_timestamp(self):
        assert format_timestamp(None) == ""

    def test_out_of_range_timestamp_degrades_to_empty(self):
        assert format_timestamp(1e20) == ""

    def test_timestamp_before_epoch_degrades_to_empty(self):
        assert format_timestamp(-100) == ""


class TestModels:
    """Test data model serialization."""

    def test_file_entry_to_dict(self):
        entry = FileEntry(
            path="/tmp/a.md",
            name="a.md",
            is_directory=False,
            size_bytes=3,
            modified_at="",
            content_type="text/markdown"
        )

        assert entry.to_dict() == {
            'path': "/tmp/a.md",
            'name': "a.md",
            'is_directory': False,
            'size_bytes': 3,
            'modified_at': "",
            'content_type': "text/markdown",
        }

    def test_file_entry_is_immutable(self):
        entry = FileEntry("/tmp/a", "a", True, 0, "", "application/octet-stream")

        with pytest.raises(AttributeError):
            entry.name = "b"

    def test_discovery_result_totals(self):
        result = DiscoveryResult(
            vaults=[Vault("a", "/a", 3), Vault("b", "/b", 4)],
            roots=["/"],
            errors=["Skipped /x: Permission denied"],
            duration=0.5
        )

        data = result.to_dict()

        assert result.total_notes == 7
        assert data['count'] == 2
        assert data['vaults'][1] == {'name': "b", 'path': "/b", 'note_count': 4}
        assert data['errors'] == ["Skipped /x: Permission denied"]
