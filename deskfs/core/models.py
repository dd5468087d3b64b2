"""Core data models for the deskfs backend."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional


class ContentType(str, Enum):
    """Content type labels inferred from file extensions."""
    MARKDOWN = "text/markdown"
    PLAIN_TEXT = "text/plain"
    JSON = "application/json"
    YAML = "text/yaml"
    CSV = "text/csv"
    PDF = "application/pdf"
    PNG = "image/png"
    JPEG = "image/jpeg"
    GIF = "image/gif"
    SVG = "image/svg+xml"
    MP4 = "video/mp4"
    MP3 = "audio/mpeg"
    WORD = "application/msword"
    EXCEL = "application/vnd.ms-excel"
    POWERPOINT = "application/vnd.ms-powerpoint"
    HTML = "text/html"
    JAVASCRIPT = "text/javascript"
    TYPESCRIPT = "text/typescript"
    PYTHON = "text/x-python"
    RUST = "text/x-rust"
    GO = "text/x-go"
    UNKNOWN = "application/octet-stream"

    @classmethod
    def get_extensions(cls) -> Dict[str, "ContentType"]:
        """Get mapping of lowercase file extensions to content types."""
        return {
            # Text and data
            "md": cls.MARKDOWN,
            "txt": cls.PLAIN_TEXT,
            "json": cls.JSON,
            "yaml": cls.YAML,
            "yml": cls.YAML,
            "csv": cls.CSV,

            # Documents
            "pdf": cls.PDF,
            "doc": cls.WORD,
            "docx": cls.WORD,
            "xls": cls.EXCEL,
            "xlsx": cls.EXCEL,
            "pptx": cls.POWERPOINT,

            # Media
            "png": cls.PNG,
            "jpg": cls.JPEG,
            "jpeg": cls.JPEG,
            "gif": cls.GIF,
            "svg": cls.SVG,
            "mp4": cls.MP4,
            "mp3": cls.MP3,

            # Source code
            "html": cls.HTML,
            "js": cls.JAVASCRIPT,
            "ts": cls.TYPESCRIPT,
            "py": cls.PYTHON,
            "rs": cls.RUST,
            "go": cls.GO,
        }

    @classmethod
    def from_filename(cls, filename: str) -> "ContentType":
        """Infer the content type of a file name; never raises."""
        if "." not in filename:
            return cls.UNKNOWN
        extension = filename.rsplit(".", 1)[1].lower()
        return cls.get_extensions().get(extension, cls.UNKNOWN)

    @classmethod
    def classify(cls, filename: str) -> str:
        """Return the content type label for a file name."""
        return cls.from_filename(filename).value


def format_timestamp(timestamp: Optional[float]) -> str:
    """
    Format a POSIX timestamp as an ISO-8601 UTC string with whole seconds.

    Returns an empty string when the timestamp is missing, before the epoch
    or out of range.
    """
    if timestamp is None or timestamp < 0:
        return ""
    try:
        moment = datetime.fromtimestamp(int(timestamp), tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return ""
    return moment.isoformat()


@dataclass(frozen=True)
class FileEntry:
    """A single directory listing entry."""
    path: str
    name: str
    is_directory: bool
    size_bytes: int
    modified_at: str
    content_type: str

    @property
    def sort_key(self):
        """Directories first, then case-insensitive name."""
        return (not self.is_directory, self.name.lower())

    def to_dict(self) -> Dict[str, Any]:
        return {
            'path': self.path,
            'name': self.name,
            'is_directory': self.is_directory,
            'size_bytes': self.size_bytes,
            'modified_at': self.modified_at,
            'content_type': self.content_type,
        }


@dataclass(frozen=True)
class Vault:
    """A note vault found during discovery."""
    name: str
    path: str
    note_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'path': self.path,
            'note_count': self.note_count,
        }


@dataclass
class DiscoveryResult:
    """Result of a vault discovery run."""
    vaults: List[Vault]
    roots: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    duration: float = 0.0

    @property
    def total_notes(self) -> int:
        """Total notes across all discovered vaults."""
        return sum(vault.note_count for vault in self.vaults)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'vaults': [vault.to_dict() for vault in self.vaults],
            'count': len(self.vaults),
            'roots': list(self.roots),
            'errors': list(self.errors),
            'duration': self.duration,
        }
