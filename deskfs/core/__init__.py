"""Core engine for directory listing, file access and vault discovery."""

from .models import ContentType, FileEntry, Vault, DiscoveryResult
from .scanner import DirectoryScanner
from .files import FileService
from .discovery import VaultDiscovery, user_directories

__all__ = [
    "ContentType",
    "FileEntry",
    "Vault",
    "DiscoveryResult",
    "DirectoryScanner",
    "FileService",
    "VaultDiscovery",
    "user_directories"
]
