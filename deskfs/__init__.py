"""deskfs - native filesystem and vault discovery backend for a desktop shell."""

__version__ = "0.1.0"
__description__ = "Native filesystem and vault discovery backend for a desktop shell"

# Import main components for programmatic access
from .core.models import ContentType, FileEntry, Vault, DiscoveryResult
from .core.scanner import DirectoryScanner
from .core.files import FileService
from .core.discovery import VaultDiscovery, user_directories
from .cli.main import cli

__all__ = [
    "ContentType",
    "FileEntry",
    "Vault",
    "DiscoveryResult",
    "DirectoryScanner",
    "FileService",
    "VaultDiscovery",
    "user_directories",
    "cli"
]
