"""Vault discovery across the user's conventional folders."""

import os
import time
import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from .config import AppConfig
from .models import DiscoveryResult, Vault
from .scanner import DirectoryScanner
from .error_handler import ErrorHandler


def user_directories(home: Union[str, Path]) -> Dict[str, str]:
    """
    Return the well-known user folders under a home directory.

    Paths are built, not checked for existence.
    """
    home = Path(home)
    return {
        'home': str(home),
        'desktop': str(home / "Desktop"),
        'documents': str(home / "Documents"),
        'downloads': str(home / "Downloads"),
    }


class VaultDiscovery:
    """Finds vaults under the scan roots derived from the home directory."""

    def __init__(self, config: Optional[AppConfig] = None, scanner: Optional[DirectoryScanner] = None):
        """
        Initialize vault discovery.

        Args:
            config: Application configuration; its home_dir seeds the scan roots
            scanner: Scanner to use. Built from config if None.
        """
        self.config = config or AppConfig()
        self.scanner = scanner or DirectoryScanner(self.config)
        self.error_handler = ErrorHandler()
        self.logger = logging.getLogger(__name__)

    def scan_roots(self) -> List[Path]:
        """Scan roots in search order: configured subfolders of home, then home."""
        home = self.config.home_dir
        roots = [home / name for name in self.config.discovery.root_subfolders]
        roots.append(home)
        return roots

    def discover(self) -> List[Vault]:
        """Discover vaults under all scan roots, deduplicated and sorted by path."""
        return self.discover_with_report().vaults

    def discover_with_report(self) -> DiscoveryResult:
        """
        Discover vaults and report skipped directories.

        Roots that don't exist are skipped. Unreadable directories are
        collected in the result's errors instead of failing the run.

        Returns:
            DiscoveryResult with vaults sorted by path and unique by path
        """
        start_time = time.time()
        errors = []
        scanned = []
        found = []

        for root in self.scan_roots():
            if not os.path.isdir(root):
                self.logger.debug(f"Skipping missing scan root {root}")
                continue
            scanned.append(os.path.abspath(root))
            found.extend(self.scanner.find_vaults(root, self.config.discovery.max_depth, errors))

        vaults = []
        previous = None
        for vault_path in sorted(str(path) for path in found):
            if vault_path == previous:
                continue
            previous = vault_path
            vaults.append(Vault(
                name=Path(vault_path).name,
                path=vault_path,
                note_count=self.scanner.count_notes(vault_path, errors),
            ))

        duration = time.time() - start_time
        self.error_handler.log_error_summary(errors, "Vault discovery")
        self.logger.info(f"Discovered {len(vaults)} vaults under {len(scanned)} roots in {duration:.2f}s")

        return DiscoveryResult(vaults=vaults, roots=scanned, errors=errors, duration=duration)
