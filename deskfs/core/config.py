"""Configuration management for the deskfs backend."""

import os
import logging
from pathlib import Path
from typing import Dict, List, Optional
from dataclasses import dataclass, field
import configparser
import json

from .exceptions import ConfigurationError


HOME_SENTINEL = "."


def resolve_home_dir(environ: Optional[Dict[str, str]] = None) -> Path:
    """
    Resolve the user's home directory from the environment.

    Checks HOME, then USERPROFILE. Falls back to the current directory
    sentinel instead of failing.
    """
    environ = os.environ if environ is None else environ
    for variable in ("HOME", "USERPROFILE"):
        value = environ.get(variable)
        if value:
            return Path(value)
    return Path(HOME_SENTINEL)


@dataclass
class DiscoveryConfig:
    """Vault discovery settings."""
    marker_name: str = ".obsidian"
    note_extension: str = "md"
    max_depth: int = 4
    root_subfolders: List[str] = field(default_factory=lambda: ["Documents", "Desktop", "Obsidian"])
    pruned_names: List[str] = field(default_factory=lambda: [
        "node_modules", "__pycache__", "Library", ".Trash", "dist", "build", "target"
    ])


@dataclass
class FilesConfig:
    """File reading and hashing settings."""
    max_text_bytes: int = 10 * 1024 * 1024  # 10MB
    hash_chunk_size: int = 64 * 1024


@dataclass
class WebConfig:
    """Web interface configuration settings."""
    host: str = "127.0.0.1"
    port: int = 5000
    debug: bool = False


@dataclass
class LoggingConfig:
    """Logging configuration settings."""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_enabled: bool = False
    file_path: Optional[Path] = None
    file_max_size_mb: int = 10
    file_backup_count: int = 5
    console_enabled: bool = True


@dataclass
class AppConfig:
    """Main application configuration."""
    discovery: DiscoveryConfig = field(default_factory=DiscoveryConfig)
    files: FilesConfig = field(default_factory=FilesConfig)
    web: WebConfig = field(default_factory=WebConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Application metadata
    app_name: str = "deskfs"
    version: str = "0.1.0"
    home_dir: Path = field(default_factory=resolve_home_dir)
    data_dir: Optional[Path] = None

    def __post_init__(self):
        self.home_dir = Path(self.home_dir)
        if self.data_dir is None:
            self.data_dir = self.home_dir / ".deskfs"
        if self.logging.file_path is None:
            self.logging.file_path = self.data_dir / "logs" / "deskfs.log"

    def ensure_data_dir(self) -> Path:
        """Create the per-user data directory if needed and return it."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        return self.data_dir

    def validate(self) -> None:
        """
        Check configuration values.

        Raises:
            ConfigurationError: If a value is out of range
        """
        if self.discovery.max_depth < 0:
            raise ConfigurationError(f"discovery.max_depth must be non-negative, got {self.discovery.max_depth}")
        if not self.discovery.marker_name:
            raise ConfigurationError("discovery.marker_name must not be empty")
        if not self.discovery.note_extension:
            raise ConfigurationError("discovery.note_extension must not be empty")
        if self.files.max_text_bytes <= 0:
            raise ConfigurationError(f"files.max_text_bytes must be positive, got {self.files.max_text_bytes}")
        if self.files.hash_chunk_size <= 0:
            raise ConfigurationError(f"files.hash_chunk_size must be positive, got {self.files.hash_chunk_size}")
        if not 0 < self.web.port < 65536:
            raise ConfigurationError(f"web.port must be between 1 and 65535, got {self.web.port}")

    def to_dict(self) -> dict:
        """Return a JSON-serializable view of the configuration."""
        return {
            'discovery': {
                'marker_name': self.discovery.marker_name,
                'note_extension': self.discovery.note_extension,
                'max_depth': self.discovery.max_depth,
                'root_subfolders': list(self.discovery.root_subfolders),
                'pruned_names': list(self.discovery.pruned_names),
            },
            'files': {
                'max_text_bytes': self.files.max_text_bytes,
                'hash_chunk_size': self.files.hash_chunk_size,
            },
            'web': {
                'host': self.web.host,
                'port': self.web.port,
                'debug': self.web.debug,
            },
            'logging': {
                'level': self.logging.level,
                'format': self.logging.format,
                'file_enabled': self.logging.file_enabled,
                'file_path': str(self.logging.file_path),
                'file_max_size_mb': self.logging.file_max_size_mb,
                'file_backup_count': self.logging.file_backup_count,
                'console_enabled': self.logging.console_enabled,
            },
        }


def _split_list(value: str) -> List[str]:
    return [item.strip() for item in value.split(',') if item.strip()]


class ConfigManager:
    """Manages application configuration stored in an INI file."""

    def __init__(self, config_file: Optional[Path] = None, home_dir: Optional[Path] = None):
        """
        Initialize configuration manager.

        Args:
            config_file: Path to configuration file. If None, uses config.ini
                         in the data directory. A missing file is not created.
            home_dir: Home directory override. If None, resolved from the environment.
        """
        self.config = AppConfig(home_dir=home_dir) if home_dir is not None else AppConfig()
        self.config_file = Path(config_file) if config_file else self.config.data_dir / "config.ini"
        self.logger = logging.getLogger(__name__)

        if self.config_file.exists():
            self.load_from_file()

    def load_from_file(self) -> None:
        """
        Load configuration from INI file.

        Raises:
            ConfigurationError: If the file cannot be parsed or holds invalid values
        """
        parser = configparser.ConfigParser(interpolation=None)
        try:
            parser.read(self.config_file)

            if 'discovery' in parser:
                section = parser['discovery']
                if 'marker_name' in section:
                    self.config.discovery.marker_name = section.get('marker_name')
                if 'note_extension' in section:
                    self.config.discovery.note_extension = section.get('note_extension').lstrip('.')
                if 'max_depth' in section:
                    self.config.discovery.max_depth = section.getint('max_depth')
                if 'root_subfolders' in section:
                    self.config.discovery.root_subfolders = _split_list(section.get('root_subfolders'))
                if 'pruned_names' in section:
                    self.config.discovery.pruned_names = _split_list(section.get('pruned_names'))

            if 'files' in parser:
                section = parser['files']
                if 'max_text_bytes' in section:
                    self.config.files.max_text_bytes = section.getint('max_text_bytes')
                if 'hash_chunk_size' in section:
                    self.config.files.hash_chunk_size = section.getint('hash_chunk_size')

            if 'web' in parser:
                section = parser['web']
                if 'host' in section:
                    self.config.web.host = section.get('host')
                if 'port' in section:
                    self.config.web.port = section.getint('port')
                if 'debug' in section:
                    self.config.web.debug = section.getboolean('debug')

            if 'logging' in parser:
                section = parser['logging']
                if 'level' in section:
                    self.config.logging.level = section.get('level')
                if 'format' in section:
                    self.config.logging.format = section.get('format')
                if 'file_enabled' in section:
                    self.config.logging.file_enabled = section.getboolean('file_enabled')
                if 'file_path' in section:
                    self.config.logging.file_path = Path(section.get('file_path'))
                if 'file_max_size_mb' in section:
                    self.config.logging.file_max_size_mb = section.getint('file_max_size_mb')
                if 'file_backup_count' in section:
                    self.config.logging.file_backup_count = section.getint('file_backup_count')
                if 'console_enabled' in section:
                    self.config.logging.console_enabled = section.getboolean('console_enabled')

        except (configparser.Error, ValueError) as e:
            raise ConfigurationError(f"Error loading configuration from {self.config_file}: {e}", self.config_file)

        self.config.validate()
        self.logger.info(f"Configuration loaded from {self.config_file}")

    def save_to_file(self) -> None:
        """Save current configuration to INI file."""
        self.config_file.parent.mkdir(parents=True, exist_ok=True)

        parser = configparser.ConfigParser(interpolation=None)
        values = self.config.to_dict()
        for section_name, section in values.items():
            parser[section_name] = {
                key: ', '.join(value) if isinstance(value, list) else str(value)
                for key, value in section.items()
            }

        with open(self.config_file, 'w') as f:
            parser.write(f)

        self.logger.info(f"Configuration saved to {self.config_file}")

    def get_config(self) -> AppConfig:
        """Get the current configuration."""
        return self.config

    def set_value(self, key: str, value: str) -> object:
        """
        Set a configuration value from its string form.

        Args:
            key: Dotted key such as 'discovery.max_depth'
            value: New value as text

        Returns:
            The converted value that was stored

        Raises:
            ConfigurationError: If the key is unknown or the value invalid
        """
        keys = key.split('.')
        if len(keys) != 2:
            raise ConfigurationError("Key must be in format 'section.key' (e.g., 'discovery.max_depth')")

        section, setting = keys
        if section not in ('discovery', 'files', 'web', 'logging'):
            raise ConfigurationError(f"Unknown configuration section: {section}")

        section_obj = getattr(self.config, section)
        if not hasattr(section_obj, setting):
            raise ConfigurationError(f"Unknown setting '{setting}' in section '{section}'")

        current_value = getattr(section_obj, setting)
        try:
            if isinstance(current_value, bool):
                converted_value = value.lower() in ('true', '1', 'yes', 'on')
            elif isinstance(current_value, int):
                converted_value = int(value)
            elif isinstance(current_value, list):
                converted_value = _split_list(value)
            elif isinstance(current_value, Path):
                converted_value = Path(value)
            else:
                converted_value = value
        except ValueError:
            raise ConfigurationError(f"Invalid value for {key}: {value!r}")

        setattr(section_obj, setting, converted_value)
        try:
            self.config.validate()
        except ConfigurationError:
            setattr(section_obj, setting, current_value)
            raise
        self.save_to_file()
        return converted_value

    def export_to_json(self, file_path: Path) -> None:
        """
        Export configuration to JSON format.

        Args:
            file_path: Path to save JSON file
        """
        with open(file_path, 'w') as f:
            json.dump(self.config.to_dict(), f, indent=2)

        self.logger.info(f"Configuration exported to {file_path}")
