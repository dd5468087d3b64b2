"""Tests for configuration loading and home directory resolution."""

import json
import shutil
import tempfile
from pathlib import Path

import pytest

from deskfs.core.config import AppConfig, ConfigManager, resolve_home_dir
from deskfs.core.exceptions import ConfigurationError


class TestResolveHomeDir:
    """Test home directory resolution from the environment."""

    def test_prefers_home(self):
        assert resolve_home_dir({'HOME': '/home/sam', 'USERPROFILE': 'C:\\Users\\sam'}) == Path('/home/sam')

    def test_falls_back_to_userprofile(self):
        assert resolve_home_dir({'USERPROFILE': 'C:\\Users\\sam'}) == Path('C:\\Users\\sam')

    def test_empty_values_are_ignored(self):
        assert resolve_home_dir({'HOME': '', 'USERPROFILE': '/profile'}) == Path('/profile')

    def test_sentinel_when_unset(self):
        assert resolve_home_dir({}) == Path('.')

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv('HOME', '/env/home')

        assert resolve_home_dir() == Path('/env/home')


class TestAppConfig:
    """Test configuration defaults and the data directory."""

    def setup_method(self):
        self.temp_dir = Path(tempfile.mkdtemp())

    def teardown_method(self):
        if self.temp_dir.exists():
            shutil.rmtree(self.temp_dir)

    def test_defaults(self):
        config = AppConfig(home_dir=self.temp_dir)

        assert config.discovery.marker_name == ".obsidian"
        assert config.discovery.note_extension == "md"
        assert config.discovery.max_depth == 4
        assert config.files.max_text_bytes == 10 * 1024 * 1024
        assert config.data_dir == self.temp_dir / ".deskfs"

    def test_construction_does_not_touch_disk(self):
        config = AppConfig(home_dir=self.temp_dir)

        assert not config.data_dir.exists()

    def test_ensure_data_dir_is_idempotent(self):
        config = AppConfig(home_dir=self.temp_dir)

        first = config.ensure_data_dir()
        second = config.ensure_data_dir()

        assert first == second == self.temp_dir / ".deskfs"
        assert first.is_dir()

    def test_validate_rejects_negative_depth(self):
        config = AppConfig(home_dir=self.temp_dir)
        config.discovery.max_depth = -1

        with pytest.raises(ConfigurationError):
            config.validate()

    def test_sections_are_independent_between_instances(self):
        first = AppConfig(home_dir=self.temp_dir)
        second = AppConfig(home_dir=self.temp_dir)

        first.discovery.pruned_names.append("vendor")

        assert "vendor" not in second.discovery.pruned_names


class TestConfigManager:
    """Test INI persistence."""

    def setup_method(self):
        self.temp_dir = Path(tempfile.mkdtemp())
        self.config_file = self.temp_dir / "config.ini"

    def teardown_method(self):
        if self.temp_dir.exists():
            shutil.rmtree(self.temp_dir)

    def test_missing_file_is_not_created(self):
        manager = ConfigManager(home_dir=self.temp_dir)

        assert manager.config_file == self.temp_dir / ".deskfs" / "config.ini"
        assert not manager.config_file.exists()

    def test_load_from_file(self):
        self.config_file.write_text(
            "[discovery]\n"
            "marker_name = .vault\n"
            "note_extension = .markdown\n"
            "max_depth = 2\n"
            "root_subfolders = Notes, Sync\n"
            "\n"
            "[files]\n"
            "max_text_bytes = 1024\n"
            "\n"
            "[logging]\n"
            "format = %(levelname)s %(message)s\n"
        )

        config = ConfigManager(self.config_file, home_dir=self.temp_dir).get_config()

        assert config.discovery.marker_name == ".vault"
        assert config.discovery.note_extension == "markdown"
        assert config.discovery.max_depth == 2
        assert config.discovery.root_subfolders == ["Notes", "Sync"]
        assert config.files.max_text_bytes == 1024
        assert config.logging.format == "%(levelname)s %(message)s"

    def test_invalid_value_raises(self):
        self.config_file.write_text("[discovery]\nmax_depth = deep\n")

        with pytest.raises(ConfigurationError):
            ConfigManager(self.config_file, home_dir=self.temp_dir)

    def test_out_of_range_value_raises(self):
        self.config_file.write_text("[discovery]\nmax_depth = -3\n")

        with pytest.raises(ConfigurationError):
            ConfigManager(self.config_file, home_dir=self.temp_dir)

    def test_save_and_reload(self):
        manager = ConfigManager(self.config_file, home_dir=self.temp_dir)
        manager.config.discovery.pruned_names = ["vendor", "dist"]
        manager.config.web.port = 8765
        manager.save_to_file()

        reloaded = ConfigManager(self.config_file, home_dir=self.temp_dir).get_config()

        assert reloaded.discovery.pruned_names == ["vendor", "dist"]
        assert reloaded.web.port == 8765

    def test_set_value_converts_types(self):
        manager = ConfigManager(self.config_file, home_dir=self.temp_dir)

        assert manager.set_value("discovery.max_depth", "6") == 6
        assert manager.set_value("web.debug", "yes") is True
        assert manager.set_value("discovery.pruned_names", "a, b") == ["a", "b"]
        assert self.config_file.exists()

    def test_set_value_rejects_unknown_key(self):
        manager = ConfigManager(self.config_file, home_dir=self.temp_dir)

        with pytest.raises(ConfigurationError):
            manager.set_value("discovery.colour", "blue")
        with pytest.raises(ConfigurationError):
            manager.set_value("max_depth", "3")

    def test_set_value_keeps_old_value_when_invalid(self):
        manager = ConfigManager(self.config_file, home_dir=self.temp_dir)

        with pytest.raises(ConfigurationError):
            manager.set_value("discovery.max_depth", "-1")

        assert manager.config.discovery.max_depth == 4

    def test_export_to_json(self):
        manager = ConfigManager(self.config_file, home_dir=self.temp_dir)
        export_path = self.temp_dir / "config.json"

        manager.export_to_json(export_path)

        data = json.loads(export_path.read_text())
        assert data['discovery']['max_depth'] == 4
        assert data['files']['max_text_bytes'] == 10 * 1024 * 1024
