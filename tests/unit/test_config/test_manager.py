"""
Unit tests for the configuration singleton.
"""

import tomllib

import pytest

from droidprocs.config import (
    clear_config_cache,
    get_config,
    get_config_info,
    is_config_loaded,
    set_config,
    set_config_path,
)
from droidprocs.models.config import ProcsConfig
from droidprocs.validation import ValidationError


@pytest.fixture
def restore_config_path():
    from droidprocs.config import manager

    original = manager._CONFIG_FILE_PATH
    yield
    set_config_path(original)


@pytest.mark.unit
class TestConfigManager:
    """Test cases for loading and caching configuration."""

    def test_missing_file_uses_defaults(self, tmp_path, restore_config_path):
        """Test that a missing file is not an error."""
        set_config_path(tmp_path / "absent.toml")

        assert get_config() == ProcsConfig()
        assert get_config_info()["config_file_exists"] is False

    def test_load_from_file(self, tmp_path, restore_config_path):
        """Test loading and caching a configuration file."""
        path = tmp_path / "config.toml"
        path.write_text('[procfs]\nroot = "/mnt/proc"\n\n[platform]\nsdk_version = 16\n')
        set_config_path(path)

        config = get_config()

        assert config.procfs.root == "/mnt/proc"
        assert config.platform.sdk_version == 16
        assert is_config_loaded() is True
        assert get_config() is config

        clear_config_cache()
        assert is_config_loaded() is False

    def test_invalid_file(self, tmp_path, restore_config_path):
        """Test that validation errors propagate."""
        path = tmp_path / "config.toml"
        path.write_text('[procfs]\nenhanced_attribution = "maybe"\n')
        set_config_path(path)

        with pytest.raises(ValidationError):
            get_config()

    def test_malformed_toml(self, tmp_path, restore_config_path):
        """Test that TOML syntax errors propagate."""
        path = tmp_path / "config.toml"
        path.write_text("[procfs\n")
        set_config_path(path)

        with pytest.raises(tomllib.TOMLDecodeError):
            get_config()

    def test_set_config(self, test_config):
        """Test installing a configuration programmatically."""
        set_config(test_config)

        assert get_config() is test_config

    def test_shipped_defaults_file(self, restore_config_path):
        """Test that conf/config.toml matches the built-in defaults."""
        from droidprocs.config import manager

        if not manager._CONFIG_FILE_PATH.exists():
            pytest.skip("conf/config.toml not present")
        clear_config_cache()

        assert get_config() == ProcsConfig()


@pytest.mark.unit
class TestConfigLoader:
    """Test cases for reading config.toml."""

    def test_missing_file_returns_none(self, tmp_path):
        """Test that an absent file is reported as None."""
        from droidprocs.config import load_main_config

        assert load_main_config(tmp_path / "absent.toml") is None
        assert load_main_config(tmp_path) is None

    def test_load_sections(self, tmp_path):
        """Test the raw sections of a file."""
        from droidprocs.config import load_main_config

        path = tmp_path / "config.toml"
        path.write_text('[ps]\nsu_binary = "su"\n')

        assert load_main_config(path) == {"ps": {"su_binary": "su"}}
