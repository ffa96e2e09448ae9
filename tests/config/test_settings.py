"""Test configuration management functionality."""

import pytest
import yaml

from truveo.config.settings import APIConfig, ConfigManager, PaginationConfig, TruveoConfig


class TestConfigManager:
    """Test configuration manager functionality."""

    def test_load_default_config(self, temp_dir, monkeypatch):
        """Test loading default configuration."""
        monkeypatch.delenv("TRUVEO_APP_ID", raising=False)
        config_path = temp_dir / "test_config.yaml"
        manager = ConfigManager(config_path)

        config = manager.load()

        assert isinstance(config, TruveoConfig)
        assert config.api.host == "xml.searchvideo.com"
        assert config.api.app_id == ""
        assert config_path.exists()

    def test_save_and_load_config(self, temp_dir, monkeypatch):
        """Test saving and loading configuration."""
        monkeypatch.delenv("TRUVEO_APP_ID", raising=False)
        config_path = temp_dir / "test_config.yaml"
        manager = ConfigManager(config_path)

        config = TruveoConfig()
        config.api.app_id = "saved-app"
        config.pagination.page_size = 25

        manager.save(config)
        assert config_path.exists()

        loaded_config = manager.load()
        assert loaded_config.api.app_id == "saved-app"
        assert loaded_config.pagination.page_size == 25

    def test_load_existing_config(self, temp_dir, monkeypatch):
        """Test loading from existing YAML file."""
        monkeypatch.delenv("TRUVEO_APP_ID", raising=False)
        config_path = temp_dir / "existing_config.yaml"

        config_data = {
            "api": {"app_id": "yaml-app", "host": "localhost", "port": 8080},
            "log_level": "DEBUG",
        }

        with open(config_path, "w") as f:
            yaml.dump(config_data, f)

        config = ConfigManager(config_path).load()

        assert config.api.app_id == "yaml-app"
        assert config.api.host == "localhost"
        assert config.api.port == 8080
        assert config.api.path == "/apiv3"
        assert config.log_level == "DEBUG"

    def test_empty_file_uses_defaults(self, temp_dir):
        config_path = temp_dir / "empty.yaml"
        config_path.write_text("")

        config = ConfigManager(config_path).load()

        assert config.pagination.max_results == 1000

    def test_invalid_config_fallback(self, temp_dir):
        """Test fallback to default when config is invalid."""
        config_path = temp_dir / "invalid_config.yaml"

        with open(config_path, "w") as f:
            f.write("invalid: yaml: content: [")

        config = ConfigManager(config_path).load()

        assert isinstance(config, TruveoConfig)
        assert config.api.host == "xml.searchvideo.com"

    def test_env_overrides_app_id(self, temp_dir, monkeypatch):
        config_path = temp_dir / "env_config.yaml"
        config_path.write_text("api:\n  app_id: from-file\n")
        monkeypatch.setenv("TRUVEO_APP_ID", "from-env")

        config = ConfigManager(config_path).load()

        assert config.api.app_id == "from-env"

    def test_get_config_loads_once(self, temp_dir):
        manager = ConfigManager(temp_dir / "config.yaml")

        assert manager.get_config() is manager.get_config()

    def test_save_without_config_raises(self, temp_dir):
        with pytest.raises(ValueError):
            ConfigManager(temp_dir / "config.yaml").save()

    def test_create_sample_config(self, temp_dir):
        """Test sample configuration creation."""
        output_path = temp_dir / "sample_config.yaml"

        written = ConfigManager(output_path).create_sample_config(output_path)

        assert written == output_path
        content = output_path.read_text()
        assert "# Truveo Client Configuration File" in content
        data = yaml.safe_load(content)
        assert TruveoConfig(**data).api.host == "xml.searchvideo.com"


class TestTruveoConfig:
    """Test configuration model validation."""

    def test_default_config_creation(self):
        config = TruveoConfig()

        assert config.api.path == "/apiv3"
        assert config.api.port == 80
        assert config.pagination.page_size == 10
        assert config.pagination.max_results == 1000
        assert config.log_file is None

    def test_page_size_limits(self):
        with pytest.raises(ValueError):
            PaginationConfig(page_size=51)

        with pytest.raises(ValueError):
            PaginationConfig(page_size=0)

    def test_max_results_capped(self):
        with pytest.raises(ValueError):
            PaginationConfig(max_results=1001)

    def test_invalid_port(self):
        with pytest.raises(ValueError):
            APIConfig(port=0)

    def test_invalid_log_level(self):
        with pytest.raises(ValueError):
            TruveoConfig(log_level="LOUD")
