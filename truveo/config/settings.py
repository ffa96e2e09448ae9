"""Configuration management for the Truveo client."""

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from ..core.models import MAX_RESULTS

logger = logging.getLogger(__name__)

APP_ID_ENV = "TRUVEO_APP_ID"


class APIConfig(BaseModel):
    """API configuration."""
    app_id: str = ""
    host: str = "xml.searchvideo.com"
    path: str = "/apiv3"
    port: int = Field(default=80, ge=1, le=65535)
    timeout: float = Field(default=30.0, gt=0)


class PaginationConfig(BaseModel):
    """Paging defaults."""
    page_size: int = Field(default=10, ge=1, le=50)
    max_results: int = Field(default=MAX_RESULTS, ge=1, le=MAX_RESULTS)


class TruveoConfig(BaseModel):
    """Main client configuration."""
    api: APIConfig = Field(default_factory=APIConfig)
    pagination: PaginationConfig = Field(default_factory=PaginationConfig)

    # Logging
    log_level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    log_file: str | None = None


class ConfigManager:
    """Manages configuration loading and saving."""

    DEFAULT_CONFIG_NAME = "truveo.yaml"

    def __init__(self, config_path: Path | None = None):
        """Initialize config manager."""
        self.config_path = config_path or self._get_default_config_path()
        self._config: TruveoConfig | None = None

    def load(self) -> TruveoConfig:
        """Load configuration from file or create default."""
        if self.config_path.exists():
            try:
                with open(self.config_path, encoding='utf-8') as f:
                    data = yaml.safe_load(f) or {}
                    self._config = TruveoConfig(**data)
            except Exception as e:
                logger.error(f"Error loading config from {self.config_path}: {e}")
                logger.warning("Using default configuration")
                self._config = TruveoConfig()
        else:
            logger.info(f"Config file not found at {self.config_path}, creating default configuration")
            self._config = TruveoConfig()
            self.save()

        app_id = os.environ.get(APP_ID_ENV)
        if app_id:
            self._config.api.app_id = app_id

        return self._config

    def save(self, config: TruveoConfig | None = None) -> None:
        """Save configuration to file."""
        config_to_save = config or self._config
        if config_to_save is None:
            raise ValueError("No configuration to save")

        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        data = config_to_save.model_dump()
        with open(self.config_path, 'w', encoding='utf-8') as f:
            yaml.dump(data, f, default_flow_style=False, indent=2)

        logger.info(f"Configuration saved to {self.config_path}")

    def get_config(self) -> TruveoConfig:
        """Get current configuration, loading if necessary."""
        if self._config is None:
            self.load()
        return self._config

    def _get_default_config_path(self) -> Path:
        """Get default configuration file path."""
        # Look for config in current directory first, then user config dir
        current_dir = Path.cwd() / self.DEFAULT_CONFIG_NAME
        if current_dir.exists():
            return current_dir

        config_dir = Path.home() / ".config" / "truveo"
        return config_dir / self.DEFAULT_CONFIG_NAME

    def create_sample_config(self, output_path: Path | None = None) -> Path:
        """Create a sample configuration file with comments."""
        output_path = output_path or (Path.cwd() / "truveo_sample.yaml")

        sample_yaml = """# Truveo Client Configuration File

# API settings
api:
  app_id: ""                  # Your developer app id (or set TRUVEO_APP_ID)
  host: "xml.searchvideo.com"
  path: "/apiv3"
  port: 80
  timeout: 30.0               # Seconds per request

# Paging through getVideos results
pagination:
  page_size: 10               # Videos per request (1-50)
  max_results: 1000           # The service never returns more than 1000

# Logging
log_level: "INFO"
log_file: null  # Set to file path for file logging
"""

        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(sample_yaml)

        logger.info(f"Sample configuration created at {output_path}")
        return output_path


def load_config(config_path: Path | None = None) -> TruveoConfig:
    """Load configuration from a specific path or the default location."""
    return ConfigManager(config_path).load()
