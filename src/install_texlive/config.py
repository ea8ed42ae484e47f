"""Configuration management for install-texlive."""

import os
from pathlib import Path
from typing import Any

import yaml

from install_texlive.models.config import AppConfig


class ConfigManager:
    """Manages settings with YAML file and environment variable support."""

    def __init__(self, config_path: Path | None = None) -> None:
        """Initialize configuration manager.

        Args:
            config_path: Path to config file. If None, uses INSTALL_TEXLIVE_CONFIG_PATH
                        environment variable or defaults to ~/.config/install-texlive/config.yaml
        """
        if config_path is None:
            env_path = os.getenv("INSTALL_TEXLIVE_CONFIG_PATH")
            if env_path:
                config_path = Path(env_path).expanduser()
            else:
                config_path = Path.home() / ".config" / "install-texlive" / "config.yaml"

        self.config_path = config_path
        self._config: AppConfig | None = None

    def load(self) -> AppConfig:
        """Load configuration from file and apply environment variable overrides.

        Returns:
            Loaded configuration
        """
        config_data: dict[str, Any] = {}

        # 1. Load from YAML file if it exists
        if self.config_path.exists():
            with open(self.config_path, encoding="utf-8") as f:
                config_data = yaml.safe_load(f) or {}

        # 2. Create config object (applies defaults)
        config = AppConfig(**config_data)

        # 3. Apply environment variable overrides
        config = self._apply_env_overrides(config)

        return config

    def _apply_env_overrides(self, config: AppConfig) -> AppConfig:
        """Apply environment variable overrides.

        Environment variables use the format: INSTALL_TEXLIVE_<SECTION>_<KEY>
        Examples:
            - INSTALL_TEXLIVE_MIRRORS_COUNTRY=Germany
            - INSTALL_TEXLIVE_CACHE_DIR=~/custom/path

        Args:
            config: Base configuration

        Returns:
            Configuration with environment overrides applied
        """
        # Mirror overrides
        if catalog_url := os.getenv("INSTALL_TEXLIVE_MIRRORS_CATALOG_URL"):
            config.mirrors.catalog_url = catalog_url
        if continent := os.getenv("INSTALL_TEXLIVE_MIRRORS_CONTINENT"):
            config.mirrors.continent = continent
        if country := os.getenv("INSTALL_TEXLIVE_MIRRORS_COUNTRY"):
            config.mirrors.country = country
        if timeout := os.getenv("INSTALL_TEXLIVE_MIRRORS_REQUEST_TIMEOUT"):
            config.mirrors.request_timeout = float(timeout)

        # Path overrides
        if home_dir := os.getenv("INSTALL_TEXLIVE_HOME_DIR"):
            config.paths.home_dir = Path(home_dir).expanduser()
        if tmp_dir := os.getenv("INSTALL_TEXLIVE_TMP_DIR"):
            config.paths.tmp_dir = Path(tmp_dir).expanduser()
        if cache_dir := os.getenv("INSTALL_TEXLIVE_CACHE_DIR"):
            config.paths.cache_dir = Path(cache_dir).expanduser()

        # Log level: GitHub sets RUNNER_DEBUG=1 when step debug logging is enabled
        if log_level := os.getenv("INSTALL_TEXLIVE_LOG_LEVEL"):
            if log_level in ("INFO", "DEBUG", "TRACE"):
                config.advanced.log_level = log_level  # type: ignore
        elif os.getenv("RUNNER_DEBUG") == "1":
            config.advanced.log_level = "DEBUG"

        # Cache overrides
        if retention := os.getenv("INSTALL_TEXLIVE_CACHE_RETENTION"):
            config.advanced.cache_retention = max(1, int(retention))

        return config

    def get_config(self) -> AppConfig:
        """Get configuration (singleton pattern).

        Returns:
            Current configuration
        """
        if self._config is None:
            self._config = self.load()
        return self._config

    def reload(self) -> AppConfig:
        """Reload configuration from file.

        Returns:
            Reloaded configuration
        """
        self._config = self.load()
        return self._config


# Global configuration manager instance
_config_manager = ConfigManager()


def get_config() -> AppConfig:
    """Get global application configuration.

    Returns:
        Application configuration
    """
    return _config_manager.get_config()


def reload_config() -> AppConfig:
    """Reload configuration from file.

    Returns:
        Reloaded configuration
    """
    return _config_manager.reload()
