"""
Configuration management for graphExplorer.
"""

import yaml
from typing import Dict, Any, Optional
from pathlib import Path


DEFAULT_ENVIRONMENT_CONFIG: Dict[str, Any] = {
    "general": {
        "log_level": "INFO"
    },
    "layout": {
        "iterations": 30,
        "iterations_click": 20,
        "repulsive_strength": 400,
        "attractive_strength": 510,
        "dampening_effect": 1000,
        "border_ratio": 1,
        "show_progress": False
    },
    "loader": {
        "random_seed": None,
        "spacing_per_vertex": 75,
        "canvas_padding": 1000
    }
}


class ConfigManager:
    """Manages the environment configuration file."""

    def __init__(self, config_dir: Optional[str] = None):
        """
        Initialize configuration manager.

        Args:
            config_dir: Directory containing configuration files
        """
        if config_dir is None:
            # Default to config directory relative to project root
            project_root = Path(__file__).parent.parent.parent
            config_dir = project_root / "config"

        self.config_dir = Path(config_dir)
        self._env_config = None

    def load_environment_config(self) -> Dict[str, Any]:
        """Load environment configuration."""
        if self._env_config is None:
            config_file = self.config_dir / "environment_config.yaml"
            if config_file.exists():
                with open(config_file, 'r', encoding='utf-8') as f:
                    self._env_config = yaml.safe_load(f) or {}
            else:
                # Default configuration
                self._env_config = {
                    section: dict(values) for section, values in DEFAULT_ENVIRONMENT_CONFIG.items()
                }
        return self._env_config

    def get_environment_config(self, task_name: str) -> Dict[str, Any]:
        """
        Get environment configuration for a specific task.

        Values missing from the file fall back to the built-in defaults of
        that section.

        Args:
            task_name: Name of the section (e.g., 'layout', 'loader')

        Returns:
            Environment configuration dictionary
        """
        env_config = self.load_environment_config()

        config = dict(DEFAULT_ENVIRONMENT_CONFIG.get(task_name, DEFAULT_ENVIRONMENT_CONFIG["general"]))
        config.update(env_config.get(task_name) or {})
        return config

    def get_layout_config(self) -> Dict[str, Any]:
        """
        Get force-directed layout parameters.

        Raises:
            ValueError: If a divisor parameter is zero
        """
        config = self.get_environment_config("layout")
        for key in ("attractive_strength", "dampening_effect", "border_ratio"):
            if not config.get(key):
                raise ValueError(f"Layout parameter '{key}' must be non-zero, got {config.get(key)!r}")
        return config

    def get_general_config(self) -> Dict[str, Any]:
        """Get general configuration settings."""
        return self.get_environment_config("general")


# Global config manager instance
config_manager = ConfigManager()
