"""
Configuration management for compareGraph.
"""

import copy
import os
import yaml
from typing import Dict, Any, Optional
from pathlib import Path


CONFIG_FILENAME = "graph_config.yaml"
API_URL_ENV = "COMPARE_GRAPH_API_URL"

DEFAULT_CONFIG: Dict[str, Dict[str, Any]] = {
    "catalog": {
        "base_url": "https://dflndnsl0g.execute-api.us-east-2.amazonaws.com",
        "timeout_seconds": 10,
        "max_workers": 8,
        "show_progress": False,
    },
    "layout": {
        "link_distance": 150.0,
        "charge_strength": -800.0,
        "center_strength": 0.1,
        "main_radius": 35.0,
        "ghost_radius": 25.0,
        "alpha_min": 0.001,
        "alpha_decay": 0.0228,
        "velocity_decay": 0.4,
        "drag_alpha_target": 0.3,
        "collision_iterations": 1,
        "seed_spread": 30.0,
        "max_ticks": 500,
    },
    "session": {
        "graph_mode": "full",
        "notice_ttl_seconds": 4.0,
        "canvas_width": 960,
        "canvas_height": 640,
    },
}


class ConfigManager:
    """Manages the YAML configuration of the catalog client, layout and session."""

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
        self._config = None

    def load_config(self) -> Dict[str, Any]:
        """Load configuration, merged over the built-in defaults."""
        if self._config is None:
            config = copy.deepcopy(DEFAULT_CONFIG)
            config_file = self.config_dir / CONFIG_FILENAME
            if config_file.exists():
                with open(config_file, 'r', encoding='utf-8') as f:
                    loaded = yaml.safe_load(f) or {}
                for section, values in loaded.items():
                    if isinstance(values, dict):
                        config.setdefault(section, {}).update(values)
            self._config = config
        return self._config

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get a copy of one configuration section.

        Args:
            section: Section name (e.g., 'catalog', 'layout', 'session')

        Returns:
            Section configuration dictionary, empty if unknown
        """
        return dict(self.load_config().get(section, {}))

    def get_catalog_config(self) -> Dict[str, Any]:
        """Get catalog client configuration, honouring the API URL override."""
        catalog_config = self.get_section("catalog")
        override = os.getenv(API_URL_ENV)
        if override:
            catalog_config["base_url"] = override
        return catalog_config

    def get_layout_config(self) -> Dict[str, Any]:
        """Get force layout configuration."""
        return self.get_section("layout")

    def get_session_config(self) -> Dict[str, Any]:
        """Get session configuration."""
        return self.get_section("session")

    def reload(self) -> None:
        self._config = None


# Global config manager instance
config_manager = ConfigManager()
