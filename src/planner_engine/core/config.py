"""
Configuration management for the Life Planner engine
Holds the thresholds and labels used by the derivation functions
"""

import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)


class Config:
    """Configuration manager for the derivation engine"""

    def __init__(self, config_file: Optional[Path] = None):
        """
        Initialize configuration manager

        Args:
            config_file: Optional JSON file overriding the built-in defaults.
                When omitted, defaults are used and nothing touches the disk.
        """
        self.config_file = Path(config_file) if config_file else None

        self.settings = self._default_settings()
        self.thresholds = self._default_thresholds()

        if self.config_file is not None:
            overrides = self._load_json(self.config_file)
            self.settings.update(overrides.get("settings", {}))
            self.thresholds.update(overrides.get("thresholds", {}))

    def _load_json(self, file_path: Path) -> Dict[str, Any]:
        """Load JSON file or return empty overrides if missing or corrupt"""
        if not file_path.exists():
            return {}
        try:
            with open(file_path, 'r') as f:
                data = json.load(f)
        except json.JSONDecodeError as exc:
            logger.warning("Ignoring unreadable config %s: %s", file_path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def _save_json(self, file_path: Path, data: Dict[str, Any]) -> None:
        """Save data to JSON file"""
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(file_path, 'w') as f:
            json.dump(data, f, indent=2)

    def _default_settings(self) -> Dict[str, Any]:
        """Default display settings"""
        return {
            "uncategorized_label": "Uncategorized",
            "upcoming_days": 7,
            "upcoming_limit": 5,
            "first_day_of_week": "monday",
        }

    def _default_thresholds(self) -> Dict[str, Any]:
        """Default classification thresholds"""
        return {
            "due_soon_hours": 24,
            "streak_cap_days": 365,
            "supply_critical_days": 3,
            "supply_warning_days": 7,
            "supply_low_days": 14,
        }

    def get(self, key: str, section: str = "settings", default: Any = None) -> Any:
        """
        Get configuration value

        Args:
            key: Configuration key
            section: Configuration section ('settings', 'thresholds')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        section_map = {
            "settings": self.settings,
            "thresholds": self.thresholds,
        }

        return section_map.get(section, {}).get(key, default)

    def set(self, key: str, value: Any, section: str = "settings") -> None:
        """
        Set configuration value, saving to disk when backed by a file

        Args:
            key: Configuration key
            value: Value to set
            section: Configuration section ('settings', 'thresholds')
        """
        section_map = {
            "settings": self.settings,
            "thresholds": self.thresholds,
        }

        if section not in section_map:
            raise KeyError(f"Unknown config section: {section}")

        section_map[section][key] = value
        if self.config_file is not None:
            self._save_json(
                self.config_file,
                {"settings": self.settings, "thresholds": self.thresholds},
            )
