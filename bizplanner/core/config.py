"""
Configuration management for Business Planner
Handles loading and saving deployment settings (database, storage, logging)

Branding and user preferences are not configuration: they live in the
planner_settings table and are passed around as BrandingSettings.
"""

import json
import os
from pathlib import Path
from typing import Dict, Any, List, Optional

PROJECT_ROOT = Path(__file__).parent.parent.parent


class Config:
    """Configuration manager for the planner"""

    def __init__(self, config_dir: Optional[Path] = None):
        """
        Initialize configuration manager

        Args:
            config_dir: Path to configuration directory (defaults to
                $PLANNER_CONFIG_DIR or ./config)
        """
        if config_dir is None:
            env_dir = os.environ.get('PLANNER_CONFIG_DIR')
            config_dir = Path(env_dir) if env_dir else PROJECT_ROOT / "config"

        self.config_dir = Path(config_dir)
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self.settings_file = self.config_dir / "settings.json"

        # Missing keys fall back to defaults so older files keep working
        self.settings = {**self._default_settings(),
                         **self._load_json(self.settings_file, self._default_settings())}

    def _load_json(self, file_path: Path, default: Dict[str, Any]) -> Dict[str, Any]:
        """Load JSON file or return default if file doesn't exist"""
        if file_path.exists():
            with open(file_path, 'r') as f:
                return json.load(f)
        else:
            # Create file with defaults
            self._save_json(file_path, default)
            return default

    def _save_json(self, file_path: Path, data: Dict[str, Any]) -> None:
        """Save data to JSON file"""
        with open(file_path, 'w') as f:
            json.dump(data, f, indent=2)

    def _default_settings(self) -> Dict[str, Any]:
        """Default system settings"""
        return {
            "database_path": "data/database/planner.db",
            "storage_directory": "data/storage",
            "storage_bucket": "public",
            "public_url_base": "http://localhost:8000",
            "log_level": "INFO",
            "cors_origins": [
                "http://localhost:5173",  # Vite dev server
                "http://localhost:3000",
                "http://127.0.0.1:5173",
            ],
        }

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        return self.settings.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """
        Set configuration value and save to disk

        Args:
            key: Configuration key
            value: Value to set
        """
        self.settings[key] = value
        self._save_json(self.settings_file, self.settings)

    def _resolve(self, value: str) -> Path:
        path = Path(value)
        return path if path.is_absolute() else PROJECT_ROOT / path

    def get_database_path(self) -> Path:
        """Get full path to SQLite database file"""
        return self._resolve(self.settings["database_path"])

    def get_storage_directory(self) -> Path:
        """Get full path to the file storage root"""
        return self._resolve(self.settings["storage_directory"])

    def get_database_url(self) -> Optional[str]:
        """PostgreSQL URL, or None when SQLite should be used"""
        use_sqlite = os.environ.get('USE_SQLITE', '').lower() in ('1', 'true', 'yes')
        database_url = os.environ.get('DATABASE_URL')
        if database_url and not use_sqlite:
            return database_url
        return None

    def get_cors_origins(self) -> List[str]:
        return list(self.settings.get("cors_origins") or [])
