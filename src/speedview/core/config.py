"""
SpeedView settings.

Settings live in YAML under config/. default.yaml holds every key the app
reads (location provider and gpsd/replay/android options, initial speed unit,
map center, logging). A second file named after SPEEDVIEW_ENV is merged on
top of it, and SPEEDVIEW_* variables win over both. The CLI flags are turned
into such variables before Config is built.
"""

import os
from pathlib import Path
from typing import Any

import yaml

ENV_PREFIX = "SPEEDVIEW_"


class Config:
    """
    Merged view of the SpeedView settings files and environment.

    Environment variables map onto nested keys by splitting on "_", so
    SPEEDVIEW_LOCATION_GPSD_HOST=pi.local sets location.gpsd.host. Keys are
    therefore single words. SPEEDVIEW_ENV only picks the environment file.

    Usage:
        config = Config()
        provider = get_location_provider(config["location"], "desktop")
        unit = SpeedUnit.parse(config.get("display.unit", "mps"))
        zoom = config.get("map.zoom", 16)
    """

    def __init__(self, config_dir: Path | None = None):
        """
        Load settings for the current SPEEDVIEW_ENV.

        Args:
            config_dir: Directory holding default.yaml. Defaults to the
                repository's config/ next to src/.
        """
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent.parent / "config"
        self.config_dir = Path(config_dir)
        self.env = os.getenv(f"{ENV_PREFIX}ENV", "development")
        self._config = self._load_config()

    def _load_config(self) -> dict[str, Any]:
        """Read default.yaml, merge the environment file, apply env overrides."""
        config: dict[str, Any] = {}

        default_path = self.config_dir / "default.yaml"
        if default_path.exists():
            with open(default_path, encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}

        env_path = self.config_dir / f"{self.env}.yaml"
        if env_path.exists():
            with open(env_path, encoding="utf-8") as f:
                env_config = yaml.safe_load(f) or {}
                config = self._deep_merge(config, env_config)

        return self._apply_env_overrides(config)

    def _deep_merge(self, base: dict, override: dict) -> dict:
        """Merge override into a copy of base, recursing into nested sections."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    def _apply_env_overrides(self, config: dict) -> dict:
        """
        Apply SPEEDVIEW_* environment variables.

        Example: SPEEDVIEW_LOCATION_GPSD_PORT=2948 -> config['location']['gpsd']['port'] = 2948

        SPEEDVIEW_ENV selects the environment file and is not copied into the tree.
        """
        for key, value in os.environ.items():
            if key.startswith(ENV_PREFIX) and key != f"{ENV_PREFIX}ENV":
                path = key[len(ENV_PREFIX) :].lower().split("_")
                self._set_nested(config, path, self._parse_value(value))
        return config

    def _set_nested(self, d: dict, keys: list, value: Any) -> None:
        """Set keys[-1] under the keys[:-1] path, replacing scalars in the way."""
        for key in keys[:-1]:
            if not isinstance(d.get(key), dict):
                d[key] = {}
            d = d[key]
        d[keys[-1]] = value

    def _parse_value(self, value: str) -> Any:
        """Turn an env string into a bool, int or float when it reads as one."""
        if value.lower() in ("true", "false"):
            return value.lower() == "true"
        try:
            return int(value)
        except ValueError:
            pass
        try:
            return float(value)
        except ValueError:
            pass
        return value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key: Dot-separated path like 'location.provider' or 'location.gpsd.port'
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        value: Any = self._config
        for k in key.split("."):
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return default
            if value is None:
                return default
        return value

    def __getitem__(self, key: str) -> Any:
        """Return a top-level section such as "location", or {} if absent."""
        return self._config.get(key, {})

    @property
    def as_dict(self) -> dict[str, Any]:
        """Shallow copy of the merged settings."""
        return self._config.copy()

    def reload(self) -> None:
        """Re-read SPEEDVIEW_ENV, the YAML files and the environment."""
        self.env = os.getenv(f"{ENV_PREFIX}ENV", "development")
        self._config = self._load_config()
