"""
freezed-go-style User Configuration

Hierarchical config system with global defaults + local overrides:
- Global: ~/.freezed_go_style/config.json (cross-project settings)
- Local: .freezed_go_style/config.json (project-specific overrides)

Config structure:
{
  "formatter": {
    "marker_name": "FreezedGoStyle",   // Annotation that opts a class in
    "indent_unit": "  "                // Parameter indentation step
  },
  "files": {
    "extensions": [".dart"],
    "ignore_patterns": ["*.g.dart", "*.freezed.dart"]
  },
  "watcher": {
    "debounce_delay": 0.5
  }
}
"""

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from freezed_go_style.exceptions import ConfigError
from freezed_go_style.logging_config import logger
from freezed_go_style.paths import get_paths


MARKER_ENV_VAR = "FREEZED_GO_STYLE_MARKER"

# Default configuration
DEFAULT_CONFIG = {
    "formatter": {
        "marker_name": "FreezedGoStyle",
        "indent_unit": "  ",
    },
    "files": {
        "extensions": [".dart"],
        "ignore_patterns": [
            "*.g.dart",
            "*.freezed.dart",
            "*/.dart_tool/*",
            "*/build/*",
            "*/.git/*",
        ],
    },
    "watcher": {
        "debounce_delay": 0.5,
    },
}


class UserConfig:
    """
    Manages hierarchical user configuration.

    Load order (with override):
    1. Default config (hardcoded)
    2. Global config (~/.freezed_go_style/config.json)
    3. Local config (.freezed_go_style/config.json)
    4. FREEZED_GO_STYLE_MARKER environment variable
    """

    def __init__(self, project_root: Optional[Path] = None, global_config_path: Optional[Path] = None):
        """
        Initialize config manager.

        Args:
            project_root: Project root directory (defaults to CWD)
            global_config_path: Override for the global config file
        """
        paths = get_paths(project_root)
        self.project_root = paths.project_root
        self.global_config_path = global_config_path or paths.global_config
        self.local_config_path = paths.local_config

        self._config = self._load_config()
        self._validate()

    def _load_config(self) -> Dict[str, Any]:
        config = copy.deepcopy(DEFAULT_CONFIG)

        for label, config_path in (("global", self.global_config_path), ("local", self.local_config_path)):
            if not config_path.exists():
                continue
            try:
                with open(config_path, 'r', encoding='utf-8') as f:
                    loaded = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.warning(f"Failed to load {label} config from {config_path}: {e}")
                continue
            if not isinstance(loaded, dict):
                raise ConfigError(f"{config_path} must contain a JSON object")
            config = self._deep_merge(config, loaded)
            logger.debug(f"Loaded {label} config from {config_path}")

        marker = os.getenv(MARKER_ENV_VAR)
        if marker:
            config["formatter"]["marker_name"] = marker.strip().lstrip("@")

        return config

    def _deep_merge(self, base: Dict, override: Dict) -> Dict:
        """
        Deep merge two dictionaries, with override taking precedence.
        """
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def _validate(self) -> None:
        marker = self.marker_name
        if not isinstance(marker, str) or not marker.strip():
            raise ConfigError("formatter.marker_name must be a non-empty string")

        indent = self.indent_unit
        if not isinstance(indent, str) or indent.strip(" \t"):
            raise ConfigError("formatter.indent_unit must contain only spaces or tabs")

        extensions = self.get("files.extensions")
        if not isinstance(extensions, list) or not all(isinstance(e, str) for e in extensions):
            raise ConfigError("files.extensions must be a list of strings")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a config value by dot-separated key.

        Examples:
            config.get("formatter.marker_name")  # "FreezedGoStyle"
            config.get("files.extensions")       # [".dart"]
        """
        keys = key.split(".")
        value = self._config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    @property
    def marker_name(self) -> str:
        return self.get("formatter.marker_name")

    @property
    def indent_unit(self) -> str:
        return self.get("formatter.indent_unit")

    @property
    def extensions(self) -> list:
        return list(self.get("files.extensions", []))

    @property
    def ignore_patterns(self) -> list:
        return list(self.get("files.ignore_patterns", []))

    def to_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self._config)
