"""
Configuration management for syntax generators.

Handles loading and merging configuration from JSON files,
providing per-language defaults and validation for generator settings.
"""

import copy
import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ...logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_WRAP_COLUMN = 60


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


@dataclass
class GeneratorConfig:
    """Per-instance configuration shared by every syntax generator."""

    # Line-wrap threshold checked by the wrap helpers
    wrap_column: int = DEFAULT_WRAP_COLUMN

    # Indent unit written after a wrap and before parameters
    indent: str = "\t"

    # Overrides the language id used in block tags and message keys
    language_name: Optional[str] = None

    # Backend-specific settings
    custom: Dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a backend-specific setting."""
        return self.custom.get(key, default)


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for supported languages."""
        self._configs["csharp"] = {
            "custom": {
                "allow_unsafe": False,
            }
        }

        self._configs["visualbasic"] = {
            "custom": {
                "include_line_continuation": False,
            }
        }

        self._configs["aspnet"] = {
            "custom": {
                "web_control_base": "T:System.Web.UI.Control",
                "default_prefix": "asp",
                "namespace_prefixes": {"N:System.Web.UI.MobileControls": "mobile"},
                "excluded_controls": [
                    "T:System.Web.UI.Page",
                    "T:System.Web.UI.ScriptControl",
                    "T:System.Web.UI.UserControl",
                ],
            }
        }

        self._configs["javascript"] = {
            "custom": {
                "camel_case_members": True,
            }
        }

    def get_config(
        self,
        language: Optional[str] = None,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration for a language.

        Args:
            language: Registry key of the target language (None for common defaults)
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration for the language
        """
        base_config = copy.deepcopy(self._configs.get((language or "").lower(), {}))

        if config_file:
            base_config = _merge(base_config, self._load_config_file(config_file))

        if custom_config:
            base_config = _merge(base_config, custom_config)

        return self._dict_to_config(base_config)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if path.suffix.lower() != ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        logger.debug("Loaded configuration file %s", path)
        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = set(GeneratorConfig.__dataclass_fields__)

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        # Unknown top-level keys are backend settings
        if custom_args:
            existing_custom = dict(config_args.get("custom") or {})
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        return GeneratorConfig(**config_args)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)
        config_dict = asdict(config)

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {e}") from e

    def list_languages(self) -> List[str]:
        """Get list of languages with default settings."""
        return list(self._configs.keys())

    def validate_config(self, config: GeneratorConfig, language: str) -> List[str]:
        """
        Validate configuration for a language.

        Returns:
            List of validation warnings
        """
        warnings = []

        if not isinstance(config.wrap_column, int) or config.wrap_column <= 0:
            warnings.append(f"Invalid wrap_column: {config.wrap_column}")

        if not config.indent:
            warnings.append("Indent must not be empty")

        defaults = self._configs.get(language.lower(), {}).get("custom", {})
        for key in config.custom:
            if key not in defaults:
                warnings.append(f"Unknown {language} setting: {key}")

        if language.lower() == "aspnet":
            prefixes = config.get("namespace_prefixes", {})
            if not isinstance(prefixes, dict):
                warnings.append("namespace_prefixes must map namespace ids to tag prefixes")

        return warnings


def _merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Merge overrides into base; the ``custom`` section is merged key by key."""
    merged = dict(base)
    for key, value in overrides.items():
        if key == "custom" and isinstance(value, dict):
            custom = dict(merged.get("custom") or {})
            custom.update(value)
            merged["custom"] = custom
        else:
            merged[key] = value
    return merged


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    language: Optional[str] = None,
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        language: Target language registry key
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration for the language
    """
    return get_config_manager().get_config(language, custom_config, config_file)


# Example configuration files for reference
EXAMPLE_VISUALBASIC_CONFIG = {
    "wrap_column": 72,
    "include_line_continuation": True,
}

EXAMPLE_ASPNET_CONFIG = {
    "default_prefix": "asp",
    "namespace_prefixes": {"N:Contoso.Web.Controls": "contoso"},
}
